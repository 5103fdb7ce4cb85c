"""
Runtime settings read from the environment.

Variables are loaded from a `.env` file at the project root first, so local
development needs no exported shell variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"


@dataclass(frozen=True, slots=True)
class Settings:
    supabase_url: Optional[str]
    supabase_key: Optional[str]
    debounce_ms: int = 500
    api_url: str = "http://localhost:8000"
    timeout_seconds: float = 10.0


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"Environment variable {name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"Environment variable {name} must be a number, got {raw!r}") from None


def load_settings() -> Settings:
    load_dotenv(dotenv_path=env_path)
    return Settings(
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_key=os.getenv("SUPABASE_KEY"),
        debounce_ms=_int_env("ACTIVITY_LOCK_DEBOUNCE_MS", 500),
        api_url=os.getenv("ACTIVITY_LOCK_API_URL") or "http://localhost:8000",
        timeout_seconds=_float_env("ACTIVITY_LOCK_TIMEOUT_SECONDS", 10.0),
    )


__all__ = ["Settings", "load_settings"]
