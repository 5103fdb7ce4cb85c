"""
Supabase client initialization.

This module contains *only* the database connection setup. The CRM mirror and
the webform configuration both live in the same Supabase project; repository
classes receive the client from `get_supabase()`.

Environment variables required:
- SUPABASE_URL: Your Supabase project URL
- SUPABASE_KEY: Your Supabase API key (use a server-side key only on the backend)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, List, Mapping

# The dependency is `supabase` (supabase-py).
from supabase import Client, create_client  # type: ignore[import-not-found]

from repositories.settings import load_settings


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """
    Create the process-wide Supabase client on first use.

    Raises:
        RuntimeError: if SUPABASE_URL or SUPABASE_KEY is not set.
    """

    settings = load_settings()

    if not settings.supabase_url:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_URL. "
            "Set SUPABASE_URL to your Supabase project URL."
        )

    if not settings.supabase_key:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_KEY. "
            "Set SUPABASE_KEY to your Supabase API key."
        )

    return create_client(settings.supabase_url, settings.supabase_key)


def rows_or_raise(response: Any, action: str) -> List[Mapping[str, Any]]:
    """Return the rows of a PostgREST response, raising RuntimeError if it carries an error."""

    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to {action}: {error}")

    return getattr(response, "data", None) or []


__all__ = ["get_supabase", "rows_or_raise"]
