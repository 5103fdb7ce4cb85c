"""
Domain: Lock decision.

The sole output of the decision engine. Transient, never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LockDecision:
    locked: bool
    message: str = ""

    def __post_init__(self) -> None:
        if not self.locked and self.message:
            raise ValueError("message must be empty unless locked")

    @staticmethod
    def unlocked() -> "LockDecision":
        return LockDecision(locked=False, message="")

    @staticmethod
    def locked_with(message: str) -> "LockDecision":
        return LockDecision(locked=True, message=message)
