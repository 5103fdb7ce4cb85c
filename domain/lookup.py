"""
Domain: Typed lookup results.

Collaborator lookups never raise into the decision engine. Each one returns a
LookupResult that either carries a value (possibly None for "no match") or the
reason the lookup failed. Callers decide how to treat failures; the engine
treats every failure as "no match".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    value: Optional[T] = None
    failure: Optional[str] = None

    @staticmethod
    def found(value: Optional[T]) -> "LookupResult[T]":
        return LookupResult(value=value)

    @staticmethod
    def failed(reason: str) -> "LookupResult[T]":
        return LookupResult(value=None, failure=reason)

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def matched(self) -> bool:
        """True iff the lookup succeeded and produced a value."""

        return self.ok and self.value is not None
