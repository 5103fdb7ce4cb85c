"""
Domain: Identity input for an activity lock check.

A check is keyed on the three identity fields a visitor types into the form.
All three must be non-empty for any lookup to happen; an incomplete identity
can never lock a form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

# Contact identifiers are integers in CiviCRM but some mirrors store them as text.
Subject = Union[int, str]


def _clean(value: Optional[str]) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True, slots=True)
class IdentityInput:
    """
    Identity fields entered by the visitor.

    Values are stored stripped of surrounding whitespace so that "Jane " and
    "Jane" are the same identity for both the lookup and the client-side
    duplicate suppression.
    """

    first_name: str
    last_name: str
    email: str

    @staticmethod
    def of(
        first_name: Optional[str],
        last_name: Optional[str],
        email: Optional[str],
    ) -> "IdentityInput":
        """Build an IdentityInput from raw (possibly missing) field values."""

        return IdentityInput(
            first_name=_clean(first_name),
            last_name=_clean(last_name),
            email=_clean(email),
        )

    def is_complete(self) -> bool:
        """True iff all three fields are non-empty."""

        return bool(self.first_name and self.last_name and self.email)

    def missing_fields(self) -> list[str]:
        return [
            name
            for name, value in (
                ("first_name", self.first_name),
                ("last_name", self.last_name),
                ("email", self.email),
            )
            if not value
        ]
