"""
Domain: Activity queries.

An activity links contacts in one of three roles. The lock only cares whether
a subject appears in ANY role on an activity of a configured type (and,
optionally, status).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet

from .identity import Subject


class ActivityRole(str, Enum):
    TARGET = "target"
    ASSIGNEE = "assignee"
    SOURCE = "source"

    @property
    def record_type_id(self) -> int:
        """CiviCRM activity_contact.record_type_id for this role."""

        return _RECORD_TYPE_IDS[self]


# Check order. The result is a pure OR so the order carries no meaning.
ROLE_ORDER = (ActivityRole.TARGET, ActivityRole.ASSIGNEE, ActivityRole.SOURCE)

_RECORD_TYPE_IDS = {
    ActivityRole.ASSIGNEE: 1,
    ActivityRole.SOURCE: 2,
    ActivityRole.TARGET: 3,
}


@dataclass(frozen=True, slots=True)
class ActivityQuery:
    """
    One role-specific activity lookup.

    Empty status_ids means the status is not filtered on.
    """

    subject: Subject
    role: ActivityRole
    activity_type_ids: FrozenSet[int]
    status_ids: FrozenSet[int] = frozenset()

    def __post_init__(self) -> None:
        if not self.activity_type_ids:
            raise ValueError("activity_type_ids must not be empty")

    @property
    def filters_status(self) -> bool:
        return bool(self.status_ids)
