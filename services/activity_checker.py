"""
Activity existence checker.

A subject qualifies when it is linked to at least one activity of a configured
type (and status, when statuses are configured) in any role: target, assignee
or source. Each role is an independent query; the result is their OR.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, Optional

from domain.activity import ROLE_ORDER, ActivityQuery, ActivityRole
from domain.identity import Subject
from domain.lookup import LookupResult
from services.collaborators import ActivityStore

logger = logging.getLogger(__name__)


class ActivityExistenceChecker:
    def __init__(
        self,
        store: ActivityStore,
        log: Optional[logging.Logger] = None,
        roles: Iterable[ActivityRole] = ROLE_ORDER,
    ) -> None:
        self._store = store
        self._log = log or logger
        self._roles = tuple(roles)

    def check_role(self, query: ActivityQuery) -> LookupResult[bool]:
        try:
            records = self._store.query(query)
        except Exception as e:
            self._log.error(
                f"Error checking activities: {e}",
                extra={
                    "lookup": "activity",
                    "role": query.role.value,
                    "subject": str(query.subject),
                    "error": str(e),
                },
            )
            return LookupResult.failed(str(e))
        return LookupResult.found(bool(records))

    def exists(
        self,
        subject: Subject,
        activity_type_ids: AbstractSet[int],
        status_ids: AbstractSet[int] = frozenset(),
    ) -> bool:
        """
        True as soon as any role has a matching activity.

        An empty status_ids means any status qualifies. A failed role query
        counts as "no match" for that role only.
        """

        if not activity_type_ids:
            return False

        for role in self._roles:
            query = ActivityQuery(
                subject=subject,
                role=role,
                activity_type_ids=frozenset(activity_type_ids),
                status_ids=frozenset(status_ids),
            )
            if self.check_role(query).value is True:
                return True
        return False
