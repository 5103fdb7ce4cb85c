"""
Activity repository.

Activities link to contacts through `activity_contacts`, whose record_type_id
says which role the contact plays (1 assignee, 2 source, 3 target).
"""

from __future__ import annotations

from typing import Any, List, Mapping

from domain.activity import ActivityQuery
from repositories.client import rows_or_raise


class SupabaseActivityStore:
    def __init__(self, client, limit: int = 1) -> None:
        # Callers only test for existence, so one row is enough by default.
        self._client = client
        self._limit = limit

    def query(self, query: ActivityQuery) -> List[Mapping[str, Any]]:
        """
        Activities of the given types (and statuses, if any) linked to the
        subject in the query's role.

        Example:
            rows = store.query(ActivityQuery(
                subject=42,
                role=ActivityRole.TARGET,
                activity_type_ids=frozenset({5}),
            ))
        """
        builder = (
            self._client.table("activities")
            .select(
                "activity_id, activity_type_id, status_id, "
                "activity_contacts!inner(contact_id, record_type_id)"
            )
            .in_("activity_type_id", sorted(query.activity_type_ids))
            .eq("activity_contacts.contact_id", query.subject)
            .eq("activity_contacts.record_type_id", query.role.record_type_id)
            .eq("is_deleted", False)
        )

        if query.filters_status:
            builder = builder.in_("status_id", sorted(query.status_ids))

        response = builder.limit(self._limit).execute()
        return rows_or_raise(response, f"query {query.role.value} activities")


__all__ = ["SupabaseActivityStore"]
