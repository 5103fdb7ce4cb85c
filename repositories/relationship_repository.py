"""
Relationship repository.

Relationships are directional: contact A "is Employee of" contact B.
"""

from __future__ import annotations

from typing import Optional

from domain.identity import Subject
from repositories.client import rows_or_raise


class SupabaseRelationshipStore:
    def __init__(self, client) -> None:
        self._client = client

    def find_active(self, subject: Subject, relationship_type_id: int) -> Optional[Subject]:
        """
        Party B of the first active relationship of this type from subject.

        Returns:
            The counterpart contact id, or None if no active relationship exists.
        """
        response = (
            self._client.table("relationships")
            .select("contact_id_b")
            .eq("contact_id_a", subject)
            .eq("relationship_type_id", relationship_type_id)
            .eq("is_active", True)
            .limit(1)
            .execute()
        )

        rows = rows_or_raise(response, "fetch relationship")
        if not rows:
            return None

        return rows[0].get("contact_id_b")


__all__ = ["SupabaseRelationshipStore"]
