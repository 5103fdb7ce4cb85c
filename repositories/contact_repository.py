"""
Contact repository: the CRM contact directory.

Contacts keep their primary email on the contact row; every email address
(primary or not) is also stored as a row in `emails`. A visitor is matched on
first name, last name and email, trying the primary email first and the email
records second.
"""

from __future__ import annotations

from typing import Optional

from domain.identity import Subject
from repositories.client import rows_or_raise


class SupabaseContactDirectory:
    def __init__(self, client) -> None:
        self._client = client

    def find_by_primary_email(self, first_name: str, last_name: str, email: str) -> Optional[Subject]:
        """
        Exact match on the contact's own name and primary email.

        Example:
            contact_id = directory.find_by_primary_email("Jane", "Doe", "jane@example.com")
        """
        response = (
            self._client.table("contacts")
            .select("contact_id")
            .eq("first_name", first_name)
            .eq("last_name", last_name)
            .eq("email", email)
            .eq("is_deleted", False)
            .limit(1)
            .execute()
        )

        rows = rows_or_raise(response, "fetch contact")
        if not rows:
            return None

        return rows[0].get("contact_id")

    def find_by_email_record(self, first_name: str, last_name: str, email: str) -> Optional[Subject]:
        """Match the name on the contact and the address on any of its email records."""

        # Note: !inner drops contacts without a matching email row
        response = (
            self._client.table("contacts")
            .select("contact_id, emails!inner(email)")
            .eq("first_name", first_name)
            .eq("last_name", last_name)
            .eq("emails.email", email)
            .eq("is_deleted", False)
            .limit(1)
            .execute()
        )

        rows = rows_or_raise(response, "fetch contact by email record")
        for row in rows:
            if row.get("emails"):
                return row.get("contact_id")

        return None

    def find_by_name_and_email(self, first_name: str, last_name: str, email: str) -> Optional[Subject]:
        contact_id = self.find_by_primary_email(first_name, last_name, email)
        if contact_id is not None:
            return contact_id
        return self.find_by_email_record(first_name, last_name, email)


__all__ = ["SupabaseContactDirectory"]
