"""
Identity resolver: maps the three identity fields to at most one contact.

Absence is not an error (no contact means no lock). A failing directory is
treated as absence too; the failure is logged and carried in the LookupResult.
"""

from __future__ import annotations

import logging
from typing import Optional

from domain.identity import IdentityInput, Subject
from domain.lookup import LookupResult
from services.collaborators import ContactDirectory

logger = logging.getLogger(__name__)


class IdentityResolver:
    def __init__(self, directory: ContactDirectory, log: Optional[logging.Logger] = None) -> None:
        self._directory = directory
        self._log = log or logger

    def lookup(self, identity: IdentityInput) -> LookupResult[Subject]:
        """Resolve a subject, reporting collaborator failures instead of raising."""

        try:
            subject = self._directory.find_by_name_and_email(
                identity.first_name, identity.last_name, identity.email
            )
        except Exception as e:
            self._log.error(
                f"Error finding contact: {e}",
                extra={"lookup": "contact", "error": str(e)},
            )
            return LookupResult.failed(str(e))
        return LookupResult.found(subject)

    def resolve(self, identity: IdentityInput) -> Optional[Subject]:
        return self.lookup(identity).value
