"""
Employer fallback resolver.

Follows an active relationship of the configured type from the contact (party
A) to the employer (party B).
"""

from __future__ import annotations

import logging
from typing import Optional

from domain.identity import Subject
from domain.lock_rule import DEFAULT_RELATIONSHIP_TYPE_ID
from domain.lookup import LookupResult
from services.collaborators import RelationshipStore

logger = logging.getLogger(__name__)


class EmployerFallbackResolver:
    def __init__(self, store: RelationshipStore, log: Optional[logging.Logger] = None) -> None:
        self._store = store
        self._log = log or logger

    def lookup(
        self,
        subject: Subject,
        relationship_type_id: int = DEFAULT_RELATIONSHIP_TYPE_ID,
    ) -> LookupResult[Subject]:
        try:
            employer = self._store.find_active(subject, relationship_type_id)
        except Exception as e:
            self._log.error(
                f"Error finding employer: {e}",
                extra={
                    "lookup": "relationship",
                    "subject": str(subject),
                    "relationship_type_id": relationship_type_id,
                    "error": str(e),
                },
            )
            return LookupResult.failed(str(e))
        return LookupResult.found(employer)

    def employer_of(
        self,
        subject: Subject,
        relationship_type_id: int = DEFAULT_RELATIONSHIP_TYPE_ID,
    ) -> Optional[Subject]:
        return self.lookup(subject, relationship_type_id).value
