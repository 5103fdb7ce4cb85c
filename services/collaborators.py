"""
Collaborator interfaces consumed by the activity lock services.

Repositories in `repositories/` implement these against Supabase; tests use
in-memory fakes. Implementations signal failure by raising (the Supabase
repositories raise RuntimeError on API errors); the services absorb it.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol

from domain.activity import ActivityQuery
from domain.form import Webform
from domain.identity import Subject
from domain.lock_rule import LockRuleConfig, MessageFormat


class ContactDirectory(Protocol):
    def find_by_name_and_email(self, first_name: str, last_name: str, email: str) -> Optional[Subject]:
        """Primary-email match first, then the email association records."""
        ...


class ActivityStore(Protocol):
    def query(self, query: ActivityQuery) -> List[Mapping[str, Any]]:
        ...


class RelationshipStore(Protocol):
    def find_active(self, subject: Subject, relationship_type_id: int) -> Optional[Subject]:
        ...


class MarkupRenderer(Protocol):
    def render(self, text: str, text_format: MessageFormat) -> str:
        ...


class FormConfigStore(Protocol):
    def get_webform(self, webform_id: str) -> Optional[Webform]:
        ...

    def load_lock_rule_config(self, webform_id: str) -> Optional[LockRuleConfig]:
        """None when the form does not exist or has no lock handler."""
        ...


class OptionValueSource(Protocol):
    def list_option_values(self, option_group: str) -> Mapping[str, str]:
        ...
