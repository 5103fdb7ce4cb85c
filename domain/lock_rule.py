"""
Domain: Lock rule configuration.

A webform carries at most one activity lock handler. Its persisted settings
decide which activities lock the form:

- activity_types: activity type ids that count (required, at least one).
- activity_status: status ids that count; empty means any status qualifies.
- check_employer: also check the contact's employer when the contact has no
  qualifying activity of their own.
- relationship_type_id: the relationship type that links a contact to their
  employer (CiviCRM ships "Employee of" as type 4).
- lock_message / lock_message_format: what the visitor sees when locked.

Settings arrive from the configuration store as loosely typed values (select
widgets persist `{"5": "5"}` maps of strings); this module normalises them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Iterable, Mapping

from .errors import ConfigurationError

HANDLER_PLUGIN_ID = "civicrm_activity_lock"

DEFAULT_RELATIONSHIP_TYPE_ID = 4
DEFAULT_LOCK_MESSAGE = (
    "This form is currently locked because a matching activity already exists in our system."
)


class MessageFormat(str, Enum):
    PLAIN_TEXT = "plain_text"
    RESTRICTED_HTML = "restricted_html"
    BASIC_HTML = "basic_html"
    FULL_HTML = "full_html"

    @staticmethod
    def parse(value: Any) -> "MessageFormat":
        """Resolve a persisted format name, falling back to basic_html when unset."""

        if value is None or value == "":
            return MessageFormat.BASIC_HTML
        if isinstance(value, MessageFormat):
            return value
        try:
            return MessageFormat(str(value))
        except ValueError:
            # Unknown text formats are rendered with the most restrictive filter.
            return MessageFormat.PLAIN_TEXT


def _int_set(values: Any, setting: str) -> FrozenSet[int]:
    """
    Normalise a multi-select value into a set of ints.

    Accepts lists/tuples/sets of ints or numeric strings, or mappings whose
    values are the selected ids. Unchecked checkbox entries (0, "0", "", None)
    are dropped.
    """

    if values is None or values == "":
        return frozenset()
    if isinstance(values, Mapping):
        items: Iterable[Any] = values.values()
    elif isinstance(values, (str, int)):
        items = [values]
    else:
        items = values

    result = set()
    for item in items:
        if item in (None, "", 0, "0", False):
            continue
        try:
            result.add(int(item))
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid id {item!r} in setting '{setting}'") from None
    return frozenset(result)


def _flag(value: Any) -> bool:
    """Checkbox values persist as 0/1 or "0"/"1"; "0" is unchecked."""

    return value not in (None, "", 0, "0", False)


def _int(value: Any, default: int, setting: str) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid integer {value!r} in setting '{setting}'") from None


@dataclass(frozen=True, slots=True)
class LockRuleConfig:
    """
    The rule a decision is evaluated against.

    Read-only at check time. An empty activity_type_ids is representable (an
    unconfigured handler) but never locks.
    """

    activity_type_ids: FrozenSet[int]
    status_ids: FrozenSet[int] = frozenset()
    check_employer: bool = False
    employer_relationship_type_id: int = DEFAULT_RELATIONSHIP_TYPE_ID
    lock_message: str = DEFAULT_LOCK_MESSAGE
    lock_message_format: MessageFormat = MessageFormat.BASIC_HTML

    def is_configured(self) -> bool:
        return bool(self.activity_type_ids)


@dataclass(frozen=True, slots=True)
class FieldMapping:
    """Machine names of the webform elements holding the identity fields."""

    first_name_field: str = ""
    last_name_field: str = ""
    email_field: str = ""

    def names(self) -> tuple[str, str, str]:
        return (self.first_name_field, self.last_name_field, self.email_field)

    def is_complete(self) -> bool:
        return all(self.names())


@dataclass(frozen=True, slots=True)
class HandlerSettings:
    """Full persisted settings of an activity lock handler."""

    rule: LockRuleConfig
    fields: FieldMapping = field(default_factory=FieldMapping)

    @staticmethod
    def from_mapping(settings: Mapping[str, Any]) -> "HandlerSettings":
        """
        Parse persisted handler settings, applying defaults for missing keys.

        Raises:
            ConfigurationError: if a value cannot be interpreted.
        """

        rule = LockRuleConfig(
            activity_type_ids=_int_set(settings.get("activity_types"), "activity_types"),
            status_ids=_int_set(settings.get("activity_status"), "activity_status"),
            check_employer=_flag(settings.get("check_employer")),
            employer_relationship_type_id=_int(
                settings.get("relationship_type_id"),
                DEFAULT_RELATIONSHIP_TYPE_ID,
                "relationship_type_id",
            ),
            lock_message=str(settings.get("lock_message") or DEFAULT_LOCK_MESSAGE),
            lock_message_format=MessageFormat.parse(settings.get("lock_message_format")),
        )
        fields = FieldMapping(
            first_name_field=str(settings.get("first_name_field") or ""),
            last_name_field=str(settings.get("last_name_field") or ""),
            email_field=str(settings.get("email_field") or ""),
        )
        return HandlerSettings(rule=rule, fields=fields)
