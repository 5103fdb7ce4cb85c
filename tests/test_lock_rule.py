"""
Tests for `domain/lock_rule.py`.

Covers:
- Missing handler settings fall back to the handler defaults.
- Multi-select values (lists, {key: value} maps, numeric strings) become int sets.
- Unchecked checkbox entries are dropped.
- Uninterpretable values raise ConfigurationError.
- Text formats resolve with basic_html as the default and plain_text for unknown names.
"""

from __future__ import annotations

import pytest

from domain.activity import ActivityQuery, ActivityRole
from domain.errors import ConfigurationError
from domain.lock_rule import (
    DEFAULT_LOCK_MESSAGE,
    DEFAULT_RELATIONSHIP_TYPE_ID,
    HandlerSettings,
    LockRuleConfig,
    MessageFormat,
)


def test_empty_settings_use_defaults() -> None:
    settings = HandlerSettings.from_mapping({})

    assert settings.rule.activity_type_ids == frozenset()
    assert settings.rule.status_ids == frozenset()
    assert settings.rule.check_employer is False
    assert settings.rule.employer_relationship_type_id == DEFAULT_RELATIONSHIP_TYPE_ID == 4
    assert settings.rule.lock_message == DEFAULT_LOCK_MESSAGE
    assert settings.rule.lock_message_format is MessageFormat.BASIC_HTML
    assert not settings.rule.is_configured()
    assert not settings.fields.is_complete()


def test_select_maps_of_strings_become_int_sets() -> None:
    settings = HandlerSettings.from_mapping(
        {
            "activity_types": {"5": "5", "12": "12"},
            "activity_status": ["2", 3],
            "check_employer": 1,
            "relationship_type_id": "7",
            "lock_message": "Already registered",
            "lock_message_format": "full_html",
            "first_name_field": "first_name",
            "last_name_field": "last_name",
            "email_field": "email_address",
        }
    )

    assert settings.rule == LockRuleConfig(
        activity_type_ids=frozenset({5, 12}),
        status_ids=frozenset({2, 3}),
        check_employer=True,
        employer_relationship_type_id=7,
        lock_message="Already registered",
        lock_message_format=MessageFormat.FULL_HTML,
    )
    assert settings.fields.names() == ("first_name", "last_name", "email_address")
    assert settings.fields.is_complete()


def test_unchecked_checkbox_entries_are_dropped() -> None:
    settings = HandlerSettings.from_mapping({"activity_types": {"5": "5", "6": 0, "7": "0"}})

    assert settings.rule.activity_type_ids == frozenset({5})


def test_invalid_ids_raise_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        HandlerSettings.from_mapping({"activity_types": ["meeting"]})

    with pytest.raises(ConfigurationError):
        HandlerSettings.from_mapping({"activity_types": [5], "relationship_type_id": "employer"})


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, MessageFormat.BASIC_HTML),
        ("", MessageFormat.BASIC_HTML),
        ("restricted_html", MessageFormat.RESTRICTED_HTML),
        ("markdown", MessageFormat.PLAIN_TEXT),
    ],
)
def test_message_format_parse(raw, expected) -> None:
    assert MessageFormat.parse(raw) is expected


def test_activity_query_requires_activity_types() -> None:
    with pytest.raises(ValueError):
        ActivityQuery(subject=1, role=ActivityRole.TARGET, activity_type_ids=frozenset())


def test_activity_roles_map_to_record_types() -> None:
    assert ActivityRole.ASSIGNEE.record_type_id == 1
    assert ActivityRole.SOURCE.record_type_id == 2
    assert ActivityRole.TARGET.record_type_id == 3


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("0", False),
        (0, False),
        ("", False),
        (None, False),
        ("1", True),
        (1, True),
        (True, True),
    ],
)
def test_check_employer_checkbox_values(raw, expected) -> None:
    settings = HandlerSettings.from_mapping({"activity_types": [5], "check_employer": raw})

    assert settings.rule.check_employer is expected
