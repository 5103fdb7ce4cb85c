"""
Tests for the Supabase repositories, against a fake query builder.

Covers:
- Contact lookup: primary email first, email records second.
- Activity query: role and status filters.
- Relationship, option value and webform configuration reads.
- Responses carrying an error raise RuntimeError.
"""

from __future__ import annotations

import json

import pytest

from domain.activity import ActivityQuery, ActivityRole
from domain.lock_rule import HANDLER_PLUGIN_ID, MessageFormat
from fakes import CONTACT_FORM_ELEMENTS, CONTACT_HANDLER_SETTINGS, FakeSupabase
from repositories.activity_repository import SupabaseActivityStore
from repositories.client import rows_or_raise
from repositories.contact_repository import SupabaseContactDirectory
from repositories.form_config_repository import SupabaseFormConfigStore
from repositories.option_value_repository import ACTIVITY_TYPE_GROUP, SupabaseOptionValueSource
from repositories.relationship_repository import SupabaseRelationshipStore


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


def test_rows_or_raise_raises_on_error() -> None:
    class Response:
        data = [{"contact_id": 1}]
        error = "permission denied"

    with pytest.raises(RuntimeError, match="Failed to fetch contact: permission denied"):
        rows_or_raise(Response(), "fetch contact")


def test_contact_found_by_primary_email(supabase) -> None:
    supabase.queue("contacts", data=[{"contact_id": 42}])

    contact_id = SupabaseContactDirectory(supabase).find_by_name_and_email("Jane", "Doe", "jane@x.com")

    assert contact_id == 42
    assert len(supabase.queries) == 1
    query = supabase.queries[0]
    assert ("email", "jane@x.com") in query.called("eq")
    assert ("is_deleted", False) in query.called("eq")


def test_contact_falls_back_to_email_records(supabase) -> None:
    supabase.queue("contacts", data=[])
    supabase.queue("contacts", data=[{"contact_id": 43, "emails": [{"email": "jane@x.com"}]}])

    contact_id = SupabaseContactDirectory(supabase).find_by_name_and_email("Jane", "Doe", "jane@x.com")

    assert contact_id == 43
    second = supabase.queries[1]
    assert second.called("select") == [("contact_id, emails!inner(email)",)]
    assert ("emails.email", "jane@x.com") in second.called("eq")


def test_contact_not_found(supabase) -> None:
    assert SupabaseContactDirectory(supabase).find_by_name_and_email("Jane", "Doe", "x@y.z") is None
    assert len(supabase.queries) == 2


def test_contact_error_raises(supabase) -> None:
    supabase.queue("contacts", error="JWT expired")

    with pytest.raises(RuntimeError, match="JWT expired"):
        SupabaseContactDirectory(supabase).find_by_name_and_email("Jane", "Doe", "jane@x.com")


def test_activity_query_filters_role_and_types(supabase) -> None:
    supabase.queue("activities", data=[{"activity_id": 7}])

    rows = SupabaseActivityStore(supabase).query(
        ActivityQuery(subject=42, role=ActivityRole.ASSIGNEE, activity_type_ids=frozenset({9, 5}))
    )

    assert rows == [{"activity_id": 7}]
    query = supabase.queries[0]
    assert query.called("in_") == [("activity_type_id", [5, 9])]
    assert ("activity_contacts.contact_id", 42) in query.called("eq")
    assert ("activity_contacts.record_type_id", 1) in query.called("eq")
    assert query.called("limit") == [(1,)]


def test_activity_query_adds_status_filter_only_when_configured(supabase) -> None:
    store = SupabaseActivityStore(supabase)

    store.query(
        ActivityQuery(
            subject=42,
            role=ActivityRole.TARGET,
            activity_type_ids=frozenset({5}),
            status_ids=frozenset({2}),
        )
    )

    assert ("status_id", [2]) in supabase.queries[0].called("in_")
    assert ("activity_contacts.record_type_id", 3) in supabase.queries[0].called("eq")


def test_activity_query_exception_propagates(supabase) -> None:
    supabase.queue_exception("activities", ConnectionError("reset"))

    with pytest.raises(ConnectionError):
        SupabaseActivityStore(supabase).query(
            ActivityQuery(subject=42, role=ActivityRole.SOURCE, activity_type_ids=frozenset({5}))
        )


def test_relationship_returns_counterpart(supabase) -> None:
    supabase.queue("relationships", data=[{"contact_id_b": 900}])

    assert SupabaseRelationshipStore(supabase).find_active(42, 4) == 900
    eq_calls = supabase.queries[0].called("eq")
    assert ("relationship_type_id", 4) in eq_calls
    assert ("is_active", True) in eq_calls


def test_relationship_missing(supabase) -> None:
    assert SupabaseRelationshipStore(supabase).find_active(42, 4) is None


def test_option_values_as_mapping(supabase) -> None:
    supabase.queue(
        "option_values",
        data=[{"value": 1, "label": "Meeting", "weight": 1}, {"value": 5, "label": "Event Registration", "weight": 2}],
    )

    options = SupabaseOptionValueSource(supabase).list_option_values(ACTIVITY_TYPE_GROUP)

    assert options == {"1": "Meeting", "5": "Event Registration"}
    assert supabase.queries[0].called("order") == [("weight",)]


def test_webform_with_lock_handler(supabase) -> None:
    supabase.queue(
        "webforms",
        data=[
            {
                "webform_id": "event_registration",
                "elements": json.dumps(CONTACT_FORM_ELEMENTS),
                "webform_handlers": [
                    {"plugin_id": "email", "configuration": {}, "weight": 0},
                    {
                        "plugin_id": HANDLER_PLUGIN_ID,
                        "configuration": {"settings": CONTACT_HANDLER_SETTINGS},
                        "weight": 1,
                    },
                ],
            }
        ],
    )

    webform = SupabaseFormConfigStore(supabase).get_webform("event_registration")

    assert webform is not None
    assert "email" in webform.form.index()
    assert webform.handler is not None
    assert webform.handler.rule.activity_type_ids == frozenset({5})
    assert webform.handler.rule.status_ids == frozenset({2})
    assert webform.handler.rule.lock_message_format is MessageFormat.BASIC_HTML
    assert webform.handler.fields.email_field == "email"


def test_webform_without_lock_handler(supabase) -> None:
    supabase.queue(
        "webforms",
        data=[{"webform_id": "contact", "elements": {}, "webform_handlers": []}],
    )

    store = SupabaseFormConfigStore(supabase)

    assert store.get_webform("contact").handler is None


def test_missing_webform(supabase) -> None:
    store = SupabaseFormConfigStore(supabase)

    assert store.get_webform("nope") is None
    assert store.load_lock_rule_config("nope") is None


def test_load_lock_rule_config(supabase) -> None:
    supabase.queue(
        "webforms",
        data=[
            {
                "webform_id": "event_registration",
                "elements": CONTACT_FORM_ELEMENTS,
                "webform_handlers": [
                    {"plugin_id": HANDLER_PLUGIN_ID, "configuration": {"settings": {"activity_types": [5, 6]}}}
                ],
            }
        ],
    )

    config = SupabaseFormConfigStore(supabase).load_lock_rule_config("event_registration")

    assert config is not None
    assert config.activity_type_ids == frozenset({5, 6})
    assert config.check_employer is False
    assert config.employer_relationship_type_id == 4
