"""
Tests for the HTTP API, with services swapped in through dependency overrides.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_activity_lock_service, get_option_source
from api.main import app
from domain.activity import ActivityRole
from fakes import CONTACT_HANDLER_SETTINGS, FakeFormConfigStore, make_webform
from services.activity_lock_service import ActivityLockService
from services.lock_decision_service import build_decision_engine

JANE = {"first_name": "Jane", "last_name": "Doe", "email": "jane@x.com"}


class StaticOptionSource:
    def __init__(self, options=None, error=None) -> None:
        self.options = options or {}
        self.error = error

    def list_option_values(self, option_group):
        if self.error is not None:
            raise self.error
        return self.options.get(option_group, {})


class BrokenService:
    def check(self, identity, webform_id):
        raise RuntimeError("connection pool exhausted")


@pytest.fixture
def service(directory, activity_store, relationship_store, renderer) -> ActivityLockService:
    directory.contacts[("Jane", "Doe", "jane@x.com")] = 42
    engine = build_decision_engine(directory, activity_store, relationship_store, renderer)
    store = FakeFormConfigStore(
        make_webform(),
        make_webform("no_handler", with_handler=False),
        make_webform("unconfigured", settings={**CONTACT_HANDLER_SETTINGS, "activity_types": []}),
    )
    return ActivityLockService(store, engine)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_activity_lock_service] = lambda: service
    app.dependency_overrides[get_option_source] = lambda: StaticOptionSource(
        {"activity_type": {"5": "Event Registration"}, "activity_status": {"2": "Completed"}}
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_check_locked(client, activity_store) -> None:
    activity_store.add(42, ActivityRole.TARGET, 5, status_id=2)

    response = client.post(
        "/api/v1/activity-lock/check", json={**JANE, "webform_id": "event_registration"}
    )

    assert response.status_code == 200
    assert response.json() == {"activity_exists": True, "message": "<p>Already registered</p>"}


def test_check_unlocked(client) -> None:
    response = client.post(
        "/api/v1/activity-lock/check", json={**JANE, "webform_id": "event_registration"}
    )

    assert response.status_code == 200
    assert response.json() == {"activity_exists": False, "message": ""}


def test_check_missing_fields_is_bad_request(client) -> None:
    response = client.post("/api/v1/activity-lock/check", json={"first_name": "Jane"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields: last_name, email, webform_id"


@pytest.mark.parametrize("webform_id", ["missing_form", "no_handler"])
def test_check_unknown_configuration_is_not_found(client, webform_id) -> None:
    response = client.post("/api/v1/activity-lock/check", json={**JANE, "webform_id": webform_id})

    assert response.status_code == 404


def test_check_handler_without_activity_types_is_bad_request(client) -> None:
    response = client.post("/api/v1/activity-lock/check", json={**JANE, "webform_id": "unconfigured"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Handler not properly configured - activity types required"


def test_check_unexpected_error_is_server_error() -> None:
    app.dependency_overrides[get_activity_lock_service] = lambda: BrokenService()
    try:
        response = TestClient(app).post(
            "/api/v1/activity-lock/check", json={**JANE, "webform_id": "event_registration"}
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to check activity"


def test_render_state_open(client) -> None:
    response = client.post("/api/v1/forms/event_registration/render-state", json={})

    assert response.status_code == 200
    body = response.json()
    assert body["locked"] is False
    assert body["settings"]["email_field"] == "email"
    assert body["settings"]["check_url"] == "/api/v1/activity-lock/check"
    assert body["settings"]["debounce_ms"] == 500


def test_render_state_locked(client, activity_store) -> None:
    activity_store.add(42, ActivityRole.TARGET, 5, status_id=2)

    response = client.post(
        "/api/v1/forms/event_registration/render-state", json={"values": JANE}
    )

    body = response.json()
    assert body["locked"] is True
    assert body["disabled_elements"] == ["organisation", "dietary"]
    assert body["hide_actions"] is True


def test_render_state_unknown_form(client) -> None:
    response = client.post("/api/v1/forms/missing_form/render-state", json={})

    assert response.status_code == 404
    assert response.json()["detail"] == "Webform not found"


def test_validate_accepts_unlocked_submission(client) -> None:
    response = client.post("/api/v1/forms/event_registration/validate", json={"values": JANE})

    assert response.status_code == 200
    assert response.json() == {"valid": True, "message": ""}


def test_validate_rejects_locked_submission(client, activity_store) -> None:
    activity_store.add(42, ActivityRole.ASSIGNEE, 5, status_id=2)

    response = client.post("/api/v1/forms/event_registration/validate", json={"values": JANE})

    assert response.status_code == 422
    assert response.json() == {"valid": False, "message": "<p>Already registered</p>"}


def test_activity_type_options(client) -> None:
    response = client.get("/api/v1/options/activity-types")

    assert response.status_code == 200
    assert response.json() == {"options": {"5": "Event Registration"}}


def test_activity_status_options(client) -> None:
    response = client.get("/api/v1/options/activity-statuses")

    assert response.json() == {"options": {"2": "Completed"}}


def test_options_fail_to_empty_list() -> None:
    app.dependency_overrides[get_option_source] = lambda: StaticOptionSource(
        error=RuntimeError("Failed to fetch activity_type options: 503")
    )
    try:
        response = TestClient(app).get("/api/v1/options/activity-types")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json() == {"options": {}}
