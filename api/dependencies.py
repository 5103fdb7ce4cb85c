"""
Service wiring for the API.

Routers receive their services through FastAPI dependencies, so tests swap
in fakes with `app.dependency_overrides`.
"""

from __future__ import annotations

from functools import lru_cache

from repositories.activity_repository import SupabaseActivityStore
from repositories.client import get_supabase
from repositories.contact_repository import SupabaseContactDirectory
from repositories.form_config_repository import SupabaseFormConfigStore
from repositories.option_value_repository import SupabaseOptionValueSource
from repositories.relationship_repository import SupabaseRelationshipStore
from repositories.settings import load_settings
from services.activity_lock_service import ActivityLockService
from services.collaborators import OptionValueSource
from services.lock_decision_service import build_decision_engine
from services.markup_service import SanitizingMarkupRenderer


@lru_cache(maxsize=1)
def get_activity_lock_service() -> ActivityLockService:
    client = get_supabase()
    engine = build_decision_engine(
        directory=SupabaseContactDirectory(client),
        activity_store=SupabaseActivityStore(client),
        relationship_store=SupabaseRelationshipStore(client),
        renderer=SanitizingMarkupRenderer(),
    )
    return ActivityLockService(
        config_store=SupabaseFormConfigStore(client),
        engine=engine,
        debounce_ms=load_settings().debounce_ms,
    )


@lru_cache(maxsize=1)
def get_option_source() -> OptionValueSource:
    return SupabaseOptionValueSource(get_supabase())
