"""
Webform configuration repository.

Webforms store their element tree as JSON; handlers are rows in
`webform_handlers` keyed by webform and plugin id. This repository only
reads configuration; saving it is the host's job.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from domain.form import FormDefinition, Webform
from domain.lock_rule import HANDLER_PLUGIN_ID, HandlerSettings, LockRuleConfig
from repositories.client import rows_or_raise


def _handler_settings(handlers: Any) -> Optional[HandlerSettings]:
    """Parse the first activity lock handler of a webform, if it has one."""

    for handler in handlers or []:
        if handler.get("plugin_id") != HANDLER_PLUGIN_ID:
            continue
        configuration: Mapping[str, Any] = handler.get("configuration") or {}
        # Handler configuration is nested under 'settings'
        settings = configuration.get("settings", configuration)
        return HandlerSettings.from_mapping(settings or {})

    return None


class SupabaseFormConfigStore:
    def __init__(self, client) -> None:
        self._client = client

    def get_webform(self, webform_id: str) -> Optional[Webform]:
        """
        Load a webform with its activity lock handler.

        Returns:
            Webform, or None if no webform has this id. Webform.handler is None
            when the form has no activity lock handler.

        Raises:
            RuntimeError: on API errors.
            ConfigurationError: if the handler settings cannot be parsed.
        """
        response = (
            self._client.table("webforms")
            .select("webform_id, elements, webform_handlers(plugin_id, configuration, weight)")
            .eq("webform_id", webform_id)
            .limit(1)
            .execute()
        )

        rows = rows_or_raise(response, "fetch webform")
        if not rows:
            return None

        row = rows[0]
        elements = row.get("elements")
        if isinstance(elements, str):
            elements = json.loads(elements) if elements.strip() else {}
        handlers = sorted(row.get("webform_handlers") or [], key=lambda h: h.get("weight") or 0)

        return Webform(
            webform_id=str(row["webform_id"]),
            form=FormDefinition.from_mapping(str(row["webform_id"]), elements),
            handler=_handler_settings(handlers),
        )

    def load_lock_rule_config(self, webform_id: str) -> Optional[LockRuleConfig]:
        webform = self.get_webform(webform_id)
        if webform is None or webform.handler is None:
            return None
        return webform.handler.rule


__all__ = ["SupabaseFormConfigStore"]
