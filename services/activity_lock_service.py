"""
Activity lock service: the server-side boundary of the lock check.

Loads a webform's lock handler from the configuration store and runs the
decision engine for:
- the remote check the browser makes while the visitor types (`check`),
- the check made when the form is rendered with prefilled values
  (`render_state`),
- the check made again when the form is submitted (`validate_submission`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from domain.decision import LockDecision
from domain.errors import ConfigurationError, ValidationError
from domain.form import FieldRegistry, FormLockPlan, Webform
from domain.identity import IdentityInput
from domain.lock_rule import HandlerSettings
from services.collaborators import FormConfigStore
from services.lock_decision_service import LockDecisionEngine

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 500
CHECK_PATH = "/api/v1/activity-lock/check"


@dataclass(frozen=True, slots=True)
class ClientSettings:
    """Settings handed to the interaction controller for one rendered form."""

    webform_id: str
    first_name_field: str
    last_name_field: str
    email_field: str
    check_path: str = CHECK_PATH
    debounce_ms: int = DEFAULT_DEBOUNCE_MS

    def tracked_fields(self) -> Tuple[str, str, str]:
        return (self.first_name_field, self.last_name_field, self.email_field)


@dataclass(frozen=True, slots=True)
class FormRenderState:
    client_settings: ClientSettings
    plan: FormLockPlan


class ActivityLockService:
    def __init__(
        self,
        config_store: FormConfigStore,
        engine: LockDecisionEngine,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self._config_store = config_store
        self._engine = engine
        self._debounce_ms = debounce_ms
        self._log = log or logger

    def check(self, identity: IdentityInput, webform_id: Optional[str]) -> LockDecision:
        """
        Decide whether the webform locks for this identity.

        Raises:
            ValidationError: if an identity field or the webform id is empty.
            ConfigurationError: if the webform or its lock handler does not
                exist (not_found=True) or no activity types are configured.
        """

        missing = identity.missing_fields()
        if not webform_id:
            missing.append("webform_id")
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        _, settings = self._load(webform_id)
        if not settings.rule.is_configured():
            raise ConfigurationError("Handler not properly configured - activity types required")

        decision = self._engine.decide(identity, settings.rule)
        self._log.debug(
            "Activity lock check completed",
            extra={"webform_id": webform_id, "locked": decision.locked},
        )
        return decision

    def render_state(
        self,
        webform_id: str,
        values: Optional[Mapping[str, Any]] = None,
    ) -> FormRenderState:
        """
        Client settings plus the lock plan for a form about to be rendered.

        When all three identity values are already known (a draft, a prefilled
        link) the form is checked and possibly locked before the visitor types.
        A field mapping that does not match the form leaves it open, as does
        an incomplete identity.
        """

        webform, settings = self._load(webform_id)

        client_settings = ClientSettings(
            webform_id=webform.webform_id,
            first_name_field=settings.fields.first_name_field,
            last_name_field=settings.fields.last_name_field,
            email_field=settings.fields.email_field,
            debounce_ms=self._debounce_ms,
        )

        try:
            registry = FieldRegistry.resolve(webform.form, settings.fields)
        except ConfigurationError as e:
            self._log.warning(
                f"Activity lock field mapping unusable: {e}",
                extra={"webform_id": webform_id, "error": str(e)},
            )
            return FormRenderState(client_settings=client_settings, plan=FormLockPlan.open())

        identity = self._identity_from(settings, values or {})
        decision = self._engine.decide(identity, settings.rule)
        if not decision.locked:
            return FormRenderState(client_settings=client_settings, plan=FormLockPlan.open())

        return FormRenderState(
            client_settings=client_settings,
            plan=FormLockPlan.for_lock(webform.form, registry, decision.message),
        )

    def validate_submission(self, webform_id: str, values: Mapping[str, Any]) -> LockDecision:
        """Re-check on submit. Submissions without all three identity values pass."""

        _, settings = self._load(webform_id)
        identity = self._identity_from(settings, values)
        if not identity.is_complete():
            return LockDecision.unlocked()
        return self._engine.decide(identity, settings.rule)

    def _load(self, webform_id: str) -> Tuple[Webform, HandlerSettings]:
        webform = self._config_store.get_webform(webform_id)
        if webform is None:
            raise ConfigurationError("Webform not found", not_found=True)
        if webform.handler is None:
            raise ConfigurationError("Handler not found", not_found=True)
        return webform, webform.handler

    @staticmethod
    def _identity_from(settings: HandlerSettings, values: Mapping[str, Any]) -> IdentityInput:
        fields = settings.fields
        return IdentityInput.of(
            values.get(fields.first_name_field) if fields.first_name_field else None,
            values.get(fields.last_name_field) if fields.last_name_field else None,
            values.get(fields.email_field) if fields.email_field else None,
        )
