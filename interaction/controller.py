"""
Interaction controller: when to check, and what to do with the answer.

Every change or blur of a tracked field restarts the debounce timer. When the
timer fires the check is skipped if a value is empty, if the values equal the
last checked ones, or if a check is already in flight. Otherwise one remote
check runs; its answer locks or unlocks the view. A failed check leaves the
view as it was, whatever the cause.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, Protocol

from domain.decision import LockDecision
from domain.identity import IdentityInput
from interaction.session import CheckSession, ControllerState
from interaction.transport import TransportError
from interaction.view import FormView
from services.activity_lock_service import ClientSettings, FormRenderState

logger = logging.getLogger(__name__)


class RemoteChecker(Protocol):
    async def check(self, identity: IdentityInput, webform_id: str) -> LockDecision:
        ...


class Scheduler(Protocol):
    """Anything with asyncio's call_later; the running event loop by default."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Any:
        ...


class FormLockController:
    def __init__(
        self,
        settings: ClientSettings,
        view: FormView,
        checker: RemoteChecker,
        scheduler: Optional[Scheduler] = None,
        log: Optional[logging.Logger] = None,
        locked: bool = False,
    ) -> None:
        self.settings = settings
        self.session = CheckSession(
            settled_state=ControllerState.LOCKED if locked else ControllerState.IDLE
        )
        self._view = view
        self._checker = checker
        self._scheduler = scheduler
        self._log = log or logger

    @classmethod
    def for_render_state(
        cls,
        render_state: FormRenderState,
        view: FormView,
        checker: RemoteChecker,
        scheduler: Optional[Scheduler] = None,
    ) -> "FormLockController":
        """Controller for a form the server may already have locked at render time."""

        return cls(
            render_state.client_settings,
            view,
            checker,
            scheduler=scheduler,
            locked=render_state.plan.locked,
        )

    @property
    def state(self) -> ControllerState:
        return self.session.state

    def on_field_event(self, field_name: str) -> None:
        """Handle a change or blur event. Untracked fields are ignored."""

        if field_name not in self.settings.tracked_fields():
            return

        scheduler = self._scheduler or asyncio.get_running_loop()
        self.session.cancel_pending()
        self.session.pending_timer = scheduler.call_later(
            self.settings.debounce_ms / 1000.0, self._on_debounce
        )

    def _on_debounce(self) -> None:
        self.session.pending_timer = None

        identity = IdentityInput.of(
            self._view.read(self.settings.first_name_field),
            self._view.read(self.settings.last_name_field),
            self._view.read(self.settings.email_field),
        )

        if not identity.is_complete():
            return

        if identity == self.session.last_checked_values:
            self._log.debug("Skipping activity check: values unchanged")
            return

        if self.session.is_checking:
            self._log.debug("Skipping activity check: a check is already in flight")
            return

        self.session.is_checking = True
        self.session.last_checked_values = identity
        self.session.in_flight = asyncio.ensure_future(self._run_check(identity))

    async def _run_check(self, identity: IdentityInput) -> None:
        try:
            decision = await self._checker.check(identity, self.settings.webform_id)
        except TransportError as e:
            self._log.warning(
                f"Activity check failed: {e}",
                extra={"webform_id": self.settings.webform_id, "error": str(e)},
            )
        except Exception as e:
            # A broken checker is treated like an unreachable one.
            self._log.warning(
                f"Activity check failed: {e}",
                extra={"webform_id": self.settings.webform_id, "error": str(e)},
                exc_info=True,
            )
        else:
            if decision.locked:
                self._view.lock(
                    decision.message,
                    keep_enabled=self.settings.tracked_fields(),
                    anchor=self.settings.email_field,
                )
                self.session.settled_state = ControllerState.LOCKED
            else:
                self._view.unlock()
                self.session.settled_state = ControllerState.UNLOCKED
        finally:
            self.session.is_checking = False

    async def wait_idle(self) -> None:
        """Wait for the in-flight check, if any, to finish."""

        in_flight = self.session.in_flight
        if in_flight is not None and not in_flight.done():
            await in_flight
