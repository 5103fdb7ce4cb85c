"""
Per-form check session.

One CheckSession exists per rendered form instance, so several forms on the
same page check independently.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from domain.identity import IdentityInput


class ControllerState(str, Enum):
    IDLE = "idle"
    PENDING_DEBOUNCE = "pending_debounce"
    CHECKING = "checking"
    LOCKED = "locked"
    UNLOCKED = "unlocked"


# Nothing has been checked yet; never equal to a complete identity.
NOTHING_CHECKED = IdentityInput(first_name="", last_name="", email="")


@dataclass
class CheckSession:
    """
    Mutable controller state for one form.

    is_checking guards the single in-flight remote call: triggers that arrive
    while it is set are dropped, not queued.
    """

    last_checked_values: IdentityInput = NOTHING_CHECKED
    is_checking: bool = False
    pending_timer: Optional[Any] = None
    in_flight: Optional["asyncio.Future[None]"] = None
    settled_state: ControllerState = ControllerState.IDLE

    @property
    def state(self) -> ControllerState:
        if self.is_checking:
            return ControllerState.CHECKING
        if self.pending_timer is not None:
            return ControllerState.PENDING_DEBOUNCE
        return self.settled_state

    def cancel_pending(self) -> None:
        if self.pending_timer is not None:
            self.pending_timer.cancel()
            self.pending_timer = None
