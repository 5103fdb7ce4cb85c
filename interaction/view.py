"""
Form view seen by the interaction controller.

The controller only needs to read the tracked fields and to lock or unlock
the form. InMemoryFormView implements that over a flat field registry and is
what tests and headless clients use; a browser binding implements the same
protocol over the DOM.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Protocol


class FormView(Protocol):
    def read(self, field_name: str) -> str:
        ...

    def lock(self, message: str, keep_enabled: Iterable[str], anchor: Optional[str] = None) -> None:
        """Show message after the anchor field (top of form if None), disable all other fields, hide submit."""
        ...

    def unlock(self) -> None:
        ...


@dataclass
class FieldState:
    name: str
    value: str = ""
    disabled: bool = False


class InMemoryFormView:
    def __init__(self, field_names: Iterable[str], submit_controls: Iterable[str] = ("submit",)) -> None:
        self.fields: Dict[str, FieldState] = {name: FieldState(name) for name in field_names}
        self.submit_controls: Dict[str, bool] = {name: True for name in submit_controls}
        self.lock_message: Optional[str] = None
        self.message_anchor: Optional[str] = None
        self.lock_count = 0

    def set_value(self, field_name: str, value: str) -> None:
        self.fields[field_name].value = value

    def read(self, field_name: str) -> str:
        state = self.fields.get(field_name)
        return state.value if state is not None else ""

    def lock(self, message: str, keep_enabled: Iterable[str], anchor: Optional[str] = None) -> None:
        keep = set(keep_enabled)
        # Replace rather than stack messages when already locked.
        self.lock_message = message
        self.message_anchor = anchor if anchor in self.fields else None
        for state in self.fields.values():
            state.disabled = state.name not in keep
        for name in self.submit_controls:
            self.submit_controls[name] = False
        self.lock_count += 1

    def unlock(self) -> None:
        self.lock_message = None
        self.message_anchor = None
        for state in self.fields.values():
            state.disabled = False
        for name in self.submit_controls:
            self.submit_controls[name] = True

    @property
    def is_locked(self) -> bool:
        return self.lock_message is not None

    @property
    def submit_visible(self) -> bool:
        return all(self.submit_controls.values())
