"""
Client-side interaction controller for the activity lock.

Watches the three identity fields of one rendered form, debounces edits,
asks the server whether the form should lock and applies the answer to the
form view.
"""

from interaction.controller import FormLockController
from interaction.session import CheckSession, ControllerState
from interaction.transport import HttpActivityChecker, TransportError
from interaction.view import FormView, InMemoryFormView

__all__ = [
    "CheckSession",
    "ControllerState",
    "FormLockController",
    "FormView",
    "HttpActivityChecker",
    "InMemoryFormView",
    "TransportError",
]
