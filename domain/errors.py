"""
Domain errors for activity lock checks.

Collaborator failures (contact, activity, relationship lookups) are NOT
represented here: they are absorbed by the services and treated as "no match".
"""

from __future__ import annotations


class ActivityLockError(Exception):
    """Base class for errors surfaced to callers of the lock check."""


class ValidationError(ActivityLockError):
    """Raised when identity fields are missing or empty."""


class ConfigurationError(ActivityLockError):
    """
    Raised when a form has no usable lock handler.

    not_found distinguishes "no such form / no handler" (404) from an
    incomplete handler configuration (400).
    """

    def __init__(self, message: str, *, not_found: bool = False) -> None:
        super().__init__(message)
        self.not_found = not_found
