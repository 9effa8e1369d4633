"""
Domain-specific exception hierarchy for form intake.

All intake exceptions inherit from IntakeError so callers can catch
broadly or narrowly.  The HTTP layer maps each subclass to a status
code: configuration and persistence faults are server errors, unknown
steps and validation failures are client errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from udyam_intake.forms.results import FieldError


class IntakeError(Exception):
    """Base exception for all intake errors."""

    def __init__(
        self,
        message: str,
        *,
        step_id: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.message = message
        self.step_id = step_id
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(IntakeError):
    """The form schema source is missing or malformed."""

    def __init__(self, message: str, *, source: str | None = None, **kwargs) -> None:
        self.source = source
        super().__init__(message, **kwargs)


class UnknownStepError(IntakeError):
    """A request named a step id that is not in the schema document."""

    def __init__(self, step_id: object) -> None:
        super().__init__(f"Unknown stepId: {step_id!r}", step_id=str(step_id))


class ValidationError(IntakeError):
    """Candidate data was rejected.  Carries every field error at once."""

    def __init__(self, errors: list[FieldError], **kwargs) -> None:
        self.errors = list(errors)
        super().__init__(f"{len(self.errors)} field(s) failed validation", **kwargs)


class PersistenceError(IntakeError):
    """The submission store rejected a write."""
    pass
