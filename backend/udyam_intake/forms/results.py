"""
Validation outcome types shared by the builder, the service and the API.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from udyam_intake.core.constants import FieldErrorKind


class FieldError(BaseModel):
    """One rejected field."""

    model_config = ConfigDict(frozen=True)

    field: str
    kind: FieldErrorKind
    message: str
    limit: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise for JSON responses (omits an unset limit)."""
        return self.model_dump(mode="json", exclude_none=True)


class ValidationResult(BaseModel):
    """Valid when ``errors`` is empty, otherwise Invalid with every failure."""

    model_config = ConfigDict(frozen=True)

    step_id: str
    errors: tuple[FieldError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error_for(self, field_id: str) -> FieldError | None:
        """Return the error reported for ``field_id``, if any."""
        for error in self.errors:
            if error.field == field_id:
                return error
        return None

    @classmethod
    def valid(cls, step_id: str) -> ValidationResult:
        return cls(step_id=step_id)

    @classmethod
    def invalid(cls, step_id: str, errors: list[FieldError]) -> ValidationResult:
        return cls(step_id=step_id, errors=tuple(errors))
