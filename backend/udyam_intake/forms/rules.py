"""
Validator builder: compiles a step's declarative field rules into
executable validators.

Compilation happens once per loaded schema document; regex strings are
compiled here and never again per request.  The result is pure logic
with no dependency on HTTP or rendering, so any consumer (API routes,
scripts, tests) shares the exact same rule interpreter.

Per field, rules run in a fixed order and the first failure wins, so a
field reports at most one error.  Across fields nothing short-circuits:
a step with two bad fields yields two errors.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Union

from udyam_intake.core.constants import FieldErrorKind
from udyam_intake.forms.results import FieldError, ValidationResult
from udyam_intake.forms.schema import CheckboxField, Step, TextField, compile_pattern


# ─── Text rules ───────────────────────────────────────────

@dataclass(frozen=True)
class RequiredText:
    """Text must be non-empty."""

    def check(self, field_id: str, value: str) -> FieldError | None:
        if value == "":
            return _required(field_id)
        return None


@dataclass(frozen=True)
class MaxLength:
    """Text must be at most ``limit`` characters."""

    limit: int

    def check(self, field_id: str, value: str) -> FieldError | None:
        if len(value) > self.limit:
            return FieldError(
                field=field_id,
                kind=FieldErrorKind.MAX_LENGTH,
                message=f"Must be at most {self.limit} characters",
                limit=self.limit,
            )
        return None


@dataclass(frozen=True)
class Pattern:
    """Text must match the author's (already anchored) pattern."""

    pattern: re.Pattern[str]

    def check(self, field_id: str, value: str) -> FieldError | None:
        if self.pattern.search(value) is None:
            return FieldError(field=field_id, kind=FieldErrorKind.PATTERN, message="Invalid format")
        return None


TextRule = Union[RequiredText, MaxLength, Pattern]


# ─── Field validators ─────────────────────────────────────

@dataclass(frozen=True)
class TextFieldValidator:
    field_id: str
    required: bool
    rules: tuple[TextRule, ...]

    def __call__(self, data: Mapping[str, Any]) -> FieldError | None:
        value = data.get(self.field_id)
        if value is None:
            return _required(self.field_id) if self.required else None
        if not isinstance(value, str):
            return FieldError(field=self.field_id, kind=FieldErrorKind.TYPE, message="Expected a string")
        for rule in self.rules:
            error = rule.check(self.field_id, value)
            if error is not None:
                return error
        return None


@dataclass(frozen=True)
class CheckboxFieldValidator:
    field_id: str
    required: bool

    def __call__(self, data: Mapping[str, Any]) -> FieldError | None:
        # Only the literal boolean true satisfies a required checkbox
        if self.required and data.get(self.field_id) is not True:
            return _required(self.field_id)
        return None


@dataclass(frozen=True)
class UnconstrainedFieldValidator:
    """Field declared without a validation block: always passes."""

    field_id: str

    def __call__(self, data: Mapping[str, Any]) -> FieldError | None:
        return None


FieldValidator = Union[TextFieldValidator, CheckboxFieldValidator, UnconstrainedFieldValidator]


@dataclass(frozen=True)
class StepValidator:
    """Composite validator for one step."""

    step_id: str
    fields: tuple[FieldValidator, ...]

    def __call__(self, data: Mapping[str, Any]) -> ValidationResult:
        errors = [error for error in (validate(data) for validate in self.fields) if error is not None]
        if errors:
            return ValidationResult.invalid(self.step_id, errors)
        return ValidationResult.valid(self.step_id)


# ─── Builder ──────────────────────────────────────────────

def compile_field(field: TextField | CheckboxField) -> FieldValidator:
    """Compile one field declaration into its validator."""
    if field.validation is None:
        return UnconstrainedFieldValidator(field_id=field.id)

    if isinstance(field, CheckboxField):
        return CheckboxFieldValidator(field_id=field.id, required=field.validation.required)

    rules: list[TextRule] = []
    if field.validation.required:
        rules.append(RequiredText())
    if field.validation.max_length is not None:
        rules.append(MaxLength(limit=field.validation.max_length))
    if field.validation.regex is not None:
        rules.append(Pattern(pattern=compile_pattern(field.validation.regex)))

    return TextFieldValidator(
        field_id=field.id,
        required=field.validation.required,
        rules=tuple(rules),
    )


def build_step_validator(step: Step) -> StepValidator:
    """Compile every field of ``step`` into one composite validator."""
    return StepValidator(
        step_id=step.id,
        fields=tuple(compile_field(f) for f in step.fields),
    )


def _required(field_id: str) -> FieldError:
    return FieldError(field=field_id, kind=FieldErrorKind.REQUIRED, message="This field is required")
