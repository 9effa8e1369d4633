"""
Submit-time shape check.

``/submit`` does NOT re-run the strict per-step rules.  Its contract is
the union of every field across every step, each optional, plus a
mandatory ``stepId`` naming a known step.  Only the type of whatever
keys are present is checked (text -> str, checkbox -> bool); keys that
belong to no step are dropped from the stored record.

This is the second phase of a two-phase design: ``/validate`` gives
strict per-step feedback, ``/submit`` performs this lightweight check
before the durable write.  Do not merge the two rule sets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from udyam_intake.core.constants import STEP_ID_KEY, FieldErrorKind, FieldType
from udyam_intake.forms.results import FieldError
from udyam_intake.forms.schema import SchemaDocument

_PYTHON_TYPES: dict[FieldType, type] = {
    FieldType.TEXT: str,
    FieldType.CHECKBOX: bool,
}


@dataclass(frozen=True)
class SubmissionRecord:
    """Normalized record handed to the submission store."""

    step_id: str
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SubmissionShapeResult:
    record: SubmissionRecord | None
    errors: tuple[FieldError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class SubmissionShape:
    """Union of all step fields, keyed by field id."""

    step_ids: frozenset[str]
    field_types: Mapping[str, FieldType]

    @classmethod
    def from_document(cls, document: SchemaDocument) -> SubmissionShape:
        field_types: dict[str, FieldType] = {}
        for step in document.steps:
            for f in step.fields:
                declared = FieldType(f.type)
                existing = field_types.setdefault(f.id, declared)
                if existing != declared:
                    raise ValueError(
                        f"field {f.id!r} is declared as both {existing} and {declared} across steps"
                    )
        return cls(step_ids=frozenset(document.step_ids), field_types=field_types)

    def check(self, payload: Mapping[str, Any]) -> SubmissionShapeResult:
        """Type-check the present keys and build the normalized record."""
        errors: list[FieldError] = []

        step_id = payload.get(STEP_ID_KEY)
        if step_id is None:
            errors.append(
                FieldError(field=STEP_ID_KEY, kind=FieldErrorKind.REQUIRED, message="This field is required")
            )
        elif not isinstance(step_id, str) or step_id not in self.step_ids:
            errors.append(
                FieldError(
                    field=STEP_ID_KEY,
                    kind=FieldErrorKind.UNKNOWN_STEP,
                    message=f"Expected one of: {', '.join(sorted(self.step_ids))}",
                )
            )

        fields: dict[str, Any] = {}
        for field_id, field_type in self.field_types.items():
            value = payload.get(field_id)
            if value is None:
                continue
            if not isinstance(value, _PYTHON_TYPES[field_type]):
                errors.append(
                    FieldError(
                        field=field_id,
                        kind=FieldErrorKind.TYPE,
                        message=f"Expected a {'boolean' if field_type == FieldType.CHECKBOX else 'string'}",
                    )
                )
                continue
            fields[field_id] = value

        if errors:
            return SubmissionShapeResult(record=None, errors=tuple(errors))
        return SubmissionShapeResult(record=SubmissionRecord(step_id=step_id, fields=fields))
