"""
CompiledForm: a schema document plus everything derived from it.

Built once per load and never mutated, so a reload only has to swap a
single reference for readers to move from the old form to the new one.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from udyam_intake.forms.errors import UnknownStepError
from udyam_intake.forms.rules import StepValidator, build_step_validator
from udyam_intake.forms.schema import SchemaDocument
from udyam_intake.forms.submission import SubmissionShape


@dataclass(frozen=True)
class CompiledForm:
    document: SchemaDocument
    source: Mapping[str, Any]
    validators: Mapping[str, StepValidator]
    submission_shape: SubmissionShape

    @classmethod
    def compile(cls, document: SchemaDocument, source: Mapping[str, Any] | None = None) -> CompiledForm:
        """Compile every step validator and the submit shape.

        ``source`` is the JSON the document was parsed from.  It is kept as
        authored (keys the models do not declare included) for GET /schema;
        without it the document is serialised back.

        Raises:
            ValueError: a field id is declared with two different types.
        """
        validators = {step.id: build_step_validator(step) for step in document.steps}
        return cls(
            document=document,
            source=source if source is not None else document.to_public_dict(),
            validators=MappingProxyType(validators),
            submission_shape=SubmissionShape.from_document(document),
        )

    def validator_for(self, step_id: object) -> StepValidator:
        """Return the compiled validator for ``step_id`` or raise UnknownStepError."""
        if not isinstance(step_id, str) or step_id not in self.validators:
            raise UnknownStepError(step_id)
        return self.validators[step_id]
