"""
The two server-side entry points of the wizard.

    validate_step(step_id, data)       strict per-step rules, pure
    accept_submission(step_id, data)   loose shape check, then durable write

The asymmetry is deliberate (see `udyam_intake.forms.submission`).  The
service holds no per-request state; the only shared input is the
provider's immutable compiled form.
"""

from __future__ import annotations

from typing import Any, Mapping

from udyam_intake.core.constants import STEP_ID_KEY
from udyam_intake.core.logging import get_logger
from udyam_intake.forms.errors import PersistenceError, ValidationError
from udyam_intake.forms.provider import SchemaProvider
from udyam_intake.forms.results import ValidationResult
from udyam_intake.services.submission_store import SubmissionStore

logger = get_logger(__name__)


class StepValidationService:
    def __init__(
        self,
        provider: SchemaProvider,
        store: SubmissionStore | None = None,
        *,
        enforce_step_rules_on_submit: bool = False,
    ) -> None:
        self.provider = provider
        self.store = store
        self.enforce_step_rules_on_submit = enforce_step_rules_on_submit

    def validate_step(self, step_id: object, data: Mapping[str, Any] | None) -> ValidationResult:
        """Validate ``data`` against the rules of ``step_id``.

        Bad input never raises: it comes back as an Invalid result.

        Raises:
            UnknownStepError: ``step_id`` is not a step of the current schema.
            ConfigurationError: the schema could not be loaded.
        """
        validator = self.provider.get().validator_for(step_id)
        result = validator(data or {})
        if not result.is_valid:
            logger.info(
                "Step validation failed",
                step_id=result.step_id,
                error_count=len(result.errors),
                fields=[e.field for e in result.errors],
            )
        return result

    async def accept_submission(self, step_id: object, data: Mapping[str, Any] | None) -> str:
        """Shape-check a final submission and persist it.

        Returns:
            The identifier generated by the submission store.

        Raises:
            ValidationError: the payload does not fit the submit shape (or,
                with enforce_step_rules_on_submit, the step's own rules).
            PersistenceError: the store rejected the write.
        """
        form = self.provider.get()
        payload = {**(data or {}), STEP_ID_KEY: step_id}

        shape = form.submission_shape.check(payload)
        if not shape.is_valid:
            logger.info(
                "Submission rejected",
                step_id=str(step_id),
                fields=[e.field for e in shape.errors],
            )
            raise ValidationError(list(shape.errors), step_id=str(step_id))

        record = shape.record
        if self.enforce_step_rules_on_submit:
            strict = form.validator_for(record.step_id)(record.fields)
            if not strict.is_valid:
                raise ValidationError(list(strict.errors), step_id=record.step_id)

        if self.store is None:
            raise PersistenceError("No submission store configured", step_id=record.step_id)
        return await self.store.insert(record)
