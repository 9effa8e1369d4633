"""
Schema-driven form validation.

One declarative schema document drives both the rendering hints served
to the client and the server's own validation of every step.
"""

from udyam_intake.forms.compiled import CompiledForm
from udyam_intake.forms.errors import (
    ConfigurationError,
    IntakeError,
    PersistenceError,
    UnknownStepError,
    ValidationError,
)
from udyam_intake.forms.provider import SchemaProvider
from udyam_intake.forms.results import FieldError, ValidationResult
from udyam_intake.forms.rules import StepValidator, build_step_validator
from udyam_intake.forms.schema import SchemaDocument, Step
from udyam_intake.forms.service import StepValidationService

__all__ = [
    "CompiledForm",
    "ConfigurationError",
    "FieldError",
    "IntakeError",
    "PersistenceError",
    "SchemaDocument",
    "SchemaProvider",
    "Step",
    "StepValidationService",
    "StepValidator",
    "UnknownStepError",
    "ValidationError",
    "ValidationResult",
    "build_step_validator",
]
