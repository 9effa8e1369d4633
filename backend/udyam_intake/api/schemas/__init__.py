"""API schema package."""

from udyam_intake.api.schemas.forms import (
    ErrorResponse,
    OkResponse,
    PinInfoResponse,
    SubmitResponse,
    ValidateStepRequest,
)

__all__ = ["ErrorResponse", "OkResponse", "PinInfoResponse", "SubmitResponse", "ValidateStepRequest"]
