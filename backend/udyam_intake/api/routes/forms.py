"""
Form wizard endpoints: schema, per-step validation, final submission.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from udyam_intake.api.deps import get_schema_provider, get_validation_service
from udyam_intake.api.schemas.forms import ErrorResponse, OkResponse, SubmitResponse, ValidateStepRequest
from udyam_intake.core.constants import STEP_ID_KEY
from udyam_intake.forms.provider import SchemaProvider
from udyam_intake.forms.service import StepValidationService

router = APIRouter(tags=["Forms"])


@router.get("/schema", responses={500: {"model": ErrorResponse}})
async def get_schema(provider: SchemaProvider = Depends(get_schema_provider)) -> dict[str, Any]:
    """Return the form schema document as authored."""
    return dict(provider.get().source)


@router.post("/validate", response_model=OkResponse, responses={400: {"model": ErrorResponse}})
async def validate_step(
    payload: ValidateStepRequest,
    service: StepValidationService = Depends(get_validation_service),
):
    """Validate one step's data against that step's rules."""
    result = service.validate_step(payload.step_id, payload.data)
    if not result.is_valid:
        return JSONResponse(
            status_code=400,
            content={"errors": [e.to_dict() for e in result.errors]},
        )
    return OkResponse()


@router.post(
    "/submit",
    response_model=SubmitResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit(
    payload: dict[str, Any] = Body(...),
    service: StepValidationService = Depends(get_validation_service),
) -> SubmitResponse:
    """Shape-check and store a submission: ``{stepId, ...fields}``."""
    data = dict(payload)
    step_id = data.pop(STEP_ID_KEY, None)
    submission_id = await service.accept_submission(step_id, data)
    return SubmitResponse(id=submission_id)
