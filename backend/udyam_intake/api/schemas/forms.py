"""Form wizard request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ValidateStepRequest(BaseModel):
    """Request payload for POST /validate."""

    model_config = ConfigDict(populate_by_name=True)

    step_id: str = Field(..., alias="stepId")
    data: dict[str, Any] | None = None


class OkResponse(BaseModel):
    ok: bool = True


class SubmitResponse(OkResponse):
    """Accepted submission with the id generated by the store."""

    id: str


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx answer.  ``errors`` lists field errors when there are any."""

    error: str | None = None
    message: str | None = None
    errors: list[dict[str, Any]] = Field(default_factory=list)


class PinInfoResponse(BaseModel):
    city: str
    state: str
