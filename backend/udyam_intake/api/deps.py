"""Shared dependencies for API routes.

Everything is built once in the app lifespan and kept on `app.state`;
these helpers hand it to the routes.
"""

from __future__ import annotations

from fastapi import Request

from udyam_intake.forms.provider import SchemaProvider
from udyam_intake.forms.service import StepValidationService
from udyam_intake.services.postal_lookup import PostalLookupClient


async def get_schema_provider(request: Request) -> SchemaProvider:
    """Return the process-wide schema provider."""
    return request.app.state.schema_provider


async def get_validation_service(request: Request) -> StepValidationService:
    """Return the step validation service."""
    return request.app.state.validation_service


async def get_postal_lookup(request: Request) -> PostalLookupClient:
    """Return the PIN code lookup client."""
    return request.app.state.postal_lookup
