"""Liveness endpoint."""

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict[str, bool]:
    """Public health-check endpoint."""
    return {"ok": True}
