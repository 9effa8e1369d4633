"""PIN code city/state hint."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from udyam_intake.api.deps import get_postal_lookup
from udyam_intake.api.schemas.forms import ErrorResponse, PinInfoResponse
from udyam_intake.services.postal_lookup import PostalLookupClient

router = APIRouter(tags=["Lookup"])


@router.get("/pincode/{pin}", response_model=PinInfoResponse, responses={404: {"model": ErrorResponse}})
async def lookup_pincode(pin: str, client: PostalLookupClient = Depends(get_postal_lookup)):
    """Resolve a 6-digit PIN to city and state.  Unknown or unreachable -> 404."""
    info = await client.lookup(pin)
    if info is None:
        return JSONResponse(status_code=404, content={"error": "not_found", "message": f"No post office for PIN {pin}"})
    return PinInfoResponse(city=info.city, state=info.state)
