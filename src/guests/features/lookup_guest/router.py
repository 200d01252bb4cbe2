from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.guests.dtos import GuestNotFoundError, LookupFailedError
from src.guests.features.lookup_guest.dtos import LookupGuestRequest, LookupGuestResponse
from src.guests.features.lookup_guest.service import GuestDirectory, GuestLookupService
from src.guests.features.resolve_rsvp.resolver import RSVPStateResolver
from src.guests.repository import get_guest_read_model, get_rsvp_read_model
from src.guests.schemas import ErrorResponse
from src.guests.urls import LOOKUP_GUEST_URL

router = APIRouter()

MISSING_NAMES_ERROR = "firstName and lastName are required"


def get_guest_lookup_service() -> GuestLookupService:
    """Dependency to get the guest lookup service instance."""
    return GuestLookupService(
        directory=GuestDirectory(get_guest_read_model()),
        resolver=RSVPStateResolver(get_rsvp_read_model()),
    )


@router.post(
    LOOKUP_GUEST_URL,
    response_model=LookupGuestResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def lookup_guest(
    request: LookupGuestRequest,
    service: GuestLookupService = Depends(get_guest_lookup_service),
):
    """
    Find an invitation by first and last name.

    Returns the whole party and, when someone in it already answered, the locked
    summary of that answer. A miss never says which part of the name was wrong.
    """
    if not request.first_name.strip() or not request.last_name.strip():
        return JSONResponse(status_code=400, content={"error": MISSING_NAMES_ERROR})

    try:
        result = await service.lookup(request.first_name, request.last_name)
    except GuestNotFoundError:
        return JSONResponse(status_code=404, content={"error": "not_found"})
    except LookupFailedError:
        return JSONResponse(status_code=500, content={"error": "Failed to look up guest"})

    return LookupGuestResponse.from_dto(result)
