import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.guests.dtos import SubmitFailedError
from src.guests.features.submit_rsvp.builder import RSVPSubmissionBuilder
from src.guests.features.submit_rsvp.dtos import SubmitRSVPRequest, SubmitRSVPResponse
from src.guests.repository import get_rsvp_write_model
from src.guests.schemas import ErrorResponse
from src.guests.urls import SUBMIT_RSVP_URL

logger = logging.getLogger(__name__)

router = APIRouter()


def get_submission_builder() -> RSVPSubmissionBuilder:
    """Dependency to get the RSVP submission builder instance."""
    return RSVPSubmissionBuilder(get_rsvp_write_model())


@router.post(
    SUBMIT_RSVP_URL,
    response_model=SubmitRSVPResponse,
    responses={500: {"model": ErrorResponse}},
)
async def submit_rsvp(
    rsvp_data: SubmitRSVPRequest,
    builder: RSVPSubmissionBuilder = Depends(get_submission_builder),
):
    """
    Store a party's RSVP and lock the party.

    attending=false stores a single decline row for the whole party.
    Every listed member is flagged as responded afterwards.
    """
    leader = rsvp_data.leader.to_dto()
    members = [member.to_dto() for member in rsvp_data.members]

    try:
        await builder.submit(
            leader=leader,
            members=members,
            attending=rsvp_data.attending,
            guests=[guest.to_dto() for guest in rsvp_data.guests],
            plus_one=rsvp_data.plus_one.to_dto() if rsvp_data.plus_one else None,
            message=rsvp_data.message or "",
        )
    except SubmitFailedError:
        return JSONResponse(status_code=500, content={"error": "Failed to submit RSVP"})

    logger.info(f"RSVP submitted by {leader.id} (attending={rsvp_data.attending})")
    return SubmitRSVPResponse(success=True)
