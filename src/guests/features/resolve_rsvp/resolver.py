import logging

from src.guests.dtos import (
    AttendingGuestDTO,
    DEFAULT_SUBMITTED_BY,
    ExistingRSVPDTO,
    GuestDTO,
    NotAttendingGuestDTO,
    StoreError,
)
from src.guests.repository.read_models import RSVPReadModel

logger = logging.getLogger(__name__)


class RSVPStateResolver:
    """Rebuilds the read-only summary of a party's stored response."""

    def __init__(self, read_model: RSVPReadModel):
        self._read_model = read_model

    async def resolve(self, members: list[GuestDTO]) -> ExistingRSVPDTO:
        """
        Only call this when a member's has-responded flag is set.

        A store failure yields an "attending" placeholder so the locked view still
        renders. No rows at all despite the flag is read as a decline.
        """
        try:
            records = await self._read_model.get_records_for_guests(
                [member.id for member in members]
            )
        except StoreError as e:
            logger.error(f"Could not fetch existing RSVP, using placeholder: {e}")
            return ExistingRSVPDTO(attending=True)

        if not records:
            return ExistingRSVPDTO(attending=False)

        attending_guests: list[AttendingGuestDTO] = []
        not_attending_guests: list[NotAttendingGuestDTO] = []
        submitted_by = ""
        message = ""

        # Store order is not stable, so "first non-empty" means any of them
        for record in records:
            if not submitted_by and record.submitted_by:
                submitted_by = record.submitted_by
            if not message and record.message:
                message = record.message

            if not record.attending:
                not_attending_guests.append(
                    NotAttendingGuestDTO(
                        name=record.guest_name, is_plus_one=bool(record.is_plus_one)
                    )
                )
                continue

            attending_guests.append(
                AttendingGuestDTO(
                    name=record.guest_name,
                    events=record.events,
                    dietary=record.dietary or "",
                    is_plus_one=bool(record.is_plus_one),
                )
            )

        return ExistingRSVPDTO(
            attending=len(attending_guests) > 0,
            guests=attending_guests,
            not_attending_guests=not_attending_guests,
            submitted_by=submitted_by or DEFAULT_SUBMITTED_BY,
            message=message,
        )
