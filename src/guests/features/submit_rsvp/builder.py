"""Turns a party's answers into RSVP rows and persists them.

Submitting is two phases: create the rows, then flag every party member as
responded. Flags are only touched once the rows exist. Rows created before a
failed flag update are left in place.
"""

import logging
from enum import Enum

from src.guests.dtos import (
    Event,
    GuestDraftDTO,
    GuestDTO,
    PlusOneDraftDTO,
    RSVPRecordDTO,
    StoreError,
    SubmitFailedError,
    ValidationFailedError,
)
from src.guests.repository.write_models import RSVPWriteModel

logger = logging.getLogger(__name__)


class DraftOutcome(str, Enum):
    REVIEW = "review"
    DECLINE = "decline"


def named_plus_one(plus_one: PlusOneDraftDTO | None) -> PlusOneDraftDTO | None:
    if plus_one and plus_one.name.strip():
        return plus_one
    return None


def validate_draft(
    guests: list[GuestDraftDTO], plus_one: PlusOneDraftDTO | None
) -> DraftOutcome:
    """
    Check the details step before review.

    Everyone opting out with no plus-one named turns the whole thing into a decline.
    Raises ValidationFailedError naming the guest that breaks a rule.
    """
    attending = [guest for guest in guests if not guest.not_attending]
    plus_one = named_plus_one(plus_one)

    if not attending and plus_one is None:
        return DraftOutcome.DECLINE

    for guest in attending:
        if not guest.events:
            raise ValidationFailedError(
                f"Please select at least one event for {guest.first_name} to attend."
            )

    if plus_one is not None and not plus_one.events:
        raise ValidationFailedError("Please select at least one event for your guest to attend.")

    return DraftOutcome.REVIEW


def _event_flags(events: list[Event]) -> dict[str, bool]:
    return {
        "welcome_party": Event.WELCOME in events,
        "beach_party": Event.BEACH in events,
        "wedding": Event.WEDDING in events,
    }


class RSVPSubmissionBuilder:
    def __init__(self, write_model: RSVPWriteModel):
        self._write_model = write_model

    @staticmethod
    def build(
        leader: GuestDTO,
        members: list[GuestDTO],
        attending: bool,
        guests: list[GuestDraftDTO],
        plus_one: PlusOneDraftDTO | None,
        message: str,
    ) -> list[RSVPRecordDTO]:
        submitted_by = leader.full_name

        if not attending:
            return [
                RSVPRecordDTO(
                    guest_id=leader.id,
                    guest_name=", ".join(member.full_name for member in members),
                    attending=False,
                    submitted_by=submitted_by,
                    message=message,
                )
            ]

        records: list[RSVPRecordDTO] = []
        # Attending guests without any event are left out
        for guest in guests:
            if guest.not_attending or not guest.events:
                continue
            records.append(
                RSVPRecordDTO(
                    guest_id=guest.id,
                    guest_name=guest.full_name,
                    attending=True,
                    dietary=guest.dietary.strip() or None,
                    is_adult=guest.is_adult,
                    submitted_by=submitted_by,
                    message=message,
                    **_event_flags(guest.events),
                )
            )

        for guest in guests:
            if not guest.not_attending:
                continue
            records.append(
                RSVPRecordDTO(
                    guest_id=guest.id,
                    guest_name=guest.full_name,
                    attending=False,
                    is_adult=guest.is_adult,
                    submitted_by=submitted_by,
                    message=message,
                )
            )

        plus_one = named_plus_one(plus_one)
        if plus_one is not None:
            records.append(
                RSVPRecordDTO(
                    guest_name=plus_one.name.strip(),
                    attending=True,
                    dietary=plus_one.dietary.strip() or None,
                    is_plus_one=True,
                    plus_one_of=leader.id,
                    submitted_by=submitted_by,
                    message=message,
                    **_event_flags(plus_one.events),
                )
            )

        return records

    async def commit(self, records: list[RSVPRecordDTO], members: list[GuestDTO]) -> None:
        """
        Persist the rows, then flag every member as responded.

        Members get flagged even when no row represents them.
        """
        if records:
            try:
                await self._write_model.create_records(records)
            except StoreError as e:
                logger.error(f"Creating RSVP records failed: {e}")
                raise SubmitFailedError("Failed to submit RSVP") from e

        failed: list[str] = []
        for member in members:
            try:
                await self._write_model.mark_responded(member.id)
            except StoreError as e:
                logger.error(f"Marking guest {member.id} as responded failed: {e}")
                failed.append(member.id)

        if failed:
            raise SubmitFailedError("Failed to submit RSVP")

        logger.info(f"Stored {len(records)} RSVP records for {len(members)} party members")

    async def submit(
        self,
        leader: GuestDTO,
        members: list[GuestDTO],
        attending: bool,
        guests: list[GuestDraftDTO],
        plus_one: PlusOneDraftDTO | None,
        message: str,
    ) -> list[RSVPRecordDTO]:
        records = self.build(leader, members, attending, guests, plus_one, message)
        await self.commit(records, members)
        return records
