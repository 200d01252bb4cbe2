import pytest

from src.guests.dtos import (
    AttendingGuestDTO,
    DEFAULT_SUBMITTED_BY,
    Event,
    ExistingRSVPDTO,
    GuestDTO,
    NotAttendingGuestDTO,
    RSVPRecordDTO,
    StoreError,
)
from src.guests.features.resolve_rsvp.resolver import RSVPStateResolver
from src.guests.repository.in_memory import InMemoryGuestStore

MEMBERS = [
    GuestDTO(id="g1", first_name="Pierre", last_name="Njeim", party_name="Njeim Family"),
    GuestDTO(id="g2", first_name="Phoenix", last_name="Njeim", party_name="Njeim Family"),
]


class UnreachableStore(InMemoryGuestStore):
    async def get_records_for_guests(self, guest_ids):
        raise StoreError("502 Bad Gateway")


@pytest.mark.asyncio
async def test_partitions_attending_and_not_attending():
    store = InMemoryGuestStore(
        records=[
            RSVPRecordDTO(
                guest_id="g1",
                guest_name="Pierre Njeim",
                attending=True,
                welcome_party=True,
                beach_party=False,
                wedding=True,
                dietary="Vegan",
                message="Can't wait",
            ),
            RSVPRecordDTO(
                guest_id="g2",
                guest_name="Phoenix Njeim",
                attending=False,
                submitted_by="Pierre Njeim",
            ),
        ]
    )

    rsvp = await RSVPStateResolver(store).resolve(MEMBERS)

    assert rsvp == ExistingRSVPDTO(
        attending=True,
        guests=[
            AttendingGuestDTO(
                name="Pierre Njeim", events=[Event.WELCOME, Event.WEDDING], dietary="Vegan"
            )
        ],
        not_attending_guests=[NotAttendingGuestDTO(name="Phoenix Njeim")],
        submitted_by="Pierre Njeim",
        message="Can't wait",
    )


@pytest.mark.asyncio
async def test_plus_one_rows_are_found_through_the_leader():
    store = InMemoryGuestStore(
        records=[
            RSVPRecordDTO(guest_id="g1", guest_name="Pierre Njeim", attending=True, wedding=True),
            RSVPRecordDTO(
                guest_name="Jane Roe",
                attending=True,
                beach_party=True,
                is_plus_one=True,
                plus_one_of="g1",
            ),
        ]
    )

    rsvp = await RSVPStateResolver(store).resolve(MEMBERS)

    assert rsvp.guests[1] == AttendingGuestDTO(
        name="Jane Roe", events=[Event.BEACH], is_plus_one=True
    )


@pytest.mark.asyncio
async def test_all_declined_rows_read_as_not_attending():
    store = InMemoryGuestStore(
        records=[
            RSVPRecordDTO(
                guest_id="g1",
                guest_name="Pierre Njeim, Phoenix Njeim",
                attending=False,
                submitted_by="Pierre Njeim",
            )
        ]
    )

    rsvp = await RSVPStateResolver(store).resolve(MEMBERS)

    assert rsvp.attending is False
    assert rsvp.guests == []
    assert rsvp.not_attending_guests == [NotAttendingGuestDTO(name="Pierre Njeim, Phoenix Njeim")]


@pytest.mark.asyncio
async def test_no_rows_reads_as_decline():
    rsvp = await RSVPStateResolver(InMemoryGuestStore()).resolve(MEMBERS)

    assert rsvp == ExistingRSVPDTO(attending=False)
    assert rsvp.submitted_by == DEFAULT_SUBMITTED_BY


@pytest.mark.asyncio
async def test_missing_submitter_falls_back_to_default():
    store = InMemoryGuestStore(
        records=[RSVPRecordDTO(guest_id="g2", guest_name="Phoenix Njeim", attending=True)]
    )

    rsvp = await RSVPStateResolver(store).resolve(MEMBERS)

    assert rsvp.submitted_by == DEFAULT_SUBMITTED_BY
    assert rsvp.message == ""


@pytest.mark.asyncio
async def test_store_failure_yields_attending_placeholder():
    rsvp = await RSVPStateResolver(UnreachableStore()).resolve(MEMBERS)

    assert rsvp == ExistingRSVPDTO(attending=True)
