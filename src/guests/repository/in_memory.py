"""In-memory guest store - no Airtable required.

Backs the demo mode and the tests. Implements every read/write model so a
single instance can stand in for the whole backing store.
"""

import asyncio
import itertools
from dataclasses import replace

from src.guests.dtos import GuestDTO, RSVPRecordDTO
from src.guests.repository.read_models import GuestReadModel, RSVPReadModel
from src.guests.repository.write_models import RSVPWriteModel


class InMemoryGuestStore(GuestReadModel, RSVPReadModel, RSVPWriteModel):
    def __init__(
        self,
        guests: list[GuestDTO] | None = None,
        records: list[RSVPRecordDTO] | None = None,
        latency: float = 0.0,
    ):
        self._guests: dict[str, GuestDTO] = {guest.id: guest for guest in guests or []}
        self._records: list[RSVPRecordDTO] = []
        self._latency = latency
        self._ids = itertools.count(1)
        for record in records or []:
            self._records.append(self._with_id(record))

    def _with_id(self, record: RSVPRecordDTO) -> RSVPRecordDTO:
        if record.id:
            return record
        return replace(record, id=f"rec_demo_{next(self._ids)}")

    async def _simulate_latency(self) -> None:
        if self._latency:
            await asyncio.sleep(self._latency)

    @property
    def guests(self) -> list[GuestDTO]:
        return list(self._guests.values())

    @property
    def records(self) -> list[RSVPRecordDTO]:
        return list(self._records)

    def get_guest(self, guest_id: str) -> GuestDTO | None:
        return self._guests.get(guest_id)

    async def find_guest(self, first_name: str, last_name: str) -> GuestDTO | None:
        await self._simulate_latency()
        for guest in self._guests.values():
            if (
                guest.first_name.lower() == first_name.lower()
                and guest.last_name.lower() == last_name.lower()
            ):
                return guest
        return None

    async def get_party_members(self, party_name: str) -> list[GuestDTO]:
        await self._simulate_latency()
        return [guest for guest in self._guests.values() if guest.party_name == party_name]

    async def get_records_for_guests(self, guest_ids: list[str]) -> list[RSVPRecordDTO]:
        await self._simulate_latency()
        wanted = set(guest_ids)
        return [record for record in self._records if record.linked_guest_ids() & wanted]

    async def create_records(self, records: list[RSVPRecordDTO]) -> list[RSVPRecordDTO]:
        await self._simulate_latency()
        created = [self._with_id(record) for record in records]
        self._records.extend(created)
        return created

    async def mark_responded(self, guest_id: str) -> None:
        await self._simulate_latency()
        guest = self._guests.get(guest_id)
        if guest:
            self._guests[guest_id] = replace(guest, has_responded=True)


def demo_guests() -> list[GuestDTO]:
    """Solo guests with and without a plus-one, a family, and an already responded party."""
    return [
        GuestDTO(
            id="demo_john",
            first_name="John",
            last_name="Smith",
            email="john@example.com",
            plus_one_allowed=True,
        ),
        GuestDTO(id="demo_jane", first_name="Jane", last_name="Doe", email="jane@example.com"),
        GuestDTO(
            id="demo_pierre",
            first_name="Pierre",
            last_name="Njeim",
            email="pierre@example.com",
            party_name="Njeim Family",
        ),
        GuestDTO(id="demo_luciana", first_name="Luciana", last_name="Njeim", party_name="Njeim Family"),
        GuestDTO(
            id="demo_phoenix",
            first_name="Phoenix",
            last_name="Njeim",
            party_name="Njeim Family",
            is_adult=False,
        ),
        GuestDTO(
            id="demo_leona",
            first_name="Leona",
            last_name="Njeim",
            party_name="Njeim Family",
            is_adult=False,
        ),
        GuestDTO(
            id="demo_jasmine",
            first_name="Jasmine",
            last_name="Njeim",
            party_name="Njeim Family",
            is_adult=False,
        ),
        GuestDTO(
            id="demo_sophie",
            first_name="Sophie",
            last_name="Belmand",
            email="sophie@example.com",
            plus_one_allowed=True,
        ),
        GuestDTO(
            id="demo_bob",
            first_name="Bob",
            last_name="Responded",
            email="bob@example.com",
            party_name="Responded Family",
            has_responded=True,
        ),
        GuestDTO(
            id="demo_alice",
            first_name="Alice",
            last_name="Responded",
            party_name="Responded Family",
            has_responded=True,
        ),
    ]


def demo_records() -> list[RSVPRecordDTO]:
    return [
        RSVPRecordDTO(
            guest_id="demo_bob",
            guest_name="Bob Responded",
            attending=True,
            welcome_party=True,
            beach_party=True,
            wedding=True,
            is_adult=True,
            submitted_by="Bob Responded",
            message="So excited to celebrate with you!",
        ),
        RSVPRecordDTO(
            guest_id="demo_alice",
            guest_name="Alice Responded",
            attending=True,
            welcome_party=True,
            beach_party=False,
            wedding=True,
            dietary="Gluten-free",
            is_adult=True,
            submitted_by="Bob Responded",
            message="So excited to celebrate with you!",
        ),
    ]


def demo_store(latency: float = 0.0) -> InMemoryGuestStore:
    return InMemoryGuestStore(guests=demo_guests(), records=demo_records(), latency=latency)
