"""RSVP write models. Take and return DTOs, never raw Airtable payloads."""

from abc import ABC, abstractmethod

from src.airtable.client import AirtableClient
from src.config.table_names import GuestFields, TableNames
from src.guests.dtos import RSVPRecordDTO


class RSVPWriteModel(ABC):
    @abstractmethod
    async def create_records(self, records: list[RSVPRecordDTO]) -> list[RSVPRecordDTO]:
        """
        Persist a batch of RSVP rows.
        Returns the stored rows with their ids.
        """
        raise NotImplementedError

    @abstractmethod
    async def mark_responded(self, guest_id: str) -> None:
        """Set the has-responded flag of a guest."""
        raise NotImplementedError


class AirtableRSVPWriteModel(RSVPWriteModel):
    """Airtable implementation of the RSVP writes."""

    def __init__(self, client: AirtableClient | None = None):
        self._client = client or AirtableClient()

    async def create_records(self, records: list[RSVPRecordDTO]) -> list[RSVPRecordDTO]:
        created = await self._client.create_records(
            TableNames.RSVPS.value, [record.to_fields() for record in records]
        )
        return [RSVPRecordDTO.from_fields(row.get("id"), row.get("fields", {})) for row in created]

    async def mark_responded(self, guest_id: str) -> None:
        await self._client.update_record(
            TableNames.GUESTS.value,
            guest_id,
            {GuestFields.HAS_RESPONDED.value: True},
        )
