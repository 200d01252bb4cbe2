import abc

from src.airtable.client import (
    AirtableClient,
    equals_formula,
    linked_to_any_formula,
    name_match_formula,
)
from src.config.table_names import GuestFields, RSVPFields, TableNames
from src.guests.dtos import GuestDTO, RSVPRecordDTO


class GuestReadModel(abc.ABC):
    @abc.abstractmethod
    async def find_guest(self, first_name: str, last_name: str) -> GuestDTO | None:
        """
        Find a guest by name, case-insensitive and exact on both parts.
        Returns the first match, or None.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def get_party_members(self, party_name: str) -> list[GuestDTO]:
        """Every guest whose party name equals `party_name`."""
        raise NotImplementedError


class RSVPReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_records_for_guests(self, guest_ids: list[str]) -> list[RSVPRecordDTO]:
        """RSVP rows linked to any of the guest ids, plus-one rows included."""
        raise NotImplementedError


class AirtableGuestReadModel(GuestReadModel):
    """Airtable implementation of the guest directory reads."""

    def __init__(self, client: AirtableClient | None = None):
        self._client = client or AirtableClient()

    async def find_guest(self, first_name: str, last_name: str) -> GuestDTO | None:
        formula = name_match_formula(
            GuestFields.FIRST_NAME.value,
            GuestFields.LAST_NAME.value,
            first_name,
            last_name,
        )
        records = await self._client.list_records(TableNames.GUESTS.value, formula)
        if not records:
            return None
        record = records[0]
        return GuestDTO.from_fields(record["id"], record.get("fields", {}))

    async def get_party_members(self, party_name: str) -> list[GuestDTO]:
        formula = equals_formula(GuestFields.PARTY_NAME.value, party_name)
        records = await self._client.list_records(TableNames.GUESTS.value, formula)
        return [GuestDTO.from_fields(record["id"], record.get("fields", {})) for record in records]


class AirtableRSVPReadModel(RSVPReadModel):
    def __init__(self, client: AirtableClient | None = None):
        self._client = client or AirtableClient()

    async def get_records_for_guests(self, guest_ids: list[str]) -> list[RSVPRecordDTO]:
        if not guest_ids:
            return []
        formula = linked_to_any_formula(
            [RSVPFields.GUEST.value, RSVPFields.PLUS_ONE_OF.value], guest_ids
        )
        records = await self._client.list_records(TableNames.RSVPS.value, formula)
        return [RSVPRecordDTO.from_fields(record.get("id"), record.get("fields", {})) for record in records]
