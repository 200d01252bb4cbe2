import logging

from src.guests.dtos import (
    GuestNotFoundError,
    LookupFailedError,
    LookupResultDTO,
    PartyDTO,
    StoreError,
)
from src.guests.features.resolve_rsvp.resolver import RSVPStateResolver
from src.guests.repository.read_models import GuestReadModel

logger = logging.getLogger(__name__)


class GuestDirectory:
    """Resolves a name to the guest and the whole party they answer for."""

    def __init__(self, read_model: GuestReadModel):
        self._read_model = read_model

    async def find(self, first_name: str, last_name: str) -> PartyDTO:
        """
        Find the guest by name and pull in every co-member of their party.

        Plus-ones are only offered to solo guests, never to members of a named party,
        whatever their Plus One Allowed flag says.
        """
        first_name = first_name.strip()
        last_name = last_name.strip()
        try:
            guest = await self._read_model.find_guest(first_name, last_name)
            if guest is None:
                raise GuestNotFoundError()

            members = [guest]
            if guest.party_name:
                members = await self._read_model.get_party_members(guest.party_name)
                if not any(member.id == guest.id for member in members):
                    members.insert(0, guest)
        except StoreError as e:
            logger.error(f"Guest lookup failed: {e}")
            raise LookupFailedError("Failed to look up guest") from e

        return PartyDTO(
            leader=guest,
            members=members,
            has_plus_one=guest.plus_one_allowed and not guest.party_name,
        )


class GuestLookupService:
    """Directory lookup plus the locked summary when the party already answered."""

    def __init__(self, directory: GuestDirectory, resolver: RSVPStateResolver):
        self._directory = directory
        self._resolver = resolver

    async def lookup(self, first_name: str, last_name: str) -> LookupResultDTO:
        party = await self._directory.find(first_name, last_name)
        existing_rsvp = None
        if party.has_responded:
            existing_rsvp = await self._resolver.resolve(party.members)
        return LookupResultDTO(party=party, existing_rsvp=existing_rsvp)
