"""DTOs for the guest lookup feature."""

from src.guests.dtos import LookupResultDTO, PartyDTO
from src.guests.schemas import CamelModel, ExistingRSVPSchema, GuestSchema


class LookupGuestRequest(CamelModel):
    """Request body for finding an invitation. Both names are required."""

    first_name: str = ""
    last_name: str = ""


class LookupGuestResponse(CamelModel):
    leader: GuestSchema
    members: list[GuestSchema]
    has_plus_one: bool
    existing_rsvp: ExistingRSVPSchema | None = None

    @classmethod
    def from_dto(cls, result: LookupResultDTO) -> "LookupGuestResponse":
        return cls(
            leader=GuestSchema.from_dto(result.party.leader),
            members=[GuestSchema.from_dto(member) for member in result.party.members],
            has_plus_one=result.party.has_plus_one,
            existing_rsvp=(
                ExistingRSVPSchema.from_dto(result.existing_rsvp)
                if result.existing_rsvp is not None
                else None
            ),
        )

    def to_dto(self) -> LookupResultDTO:
        return LookupResultDTO(
            party=PartyDTO(
                leader=self.leader.to_dto(),
                members=[member.to_dto() for member in self.members],
                has_plus_one=self.has_plus_one,
            ),
            existing_rsvp=self.existing_rsvp.to_dto() if self.existing_rsvp else None,
        )
