"""DTOs for the RSVP submission feature."""

from src.guests.dtos import Event, GuestDraftDTO, PlusOneDraftDTO
from src.guests.schemas import CamelModel, GuestSchema


class GuestSubmit(CamelModel):
    """One party member's answers."""

    id: str
    first_name: str
    last_name: str
    is_adult: bool = True
    not_attending: bool = False
    events: list[Event] = []
    dietary: str | None = ""

    @classmethod
    def from_dto(cls, guest: GuestDraftDTO) -> "GuestSubmit":
        return cls(
            id=guest.id,
            first_name=guest.first_name,
            last_name=guest.last_name,
            is_adult=guest.is_adult,
            not_attending=guest.not_attending,
            events=guest.events,
            dietary=guest.dietary,
        )

    def to_dto(self) -> GuestDraftDTO:
        return GuestDraftDTO(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            is_adult=self.is_adult,
            not_attending=self.not_attending,
            events=list(self.events),
            dietary=self.dietary or "",
        )


class PlusOneSubmit(CamelModel):
    name: str = ""
    events: list[Event] = []
    dietary: str | None = ""

    @classmethod
    def from_dto(cls, plus_one: PlusOneDraftDTO) -> "PlusOneSubmit":
        return cls(name=plus_one.name, events=plus_one.events, dietary=plus_one.dietary)

    def to_dto(self) -> PlusOneDraftDTO:
        return PlusOneDraftDTO(name=self.name, events=list(self.events), dietary=self.dietary or "")


class SubmitRSVPRequest(CamelModel):
    leader: GuestSchema
    members: list[GuestSchema]
    attending: bool
    guests: list[GuestSubmit] = []
    plus_one: PlusOneSubmit | None = None
    message: str | None = ""


class SubmitRSVPResponse(CamelModel):
    success: bool
