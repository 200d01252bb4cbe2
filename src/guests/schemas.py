"""Wire models shared by the RSVP endpoints and the form client. JSON keys are camelCase."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.guests.dtos import (
    AttendingGuestDTO,
    DEFAULT_SUBMITTED_BY,
    Event,
    ExistingRSVPDTO,
    GuestDTO,
    NotAttendingGuestDTO,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GuestSchema(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str | None = None
    party_name: str = ""
    plus_one_allowed: bool = False
    has_responded: bool = False
    is_adult: bool = True

    @classmethod
    def from_dto(cls, guest: GuestDTO) -> "GuestSchema":
        return cls(
            id=guest.id,
            first_name=guest.first_name,
            last_name=guest.last_name,
            email=guest.email,
            party_name=guest.party_name,
            plus_one_allowed=guest.plus_one_allowed,
            has_responded=guest.has_responded,
            is_adult=guest.is_adult,
        )

    def to_dto(self) -> GuestDTO:
        return GuestDTO(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            party_name=self.party_name or "",
            plus_one_allowed=self.plus_one_allowed,
            has_responded=self.has_responded,
            is_adult=self.is_adult,
        )


class AttendingGuestSchema(CamelModel):
    name: str
    events: list[Event] = []
    dietary: str = ""
    is_plus_one: bool = False


class NotAttendingGuestSchema(CamelModel):
    name: str
    is_plus_one: bool = False


class ExistingRSVPSchema(CamelModel):
    attending: bool
    guests: list[AttendingGuestSchema] = []
    not_attending_guests: list[NotAttendingGuestSchema] = []
    submitted_by: str = DEFAULT_SUBMITTED_BY
    message: str = ""

    @classmethod
    def from_dto(cls, rsvp: ExistingRSVPDTO) -> "ExistingRSVPSchema":
        return cls(
            attending=rsvp.attending,
            guests=[
                AttendingGuestSchema(
                    name=guest.name,
                    events=guest.events,
                    dietary=guest.dietary,
                    is_plus_one=guest.is_plus_one,
                )
                for guest in rsvp.guests
            ],
            not_attending_guests=[
                NotAttendingGuestSchema(name=guest.name, is_plus_one=guest.is_plus_one)
                for guest in rsvp.not_attending_guests
            ],
            submitted_by=rsvp.submitted_by,
            message=rsvp.message,
        )

    def to_dto(self) -> ExistingRSVPDTO:
        return ExistingRSVPDTO(
            attending=self.attending,
            guests=[
                AttendingGuestDTO(
                    name=guest.name,
                    events=list(guest.events),
                    dietary=guest.dietary,
                    is_plus_one=guest.is_plus_one,
                )
                for guest in self.guests
            ],
            not_attending_guests=[
                NotAttendingGuestDTO(name=guest.name, is_plus_one=guest.is_plus_one)
                for guest in self.not_attending_guests
            ],
            submitted_by=self.submitted_by,
            message=self.message,
        )


class ErrorResponse(BaseModel):
    error: str
