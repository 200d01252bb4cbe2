from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.config.table_names import GuestFields, RSVPFields

DEFAULT_SUBMITTED_BY = "a party member"


class StoreError(Exception):
    """Raised when the backing table store is unreachable or answers with garbage."""


class GuestNotFoundError(Exception):
    """Raised when no guest matches the given first and last name."""


class LookupFailedError(Exception):
    """Raised when a guest lookup cannot be completed."""


class SubmitFailedError(Exception):
    """Raised when an RSVP submission cannot be persisted."""


class ValidationFailedError(Exception):
    """Raised when an RSVP draft breaks one of the form rules."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class Event(str, Enum):
    WELCOME = "welcome"
    BEACH = "beach"
    WEDDING = "wedding"

    @property
    def field(self) -> RSVPFields:
        return EVENT_FIELDS[self]

    @property
    def label(self) -> str:
        return EVENT_FIELDS[self].value


EVENT_FIELDS: dict[Event, RSVPFields] = {
    Event.WELCOME: RSVPFields.WELCOME_PARTY,
    Event.BEACH: RSVPFields.BEACH_PARTY,
    Event.WEDDING: RSVPFields.WEDDING,
}


@dataclass(frozen=True)
class GuestDTO:
    """A row of the Guests table."""

    id: str
    first_name: str
    last_name: str
    email: str | None = None
    party_name: str = ""
    plus_one_allowed: bool = False
    has_responded: bool = False
    is_adult: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_fields(cls, record_id: str, fields: dict[str, Any]) -> "GuestDTO":
        return cls(
            id=record_id,
            first_name=fields.get(GuestFields.FIRST_NAME.value, ""),
            last_name=fields.get(GuestFields.LAST_NAME.value, ""),
            email=fields.get(GuestFields.EMAIL.value),
            party_name=fields.get(GuestFields.PARTY_NAME.value) or "",
            plus_one_allowed=bool(fields.get(GuestFields.PLUS_ONE_ALLOWED.value, False)),
            has_responded=bool(fields.get(GuestFields.HAS_RESPONDED.value, False)),
            is_adult=fields.get(GuestFields.ADULT_KID.value) != "Kid",
        )


@dataclass(frozen=True)
class PartyDTO:
    """Result of a directory lookup: who logged in and everyone they answer for."""

    leader: GuestDTO
    members: list[GuestDTO]
    has_plus_one: bool

    @property
    def has_responded(self) -> bool:
        return any(member.has_responded for member in self.members)


@dataclass(frozen=True)
class AttendingGuestDTO:
    name: str
    events: list[Event] = field(default_factory=list)
    dietary: str = ""
    is_plus_one: bool = False


@dataclass(frozen=True)
class NotAttendingGuestDTO:
    name: str
    is_plus_one: bool = False


@dataclass(frozen=True)
class ExistingRSVPDTO:
    """Read-only summary of a party's stored response."""

    attending: bool
    guests: list[AttendingGuestDTO] = field(default_factory=list)
    not_attending_guests: list[NotAttendingGuestDTO] = field(default_factory=list)
    submitted_by: str = DEFAULT_SUBMITTED_BY
    message: str = ""


@dataclass(frozen=True)
class LookupResultDTO:
    party: PartyDTO
    existing_rsvp: ExistingRSVPDTO | None = None


@dataclass
class GuestDraftDTO:
    """One party member's answers as collected on the details step."""

    id: str
    first_name: str
    last_name: str
    is_adult: bool = True
    not_attending: bool = False
    events: list[Event] = field(default_factory=list)
    dietary: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class PlusOneDraftDTO:
    name: str = ""
    events: list[Event] = field(default_factory=list)
    dietary: str = ""


@dataclass(frozen=True)
class RSVPRecordDTO:
    """
    One row of the RSVPs table.

    Optional fields left as None are omitted from the stored row.
    """

    guest_name: str
    attending: bool
    guest_id: str | None = None
    welcome_party: bool | None = None
    beach_party: bool | None = None
    wedding: bool | None = None
    dietary: str | None = None
    is_adult: bool | None = None
    is_plus_one: bool | None = None
    plus_one_of: str | None = None
    submitted_by: str | None = None
    message: str | None = None
    id: str | None = None

    @property
    def events(self) -> list[Event]:
        flags = {
            Event.WELCOME: self.welcome_party,
            Event.BEACH: self.beach_party,
            Event.WEDDING: self.wedding,
        }
        return [event for event, selected in flags.items() if selected]

    def linked_guest_ids(self) -> set[str]:
        return {guest_id for guest_id in (self.guest_id, self.plus_one_of) if guest_id}

    def to_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {
            RSVPFields.GUEST_NAME.value: self.guest_name,
            RSVPFields.ATTENDING.value: self.attending,
        }
        optional: dict[RSVPFields, Any] = {
            RSVPFields.GUEST: [self.guest_id] if self.guest_id else None,
            RSVPFields.WELCOME_PARTY: self.welcome_party,
            RSVPFields.BEACH_PARTY: self.beach_party,
            RSVPFields.WEDDING: self.wedding,
            RSVPFields.DIETARY: self.dietary or None,
            RSVPFields.IS_ADULT: self.is_adult,
            RSVPFields.IS_PLUS_ONE: self.is_plus_one,
            RSVPFields.PLUS_ONE_OF: [self.plus_one_of] if self.plus_one_of else None,
            RSVPFields.SUBMITTED_BY: self.submitted_by or None,
            RSVPFields.MESSAGE: self.message or None,
        }
        for key, value in optional.items():
            if value is not None:
                fields[key.value] = value
        return fields

    @classmethod
    def from_fields(cls, record_id: str | None, fields: dict[str, Any]) -> "RSVPRecordDTO":
        guest_links = fields.get(RSVPFields.GUEST.value) or []
        plus_one_links = fields.get(RSVPFields.PLUS_ONE_OF.value) or []
        return cls(
            id=record_id,
            guest_name=fields.get(RSVPFields.GUEST_NAME.value, ""),
            # Airtable omits unchecked checkboxes from the payload
            attending=bool(fields.get(RSVPFields.ATTENDING.value, False)),
            guest_id=guest_links[0] if guest_links else None,
            welcome_party=fields.get(RSVPFields.WELCOME_PARTY.value),
            beach_party=fields.get(RSVPFields.BEACH_PARTY.value),
            wedding=fields.get(RSVPFields.WEDDING.value),
            dietary=fields.get(RSVPFields.DIETARY.value),
            is_adult=fields.get(RSVPFields.IS_ADULT.value),
            is_plus_one=fields.get(RSVPFields.IS_PLUS_ONE.value),
            plus_one_of=plus_one_links[0] if plus_one_links else None,
            submitted_by=fields.get(RSVPFields.SUBMITTED_BY.value),
            message=fields.get(RSVPFields.MESSAGE.value),
        )
