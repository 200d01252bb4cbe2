from dataclasses import dataclass, field
from enum import Enum

from src.guests.dtos import (
    ExistingRSVPDTO,
    GuestDraftDTO,
    GuestDTO,
    PlusOneDraftDTO,
)


class FormStep(str, Enum):
    START = "start"
    NOT_FOUND = "not_found"
    LOCKED = "locked"
    DETAILS = "details"
    REVIEW = "review"
    SUBMITTED = "submitted"
    DECLINED = "declined"


class InvalidStepError(Exception):
    """Raised when a form action is not allowed on the current step."""

    def __init__(self, action: str, step: FormStep) -> None:
        self.action = action
        self.step = step
        super().__init__(f"Cannot {action} while on step '{step.value}'")


@dataclass
class FormState:
    """Everything one RSVP form session knows. Never persisted."""

    step: FormStep = FormStep.START
    leader: GuestDTO | None = None
    members: list[GuestDTO] = field(default_factory=list)
    has_plus_one: bool = False
    existing_rsvp: ExistingRSVPDTO | None = None
    guests: list[GuestDraftDTO] = field(default_factory=list)
    plus_one: PlusOneDraftDTO | None = None
    message: str = ""
    error: str = ""
    submitting: bool = False

    @property
    def offers_plus_one(self) -> bool:
        return self.has_plus_one and len(self.members) == 1

    def guest_draft(self, guest_id: str) -> GuestDraftDTO:
        for guest in self.guests:
            if guest.id == guest_id:
                return guest
        raise KeyError(guest_id)
