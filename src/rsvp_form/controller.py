"""Step sequencer for the multi-step RSVP form.

start -> details -> review -> submitted, with side exits to not_found and
locked from the start step and to declined from the details step.
"""

import logging

from src.calendar_export.ics import google_calendar_url
from src.guests.dtos import (
    AttendingGuestDTO,
    Event,
    ExistingRSVPDTO,
    GuestDraftDTO,
    GuestNotFoundError,
    LookupFailedError,
    NotAttendingGuestDTO,
    PlusOneDraftDTO,
    SubmitFailedError,
    ValidationFailedError,
)
from src.guests.features.submit_rsvp.builder import DraftOutcome, named_plus_one, validate_draft
from src.rsvp_form.client import RSVPApiClient
from src.rsvp_form.state import FormState, FormStep, InvalidStepError

logger = logging.getLogger(__name__)

MISSING_NAME_MESSAGE = "Please enter both your first and last name"
NOT_FOUND_MESSAGE = "We couldn't find your invitation. Please check the spelling or contact us."
LOOKUP_FAILED_MESSAGE = "Something went wrong. Please try again or contact us."
SUBMIT_FAILED_MESSAGE = (
    "There was an error submitting your RSVP. Please try again or contact us directly."
)


class RSVPFormController:
    def __init__(self, api: RSVPApiClient):
        self._api = api
        self.state = FormState()

    def _require(self, action: str, *steps: FormStep) -> None:
        if self.state.step not in steps:
            raise InvalidStepError(action, self.state.step)

    def start(self) -> FormState:
        """Begin a fresh session, dropping anything collected so far."""
        self.state = FormState()
        return self.state

    async def find_invitation(self, first_name: str, last_name: str) -> FormState:
        self._require("find an invitation", FormStep.START, FormStep.NOT_FOUND)
        first_name = first_name.strip()
        last_name = last_name.strip()
        self.state.error = ""

        if not first_name or not last_name:
            self.state.step = FormStep.START
            self.state.error = MISSING_NAME_MESSAGE
            return self.state

        try:
            result = await self._api.lookup_guest(first_name, last_name)
        except GuestNotFoundError:
            self.state.step = FormStep.NOT_FOUND
            self.state.error = NOT_FOUND_MESSAGE
            return self.state
        except LookupFailedError:
            self.state.step = FormStep.START
            self.state.error = LOOKUP_FAILED_MESSAGE
            return self.state

        party = result.party
        self.state.leader = party.leader
        self.state.members = list(party.members)
        self.state.has_plus_one = party.has_plus_one
        self.state.existing_rsvp = result.existing_rsvp
        # Drafts from a previously looked up party never carry over
        self.state.guests = []
        self.state.plus_one = None
        self.state.message = ""

        if result.existing_rsvp is not None:
            self.state.step = FormStep.LOCKED
            return self.state

        # Everyone starts as attending every event; guests opt out on the details step
        self.state.guests = [
            GuestDraftDTO(
                id=member.id,
                first_name=member.first_name,
                last_name=member.last_name,
                is_adult=member.is_adult,
                events=list(Event),
            )
            for member in party.members
        ]
        self.state.plus_one = PlusOneDraftDTO(events=list(Event)) if self.state.offers_plus_one else None
        self.state.step = FormStep.DETAILS
        return self.state

    def update_guest(
        self,
        guest_id: str,
        not_attending: bool | None = None,
        events: list[Event] | None = None,
        dietary: str | None = None,
    ) -> GuestDraftDTO:
        self._require("edit a guest", FormStep.DETAILS)
        guest = self.state.guest_draft(guest_id)
        if not_attending is not None:
            guest.not_attending = not_attending
        if events is not None:
            guest.events = [Event(event) for event in events]
        if dietary is not None:
            guest.dietary = dietary
        return guest

    def set_plus_one(
        self, name: str, events: list[Event] | None = None, dietary: str | None = None
    ) -> PlusOneDraftDTO:
        self._require("edit the plus-one", FormStep.DETAILS)
        if not self.state.offers_plus_one:
            raise InvalidStepError("add a plus-one for this party", self.state.step)
        plus_one = self.state.plus_one or PlusOneDraftDTO()
        plus_one.name = name
        if events is not None:
            plus_one.events = [Event(event) for event in events]
        if dietary is not None:
            plus_one.dietary = dietary
        self.state.plus_one = plus_one
        return plus_one

    def set_message(self, message: str) -> None:
        self._require("edit the message", FormStep.DETAILS)
        self.state.message = message

    async def submit_details(self) -> FormState:
        """
        Validate the details step.

        Moves to review, stays put with the failing rule in `error`, or goes
        straight to declined when nobody is coming.
        """
        self._require("submit the details", FormStep.DETAILS)
        self.state.error = ""
        try:
            outcome = validate_draft(self.state.guests, self.state.plus_one)
        except ValidationFailedError as e:
            self.state.error = e.message
            return self.state

        if outcome == DraftOutcome.DECLINE:
            await self._submit_decline()
            return self.state

        self.state.step = FormStep.REVIEW
        return self.state

    async def _submit_decline(self) -> None:
        try:
            await self._api.submit_rsvp(
                leader=self.state.leader,
                members=self.state.members,
                attending=False,
                guests=[],
                plus_one=None,
                message=self.state.message,
            )
        except SubmitFailedError as e:
            # The guest still sees the decline confirmation
            logger.warning(f"Error submitting decline: {e}")
        self.state.step = FormStep.DECLINED

    def back(self) -> FormState:
        if self.state.step == FormStep.REVIEW:
            self.state.step = FormStep.DETAILS
        elif self.state.step in (FormStep.DETAILS, FormStep.NOT_FOUND):
            self.state.step = FormStep.START
        else:
            raise InvalidStepError("go back", self.state.step)
        self.state.error = ""
        return self.state

    async def submit(self) -> FormState:
        self._require("submit the RSVP", FormStep.REVIEW)
        if self.state.submitting:
            return self.state

        self.state.submitting = True
        self.state.error = ""
        try:
            await self._api.submit_rsvp(
                leader=self.state.leader,
                members=self.state.members,
                attending=True,
                guests=self.state.guests,
                plus_one=self.state.plus_one if self.state.offers_plus_one else None,
                message=self.state.message,
            )
        except SubmitFailedError as e:
            logger.error(f"Error submitting RSVP: {e}")
            self.state.error = SUBMIT_FAILED_MESSAGE
            return self.state
        finally:
            self.state.submitting = False

        self.state.step = FormStep.SUBMITTED
        return self.state

    def review_summary(self) -> ExistingRSVPDTO:
        """What the party is about to send, in the same shape as a stored response."""
        self._require("review", FormStep.REVIEW, FormStep.SUBMITTED)
        attending = [
            AttendingGuestDTO(name=guest.full_name, events=list(guest.events), dietary=guest.dietary)
            for guest in self.state.guests
            if not guest.not_attending
        ]
        plus_one = named_plus_one(self.state.plus_one) if self.state.offers_plus_one else None
        if plus_one is not None:
            attending.append(
                AttendingGuestDTO(
                    name=plus_one.name.strip(),
                    events=list(plus_one.events),
                    dietary=plus_one.dietary,
                    is_plus_one=True,
                )
            )
        return ExistingRSVPDTO(
            attending=bool(attending),
            guests=attending,
            not_attending_guests=[
                NotAttendingGuestDTO(name=guest.full_name)
                for guest in self.state.guests
                if guest.not_attending
            ],
            submitted_by=self.state.leader.full_name,
            message=self.state.message,
        )

    @property
    def calendar_link(self) -> str | None:
        """Offered once the party is known to be coming."""
        if self.state.step == FormStep.SUBMITTED:
            return google_calendar_url()
        if self.state.step == FormStep.LOCKED and self.state.existing_rsvp.attending:
            return google_calendar_url()
        return None
