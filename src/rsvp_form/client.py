"""Transports the form uses to reach the lookup and submit operations."""

import logging
from abc import ABC, abstractmethod
from urllib.parse import urlsplit

import httpx
from pydantic import ValidationError

from src.guests.dtos import (
    GuestDraftDTO,
    GuestDTO,
    GuestNotFoundError,
    LookupFailedError,
    LookupResultDTO,
    PlusOneDraftDTO,
    SubmitFailedError,
)
from src.guests.features.lookup_guest.dtos import LookupGuestRequest, LookupGuestResponse
from src.guests.features.lookup_guest.service import GuestDirectory, GuestLookupService
from src.guests.features.resolve_rsvp.resolver import RSVPStateResolver
from src.guests.features.submit_rsvp.builder import RSVPSubmissionBuilder
from src.guests.features.submit_rsvp.dtos import (
    GuestSubmit,
    PlusOneSubmit,
    SubmitRSVPRequest,
)
from src.guests.repository.in_memory import InMemoryGuestStore, demo_store
from src.guests.schemas import GuestSchema
from src.guests.urls import LOOKUP_GUEST_URL, SUBMIT_RSVP_URL

logger = logging.getLogger(__name__)

LOCAL_HOSTS = {"", "localhost", "127.0.0.1"}


class RSVPApiClient(ABC):
    @abstractmethod
    async def lookup_guest(self, first_name: str, last_name: str) -> LookupResultDTO:
        """
        Raises GuestNotFoundError when nobody matches and LookupFailedError
        when the lookup could not be completed.
        """
        raise NotImplementedError

    @abstractmethod
    async def submit_rsvp(
        self,
        leader: GuestDTO,
        members: list[GuestDTO],
        attending: bool,
        guests: list[GuestDraftDTO],
        plus_one: PlusOneDraftDTO | None,
        message: str,
    ) -> None:
        """Raises SubmitFailedError when the RSVP was not stored."""
        raise NotImplementedError


class HttpRSVPApiClient(RSVPApiClient):
    """Talks to the deployed lookup and submit endpoints."""

    def __init__(
        self,
        base_url: str,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
    ):
        self._base_url = base_url.rstrip("/")
        self._http_client_class = http_client_class

    async def _post(self, url: str, payload: dict) -> httpx.Response:
        async with self._http_client_class() as client:
            return await client.post(f"{self._base_url}{url}", json=payload)

    async def lookup_guest(self, first_name: str, last_name: str) -> LookupResultDTO:
        payload = LookupGuestRequest(first_name=first_name, last_name=last_name).model_dump(
            by_alias=True
        )
        try:
            response = await self._post(LOOKUP_GUEST_URL, payload)
        except httpx.HTTPError as e:
            logger.error(f"Lookup request failed: {e}")
            raise LookupFailedError("Failed to look up guest") from e

        if response.status_code == 404:
            raise GuestNotFoundError()
        if response.status_code >= 400:
            logger.error(f"Lookup error: {response.status_code} {response.text}")
            raise LookupFailedError("Failed to look up guest")

        try:
            return LookupGuestResponse.model_validate(response.json()).to_dto()
        except (ValueError, ValidationError) as e:
            logger.error(f"Lookup returned an unreadable response: {e}")
            raise LookupFailedError("Failed to look up guest") from e

    async def submit_rsvp(
        self,
        leader: GuestDTO,
        members: list[GuestDTO],
        attending: bool,
        guests: list[GuestDraftDTO],
        plus_one: PlusOneDraftDTO | None,
        message: str,
    ) -> None:
        request = SubmitRSVPRequest(
            leader=GuestSchema.from_dto(leader),
            members=[GuestSchema.from_dto(member) for member in members],
            attending=attending,
            guests=[GuestSubmit.from_dto(guest) for guest in guests],
            plus_one=PlusOneSubmit.from_dto(plus_one) if plus_one else None,
            message=message,
        )
        try:
            response = await self._post(
                SUBMIT_RSVP_URL, request.model_dump(by_alias=True, mode="json")
            )
        except httpx.HTTPError as e:
            logger.error(f"Submit request failed: {e}")
            raise SubmitFailedError("Failed to submit RSVP") from e

        if response.status_code >= 400:
            logger.error(f"Submit error: {response.status_code} {response.text}")
            raise SubmitFailedError("Failed to submit RSVP")


class DemoRSVPApiClient(RSVPApiClient):
    """Runs both operations against the in-memory fixture, with simulated latency."""

    def __init__(self, store: InMemoryGuestStore | None = None, latency: float = 1.0):
        self.store = store or demo_store(latency=latency)
        self._lookup_service = GuestLookupService(
            directory=GuestDirectory(self.store),
            resolver=RSVPStateResolver(self.store),
        )
        self._builder = RSVPSubmissionBuilder(self.store)

    async def lookup_guest(self, first_name: str, last_name: str) -> LookupResultDTO:
        return await self._lookup_service.lookup(first_name, last_name)

    async def submit_rsvp(
        self,
        leader: GuestDTO,
        members: list[GuestDTO],
        attending: bool,
        guests: list[GuestDraftDTO],
        plus_one: PlusOneDraftDTO | None,
        message: str,
    ) -> None:
        logger.info(f"Demo mode - RSVP from {leader.full_name} (attending={attending})")
        await self._builder.submit(leader, members, attending, guests, plus_one, message)


def is_demo_mode(base_url: str) -> bool:
    """A local or file URL means no deployed endpoints to talk to."""
    parts = urlsplit(base_url)
    return parts.scheme == "file" or (parts.hostname or "") in LOCAL_HOSTS


def get_rsvp_api_client(
    base_url: str, demo: bool | None = None, latency: float = 1.0
) -> RSVPApiClient:
    if demo is None:
        demo = is_demo_mode(base_url)
    if demo:
        return DemoRSVPApiClient(latency=latency)
    return HttpRSVPApiClient(base_url)
