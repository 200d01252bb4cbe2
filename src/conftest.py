from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient

from src.guests.features.lookup_guest.router import get_guest_lookup_service
from src.guests.features.lookup_guest.service import GuestDirectory, GuestLookupService
from src.guests.features.resolve_rsvp.resolver import RSVPStateResolver
from src.guests.features.submit_rsvp.builder import RSVPSubmissionBuilder
from src.guests.features.submit_rsvp.router import get_submission_builder
from src.guests.repository.in_memory import InMemoryGuestStore, demo_store
from src.main import app


def _store_overrides(store) -> dict:
    """Dependency overrides that serve both RSVP endpoints from `store`."""
    return {
        get_guest_lookup_service: lambda: GuestLookupService(
            directory=GuestDirectory(store),
            resolver=RSVPStateResolver(store),
        ),
        get_submission_builder: lambda: RSVPSubmissionBuilder(store),
    }


@pytest.fixture
def store_overrides():
    return _store_overrides


@pytest.fixture
def store() -> InMemoryGuestStore:
    """A fresh copy of the demo guest list, without simulated latency."""
    return demo_store(latency=0)


@pytest.fixture
def client_factory():
    """Build an AsyncClient against the app with the given dependency overrides."""

    @asynccontextmanager
    async def factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest.fixture
async def client(client_factory, store):
    """Client whose RSVP endpoints are backed by the in-memory demo store."""
    async with client_factory(_store_overrides(store)) as ac:
        yield ac
