from functools import lru_cache

from src.config.settings import settings
from src.guests.repository.in_memory import InMemoryGuestStore, demo_store
from src.guests.repository.read_models import (
    AirtableGuestReadModel,
    AirtableRSVPReadModel,
    GuestReadModel,
    RSVPReadModel,
)
from src.guests.repository.write_models import AirtableRSVPWriteModel, RSVPWriteModel


@lru_cache
def get_demo_store() -> InMemoryGuestStore:
    """One shared fixture store per process, so demo submissions lock the party."""
    return demo_store(latency=settings.demo_latency_seconds)


def get_guest_read_model() -> GuestReadModel:
    if settings.demo_mode:
        return get_demo_store()
    return AirtableGuestReadModel()


def get_rsvp_read_model() -> RSVPReadModel:
    if settings.demo_mode:
        return get_demo_store()
    return AirtableRSVPReadModel()


def get_rsvp_write_model() -> RSVPWriteModel:
    if settings.demo_mode:
        return get_demo_store()
    return AirtableRSVPWriteModel()


__all__ = [
    "GuestReadModel",
    "RSVPReadModel",
    "RSVPWriteModel",
    "InMemoryGuestStore",
    "get_demo_store",
    "get_guest_read_model",
    "get_rsvp_read_model",
    "get_rsvp_write_model",
]
