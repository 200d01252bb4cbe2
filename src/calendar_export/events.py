from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

WEDDING_TIMEZONE = ZoneInfo("Europe/Paris")


@dataclass(frozen=True)
class WeddingEvent:
    uid: str
    title: str
    start: datetime
    end: datetime
    description: str
    location: str


WELCOME_PARTY = WeddingEvent(
    uid="wedding-event-0@sophieandzahi.com",
    title="Sophie & Zahi's Wedding - Welcome Party",
    start=datetime(2026, 8, 30, 18, 0, tzinfo=WEDDING_TIMEZONE),
    end=datetime(2026, 8, 30, 23, 0, tzinfo=WEDDING_TIMEZONE),
    description="Welcome cocktails and dinner to kick off the wedding celebrations!",
    location="French Riviera",
)

BEACH_PARTY = WeddingEvent(
    uid="wedding-event-1@sophieandzahi.com",
    title="Sophie & Zahi's Wedding - Beach Party",
    start=datetime(2026, 8, 31, 12, 0, tzinfo=WEDDING_TIMEZONE),
    end=datetime(2026, 8, 31, 18, 0, tzinfo=WEDDING_TIMEZONE),
    description="Fun day at the beach with the wedding party!",
    location="French Riviera",
)

WEDDING = WeddingEvent(
    uid="wedding-event-2@sophieandzahi.com",
    title="Sophie & Zahi's Wedding",
    start=datetime(2026, 9, 1, 15, 0, tzinfo=WEDDING_TIMEZONE),
    end=datetime(2026, 9, 2, 1, 0, tzinfo=WEDDING_TIMEZONE),
    description=(
        "The wedding ceremony and reception of Sophie & Zahi. "
        "We can't wait to celebrate with you!"
    ),
    location="French Riviera",
)

WEDDING_EVENTS = [WELCOME_PARTY, BEACH_PARTY, WEDDING]

CALENDAR_FILENAME = "sophie-zahi-wedding.ics"
