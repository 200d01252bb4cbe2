"""iCalendar file and Google Calendar link for the wedding weekend."""

from datetime import datetime, timezone
from urllib.parse import urlencode

from src.calendar_export.events import WEDDING, WEDDING_EVENTS, WEDDING_TIMEZONE, WeddingEvent

PRODID = "-//Sophie & Zahi Wedding//RSVP//EN"
GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"
MAX_LINE_OCTETS = 75


def format_utc(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def format_local(moment: datetime) -> str:
    return moment.astimezone(WEDDING_TIMEZONE).strftime("%Y%m%dT%H%M%S")


def escape_text(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def fold_line(line: str) -> str:
    """Split a content line into 75-octet chunks joined by CRLF + space."""
    chunks: list[str] = []
    current = ""
    limit = MAX_LINE_OCTETS
    for char in line:
        if len((current + char).encode("utf-8")) > limit:
            chunks.append(current)
            current = char
            # continuation lines lose one octet to the leading space
            limit = MAX_LINE_OCTETS - 1
        else:
            current += char
    chunks.append(current)
    return "\r\n ".join(chunks)


def _event_lines(event: WeddingEvent, dtstamp: str) -> list[str]:
    return [
        "BEGIN:VEVENT",
        f"UID:{event.uid}",
        f"DTSTAMP:{dtstamp}",
        f"DTSTART:{format_utc(event.start)}",
        f"DTEND:{format_utc(event.end)}",
        f"SUMMARY:{escape_text(event.title)}",
        f"DESCRIPTION:{escape_text(event.description)}",
        f"LOCATION:{escape_text(event.location)}",
        "END:VEVENT",
    ]


def generate_ics_content(now: datetime | None = None) -> str:
    dtstamp = format_utc(now or datetime.now(timezone.utc))
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    for event in WEDDING_EVENTS:
        lines.extend(_event_lines(event, dtstamp))
    lines.append("END:VCALENDAR")
    return "\r\n".join(fold_line(line) for line in lines) + "\r\n"


def google_calendar_url() -> str:
    """Template link for the main wedding day, in the venue's local time."""
    details = (
        f"{WEDDING.description}\n\n"
        "This event includes:\n"
        "• Welcome Party (Aug 30)\n"
        "• Beach Party (Aug 31)\n"
        "• Wedding Ceremony & Reception (Sep 1)"
    )
    params = {
        "action": "TEMPLATE",
        "text": WEDDING.title,
        "dates": f"{format_local(WEDDING.start)}/{format_local(WEDDING.end)}",
        "details": details,
        "location": WEDDING.location,
        "ctz": "Europe/Paris",
    }
    return f"{GOOGLE_CALENDAR_URL}?{urlencode(params)}"
