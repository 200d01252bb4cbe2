from datetime import datetime, timezone
from urllib.parse import parse_qs, urlsplit

import pytest

from src.calendar_export.events import WEDDING_EVENTS
from src.calendar_export.ics import (
    escape_text,
    fold_line,
    format_utc,
    generate_ics_content,
    google_calendar_url,
)
from src.calendar_export.router import CALENDAR_ICS_URL, GOOGLE_CALENDAR_LINK_URL

NOW = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


def test_escape_text_escapes_ical_specials():
    assert escape_text("a\\b;c,d\ne") == "a\\\\b\\;c\\,d\\ne"


def test_fold_line_keeps_short_lines():
    assert fold_line("SUMMARY:short") == "SUMMARY:short"


def test_fold_line_splits_at_75_octets():
    folded = fold_line("DESCRIPTION:" + "x" * 200)

    parts = folded.split("\r\n")
    assert len(parts[0].encode("utf-8")) == 75
    assert all(part.startswith(" ") for part in parts[1:])
    assert all(len(part.encode("utf-8")) <= 75 for part in parts)
    assert "".join(part.removeprefix(" ") for part in parts) == "DESCRIPTION:" + "x" * 200


def test_wedding_times_convert_to_utc():
    # Paris is on CEST (UTC+2) at the end of August
    assert format_utc(WEDDING_EVENTS[0].start) == "20260830T160000Z"
    assert format_utc(WEDDING_EVENTS[2].end) == "20260901T230000Z"


def test_generate_ics_content_lists_every_event():
    content = generate_ics_content(now=NOW)

    assert content.startswith("BEGIN:VCALENDAR\r\nVERSION:2.0\r\n")
    assert content.endswith("END:VCALENDAR\r\n")
    assert content.count("BEGIN:VEVENT") == 3
    assert "DTSTAMP:20260115T093000Z" in content
    assert "UID:wedding-event-1@sophieandzahi.com" in content
    assert "SUMMARY:Sophie & Zahi's Wedding - Beach Party" in content
    assert "\n" not in content.replace("\r\n", "")


def test_google_calendar_url_uses_local_wedding_times():
    parts = urlsplit(google_calendar_url())
    params = parse_qs(parts.query)

    assert parts.netloc == "calendar.google.com"
    assert params["action"] == ["TEMPLATE"]
    assert params["text"] == ["Sophie & Zahi's Wedding"]
    assert params["dates"] == ["20260901T150000/20260902T010000"]
    assert params["ctz"] == ["Europe/Paris"]
    assert "Beach Party (Aug 31)" in params["details"][0]


@pytest.mark.asyncio
async def test_download_calendar_endpoint(client):
    response = await client.get(CALENDAR_ICS_URL)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/calendar")
    assert 'filename="sophie-zahi-wedding.ics"' in response.headers["content-disposition"]
    assert response.text.count("BEGIN:VEVENT") == 3


@pytest.mark.asyncio
async def test_google_calendar_link_endpoint(client):
    response = await client.get(GOOGLE_CALENDAR_LINK_URL)

    assert response.status_code == 200
    assert response.json() == {"url": google_calendar_url()}
