from fastapi import APIRouter
from fastapi.responses import Response
from pydantic import BaseModel

from src.calendar_export.events import CALENDAR_FILENAME
from src.calendar_export.ics import generate_ics_content, google_calendar_url

router = APIRouter()

CALENDAR_ICS_URL = "/api/v1/calendar.ics"
GOOGLE_CALENDAR_LINK_URL = "/api/v1/calendar/google"


class GoogleCalendarLinkResponse(BaseModel):
    url: str


@router.get(CALENDAR_ICS_URL)
async def download_calendar() -> Response:
    """All wedding weekend events as a downloadable .ics file."""
    return Response(
        content=generate_ics_content(),
        media_type="text/calendar; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{CALENDAR_FILENAME}"'},
    )


@router.get(GOOGLE_CALENDAR_LINK_URL, response_model=GoogleCalendarLinkResponse)
async def google_calendar_link() -> GoogleCalendarLinkResponse:
    return GoogleCalendarLinkResponse(url=google_calendar_url())
