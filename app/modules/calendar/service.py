"""Google Calendar export: payload building and the authenticated POST."""
import logging
import httpx
from datetime import datetime, timezone
from zoneinfo import ZoneInfo
from app.config.settings import settings
from app.modules.calendar.schemas import CalendarEventRequest, CalendarEventResult
from typing import Dict, Any, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def format_event_time(value: datetime, time_zone: str) -> str:
    """ISO-8601 in UTC with a Z suffix. Naive values are read in `time_zone`."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=ZoneInfo(time_zone))
    value = value.astimezone(timezone.utc)
    timespec = "milliseconds" if value.microsecond else "seconds"
    return value.isoformat(timespec=timespec).replace("+00:00", "Z")


def build_event_payload(
    name: str,
    description: Optional[str],
    start: datetime,
    end: datetime,
    time_zone: Optional[str] = None,
) -> Dict[str, Any]:
    time_zone = time_zone or settings.default_time_zone
    return {
        "summary": name,
        "description": description or "",
        "start": {
            "dateTime": format_event_time(start, time_zone),
            "timeZone": time_zone
        },
        "end": {
            "dateTime": format_event_time(end, time_zone),
            "timeZone": time_zone
        },
    }


class CalendarService:
    def __init__(self, http_client: Optional[httpx.Client] = None):
        self.http_client = http_client

    @property
    def events_url(self) -> str:
        return f"{settings.calendar_api_base_url.rstrip('/')}/calendars/primary/events"

    def export_event(self, access_token: str, event: CalendarEventRequest) -> CalendarEventResult:
        """Create the event in the user's primary Google calendar. No retry."""
        payload = build_event_payload(
            event.name, event.description, event.start, event.end, event.time_zone
        )
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json"
        }
        try:
            if self.http_client is not None:
                response = self.http_client.post(self.events_url, headers=headers, json=payload)
            else:
                with httpx.Client(timeout=settings.calendar_timeout_seconds) as client:
                    response = client.post(self.events_url, headers=headers, json=payload)
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error creating event: {e}")
            raise HTTPException(status_code=502, detail="Error creating event")

        error = data.get("error") if isinstance(data, dict) else None
        if error or not response.is_success:
            message = error.get("message") if isinstance(error, dict) else error
            logger.error(f"Calendar API rejected event (status {response.status_code}): {message}")
            raise HTTPException(
                status_code=502,
                detail=f"Error creating event: {message or response.reason_phrase}"
            )

        logger.info(f"Created calendar event {data.get('id')}")
        return CalendarEventResult(event_id=data.get("id"), html_link=data.get("htmlLink"))
