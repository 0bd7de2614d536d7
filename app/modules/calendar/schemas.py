from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class CalendarEventRequest(BaseModel):
    name: str
    description: Optional[str] = ""
    start: datetime
    end: datetime
    time_zone: Optional[str] = None  # caller's IANA zone, e.g. "Europe/Berlin"

    @field_validator("name")
    @classmethod
    def name_present(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be empty")
        return value

    @field_validator("time_zone")
    @classmethod
    def known_time_zone(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {value}")
        return value


class CalendarEventResult(BaseModel):
    message: str = "Event created, check your Google calendar"
    event_id: Optional[str] = None
    html_link: Optional[str] = None
