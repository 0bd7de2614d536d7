from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import datetime


class ActivityCreate(BaseModel):
    name: str
    activity_link: Optional[str] = None
    activity_date: datetime
    activity_location: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_present(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be empty")
        return value


class ActivityResponse(BaseModel):
    activity_id: str
    activity_owner_id: str
    name: str
    activity_link: Optional[str] = None
    activity_date: datetime
    activity_location: Optional[str] = None

    class Config:
        from_attributes = True


class ActivityListResponse(BaseModel):
    suggested: List[ActivityResponse]
    accepted: List[ActivityResponse]
