from fastapi import APIRouter, Depends, HTTPException
from app.modules.auth.schemas import UserSession
from app.modules.auth.service import AuthService
from app.modules.calendar.schemas import CalendarEventRequest, CalendarEventResult
from app.modules.calendar.service import CalendarService
from app.core.dependencies import get_auth_service, get_current_session

router = APIRouter(prefix="/calendar", tags=["calendar"])


def get_calendar_service() -> CalendarService:
    return CalendarService()


@router.post("/events", response_model=CalendarEventResult, status_code=201)
async def create_event(
    event: CalendarEventRequest,
    session: UserSession = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service),
    service: CalendarService = Depends(get_calendar_service)
):
    """Push an event to the caller's Google calendar"""
    provider_token = session.provider_token or auth_service.refresh_provider_token(session.refresh_token)
    if not provider_token:
        raise HTTPException(status_code=401, detail="Calendar access is not available; sign in again")
    return service.export_event(provider_token, event)
