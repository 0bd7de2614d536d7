from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import UserSession
from app.modules.session.schemas import SessionStateResponse
from app.modules.session.service import SessionService
from app.core.dependencies import get_optional_session
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/session", tags=["session"])


def get_session_service(supabase: Client = Depends(get_supabase)) -> SessionService:
    return SessionService(supabase)


@router.post("/sync", response_model=SessionStateResponse)
async def sync_session(
    session: Optional[UserSession] = Depends(get_optional_session),
    service: SessionService = Depends(get_session_service)
):
    """Call on every auth state change: registers the user and returns the screen to show"""
    return service.sync(session)


@router.get("/state", response_model=SessionStateResponse)
async def session_state(
    session: Optional[UserSession] = Depends(get_optional_session),
    service: SessionService = Depends(get_session_service)
):
    """Current session state and screen"""
    return service.derive_state(session)
