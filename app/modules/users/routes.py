from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import UserSession
from app.modules.users.schemas import UserResponse
from app.modules.users.service import UserService
from app.core.dependencies import get_current_session
from supabase import Client

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


@router.get("/me", response_model=UserResponse)
async def get_me(
    session: UserSession = Depends(get_current_session),
    service: UserService = Depends(get_user_service)
):
    """Registry row of the current user (created by /session/sync)"""
    return service.get_user_by_id(session.user_id)
