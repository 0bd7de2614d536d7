from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import UserSession
from app.modules.activities.schemas import ActivityCreate, ActivityResponse, ActivityListResponse
from app.modules.activities.service import ActivityService
from app.core.dependencies import get_current_session
from supabase import Client

router = APIRouter(prefix="/activities", tags=["activities"])


def get_activity_service(supabase: Client = Depends(get_supabase)) -> ActivityService:
    return ActivityService(supabase)


@router.post("", response_model=ActivityResponse, status_code=201)
async def suggest_activity(
    activity_data: ActivityCreate,
    session: UserSession = Depends(get_current_session),
    service: ActivityService = Depends(get_activity_service)
):
    """Suggest an activity (requires group membership)"""
    return service.suggest_activity(session, activity_data)


@router.get("", response_model=ActivityListResponse)
async def list_activities(
    session: UserSession = Depends(get_current_session),
    service: ActivityService = Depends(get_activity_service)
):
    """Activities the caller suggested and activities they accepted"""
    return service.list_activities(session.user_id)
