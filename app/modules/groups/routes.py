from fastapi import APIRouter, Depends, HTTPException
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import UserSession
from app.modules.groups.schemas import (
    GroupCreate, GroupJoin, MembershipResponse, GroupDeleteResult
)
from app.modules.groups.service import GroupService
from app.core.dependencies import get_current_session
from supabase import Client

router = APIRouter(prefix="/groups", tags=["groups"])


def get_group_service(supabase: Client = Depends(get_supabase)) -> GroupService:
    return GroupService(supabase)


@router.post("", response_model=MembershipResponse, status_code=201)
async def create_group(
    group_data: GroupCreate,
    session: UserSession = Depends(get_current_session),
    service: GroupService = Depends(get_group_service)
):
    """Create a new group; the caller becomes its admin"""
    return service.create_group(session, group_data)


@router.post("/join", response_model=MembershipResponse)
async def join_group(
    join_data: GroupJoin,
    session: UserSession = Depends(get_current_session),
    service: GroupService = Depends(get_group_service)
):
    """Join an existing group by its group ID"""
    return service.join_group(session, join_data.group_id)


@router.get("/me", response_model=MembershipResponse)
async def get_my_group(
    session: UserSession = Depends(get_current_session),
    service: GroupService = Depends(get_group_service)
):
    """The caller's group membership"""
    membership = service.get_membership(session.user_id)
    if membership is None:
        raise HTTPException(status_code=404, detail="Not in a group")
    return membership


@router.delete("/me", response_model=GroupDeleteResult)
async def delete_group(
    session: UserSession = Depends(get_current_session),
    service: GroupService = Depends(get_group_service)
):
    """Delete the caller's group (admins only)"""
    return service.delete_group(session)
