from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import UserSession
from app.modules.invitations.schemas import (
    InvitationCreate, InvitationResponse, InvitationRespond, InvitationRespondResult
)
from app.modules.invitations.service import InvitationService
from app.core.dependencies import get_current_session
from supabase import Client
from typing import List

router = APIRouter(prefix="/invitations", tags=["invitations"])


def get_invitation_service(supabase: Client = Depends(get_supabase)) -> InvitationService:
    return InvitationService(supabase)


@router.post("", response_model=InvitationResponse, status_code=201)
async def send_invitation(
    invitation_data: InvitationCreate,
    session: UserSession = Depends(get_current_session),
    service: InvitationService = Depends(get_invitation_service)
):
    """Invite a user by email (group admins only)"""
    return service.send_invitation(session, invitation_data)


@router.get("/pending", response_model=List[InvitationResponse])
async def list_pending(
    session: UserSession = Depends(get_current_session),
    service: InvitationService = Depends(get_invitation_service)
):
    """Invitations waiting for the caller's answer"""
    return service.list_pending(session.user_id)


@router.post("/{invitation_id}/respond", response_model=InvitationRespondResult)
async def respond_to_invitation(
    invitation_id: str,
    answer: InvitationRespond,
    session: UserSession = Depends(get_current_session),
    service: InvitationService = Depends(get_invitation_service)
):
    """Accept or decline an invitation"""
    return service.respond_to_invitation(session, invitation_id, answer.accept)
