import logging
from supabase import Client
from app.modules.auth.schemas import UserSession
from app.modules.invitations.schemas import (
    InvitationCreate, InvitationResponse, InvitationRespondResult
)
from app.modules.activities.service import ActivityService
from app.modules.groups.service import GroupService
from app.modules.users.service import UserService
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class InvitationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.groups = GroupService(supabase)
        self.users = UserService(supabase)
        self.activities = ActivityService(supabase)

    def send_invitation(self, session: UserSession, invitation_data: InvitationCreate) -> InvitationResponse:
        """Invite a registered user to the caller's group, or to one of the group's activities. Admins only."""
        admin = self.groups.require_admin(
            session.user_id, "You must be an admin to send invitations to other users"
        )

        invitee = self.users.get_user_by_email(invitation_data.invitee_email)
        if invitee is None:
            raise HTTPException(status_code=404, detail="User not found")

        activity_id = invitation_data.activity_id
        if activity_id is not None:
            activity = self.activities.get_activity(activity_id)
            if activity is None or not self._in_group(activity.activity_owner_id, admin.user_group_id):
                raise HTTPException(status_code=404, detail="Activity not found")
        else:
            if self._in_group(invitee.user_id, admin.user_group_id):
                raise HTTPException(status_code=409, detail="User is already in this group")

        existing = self._find_pending(invitee.user_id, admin.user_group_id, activity_id)
        if existing:
            return existing

        try:
            result = self.supabase.table("invitations").insert({
                "user_id": invitee.user_id,
                "user_group_id": admin.user_group_id,
                "activity_id": activity_id,
                "accept": False,
                "decline": False
            }).execute()
        except Exception as e:
            logger.error(f"Error sending invitation to {invitee.user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to send invitation")

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to send invitation")

        logger.info(f"Admin {session.user_id} invited {invitee.user_id} to group {admin.user_group_id}")
        return InvitationResponse(**result.data[0])

    def list_pending(self, user_id: str) -> List[InvitationResponse]:
        """Invitations the user has neither accepted nor declined"""
        try:
            result = self.supabase.table("invitations")\
                .select("*")\
                .eq("user_id", user_id)\
                .eq("accept", False)\
                .eq("decline", False)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching invitations for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch invitations")

        return [InvitationResponse(**inv) for inv in result.data or []]

    def respond_to_invitation(self, session: UserSession, invitation_id: str, accept: bool) -> InvitationRespondResult:
        """Accept or decline one of the caller's pending invitations"""
        invitation = self._get_for_user(invitation_id, session.user_id)
        if invitation is None:
            raise HTTPException(status_code=404, detail="Invitation not found")
        if not invitation.is_pending:
            raise HTTPException(status_code=409, detail="Invitation already answered")

        membership = None
        if accept and invitation.activity_id is None:
            # Join before answering so a failed join leaves the invitation pending
            if not invitation.user_group_id:
                raise HTTPException(status_code=404, detail="Group not found")
            membership = self.groups.join_group(session, invitation.user_group_id)

        try:
            result = self.supabase.table("invitations")\
                .update({"accept": accept, "decline": not accept})\
                .eq("invitation_id", invitation_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error responding to invitation {invitation_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to respond to invitation")

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to respond to invitation")

        activity = None
        if accept and invitation.activity_id is not None:
            activity = self.activities.get_activity(invitation.activity_id)

        logger.info(f"User {session.user_id} {'accepted' if accept else 'declined'} invitation {invitation_id}")
        return InvitationRespondResult(
            invitation=InvitationResponse(**result.data[0]),
            activity=activity,
            membership=membership
        )

    def _in_group(self, user_id: str, group_id: str) -> bool:
        membership = self.groups.get_membership(user_id)
        return membership is not None and membership.user_group_id == group_id

    def _get_for_user(self, invitation_id: str, user_id: str) -> Optional[InvitationResponse]:
        try:
            result = self.supabase.table("invitations")\
                .select("*")\
                .eq("invitation_id", invitation_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching invitation {invitation_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch invitation")

        if not result.data:
            return None
        return InvitationResponse(**result.data[0])

    def _find_pending(self, user_id: str, group_id: str, activity_id: Optional[str]) -> Optional[InvitationResponse]:
        try:
            result = self.supabase.table("invitations")\
                .select("*")\
                .eq("user_id", user_id)\
                .eq("user_group_id", group_id)\
                .eq("accept", False)\
                .eq("decline", False)\
                .execute()
        except Exception as e:
            logger.error(f"Error checking invitations for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to send invitation")

        for inv in result.data or []:
            if inv.get("activity_id") == activity_id:
                return InvitationResponse(**inv)
        return None
