import logging
import uuid
from supabase import Client
from app.modules.auth.schemas import UserSession
from app.modules.groups.models import ROLE_ADMIN, ROLE_MEMBER
from app.modules.groups.schemas import GroupCreate, MembershipResponse, GroupDeleteResult
from typing import Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class GroupService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def check_membership(self, user_id: str) -> bool:
        """True if the user has any membership row. Store errors count as "not in a group"."""
        try:
            result = self.supabase.table("groups")\
                .select("user_group_id")\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error checking group membership for {user_id}: {e}")
            return False
        return bool(result.data)

    def get_membership(self, user_id: str) -> Optional[MembershipResponse]:
        """The user's membership row, or None"""
        try:
            result = self.supabase.table("groups")\
                .select("*")\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching group for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Error finding group")

        if not result.data:
            return None
        return MembershipResponse(**result.data[0])

    def require_admin(self, user_id: str, detail: str) -> MembershipResponse:
        """Membership row of an admin; 403 with `detail` otherwise"""
        membership = self.get_membership(user_id)
        if membership is None or membership.role != ROLE_ADMIN:
            raise HTTPException(status_code=403, detail=detail)
        return membership

    def get_group(self, group_id: str) -> Optional[MembershipResponse]:
        """Any membership row of the group; None if the group does not exist"""
        try:
            result = self.supabase.table("groups")\
                .select("*")\
                .eq("user_group_id", group_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error finding group {group_id}: {e}")
            raise HTTPException(status_code=500, detail="Error finding group")

        if not result.data:
            return None
        return MembershipResponse(**result.data[0])

    def create_group(self, session: UserSession, group_data: GroupCreate) -> MembershipResponse:
        """Create a new group with the caller as admin"""
        if self.get_membership(session.user_id):
            raise HTTPException(status_code=409, detail="Already in a group")

        row = {
            "user_id": session.user_id,
            "user_group_id": str(uuid.uuid4()),
            "group_name": group_data.group_name,
            "role": ROLE_ADMIN
        }
        try:
            result = self.supabase.table("groups").insert(row).execute()
        except Exception as e:
            logger.error(f"Error creating group for {session.user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to create group")

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create group")

        logger.info(f"User {session.user_id} created group {row['user_group_id']}")
        return MembershipResponse(**result.data[0])

    def join_group(self, session: UserSession, group_id: str) -> MembershipResponse:
        """Join an existing group as member. Joining a group twice returns the existing row."""
        group = self.get_group(group_id)
        if group is None:
            raise HTTPException(status_code=404, detail="Group not found")

        existing = self.get_membership(session.user_id)
        if existing:
            if existing.user_group_id == group_id:
                return existing
            raise HTTPException(status_code=409, detail="Already in a group")

        try:
            result = self.supabase.table("groups").insert({
                "user_id": session.user_id,
                "user_group_id": group_id,
                "group_name": group.group_name,
                "role": ROLE_MEMBER
            }).execute()
        except Exception as e:
            logger.error(f"Error joining group {group_id} for {session.user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to join group")

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to join group")

        logger.info(f"User {session.user_id} joined group {group_id}")
        return MembershipResponse(**result.data[0])

    def delete_group(self, session: UserSession) -> GroupDeleteResult:
        """Delete the caller's group (admin only).

        Cascade order: the admin's activities, the admin's invitations, invitations
        into the group, then every membership row of the group. Each step runs even
        if an earlier one failed and nothing is rolled back, so callers should
        re-query state on failure.
        """
        membership = self.get_membership(session.user_id)
        if membership is None:
            raise HTTPException(status_code=404, detail="Error finding group")
        if membership.role != ROLE_ADMIN:
            raise HTTPException(status_code=403, detail="Only admins can delete groups")

        steps = [
            ("activities", "activities", "activity_owner_id", session.user_id),
            ("invitations", "invitations", "user_id", session.user_id),
            ("group_invitations", "invitations", "user_group_id", membership.user_group_id),
            ("groups", "groups", "user_group_id", membership.user_group_id),
        ]
        deleted, failed = [], []
        for step, table, column, value in steps:
            try:
                self.supabase.table(table)\
                    .delete()\
                    .eq(column, value)\
                    .execute()
                deleted.append(step)
            except Exception as e:
                logger.error(f"Error deleting {step} for group {membership.user_group_id}: {e}")
                failed.append(step)

        if failed:
            raise HTTPException(
                status_code=500,
                detail={
                    "message": "Failed to delete group",
                    "failed_steps": failed,
                    "deleted_steps": deleted
                }
            )

        logger.info(f"User {session.user_id} deleted group {membership.user_group_id}")
        return GroupDeleteResult(
            user_group_id=membership.user_group_id,
            group_name=membership.group_name,
            deleted_steps=deleted
        )
