import logging
from supabase import Client
from app.modules.auth.schemas import UserSession
from app.modules.activities.schemas import ActivityCreate, ActivityResponse, ActivityListResponse
from app.modules.groups.service import GroupService
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class ActivityService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.groups = GroupService(supabase)

    def suggest_activity(self, session: UserSession, activity_data: ActivityCreate) -> ActivityResponse:
        """Suggest an activity to the caller's group"""
        if not self.groups.get_membership(session.user_id):
            raise HTTPException(status_code=403, detail="You must be in a group to suggest an activity")

        try:
            result = self.supabase.table("activities").insert({
                "activity_owner_id": session.user_id,
                "name": activity_data.name,
                "activity_link": activity_data.activity_link,
                "activity_date": activity_data.activity_date.isoformat(),
                "activity_location": activity_data.activity_location
            }).execute()
        except Exception as e:
            logger.error(f"Error suggesting activity for {session.user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to suggest activity")

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to suggest activity")

        logger.info(f"User {session.user_id} suggested activity {result.data[0].get('activity_id')}")
        return ActivityResponse(**result.data[0])

    def get_activity(self, activity_id: str) -> Optional[ActivityResponse]:
        try:
            result = self.supabase.table("activities")\
                .select("*")\
                .eq("activity_id", activity_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching activity {activity_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch activity")

        if not result.data:
            return None
        return ActivityResponse(**result.data[0])

    def list_suggested(self, user_id: str) -> List[ActivityResponse]:
        try:
            result = self.supabase.table("activities")\
                .select("*")\
                .eq("activity_owner_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching suggested activities for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch suggested activities")

        return [ActivityResponse(**activity) for activity in result.data or []]

    def list_accepted(self, user_id: str) -> List[ActivityResponse]:
        """Activities reached through the user's accepted invitations"""
        try:
            invitations = self.supabase.table("invitations")\
                .select("activity_id")\
                .eq("user_id", user_id)\
                .eq("accept", True)\
                .execute()
            # Group-join invitations carry no activity
            activity_ids = list({
                inv["activity_id"] for inv in invitations.data or [] if inv.get("activity_id")
            })
            if not activity_ids:
                return []
            result = self.supabase.table("activities")\
                .select("*")\
                .in_("activity_id", activity_ids)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching accepted activities for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch accepted activities")

        return [ActivityResponse(**activity) for activity in result.data or []]

    def list_activities(self, user_id: str) -> ActivityListResponse:
        """Suggested and accepted activities of a user"""
        return ActivityListResponse(
            suggested=self.list_suggested(user_id),
            accepted=self.list_accepted(user_id)
        )
