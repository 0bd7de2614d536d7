import logging
from supabase import Client
from postgrest.exceptions import APIError
from app.database.supabase_client import is_no_rows_error
from app.modules.auth.schemas import UserSession
from app.modules.users.schemas import UserResponse
from typing import Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def ensure_user(self, session: UserSession) -> Optional[UserResponse]:
        """Make sure a users row exists for the session's email.

        Lookup errors other than "no rows" and insert errors are logged and
        swallowed: registry sync must never block the caller.
        """
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("email", session.email)\
                .single()\
                .execute()
            if result.data:
                return UserResponse(**result.data)
        except APIError as e:
            if not is_no_rows_error(e):
                logger.error(f"Error checking user {session.email}: {e}")
                return None
        except Exception as e:
            logger.error(f"Error checking user {session.email}: {e}")
            return None

        try:
            result = self.supabase.table("users").insert({
                "user_id": session.user_id,
                "name": session.registry_name,
                "email": session.email
            }).execute()
        except Exception as e:
            logger.error(f"Error adding user {session.email} to database: {e}")
            return None

        if not result.data:
            logger.error(f"Error adding user {session.email} to database: no row returned")
            return None
        logger.info(f"Registered user {session.user_id}")
        return UserResponse(**result.data[0])

    def get_user_by_email(self, email: str) -> Optional[UserResponse]:
        """Get user by email"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("email", email)\
                .execute()
        except Exception as e:
            logger.error(f"Error looking up user {email}: {e}")
            raise HTTPException(status_code=500, detail="Failed to look up user")

        if not result.data:
            return None
        return UserResponse(**result.data[0])

    def get_user_by_id(self, user_id: str) -> UserResponse:
        """Get user by ID"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching user {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch user")

        if not result.data:
            raise HTTPException(status_code=404, detail="User not found")
        return UserResponse(**result.data[0])
