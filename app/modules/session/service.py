import logging
from supabase import Client
from app.modules.auth.schemas import UserSession
from app.modules.groups.service import GroupService
from app.modules.users.service import UserService
from app.modules.session.schemas import SessionState, SessionStateResponse, SCREEN_FOR_STATE
from typing import Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class SessionService:
    """Derives which screen the UI shows, once per session change."""

    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.users = UserService(supabase)
        self.groups = GroupService(supabase)

    def derive_state(self, session: Optional[UserSession]) -> SessionStateResponse:
        if session is None:
            return self._response(SessionState.UNAUTHENTICATED)
        try:
            membership = self.groups.get_membership(session.user_id)
        except HTTPException as e:
            # Store failure reads as "not in a group"
            logger.error(f"Error loading membership for {session.user_id}: {e.detail}")
            membership = None
        if membership is None:
            return self._response(SessionState.NO_GROUP)
        return self._response(SessionState.IN_GROUP, membership=membership)

    def sync(self, session: Optional[UserSession]) -> SessionStateResponse:
        """Session-change handler: registry sync, then state. Safe to call repeatedly."""
        if session is None:
            return self.derive_state(None)
        user = self.users.ensure_user(session)
        response = self.derive_state(session)
        response.user = user
        return response

    @staticmethod
    def _response(state: SessionState, **kwargs) -> SessionStateResponse:
        return SessionStateResponse(state=state, screen=SCREEN_FOR_STATE[state], **kwargs)
