from enum import Enum
from pydantic import BaseModel
from typing import Optional
from app.modules.groups.schemas import MembershipResponse
from app.modules.users.schemas import UserResponse


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    NO_GROUP = "no_group"
    IN_GROUP = "in_group"


class Screen(str, Enum):
    LOGIN = "login"
    GROUP_SETUP = "group_setup"
    HOME = "home"


SCREEN_FOR_STATE = {
    SessionState.UNAUTHENTICATED: Screen.LOGIN,
    SessionState.NO_GROUP: Screen.GROUP_SETUP,
    SessionState.IN_GROUP: Screen.HOME,
}


class SessionStateResponse(BaseModel):
    state: SessionState
    screen: Screen
    user: Optional[UserResponse] = None
    membership: Optional[MembershipResponse] = None
