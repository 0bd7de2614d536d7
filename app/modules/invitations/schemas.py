from pydantic import BaseModel, EmailStr
from typing import Optional
from app.modules.activities.schemas import ActivityResponse
from app.modules.groups.schemas import MembershipResponse


class InvitationCreate(BaseModel):
    invitee_email: EmailStr
    activity_id: Optional[str] = None  # None: invite to join the group


class InvitationResponse(BaseModel):
    invitation_id: str
    user_id: str
    user_group_id: Optional[str] = None
    activity_id: Optional[str] = None
    accept: bool = False
    decline: bool = False

    @property
    def is_pending(self) -> bool:
        return not self.accept and not self.decline

    class Config:
        from_attributes = True


class InvitationRespond(BaseModel):
    accept: bool


class InvitationRespondResult(BaseModel):
    invitation: InvitationResponse
    activity: Optional[ActivityResponse] = None  # accepted activity, to append to the accepted list
    membership: Optional[MembershipResponse] = None  # group joined through the invitation
