from pydantic import BaseModel, field_validator
from typing import List


class GroupCreate(BaseModel):
    group_name: str

    @field_validator("group_name")
    @classmethod
    def group_name_present(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("group_name must not be empty")
        return value


class GroupJoin(BaseModel):
    group_id: str

    @field_validator("group_id")
    @classmethod
    def group_id_present(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("group_id must not be empty")
        return value


class MembershipResponse(BaseModel):
    user_id: str
    user_group_id: str
    group_name: str
    role: str

    class Config:
        from_attributes = True


class GroupDeleteResult(BaseModel):
    user_group_id: str
    group_name: str
    deleted_steps: List[str]
    message: str = "Group deleted successfully"
