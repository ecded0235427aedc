"""Project Member Schemas — add / re-role / remove bodies and the member view.

Invariants:
    - role is normalized (core.project_permissions.normalize_project_role):
      unknown or missing roles become "member", never a validation error
    - user_id is required; blank ids rejected
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.domain_types import ProjectRole
from app.core.project_permissions import normalize_project_role


class MemberUpsert(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(alias="userId")
    role: ProjectRole = ProjectRole.MEMBER

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: object) -> ProjectRole:
        return normalize_project_role(v)


class MemberRemove(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(alias="userId")


class MemberUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str


class MemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    user_id: UUID
    role: str
    joined_at: datetime
    user: MemberUser
