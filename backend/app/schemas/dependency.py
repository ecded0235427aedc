"""Subtask Dependency Schemas — request/response shapes for dependency edges.

Invariants:
    - depends_on_id is stripped; emptiness is left to the core validator so the
      error code (missing_depends_on) stays the same everywhere
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DependencyCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    depends_on_id: str = Field("", alias="dependsOnId")

    @field_validator("depends_on_id", mode="before")
    @classmethod
    def strip_id(cls, v: object) -> str:
        return str(v or "").strip()


class DependencyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    subtask_id: UUID
    depends_on_id: UUID
    created_at: datetime
