"""Absence Request Schemas."""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AbsenceCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(min_length=1, max_length=30)
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    start_time: str | None = Field(None, alias="startTime", pattern=r"^\d{2}:\d{2}$")
    end_time: str | None = Field(None, alias="endTime", pattern=r"^\d{2}:\d{2}$")
    is_full_day: bool = Field(True, alias="isFullDay")
    reason: str | None = Field(None, max_length=2000)

    @model_validator(mode="after")
    def validate_range(self):
        if self.start_date > self.end_date:
            raise ValueError("startDate must be <= endDate")
        return self


class AbsenceDecision(BaseModel):
    """Only a decision is accepted; back-to-pending is not."""
    status: Literal["approved", "rejected"]


class AbsenceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    type: str
    start_date: date
    end_date: date
    is_full_day: bool
    reason: str | None = None
    status: str
    approved_by: UUID | None = None
    approved_at: datetime | None = None
    created_at: datetime
