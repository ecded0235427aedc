"""Notification Schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    title: str
    message: str
    link: str | None = None
    is_read: bool
    created_at: datetime


class NotificationInbox(BaseModel):
    notifications: list[NotificationResponse]
    unread_count: int


class MarkNotificationsRead(BaseModel):
    """Either one notification by id, or every unread one with markAllRead."""
    model_config = ConfigDict(populate_by_name=True)

    notification_id: UUID | None = Field(None, alias="notificationId")
    mark_all_read: bool = Field(False, alias="markAllRead")

    @model_validator(mode="after")
    def require_target(self):
        if not self.mark_all_read and self.notification_id is None:
            raise ValueError("notificationId or markAllRead is required")
        return self


class MarkReadResult(BaseModel):
    updated: int
    unread_count: int
