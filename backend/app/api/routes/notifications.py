"""Notifications — the caller's inbox, unread count and read marking.

Invariants:
    - Every operation is scoped to the calling user
    - Marking a single id that is not the caller's answers 404
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionUser, get_session_user
from app.core.errors import ResourceNotFoundError
from app.infrastructure.database import get_db
from app.schemas.notification import (
    MarkNotificationsRead, MarkReadResult, NotificationInbox, NotificationResponse,
)
from app.services.notification_store import NotificationStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.get("", response_model=NotificationInbox)
async def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    limit: int = Query(50, ge=1, le=200),
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    store = NotificationStore(db)
    notifications = await store.list_for_user(
        user.id, unread_only=unread_only, limit=limit,
    )
    return NotificationInbox(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        unread_count=await store.count_unread(user.id),
    )


@router.put("", response_model=MarkReadResult)
async def mark_notifications_read(
    body: MarkNotificationsRead,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    store = NotificationStore(db)
    if body.mark_all_read:
        updated = await store.mark_all_read(user.id)
    else:
        updated = await store.mark_read(user.id, body.notification_id)
        if not updated:
            raise ResourceNotFoundError("Notification", str(body.notification_id))
    await db.commit()
    logger.info(
        f"Marked {updated} notification(s) read",
        extra={"user_id": str(user.id), "all": body.mark_all_read},
    )
    return MarkReadResult(updated=updated, unread_count=await store.count_unread(user.id))


@router.post("/tasks/{task_id}/read")
async def mark_task_notifications_read(
    task_id: str,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    """Mark every unread notification linking to the task as read."""
    updated = await NotificationStore(db).mark_task_notifications_read(user.id, task_id)
    await db.commit()
    logger.info(
        f"Marked {updated} task notification(s) read",
        extra={"task_id": task_id, "user_id": str(user.id)},
    )
    return {"updated": updated}
