"""Notification Store — persists rule-engine output and serves the inbox.

Invariants:
    - NotificationInput values are written verbatim (one row each, is_read=False)
    - Every query is scoped by user_id, never returning another user's rows
    - Task notifications are matched through the taskId=<id> link token
    - Single-notification marking matches on (id, user_id), so a foreign id
      updates nothing

Design Decisions:
    - flush(), not commit(): the route owns the transaction so the domain write
      and its notifications land together or not at all
"""

import logging
import uuid
from typing import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.task_notifications import NotificationInput, task_notifications_link_token
from app.models.notification import Notification

logger = logging.getLogger(__name__)


class NotificationStore:
    """AsyncSession-backed NotificationRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save_many(self, notifications: Sequence[NotificationInput]) -> int:
        for n in notifications:
            self.db.add(Notification(
                user_id=uuid.UUID(n.user_id),
                type=n.type,
                title=n.title,
                message=n.message,
                link=n.link,
            ))
        if notifications:
            await self.db.flush()
            logger.info(
                f"Queued {len(notifications)} notification(s) of type {notifications[0].type}",
                extra={"recipients": [n.user_id for n in notifications]},
            )
        return len(notifications)

    async def list_for_user(
        self, user_id: uuid.UUID, *, unread_only: bool = False, limit: int = 50,
    ) -> list[Notification]:
        query = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
        )
        if unread_only:
            query = query.where(Notification.is_read.is_(False))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def mark_task_notifications_read(
        self, user_id: uuid.UUID, task_id: str,
    ) -> int:
        """Mark the user's unread notifications linking to task_id as read."""
        token = task_notifications_link_token(task_id)
        result = await self.db.execute(
            update(Notification)
            .where(Notification.user_id == user_id)
            .where(Notification.is_read.is_(False))
            .where(Notification.link.contains(token, autoescape=True))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def count_unread(self, user_id: uuid.UUID) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id)
            .where(Notification.is_read.is_(False))
        )
        return result.scalar_one()

    async def mark_read(self, user_id: uuid.UUID, notification_id: uuid.UUID) -> int:
        """Mark one of the user's notifications read; 0 when it is not theirs."""
        result = await self.db.execute(
            update(Notification)
            .where(Notification.id == notification_id)
            .where(Notification.user_id == user_id)
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def mark_all_read(self, user_id: uuid.UUID) -> int:
        result = await self.db.execute(
            update(Notification)
            .where(Notification.user_id == user_id)
            .where(Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
