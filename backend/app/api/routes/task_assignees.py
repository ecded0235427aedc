"""Task Assignees — replace a task's assignee set and notify the newcomers.

Invariants:
    - Gated by core.project_permissions.can_change_assignees
    - Every requested id must be an existing user, else 400 (nothing written)
    - Only users added by this request are notified, never the actor
    - Assignee rows and notifications commit in one transaction
"""

import logging
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionUser, get_session_user
from app.core.errors import InvalidInputError, PermissionDeniedError, ResourceNotFoundError
from app.core.project_permissions import can_change_assignees
from app.core.repository_protocols import NotificationRepository
from app.core.task_notifications import (
    build_task_assigned_notifications, get_added_assignee_ids,
)
from app.infrastructure.database import get_db
from app.models.task import Task, TaskAssignee
from app.models.user import User
from app.schemas.task import AssigneesResponse, AssigneesUpdate
from app.services.notification_store import NotificationStore
from app.services.task_access import get_task_access_flags

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tasks", tags=["task-assignees"])


async def _resolve_user_ids(db: AsyncSession, raw_ids: list[str]) -> list[uuid.UUID]:
    """Parse and check ids; order preserved."""
    try:
        parsed = [uuid.UUID(raw) for raw in raw_ids]
    except ValueError:
        raise InvalidInputError("Invalid assignee id", "assigneeIds")
    if not parsed:
        return []
    found = set((await db.execute(
        select(User.id).where(User.id.in_(parsed)),
    )).scalars().all())
    missing = [str(uid) for uid in parsed if uid not in found]
    if missing:
        raise InvalidInputError(f"Unknown assignees: {', '.join(missing)}", "assigneeIds")
    # "ABC" and "abc" forms collapse to one row
    return list(dict.fromkeys(parsed))


async def _notify_assignees(
    repository: NotificationRepository, added: list[str], user: SessionUser, task: Task,
) -> int:
    notifications = build_task_assigned_notifications(
        added,
        user.label,
        str(task.id),
        task.title,
        task.project.name if task.project else None,
    )
    return await repository.save_many(notifications)


@router.put("/{task_id}/assignees", response_model=AssigneesResponse)
async def replace_assignees(
    task_id: uuid.UUID,
    body: AssigneesUpdate,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    task = (await db.execute(
        select(Task).where(Task.id == task_id),
    )).scalar_one_or_none()
    if task is None:
        raise ResourceNotFoundError("Task", str(task_id))
    flags = await get_task_access_flags(db, task.id, user.id)
    allowed = can_change_assignees(
        global_role=user.global_role,
        project_role=flags.project_role if flags else None,
    )
    if not allowed:
        raise PermissionDeniedError()

    next_ids = await _resolve_user_ids(db, body.assignee_ids)
    prev_ids = [a.user_id for a in task.assignees]
    keep, existing = set(next_ids), set(prev_ids)
    task.assignees = (
        [a for a in task.assignees if a.user_id in keep]
        + [TaskAssignee(user_id=uid) for uid in next_ids if uid not in existing]
    )

    added = get_added_assignee_ids(prev_ids, next_ids, user.id)
    await _notify_assignees(NotificationStore(db), added, user, task)
    await db.commit()
    logger.info(
        f"Assignees replaced ({len(next_ids)}), {len(added)} notified",
        extra={"task_id": str(task.id), "user_id": str(user.id)},
    )
    return AssigneesResponse(
        task_id=str(task.id),
        assignee_ids=[str(uid) for uid in next_ids],
        notified_user_ids=added,
    )
