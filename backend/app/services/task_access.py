"""Task Access — loads the role facts permission predicates need for one task.

Invariants:
    - Returns None when the task does not exist (caller answers 404)
    - Pure facts only: decisions stay in core.project_permissions
"""

import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.project import ProjectMember
from app.models.task import Task, TaskAssignee


@dataclass(frozen=True)
class TaskAccessFlags:
    task_id: uuid.UUID
    project_id: uuid.UUID
    is_assignee: bool
    is_project_member: bool
    project_role: str | None


async def get_task_access_flags(
    db: AsyncSession, task_id: uuid.UUID, user_id: uuid.UUID,
) -> TaskAccessFlags | None:
    task = (await db.execute(
        select(Task.id, Task.project_id).where(Task.id == task_id),
    )).one_or_none()
    if task is None:
        return None

    assignee = (await db.execute(
        select(TaskAssignee.id)
        .where(TaskAssignee.task_id == task_id)
        .where(TaskAssignee.user_id == user_id),
    )).scalar_one_or_none()
    project_role = (await db.execute(
        select(ProjectMember.role)
        .where(ProjectMember.project_id == task.project_id)
        .where(ProjectMember.user_id == user_id),
    )).scalar_one_or_none()

    return TaskAccessFlags(
        task_id=task.id,
        project_id=task.project_id,
        is_assignee=assignee is not None,
        is_project_member=project_role is not None,
        project_role=project_role,
    )
