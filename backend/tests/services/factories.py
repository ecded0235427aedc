"""Seeding helpers for route tests — each helper commits what it creates."""

from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.project import Project, ProjectMember
from app.models.subtask import Subtask, SubtaskDependency
from app.models.task import Task, TaskAssignee
from app.models.user import User


def as_user(user: User) -> dict:
    return {"X-User-Id": str(user.id)}


async def make_user(
    db: AsyncSession,
    role: str = "member",
    department: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    user = User(
        email=f"{uuid4().hex[:8]}@teamboard.test",
        role=role,
        department=department,
        first_name=first_name,
        last_name=last_name,
    )
    db.add(user)
    await db.commit()
    return user


async def make_project(
    db: AsyncSession, name: str = "Bilancio", members: tuple = (),
) -> Project:
    """members: (user, project_role) pairs."""
    project = Project(name=name)
    db.add(project)
    await db.flush()
    for user, role in members:
        db.add(ProjectMember(project_id=project.id, user_id=user.id, role=role))
    await db.commit()
    return project


async def make_task(
    db: AsyncSession,
    project: Project,
    title: str = "Preparare report",
    assignees: tuple = (),
) -> Task:
    task = Task(project_id=project.id, title=title)
    db.add(task)
    await db.flush()
    for user in assignees:
        db.add(TaskAssignee(task_id=task.id, user_id=user.id))
    await db.commit()
    return task


async def make_subtask(db: AsyncSession, task: Task, title: str = "Step") -> Subtask:
    subtask = Subtask(task_id=task.id, title=title)
    db.add(subtask)
    await db.commit()
    return subtask


async def make_dependency(
    db: AsyncSession, subtask: Subtask, depends_on: Subtask,
) -> SubtaskDependency:
    edge = SubtaskDependency(subtask_id=subtask.id, depends_on_id=depends_on.id)
    db.add(edge)
    await db.commit()
    return edge
