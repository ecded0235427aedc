"""Subtask Dependencies — create and delete dependency edges between subtasks.

Invariants:
    - Every new edge passes core.subtask_dependencies.validate_subtask_dependency_creation
      against the task's current edge set before insert
    - Writes gated by core.project_permissions.can_write_subtask_dependencies
    - Duplicate edges answer 409, never a second row

Design Decisions:
    - Ids are compared in canonical UUID string form: the validator sees
      str(uuid), so "ABC..." and "abc..." cannot slip past the self check
"""

import logging
import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionUser, get_session_user
from app.core.errors import (
    ConflictError, DependencyRuleError, PermissionDeniedError, ResourceNotFoundError,
)
from app.core.project_permissions import can_write_subtask_dependencies
from app.core.repository_protocols import DependencyEdgeSource
from app.core.subtask_dependencies import (
    DependencyValidation, dependency_error_message, validate_subtask_dependency_creation,
)
from app.infrastructure.database import get_db
from app.models.subtask import Subtask, SubtaskDependency
from app.schemas.dependency import DependencyCreate, DependencyResponse
from app.services.dependency_store import DependencyStore
from app.services.task_access import get_task_access_flags

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/subtasks", tags=["subtask-dependencies"])


async def _find_subtask(db: AsyncSession, raw_id: str) -> Subtask | None:
    try:
        subtask_id = uuid.UUID(raw_id)
    except ValueError:
        return None
    result = await db.execute(select(Subtask).where(Subtask.id == subtask_id))
    return result.scalar_one_or_none()


async def _require_write_access(
    db: AsyncSession, task_id: uuid.UUID, user: SessionUser,
) -> None:
    flags = await get_task_access_flags(db, task_id, user.id)
    if flags is None:
        raise ResourceNotFoundError("Task", str(task_id))
    allowed = can_write_subtask_dependencies(
        global_role=user.global_role,
        project_role=flags.project_role,
        is_project_member=flags.is_project_member,
        is_assignee=flags.is_assignee,
    )
    if not allowed:
        raise PermissionDeniedError()


async def _check_edge(
    edges: DependencyEdgeSource, subtask: Subtask, depends_on: Subtask | None,
) -> DependencyValidation:
    existing = await edges.edges_for_task(str(subtask.task_id))
    return validate_subtask_dependency_creation(
        str(subtask.id),
        str(depends_on.id) if depends_on else "",
        str(subtask.task_id),
        str(depends_on.task_id) if depends_on else "",
        existing,
    )


@router.post(
    "/{subtask_id}/dependencies",
    response_model=DependencyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_dependency(
    subtask_id: uuid.UUID,
    body: DependencyCreate,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    """Add the edge subtask_id -> dependsOnId."""
    subtask = await _find_subtask(db, str(subtask_id))
    if subtask is None:
        raise ResourceNotFoundError("Subtask", str(subtask_id))
    await _require_write_access(db, subtask.task_id, user)

    depends_on = None
    if body.depends_on_id:
        depends_on = await _find_subtask(db, body.depends_on_id)
        if depends_on is None:
            raise ResourceNotFoundError("Subtask", body.depends_on_id)

    verdict = await _check_edge(DependencyStore(db), subtask, depends_on)
    if not verdict["ok"]:
        logger.info(
            f"Dependency rejected: {verdict['error']}",
            extra={"subtask_id": str(subtask.id), "user_id": str(user.id)},
        )
        raise DependencyRuleError(
            verdict["error"], dependency_error_message(verdict["error"]),
        )

    edge = SubtaskDependency(subtask_id=subtask.id, depends_on_id=depends_on.id)
    db.add(edge)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Dependency already exists")
    logger.info(
        f"Dependency created {subtask.id} -> {depends_on.id}",
        extra={"subtask_id": str(subtask.id), "task_id": str(subtask.task_id)},
    )
    return DependencyResponse.model_validate(edge)


@router.delete(
    "/dependencies/{dependency_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_dependency(
    dependency_id: uuid.UUID,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    edge = (await db.execute(
        select(SubtaskDependency).where(SubtaskDependency.id == dependency_id),
    )).scalar_one_or_none()
    if edge is None:
        raise ResourceNotFoundError("Dependency", str(dependency_id))
    subtask = await _find_subtask(db, str(edge.subtask_id))
    if subtask is None:
        raise ResourceNotFoundError("Subtask", str(edge.subtask_id))
    await _require_write_access(db, subtask.task_id, user)

    await db.delete(edge)
    await db.commit()
    logger.info(
        f"Dependency {dependency_id} deleted",
        extra={"subtask_id": str(subtask.id), "user_id": str(user.id)},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
