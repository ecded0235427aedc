"""Project Members — list, add, re-role and remove project memberships.

Invariants:
    - Listing requires a membership row for the caller (admins included)
    - Writes gated by core.project_permissions.can_manage_members
    - An owner is removed only by an admin (can_remove_member), else 400
    - Roles stored normalized (owner | manager | member)
"""

import logging
import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionUser, get_session_user
from app.core.errors import (
    BusinessRuleError, ConflictError, PermissionDeniedError, ResourceNotFoundError,
)
from app.core.project_permissions import can_manage_members, can_remove_member
from app.infrastructure.database import get_db
from app.models.project import Project, ProjectMember
from app.models.user import User
from app.schemas.member import MemberRemove, MemberResponse, MemberUpsert

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/projects", tags=["project-members"])


async def _get_project_or_404(db: AsyncSession, project_id: uuid.UUID) -> Project:
    project = (await db.execute(
        select(Project).where(Project.id == project_id),
    )).scalar_one_or_none()
    if project is None:
        raise ResourceNotFoundError("Project", str(project_id))
    return project


async def _find_member(
    db: AsyncSession, project_id: uuid.UUID, user_id: uuid.UUID,
) -> ProjectMember | None:
    result = await db.execute(
        select(ProjectMember)
        .where(ProjectMember.project_id == project_id)
        .where(ProjectMember.user_id == user_id),
    )
    return result.scalar_one_or_none()


async def _require_manager(
    db: AsyncSession, project_id: uuid.UUID, user: SessionUser,
) -> None:
    await _get_project_or_404(db, project_id)
    own = await _find_member(db, project_id, user.id)
    allowed = can_manage_members(
        global_role=user.global_role,
        project_role=own.role if own else None,
    )
    if not allowed:
        raise PermissionDeniedError()


@router.get("/{project_id}/members", response_model=list[MemberResponse])
async def list_members(
    project_id: uuid.UUID,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    await _get_project_or_404(db, project_id)
    if await _find_member(db, project_id, user.id) is None:
        raise PermissionDeniedError()
    result = await db.execute(
        select(ProjectMember)
        .where(ProjectMember.project_id == project_id)
        .order_by(ProjectMember.joined_at),
    )
    return list(result.scalars().all())


@router.post(
    "/{project_id}/members",
    response_model=MemberResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_member(
    project_id: uuid.UUID,
    body: MemberUpsert,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    await _require_manager(db, project_id, user)
    target = (await db.execute(
        select(User).where(User.id == body.user_id),
    )).scalar_one_or_none()
    if target is None:
        raise ResourceNotFoundError("User", str(body.user_id))
    if await _find_member(db, project_id, body.user_id) is not None:
        raise ConflictError("User is already a member")

    member = ProjectMember(
        project_id=project_id, user_id=target.id,
        role=body.role.value, user=target,
    )
    db.add(member)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("User is already a member")
    logger.info(
        f"Member {target.id} added as {member.role}",
        extra={"project_id": str(project_id), "user_id": str(user.id)},
    )
    return member


@router.patch("/{project_id}/members", response_model=MemberResponse)
async def change_member_role(
    project_id: uuid.UUID,
    body: MemberUpsert,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    await _require_manager(db, project_id, user)
    member = await _find_member(db, project_id, body.user_id)
    if member is None:
        raise ResourceNotFoundError("Member", str(body.user_id))
    member.role = body.role.value
    await db.commit()
    return member


@router.delete("/{project_id}/members", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    project_id: uuid.UUID,
    body: MemberRemove,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    await _require_manager(db, project_id, user)
    member = await _find_member(db, project_id, body.user_id)
    if member is None:
        raise ResourceNotFoundError("Member", str(body.user_id))
    if not can_remove_member(global_role=user.global_role, target_role=member.role):
        raise BusinessRuleError("Cannot remove owner", "OWNER_REMOVAL")

    await db.delete(member)
    await db.commit()
    logger.info(
        f"Member {body.user_id} removed",
        extra={"project_id": str(project_id), "user_id": str(user.id)},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
