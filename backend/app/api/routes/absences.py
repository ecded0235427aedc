"""Absences — submit, list, decide and withdraw absence requests.

Invariants:
    - New requests are stored pending and notify every absence-request
      recipient (admins, plus department managers) except the requester
    - Listing is filtered by core.absence_permissions.absence_visibility
    - Decisions need admin, or a manager of the requester's department; the
      requester is notified with absence_<status> in the same transaction
    - Deletion is limited to the requester and admins
"""

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionUser, get_session_user
from app.core.absence_notifications import (
    build_absence_decision_notification, build_absence_request_notifications, recipient_ids,
)
from app.core.absence_permissions import (
    absence_visibility, can_decide_absence, can_delete_absence,
)
from app.core.domain_types import AbsenceStatus
from app.core.errors import PermissionDeniedError, ResourceNotFoundError
from app.core.repository_protocols import NotificationRepository, RecipientDirectory
from app.infrastructure.database import get_db
from app.models.absence import Absence
from app.schemas.absence import AbsenceCreate, AbsenceDecision, AbsenceResponse
from app.services.notification_store import NotificationStore
from app.services.recipient_queries import RecipientQueries, absence_visibility_clause

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/absences", tags=["absences"])


async def _notify_absence_request(
    directory: RecipientDirectory,
    repository: NotificationRepository,
    user: SessionUser,
    body: AbsenceCreate,
) -> int:
    recipients = await directory.find_absence_request_recipients(
        str(user.id), user.department,
    )
    notifications = build_absence_request_notifications(
        recipient_ids(recipients),
        requester_label=user.label,
        absence_type=body.type,
        start_date=body.start_date,
        end_date=body.end_date,
    )
    return await repository.save_many(notifications)


@router.post("", response_model=AbsenceResponse, status_code=status.HTTP_201_CREATED)
async def create_absence(
    body: AbsenceCreate,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    absence = Absence(
        user_id=user.id,
        type=body.type,
        start_date=body.start_date,
        end_date=body.end_date,
        start_time=body.start_time,
        end_time=body.end_time,
        is_full_day=body.is_full_day,
        reason=body.reason,
        status=AbsenceStatus.PENDING.value,
    )
    db.add(absence)

    notified = await _notify_absence_request(
        RecipientQueries(db), NotificationStore(db), user, body,
    )
    await db.commit()
    logger.info(
        f"Absence request {absence.id} submitted, {notified} recipient(s)",
        extra={"user_id": str(user.id)},
    )
    return absence


@router.get("", response_model=list[AbsenceResponse])
async def list_absences(
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    visibility = absence_visibility(
        role=user.global_role, user_id=str(user.id), department=user.department,
    )
    result = await db.execute(
        select(Absence)
        .where(absence_visibility_clause(visibility))
        .order_by(Absence.start_date.desc()),
    )
    return list(result.scalars().all())


async def _get_absence(db: AsyncSession, absence_id: uuid.UUID) -> Absence:
    absence = (await db.execute(
        select(Absence).where(Absence.id == absence_id),
    )).scalar_one_or_none()
    if absence is None:
        raise ResourceNotFoundError("Absence", str(absence_id))
    return absence


@router.put("/{absence_id}", response_model=AbsenceResponse)
async def decide_absence(
    absence_id: uuid.UUID,
    body: AbsenceDecision,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    absence = await _get_absence(db, absence_id)
    allowed = can_decide_absence(
        actor_role=user.global_role,
        actor_department=user.department,
        target_department=absence.user.department if absence.user else None,
    )
    if not allowed:
        raise PermissionDeniedError()

    absence.status = body.status
    absence.approved_by = user.id
    absence.approved_at = datetime.now(timezone.utc)

    notification = build_absence_decision_notification(
        absence.user_id,
        status=body.status,
        absence_type=absence.type,
        start_date=absence.start_date,
        end_date=absence.end_date,
    )
    await NotificationStore(db).save_many([notification])
    await db.commit()
    logger.info(
        f"Absence {absence.id} {body.status}",
        extra={"user_id": str(user.id), "requester_id": str(absence.user_id)},
    )
    return absence


@router.delete("/{absence_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_absence(
    absence_id: uuid.UUID,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
):
    absence = await _get_absence(db, absence_id)
    if not can_delete_absence(
        actor_role=user.global_role, actor_id=user.id, owner_id=absence.user_id,
    ):
        raise PermissionDeniedError()

    await db.delete(absence)
    await db.commit()
    logger.info(
        f"Absence {absence_id} deleted",
        extra={"user_id": str(user.id)},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
