"""Recipient Queries — SQL renditions of the core's audience rules.

Invariants:
    - absence_request_recipients_query selects exactly the users accepted by
      core.absence_notifications.is_absence_request_recipient:
      admins, plus managers of the requester's department (when it is set),
      minus the requester
    - Only id, email, name are selected (RecipientProjection)
    - absence_visibility_clause mirrors core.absence_permissions.absence_visibility

Design Decisions:
    - Statement builders are plain functions returning Select objects:
      inspectable in tests without a database
"""

import uuid

from sqlalchemy import Select, and_, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.core.absence_notifications import RecipientProjection, recipient_ids
from app.core.absence_permissions import AbsenceVisibility
from app.core.domain_types import GlobalRole
from app.models.absence import Absence
from app.models.user import User


def absence_request_recipients_query(
    requester_user_id: uuid.UUID, requester_department: str | None,
) -> Select:
    audience = [User.role == GlobalRole.ADMIN.value]
    if requester_department:
        audience.append(and_(
            User.role == GlobalRole.MANAGER.value,
            User.department == requester_department,
        ))
    return (
        select(User.id, User.email, User.name)
        .where(User.id != requester_user_id)
        .where(or_(*audience))
        .order_by(User.email)
    )


def absence_visibility_clause(visibility: AbsenceVisibility) -> ColumnElement[bool]:
    """WHERE clause over Absence for the given visibility scope."""
    if visibility.kind == "all":
        return true()
    own = Absence.user_id == uuid.UUID(visibility.user_id)
    if visibility.kind == "department":
        same_department = Absence.user.has(User.department == visibility.department)
        return or_(own, same_department)
    return own


class RecipientQueries:
    """AsyncSession-backed RecipientDirectory."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_absence_request_recipients(
        self, requester_user_id: str, requester_department: str | None,
    ) -> list[RecipientProjection]:
        result = await self.db.execute(absence_request_recipients_query(
            uuid.UUID(str(requester_user_id)), requester_department,
        ))
        return [
            RecipientProjection(id=str(row.id), email=row.email, name=row.name)
            for row in result.all()
        ]

    async def find_absence_request_recipient_ids(
        self, requester_user_id: str, requester_department: str | None,
    ) -> list[str]:
        return recipient_ids(await self.find_absence_request_recipients(
            requester_user_id, requester_department,
        ))
