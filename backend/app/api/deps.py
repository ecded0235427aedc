"""Request Dependencies — acting-user resolution shared by all routes.

Invariants:
    - get_session_user returns a SessionUser or raises NotAuthenticatedError (401)
    - SessionUser carries role facts only; it is never written back

Design Decisions:
    - Identity comes from the X-User-Id header set by the auth proxy in front of
      the API; credential checking is not this service's job. Tests override the
      dependency through app.dependency_overrides
"""

import uuid
from dataclasses import dataclass

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotAuthenticatedError
from app.infrastructure.database import get_db
from app.models.user import User


@dataclass(frozen=True)
class SessionUser:
    id: uuid.UUID
    email: str
    global_role: str
    department: str | None
    label: str


def session_user_from(user: User) -> SessionUser:
    return SessionUser(
        id=user.id,
        email=user.email,
        global_role=user.role or "",
        department=user.department,
        label=user.display_label,
    )


async def get_session_user(
    x_user_id: str | None = Header(None, alias="X-User-Id"),
    db: AsyncSession = Depends(get_db),
) -> SessionUser:
    try:
        user_id = uuid.UUID(str(x_user_id or "").strip())
    except ValueError:
        raise NotAuthenticatedError()
    user = (await db.execute(
        select(User).where(User.id == user_id),
    )).scalar_one_or_none()
    if user is None:
        raise NotAuthenticatedError()
    return session_user_from(user)
