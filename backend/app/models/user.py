"""User ORM — accounts with a global role and an optional department.

Invariants:
    - email is unique
    - role is one of admin, manager, member (GlobalRole); default member
    - department is nullable; absence routing ignores managers when it is null
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="member",
    )
    department: Mapped[str | None] = mapped_column(String(50), nullable=True)
    calendar_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @property
    def display_label(self) -> str:
        """Name used in notification sentences: full name, else name, else email."""
        full = " ".join(p for p in (self.first_name, self.last_name) if p)
        return full or self.name or self.email
