"""Subtask ORM — subtasks and the directed dependency edges between them.

Invariants:
    - Every subtask belongs to exactly one task
    - SubtaskDependency(subtask_id -> depends_on_id): both ends share a task_id,
      never equal, and the edge set stays acyclic. Enforced by
      core/subtask_dependencies.py before insert, not by the schema
    - (subtask_id, depends_on_id) unique

Design Decisions:
    - No task_id on the edge row: edges for a task are loaded by joining the
      source subtask (one indexed join on a small table)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Subtask(Base):
    __tablename__ = "subtasks"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    task_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    task: Mapped["Task"] = relationship("Task", back_populates="subtasks")


class SubtaskDependency(Base):
    __tablename__ = "subtask_dependencies"
    __table_args__ = (
        UniqueConstraint(
            "subtask_id", "depends_on_id", name="uq_subtask_dependencies_edge",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    subtask_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("subtasks.id", ondelete="CASCADE"),
        nullable=False,
    )
    depends_on_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("subtasks.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
