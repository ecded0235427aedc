"""Dependency Store — loads a task's dependency edges for graph validation.

Invariants:
    - edges_for_task returns only edges whose source subtask belongs to the task
      (the core rejects cross-task edges, so both ends share the task)
    - Edges are handed to the core as DependencyEdge with string ids
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.subtask_dependencies import DependencyEdge
from app.models.subtask import Subtask, SubtaskDependency


class DependencyStore:
    """AsyncSession-backed DependencyEdgeSource."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def edges_for_task(self, task_id: str) -> list[DependencyEdge]:
        result = await self.db.execute(
            select(SubtaskDependency.subtask_id, SubtaskDependency.depends_on_id)
            .join(Subtask, Subtask.id == SubtaskDependency.subtask_id)
            .where(Subtask.task_id == uuid.UUID(str(task_id)))
        )
        return [
            DependencyEdge(subtask_id=str(row.subtask_id), depends_on_id=str(row.depends_on_id))
            for row in result.all()
        ]
