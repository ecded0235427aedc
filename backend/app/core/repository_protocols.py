"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell (services/) via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that produce their inputs are never async themselves
"""

from typing import Protocol, Sequence

from app.core.absence_notifications import RecipientProjection
from app.core.subtask_dependencies import DependencyEdge
from app.core.task_notifications import NotificationInput


class NotificationRepository(Protocol):
    """Persists notifications built by the rule engine, verbatim."""
    async def save_many(self, notifications: Sequence[NotificationInput]) -> int: ...


class RecipientDirectory(Protocol):
    """Storage-side rendition of the absence request recipient predicate."""
    async def find_absence_request_recipients(
        self, requester_user_id: str, requester_department: str | None,
    ) -> list[RecipientProjection]: ...


class DependencyEdgeSource(Protocol):
    """Loads every dependency edge among one task's subtasks."""
    async def edges_for_task(self, task_id: str) -> list[DependencyEdge]: ...
