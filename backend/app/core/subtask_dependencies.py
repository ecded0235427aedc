"""Subtask Dependency Validation — rejects invalid edges before they are persisted.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - existing_edges is never mutated (adjacency view is a fresh dict)
    - Rules checked in fixed order, first violation wins:
      missing_depends_on -> self_dependency -> cross_task -> cycle
    - Edge (a, b) means "a depends on b": adding it creates a cycle iff b already
      (transitively) depends on a

Design Decisions:
    - Return dicts (not exceptions): rejections are normal business outcomes;
      the route converts them to DependencyRuleError (ADR: uniform result shape)
    - Iterative DFS with a visited set: graphs are small and change rarely,
      no incremental cycle-detection structure needed
    - Edges accepted as DependencyEdge or mapping: rows from the ORM and test
      fixtures flow in without conversion
"""

from dataclasses import dataclass
from typing import Iterable, Literal, Mapping, TypedDict, Union

from app.core.domain_types import DependencyError


@dataclass(frozen=True)
class DependencyEdge:
    """subtask_id cannot complete until depends_on_id is complete."""
    subtask_id: str
    depends_on_id: str


EdgeLike = Union[DependencyEdge, Mapping[str, object]]


class DependencyOk(TypedDict):
    ok: Literal[True]


class DependencyRejected(TypedDict):
    ok: Literal[False]
    error: str


DependencyValidation = Union[DependencyOk, DependencyRejected]


_ERROR_MESSAGES: dict[str, str] = {
    DependencyError.SELF_DEPENDENCY.value: "Cannot depend on self",
    DependencyError.CROSS_TASK.value: "Cross-task dependencies are not allowed",
    DependencyError.CYCLE.value: "Dependency would create a cycle",
    DependencyError.MISSING_DEPENDS_ON.value: "Missing dependsOnId",
}


def _clean(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _edge_endpoints(edge: EdgeLike) -> tuple[str, str]:
    if isinstance(edge, DependencyEdge):
        return _clean(edge.subtask_id), _clean(edge.depends_on_id)
    return _clean(edge.get("subtask_id")), _clean(edge.get("depends_on_id"))


def build_adjacency(edges: Iterable[EdgeLike]) -> dict[str, list[str]]:
    """Adjacency view subtask -> [depends_on, ...]; blank endpoints skipped."""
    adjacency: dict[str, list[str]] = {}
    for edge in edges:
        source, target = _edge_endpoints(edge)
        if not source or not target:
            continue
        adjacency.setdefault(source, []).append(target)
    return adjacency


def is_reachable(
    adjacency: Mapping[str, list[str]], start: str, goal: str,
) -> bool:
    """True if goal is reachable from start (start itself counts)."""
    visited: set[str] = set()
    stack = [start]
    while stack:
        current = stack.pop()
        if current == goal:
            return True
        if current in visited:
            continue
        visited.add(current)
        stack.extend(adjacency.get(current, ()))
    return False


def _rejected(error: DependencyError) -> DependencyRejected:
    return {"ok": False, "error": error.value}


def validate_subtask_dependency_creation(
    subtask_id: object,
    depends_on_id: object,
    subtask_task_id: object,
    depends_on_task_id: object,
    existing_edges: Iterable[EdgeLike] = (),
) -> DependencyValidation:
    """Validate the edge subtask_id -> depends_on_id against the current graph."""
    source = _clean(subtask_id)
    target = _clean(depends_on_id)
    if not source or not target:
        return _rejected(DependencyError.MISSING_DEPENDS_ON)

    if source == target:
        return _rejected(DependencyError.SELF_DEPENDENCY)
    if str(subtask_task_id) != str(depends_on_task_id):
        return _rejected(DependencyError.CROSS_TASK)

    adjacency = build_adjacency(existing_edges)
    if is_reachable(adjacency, target, source):
        return _rejected(DependencyError.CYCLE)

    return {"ok": True}


def dependency_error_message(error: str) -> str:
    """User-facing message for a rejection code; unknown codes fall back to missing id."""
    return _ERROR_MESSAGES.get(error, _ERROR_MESSAGES[DependencyError.MISSING_DEPENDS_ON.value])
