"""Subtask Dependencies — tests for the pure dependency graph validator.

Tests cover:
    - missing ids rejected before anything else
    - self-dependency rejected before the cross-task and cycle checks
    - cross-task edges rejected
    - cycle detection over direct and transitive paths
    - non-cyclic edges accepted (mapping and DependencyEdge inputs)
    - existing edges never mutated; duplicates and generators accepted
    - build_adjacency / is_reachable helpers
    - dependency_error_message lookups and fallback
"""

import copy

from app.core.domain_types import DependencyError
from app.core.subtask_dependencies import (
    DependencyEdge,
    build_adjacency,
    dependency_error_message,
    is_reachable,
    validate_subtask_dependency_creation,
)


def _edge(source: str, target: str) -> dict:
    return {"subtask_id": source, "depends_on_id": target}


# ─── Rule order ──────────────────────────────────────────────────

def test_missing_depends_on_id_rejected():
    result = validate_subtask_dependency_creation("a", "", "t1", "t1")
    assert result == {"ok": False, "error": "missing_depends_on"}


def test_whitespace_depends_on_id_counts_as_missing():
    result = validate_subtask_dependency_creation("a", "   ", "t1", "t1")
    assert result["error"] == DependencyError.MISSING_DEPENDS_ON


def test_none_subtask_id_counts_as_missing():
    result = validate_subtask_dependency_creation(None, "b", "t1", "t1")
    assert result["error"] == "missing_depends_on"


def test_self_dependency_rejected():
    result = validate_subtask_dependency_creation("a", "a", "t1", "t1")
    assert result == {"ok": False, "error": "self_dependency"}


def test_self_dependency_checked_before_cross_task():
    result = validate_subtask_dependency_creation("a", "a", "t1", "t2")
    assert result["error"] == "self_dependency"


def test_self_dependency_checked_before_cycle():
    edges = [_edge("a", "a")]
    result = validate_subtask_dependency_creation("a", "a", "t1", "t1", edges)
    assert result["error"] == "self_dependency"


def test_cross_task_rejected():
    result = validate_subtask_dependency_creation("a", "b", "t1", "t2")
    assert result == {"ok": False, "error": "cross_task"}


def test_cross_task_compares_string_forms():
    result = validate_subtask_dependency_creation("a", "b", 7, "7")
    assert result == {"ok": True}


# ─── Cycle detection ─────────────────────────────────────────────

def test_reverse_edge_creates_cycle():
    """Given B→A, adding A→B closes a loop."""
    result = validate_subtask_dependency_creation(
        "A", "B", "t", "t", [_edge("B", "A")],
    )
    assert result == {"ok": False, "error": "cycle"}


def test_transitive_path_creates_cycle():
    edges = [_edge("B", "C"), _edge("C", "D"), _edge("D", "A")]
    result = validate_subtask_dependency_creation("A", "B", "t", "t", edges)
    assert result["error"] == "cycle"


def test_shared_dependency_is_not_a_cycle():
    """Given C→B, adding A→B is fine."""
    result = validate_subtask_dependency_creation(
        "A", "B", "t", "t", [_edge("C", "B")],
    )
    assert result == {"ok": True}


def test_acyclic_graph_accepts_edge_without_path_back():
    edges = [_edge("B", "C"), _edge("C", "D"), _edge("E", "A")]
    result = validate_subtask_dependency_creation("A", "B", "t", "t", edges)
    assert result == {"ok": True}


def test_empty_graph_accepts_edge():
    assert validate_subtask_dependency_creation("A", "B", "t", "t") == {"ok": True}


def test_dependency_edge_objects_accepted():
    edges = [DependencyEdge(subtask_id="B", depends_on_id="A")]
    result = validate_subtask_dependency_creation("A", "B", "t", "t", edges)
    assert result["error"] == "cycle"


def test_graph_with_existing_loop_terminates():
    edges = [_edge("C", "D"), _edge("D", "C")]
    result = validate_subtask_dependency_creation("A", "B", "t", "t", edges)
    assert result == {"ok": True}


def test_ids_are_trimmed_before_comparison():
    result = validate_subtask_dependency_creation(
        " A ", "B", "t", "t", [_edge("B ", " A")],
    )
    assert result["error"] == "cycle"


# ─── Input handling ──────────────────────────────────────────────

def test_existing_edges_left_untouched():
    edges = [_edge("B", "C"), _edge("C", "A")]
    snapshot = copy.deepcopy(edges)
    validate_subtask_dependency_creation("A", "B", "t", "t", edges)
    validate_subtask_dependency_creation("A", "D", "t", "t", edges)
    assert edges == snapshot


def test_duplicate_edges_tolerated():
    edges = [_edge("B", "A")] * 3 + [_edge("C", "D"), _edge("C", "D")]
    assert validate_subtask_dependency_creation("A", "B", "t", "t", edges)["error"] == "cycle"
    assert validate_subtask_dependency_creation("A", "C", "t", "t", edges) == {"ok": True}


def test_generator_of_edges_accepted():
    edges = (_edge(s, t) for s, t in [("B", "C"), ("C", "A")])
    result = validate_subtask_dependency_creation("A", "B", "t", "t", edges)
    assert result["error"] == "cycle"


# ─── Helpers ─────────────────────────────────────────────────────

def test_build_adjacency_groups_targets_by_source():
    adjacency = build_adjacency([_edge("a", "b"), _edge("a", "c"), _edge("b", "c")])
    assert adjacency == {"a": ["b", "c"], "b": ["c"]}


def test_build_adjacency_skips_blank_endpoints():
    adjacency = build_adjacency([_edge("", "b"), _edge("a", None), _edge("a", "b")])
    assert adjacency == {"a": ["b"]}


def test_is_reachable_counts_start_itself():
    assert is_reachable({}, "a", "a") is True


def test_is_reachable_false_without_path():
    assert is_reachable({"a": ["b"]}, "b", "a") is False


# ─── Messages ────────────────────────────────────────────────────

def test_error_messages():
    assert dependency_error_message("self_dependency") == "Cannot depend on self"
    assert dependency_error_message("cross_task") == "Cross-task dependencies are not allowed"
    assert dependency_error_message("cycle") == "Dependency would create a cycle"
    assert dependency_error_message("missing_depends_on") == "Missing dependsOnId"


def test_unknown_error_code_falls_back_to_missing_id_message():
    assert dependency_error_message("bogus") == "Missing dependsOnId"
