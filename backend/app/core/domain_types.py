"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, TaskId, SubtaskId, ProjectId are plain strings inside the core
      (ORM UUIDs are stringified at the shell boundary)
    - All closed vocabularies (roles, statuses, error codes) encoded as str Enums

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: compare equal to raw strings and serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
ProjectId = NewType("ProjectId", str)
TaskId = NewType("TaskId", str)
SubtaskId = NewType("SubtaskId", str)


# ─── Roles ───────────────────────────────────────────────────────

class GlobalRole(str, Enum):
    """Account-wide role stored on the user row."""
    ADMIN = "admin"
    MANAGER = "manager"
    MEMBER = "member"


class ProjectRole(str, Enum):
    """Membership-scoped role on a project, distinct from GlobalRole."""
    OWNER = "owner"
    MANAGER = "manager"
    MEMBER = "member"


# ─── Dependency Graph ────────────────────────────────────────────

class DependencyError(str, Enum):
    """Rejection reasons for a new subtask dependency edge."""
    MISSING_DEPENDS_ON = "missing_depends_on"
    SELF_DEPENDENCY = "self_dependency"
    CROSS_TASK = "cross_task"
    CYCLE = "cycle"


# ─── Notifications ───────────────────────────────────────────────

class NotificationType(str, Enum):
    """Type tag persisted on every notification row."""
    TASK_ASSIGNED = "task_assigned"
    ABSENCE_REQUEST = "absence_request"
    ABSENCE_APPROVED = "absence_approved"
    ABSENCE_REJECTED = "absence_rejected"


# ─── Absences & Calendar ─────────────────────────────────────────

class AbsenceStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EventStatus(str, Enum):
    """Attendance status derived from a calendar event title."""
    PRESENT = "present"
    WFH = "wfh"
    LEAVE_APPROVED = "leave_approved"
    LEAVE_PENDING = "leave_pending"
    OTHER = "other"


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
