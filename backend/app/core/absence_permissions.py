"""Absence & Calendar Permissions — who sees, decides and accesses attendance data.

Invariants:
    - All functions are PURE and total
    - Roles compared case-insensitively; a missing role behaves as member
    - A manager without a department is scoped to their own absences only

Design Decisions:
    - Visibility returned as a small tagged value (AbsenceVisibility) rather than
      an ORM clause: the shell translates it to SQL (services/recipient_queries.py)
"""

from dataclasses import dataclass
from typing import Literal

from app.core.domain_types import GlobalRole


def _normalized_role(role: object) -> str:
    if isinstance(role, GlobalRole):
        return role.value
    return str(role or GlobalRole.MEMBER.value).strip().lower()


def _department(value: object) -> str:
    return str(value or "").strip()


@dataclass(frozen=True)
class AbsenceVisibility:
    """Which absences a user may list.

    kind == "all": everything; "department": own plus the department's;
    "self": only own rows.
    """
    kind: Literal["all", "department", "self"]
    user_id: str
    department: str | None = None


def absence_visibility(
    *, role: object, user_id: str, department: str | None = None,
) -> AbsenceVisibility:
    normalized = _normalized_role(role)
    if normalized == GlobalRole.ADMIN.value:
        return AbsenceVisibility(kind="all", user_id=user_id)
    dept = _department(department)
    if normalized == GlobalRole.MANAGER.value and dept:
        return AbsenceVisibility(kind="department", user_id=user_id, department=dept)
    return AbsenceVisibility(kind="self", user_id=user_id)


def can_decide_absence(
    *,
    actor_role: object,
    actor_department: str | None = None,
    target_department: str | None = None,
) -> bool:
    """Approve/reject rights: admin always, manager only inside their own department."""
    normalized = _normalized_role(actor_role)
    if normalized == GlobalRole.ADMIN.value:
        return True
    if normalized == GlobalRole.MANAGER.value:
        dept = _department(actor_department)
        return bool(dept) and dept == _department(target_department)
    return False


def can_delete_absence(*, actor_role: object, actor_id: object, owner_id: object) -> bool:
    """The requester may withdraw their own absence; admins may delete any."""
    if _normalized_role(actor_role) == GlobalRole.ADMIN.value:
        return True
    return str(actor_id) == str(owner_id)


def can_access_calendar(*, role: object, calendar_enabled: bool | None = None) -> bool:
    """Admin override; everyone else unless the flag is explicitly False."""
    if _normalized_role(role) == GlobalRole.ADMIN.value:
        return True
    return calendar_enabled is not False
