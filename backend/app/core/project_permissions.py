"""Project Permissions — pure predicates over global and project-scoped roles.

Invariants:
    - All functions are total: any input (including None) yields a bool or a role
    - None is treated as the empty string before comparison
    - Admin (global role) overrides every project-scoped check
    - normalize_project_role never returns anything outside ProjectRole

Design Decisions:
    - Flat predicates over a role class hierarchy: roles are tagged values compared
      by equality, three of them (ADR: no inheritance for enumerations)
    - Keyword-only arguments: call sites read like the rule they enforce
"""

from app.core.domain_types import GlobalRole, ProjectRole

_PROJECT_ROLES = frozenset(r.value for r in ProjectRole)
_PROJECT_MANAGERS = frozenset({ProjectRole.OWNER.value, ProjectRole.MANAGER.value})


def _role(value: object) -> str:
    if value is None:
        return ""
    return str(value.value if isinstance(value, (GlobalRole, ProjectRole)) else value)


def _is_admin(global_role: object) -> bool:
    return _role(global_role) == GlobalRole.ADMIN.value


def normalize_project_role(value: object) -> ProjectRole:
    """Coerce arbitrary input to a ProjectRole; unknown or missing -> member."""
    role = _role(value)
    if role in _PROJECT_ROLES:
        return ProjectRole(role)
    return ProjectRole.MEMBER


def can_manage_members(*, global_role: object, project_role: object) -> bool:
    """Admins, project owners and project managers may add/remove/re-role members."""
    if _is_admin(global_role):
        return True
    return _role(project_role) in _PROJECT_MANAGERS


def can_remove_member(*, global_role: object, target_role: object) -> bool:
    """Owners can only be removed by an admin."""
    if _role(target_role) == ProjectRole.OWNER.value:
        return _is_admin(global_role)
    return True


def can_read_wiki(*, global_role: object, is_project_member: bool) -> bool:
    if _is_admin(global_role):
        return True
    return bool(is_project_member)


def can_write_wiki(*, global_role: object, project_role: object) -> bool:
    """Any confirmed membership writes; a missing project role does not."""
    if _is_admin(global_role):
        return True
    return _role(project_role) in _PROJECT_ROLES


def can_write_subtask_dependencies(
    *,
    global_role: object,
    project_role: object,
    is_project_member: bool,
    is_assignee: bool,
) -> bool:
    """Who may add or remove dependency edges between a task's subtasks.

    Admins always; project owners/managers always; a global manager needs
    project membership; a global member needs to be assigned to the task.
    A missing global role counts as member.
    """
    role = _role(global_role) or GlobalRole.MEMBER.value
    if role == GlobalRole.ADMIN.value:
        return True
    if _role(project_role) in _PROJECT_MANAGERS:
        return True
    if role == GlobalRole.MANAGER.value:
        return bool(is_project_member)
    if role == GlobalRole.MEMBER.value:
        return bool(is_assignee)
    return False


def can_change_assignees(*, global_role: object, project_role: object) -> bool:
    """Reassigning a task needs admin, global manager, or project owner/manager."""
    if _role(global_role) in (GlobalRole.ADMIN.value, GlobalRole.MANAGER.value):
        return True
    return _role(project_role) in _PROJECT_MANAGERS
