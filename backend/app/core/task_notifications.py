"""Task Assignment Notifications — recipients and payloads for assignment events.

Invariants:
    - All functions are PURE: inputs in, value objects out
    - NotificationInput is frozen: persisted verbatim by the shell, never mutated
    - The acting user is never notified about their own assignment change
    - Recipient order follows the order of the new assignee list

Design Decisions:
    - Builder separated from persistence: routes call build_*, then hand the result
      to services/notification_store.py (ADR: swap or mock persistence in tests)
    - UNSET sentinel models "field absent from the request body", which must stay
      distinguishable from an explicit null (shape error) and an empty list
"""

from dataclasses import asdict, dataclass
from typing import Iterable
from urllib.parse import quote

from app.core.domain_types import NotificationType

TASK_ASSIGNED_TITLE = "Sei stato assegnato a una task"
_DEFAULT_ACTOR = "Un collega"
_DEFAULT_TASK_TITLE = "Task"
# kept literal in link tokens, on top of quote()'s unreserved set
_URI_COMPONENT_SAFE = "!*'()"


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


@dataclass(frozen=True)
class NotificationInput:
    user_id: str
    type: str
    title: str
    message: str
    link: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def normalize_user_id_list(value: object = UNSET) -> list[str] | None:
    """Normalize a request's user id list.

    UNSET -> [] (nothing to change); anything that is not a list/tuple -> None
    (invalid shape); otherwise stringified, trimmed, non-empty, deduplicated ids
    in first-occurrence order.
    """
    if value is UNSET:
        return []
    if not isinstance(value, (list, tuple)):
        return None
    seen: dict[str, None] = {}
    for item in value:
        text = "" if item is None else str(item).strip()
        if text:
            seen.setdefault(text, None)
    return list(seen)


def get_added_assignee_ids(
    prev_assignee_ids: Iterable[object],
    next_assignee_ids: Iterable[object],
    actor_user_id: object,
) -> list[str]:
    """Ids present in next but not in prev, excluding the actor."""
    prev = {str(uid) for uid in prev_assignee_ids}
    actor = str(actor_user_id or "")
    added = []
    for uid in next_assignee_ids:
        uid = str(uid)
        if uid and uid != actor and uid not in prev:
            added.append(uid)
    return added


def task_link(task_id: object) -> str:
    return f"/tasks?{task_notifications_link_token(task_id)}"


def task_notifications_link_token(task_id: object) -> str:
    """Query-string token identifying a task inside notification links."""
    return "taskId=" + quote(str(task_id), safe=_URI_COMPONENT_SAFE)


def build_task_assigned_notifications(
    assignee_ids: Iterable[object],
    actor_label: str | None,
    task_id: object,
    task_title: str | None,
    project_name: str | None = None,
) -> list[NotificationInput]:
    link = task_link(task_id)
    actor = str(actor_label or _DEFAULT_ACTOR)
    project = f" ({project_name})" if project_name else ""
    message = f"{actor} ti ha assegnato: {task_title or _DEFAULT_TASK_TITLE}{project}"
    return [
        NotificationInput(
            user_id=str(uid),
            type=NotificationType.TASK_ASSIGNED.value,
            title=TASK_ASSIGNED_TITLE,
            message=message,
            link=link,
        )
        for uid in assignee_ids
    ]
