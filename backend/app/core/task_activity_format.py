"""Task Activity Formatting — turns typed activity events into Italian feed sentences.

Invariants:
    - format_task_activity_event never raises: malformed metadata degrades to
      generic wording, unknown event types get a fallback sentence
    - Sentences omit the actor (the feed renders the actor name in front)
    - Pure: no IO, no clock, no locale machinery

Design Decisions:
    - Per-type formatters in a dispatch dict over one long if/elif chain
    - Month names inlined: the only localized date needed is "d MMMM yyyy"
"""

from datetime import datetime
from typing import Any, Callable, Mapping

from app.core.domain_types import TaskPriority, TaskStatus

FALLBACK_MESSAGE = "ha eseguito un aggiornamento"

_STATUS_LABELS = {
    TaskStatus.TODO.value: "Da fare",
    TaskStatus.IN_PROGRESS.value: "In corso",
    TaskStatus.DONE.value: "Completato",
}
_PRIORITY_LABELS = {
    TaskPriority.HIGH.value: "Alta",
    TaskPriority.MEDIUM.value: "Media",
    TaskPriority.LOW.value: "Bassa",
}
_MONTHS_IT = (
    "gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
    "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre",
)

UserNameResolver = Callable[[str], str | None]


def status_label(status: str) -> str:
    return _STATUS_LABELS.get(status, status)


def priority_label(priority: str) -> str:
    return _PRIORITY_LABELS.get(priority, priority)


def format_date_or_none(value: object) -> str:
    """'10 gennaio 2025' for an ISO string, 'nessuna' for anything else."""
    if not isinstance(value, str) or not value:
        return "nessuna"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return "nessuna"
    return f"{parsed.day} {_MONTHS_IT[parsed.month - 1]} {parsed.year}"


def _text(meta: Mapping[str, Any], key: str) -> str:
    value = meta.get(key)
    return "" if value is None else str(value)


def _status_changed(meta, _resolve):
    return (
        f"ha cambiato lo status da {status_label(_text(meta, 'from'))} "
        f"a {status_label(_text(meta, 'to'))}"
    )


def _priority_changed(meta, _resolve):
    return (
        f"ha cambiato la priorità da {priority_label(_text(meta, 'from'))} "
        f"a {priority_label(_text(meta, 'to'))}"
    )


def _due_date_changed(meta, _resolve):
    return (
        f"ha cambiato la scadenza da {format_date_or_none(meta.get('from'))} "
        f"a {format_date_or_none(meta.get('to'))}"
    )


def _resolve_names(ids: object, resolve: UserNameResolver | None) -> list[str]:
    if resolve is None or not isinstance(ids, list):
        return []
    names = (resolve(str(uid)) for uid in ids)
    return [n for n in names if n]


def _assignees_changed(meta, resolve):
    from_names = _resolve_names(meta.get("from"), resolve)
    to_names = _resolve_names(meta.get("to"), resolve)
    if not from_names and not to_names:
        return "ha aggiornato gli assegnatari"
    before = ", ".join(from_names) or "nessuno"
    after = ", ".join(to_names) or "nessuno"
    return f"ha aggiornato gli assegnatari ({before} → {after})"


def _with_suffix(prefix: str, key: str):
    def _format(meta, _resolve):
        value = meta.get(key)
        return f"{prefix}: {value}" if value else prefix
    return _format


def _subtask_updated(meta, _resolve):
    completed = meta.get("completed")
    if isinstance(completed, bool):
        return "ha completato un subtask" if completed else "ha riaperto un subtask"
    return "ha aggiornato un subtask"


def _fixed(message: str):
    return lambda _meta, _resolve: message


_FORMATTERS: dict[str, Callable[[Mapping[str, Any], UserNameResolver | None], str]] = {
    "task.status_changed": _status_changed,
    "task.priority_changed": _priority_changed,
    "task.due_date_changed": _due_date_changed,
    "task.title_changed": _fixed("ha aggiornato il titolo"),
    "task.description_changed": _fixed("ha aggiornato la descrizione"),
    "task.list_changed": _fixed("ha aggiornato la lista"),
    "task.story_points_changed": _fixed("ha aggiornato gli story points"),
    "task.tags_changed": _fixed("ha aggiornato i tag"),
    "task.assignees_changed": _assignees_changed,
    "task.comment_added": _fixed("ha aggiunto un commento"),
    "task.attachment_uploaded": _with_suffix("ha caricato un allegato", "fileName"),
    "task.subtask_added": _with_suffix("ha aggiunto un subtask", "title"),
    "task.subtask_updated": _subtask_updated,
    "task.subtask_deleted": _fixed("ha eliminato un subtask"),
}


def format_task_activity_event(
    event: Mapping[str, Any] | None,
    resolve_user_name: UserNameResolver | None = None,
) -> dict[str, str]:
    """Format one activity event as {"message": ...}; non-mapping events fall back."""
    if not isinstance(event, Mapping):
        return {"message": FALLBACK_MESSAGE}
    meta = event.get("metadata")
    if not isinstance(meta, Mapping):
        meta = {}
    formatter = _FORMATTERS.get(str(event.get("type") or ""))
    if formatter is None:
        return {"message": FALLBACK_MESSAGE}
    return {"message": formatter(meta, resolve_user_name)}
