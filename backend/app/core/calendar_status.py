"""Calendar Status Mapping — attendance status from free-text calendar event titles.

Invariants:
    - Case-insensitive substring matching in fixed priority order:
      wfh > leave request / pending > leave > present / general shift > other
    - map_calendar_event tolerates missing start/end/summary keys

Design Decisions:
    - Ordered rule table instead of nested ifs: priority is the list order
"""

from typing import Any, Mapping

from app.core.domain_types import EventStatus

_RULES: tuple[tuple[tuple[str, ...], EventStatus], ...] = (
    (("wfh", "work from home"), EventStatus.WFH),
    (("leave request", "pending"), EventStatus.LEAVE_PENDING),
    (("leave",), EventStatus.LEAVE_APPROVED),
    (("present", "general shift"), EventStatus.PRESENT),
)

DEFAULT_EVENT_TITLE = "Evento"


def derive_status_from_title(title: str | None) -> EventStatus:
    normalized = str(title or "").lower()
    for keywords, status in _RULES:
        if any(k in normalized for k in keywords):
            return status
    return EventStatus.OTHER


def _boundary(item: Mapping[str, Any], key: str) -> tuple[str | None, bool]:
    raw = item.get(key)
    if not isinstance(raw, Mapping):
        return None, False
    if raw.get("dateTime"):
        return raw["dateTime"], False
    return raw.get("date"), bool(raw.get("date"))


def map_calendar_event(item: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize a raw calendar API event into the calendar view's shape.

    All-day events carry `date` instead of `dateTime` on their start.
    """
    start, all_day = _boundary(item, "start")
    end, _ = _boundary(item, "end")
    summary = item.get("summary") or ""
    return {
        "id": item.get("id"),
        "title": summary or DEFAULT_EVENT_TITLE,
        "start": start,
        "end": end,
        "all_day": all_day,
        "status": derive_status_from_title(summary).value,
        "location": item.get("location"),
    }
