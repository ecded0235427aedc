"""Absence Notifications — request recipients, payloads and decision notices.

Invariants:
    - Recipients = every admin + managers whose department equals the requester's
      (only when the requester has a department), never the requester
    - Predicate is PURE; the SQL rendition lives in services/recipient_queries.py
      and must select exactly the same users
    - Projections expose id, or id + email + name; nothing else leaves the query
    - Decision notifications go to the requester only, typed absence_<status>

Design Decisions:
    - User records accepted as ORM objects or mappings (attribute-or-key access):
      the same predicate filters query results and test fixtures
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from app.core.domain_types import AbsenceStatus, GlobalRole, NotificationType
from app.core.task_notifications import NotificationInput

ABSENCE_REQUEST_TITLE = "Nuova richiesta di assenza"
ABSENCE_REQUEST_LINK = "/calendar"

_ABSENCE_TYPE_LABELS: dict[str, str] = {
    "vacation": "Ferie",
    "sick_leave": "Malattia",
    "personal": "Permesso",
    "late_entry": "Ingresso in ritardo",
    "early_exit": "Uscita anticipata",
    "overtime": "Straordinario",
    "transfer": "Trasferta",
    "remote": "Smart Working",
    "ooo": "Fuori Ufficio",
}


@dataclass(frozen=True)
class RecipientProjection:
    id: str
    email: str
    name: str | None = None


def _field(record: object, name: str) -> object:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def absence_type_label(absence_type: str | None) -> str:
    """Italian label for an absence type; unknown types pass through unchanged."""
    key = str(absence_type or "")
    return _ABSENCE_TYPE_LABELS.get(key, key)


def is_absence_request_recipient(
    *,
    candidate_id: object,
    candidate_role: object,
    candidate_department: str | None,
    requester_user_id: object,
    requester_department: str | None,
) -> bool:
    if str(candidate_id) == str(requester_user_id):
        return False
    role = candidate_role.value if isinstance(candidate_role, GlobalRole) else candidate_role
    if role == GlobalRole.ADMIN.value:
        return True
    if role == GlobalRole.MANAGER.value and requester_department:
        return candidate_department == requester_department
    return False


def select_absence_request_recipients(
    users: Iterable[object],
    *,
    requester_user_id: object,
    requester_department: str | None = None,
) -> list[RecipientProjection]:
    """Apply the recipient predicate in memory and project id/email/name."""
    recipients = []
    for user in users:
        if not is_absence_request_recipient(
            candidate_id=_field(user, "id"),
            candidate_role=_field(user, "role"),
            candidate_department=_field(user, "department"),
            requester_user_id=requester_user_id,
            requester_department=requester_department,
        ):
            continue
        recipients.append(RecipientProjection(
            id=str(_field(user, "id")),
            email=str(_field(user, "email") or ""),
            name=_field(user, "name"),
        ))
    return recipients


def recipient_ids(recipients: Iterable[RecipientProjection]) -> list[str]:
    return [r.id for r in recipients]


def _date_label(value: object) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime("%d/%m/%Y")
    return str(value or "")


def build_absence_request_notifications(
    recipient_user_ids: Iterable[object],
    *,
    requester_label: str | None,
    absence_type: str | None,
    start_date: object,
    end_date: object,
) -> list[NotificationInput]:
    """One in-app notification per recipient for a new pending absence request."""
    who = str(requester_label or "Un collega")
    message = (
        f"{who} ha richiesto {absence_type_label(absence_type)} "
        f"dal {_date_label(start_date)} al {_date_label(end_date)}"
    )
    return [
        NotificationInput(
            user_id=str(uid),
            type=NotificationType.ABSENCE_REQUEST.value,
            title=ABSENCE_REQUEST_TITLE,
            message=message,
            link=ABSENCE_REQUEST_LINK,
        )
        for uid in recipient_user_ids
    ]


# ─── Decision Notifications ──────────────────────────────────────

_DECISION_WORDS: dict[str, str] = {
    AbsenceStatus.APPROVED.value: "approvata",
    AbsenceStatus.REJECTED.value: "rifiutata",
}


def build_absence_decision_notification(
    requester_user_id: object,
    *,
    status: str,
    absence_type: str | None,
    start_date: object,
    end_date: object,
) -> NotificationInput:
    """Tell the requester their absence was approved or rejected.

    type is "absence_<status>"; status must be approved or rejected.
    """
    word = _DECISION_WORDS.get(str(status))
    if word is None:
        raise ValueError(f"Not a decision status: {status!r}")
    return NotificationInput(
        user_id=str(requester_user_id),
        type=f"absence_{status}",
        title=f"Richiesta di assenza {word}",
        message=(
            f"La tua richiesta di {absence_type_label(absence_type)} "
            f"dal {_date_label(start_date)} al {_date_label(end_date)} è stata {word}"
        ),
        link=ABSENCE_REQUEST_LINK,
    )
