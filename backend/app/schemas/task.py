"""Task Assignee Schemas.

Invariants:
    - assignee_ids goes through core.task_notifications.normalize_user_id_list:
      absent -> [] (clears assignees), non-list -> 400, otherwise
      trimmed/deduplicated ids
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.task_notifications import UNSET, normalize_user_id_list


class AssigneesUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_default=True)

    assignee_ids: Any = Field(default_factory=lambda: UNSET, alias="assigneeIds")

    @field_validator("assignee_ids", mode="after")
    @classmethod
    def normalize_ids(cls, v: Any) -> list[str]:
        ids = normalize_user_id_list(v)
        if ids is None:
            raise ValueError("assigneeIds must be a list of user ids")
        return ids


class AssigneesResponse(BaseModel):
    task_id: str
    assignee_ids: list[str]
    notified_user_ids: list[str]
