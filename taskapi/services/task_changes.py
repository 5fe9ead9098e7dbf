"""Explicit partial-update structure for tasks."""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any

from taskapi.models.enums import TaskStatus
from taskapi.schemas.task import TaskUpdate


class _Unset:
    """Marker for a field that was not supplied."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class TaskChanges:
    """Fields to change on a task; anything left as UNSET is kept as is.

    ``tags`` is a full replacement of the task's tag set when present, and
    an empty list removes every tag.
    """

    title: str = UNSET
    description: str | None = UNSET
    project_id: int | None = UNSET
    due_date: datetime | None = UNSET
    status: TaskStatus = UNSET
    tags: list[str] = UNSET

    @classmethod
    def from_update(cls, payload: TaskUpdate) -> "TaskChanges":
        """Build changes from the fields actually present in an update request."""
        present = {name: getattr(payload, name) for name in payload.model_fields_set}
        # An explicit null tag list means "leave the tags alone"
        if "tags" in present and present["tags"] is None:
            del present["tags"]
        return cls(**present)

    def is_set(self, name: str) -> bool:
        return getattr(self, name) is not UNSET

    def column_values(self) -> dict[str, Any]:
        """Column assignments for the supplied scalar fields."""
        values = {}
        for field in fields(self):
            if field.name == "tags" or not self.is_set(field.name):
                continue
            value = getattr(self, field.name)
            if isinstance(value, TaskStatus):
                value = value.value
            values[field.name] = value
        return values
