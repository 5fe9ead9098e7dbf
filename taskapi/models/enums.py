"""Enums for model fields."""

from enum import Enum


class TaskStatus(str, Enum):
    """Workflow status of a task.

    A task may also have no status at all (stored as NULL).
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, value: str | None) -> "TaskStatus | None":
        """Return the matching status, or None for anything unrecognised."""
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def choices(cls) -> str:
        """Comma-separated list of valid values, for error messages."""
        return ", ".join(status.value for status in cls)
