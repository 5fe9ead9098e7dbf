"""Outcomes returned by repository write operations.

Every operation returns exactly one of these instead of raising, and the HTTP
layer turns each kind into its own response shape.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Success:
    """The operation applied in full."""

    value: Any = None


@dataclass(frozen=True)
class ValidationFailed:
    """Input was rejected before anything was written."""

    errors: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def on(cls, field_name: str, message: str) -> "ValidationFailed":
        return cls({field_name: [message]})


@dataclass(frozen=True)
class NotFound:
    """The entity does not exist."""

    message: str = "Not found"


@dataclass(frozen=True)
class StorageFailed:
    """The database refused the write; nothing was applied."""

    message: str


Result = Success | ValidationFailed | NotFound | StorageFailed
