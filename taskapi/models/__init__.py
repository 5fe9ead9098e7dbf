"""SQLAlchemy models."""

from taskapi.models.project import Project
from taskapi.models.tag import Tag, task_tags
from taskapi.models.task import Task
from taskapi.models.user import User

__all__ = [
    "User",
    "Project",
    "Tag",
    "Task",
    "task_tags",
]
