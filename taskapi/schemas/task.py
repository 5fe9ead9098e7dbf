"""Task schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskapi.models.enums import TaskStatus
from taskapi.models.tag import TAG_NAME_MAX_LENGTH
from taskapi.models.task import TASK_TITLE_MAX_LENGTH
from taskapi.schemas.project import ProjectResponse
from taskapi.schemas.tag import TagResponse

TITLE_REQUIRED = "Task title is required"
TITLE_TOO_LONG = f"Task title cannot exceed {TASK_TITLE_MAX_LENGTH} characters"
TAG_TOO_LONG = f"Tag name cannot exceed {TAG_NAME_MAX_LENGTH} characters"
STATUS_INVALID = f"Status must be one of: {TaskStatus.choices()}"
DUE_DATE_IN_PAST = "Due date must be today or a future date"


def _clean_title(value):
    if value is None:
        raise ValueError(TITLE_REQUIRED)
    if not isinstance(value, str):
        return value
    value = value.strip()
    if not value:
        raise ValueError(TITLE_REQUIRED)
    if len(value) > TASK_TITLE_MAX_LENGTH:
        raise ValueError(TITLE_TOO_LONG)
    return value


def _check_status(value):
    if value is None or TaskStatus.parse(value) is None:
        raise ValueError(STATUS_INVALID)
    return value


def _check_tag_names(value):
    if not isinstance(value, list):
        return value
    if any(isinstance(name, str) and len(name.strip()) > TAG_NAME_MAX_LENGTH for name in value):
        raise ValueError(TAG_TOO_LONG)
    return value


class TaskCreate(BaseModel):
    """Create a new task.

    Leaving ``status`` out creates a task with no status, which is not the same
    as ``todo``. ``tags`` holds tag names; missing tags are created.
    """

    title: str
    description: str | None = None
    project_id: int | None = None
    due_date: datetime | None = None
    status: TaskStatus | None = None
    tags: list[str] | None = None

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, value):
        return _clean_title(value)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value):
        if value is None:
            return value
        return _check_status(value)

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, value):
        return _check_tag_names(value)

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return value
        now = datetime.now(value.tzinfo) if value.tzinfo else datetime.now()
        if value.date() < now.date():
            raise ValueError(DUE_DATE_IN_PAST)
        return value


class TaskUpdate(BaseModel):
    """Partially update a task.

    Only fields present in the request body are applied. ``title`` and
    ``status`` may not be cleared; ``tags`` replaces the whole tag set, and an
    explicit ``null`` leaves the tags untouched.
    """

    title: str | None = None
    description: str | None = None
    project_id: int | None = None
    due_date: datetime | None = None
    status: TaskStatus | None = None
    tags: list[str] | None = None

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, value):
        return _clean_title(value)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value):
        return _check_status(value)

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, value):
        return _check_tag_names(value)


class TaskResponse(BaseModel):
    """Task response with its project and tags embedded."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    project_id: int | None
    title: str
    description: str | None
    due_date: datetime | None
    status: str | None
    created_at: datetime
    updated_at: datetime
    project: ProjectResponse | None = None
    tags: list[TagResponse] = Field(default_factory=list)


class TaskPage(BaseModel):
    """One page of a task listing."""

    current_page: int
    items: list[TaskResponse]
    per_page: int
    total: int
    total_pages: int
