"""Filtered, sorted and paginated task listings."""

import math
from dataclasses import dataclass

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session, selectinload

from taskapi.models.enums import TaskStatus
from taskapi.models.tag import Tag
from taskapi.models.task import Task

SORTABLE_FIELDS = ("due_date", "created_at", "title")
DEFAULT_SORT = "-created_at"
DEFAULT_PER_PAGE = 15
MAX_PER_PAGE = 100
NO_PROJECT_TOKENS = ("none", "null")
# Keeps (page - 1) * size inside a signed 64-bit OFFSET
MAX_PAGE = 10**9


@dataclass(frozen=True)
class TaskSort:
    """Sort field and direction, parsed from tokens like "title" or "-due_date"."""

    field: str
    descending: bool = False

    @classmethod
    def parse(cls, token: str | None) -> "TaskSort":
        """Parse a sort token; an unknown field falls back to the default sort."""
        token = (token or "").strip()
        descending = token.startswith("-")
        field = token[1:] if descending else token
        if field not in SORTABLE_FIELDS:
            return cls.parse(DEFAULT_SORT)
        return cls(field=field, descending=descending)


@dataclass(frozen=True)
class TaskFilters:
    """Optional narrowing criteria for a task listing."""

    search: str | None = None
    status: TaskStatus | None = None
    project_id: int | None = None
    without_project: bool = False
    tag_names: tuple[str, ...] = ()

    @classmethod
    def from_params(
        cls,
        search: str | None = None,
        status: str | None = None,
        project_id: str | None = None,
        tags: str | None = None,
    ) -> "TaskFilters":
        """Build filters from raw query parameters.

        Unrecognised status and project values are ignored rather than rejected.
        """
        parsed_project_id = None
        without_project = False
        if project_id is not None:
            project_token = project_id.strip().lower()
            if project_token in NO_PROJECT_TOKENS:
                without_project = True
            elif project_token.isascii() and project_token.isdigit():
                parsed_project_id = int(project_token)

        tag_names: tuple[str, ...] = ()
        if tags:
            tag_names = tuple(dict.fromkeys(name.strip() for name in tags.split(",") if name.strip()))

        return cls(
            search=(search or "").strip() or None,
            status=TaskStatus.parse(status) if status else None,
            project_id=parsed_project_id,
            without_project=without_project,
            tag_names=tag_names,
        )


@dataclass(frozen=True)
class PageRequest:
    """1-indexed page number and page size."""

    number: int = 1
    size: int = DEFAULT_PER_PAGE

    @classmethod
    def from_params(
        cls,
        page: int | None = None,
        per_page: int | None = None,
        default_size: int = DEFAULT_PER_PAGE,
        max_size: int = MAX_PER_PAGE,
    ) -> "PageRequest":
        """Clamp raw paging parameters into range instead of rejecting them."""
        size = default_size if per_page is None else per_page
        return cls(number=min(max(page or 1, 1), MAX_PAGE), size=min(max(size, 1), max_size))

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.size


@dataclass
class PagedTasks:
    """A page of tasks plus the totals needed to render pagination."""

    items: list[Task]
    total: int
    page: PageRequest

    @property
    def total_pages(self) -> int:
        return max(math.ceil(self.total / self.page.size), 1)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally (escape char "\\")."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class TaskQuery:
    """Builds task listings scoped to a single user."""

    def __init__(self, db: Session):
        self.db = db

    def build(self, user_id: int, filters: TaskFilters, sort: TaskSort) -> Query:
        """Return the filtered and ordered query, without paging applied."""
        query = self.db.query(Task).filter(Task.user_id == user_id)

        if filters.search:
            pattern = f"%{escape_like(filters.search.lower())}%"
            query = query.filter(
                or_(
                    func.lower(Task.title).like(pattern, escape="\\"),
                    func.lower(Task.description).like(pattern, escape="\\"),
                )
            )

        if filters.status is not None:
            query = query.filter(Task.status == filters.status.value)

        if filters.without_project:
            query = query.filter(Task.project_id.is_(None))
        elif filters.project_id is not None:
            query = query.filter(Task.project_id == filters.project_id)

        if filters.tag_names:
            # Only the requester's own tags can match, whatever their names
            query = query.filter(
                Task.tags.any(Tag.name.in_(filters.tag_names) & (Tag.user_id == user_id))
            )

        column = getattr(Task, sort.field)
        ordering = column.desc() if sort.descending else column.asc()
        if sort.field == "due_date":
            ordering = ordering.nulls_last()

        # Ties keep insertion order so that pages never overlap
        return query.order_by(ordering, Task.id.asc())

    def list(
        self,
        user_id: int,
        filters: TaskFilters | None = None,
        sort: TaskSort | None = None,
        page: PageRequest | None = None,
    ) -> PagedTasks:
        """Return one page of the user's tasks with projects and tags loaded."""
        filters = filters or TaskFilters()
        sort = sort or TaskSort.parse(DEFAULT_SORT)
        page = page or PageRequest()

        query = self.build(user_id, filters, sort)
        total = query.order_by(None).count()
        items = (
            query.options(selectinload(Task.project), selectinload(Task.tags))
            .offset(page.offset)
            .limit(page.size)
            .all()
        )
        return PagedTasks(items=items, total=total, page=page)
