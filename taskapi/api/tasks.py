"""Task API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from taskapi.api.dependencies import get_current_user, get_task_query, get_task_repository
from taskapi.api.errors import unwrap
from taskapi.config import get_settings
from taskapi.database import get_db
from taskapi.models.task import Task
from taskapi.models.user import User
from taskapi.schemas.task import TaskCreate, TaskPage, TaskResponse, TaskUpdate
from taskapi.services.access import find_owned
from taskapi.services.task_changes import TaskChanges
from taskapi.services.task_query import PageRequest, TaskFilters, TaskQuery, TaskSort
from taskapi.services.task_repository import TASK_NOT_FOUND, TaskRepository

settings = get_settings()

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


def get_user_task(db: Session, task_id: int, user: User) -> Task:
    """Get a task owned by the user.

    Someone else's task is reported exactly like a task that does not exist.
    """
    task = find_owned(db, Task, task_id, user.id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return task


@router.get("", response_model=TaskPage)
def get_tasks(
    current_user: Annotated[User, Depends(get_current_user)],
    task_query: Annotated[TaskQuery, Depends(get_task_query)],
    search: str | None = Query(default=None, description="Search in title and description"),
    task_status: str | None = Query(
        default=None, alias="status", description="todo, in-progress or done"
    ),
    project_id: str | None = Query(
        default=None, description="Project id, or 'none' for tasks without a project"
    ),
    tags: str | None = Query(default=None, description="Comma-separated tag names"),
    sort: str | None = Query(
        default=None, description="due_date, created_at or title; prefix '-' for descending"
    ),
    per_page: int | None = Query(default=None, description="Items per page (max 100)"),
    page: int = Query(default=1, description="Page number"),
):
    """List the current user's tasks with filtering, sorting and pagination."""
    result = task_query.list(
        current_user.id,
        filters=TaskFilters.from_params(
            search=search, status=task_status, project_id=project_id, tags=tags
        ),
        sort=TaskSort.parse(sort),
        page=PageRequest.from_params(
            page=page,
            per_page=per_page,
            default_size=settings.default_per_page,
            max_size=settings.max_per_page,
        ),
    )

    return TaskPage(
        current_page=result.page.number,
        items=[TaskResponse.model_validate(task) for task in result.items],
        per_page=result.page.size,
        total=result.total,
        total_pages=result.total_pages,
    )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    repository: Annotated[TaskRepository, Depends(get_task_repository)],
):
    """Create a new task; tag names that don't exist yet are created."""
    task = unwrap(repository.create(current_user.id, task_data))
    return TaskResponse.model_validate(task)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific task with its project and tags."""
    return TaskResponse.model_validate(get_user_task(db, task_id, current_user))


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    repository: Annotated[TaskRepository, Depends(get_task_repository)],
):
    """Update the supplied fields of a task. A tag list replaces all current tags."""
    get_user_task(db, task_id, current_user)

    task = unwrap(repository.update(task_id, TaskChanges.from_update(task_data)))
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    repository: Annotated[TaskRepository, Depends(get_task_repository)],
):
    """Delete a task. Its tags remain available for reuse."""
    get_user_task(db, task_id, current_user)

    unwrap(repository.delete(task_id))
    return {"message": "Task deleted successfully"}
