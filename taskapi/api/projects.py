"""Project API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from taskapi.api.dependencies import get_current_user
from taskapi.database import get_db
from taskapi.models.project import Project
from taskapi.models.task import Task
from taskapi.models.user import User
from taskapi.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from taskapi.services.access import find_owned
from taskapi.services.task_query import escape_like

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


def get_user_project(db: Session, project_id: int, user: User) -> Project:
    """Get a project owned by the user."""
    project = find_owned(db, Project, project_id, user.id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


@router.get("", response_model=list[ProjectResponse])
def get_projects(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    search: str | None = Query(default=None, description="Search in name and description"),
):
    """Get the current user's projects ordered by name."""
    query = db.query(Project).filter(Project.user_id == current_user.id)

    search = (search or "").strip()
    if search:
        pattern = f"%{escape_like(search.lower())}%"
        query = query.filter(
            or_(
                func.lower(Project.name).like(pattern, escape="\\"),
                func.lower(Project.description).like(pattern, escape="\\"),
            )
        )

    return query.order_by(Project.name, Project.id).all()


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    project_data: ProjectCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new project."""
    project = Project(
        user_id=current_user.id,
        name=project_data.name,
        description=project_data.description,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific project."""
    return get_user_project(db, project_id, current_user)


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: int,
    project_data: ProjectUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a project."""
    project = get_user_project(db, project_id, current_user)

    if project_data.name is not None:
        project.name = project_data.name
    if "description" in project_data.model_fields_set:
        project.description = project_data.description

    db.commit()
    db.refresh(project)
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a project. Its tasks are kept and end up without a project."""
    project = get_user_project(db, project_id, current_user)

    db.query(Task).filter(Task.project_id == project.id).update({Task.project_id: None})

    db.delete(project)
    db.commit()
