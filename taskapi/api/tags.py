"""Tag API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from taskapi.api.dependencies import get_current_user
from taskapi.database import get_db
from taskapi.models.tag import Tag
from taskapi.models.user import User
from taskapi.schemas.tag import TagResponse
from taskapi.services.access import find_owned
from taskapi.services.task_query import escape_like

router = APIRouter(prefix="/api/v1/tags", tags=["tags"])


def get_user_tag(db: Session, tag_id: int, user: User) -> Tag:
    """Get a tag owned by the user."""
    tag = find_owned(db, Tag, tag_id, user.id)
    if not tag:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found")
    return tag


@router.get("", response_model=list[TagResponse])
def get_tags(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    search: str | None = Query(default=None, description="Search in tag names"),
):
    """Get the current user's tags ordered by name."""
    query = db.query(Tag).filter(Tag.user_id == current_user.id)

    search = (search or "").strip()
    if search:
        pattern = f"%{escape_like(search.lower())}%"
        query = query.filter(func.lower(Tag.name).like(pattern, escape="\\"))

    return query.order_by(Tag.name, Tag.id).all()


@router.get("/{tag_id}", response_model=TagResponse)
def get_tag(
    tag_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific tag."""
    return get_user_tag(db, tag_id, current_user)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tag(
    tag_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a tag and detach it from every task."""
    tag = get_user_tag(db, tag_id, current_user)

    db.delete(tag)
    db.commit()
