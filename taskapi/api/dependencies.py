"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskapi.database import get_db
from taskapi.models.user import User
from taskapi.services.auth import decode_user_id
from taskapi.services.task_query import TaskQuery
from taskapi.services.task_repository import TaskRepository

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    if credentials is None:
        raise _unauthorized("Not authenticated")

    user_id = decode_user_id(credentials.credentials)
    if user_id is None:
        raise _unauthorized("Invalid authentication credentials")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise _unauthorized("User not found")

    return user


def get_task_repository(
    db: Annotated[Session, Depends(get_db)],
) -> TaskRepository:
    """Get task repository bound to the request session."""
    return TaskRepository(db)


def get_task_query(
    db: Annotated[Session, Depends(get_db)],
) -> TaskQuery:
    """Get task query builder bound to the request session."""
    return TaskQuery(db)
