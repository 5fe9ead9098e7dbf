"""Pydantic schemas for API requests and responses."""

from taskapi.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from taskapi.schemas.dashboard import DashboardSummary
from taskapi.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from taskapi.schemas.tag import TagResponse
from taskapi.schemas.task import TaskCreate, TaskPage, TaskResponse, TaskUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "DashboardSummary",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "TagResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskPage",
]
