"""Dashboard API endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskapi.api.dependencies import get_current_user
from taskapi.database import get_db
from taskapi.models.user import User
from taskapi.schemas.dashboard import DashboardSummary
from taskapi.services.dashboard import summarize

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardSummary)
def get_dashboard(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get task counts grouped by status for the current user."""
    return summarize(db, current_user.id)
