"""Per-user task status summary."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from taskapi.models.enums import TaskStatus
from taskapi.models.task import Task
from taskapi.schemas.dashboard import DashboardSummary


def summarize(db: Session, user_id: int) -> DashboardSummary:
    """Count the user's tasks per status with a single grouped query.

    Tasks without a status fall outside every bucket and are not part of the total.
    """
    counts = dict(
        db.query(Task.status, func.count(Task.id))
        .filter(Task.user_id == user_id)
        .group_by(Task.status)
        .all()
    )

    todo = counts.get(TaskStatus.TODO.value, 0)
    in_progress = counts.get(TaskStatus.IN_PROGRESS.value, 0)
    done = counts.get(TaskStatus.DONE.value, 0)

    return DashboardSummary(
        total=todo + in_progress + done,
        todo=todo,
        in_progress=in_progress,
        done=done,
    )
