"""Task persistence: create, read, update and delete with tag synchronisation."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from taskapi.models.project import Project
from taskapi.models.task import Task
from taskapi.schemas.task import TaskCreate
from taskapi.services.access import find_owned
from taskapi.services.results import NotFound, Result, StorageFailed, Success, ValidationFailed
from taskapi.services.tag_service import InvalidTagNameError, TagReconciler, normalize_tag_names
from taskapi.services.task_changes import TaskChanges

logger = logging.getLogger(__name__)

TITLE_TAKEN = "You already have a task with this title"
PROJECT_MISSING = "Selected project does not exist"
TASK_NOT_FOUND = "Task not found"


class TaskRepository:
    """Owns every write to tasks and their tag associations.

    Writes are validated before anything touches the session, and each write
    commits once: the task row and its tag set change together or not at all.
    """

    def __init__(self, db: Session, reconciler: TagReconciler | None = None):
        self.db = db
        self.reconciler = reconciler or TagReconciler(db)

    def find_by_id(self, task_id: int) -> Task | None:
        """Get a task by id, regardless of owner."""
        return self.db.query(Task).filter(Task.id == task_id).first()

    def create(self, user_id: int, data: TaskCreate) -> Result:
        """Create a task for the user; ``data.tags`` (if given) becomes its tag set."""
        failure = self._validate(user_id, title=data.title, project_id=data.project_id, tags=data.tags)
        if failure:
            return failure

        task = Task(
            user_id=user_id,
            project_id=data.project_id,
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            status=data.status.value if data.status else None,
        )
        try:
            self.db.add(task)
            self.db.flush()
            if data.tags is not None:
                task.tags = self.reconciler.resolve(user_id, data.tags)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return self._integrity_failure(user_id, data.title, exclude_id=None)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to create task for user {user_id}")
            return StorageFailed("Error creating task")

        self.db.refresh(task)
        logger.info(f"Created task {task.id} for user {user_id}")
        return Success(task)

    def update(self, task_id: int, changes: TaskChanges) -> Result:
        """Apply the supplied fields; a supplied tag list replaces the whole set."""
        task = self.find_by_id(task_id)
        if task is None:
            return NotFound(TASK_NOT_FOUND)

        user_id = task.user_id
        failure = self._validate(
            user_id,
            title=changes.title if changes.is_set("title") else None,
            project_id=changes.project_id if changes.is_set("project_id") else None,
            tags=changes.tags if changes.is_set("tags") else None,
            exclude_id=task.id,
        )
        if failure:
            return failure

        try:
            for name, value in changes.column_values().items():
                setattr(task, name, value)
            if changes.is_set("tags"):
                task.tags = self.reconciler.resolve(user_id, changes.tags)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return self._integrity_failure(user_id, changes.title or None, exclude_id=task_id)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to update task {task_id}")
            return StorageFailed("Error updating task")

        self.db.refresh(task)
        logger.info(f"Updated task {task_id}: {sorted(changes.column_values())}")
        return Success(task)

    def delete(self, task_id: int) -> Result:
        """Delete a task and its tag associations; the tags themselves are kept."""
        task = self.find_by_id(task_id)
        if task is None:
            return NotFound(TASK_NOT_FOUND)

        try:
            self.db.delete(task)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to delete task {task_id}")
            return StorageFailed("Error deleting task")

        logger.info(f"Deleted task {task_id}")
        return Success(True)

    def title_taken(self, user_id: int, title: str, exclude_id: int | None = None) -> bool:
        """Check whether the user already has another task with this title."""
        query = self.db.query(Task.id).filter(Task.user_id == user_id, Task.title == title)
        if exclude_id is not None:
            query = query.filter(Task.id != exclude_id)
        return query.first() is not None

    def _validate(
        self,
        user_id: int,
        title: str | None = None,
        project_id: int | None = None,
        tags: list[str] | None = None,
        exclude_id: int | None = None,
    ) -> ValidationFailed | None:
        errors: dict[str, list[str]] = {}

        if title is not None and self.title_taken(user_id, title, exclude_id):
            errors.setdefault("title", []).append(TITLE_TAKEN)

        if project_id is not None and find_owned(self.db, Project, project_id, user_id) is None:
            errors.setdefault("project_id", []).append(PROJECT_MISSING)

        if tags is not None:
            try:
                normalize_tag_names(tags)
            except InvalidTagNameError as e:
                errors.setdefault("tags", []).append(str(e))

        return ValidationFailed(errors) if errors else None

    def _integrity_failure(self, user_id: int, title: str | None, exclude_id: int | None) -> Result:
        # A concurrent request may have taken the title between check and commit
        if title is not None and self.title_taken(user_id, title, exclude_id):
            return ValidationFailed.on("title", TITLE_TAKEN)
        logger.exception(f"Integrity error writing task for user {user_id}")
        return StorageFailed("Conflicting write, please retry")
