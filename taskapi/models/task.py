"""Task model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from taskapi.database import Base
from taskapi.models.mixins import OwnedMixin, TimestampMixin
from taskapi.models.tag import task_tags

TASK_TITLE_MAX_LENGTH = 255


class Task(Base, OwnedMixin, TimestampMixin):
    """A user's task, optionally filed under one of their projects."""

    __tablename__ = "tasks"
    __table_args__ = (UniqueConstraint("user_id", "title", name="uq_tasks_user_title"),)

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(
        Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True
    )
    title = Column(String(TASK_TITLE_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=True, index=True)
    status = Column(String(20), nullable=True, index=True)  # TaskStatus value, NULL = no status

    # Relationships
    user = relationship("User", backref="tasks")
    project = relationship("Project", back_populates="tasks")
    tags = relationship("Tag", secondary=task_tags, back_populates="tasks", order_by="Tag.id")
