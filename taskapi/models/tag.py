"""Tag model and the task/tag association table."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table, UniqueConstraint
from sqlalchemy.orm import relationship

from taskapi.database import Base
from taskapi.models.mixins import OwnedMixin, TimestampMixin

TAG_NAME_MAX_LENGTH = 50

# Many-to-many join; the composite primary key forbids duplicate pairs
task_tags = Table(
    "task_tags",
    Base.metadata,
    Column("task_id", Integer, ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base, OwnedMixin, TimestampMixin):
    """A user's tag. Names are unique per user and compared case-sensitively."""

    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_tags_user_name"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(TAG_NAME_MAX_LENGTH), nullable=False)

    # Relationships
    user = relationship("User", backref="tags")
    tasks = relationship("Task", secondary=task_tags, back_populates="tags")
