"""Project model."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from taskapi.database import Base
from taskapi.models.mixins import OwnedMixin, TimestampMixin


class Project(Base, OwnedMixin, TimestampMixin):
    """A user's project grouping tasks."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", backref="projects")
    tasks = relationship("Task", back_populates="project")
