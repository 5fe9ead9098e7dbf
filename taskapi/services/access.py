"""Ownership checks for single-entity reads and writes."""

from typing import TypeVar

from sqlalchemy.orm import Session

from taskapi.database import Base

ModelT = TypeVar("ModelT", bound=Base)


def find_owned(db: Session, model: type[ModelT], entity_id: int, user_id: int) -> ModelT | None:
    """Return the entity when it exists and belongs to the user, otherwise None.

    A missing row and a row owned by someone else give the same answer, so
    callers cannot reveal that another user's entity exists.
    """
    return (
        db.query(model)
        .filter(
            model.id == entity_id,
            model.user_id == user_id,
        )
        .first()
    )
