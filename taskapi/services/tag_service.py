"""Tag reconciliation: tag names to tag rows for one user."""

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from taskapi.models.tag import TAG_NAME_MAX_LENGTH, Tag

logger = logging.getLogger(__name__)


class InvalidTagNameError(ValueError):
    """A tag name is longer than a tag can hold."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tag name cannot exceed {TAG_NAME_MAX_LENGTH} characters")


def normalize_tag_names(tag_names: Iterable[str]) -> list[str]:
    """Trim names, drop blanks and repeats, keep first-seen order.

    Matching stays case-sensitive: "urgent" and "Urgent" are different tags.
    Raises InvalidTagNameError for an oversized name before anything is read
    or written.
    """
    names: list[str] = []
    seen: set[str] = set()
    for raw_name in tag_names:
        name = raw_name.strip()
        if not name or name in seen:
            continue
        if len(name) > TAG_NAME_MAX_LENGTH:
            raise InvalidTagNameError(name)
        seen.add(name)
        names.append(name)
    return names


class TagReconciler:
    """Find-or-create tags by name within one user's scope."""

    def __init__(self, db: Session):
        self.db = db

    def reconcile(self, user_id: int, tag_names: Iterable[str]) -> list[int]:
        """Return tag ids for the names, in input order, creating missing tags."""
        return [tag.id for tag in self.resolve(user_id, tag_names)]

    def resolve(self, user_id: int, tag_names: Iterable[str]) -> list[Tag]:
        """Return Tag rows for the names, in input order, creating missing tags.

        New tags are flushed but not committed; the caller owns the transaction.
        """
        names = normalize_tag_names(tag_names)
        if not names:
            return []

        existing = {
            tag.name: tag
            for tag in self.db.query(Tag).filter(Tag.user_id == user_id, Tag.name.in_(names)).all()
        }

        tags = []
        created = []
        for name in names:
            tag = existing.get(name)
            if tag is None:
                tag = Tag(user_id=user_id, name=name)
                self.db.add(tag)
                existing[name] = tag
                created.append(name)
            tags.append(tag)

        if created:
            self.db.flush()
            logger.info(f"Created tags for user {user_id}: {created}")

        return tags
