"""Tag lookups and creation."""

import logging
from typing import Iterable, List

from sqlalchemy.orm import Session

from albumcat.errors import FieldValidationError
from albumcat.metadata import Tag
from albumcat.records import TagRef

logger = logging.getLogger(__name__)


def list_tags(db: Session) -> List[TagRef]:
    rows = db.query(Tag.id, Tag.name).order_by(Tag.name.asc(), Tag.id.asc()).all()
    return [TagRef(id=row.id, name=row.name) for row in rows]


def create_tag(db: Session, name: str) -> TagRef:
    """Create a tag. Names are trimmed and must be unique."""
    normalized = (name or "").strip()
    if not normalized:
        raise FieldValidationError("name", "Tag name cannot be blank")
    existing = db.query(Tag.id).filter(Tag.name == normalized).first()
    if existing:
        raise FieldValidationError("name", f"Tag '{normalized}' already exists")

    tag = Tag(name=normalized)
    db.add(tag)
    db.commit()
    db.refresh(tag)
    logger.info("Created tag %s (%s)", tag.id, tag.name)
    return TagRef(id=tag.id, name=tag.name)


def resolve_tag_ids(db: Session, tag_ids: Iterable[int]) -> List[int]:
    """Deduplicate tag ids, preserving order, and verify they exist.

    Raises:
        FieldValidationError: One or more ids do not name a tag
    """
    unique_ids = list(dict.fromkeys(tag_ids or []))
    if not unique_ids:
        return []
    found = {row[0] for row in db.query(Tag.id).filter(Tag.id.in_(unique_ids)).all()}
    missing = [tag_id for tag_id in unique_ids if tag_id not in found]
    if missing:
        raise FieldValidationError("tag_ids", f"Unknown tag id(s): {', '.join(str(i) for i in missing)}")
    return unique_ids
