"""Photo reads, using the same two-pass tag loading as albums."""

from typing import Optional

from sqlalchemy.orm import Session

from albumcat.metadata import Photo
from albumcat.pagination import Page, PageRequest
from albumcat.records import PhotoRecord
from albumcat.relationships import fetch_photos_with_relationships


def list_photos(db: Session, page_request: PageRequest, album_id: Optional[int] = None) -> Page[PhotoRecord]:
    """Page over photos, newest upload first, optionally within one album."""
    query = db.query(Photo.id)
    if album_id is not None:
        query = query.filter(Photo.album_id == album_id)
    total = query.order_by(None).count()
    ids = [
        row[0]
        for row in query.order_by(Photo.upload_date.desc(), Photo.id.desc())
        .offset(page_request.offset)
        .limit(page_request.size)
        .all()
    ]
    items = fetch_photos_with_relationships(db, ids)
    return Page(items=items, total=total, page=page_request.page, size=page_request.size)


def get_photo(db: Session, photo_id: int) -> Optional[PhotoRecord]:
    records = fetch_photos_with_relationships(db, [photo_id])
    return records[0] if records else None
