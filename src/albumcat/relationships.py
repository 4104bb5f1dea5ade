"""Two-pass loading of records with their tag sets.

Paging a query that joins a to-many association multiplies rows and breaks
LIMIT/OFFSET. Callers therefore page over ids alone (first pass) and hand the
ordered id list to this module, which loads the rows and their tags with
separate id-keyed queries (second pass) and restores the caller's order.

Ids that vanished between the passes are dropped without error.
"""

import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, Iterator, List, Sequence

from sqlalchemy.orm import Session

from albumcat.metadata import Album, AlbumTag, Photo, PhotoTag, Tag, User
from albumcat.records import AlbumRecord, PhotoRecord, TagRef, UserRef

logger = logging.getLogger(__name__)

# Keeps IN lists under SQLite's bound-parameter limit
ID_CHUNK_SIZE = 500


def position_map(ids: Iterable[int]) -> Dict[int, int]:
    """Map each id to the index of its first occurrence."""
    positions: Dict[int, int] = {}
    for index, record_id in enumerate(ids):
        positions.setdefault(record_id, index)
    return positions


def chunked(ids: Sequence[int], size: int = ID_CHUNK_SIZE) -> Iterator[List[int]]:
    for start in range(0, len(ids), size):
        yield list(ids[start:start + size])


def load_tag_sets(db: Session, root_column, link_tag_column, ids: Sequence[int]) -> Dict[int, List[TagRef]]:
    """Load tags for the given root ids from a join table.

    Args:
        db: Database session
        root_column: Join-table column holding the root id (e.g. ``AlbumTag.album_id``)
        link_tag_column: Join-table column holding the tag id
        ids: Root ids to load tags for

    Returns:
        Dict of root id to tags, each list deduplicated and sorted by name
    """
    tags_by_root: Dict[int, Dict[int, TagRef]] = defaultdict(dict)
    for chunk in chunked(ids):
        rows = (
            db.query(root_column, Tag.id, Tag.name)
            .join(Tag, Tag.id == link_tag_column)
            .filter(root_column.in_(chunk))
            .all()
        )
        for root_id, tag_id, tag_name in rows:
            tags_by_root[root_id][tag_id] = TagRef(id=tag_id, name=tag_name)

    return {
        root_id: sorted(tags.values(), key=lambda tag: (tag.name, tag.id))
        for root_id, tags in tags_by_root.items()
    }


def fetch_bag_relationships(
    db: Session,
    ids: Sequence[int],
    load_roots: Callable[[Session, List[int]], Iterable],
    load_tags: Callable[[Session, List[int]], Dict[int, List[TagRef]]],
    with_tags: bool = True,
) -> List:
    """Load records for an ordered id list, attach tags, and restore order.

    Args:
        db: Database session
        ids: Ordered ids from the first pass (duplicates keep their first position)
        load_roots: Loads records (with a ``tags`` attribute) for a chunk of ids
        load_tags: Loads tag lists keyed by root id
        with_tags: When False, records are returned with empty tag lists

    Returns:
        Records in the order of ``ids``, one per id that still exists
    """
    positions = position_map(ids)
    if not positions:
        return []
    unique_ids = list(positions)

    records_by_id = {}
    for chunk in chunked(unique_ids):
        for record in load_roots(db, chunk):
            # A root query that fans out yields the same id more than once
            records_by_id.setdefault(record.id, record)

    if with_tags and records_by_id:
        tag_sets = load_tags(db, list(records_by_id))
        for record_id, record in records_by_id.items():
            record.tags = tag_sets.get(record_id, [])

    missing = len(unique_ids) - len(records_by_id)
    if missing:
        logger.debug("Skipped %s ids removed between passes", missing)

    return sorted(records_by_id.values(), key=lambda record: positions[record.id])


def _load_album_roots(db: Session, ids: List[int]) -> List[AlbumRecord]:
    rows = (
        db.query(
            Album.id,
            Album.name,
            Album.event,
            Album.creation_date,
            Album.override_date,
            Album.keywords,
            Album.description,
            Album.thumbnail_content_type,
            Album.thumbnail.isnot(None).label("has_thumbnail"),
            User.id.label("owner_id"),
            User.login.label("owner_login"),
        )
        .outerjoin(User, User.id == Album.user_id)
        .filter(Album.id.in_(ids))
        .all()
    )
    return [
        AlbumRecord(
            id=row.id,
            name=row.name,
            event=row.event,
            creation_date=row.creation_date,
            override_date=row.override_date,
            keywords=row.keywords,
            description=row.description,
            thumbnail_content_type=row.thumbnail_content_type,
            has_thumbnail=bool(row.has_thumbnail),
            user=UserRef(id=row.owner_id, login=row.owner_login) if row.owner_id is not None else None,
        )
        for row in rows
    ]


def _load_album_tags(db: Session, ids: List[int]) -> Dict[int, List[TagRef]]:
    return load_tag_sets(db, AlbumTag.album_id, AlbumTag.tag_id, ids)


def _load_photo_roots(db: Session, ids: List[int]) -> List[PhotoRecord]:
    rows = db.query(Photo).filter(Photo.id.in_(ids)).all()
    return [
        PhotoRecord(
            id=photo.id,
            title=photo.title,
            description=photo.description,
            upload_date=photo.upload_date,
            capture_date=photo.capture_date,
            location=photo.location,
            keywords=photo.keywords,
            album_id=photo.album_id,
        )
        for photo in rows
    ]


def _load_photo_tags(db: Session, ids: List[int]) -> Dict[int, List[TagRef]]:
    return load_tag_sets(db, PhotoTag.photo_id, PhotoTag.tag_id, ids)


def fetch_albums_with_relationships(
    db: Session,
    album_ids: Sequence[int],
    with_tags: bool = True,
) -> List[AlbumRecord]:
    """Load album records, with owner and tags, in the order of ``album_ids``."""
    return fetch_bag_relationships(db, album_ids, _load_album_roots, _load_album_tags, with_tags=with_tags)


def fetch_photos_with_relationships(db: Session, photo_ids: Sequence[int]) -> List[PhotoRecord]:
    """Load photo records with tags in the order of ``photo_ids``."""
    return fetch_bag_relationships(db, photo_ids, _load_photo_roots, _load_photo_tags)
