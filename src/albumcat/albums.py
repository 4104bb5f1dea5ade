"""Album service: listing, search, gallery views and CRUD.

Reads follow a two-pass shape. The first pass filters, orders and pages
album ids in SQL; the second pass loads rows, owners and tags for exactly
those ids (see ``albumcat.relationships``).
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from albumcat.errors import FieldValidationError, NotFoundError
from albumcat.metadata import Album, AlbumTag, Photo, User
from albumcat.models.requests import AlbumCreateRequest, AlbumPatchRequest, AlbumUpdateRequest
from albumcat.pagination import Page, PageRequest
from albumcat.records import AlbumRecord
from albumcat.relationships import fetch_albums_with_relationships
from albumcat.search.criteria import DEFAULT_SORT_BY, AlbumCriteria, SortBy
from albumcat.search.filter_options import FilterOptions
from albumcat.search.filter_options import get_filter_options as _get_filter_options
from albumcat.search.ordering import AlbumGroup, group_albums, order_clauses
from albumcat.search.query_builder import AlbumQueryBuilder, build_field_order
from albumcat.settings import settings
from albumcat.tags import resolve_tag_ids

logger = logging.getLogger(__name__)

# Fields copied verbatim from request models onto Album rows
_SCALAR_FIELDS = (
    "name",
    "event",
    "override_date",
    "keywords",
    "description",
    "thumbnail",
    "thumbnail_content_type",
)


# ============================================================================
# Reads
# ============================================================================

def get_album(db: Session, album_id: int) -> Optional[AlbumRecord]:
    """Return one album with owner and tags, or None."""
    records = fetch_albums_with_relationships(db, [album_id])
    return records[0] if records else None


def get_album_thumbnail(db: Session, album_id: int) -> Optional[tuple]:
    """Return ``(bytes, content_type)`` for an album thumbnail, or None."""
    row = db.query(Album.thumbnail, Album.thumbnail_content_type).filter(Album.id == album_id).first()
    if row is None or row.thumbnail is None:
        return None
    return row.thumbnail, row.thumbnail_content_type or "application/octet-stream"


def list_albums(db: Session, page_request: PageRequest, eagerload: bool = True) -> Page[AlbumRecord]:
    """Page over all albums using ``"field,direction"`` sort specs.

    Args:
        db: Database session
        page_request: Page index, size and sort specs
        eagerload: Load tag sets; owners are always loaded

    Raises:
        FieldValidationError: Unknown sort field or direction
    """
    builder = AlbumQueryBuilder(db)
    query = builder.base_query()
    total = builder.get_total_count(query)
    ordered = query.order_by(*build_field_order(page_request.sort))
    ids = builder.apply_pagination(ordered, page_request.offset, page_request.size)
    items = fetch_albums_with_relationships(db, ids, with_tags=eagerload)
    return Page(items=items, total=total, page=page_request.page, size=page_request.size)


def search_albums(db: Session, criteria: AlbumCriteria, page_request: PageRequest) -> Page[AlbumRecord]:
    """Filter, order and page albums by search criteria."""
    builder = AlbumQueryBuilder(db, criteria)
    ids, total = builder.fetch_page_ids(page_request.offset, page_request.size)
    items = fetch_albums_with_relationships(db, ids)
    logger.info(
        "Album search keyword=%r event=%r year=%r tag=%r contributor=%r sort=%s matched=%s",
        criteria.keyword, criteria.event, criteria.year, criteria.tag_name,
        criteria.contributor_login, criteria.sort_by.value, total,
    )
    return Page(items=items, total=total, page=page_request.page, size=page_request.size)


def gallery_view(db: Session, sort_by: SortBy = DEFAULT_SORT_BY, limit: Optional[int] = None) -> List[AlbumRecord]:
    """All albums in gallery order.

    The result never exceeds the configured gallery cap. A positive ``limit``
    lowers it further; zero, negative and missing limits use the cap itself.
    """
    cap = settings.gallery_max_results
    if limit is not None and limit > 0:
        cap = min(limit, cap)
    builder = AlbumQueryBuilder(db, AlbumCriteria(sort_by=sort_by))
    ids = builder.apply_pagination(builder.ordered_query(), 0, cap)
    if len(ids) == cap:
        logger.warning("Gallery view truncated at %s albums", cap)
    return fetch_albums_with_relationships(db, ids)


def gallery_groups(db: Session, sort_by: SortBy = DEFAULT_SORT_BY, limit: Optional[int] = None) -> List[AlbumGroup]:
    """Gallery view split into labelled sections."""
    return group_albums(gallery_view(db, sort_by, limit), sort_by)


def list_albums_for_owner(db: Session, owner_login: str, sort_by: SortBy = DEFAULT_SORT_BY) -> List[AlbumRecord]:
    """Albums owned by exactly ``owner_login``, in gallery order."""
    ids = [
        row[0]
        for row in db.query(Album.id)
        .join(User, User.id == Album.user_id)
        .filter(User.login == owner_login)
        .order_by(*order_clauses(sort_by))
        .limit(settings.gallery_max_results)
        .all()
    ]
    return fetch_albums_with_relationships(db, ids)


def get_filter_options(db: Session) -> FilterOptions:
    return _get_filter_options(db)


# ============================================================================
# Writes
# ============================================================================

def _resolve_owner_id(db: Session, owner_login: Optional[str]) -> Optional[int]:
    """Return the user id for a login, creating the user on first use."""
    login = (owner_login or "").strip()
    if not login:
        return None
    user = db.query(User).filter(User.login == login).first()
    if user is None:
        user = User(login=login)
        db.add(user)
        db.flush()
        logger.info("Created user %s (%s)", user.id, login)
    return user.id


def _replace_tags(db: Session, album_id: int, tag_ids: List[int]) -> None:
    db.query(AlbumTag).filter(AlbumTag.album_id == album_id).delete(synchronize_session=False)
    for tag_id in tag_ids:
        db.add(AlbumTag(album_id=album_id, tag_id=tag_id))


def _get_album_row(db: Session, album_id: int) -> Album:
    album = db.query(Album).filter(Album.id == album_id).first()
    if album is None:
        raise NotFoundError("Album", album_id)
    return album


def _check_path_id(album_id: int, body_id: Optional[int]) -> None:
    if body_id is not None and body_id != album_id:
        raise FieldValidationError("id", f"Body id {body_id} does not match album {album_id}")


def create_album(db: Session, payload: AlbumCreateRequest, owner_login: Optional[str] = None) -> AlbumRecord:
    """Create an album.

    ``creation_date`` defaults to now. The owner is the payload's
    ``owner_login`` when given, else ``owner_login``.

    Raises:
        FieldValidationError: Payload carries an id, or names unknown tags
    """
    if payload.id is not None:
        raise FieldValidationError("id", "A new album cannot already have an id")
    tag_ids = resolve_tag_ids(db, payload.tag_ids)

    album = Album(creation_date=payload.creation_date or datetime.utcnow())
    for field_name in _SCALAR_FIELDS:
        setattr(album, field_name, getattr(payload, field_name))
    album.user_id = _resolve_owner_id(db, payload.owner_login or owner_login)
    db.add(album)
    db.flush()

    _replace_tags(db, album.id, tag_ids)
    db.commit()
    logger.info("Created album %s (%s)", album.id, album.name)
    return get_album(db, album.id)


def update_album(db: Session, album_id: int, payload: AlbumUpdateRequest) -> AlbumRecord:
    """Replace every writable field of an album. ``creation_date`` is kept.

    Raises:
        NotFoundError: No album with ``album_id``
        FieldValidationError: Body id mismatch or unknown tags
    """
    _check_path_id(album_id, payload.id)
    album = _get_album_row(db, album_id)
    tag_ids = resolve_tag_ids(db, payload.tag_ids)

    for field_name in _SCALAR_FIELDS:
        setattr(album, field_name, getattr(payload, field_name))
    album.user_id = _resolve_owner_id(db, payload.owner_login)
    _replace_tags(db, album.id, tag_ids)
    db.commit()
    logger.info("Updated album %s", album_id)
    return get_album(db, album_id)


def partial_update_album(db: Session, album_id: int, payload: AlbumPatchRequest) -> AlbumRecord:
    """Apply only the fields present in the payload. ``creation_date`` is kept.

    Raises:
        NotFoundError: No album with ``album_id``
        FieldValidationError: Body id mismatch, null name, or unknown tags
    """
    _check_path_id(album_id, payload.id)
    album = _get_album_row(db, album_id)
    changes = payload.model_dump(exclude_unset=True)

    if "name" in changes and changes["name"] is None:
        raise FieldValidationError("name", "Album name cannot be null")
    for field_name in _SCALAR_FIELDS:
        if field_name in changes:
            setattr(album, field_name, changes[field_name])
    if "owner_login" in changes:
        album.user_id = _resolve_owner_id(db, changes["owner_login"])
    if "tag_ids" in changes:
        _replace_tags(db, album.id, resolve_tag_ids(db, changes["tag_ids"] or []))

    db.commit()
    logger.info("Patched album %s fields=%s", album_id, sorted(changes))
    return get_album(db, album_id)


def delete_album(db: Session, album_id: int) -> None:
    """Delete an album and its tag links. Photos are detached, tags and users kept.

    Raises:
        NotFoundError: No album with ``album_id``
    """
    album = _get_album_row(db, album_id)
    db.query(AlbumTag).filter(AlbumTag.album_id == album_id).delete(synchronize_session=False)
    db.query(Photo).filter(Photo.album_id == album_id).update(
        {Photo.album_id: None}, synchronize_session=False
    )
    db.delete(album)
    db.commit()
    logger.info("Deleted album %s", album_id)
