"""Router for album listing, search, gallery views and CRUD."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from albumcat import albums as album_service
from albumcat.dependencies import get_current_login, get_db, require_current_login
from albumcat.errors import AlbumcatError
from albumcat.models.requests import AlbumCreateRequest, AlbumPatchRequest, AlbumUpdateRequest
from albumcat.models.responses import AlbumGroupResponse, AlbumResponse, FilterOptionsResponse
from albumcat.pagination import PageRequest
from albumcat.routers._shared import (
    WARNING_HEADER,
    _apply_page_headers,
    _http_error,
    _serialize_album,
)
from albumcat.search.criteria import normalize_criteria, parse_sort_by

router = APIRouter(
    prefix="/api/v1/albums",
    tags=["albums"]
)


def _warn_unrecognized_sort(response: Response, raw_sort_by: Optional[str], recognized: bool) -> None:
    if not recognized:
        response.headers[WARNING_HEADER] = f"Unrecognized sortBy {raw_sort_by!r}; using EVENT"


# ============================================================================
# Listing and search
# ============================================================================

@router.get("", response_model=List[AlbumResponse])
async def list_albums(
    request: Request,
    response: Response,
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None),
    sort: List[str] = Query(default=[]),
    eagerload: bool = Query(True),
    db: Session = Depends(get_db),
):
    """Page over all albums.

    ``sort`` takes ``field,asc|desc`` and may repeat. Totals and navigation
    links are returned in the ``X-Total-Count`` and ``Link`` headers.
    """
    page_request = PageRequest.of(page=page, size=size, sort=sort)
    try:
        result = album_service.list_albums(db, page_request, eagerload=eagerload)
    except AlbumcatError as exc:
        raise _http_error(exc)
    _apply_page_headers(request, response, result)
    return result.map(_serialize_album).items


@router.get("/search", response_model=List[AlbumResponse])
async def search_albums(
    request: Request,
    response: Response,
    keyword: Optional[str] = Query(None),
    event: Optional[str] = Query(None),
    year: Optional[str] = Query(None),
    tag_name: Optional[str] = Query(None, alias="tagName"),
    contributor_login: Optional[str] = Query(None, alias="contributorLogin"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    """Search albums. Blank parameters are ignored; all others are ANDed."""
    try:
        criteria = normalize_criteria(
            keyword=keyword,
            event=event,
            year=year,
            tag_name=tag_name,
            contributor_login=contributor_login,
            sort_by=sort_by,
        )
        result = album_service.search_albums(db, criteria, PageRequest.of(page=page, size=size))
    except AlbumcatError as exc:
        raise _http_error(exc)

    _warn_unrecognized_sort(response, sort_by, criteria.sort_key_recognized)
    _apply_page_headers(request, response, result)
    return result.map(_serialize_album).items


@router.get("/gallery", response_model=List[AlbumResponse])
async def gallery(
    response: Response,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    db: Session = Depends(get_db),
):
    """All albums in EVENT or DATE gallery order (capped, unpaginated)."""
    resolved, recognized = parse_sort_by(sort_by)
    _warn_unrecognized_sort(response, sort_by, recognized)
    return [_serialize_album(record) for record in album_service.gallery_view(db, resolved)]


@router.get("/gallery/groups", response_model=List[AlbumGroupResponse])
async def gallery_groups(
    response: Response,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    db: Session = Depends(get_db),
):
    """Gallery view split into labelled sections (event or month)."""
    resolved, recognized = parse_sort_by(sort_by)
    _warn_unrecognized_sort(response, sort_by, recognized)
    groups = album_service.gallery_groups(db, resolved)
    return [
        AlbumGroupResponse(
            label=group.label,
            albums=[_serialize_album(record) for record in group.albums],
        )
        for group in groups
    ]


@router.get("/filter-options", response_model=FilterOptionsResponse)
async def filter_options(db: Session = Depends(get_db)):
    """Distinct events, years, tags and contributors across all albums."""
    options = album_service.get_filter_options(db)
    return FilterOptionsResponse(
        events=options.events,
        years=options.years,
        tags=options.tags,
        contributors=options.contributors,
    )


@router.get("/mine", response_model=List[AlbumResponse])
async def my_albums(
    response: Response,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    login: str = Depends(require_current_login),
    db: Session = Depends(get_db),
):
    """Albums owned by the calling user."""
    resolved, recognized = parse_sort_by(sort_by)
    _warn_unrecognized_sort(response, sort_by, recognized)
    records = album_service.list_albums_for_owner(db, login, resolved)
    return [_serialize_album(record) for record in records]


# ============================================================================
# Single album
# ============================================================================

@router.get("/{album_id:int}", response_model=AlbumResponse)
async def get_album(album_id: int, db: Session = Depends(get_db)):
    record = album_service.get_album(db, album_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Album {album_id} not found")
    return _serialize_album(record)


@router.get("/{album_id:int}/thumbnail")
async def get_album_thumbnail(album_id: int, db: Session = Depends(get_db)):
    """Raw thumbnail bytes with their stored content type."""
    thumbnail = album_service.get_album_thumbnail(db, album_id)
    if thumbnail is None:
        raise HTTPException(status_code=404, detail=f"Album {album_id} has no thumbnail")
    content, content_type = thumbnail
    return Response(content=content, media_type=content_type)


@router.post("", response_model=AlbumResponse, status_code=status.HTTP_201_CREATED)
async def create_album(
    payload: AlbumCreateRequest,
    response: Response,
    login: Optional[str] = Depends(get_current_login),
    db: Session = Depends(get_db),
):
    """Create an album.

    Ownership precedence: an ``owner_login`` in the body wins over the
    ``X-User-Login`` caller, so a client may file an album under another
    login. Without either, the album is unowned. Unknown logins are created
    on first use.
    """
    try:
        record = album_service.create_album(db, payload, owner_login=login)
    except AlbumcatError as exc:
        raise _http_error(exc)
    response.headers["Location"] = f"{router.prefix}/{record.id}"
    return _serialize_album(record)


@router.put("/{album_id:int}", response_model=AlbumResponse)
async def update_album(album_id: int, payload: AlbumUpdateRequest, db: Session = Depends(get_db)):
    try:
        record = album_service.update_album(db, album_id, payload)
    except AlbumcatError as exc:
        raise _http_error(exc)
    return _serialize_album(record)


@router.patch("/{album_id:int}", response_model=AlbumResponse)
async def partial_update_album(album_id: int, payload: AlbumPatchRequest, db: Session = Depends(get_db)):
    try:
        record = album_service.partial_update_album(db, album_id, payload)
    except AlbumcatError as exc:
        raise _http_error(exc)
    return _serialize_album(record)


@router.delete("/{album_id:int}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_album(album_id: int, db: Session = Depends(get_db)):
    try:
        album_service.delete_album(db, album_id)
    except AlbumcatError as exc:
        raise _http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
