"""Router for photo reads."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from albumcat import photos as photo_service
from albumcat.dependencies import get_db
from albumcat.models.responses import PhotoResponse
from albumcat.pagination import PageRequest
from albumcat.routers._shared import _apply_page_headers, _serialize_photo

router = APIRouter(
    prefix="/api/v1/photos",
    tags=["photos"]
)


@router.get("", response_model=List[PhotoResponse])
async def list_photos(
    request: Request,
    response: Response,
    album_id: Optional[int] = Query(None, alias="albumId"),
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    """Page over photos, newest upload first."""
    result = photo_service.list_photos(db, PageRequest.of(page=page, size=size), album_id=album_id)
    _apply_page_headers(request, response, result)
    return result.map(_serialize_photo).items


@router.get("/{photo_id:int}", response_model=PhotoResponse)
async def get_photo(photo_id: int, db: Session = Depends(get_db)):
    record = photo_service.get_photo(db, photo_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Photo {photo_id} not found")
    return _serialize_photo(record)
