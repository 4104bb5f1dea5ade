"""Router for tag listing and creation."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from albumcat import tags as tag_service
from albumcat.dependencies import get_db
from albumcat.errors import AlbumcatError
from albumcat.models.requests import TagCreateRequest
from albumcat.models.responses import TagResponse
from albumcat.routers._shared import _http_error

router = APIRouter(
    prefix="/api/v1/tags",
    tags=["tags"]
)


@router.get("", response_model=List[TagResponse])
async def list_tags(db: Session = Depends(get_db)):
    """All tags by name."""
    return [TagResponse.model_validate(tag) for tag in tag_service.list_tags(db)]


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(payload: TagCreateRequest, db: Session = Depends(get_db)):
    try:
        tag = tag_service.create_tag(db, payload.name)
    except AlbumcatError as exc:
        raise _http_error(exc)
    return TagResponse.model_validate(tag)
