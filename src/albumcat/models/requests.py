"""Pydantic request models for API endpoints."""

import base64
import binascii
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _decode_thumbnail(value):
    if value is None or isinstance(value, bytes):
        return value
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("thumbnail must be base64 encoded")


class AlbumInputModel(BaseModel):
    """Normalizes album input: naive UTC datetimes, base64 thumbnails."""

    @field_validator("creation_date", "override_date", check_fields=False)
    @classmethod
    def normalize_dates(cls, value):
        return _to_naive_utc(value)

    @field_validator("thumbnail", mode="before", check_fields=False)
    @classmethod
    def decode_thumbnail(cls, value):
        return _decode_thumbnail(value)


class AlbumFields(AlbumInputModel):
    """Writable album fields shared by create and full update."""
    name: str = Field(..., min_length=3, max_length=255)
    event: Optional[str] = Field(None, max_length=255)
    creation_date: Optional[datetime] = None
    override_date: Optional[datetime] = None
    keywords: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    thumbnail: Optional[bytes] = None
    thumbnail_content_type: Optional[str] = Field(None, max_length=255)
    owner_login: Optional[str] = Field(None, min_length=1, max_length=50)
    tag_ids: List[int] = Field(default_factory=list)


class AlbumCreateRequest(AlbumFields):
    """Request to create an album. ``id`` must be absent."""
    id: Optional[int] = None


class AlbumUpdateRequest(AlbumFields):
    """Full replacement of an album's writable fields.

    ``creation_date`` is accepted but ignored; it is fixed at creation.
    """
    id: Optional[int] = None


class AlbumPatchRequest(AlbumInputModel):
    """Partial album update. Only fields present in the body are applied."""
    id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=3, max_length=255)
    event: Optional[str] = Field(None, max_length=255)
    creation_date: Optional[datetime] = None
    override_date: Optional[datetime] = None
    keywords: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    thumbnail: Optional[bytes] = None
    thumbnail_content_type: Optional[str] = Field(None, max_length=255)
    owner_login: Optional[str] = Field(None, min_length=1, max_length=50)
    tag_ids: Optional[List[int]] = None


class TagCreateRequest(BaseModel):
    """Request to create a tag."""
    name: str = Field(..., min_length=1, max_length=255)
