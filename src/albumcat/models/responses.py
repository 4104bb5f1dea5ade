"""Pydantic response models for API endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class TagResponse(BaseModel):
    """Tag identity and name."""
    id: int
    name: str

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    """Album owner."""
    id: int
    login: str

    class Config:
        from_attributes = True


class AlbumResponse(BaseModel):
    """Album with owner and tags."""
    id: int
    name: str
    event: Optional[str] = None
    creation_date: datetime
    override_date: Optional[datetime] = None
    effective_date: datetime
    keywords: Optional[str] = None
    description: Optional[str] = None
    has_thumbnail: bool = False
    thumbnail_content_type: Optional[str] = None
    user: Optional[UserResponse] = None
    tags: List[TagResponse] = []

    class Config:
        from_attributes = True


class AlbumGroupResponse(BaseModel):
    """Gallery section: a label and its albums in display order."""
    label: str
    albums: List[AlbumResponse]

    class Config:
        from_attributes = True


class FilterOptionsResponse(BaseModel):
    """Distinct values for filter menus."""
    events: List[str]
    years: List[int]
    tags: List[str]
    contributors: List[str]

    class Config:
        from_attributes = True


class PhotoResponse(BaseModel):
    """Photo with tags."""
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    upload_date: datetime
    capture_date: Optional[datetime] = None
    location: Optional[str] = None
    keywords: Optional[str] = None
    album_id: Optional[int] = None
    tags: List[TagResponse] = []

    class Config:
        from_attributes = True
