"""Pydantic models for API requests and responses."""

from albumcat.models.requests import (
    AlbumCreateRequest,
    AlbumPatchRequest,
    AlbumUpdateRequest,
    TagCreateRequest,
)
from albumcat.models.responses import (
    AlbumGroupResponse,
    AlbumResponse,
    FilterOptionsResponse,
    PhotoResponse,
    TagResponse,
    UserResponse,
)

__all__ = [
    "AlbumCreateRequest",
    "AlbumPatchRequest",
    "AlbumUpdateRequest",
    "TagCreateRequest",
    "AlbumGroupResponse",
    "AlbumResponse",
    "FilterOptionsResponse",
    "PhotoResponse",
    "TagResponse",
    "UserResponse",
]
