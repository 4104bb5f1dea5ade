"""Albumcat API routers package."""

from . import albums
from . import photos
from . import tags

__all__ = [
    "albums",
    "photos",
    "tags",
]
