"""Plain records returned by the service layer.

Records are detached snapshots: they never lazy-load and carry their tag set
as an explicit list, already deduplicated and sorted by name.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

# Every character str.strip() removes; the SQL blank check folds the same set
BLANK_CHARS = "".join(ch for ch in map(chr, range(0x3001)) if ch.isspace())


@dataclass(frozen=True)
class TagRef:
    """Tag identity and display name."""

    id: int
    name: str


@dataclass(frozen=True)
class UserRef:
    """Owner identity and login."""

    id: int
    login: str


@dataclass
class AlbumRecord:
    """Album snapshot with owner and tags populated."""

    id: int
    name: str
    creation_date: datetime
    event: Optional[str] = None
    override_date: Optional[datetime] = None
    keywords: Optional[str] = None
    description: Optional[str] = None
    thumbnail_content_type: Optional[str] = None
    has_thumbnail: bool = False
    user: Optional[UserRef] = None
    tags: List[TagRef] = field(default_factory=list)

    @property
    def effective_date(self) -> datetime:
        """Display date: override date when set, else creation date."""
        return self.override_date if self.override_date is not None else self.creation_date

    @property
    def has_event(self) -> bool:
        """False for null, empty and whitespace-only events."""
        return bool((self.event or "").strip(BLANK_CHARS))


@dataclass
class PhotoRecord:
    """Photo snapshot with tags populated."""

    id: int
    upload_date: datetime
    title: Optional[str] = None
    description: Optional[str] = None
    capture_date: Optional[datetime] = None
    location: Optional[str] = None
    keywords: Optional[str] = None
    album_id: Optional[int] = None
    tags: List[TagRef] = field(default_factory=list)
