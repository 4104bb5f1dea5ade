"""Distinct values for populating filter menus.

Options are computed over the full album set, independent of any active
filter.
"""

from dataclasses import dataclass, field
from typing import List

from sqlalchemy import extract
from sqlalchemy.orm import Session

from albumcat.metadata import Album, AlbumTag, Tag, User
from albumcat.search.ordering import is_blank


@dataclass
class FilterOptions:
    events: List[str] = field(default_factory=list)
    years: List[int] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    contributors: List[str] = field(default_factory=list)


def distinct_events(db: Session) -> List[str]:
    """Distinct non-blank event values as stored, ascending."""
    rows = db.query(Album.event).filter(~is_blank(Album.event)).distinct().all()
    return sorted(event for (event,) in rows)


def distinct_years(db: Session) -> List[int]:
    """Creation years, most recent first."""
    rows = db.query(extract("year", Album.creation_date)).distinct().all()
    return sorted({int(year) for (year,) in rows if year is not None}, reverse=True)


def distinct_tags(db: Session) -> List[str]:
    """Names of tags attached to at least one album, ascending."""
    rows = (
        db.query(Tag.name)
        .join(AlbumTag, AlbumTag.tag_id == Tag.id)
        .distinct()
        .all()
    )
    return sorted(name for (name,) in rows)


def distinct_contributors(db: Session) -> List[str]:
    """Logins of users owning at least one album, ascending."""
    rows = (
        db.query(User.login)
        .join(Album, Album.user_id == User.id)
        .distinct()
        .all()
    )
    return sorted(login for (login,) in rows)


def get_filter_options(db: Session) -> FilterOptions:
    return FilterOptions(
        events=distinct_events(db),
        years=distinct_years(db),
        tags=distinct_tags(db),
        contributors=distinct_contributors(db),
    )
