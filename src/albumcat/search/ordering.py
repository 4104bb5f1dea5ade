"""Gallery orderings and grouping.

EVENT order puts albums without an event first (the "Miscellaneous" group,
by name), then albums by event and name. DATE order is most recent
effective date first. Both end with an id tie-break so that every request
observes the same total order.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from sqlalchemy import String, case, func, literal

from albumcat.metadata import Album
from albumcat.records import BLANK_CHARS, AlbumRecord
from albumcat.search.criteria import SortBy

MISCELLANEOUS_LABEL = "Miscellaneous"
_MISC_KEY = object()


def is_blank(column):
    """SQL predicate: column is null, empty, or whitespace only.

    Every character in ``BLANK_CHARS`` is folded to a space before trimming,
    so the database and ``str.strip()`` agree on what counts as blank.
    """
    collapsed = column
    for char in BLANK_CHARS:
        if char != " ":
            collapsed = func.replace(collapsed, char, " ", type_=String)
    return func.coalesce(func.trim(collapsed, type_=String), "") == ""


def event_order_clauses() -> Tuple:
    # Blank events all sort under an empty key so the group orders by name alone
    no_event_first = case((is_blank(Album.event), 0), else_=1)
    event_key = case((is_blank(Album.event), literal("")), else_=Album.event)
    return (no_event_first.asc(), event_key.asc(), Album.name.asc(), Album.id.asc())


def date_order_clauses() -> Tuple:
    effective_date = func.coalesce(Album.override_date, Album.creation_date)
    return (effective_date.desc(), Album.creation_date.desc(), Album.id.desc())


def order_clauses(sort_by: SortBy) -> Tuple:
    """Return ORDER BY clauses for a gallery sort mode."""
    if sort_by == SortBy.DATE:
        return date_order_clauses()
    return event_order_clauses()


@dataclass
class AlbumGroup:
    """Consecutive albums sharing a display label."""

    label: str
    albums: List[AlbumRecord] = field(default_factory=list)


def group_label(album: AlbumRecord, sort_by: SortBy) -> str:
    if sort_by == SortBy.DATE:
        return album.effective_date.strftime("%B %Y")
    if album.has_event:
        return album.event.strip(BLANK_CHARS)
    return MISCELLANEOUS_LABEL


def group_albums(albums: Iterable[AlbumRecord], sort_by: SortBy) -> List[AlbumGroup]:
    """Group already-ordered albums by display label.

    Groups appear in the order their first album appears, and albums keep
    their relative order within a group. Under EVENT order the
    "Miscellaneous" group, when present, is always first.
    """
    groups: Dict[object, AlbumGroup] = {}
    for album in albums:
        label = group_label(album, sort_by)
        if sort_by == SortBy.EVENT and not album.has_event:
            # A real event literally named "Miscellaneous" must not merge with the blank group
            key = _MISC_KEY
        else:
            key = label
        group = groups.get(key)
        if group is None:
            group = groups[key] = AlbumGroup(label=label)
        group.albums.append(album)

    ordered = list(groups.values())
    misc = groups.get(_MISC_KEY)
    if misc is not None and ordered[0] is not misc:
        ordered.remove(misc)
        ordered.insert(0, misc)
    return ordered
