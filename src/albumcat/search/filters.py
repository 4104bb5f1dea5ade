"""Album filter predicates.

Every predicate is a SQL expression over ``Album`` so that filtering,
counting and paging all happen in the database. Text matching is
case-insensitive substring matching with LIKE wildcards escaped.
"""

from datetime import MAXYEAR, MINYEAR, datetime
from typing import List

from sqlalchemy import String, false, func, or_, select
from sqlalchemy.orm import Query

from albumcat.metadata import Album, AlbumTag, Tag, User
from albumcat.search.criteria import AlbumCriteria


def contains_ci(column, term: str):
    """Case-insensitive substring predicate. Null columns never match."""
    return func.lower(column, type_=String).contains(term.lower(), autoescape=True)


def keyword_filter(term: str):
    """Match the term in album name, keywords or description."""
    return or_(
        contains_ci(Album.name, term),
        contains_ci(Album.keywords, term),
        contains_ci(Album.description, term),
    )


def event_filter(term: str):
    return contains_ci(Album.event, term)


def year_filter(year: int):
    """Match albums whose creation date falls in the given calendar year.

    Only ``creation_date`` is consulted. ``override_date`` affects ordering
    and grouping but not this filter.
    """
    if year < MINYEAR or year > MAXYEAR:
        return false()
    start = datetime(year, 1, 1)
    if year == MAXYEAR:
        return Album.creation_date >= start
    return (Album.creation_date >= start) & (Album.creation_date < datetime(year + 1, 1, 1))


def tag_filter(term: str):
    """Match albums having at least one tag whose name contains the term.

    Expressed as EXISTS so that albums with several matching tags still
    produce one row.
    """
    return (
        select(AlbumTag.album_id)
        .join(Tag, Tag.id == AlbumTag.tag_id)
        .where(AlbumTag.album_id == Album.id, contains_ci(Tag.name, term))
        .exists()
    )


def contributor_filter(term: str):
    """Match albums whose owner login contains the term. Unowned albums never match."""
    owner_ids = select(User.id).where(contains_ci(User.login, term))
    return Album.user_id.in_(owner_ids)


def build_album_filters(criteria: AlbumCriteria) -> List:
    """Build the conjunction terms for the supplied criteria."""
    clauses = []
    if criteria.keyword is not None:
        clauses.append(keyword_filter(criteria.keyword))
    if criteria.event is not None:
        clauses.append(event_filter(criteria.event))
    if criteria.year is not None:
        clauses.append(year_filter(criteria.year))
    if criteria.tag_name is not None:
        clauses.append(tag_filter(criteria.tag_name))
    if criteria.contributor_login is not None:
        clauses.append(contributor_filter(criteria.contributor_login))
    return clauses


def apply_album_filters(query: Query, criteria: AlbumCriteria) -> Query:
    """AND all supplied criteria onto an ``Album`` query."""
    for clause in build_album_filters(criteria):
        query = query.filter(clause)
    return query
