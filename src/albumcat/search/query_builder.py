"""Query builder for album listing and search.

Provides a unified interface for:
- Applying criteria filters
- Building gallery and field order clauses
- Pagination over id-only queries
- Total count calculation
"""

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from albumcat.errors import FieldValidationError
from albumcat.metadata import Album
from albumcat.search.criteria import AlbumCriteria, SortBy
from albumcat.search.filters import apply_album_filters
from albumcat.search.ordering import order_clauses

logger = logging.getLogger(__name__)

# Fields accepted by the generic "field,asc|desc" sort parameter
SORTABLE_FIELDS = {
    "id": Album.id,
    "name": Album.name,
    "event": Album.event,
    "creation_date": Album.creation_date,
    "creationDate": Album.creation_date,
    "override_date": Album.override_date,
    "overrideDate": Album.override_date,
}


def build_field_order(sort_specs: Sequence[str]) -> Tuple:
    """Build order clauses from ``"field,direction"`` specs.

    An id tie-break is appended unless id is already sorted on, so paging is
    stable for any combination of fields.

    Raises:
        FieldValidationError: Unknown field or direction
    """
    clauses = []
    sorts_on_id = False
    for spec in sort_specs:
        parts = [part.strip() for part in spec.split(",")]
        field_name = parts[0]
        direction = parts[1].lower() if len(parts) > 1 and parts[1] else "asc"
        column = SORTABLE_FIELDS.get(field_name)
        if column is None:
            raise FieldValidationError("sort", f"Cannot sort albums by {field_name!r}")
        if direction not in ("asc", "desc"):
            raise FieldValidationError("sort", f"Unknown sort direction {direction!r}")
        clauses.append(column.desc() if direction == "desc" else column.asc())
        sorts_on_id = sorts_on_id or column is Album.id

    if not sorts_on_id:
        clauses.append(Album.id.asc())
    return tuple(clauses)


class AlbumQueryBuilder:
    """Builds id-only album queries for the first pass of a paged fetch.

    Row loading (second pass) is left to ``albumcat.relationships`` so that
    paging never runs over a joined, fanned-out result.
    """

    def __init__(self, db: Session, criteria: Optional[AlbumCriteria] = None):
        """Initialize query builder with session and criteria.

        Args:
            db: SQLAlchemy database session
            criteria: Normalized search criteria; ``None`` means unfiltered EVENT order
        """
        self.db = db
        self.criteria = criteria or AlbumCriteria()

    @property
    def sort_by(self) -> SortBy:
        return self.criteria.sort_by

    def base_query(self) -> Query:
        return self.db.query(Album.id)

    def filtered_query(self) -> Query:
        """Id query with every supplied criterion ANDed in."""
        return apply_album_filters(self.base_query(), self.criteria)

    def build_order_clauses(self) -> Tuple:
        return order_clauses(self.sort_by)

    def ordered_query(self) -> Query:
        return self.filtered_query().order_by(*self.build_order_clauses())

    def apply_pagination(self, query: Query, offset: int, limit: Optional[int]) -> List[int]:
        """Apply SQL-based pagination to an id query and execute.

        Args:
            query: Ordered id query
            offset: Number of results to skip
            limit: Maximum number of results to return (None means no limit)

        Returns:
            List of album ids
        """
        if limit is not None:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)
        return [row[0] for row in query.all()]

    def get_total_count(self, query: Query) -> int:
        """Count distinct album ids matched by a query."""
        # Count against a narrow ID-only subquery to avoid wide-row count plans.
        id_subquery = (
            query
            .with_entities(Album.id)
            .order_by(None)
            .distinct()
            .subquery()
        )
        return int(self.db.query(func.count()).select_from(id_subquery).scalar() or 0)

    def fetch_page_ids(self, offset: int, limit: Optional[int]) -> Tuple[List[int], int]:
        """Return one page of ordered ids plus the total match count."""
        query = self.filtered_query()
        total = self.get_total_count(query)
        ids = self.apply_pagination(query.order_by(*self.build_order_clauses()), offset, limit)
        logger.debug(
            "Album query sort=%s offset=%s limit=%s matched=%s returned=%s",
            self.sort_by.value, offset, limit, total, len(ids),
        )
        return ids, total
