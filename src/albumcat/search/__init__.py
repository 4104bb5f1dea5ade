"""Album search: criteria, filters, orderings and filter menus."""

from albumcat.search.criteria import AlbumCriteria, SortBy, normalize_criteria
from albumcat.search.filter_options import FilterOptions, get_filter_options
from albumcat.search.ordering import AlbumGroup, group_albums
from albumcat.search.query_builder import AlbumQueryBuilder

__all__ = [
    "AlbumCriteria",
    "AlbumGroup",
    "AlbumQueryBuilder",
    "FilterOptions",
    "SortBy",
    "get_filter_options",
    "group_albums",
    "normalize_criteria",
]
