"""Search criteria for album queries.

Raw request values are normalized once here so that the filter and ordering
layers only ever see trimmed, non-empty terms and a concrete sort mode.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from albumcat.errors import FieldValidationError
from albumcat.records import BLANK_CHARS

logger = logging.getLogger(__name__)


class SortBy(str, Enum):
    """Album sort modes."""

    EVENT = "EVENT"
    DATE = "DATE"


DEFAULT_SORT_BY = SortBy.EVENT


@dataclass(frozen=True)
class AlbumCriteria:
    """Normalized album search criteria. ``None`` means "not filtered"."""

    keyword: Optional[str] = None
    event: Optional[str] = None
    year: Optional[int] = None
    tag_name: Optional[str] = None
    contributor_login: Optional[str] = None
    sort_by: SortBy = DEFAULT_SORT_BY
    # False when a sort key was supplied but not recognized
    sort_key_recognized: bool = True


def normalize_term(value: Optional[str]) -> Optional[str]:
    """Trim a text term; empty and whitespace-only terms become ``None``."""
    if value is None:
        return None
    text = str(value).strip(BLANK_CHARS)
    return text or None


def normalize_year(value: Union[int, str, None]) -> Optional[int]:
    """Parse a year filter value. Blank values mean "no year filter"."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise FieldValidationError("year", "Year must be an integer")
    if isinstance(value, int):
        return value
    text = str(value).strip(BLANK_CHARS)
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise FieldValidationError("year", f"Year must be an integer, got {text!r}")


def parse_sort_by(value: Union[SortBy, str, None]) -> Tuple[SortBy, bool]:
    """Resolve a sort key case-insensitively.

    Returns:
        Tuple of (sort mode, recognized). Absent keys resolve to the default
        and count as recognized; unknown keys resolve to the default and are
        reported as unrecognized.
    """
    if isinstance(value, SortBy):
        return value, True
    text = normalize_term(value)
    if text is None:
        return DEFAULT_SORT_BY, True
    try:
        return SortBy(text.upper()), True
    except ValueError:
        logger.warning("Unrecognized album sort key %r; using %s", text, DEFAULT_SORT_BY.value)
        return DEFAULT_SORT_BY, False


def normalize_criteria(
    keyword: Optional[str] = None,
    event: Optional[str] = None,
    year: Union[int, str, None] = None,
    tag_name: Optional[str] = None,
    contributor_login: Optional[str] = None,
    sort_by: Union[SortBy, str, None] = None,
) -> AlbumCriteria:
    """Build criteria from raw request values."""
    resolved_sort, recognized = parse_sort_by(sort_by)
    return AlbumCriteria(
        keyword=normalize_term(keyword),
        event=normalize_term(event),
        year=normalize_year(year),
        tag_name=normalize_term(tag_name),
        contributor_login=normalize_term(contributor_login),
        sort_by=resolved_sort,
        sort_key_recognized=recognized,
    )
