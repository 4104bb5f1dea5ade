"""Page requests, pages, and pagination response headers."""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

from starlette.datastructures import URL

from albumcat.settings import settings

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index, page size, and optional sort specs.

    Sort specs use the ``"field,asc"`` / ``"field,desc"`` form and are only
    honoured by the generic album listing.
    """

    page: int = 0
    size: int = 20
    sort: Tuple[str, ...] = ()

    @classmethod
    def of(
        cls,
        page: Optional[int] = None,
        size: Optional[int] = None,
        sort: Optional[Sequence[str]] = None,
    ) -> "PageRequest":
        """Build a request with defaults applied and size clamped to the configured maximum."""
        page_value = max(int(page or 0), 0)
        size_value = int(size) if size is not None else settings.default_page_size
        size_value = max(1, min(size_value, settings.max_page_size))
        sort_value = tuple(spec for spec in (sort or ()) if spec and spec.strip())
        return cls(page=page_value, size=size_value, sort=sort_value)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    """One slice of an ordered result plus the total number of matching rows."""

    items: List[T]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total / self.size)

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    def map(self, func: Callable[[T], U]) -> "Page[U]":
        return Page(items=[func(item) for item in self.items], total=self.total, page=self.page, size=self.size)


def pagination_headers(url: URL, page: Page) -> Dict[str, str]:
    """Build ``X-Total-Count`` and RFC 5988 ``Link`` headers for a page."""

    def _link(page_number: int, rel: str) -> str:
        target = url.include_query_params(page=page_number, size=page.size)
        return f'<{target}>; rel="{rel}"'

    links = []
    if page.has_next:
        links.append(_link(page.page + 1, "next"))
    if page.has_previous:
        links.append(_link(page.page - 1, "prev"))
    last_page = max(page.total_pages - 1, 0)
    links.append(_link(last_page, "last"))
    links.append(_link(0, "first"))

    return {
        "X-Total-Count": str(page.total),
        "Link": ",".join(links),
    }
