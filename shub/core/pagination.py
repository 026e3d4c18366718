"""Cursor pagination over paged GitHub collections.

A `PageCursor` turns a page fetching function into one lazy iterator of
items, so callers never deal with page numbers:

    cursor = PageCursor(lambda page: client.fetch_repos_page(page))
    for repo in cursor:
        ...

The cursor walks through three states. It starts in START, where the fetch
function is called with ``None`` (no page parameter). Every page that reports
more data moves it to AT_PAGE with the next page number, and a page that
reports no more data (or a failed fetch) moves it to EXHAUSTED, after which
nothing is fetched again.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, Iterator, List, Optional, TypeVar

from .errors import PaginationError

logger = logging.getLogger('shub')

T = TypeVar('T')


class CursorState(Enum):
    """Position of a page cursor."""
    START = "start"
    AT_PAGE = "at_page"
    EXHAUSTED = "exhausted"


@dataclass
class Page(Generic[T]):
    """One batch of items and whether the remote has more after it."""
    items: List[T] = field(default_factory=list)
    has_more: bool = False


PageFetcher = Callable[[Optional[int]], Page[T]]


class PageCursor(Generic[T]):
    """Lazy, single-pass iterator over a paged collection.

    The next page is fetched only after every item of the current page has
    been handed out. There is no upper bound on the number of pages: the
    cursor stops only when a page reports that nothing follows.
    """

    def __init__(self, fetch: PageFetcher, description: str = "collection"):
        """Initialize page cursor.

        Args:
            fetch: Called with None for the first page, then with page
                numbers starting at 2
            description: Human readable name used in logs and errors
        """
        self._fetch = fetch
        self.description = description
        self.state = CursorState.START
        self.page: Optional[int] = None
        self.pages_fetched = 0
        self._buffer: Iterator[T] = iter(())

    def __iter__(self) -> 'PageCursor[T]':
        return self

    def __next__(self) -> T:
        while True:
            item = next(self._buffer, _DRAINED)
            if item is not _DRAINED:
                return item
            if self.state is CursorState.EXHAUSTED:
                raise StopIteration
            self._fetch_next_page()

    def _fetch_next_page(self) -> None:
        """Fetch the page the cursor points at and advance the state."""
        requested = self.page
        try:
            page = self._fetch(requested)
        except Exception as e:
            self.state = CursorState.EXHAUSTED
            where = "first page" if requested is None else f"page {requested}"
            raise PaginationError(
                f"Failed to fetch {where} of {self.description}: {e}",
                page=requested
            ) from e

        self.pages_fetched += 1
        self._buffer = iter(page.items)
        logger.debug(
            f"Fetched {len(page.items)} items of {self.description} "
            f"(page {requested or 1}, more: {page.has_more})"
        )

        if page.has_more:
            self.page = (requested or 1) + 1
            self.state = CursorState.AT_PAGE
        else:
            self.state = CursorState.EXHAUSTED

    def collect(self) -> List[T]:
        """Drain the cursor into a list."""
        return list(self)


_DRAINED = object()
