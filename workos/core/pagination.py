"""Cursor-based pagination over WorkOS list endpoints.

List endpoints return::

    {"data": [...], "list_metadata": {"before": "...", "after": "..."}}

``after`` is an opaque cursor, ``None`` once the last page has been served.
AutoPaginatable holds one page at a time; the caller decides when the next
page is fetched.
"""
from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

CURSOR_PARAMS = ("before", "after")

# List endpoints are rate limited to 4 requests per second.
DEFAULT_PAGE_DELAY_SECONDS = 0.25


@dataclass(frozen=True)
class ListMetadata:
    before: Optional[str] = None
    after: Optional[str] = None


@dataclass
class WorkOSList(Generic[T]):
    """One page of a list response."""
    data: List[T] = field(default_factory=list)
    list_metadata: ListMetadata = field(default_factory=ListMetadata)
    object: str = "list"


class AutoPaginatable(Generic[T]):
    """Pull-based iterator over a paginated result set.

    Args:
        page: First page, already fetched
        fetch_page: Callable taking query params and returning the next WorkOSList
        params: Original query parameters (cursor fields are dropped)
        page_delay: Pause in seconds between fetches made by the draining helpers

    Usage:
        users = workos.fetch_and_deserialize("/directory_users", deserialize_directory_user)
        for user in users.auto_paging_iter():
            ...
    """

    def __init__(
        self,
        page: WorkOSList[T],
        fetch_page: Callable[[Dict[str, Any]], WorkOSList[T]],
        params: Optional[Dict[str, Any]] = None,
        page_delay: float = DEFAULT_PAGE_DELAY_SECONDS,
    ):
        self._page = page
        self._fetch_page = fetch_page
        self._params = {k: v for k, v in (params or {}).items() if k not in CURSOR_PARAMS}
        self._explicit_limit = (params or {}).get("limit") is not None
        self.page_delay = page_delay

    @property
    def data(self) -> Tuple[T, ...]:
        """Items of the current page (read-only view)."""
        return tuple(self._page.data)

    @property
    def list_metadata(self) -> ListMetadata:
        return self._page.list_metadata

    @property
    def has_next_page(self) -> bool:
        return self._page.list_metadata.after is not None

    def __len__(self) -> int:
        return len(self._page.data)

    def __getitem__(self, index):
        return self.data[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self.data)

    def fetch_next_page(self) -> None:
        """Replace the buffer with the page after the current cursor.

        No-op once ``list_metadata.after`` is None. If the fetch raises, the
        current page and cursors are left untouched.
        """
        after = self._page.list_metadata.after
        if after is None:
            return

        logger.debug("Fetching next page after cursor %s", after)
        next_page = self._fetch_page({**self._params, "after": after})
        self._page = next_page

    def auto_paging_iter(self) -> Iterator[T]:
        """Yield every item from the current page onward, fetching pages as needed."""
        while True:
            for item in self.data:
                yield item
            if not self.has_next_page:
                return
            if self.page_delay:
                time.sleep(self.page_delay)
            self.fetch_next_page()

    def auto_pagination(self) -> List[T]:
        """Drain the remaining pages into a list.

        When the original request carried an explicit ``limit`` only the
        current page is returned.
        """
        if self._explicit_limit:
            return list(self.data)
        return list(self.auto_paging_iter())

    def __repr__(self) -> str:
        return f"AutoPaginatable(items={len(self)}, list_metadata={self.list_metadata!r})"
