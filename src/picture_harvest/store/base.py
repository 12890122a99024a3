# ABOUTME: Protocol interface for paginated record retrieval from a key-value store
# ABOUTME: Defines the Page container, StoreError, and the token-threading page iterator

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol

RawRecord = dict[str, Any]
ContinuationToken = dict[str, Any]


class StoreError(Exception):
    """Raised when a page cannot be fetched or a record cannot be decoded."""

    pass


@dataclass
class Page:
    """One page of raw records plus the token for the next page (None on the last page)."""

    records: list[RawRecord] = field(default_factory=list)
    next_token: ContinuationToken | None = None

    @property
    def is_last(self) -> bool:
        return self.next_token is None


class RecordSource(Protocol):
    """Protocol for reading a collection one page at a time."""

    def fetch_page(self, token: ContinuationToken | None = None) -> Page:
        """Fetch the page that starts at the given continuation token.

        Args:
            token: None for the first page, otherwise the previous page's next_token

        Returns:
            The page of raw records

        Raises:
            StoreError: If the request fails
        """
        ...


def iter_pages(source: RecordSource) -> Iterator[Page]:
    """Yield pages in order, threading each continuation token into the next request.

    Stops right after the first page that arrives without a token.
    """
    token: ContinuationToken | None = None
    while True:
        page = source.fetch_page(token)
        yield page
        if page.is_last:
            return
        token = page.next_token
