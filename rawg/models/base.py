"""
Base model and the paginated list envelope.
"""

from typing import Generic, TypeVar
from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class RAWGModel(BaseModel):
    """Base for all response models. Unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


def _page_param(url: str | None) -> int | None:
    if not url:
        return None
    values = parse_qs(urlparse(url).query).get("page")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None


class Page(RAWGModel, Generic[T]):
    """
    Envelope returned by every list endpoint.

    A non-null `next` link is the only signal that more pages exist.
    """

    count: int
    next: str | None = None
    previous: str | None = None
    results: list[T]

    @property
    def has_next_page(self) -> bool:
        return self.next is not None

    @property
    def has_previous_page(self) -> bool:
        return self.previous is not None

    @property
    def is_empty(self) -> bool:
        return not self.results

    @property
    def current_page(self) -> int | None:
        """Page number estimated from the next/previous links."""
        next_page = _page_param(self.next)
        if next_page is not None:
            return next_page - 1

        previous_page = _page_param(self.previous)
        if previous_page is not None:
            return previous_page + 1

        # The API omits page=1 from `previous` links on page 2
        if self.previous:
            return 2
        return None

    @property
    def estimated_total_pages(self) -> int | None:
        if self.current_page is None or not self.results:
            return None
        page_size = len(self.results)
        return (self.count + page_size - 1) // page_size

    @property
    def progress(self) -> float:
        """Share of all results seen up to and including this page (0.0-1.0)."""
        if self.count <= 0:
            return 1.0
        current = self.current_page
        if current is None:
            return 0.0
        seen = (current - 1) * len(self.results) + len(self.results)
        return min(seen / self.count, 1.0)
