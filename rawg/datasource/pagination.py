"""
PaginatedSequence - iterate the items of a list endpoint across pages.

States:
- NOT_STARTED: nothing fetched yet
- FETCHING: a page request is in flight
- EMITTING: items of the current page are being handed out
- EXHAUSTED: the last page had no `next` link
- FAILED: a page fetch raised; the error went to the consumer
- CANCELLED: the consumer stopped early or called cancel()

Pages are requested one at a time and only once the previous page's items
have all been consumed.
"""

import asyncio
from collections import deque
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Generic, TypeVar

from loguru import logger

from rawg.constants import DEFAULT_PAGE_SIZE, MIN_PAGE
from rawg.models.base import Page

T = TypeVar("T")

# Page[T] is a concrete pydantic class, so this alias takes no type arguments
PageFetcher = Callable[[int, int], Awaitable[Page]]


class SequenceState(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    FETCHING = "FETCHING"
    EMITTING = "EMITTING"
    EXHAUSTED = "EXHAUSTED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


_FINISHED = (SequenceState.EXHAUSTED, SequenceState.FAILED, SequenceState.CANCELLED)


class PaginatedSequence(Generic[T]):
    """
    Lazy async iterator over every item of a paginated endpoint.

    Usage:
        async with client.games_sequence(page_size=40) as games:
            async for game in games:
                if game.rating < 4:
                    break

    Leaving the `async with` block (or calling cancel()/aclose()) cancels a
    page fetch that is still running and discards buffered items. A bare
    `break` out of `async for` only stops pulling items: no further page is
    requested, but the state stays EMITTING until aclose() or cancel() moves
    it to CANCELLED. A sequence is single-use; create a new one to start
    again from page 1.
    """

    def __init__(self, fetch_page: PageFetcher, page_size: int = DEFAULT_PAGE_SIZE):
        self._fetch_page = fetch_page
        self._page_size = page_size
        self._page = MIN_PAGE
        self._has_more = True
        self._buffer: deque[T] = deque()
        self._state = SequenceState.NOT_STARTED
        self._task: asyncio.Task[Page[T]] | None = None

    @property
    def state(self) -> SequenceState:
        return self._state

    @property
    def page(self) -> int:
        """Number of the next page to request."""
        return self._page

    def __aiter__(self) -> "PaginatedSequence[T]":
        return self

    async def __anext__(self) -> T:
        while True:
            if self._state in _FINISHED:
                raise StopAsyncIteration

            if self._buffer:
                self._state = SequenceState.EMITTING
                return self._buffer.popleft()

            if not self._has_more:
                self._state = SequenceState.EXHAUSTED
                logger.debug(f"Pagination exhausted after page {self._page - 1}")
                raise StopAsyncIteration

            await self._fetch_next_page()

    async def _fetch_next_page(self) -> None:
        self._state = SequenceState.FETCHING
        self._task = asyncio.create_task(self._fetch_page(self._page, self._page_size))
        try:
            response = await self._task
        except asyncio.CancelledError:
            if self._state is SequenceState.CANCELLED:
                # cancel() was called while this page was loading
                raise StopAsyncIteration from None
            self._state = SequenceState.CANCELLED
            raise
        except Exception:
            self._state = SequenceState.FAILED
            raise
        finally:
            self._task = None

        if self._state is SequenceState.CANCELLED:
            raise StopAsyncIteration

        self._buffer.extend(response.results)
        self._has_more = response.next is not None
        self._page += 1

    def cancel(self) -> None:
        """Stop the sequence: abort the running page fetch, drop buffered items."""
        if self._state in _FINISHED:
            return
        self._state = SequenceState.CANCELLED
        self._buffer.clear()
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def aclose(self) -> None:
        task = self._task
        self.cancel()
        if task is not None:
            # Wait for the aborted fetch to unwind before returning
            await asyncio.gather(task, return_exceptions=True)

    async def collect(self, limit: int | None = None) -> list[T]:
        """Consume the sequence into a list, stopping after `limit` items."""
        items: list[T] = []
        async for item in self:
            items.append(item)
            if limit is not None and len(items) >= limit:
                await self.aclose()
                break
        return items

    async def __aenter__(self) -> "PaginatedSequence[T]":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
