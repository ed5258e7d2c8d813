"""
RequestDeduplicator - Shares one in-flight request among concurrent callers.

When several coroutines ask for the same key while a request is running,
only the first one starts it; the others await the same task and receive
the same result or the same exception.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from loguru import logger

from rawg.utils import redact_url

T = TypeVar("T")


@dataclass
class _InFlight:
    task: asyncio.Task[Any]
    waiters: int = 0


@dataclass
class DeduplicatorStats:
    """Statistics for request deduplication."""

    total: int = 0  # Requests actually started
    deduplicated: int = 0  # Callers that joined an existing request
    in_flight: int = 0
    keys: list[str] = field(default_factory=list)

    @property
    def dedup_rate(self) -> float:
        total = self.total + self.deduplicated
        if total == 0:
            return 0.0
        return self.deduplicated / total

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_requests": self.total,
            "deduplicated": self.deduplicated,
            "in_flight": self.in_flight,
            "dedup_rate": f"{self.dedup_rate:.2%}",
            "keys": list(self.keys),
        }


class RequestDeduplicator:
    """
    Deduplicates concurrent async requests.

    Usage:
        dedup = RequestDeduplicator()

        body = await dedup.dedupe(url, lambda: download(url))

    Each caller awaits the shared task through asyncio.shield, so one caller
    giving up does not cancel the request for the others. The task is
    cancelled only when its last waiter is cancelled, or by cancel_all().
    """

    def __init__(self, debug: bool = False):
        self._in_flight: dict[str, _InFlight] = {}
        self._lock = asyncio.Lock()
        self._debug = debug
        self._stats = DeduplicatorStats()

    async def dedupe(
        self,
        key: str,
        request_fn: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Execute request with deduplication.

        Args:
            key: Unique identifier for this request (the request URL)
            request_fn: Async function to execute if no request is in flight

        Returns:
            Result from request_fn (either fresh or from the in-flight request)
        """
        async with self._lock:
            entry = self._in_flight.get(key)
            if entry is None:
                self._stats.total += 1
                self._log(f"NEW: {redact_url(key)}")
                task = asyncio.create_task(self._execute_and_cleanup(key, request_fn))
                entry = _InFlight(task=task)
                self._in_flight[key] = entry
            else:
                self._stats.deduplicated += 1
                self._log(f"JOIN: {redact_url(key)}")
            entry.waiters += 1

        try:
            return await asyncio.shield(entry.task)
        finally:
            entry.waiters -= 1
            if entry.waiters == 0 and not entry.task.done():
                # Last interested caller left; nobody needs the result.
                # Later callers must not join a task that is being torn down.
                entry.task.cancel()
                if self._in_flight.get(key) is entry:
                    del self._in_flight[key]
                self._log(f"ABANDON: {redact_url(key)}")

    async def _execute_and_cleanup(
        self,
        key: str,
        request_fn: Callable[[], Awaitable[T]],
    ) -> T:
        """Execute request and drop the registry entry once it settles."""
        current = asyncio.current_task()
        try:
            return await request_fn()
        finally:
            async with self._lock:
                entry = self._in_flight.get(key)
                # cancel_all() may already have replaced or dropped the entry
                if entry is not None and entry.task is current:
                    del self._in_flight[key]
                self._log(f"DONE: {redact_url(key)}")

    async def cancel(self, key: str) -> bool:
        """Cancel an in-flight request."""
        async with self._lock:
            entry = self._in_flight.pop(key, None)
            if entry is None:
                return False
            entry.task.cancel()
            self._log(f"CANCEL: {redact_url(key)}")
            return True

    async def cancel_all(self) -> int:
        """Cancel all in-flight requests."""
        async with self._lock:
            count = len(self._in_flight)
            for entry in self._in_flight.values():
                entry.task.cancel()
            self._in_flight.clear()
            if count:
                logger.info(f"[Deduplicator] cancelled {count} in-flight requests")
            return count

    def get_in_flight_count(self) -> int:
        return len(self._in_flight)

    def get_stats(self) -> DeduplicatorStats:
        self._stats.in_flight = len(self._in_flight)
        self._stats.keys = [redact_url(key) for key in self._in_flight]
        return self._stats

    def _log(self, message: str) -> None:
        """Log debug message if debug mode is enabled."""
        if self._debug:
            logger.debug(f"[Deduplicator] {message}")
