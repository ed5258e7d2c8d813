"""
ResponseCache - In-memory cache of raw response bodies keyed by request URL.

Features:
- TTL (Time To Live) per entry, checked lazily on read
- Bounded by entry count and by total byte cost, LRU eviction
- Statistics computed on demand
- Async-safe: all access goes through one asyncio.Lock
"""

import asyncio
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from loguru import logger

from rawg.constants import (
    DEFAULT_CACHE_COST_LIMIT,
    DEFAULT_CACHE_LIMIT,
    DEFAULT_CACHE_TTL,
)
from rawg.utils import redact_url


@dataclass
class CacheEntry:
    """Raw response bytes with their expiry, in clock seconds."""

    data: bytes
    created_at: float
    expires_at: float

    @property
    def cost(self) -> int:
        return len(self.data)

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


@dataclass
class CacheStats:
    """Snapshot of the cache contents."""

    total_entries: int = 0
    valid_entries: int = 0
    expired_entries: int = 0
    total_cost: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_entries": self.total_entries,
            "valid_entries": self.valid_entries,
            "expired_entries": self.expired_entries,
            "total_cost": self.total_cost,
        }


class ResponseCache:
    """
    Response cache keyed by the absolute request URL.

    Usage:
        cache = ResponseCache(count_limit=100, default_ttl=timedelta(minutes=5))

        data = await cache.get(url)
        if data is None:
            data = await download(url)
            await cache.set(data, url)

    A limit of 0 disables that bound.
    """

    def __init__(
        self,
        count_limit: int = DEFAULT_CACHE_LIMIT,
        total_cost_limit: int = DEFAULT_CACHE_COST_LIMIT,
        default_ttl: timedelta = DEFAULT_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
        debug: bool = False,
    ):
        if count_limit < 0 or total_cost_limit < 0:
            raise ValueError("cache limits must be >= 0")

        # Insertion/access order doubles as LRU order
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._count_limit = count_limit
        self._total_cost_limit = total_cost_limit
        self._default_ttl = default_ttl
        self._clock = clock
        self._debug = debug
        self._total_cost = 0
        self._lock = asyncio.Lock()

    @property
    def default_ttl(self) -> timedelta:
        return self._default_ttl

    async def get(self, url: str) -> bytes | None:
        """
        Get cached bytes for a URL.

        Returns None if there is no entry or it has expired; an expired entry
        is dropped on the way out.
        """
        async with self._lock:
            entry = self._entries.get(url)
            if entry is None:
                self._log(f"MISS: {redact_url(url)}")
                return None

            if entry.is_expired(self._clock()):
                self._remove(url)
                self._log(f"EXPIRED: {redact_url(url)}")
                return None

            self._entries.move_to_end(url)
            self._log(f"HIT: {redact_url(url)}")
            return entry.data

    async def set(self, data: bytes, url: str, ttl: timedelta | None = None) -> None:
        """
        Store bytes for a URL, replacing any previous entry.

        Args:
            data: Raw response body
            url: Absolute request URL used as key
            ttl: Time to live (uses default if not specified)
        """
        ttl = ttl if ttl is not None else self._default_ttl
        now = self._clock()
        entry = CacheEntry(
            data=data,
            created_at=now,
            expires_at=now + ttl.total_seconds(),
        )

        async with self._lock:
            self._remove(url)

            if self._total_cost_limit and entry.cost > self._total_cost_limit:
                self._log(
                    f"SKIP: {redact_url(url)} ({entry.cost} bytes exceeds cost limit)"
                )
                return

            self._entries[url] = entry
            self._total_cost += entry.cost
            self._evict_over_limits()
            self._log(f"SET: {redact_url(url)} (TTL: {ttl.total_seconds()}s)")

    async def remove(self, url: str) -> bool:
        """Remove the entry for a URL."""
        async with self._lock:
            return self._remove(url)

    async def clear(self) -> None:
        """Clear all cache entries."""
        async with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._total_cost = 0
            self._log(f"CLEAR: {count} entries removed")

    async def clean_expired(self) -> int:
        """Remove all expired entries. Returns count of removed entries."""
        async with self._lock:
            now = self._clock()
            expired_keys = [k for k, v in self._entries.items() if v.is_expired(now)]
            for key in expired_keys:
                self._remove(key)

            if expired_keys:
                self._log(f"CLEANUP: {len(expired_keys)} expired entries removed")

            return len(expired_keys)

    async def stats(self) -> CacheStats:
        """Count tracked entries, split by expiry status right now."""
        async with self._lock:
            now = self._clock()
            expired = sum(1 for entry in self._entries.values() if entry.is_expired(now))
            total = len(self._entries)
            return CacheStats(
                total_entries=total,
                valid_entries=total - expired,
                expired_entries=expired,
                total_cost=self._total_cost,
            )

    def _remove(self, url: str) -> bool:
        entry = self._entries.pop(url, None)
        if entry is None:
            return False
        self._total_cost -= entry.cost
        return True

    def _evict_over_limits(self) -> None:
        """Evict least recently used entries until both bounds hold."""
        while self._entries and (
            (self._count_limit and len(self._entries) > self._count_limit)
            or (self._total_cost_limit and self._total_cost > self._total_cost_limit)
        ):
            oldest_key, oldest = self._entries.popitem(last=False)
            self._total_cost -= oldest.cost
            self._log(f"EVICT: {redact_url(oldest_key)}")

    def _log(self, message: str) -> None:
        """Log debug message if debug mode is enabled."""
        if self._debug:
            logger.debug(f"[ResponseCache] {message}")
