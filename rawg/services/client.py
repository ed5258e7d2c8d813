"""
NetworkManager - the single path every RAWG HTTP call goes through.

Combines:
- ResponseCache for raw response bodies
- RequestDeduplicator for concurrent identical requests
- RetryPolicy for transient failures
- HTTP status and transport error classification
- pydantic decoding into the caller's expected shape
"""

import asyncio
import time
from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from functools import lru_cache
from typing import Any, Protocol, TypeVar
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from rawg.constants import DEFAULT_REQUEST_TIMEOUT
from rawg.services.cache import CacheStats, ResponseCache
from rawg.services.deduplicator import RequestDeduplicator
from rawg.services.errors import (
    APIError,
    DecodingError,
    InvalidResponseError,
    InvalidURLError,
    NoConnectivityError,
    NotFoundError,
    RAWGError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    UnauthorizedError,
    UnknownNetworkError,
)
from rawg.services.retry import RetryPolicy
from rawg.utils import redact_url

T = TypeVar("T")

# Existing %XX escapes from the validators are kept as-is
_QUERY_SAFE = "-_.~,%"
_PAYLOAD_PREVIEW = 500


class NetworkManaging(Protocol):
    """Surface the API facade needs from the request executor."""

    async def fetch(self, url: str, shape: type[T], use_cache: bool = True) -> T: ...

    def build_url(self, base_url: str, path: str, query: Mapping[str, str]) -> str: ...

    async def clear_cache(self) -> None: ...

    async def cache_stats(self) -> CacheStats: ...

    async def cancel_all_requests(self) -> int: ...

    async def close(self) -> None: ...


@lru_cache(maxsize=None)
def _adapter_for(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


def _parse_retry_after(value: str | None) -> float | None:
    """Retry-After is either delta-seconds or an HTTP date."""
    if not value:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        pass
    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    return max((retry_at - datetime.now(timezone.utc)).total_seconds(), 0.0)


class NetworkManager:
    """
    Request executor with caching, deduplication and retry.

    Usage:
        manager = NetworkManager(retry_policy=RetryPolicy(max_retries=3))

        url = manager.build_url(base_url, "/games", {"key": api_key, "page": "1"})
        page = await manager.fetch(url, Page[Game])

        await manager.close()

    Pass an httpx.AsyncClient (for example one built on httpx.MockTransport)
    to control the transport; a client created here is closed by close().
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        cache: ResponseCache | None = None,
        retry_policy: RetryPolicy | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        debug: bool = False,
    ):
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._cache = cache or ResponseCache(debug=debug)
        self._deduplicator = RequestDeduplicator(debug=debug)
        self._retry_policy = retry_policy
        self._timeout = timeout
        self._sleep = sleep
        self._debug = debug

    @property
    def retry_policy(self) -> RetryPolicy | None:
        return self._retry_policy

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    @property
    def deduplicator(self) -> RequestDeduplicator:
        return self._deduplicator

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                headers={"Accept": "application/json"},
            )
        return self._http_client

    async def fetch(self, url: str, shape: type[T], use_cache: bool = True) -> T:
        """
        Fetch a URL and decode the JSON body as `shape`.

        Args:
            url: Absolute request URL, as returned by build_url
            shape: Type to decode into (pydantic model, Page[Model], list[...])
            use_cache: Read from and write to the response cache

        Returns:
            The decoded value

        Raises:
            RAWGError: a classified failure, after retries for transient kinds
        """
        if use_cache:
            cached = await self._cache.get(url)
            if cached is not None:
                try:
                    value = self._decode(cached, shape)
                except DecodingError:
                    logger.warning(
                        f"Cached response for {redact_url(url)} no longer decodes "
                        f"as {_shape_name(shape)}, refetching"
                    )
                else:
                    logger.debug(f"Cache hit: {redact_url(url)}")
                    return value
            else:
                logger.debug(f"Cache miss: {redact_url(url)}")

        if self._retry_policy is None:
            return await self._fetch_once(url, shape, use_cache)
        return await self._fetch_with_retry(url, shape, use_cache, self._retry_policy)

    async def _fetch_with_retry(
        self,
        url: str,
        shape: type[T],
        use_cache: bool,
        policy: RetryPolicy,
    ) -> T:
        attempt = 0
        while True:
            try:
                return await self._fetch_once(url, shape, use_cache)
            except RAWGError as e:
                if not policy.should_retry(e, attempt):
                    if attempt:
                        logger.warning(
                            f"Giving up on {redact_url(url)} after {attempt + 1} "
                            f"attempts: {e}"
                        )
                    raise

                delay = policy.delay_for(e, attempt)
                logger.warning(
                    f"Request to {redact_url(url)} failed ({e.kind.value}), "
                    f"retry {attempt + 1}/{policy.max_retries} in {delay:.2f}s"
                )
                await self._sleep(delay)
                attempt += 1

    async def _fetch_once(self, url: str, shape: type[T], use_cache: bool) -> T:
        data = await self._deduplicator.dedupe(url, lambda: self._perform_request(url))

        try:
            value = self._decode(data, shape)
        except DecodingError as e:
            logger.error(f"Decoding {_shape_name(shape)} from {redact_url(url)} failed")
            if self._debug:
                logger.debug(f"Decoding error: {e.__cause__}")
                logger.debug(
                    f"Response payload: {data[:_PAYLOAD_PREVIEW].decode('utf-8', 'replace')}"
                )
            raise

        if use_cache:
            await self._cache.set(data, url)
        return value

    async def _perform_request(self, url: str) -> bytes:
        """Issue one GET and return the body of a 2xx response."""
        client = await self._get_http_client()
        started = time.perf_counter()

        try:
            response = await client.get(url)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(self._timeout) from e
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise InvalidURLError(f"Invalid URL: {e}") from e
        except httpx.NetworkError as e:
            raise NoConnectivityError() from e
        except httpx.HTTPError as e:
            raise UnknownNetworkError(e) from e
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000

        logger.debug(
            f"GET {redact_url(url)} -> {response.status_code} in {elapsed_ms:.0f}ms"
        )
        self._validate_status(response)
        return response.content

    @staticmethod
    def _validate_status(response: httpx.Response) -> None:
        status = response.status_code
        if 200 <= status <= 299:
            return
        if status == 401:
            raise UnauthorizedError()
        if status == 404:
            raise NotFoundError()
        if status == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
        if 400 <= status <= 499:
            raise APIError(status)
        if 500 <= status <= 599:
            raise ServerError(status)
        raise InvalidResponseError(f"Unexpected HTTP status: {status}")

    @staticmethod
    def _decode(data: bytes, shape: type[T]) -> T:
        try:
            return _adapter_for(shape).validate_json(data)
        except PydanticValidationError as e:
            raise DecodingError() from e

    def build_url(self, base_url: str, path: str, query: Mapping[str, str]) -> str:
        """
        Build an absolute URL with query parameters sorted by name.

        Sorting keeps the URL stable for the same logical request, which is
        what the cache and the deduplicator key on.
        """
        if not base_url:
            raise InvalidURLError("Base URL is empty")

        raw = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
        if query:
            query_string = "&".join(
                f"{quote(str(name), safe='')}={quote(str(value), safe=_QUERY_SAFE)}"
                for name, value in sorted(query.items())
            )
            raw = f"{raw}?{query_string}"

        try:
            url = httpx.URL(raw)
        except httpx.InvalidURL as e:
            raise InvalidURLError(f"Invalid URL: {e}") from e

        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidURLError(f"Invalid URL: {redact_url(raw)}")

        return str(url)

    async def clear_cache(self) -> None:
        await self._cache.clear()

    async def clean_expired_cache(self) -> int:
        return await self._cache.clean_expired()

    async def cache_stats(self) -> CacheStats:
        return await self._cache.stats()

    async def cancel_all_requests(self) -> int:
        """Cancel every in-flight transport task; cached entries are kept."""
        return await self._deduplicator.cancel_all()

    async def close(self) -> None:
        """Cancel in-flight requests and close an owned HTTP client."""
        await self._deduplicator.cancel_all()
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("NetworkManager closed")

    async def __aenter__(self) -> "NetworkManager":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _shape_name(shape: Any) -> str:
    return getattr(shape, "__name__", None) or repr(shape)
