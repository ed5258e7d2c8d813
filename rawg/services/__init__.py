"""
Request pipeline for RAWG API calls.

Provides:
- validation: input validators run before any URL is built
- RetryPolicy: retry eligibility and exponential backoff
- ResponseCache: TTL cache of raw response bodies
- RequestDeduplicator: one in-flight request per URL
- NetworkManager: executor combining all of the above
"""

from rawg.services.errors import (
    APIError,
    ConfigurationError,
    DecodingError,
    ErrorKind,
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
    ValidationError,
)
from rawg.services.retry import RetryPolicy
from rawg.services.cache import CacheEntry, CacheStats, ResponseCache
from rawg.services.deduplicator import RequestDeduplicator
from rawg.services.client import NetworkManager, NetworkManaging

__all__ = [
    # Errors
    "ErrorKind",
    "RAWGError",
    "APIError",
    "ConfigurationError",
    "DecodingError",
    "InvalidResponseError",
    "InvalidURLError",
    "NoConnectivityError",
    "NotFoundError",
    "RateLimitError",
    "RequestTimeoutError",
    "ServerError",
    "UnauthorizedError",
    "UnknownNetworkError",
    "ValidationError",
    # Retry
    "RetryPolicy",
    # Cache
    "ResponseCache",
    "CacheEntry",
    "CacheStats",
    # Deduplicator
    "RequestDeduplicator",
    # Executor
    "NetworkManager",
    "NetworkManaging",
]
