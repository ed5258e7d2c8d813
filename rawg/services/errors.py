"""
Request pipeline exceptions.

Every failure surfaced by the SDK is a RAWGError subclass tagged with an
ErrorKind. The kind drives retry decisions in RetryPolicy.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of request failures."""

    INVALID_URL = "invalid_url"
    INVALID_RESPONSE = "invalid_response"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    API_ERROR = "api_error"
    SERVER_ERROR = "server_error"
    RATE_LIMITED = "rate_limited"
    NO_CONNECTIVITY = "no_connectivity"
    TIMEOUT = "timeout"
    DECODING_ERROR = "decoding_error"
    VALIDATION_ERROR = "validation_error"
    CONFIGURATION_ERROR = "configuration_error"
    UNKNOWN = "unknown"


RETRYABLE_KINDS = frozenset(
    {
        ErrorKind.SERVER_ERROR,
        ErrorKind.RATE_LIMITED,
        ErrorKind.NO_CONNECTIVITY,
        ErrorKind.TIMEOUT,
        ErrorKind.UNKNOWN,
    }
)


class RAWGError(Exception):
    """Base exception for all SDK errors."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    default_message = "RAWG request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def retryable(self) -> bool:
        return self.kind in RETRYABLE_KINDS


class InvalidURLError(RAWGError):
    """Request URL could not be assembled."""

    kind = ErrorKind.INVALID_URL
    default_message = "Invalid URL"


class InvalidResponseError(RAWGError):
    """Transport returned a response without a usable status."""

    kind = ErrorKind.INVALID_RESPONSE
    default_message = "Invalid response from server"


class UnauthorizedError(RAWGError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Unauthorized. Please check your API key"


class NotFoundError(RAWGError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"


class APIError(RAWGError):
    """Request rejected with a 4xx status other than 401/404/429."""

    kind = ErrorKind.API_ERROR

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        super().__init__(message or f"API Error: client error {status_code}")


class ServerError(RAWGError):
    """Remote failure (5xx)."""

    kind = ErrorKind.SERVER_ERROR

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Server error with code: {status_code}")


class RateLimitError(RAWGError):
    """Rate limit exceeded (429)."""

    kind = ErrorKind.RATE_LIMITED

    def __init__(self, retry_after: float | None = None):
        self.retry_after = retry_after
        msg = "Rate limit exceeded"
        if retry_after is not None:
            msg += f", retry after {retry_after:g}s"
        super().__init__(msg)


class NoConnectivityError(RAWGError):
    kind = ErrorKind.NO_CONNECTIVITY
    default_message = "No internet connection"


class RequestTimeoutError(RAWGError):
    kind = ErrorKind.TIMEOUT

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout
        if timeout is None:
            super().__init__("Request timed out")
        else:
            super().__init__(f"Request timed out after {timeout:g}s")


class DecodingError(RAWGError):
    """Response body did not match the expected shape."""

    kind = ErrorKind.DECODING_ERROR
    default_message = "Failed to decode response"


class ValidationError(RAWGError):
    """Caller-supplied input rejected before any network call."""

    kind = ErrorKind.VALIDATION_ERROR
    default_message = "Invalid input"


class ConfigurationError(RAWGError):
    """Settings are missing or invalid."""

    kind = ErrorKind.CONFIGURATION_ERROR
    default_message = "Configuration is invalid or missing"


class UnknownNetworkError(RAWGError):
    """Unclassified transport failure."""

    kind = ErrorKind.UNKNOWN

    def __init__(self, cause: BaseException | str | None = None):
        self.cause = cause
        if cause is None:
            super().__init__("Unknown network error")
        else:
            super().__init__(f"Unknown network error: {cause}")
