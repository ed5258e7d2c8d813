"""RetryPolicy eligibility and backoff."""

import pytest

from rawg.services.errors import (
    APIError,
    DecodingError,
    ErrorKind,
    InvalidURLError,
    NoConnectivityError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    UnauthorizedError,
    UnknownNetworkError,
    ValidationError,
)
from rawg.services.retry import RetryPolicy


def test_exponential_backoff_is_capped() -> None:
    policy = RetryPolicy(max_retries=3, base_delay=1.0, max_delay=60.0)

    assert [policy.delay(attempt) for attempt in range(4)] == [1.0, 2.0, 4.0, 8.0]
    assert policy.delay(10) == 60.0


def test_constant_backoff() -> None:
    policy = RetryPolicy(base_delay=2.5, use_exponential_backoff=False)

    assert policy.delay(0) == 2.5
    assert policy.delay(7) == 2.5


@pytest.mark.parametrize(
    "error",
    [
        ServerError(500),
        ServerError(503),
        RateLimitError(None),
        NoConnectivityError(),
        RequestTimeoutError(30.0),
        UnknownNetworkError(),
    ],
)
def test_transient_errors_are_retried(error) -> None:
    policy = RetryPolicy(max_retries=3)

    assert policy.should_retry(error, 0)
    assert policy.should_retry(error, 2)
    assert not policy.should_retry(error, 3)


@pytest.mark.parametrize(
    "error",
    [
        UnauthorizedError(),
        NotFoundError(),
        APIError(400),
        DecodingError(),
        ValidationError("bad"),
        InvalidURLError(),
    ],
)
def test_permanent_errors_are_never_retried(error) -> None:
    policy = RetryPolicy(max_retries=3)

    assert not error.retryable
    assert not policy.should_retry(error, 0)


def test_should_retry_accepts_kinds() -> None:
    policy = RetryPolicy(max_retries=1)

    assert policy.should_retry(ErrorKind.TIMEOUT, 0)
    assert not policy.should_retry(ErrorKind.NOT_FOUND, 0)


def test_zero_retries_never_retries() -> None:
    assert not RetryPolicy(max_retries=0).should_retry(ServerError(500), 0)


def test_retry_after_ignored_by_default() -> None:
    policy = RetryPolicy(base_delay=1.0)

    assert policy.delay_for(RateLimitError(60.0), 0) == 1.0


def test_retry_after_respected_when_enabled() -> None:
    policy = RetryPolicy(base_delay=1.0, max_delay=60.0, respect_retry_after=True)

    assert policy.delay_for(RateLimitError(30.0), 0) == 30.0
    # Never shorter than the regular backoff
    assert policy.delay_for(RateLimitError(0.5), 2) == 4.0
    assert policy.delay_for(RateLimitError(None), 1) == 2.0
    assert policy.delay_for(ServerError(502), 1) == 2.0


def test_rejects_negative_configuration() -> None:
    with pytest.raises(ValueError):
        RetryPolicy(max_retries=-1)
    with pytest.raises(ValueError):
        RetryPolicy(base_delay=-0.1)
