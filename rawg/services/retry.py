"""
RetryPolicy - decides whether a failed attempt is retried and how long to wait.

The policy is a pure value object; the sleeping itself happens in
NetworkManager so the policy stays independent from the transport.
"""

from dataclasses import dataclass

from rawg.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_BASE_DELAY,
    DEFAULT_RETRY_MAX_DELAY,
)
from rawg.services.errors import RETRYABLE_KINDS, ErrorKind, RAWGError, RateLimitError


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry configuration with capped exponential backoff.

    Usage:
        policy = RetryPolicy(max_retries=3, base_delay=1.0, max_delay=60.0)

        policy.delay(0)  # 1.0
        policy.delay(3)  # 8.0
        policy.should_retry(ServerError(503), attempt=0)  # True
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_RETRY_BASE_DELAY  # seconds
    max_delay: float = DEFAULT_RETRY_MAX_DELAY  # seconds
    use_exponential_backoff: bool = True
    # Wait at least the server's Retry-After on 429 instead of the plain backoff
    respect_retry_after: bool = False

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("retry delays must be >= 0")

    def delay(self, attempt: int) -> float:
        """Delay in seconds before retrying zero-indexed `attempt`."""
        if not self.use_exponential_backoff:
            return self.base_delay

        return min(self.base_delay * (2**attempt), self.max_delay)

    def should_retry(self, error: RAWGError | ErrorKind, attempt: int) -> bool:
        """Whether a failure of this kind at `attempt` deserves another try."""
        if attempt >= self.max_retries:
            return False

        kind = error if isinstance(error, ErrorKind) else error.kind
        return kind in RETRYABLE_KINDS

    def delay_for(self, error: RAWGError, attempt: int) -> float:
        """Delay actually slept by the executor after `error`."""
        delay = self.delay(attempt)
        if (
            self.respect_retry_after
            and isinstance(error, RateLimitError)
            and error.retry_after is not None
        ):
            return max(error.retry_after, delay)
        return delay
