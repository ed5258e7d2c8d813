import os
from datetime import timedelta
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from rawg.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_CACHE_COST_LIMIT,
    DEFAULT_CACHE_LIMIT,
    DEFAULT_CACHE_TTL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_BASE_DELAY,
    DEFAULT_RETRY_MAX_DELAY,
)
from rawg.services.cache import ResponseCache
from rawg.services.errors import ConfigurationError
from rawg.services.retry import RetryPolicy

load_dotenv()


class Settings(BaseModel):
    # API Configuration
    api_key: str = Field(default="", alias="RAWG_API_KEY")
    base_url: str = Field(default=DEFAULT_BASE_URL, alias="RAWG_BASE_URL")
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT, gt=0, alias="RAWG_REQUEST_TIMEOUT"
    )

    # Retry Configuration
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0, alias="RAWG_MAX_RETRIES")
    retry_base_delay: float = Field(
        default=DEFAULT_RETRY_BASE_DELAY, ge=0, alias="RAWG_RETRY_BASE_DELAY"
    )
    retry_max_delay: float = Field(
        default=DEFAULT_RETRY_MAX_DELAY, ge=0, alias="RAWG_RETRY_MAX_DELAY"
    )

    # Cache Configuration
    cache_ttl_seconds: float = Field(
        default=DEFAULT_CACHE_TTL.total_seconds(), gt=0, alias="RAWG_CACHE_TTL"
    )
    cache_max_entries: int = Field(
        default=DEFAULT_CACHE_LIMIT, ge=0, alias="RAWG_CACHE_MAX_ENTRIES"
    )
    cache_max_bytes: int = Field(
        default=DEFAULT_CACHE_COST_LIMIT, ge=0, alias="RAWG_CACHE_MAX_BYTES"
    )

    debug: bool = Field(default=False, alias="RAWG_DEBUG")

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            base_delay=self.retry_base_delay,
            max_delay=self.retry_max_delay,
        )

    def response_cache(self) -> ResponseCache:
        return ResponseCache(
            count_limit=self.cache_max_entries,
            total_cost_limit=self.cache_max_bytes,
            default_ttl=timedelta(seconds=self.cache_ttl_seconds),
            debug=self.debug,
        )


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Read settings from the environment (after .env has been loaded)."""
    source = dict(os.environ if environ is None else environ)
    try:
        return Settings.model_validate(source)
    except PydanticValidationError as e:
        raise ConfigurationError(str(e)) from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read on first use."""
    return load_settings()
