"""Environment-backed settings."""

import os
import subprocess
import sys
from datetime import timedelta

import pytest

from rawg.datasource.client import RAWGClient
from rawg.services.errors import ConfigurationError
from rawg.settings import get_settings, load_settings


def test_defaults() -> None:
    settings = load_settings({})

    assert settings.api_key == ""
    assert settings.base_url == "https://api.rawg.io/api"
    assert settings.request_timeout == 30.0
    assert settings.max_retries == 3
    assert settings.cache_ttl_seconds == 300
    assert settings.debug is False


def test_reads_environment_values() -> None:
    settings = load_settings(
        {
            "RAWG_API_KEY": "abc",
            "RAWG_MAX_RETRIES": "5",
            "RAWG_RETRY_BASE_DELAY": "0.5",
            "RAWG_CACHE_TTL": "60",
            "RAWG_CACHE_MAX_ENTRIES": "10",
            "RAWG_DEBUG": "true",
        }
    )

    assert settings.api_key == "abc"
    assert settings.debug is True

    policy = settings.retry_policy()
    assert policy.max_retries == 5
    assert policy.delay(1) == 1.0

    cache = settings.response_cache()
    assert cache.default_ttl == timedelta(seconds=60)


@pytest.mark.parametrize(
    "environ",
    [
        {"RAWG_MAX_RETRIES": "-1"},
        {"RAWG_REQUEST_TIMEOUT": "0"},
        {"RAWG_CACHE_MAX_ENTRIES": "many"},
    ],
)
def test_invalid_values_raise_configuration_error(environ: dict[str, str]) -> None:
    with pytest.raises(ConfigurationError):
        load_settings(environ)


@pytest.fixture
def bad_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("RAWG_MAX_RETRIES", "abc")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_package_imports_with_bad_environment() -> None:
    result = subprocess.run(
        [sys.executable, "-c", "import rawg"],
        env={**os.environ, "RAWG_MAX_RETRIES": "abc"},
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0, result.stderr


async def test_bad_environment_only_fails_when_settings_are_used(bad_environment) -> None:
    client = RAWGClient(api_key="explicit-key")
    await client.close()

    with pytest.raises(ConfigurationError):
        get_settings()
    with pytest.raises(ConfigurationError):
        RAWGClient.from_settings()
