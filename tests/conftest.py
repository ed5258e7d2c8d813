"""Shared fixtures: a fake clock, a recording sleep and a scripted HTTP transport."""

import asyncio
import inspect
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from rawg.datasource.client import RAWGClient
from rawg.services.cache import ResponseCache
from rawg.services.client import NetworkManager
from rawg.services.retry import RetryPolicy

API_KEY = "test-key"
BASE_URL = "https://api.rawg.io/api"


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Stands in for asyncio.sleep and remembers every requested delay."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class ScriptedTransport:
    """
    Mock transport answering from a list of responses.

    Each item is an httpx.Response, an exception to raise, or a callable
    (plain or async) taking the request. The last item repeats once the script
    runs out.
    """

    def __init__(self, *script: Any) -> None:
        self.script = list(script)
        self.requests: list[httpx.Request] = []
        self.gate: asyncio.Event | None = None

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()

        index = min(len(self.requests), len(self.script)) - 1
        action = self.script[index]
        if isinstance(action, Exception):
            raise action
        if callable(action) and not isinstance(action, httpx.Response):
            result = action(request)
            if inspect.isawaitable(result):
                return await result
            return result
        return action

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


def json_response(payload: Any, status_code: int = 200, **headers: str) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"Content-Type": "application/json", **headers},
    )


def game_payload(game_id: int = 1, name: str = "The Legend of Zelda", **extra: Any) -> dict:
    return {
        "id": game_id,
        "name": name,
        "slug": name.lower().replace(" ", "-"),
        "rating": 4.5,
        **extra,
    }


def page_payload(
    results: list[dict],
    next_url: str | None = None,
    count: int | None = None,
) -> dict:
    return {
        "count": len(results) if count is None else count,
        "next": next_url,
        "previous": None,
        "results": results,
    }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_manager(clock: FakeClock, sleep: RecordingSleep) -> Callable[..., NetworkManager]:
    def factory(
        transport: ScriptedTransport,
        retry_policy: RetryPolicy | None = None,
        **kwargs: Any,
    ) -> NetworkManager:
        return NetworkManager(
            http_client=transport.client(),
            cache=kwargs.pop("cache", None) or ResponseCache(clock=clock),
            retry_policy=retry_policy,
            sleep=sleep,
            **kwargs,
        )

    return factory


@pytest.fixture
def make_client(make_manager: Callable[..., NetworkManager]) -> Callable[..., RAWGClient]:
    def factory(
        transport: ScriptedTransport,
        retry_policy: RetryPolicy | None = RetryPolicy(),
    ) -> RAWGClient:
        manager = make_manager(transport, retry_policy=retry_policy)
        return RAWGClient(api_key=API_KEY, base_url=BASE_URL, network_manager=manager)

    return factory
