"""RequestDeduplicator sharing and cancellation."""

import asyncio

import pytest

from rawg.services.deduplicator import RequestDeduplicator


class SlowRequest:
    def __init__(self, result: bytes = b"body") -> None:
        self.result = result
        self.calls = 0
        self.release = asyncio.Event()
        self.cancelled = False

    async def __call__(self) -> bytes:
        self.calls += 1
        try:
            await self.release.wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return self.result


async def _settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


async def test_concurrent_callers_share_one_request() -> None:
    dedup = RequestDeduplicator()
    request = SlowRequest()

    callers = [asyncio.create_task(dedup.dedupe("url", request)) for _ in range(5)]
    await _settle()
    assert dedup.get_in_flight_count() == 1

    request.release.set()
    results = await asyncio.gather(*callers)

    assert results == [b"body"] * 5
    assert request.calls == 1
    assert dedup.get_in_flight_count() == 0

    stats = dedup.get_stats()
    assert stats.total == 1
    assert stats.deduplicated == 4
    assert stats.to_dict()["dedup_rate"] == "80.00%"
    assert stats.to_dict()["keys"] == []


async def test_different_keys_run_separately() -> None:
    dedup = RequestDeduplicator()

    async def body(value: bytes) -> bytes:
        return value

    first, second = await asyncio.gather(
        dedup.dedupe("a", lambda: body(b"a")),
        dedup.dedupe("b", lambda: body(b"b")),
    )

    assert (first, second) == (b"a", b"b")
    assert dedup.get_stats().total == 2


async def test_failure_reaches_every_caller() -> None:
    dedup = RequestDeduplicator()
    gate = asyncio.Event()

    async def failing() -> bytes:
        await gate.wait()
        raise RuntimeError("boom")

    callers = [asyncio.create_task(dedup.dedupe("url", failing)) for _ in range(3)]
    await _settle()
    gate.set()

    results = await asyncio.gather(*callers, return_exceptions=True)
    assert all(isinstance(result, RuntimeError) for result in results)
    assert dedup.get_in_flight_count() == 0


async def test_sequential_calls_are_not_deduplicated() -> None:
    dedup = RequestDeduplicator()
    calls = 0

    async def body() -> int:
        nonlocal calls
        calls += 1
        return calls

    assert await dedup.dedupe("url", body) == 1
    assert await dedup.dedupe("url", body) == 2


async def test_one_waiter_cancelling_keeps_request_for_others() -> None:
    dedup = RequestDeduplicator()
    request = SlowRequest()

    leaving = asyncio.create_task(dedup.dedupe("url", request))
    staying = asyncio.create_task(dedup.dedupe("url", request))
    await _settle()

    leaving.cancel()
    await _settle()
    assert not request.cancelled

    request.release.set()
    assert await staying == b"body"
    with pytest.raises(asyncio.CancelledError):
        await leaving


async def test_last_waiter_cancelling_cancels_request() -> None:
    dedup = RequestDeduplicator()
    request = SlowRequest()

    caller = asyncio.create_task(dedup.dedupe("url", request))
    await _settle()

    caller.cancel()
    await _settle()

    assert request.cancelled
    assert dedup.get_in_flight_count() == 0


async def test_cancel_all() -> None:
    dedup = RequestDeduplicator()
    first = SlowRequest()
    second = SlowRequest()

    callers = [
        asyncio.create_task(dedup.dedupe("a", first)),
        asyncio.create_task(dedup.dedupe("b", second)),
    ]
    await _settle()

    assert await dedup.cancel_all() == 2
    results = await asyncio.gather(*callers, return_exceptions=True)

    assert all(isinstance(result, asyncio.CancelledError) for result in results)
    assert first.cancelled and second.cancelled
    assert dedup.get_in_flight_count() == 0


async def test_cancel_single_key() -> None:
    dedup = RequestDeduplicator()
    request = SlowRequest()

    caller = asyncio.create_task(dedup.dedupe("url", request))
    await _settle()

    assert await dedup.cancel("url") is True
    assert await dedup.cancel("url") is False
    with pytest.raises(asyncio.CancelledError):
        await caller


async def test_stats_list_in_flight_keys_without_api_key() -> None:
    dedup = RequestDeduplicator()
    request = SlowRequest()
    url = "https://api.rawg.io/api/games?key=secret&page=1"

    caller = asyncio.create_task(dedup.dedupe(url, request))
    await _settle()

    stats = dedup.get_stats().to_dict()
    assert stats["in_flight"] == 1
    assert stats["keys"] == ["https://api.rawg.io/api/games?key=***&page=1"]

    request.release.set()
    await caller


async def test_caller_after_timeout_starts_fresh_request() -> None:
    dedup = RequestDeduplicator()
    stalled = SlowRequest(b"stale")

    with pytest.raises(TimeoutError):
        async with asyncio.timeout(0.01):
            await dedup.dedupe("url", stalled)

    # The abandoned request may still be unwinding; a new caller must not join it
    fresh = SlowRequest(b"fresh")
    fresh.release.set()

    assert await dedup.dedupe("url", fresh) == b"fresh"
    assert fresh.calls == 1
