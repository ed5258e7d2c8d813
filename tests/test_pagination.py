"""PaginatedSequence behaviour against a scripted page fetcher."""

import asyncio

import pytest

from rawg.datasource.pagination import PaginatedSequence, SequenceState
from rawg.models import Game, Page
from rawg.services.errors import ServerError


def make_page(page: int, per_page: int, total_pages: int) -> Page[Game]:
    first_id = (page - 1) * per_page + 1
    has_next = page < total_pages
    return Page[Game](
        count=per_page * total_pages,
        next=f"https://api.rawg.io/api/games?page={page + 1}" if has_next else None,
        previous=None,
        results=[
            Game(id=i, name=f"Game {i}", slug=f"game-{i}")
            for i in range(first_id, first_id + per_page)
        ],
    )


class PageServer:
    def __init__(self, total_pages: int = 3, per_page: int = 2) -> None:
        self.total_pages = total_pages
        self.per_page = per_page
        self.requested: list[tuple[int, int]] = []

    async def __call__(self, page: int, page_size: int) -> Page[Game]:
        self.requested.append((page, page_size))
        return make_page(page, self.per_page, self.total_pages)


async def test_yields_every_item_then_stops() -> None:
    server = PageServer(total_pages=3, per_page=2)
    sequence = PaginatedSequence(server, page_size=2)

    ids = [game.id async for game in sequence]

    assert ids == [1, 2, 3, 4, 5, 6]
    assert server.requested == [(1, 2), (2, 2), (3, 2)]
    assert sequence.state is SequenceState.EXHAUSTED


async def test_early_stop_does_not_fetch_next_page() -> None:
    server = PageServer(total_pages=3, per_page=2)

    async with PaginatedSequence(server, page_size=2) as sequence:
        async for game in sequence:
            if game.id == 1:
                break

    assert server.requested == [(1, 2)]
    assert sequence.state is SequenceState.CANCELLED


async def test_bare_break_stays_emitting_until_closed() -> None:
    server = PageServer(total_pages=3, per_page=2)
    sequence = PaginatedSequence(server, page_size=2)

    async for game in sequence:
        if game.id == 1:
            break

    assert server.requested == [(1, 2)]
    assert sequence.state is SequenceState.EMITTING

    await sequence.aclose()
    assert sequence.state is SequenceState.CANCELLED
    assert server.requested == [(1, 2)]


async def test_pages_requested_lazily() -> None:
    server = PageServer(total_pages=5, per_page=2)
    sequence = PaginatedSequence(server, page_size=2)

    assert sequence.state is SequenceState.NOT_STARTED
    assert server.requested == []

    await sequence.__anext__()
    await sequence.__anext__()
    assert server.requested == [(1, 2)]
    assert sequence.state is SequenceState.EMITTING

    await sequence.__anext__()
    assert server.requested == [(1, 2), (2, 2)]
    assert sequence.page == 3


async def test_empty_first_page() -> None:
    async def empty(page: int, page_size: int) -> Page[Game]:
        return Page[Game](count=0, results=[])

    sequence = PaginatedSequence(empty)

    assert [game async for game in sequence] == []
    assert sequence.state is SequenceState.EXHAUSTED


async def test_fetch_error_propagates_and_ends_sequence() -> None:
    calls = 0

    async def flaky(page: int, page_size: int) -> Page[Game]:
        nonlocal calls
        calls += 1
        if page == 2:
            raise ServerError(500)
        return make_page(page, 2, 3)

    sequence = PaginatedSequence(flaky, page_size=2)
    received = []

    with pytest.raises(ServerError):
        async for game in sequence:
            received.append(game.id)

    assert received == [1, 2]
    assert sequence.state is SequenceState.FAILED
    assert [game async for game in sequence] == []
    assert calls == 2


async def test_cancel_aborts_in_flight_page() -> None:
    started = asyncio.Event()
    aborted = asyncio.Event()

    async def hanging(page: int, page_size: int) -> Page[Game]:
        started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            aborted.set()
            raise
        raise AssertionError("unreachable")

    sequence = PaginatedSequence(hanging)
    consumer = asyncio.create_task(sequence.collect())
    await started.wait()

    sequence.cancel()

    assert await consumer == []
    assert aborted.is_set()
    assert sequence.state is SequenceState.CANCELLED


async def test_cancelling_consumer_cancels_page_fetch() -> None:
    started = asyncio.Event()
    aborted = asyncio.Event()

    async def hanging(page: int, page_size: int) -> Page[Game]:
        started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            aborted.set()
            raise
        raise AssertionError("unreachable")

    sequence = PaginatedSequence(hanging)
    consumer = asyncio.create_task(sequence.collect())
    await started.wait()

    consumer.cancel()
    with pytest.raises(asyncio.CancelledError):
        await consumer

    assert aborted.is_set()
    assert sequence.state is SequenceState.CANCELLED


async def test_collect_with_limit() -> None:
    server = PageServer(total_pages=10, per_page=2)
    sequence = PaginatedSequence(server, page_size=2)

    games = await sequence.collect(limit=3)

    assert [game.id for game in games] == [1, 2, 3]
    assert server.requested == [(1, 2), (2, 2)]
    assert sequence.state is SequenceState.CANCELLED
