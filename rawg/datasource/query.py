"""
GamesQueryBuilder - fluent, immutable construction of /games queries.

Every method returns a new builder; the original is never changed, so a base
query can be shared and refined:

    base = GamesQueryBuilder().genres([KnownGenre.RPG]).page_size(40)
    recent = base.released_in_last(90).order_by_newest()
    page = await recent.execute(client)

Values are only validated when the query runs, by RAWGClient.fetch_games.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any

from rawg.constants import MAX_METACRITIC_SCORE, MAX_PAGE_SIZE, MIN_METACRITIC_SCORE
from rawg.datasource.filters import GameOrdering

if TYPE_CHECKING:
    from rawg.datasource.client import RAWGClient
    from rawg.datasource.pagination import PaginatedSequence
    from rawg.models import Game, Page

EARLIEST_RELEASE = date(1970, 1, 1)
LATEST_RELEASE = date(9999, 12, 31)

PRESET_PAGE_SIZE = 40


def _date_range(start: date, end: date) -> str:
    return f"{start.isoformat()},{end.isoformat()}"


def _clamp_score(score: int) -> int:
    return min(max(score, MIN_METACRITIC_SCORE), MAX_METACRITIC_SCORE)


@dataclass(frozen=True)
class GamesQueryBuilder:
    """
    Immutable set of fetch_games() keyword arguments.

    Filters are kept as sorted (name, value) pairs with tuple values, so equal
    builders compare and hash equal.
    """

    filters: tuple[tuple[str, Any], ...] = ()
    today: Callable[[], date] = field(default=date.today, repr=False, compare=False)

    @property
    def params(self) -> dict[str, Any]:
        return dict(self.filters)

    def _with(self, **changes: Any) -> "GamesQueryBuilder":
        merged = {**self.params, **changes}
        return replace(self, filters=tuple(sorted(merged.items())))

    # Paging

    def page(self, value: int) -> "GamesQueryBuilder":
        return self._with(page=value)

    def page_size(self, value: int) -> "GamesQueryBuilder":
        """Items per page; values above the API maximum of 40 are lowered to 40."""
        return self._with(page_size=min(value, MAX_PAGE_SIZE))

    # Search

    def search(self, value: str) -> "GamesQueryBuilder":
        return self._with(search=value)

    def search_precise(self, value: bool = True) -> "GamesQueryBuilder":
        return self._with(search_precise=value)

    def search_exact(self, value: bool = True) -> "GamesQueryBuilder":
        return self._with(search_exact=value)

    # Ordering

    def ordering(self, value: GameOrdering | str) -> "GamesQueryBuilder":
        if isinstance(value, GameOrdering):
            value = value.value
        return self._with(ordering=value)

    def order_by_name(self) -> "GamesQueryBuilder":
        return self.ordering(GameOrdering.NAME)

    def order_by_newest(self) -> "GamesQueryBuilder":
        return self.ordering(GameOrdering.RELEASED_DESC)

    def order_by_rating(self) -> "GamesQueryBuilder":
        return self.ordering(GameOrdering.RATING_DESC)

    def order_by_metacritic(self) -> "GamesQueryBuilder":
        return self.ordering(GameOrdering.METACRITIC_DESC)

    # ID filters; accept plain ints or the Known* enums

    def platforms(self, ids: Sequence[int]) -> "GamesQueryBuilder":
        return self._with(platforms=tuple(int(value) for value in ids))

    def parent_platforms(self, ids: Sequence[int]) -> "GamesQueryBuilder":
        return self._with(parent_platforms=tuple(int(value) for value in ids))

    def genres(self, ids: Sequence[int]) -> "GamesQueryBuilder":
        return self._with(genres=tuple(int(value) for value in ids))

    def tags(self, ids: Sequence[int]) -> "GamesQueryBuilder":
        return self._with(tags=tuple(int(value) for value in ids))

    def stores(self, ids: Sequence[int]) -> "GamesQueryBuilder":
        return self._with(stores=tuple(int(value) for value in ids))

    # ID-or-slug filters

    def developers(self, value: str) -> "GamesQueryBuilder":
        return self._with(developers=value)

    def publishers(self, value: str) -> "GamesQueryBuilder":
        return self._with(publishers=value)

    def creators(self, value: str) -> "GamesQueryBuilder":
        return self._with(creators=value)

    # Release dates

    def dates(self, value: str) -> "GamesQueryBuilder":
        """Release date range, "YYYY-MM-DD,YYYY-MM-DD"."""
        return self._with(dates=value)

    def year(self, value: int) -> "GamesQueryBuilder":
        return self.dates(f"{value}-01-01,{value}-12-31")

    def released_this_year(self) -> "GamesQueryBuilder":
        return self.year(self.today().year)

    def released_between(self, start: date, end: date) -> "GamesQueryBuilder":
        return self.dates(_date_range(start, end))

    def released_after(self, start: date) -> "GamesQueryBuilder":
        return self.released_between(start, LATEST_RELEASE)

    def released_before(self, end: date) -> "GamesQueryBuilder":
        return self.released_between(EARLIEST_RELEASE, end)

    def released_in_last(self, days: int) -> "GamesQueryBuilder":
        end = self.today()
        return self.released_between(end - timedelta(days=days), end)

    # Update dates

    def updated(self, value: str) -> "GamesQueryBuilder":
        return self._with(updated=value)

    def updated_between(self, start: date, end: date) -> "GamesQueryBuilder":
        return self.updated(_date_range(start, end))

    # Metacritic

    def metacritic(
        self,
        value: str | None = None,
        *,
        min_score: int | None = None,
        max_score: int | None = None,
    ) -> "GamesQueryBuilder":
        """
        Metacritic score filter.

        Either a raw "min,max" string, or min_score/max_score which are
        clamped to 0-100 (a missing bound defaults to the end of the scale).
        """
        if value is None:
            low = _clamp_score(MIN_METACRITIC_SCORE if min_score is None else min_score)
            high = _clamp_score(MAX_METACRITIC_SCORE if max_score is None else max_score)
            value = f"{low},{high}"
        return self._with(metacritic=value)

    def metacritic_min(self, score: int) -> "GamesQueryBuilder":
        return self.metacritic(f"{score},{MAX_METACRITIC_SCORE}")

    # Exclusions

    def exclude_additions(self, value: bool = True) -> "GamesQueryBuilder":
        return self._with(exclude_additions=value)

    def exclude_parents(self, value: bool = True) -> "GamesQueryBuilder":
        return self._with(exclude_parents=value)

    def exclude_game_series(self, value: bool = True) -> "GamesQueryBuilder":
        return self._with(exclude_game_series=value)

    # Terminals

    async def execute(self, client: "RAWGClient") -> "Page[Game]":
        return await client.fetch_games(**self.params)

    def sequence(self, client: "RAWGClient") -> "PaginatedSequence[Game]":
        """Iterate every matching game from page 1, honouring all filters."""
        filters = dict(self.params)
        filters.pop("page", None)
        page_size = filters.pop("page_size", None)
        if page_size is None:
            return client.games_sequence(**filters)
        return client.games_sequence(page_size=page_size, **filters)

    # Presets

    @classmethod
    def popular_games(cls, today: Callable[[], date] = date.today) -> "GamesQueryBuilder":
        """Well reviewed games from the last 30 days, best rated first."""
        return (
            cls(today=today)
            .released_in_last(30)
            .metacritic_min(75)
            .order_by_rating()
            .page_size(PRESET_PAGE_SIZE)
        )

    @classmethod
    def new_releases(cls, today: Callable[[], date] = date.today) -> "GamesQueryBuilder":
        return (
            cls(today=today)
            .released_in_last(7)
            .order_by_newest()
            .page_size(PRESET_PAGE_SIZE)
        )

    @classmethod
    def upcoming_games(cls, today: Callable[[], date] = date.today) -> "GamesQueryBuilder":
        """Games releasing in the next 180 days, soonest first."""
        start = today()
        return (
            cls(today=today)
            .released_between(start, start + timedelta(days=180))
            .ordering(GameOrdering.RELEASED)
            .page_size(PRESET_PAGE_SIZE)
        )

    @classmethod
    def top_rated(cls, today: Callable[[], date] = date.today) -> "GamesQueryBuilder":
        return (
            cls(today=today)
            .metacritic_min(90)
            .order_by_metacritic()
            .page_size(PRESET_PAGE_SIZE)
        )

    @classmethod
    def this_year(cls, today: Callable[[], date] = date.today) -> "GamesQueryBuilder":
        return (
            cls(today=today)
            .released_this_year()
            .order_by_newest()
            .page_size(PRESET_PAGE_SIZE)
        )

    @classmethod
    def trending(cls, today: Callable[[], date] = date.today) -> "GamesQueryBuilder":
        """Highly rated games from the last 60 days."""
        return (
            cls(today=today)
            .released_in_last(60)
            .metacritic_min(70)
            .order_by_rating()
            .page_size(PRESET_PAGE_SIZE)
        )
