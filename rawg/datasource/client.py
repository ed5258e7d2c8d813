"""
RAWGClient - one async method per RAWG API endpoint.

API Documentation: https://api.rawg.io/docs/
Every request carries the API key as the `key` query parameter.

Each method validates its arguments, assembles a flat string query, builds
the URL and hands it to the NetworkManager, so caching, deduplication and
retries apply uniformly. Invalid arguments raise ValidationError before any
request is made.
"""

from collections.abc import Sequence
from typing import Any, TypeVar

from rawg.constants import DEFAULT_BASE_URL, DEFAULT_PAGE_SIZE, DEFAULT_REQUEST_TIMEOUT
from rawg.datasource import endpoints
from rawg.datasource.filters import GameOrdering
from rawg.datasource.pagination import PaginatedSequence
from rawg.datasource.query import GamesQueryBuilder
from rawg.models import (
    Achievement,
    Creator,
    CreatorDetails,
    CreatorRole,
    Developer,
    DeveloperDetails,
    Game,
    GameDetail,
    GameStore,
    Genre,
    GenreDetails,
    Movie,
    Page,
    ParentPlatform,
    Platform,
    PlatformDetails,
    Publisher,
    PublisherDetails,
    RedditPost,
    Screenshot,
    Store,
    StoreDetails,
    Tag,
    TagDetails,
    TwitchStream,
    YouTubeVideo,
)
from rawg.services.cache import CacheStats, ResponseCache
from rawg.services.client import NetworkManager, NetworkManaging
from rawg.services.errors import ConfigurationError
from rawg.services.retry import RetryPolicy
from rawg.services.validation import (
    validate_comma_separated_values,
    validate_date_range,
    validate_id_array,
    validate_metacritic_range,
    validate_page_number,
    validate_page_size,
    validate_resource_id,
    validate_search_query,
    validate_slug,
)
from rawg.settings import Settings, get_settings

T = TypeVar("T")

DEFAULT_RETRY_POLICY = RetryPolicy()


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _join_ids(ids: Sequence[int]) -> str:
    return ",".join(str(int(value)) for value in validate_id_array(list(ids)))


def _join_values(values: str | Sequence[str | int]) -> str:
    if not isinstance(values, str):
        values = ",".join(str(value) for value in values)
    return validate_comma_separated_values(values)


class RAWGClient:
    """
    Async client for the RAWG video game database.

    Usage:
        async with RAWGClient(api_key="...") as client:
            page = await client.fetch_games(search="zelda", page_size=5)
            detail = await client.fetch_game_detail(page.results[0].id)

            async for genre in client.genres_sequence():
                print(genre.name)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        network_manager: NetworkManaging | None = None,
        retry_policy: RetryPolicy | None = DEFAULT_RETRY_POLICY,
        cache: ResponseCache | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        debug: bool = False,
    ):
        if not api_key:
            raise ConfigurationError("RAWG API key is missing (set RAWG_API_KEY)")

        self._api_key = api_key
        self._base_url = base_url
        self._owns_network = network_manager is None
        self._network: NetworkManaging = network_manager or NetworkManager(
            cache=cache,
            retry_policy=retry_policy,
            timeout=timeout,
            debug=debug,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RAWGClient":
        """Build a client from environment settings."""
        settings = settings or get_settings()
        return cls(
            api_key=settings.api_key,
            base_url=settings.base_url,
            retry_policy=settings.retry_policy(),
            cache=settings.response_cache(),
            timeout=settings.request_timeout,
            debug=settings.debug,
        )

    @property
    def network_manager(self) -> NetworkManaging:
        return self._network

    # Helpers

    def _url(self, path: str, query: dict[str, str] | None = None) -> str:
        return self._network.build_url(
            self._base_url, path, {**(query or {}), "key": self._api_key}
        )

    async def _get(
        self,
        path: str,
        shape: type[T],
        query: dict[str, str] | None = None,
    ) -> T:
        return await self._network.fetch(self._url(path, query), shape)

    @staticmethod
    def _paging(page: int, page_size: int) -> dict[str, str]:
        return {
            "page": str(validate_page_number(page)),
            "page_size": str(validate_page_size(page_size)),
        }

    async def _fetch_list(
        self,
        path: str,
        item: type[T],
        page: int,
        page_size: int,
        ordering: str | None = None,
    ) -> Page[T]:
        query = self._paging(page, page_size)
        if ordering:
            query["ordering"] = ordering
        return await self._get(path, Page[item], query)

    async def _fetch_game_page(
        self,
        game_id: int,
        resource: str,
        item: type[T],
        page: int,
        page_size: int,
    ) -> Page[T]:
        path = endpoints.game(validate_resource_id(game_id), resource)
        return await self._get(path, Page[item], self._paging(page, page_size))

    async def _fetch_game_content(
        self, game_id: int, resource: str, item: type[T]
    ) -> Page[T]:
        path = endpoints.game(validate_resource_id(game_id), resource)
        return await self._get(path, Page[item])

    async def _fetch_detail(self, collection: str, resource_id: int, shape: type[T]) -> T:
        path = endpoints.detail(collection, validate_resource_id(resource_id))
        return await self._get(path, shape)

    # Games

    async def fetch_games(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        search: str | None = None,
        search_precise: bool | None = None,
        search_exact: bool | None = None,
        ordering: GameOrdering | str | None = None,
        platforms: Sequence[int] | None = None,
        parent_platforms: Sequence[int] | None = None,
        genres: Sequence[int] | None = None,
        tags: Sequence[int] | None = None,
        developers: str | Sequence[str | int] | None = None,
        publishers: str | Sequence[str | int] | None = None,
        stores: Sequence[int] | None = None,
        creators: str | Sequence[str | int] | None = None,
        dates: str | None = None,
        updated: str | None = None,
        metacritic: str | None = None,
        exclude_additions: bool | None = None,
        exclude_parents: bool | None = None,
        exclude_game_series: bool | None = None,
    ) -> Page[Game]:
        """
        Fetch a page of games with optional filters.

        Args:
            page: Page number (1-10000)
            page_size: Items per page (1-40)
            search: Free-text search
            search_precise: Disable fuzzy search
            search_exact: Exact match search
            ordering: Sort field, "-" prefix for descending
            platforms, parent_platforms, genres, tags, stores: ID filters
            developers, publishers, creators: IDs or slugs
            dates: Release date range "YYYY-MM-DD,YYYY-MM-DD"
            updated: Update date range "YYYY-MM-DD,YYYY-MM-DD"
            metacritic: Score range "min,max"
            exclude_additions, exclude_parents, exclude_game_series: Flags

        Returns:
            Page of Game
        """
        query = self._paging(page, page_size)

        if search is not None:
            query["search"] = validate_search_query(search)
        if search_precise is not None:
            query["search_precise"] = _flag(search_precise)
        if search_exact is not None:
            query["search_exact"] = _flag(search_exact)
        if ordering:
            query["ordering"] = (
                ordering.value if isinstance(ordering, GameOrdering) else ordering
            )

        id_filters = {
            "platforms": platforms,
            "parent_platforms": parent_platforms,
            "genres": genres,
            "tags": tags,
            "stores": stores,
        }
        for name, ids in id_filters.items():
            if ids is not None:
                query[name] = _join_ids(ids)

        value_filters = {
            "developers": developers,
            "publishers": publishers,
            "creators": creators,
        }
        for name, values in value_filters.items():
            if values is not None:
                query[name] = _join_values(values)

        if dates is not None:
            query["dates"] = validate_date_range(dates)
        if updated is not None:
            query["updated"] = validate_date_range(updated)
        if metacritic is not None:
            query["metacritic"] = validate_metacritic_range(metacritic)

        flags = {
            "exclude_additions": exclude_additions,
            "exclude_parents": exclude_parents,
            "exclude_game_series": exclude_game_series,
        }
        for name, value in flags.items():
            if value is not None:
                query[name] = _flag(value)

        return await self._get(endpoints.GAMES, Page[Game], query)

    async def fetch_game_detail(self, game_id: int) -> GameDetail:
        return await self._fetch_detail(endpoints.GAMES, game_id, GameDetail)

    async def fetch_game_screenshots(
        self, game_id: int, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[Screenshot]:
        return await self._fetch_game_page(
            game_id, endpoints.GAME_SCREENSHOTS, Screenshot, page, page_size
        )

    async def fetch_game_movies(self, game_id: int) -> Page[Movie]:
        """Trailers for a game."""
        return await self._fetch_game_content(game_id, endpoints.GAME_MOVIES, Movie)

    async def fetch_game_additions(
        self, game_id: int, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[Game]:
        """DLC and editions of a game."""
        return await self._fetch_game_page(
            game_id, endpoints.GAME_ADDITIONS, Game, page, page_size
        )

    async def fetch_game_series(
        self, game_id: int, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[Game]:
        """Other games of the same series."""
        return await self._fetch_game_page(
            game_id, endpoints.GAME_SERIES, Game, page, page_size
        )

    async def fetch_game_parent_games(
        self, game_id: int, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[Game]:
        """Parent games of a DLC or edition."""
        return await self._fetch_game_page(
            game_id, endpoints.GAME_PARENT_GAMES, Game, page, page_size
        )

    async def fetch_game_development_team(
        self, game_id: int, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[Creator]:
        return await self._fetch_game_page(
            game_id, endpoints.GAME_DEVELOPMENT_TEAM, Creator, page, page_size
        )

    async def fetch_game_stores(
        self, game_id: int, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[GameStore]:
        """Store links for a game."""
        return await self._fetch_game_page(
            game_id, endpoints.GAME_STORES, GameStore, page, page_size
        )

    async def fetch_game_achievements(self, game_id: int) -> Page[Achievement]:
        return await self._fetch_game_content(
            game_id, endpoints.GAME_ACHIEVEMENTS, Achievement
        )

    async def fetch_game_reddit_posts(self, game_id: int) -> Page[RedditPost]:
        """Recent posts from the game's subreddit."""
        return await self._fetch_game_content(game_id, endpoints.GAME_REDDIT, RedditPost)

    async def fetch_game_twitch_streams(self, game_id: int) -> Page[TwitchStream]:
        return await self._fetch_game_content(game_id, endpoints.GAME_TWITCH, TwitchStream)

    async def fetch_game_youtube_videos(self, game_id: int) -> Page[YouTubeVideo]:
        return await self._fetch_game_content(
            game_id, endpoints.GAME_YOUTUBE, YouTubeVideo
        )

    # Genres

    async def fetch_genres(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        ordering: str | None = None,
    ) -> Page[Genre]:
        return await self._fetch_list(endpoints.GENRES, Genre, page, page_size, ordering)

    async def fetch_genre_details(self, genre_id: int) -> GenreDetails:
        return await self._fetch_detail(endpoints.GENRES, genre_id, GenreDetails)

    # Platforms

    async def fetch_platforms(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        ordering: str | None = None,
    ) -> Page[Platform]:
        return await self._fetch_list(
            endpoints.PLATFORMS, Platform, page, page_size, ordering
        )

    async def fetch_platform_details(self, platform_id: int) -> PlatformDetails:
        return await self._fetch_detail(endpoints.PLATFORMS, platform_id, PlatformDetails)

    async def fetch_parent_platforms(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        ordering: str | None = None,
    ) -> Page[ParentPlatform]:
        return await self._fetch_list(
            endpoints.PARENT_PLATFORMS, ParentPlatform, page, page_size, ordering
        )

    # Developers

    async def fetch_developers(
        self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[Developer]:
        return await self._fetch_list(endpoints.DEVELOPERS, Developer, page, page_size)

    async def fetch_developer_details(self, developer_id: int) -> DeveloperDetails:
        return await self._fetch_detail(
            endpoints.DEVELOPERS, developer_id, DeveloperDetails
        )

    # Publishers

    async def fetch_publishers(
        self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[Publisher]:
        return await self._fetch_list(endpoints.PUBLISHERS, Publisher, page, page_size)

    async def fetch_publisher_details(self, publisher_id: int) -> PublisherDetails:
        return await self._fetch_detail(
            endpoints.PUBLISHERS, publisher_id, PublisherDetails
        )

    # Stores

    async def fetch_stores(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        ordering: str | None = None,
    ) -> Page[Store]:
        return await self._fetch_list(endpoints.STORES, Store, page, page_size, ordering)

    async def fetch_store_details(self, store_id: int) -> StoreDetails:
        return await self._fetch_detail(endpoints.STORES, store_id, StoreDetails)

    # Tags

    async def fetch_tags(
        self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[Tag]:
        return await self._fetch_list(endpoints.TAGS, Tag, page, page_size)

    async def fetch_tag_details(self, tag_id: int) -> TagDetails:
        return await self._fetch_detail(endpoints.TAGS, tag_id, TagDetails)

    # Creators

    async def fetch_creators(
        self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[Creator]:
        return await self._fetch_list(endpoints.CREATORS, Creator, page, page_size)

    async def fetch_creator_details(self, creator: int | str) -> CreatorDetails:
        """Creator by numeric ID or slug (e.g. "hideo-kojima")."""
        if isinstance(creator, str) and creator.strip().isdigit():
            creator = int(creator.strip())

        if isinstance(creator, str):
            identifier: int | str = validate_slug(creator)
        else:
            identifier = validate_resource_id(creator)

        path = endpoints.detail(endpoints.CREATORS, identifier)
        return await self._get(path, CreatorDetails)

    async def fetch_creator_roles(
        self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[CreatorRole]:
        """Positions such as writer or composer."""
        return await self._fetch_list(
            endpoints.CREATOR_ROLES, CreatorRole, page, page_size
        )

    # Sequences

    def games_sequence(
        self, page_size: int = DEFAULT_PAGE_SIZE, **filters: Any
    ) -> PaginatedSequence[Game]:
        """
        Iterate over games across pages.

        Accepts the same filters as fetch_games (except page/page_size).
        """

        async def fetch(page: int, size: int) -> Page[Game]:
            return await self.fetch_games(page=page, page_size=size, **filters)

        return PaginatedSequence(fetch, page_size)

    def genres_sequence(self, page_size: int = DEFAULT_PAGE_SIZE) -> PaginatedSequence[Genre]:
        return PaginatedSequence(self._page_fetcher(self.fetch_genres), page_size)

    def platforms_sequence(
        self, page_size: int = DEFAULT_PAGE_SIZE
    ) -> PaginatedSequence[Platform]:
        return PaginatedSequence(self._page_fetcher(self.fetch_platforms), page_size)

    def developers_sequence(
        self, page_size: int = DEFAULT_PAGE_SIZE
    ) -> PaginatedSequence[Developer]:
        return PaginatedSequence(self._page_fetcher(self.fetch_developers), page_size)

    def publishers_sequence(
        self, page_size: int = DEFAULT_PAGE_SIZE
    ) -> PaginatedSequence[Publisher]:
        return PaginatedSequence(self._page_fetcher(self.fetch_publishers), page_size)

    def stores_sequence(self, page_size: int = DEFAULT_PAGE_SIZE) -> PaginatedSequence[Store]:
        return PaginatedSequence(self._page_fetcher(self.fetch_stores), page_size)

    def tags_sequence(self, page_size: int = DEFAULT_PAGE_SIZE) -> PaginatedSequence[Tag]:
        return PaginatedSequence(self._page_fetcher(self.fetch_tags), page_size)

    def creators_sequence(
        self, page_size: int = DEFAULT_PAGE_SIZE
    ) -> PaginatedSequence[Creator]:
        return PaginatedSequence(self._page_fetcher(self.fetch_creators), page_size)

    @staticmethod
    def _page_fetcher(method):
        async def fetch(page: int, size: int):
            return await method(page=page, page_size=size)

        return fetch

    # Query builder

    def games_query(self) -> GamesQueryBuilder:
        return GamesQueryBuilder()

    async def fetch_popular_games(self) -> Page[Game]:
        return await GamesQueryBuilder.popular_games().execute(self)

    async def fetch_new_releases(self) -> Page[Game]:
        return await GamesQueryBuilder.new_releases().execute(self)

    async def fetch_upcoming_games(self) -> Page[Game]:
        return await GamesQueryBuilder.upcoming_games().execute(self)

    async def fetch_top_rated(self) -> Page[Game]:
        return await GamesQueryBuilder.top_rated().execute(self)

    async def fetch_this_year(self) -> Page[Game]:
        return await GamesQueryBuilder.this_year().execute(self)

    async def fetch_trending_games(self) -> Page[Game]:
        return await GamesQueryBuilder.trending().execute(self)

    # Maintenance

    async def clear_cache(self) -> None:
        await self._network.clear_cache()

    async def cache_stats(self) -> CacheStats:
        return await self._network.cache_stats()

    async def cancel_all_requests(self) -> int:
        return await self._network.cancel_all_requests()

    async def close(self) -> None:
        if self._owns_network:
            await self._network.close()

    async def __aenter__(self) -> "RAWGClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
