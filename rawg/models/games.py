"""
Game models and per-game content (screenshots, trailers, store links,
achievements, Reddit posts, Twitch and YouTube videos).
"""

from pydantic import Field

from rawg.models.base import RAWGModel
from rawg.models.resources import (
    Developer,
    ESRBRating,
    Genre,
    PlatformInfo,
    Publisher,
    Rating,
    Store,
    Tag,
)


class ShortScreenshot(RAWGModel):
    id: int
    image: str


class Game(RAWGModel):
    """Game as returned in list endpoints."""

    id: int
    name: str
    slug: str
    background_image: str | None = None
    released: str | None = None
    rating: float = 0.0
    rating_top: int | None = None
    ratings_count: int | None = None
    metacritic: int | None = None
    playtime: int | None = None
    platforms: list[PlatformInfo] | None = None
    genres: list[Genre] | None = None
    tags: list[Tag] | None = None
    esrb_rating: ESRBRating | None = None
    short_screenshots: list[ShortScreenshot] | None = None

    @property
    def is_highly_rated(self) -> bool:
        return self.rating >= 4.0

    @property
    def platform_names(self) -> str:
        if not self.platforms:
            return "Unknown"
        return ", ".join(info.platform.name for info in self.platforms[:3])


class Clips(RAWGModel):
    size_320: str | None = Field(default=None, alias="320")
    size_640: str | None = Field(default=None, alias="640")
    full: str | None = None


class Clip(RAWGModel):
    clip: str | None = None
    clips: Clips | None = None
    video: str | None = None
    preview: str | None = None


class GameDetail(RAWGModel):
    """Full game record from /games/{id}."""

    id: int
    name: str
    slug: str
    name_original: str | None = None
    description: str | None = None
    description_raw: str | None = None
    metacritic: int | None = None
    released: str | None = None
    tba: bool = False
    updated: str | None = None
    background_image: str | None = None
    background_image_additional: str | None = None
    website: str | None = None
    rating: float = 0.0
    rating_top: int | None = None
    ratings_count: int | None = None
    ratings: list[Rating] | None = None
    playtime: int | None = None
    platforms: list[PlatformInfo] | None = None
    genres: list[Genre] | None = None
    tags: list[Tag] | None = None
    publishers: list[Publisher] | None = None
    developers: list[Developer] | None = None
    esrb_rating: ESRBRating | None = None
    clip: Clip | None = None
    reddit_url: str | None = None
    reddit_name: str | None = None
    reddit_description: str | None = None
    reddit_count: int | None = None
    twitch_count: int | None = None
    youtube_count: int | None = None
    alternative_names: list[str] | None = None

    @property
    def is_highly_rated(self) -> bool:
        return self.rating >= 4.0

    @property
    def genre_names(self) -> str:
        if not self.genres:
            return "Unknown"
        return ", ".join(genre.name for genre in self.genres)


class Screenshot(RAWGModel):
    id: int
    image: str
    width: int | None = None
    height: int | None = None
    is_deleted: bool | None = None


class MovieData(RAWGModel):
    size_480: str | None = Field(default=None, alias="480")
    max: str | None = None


class Movie(RAWGModel):
    id: int
    name: str
    preview: str | None = None
    data: MovieData | None = None


class GameStore(RAWGModel):
    """Link to a game on a specific store."""

    id: int
    game_id: int | None = None
    store_id: int | None = None
    url: str | None = None
    store: Store | None = None


class Achievement(RAWGModel):
    id: int
    name: str
    description: str
    image: str | None = None
    percent: str | None = None

    @property
    def percent_value(self) -> float | None:
        if self.percent is None:
            return None
        try:
            return float(self.percent)
        except ValueError:
            return None


class RedditPost(RAWGModel):
    id: int
    name: str
    text: str
    image: str | None = None
    url: str
    username: str
    username_url: str | None = None
    created: str


class TwitchStream(RAWGModel):
    id: int
    external_id: int | None = None
    name: str | None = None
    description: str | None = None
    created: str | None = None
    published: str | None = None
    thumbnail: str | None = None
    view_count: int | None = None
    language: str | None = None


class YouTubeThumbnail(RAWGModel):
    url: str | None = None
    width: int | None = None
    height: int | None = None


class YouTubeThumbnails(RAWGModel):
    medium: YouTubeThumbnail | None = None
    high: YouTubeThumbnail | None = None
    maxres: YouTubeThumbnail | None = None


class YouTubeVideo(RAWGModel):
    id: int
    external_id: str | None = None
    channel_id: str | None = None
    channel_title: str | None = None
    name: str | None = None
    description: str | None = None
    created: str | None = None
    view_count: int | None = None
    comments_count: int | None = None
    like_count: int | None = None
    dislike_count: int | None = None
    favorite_count: int | None = None
    thumbnails: YouTubeThumbnails | None = None
