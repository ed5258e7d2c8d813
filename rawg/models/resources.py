"""
Catalogue resources: genres, platforms, developers, publishers, stores,
tags and creators, in their list and detail shapes.
"""

from pydantic import Field

from rawg.models.base import RAWGModel


class Platform(RAWGModel):
    id: int
    name: str
    slug: str


class PlatformDetails(Platform):
    games_count: int | None = None
    image_background: str | None = None
    description: str | None = None
    image: str | None = None
    year_start: int | None = None
    year_end: int | None = None


class ParentPlatform(RAWGModel):
    id: int
    name: str
    slug: str
    platforms: list[Platform] | None = None


class Requirements(RAWGModel):
    minimum: str | None = None
    recommended: str | None = None


class PlatformInfo(RAWGModel):
    """Platform entry embedded in a game, with its release date there."""

    platform: Platform
    released_at: str | None = None
    requirements: Requirements | None = None

    @property
    def id(self) -> int:
        return self.platform.id


class Genre(RAWGModel):
    id: int
    name: str
    slug: str
    games_count: int | None = None
    image_background: str | None = None


class GenreDetails(Genre):
    description: str | None = None


class Developer(RAWGModel):
    id: int
    name: str
    slug: str
    games_count: int | None = None
    image_background: str | None = None


class DeveloperDetails(Developer):
    description: str | None = None


class Publisher(RAWGModel):
    id: int
    name: str
    slug: str
    games_count: int | None = None
    image_background: str | None = None


class PublisherDetails(Publisher):
    description: str | None = None


class Store(RAWGModel):
    id: int
    name: str
    slug: str
    domain: str | None = None
    games_count: int | None = None
    image_background: str | None = None


class StoreDetails(Store):
    description: str | None = None


class Tag(RAWGModel):
    id: int
    name: str
    slug: str
    language: str | None = None
    games_count: int | None = None


class TagDetails(Tag):
    image_background: str | None = None
    description: str | None = None


class Creator(RAWGModel):
    id: int
    name: str
    slug: str
    image: str | None = None
    image_background: str | None = None
    games_count: int | None = None


class CreatorDetails(Creator):
    description: str | None = None
    reviews_count: int | None = None
    # The API sends the creator rating as a string ("4.32")
    rating: str | None = None
    rating_top: int | None = None
    updated: str | None = None


class CreatorRole(RAWGModel):
    id: int
    name: str
    slug: str


class ESRBRating(RAWGModel):
    id: int
    name: str
    slug: str


class Rating(RAWGModel):
    id: int
    title: str
    count: int
    percent: float = Field(ge=0)
