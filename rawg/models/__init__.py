"""
Response models for the RAWG API.
"""

from rawg.models.base import Page, RAWGModel
from rawg.models.games import (
    Achievement,
    Clip,
    Clips,
    Game,
    GameDetail,
    GameStore,
    Movie,
    MovieData,
    RedditPost,
    Screenshot,
    ShortScreenshot,
    TwitchStream,
    YouTubeThumbnail,
    YouTubeThumbnails,
    YouTubeVideo,
)
from rawg.models.resources import (
    Creator,
    CreatorDetails,
    CreatorRole,
    Developer,
    DeveloperDetails,
    ESRBRating,
    Genre,
    GenreDetails,
    ParentPlatform,
    Platform,
    PlatformDetails,
    PlatformInfo,
    Publisher,
    PublisherDetails,
    Rating,
    Requirements,
    Store,
    StoreDetails,
    Tag,
    TagDetails,
)

GamesPage = Page[Game]
GenresPage = Page[Genre]
PlatformsPage = Page[Platform]
ParentPlatformsPage = Page[ParentPlatform]
DevelopersPage = Page[Developer]
PublishersPage = Page[Publisher]
StoresPage = Page[Store]
TagsPage = Page[Tag]
CreatorsPage = Page[Creator]
CreatorRolesPage = Page[CreatorRole]
ScreenshotsPage = Page[Screenshot]
MoviesPage = Page[Movie]
GameStoresPage = Page[GameStore]
AchievementsPage = Page[Achievement]
RedditPostsPage = Page[RedditPost]
TwitchStreamsPage = Page[TwitchStream]
YouTubeVideosPage = Page[YouTubeVideo]

__all__ = [
    "RAWGModel",
    "Page",
    # Games
    "Game",
    "GameDetail",
    "ShortScreenshot",
    "Screenshot",
    "Movie",
    "MovieData",
    "Clip",
    "Clips",
    "GameStore",
    "Achievement",
    "RedditPost",
    "TwitchStream",
    "YouTubeVideo",
    "YouTubeThumbnail",
    "YouTubeThumbnails",
    # Resources
    "Creator",
    "CreatorDetails",
    "CreatorRole",
    "Developer",
    "DeveloperDetails",
    "ESRBRating",
    "Genre",
    "GenreDetails",
    "ParentPlatform",
    "Platform",
    "PlatformDetails",
    "PlatformInfo",
    "Publisher",
    "PublisherDetails",
    "Rating",
    "Requirements",
    "Store",
    "StoreDetails",
    "Tag",
    "TagDetails",
    # Pages
    "GamesPage",
    "GenresPage",
    "PlatformsPage",
    "ParentPlatformsPage",
    "DevelopersPage",
    "PublishersPage",
    "StoresPage",
    "TagsPage",
    "CreatorsPage",
    "CreatorRolesPage",
    "ScreenshotsPage",
    "MoviesPage",
    "GameStoresPage",
    "AchievementsPage",
    "RedditPostsPage",
    "TwitchStreamsPage",
    "YouTubeVideosPage",
]
