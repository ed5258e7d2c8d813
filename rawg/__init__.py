"""
Async client for the RAWG video game database (https://rawg.io/apidocs).

Usage:
    from rawg import RAWGClient

    async with RAWGClient(api_key="...") as client:
        games = await client.fetch_games(search="zelda")
"""

from rawg.datasource import (
    GameOrdering,
    GamesQueryBuilder,
    KnownGenre,
    KnownParentPlatform,
    KnownPlatform,
    KnownStore,
    PaginatedSequence,
    RAWGClient,
    SequenceState,
)
from rawg.services import (
    ErrorKind,
    NetworkManager,
    RAWGError,
    ResponseCache,
    RetryPolicy,
)
from rawg.settings import Settings, get_settings, load_settings

__version__ = "0.1.0"

__all__ = [
    "RAWGClient",
    "GamesQueryBuilder",
    "PaginatedSequence",
    "SequenceState",
    "GameOrdering",
    "KnownGenre",
    "KnownParentPlatform",
    "KnownPlatform",
    "KnownStore",
    "NetworkManager",
    "ResponseCache",
    "RetryPolicy",
    "ErrorKind",
    "RAWGError",
    "Settings",
    "load_settings",
    "get_settings",
]
