"""
RAWG endpoints: the API client, query builder and paginated sequences.
"""

from rawg.datasource.client import RAWGClient
from rawg.datasource.filters import (
    GameOrdering,
    KnownGenre,
    KnownParentPlatform,
    KnownPlatform,
    KnownStore,
)
from rawg.datasource.pagination import PaginatedSequence, SequenceState
from rawg.datasource.query import GamesQueryBuilder

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
]
