"""
Endpoint paths, relative to the API base URL.

Parameterised paths take identifiers that have already been validated.
"""

GAMES = "/games"
GENRES = "/genres"
PLATFORMS = "/platforms"
PARENT_PLATFORMS = "/platforms/lists/parents"
DEVELOPERS = "/developers"
PUBLISHERS = "/publishers"
STORES = "/stores"
TAGS = "/tags"
CREATORS = "/creators"
CREATOR_ROLES = "/creator-roles"

# Per-game sub-resources, appended to /games/{id}
GAME_SCREENSHOTS = "screenshots"
GAME_MOVIES = "movies"
GAME_ADDITIONS = "additions"
GAME_SERIES = "game-series"
GAME_PARENT_GAMES = "parent-games"
GAME_DEVELOPMENT_TEAM = "development-team"
GAME_STORES = "stores"
GAME_ACHIEVEMENTS = "achievements"
GAME_REDDIT = "reddit"
GAME_TWITCH = "twitch"
GAME_YOUTUBE = "youtube"


def game(game_id: int, resource: str | None = None) -> str:
    if resource:
        return f"{GAMES}/{game_id}/{resource}"
    return f"{GAMES}/{game_id}"


def detail(collection: str, identifier: int | str) -> str:
    """Detail path such as /genres/4 or /creators/hideo-kojima."""
    return f"{collection}/{identifier}"
