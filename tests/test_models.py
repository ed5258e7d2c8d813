"""Response models and page helpers."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from rawg.models import Achievement, Game, GameDetail, GamesPage, Movie, Page
from rawg.utils import redact_url


def make_games_page(count: int, next_url: str | None, previous: str | None, size: int = 20):
    return GamesPage(
        count=count,
        next=next_url,
        previous=previous,
        results=[Game(id=i, name=f"Game {i}", slug=f"game-{i}") for i in range(1, size + 1)],
    )


def test_game_ignores_unknown_fields() -> None:
    game = Game.model_validate(
        {
            "id": 3328,
            "name": "The Witcher 3: Wild Hunt",
            "slug": "the-witcher-3-wild-hunt",
            "rating": 4.66,
            "added_by_status": {"owned": 10},
            "platforms": [
                {"platform": {"id": 4, "name": "PC", "slug": "pc"}, "released_at": "2015-05-18"},
                {"platform": {"id": 18, "name": "PlayStation 4", "slug": "playstation4"}},
            ],
        }
    )

    assert game.is_highly_rated
    assert game.platform_names == "PC, PlayStation 4"
    assert game.platforms[0].id == 4


def test_game_requires_identity_fields() -> None:
    with pytest.raises(PydanticValidationError):
        Game.model_validate({"name": "Nameless"})


def test_game_detail_defaults() -> None:
    detail = GameDetail.model_validate({"id": 1, "name": "Doom", "slug": "doom"})

    assert detail.genre_names == "Unknown"
    assert detail.tba is False


def test_numeric_aliases() -> None:
    movie = Movie.model_validate(
        {"id": 1, "name": "Trailer", "data": {"480": "low.mp4", "max": "high.mp4"}}
    )

    assert movie.data.size_480 == "low.mp4"
    assert movie.data.max == "high.mp4"


def test_achievement_percent() -> None:
    achievement = Achievement(id=1, name="First", description="Start", percent="12.5")

    assert achievement.percent_value == 12.5
    assert Achievement(id=2, name="x", description="y", percent="n/a").percent_value is None


def test_page_navigation_helpers() -> None:
    first = make_games_page(100, "https://api.rawg.io/api/games?page=2", None)
    assert first.has_next_page
    assert not first.has_previous_page
    assert first.current_page == 1
    assert first.estimated_total_pages == 5
    assert first.progress == pytest.approx(0.2)

    second = make_games_page(100, "https://api.rawg.io/api/games?page=3", "https://api.rawg.io/api/games")
    assert second.current_page == 2

    last = make_games_page(100, None, "https://api.rawg.io/api/games?page=4")
    assert last.current_page == 5
    assert last.progress == 1.0


def test_page_decodes_generic_items() -> None:
    page = Page[Game].model_validate_json(
        b'{"count": 1, "next": null, "previous": null,'
        b' "results": [{"id": 1, "name": "Tetris", "slug": "tetris"}]}'
    )

    assert not page.is_empty
    assert page.results[0].name == "Tetris"


def test_redact_url_hides_api_key() -> None:
    url = "https://api.rawg.io/api/games?key=secret&page=1"

    assert redact_url(url) == "https://api.rawg.io/api/games?key=***&page=1"
    assert redact_url("https://x.io/a?page=1&key=secret") == "https://x.io/a?page=1&key=***"
    assert redact_url(url, limit=10) == "https://ap..."
