"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any

import pytest

# Set environment before any package imports
os.environ["ENVIRONMENT"] = "development"
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")
for _name in ("OPENAI_API_KEY", "CRON_SECRET", "LOG_LEVEL"):
    os.environ.pop(_name, None)

from nhl_stories.config import Settings  # noqa: E402
from nhl_stories.models import Game, GameState, Team  # noqa: E402
from nhl_stories.store.stories import StoryStore  # noqa: E402


class FakeRedis:
    """In-memory stand-in for the async redis commands the store uses."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.expirations: dict[str, int | None] = {}
        self.sets: dict[str, set[str]] = defaultdict(set)
        self.commands: list[tuple[str, str]] = []

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self.commands.append(("set", key))
        self.values[key] = value
        self.expirations[key] = ex
        return True

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def mget(self, keys: list[str]) -> list[str | None]:
        return [self.values.get(key) for key in keys]

    async def sadd(self, key: str, *members: str) -> int:
        self.commands.append(("sadd", key))
        before = len(self.sets[key])
        self.sets[key].update(members)
        return len(self.sets[key]) - before

    async def smembers(self, key: str) -> set[str]:
        return set(self.sets.get(key, set()))


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def story_store(fake_redis: FakeRedis) -> StoryStore:
    return StoryStore(fake_redis, ttl_seconds=60 * 60 * 24 * 365)


@pytest.fixture
def settings() -> Settings:
    return Settings(ENVIRONMENT="development")


@pytest.fixture
def make_game():
    """Factory for games with sensible defaults."""

    def _make(
        game_id: int = 1,
        away: str = "A",
        home: str = "B",
        away_score: int = 0,
        home_score: int = 0,
        state: GameState = GameState.COMPLETED,
        detailed_state: str | None = None,
        game_date: datetime | None = None,
    ) -> Game:
        return Game(
            game_id=game_id,
            game_date=game_date or datetime(2026, 1, 15, 0, 0, tzinfo=timezone.utc),
            away=Team(away, away_score),
            home=Team(home, home_score),
            state=state,
            detailed_state=detailed_state or state.value,
        )

    return _make


@pytest.fixture
def sample_feed_game() -> dict[str, Any]:
    """One game as the stats API schedule endpoint returns it."""
    return {
        "gamePk": 2025020712,
        "gameDate": "2026-01-16T00:00:00Z",
        "status": {"abstractGameState": "Live", "detailedState": "In Progress - Critical"},
        "teams": {
            "away": {"team": {"id": 10, "name": "Toronto Maple Leafs"}, "score": 2},
            "home": {"team": {"id": 6, "name": "Boston Bruins"}, "score": 1},
        },
    }
