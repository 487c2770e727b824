"""Tests for story generation and its fallback paths."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from nhl_stories.models import GameState
from nhl_stories.services.narrative_fallback import build_fallback_narrative
from nhl_stories.services.story_generator import NarrativeFallbackReason, StoryGenerator


def _completion(return_value: str | None = None, side_effect=None) -> MagicMock:
    client = MagicMock()
    client.complete = AsyncMock(return_value=return_value, side_effect=side_effect)
    return client


class TestWriteNarrative:
    @pytest.mark.asyncio
    async def test_uses_completion_text(self, settings, make_game) -> None:
        client = _completion("AI story")
        generator = StoryGenerator(settings, client)

        result = await generator.write_narrative(make_game(away_score=4, home_score=3))

        assert result.text == "AI story"
        assert not result.used_fallback
        kwargs = client.complete.await_args.kwargs
        assert kwargs == {"temperature": 0.7, "max_tokens": 800}

    @pytest.mark.asyncio
    async def test_no_credentials_uses_template(self, settings, make_game) -> None:
        game = make_game(away_score=4, home_score=3)

        result = await StoryGenerator(settings, None).write_narrative(game)

        assert result.fallback_reason is NarrativeFallbackReason.NO_CREDENTIALS
        assert result.text == build_fallback_narrative(game)

    @pytest.mark.asyncio
    async def test_completion_error_uses_template(self, settings, make_game) -> None:
        game = make_game(state=GameState.IN_PROGRESS, away_score=1, home_score=2)
        generator = StoryGenerator(settings, _completion(side_effect=RuntimeError("rate limited")))

        result = await generator.write_narrative(game)

        assert result.fallback_reason is NarrativeFallbackReason.COMPLETION_FAILED
        assert result.text == build_fallback_narrative(game)


class TestGenerate:
    @pytest.mark.asyncio
    async def test_story_copies_game_fields(self, settings, make_game) -> None:
        game = make_game(game_id=7, away="A", home="B", away_score=4, home_score=3)

        story = await StoryGenerator(settings, _completion("Body")).generate(game)

        assert story.id == 7
        assert story.headline == "A edge B in tight 4-3 battle"
        assert story.game_date == game.game_date
        assert story.status is GameState.COMPLETED
        assert story.story == "Body"
        assert story.teams.away.name == "A"
        assert story.teams.away.score == 4
        assert story.teams.home.name == "B"
        assert story.teams.home.score == 3
        assert story.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_concurrent_generation_is_independent(self, settings, make_game) -> None:
        async def complete(prompt: str, **kwargs) -> str:
            await asyncio.sleep(0)
            return prompt.splitlines()[1]

        client = MagicMock()
        client.complete = complete
        generator = StoryGenerator(settings, client)
        games = [make_game(game_id=i, away=f"Away{i}", home=f"Home{i}", away_score=i) for i in range(1, 4)]

        stories = await asyncio.gather(*(generator.generate(g) for g in games))

        assert [s.id for s in stories] == [1, 2, 3]
        for i, story in enumerate(stories, start=1):
            assert story.story == f"Away{i} {i} vs Home{i} 0"

    @pytest.mark.asyncio
    async def test_serializes_with_camel_case_keys(self, settings, make_game) -> None:
        story = await StoryGenerator(settings, None).generate(make_game())

        payload = story.to_payload()

        assert set(payload) == {"id", "headline", "gameDate", "status", "story", "teams", "createdAt"}
        assert payload["status"] == "Final"
        assert payload["teams"] == {"away": {"name": "A", "score": 0}, "home": {"name": "B", "score": 0}}
