"""Story generation for a single game.

Builds the headline and prompt, asks the completion service for the story
body, and falls back to a templated body when the service is unconfigured
or fails. ``generate`` never raises for a well-formed ``Game``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..config import Settings
from ..logging import logger
from ..models import Game, Story
from ..utils.datetime_utils import now_utc
from .headlines import build_headline
from .narrative_fallback import build_fallback_narrative
from .openai_client import CompletionClient
from .prompts import build_story_prompt


class NarrativeFallbackReason(str, Enum):
    """Why a templated body replaced the AI-generated one."""

    NO_CREDENTIALS = "no_credentials"
    COMPLETION_FAILED = "completion_failed"


@dataclass(frozen=True)
class NarrativeResult:
    text: str
    fallback_reason: NarrativeFallbackReason | None = None

    @property
    def used_fallback(self) -> bool:
        return self.fallback_reason is not None


class StoryGenerator:
    """Produce a ``Story`` per game.

    Holds no per-game state, so ``generate`` can run concurrently for
    every game in a pass.
    """

    def __init__(self, settings: Settings, client: CompletionClient | None) -> None:
        self.client = client
        self.temperature = settings.story_temperature
        self.max_tokens = settings.story_max_tokens

    async def write_narrative(self, game: Game) -> NarrativeResult:
        if self.client is None:
            return NarrativeResult(
                text=build_fallback_narrative(game),
                fallback_reason=NarrativeFallbackReason.NO_CREDENTIALS,
            )

        prompt = build_story_prompt(game)
        try:
            text = await self.client.complete(
                prompt, temperature=self.temperature, max_tokens=self.max_tokens
            )
        except Exception as exc:
            logger.warning(
                "narrative_fallback_used",
                game_id=game.game_id,
                reason=NarrativeFallbackReason.COMPLETION_FAILED.value,
                error=str(exc),
            )
            return NarrativeResult(
                text=build_fallback_narrative(game),
                fallback_reason=NarrativeFallbackReason.COMPLETION_FAILED,
            )
        return NarrativeResult(text=text)

    async def generate(self, game: Game) -> Story:
        narrative = await self.write_narrative(game)
        story = Story.from_game(
            game,
            headline=build_headline(game),
            body=narrative.text,
            created_at=now_utc(),
        )
        logger.info(
            "story_generated",
            game_id=game.game_id,
            state=game.state.value,
            fallback=narrative.fallback_reason.value if narrative.used_fallback else None,
        )
        return story
