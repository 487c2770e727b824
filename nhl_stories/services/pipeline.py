"""Daily story pipeline: fetch schedule, select games, generate, store.

Entry point for both the generate endpoint and the cron trigger. Runs are
not coordinated with each other; two concurrent runs for the same day
overwrite the same records and add the same index members.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date

from ..config import Settings
from ..feeds.schedule import ScheduleFeedClient
from ..logging import logger
from ..models import Story
from ..store.stories import StoryStore
from ..utils.datetime_utils import today_eastern
from .game_selection import select_for_processing
from .story_generator import StoryGenerator

NO_GAMES_MESSAGE = "No games available right now. Check back later!"


@dataclass
class PipelineResult:
    date: date
    stories: list[Story] = field(default_factory=list)
    message: str | None = None
    used_fallback_feed: bool = False


class StoryPipeline:
    def __init__(
        self,
        feed: ScheduleFeedClient,
        generator: StoryGenerator,
        store: StoryStore,
        settings: Settings,
    ) -> None:
        self.feed = feed
        self.generator = generator
        self.store = store
        self.max_scheduled = settings.max_scheduled_stories

    async def run(self, day: date | None = None) -> PipelineResult:
        """Generate and store stories for ``day`` (default: today's game day).

        Feed and completion failures are absorbed by their fallbacks. Store
        failures propagate; records saved before the failure stay saved.
        """
        day = day or today_eastern()
        fetched = await self.feed.fetch_games(day)
        games = select_for_processing(fetched.games, max_scheduled=self.max_scheduled)

        if not games:
            logger.info("pipeline_no_games", date=day.isoformat())
            return PipelineResult(
                date=day,
                message=NO_GAMES_MESSAGE,
                used_fallback_feed=fetched.used_fallback,
            )

        stories = list(await asyncio.gather(*(self.generator.generate(g) for g in games)))
        # Every save runs to completion before the first failure is raised
        outcomes = await asyncio.gather(
            *(self.store.save(story, day) for story in stories), return_exceptions=True
        )
        errors = [outcome for outcome in outcomes if isinstance(outcome, BaseException)]
        if errors:
            logger.error(
                "pipeline_save_failed",
                date=day.isoformat(),
                failed=len(errors),
                saved=len(stories) - len(errors),
            )
            raise errors[0]

        logger.info(
            "pipeline_complete",
            date=day.isoformat(),
            stories=len(stories),
            fallback_feed=fetched.used_fallback,
        )
        return PipelineResult(
            date=day,
            stories=stories,
            used_fallback_feed=fetched.used_fallback,
        )
