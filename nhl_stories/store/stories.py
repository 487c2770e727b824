"""Dated story storage.

Layout:
    story:{id}:{date}   JSON story record, expires after the configured TTL
    stories:{date}      set of "{id}:{date}" members, one per stored story

A save writes the record and then adds its index member. The two writes are
not atomic: if the second fails the record exists but is left out of that
day's listing until a later run for the same game re-indexes it. The index
is a set, so repeated saves of the same story leave a single member.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from ..config import DEFAULT_STORY_TTL_SECONDS
from ..logging import logger
from ..models import Story
from ..utils.datetime_utils import today_eastern

TODAY = "today"
DATE_FORMAT = "%Y-%m-%d"


def index_member(story_id: int, day: date) -> str:
    return f"{story_id}:{day.isoformat()}"


def story_key(story_id: int, day: date) -> str:
    return f"story:{index_member(story_id, day)}"


def index_key(day: date) -> str:
    return f"stories:{day.isoformat()}"


def resolve_story_date(value: str | None) -> date:
    """Resolve a requested story date.

    None, empty and ``today`` mean today's game day; anything else must
    be ``YYYY-MM-DD``.

    Raises:
        ValueError: If the value is not a valid date.
    """
    if value is None or not value.strip() or value.strip().lower() == TODAY:
        return today_eastern()
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


class StoryStore:
    """Stories in a redis-compatible key-value store.

    ``redis`` is any async client exposing ``set``/``get``/``mget``/
    ``sadd``/``smembers`` with string responses.
    """

    def __init__(self, redis: Any, ttl_seconds: int = DEFAULT_STORY_TTL_SECONDS) -> None:
        self.redis = redis
        self.ttl_seconds = ttl_seconds

    async def save(self, story: Story, day: date) -> None:
        """Write the story record, then add it to the day's index."""
        await self.redis.set(story_key(story.id, day), story.to_json(), ex=self.ttl_seconds)
        await self.redis.sadd(index_key(day), index_member(story.id, day))
        logger.info("story_saved", story_id=story.id, date=day.isoformat())

    async def get(self, story_id: int, day: date) -> Story | None:
        raw = await self.redis.get(story_key(story_id, day))
        if raw is None:
            return None
        return Story.model_validate_json(raw)

    async def list_for_day(self, day: date) -> list[Story]:
        """All indexed stories for ``day``, in index enumeration order.

        Index members whose record is gone (expired, or never written) are
        skipped.
        """
        members = await self.redis.smembers(index_key(day))
        if not members:
            return []

        members = list(members)
        records = await self.redis.mget([f"story:{member}" for member in members])

        stories: list[Story] = []
        for member, raw in zip(members, records):
            if raw is None:
                logger.debug("story_index_orphan", member=member)
                continue
            stories.append(Story.model_validate_json(raw))
        return stories
