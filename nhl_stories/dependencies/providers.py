"""FastAPI dependency providers.

Long-lived clients (redis, schedule feed, OpenAI) are built once from the
settings and shared; the pipeline itself is assembled per request.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from ..config import Settings, get_settings
from ..feeds.schedule import ScheduleFeedClient
from ..services.openai_client import CompletionClient, get_completion_client
from ..services.pipeline import StoryPipeline
from ..services.story_generator import StoryGenerator
from ..store.kv import get_redis
from ..store.stories import StoryStore


def get_app_settings() -> Settings:
    return get_settings()


@lru_cache(maxsize=1)
def get_schedule_feed() -> ScheduleFeedClient:
    return ScheduleFeedClient(get_settings())


@lru_cache(maxsize=1)
def get_openai_client() -> CompletionClient | None:
    return get_completion_client(get_settings())


def get_story_store(settings: Settings = Depends(get_app_settings)) -> StoryStore:
    return StoryStore(get_redis(), ttl_seconds=settings.story_ttl_seconds)


def get_story_pipeline(
    settings: Settings = Depends(get_app_settings),
    store: StoryStore = Depends(get_story_store),
) -> StoryPipeline:
    generator = StoryGenerator(settings, get_openai_client())
    return StoryPipeline(get_schedule_feed(), generator, store, settings)


async def close_clients() -> None:
    if get_schedule_feed.cache_info().currsize:
        await get_schedule_feed().aclose()
        get_schedule_feed.cache_clear()
