"""Story generation and retrieval endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from ..dependencies.providers import get_story_pipeline, get_story_store
from ..logging import logger
from ..services.pipeline import StoryPipeline
from ..store.stories import StoryStore, resolve_story_date

router = APIRouter(prefix="/api", tags=["stories"])


@router.post("/generate")
async def generate_stories(
    pipeline: StoryPipeline = Depends(get_story_pipeline),
) -> Any:
    """
    Generate and store stories for today's games.

    Example response:
        {
          "stories": [
            {
              "id": 2024020001,
              "headline": "Toronto Maple Leafs edge Montreal Canadiens in tight 4-3 battle",
              "gameDate": "2026-01-15T00:00:00Z",
              "status": "Final",
              "story": "...",
              "teams": {
                "away": {"name": "Toronto Maple Leafs", "score": 4},
                "home": {"name": "Montreal Canadiens", "score": 3}
              },
              "createdAt": "2026-01-15T10:00:00Z"
            }
          ]
        }
    """
    try:
        result = await pipeline.run()
    except Exception:
        logger.exception("story_generation_failed")
        return JSONResponse(
            {"error": "Failed to fetch games or generate stories"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if result.message:
        return {"stories": [], "message": result.message}
    return {"stories": [story.to_payload() for story in result.stories]}


@router.get("/stories")
async def list_stories(
    date: str | None = Query(None, description="YYYY-MM-DD or 'today'"),
    store: StoryStore = Depends(get_story_store),
) -> Any:
    """
    List stored stories for a game day.

    Example request:
        GET /api/stories?date=2026-01-15
    """
    try:
        day = resolve_story_date(date)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="date must be YYYY-MM-DD or 'today'",
        )

    try:
        stories = await store.list_for_day(day)
    except Exception:
        logger.exception("story_fetch_failed", date=day.isoformat())
        return JSONResponse(
            {"error": "Failed to fetch stories", "stories": []},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return {"stories": [story.to_payload() for story in stories], "date": day.isoformat()}
