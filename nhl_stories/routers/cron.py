"""Cron trigger endpoint.

Called once a day by an external scheduler with the shared secret. Runs
the same pipeline as ``POST /api/generate``.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..dependencies.auth import verify_cron_secret
from ..dependencies.providers import get_story_pipeline
from ..logging import logger
from ..services.pipeline import StoryPipeline
from ..utils.datetime_utils import now_utc

router = APIRouter(prefix="/api/cron", tags=["cron"])


@router.get("/daily", dependencies=[Depends(verify_cron_secret)])
async def run_daily_generation(
    pipeline: StoryPipeline = Depends(get_story_pipeline),
) -> Any:
    try:
        result = await pipeline.run()
    except Exception as exc:
        logger.exception("cron_generation_failed", error=str(exc))
        return JSONResponse(
            {"error": "Failed to generate daily stories"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    logger.info("cron_generation_complete", stories=len(result.stories))
    return {
        "success": True,
        "message": "Daily stories generated",
        "storiesCount": len(result.stories),
        "timestamp": now_utc().isoformat(),
    }
