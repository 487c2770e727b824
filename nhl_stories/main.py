from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .dependencies.providers import close_clients
from .middleware.logging import StructuredLoggingMiddleware
from .middleware.rate_limit import RateLimitMiddleware
from .routers import cron, stories
from .store.kv import close_redis


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    await close_clients()
    await close_redis()


settings = get_settings()

app = FastAPI(title="nhl-daily-stories", version="1.0.0", lifespan=lifespan)

app.add_middleware(StructuredLoggingMiddleware)
app.add_middleware(
    RateLimitMiddleware,
    limit=settings.rate_limit_requests,
    window=settings.rate_limit_window_seconds,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(stories.router)
app.include_router(cron.router)


@app.get("/healthz")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
