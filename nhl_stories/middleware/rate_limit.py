"""In-memory per-IP rate limiting for the public story endpoints."""

from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque

from fastapi import Request
from starlette.responses import JSONResponse


class RateLimitMiddleware:
    """Sliding window limiter keyed on client IP.

    IPs whose window has fully expired are dropped, so memory tracks only
    clients seen within the last ``window`` seconds.
    """

    def __init__(
        self,
        app: Callable,
        limit: int,
        window: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.app = app
        self.limit = limit
        self.window = window
        self._clock = clock
        self._requests: dict[str, Deque[float]] = {}
        self._last_sweep = clock()

    @property
    def tracked_clients(self) -> int:
        return len(self._requests)

    def _sweep(self, now: float) -> None:
        cutoff = now - self.window
        stale = [ip for ip, times in self._requests.items() if not times or times[-1] <= cutoff]
        for ip in stale:
            del self._requests[ip]
        self._last_sweep = now

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        client_ip = request.client.host if request.client else "unknown"
        now = self._clock()

        # Full sweep at most once per window
        if now - self._last_sweep >= self.window:
            self._sweep(now)

        request_times = self._requests.setdefault(client_ip, deque())
        while request_times and request_times[0] <= now - self.window:
            request_times.popleft()

        if len(request_times) >= self.limit:
            response = JSONResponse({"detail": "Rate limit exceeded"}, status_code=429)
            await response(scope, receive, send)
            return

        request_times.append(now)
        await self.app(scope, receive, send)
