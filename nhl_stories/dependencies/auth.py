"""Shared-secret authentication for the cron trigger."""

from __future__ import annotations

import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import Settings
from ..logging import logger
from .providers import get_app_settings

CRON_BEARER = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def verify_cron_secret(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(CRON_BEARER),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """Validate ``Authorization: Bearer <CRON_SECRET>``.

    Uses constant-time comparison. With no secret configured, requests are
    let through in development only.

    Raises:
        HTTPException: 401 if the token is missing or wrong.
    """
    client_ip = request.client.host if request.client else "unknown"

    if not settings.cron_secret:
        if settings.is_development:
            logger.warning("cron_secret_not_configured", detail="allowing unauthenticated trigger")
            return
        logger.error("cron_secret_not_configured", path=request.url.path)
        raise _unauthorized()

    if credentials is None or not credentials.credentials:
        logger.warning("cron_unauthorized", reason="missing_token", client_ip=client_ip)
        raise _unauthorized()

    if not secrets.compare_digest(credentials.credentials, settings.cron_secret):
        logger.warning("cron_unauthorized", reason="invalid_token", client_ip=client_ip)
        raise _unauthorized()
