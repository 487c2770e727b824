"""Tests for cron shared-secret authentication."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from nhl_stories.config import Settings
from nhl_stories.dependencies.auth import verify_cron_secret

SECRET = "cron_secret_" + "x" * 20


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestVerifyCronSecret:
    @pytest.fixture
    def mock_request(self) -> MagicMock:
        request = MagicMock()
        request.client.host = "127.0.0.1"
        request.url.path = "/api/cron/daily"
        return request

    @pytest.fixture
    def configured(self) -> Settings:
        return Settings(ENVIRONMENT="production", CRON_SECRET=SECRET)

    @pytest.mark.asyncio
    async def test_valid_secret_accepted(self, mock_request, configured) -> None:
        assert await verify_cron_secret(mock_request, _bearer(SECRET), configured) is None

    @pytest.mark.asyncio
    async def test_invalid_secret_rejected(self, mock_request, configured) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await verify_cron_secret(mock_request, _bearer("wrong"), configured)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Unauthorized"

    @pytest.mark.asyncio
    async def test_missing_credentials_rejected(self, mock_request, configured) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await verify_cron_secret(mock_request, None, configured)

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_uses_constant_time_comparison(self, mock_request, configured) -> None:
        with patch("nhl_stories.dependencies.auth.secrets.compare_digest", return_value=True) as compare:
            await verify_cron_secret(mock_request, _bearer(SECRET), configured)

        compare.assert_called_once_with(SECRET, SECRET)

    @pytest.mark.asyncio
    async def test_unconfigured_secret_open_in_development(self, mock_request) -> None:
        settings = Settings(ENVIRONMENT="development")

        assert await verify_cron_secret(mock_request, None, settings) is None

    @pytest.mark.asyncio
    async def test_unconfigured_secret_closed_outside_development(self, mock_request) -> None:
        settings = Settings(ENVIRONMENT="staging")

        with pytest.raises(HTTPException) as exc_info:
            await verify_cron_secret(mock_request, _bearer("anything"), settings)

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_secret_logged_with_client_ip(self, mock_request, configured) -> None:
        with patch("nhl_stories.dependencies.auth.logger") as mock_logger:
            with pytest.raises(HTTPException):
                await verify_cron_secret(mock_request, _bearer("wrong"), configured)

        mock_logger.warning.assert_called_once_with(
            "cron_unauthorized", reason="invalid_token", client_ip="127.0.0.1"
        )
