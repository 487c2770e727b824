"""NHL schedule feed client.

Fetches a day's games from the NHL stats API schedule endpoint. The feed is
treated as best-effort: any failure resolves to a fixed synthetic slate so
the story pipeline always has games to work with.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

import httpx

from ..config import Settings
from ..logging import logger
from ..models import Game, GameState, Team
from ..utils.datetime_utils import eastern_evening_utc, parse_iso_datetime

SCHEDULE_PATH = "/schedule"
USER_AGENT = "nhl-daily-stories/1.0"

# (game_id, away, away_score, home, home_score)
SYNTHETIC_SLATE: tuple[tuple[int, str, int, str, int], ...] = (
    (2024020001, "Toronto Maple Leafs", 4, "Montreal Canadiens", 3),
    (2024020002, "Boston Bruins", 2, "New York Rangers", 5),
    (2024020003, "Colorado Avalanche", 6, "Los Angeles Kings", 2),
)


class FeedFallbackReason(str, Enum):
    """Why the synthetic slate replaced the live schedule."""

    REQUEST_FAILED = "request_failed"
    BAD_STATUS = "bad_status"
    MALFORMED_PAYLOAD = "malformed_payload"
    EMPTY_SCHEDULE = "empty_schedule"


@dataclass(frozen=True)
class ScheduleFetchResult:
    """Games for a day plus which source produced them."""

    games: list[Game]
    fallback_reason: FeedFallbackReason | None = None

    @property
    def used_fallback(self) -> bool:
        return self.fallback_reason is not None


class MalformedScheduleError(ValueError):
    """Raised internally when the schedule payload doesn't have the expected shape."""


def synthetic_games(day: date) -> list[Game]:
    """The fixed fallback slate: three completed games, puck drop 7pm ET."""
    game_date = eastern_evening_utc(day)
    return [
        Game(
            game_id=game_id,
            game_date=game_date,
            away=Team(away, away_score),
            home=Team(home, home_score),
            state=GameState.COMPLETED,
            detailed_state="Final",
        )
        for game_id, away, away_score, home, home_score in SYNTHETIC_SLATE
    ]


def _parse_team(side: Any) -> Team:
    if not isinstance(side, dict):
        raise MalformedScheduleError("team entry is not an object")
    name = (side.get("team") or {}).get("name")
    if not name:
        raise MalformedScheduleError("team entry has no name")
    score = side.get("score")
    return Team(name=str(name), score=int(score) if score is not None else 0)


def parse_schedule_game(raw: dict[str, Any], day: date) -> Game | None:
    """Parse one feed game. Returns None for games in an unknown state."""
    status = raw.get("status") or {}
    abstract_state = status.get("abstractGameState")
    try:
        state = GameState(abstract_state)
    except ValueError:
        logger.warning(
            "schedule_game_unknown_state",
            game_id=raw.get("gamePk"),
            state=abstract_state,
        )
        return None

    teams = raw.get("teams") or {}
    game_id = raw.get("gamePk")
    if game_id is None:
        raise MalformedScheduleError("game has no gamePk")

    return Game(
        game_id=int(game_id),
        game_date=parse_iso_datetime(raw.get("gameDate")) or eastern_evening_utc(day),
        away=_parse_team(teams.get("away")),
        home=_parse_team(teams.get("home")),
        state=state,
        detailed_state=str(status.get("detailedState") or abstract_state),
    )


def parse_schedule_response(payload: Any, day: date) -> list[Game]:
    """Collect games from every date entry of a schedule response."""
    if not isinstance(payload, dict):
        raise MalformedScheduleError("schedule payload is not an object")

    games: list[Game] = []
    for date_entry in payload.get("dates") or []:
        for raw_game in date_entry.get("games") or []:
            game = parse_schedule_game(raw_game, day)
            if game is not None:
                games.append(game)
    return games


class ScheduleFeedClient:
    """Client for the NHL stats API daily schedule."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        self.base_url = settings.schedule_base_url
        self._client = client or httpx.AsyncClient(
            timeout=settings.schedule_timeout_seconds,
            headers={"User-Agent": USER_AGENT},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_games(self, day: date) -> ScheduleFetchResult:
        """Fetch the schedule for ``day``, substituting the synthetic slate on failure.

        Never raises. There are no retries: the first failure falls back.
        """
        url = f"{self.base_url}{SCHEDULE_PATH}"
        params = {"startDate": day.isoformat(), "endDate": day.isoformat()}
        logger.info("schedule_fetch", date=day.isoformat(), url=url)

        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("schedule_fetch_error", date=day.isoformat(), error=str(exc))
            return self._fallback(day, FeedFallbackReason.REQUEST_FAILED)

        if not response.is_success:
            logger.warning(
                "schedule_fetch_failed",
                date=day.isoformat(),
                status=response.status_code,
                body=response.text[:200],
            )
            return self._fallback(day, FeedFallbackReason.BAD_STATUS)

        try:
            games = parse_schedule_response(response.json(), day)
        except (ValueError, TypeError, AttributeError) as exc:
            # json decode errors and MalformedScheduleError are both ValueErrors
            logger.warning("schedule_payload_malformed", date=day.isoformat(), error=str(exc))
            return self._fallback(day, FeedFallbackReason.MALFORMED_PAYLOAD)

        if not games:
            return self._fallback(day, FeedFallbackReason.EMPTY_SCHEDULE)

        logger.info("schedule_parsed", date=day.isoformat(), count=len(games))
        return ScheduleFetchResult(games=games)

    async def fetch_events(self, day: date) -> list[Game]:
        result = await self.fetch_games(day)
        return result.games

    def _fallback(self, day: date, reason: FeedFallbackReason) -> ScheduleFetchResult:
        logger.info("schedule_fallback_used", date=day.isoformat(), reason=reason.value)
        return ScheduleFetchResult(games=synthetic_games(day), fallback_reason=reason)
