"""Game and story models.

A ``Game`` is the parsed form of one schedule-feed entry. It lives only for
one generation pass. A ``Story`` is the durable record produced from it and
is what the store persists and the API returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GameState(str, Enum):
    """Lifecycle state of a game.

    Values match the schedule feed's ``abstractGameState`` so stored stories
    keep the feed's vocabulary.
    """

    SCHEDULED = "Preview"
    IN_PROGRESS = "Live"
    COMPLETED = "Final"


@dataclass(frozen=True)
class Team:
    """One side of a game: display name and current score."""

    name: str
    score: int = 0


@dataclass(frozen=True)
class Game:
    """A single game from the schedule feed (or the synthetic slate)."""

    game_id: int
    game_date: datetime
    away: Team
    home: Team
    state: GameState
    detailed_state: str

    @property
    def margin(self) -> int:
        return abs(self.home.score - self.away.score)

    @property
    def winner(self) -> Team:
        """Higher-scoring side, independent of home/away. Away on a tie."""
        return self.home if self.home.score > self.away.score else self.away

    @property
    def loser(self) -> Team:
        return self.away if self.home.score > self.away.score else self.home


class TeamScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    score: int


class StoryTeams(BaseModel):
    model_config = ConfigDict(frozen=True)

    away: TeamScore
    home: TeamScore


class Story(BaseModel):
    """A generated game story.

    Serialized with camelCase keys (``gameDate``, ``createdAt``), which is
    both the stored record format and the API response format.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    headline: str
    game_date: datetime = Field(..., alias="gameDate")
    status: GameState
    story: str
    teams: StoryTeams
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_game(
        cls, game: Game, *, headline: str, body: str, created_at: datetime
    ) -> Story:
        return cls(
            id=game.game_id,
            headline=headline,
            game_date=game.game_date,
            status=game.state,
            story=body,
            teams=StoryTeams(
                away=TeamScore(name=game.away.name, score=game.away.score),
                home=TeamScore(name=game.home.name, score=game.home.score),
            ),
            created_at=created_at,
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
