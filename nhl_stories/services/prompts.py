"""Prompt construction for OpenAI story generation.

One template per game state: a recap for finished games, a live update for
games in progress, and a preview for upcoming games.
"""

from __future__ import annotations

from ..models import Game, GameState
from ..utils.datetime_utils import format_eastern_clock

_PERSONA = "You are a professional NHL sports journalist."


def _scoreline(game: Game) -> str:
    return f"{game.away.name} {game.away.score} vs {game.home.name} {game.home.score}"


def build_recap_prompt(game: Game) -> str:
    return f"""{_PERSONA} Write a concise, engaging recap article about this completed game:
{_scoreline(game)}

Write in ESPN.com style with:
- A catchy headline
- 3-4 short paragraphs
- Focus on key plays and momentum shifts
- Include plausible quotes from players/coaches
- Mention any notable stats or streaks
- Keep it factual but engaging
Length: about 250-300 words."""


def build_live_prompt(game: Game) -> str:
    return f"""{_PERSONA} Write a live-game update article about this ongoing game:
{_scoreline(game)}
Status: {game.detailed_state}

Write in ESPN.com live-update style with:
- Current score and time in game
- Momentum and key developments so far
- Notable performances
- What to watch for in remaining periods
Length: about 200-250 words."""


def build_preview_prompt(game: Game) -> str:
    return f"""{_PERSONA} Write a preview article for this upcoming game:
{game.away.name} vs {game.home.name}
Time: {format_eastern_clock(game.game_date)} ET

Write in ESPN.com preview style with:
- Team form and recent performance
- Key players to watch
- Historical matchup info
- Predictions and storylines
Length: about 200-250 words."""


def build_story_prompt(game: Game) -> str:
    """Pick the prompt template for the game's state."""
    if game.state is GameState.COMPLETED:
        return build_recap_prompt(game)
    if game.state is GameState.IN_PROGRESS:
        return build_live_prompt(game)
    return build_preview_prompt(game)
