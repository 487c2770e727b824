"""Deterministic story bodies used when AI generation is unavailable.

Built only from team names and scores so it is always available and
always the same for the same game.
"""

from __future__ import annotations

from ..models import Game, GameState


def _recap(game: Game) -> str:
    winner, loser = game.winner, game.loser
    if game.margin == 0:
        opening = (
            f"The {game.away.name} and the {game.home.name} finished level at "
            f"{game.away.score}-{game.home.score}."
        )
    elif game.margin == 1:
        opening = (
            f"The {winner.name} held off the {loser.name} for a "
            f"{winner.score}-{loser.score} win in a one-goal game."
        )
    else:
        opening = (
            f"The {winner.name} beat the {loser.name} {winner.score}-{loser.score}, "
            f"a {game.margin}-goal margin."
        )
    return (
        f"{opening}\n\n"
        f"Final score: {game.away.name} {game.away.score}, "
        f"{game.home.name} {game.home.score}. "
        "Full recap coming soon."
    )


def _live(game: Game) -> str:
    if game.away.score == game.home.score:
        standing = f"The teams are tied at {game.away.score}."
    else:
        standing = f"The {game.winner.name} lead {game.winner.score}-{game.loser.score}."
    return (
        f"The {game.away.name} and the {game.home.name} are under way. {standing}\n\n"
        f"Current score: {game.away.name} {game.away.score}, "
        f"{game.home.name} {game.home.score}. "
        "Check back for live updates."
    )


def _preview(game: Game) -> str:
    return (
        f"The {game.away.name} visit the {game.home.name} tonight.\n\n"
        "Both teams are looking for two points. Check back for the full preview."
    )


def build_fallback_narrative(game: Game) -> str:
    """Templated story body for a game, worded for its state."""
    if game.state is GameState.COMPLETED:
        return _recap(game)
    if game.state is GameState.IN_PROGRESS:
        return _live(game)
    return _preview(game)
