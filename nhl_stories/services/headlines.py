"""Deterministic story headlines."""

from __future__ import annotations

from ..models import Game, GameState

# Margin at or above which a win is a blowout
DOMINANT_MARGIN = 3


def build_headline(game: Game) -> str:
    """Headline from game state and score margin.

    The winner is whichever side scored more, home or away.
    """
    if game.state is GameState.COMPLETED:
        winner, loser = game.winner, game.loser
        score = f"{winner.score}-{loser.score}"
        if game.margin == 1:
            return f"{winner.name} edge {loser.name} in tight {score} battle"
        if game.margin >= DOMINANT_MARGIN:
            return f"{winner.name} dominate {loser.name} {score}"
        return f"{winner.name} defeat {loser.name} {score}"

    if game.state is GameState.IN_PROGRESS:
        return f"{game.away.name} vs {game.home.name} - Live Updates"

    return f"{game.away.name} face off against {game.home.name} tonight"
