"""Game selection for story generation.

Pure function: decides which of the day's games get a story and in what
order. Finished games come first, then live games, then a capped number
of upcoming games.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..models import Game, GameState

DEFAULT_MAX_SCHEDULED = 2

# Processing priority, highest first
_STATE_PRIORITY = (GameState.COMPLETED, GameState.IN_PROGRESS, GameState.SCHEDULED)


def select_for_processing(
    games: Iterable[Game], max_scheduled: int = DEFAULT_MAX_SCHEDULED
) -> list[Game]:
    """Order games Completed, InProgress, Scheduled, keeping feed order within each.

    Args:
        games: Games from the schedule feed.
        max_scheduled: Cap on the number of Scheduled games kept.

    Returns:
        Games to generate stories for. Empty when nothing qualifies.
    """
    groups: dict[GameState, list[Game]] = {state: [] for state in _STATE_PRIORITY}
    for game in games:
        groups[game.state].append(game)

    groups[GameState.SCHEDULED] = groups[GameState.SCHEDULED][: max(max_scheduled, 0)]

    selected: list[Game] = []
    for state in _STATE_PRIORITY:
        selected.extend(groups[state])
    return selected
