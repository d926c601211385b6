"""Flat-array query surface.

Front-ends hold the board as a flat row-major list of integers (negative
for empty, otherwise the owner) and call these functions with it. Every
call parses the cells into a fresh :class:`~hobogo.board.Board`, so nothing
is kept between calls.

Malformed input (a cell count that is not a perfect square) raises
:class:`~hobogo.errors.InvalidBoardError`; an unsupported player count
raises :class:`~hobogo.errors.PlayerLimitError`.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .ai.mcts_ai import MCTSAI
from .board import Board, Coord
from .game_engine import GameState
from .models import AIConfig

logger = logging.getLogger(__name__)

__all__ = ["ai_move", "is_game_over", "is_valid_move", "points", "volatile_cells"]


def is_valid_move(
    cells: Sequence[int], x: int, y: int, player: int, num_players: int
) -> bool:
    return Board.from_cells(cells).is_valid_move(Coord(x, y), player, num_players)


def is_game_over(cells: Sequence[int], num_players: int) -> bool:
    return Board.from_cells(cells).is_game_over(num_players)


def volatile_cells(cells: Sequence[int], num_players: int) -> List[bool]:
    return Board.from_cells(cells).volatile_cells(num_players)


def points(cells: Sequence[int]) -> List[int]:
    """Owned, ruled or claimed cells per player slot (always 8 entries)."""
    return Board.from_cells(cells).points()


def ai_move(
    cells: Sequence[int],
    player: int,
    num_players: int,
    think_time: Optional[int] = None,
    max_iterations: Optional[int] = None,
    rng_seed: Optional[int] = None,
) -> Optional[Coord]:
    """Search for ``player``'s move and return its coordinate.

    Args:
        cells: Flat row-major board.
        player: Player to move.
        num_players: Number of active players.
        think_time: Search budget in milliseconds.
        max_iterations: Iteration cap; combined with ``think_time`` the
            search stops at whichever comes first.
        rng_seed: Seed for a reproducible search.

    Returns:
        The chosen coordinate, or ``None`` when the best action is a pass
        or there is nothing to play.
    """
    state = GameState(Board.from_cells(cells), player, num_players)
    config = AIConfig(
        think_time=think_time,
        max_iterations=max_iterations,
        rng_seed=rng_seed,
    )
    action = MCTSAI(player, config).select_action(state)
    if action is None or action.is_pass:
        logger.debug("ai_move: no placement for player %d", player)
        return None
    return action.coord
