"""Volatility analysis and game termination.

A cell is *volatile* when its final owner is not settled yet. The analysis
gives every cell a provisional claimant and a strength (its lead over the
closest rival), then pretends all provisional claims are realised at once
and propagates the resulting weakening through the board with a work
stack. Whatever ends up at strength zero or below could still flip.

The game is over once fewer than two players can move, or once nothing on
the board can flip any more.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import numpy as np

from .board import EMPTY, InfluenceKind, MAX_PLAYERS, check_num_players
from .geometry import neighbor_table

if TYPE_CHECKING:
    from .board import Board

__all__ = ["MAX_STRENGTH", "is_game_over", "players_with_moves", "volatile_cells"]

# Strength of an occupied cell; it can never flip.
MAX_STRENGTH = 127


def _provisional_claims(board: "Board", num_players: int) -> tuple[List[Optional[int]], List[int]]:
    """Provisional claimant and strength for every cell.

    Empty cells are claimed by the active player with the most neighboring
    stones (lowest index on ties) and their strength is the smallest lead
    over any other active player. A strength of zero means tied, and a tied
    cell has no claimant.
    """
    influences, _ = board.neighbor_counts()
    active = influences[:num_players].astype(np.int32)
    n = len(board)

    if num_players > 1 and n:
        leader = np.argmax(active, axis=0)
        lead = active[leader, np.arange(n)] - active
        # The leader's own row is not a rival.
        lead[leader, np.arange(n)] = MAX_STRENGTH
        strengths_arr = np.minimum(lead.min(axis=0), MAX_STRENGTH)
    else:
        leader = np.zeros(n, dtype=np.int64)
        strengths_arr = np.full(n, MAX_STRENGTH, dtype=np.int32)

    claimed_by: List[Optional[int]] = []
    strengths: List[int] = []
    for owner, player, strength in zip(
        board.cells, leader.tolist(), strengths_arr.tolist()
    ):
        if owner != EMPTY:
            claimed_by.append(owner)
            strengths.append(MAX_STRENGTH)
        elif strength == 0:
            claimed_by.append(None)
            strengths.append(0)
        else:
            claimed_by.append(player)
            strengths.append(strength)
    return claimed_by, strengths


def volatile_cells(board: "Board", num_players: int) -> List[bool]:
    """Return, row-major, whether each cell could still change owner."""
    check_num_players(num_players)
    neighbors = neighbor_table(board.width, board.height)
    cells = board.cells
    claimed_by, strengths = _provisional_claims(board, num_players)

    flip_stack = [ix for ix, strength in enumerate(strengths) if strength == 0]

    # Pretend every provisional claim is played at once: each claimed empty
    # cell weakens the neighbors held by someone else.
    for ix, claimer in enumerate(claimed_by):
        if cells[ix] != EMPTY or claimer is None:
            continue
        for neighbor_ix in neighbors[ix]:
            neighbor_player = claimed_by[neighbor_ix]
            if neighbor_player is not None and neighbor_player != claimer:
                strengths[neighbor_ix] -= 1
                if strengths[neighbor_ix] == 0:
                    flip_stack.append(neighbor_ix)

    visited = [False] * len(cells)
    while flip_stack:
        ix = flip_stack.pop()
        if visited[ix]:
            continue
        visited[ix] = True
        flip_player = claimed_by[ix]

        # Flipping this cell weakens the neighbors that lean the same way.
        for neighbor_ix in neighbors[ix]:
            neighbor_player = claimed_by[neighbor_ix]
            if neighbor_player is None:
                continue
            if flip_player is None or flip_player == neighbor_player:
                strengths[neighbor_ix] -= 1
                if strengths[neighbor_ix] <= 0:
                    flip_stack.append(neighbor_ix)

    return [strength <= 0 for strength in strengths]


def players_with_moves(board: "Board", num_players: int) -> Optional[int]:
    """Number of active players with at least one legal move.

    Returns ``None`` as soon as a tied cell is found: a tied cell is open to
    every player sharing the lead, which is always at least two of them.
    Ruled and claimed cells are legal only for the player they favor.
    """
    check_num_players(num_players)
    kinds, players = board.influence_arrays()
    has_move = [False] * MAX_PLAYERS
    for code, player in zip(kinds.tolist(), players.tolist()):
        if code == InfluenceKind.TIED.value:
            return None
        if code != InfluenceKind.OCCUPIED.value:
            has_move[player] = True
    return sum(1 for player in range(num_players) if has_move[player])


def is_game_over(board: "Board", num_players: int) -> bool:
    """True when fewer than two players can move or nothing can flip."""
    movers = players_with_moves(board, num_players)
    if movers is not None and movers < 2:
        return True
    return not any(volatile_cells(board, num_players))
