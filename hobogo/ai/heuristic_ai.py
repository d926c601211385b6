"""
Heuristic AI implementation for Hobogo.

This agent looks one ply ahead: it tries every legal placement, scores the
resulting board with a weighted influence count and keeps the best one.

Evaluation weights
==================
Each cell contributes to the player it favors:

- occupied: ``WEIGHT_OCCUPIED`` (10)
- ruled: ``WEIGHT_RULED`` (3)
- claimed: ``WEIGHT_CLAIMED`` (1)

The evaluation is the player's share of all weighted points, where every
tied cell (plus one) is added to the denominator, so contested boards
dilute everybody's share.
"""

from __future__ import annotations

from typing import Dict, Optional

import numpy as np

from ..board import MAX_PLAYERS, Board, InfluenceKind
from ..game_engine import Action, GameState
from .base import BaseAI

WEIGHT_OCCUPIED = 10
WEIGHT_RULED = 3
WEIGHT_CLAIMED = 1

# Indexed by InfluenceKind value.
_KIND_WEIGHTS = np.zeros(len(InfluenceKind), dtype=np.int64)
_KIND_WEIGHTS[InfluenceKind.OCCUPIED.value] = WEIGHT_OCCUPIED
_KIND_WEIGHTS[InfluenceKind.RULED.value] = WEIGHT_RULED
_KIND_WEIGHTS[InfluenceKind.CLAIMED.value] = WEIGHT_CLAIMED


def weighted_points(board: Board) -> tuple[np.ndarray, int]:
    """Weighted points for all MAX_PLAYERS slots and the number of tied cells."""
    kinds, players = board.influence_arrays()
    owned = players >= 0
    weights = _KIND_WEIGHTS[kinds]
    points = np.bincount(
        players[owned], weights=weights[owned], minlength=MAX_PLAYERS
    )
    num_tied = int((kinds == InfluenceKind.TIED.value).sum())
    return points, num_tied


def evaluate_board(board: Board, player: int) -> float:
    """Share of the weighted board ``player`` holds, in ``[0, 1)``."""
    points, num_tied = weighted_points(board)
    mine = float(points[player])
    return mine / (float(points.sum()) + num_tied + 1)


class HeuristicAI(BaseAI):
    """Greedy one-ply AI over the influence evaluation."""

    def select_action(self, game_state: GameState) -> Optional[Action]:
        self.check_turn(game_state)
        valid_actions = self.get_valid_actions(game_state)
        if not valid_actions:
            return None

        if len(valid_actions) == 1 or self.should_pick_random_move():
            selected = self.get_random_element(valid_actions)
            self.move_count += 1
            return selected

        best_score = -np.inf
        best_action: Optional[Action] = None
        for action in valid_actions:
            after = game_state.board.clone()
            after.set(action.coord, self.player_number)
            score = evaluate_board(after, self.player_number)
            if score > best_score:
                best_score = score
                best_action = action

        self.move_count += 1
        return best_action

    def evaluate_position(self, game_state: GameState) -> float:
        return evaluate_board(game_state.board, self.player_number)

    def get_evaluation_breakdown(
        self,
        game_state: GameState,
    ) -> Dict[str, float]:
        points, num_tied = weighted_points(game_state.board)
        return {
            "total": self.evaluate_position(game_state),
            "weighted_points": float(points[self.player_number]),
            "opponent_points": float(points.sum() - points[self.player_number]),
            "tied_cells": float(num_tied),
        }
