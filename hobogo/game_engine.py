"""Turn engine for Hobogo.

Wraps a :class:`~hobogo.board.Board` with whose turn it is and how many
players are seated, derives the legal actions from the board's legality and
termination queries, and scores finished games for the search.

Legality follows the neighbor-tally rule of :meth:`Board.is_valid_move`
everywhere, including inside random playouts.
"""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional

from .board import Board, Coord, InfluenceKind, check_num_players
from .errors import InvalidStateError

__all__ = ["Action", "ActionType", "GameState", "Score"]

Score = List[float]


class ActionType(str, Enum):
    """Kinds of action a player can take on their turn."""
    PASS = "pass"
    MOVE = "move"


@dataclass(frozen=True)
class Action:
    """``Pass`` or ``Move(coord)``."""

    type: ActionType
    coord: Optional[Coord] = None

    @classmethod
    def pass_turn(cls) -> "Action":
        return PASS

    @classmethod
    def move(cls, coord: Coord) -> "Action":
        return cls(ActionType.MOVE, Coord(*coord))

    @property
    def is_pass(self) -> bool:
        return self.type is ActionType.PASS

    def __str__(self) -> str:
        if self.type is ActionType.PASS:
            return "PASS"
        return str(self.coord)


PASS = Action(ActionType.PASS)


@dataclass
class GameState:
    """Board plus turn order. Mutated only through :meth:`take_action`."""

    board: Board
    next_player: int
    num_players: int

    def __post_init__(self) -> None:
        check_num_players(self.num_players)
        if not 0 <= self.next_player < self.num_players:
            raise InvalidStateError(
                f"next_player {self.next_player} is not one of "
                f"{self.num_players} players"
            )

    def clone(self) -> "GameState":
        state = GameState.__new__(GameState)
        state.board = self.board.clone()
        state.next_player = self.next_player
        state.num_players = self.num_players
        return state

    @property
    def previous_player(self) -> int:
        """The player who moved last (the one a search node optimizes for)."""
        return (self.next_player + self.num_players - 1) % self.num_players

    def is_game_over(self) -> bool:
        return self.board.is_game_over(self.num_players)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def available_moves_for(self, player: int) -> List[Coord]:
        return [
            c for c in self.board.coords()
            if self.board.is_valid_move(c, player, self.num_players)
        ]

    def available_actions_for(self, player: int) -> List[Action]:
        """Legal actions for ``player``; empty once the game is over."""
        if self.is_game_over():
            return []
        moves = self.available_moves_for(player)
        if not moves:
            return [PASS]
        return [Action.move(c) for c in moves]

    def available_actions(self) -> List[Action]:
        return self.available_actions_for(self.next_player)

    def take_action(self, action: Action) -> None:
        if action.type is ActionType.MOVE:
            self.board.set(action.coord, self.next_player)
        self.next_player = (self.next_player + 1) % self.num_players

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score(self) -> Score:
        """Reward vector for a finished game, one entry per player.

        A sole winner gets ``1 + margin / 10`` and everybody else loses a
        tenth of a point per point behind the winner. When the top score is
        shared, the leaders get 0.5 each and everybody else 0.
        """
        points = self.board.points()[:self.num_players]
        ranked = sorted(points, reverse=True)
        winner_points = ranked[0]
        runner_up_points = ranked[1] if len(ranked) > 1 else winner_points

        if winner_points == runner_up_points:
            return [0.5 if p == winner_points else 0.0 for p in points]

        margin = winner_points - runner_up_points
        return [
            1.0 + margin / 10.0 if p == winner_points
            else -(winner_points - p) / 10.0
            for p in points
        ]

    # ------------------------------------------------------------------
    # Playouts
    # ------------------------------------------------------------------

    def random_action(self, rng: random.Random) -> Optional[Action]:
        """A uniformly random legal action, or ``None`` once the game is over."""
        coords = list(self.board.coords())
        rng.shuffle(coords)
        for c in coords:
            if self.board.is_valid_move(c, self.next_player, self.num_players):
                return Action.move(c)
        if self.is_game_over():
            return None
        return PASS

    def random_playout(self, rng: random.Random) -> None:
        """Play uniformly random legal actions until the game is over."""
        while not self.is_game_over():
            action = self.random_action(rng)
            if action is None:
                break
            self.take_action(action)

    def _next_queued_move(self, moves: Deque[Coord], player: int) -> Optional[Coord]:
        for _ in range(len(moves)):
            c = moves.popleft()
            if self.board.is_valid_move(c, player, self.num_players):
                return c
            influence = self.board.influence(c)
            if influence.is_occupied:
                continue
            if influence.kind is InfluenceKind.RULED and influence.player != player:
                continue
            # Not legal yet; try again later.
            moves.append(c)
        return None

    def queued_playout(self, rng: random.Random) -> None:
        """Faster playout: every player works through a private shuffled queue.

        Cells that can never become legal for a player (occupied, or ruled
        by somebody else) are dropped from that player's queue; cells that
        are merely illegal right now go to the back.
        """
        open_cells = [
            c for c in self.board.coords() if self.board.at(c) is None
        ]
        queues: List[Deque[Coord]] = []
        for _ in range(self.num_players):
            cells = open_cells[:]
            rng.shuffle(cells)
            queues.append(deque(cells))

        while not self.is_game_over():
            player = self.next_player
            c = self._next_queued_move(queues[player], player)
            self.take_action(PASS if c is None else Action.move(c))
