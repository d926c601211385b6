"""Board and influence classification for Hobogo.

A board is a square (or rectangular) grid of cells. Each cell is either
empty or owned by one player. Ownership of the empty cells is *derived*
from the stones around them:

- ``Occupied(p)``: a stone of player ``p`` sits on the cell.
- ``Ruled(p)``: ``p`` leads the 8-neighborhood by more than the number of
  empty neighbors, so nobody else can ever catch up.
- ``Claimed(p)``: ``p`` is the unique strongest neighbor right now, but the
  cell is still contestable.
- ``Tied``: nobody leads.

Two implementations of the classification live here. ``Board.influence``
works on a single cell with plain Python and is what the turn engine uses
on its hot path; ``Board.influence_map`` classifies the whole board at once
from numpy neighbor tallies and backs the whole-board queries (points,
standings, termination). Both must agree cell for cell.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .errors import InvalidBoardError, InvalidMoveError, PlayerLimitError
from .geometry import SQUARE_DIRECTIONS, neighbor_table
from .models import ScoreBreakdown

__all__ = [
    "Board",
    "Coord",
    "EMPTY",
    "Influence",
    "InfluenceKind",
    "MAX_PLAYERS",
    "TIED",
    "check_num_players",
]

MAX_PLAYERS = 8

# Flat cell value of an unoccupied cell.
EMPTY = -1


def check_num_players(num_players: int) -> None:
    """Raise :class:`PlayerLimitError` unless ``1 <= num_players <= 8``."""
    if not 1 <= num_players <= MAX_PLAYERS:
        raise PlayerLimitError(num_players, MAX_PLAYERS)


class Coord(NamedTuple):
    """Board-relative cell coordinate."""

    x: int
    y: int

    def __str__(self) -> str:
        # Column letter plus 1-based row, e.g. Coord(2, 0) -> "C1".
        return f"{chr(ord('A') + self.x)}{self.y + 1}"


class InfluenceKind(Enum):
    """Derived ownership status of a cell."""

    OCCUPIED = 0
    RULED = 1
    CLAIMED = 2
    TIED = 3


@dataclass(frozen=True)
class Influence:
    """Influence of a cell: a kind plus the player it favors (if any)."""

    kind: InfluenceKind
    player: Optional[int] = None

    @classmethod
    def occupied(cls, player: int) -> "Influence":
        return cls(InfluenceKind.OCCUPIED, player)

    @classmethod
    def ruled(cls, player: int) -> "Influence":
        return cls(InfluenceKind.RULED, player)

    @classmethod
    def claimed(cls, player: int) -> "Influence":
        return cls(InfluenceKind.CLAIMED, player)

    @property
    def is_occupied(self) -> bool:
        return self.kind is InfluenceKind.OCCUPIED

    def __str__(self) -> str:
        if self.player is None:
            return self.kind.name.lower()
        return f"{self.kind.name.lower()}({self.player})"


TIED = Influence(InfluenceKind.TIED)


def _classify(influences: Sequence[int], empty_neighbors: int) -> Influence:
    """Classify an empty cell from its neighbor tallies.

    Candidates are tried in ascending player order and the first match
    wins. Only a unique strict maximum can qualify, so the order never
    actually has to break a tie.
    """
    for player in range(MAX_PLAYERS):
        mine = influences[player]
        other_player_can_take_this = False
        other_player_is_as_influential = False
        for other_player in range(MAX_PLAYERS):
            if other_player == player:
                continue
            if influences[other_player] + empty_neighbors >= mine:
                other_player_can_take_this = True
            if influences[other_player] >= mine:
                other_player_is_as_influential = True
        if not other_player_can_take_this:
            return Influence.ruled(player)
        if not other_player_is_as_influential:
            return Influence.claimed(player)
    return TIED


class Board:
    """Grid of cell owners.

    Cells are stored flat in row-major order; ``EMPTY`` marks an unowned
    cell. Boards are mutable, so search code must :meth:`clone` before
    exploring a hypothetical move.
    """

    __slots__ = ("width", "height", "_cells")

    def __init__(
        self,
        width: int,
        height: int,
        cells: Optional[Iterable[int]] = None,
    ) -> None:
        if width < 0 or height < 0:
            raise InvalidBoardError(
                f"Board dimensions must be non-negative, got {width}x{height}"
            )
        if cells is None:
            values = [EMPTY] * (width * height)
        else:
            values = [EMPTY if int(c) < 0 else int(c) for c in cells]
            if len(values) != width * height:
                raise InvalidBoardError(
                    f"Expected {width * height} cells for a {width}x{height} board",
                    num_cells=len(values),
                )
            for value in values:
                if value >= MAX_PLAYERS:
                    raise InvalidBoardError(
                        f"Cell owner {value} exceeds the {MAX_PLAYERS}-player limit"
                    )
        self.width = width
        self.height = height
        self._cells: List[int] = values

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(cls, width: int, height: int) -> "Board":
        """Return an empty ``width`` x ``height`` board."""
        return cls(width, height)

    @classmethod
    def from_cells(cls, cells: Sequence[int]) -> "Board":
        """Build a square board from a flat row-major sequence.

        Negative entries are empty cells, non-negative entries are owners.
        The length must be a perfect square ``n*n``; anything else is
        rejected before a board exists.
        """
        values = list(cells)
        n = math.isqrt(len(values))
        if n * n != len(values):
            raise InvalidBoardError(
                "Board cell count must be a perfect square",
                num_cells=len(values),
            )
        return cls(n, n, values)

    def clone(self) -> "Board":
        board = Board.__new__(Board)
        board.width = self.width
        board.height = self.height
        board._cells = self._cells[:]
        return board

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    @property
    def cells(self) -> List[int]:
        """Flat copy of the cells, ``EMPTY`` for unowned."""
        return self._cells[:]

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._cells == other._cells
        )

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, occupied={self.num_occupied()})"

    def as_array(self) -> np.ndarray:
        """Cells as a flat ``int8`` array."""
        return np.asarray(self._cells, dtype=np.int8)

    def contains(self, c: Coord) -> bool:
        return 0 <= c[0] < self.width and 0 <= c[1] < self.height

    def index(self, c: Coord) -> Optional[int]:
        """Flat index of ``c``, or ``None`` when it is off the board."""
        if self.contains(c):
            return self.width * c[1] + c[0]
        return None

    def coord_at(self, index: int) -> Coord:
        return Coord(index % self.width, index // self.width)

    def at(self, c: Coord) -> Optional[int]:
        """Owner of ``c``; ``None`` for empty or off-board cells."""
        ix = self.index(c)
        if ix is None:
            return None
        value = self._cells[ix]
        return None if value == EMPTY else value

    def set(self, c: Coord, player: int) -> None:
        ix = self.index(c)
        if ix is None:
            raise InvalidMoveError(
                f"Cannot place a stone at {tuple(c)}: off the board",
                context={"width": self.width, "height": self.height},
            )
        self._cells[ix] = player

    def is_empty(self) -> bool:
        """True when no stone has been placed yet."""
        return all(value == EMPTY for value in self._cells)

    def num_occupied(self) -> int:
        return sum(1 for value in self._cells if value != EMPTY)

    def coords(self) -> Iterator[Coord]:
        """Every coordinate in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Coord(x, y)

    def neighbors(self, c: Coord) -> List[Coord]:
        """8-connected neighbors of ``c``, clipped to the board."""
        ix = self.index(c)
        if ix is None:
            return []
        return [self.coord_at(n) for n in neighbor_table(self.width, self.height)[ix]]

    # ------------------------------------------------------------------
    # Influence
    # ------------------------------------------------------------------

    def _tally(self, ix: int) -> Tuple[List[int], int]:
        influences = [0] * MAX_PLAYERS
        empty_neighbors = 0
        cells = self._cells
        for n in neighbor_table(self.width, self.height)[ix]:
            owner = cells[n]
            if owner == EMPTY:
                empty_neighbors += 1
            else:
                influences[owner] += 1
        return influences, empty_neighbors

    def tally_neighbors(self, c: Coord) -> Tuple[List[int], int]:
        """Per-player stone counts around ``c`` and the number of empty neighbors."""
        ix = self.index(c)
        if ix is None:
            return [0] * MAX_PLAYERS, 0
        return self._tally(ix)

    def influence(self, c: Coord) -> Optional[Influence]:
        """Classify a single cell; ``None`` when ``c`` is off the board."""
        ix = self.index(c)
        if ix is None:
            return None
        owner = self._cells[ix]
        if owner != EMPTY:
            return Influence.occupied(owner)
        influences, empty_neighbors = self._tally(ix)
        return _classify(influences, empty_neighbors)

    def is_valid_move(self, c: Coord, who_wants_to_move: int, num_players: int) -> bool:
        """Whether ``who_wants_to_move`` may place a stone at ``c``.

        The cell must be empty and no active player may have strictly more
        neighboring stones than the mover. Ties are allowed.
        """
        check_num_players(num_players)
        ix = self.index(c)
        if ix is None or self._cells[ix] != EMPTY:
            return False
        influences, _ = self._tally(ix)
        mine = influences[who_wants_to_move]
        for player in range(num_players):
            if influences[player] > mine:
                return False
        return True

    def neighbor_counts(self) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorised neighbor tallies for the whole board.

        Returns:
            ``(influences, empty)`` where ``influences`` has shape
            ``(MAX_PLAYERS, len(board))`` and ``empty`` has shape
            ``(len(board),)``, both in row-major cell order.
        """
        h, w = self.height, self.width
        grid = self.as_array().reshape(h, w)
        # One plane per player plus one for empty cells, padded by one so
        # shifted views never fall off the edge.
        planes = np.zeros((MAX_PLAYERS + 1, h + 2, w + 2), dtype=np.int16)
        for player in range(MAX_PLAYERS):
            planes[player, 1:-1, 1:-1] = grid == player
        planes[MAX_PLAYERS, 1:-1, 1:-1] = grid == EMPTY

        totals = np.zeros((MAX_PLAYERS + 1, h, w), dtype=np.int16)
        for dx, dy in SQUARE_DIRECTIONS:
            totals += planes[:, 1 + dy:1 + dy + h, 1 + dx:1 + dx + w]
        totals = totals.reshape(MAX_PLAYERS + 1, h * w)
        return totals[:MAX_PLAYERS], totals[MAX_PLAYERS]

    def influence_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Kind codes and favored players for every cell (-1 for none)."""
        influences, empty = self.neighbor_counts()
        cells = self.as_array().astype(np.int16)
        kinds = np.full(cells.size, InfluenceKind.TIED.value, dtype=np.int8)
        players = np.full(cells.size, -1, dtype=np.int16)

        occupied = cells >= 0
        kinds[occupied] = InfluenceKind.OCCUPIED.value
        players[occupied] = cells[occupied]

        undecided = ~occupied
        for player in range(MAX_PLAYERS):
            if not undecided.any():
                break
            mine = influences[player]
            others = np.delete(influences, player, axis=0).max(axis=0)
            ruled = undecided & (others + empty < mine)
            claimed = undecided & ~ruled & (others < mine)
            kinds[ruled] = InfluenceKind.RULED.value
            kinds[claimed] = InfluenceKind.CLAIMED.value
            decided = ruled | claimed
            players[decided] = player
            undecided &= ~decided
        return kinds, players

    def influence_map(self) -> List[Influence]:
        """Classify every cell, row-major."""
        kinds, players = self.influence_arrays()
        result: List[Influence] = []
        for code, player in zip(kinds.tolist(), players.tolist()):
            kind = InfluenceKind(code)
            if kind is InfluenceKind.TIED:
                result.append(TIED)
            else:
                result.append(Influence(kind, player))
        return result

    def points(self) -> List[int]:
        """Cells owned, ruled or claimed by each of the ``MAX_PLAYERS`` slots."""
        _, players = self.influence_arrays()
        owned = players[players >= 0]
        return np.bincount(owned, minlength=MAX_PLAYERS)[:MAX_PLAYERS].tolist()

    def standings(self, num_players: int) -> ScoreBreakdown:
        """Per-player certain / claimed counts plus the number of tied cells."""
        check_num_players(num_players)
        kinds, players = self.influence_arrays()
        certain = [0] * num_players
        claimed = [0] * num_players
        tied = 0
        for code, player in zip(kinds.tolist(), players.tolist()):
            if code == InfluenceKind.TIED.value:
                tied += 1
            elif player >= num_players:
                continue
            elif code == InfluenceKind.CLAIMED.value:
                claimed[player] += 1
            else:
                certain[player] += 1
        return ScoreBreakdown(certain=certain, claimed=claimed, tied=tied)

    def filled_in(self) -> "Board":
        """Copy with every ruled or claimed empty cell given to its favorite.

        Tied cells stay empty. Used to settle the board once the game is
        over.
        """
        kinds, players = self.influence_arrays()
        board = self.clone()
        for ix, (code, player) in enumerate(zip(kinds.tolist(), players.tolist())):
            if code in (InfluenceKind.RULED.value, InfluenceKind.CLAIMED.value):
                board._cells[ix] = player
        return board

    # ------------------------------------------------------------------
    # Termination (see hobogo.volatility)
    # ------------------------------------------------------------------

    def volatile_cells(self, num_players: int) -> List[bool]:
        """Which cells could still change final owner, row-major."""
        from .volatility import volatile_cells

        return volatile_cells(self, num_players)

    def is_game_over(self, num_players: int) -> bool:
        from .volatility import is_game_over

        return is_game_over(self, num_players)
