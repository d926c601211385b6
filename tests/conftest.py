"""
Shared pytest fixtures for hobogo tests.

Boards are written as lists of row strings, one character per cell:
``.`` for an empty cell, a digit for the owning player.
"""

import random
from typing import Callable, List, Optional, Sequence

import pytest

from hobogo.board import EMPTY, Board
from hobogo.game_engine import GameState
from hobogo.geometry import clear_geometry_cache
from hobogo.models import AIConfig


def parse_rows(rows: Sequence[str]) -> Board:
    """Build a board from row strings such as ``[".0.", "0.1", ".1."]``."""
    height = len(rows)
    width = len(rows[0]) if rows else 0
    cells: List[int] = []
    for row in rows:
        assert len(row) == width, "rows must have equal length"
        for ch in row:
            cells.append(EMPTY if ch == "." else int(ch))
    return Board(width, height, cells)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def board_factory() -> Callable[..., Board]:
    """Factory for boards from row strings, or empty boards by size."""

    def _create_board(
        rows: Optional[Sequence[str]] = None,
        size: int = 5,
    ) -> Board:
        if rows is None:
            return Board.new(size, size)
        return parse_rows(rows)

    return _create_board


@pytest.fixture
def state_factory(board_factory) -> Callable[..., GameState]:
    """Factory for game states wrapping a board from ``board_factory``."""

    def _create_state(
        rows: Optional[Sequence[str]] = None,
        size: int = 5,
        next_player: int = 0,
        num_players: int = 2,
    ) -> GameState:
        return GameState(board_factory(rows, size), next_player, num_players)

    return _create_state


# =============================================================================
# SCENARIO FIXTURES
# =============================================================================


@pytest.fixture
def symmetric_center_board() -> Board:
    """3x3 board whose center is squeezed 2-2 between players 0 and 1."""
    return parse_rows([
        ".0.",
        "0.1",
        ".1.",
    ])


@pytest.fixture
def ruled_center_board() -> Board:
    """5x5 board owned by player 0 except an empty center ringed by player 1."""
    return parse_rows([
        "00000",
        "01110",
        "01.10",
        "01110",
        "00000",
    ])


@pytest.fixture
def stuck_third_player_state() -> GameState:
    """Three players; player 2 is outnumbered on every empty cell."""
    board = parse_rows([
        "0.1",
        "0.1",
        "0.1",
    ])
    return GameState(board, 2, 3)


# =============================================================================
# MISC FIXTURES
# =============================================================================


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def fast_ai_config() -> AIConfig:
    """Iteration-capped, seeded config so searches are quick and repeatable."""
    return AIConfig(difficulty=5, max_iterations=60, rng_seed=42)


@pytest.fixture(autouse=True, scope="module")
def _reset_geometry_cache():
    clear_geometry_cache()
    yield
    clear_geometry_cache()
