"""Tests for volatility analysis and game termination."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from hobogo.board import Board, Coord
from hobogo.errors import PlayerLimitError
from hobogo.volatility import (
    MAX_STRENGTH,
    is_game_over,
    players_with_moves,
    volatile_cells,
)


class TestVolatileCells:
    def test_symmetric_center_is_volatile(self, symmetric_center_board):
        volatile = volatile_cells(symmetric_center_board, 2)
        assert len(volatile) == 9
        assert volatile[symmetric_center_board.index(Coord(1, 1))]

    def test_board_method_delegates(self, symmetric_center_board):
        assert symmetric_center_board.volatile_cells(2) == volatile_cells(
            symmetric_center_board, 2
        )

    def test_empty_board_is_entirely_volatile(self):
        assert all(volatile_cells(Board.new(4, 4), 2))

    def test_full_board_has_nothing_volatile(self, board_factory):
        board = board_factory([
            "010",
            "101",
            "010",
        ])
        assert not any(volatile_cells(board, 2))

    def test_single_player_board_never_volatile(self):
        # With nobody to contest a cell every provisional claim is final.
        assert not any(volatile_cells(Board.new(3, 3), 1))

    def test_ruled_center_is_settled(self, ruled_center_board):
        assert not any(volatile_cells(ruled_center_board, 2))

    def test_player_limit(self):
        with pytest.raises(PlayerLimitError):
            volatile_cells(Board.new(2, 2), 9)

    def test_max_strength_value(self):
        assert MAX_STRENGTH == 127


class TestGameOver:
    def test_full_board_is_over(self, board_factory):
        board = board_factory([
            "010",
            "101",
            "010",
        ])
        assert is_game_over(board, 2)
        assert board.is_game_over(2)

    def test_empty_board_is_not_over(self):
        assert not is_game_over(Board.new(5, 5), 2)

    def test_over_when_only_one_player_can_move(self, board_factory):
        board = board_factory([
            "000",
            "0.0",
            "000",
        ])
        assert players_with_moves(board, 2) == 1
        assert is_game_over(board, 2)

    def test_tied_cell_defers_to_volatility(self, symmetric_center_board):
        assert players_with_moves(symmetric_center_board, 2) is None
        assert not is_game_over(symmetric_center_board, 2)

    def test_one_by_one_single_player_is_over(self):
        assert is_game_over(Board.new(1, 1), 1)

    def test_outnumbered_player_does_not_end_game(self, stuck_third_player_state):
        board = stuck_third_player_state.board
        assert not is_game_over(board, 3)


@st.composite
def boards(draw):
    n = draw(st.integers(min_value=1, max_value=6))
    cells = draw(st.lists(st.integers(-1, 2), min_size=n * n, max_size=n * n))
    return Board.from_cells(cells)


@given(board=boards())
@settings(max_examples=100, deadline=None)
def test_volatile_cells_is_idempotent(board):
    before = board.cells
    first = volatile_cells(board, 3)
    second = volatile_cells(board, 3)
    assert first == second
    assert board.cells == before


@given(board=boards())
@settings(max_examples=100, deadline=None)
def test_occupied_cells_are_never_volatile(board):
    for c, volatile in zip(board.coords(), volatile_cells(board, 3)):
        if board.at(c) is not None:
            assert not volatile


@given(board=boards())
@settings(max_examples=100, deadline=None)
def test_tied_cells_are_volatile_with_rivals(board):
    volatile = volatile_cells(board, 3)
    for ix, c in enumerate(board.coords()):
        if board.at(c) is not None:
            continue
        influences, _ = board.tally_neighbors(c)
        active = influences[:3]
        top = max(active)
        if active.count(top) > 1:
            assert volatile[ix]
