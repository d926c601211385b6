"""Hobogo: territorial-influence rules and a multi-player MCTS player.

The core lives in :mod:`hobogo.board` (cells and influence),
:mod:`hobogo.volatility` (what can still flip, when the game ends) and
:mod:`hobogo.game_engine` (turns, actions, playouts). :mod:`hobogo.api`
exposes flat-array queries for front-ends.
"""

from hobogo.board import EMPTY, MAX_PLAYERS, Board, Coord, Influence, InfluenceKind
from hobogo.errors import (
    ConfigurationError,
    HobogoError,
    InvalidBoardError,
    InvalidMoveError,
    InvalidStateError,
    PlayerLimitError,
)
from hobogo.game_engine import Action, ActionType, GameState
from hobogo.models import AIConfig, AIType, GameRecord, GameSettings, ScoreBreakdown

__version__ = "0.1.0"

__all__ = [
    "AIConfig",
    "AIType",
    "Action",
    "ActionType",
    "Board",
    "ConfigurationError",
    "Coord",
    "EMPTY",
    "GameRecord",
    "GameSettings",
    "GameState",
    "HobogoError",
    "Influence",
    "InfluenceKind",
    "InvalidBoardError",
    "InvalidMoveError",
    "InvalidStateError",
    "MAX_PLAYERS",
    "PlayerLimitError",
    "ScoreBreakdown",
]
