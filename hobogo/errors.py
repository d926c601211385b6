"""
Hobogo Error Hierarchy

Exception hierarchy for the board, turn engine and search. All custom
exceptions inherit from HobogoError for easy catching and filtering.

Ordinary outcomes (no legal move, game already over, no best action yet)
are returned as empty lists or ``None``; they are never raised.

Usage:
    from hobogo.errors import InvalidBoardError

    try:
        board = Board.from_cells(cells)
    except InvalidBoardError as e:
        logger.warning(f"Rejected board: {e.message}")
"""

from typing import Any

__all__ = [
    "ConfigurationError",
    "HobogoError",
    "InvalidBoardError",
    "InvalidMoveError",
    "InvalidStateError",
    "PlayerLimitError",
]


class HobogoError(Exception):
    """Base exception for all Hobogo errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "HOBOGO_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Board / Rules Errors
# =============================================================================


class InvalidBoardError(HobogoError):
    """Board input that cannot describe a square grid.

    Raised at construction time, before any board object exists.
    """
    code: str = "INVALID_BOARD"

    def __init__(
        self,
        message: str,
        num_cells: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        if num_cells is not None:
            self.context["num_cells"] = num_cells


class PlayerLimitError(HobogoError):
    """Player count outside the supported range.

    Per-player tallies are fixed-size arrays, so the maximum is a hard
    ceiling.
    """
    code: str = "PLAYER_LIMIT"

    def __init__(
        self,
        num_players: int,
        max_players: int,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            f"Unsupported number of players: {num_players}",
            context=context,
        )
        self.num_players = num_players
        self.max_players = max_players
        self.context["num_players"] = num_players
        self.context["max_players"] = max_players


class InvalidMoveError(HobogoError):
    """Move that cannot be written to the board (e.g. off the grid)."""
    code: str = "INVALID_MOVE"


class InvalidStateError(HobogoError):
    """Inconsistent game state.

    Raised when a GameState is built with a next player outside the active
    players, or when an AI is asked to move on another player's turn.
    """
    code: str = "INVALID_STATE"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(HobogoError):
    """Settings that cannot be turned into a playable match."""
    code: str = "CONFIGURATION_ERROR"
