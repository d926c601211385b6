"""
Pydantic Models for Hobogo configuration and results
Field aliases mirror the camelCase names used by the browser front-end
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from enum import Enum


PLAYER_NAMES = ("blue", "red", "green", "yellow")


class AIType(str, Enum):
    """AI type enumeration"""
    RANDOM = "random"
    HEURISTIC = "heuristic"
    MCTS = "mcts"


class RolloutPolicy(str, Enum):
    """How MCTS playouts pick their moves"""
    UNIFORM = "uniform"
    QUEUED = "queued"


class AIConfig(BaseModel):
    """AI configuration.

    ``think_time`` is a wall-clock budget in milliseconds and
    ``max_iterations`` an iteration cap; when both are set the search stops
    at whichever is reached first.
    """
    difficulty: int = Field(5, ge=1, le=10)
    think_time: Optional[int] = Field(None, ge=0, alias="thinkTime")
    max_iterations: Optional[int] = Field(None, ge=1, alias="maxIterations")
    rng_seed: Optional[int] = Field(None, alias="rngSeed")
    randomness: Optional[float] = Field(None, ge=0, le=1)
    exploration: float = Field(2.0, gt=0)
    rollout_policy: RolloutPolicy = Field(
        RolloutPolicy.UNIFORM, alias="rolloutPolicy"
    )

    class Config:
        populate_by_name = True


class GameSettings(BaseModel):
    """Match settings: board size and who sits at the table.

    Humans take the lowest player indices, bots the rest.
    """
    board_size: int = Field(9, ge=5, le=17, alias="boardSize")
    num_humans: int = Field(1, ge=0, le=4, alias="numHumans")
    num_bots: int = Field(1, ge=0, le=4, alias="numBots")
    bot_difficulty: int = Field(5, ge=1, le=10, alias="botDifficulty")

    class Config:
        populate_by_name = True
        frozen = True

    @model_validator(mode="after")
    def _check_has_players(self) -> "GameSettings":
        if self.num_humans + self.num_bots < 1:
            raise ValueError("a game needs at least one player")
        return self

    @property
    def num_players(self) -> int:
        return self.num_humans + self.num_bots

    def is_human(self, player: int) -> bool:
        return player < self.num_humans

    def player_name(self, player: int) -> str:
        """Display name, e.g. ``"red (AI)"`` for a bot in seat 1."""
        if player < len(PLAYER_NAMES):
            name = PLAYER_NAMES[player]
        else:
            name = str(player)
        if not self.is_human(player):
            name += " (AI)"
        return name


class ScoreBreakdown(BaseModel):
    """Standings split by how settled each point is.

    ``certain`` counts occupied and ruled cells, ``claimed`` the cells a
    player currently leads but could still lose, ``tied`` the cells nobody
    leads.
    """
    certain: List[int]
    claimed: List[int]
    tied: int

    def totals(self) -> List[int]:
        return [c + k for c, k in zip(self.certain, self.claimed)]


class TurnRecord(BaseModel):
    """One applied action in a match"""
    turn: int
    player: int
    action: str


class GameRecord(BaseModel):
    """Outcome of a headless match"""
    board_size: int = Field(alias="boardSize")
    num_players: int = Field(alias="numPlayers")
    turns: List[TurnRecord] = Field(default_factory=list)
    final_cells: List[int] = Field(alias="finalCells")
    filled_cells: List[int] = Field(alias="filledCells")
    points: List[int]
    winners: List[int]
    completed: bool = True

    class Config:
        populate_by_name = True

    @property
    def num_turns(self) -> int:
        return len(self.turns)
