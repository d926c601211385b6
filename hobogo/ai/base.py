"""
Base AI Player class for Hobogo
Abstract base class that all AI implementations inherit from
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
import random

from ..errors import InvalidStateError
from ..game_engine import Action, GameState
from ..models import AIConfig


def derive_seed(config: AIConfig, player_number: int) -> int:
    """
    Derive a deterministic RNG seed when ``AIConfig.rng_seed`` is not set.

    Mixes the difficulty and the seat into a 32-bit value so that two bots
    of the same strength at different seats do not mirror each other.
    Callers that need control over randomness should pass ``rng_seed``
    explicitly instead.
    """
    base = (config.difficulty * 1_000_003) ^ (player_number * 97_911)
    return int(base & 0xFFFFFFFF)


class BaseAI(ABC):
    """Abstract base class for all AI implementations"""

    def __init__(self, player_number: int, config: Optional[AIConfig] = None):
        """
        Initialize AI player

        Args:
            player_number: The player index this AI controls (0-based)
            config: AI configuration settings
        """
        self.player_number = player_number
        self.config = config if config is not None else AIConfig()
        self.move_count = 0

        # Per-instance RNG used for every stochastic decision (random move
        # selection, child shuffling, rollouts) so a fixed seed reproduces
        # a whole game.
        if self.config.rng_seed is not None:
            self.rng_seed: int = int(self.config.rng_seed)
        else:
            self.rng_seed = derive_seed(self.config, self.player_number)
        self.rng: random.Random = random.Random(self.rng_seed)

    @abstractmethod
    def select_action(self, game_state: GameState) -> Optional[Action]:
        """
        Select the action to play in the current game state

        Args:
            game_state: Current game state; ``next_player`` must be this AI

        Returns:
            Selected action or None if the game is over
        """
        pass

    @abstractmethod
    def evaluate_position(self, game_state: GameState) -> float:
        """
        Evaluate the current position from this AI's perspective

        Args:
            game_state: Current game state

        Returns:
            Evaluation score (higher is better for this AI)
        """
        pass

    def get_evaluation_breakdown(
        self, game_state: GameState
    ) -> Dict[str, float]:
        return {
            "total": self.evaluate_position(game_state)
        }

    def check_turn(self, game_state: GameState) -> None:
        """Raise InvalidStateError unless it is this AI's turn."""
        if game_state.next_player != self.player_number:
            raise InvalidStateError(
                f"AI for player {self.player_number} asked to move on "
                f"player {game_state.next_player}'s turn"
            )

    def get_valid_actions(self, game_state: GameState) -> List[Action]:
        """All legal actions for this AI's player (Pass included)."""
        return game_state.available_actions_for(self.player_number)

    def should_pick_random_move(self) -> bool:
        """
        Determine if AI should pick a random move based on randomness setting
        """
        if self.config.randomness is None or self.config.randomness == 0:
            return False
        return self.rng.random() < self.config.randomness

    def get_random_element(self, items: List[Any]) -> Optional[Any]:
        if not items:
            return None
        return self.rng.choice(items)

    def __repr__(self) -> str:
        """String representation of AI"""
        return (
            f"{self.__class__.__name__}"
            f"(player={self.player_number}, "
            f"difficulty={self.config.difficulty})"
        )
