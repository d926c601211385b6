"""AI Factory for Hobogo.

Centralized creation of AI players so that the match runner, the flat API
and tests all agree on what each difficulty level means.

Usage:
    from hobogo.ai.factory import AIFactory, get_difficulty_profile

    # Create AI from difficulty level
    ai = AIFactory.create_from_difficulty(difficulty=5, player_number=1)

    # Create AI with explicit type and config
    ai = AIFactory.create(
        ai_type=AIType.MCTS,
        player_number=1,
        config=AIConfig(difficulty=5, think_time=500),
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypedDict

from ..errors import ConfigurationError
from ..models import AIConfig, AIType

if TYPE_CHECKING:
    from .base import BaseAI


class DifficultyProfile(TypedDict):
    """One rung of the difficulty ladder."""
    ai_type: AIType
    randomness: float
    think_time_ms: int
    profile_id: str


# think_time_ms is a search budget, never a delay after the move is chosen.
DIFFICULTY_PROFILES: dict[int, DifficultyProfile] = {
    1: {
        # Beginner: pure random baseline
        "ai_type": AIType.RANDOM,
        "randomness": 1.0,
        "think_time_ms": 0,
        "profile_id": "random-1",
    },
    2: {
        # Easy: greedy with frequent random moves
        "ai_type": AIType.HEURISTIC,
        "randomness": 0.3,
        "think_time_ms": 0,
        "profile_id": "heuristic-2",
    },
    3: {
        "ai_type": AIType.HEURISTIC,
        "randomness": 0.1,
        "think_time_ms": 0,
        "profile_id": "heuristic-3",
    },
    4: {
        # Search from here on; the think time is the only knob
        "ai_type": AIType.MCTS,
        "randomness": 0.05,
        "think_time_ms": 100,
        "profile_id": "mcts-4",
    },
    5: {
        "ai_type": AIType.MCTS,
        "randomness": 0.0,
        "think_time_ms": 250,
        "profile_id": "mcts-5",
    },
    6: {
        "ai_type": AIType.MCTS,
        "randomness": 0.0,
        "think_time_ms": 500,
        "profile_id": "mcts-6",
    },
    7: {
        "ai_type": AIType.MCTS,
        "randomness": 0.0,
        "think_time_ms": 1000,
        "profile_id": "mcts-7",
    },
    8: {
        "ai_type": AIType.MCTS,
        "randomness": 0.0,
        "think_time_ms": 2000,
        "profile_id": "mcts-8",
    },
    9: {
        "ai_type": AIType.MCTS,
        "randomness": 0.0,
        "think_time_ms": 4000,
        "profile_id": "mcts-9",
    },
    10: {
        # Strongest: long search
        "ai_type": AIType.MCTS,
        "randomness": 0.0,
        "think_time_ms": 8000,
        "profile_id": "mcts-10",
    },
}

DIFFICULTY_DESCRIPTIONS: dict[int, str] = {
    1: "Beginner - Pure random moves",
    2: "Easy - Greedy influence with randomness",
    3: "Casual - Greedy influence",
    4: "Intermediate - Short tree search",
    5: "Mid - Tree search",
    6: "Upper-mid - Tree search",
    7: "Strong - Tree search with one second per move",
    8: "Expert - Extended tree search",
    9: "Master - Extended tree search",
    10: "Grandmaster - Longest tree search",
}


def get_difficulty_profile(difficulty: int) -> DifficultyProfile:
    """Return the profile for ``difficulty``, clamped into the ladder."""
    return DIFFICULTY_PROFILES[_clamp_difficulty(difficulty)]


def _clamp_difficulty(difficulty: int) -> int:
    return max(min(DIFFICULTY_PROFILES), min(max(DIFFICULTY_PROFILES), difficulty))


def get_difficulty_description(difficulty: int) -> str:
    effective = _clamp_difficulty(difficulty)
    return DIFFICULTY_DESCRIPTIONS.get(effective, f"Difficulty {effective}")


class AIFactory:
    """Centralized factory for creating AI instances.

    Built-in types are resolved lazily to keep import order free of
    cycles.
    """

    _class_cache: dict[AIType, type[BaseAI]] = {}

    @classmethod
    def _get_ai_class(cls, ai_type: AIType) -> type[BaseAI]:
        if ai_type in cls._class_cache:
            return cls._class_cache[ai_type]

        if ai_type == AIType.RANDOM:
            from .random_ai import RandomAI
            ai_class = RandomAI
        elif ai_type == AIType.HEURISTIC:
            from .heuristic_ai import HeuristicAI
            ai_class = HeuristicAI
        elif ai_type == AIType.MCTS:
            from .mcts_ai import MCTSAI
            ai_class = MCTSAI
        else:
            raise ConfigurationError(f"Unsupported AI type: {ai_type}")

        cls._class_cache[ai_type] = ai_class
        return ai_class

    @classmethod
    def create(
        cls,
        ai_type: AIType,
        player_number: int,
        config: AIConfig | None = None,
    ) -> BaseAI:
        """Create an AI instance with explicit type and configuration."""
        ai_class = cls._get_ai_class(AIType(ai_type))
        return ai_class(player_number, config)

    @classmethod
    def create_from_difficulty(
        cls,
        difficulty: int,
        player_number: int,
        *,
        think_time_override: int | None = None,
        randomness_override: float | None = None,
        rng_seed: int | None = None,
    ) -> BaseAI:
        """Create an AI from the difficulty ladder.

        Args:
            difficulty: Difficulty level (1-10, clamped if out of range)
            player_number: The player index (0-based)
            think_time_override: Override the profile's think time (ms)
            randomness_override: Override the profile's randomness (0.0-1.0)
            rng_seed: Optional RNG seed for reproducibility

        Returns:
            Configured AI instance
        """
        profile = get_difficulty_profile(difficulty)
        think_time = (
            think_time_override
            if think_time_override is not None
            else profile["think_time_ms"]
        )
        config = AIConfig(
            difficulty=_clamp_difficulty(difficulty),
            think_time=think_time if profile["ai_type"] == AIType.MCTS else None,
            randomness=(
                randomness_override
                if randomness_override is not None
                else profile["randomness"]
            ),
            rng_seed=rng_seed,
        )
        return cls.create(profile["ai_type"], player_number, config)


def create_ai_from_difficulty(
    difficulty: int,
    player_number: int,
    rng_seed: int | None = None,
) -> BaseAI:
    """Convenience wrapper around :meth:`AIFactory.create_from_difficulty`."""
    return AIFactory.create_from_difficulty(
        difficulty, player_number, rng_seed=rng_seed
    )
