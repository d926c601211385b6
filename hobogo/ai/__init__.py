"""AI players for Hobogo.

Create players through the factory:

    from hobogo.ai import create_ai_from_difficulty, AIType

    ai = create_ai_from_difficulty(difficulty=5, player_number=1)
    ai = AIFactory.create(AIType.MCTS, player_number=1, config=config)

Modules:
- base.py: BaseAI abstract base class
- factory.py: AIFactory and the difficulty ladder
- mcts.py: the multi-player MCTS engine
- mcts_ai.py: MCTS player
- heuristic_ai.py: greedy one-ply influence player
- random_ai.py: uniform random player
"""

from hobogo.ai.base import BaseAI
from hobogo.ai.factory import (
    DIFFICULTY_DESCRIPTIONS,
    DIFFICULTY_PROFILES,
    AIFactory,
    DifficultyProfile,
    create_ai_from_difficulty,
    get_difficulty_description,
    get_difficulty_profile,
)
from hobogo.ai.heuristic_ai import HeuristicAI
from hobogo.ai.mcts import MCTS, MCTSNode, SearchBudget
from hobogo.ai.mcts_ai import MCTSAI
from hobogo.ai.random_ai import RandomAI
from hobogo.models import AIConfig, AIType

__all__ = [
    "AIConfig",
    "AIFactory",
    "AIType",
    "BaseAI",
    "DIFFICULTY_DESCRIPTIONS",
    "DIFFICULTY_PROFILES",
    "DifficultyProfile",
    "HeuristicAI",
    "MCTS",
    "MCTSAI",
    "MCTSNode",
    "RandomAI",
    "SearchBudget",
    "create_ai_from_difficulty",
    "get_difficulty_description",
    "get_difficulty_profile",
]
