"""Random AI implementation for Hobogo.

This agent selects uniformly random legal actions using the per-instance RNG
on the :class:`BaseAI`. It is primarily intended for testing, baselines and
the lowest difficulty rather than competitive play.
"""

from __future__ import annotations

from ..game_engine import Action, GameState
from .base import BaseAI


class RandomAI(BaseAI):
    """AI that selects random valid actions."""

    def select_action(self, game_state: GameState) -> Action | None:
        """Select a random legal action for ``game_state``.

        Returns:
            A random legal :class:`Action` (``PASS`` when the player is
            stuck) or ``None`` once the game is over.
        """
        self.check_turn(game_state)
        valid_actions = self.get_valid_actions(game_state)

        if not valid_actions:
            return None

        selected = self.get_random_element(valid_actions)

        self.move_count += 1
        return selected

    def evaluate_position(self, game_state: GameState) -> float:
        """RandomAI has no opinion on positions and always returns 0.0.

        The RNG is left untouched so evaluations never shift later moves.
        """
        _ = game_state  # unused in this implementation
        return 0.0
