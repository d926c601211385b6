"""MCTS AI implementation for Hobogo.

Wraps :class:`~hobogo.ai.mcts.MCTS` in the :class:`BaseAI` interface. Each
call to :meth:`MCTSAI.select_action` builds a fresh tree for the current
position, runs it under the configured budget and plays the most-visited
root action.

Budget:
    - ``config.think_time`` (ms) and/or ``config.max_iterations``; the search
      stops at whichever is reached first.
    - With neither set, the think time defaults to ``HOBOGO_THINK_TIME_MS``
      (1000 ms unless overridden in the environment).
"""

from __future__ import annotations

import logging
import os
import time
from typing import Dict, Optional

from ..game_engine import Action, GameState
from ..models import AIConfig
from .base import BaseAI
from .mcts import MCTS, SearchBudget

logger = logging.getLogger(__name__)

DEFAULT_THINK_TIME_MS = int(os.environ.get("HOBOGO_THINK_TIME_MS", "1000"))


class MCTSAI(BaseAI):
    """Monte Carlo Tree Search player."""

    def __init__(self, player_number: int, config: Optional[AIConfig] = None):
        super().__init__(player_number, config)
        self.last_search: Optional[MCTS] = None
        self.last_iterations = 0

    def search_budget(self) -> SearchBudget:
        """Budget for one move, derived from the config."""
        think_time = self.config.think_time
        max_iterations = self.config.max_iterations
        if think_time is None and max_iterations is None:
            think_time = DEFAULT_THINK_TIME_MS
        return SearchBudget(
            max_iterations=max_iterations,
            time_limit=think_time / 1000.0 if think_time is not None else None,
        )

    def select_action(self, game_state: GameState) -> Optional[Action]:
        self.check_turn(game_state)
        valid_actions = self.get_valid_actions(game_state)
        if not valid_actions:
            self.last_search = None
            return None

        if len(valid_actions) == 1:
            # Forced, usually a pass; nothing to search.
            self.last_search = None
            self.last_iterations = 0
            self.move_count += 1
            return valid_actions[0]

        if self.should_pick_random_move():
            self.last_search = None
            self.move_count += 1
            return self.get_random_element(valid_actions)

        search = MCTS(
            game_state,
            exploration=self.config.exploration,
            rollout_policy=self.config.rollout_policy,
        )
        start = time.time()
        self.last_iterations = search.run(self.rng, self.search_budget())
        self.last_search = search
        selected = search.best_action()

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "MCTSAI player=%d: %d iterations in %.3fs, selected %s\n%s",
                self.player_number,
                self.last_iterations,
                time.time() - start,
                selected,
                search,
            )

        self.move_count += 1
        return selected

    def evaluate_position(self, game_state: GameState) -> float:
        """Mean reward this player collects over a fresh search budget.

        The root node itself is scored for the player who moved last, so the
        rewards are read per iteration rather than from the root statistics.
        """
        if game_state.is_game_over():
            return game_state.score()[self.player_number]

        search = MCTS(
            game_state,
            exploration=self.config.exploration,
            rollout_policy=self.config.rollout_policy,
        )
        total = 0.0
        budget = self.search_budget()
        start = time.time()
        done = 0
        while True:
            total += search.iterate(self.rng)[self.player_number]
            done += 1
            if budget.exhausted(done, time.time() - start):
                break
        return total / done

    def get_visit_distribution(self) -> Dict[str, int]:
        """Root visit counts of the last search, keyed by action label."""
        if self.last_search is None:
            return {}
        return self.last_search.visit_distribution()

    def get_evaluation_breakdown(
        self,
        game_state: GameState,
    ) -> Dict[str, float]:
        return {
            "total": self.evaluate_position(game_state),
            "iterations": float(self.last_iterations),
        }
