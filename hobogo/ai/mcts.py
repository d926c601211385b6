"""Multi-player Monte Carlo Tree Search over Hobogo game states.

Each node keeps a visit count and the reward sum of the player who moved
into it. One :meth:`MCTS.iterate` call walks the tree from the root:

1. selection: unvisited children first, then UCT
   (``mean + sqrt(c * ln(parent visits) / visits)``);
2. expansion: a visited node builds its children once, shuffled;
3. simulation: a zero-visit node runs one random playout to the end;
4. backpropagation: every node on the path adds the reward of the player
   that moved into it.

Descent is an explicit loop and statistics are only written once the
reward is known, so stopping between iterations always leaves a
consistent tree. All randomness comes from the ``random.Random`` passed in.
"""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..game_engine import Action, GameState, Score
from ..models import RolloutPolicy

__all__ = ["MCTS", "MCTSNode", "SearchBudget"]

DEFAULT_EXPLORATION = 2.0


class MCTSNode:
    """Search tree node.

    The player a node is scored for is implicit: it is the player who was
    about to move in the parent, i.e. ``previous_player`` of the state the
    node represents.
    """
    __slots__ = ["num", "score_sum", "children"]

    def __init__(self) -> None:
        self.num = 0
        self.score_sum = 0.0
        # Built once, the first time the search descends through this node.
        self.children: Optional[List[Tuple[Action, "MCTSNode"]]] = None

    @property
    def mean_score(self) -> float:
        return self.score_sum / self.num if self.num else 0.0

    def is_expanded(self) -> bool:
        return self.children is not None

    def __repr__(self) -> str:
        return f"MCTSNode(num={self.num}, mean={self.mean_score:.3f})"


@dataclass(frozen=True)
class SearchBudget:
    """Cooperative stopping rule, checked after every completed iteration.

    ``time_limit`` is in seconds. With neither limit set the search stops
    after a single iteration.
    """

    max_iterations: Optional[int] = None
    time_limit: Optional[float] = None

    def exhausted(self, iterations: int, elapsed: float) -> bool:
        if self.max_iterations is not None and iterations >= self.max_iterations:
            return True
        if self.time_limit is not None and elapsed >= self.time_limit:
            return True
        return self.max_iterations is None and self.time_limit is None


class MCTS:
    """Simple Monte Carlo Tree Search over one starting position."""

    def __init__(
        self,
        state: GameState,
        exploration: float = DEFAULT_EXPLORATION,
        rollout_policy: RolloutPolicy = RolloutPolicy.UNIFORM,
    ) -> None:
        self._start_state = state.clone()
        self._root = MCTSNode()
        self.exploration = exploration
        self.rollout_policy = RolloutPolicy(rollout_policy)

    @property
    def root(self) -> MCTSNode:
        return self._root

    @property
    def num_iterations(self) -> int:
        return self._root.num

    def _next_child(
        self,
        node: MCTSNode,
        state: GameState,
        rng: random.Random,
    ) -> Optional[Tuple[Action, MCTSNode]]:
        """Child to descend into, expanding ``node`` on first use."""
        if node.children is None:
            actions = state.available_actions()
            rng.shuffle(actions)
            node.children = [(action, MCTSNode()) for action in actions]

        best_value = -math.inf
        best: Optional[Tuple[Action, MCTSNode]] = None
        parent_num_ln = math.log(node.num)

        for action, child in node.children:
            if child.num == 0:
                # Every action is tried once before any is exploited.
                return action, child
            value = child.score_sum / child.num + math.sqrt(
                self.exploration * parent_num_ln / child.num
            )
            if value > best_value:
                best_value = value
                best = (action, child)
        return best

    def _playout(self, state: GameState, rng: random.Random) -> None:
        if self.rollout_policy is RolloutPolicy.QUEUED:
            state.queued_playout(rng)
        else:
            state.random_playout(rng)

    def iterate(self, rng: random.Random) -> Score:
        """Run one selection / expansion / playout / backpropagation pass."""
        state = self._start_state.clone()
        node = self._root
        path: List[Tuple[MCTSNode, int]] = []

        while True:
            path.append((node, state.previous_player))
            if node.num == 0:
                self._playout(state, rng)
                break
            step = self._next_child(node, state, rng)
            if step is None:
                # No children: a terminal position.
                break
            action, node = step
            state.take_action(action)

        score = state.score()
        for visited, player in path:
            visited.num += 1
            visited.score_sum += score[player]
        return score

    def has_answer(self) -> bool:
        """True once the root is expanded.

        The pass that expands the root also visits its first child, so from
        here on :meth:`best_action` is set unless the root is terminal.
        """
        return self._root.children is not None

    def run(self, rng: random.Random, budget: SearchBudget) -> int:
        """Iterate until ``budget`` is exhausted; returns the iterations run.

        The search keeps going past the budget until :meth:`has_answer`,
        which takes at most two iterations, so a legal move is always
        available afterwards.
        """
        start = time.time()
        done = 0
        while True:
            self.iterate(rng)
            done += 1
            if budget.exhausted(done, time.time() - start) and self.has_answer():
                return done

    def root_children(self) -> List[Tuple[Action, MCTSNode]]:
        return list(self._root.children or [])

    def best_action(self) -> Optional[Action]:
        """Most-visited root action; the first one wins ties."""
        best_action = None
        most_explored = 0
        for action, child in self.root_children():
            if child.num > most_explored:
                most_explored = child.num
                best_action = action
        return best_action

    def visit_distribution(self) -> Dict[str, int]:
        return {str(action): child.num for action, child in self.root_children()}

    def __str__(self) -> str:
        root = self._root
        lines = [f"mean score: {root.mean_score:.3f} over {root.num} playouts"]
        children = sorted(self.root_children(), key=lambda item: -item[1].num)
        for action, child in children:
            if child.num > 0:
                lines.append(
                    f"{action}: mean score: {child.mean_score:.3f} "
                    f"over {child.num} playouts"
                )
        return "\n".join(lines)
