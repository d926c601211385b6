"""Tests for the AI players and the difficulty ladder."""

import pytest

from hobogo.ai import (
    DIFFICULTY_PROFILES,
    AIFactory,
    HeuristicAI,
    MCTSAI,
    RandomAI,
    create_ai_from_difficulty,
    get_difficulty_description,
    get_difficulty_profile,
)
from hobogo.ai.base import derive_seed
from hobogo.ai.heuristic_ai import evaluate_board, weighted_points
from hobogo.ai.mcts_ai import DEFAULT_THINK_TIME_MS
from hobogo.board import MAX_PLAYERS, Board, Coord
from hobogo.errors import InvalidStateError
from hobogo.game_engine import PASS, ActionType, GameState
from hobogo.models import AIConfig, AIType

TEST_TIMEOUT_SECONDS = 60


class TestDifficultyLadder:
    def test_select_ai_type(self):
        assert get_difficulty_profile(1)["ai_type"] == AIType.RANDOM
        assert get_difficulty_profile(2)["ai_type"] == AIType.HEURISTIC
        assert get_difficulty_profile(3)["ai_type"] == AIType.HEURISTIC
        for difficulty in range(4, 11):
            assert get_difficulty_profile(difficulty)["ai_type"] == AIType.MCTS

    def test_think_time_grows_with_difficulty(self):
        think_times = [
            DIFFICULTY_PROFILES[d]["think_time_ms"] for d in range(4, 11)
        ]
        assert think_times == sorted(think_times)
        assert len(set(think_times)) == len(think_times)

    def test_difficulty_profile_clamping(self):
        assert get_difficulty_profile(0) == get_difficulty_profile(1)
        assert get_difficulty_profile(99) == get_difficulty_profile(10)

    def test_descriptions(self):
        assert get_difficulty_description(1).startswith("Beginner")
        assert get_difficulty_description(42) == get_difficulty_description(10)


class TestAIFactory:
    @pytest.mark.parametrize(
        "difficulty, expected_class",
        [(1, RandomAI), (2, HeuristicAI), (3, HeuristicAI), (4, MCTSAI), (10, MCTSAI)],
    )
    def test_create_from_difficulty(self, difficulty, expected_class):
        ai = AIFactory.create_from_difficulty(difficulty, player_number=1)
        assert isinstance(ai, expected_class)
        assert ai.player_number == 1
        assert ai.config.difficulty == difficulty

    def test_mcts_gets_profile_think_time(self):
        ai = create_ai_from_difficulty(7, 0)
        assert ai.config.think_time == DIFFICULTY_PROFILES[7]["think_time_ms"]

    def test_overrides(self):
        ai = AIFactory.create_from_difficulty(
            5, 0, think_time_override=10, randomness_override=0.5, rng_seed=3
        )
        assert ai.config.think_time == 10
        assert ai.config.randomness == 0.5
        assert ai.rng_seed == 3

    def test_create_explicit(self):
        ai = AIFactory.create(AIType.HEURISTIC, 2, AIConfig(difficulty=3))
        assert isinstance(ai, HeuristicAI)
        assert ai.config.difficulty == 3

    def test_create_accepts_string_type(self):
        assert isinstance(AIFactory.create("random", 0), RandomAI)

    def test_unknown_type_is_rejected(self):
        with pytest.raises(ValueError):
            AIFactory.create("does_not_exist", 0)


class TestBaseAI:
    def test_derived_seed_depends_on_seat(self):
        config = AIConfig(difficulty=4)
        assert derive_seed(config, 0) != derive_seed(config, 1)
        assert RandomAI(0, config).rng_seed == derive_seed(config, 0)

    def test_explicit_seed_wins(self):
        assert RandomAI(1, AIConfig(rng_seed=77)).rng_seed == 77

    def test_wrong_turn_is_rejected(self, state_factory):
        state = state_factory(size=3, next_player=0)
        for ai in (RandomAI(1), HeuristicAI(1), MCTSAI(1, AIConfig(max_iterations=5))):
            with pytest.raises(InvalidStateError):
                ai.select_action(state)

    def test_repr(self):
        assert repr(RandomAI(2, AIConfig(difficulty=1))) == (
            "RandomAI(player=2, difficulty=1)"
        )


class TestRandomAI:
    def test_selects_legal_move(self, state_factory):
        state = state_factory(size=4)
        ai = RandomAI(0, AIConfig(rng_seed=5))
        action = ai.select_action(state)
        assert action.type is ActionType.MOVE
        assert state.board.is_valid_move(action.coord, 0, 2)
        assert ai.move_count == 1

    def test_same_seed_same_choices(self, state_factory):
        state = state_factory(size=5)
        first = RandomAI(0, AIConfig(rng_seed=11))
        second = RandomAI(0, AIConfig(rng_seed=11))
        assert [first.select_action(state) for _ in range(5)] == [
            second.select_action(state) for _ in range(5)
        ]

    def test_passes_when_stuck(self, stuck_third_player_state):
        assert RandomAI(2).select_action(stuck_third_player_state) is PASS

    def test_none_when_over(self, state_factory):
        state = state_factory(["01", "10"], next_player=1)
        assert RandomAI(1).select_action(state) is None

    def test_evaluation_leaves_choices_unchanged(self, state_factory):
        state = state_factory(size=5)
        evaluated = RandomAI(0, AIConfig(rng_seed=11))
        untouched = RandomAI(0, AIConfig(rng_seed=11))
        assert evaluated.evaluate_position(state) == 0.0
        assert evaluated.select_action(state) == untouched.select_action(state)


class TestHeuristicAI:
    def test_weighted_points(self, ruled_center_board):
        points, num_tied = weighted_points(ruled_center_board)
        # 16 stones for player 0; 8 stones plus a ruled cell for player 1.
        assert points[0] == 160
        assert points[1] == 83
        assert num_tied == 0

    def test_evaluate_board(self):
        board = Board.from_cells([0])
        assert evaluate_board(board, 0) == pytest.approx(10 / 11)
        assert evaluate_board(board, 1) == 0.0

    def test_tied_cells_dilute_share(self, symmetric_center_board):
        # 2 stones + 1 ruled each, 3 tied cells.
        assert evaluate_board(symmetric_center_board, 0) == pytest.approx(23 / 50)

    def test_picks_best_one_ply_move(self, state_factory):
        state = state_factory([
            ".....",
            ".0...",
            ".....",
            "...1.",
            ".....",
        ])
        ai = HeuristicAI(0, AIConfig(rng_seed=1))
        action = ai.select_action(state)
        assert action.type is ActionType.MOVE

        def value(c: Coord) -> float:
            after = state.board.clone()
            after.set(c, 0)
            return evaluate_board(after, 0)

        best = max(value(c) for c in state.available_moves_for(0))
        assert value(action.coord) == pytest.approx(best)

    def test_passes_when_stuck(self, stuck_third_player_state):
        assert HeuristicAI(2).select_action(stuck_third_player_state) is PASS

    def test_breakdown(self, state_factory):
        breakdown = HeuristicAI(0).get_evaluation_breakdown(state_factory(["0."]))
        assert set(breakdown) == {
            "total", "weighted_points", "opponent_points", "tied_cells",
        }
        # One stone plus the cell it rules.
        assert breakdown["weighted_points"] == 13.0
        assert breakdown["tied_cells"] == 0.0

    def test_breakdown_for_high_seat(self):
        state = GameState(Board.from_cells([0, -1, -1, -1]), 5, 6)
        breakdown = HeuristicAI(5).get_evaluation_breakdown(state)
        assert breakdown["weighted_points"] == 0.0
        assert breakdown["total"] == 0.0
        assert breakdown["opponent_points"] > 0.0

    def test_weighted_points_cover_every_seat(self):
        points, _ = weighted_points(Board.from_cells([0]))
        assert len(points) == MAX_PLAYERS


class TestMCTSAI:
    def test_default_budget_uses_think_time(self):
        budget = MCTSAI(0).search_budget()
        assert budget.max_iterations is None
        assert budget.time_limit == pytest.approx(DEFAULT_THINK_TIME_MS / 1000.0)

    def test_budget_from_config(self):
        budget = MCTSAI(0, AIConfig(think_time=250, max_iterations=40)).search_budget()
        assert budget.max_iterations == 40
        assert budget.time_limit == pytest.approx(0.25)

    @pytest.mark.timeout(TEST_TIMEOUT_SECONDS)
    def test_selects_legal_move(self, state_factory, fast_ai_config):
        state = state_factory(size=4)
        ai = MCTSAI(0, fast_ai_config)
        action = ai.select_action(state)
        assert action is not None
        assert state.board.is_valid_move(action.coord, 0, 2)
        assert ai.last_iterations == 60
        assert sum(ai.get_visit_distribution().values()) == 59

    @pytest.mark.timeout(TEST_TIMEOUT_SECONDS)
    def test_seeded_moves_are_reproducible(self, state_factory):
        state = state_factory(size=3)
        config = AIConfig(max_iterations=100, rng_seed=9)
        assert MCTSAI(0, config).select_action(state) == MCTSAI(
            0, config
        ).select_action(state)

    def test_single_cell_single_player_has_no_move(self):
        state = GameState(Board.new(1, 1), 0, 1)
        ai = MCTSAI(0, AIConfig(max_iterations=10))
        assert ai.select_action(state) is None
        assert ai.get_visit_distribution() == {}

    def test_evaluation_of_finished_game_is_its_score(self, state_factory):
        state = state_factory(["000", "000", "001"])
        ai = MCTSAI(1, AIConfig(max_iterations=5))
        assert ai.evaluate_position(state) == pytest.approx(-0.7)

    def test_evaluation_runs_short_search(self, state_factory, fast_ai_config):
        value = MCTSAI(0, fast_ai_config).evaluate_position(state_factory(size=3))
        assert -1.0 <= value <= 2.0

    def test_forced_pass_skips_the_search(self, stuck_third_player_state):
        ai = MCTSAI(2)
        assert ai.select_action(stuck_third_player_state) is PASS
        assert ai.last_search is None
        assert ai.last_iterations == 0
        assert ai.move_count == 1

    def test_one_iteration_budget_still_moves(self, state_factory):
        state = state_factory(size=5)
        ai = MCTSAI(0, AIConfig(max_iterations=1, rng_seed=1))
        action = ai.select_action(state)
        assert action is not None
        assert action.type is ActionType.MOVE
        assert state.board.is_valid_move(action.coord, 0, 2)
        assert ai.last_iterations == 2
