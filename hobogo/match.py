"""Headless bot-versus-bot matches.

Plays a whole game between AI players with no UI attached, e.g. for
comparing difficulty levels or smoke-testing the engine on every board
size the settings allow.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from .ai.base import BaseAI
from .ai.factory import AIFactory
from .board import Board
from .errors import ConfigurationError
from .game_engine import PASS, GameState
from .models import GameRecord, GameSettings, TurnRecord

logger = logging.getLogger(__name__)


def build_players(
    settings: GameSettings,
    ais: Optional[Mapping[int, BaseAI]] = None,
    rng_seed: Optional[int] = None,
) -> dict[int, BaseAI]:
    """One AI per seat: the supplied ones, the ladder for the remaining bots.

    Raises:
        ConfigurationError: a human seat has no AI to stand in for it, or a
            supplied AI is seated at the wrong player index.
    """
    players: dict[int, BaseAI] = {}
    supplied = dict(ais or {})
    for player in range(settings.num_players):
        ai = supplied.get(player)
        if ai is not None:
            if ai.player_number != player:
                raise ConfigurationError(
                    f"AI for seat {player} plays as player {ai.player_number}",
                    context={"seat": player},
                )
            players[player] = ai
        elif settings.is_human(player):
            raise ConfigurationError(
                f"No AI supplied for human seat {player} "
                f"({settings.player_name(player)})",
                context={"seat": player, "num_humans": settings.num_humans},
            )
        else:
            players[player] = AIFactory.create_from_difficulty(
                settings.bot_difficulty,
                player,
                rng_seed=None if rng_seed is None else rng_seed + player,
            )
    return players


def play_game(
    settings: GameSettings,
    ais: Optional[Mapping[int, BaseAI]] = None,
    max_turns: Optional[int] = None,
    rng_seed: Optional[int] = None,
) -> GameRecord:
    """Play a match to the end (or ``max_turns``) and record it."""
    players = build_players(settings, ais, rng_seed)
    size = settings.board_size
    state = GameState(Board.new(size, size), 0, settings.num_players)
    record_turns: list[TurnRecord] = []

    completed = True
    while not state.is_game_over():
        if max_turns is not None and len(record_turns) >= max_turns:
            completed = False
            break
        player = state.next_player
        action = players[player].select_action(state)
        if action is None:
            action = PASS
        record_turns.append(
            TurnRecord(turn=len(record_turns), player=player, action=str(action))
        )
        state.take_action(action)

    board = state.board
    points = board.points()[:settings.num_players]
    best = max(points)
    winners = [player for player, p in enumerate(points) if p == best]

    logger.info(
        "Game finished after %d turns on %dx%d: points=%s winners=%s",
        len(record_turns),
        size,
        size,
        points,
        [settings.player_name(w) for w in winners],
    )

    return GameRecord(
        board_size=size,
        num_players=settings.num_players,
        turns=record_turns,
        final_cells=board.cells,
        filled_cells=board.filled_in().cells,
        points=points,
        winners=winners,
        completed=completed,
    )
