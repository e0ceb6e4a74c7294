"""Orchestrator for playing a real Hanabi game with the Monte Carlo solver."""

from __future__ import annotations

import logging
import random
import uuid
from concurrent.futures import Executor
from typing import Any, Callable

from src.hanabi.game import apply_action, create_game, game_over_reason
from src.hanabi.models import Game, HanabiConfig

from .config import SolverConfig
from .metrics import compute_game_metrics
from .models import GameRecord, TurnLog
from .rollout import choose_action, make_executor


logger = logging.getLogger(__name__)


def _status(game: Game) -> dict[str, int]:
    return {
        "score": game.score,
        "info_tokens": game.num_info_tokens,
        "fuse_tokens": game.num_fuse_tokens,
        "deck_remaining": len(game.deck),
    }


async def run_turn(
    game: Game,
    turn_number: int,
    config: SolverConfig,
    rng: random.Random,
    executor: Executor | None = None,
    emit_fn: Callable[[str, dict[str, Any]], None] | None = None,
) -> tuple[Game, TurnLog]:
    """
    Execute a single real turn.

    Args:
        game: Current real game state
        turn_number: 1-based turn counter for the log
        config: Solver configuration
        rng: Source of trial seeds
        executor: Optional shared worker pool
        emit_fn: Optional callback for emitting events

    Returns:
        (new_game, turn_log)
    """
    player_id = game.turn
    best = await choose_action(game, config, rng, executor)
    new_game = apply_action(best.action, game)

    turn_log = TurnLog(
        turn_number=turn_number,
        player_id=player_id,
        action=best.action,
        trial_score=best.score,
        info_tokens_after=new_game.num_info_tokens,
        fuse_tokens_after=new_game.num_fuse_tokens,
        score_after=new_game.score,
        deck_size_after=len(new_game.deck),
    )

    if emit_fn is not None:
        emit_fn("turn", {
            "turn_number": turn_number,
            "player_id": player_id,
            "action": best.action.model_dump(),
            "trial_score": best.score,
            **_status(new_game),
        })

    return new_game, turn_log


async def run_game(
    config: SolverConfig,
    game: Game | None = None,
    emit_fn: Callable[[str, dict[str, Any]], None] | None = None,
    game_id: str | None = None,
) -> tuple[Game, GameRecord]:
    """
    Play a game to the end, choosing every action by rollouts.

    Args:
        config: Solver configuration
        game: Optional starting state (a new game is dealt if not provided)
        emit_fn: Optional callback for emitting events ("init", "turn", "done")
        game_id: Optional game ID (generated if not provided)

    Returns:
        (final_game, game_record)
    """
    rng = random.Random(config.seed)
    if game is None:
        game = create_game(HanabiConfig(num_players=config.num_players), rng)

    if game_id is None:
        game_id = str(uuid.uuid4())[:8]

    logger.info(f"Starting game {game_id}: {len(game.players)} players, {config.num_trials} trials per turn")
    if emit_fn is not None:
        emit_fn("init", {
            "game_id": game_id,
            "num_players": len(game.players),
            "config": config.model_dump(),
            **_status(game),
        })

    turns: list[TurnLog] = []
    executor = make_executor(config)
    try:
        while not game.is_over:
            game, turn_log = await run_turn(
                game, len(turns) + 1, config, rng, executor, emit_fn
            )
            turns.append(turn_log)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    record = GameRecord(
        game_id=game_id,
        num_players=len(game.players),
        seed=config.seed,
        turns=turns,
        final_score=game.score,
        final_fireworks={color: f.top_number for color, f in game.fireworks.items()},
        game_over_reason=game_over_reason(game) or "unknown",
    )
    logger.info(f"Game {game_id} over ({record.game_over_reason}) with score {game.score}")

    if emit_fn is not None:
        emit_fn("done", {
            "game_id": game_id,
            "final_score": game.score,
            "game_over_reason": record.game_over_reason,
            "total_turns": len(turns),
            "metrics": compute_game_metrics(record),
            **_status(game),
        })

    return game, record
