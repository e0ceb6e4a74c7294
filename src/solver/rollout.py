"""
Monte Carlo rollouts for choosing the current player's action.

Each trial guesses the current player's hand, samples an action from the
decision table, applies it, and keeps going (with a fresh guess for whoever
is on turn) until the game ends or the depth bound is hit. The trial reports
its final score together with the first action it took. The action of the
best-scoring trial is the one played in the real game.

Trials share nothing: each gets its own copy of the game and its own seed,
so they run on a worker pool without locks.
"""

from __future__ import annotations

import asyncio
import logging
import random
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor

from src.hanabi.game import apply_action
from src.hanabi.inference import substitute_guess
from src.hanabi.models import Action, Game

from .config import SolverConfig
from .models import TrialResult
from .policy import pick_action


logger = logging.getLogger(__name__)


class RolloutTimeoutError(TimeoutError):
    """Trials for a decision round did not finish in time."""


def _guess_and_pick(game: Game, rng: random.Random) -> tuple[Action, Game]:
    """Swap a guessed hand in for the current player and pick their action."""
    game_guess = substitute_guess(game, rng)
    return pick_action(game_guess, rng), game_guess


def run_trial(game: Game, depth_max: int, seed: int) -> TrialResult:
    """
    Simulate one rollout from game.

    Module-level so it can be shipped to a process pool.
    """
    rng = random.Random(seed)

    first_action, game_guess = _guess_and_pick(game, rng)
    sim = apply_action(first_action, game_guess)

    depth = 0
    while not sim.is_over and depth < depth_max:
        action, sim_guess = _guess_and_pick(sim, rng)
        sim = apply_action(action, sim_guess)
        depth += 1

    logger.debug(f"Trial {seed:#x}: {first_action.action_type} -> score {sim.score} at depth {depth}")
    return TrialResult(score=sim.score, action=first_action)


def make_executor(config: SolverConfig) -> Executor:
    """Build the worker pool trials are dispatched onto."""
    if config.executor == "thread":
        return ThreadPoolExecutor(max_workers=config.max_workers)
    return ProcessPoolExecutor(max_workers=config.max_workers)


async def choose_action(
    game: Game,
    config: SolverConfig,
    rng: random.Random,
    executor: Executor | None = None,
) -> TrialResult:
    """
    Run config.num_trials rollouts concurrently and return the best one.

    Args:
        game: The real game state (never modified)
        config: Solver configuration
        rng: Source of the per-trial seeds
        executor: Optional shared pool. If None, one is created for this call

    Returns:
        The first trial with the highest score, in trial order

    Raises:
        RolloutTimeoutError: If the trials take longer than config.timeout_seconds
    """
    seeds = [rng.getrandbits(64) for _ in range(config.num_trials)]

    owns_executor = executor is None
    if executor is None:
        executor = make_executor(config)

    try:
        loop = asyncio.get_running_loop()
        futures = [
            loop.run_in_executor(executor, run_trial, game, config.trial_depth_max, seed)
            for seed in seeds
        ]
        try:
            results = await asyncio.wait_for(
                asyncio.gather(*futures),
                timeout=config.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise RolloutTimeoutError(
                f"{config.num_trials} trials did not finish within {config.timeout_seconds}s"
            ) from e
    finally:
        if owns_executor:
            executor.shutdown(wait=False, cancel_futures=True)

    # max() keeps the first of equal scores
    best = max(results, key=lambda r: r.score)
    logger.info(f"best is {best.action.action_type} with score {best.score} ({len(results)} trials)")
    return best
