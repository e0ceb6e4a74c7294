#!/usr/bin/env python3
"""Play one Hanabi game with the Monte Carlo solver, printing progress each turn."""

import asyncio
import argparse
import logging
from datetime import datetime
from dotenv import load_dotenv
from pathlib import Path

load_dotenv(Path(__file__).parent.parent / ".env")

from src.solver import SolverConfig, run_game


# ANSI colors
class Colors:
    RED = "\033[91m"
    GREEN = "\033[92m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def format_status(data: dict) -> str:
    return (
        f"Score: {data['score']}, Info: {data['info_tokens']}, "
        f"Fuses: {data['fuse_tokens']}, Deck: {data['deck_remaining']}"
    )


def format_action(action: dict) -> str:
    if action["action_type"] == "give_information":
        return f"player {action['player']} informs player {action['to_player']}"
    verb = "plays" if action["action_type"] == "play" else "discards"
    return f"player {action['player']} {verb} slot {action['card_index']}"


def print_event(event: str, data: dict, quiet: bool = False) -> None:
    """Print one orchestrator event."""
    if event == "init":
        print(format_status(data))
    elif event == "turn":
        if quiet:
            return
        fuse_color = Colors.RED if data["fuse_tokens"] == 1 else ""
        print(
            f"{Colors.GRAY}[{data['turn_number']:3d}]{Colors.RESET} "
            f"{format_action(data['action'])} "
            f"{Colors.GRAY}(best trial {data['trial_score']}){Colors.RESET}"
        )
        print(f"      {fuse_color}{format_status(data)}{Colors.RESET}")
    elif event == "done":
        metrics = data["metrics"]
        print(f"\n{Colors.BOLD}{'=' * 60}{Colors.RESET}")
        print(f"{Colors.BOLD}GAME OVER{Colors.RESET} ({data['game_over_reason']})")
        print(f"{'=' * 60}")
        print(format_status(data))
        print(f"Turns: {data['total_turns']}")
        print(f"Hints: {metrics['hints_given']} | Plays: {metrics['plays_successful']}/{metrics['plays_attempted']} | Discards: {metrics['discards']}")
        print(f"Fuses lost: {metrics['fuses_lost']} | Stacks completed: {metrics['stacks_completed']}")
        print(f"Category: {metrics['score_category']}")


async def main():
    parser = argparse.ArgumentParser(
        description="Play Hanabi with a Monte Carlo rollout solver",
    )
    parser.add_argument("--players", type=int, default=None, help="Number of players (default: 4)")
    parser.add_argument("--trials", type=int, default=None, help="Rollouts per decision (default: 500)")
    parser.add_argument("--depth", type=int, default=None, help="Max simulated turns per rollout (default: 15)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--workers", type=int, default=None, help="Worker pool size")
    parser.add_argument("--executor", choices=["process", "thread"], default=None, help="Worker pool type")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print the summary")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    # Set up logging
    if args.quiet:
        logging.basicConfig(level=logging.WARNING)
    elif args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    # Flags win over environment defaults
    overrides = {
        "num_players": args.players,
        "num_trials": args.trials,
        "trial_depth_max": args.depth,
        "seed": args.seed,
        "max_workers": args.workers,
        "executor": args.executor,
    }
    config = SolverConfig(**{k: v for k, v in overrides.items() if v is not None})

    print(f"{Colors.BOLD}{'=' * 60}{Colors.RESET}")
    print(f"{Colors.BOLD}HANABI SOLVER{Colors.RESET}")
    print(f"{'=' * 60}")
    print(f"Players: {config.num_players}")
    print(f"Trials per turn: {config.num_trials} (depth {config.trial_depth_max})")
    print(f"Executor: {config.executor} (workers: {config.max_workers or 'default'})")
    print(f"Seed: {config.seed if config.seed is not None else 'random'}")
    print(f"{'=' * 60}\n")

    start_time = datetime.now()
    _, record = await run_game(
        config,
        emit_fn=lambda event, data: print_event(event, data, quiet=args.quiet),
    )
    elapsed = datetime.now() - start_time

    print(f"Time elapsed: {elapsed}")
    print(f"{Colors.GREEN}Final score: {record.final_score}{Colors.RESET}")


if __name__ == "__main__":
    asyncio.run(main())
