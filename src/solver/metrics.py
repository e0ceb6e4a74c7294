"""Metrics calculation for solved Hanabi games."""

from __future__ import annotations

from typing import Any

from src.hanabi.models import MAX_FUSE_TOKENS, DiscardCard, GiveInformation, PlayCard

from .models import GameRecord


MAX_SCORE = 25


def compute_game_metrics(record: GameRecord) -> dict[str, Any]:
    """
    Compute metrics for a completed game.

    Returns dict with:
    - score: Final score (0-25)
    - score_percentage: Score as percentage of max (25)
    - total_turns: Number of turns played
    - hints_given: Total give-information actions
    - plays_attempted / plays_successful / plays_failed
    - discards: Total discard actions
    - hint_efficiency: Successful plays per hint given
    - play_success_rate: Successful plays per play attempted
    - fuses_lost: Number of fuse tokens lost
    - mean_trial_score: Average best simulated score across turns
    - per_player: Per-player breakdown
    """
    turns = record.turns

    hints_given = 0
    plays_attempted = 0
    plays_successful = 0
    plays_failed = 0
    discards = 0

    per_player: dict[int, dict[str, int]] = {}

    previous_score = 0
    for turn in turns:
        pid = turn.player_id
        if pid not in per_player:
            per_player[pid] = {
                "hints": 0,
                "plays": 0,
                "plays_successful": 0,
                "plays_failed": 0,
                "discards": 0,
            }

        action = turn.action
        if isinstance(action, GiveInformation):
            hints_given += 1
            per_player[pid]["hints"] += 1
        elif isinstance(action, PlayCard):
            plays_attempted += 1
            per_player[pid]["plays"] += 1
            if turn.score_after > previous_score:
                plays_successful += 1
                per_player[pid]["plays_successful"] += 1
            else:
                plays_failed += 1
                per_player[pid]["plays_failed"] += 1
        elif isinstance(action, DiscardCard):
            discards += 1
            per_player[pid]["discards"] += 1
        previous_score = turn.score_after

    hint_efficiency = plays_successful / hints_given if hints_given > 0 else 0.0
    play_success_rate = plays_successful / plays_attempted if plays_attempted > 0 else 0.0
    fuses_left = turns[-1].fuse_tokens_after if turns else MAX_FUSE_TOKENS
    mean_trial_score = sum(t.trial_score for t in turns) / len(turns) if turns else 0.0

    return {
        "score": record.final_score,
        "score_percentage": round(record.final_score / MAX_SCORE * 100, 1),
        "max_possible_score": MAX_SCORE,
        "score_category": score_category(record.final_score),
        "total_turns": len(turns),
        "game_over_reason": record.game_over_reason,

        # Action counts
        "hints_given": hints_given,
        "plays_attempted": plays_attempted,
        "plays_successful": plays_successful,
        "plays_failed": plays_failed,
        "discards": discards,

        # Derived metrics
        "hint_efficiency": round(hint_efficiency, 3),
        "play_success_rate": round(play_success_rate, 3),
        "fuses_lost": MAX_FUSE_TOKENS - fuses_left,
        "mean_trial_score": round(mean_trial_score, 2),

        # Per-color breakdown
        "stacks_completed": sum(1 for v in record.final_fireworks.values() if v == 5),
        "per_color": dict(record.final_fireworks),

        "per_player": per_player,
    }


def score_category(score: int) -> str:
    """Categorize a Hanabi score."""
    if score == 25:
        return "perfect"
    elif score >= 21:
        return "excellent"
    elif score >= 16:
        return "good"
    elif score >= 11:
        return "mediocre"
    elif score >= 6:
        return "poor"
    else:
        return "terrible"
