"""Data models for the Monte Carlo solver."""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.hanabi.models import Action, Color


class ActionTriple(BaseModel):
    """Probabilities of each action type for the current player. Sums to 1."""

    model_config = {"frozen": True}

    p_give_information: float
    p_discard_card: float
    p_play_card: float


class TrialResult(BaseModel):
    """Outcome of one simulated rollout."""

    model_config = {"frozen": True}

    score: int
    action: Action  # First action taken in the rollout


class TurnLog(BaseModel):
    """Log of a single real turn."""

    turn_number: int
    player_id: int
    action: Action
    trial_score: int  # Best simulated score that picked this action

    # State snapshot after action
    info_tokens_after: int
    fuse_tokens_after: int
    score_after: int
    deck_size_after: int


class GameRecord(BaseModel):
    """In-memory record of a solved game."""

    game_id: str
    num_players: int
    seed: int | None = None
    turns: list[TurnLog] = Field(default_factory=list)
    final_score: int = 0
    final_fireworks: dict[Color, int] = Field(default_factory=dict)
    game_over_reason: str = "unknown"
