"""Configuration for solver runs."""

from __future__ import annotations

import os
from typing import Annotated, Literal

from pydantic import BaseModel, Field


ExecutorKind = Literal["process", "thread"]


def _env_int(name: str, default: int) -> int:
    """Read an integer default from the environment."""
    value = os.environ.get(name)
    if value:
        return int(value)
    return default


def _env_optional_int(name: str) -> int | None:
    value = os.environ.get(name)
    if value:
        return int(value)
    return None


def _env_executor() -> str:
    return os.environ.get("HANABI_EXECUTOR") or "process"


class SolverConfig(BaseModel):
    """Configuration for the Monte Carlo solver."""

    model_config = {"validate_default": True}

    # Game
    num_players: int = Field(default_factory=lambda: _env_int("HANABI_NUM_PLAYERS", 4), ge=2, le=5)

    # Rollouts per real turn, and how far each one looks ahead
    num_trials: int = Field(default_factory=lambda: _env_int("HANABI_NUM_TRIALS", 500), gt=0)
    trial_depth_max: int = Field(default_factory=lambda: _env_int("HANABI_TRIAL_DEPTH", 15), gt=0)

    # Whole decision round fails if trials take longer than this
    timeout_seconds: float = Field(default=3600.0, gt=0)

    # Worker pool
    executor: ExecutorKind = Field(default_factory=_env_executor)
    max_workers: Annotated[int, Field(gt=0)] | None = Field(
        default_factory=lambda: _env_optional_int("HANABI_MAX_WORKERS")
    )

    # None draws fresh entropy
    seed: int | None = None
