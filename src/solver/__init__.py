"""Monte Carlo Hanabi solver: heuristics, policy and parallel rollouts."""

from .config import SolverConfig
from .models import (
    ActionTriple,
    TrialResult,
    TurnLog,
    GameRecord,
)
from .heuristics import (
    card_certainty,
    hand_certainty,
    play_card_scores,
    discard_card_scores,
    action_probabilities,
)
from .policy import (
    pick_action,
    build_give_information,
    build_discard_card,
    build_play_card,
)
from .rollout import (
    RolloutTimeoutError,
    run_trial,
    choose_action,
)
from .orchestrator import (
    run_turn,
    run_game,
)
from .metrics import (
    compute_game_metrics,
    score_category,
)

__all__ = [
    # Config
    "SolverConfig",
    # Models
    "ActionTriple",
    "TrialResult",
    "TurnLog",
    "GameRecord",
    # Heuristics
    "card_certainty",
    "hand_certainty",
    "play_card_scores",
    "discard_card_scores",
    "action_probabilities",
    # Policy
    "pick_action",
    "build_give_information",
    "build_discard_card",
    "build_play_card",
    # Rollouts
    "RolloutTimeoutError",
    "run_trial",
    "choose_action",
    # Orchestration
    "run_turn",
    "run_game",
    # Metrics
    "compute_game_metrics",
    "score_category",
]
