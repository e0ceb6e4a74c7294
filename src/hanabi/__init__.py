"""Hanabi game model: cards, information, immutable game state and transitions."""

from .models import (
    COLORS,
    NUMBERS,
    CARD_COUNTS,
    MAX_INFO_TOKENS,
    MAX_FUSE_TOKENS,
    Color,
    PositiveNumber,
    PositiveColor,
    NegativeNumber,
    NegativeColor,
    Information,
    PositiveInformation,
    KnownCard,
    UnknownCard,
    Deck,
    Player,
    Firework,
    GiveInformation,
    DiscardCard,
    PlayCard,
    Action,
    HanabiConfig,
    Game,
)
from .information import (
    combine_information,
    build_information_vector,
    satisfies,
)
from .inference import (
    InferenceContradictionError,
    guess_hand,
    iter_hands,
    substitute_guess,
    unseen_cards,
)
from .game import (
    create_game,
    apply_action,
    game_over_reason,
)

__all__ = [
    # Models
    "COLORS",
    "NUMBERS",
    "CARD_COUNTS",
    "MAX_INFO_TOKENS",
    "MAX_FUSE_TOKENS",
    "Color",
    "PositiveNumber",
    "PositiveColor",
    "NegativeNumber",
    "NegativeColor",
    "Information",
    "PositiveInformation",
    "KnownCard",
    "UnknownCard",
    "Deck",
    "Player",
    "Firework",
    "GiveInformation",
    "DiscardCard",
    "PlayCard",
    "Action",
    "HanabiConfig",
    "Game",
    # Information
    "combine_information",
    "build_information_vector",
    "satisfies",
    # Inference
    "InferenceContradictionError",
    "guess_hand",
    "iter_hands",
    "substitute_guess",
    "unseen_cards",
    # Game
    "create_game",
    "apply_action",
    "game_over_reason",
]
