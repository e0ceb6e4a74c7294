"""Turning heuristic scores into concrete actions."""

from __future__ import annotations

import random

from src.hanabi.information import build_information_vector, combine_information
from src.hanabi.models import (
    COLORS,
    NUMBERS,
    Action,
    DiscardCard,
    Game,
    GiveInformation,
    PlayCard,
    Player,
    PositiveColor,
    PositiveInformation,
    PositiveNumber,
)

from .heuristics import (
    action_probabilities,
    discard_card_scores,
    hand_certainty,
    play_card_scores,
    probability_discard_card_good,
    probability_play_card_good,
)


CANDIDATE_HINTS: list[PositiveInformation] = (
    [PositiveNumber(number=n) for n in NUMBERS]
    + [PositiveColor(color=c) for c in COLORS]
)


def maximize_hand_certainty(player: Player) -> PositiveInformation:
    """The positive fact that would most raise this player's summed certainty."""
    best_info = CANDIDATE_HINTS[0]
    best_total = None
    for info in CANDIDATE_HINTS:
        new_hand = combine_information(player.unknown_hand, build_information_vector(player, info))
        total = sum(hand_certainty(new_hand))
        if best_total is None or total > best_total:
            best_info, best_total = info, total
    return best_info


def build_give_information(game: Game) -> GiveInformation:
    """
    Hint the player with the widest gap between what they could do and what
    they know.
    """
    current = game.current_player
    candidates = [p for p in game.players if p.id != current.id and not p.last_turn]
    if not candidates:
        raise ValueError("No player left to give information to")

    def need(player: Player) -> float:
        amount_of_good = (
            sum(probability_play_card_good(player, game))
            + sum(probability_discard_card_good(player, game))
        )
        confidence = max(sum(hand_certainty(player.unknown_hand)), .01)
        return amount_of_good / confidence

    # max() keeps the first of equal values
    recipient = max(candidates, key=need)
    return GiveInformation(
        player=current.id,
        to_player=recipient.id,
        hand_info=build_information_vector(recipient, maximize_hand_certainty(recipient)),
    )


def build_discard_card(game: Game) -> DiscardCard:
    scores = discard_card_scores(game.current_player, game)
    return DiscardCard(player=game.turn, card_index=scores.index(max(scores)))


def build_play_card(game: Game) -> PlayCard:
    scores = play_card_scores(game.current_player, game)
    return PlayCard(player=game.turn, card_index=scores.index(max(scores)))


def pick_action(game: Game, rng: random.Random) -> Action:
    """Sample an action type from the decision table, then build the action."""
    p = action_probabilities(game)
    r = rng.random()
    if r < p.p_give_information:
        return build_give_information(game)
    if r < p.p_give_information + p.p_discard_card:
        return build_discard_card(game)
    return build_play_card(game)
