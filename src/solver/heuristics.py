"""Heuristic evaluation of hands and the action-type decision table."""

from __future__ import annotations

from src.hanabi.models import (
    Game,
    NegativeColor,
    NegativeNumber,
    Player,
    PositiveColor,
    PositiveNumber,
    UnknownCard,
)

from .models import ActionTriple


# Confidence contributed by each kind of information atom
POSITIVE_WEIGHT = 0.5
NEGATIVE_WEIGHT = 0.1

# Certainty above which a play or discard counts as a sure thing
CONFIDENT = 0.9
# Certainty threshold used during the last round
LAST_ROUND_CONFIDENT = 0.5


def card_certainty(unknown_card: UnknownCard) -> float:
    """Confidence proxy in [0, 1] for one belief slot. Not a probability."""
    positives = 0
    negatives = 0
    for info in unknown_card.info:
        if isinstance(info, (PositiveNumber, PositiveColor)):
            positives += 1
        elif isinstance(info, (NegativeNumber, NegativeColor)):
            negatives += 1
        else:
            raise TypeError(f"Unknown information type: {type(info)}")
    # Counted, not summed over the set, so set iteration order cannot change the float
    total = positives * POSITIVE_WEIGHT + negatives * NEGATIVE_WEIGHT
    return min(total, 1.0)


def hand_certainty(unknown_hand: tuple[UnknownCard, ...]) -> list[float]:
    return [card_certainty(u) for u in unknown_hand]


def play_card_scores(player: Player, game: Game) -> list[int]:
    """
    Score each slot for playing.

    0: illegal play, 1: legal play, 2: legal play of a 5.
    """
    scores = []
    for card in player.known_hand:
        if game.is_play_legal(card):
            scores.append(2 if card.number == 5 else 1)
        else:
            scores.append(0)
    return scores


def discard_card_scores(player: Player, game: Game) -> list[int]:
    """
    Score each slot for discarding.

    2: already played, safe to lose. 0: still needed and no other copy is
    live. 1: still needed but replaceable.

    Live copies are looked for in the deck and in the hands of everyone but
    the current player, whichever hand is being scored.
    """
    live_cards = list(game.deck.cards)
    for other in game.players:
        if other.id != game.current_player.id:
            live_cards.extend(other.known_hand)

    scores = []
    for card in player.known_hand:
        good_discard = game.fireworks[card.color].top_number >= card.number
        if good_discard:
            scores.append(2)
        elif not any(card.same_face(live) for live in live_cards):
            scores.append(0)
        else:
            scores.append(1)
    return scores


def probability_play_card_good(player: Player, game: Game) -> list[float]:
    return [
        card_certainty(player.unknown_hand[index]) if score > 0 else 0.0
        for index, score in enumerate(play_card_scores(player, game))
    ]


def probability_discard_card_good(player: Player, game: Game) -> list[float]:
    return [
        card_certainty(player.unknown_hand[index]) if score > 0 else 0.0
        for index, score in enumerate(discard_card_scores(player, game))
    ]


def action_probabilities(game: Game) -> ActionTriple:
    """
    The strategy: a hand-tuned ActionTriple for each situation in the game.

    Hinting is off once info tokens run out or the deck is empty. Discarding
    is favored on the last fuse, playing when a safe play looks certain.
    """
    player = game.current_player
    p_play_good = max(probability_play_card_good(player, game), default=0.0)
    p_discard_good = max(probability_discard_card_good(player, game), default=0.0)

    if game.last_round:
        others_left = [p for p in game.players if p.id != player.id and not p.last_turn]
        if not others_left:
            return ActionTriple(p_give_information=0, p_discard_card=.5, p_play_card=.5)
        if p_discard_good < LAST_ROUND_CONFIDENT and p_play_good < LAST_ROUND_CONFIDENT:
            return ActionTriple(p_give_information=0, p_discard_card=.5, p_play_card=.5)
        return ActionTriple(p_give_information=0, p_discard_card=.3, p_play_card=.7)

    if game.num_fuse_tokens == 1:
        if game.num_info_tokens == 0:
            return ActionTriple(p_give_information=0, p_discard_card=.95, p_play_card=.05)
        if p_play_good < CONFIDENT:
            return ActionTriple(p_give_information=.59, p_discard_card=.4, p_play_card=.01)
        return ActionTriple(p_give_information=.05, p_discard_card=.05, p_play_card=.9)

    if game.num_info_tokens == 0:
        if p_discard_good < CONFIDENT:
            if p_play_good < CONFIDENT:
                return ActionTriple(p_give_information=0, p_discard_card=.8, p_play_card=.2)
            return ActionTriple(p_give_information=0, p_discard_card=.1, p_play_card=.9)
        if p_play_good < CONFIDENT:
            return ActionTriple(p_give_information=0, p_discard_card=.99, p_play_card=.01)
        return ActionTriple(p_give_information=0, p_discard_card=.3, p_play_card=.7)

    if p_discard_good < CONFIDENT:
        if p_play_good < CONFIDENT:
            return ActionTriple(p_give_information=.8, p_discard_card=.15, p_play_card=.05)
        return ActionTriple(p_give_information=.25, p_discard_card=.05, p_play_card=.7)
    if p_play_good < CONFIDENT:
        return ActionTriple(p_give_information=.15, p_discard_card=.8, p_play_card=.05)
    return ActionTriple(p_give_information=.1, p_discard_card=.45, p_play_card=.45)
