"""
Hand inference for the player whose cards are hidden from themselves.

A player sees every hand except their own. To simulate forward they need a
concrete hand: any ordered selection of unseen cards (deck plus own hand)
that satisfies every belief slot. The pool is shuffled before the search so
that, among all satisfying hands, the one returned is effectively random.
"""

from __future__ import annotations

import random
from typing import Iterator

from .information import satisfies
from .models import Game, KnownCard, Player, UnknownCard


class InferenceContradictionError(ValueError):
    """No selection of unseen cards satisfies the player's beliefs."""


def unseen_cards(game: Game, player_id: int) -> list[KnownCard]:
    """Cards this player cannot see: the deck plus their own hand."""
    return list(game.deck.cards) + list(game.players[player_id].known_hand)


def iter_hands(
    constraints: tuple[UnknownCard, ...],
    pool: list[KnownCard],
) -> Iterator[tuple[KnownCard, ...]]:
    """
    Yield every ordered selection of len(constraints) cards from pool that
    satisfies the constraints slot by slot, in pool order.
    """
    def extend(partial: tuple[KnownCard, ...], remaining: list[KnownCard]) -> Iterator[tuple[KnownCard, ...]]:
        if len(partial) == len(constraints):
            yield partial
            return
        slot = constraints[len(partial)]
        for index, card in enumerate(remaining):
            if satisfies(card, slot):
                yield from extend(partial + (card,), remaining[:index] + remaining[index + 1:])

    return extend((), pool)


def guess_hand(player: Player, game: Game, rng: random.Random) -> tuple[KnownCard, ...]:
    """
    Pick a concrete hand for a player consistent with what they have been told.

    Raises:
        InferenceContradictionError: If the beliefs cannot be satisfied
    """
    pool = unseen_cards(game, player.id)
    rng.shuffle(pool)
    hand = next(iter_hands(player.unknown_hand, pool), None)
    if hand is None:
        raise InferenceContradictionError(
            f"No hand of {len(player.unknown_hand)} cards from {len(pool)} unseen "
            f"satisfies player {player.id}'s beliefs: "
            + ", ".join(str(u) for u in player.unknown_hand)
        )
    return hand


def substitute_guess(game: Game, rng: random.Random) -> Game:
    """
    Return a hypothetical game with a guessed hand for the current player.

    The real hand goes back into the deck, the guessed cards come out, and the
    deck is reshuffled. Beliefs are untouched.
    """
    player = game.current_player
    hand_guess = guess_hand(player, game, rng)
    deck_guess = game.deck.queue_cards(player.known_hand, rng).remove_cards(hand_guess)
    player_guess = player.model_copy(update={"known_hand": hand_guess})
    players = list(game.players)
    players[game.turn] = player_guess
    return game.replace(deck=deck_guess, players=tuple(players))
