"""Tests for hand inference."""

import random
from collections import Counter

import pytest

from src.hanabi.models import (
    COLORS,
    Deck,
    Firework,
    Game,
    HanabiConfig,
    KnownCard,
    NegativeNumber,
    Player,
    PositiveColor,
    PositiveNumber,
    UnknownCard,
)
from src.hanabi.game import create_game
from src.hanabi.information import build_information_vector, combine_information, satisfies
from src.hanabi.inference import (
    InferenceContradictionError,
    guess_hand,
    iter_hands,
    substitute_guess,
    unseen_cards,
)


def card(number, color, card_id):
    return KnownCard(number=number, color=color, id=card_id)


def belief(*atoms):
    return UnknownCard(info=frozenset(atoms))


def make_game(own_hand, own_beliefs, deck, other_hand):
    players = (
        Player(id=0, known_hand=tuple(own_hand), unknown_hand=tuple(own_beliefs)),
        Player(id=1, known_hand=tuple(other_hand), unknown_hand=tuple(UnknownCard() for _ in other_hand)),
    )
    return Game(
        deck=Deck(cards=tuple(deck)),
        players=players,
        fireworks={c: Firework(color=c) for c in COLORS},
    )


def hint_everything(player):
    """Tell the player every true number and color fact about their hand."""
    beliefs = player.unknown_hand
    for known in player.known_hand:
        for fact in (PositiveNumber(number=known.number), PositiveColor(color=known.color)):
            beliefs = combine_information(beliefs, build_information_vector(player, fact))
    return player.model_copy(update={"unknown_hand": beliefs})


OWN_HAND = [card(1, "red", 1), card(2, "blue", 2), card(3, "green", 3), card(4, "white", 4)]
OTHER_HAND = [card(1, "yellow", 5), card(2, "yellow", 6), card(3, "yellow", 7), card(4, "yellow", 8)]
DECK = [card(5, "yellow", 9), card(1, "blue", 10), card(2, "white", 11), card(3, "red", 12)]


class TestIterHands:
    """Tests for enumerating consistent hands."""

    def test_unconstrained_takes_pool_order(self):
        """With no beliefs the first hand is the front of the pool."""
        pool = OWN_HAND + DECK
        first = next(iter_hands(tuple(UnknownCard() for _ in range(4)), pool))
        assert first == tuple(OWN_HAND)

    def test_order_follows_slots(self):
        """Slot constraints pick the order, not just the cards."""
        constraints = (belief(PositiveNumber(number=3)), belief(PositiveNumber(number=1)))
        pool = [card(1, "red", 1), card(2, "red", 2), card(3, "red", 3)]

        hands = list(iter_hands(constraints, pool))
        assert hands == [(pool[2], pool[0])]

    def test_all_orderings_enumerated(self):
        """Unconstrained pairs from three cards give all six orderings."""
        pool = [card(1, "red", 1), card(2, "red", 2), card(3, "red", 3)]
        hands = list(iter_hands((UnknownCard(), UnknownCard()), pool))
        assert len(hands) == 6
        assert len(set(hands)) == 6

    def test_empty_hand(self):
        """A player with no cards has exactly one (empty) hand."""
        assert list(iter_hands((), OWN_HAND)) == [()]


class TestGuessHand:
    """Tests for guessing the current player's hand."""

    def test_fully_hinted_hand_recovered_exactly(self):
        """With every fact known the guess is the true hand in order."""
        game = make_game(OWN_HAND, [UnknownCard()] * 4, DECK, OTHER_HAND)
        player = hint_everything(game.players[0])

        guess = guess_hand(player, game, random.Random(3))
        assert guess == tuple(OWN_HAND)

    @pytest.mark.parametrize("seed", range(5))
    def test_round_trip_multiset(self, seed):
        """With only the hand to choose from, any guess is a reordering of it."""
        game = make_game(OWN_HAND, [UnknownCard()] * 4, [], OTHER_HAND)
        player = game.players[0]
        beliefs = combine_information(
            player.unknown_hand,
            build_information_vector(player, PositiveNumber(number=1)),
        )
        player = player.model_copy(update={"unknown_hand": beliefs})

        guess = guess_hand(player, game, random.Random(seed))
        assert Counter(c.id for c in guess) == Counter(c.id for c in OWN_HAND)
        assert guess[0] == OWN_HAND[0]

    def test_guess_satisfies_beliefs(self):
        """Every guessed card satisfies its slot."""
        beliefs = [
            belief(PositiveColor(color="red")),
            belief(NegativeNumber(number=1)),
            UnknownCard(),
            belief(PositiveNumber(number=4)),
        ]
        game = make_game(OWN_HAND, beliefs, DECK, OTHER_HAND)
        guess = guess_hand(game.players[0], game, random.Random(0))

        for known, unknown in zip(guess, beliefs):
            assert satisfies(known, unknown)

    def test_guess_comes_from_unseen_cards(self):
        """Other players' cards are never guessed."""
        game = make_game(OWN_HAND, [UnknownCard()] * 4, DECK, OTHER_HAND)
        unseen_ids = {c.id for c in unseen_cards(game, 0)}

        for seed in range(10):
            guess = guess_hand(game.players[0], game, random.Random(seed))
            assert {c.id for c in guess} <= unseen_ids

    def test_same_seed_same_guess(self):
        game = create_game(HanabiConfig(seed=11))
        player = game.players[0]
        assert guess_hand(player, game, random.Random(4)) == guess_hand(player, game, random.Random(4))

    def test_contradiction_raises(self):
        """Beliefs no unseen card satisfies are an inference contradiction."""
        beliefs = [belief(PositiveNumber(number=5), PositiveColor(color="red"))] + [UnknownCard()] * 3
        game = make_game(OWN_HAND, beliefs, DECK, OTHER_HAND)

        with pytest.raises(InferenceContradictionError):
            guess_hand(game.players[0], game, random.Random(0))

    def test_contradiction_is_value_error(self):
        assert issubclass(InferenceContradictionError, ValueError)


class TestSubstituteGuess:
    """Tests for building a hypothetical game around a guess."""

    def test_cards_conserved(self):
        """Deck plus current hand hold the same cards before and after."""
        game = create_game(HanabiConfig(seed=2))
        guessed = substitute_guess(game, random.Random(9))

        before = sorted(c.id for c in unseen_cards(game, 0))
        after = sorted(c.id for c in unseen_cards(guessed, 0))
        assert before == after
        assert len(guessed.deck) == len(game.deck)

    def test_only_current_player_changes(self):
        """Other hands, beliefs and counters are untouched."""
        game = create_game(HanabiConfig(seed=2))
        guessed = substitute_guess(game, random.Random(9))

        assert guessed.players[1:] == game.players[1:]
        assert guessed.players[0].unknown_hand == game.players[0].unknown_hand
        assert guessed.num_info_tokens == game.num_info_tokens
        assert guessed.turn == game.turn

    def test_real_game_untouched(self):
        """The real game does not see the guess."""
        game = create_game(HanabiConfig(seed=2))
        before = game.model_dump()
        substitute_guess(game, random.Random(9))

        assert game.model_dump() == before
