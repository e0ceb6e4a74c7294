"""Tests for the heuristic evaluator and the action decision table."""

import pytest

from src.hanabi.models import (
    COLORS,
    Deck,
    Firework,
    Game,
    KnownCard,
    NegativeColor,
    NegativeNumber,
    Player,
    PositiveColor,
    PositiveNumber,
    UnknownCard,
)
from src.solver.heuristics import (
    action_probabilities,
    card_certainty,
    discard_card_scores,
    hand_certainty,
    play_card_scores,
    probability_discard_card_good,
    probability_play_card_good,
)


def card(number, color, card_id):
    return KnownCard(number=number, color=color, id=card_id)


def belief(*atoms):
    return UnknownCard(info=frozenset(atoms))


CERTAIN_RED_ONE = belief(PositiveNumber(number=1), PositiveColor(color="red"))

HAND_0 = [card(1, "red", 1), card(3, "blue", 2), card(2, "green", 3), card(4, "white", 4)]
HAND_1 = [card(1, "yellow", 5), card(2, "yellow", 6), card(3, "yellow", 7), card(4, "yellow", 8)]


def make_game(
    hands=(HAND_0, HAND_1),
    beliefs=None,
    deck=(card(5, "yellow", 9),),
    info=8,
    fuse=3,
    tops=None,
    last_turns=None,
):
    players = []
    for i, hand in enumerate(hands):
        unknown = tuple(UnknownCard() for _ in hand)
        if beliefs and i in beliefs:
            unknown = tuple(beliefs[i])
        players.append(Player(
            id=i,
            known_hand=tuple(hand),
            unknown_hand=unknown,
            last_turn=bool(last_turns and last_turns[i]),
        ))
    fireworks = {}
    for color in COLORS:
        top = (tops or {}).get(color, 0)
        fireworks[color] = Firework(
            color=color,
            cards=tuple(card(n, color, 500 + COLORS.index(color) * 10 + n) for n in range(1, top + 1)),
        )
    return Game(
        deck=Deck(cards=tuple(deck)),
        players=tuple(players),
        num_info_tokens=info,
        num_fuse_tokens=fuse,
        fireworks=fireworks,
    )


def certain_slot_zero():
    return {0: [CERTAIN_RED_ONE, UnknownCard(), UnknownCard(), UnknownCard()]}


def as_tuple(triple):
    return (triple.p_give_information, triple.p_discard_card, triple.p_play_card)


class TestCertainty:
    """Tests for the per-card confidence proxy."""

    def test_empty_belief(self):
        assert card_certainty(UnknownCard()) == 0.0

    def test_positive_fact(self):
        assert card_certainty(belief(PositiveNumber(number=2))) == pytest.approx(0.5)

    def test_negative_facts(self):
        assert card_certainty(belief(NegativeNumber(number=2), NegativeColor(color="red"))) == pytest.approx(0.2)

    def test_mixed(self):
        assert card_certainty(belief(PositiveColor(color="red"), NegativeNumber(number=2))) == pytest.approx(0.6)

    def test_independent_of_set_order(self):
        """Same atoms give the bit-identical value however the set iterates."""
        atoms = [PositiveNumber(number=1), NegativeColor(color="red"),
                 NegativeColor(color="blue"), NegativeColor(color="green")]
        expected = card_certainty(belief(*atoms))

        assert card_certainty(belief(*reversed(atoms))) == expected
        assert card_certainty(UnknownCard(info=frozenset(atoms[1:]) | {atoms[0]})) == expected
        assert expected == 1 * 0.5 + 3 * 0.1

    def test_capped_at_one(self):
        atoms = belief(PositiveNumber(number=1), PositiveColor(color="red"), NegativeNumber(number=2))
        assert card_certainty(atoms) == 1.0

    def test_hand_certainty(self):
        hand = (CERTAIN_RED_ONE, UnknownCard(), belief(NegativeNumber(number=5)))
        assert hand_certainty(hand) == pytest.approx([1.0, 0.0, 0.1])


class TestPlayScores:
    """Tests for play scoring."""

    def test_scores(self):
        hand = [card(3, "red", 1), card(5, "red", 2), card(1, "blue", 3), card(2, "blue", 4)]
        game = make_game(hands=(hand, HAND_1), tops={"red": 2})
        assert play_card_scores(game.players[0], game) == [1, 0, 1, 0]

    def test_five_scores_two(self):
        hand = [card(5, "red", 1), card(1, "red", 2), card(1, "blue", 3), card(2, "blue", 4)]
        game = make_game(hands=(hand, HAND_1), tops={"red": 4})
        assert play_card_scores(game.players[0], game) == [2, 0, 1, 0]


class TestDiscardScores:
    """Tests for discard scoring."""

    def test_already_played_is_safe(self):
        game = make_game(tops={"red": 2})
        assert discard_card_scores(game.players[0], game)[0] == 2

    def test_last_copy_is_unsafe(self):
        """No copy in the deck or other hands."""
        game = make_game()
        assert discard_card_scores(game.players[0], game) == [0, 0, 0, 0]

    def test_copy_in_deck_is_replaceable(self):
        game = make_game(deck=(card(3, "blue", 20),))
        assert discard_card_scores(game.players[0], game) == [0, 1, 0, 0]

    def test_copy_in_other_hand_is_replaceable(self):
        hand_1 = [card(4, "white", 30)] + HAND_1[1:]
        game = make_game(hands=(HAND_0, hand_1))
        assert discard_card_scores(game.players[0], game) == [0, 0, 0, 1]

    def test_copy_in_current_hand_does_not_count(self):
        """Live copies are only looked for outside the current player's hand."""
        hand = [card(3, "blue", 1), card(3, "blue", 2), card(2, "green", 3), card(4, "white", 4)]
        game = make_game(hands=(hand, HAND_1))
        assert discard_card_scores(game.players[0], game) == [0, 0, 0, 0]

    def test_probability_good(self):
        game = make_game(beliefs=certain_slot_zero(), deck=(card(1, "red", 20),))
        assert probability_play_card_good(game.players[0], game) == [1.0, 0.0, 0.0, 0.0]
        assert probability_discard_card_good(game.players[0], game) == [1.0, 0.0, 0.0, 0.0]


class TestActionProbabilities:
    """Tests for the decision table."""

    @pytest.mark.parametrize("kwargs,expected", [
        # Last round, nobody else left to act
        (dict(deck=(), last_turns=[False, True]), (0, .5, .5)),
        # Last round, others left, nothing certain
        (dict(deck=()), (0, .5, .5)),
        # Last round, others left, a certain play
        (dict(deck=(), beliefs=certain_slot_zero()), (0, .3, .7)),
        # Last fuse, no info tokens
        (dict(fuse=1, info=0), (0, .95, .05)),
        # Last fuse, uncertain play
        (dict(fuse=1), (.59, .4, .01)),
        # Last fuse, certain play
        (dict(fuse=1, beliefs=certain_slot_zero()), (.05, .05, .9)),
        # No info tokens, nothing certain
        (dict(info=0), (0, .8, .2)),
        # No info tokens, certain play only
        (dict(info=0, beliefs=certain_slot_zero()), (0, .1, .9)),
        # No info tokens, certain discard only
        (dict(info=0, beliefs=certain_slot_zero(), tops={"red": 1}), (0, .99, .01)),
        # No info tokens, certain play and discard
        (dict(info=0, beliefs=certain_slot_zero(), deck=(card(1, "red", 20),)), (0, .3, .7)),
        # Tokens available, nothing certain
        (dict(), (.8, .15, .05)),
        # Tokens available, certain play only
        (dict(beliefs=certain_slot_zero()), (.25, .05, .7)),
        # Tokens available, certain discard only
        (dict(beliefs=certain_slot_zero(), tops={"red": 1}), (.15, .8, .05)),
        # Tokens available, certain play and discard
        (dict(beliefs=certain_slot_zero(), deck=(card(1, "red", 20),)), (.1, .45, .45)),
    ])
    def test_table(self, kwargs, expected):
        triple = action_probabilities(make_game(**kwargs))
        assert as_tuple(triple) == pytest.approx(expected)
        assert sum(as_tuple(triple)) == pytest.approx(1.0)

    def test_no_hints_without_tokens(self):
        """Hinting is off whenever info tokens are exhausted."""
        for fuse in (1, 2, 3):
            triple = action_probabilities(make_game(info=0, fuse=fuse))
            assert triple.p_give_information == 0

    def test_no_hints_in_last_round(self):
        triple = action_probabilities(make_game(deck=(), beliefs=certain_slot_zero()))
        assert triple.p_give_information == 0
