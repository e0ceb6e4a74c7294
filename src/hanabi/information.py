"""Information fusion: folding hints into a player's beliefs about their hand."""

from __future__ import annotations

from .models import (
    Information,
    KnownCard,
    NegativeColor,
    NegativeNumber,
    Player,
    PositiveColor,
    PositiveInformation,
    PositiveNumber,
    UnknownCard,
)


def satisfies(card: KnownCard, belief: UnknownCard) -> bool:
    """Check a concrete card against every atom in a belief set."""
    for info in belief.info:
        if isinstance(info, PositiveNumber):
            ok = card.number == info.number
        elif isinstance(info, NegativeNumber):
            ok = card.number != info.number
        elif isinstance(info, PositiveColor):
            ok = card.color == info.color
        elif isinstance(info, NegativeColor):
            ok = card.color != info.color
        else:
            raise TypeError(f"Unknown information type: {type(info)}")
        if not ok:
            return False
    return True


def _minimize(info: frozenset[Information]) -> frozenset[Information]:
    """Drop negative facts made redundant by a positive fact of the same kind."""
    has_number = any(isinstance(i, PositiveNumber) for i in info)
    has_color = any(isinstance(i, PositiveColor) for i in info)
    return frozenset(
        i for i in info
        if not (isinstance(i, NegativeNumber) and has_number)
        and not (isinstance(i, NegativeColor) and has_color)
    )


def combine_information(
    unknown_hand: tuple[UnknownCard, ...],
    new_hand_info: tuple[Information, ...] | list[Information],
) -> tuple[UnknownCard, ...]:
    """
    Merge one new atom per slot into the existing beliefs.

    Args:
        unknown_hand: Current beliefs, one per hand slot
        new_hand_info: New information, index-aligned with unknown_hand

    Returns:
        New beliefs with the minimal set of information per slot
    """
    if len(new_hand_info) != len(unknown_hand):
        raise ValueError(
            f"Got {len(new_hand_info)} information atoms for a hand of {len(unknown_hand)}"
        )
    return tuple(
        UnknownCard(info=_minimize(belief.info | {info}))
        for belief, info in zip(unknown_hand, new_hand_info)
    )


def build_information_vector(player: Player, new_info: PositiveInformation) -> tuple[Information, ...]:
    """
    Expand one positive fact into the per-slot vector for a player's hand.

    Slots matching the fact get the positive atom, the rest get its negation.
    Needs the true hand, so it cannot be used by the player on themselves.
    """
    vector: list[Information] = []
    for card in player.known_hand:
        if isinstance(new_info, PositiveNumber):
            if card.number == new_info.number:
                vector.append(new_info)
            else:
                vector.append(NegativeNumber(number=new_info.number))
        elif isinstance(new_info, PositiveColor):
            if card.color == new_info.color:
                vector.append(new_info)
            else:
                vector.append(NegativeColor(color=new_info.color))
        else:
            raise TypeError(f"Expected positive information, got {type(new_info)}")
    return tuple(vector)
