"""Data models for the Hanabi game engine."""

from __future__ import annotations

import random
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator


# Card colors and numbers
Color = Literal["red", "yellow", "green", "blue", "white"]
Number = Literal[1, 2, 3, 4, 5]

COLORS: list[Color] = ["red", "yellow", "green", "blue", "white"]
NUMBERS: list[Number] = [1, 2, 3, 4, 5]

# Card distribution: 1s x4, 2s x2, 3s x2, 4s x2, 5s x1 per color = 11 per color, 55 total
CARD_COUNTS: dict[int, int] = {1: 4, 2: 2, 3: 2, 4: 2, 5: 1}

MAX_INFO_TOKENS = 8
MAX_FUSE_TOKENS = 3


# Information atoms
class PositiveNumber(BaseModel):
    """The card is known to be this number."""

    model_config = {"frozen": True}

    kind: Literal["positive_number"] = "positive_number"
    number: Number

    def __str__(self) -> str:
        return f"{self.number}"


class PositiveColor(BaseModel):
    """The card is known to be this color."""

    model_config = {"frozen": True}

    kind: Literal["positive_color"] = "positive_color"
    color: Color

    def __str__(self) -> str:
        return self.color


class NegativeNumber(BaseModel):
    """The card is known not to be this number."""

    model_config = {"frozen": True}

    kind: Literal["negative_number"] = "negative_number"
    number: Number

    def __str__(self) -> str:
        return f"!{self.number}"


class NegativeColor(BaseModel):
    """The card is known not to be this color."""

    model_config = {"frozen": True}

    kind: Literal["negative_color"] = "negative_color"
    color: Color

    def __str__(self) -> str:
        return f"!{self.color}"


Information = Annotated[
    Union[PositiveNumber, PositiveColor, NegativeNumber, NegativeColor],
    Field(discriminator="kind"),
]
PositiveInformation = Union[PositiveNumber, PositiveColor]


class KnownCard(BaseModel):
    """A physical card. The id tracks the card across deck, hand and discard pile."""

    model_config = {"frozen": True}

    number: Number
    color: Color
    id: int

    def __str__(self) -> str:
        return f"Card({self.color} {self.number})"

    def same_face(self, other: KnownCard) -> bool:
        """True if both cards show the same color and number."""
        return self.number == other.number and self.color == other.color


class UnknownCard(BaseModel):
    """What a player believes about one of their own hand slots."""

    model_config = {"frozen": True}

    info: frozenset[Information] = frozenset()

    @field_serializer("info")
    def _serialize_info(self, info: frozenset[Information]) -> list[dict[str, Any]]:
        """Sets of models do not dump cleanly, so emit a sorted list."""
        return sorted((i.model_dump() for i in info), key=str)

    def __str__(self) -> str:
        atoms = ", ".join(sorted(str(i) for i in self.info))
        return f"Card?({atoms})"


class Deck(BaseModel):
    """Draw queue of cards. Draws come off the front."""

    model_config = {"frozen": True}

    cards: tuple[KnownCard, ...] = ()

    @field_validator("cards")
    @classmethod
    def _unique_ids(cls, cards: tuple[KnownCard, ...]) -> tuple[KnownCard, ...]:
        if len({c.id for c in cards}) != len(cards):
            raise ValueError("Deck contains duplicate card ids")
        return cards

    @classmethod
    def fresh(cls, rng: random.Random) -> Deck:
        """Build and shuffle a full 55-card deck."""
        cards: list[KnownCard] = []
        for number, count in CARD_COUNTS.items():
            for _ in range(count):
                for color in COLORS:
                    cards.append(KnownCard(number=number, color=color, id=len(cards)))
        return cls().queue_cards(cards, rng)

    def __len__(self) -> int:
        return len(self.cards)

    def queue_cards(self, added: tuple[KnownCard, ...] | list[KnownCard], rng: random.Random) -> Deck:
        """Return a deck holding these cards plus the added ones, reshuffled."""
        cards = list(self.cards) + list(added)
        rng.shuffle(cards)
        return Deck(cards=tuple(cards))

    def remove_cards(self, removed: tuple[KnownCard, ...] | list[KnownCard]) -> Deck:
        ids = {c.id for c in removed}
        return Deck(cards=tuple(c for c in self.cards if c.id not in ids))

    def draw(self) -> tuple[KnownCard | None, Deck]:
        if not self.cards:
            return None, self
        return self.cards[0], Deck(cards=self.cards[1:])

    def deal_hand(self, hand_size: int) -> tuple[tuple[KnownCard, ...], Deck]:
        if hand_size > len(self.cards):
            raise ValueError(f"Cannot deal {hand_size} cards from a deck of {len(self.cards)}")
        return self.cards[:hand_size], Deck(cards=self.cards[hand_size:])


class Player(BaseModel):
    """
    A seat at the table.

    known_hand is the ground truth (hidden from this player), unknown_hand is
    the player's own belief about each slot. Both are index-aligned.
    """

    model_config = {"frozen": True}

    id: int
    known_hand: tuple[KnownCard, ...]
    unknown_hand: tuple[UnknownCard, ...]
    last_turn: bool = False

    @model_validator(mode="after")
    def _hands_aligned(self) -> Player:
        if len(self.known_hand) != len(self.unknown_hand):
            raise ValueError(
                f"Player {self.id}: known hand has {len(self.known_hand)} cards "
                f"but unknown hand has {len(self.unknown_hand)}"
            )
        return self

    def swap_card(self, card_index: int, card: KnownCard | None) -> Player:
        """Replace the card at card_index, or drop the slot if card is None."""
        if not 0 <= card_index < len(self.known_hand):
            raise ValueError(f"Invalid card index {card_index} for hand of {len(self.known_hand)}")
        known = list(self.known_hand)
        unknown = list(self.unknown_hand)
        if card is None:
            del known[card_index]
            del unknown[card_index]
        else:
            known[card_index] = card
            unknown[card_index] = UnknownCard()
        return self.model_copy(update={"known_hand": tuple(known), "unknown_hand": tuple(unknown)})


class Firework(BaseModel):
    """Played cards of one color, most recent last."""

    model_config = {"frozen": True}

    color: Color
    cards: tuple[KnownCard, ...] = ()

    @property
    def top_number(self) -> int:
        return self.cards[-1].number if self.cards else 0

    def __len__(self) -> int:
        return len(self.cards)

    def add_card(self, card: KnownCard) -> Firework:
        if card.color != self.color:
            raise ValueError(f"Cannot add {card} to the {self.color} firework")
        if card.number != self.top_number + 1:
            raise ValueError(f"Cannot add {card} on top of {self.color} {self.top_number}")
        return Firework(color=self.color, cards=self.cards + (card,))


# Action types
class GiveInformation(BaseModel):
    """Tell another player one fact, expanded to a per-slot information vector."""

    model_config = {"frozen": True}

    action_type: Literal["give_information"] = "give_information"
    player: int
    to_player: int
    hand_info: tuple[Information, ...]


class DiscardCard(BaseModel):
    """Discard a card from hand by position (0-indexed)."""

    model_config = {"frozen": True}

    action_type: Literal["discard"] = "discard"
    player: int
    card_index: int


class PlayCard(BaseModel):
    """Play a card from hand by position (0-indexed)."""

    model_config = {"frozen": True}

    action_type: Literal["play"] = "play"
    player: int
    card_index: int


Action = Annotated[
    Union[GiveInformation, DiscardCard, PlayCard],
    Field(discriminator="action_type"),
]


class HanabiConfig(BaseModel):
    """Configuration for a Hanabi game."""

    num_players: int = Field(default=4, ge=2, le=5)
    hand_size: int = Field(default=4, ge=1)
    seed: int | None = None


class Game(BaseModel):
    """An immutable snapshot of a Hanabi game."""

    model_config = {"frozen": True}

    deck: Deck
    discarded_cards: tuple[KnownCard, ...] = ()
    turn: int = 0
    players: tuple[Player, ...]
    num_info_tokens: int = Field(default=MAX_INFO_TOKENS, ge=0, le=MAX_INFO_TOKENS)
    num_fuse_tokens: int = Field(default=MAX_FUSE_TOKENS, ge=0, le=MAX_FUSE_TOKENS)
    fireworks: dict[Color, Firework]

    @model_validator(mode="after")
    def _check_invariants(self) -> Game:
        if not self.players:
            raise ValueError("Game needs at least one player")
        if not 0 <= self.turn < len(self.players):
            raise ValueError(f"Turn {self.turn} is not a valid player index")
        for index, player in enumerate(self.players):
            if player.id != index:
                raise ValueError(f"Player at seat {index} has id {player.id}")
        if set(self.fireworks) != set(COLORS):
            raise ValueError("Game needs exactly one firework per color")
        for color, firework in self.fireworks.items():
            if firework.color != color:
                raise ValueError(f"Firework for {color} holds {firework.color} cards")
        return self

    def replace(self, **changes) -> Game:
        """Build a successor snapshot, re-running validation."""
        fields = {name: getattr(self, name) for name in type(self).model_fields}
        fields.update(changes)
        return Game(**fields)

    @property
    def current_player(self) -> Player:
        return self.players[self.turn]

    @property
    def score(self) -> int:
        """Current score (total cards across fireworks)."""
        return sum(len(f) for f in self.fireworks.values())

    @property
    def last_round(self) -> bool:
        return not self.deck.cards

    @property
    def is_over(self) -> bool:
        return self.num_fuse_tokens == 0 or all(p.last_turn for p in self.players)

    def is_play_legal(self, card: KnownCard) -> bool:
        return self.fireworks[card.color].top_number == card.number - 1
