"""Core game logic for Hanabi: setup and the action state machine."""

from __future__ import annotations

import random

from .information import combine_information
from .models import (
    COLORS,
    MAX_INFO_TOKENS,
    Action,
    Deck,
    DiscardCard,
    Firework,
    Game,
    GiveInformation,
    HanabiConfig,
    KnownCard,
    PlayCard,
    Player,
    UnknownCard,
)


def create_game(config: HanabiConfig, rng: random.Random | None = None) -> Game:
    """
    Create a new Hanabi game.

    Args:
        config: Game configuration
        rng: Optional random source. If None, one is seeded from config.seed

    Returns:
        Initial game state with dealt hands
    """
    if rng is None:
        rng = random.Random(config.seed)

    deck = Deck.fresh(rng)
    players: list[Player] = []
    for player_id in range(config.num_players):
        hand, deck = deck.deal_hand(config.hand_size)
        players.append(Player(
            id=player_id,
            known_hand=hand,
            unknown_hand=tuple(UnknownCard() for _ in hand),
        ))

    return Game(
        deck=deck,
        players=tuple(players),
        fireworks={color: Firework(color=color) for color in COLORS},
    )


def _check_turn(game: Game, player_id: int) -> Player:
    if player_id != game.turn:
        raise ValueError(f"Not player {player_id}'s turn (current: {game.turn})")
    return game.current_player


def _check_index(player: Player, card_index: int) -> None:
    if not 0 <= card_index < len(player.known_hand):
        raise ValueError(f"Invalid card index {card_index} for hand of {len(player.known_hand)}")


def _replace_players(game: Game, *updated: Player) -> tuple[Player, ...]:
    players = list(game.players)
    for player in updated:
        players[player.id] = player
    return tuple(players)


def apply_give_information(game: Game, action: GiveInformation) -> Game:
    """Fold the hint into the recipient's beliefs and spend an info token."""
    giver = _check_turn(game, action.player)
    if action.to_player == action.player:
        raise ValueError("Cannot give information to yourself")
    if not 0 <= action.to_player < len(game.players):
        raise ValueError(f"Unknown player: {action.to_player}")

    recipient = game.players[action.to_player]
    recipient = recipient.model_copy(
        update={"unknown_hand": combine_information(recipient.unknown_hand, action.hand_info)}
    )
    giver = giver.model_copy(update={"last_turn": game.last_round})

    # Token count is validated by Game: hinting with none left fails here
    return game.replace(
        players=_replace_players(game, giver, recipient),
        num_info_tokens=game.num_info_tokens - 1,
    )


def _remove_and_draw(game: Game, card_index: int) -> tuple[KnownCard, Player, Deck]:
    """
    Take the card out of the current player's hand and draw into the slot.

    last_turn is read from the deck after the draw, so the player who draws
    the last card has already taken their final turn. Checking before the
    draw would grant them one more.
    """
    player = game.current_player
    _check_index(player, card_index)
    removed = player.known_hand[card_index]
    new_card, deck = game.deck.draw()
    player = player.swap_card(card_index, new_card)
    player = player.model_copy(update={"last_turn": not deck.cards})
    return removed, player, deck


def apply_discard(game: Game, action: DiscardCard) -> Game:
    """Discard a card, draw a replacement and regain an info token."""
    _check_turn(game, action.player)
    card, player, deck = _remove_and_draw(game, action.card_index)
    return game.replace(
        deck=deck,
        players=_replace_players(game, player),
        discarded_cards=game.discarded_cards + (card,),
        num_info_tokens=min(game.num_info_tokens + 1, MAX_INFO_TOKENS),
    )


def apply_play(game: Game, action: PlayCard) -> Game:
    """
    Play a card and draw a replacement.

    A legal play extends its firework (a completed 5 refunds an info token).
    An illegal play goes to the discard pile and burns a fuse.
    """
    _check_turn(game, action.player)
    card, player, deck = _remove_and_draw(game, action.card_index)
    players = _replace_players(game, player)

    if game.is_play_legal(card):
        fireworks = dict(game.fireworks)
        fireworks[card.color] = fireworks[card.color].add_card(card)
        info_tokens = game.num_info_tokens
        if card.number == 5:
            info_tokens = min(info_tokens + 1, MAX_INFO_TOKENS)
        return game.replace(
            deck=deck,
            players=players,
            fireworks=fireworks,
            num_info_tokens=info_tokens,
        )

    return game.replace(
        deck=deck,
        players=players,
        discarded_cards=game.discarded_cards + (card,),
        num_fuse_tokens=game.num_fuse_tokens - 1,
    )


def apply_action(action: Action, game: Game) -> Game:
    """
    Apply an action to the game state and pass the turn.

    Returns:
        The successor game. The input game is left untouched.
    """
    if isinstance(action, GiveInformation):
        new_game = apply_give_information(game, action)
    elif isinstance(action, DiscardCard):
        new_game = apply_discard(game, action)
    elif isinstance(action, PlayCard):
        new_game = apply_play(game, action)
    else:
        raise TypeError(f"Unknown action type: {type(action)}")

    return new_game.replace(turn=(new_game.turn + 1) % len(new_game.players))


def game_over_reason(game: Game) -> str | None:
    """
    Why the game ended, or None if it is still running.

    Reasons: "fuse_out", "final_round_complete"
    """
    if game.num_fuse_tokens == 0:
        return "fuse_out"
    if all(p.last_turn for p in game.players):
        return "final_round_complete"
    return None
