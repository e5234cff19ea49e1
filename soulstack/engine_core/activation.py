"""
Activation Protocol - Bind, then commit.

Every activatable surface (character, active or paid item, loot card in
hand) goes through two phases:

1. Bind: the card's activator validates preconditions and gathers any
   choices, returning an Effect. A failed bind changes nothing.
2. Commit: this module taps the card, pays costs, pushes the event and
   applies the few card-specific follow-ups signalled by `special`.

Card state machine: Ready -> (bind ok) -> Tapped -> (owner's start of
turn, or a recharge effect) -> Ready. Paid items never tap.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from . import ids
from .action import ActionResult
from .cards import TreasureCard
from .effects import ActivationContext, Effect, EffectKind
from .errors import ErrorCode
from .events import Activate, LootCardPlayed, PaidItemActivated

if TYPE_CHECKING:
    from .board import Board
    from .player import Player

logger = logging.getLogger(__name__)

# Items whose "special" bind means a paid use that leaves them untapped.
UNTAP_ON_SPECIAL = (ids.THE_BONE, ids.TECH_X)


def activate_character(board: Board, player: Player) -> ActionResult:
    """Tap the character to play a loot card from hand."""
    character = player.character
    if character.tapped:
        return ActionResult.failure(f"{character.name} is already tapped")
    if not player.hand:
        return ActionResult.failure("No loot card to play")

    i = board.choose(player, "Play which loot card?", player.hand, "card")
    effect = Effect(EffectKind.PLAY_LOOT, player=player, target_card=player.hand[i])

    character.tapped = True
    board.push(player, Activate(card=character, effect=effect))
    logger.debug("%s activated %s", player.player_id, character.name)
    return ActionResult.ok(f"{player.player_id} activated {character.name}")


def activate_item(board: Board, player: Player, item: TreasureCard) -> ActionResult:
    """Activate an active or paid item owned by player."""
    if not any(card is item for card in player.active_items):
        return ActionResult.failure(f"{player.player_id} does not own {item.name}", ErrorCode.NOT_FOUND)
    if item.activator is None or item.passive:
        return ActionResult.failure(f"{item.name} cannot be activated", ErrorCode.UNSUPPORTED)
    if item.active and item.tapped:
        return ActionResult.failure(f"{item.name} is already tapped")

    bound = item.activator(ActivationContext(board, player, item))
    if not bound.ok:
        return ActionResult.failure(bound.error, bound.error_code)
    if bound.cost_cents > player.cents:
        return ActionResult.failure(f"{item.name} costs {bound.cost_cents}c")
    if bound.cost_counters > item.counters:
        return ActionResult.failure(f"{item.name} needs {bound.cost_counters} counters")

    player.lose_cents(bound.cost_cents)
    item.remove_counters(bound.cost_counters)
    if item.active:
        item.tapped = True
    payload_type = PaidItemActivated if item.paid else Activate
    board.push(player, payload_type(card=item, effect=bound.effect))

    if bound.special:
        if item.card_id == ids.GUPPYS_PAW:
            board.damage_player_to_player(player, player, 1)
        elif item.card_id in UNTAP_ON_SPECIAL:
            item.tapped = False
            if bound.roll_required:
                board.push_roll(player)
        else:
            board.push_roll(player)
    elif bound.roll_required:
        board.push_roll(player)
    logger.debug("%s activated %s", player.player_id, item.name)
    return ActionResult.ok(f"{player.player_id} activated {item.name}")


def play_loot_card(board: Board, player: Player, hand_index: int, use_allowance: bool = True) -> ActionResult:
    """
    Play the loot card at hand_index.

    use_allowance spends one of the turn's loot plays; playing through
    the character's ability does not.
    """
    if hand_index < 0 or hand_index >= len(player.hand):
        return ActionResult.failure(f"No hand card {hand_index}", ErrorCode.INDEX_OUT_OF_RANGE)
    if use_allowance and player.num_loot_played <= 0:
        return ActionResult.failure("No loot plays left this turn")
    card = player.hand[hand_index]

    if card.trinket:
        player.hand.pop(hand_index)
        if use_allowance:
            player.num_loot_played -= 1
        board.add_item(player, card)
        board.push(player, LootCardPlayed(card=card, effect=Effect(EffectKind.NOTHING, player=player)))
        return ActionResult.ok(f"{player.player_id} put {card.name} into play")

    if card.activator is None:
        return ActionResult.failure(f"{card.name} cannot be played", ErrorCode.UNSUPPORTED)
    bound = card.activator(ActivationContext(board, player, card))
    if not bound.ok:
        return ActionResult.failure(bound.error, bound.error_code)

    player.hand.pop(hand_index)
    board.discard(card)
    if use_allowance:
        player.num_loot_played -= 1
    board.push(player, LootCardPlayed(card=card, effect=bound.effect))

    if card.card_id == ids.TEMPERANCE:
        board.damage_player_to_player(player, player, 2 if bound.special else 1)
    elif bound.special or bound.roll_required:
        board.push_roll(player)
    logger.debug("%s played %s", player.player_id, card.name)
    return ActionResult.ok(f"{player.player_id} played {card.name}")
