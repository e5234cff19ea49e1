"""
Resolver - Pops one event, applies it, and collects reactions.

Each step:
1. Pop the top node
2. Dispatch on the payload type and apply its fixed effect
3. Trigger scan: ask every active monster, every passive item (only the
   turn owner's for turn-boundary events) and the event player's curses
   whether the event concerns them
4. Push the reactions in that order, each followed by its die roll if
   it needs one

Fizzled nodes resolve as no-ops and are not scanned.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable, TYPE_CHECKING

from . import ids
from .cards import Card, MonsterCard
from .effects import BindResult, EffectKind
from .events import (
    Activate,
    CharacterDeath,
    Damage,
    DeclareAttack,
    DeclarePurchase,
    DiceRoll,
    EndTurn,
    EventNode,
    Fizzled,
    IntentionToAttack,
    IntentionToPurchase,
    LootCardPlayed,
    MonsterReward,
    PaidItemActivated,
    StartOfTurn,
    TriggeredEffect,
    TURN_BOUNDARY_EVENTS,
)
from .interpreter import EffectInterpreter

if TYPE_CHECKING:
    from .board import Board
    from .player import Player

logger = logging.getLogger(__name__)


class ResolverState(Enum):
    """State of the resolver."""
    READY = "ready"  # Stack empty
    RESOLVING = "resolving"  # Events pending


@dataclass
class Reaction:
    """A hook that answered a trigger scan."""
    owner: Player
    card: Card
    bound: BindResult


class Resolver:
    """Drives the event stack of one Board."""

    def __init__(self, board: Board):
        self.board = board
        self.interpreter = EffectInterpreter(board)
        self._handlers: dict[type, Callable[[EventNode], None]] = {
            Activate: self._resolve_effect,
            PaidItemActivated: self._resolve_effect,
            TriggeredEffect: self._resolve_effect,
            MonsterReward: self._resolve_effect,
            LootCardPlayed: self._resolve_loot,
            Damage: self._resolve_damage,
            CharacterDeath: self._resolve_death,
            DeclareAttack: self._resolve_declare_attack,
            DeclarePurchase: self._resolve_declare_purchase,
            DiceRoll: self._resolve_dice_roll,
            StartOfTurn: self._resolve_start_of_turn,
            EndTurn: self._resolve_end_turn,
            IntentionToAttack: self._resolve_intention_to_attack,
            IntentionToPurchase: self._resolve_intention_to_purchase,
        }

    @property
    def state(self) -> ResolverState:
        return ResolverState.READY if self.board.stack.is_empty else ResolverState.RESOLVING

    def resolve_next(self) -> EventNode | None:
        """Resolve the top event. Returns the node, or None if the stack was empty."""
        node = self.board.stack.pop()
        if node is None:
            return None
        payload = node.event.payload
        if isinstance(payload, Fizzled):
            logger.debug("#%d fizzled", node.node_id)
            return node
        logger.debug("resolve #%d %s", node.node_id, node.event.describe())
        self._handlers[type(payload)](node)
        self.push_reactions(self.trigger_scan(node))
        return node

    def resolve_all(self, limit: int = 10_000) -> int:
        """Resolve until the stack is empty, with no response windows."""
        count = 0
        while not self.board.stack.is_empty and count < limit:
            self.resolve_next()
            count += 1
        return count

    # ========================================================================
    # Trigger scan
    # ========================================================================

    def trigger_scan(self, node: EventNode) -> list[Reaction]:
        board = self.board
        event = node.event
        reactions: list[Reaction] = []

        def ask(owner: Player, card: Card, hook) -> None:
            bound = hook(board, owner, card, node)
            if bound.ok:
                logger.debug("%s reacts to #%d", card.name, node.node_id)
                reactions.append(Reaction(owner, card, bound))

        for monster in board.active_monsters():
            if monster.on_event is not None:
                ask(board.active_player, monster, monster.on_event)

        if isinstance(event.payload, TURN_BOUNDARY_EVENTS):
            owners = [event.player]
        else:
            owners = board.turn_order()
        for owner in owners:
            for item in list(owner.passive_items):
                if item.on_event is None or item.card_id in ids.REACTIVE_SCAN_DENYLIST:
                    continue
                ask(owner, item, item.on_event)

        for curse in list(event.player.curses):
            if curse.on_event is not None:
                ask(event.player, curse, curse.on_event)
        return reactions

    def push_reactions(self, reactions: list[Reaction]) -> None:
        for reaction in reactions:
            self.board.push_bound(
                reaction.owner, reaction.card, reaction.bound.effect, reaction.bound.roll_required
            )

    # ========================================================================
    # Per-payload resolution
    # ========================================================================

    def _resolve_effect(self, node: EventNode) -> None:
        self.interpreter.run(node.event.payload.effect, node.event.roll)

    def _resolve_loot(self, node: EventNode) -> None:
        effect = node.event.payload.effect
        # Trinkets have no loot effect to double
        doubled = effect.kind != EffectKind.NOTHING and node.event.player.consume_effect(ids.BLANK_CARD)
        self.interpreter.run(effect, node.event.roll, doubled)

    def _resolve_damage(self, node: EventNode) -> None:
        board = self.board
        payload: Damage = node.event.payload
        target = payload.target
        if isinstance(target, MonsterCard):
            if not board.is_active_monster(target) or target.is_dead():
                return
            target.decrease_hp(payload.n)
            logger.debug("%s takes %d (HP %d)", target.name, payload.n, target.hp)
            if target.is_dead():
                board.kill_monster(node.event.player, target.card_id)
            return

        if target.is_dead():
            return
        n = min(payload.n, 1) if target.has_item(ids.DRY_BABY) else payload.n
        target.decrease_hp(n)
        logger.debug("%s takes %d (HP %d)", target.player_id, n, target.character.hp)
        if target.is_dead():
            logger.info("%s is dying", target.player_id)
            board.kill_player(target)
        else:
            board.check_damage_required_effects(target, board.stack.peek())

    def _resolve_death(self, node: EventNode) -> None:
        player = node.event.player
        self.board.death_penalty(player)
        if self.board.is_active(player):
            self.board.force_end_of_turn()

    def _resolve_declare_attack(self, node: EventNode) -> None:
        if node.event.roll == 0:
            logger.debug("Attack #%d has no roll", node.node_id)
            return
        self.board.battle(node.event.player, node.event.payload.monster, node.event.roll)

    def _resolve_declare_purchase(self, node: EventNode) -> None:
        outcome = self.board.buy_from_shop(node.event.player, node.event.payload.slot)
        if not outcome:
            logger.info("Purchase failed: %s", outcome.error)

    def _resolve_dice_roll(self, node: EventNode) -> None:
        board = self.board
        n = node.event.payload.n
        below = board.stack.peek()
        if below is not None:
            below.event.roll = n
        guesses = board.treasure.crystal_ball_guesses
        for player_id, guess in list(guesses.items()):
            if guess == n:
                found = board.get_player(player_id)
                if found:
                    logger.info("%s guessed the roll", player_id)
                    board.draw_loot_cards(found.value, 3)
        guesses.clear()

    def _resolve_start_of_turn(self, node: EventNode) -> None:
        self.board.start_turn(node.event.player)

    def _resolve_end_turn(self, node: EventNode) -> None:
        self.board.end_turn(node.event.player)

    def _resolve_intention_to_attack(self, node: EventNode) -> None:
        board = self.board
        player = node.event.player
        payload: IntentionToAttack = node.event.payload
        monster = payload.monster
        if monster is None:
            drawn = board.draw_monster()
            if not drawn:
                logger.info("Monster deck is empty")
                return
            card = drawn.value
            if board.reveal_monster(player, card):
                return
            slots = board.monster.slots
            if not slots:
                board.discard(card)
                return
            i = board.choose(
                player, f"Place {card.name} over which slot?", slots, "slot",
                labels=[slot.peek().row() for slot in slots],
            )
            card.reset_stats()
            slots[i].push(card)
            payload.monster = monster = card
        if not board.is_active_monster(monster) or monster.is_dead():
            return
        player.in_battle = True
        monster.in_battle = True
        board.push(player, DeclareAttack(monster=monster))
        board.push_roll(player, attack=True)

    def _resolve_intention_to_purchase(self, node: EventNode) -> None:
        board = self.board
        player = node.event.player
        slots = [i for i, card in enumerate(board.treasure.shop) if card is not None]
        labels = [board.treasure.shop[i].row() for i in slots]
        if not board.treasure.deck.is_empty or not board.treasure.discard_pile.is_empty:
            slots.append(-1)
            labels.append("Top of the treasure deck")
        if not slots:
            return
        i = board.choose(player, "Buy which item?", slots, "slot", labels=labels)
        board.push(player, DeclarePurchase(slot=slots[i]))
