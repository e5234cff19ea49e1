"""
Effect Interpreter - Gives each EffectKind its meaning.

Effects are run by the resolver with the die roll written onto their
event (0 when none was rolled) and, for loot cards, whether a
"double the next loot effect" modifier was consumed.

Effects that refer to stack nodes treat a node that has since fizzled or
left the stack as "no longer applies" and skip quietly.
"""

from __future__ import annotations
import logging
from typing import Callable, TYPE_CHECKING

from .cards import CharacterCard, MonsterCard, TreasureCard
from .effects import DOUBLABLE, Effect, EffectKind
from .events import CharacterDeath, Damage, DiceRoll, EventNode
from .zones import ActiveSlot, Deck

if TYPE_CHECKING:
    from .board import Board
    from .player import Player

logger = logging.getLogger(__name__)


class EffectInterpreter:
    """Runs Effect command objects against a Board."""

    def __init__(self, board: Board):
        self.board = board
        self._handlers: dict[EffectKind, Callable[[Effect, int, bool], None]] = {
            EffectKind.NOTHING: self._nothing,
            EffectKind.SEQUENCE: self._sequence,
            EffectKind.ROLL_TABLE: self._roll_table,
            EffectKind.GAIN_CENTS: self._gain_cents,
            EffectKind.LOSE_CENTS: self._lose_cents,
            EffectKind.STEAL_CENTS: self._steal_cents,
            EffectKind.LOOT: self._loot,
            EffectKind.DISCARD_LOOT: self._discard_loot,
            EffectKind.RETURN_LOOT_TO_DECK: self._return_loot_to_deck,
            EffectKind.GAIN_TREASURE: self._gain_treasure,
            EffectKind.DEAL_DAMAGE: self._deal_damage,
            EffectKind.DAMAGE_ALL_PLAYERS: self._damage_all_players,
            EffectKind.PREVENT_DAMAGE: self._prevent_damage,
            EffectKind.KILL_PLAYER: self._kill_player,
            EffectKind.KILL_MONSTER: self._kill_monster,
            EffectKind.BUFF: self._buff,
            EffectKind.EXTRA_ATTACK: self._extra_attack,
            EffectKind.ADD_TO_ROLL: self._add_to_roll,
            EffectKind.REROLL: self._reroll,
            EffectKind.FIZZLE: self._fizzle,
            EffectKind.PREVENT_DEATH: self._prevent_death,
            EffectKind.EXTRA_LOOT_PLAY: self._extra_loot_play,
            EffectKind.PLAY_LOOT: self._play_loot,
            EffectKind.RECHARGE_ITEM: self._recharge_item,
            EffectKind.ADD_COUNTERS: self._add_counters,
            EffectKind.SET_FLAG: self._set_flag,
            EffectKind.CRYSTAL_BALL_GUESS: self._crystal_ball_guess,
            EffectKind.GAIN_SOUL: self._gain_soul,
            EffectKind.STEAL_SOUL: self._steal_soul,
            EffectKind.RETURN_SOUL: self._return_soul,
            EffectKind.GIVE_CURSE: self._give_curse,
            EffectKind.DESTROY_CURSE: self._destroy_curse,
            EffectKind.DESTROY_ITEM: self._destroy_item,
            EffectKind.REARRANGE_TOP: self._rearrange_top,
            EffectKind.PEEK_TOP: self._peek_top,
            EffectKind.RECYCLE_DISCARD: self._recycle_discard,
            EffectKind.EXPAND_SLOTS: self._expand_slots,
            EffectKind.SKIP_TURN: self._skip_turn,
            EffectKind.FORCE_END_TURN: self._force_end_turn,
        }

    def run(self, effect: Effect, roll: int = 0, doubled: bool = False) -> None:
        if effect.on_rolls is not None and roll not in effect.on_rolls:
            logger.debug("%s does nothing on a %d", effect.kind.value, roll)
            return
        flag = effect.params.get("requires_flag")
        if flag is not None and effect.player is not None and not effect.player.consume_effect(flag):
            logger.debug("%s cost was not paid", effect.kind.value)
            return
        self._handlers[effect.kind](effect, roll, doubled)

    # ========================================================================
    # Helpers
    # ========================================================================

    @staticmethod
    def _amount(effect: Effect, roll: int, doubled: bool) -> int:
        n = effect.amount if effect.amount else roll
        if doubled and effect.kind in DOUBLABLE:
            n *= 2
        return n

    @staticmethod
    def _subject(effect: Effect) -> Player:
        return effect.target_player or effect.player

    def _live_node(self, effect: Effect):
        """The effect's target node if it is still pending and not fizzled."""
        node = effect.target_node
        if node is None or node.event.is_fizzled:
            return None
        if not self.board.stack.search(node.node_id):
            return None
        return node

    def _deck(self, name: str) -> tuple[Deck, Deck]:
        area = {"loot": self.board.loot, "monster": self.board.monster, "treasure": self.board.treasure}[name]
        return area.deck, area.discard_pile

    # ========================================================================
    # Composition
    # ========================================================================

    def _nothing(self, effect: Effect, roll: int, doubled: bool) -> None:
        pass

    def _sequence(self, effect: Effect, roll: int, doubled: bool) -> None:
        for step in effect.params.get("steps", []):
            self.run(step, roll, doubled)

    def _roll_table(self, effect: Effect, roll: int, doubled: bool) -> None:
        outcome = effect.params.get("table", {}).get(roll)
        if outcome is not None:
            self.run(outcome, roll, doubled)

    # ========================================================================
    # Economy
    # ========================================================================

    def _gain_cents(self, effect: Effect, roll: int, doubled: bool) -> None:
        self._subject(effect).gain_cents(self._amount(effect, roll, doubled))

    def _lose_cents(self, effect: Effect, roll: int, doubled: bool) -> None:
        self._subject(effect).lose_cents(self._amount(effect, roll, doubled))

    def _steal_cents(self, effect: Effect, roll: int, doubled: bool) -> None:
        if effect.target_player is None:
            return
        stolen = effect.target_player.lose_cents(self._amount(effect, roll, doubled))
        effect.player.gain_cents(stolen)

    def _loot(self, effect: Effect, roll: int, doubled: bool) -> None:
        self.board.draw_loot_cards(self._subject(effect), self._amount(effect, roll, doubled))

    def _discard_loot(self, effect: Effect, roll: int, doubled: bool) -> None:
        self.board.choose_and_discard(self._subject(effect), effect.amount or 1)

    def _return_loot_to_deck(self, effect: Effect, roll: int, doubled: bool) -> None:
        player = self._subject(effect)
        if not player.hand:
            return
        i = self.board.choose(player, "Put a loot card on top of the deck", player.hand, "card")
        self.board.loot.deck.append(player.pop_hand_card(i).value)

    def _gain_treasure(self, effect: Effect, roll: int, doubled: bool) -> None:
        self.board.gain_treasure(self._subject(effect), self._amount(effect, roll, doubled))

    # ========================================================================
    # Combat
    # ========================================================================

    def _deal_damage(self, effect: Effect, roll: int, doubled: bool) -> None:
        n = self._amount(effect, roll, doubled)
        if effect.target_player is not None:
            self.board.damage_player_to_player(effect.player, effect.target_player, n)
        elif effect.target_monster is not None and self.board.is_active_monster(effect.target_monster):
            self.board.damage_player_to_monster(effect.player, effect.target_monster, n)

    def _damage_all_players(self, effect: Effect, roll: int, doubled: bool) -> None:
        n = self._amount(effect, roll, doubled)
        for target in self.board.living_players():
            if effect.params.get("others_only") and target is effect.player:
                continue
            self.board.damage_player_to_player(effect.player, target, n)

    def _prevent_damage(self, effect: Effect, roll: int, doubled: bool) -> None:
        node = self._live_node(effect)
        if node is None or not isinstance(node.event.payload, Damage):
            return
        if effect.params.get("spend_counters"):
            card = effect.target_card
            n = min(node.event.payload.n, card.counters)
            card.remove_counters(n)
        else:
            n = self._amount(effect, roll, doubled)
        self.board.stack.prevent_damage(n, node)

    def _kill_player(self, effect: Effect, roll: int, doubled: bool) -> None:
        target = effect.target_player
        if target is not None and not target.is_dead():
            target.character.hp = 0
            self.board.kill_player(target)

    def _kill_monster(self, effect: Effect, roll: int, doubled: bool) -> None:
        monster = effect.target_monster
        if monster is None or not self.board.is_active_monster(monster):
            return
        monster.hp = 0
        self.board.kill_monster(effect.player, monster.card_id)

    def _buff(self, effect: Effect, roll: int, doubled: bool) -> None:
        scale = 2 if doubled else 1
        target = effect.target_monster or self._subject(effect).character
        ap = effect.params.get("ap", 0) * scale
        hp = effect.params.get("hp", 0) * scale
        heal = effect.params.get("heal", 0) * scale
        if ap > 0:
            target.increase_ap(ap)
        elif ap < 0:
            target.decrease_ap(-ap)
        if hp > 0:
            target.increase_hp(hp)
        if heal > 0:
            target.heal(heal)
        roll_delta = effect.params.get("roll", 0)
        if isinstance(target, MonsterCard) and roll_delta:
            if roll_delta > 0:
                target.increase_roll(roll_delta)
            else:
                target.decrease_roll(-roll_delta)

    def _extra_attack(self, effect: Effect, roll: int, doubled: bool) -> None:
        self._subject(effect).num_attacks += self._amount(effect, roll, doubled)

    # ========================================================================
    # Stack manipulation
    # ========================================================================

    def _add_to_roll(self, effect: Effect, roll: int, doubled: bool) -> None:
        node = self._live_node(effect)
        if node is None or not isinstance(node.event.payload, DiceRoll):
            return
        delta = effect.amount * (2 if doubled else 1)
        self.board.stack.add_to_dice_roll(delta, node)

    def _reroll(self, effect: Effect, roll: int, doubled: bool) -> None:
        node = self._live_node(effect)
        if node is None or not isinstance(node.event.payload, DiceRoll):
            return
        value = effect.params.get("value")
        if value is not None:
            node.event.payload.n = min(6, max(1, value))
        else:
            node.event.payload.n = self.board.roll_dice(node.event.player)

    def _fizzle(self, effect: Effect, roll: int, doubled: bool) -> None:
        node = self._live_node(effect)
        if node is None:
            return
        follow_up = node.next
        self.board.stack.fizzle(node)
        if not effect.params.get("cascade") or follow_up is None:
            return
        if isinstance(follow_up.event.payload, CharacterDeath):
            self._cancel_death(follow_up)
        elif isinstance(follow_up.event.payload, (Damage, DiceRoll)):
            self.board.stack.fizzle(follow_up)

    def _prevent_death(self, effect: Effect, roll: int, doubled: bool) -> None:
        node = self._live_node(effect)
        if node is None or not isinstance(node.event.payload, CharacterDeath):
            return
        if effect.params.get("destroy_source") and effect.target_card is not None:
            self.board.destroy_item(effect.player, effect.target_card)
        self._cancel_death(node)

    def _cancel_death(self, node: EventNode) -> None:
        """A cancelled death still ends the dying player's turn."""
        self.board.stack.fizzle(node)
        dying = node.event.player
        logger.info("%s's death was prevented", dying.player_id)
        if self.board.is_active(dying):
            self.board.force_end_of_turn()

    # ========================================================================
    # Cards and items
    # ========================================================================

    def _extra_loot_play(self, effect: Effect, roll: int, doubled: bool) -> None:
        self._subject(effect).num_loot_played += effect.amount or 1

    def _play_loot(self, effect: Effect, roll: int, doubled: bool) -> None:
        from .activation import play_loot_card

        player = effect.player
        card = effect.target_card
        for i, held in enumerate(player.hand):
            if held is card:
                result = play_loot_card(self.board, player, i, use_allowance=False)
                if not result.success:
                    logger.info("%s could not play %s: %s", player.player_id, card.name, result.error)
                return

    def _recharge_item(self, effect: Effect, roll: int, doubled: bool) -> None:
        card = effect.target_card
        if card is None:
            self._subject(effect).recharge_all()
        elif isinstance(card, (TreasureCard, CharacterCard)):
            card.tapped = False

    def _add_counters(self, effect: Effect, roll: int, doubled: bool) -> None:
        if effect.target_card is not None:
            effect.target_card.add_counters(effect.amount or 1)

    def _set_flag(self, effect: Effect, roll: int, doubled: bool) -> None:
        flag = effect.params["flag"]
        if effect.params.get("scope") == "loot":
            self.board.loot.active_effects.add(flag)
        else:
            self._subject(effect).active_effects.add(flag)

    def _crystal_ball_guess(self, effect: Effect, roll: int, doubled: bool) -> None:
        self.board.treasure.crystal_ball_guesses[effect.player.player_id] = effect.amount

    def _gain_soul(self, effect: Effect, roll: int, doubled: bool) -> None:
        card = effect.target_card
        for deck in (self.board.loot.discard_pile, self.board.monster.discard_pile):
            for i, held in enumerate(deck.cards):
                if held is card:
                    deck.pop_by_index(i)
        self._subject(effect).souls.append(card)
        logger.info("%s gains %s as a soul", self._subject(effect).player_id, card.name)

    def _steal_soul(self, effect: Effect, roll: int, doubled: bool) -> None:
        victim = effect.target_player
        if victim is None:
            return
        for i, soul in enumerate(victim.souls):
            if soul is effect.target_card:
                effect.player.souls.append(victim.souls.pop(i))
                logger.info("%s steals %s from %s", effect.player.player_id, soul.name, victim.player_id)
                return

    def _return_soul(self, effect: Effect, roll: int, doubled: bool) -> None:
        owner = self._subject(effect)
        for i, soul in enumerate(owner.souls):
            if soul is effect.target_card:
                self.board.monster.deck.append(owner.souls.pop(i))
                logger.info("%s returns to the monster deck", soul.name)
                return

    def _give_curse(self, effect: Effect, roll: int, doubled: bool) -> None:
        if effect.target_player is not None and effect.target_card is not None:
            self.board.give_curse(effect.target_player, effect.target_card)

    def _destroy_curse(self, effect: Effect, roll: int, doubled: bool) -> None:
        target = self._subject(effect)
        removed = target.pop_curse(effect.target_card)
        if removed:
            self.board.discard(removed.value)

    def _destroy_item(self, effect: Effect, roll: int, doubled: bool) -> None:
        owner = self._subject(effect)
        if effect.target_card is not None:
            self.board.destroy_item(owner, effect.target_card)

    def _rearrange_top(self, effect: Effect, roll: int, doubled: bool) -> None:
        deck, _ = self._deck(effect.params.get("deck", "loot"))
        taken = []
        for _ in range(effect.amount or 3):
            card = deck.pop()
            if not card:
                break
            taken.append(card.value)
        ordered = []
        while taken:
            i = self.board.choose(effect.player, "Which card goes on top next?", taken, "card")
            ordered.append(taken.pop(i))
        for card in reversed(ordered):
            deck.append(card)

    def _peek_top(self, effect: Effect, roll: int, doubled: bool) -> None:
        deck, _ = self._deck(effect.params.get("deck", "loot"))
        card = deck.top
        if card is None:
            return
        options = ["Leave it on top", "Put it on the bottom"]
        if self.board.choose(effect.player, f"Top card is {card.name}", options) == 1:
            deck.prepend(deck.pop().value)

    def _recycle_discard(self, effect: Effect, roll: int, doubled: bool) -> None:
        deck, discard_pile = self._deck(effect.params.get("deck", "loot"))
        card = discard_pile.pop()
        if card:
            deck.append(card.value)

    # ========================================================================
    # Board and turn
    # ========================================================================

    def _expand_slots(self, effect: Effect, roll: int, doubled: bool) -> None:
        if effect.params.get("area") == "shop":
            self.board.treasure.shop.append(None)
        else:
            self.board.monster.slots.append(ActiveSlot())

    def _skip_turn(self, effect: Effect, roll: int, doubled: bool) -> None:
        self._subject(effect).skip_next_turn = True

    def _force_end_turn(self, effect: Effect, roll: int, doubled: bool) -> None:
        self.board.force_end_of_turn()
