"""
Board - The single root of mutable game state.

The Board owns:
1. The three card areas (loot, monster, treasure), each a deck plus a
   discard pile; monsters add battle slots and treasure adds shop slots
2. The players in turn order and the active-player index
3. The event stack
4. The choice provider and the random number generator

Rule mutators that touch more than one player or zone live here:
damage routing, monster and player deaths, battle, purchases, dice
rolls, refilling the field and turn transitions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random
from typing import Any, TYPE_CHECKING, Union

from . import ids
from .cards import Card, CardKind, MonsterCard, TreasureCard
from .choices import ChoiceProvider, FirstOptionChooser, PendingChoice
from .effects import ActivationContext, Effect, EffectKind
from .errors import ErrorCode, Outcome
from .events import (
    CharacterDeath,
    Damage,
    DiceRoll,
    Event,
    EventNode,
    EventPayload,
    EventStack,
    LootCardPlayed,
    Activate,
    MonsterReward,
    TriggeredEffect,
)
from .player import Player
from .zones import ActiveSlot, Deck

if TYPE_CHECKING:
    from .cards import Item

logger = logging.getLogger(__name__)

SHOP_COST = 10
DISCOUNT_SHOP_COST = 5
TOP_OF_DECK = -1

CombatTargetRef = Union[Player, MonsterCard]


# ============================================================================
# Card areas
# ============================================================================

@dataclass
class LootArea:
    deck: Deck = field(default_factory=lambda: Deck("loot deck"))
    discard_pile: Deck = field(default_factory=lambda: Deck("loot discard"))
    active_effects: set[int] = field(default_factory=set)


@dataclass
class MonsterArea:
    deck: Deck = field(default_factory=lambda: Deck("monster deck"))
    discard_pile: Deck = field(default_factory=lambda: Deck("monster discard"))
    slots: list[ActiveSlot] = field(default_factory=list)


@dataclass
class TreasureArea:
    deck: Deck = field(default_factory=lambda: Deck("treasure deck"))
    discard_pile: Deck = field(default_factory=lambda: Deck("treasure discard"))
    shop: list[TreasureCard | None] = field(default_factory=list)
    # player_id -> guessed roll, cleared after every dice roll
    crystal_ball_guesses: dict[str, int] = field(default_factory=dict)


class Board:
    """Game state plus the rule mutators that span it."""

    def __init__(
        self,
        players: list[Player],
        loot: LootArea | None = None,
        monster: MonsterArea | None = None,
        treasure: TreasureArea | None = None,
        chooser: ChoiceProvider | None = None,
        rng: random.Random | None = None,
        souls_to_win: int = 4,
    ):
        self.players = players
        self.loot = loot or LootArea()
        self.monster = monster or MonsterArea()
        self.treasure = treasure or TreasureArea()
        self.stack = EventStack()
        self.active_index = 0
        self.chooser = chooser or FirstOptionChooser()
        self.rng = rng or random.Random()
        self.souls_to_win = souls_to_win
        self.turn_number = 0
        # EndTurn resolutions so far
        self.turns_ended = 0

    # ========================================================================
    # Players
    # ========================================================================

    @property
    def active_player(self) -> Player:
        return self.players[self.active_index]

    def is_active(self, player: Player) -> bool:
        return player is self.active_player

    def get_player(self, player_id: str) -> Outcome:
        for player in self.players:
            if player.player_id == player_id:
                return Outcome.success(player)
        return Outcome.failure(f"No player {player_id}", ErrorCode.NOT_FOUND)

    def turn_order(self, start: Player | None = None) -> list[Player]:
        """Players in turn order, beginning with start (default: the active player)."""
        i = self.players.index(start) if start is not None else self.active_index
        return self.players[i:] + self.players[:i]

    def living_players(self, exclude: Player | None = None) -> list[Player]:
        return [p for p in self.turn_order() if not p.is_dead() and p is not exclude]

    def active_monsters(self) -> list[MonsterCard]:
        return [slot.peek() for slot in self.monster.slots if not slot.is_empty]

    def find_active_monster(self, card_id: int) -> Outcome:
        """Value is (slot index, monster)."""
        for i, slot in enumerate(self.monster.slots):
            if not slot.is_empty and slot.peek().card_id == card_id:
                return Outcome.success((i, slot.peek()))
        return Outcome.failure(f"Monster {card_id} is not active", ErrorCode.NOT_FOUND)

    def is_active_monster(self, monster: MonsterCard) -> bool:
        return any(slot.peek() is monster for slot in self.monster.slots)

    def item_owner(self, card_id: int) -> Player | None:
        for player in self.players:
            if player.has_item(card_id):
                return player
        return None

    # ========================================================================
    # Choices
    # ========================================================================

    def choose(
        self,
        player: Player,
        prompt: str,
        options: list[Any],
        choice_type: str = "option",
        labels: list[str] | None = None,
    ) -> int:
        """Ask player to pick one of options. A single option is picked without asking."""
        if not options:
            raise ValueError("choose() needs at least one option")
        if len(options) == 1:
            return 0
        choice = PendingChoice(
            player_id=player.player_id,
            choice_type=choice_type,
            prompt=prompt,
            options=options,
            labels=labels or [],
        )
        index = self.chooser.choose(self, choice)
        return index if 0 <= index < len(options) else 0

    def choose_player(self, player: Player, prompt: str, candidates: list[Player] | None = None) -> Player:
        candidates = candidates if candidates is not None else self.living_players()
        return candidates[self.choose(player, prompt, candidates, "player")]

    def combat_targets(self) -> list[CombatTargetRef]:
        monsters = [m for m in self.active_monsters() if not m.is_dead()]
        return [*self.living_players(), *monsters]

    def choose_combat_target(self, player: Player, prompt: str) -> CombatTargetRef | None:
        targets = self.combat_targets()
        if not targets:
            return None
        return targets[self.choose(player, prompt, targets, "target")]

    # ========================================================================
    # Stack and dice
    # ========================================================================

    def push(self, player: Player, payload: EventPayload, roll: int = 0) -> EventNode:
        return self.stack.push(Event(player=player, payload=payload, roll=roll))

    def roll_dice(self, player: Player, attack: bool = False) -> int:
        """Roll one die for player, applying roll modifiers. Clamped to [1, 6]."""
        n = self.rng.randint(1, 6) + self.roll_modifier(player, attack)
        if attack:
            player.consume_effect(ids.BUMBO)
        n = min(6, max(1, n))
        logger.debug("%s rolled %d", player.player_id, n)
        return n

    def roll_modifier(self, player: Player, attack: bool = False) -> int:
        """Sum of the modifiers roll_dice would apply. Reads flags without consuming them."""
        n = 0
        if player.has_effect(ids.THE_EMPRESS):
            n += 1
        if player.has_effect(ids.THE_HAUNT):
            n -= 1
        if attack:
            if player.has_effect(ids.BUMBO):
                n += 2
            if player.has_item(ids.EMPTY_VESSEL) and player.cents == 0:
                n += 1
            if player.has_item(ids.MEAT):
                n += 1
            if player.has_item(ids.SYNTHOIL):
                n += 1
        return n

    def push_roll(self, player: Player, attack: bool = False) -> EventNode:
        """Roll and push the result. It resolves first and decides the event below it."""
        return self.push(player, DiceRoll(self.roll_dice(player, attack)))

    def push_bound(self, player: Player, card: Card, effect: Effect, roll_required: bool) -> EventNode:
        """Push a triggered effect, followed by its die roll if it needs one."""
        node = self.push(player, TriggeredEffect(card=card, effect=effect))
        if roll_required:
            self.push_roll(player)
        return node

    # ========================================================================
    # Drawing and discarding
    # ========================================================================

    def _draw(self, deck: Deck, discard_pile: Deck) -> Outcome:
        if deck.is_empty and not discard_pile.is_empty:
            logger.info("Reshuffling %s into %s", discard_pile.name, deck.name)
            deck.merge(discard_pile, shuffle=True, rng=self.rng)
        return deck.pop()

    def draw_loot(self) -> Outcome:
        return self._draw(self.loot.deck, self.loot.discard_pile)

    def draw_treasure(self) -> Outcome:
        return self._draw(self.treasure.deck, self.treasure.discard_pile)

    def draw_monster(self) -> Outcome:
        return self._draw(self.monster.deck, self.monster.discard_pile)

    def draw_loot_cards(self, player: Player, n: int = 1) -> int:
        """Draw n loot cards into player's hand. Returns how many were drawn."""
        drawn = 0
        for _ in range(n):
            if ids.COMPOST in self.loot.active_effects:
                self.loot.active_effects.discard(ids.COMPOST)
                card = self.loot.discard_pile.pop()
                if not card:
                    card = self.draw_loot()
            else:
                card = self.draw_loot()
            if not card:
                logger.warning("No loot left for %s", player.player_id)
                break
            player.hand.append(card.value)
            drawn += 1
            if player.has_effect(ids.TWO_OF_CLUBS):
                extra = self.draw_loot()
                if extra:
                    player.hand.append(extra.value)
                    drawn += 1
        return drawn

    def gain_treasure(self, player: Player, n: int = 1) -> int:
        gained = 0
        for _ in range(n):
            card = self.draw_treasure()
            if not card:
                logger.warning("No treasure left for %s", player.player_id)
                break
            self.add_item(player, card.value)
            gained += 1
        return gained

    def add_item(self, player: Player, item: Item) -> None:
        player.add_card_to_board(item)
        if item.continuous is not None:
            item.continuous(self, player, item, False)
        logger.debug("%s gains %s", player.player_id, item.name)

    def remove_item(self, player: Player, item: Item) -> Outcome:
        removed = player.remove_item(item)
        if removed and item.continuous is not None:
            item.continuous(self, player, item, True)
        return removed

    def destroy_item(self, player: Player, item: Item) -> Outcome:
        removed = self.remove_item(player, item)
        if removed:
            self.discard(item)
            logger.info("%s loses %s", player.player_id, item.name)
        return removed

    def discard(self, card: Card) -> None:
        """Send a card to the discard pile of its own area."""
        if card.kind is CardKind.LOOT:
            self.loot.discard_pile.append(card)
        elif card.kind is CardKind.TREASURE:
            card.tapped = False
            card.counters = 0
            self.treasure.discard_pile.append(card)
        elif card.kind is CardKind.MONSTER:
            card.reset_stats()
            self.monster.discard_pile.append(card)

    def discard_hand_card(self, player: Player, index: int) -> Outcome:
        card = player.pop_hand_card(index)
        if card:
            self.discard(card.value)
        return card

    def choose_and_discard(self, player: Player, n: int = 1) -> int:
        discarded = 0
        for _ in range(n):
            if not player.hand:
                break
            i = self.choose(player, "Discard a loot card", player.hand, "card")
            self.discard_hand_card(player, i)
            discarded += 1
        return discarded

    def give_curse(self, player: Player, curse: MonsterCard) -> None:
        player.curses.append(curse)
        logger.info("%s is cursed with %s", player.player_id, curse.name)

    # ========================================================================
    # Damage
    # ========================================================================

    def damage_player_to_monster(self, player: Player, monster: MonsterCard, n: int, roll: int = 0) -> EventNode | None:
        if monster.is_dead():
            return None
        if (monster.card_id == ids.CARRION_QUEEN and roll != 6) or (
            monster.card_id == ids.PIN and roll == 6
        ):
            n = 0
        node = self.push(player, Damage(target=monster, n=n), roll)
        if monster.card_id == ids.THE_DUKE_OF_FLIES:
            fizzle = Effect(
                EffectKind.FIZZLE, player=player, target_node=node, on_rolls=frozenset({1})
            )
            self.push_bound(player, monster, fizzle, roll_required=True)
        return node

    def damage_monster_to_player(self, monster: MonsterCard, target: Player, n: int, roll: int = 0) -> EventNode | None:
        if target.is_dead():
            return None
        node = self.push(target, Damage(target=target, n=n, monster=monster), roll)
        self.prevent_damage_helper(target, node)
        return node

    def damage_player_to_player(self, source: Player, target: Player, n: int) -> EventNode | None:
        if target.is_dead():
            return None
        node = self.push(source, Damage(target=target, n=n))
        self.prevent_damage_helper(target, node)
        return node

    def damage_target(self, source: Player, target: CombatTargetRef, n: int) -> EventNode | None:
        if isinstance(target, Player):
            return self.damage_player_to_player(source, target, n)
        return self.damage_player_to_monster(source, target, n)

    def prevent_damage_helper(self, target: Player, node: EventNode) -> None:
        """Queue the damage-prevention passives target owns against node."""
        hairball = target.find_item(ids.GUPPYS_HAIRBALL)
        if hairball:
            effect = Effect(
                EffectKind.PREVENT_DAMAGE,
                player=target,
                amount=1,
                target_node=node,
                on_rolls=frozenset({6}),
            )
            self.push_bound(target, hairball.value, effect, roll_required=True)
        dead_cat = target.find_item(ids.THE_DEAD_CAT)
        if dead_cat and dead_cat.value.counters > 0:
            effect = Effect(
                EffectKind.PREVENT_DAMAGE,
                player=target,
                target_node=node,
                target_card=dead_cat.value,
                params={"spend_counters": True},
            )
            self.push_bound(target, dead_cat.value, effect, roll_required=False)

    def check_damage_required_effects(self, player: Player, next_node: EventNode | None) -> None:
        """
        Flag a pending cost that required player to survive damage.

        next_node is the node that resolves after the damage, i.e. the card
        whose activation cost was the damage.
        """
        if player.is_dead() or next_node is None or next_node.event.player is not player:
            return
        payload = next_node.event.payload
        if isinstance(payload, LootCardPlayed) and payload.card.card_id == ids.TEMPERANCE:
            player.active_effects.add(ids.TEMPERANCE)
        elif isinstance(payload, Activate) and payload.card.card_id == ids.GUPPYS_PAW:
            player.active_effects.add(ids.GUPPYS_PAW)

    # ========================================================================
    # Deaths
    # ========================================================================

    def kill_monster(self, player: Player, card_id: int) -> Outcome:
        """
        Kill the active monster with card_id.

        Pushes its on-death effect and its reward, hands out the soul,
        then checks the chained kills.
        """
        found = self.find_active_monster(card_id)
        if not found:
            return found
        slot_index, _ = found.value
        monster = self.monster.slots[slot_index].pop().value
        if monster.in_battle:
            for p in self.players:
                p.in_battle = False
        monster.reset_stats()
        logger.info("%s killed %s", player.player_id, monster.name)

        if monster.on_death is not None:
            bound = monster.on_death(ActivationContext(self, player, monster))
            if bound.ok:
                roll_required = bound.roll_required or card_id in (ids.RAGMAN, ids.WRATH)
                self.push_bound(player, monster, bound.effect, roll_required)

        if monster.is_boss:
            self.active_player.souls.append(monster)
            if card_id == ids.THE_HAUNT:
                self.active_player.consume_effect(ids.THE_HAUNT)
        else:
            self.discard(monster)

        for owner in self.players:
            if owner.has_item(ids.THE_MIDAS_TOUCH):
                owner.gain_cents(3)

        if monster.reward is not None:
            bound = monster.reward(self, player, monster)
            if bound.ok:
                self.push(player, MonsterReward(monster=monster, effect=bound.effect))
                if bound.roll_required:
                    self.push_roll(player)

        for chained in ids.CHAINED_KILLS:
            if chained != card_id:
                self.kill_monster(player, chained)
        return Outcome.success(monster)

    def kill_player(self, target: Player) -> EventNode:
        """Push target's death, giving death-prevention items a chance first."""
        node = self.push(target, CharacterDeath())
        for item_id, rolls in ((ids.BROKEN_ANKH, {6}), (ids.GUPPYS_COLLAR, {1, 2, 3})):
            item = target.find_item(item_id)
            if item:
                effect = Effect(
                    EffectKind.PREVENT_DEATH,
                    player=target,
                    target_node=node,
                    on_rolls=frozenset(rolls),
                )
                self.push_bound(target, item.value, effect, roll_required=True)
        one_up = target.find_item(ids.ONE_UP)
        if one_up:
            effect = Effect(
                EffectKind.PREVENT_DEATH,
                player=target,
                target_node=node,
                target_card=one_up.value,
                params={"destroy_source": True},
            )
            self.push_bound(target, one_up.value, effect, roll_required=False)
        return node

    def death_penalty(self, player: Player) -> None:
        """Pay the death penalties. shadow's owner takes what is lost."""
        for curse in list(player.curses):
            player.pop_curse(curse)
            self.discard(curse)
        for haunt_id in ids.HAUNTS:
            haunt = player.find_item(haunt_id)
            if not haunt:
                continue
            others = self.living_players(exclude=player) or [p for p in self.players if p is not player]
            if others:
                recipient = self.choose_player(player, f"Give {haunt.value.name} to", others)
                self.remove_item(player, haunt.value)
                self.add_item(recipient, haunt.value)

        shadow = next(
            (p for p in self.players if p is not player and p.has_item(ids.SHADOW)), None
        )
        chooser = shadow or player

        if player.hand:
            i = self.choose(chooser, f"{player.player_id} discards a loot card", player.hand, "card")
            card = player.pop_hand_card(i).value
            if shadow:
                shadow.hand.append(card)
            else:
                self.discard(card)

        destroyable = [item for item in player.all_items() if not item.eternal]
        if destroyable:
            i = self.choose(chooser, f"{player.player_id} destroys an item", destroyable, "card")
            self.destroy_item(player, destroyable[i])

        lost = player.lose_cents(1)
        if shadow:
            shadow.gain_cents(lost)

        player.tap_all()
        player.character.tapped = True
        player.in_battle = False
        logger.info("%s paid death penalties", player.player_id)

    # ========================================================================
    # Battle
    # ========================================================================

    def attack_bonus(self, player: Player) -> int:
        bonus = sum(1 for flag in ids.FIRST_ATTACK_BONUSES if player.consume_effect(flag))
        if player.has_item(ids.EMPTY_VESSEL) and not player.hand:
            bonus += 1
        return bonus

    def battle(self, player: Player, monster: MonsterCard, roll: int) -> EventNode | None:
        """Resolve one attack roll against monster."""
        if not self.is_active_monster(monster) or monster.is_dead():
            return None
        if roll >= monster.roll:
            n = player.character.ap + self.attack_bonus(player)
            logger.debug("%s hits %s for %d", player.player_id, monster.name, n)
            return self.damage_player_to_monster(player, monster, n, roll)
        n = monster.ap
        if monster.card_id == ids.HORF and roll == 2:
            n += 1
        elif monster.card_id in (ids.LEAPER, ids.MOM) and roll == 1:
            n *= 2
        logger.debug("%s misses %s and takes %d", player.player_id, monster.name, n)
        return self.damage_monster_to_player(monster, player, n, roll)

    # ========================================================================
    # Shop
    # ========================================================================

    def purchase_cost(self, player: Player) -> int:
        if player.has_effect(ids.CREDIT_CARD):
            return 0
        if player.has_item(ids.STEAMY_SALE):
            return DISCOUNT_SHOP_COST
        return SHOP_COST

    def buy_from_shop(self, player: Player, slot: int) -> Outcome:
        """Buy the item in a shop slot, or the top of the treasure deck with TOP_OF_DECK."""
        cost = self.purchase_cost(player)
        if player.cents < cost:
            return Outcome.failure(f"{player.player_id} cannot afford {cost}c", ErrorCode.VALIDATION)
        if slot == TOP_OF_DECK:
            drawn = self.draw_treasure()
            if not drawn:
                return drawn
            card = drawn.value
        else:
            if slot < 0 or slot >= len(self.treasure.shop):
                return Outcome.failure(f"No shop slot {slot}", ErrorCode.INDEX_OUT_OF_RANGE)
            card = self.treasure.shop[slot]
            if card is None:
                return Outcome.failure(f"Shop slot {slot} is empty", ErrorCode.NOT_FOUND)
            self.treasure.shop[slot] = None
        player.consume_effect(ids.CREDIT_CARD)
        player.lose_cents(cost)
        player.num_purchases = max(0, player.num_purchases - 1)
        self.add_item(player, card)
        logger.info("%s bought %s for %dc", player.player_id, card.name, cost)
        return Outcome.success(card)

    # ========================================================================
    # Field
    # ========================================================================

    def reveal_monster(self, player: Player, card: MonsterCard) -> bool:
        """
        Handle a bonus card or curse drawn from the monster deck.

        Returns True if card was a bonus card or curse (and so was not
        placed in a slot).
        """
        if not (card.is_bonus or card.is_curse):
            return False
        logger.info("%s revealed %s", player.player_id, card.name)
        if card.on_reveal is not None:
            bound = card.on_reveal(ActivationContext(self, player, card))
            if bound.ok:
                self.push_bound(player, card, bound.effect, bound.roll_required)
        if card.is_bonus:
            self.discard(card)
        return True

    def add_monster_to_slot(self, index: int, during_setup: bool = False) -> Outcome:
        """
        Draw monster cards until one lands in slot index.

        During setup, bonus cards and curses go to the bottom of the deck.
        """
        for _ in range(len(self.monster.deck) + len(self.monster.discard_pile) + 1):
            drawn = self.draw_monster()
            if not drawn:
                return drawn
            card = drawn.value
            if card.is_bonus or card.is_curse:
                if during_setup:
                    self.monster.deck.prepend(card)
                    continue
                self.reveal_monster(self.active_player, card)
                continue
            card.reset_stats()
            self.monster.slots[index].push(card)
            return Outcome.success(card)
        return Outcome.failure("Monster deck holds no monsters", ErrorCode.EMPTY_DECK)

    def check_the_field(self) -> list[Player]:
        """
        With an empty stack: check victory, then refill the shop and monster slots.

        Returns the winners, if any.
        """
        if not self.stack.is_empty:
            return []
        winners = self.check_victory()
        if winners:
            return winners
        for i, card in enumerate(self.treasure.shop):
            if card is None:
                drawn = self.draw_treasure()
                if drawn:
                    self.treasure.shop[i] = drawn.value
        for i, slot in enumerate(self.monster.slots):
            if slot.is_empty:
                self.add_monster_to_slot(i)
        return []

    def souls_needed(self, player: Player) -> int:
        if any(curse.card_id == ids.CURSE_OF_LOSS for curse in player.curses):
            return self.souls_to_win + 1
        return self.souls_to_win

    def check_victory(self) -> list[Player]:
        return [p for p in self.players if p.soul_count() >= self.souls_needed(p)]

    # ========================================================================
    # Turns
    # ========================================================================

    def start_turn(self, player: Player) -> None:
        self.turn_number += 1
        player.reset_counters()
        player.recharge_all()
        for flag in ids.FIRST_ATTACK_BONUSES:
            if player.has_item(flag):
                player.active_effects.add(flag)
        bumbo = player.find_item(ids.BUMBO)
        if bumbo and bumbo.value.counters >= 1:
            player.active_effects.add(ids.BUMBO)
        logger.info("Turn %d: %s", self.turn_number, player.describe())

    def end_turn(self, player: Player) -> None:
        """End-of-turn cleanup, then hand the turn to the next player."""
        for p in self.players:
            for flag in (ids.TWO_OF_CLUBS, ids.THE_EMPRESS, ids.CREDIT_CARD, ids.BLANK_CARD,
                         ids.TEMPERANCE, ids.GUPPYS_PAW, *ids.FIRST_ATTACK_BONUSES, ids.BUMBO):
                p.consume_effect(flag)
            p.reset_stats()
            p.in_battle = False
        for monster in self.active_monsters():
            monster.reset_stats()
        self.treasure.crystal_ball_guesses.clear()
        self.turns_ended += 1
        self.advance_turn()

    def advance_turn(self) -> Player:
        """Move to the next player, skipping (and clearing) skip-next-turn flags."""
        n = len(self.players)
        i = self.active_index
        for _ in range(n):
            i = (i + 1) % n
            candidate = self.players[i]
            if candidate.skip_next_turn:
                candidate.skip_next_turn = False
                logger.info("%s skips a turn", candidate.player_id)
                continue
            break
        self.active_index = i
        return self.active_player

    def force_end_of_turn(self) -> int:
        """End the active player's turn now, discarding everything on the stack."""
        self.active_player.force_end = True
        drained = self.stack.drain()
        logger.info("Forced end of %s's turn (%d events discarded)", self.active_player.player_id, drained)
        return drained
