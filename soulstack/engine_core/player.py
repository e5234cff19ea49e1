"""
Player - Resources, item areas and per-turn counters.

Items are kept sorted by card id so lookups and listings are
deterministic. Effects that need other zones go through the Board;
everything here is local to one player.
"""

from __future__ import annotations
from bisect import insort
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from . import ids
from .cards import Card, CharacterCard, LootCard, MonsterCard, TreasureCard
from .errors import ErrorCode, Outcome

if TYPE_CHECKING:
    from .cards import Item


@dataclass(eq=False)
class Player:
    """A seat at the table and its character."""
    player_id: str
    character: CharacterCard
    active_items: list[TreasureCard] = field(default_factory=list)
    passive_items: list[Item] = field(default_factory=list)
    hand: list[LootCard] = field(default_factory=list)
    souls: list[Card] = field(default_factory=list)
    curses: list[MonsterCard] = field(default_factory=list)
    cents: int = 0

    # Per-turn counters
    base_num_attacks: int = 1
    base_num_purchases: int = 1
    base_num_loot_played: int = 1
    num_attacks: int = 0
    num_purchases: int = 0
    num_loot_played: int = 0
    in_battle: bool = False
    force_end: bool = False
    skip_next_turn: bool = False

    # One-shot flags keyed by the id of the card that set them
    active_effects: set[int] = field(default_factory=set)

    is_human: bool = False

    @property
    def name(self) -> str:
        return f"{self.player_id} ({self.character.name})"

    def describe(self) -> str:
        return (
            f"{self.name} HP {self.character.hp}/{self.character.base_health} "
            f"AP {self.character.ap} {self.cents}c souls {self.soul_count()}"
        )

    # ========================================================================
    # Combat
    # ========================================================================

    def is_dead(self) -> bool:
        return self.character.is_dead()

    def decrease_hp(self, n: int) -> None:
        self.character.decrease_hp(n)

    def heal(self, n: int) -> None:
        self.character.heal(n)

    # ========================================================================
    # Items
    # ========================================================================

    def add_card_to_board(self, item: Item) -> None:
        """Place an item in its area, keeping the area sorted by id."""
        target = self.passive_items if item.passive else self.active_items
        insort(target, item, key=lambda c: c.card_id)

    def remove_item(self, item: Item) -> Outcome:
        for area in (self.active_items, self.passive_items):
            for i, card in enumerate(area):
                if card is item:
                    return Outcome.success(area.pop(i))
        return Outcome.failure(f"{item.name} is not owned by {self.player_id}", ErrorCode.NOT_FOUND)

    def find_item(self, card_id: int) -> Outcome:
        for card in self.all_items():
            if card.card_id == card_id:
                return Outcome.success(card)
        return Outcome.failure(f"{self.player_id} has no item {card_id}", ErrorCode.NOT_FOUND)

    def has_item(self, card_id: int) -> bool:
        return any(card.card_id == card_id for card in self.all_items())

    def all_items(self) -> list[Item]:
        return [*self.active_items, *self.passive_items]

    def usable_items(self) -> list[TreasureCard]:
        """Active items that are ready, plus paid items."""
        return [
            item for item in self.active_items
            if item.activator is not None and (item.paid or not item.tapped)
        ]

    def tap_all(self) -> None:
        for item in self.active_items:
            if item.active:
                item.tapped = True

    def recharge_all(self) -> None:
        self.character.tapped = False
        for item in self.active_items:
            item.tapped = False

    # ========================================================================
    # Flags
    # ========================================================================

    def has_effect(self, card_id: int) -> bool:
        return card_id in self.active_effects

    def consume_effect(self, card_id: int) -> bool:
        """Clear a one-shot flag. Returns whether it was set."""
        if card_id in self.active_effects:
            self.active_effects.discard(card_id)
            return True
        return False

    # ========================================================================
    # Cents and cards
    # ========================================================================

    def gain_cents(self, n: int) -> None:
        if n <= 0:
            return
        bumbo = self.find_item(ids.BUMBO)
        if bumbo:
            self._add_bumbo_counters(bumbo.value, n)
            return
        if self.has_item(ids.COUNTERFEIT_PENNY):
            n += 1
        self.cents += n

    def _add_bumbo_counters(self, bumbo: Item, n: int) -> None:
        """Cents become counters; crossing 1, 10 and 25 counters grants bonuses."""
        before = bumbo.counters
        bumbo.add_counters(n)
        after = bumbo.counters
        if before < 1 <= after and not self.in_battle:
            self.active_effects.add(ids.BUMBO)
        if before < 10 <= after:
            self.character.increase_base_attack(1)
        if before < 25 <= after:
            self.num_attacks += 99
            self.base_num_attacks += 99

    def lose_cents(self, n: int) -> int:
        """Lose up to n cents. Returns the amount actually lost."""
        lost = min(self.cents, max(0, n))
        self.cents -= lost
        return lost

    def pop_hand_card(self, index: int) -> Outcome:
        if index < 0 or index >= len(self.hand):
            return Outcome.failure(
                f"{self.player_id} has no hand card {index}", ErrorCode.INDEX_OUT_OF_RANGE
            )
        return Outcome.success(self.hand.pop(index))

    def pop_curse(self, curse: MonsterCard) -> Outcome:
        for i, card in enumerate(self.curses):
            if card is curse:
                return Outcome.success(self.curses.pop(i))
        return Outcome.failure(f"{self.player_id} does not hold {curse.name}", ErrorCode.NOT_FOUND)

    def soul_count(self) -> int:
        return sum(2 if soul.card_id in ids.DOUBLE_SOULS else 1 for soul in self.souls)

    # ========================================================================
    # Turn bookkeeping
    # ========================================================================

    def reset_counters(self) -> None:
        self.num_attacks = self.base_num_attacks
        self.num_purchases = self.base_num_purchases
        self.num_loot_played = self.base_num_loot_played
        self.in_battle = False
        self.force_end = False

    def reset_stats(self) -> None:
        self.character.reset_stats()
