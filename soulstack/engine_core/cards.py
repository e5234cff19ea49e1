"""
Card Model - The closed set of card variants and their capabilities.

Variants:
1. CharacterCard - a player's avatar (CombatTarget)
2. LootCard - played from hand; trinkets stay in play (ItemCard)
3. MonsterCard - fought in active slots; also bonus cards and curses (CombatTarget)
4. TreasureCard - active, paid or passive items (ItemCard)

Card instances compare by identity: two copies of "A Penny" are
different cards even though they share a card_id.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .board import Board
    from .effects import ActivationContext, BindResult
    from .events import EventNode
    from .player import Player


class CardKind(Enum):
    """Card variants."""
    CHARACTER = "character"
    LOOT = "loot"
    MONSTER = "monster"
    TREASURE = "treasure"


# Hook signatures. Hooks never mutate state; they return a BindResult
# whose Effect is interpreted later.
Activator = Callable[["ActivationContext"], "BindResult"]
EventHook = Callable[["Board", "Player", "Card", "EventNode"], "BindResult"]
ContinuousHook = Callable[["Board", "Player", "Card", bool], None]
RewardHook = Callable[["Board", "Player", "MonsterCard"], "BindResult"]


@dataclass(eq=False)
class Card:
    """Identity shared by every variant."""
    card_id: int
    name: str
    text: str = ""

    kind: ClassVar[CardKind]

    def header(self) -> str:
        return f"{self.name} [{self.kind.value}]"

    def row(self) -> str:
        """One-line description for listings."""
        if self.text:
            return f"{self.name}: {self.text}"
        return self.name


class CombatTarget:
    """
    Capability of cards that fight: characters and monsters.

    Requires hp, ap, base_health and base_attack attributes.
    heal() never raises HP above base_health; increase_hp() is a
    temporary bonus that lasts until the stats are reset.
    """

    hp: int
    ap: int
    base_health: int
    base_attack: int

    def increase_ap(self, n: int) -> None:
        self.ap += n

    def decrease_ap(self, n: int) -> None:
        self.ap = max(0, self.ap - n)

    def increase_base_attack(self, n: int) -> None:
        self.base_attack += n
        self.ap += n

    def decrease_base_attack(self, n: int) -> None:
        self.base_attack = max(0, self.base_attack - n)
        self.ap = max(0, self.ap - n)

    def increase_base_health(self, n: int) -> None:
        self.base_health += n
        self.hp += n

    def decrease_base_health(self, n: int) -> None:
        self.base_health = max(0, self.base_health - n)
        self.hp = min(self.hp, self.base_health)

    def increase_hp(self, n: int) -> None:
        self.hp += n

    def decrease_hp(self, n: int) -> None:
        self.hp = max(0, self.hp - n)

    def heal(self, n: int) -> None:
        if self.hp < self.base_health:
            self.hp = min(self.base_health, self.hp + n)

    def is_dead(self) -> bool:
        return self.hp == 0


class ItemCard:
    """
    Capability of cards that sit in a player's item area.

    Requires counters, eternal, passive, continuous and on_event attributes.
    """

    counters: int
    eternal: bool
    passive: bool
    continuous: ContinuousHook | None
    on_event: EventHook | None

    def add_counters(self, n: int) -> None:
        self.counters += n

    def remove_counters(self, n: int) -> bool:
        """Remove n counters. Returns False (and changes nothing) if short."""
        if n > self.counters:
            return False
        self.counters -= n
        return True


@dataclass(eq=False)
class CharacterCard(Card, CombatTarget):
    """A player's character. Activating it lets the player play a loot card."""
    base_health: int = 2
    base_attack: int = 1
    hp: int = field(default=-1)
    ap: int = field(default=-1)
    tapped: bool = True

    kind: ClassVar[CardKind] = CardKind.CHARACTER

    def __post_init__(self):
        if self.hp < 0:
            self.hp = self.base_health
        if self.ap < 0:
            self.ap = self.base_attack

    def reset_stats(self) -> None:
        self.hp = self.base_health
        self.ap = self.base_attack

    def row(self) -> str:
        state = "tapped" if self.tapped else "ready"
        return f"{self.name} HP {self.hp}/{self.base_health} AP {self.ap} ({state})"


@dataclass(eq=False)
class LootCard(Card, ItemCard):
    """A loot card. Trinkets enter the passive item area instead of resolving."""
    activator: Activator | None = None
    trinket: bool = False
    counters: int = 0
    eternal: bool = False
    continuous: ContinuousHook | None = None
    on_event: EventHook | None = None

    kind: ClassVar[CardKind] = CardKind.LOOT

    @property
    def passive(self) -> bool:
        return self.trinket


@dataclass(eq=False)
class MonsterCard(Card, CombatTarget):
    """
    A card from the monster deck.

    Cards with zero base health that are not curses are bonus cards:
    revealing one runs on_reveal instead of placing it in a slot.
    """
    base_health: int = 0
    base_roll: int = 0
    base_attack: int = 0
    hp: int = field(default=-1)
    ap: int = field(default=-1)
    roll: int = field(default=-1)
    is_boss: bool = False
    is_curse: bool = False
    in_battle: bool = False
    on_death: Activator | None = None
    on_reveal: Activator | None = None
    on_event: EventHook | None = None
    reward: RewardHook | None = None

    kind: ClassVar[CardKind] = CardKind.MONSTER

    def __post_init__(self):
        if self.hp < 0:
            self.hp = self.base_health
        if self.ap < 0:
            self.ap = self.base_attack
        if self.roll < 0:
            self.roll = self.base_roll

    @property
    def is_bonus(self) -> bool:
        return self.base_health == 0 and not self.is_curse

    def increase_roll(self, n: int) -> None:
        self.roll = min(6, self.roll + n)

    def decrease_roll(self, n: int) -> None:
        self.roll = max(1, self.roll - n)

    def reset_stats(self) -> None:
        self.hp = self.base_health
        self.ap = self.base_attack
        self.roll = self.base_roll
        self.in_battle = False

    def row(self) -> str:
        if self.is_curse:
            return f"{self.name} (curse)"
        if self.is_bonus:
            return f"{self.name} (bonus)"
        return f"{self.name} HP {self.hp} Roll {self.roll}+ AP {self.ap}"


@dataclass(eq=False)
class TreasureCard(Card, ItemCard):
    """A treasure item: active (tap), paid (cost, no tap) or passive."""
    activator: Activator | None = None
    passive: bool = False
    paid: bool = False
    eternal: bool = False
    tapped: bool = False
    counters: int = 0
    continuous: ContinuousHook | None = None
    on_event: EventHook | None = None

    kind: ClassVar[CardKind] = CardKind.TREASURE

    @property
    def active(self) -> bool:
        return not self.passive and not self.paid

    def row(self) -> str:
        tags = []
        if self.eternal:
            tags.append("eternal")
        if self.active:
            tags.append("tapped" if self.tapped else "ready")
        elif self.paid:
            tags.append("paid")
        if self.counters:
            tags.append(f"{self.counters} counters")
        suffix = f" ({', '.join(tags)})" if tags else ""
        return f"{self.name}{suffix}"


Item = Union[LootCard, TreasureCard]
AnyCard = Union[CharacterCard, LootCard, MonsterCard, TreasureCard]
