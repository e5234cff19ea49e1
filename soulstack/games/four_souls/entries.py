"""
Catalog Entries - Declarative card records.

A CatalogEntry describes a card once and builds fresh instances on
demand, so every game gets its own mutable copies. Entries tagged with
an expansion are only dealt when the RuleSet enables it.
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import partial
from typing import Callable

from ...config import RuleSet
from ...engine_core.cards import Card, LootCard, MonsterCard, TreasureCard

KICKSTARTER = "kickstarter"
FOUR_SOULS_PLUS = "four_souls_plus"


@dataclass(frozen=True)
class CatalogEntry:
    """
    One card design and how many copies of it are in the deck.

    This is a convenience class for defining cards.
    Gets converted to engine cards with to_cards().
    """
    build: Callable[[], Card]
    copies: int = 1
    expansion: str | None = None

    def to_cards(self) -> list[Card]:
        return [self.build() for _ in range(self.copies)]

    def included(self, rules: RuleSet) -> bool:
        return self.expansion is None or bool(getattr(rules, self.expansion))

    @property
    def sample(self) -> Card:
        """A throwaway instance, for listings."""
        return self.build()


def loot_card(card_id: int, name: str, text: str = "", copies: int = 1, expansion: str | None = None, **fields) -> CatalogEntry:
    return CatalogEntry(partial(LootCard, card_id=card_id, name=name, text=text, **fields), copies, expansion)


def trinket(card_id: int, name: str, text: str = "", expansion: str | None = None, **fields) -> CatalogEntry:
    return loot_card(card_id, name, text, expansion=expansion, trinket=True, **fields)


def treasure(card_id: int, name: str, text: str = "", expansion: str | None = None, **fields) -> CatalogEntry:
    return CatalogEntry(partial(TreasureCard, card_id=card_id, name=name, text=text, **fields), 1, expansion)


def monster(card_id: int, name: str, health: int = 0, roll: int = 0, attack: int = 0,
            text: str = "", copies: int = 1, expansion: str | None = None, **fields) -> CatalogEntry:
    build = partial(
        MonsterCard,
        card_id=card_id,
        name=name,
        text=text,
        base_health=health,
        base_roll=roll,
        base_attack=attack,
        **fields,
    )
    return CatalogEntry(build, copies, expansion)


def filter_entries(entries: list[CatalogEntry], rules: RuleSet) -> list[CatalogEntry]:
    return [entry for entry in entries if entry.included(rules)]
