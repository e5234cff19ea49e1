"""
Four Souls Catalog - Deck builders per RuleSet.

Every builder returns fresh card instances, so decks from two games never
share mutable state.
"""

from __future__ import annotations

from ...config import RuleSet
from ...engine_core.cards import Card, CharacterCard, TreasureCard
from .characters import CHARACTERS, STARTING_ITEMS
from .entries import CatalogEntry, filter_entries
from .loot import LOOT_CARDS
from .monsters import MONSTER_CARDS
from .treasure import TREASURE_CARDS


def _build(entries: list[CatalogEntry], rules: RuleSet) -> list[Card]:
    cards: list[Card] = []
    for entry in filter_entries(entries, rules):
        cards.extend(entry.to_cards())
    return cards


def loot_deck(rules: RuleSet) -> list[Card]:
    return _build(LOOT_CARDS, rules)


def treasure_deck(rules: RuleSet) -> list[Card]:
    return _build(TREASURE_CARDS, rules)


def monster_deck(rules: RuleSet) -> list[Card]:
    return _build(MONSTER_CARDS, rules)


def characters(rules: RuleSet) -> list[CharacterCard]:
    return _build(CHARACTERS, rules)


def starting_item(character: CharacterCard) -> TreasureCard:
    """A fresh copy of the character's eternal starting item."""
    return STARTING_ITEMS[character.card_id].build()


def catalog_sections(rules: RuleSet) -> dict[str, list[CatalogEntry]]:
    """Entries enabled by rules, grouped for listings."""
    return {
        "Characters": filter_entries(CHARACTERS, rules),
        "Starting items": [STARTING_ITEMS[entry.sample.card_id] for entry in filter_entries(CHARACTERS, rules)],
        "Loot": filter_entries(LOOT_CARDS, rules),
        "Treasure": filter_entries(TREASURE_CARDS, rules),
        "Monsters": filter_entries(MONSTER_CARDS, rules),
    }
