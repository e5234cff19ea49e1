"""
Four Souls - The card game the engine plays.

Players fight monsters, buy treasures and play loot to collect souls;
the first to the soul threshold wins. Key mechanics:
- Every action and reaction goes through the shared event stack
- Dice rolls are events that other players can change before they land
- Items trigger on events or modify stats while held

This module contains:
- Characters and eternal starting items
- Loot, treasure and monster deck catalogs
- Deck builders per RuleSet
- new_game setup
"""

from .catalog import catalog_sections, characters, loot_deck, monster_deck, starting_item, treasure_deck
from .entries import FOUR_SOULS_PLUS, KICKSTARTER, CatalogEntry
from .setup import new_game

__all__ = [
    "catalog_sections",
    "characters",
    "loot_deck",
    "monster_deck",
    "starting_item",
    "treasure_deck",
    "FOUR_SOULS_PLUS",
    "KICKSTARTER",
    "CatalogEntry",
    "new_game",
]
