"""
Four Souls Game Setup - Creates the initial Board.

This module handles:
- Building and shuffling the three decks with a seeded RNG
- Dealing characters without replacement, plus their eternal items
- Starting hands and cents
- Filling the monster slots and the shop

The first turn is started by the game loop, which pushes StartOfTurn
for the active player.
"""

from __future__ import annotations
import copy
import logging
import random

from ...config import GameConfig
from ...engine_core import ids
from ...engine_core.board import Board, LootArea, MonsterArea, TreasureArea
from ...engine_core.choices import ChoiceProvider
from ...engine_core.player import Player
from ...engine_core.zones import ActiveSlot, Deck
from . import catalog

logger = logging.getLogger(__name__)


def new_game(config: GameConfig | None = None, chooser: ChoiceProvider | None = None) -> Board:
    """
    Set up a new game.

    Args:
        config: Validated settings (defaults if not provided)
        chooser: Answers every choice; seat routing is the caller's concern

    Returns:
        Board with the field filled, ready for the first turn
    """
    config = config or GameConfig()
    rng = random.Random(config.seed)

    players = _create_players(config, rng)
    board = Board(
        players=players,
        loot=LootArea(deck=_create_deck("loot deck", catalog.loot_deck(config.rules), rng)),
        monster=MonsterArea(deck=_create_deck("monster deck", catalog.monster_deck(config.rules), rng)),
        treasure=TreasureArea(deck=_create_deck("treasure deck", catalog.treasure_deck(config.rules), rng)),
        chooser=chooser,
        rng=rng,
        souls_to_win=config.souls_to_win,
    )

    for player in players:
        board.add_item(player, catalog.starting_item(player.character))
        board.draw_loot_cards(player, config.starting_hand)
        player.cents = config.starting_cents
        if player.character.card_id == ids.THE_LOST:
            # The Lost starts the game with a soul of its own
            player.souls.append(copy.copy(player.character))

    board.monster.slots = [ActiveSlot() for _ in range(config.monster_slots)]
    for i in range(config.monster_slots):
        board.add_monster_to_slot(i, during_setup=True)

    board.treasure.shop = [None] * config.shop_slots
    for i in range(config.shop_slots):
        drawn = board.draw_treasure()
        if drawn:
            board.treasure.shop[i] = drawn.value

    logger.info(
        "New game: %s",
        ", ".join(p.name for p in players),
    )
    return board


def _create_deck(name: str, cards: list, rng: random.Random) -> Deck:
    deck = Deck(name, cards)
    deck.shuffle(rng)
    return deck


def _create_players(config: GameConfig, rng: random.Random) -> list[Player]:
    """Deal one character to each seat, without replacement."""
    pool = catalog.characters(config.rules)
    dealt = rng.sample(pool, config.num_players)
    return [
        Player(player_id=f"p{i + 1}", character=character)
        for i, character in enumerate(dealt)
    ]
