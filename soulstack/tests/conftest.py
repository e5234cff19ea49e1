"""
Pytest fixtures for Soulstack tests.
"""

import random

import pytest

from ..config import GameConfig
from ..engine_core import ids
from ..engine_core.board import Board, LootArea, MonsterArea, TreasureArea
from ..engine_core.cards import CharacterCard, LootCard, MonsterCard, TreasureCard
from ..engine_core.choices import ScriptedChooser
from ..engine_core.player import Player
from ..engine_core.reducer import Reducer
from ..engine_core.resolver import Resolver
from ..engine_core.zones import ActiveSlot, Deck
from ..games.four_souls import new_game
from ..games.four_souls.hooks import gain_cents, simple


def make_penny() -> LootCard:
    """A loot card that gains 1c."""
    return LootCard(card_id=ids.A_PENNY, name="A Penny!", activator=simple(gain_cents(1)))


def make_item(card_id: int = 9001, name: str = "Test Item", **fields) -> TreasureCard:
    """A treasure with no hooks unless fields add them."""
    return TreasureCard(card_id=card_id, name=name, **fields)


def make_monster(card_id: int = ids.GAPER, name: str = "Gaper", health: int = 2, roll: int = 4,
                 attack: int = 1, **fields) -> MonsterCard:
    return MonsterCard(card_id=card_id, name=name, base_health=health, base_roll=roll,
                       base_attack=attack, **fields)


@pytest.fixture
def chooser() -> ScriptedChooser:
    """Answers every choice with the first option unless given answers."""
    return ScriptedChooser()


@pytest.fixture
def alice() -> Player:
    return Player(player_id="p1", character=CharacterCard(card_id=ids.ISAAC, name="Isaac"))


@pytest.fixture
def bob() -> Player:
    return Player(player_id="p2", character=CharacterCard(card_id=ids.CAIN, name="Cain"))


@pytest.fixture
def gaper() -> MonsterCard:
    """A plain 2 HP monster, hit on 4+, attack 1."""
    return make_monster()


@pytest.fixture
def board(alice, bob, gaper, chooser) -> Board:
    """
    A hand-built two-player board on p1's first turn.

    One monster slot holds the Gaper; the loot deck holds pennies and
    every other deck starts empty.
    """
    board = Board(
        players=[alice, bob],
        loot=LootArea(deck=Deck("loot deck", [make_penny() for _ in range(6)])),
        monster=MonsterArea(slots=[ActiveSlot([gaper])]),
        treasure=TreasureArea(shop=[None]),
        chooser=chooser,
        rng=random.Random(0),
    )
    board.start_turn(alice)
    return board


@pytest.fixture
def resolver(board) -> Resolver:
    return Resolver(board)


@pytest.fixture
def reducer(board) -> Reducer:
    return Reducer(board)


@pytest.fixture
def seeded_game() -> Board:
    """A full two-player game from the catalog, seed 1."""
    return new_game(GameConfig(seed=1))
