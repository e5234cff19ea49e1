"""
Pydantic Schemas - Read-only views of Board state.

These models are the contract between the engine and anything that
shows or records a game: the console display and `simulate --json`.
Views are built from a live Board and never write back to it.
"""

from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, Field

from ..engine_core.board import Board
from ..engine_core.cards import Card, ItemCard, MonsterCard, TreasureCard
from ..engine_core.events import EventNode
from ..engine_core.player import Player


# =============================================================================
# Shared Models
# =============================================================================

class CardView(BaseModel):
    """Card information for display."""
    card_id: int
    name: str
    kind: str
    text: str = ""
    counters: Optional[int] = None
    tapped: Optional[bool] = None
    eternal: Optional[bool] = None
    hp: Optional[int] = None
    ap: Optional[int] = None
    roll: Optional[int] = None

    @classmethod
    def from_card(cls, card: Card) -> CardView:
        view = cls(card_id=card.card_id, name=card.name, kind=card.kind.value, text=card.text)
        if isinstance(card, ItemCard):
            view.counters = card.counters
            view.eternal = card.eternal
        if isinstance(card, TreasureCard) and card.active:
            view.tapped = card.tapped
        if isinstance(card, MonsterCard) and not (card.is_bonus or card.is_curse):
            view.hp, view.ap, view.roll = card.hp, card.ap, card.roll
        return view


class PlayerView(BaseModel):
    """Player information for display."""
    player_id: str
    character: str
    hp: int
    ap: int
    cents: int
    souls: int = Field(description="Soul count, with double souls counted twice")
    hand_size: int
    is_active: bool = False
    in_battle: bool = False
    active_items: list[CardView] = Field(default_factory=list)
    passive_items: list[CardView] = Field(default_factory=list)
    curses: list[CardView] = Field(default_factory=list)

    @classmethod
    def from_player(cls, board: Board, player: Player) -> PlayerView:
        return cls(
            player_id=player.player_id,
            character=player.character.name,
            hp=player.character.hp,
            ap=player.character.ap,
            cents=player.cents,
            souls=player.soul_count(),
            hand_size=len(player.hand),
            is_active=board.is_active(player),
            in_battle=player.in_battle,
            active_items=[CardView.from_card(c) for c in player.active_items],
            passive_items=[CardView.from_card(c) for c in player.passive_items],
            curses=[CardView.from_card(c) for c in player.curses],
        )


class EventView(BaseModel):
    """One pending event on the stack."""
    node_id: int
    player_id: str
    event_type: str
    description: str
    roll: int = 0

    @classmethod
    def from_node(cls, node: EventNode) -> EventView:
        return cls(
            node_id=node.node_id,
            player_id=node.event.player.player_id,
            event_type=type(node.event.payload).__name__,
            description=node.event.describe(),
            roll=node.event.roll,
        )


class BoardView(BaseModel):
    """Complete public game state."""
    turn_number: int
    active_player_id: str
    players: list[PlayerView]
    monsters: list[Optional[CardView]] = Field(description="Active monster per slot; None for an empty slot")
    shop: list[Optional[CardView]]
    stack: list[EventView] = Field(default_factory=list, description="Top of the stack first")
    loot_deck_size: int = 0
    monster_deck_size: int = 0
    treasure_deck_size: int = 0

    @classmethod
    def from_board(cls, board: Board) -> BoardView:
        return cls(
            turn_number=board.turn_number,
            active_player_id=board.active_player.player_id,
            players=[PlayerView.from_player(board, p) for p in board.players],
            monsters=[None if slot.is_empty else CardView.from_card(slot.peek()) for slot in board.monster.slots],
            shop=[None if card is None else CardView.from_card(card) for card in board.treasure.shop],
            stack=[EventView.from_node(node) for node in board.stack],
            loot_deck_size=len(board.loot.deck),
            monster_deck_size=len(board.monster.deck),
            treasure_deck_size=len(board.treasure.deck),
        )


class GameSummary(BaseModel):
    """Outcome of one simulated game."""
    seed: Optional[int] = None
    winners: list[str] = Field(default_factory=list)
    turns_played: int
    reason: str
    final_state: Optional[BoardView] = None
