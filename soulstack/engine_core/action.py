"""
Action System - Player actions and their results.

Actions represent the decisions offered at a priority point:
1. Turn actions (play loot, buy, attack, end turn) for the active player
2. Responses (activate character or item) for any player
3. Passing priority

Every action is validated against the legal-action set before the
reducer applies it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import ErrorCode


class ActionType(Enum):
    """Types of player actions."""
    PLAY_LOOT = "play_loot"
    BUY_ITEM = "buy_item"
    ATTACK = "attack"
    ACTIVATE_CHARACTER = "activate_character"
    ACTIVATE_ITEM = "activate_item"
    END_TURN = "end_turn"
    PASS = "pass"


@dataclass
class ActionPayload:
    """
    Parameters of an action.

    hand_index selects a loot card, item_index an active item and
    monster_index a monster slot (None attacks the monster deck).
    """
    player_id: str
    hand_index: int | None = None
    item_index: int | None = None
    monster_index: int | None = None
    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class Action:
    """A complete action offered to, or chosen by, a player."""
    action_type: ActionType
    payload: ActionPayload
    label: str = ""

    def describe(self) -> str:
        return self.label or self.action_type.value

    def matches(self, other: Action) -> bool:
        return (
            self.action_type == other.action_type
            and self.payload.player_id == other.payload.player_id
            and self.payload.hand_index == other.payload.hand_index
            and self.payload.item_index == other.payload.item_index
            and self.payload.monster_index == other.payload.monster_index
        )

    @classmethod
    def play_loot(cls, player_id: str, hand_index: int, label: str = "") -> Action:
        """Factory for playing a loot card from hand."""
        return cls(ActionType.PLAY_LOOT, ActionPayload(player_id, hand_index=hand_index), label)

    @classmethod
    def buy_item(cls, player_id: str) -> Action:
        """Factory for declaring a purchase."""
        return cls(ActionType.BUY_ITEM, ActionPayload(player_id), "Buy an item")

    @classmethod
    def attack(cls, player_id: str, monster_index: int | None, label: str = "") -> Action:
        """Factory for attacking a monster slot, or the monster deck with None."""
        return cls(ActionType.ATTACK, ActionPayload(player_id, monster_index=monster_index), label)

    @classmethod
    def activate_character(cls, player_id: str) -> Action:
        return cls(ActionType.ACTIVATE_CHARACTER, ActionPayload(player_id), "Activate your character")

    @classmethod
    def activate_item(cls, player_id: str, item_index: int, label: str = "") -> Action:
        return cls(ActionType.ACTIVATE_ITEM, ActionPayload(player_id, item_index=item_index), label)

    @classmethod
    def end_turn(cls, player_id: str) -> Action:
        return cls(ActionType.END_TURN, ActionPayload(player_id), "End your turn")

    @classmethod
    def pass_priority(cls, player_id: str) -> Action:
        return cls(ActionType.PASS, ActionPayload(player_id), "Do nothing")


@dataclass
class ActionResult:
    """
    Result of applying an action.

    acted is False when the player passed; the response window uses it
    to decide whether another round of responses is needed.
    """
    success: bool
    acted: bool = False
    error: str | None = None
    error_code: ErrorCode | None = None

    # Human-readable changes, for the display layer
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = ErrorCode.VALIDATION) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def ok(cls, *changes: str, acted: bool = True) -> ActionResult:
        """Create a success result."""
        return cls(success=True, acted=acted, state_changes=list(changes))
