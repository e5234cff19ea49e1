"""
Reducer - Applies a chosen action to the Board.

The reducer is the single entry point for player decisions.
All player-initiated mutation goes through apply().

Design principles:
- Validates against the legal-action set before applying
- Returns ActionResult with success/failure; a rejected action leaves
  the Board unchanged
- Turn actions push their events; the resolver does the rest
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Callable, TYPE_CHECKING

from .action import Action, ActionResult, ActionType
from .action_generator import ActionGenerator
from .activation import activate_character, activate_item, play_loot_card
from .errors import ErrorCode
from .events import DeclareAttack, EndTurn, IntentionToAttack, IntentionToPurchase

if TYPE_CHECKING:
    from .board import Board
    from .player import Player

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to a Board.

    Stateless apart from the Board it drives.
    """
    board: Board
    generator: ActionGenerator = field(init=False)

    def __post_init__(self):
        self.generator = ActionGenerator(self.board)

    def apply(self, action: Action, responding: bool = False) -> ActionResult:
        """
        Apply an action for the player named in its payload.

        responding restricts the legal set to reactions.
        """
        found = self.board.get_player(action.payload.player_id)
        if not found:
            return ActionResult.failure(found.error, error_code=ErrorCode.NOT_FOUND)
        player = found.value

        validation_error = self._validate_action(player, action, responding)
        if validation_error:
            return ActionResult.failure(validation_error)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.UNSUPPORTED,
            )
        result = handler(player, action)
        if result.success:
            logger.debug("%s: %s", player.player_id, action.describe())
        return result

    def _validate_action(self, player: Player, action: Action, responding: bool) -> str | None:
        """
        Validate that an action is legal right now.

        Returns error message if invalid, None if valid.
        """
        if not self.generator.is_legal(player, action, responding):
            return f"{action.describe()} is not currently available to {player.player_id}"
        return None

    def _get_handler(self, action_type: ActionType) -> Callable[[Player, Action], ActionResult] | None:
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLAY_LOOT: self._handle_play_loot,
            ActionType.BUY_ITEM: self._handle_buy_item,
            ActionType.ATTACK: self._handle_attack,
            ActionType.ACTIVATE_CHARACTER: self._handle_activate_character,
            ActionType.ACTIVATE_ITEM: self._handle_activate_item,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.PASS: self._handle_pass,
        }
        return handlers.get(action_type)

    def _handle_play_loot(self, player: Player, action: Action) -> ActionResult:
        return play_loot_card(self.board, player, action.payload.hand_index)

    def _handle_buy_item(self, player: Player, action: Action) -> ActionResult:
        """Declare a purchase; the slot is picked when the intention resolves."""
        self.board.push(player, IntentionToPurchase())
        return ActionResult.ok(f"{player.player_id} intends to buy an item")

    def _handle_attack(self, player: Player, action: Action) -> ActionResult:
        """
        Handle attack action.

        Outside battle this declares the intention to attack and spends
        an attack. In battle it rolls again against the same monster.
        """
        board = self.board
        index = action.payload.monster_index
        monster = None if index is None else board.monster.slots[index].peek()

        if player.in_battle:
            board.push(player, DeclareAttack(monster=monster))
            board.push_roll(player, attack=True)
            return ActionResult.ok(f"{player.player_id} attacks {monster.name} again")

        player.num_attacks -= 1
        board.push(player, IntentionToAttack(monster=monster))
        target = monster.name if monster is not None else "the monster deck"
        return ActionResult.ok(f"{player.player_id} intends to attack {target}")

    def _handle_activate_character(self, player: Player, action: Action) -> ActionResult:
        return activate_character(self.board, player)

    def _handle_activate_item(self, player: Player, action: Action) -> ActionResult:
        index = action.payload.item_index
        if index is None or not 0 <= index < len(player.active_items):
            return ActionResult.failure(f"No item {index}", ErrorCode.INDEX_OUT_OF_RANGE)
        return activate_item(self.board, player, player.active_items[index])

    def _handle_end_turn(self, player: Player, action: Action) -> ActionResult:
        self.board.push(player, EndTurn())
        return ActionResult.ok(f"{player.player_id} ends their turn")

    def _handle_pass(self, player: Player, action: Action) -> ActionResult:
        return ActionResult.ok(acted=False)
