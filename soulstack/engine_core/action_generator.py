"""
Action Generator - Generates all legal actions at a priority point.

The action generator is used by:
1. Bots to enumerate possible moves
2. The console to show available actions
3. Validation (is this action in the legal set?)

Turn actions (loot, buy, attack, end turn) are offered to the active
player only. Responses (character and item activations) are offered to
anyone holding priority. Pass is always available to a responder.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .action import Action

if TYPE_CHECKING:
    from .board import Board
    from .player import Player


@dataclass
class ActionGenerator:
    """Generates legal actions for a Board."""
    board: Board

    def generate(self, player: Player, responding: bool = False) -> list[Action]:
        """
        Generate every legal action for player.

        responding is True inside an action-reaction window, where only
        activations and passing are allowed.
        """
        actions: list[Action] = []
        if not responding and self.board.is_active(player) and not player.force_end:
            actions.extend(self._generate_loot_actions(player))
            actions.extend(self._generate_buy_actions(player))
            actions.extend(self._generate_attack_actions(player))
        actions.extend(self._generate_activation_actions(player))

        if responding or not self.board.is_active(player):
            actions.append(Action.pass_priority(player.player_id))
        elif self._can_end_turn(player):
            actions.append(Action.end_turn(player.player_id))
        return actions

    def _generate_loot_actions(self, player: Player) -> list[Action]:
        """One action per hand card while the loot allowance lasts."""
        if player.num_loot_played <= 0 or player.is_dead():
            return []
        return [
            Action.play_loot(player.player_id, i, f"Play {card.name}")
            for i, card in enumerate(player.hand)
        ]

    def _generate_buy_actions(self, player: Player) -> list[Action]:
        board = self.board
        if (
            player.num_purchases <= 0
            or player.in_battle
            or player.is_dead()
            or not board.stack.is_empty
            or player.cents < board.purchase_cost(player)
        ):
            return []
        has_stock = any(card is not None for card in board.treasure.shop) or not (
            board.treasure.deck.is_empty and board.treasure.discard_pile.is_empty
        )
        return [Action.buy_item(player.player_id)] if has_stock else []

    def _generate_attack_actions(self, player: Player) -> list[Action]:
        """
        Attack a monster slot or the top of the monster deck.

        While in battle the only attack is another roll against the
        current target.
        """
        board = self.board
        if not board.stack.is_empty or player.is_dead():
            return []
        if player.in_battle:
            i = self._battle_slot()
            if i is None:
                return []
            monster = board.monster.slots[i].peek()
            return [Action.attack(player.player_id, i, f"Keep attacking {monster.name}")]
        if player.num_attacks <= 0:
            return []
        actions = [
            Action.attack(player.player_id, i, f"Attack {slot.peek().name}")
            for i, slot in enumerate(board.monster.slots)
            if not slot.is_empty and not slot.peek().is_dead()
        ]
        if not (board.monster.deck.is_empty and board.monster.discard_pile.is_empty):
            actions.append(Action.attack(player.player_id, None, "Attack the top of the monster deck"))
        return actions

    def _generate_activation_actions(self, player: Player) -> list[Action]:
        actions = []
        if not player.character.tapped and player.hand:
            actions.append(Action.activate_character(player.player_id))
        for i, item in enumerate(player.active_items):
            if item in player.usable_items():
                actions.append(Action.activate_item(player.player_id, i, f"Use {item.name}"))
        return actions

    def _battle_slot(self) -> int | None:
        """Index of the slot whose monster is being fought, if it still lives."""
        for i, slot in enumerate(self.board.monster.slots):
            monster = slot.peek()
            if monster.in_battle and not monster.is_dead():
                return i
        return None

    def _can_end_turn(self, player: Player) -> bool:
        """
        With an empty stack, outside battle. A battle with no living
        target or a dead attacker no longer holds the turn.
        """
        if not self.board.stack.is_empty:
            return False
        return not player.in_battle or player.is_dead() or self._battle_slot() is None

    def is_legal(self, player: Player, action: Action, responding: bool = False) -> bool:
        return any(action.matches(legal) for legal in self.generate(player, responding))
