"""
Heuristic Evaluator - Scores positions and actions for bot decision-making.

The evaluator assigns a numeric score to a Board based on:
- Position features (souls, cents, items, hand, health)
- Threat features (opponent progress)

Actions are scored without applying them: applying one pushes events
and raises choices, so the evaluator estimates instead (hit chance
against a monster, value of a purchase or a loot play).

Weights can be adjusted to create different play styles.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..engine_core.action import ActionType
from ..engine_core.board import SHOP_COST
from ..engine_core.player import Player
from .policy import BotDecision, BotPolicy, require_actions

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.board import Board
    from ..engine_core.cards import MonsterCard
    from ..engine_core.choices import PendingChoice


@dataclass
class EvaluationWeights:
    """
    Weights for the heuristic evaluator.

    Higher values = more importance.
    """
    # Position
    soul_value: float = 40.0
    cent_value: float = 0.5
    item_value: float = 6.0
    hand_size: float = 2.0
    health_value: float = 3.0
    curse_penalty: float = -8.0

    # Opponent-related
    opponent_penalty: float = -0.3  # Multiply average opponent score by this

    # Actions
    attack_monster: float = 12.0    # Scaled by hit chance
    attack_deck: float = 4.0
    buy_item: float = 9.0
    play_loot: float = 5.0
    activate_on_turn: float = 3.0
    activate_in_response: float = 0.5
    miss_penalty: float = -4.0      # Per point of monster attack, scaled by miss chance


@dataclass
class StateEvaluation:
    """
    Result of evaluating a Board.
    """
    total_score: float
    player_scores: dict[str, float] = field(default_factory=dict)
    feature_breakdown: dict[str, float] = field(default_factory=dict)


class HeuristicEvaluator:
    """Evaluates Boards and candidate actions using weighted heuristics."""

    def __init__(self, weights: EvaluationWeights | None = None):
        self.weights = weights or EvaluationWeights()

    def evaluate(self, board: Board, for_player_id: str) -> StateEvaluation:
        """
        Evaluate a Board from a player's perspective.

        Returns positive score if the position is good for the player,
        negative if bad.
        """
        features: dict[str, float] = {}
        player_scores = {p.player_id: self._evaluate_player(board, p) for p in board.players}

        my_score = player_scores.get(for_player_id, 0.0)
        opponent_scores = [s for pid, s in player_scores.items() if pid != for_player_id]
        if opponent_scores:
            avg_opponent = sum(opponent_scores) / len(opponent_scores)
            relative_score = my_score + self.weights.opponent_penalty * avg_opponent
        else:
            relative_score = my_score
        features["relative_score"] = relative_score

        winners = {p.player_id for p in board.check_victory()}
        if for_player_id in winners:
            relative_score += 1000
        elif winners:
            relative_score -= 1000

        return StateEvaluation(
            total_score=relative_score,
            player_scores=player_scores,
            feature_breakdown=features,
        )

    def _evaluate_player(self, board: Board, player: Player) -> float:
        w = self.weights
        score = 0.0
        score += player.soul_count() * w.soul_value
        score += player.cents * w.cent_value
        score += (len(player.active_items) + len(player.passive_items)) * w.item_value
        score += len(player.hand) * w.hand_size
        score += player.character.hp * w.health_value
        score += len(player.curses) * w.curse_penalty
        return score

    # ========================================================================
    # Actions
    # ========================================================================

    def evaluate_action(self, board: Board, player: Player, action: Action) -> float:
        """Estimated value of taking action now."""
        w = self.weights
        kind = action.action_type
        if kind == ActionType.ATTACK:
            index = action.payload.monster_index
            if index is None:
                return w.attack_deck
            return self._evaluate_attack(board, player, board.monster.slots[index].peek())
        if kind == ActionType.BUY_ITEM:
            # Leftover cents still count for something
            return w.buy_item - (board.purchase_cost(player) / SHOP_COST)
        if kind == ActionType.PLAY_LOOT:
            return w.play_loot
        if kind in (ActionType.ACTIVATE_CHARACTER, ActionType.ACTIVATE_ITEM):
            on_turn = board.is_active(player) and board.stack.is_empty
            return w.activate_on_turn if on_turn else w.activate_in_response
        return 0.0

    def hit_chance(self, board: Board, player: Player, monster: MonsterCard) -> float:
        bonus = board.roll_modifier(player, attack=True)
        faces = [n for n in range(1, 7) if min(6, n + bonus) >= monster.roll]
        return len(faces) / 6

    def _evaluate_attack(self, board: Board, player: Player, monster: MonsterCard) -> float:
        w = self.weights
        p = self.hit_chance(board, player, monster)
        swings = max(1, -(-monster.hp // max(1, player.character.ap)))
        value = p * w.attack_monster / swings
        if monster.is_boss:
            value += p * w.soul_value / swings
        # A miss that would kill is worth avoiding
        risk = monster.ap * w.miss_penalty * (1 - p)
        if monster.ap >= player.character.hp:
            risk *= 2
        return value + risk


class GreedyPolicy(BotPolicy):
    """
    Greedy policy - takes the best-scoring action, ending the turn when
    nothing scores above zero.

    Choices that pick a target prefer the weakest monster, or the
    leading opponent when only players are offered.
    """

    def __init__(self, weights: EvaluationWeights | None = None):
        self.evaluator = HeuristicEvaluator(weights)

    def select_action(self, board: Board, player: Player, legal_actions: list[Action]) -> BotDecision:
        require_actions(legal_actions)
        scored = [(self.evaluator.evaluate_action(board, player, a), i) for i, a in enumerate(legal_actions)]
        best_score, best_index = max(scored)
        if best_score <= 0:
            fallback = [
                i for i, a in enumerate(legal_actions)
                if a.action_type in (ActionType.END_TURN, ActionType.PASS)
            ]
            if fallback:
                best_index = fallback[0]
        return BotDecision(
            action=legal_actions[best_index],
            explanation=f"Best of {len(legal_actions)} scored {best_score:.1f}",
            evaluated_actions=len(legal_actions),
            best_score=best_score,
            evaluation_details={a.describe(): s for (s, _), a in zip(scored, legal_actions)},
        )

    def select_choice(self, board: Board, choice: PendingChoice) -> int:
        if not choice.options:
            raise ValueError("No options available")
        if choice.choice_type != "target":
            return 0
        monsters = [i for i, o in enumerate(choice.options) if not isinstance(o, Player)]
        if monsters:
            return min(monsters, key=lambda i: choice.options[i].hp)
        opponents = [i for i, o in enumerate(choice.options) if o.player_id != choice.player_id]
        if not opponents:
            return 0
        evaluation = self.evaluator.evaluate(board, choice.player_id)
        return max(opponents, key=lambda i: evaluation.player_scores[choice.options[i].player_id])
