"""
Tests for bot policies and the heuristic evaluator.
"""

import pytest

from ..bots import FirstLegalPolicy, GreedyPolicy, HeuristicEvaluator, PolicyChooser, RandomPolicy
from ..engine_core.action import Action, ActionType
from ..engine_core.choices import PendingChoice
from .conftest import make_monster


class TestBaselines:
    """Tests for RandomPolicy and FirstLegalPolicy."""

    def test_first_legal(self, board, reducer, alice):
        legal = reducer.generator.generate(alice)
        assert FirstLegalPolicy().select_action(board, alice, legal).action is legal[0]

    def test_empty_legal_actions(self, board, alice):
        with pytest.raises(ValueError):
            FirstLegalPolicy().select_action(board, alice, [])

    def test_random_is_seeded(self, board, reducer, alice):
        legal = reducer.generator.generate(alice)
        a, b = RandomPolicy(seed=8), RandomPolicy(seed=8)
        first = [a.select_action(board, alice, legal).action for _ in range(5)]
        second = [b.select_action(board, alice, legal).action for _ in range(5)]
        assert first == second

    def test_random_prefers_turn_actions(self, board, reducer, alice):
        """While turn actions remain, random play never ends the turn."""
        legal = reducer.generator.generate(alice)
        policy = RandomPolicy(seed=1)
        for _ in range(50):
            assert policy.select_action(board, alice, legal).action.action_type != ActionType.END_TURN

    def test_random_choice_in_range(self, board):
        choice = PendingChoice("p1", "option", "Pick", ["a", "b", "c"])
        policy = RandomPolicy(seed=2)
        assert all(0 <= policy.select_choice(board, choice) < 3 for _ in range(20))


class TestEvaluator:
    """Tests for HeuristicEvaluator."""

    def test_souls_raise_the_score(self, board, alice):
        evaluator = HeuristicEvaluator()
        before = evaluator.evaluate(board, alice.player_id).total_score
        alice.souls.append(make_monster())
        assert evaluator.evaluate(board, alice.player_id).total_score > before

    def test_winning_position(self, board, alice, bob):
        board.souls_to_win = 1
        alice.souls.append(make_monster())
        evaluator = HeuristicEvaluator()
        assert evaluator.evaluate(board, alice.player_id).total_score > 500
        assert evaluator.evaluate(board, bob.player_id).total_score < -500

    def test_hit_chance(self, board, alice, gaper):
        """A 4+ monster is hit on half the faces; roll bonuses raise the odds."""
        evaluator = HeuristicEvaluator()
        assert evaluator.hit_chance(board, alice, gaper) == 0.5
        gaper.roll = 6
        assert evaluator.hit_chance(board, alice, gaper) == pytest.approx(1 / 6)


class TestGreedyPolicy:
    """Tests for GreedyPolicy."""

    def test_attacks_a_fair_fight(self, board, alice):
        legal = [Action.attack(alice.player_id, 0), Action.end_turn(alice.player_id)]
        decision = GreedyPolicy().select_action(board, alice, legal)
        assert decision.action.action_type == ActionType.ATTACK
        assert decision.evaluated_actions == 2

    def test_avoids_a_deadly_fight(self, board, alice, gaper):
        """A monster that kills on a miss is not worth the risk."""
        gaper.ap = 2
        legal = [Action.attack(alice.player_id, 0), Action.end_turn(alice.player_id)]
        decision = GreedyPolicy().select_action(board, alice, legal)
        assert decision.action.action_type == ActionType.END_TURN

    def test_targets_weakest_monster(self, board, alice):
        strong = make_monster(health=3)
        weak = make_monster(health=1)
        choice = PendingChoice("p1", "target", "Deal damage to whom?", [alice, strong, weak])
        assert GreedyPolicy().select_choice(board, choice) == 2

    def test_targets_leading_opponent(self, board, alice, bob):
        choice = PendingChoice("p1", "target", "Deal damage to whom?", [alice, bob])
        assert GreedyPolicy().select_choice(board, choice) == 1

    def test_policy_chooser(self, board):
        choice = PendingChoice("p1", "option", "Pick", ["a", "b"])
        assert PolicyChooser(FirstLegalPolicy()).choose(board, choice) == 0
