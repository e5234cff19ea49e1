"""
Tests for legal action generation and the reducer.

Tests:
- Turn actions for the active player
- Responses and passing
- Battle and stack restrictions
- Validation and application of actions
"""

from ..engine_core.action import Action, ActionType
from ..engine_core.board import SHOP_COST
from ..engine_core.events import DeclarePurchase, EndTurn, IntentionToAttack, IntentionToPurchase
from .conftest import make_item, make_monster, make_penny


def _types(actions):
    return [a.action_type for a in actions]


class TestGenerate:
    """Tests for ActionGenerator.generate."""

    def test_active_player_turn_actions(self, board, reducer, alice):
        """The active player may loot, attack and end the turn."""
        alice.hand.append(make_penny())
        types = _types(reducer.generator.generate(alice))

        assert ActionType.PLAY_LOOT in types
        assert ActionType.ATTACK in types
        assert ActionType.ACTIVATE_CHARACTER in types
        assert types[-1] == ActionType.END_TURN
        assert ActionType.PASS not in types

    def test_attack_deck_when_monsters_left(self, board, reducer, alice):
        board.monster.deck.append(make_monster())
        attacks = [a for a in reducer.generator.generate(alice) if a.action_type == ActionType.ATTACK]
        assert [a.payload.monster_index for a in attacks] == [0, None]

    def test_buy_needs_cents(self, board, reducer, alice):
        board.treasure.shop[0] = make_item()
        assert ActionType.BUY_ITEM not in _types(reducer.generator.generate(alice))
        alice.cents = SHOP_COST
        assert ActionType.BUY_ITEM in _types(reducer.generator.generate(alice))

    def test_other_player_may_only_respond(self, board, reducer, bob):
        """A non-active player gets activations and pass."""
        bob.character.tapped = False
        bob.hand.append(make_penny())
        types = _types(reducer.generator.generate(bob))
        assert types == [ActionType.ACTIVATE_CHARACTER, ActionType.PASS]

    def test_responding_excludes_turn_actions(self, board, reducer, alice):
        alice.hand.append(make_penny())
        board.push_roll(alice)
        types = _types(reducer.generator.generate(alice, responding=True))
        assert types == [ActionType.ACTIVATE_CHARACTER, ActionType.PASS]

    def test_no_end_turn_with_pending_stack(self, board, reducer, alice):
        board.push_roll(alice)
        types = _types(reducer.generator.generate(alice))
        assert ActionType.END_TURN not in types
        assert ActionType.ATTACK not in types

    def test_in_battle_keeps_attacking(self, board, reducer, alice, gaper):
        """In battle the only attack is against the current monster, and the turn cannot end."""
        alice.in_battle = True
        gaper.in_battle = True
        actions = reducer.generator.generate(alice)
        attacks = [a for a in actions if a.action_type == ActionType.ATTACK]

        assert [a.payload.monster_index for a in attacks] == [0]
        assert ActionType.END_TURN not in _types(actions)

    def test_dead_player_in_battle_can_end_turn(self, board, reducer, alice, gaper):
        alice.in_battle = True
        gaper.in_battle = True
        alice.character.hp = 0
        assert _types(reducer.generator.generate(alice)) == [ActionType.END_TURN]

    def test_battle_without_a_target_can_end_turn(self, board, reducer, alice, gaper):
        """A battle whose monster is gone no longer holds the turn."""
        alice.in_battle = True
        board.monster.slots[0].pop()
        types = _types(reducer.generator.generate(alice))
        assert ActionType.ATTACK not in types
        assert types[-1] == ActionType.END_TURN

    def test_no_attacks_left(self, board, reducer, alice):
        alice.num_attacks = 0
        assert ActionType.ATTACK not in _types(reducer.generator.generate(alice))

    def test_ready_items_offered(self, board, reducer, alice):
        ready = make_item(card_id=9002, activator=lambda ctx: None)
        tapped = make_item(card_id=9003, activator=lambda ctx: None, tapped=True)
        board.add_item(alice, ready)
        board.add_item(alice, tapped)
        items = [a for a in reducer.generator.generate(alice) if a.action_type == ActionType.ACTIVATE_ITEM]
        assert [a.payload.item_index for a in items] == [0]


class TestReducer:
    """Tests for Reducer.apply."""

    def test_illegal_action_rejected(self, board, reducer, bob):
        """Turn actions of a non-active player fail without changing the board."""
        result = reducer.apply(Action.attack(bob.player_id, 0))
        assert not result.success
        assert "not currently available" in result.error
        assert board.stack.is_empty

    def test_unknown_player(self, reducer):
        result = reducer.apply(Action.end_turn("nobody"))
        assert not result.success

    def test_attack_declares_intention(self, board, reducer, alice, gaper):
        """Attacking spends an attack and pushes the intention."""
        result = reducer.apply(Action.attack(alice.player_id, 0))
        assert result.success and result.acted
        assert alice.num_attacks == 0
        payload = board.stack.peek().event.payload
        assert isinstance(payload, IntentionToAttack)
        assert payload.monster is gaper

    def test_end_turn(self, board, reducer, resolver, alice, bob):
        assert reducer.apply(Action.end_turn(alice.player_id)).success
        assert isinstance(board.stack.peek().event.payload, EndTurn)
        resolver.resolve_all()
        assert board.active_player is bob

    def test_pass_does_not_act(self, board, reducer, bob):
        board.push_roll(bob)
        result = reducer.apply(Action.pass_priority(bob.player_id), responding=True)
        assert result.success
        assert not result.acted

    def test_purchase_through_the_stack(self, board, reducer, resolver, alice):
        """Buying pushes an intention; the slot is chosen when it resolves."""
        item = make_item()
        board.treasure.shop[0] = item
        alice.cents = SHOP_COST

        assert reducer.apply(Action.buy_item(alice.player_id)).success
        assert isinstance(board.stack.peek().event.payload, IntentionToPurchase)
        resolver.resolve_next()
        assert isinstance(board.stack.peek().event.payload, DeclarePurchase)
        resolver.resolve_all()

        assert alice.active_items == [item]
        assert alice.cents == 0

    def test_play_loot_action(self, board, reducer, resolver, alice):
        alice.hand.append(make_penny())
        assert reducer.apply(Action.play_loot(alice.player_id, 0)).success
        resolver.resolve_all()
        assert alice.cents == 1
