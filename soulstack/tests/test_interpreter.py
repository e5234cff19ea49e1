"""
Tests for the effect interpreter.

Tests:
- Composition (sequences, roll tables, roll filters)
- Economy, souls and curses
- Cancelling pending events
- Deck manipulation
- Board and turn effects
"""

import pytest

from ..engine_core import ids
from ..engine_core.action import Action
from ..engine_core.activation import activate_item
from ..engine_core.effects import Effect, EffectKind
from ..engine_core.interpreter import EffectInterpreter
from ..games.four_souls.hooks import gain_cents, simple
from .conftest import make_item, make_monster, make_penny


@pytest.fixture
def interpreter(board) -> EffectInterpreter:
    return EffectInterpreter(board)


class TestComposition:
    """Tests for composed effects."""

    def test_sequence_runs_in_order(self, interpreter, alice):
        effect = Effect.sequence(
            alice,
            Effect(EffectKind.GAIN_CENTS, player=alice, amount=3),
            Effect(EffectKind.LOSE_CENTS, player=alice, amount=1),
        )
        interpreter.run(effect)
        assert alice.cents == 2

    def test_roll_table(self, interpreter, alice):
        table = {n: Effect(EffectKind.GAIN_CENTS, player=alice, amount=n * 10) for n in (1, 2)}
        interpreter.run(Effect.roll_table(alice, table), roll=2)
        assert alice.cents == 20
        interpreter.run(Effect.roll_table(alice, table), roll=5)
        assert alice.cents == 20

    def test_amount_zero_uses_roll(self, interpreter, alice):
        interpreter.run(Effect(EffectKind.LOOT, player=alice), roll=2)
        assert len(alice.hand) == 2

    def test_doubled(self, interpreter, alice):
        interpreter.run(Effect(EffectKind.GAIN_CENTS, player=alice, amount=2), doubled=True)
        assert alice.cents == 4

    def test_requires_flag(self, interpreter, alice):
        """An effect whose cost flag was never set does nothing."""
        effect = Effect(EffectKind.GAIN_CENTS, player=alice, amount=2, params={"requires_flag": ids.GUPPYS_PAW})
        interpreter.run(effect)
        assert alice.cents == 0
        alice.active_effects.add(ids.GUPPYS_PAW)
        interpreter.run(effect)
        assert alice.cents == 2
        assert not alice.has_effect(ids.GUPPYS_PAW)


class TestPlayers:
    """Tests for effects between players."""

    def test_steal_cents(self, interpreter, alice, bob):
        bob.cents = 1
        interpreter.run(Effect(EffectKind.STEAL_CENTS, player=alice, amount=3, target_player=bob))
        assert (alice.cents, bob.cents) == (1, 0)

    def test_steal_soul(self, interpreter, alice, bob):
        soul = make_monster()
        bob.souls.append(soul)
        interpreter.run(Effect(EffectKind.STEAL_SOUL, player=alice, target_player=bob, target_card=soul))
        assert alice.souls == [soul]
        assert bob.souls == []

    def test_return_soul(self, board, interpreter, alice):
        soul = make_monster()
        alice.souls.append(soul)
        interpreter.run(Effect(EffectKind.RETURN_SOUL, player=alice, target_card=soul))
        assert alice.souls == []
        assert board.monster.deck.top is soul

    def test_destroy_curse(self, board, interpreter, alice):
        curse = make_monster(card_id=ids.CURSE_OF_GREED, name="Curse of Greed", health=0, is_curse=True)
        alice.curses.append(curse)
        interpreter.run(Effect(EffectKind.DESTROY_CURSE, player=alice, target_card=curse))
        assert alice.curses == []
        assert board.monster.discard_pile.top is curse

    def test_kill_player(self, board, interpreter, alice, bob):
        interpreter.run(Effect(EffectKind.KILL_PLAYER, player=alice, target_player=bob))
        assert bob.is_dead()
        assert board.stack.peek().event.player is bob

    def test_damage_all_players(self, board, interpreter, alice):
        interpreter.run(Effect(EffectKind.DAMAGE_ALL_PLAYERS, player=alice, amount=1, params={"others_only": True}))
        assert len(board.stack) == 1

    def test_buff_character(self, interpreter, alice):
        interpreter.run(Effect(EffectKind.BUFF, player=alice, params={"ap": 1, "hp": 2}))
        assert alice.character.ap == 2
        assert alice.character.hp == 4

    def test_buff_monster_roll(self, interpreter, alice, gaper):
        interpreter.run(Effect(EffectKind.BUFF, player=alice, target_monster=gaper, params={"roll": -2}))
        assert gaper.roll == 2


class TestDecks:
    """Tests for deck manipulation."""

    def test_rearrange_top(self, board, interpreter, chooser, alice):
        """Cards are put back so the first one chosen ends up on top."""
        top_three = board.loot.deck.cards[-3:]
        chooser.answers = [2, 0]
        interpreter.run(Effect(EffectKind.REARRANGE_TOP, player=alice, amount=3, params={"deck": "loot"}))

        taken = list(reversed(top_three))
        expected_top = [taken[2], taken[0], taken[1]]
        assert list(reversed(board.loot.deck.cards[-3:])) == expected_top

    def test_peek_top_to_bottom(self, board, interpreter, chooser, alice):
        top = board.loot.deck.top
        chooser.answers = [1]
        interpreter.run(Effect(EffectKind.PEEK_TOP, player=alice, params={"deck": "loot"}))
        assert board.loot.deck.cards[0] is top

    def test_recycle_discard(self, board, interpreter, alice):
        spent = make_penny()
        board.loot.discard_pile.append(spent)
        interpreter.run(Effect(EffectKind.RECYCLE_DISCARD, player=alice, params={"deck": "loot"}))
        assert board.loot.deck.top is spent


class TestStackEffects:
    """Tests for effects that cancel pending events."""

    def _activate_over(self, board, player):
        item = make_item(activator=simple(gain_cents(2)))
        board.add_item(player, item)
        activate_item(board, player, item)
        return board.stack.peek()

    def test_cascade_cancels_the_damage_below(self, board, interpreter, alice, bob):
        damage = board.damage_player_to_player(bob, alice, 1)
        activation = self._activate_over(board, bob)
        interpreter.run(Effect(EffectKind.FIZZLE, player=alice, target_node=activation, params={"cascade": True}))

        assert activation.event.is_fizzled
        assert damage.event.is_fizzled

    def test_fizzle_without_cascade_leaves_the_event_below(self, board, interpreter, alice, bob):
        damage = board.damage_player_to_player(bob, alice, 1)
        activation = self._activate_over(board, bob)
        interpreter.run(Effect(EffectKind.FIZZLE, player=alice, target_node=activation))

        assert activation.event.is_fizzled
        assert not damage.event.is_fizzled

    def test_cascaded_death_ends_the_turn(self, board, interpreter, reducer, alice, bob, gaper):
        """Cancelling the active player's death mid-battle still ends their turn."""
        alice.in_battle = True
        gaper.in_battle = True
        alice.character.hp = 0
        death = board.kill_player(alice)
        activation = self._activate_over(board, bob)
        interpreter.run(Effect(EffectKind.FIZZLE, player=bob, target_node=activation, params={"cascade": True}))

        assert death.event.is_fizzled
        assert alice.force_end
        assert board.stack.is_empty
        assert reducer.generator.generate(alice) == [Action.end_turn(alice.player_id)]


class TestBoardEffects:
    """Tests for board and turn effects."""

    def test_expand_slots(self, board, interpreter, alice):
        interpreter.run(Effect(EffectKind.EXPAND_SLOTS, player=alice, params={"area": "monster"}))
        interpreter.run(Effect(EffectKind.EXPAND_SLOTS, player=alice, params={"area": "shop"}))
        assert len(board.monster.slots) == 2
        assert board.treasure.shop == [None, None]

    def test_skip_turn(self, interpreter, alice, bob):
        interpreter.run(Effect(EffectKind.SKIP_TURN, player=alice, target_player=bob))
        assert bob.skip_next_turn

    def test_extra_attack(self, interpreter, alice):
        interpreter.run(Effect(EffectKind.EXTRA_ATTACK, player=alice, amount=1))
        assert alice.num_attacks == 2

    def test_set_loot_flag(self, board, interpreter, alice):
        interpreter.run(Effect(EffectKind.SET_FLAG, player=alice, params={"flag": ids.COMPOST, "scope": "loot"}))
        assert ids.COMPOST in board.loot.active_effects
