"""
Tests for event resolution.

Tests:
- Damage, death and the death penalties
- Monster kills, rewards and chained kills
- Dice rolls deciding the event below them
- Prevention that cancels damage
- Attacks through the stack
- Trigger scans
"""

from ..engine_core import ids
from ..engine_core.cards import LootCard
from ..engine_core.effects import BindResult, Effect, EffectKind
from ..engine_core.events import (
    CharacterDeath,
    Damage,
    DeclareAttack,
    DiceRoll,
    EndTurn,
    IntentionToAttack,
    MonsterReward,
    TriggeredEffect,
)
from ..engine_core.resolver import ResolverState
from ..engine_core.zones import ActiveSlot
from ..games.four_souls.hooks import cents_reward, gain_cents, simple
from .conftest import make_item, make_monster, make_penny


def _set_roll(board, n):
    """Fix the value of the dice roll on top of the stack."""
    board.stack.peek().event.payload.n = n


def _always_react(board, owner, card, node):
    return BindResult.bound(Effect(EffectKind.NOTHING, player=owner))


class TestDamage:
    """Tests for damage resolution."""

    def test_damage_lowers_hp(self, board, resolver, alice, gaper):
        """Non-lethal damage lowers HP and pushes nothing else."""
        board.damage_monster_to_player(gaper, alice, 1)
        resolver.resolve_next()

        assert alice.character.hp == 1
        assert board.stack.is_empty
        assert resolver.state == ResolverState.READY

    def test_lethal_damage_pushes_death(self, board, resolver, alice, gaper):
        """Damage to zero HP pushes a CharacterDeath for the player."""
        alice.character.hp = 1
        board.damage_monster_to_player(gaper, alice, 1)
        resolver.resolve_next()

        top = board.stack.peek()
        assert isinstance(top.event.payload, CharacterDeath)
        assert top.event.player is alice

    def test_death_penalties(self, board, resolver, alice, gaper):
        """Dying costs one loot card, one item and a cent, and ends the turn."""
        penny = make_penny()
        item = make_item()
        alice.hand.append(penny)
        board.add_item(alice, item)
        alice.cents = 3
        alice.character.hp = 1

        board.damage_monster_to_player(gaper, alice, 1)
        resolver.resolve_all()

        assert alice.is_dead()
        assert alice.hand == []
        assert alice.all_items() == []
        assert alice.cents == 2
        assert board.loot.discard_pile.top is penny
        assert board.treasure.discard_pile.top is item
        assert alice.force_end

    def test_eternal_items_survive_death(self, board, resolver, alice):
        eternal = make_item(eternal=True)
        board.add_item(alice, eternal)
        alice.character.hp = 1
        board.damage_player_to_player(alice, alice, 1)
        resolver.resolve_all()

        assert alice.all_items() == [eternal]

    def test_shadow_takes_the_penalties(self, board, resolver, alice, bob):
        """The Shadow's owner gets the discarded loot and the lost cent."""
        board.add_item(bob, make_item(ids.SHADOW, "Shadow", passive=True))
        penny = make_penny()
        alice.hand.append(penny)
        alice.cents = 1
        alice.character.hp = 1

        board.damage_player_to_player(bob, alice, 1)
        resolver.resolve_all()

        assert bob.hand == [penny]
        assert bob.cents == 1
        assert alice.cents == 0

    def test_dry_baby_caps_damage(self, board, resolver, alice):
        board.add_item(alice, make_item(ids.DRY_BABY, "Dry Baby", passive=True))
        board.damage_player_to_player(alice, alice, 2)
        resolver.resolve_all()
        assert alice.character.hp == 1


class TestMonsterKill:
    """Tests for monster deaths."""

    def test_kill_pushes_on_death_and_reward(self, board, resolver, alice):
        """A killed monster leaves its slot and pushes its on-death effect and reward."""
        monster = make_monster(health=1, on_death=simple(gain_cents(1)), reward=cents_reward(3))
        board.monster.slots[0] = ActiveSlot([monster])

        board.damage_player_to_monster(alice, monster, 1)
        resolver.resolve_next()

        assert board.monster.slots[0].is_empty
        assert board.monster.discard_pile.top is monster
        top, below = list(board.stack)
        assert isinstance(top.event.payload, MonsterReward)
        assert isinstance(below.event.payload, TriggeredEffect)

        resolver.resolve_all()
        assert alice.cents == 4

    def test_boss_becomes_a_soul(self, board, resolver, alice):
        boss = make_monster(card_id=ids.MONSTRO, name="Monstro", health=1, is_boss=True)
        board.monster.slots[0] = ActiveSlot([boss])

        board.damage_player_to_monster(alice, boss, 1)
        resolver.resolve_all()

        assert alice.souls == [boss]
        assert alice.soul_count() == 1

    def test_chained_kill_without_linked_monsters(self, board, resolver, alice, gaper):
        """Killing a monster with no linked monster in play kills nothing else."""
        other = make_monster(card_id=ids.FLY, name="Fly", health=1)
        board.monster.slots.append(ActiveSlot([other]))
        gaper.hp = 1

        board.damage_player_to_monster(alice, gaper, 1)
        resolver.resolve_all()

        assert board.monster.slots[1].peek() is other

    def test_linked_monsters_die_together(self, board, resolver, alice, gaper):
        """Stoney dies whenever any monster dies."""
        stoney = make_monster(card_id=ids.STONEY, name="Stoney", health=3, roll=0, attack=0)
        board.monster.slots.append(ActiveSlot([stoney]))
        gaper.hp = 1

        board.damage_player_to_monster(alice, gaper, 1)
        resolver.resolve_all()

        assert board.monster.slots[1].is_empty

    def test_revealed_monster_under_killed_one(self, board, resolver, alice, gaper):
        """The monster underneath becomes active again."""
        over = make_monster(card_id=ids.FLY, name="Fly", health=1)
        board.monster.slots[0].push(over)

        board.damage_player_to_monster(alice, over, 1)
        resolver.resolve_all()

        assert board.monster.slots[0].peek() is gaper


class TestDiceRoll:
    """Tests for dice roll binding."""

    def test_roll_is_written_below(self, board, resolver, alice):
        """Resolving a roll writes its value onto the event directly below."""
        card = LootCard(card_id=ids.A_NICKEL, name="Test")
        effect = Effect(EffectKind.GAIN_CENTS, player=alice)
        node = board.push_bound(alice, card, effect, roll_required=True)

        assert isinstance(board.stack.peek().event.payload, DiceRoll)
        assert board.stack.peek().next is node
        _set_roll(board, 4)
        resolver.resolve_next()
        assert node.event.roll == 4

        resolver.resolve_next()
        assert alice.cents == 4

    def test_on_rolls_filter(self, board, resolver, alice):
        """An effect limited to some rolls does nothing on others."""
        card = LootCard(card_id=ids.A_NICKEL, name="Test")
        effect = Effect(EffectKind.GAIN_CENTS, player=alice, amount=5, on_rolls=frozenset({6}))
        board.push_bound(alice, card, effect, roll_required=True)
        _set_roll(board, 3)
        resolver.resolve_all()
        assert alice.cents == 0

    def test_crystal_ball_guess(self, board, resolver, alice):
        """A correct guess on the next roll loots 3."""
        board.treasure.crystal_ball_guesses[alice.player_id] = 2
        board.push_roll(alice)
        _set_roll(board, 2)
        resolver.resolve_next()
        assert len(alice.hand) == 3
        assert board.treasure.crystal_ball_guesses == {}


class TestPrevention:
    """Tests for damage prevention."""

    def test_prevent_to_zero_cancels(self, board, resolver, alice, gaper):
        """Fully prevented damage resolves as nothing and triggers no reactions."""
        gaper.on_event = _always_react
        node = board.push(alice, Damage(target=alice, n=2))
        board.stack.prevent_damage(2, node)

        resolver.resolve_next()
        assert alice.character.hp == 2
        assert board.stack.is_empty

    def test_prevent_damage_effect(self, board, resolver, alice, bob):
        node = board.damage_player_to_player(bob, alice, 2)
        board.push(alice, TriggeredEffect(
            card=make_item(),
            effect=Effect(EffectKind.PREVENT_DAMAGE, player=alice, amount=1, target_node=node),
        ))
        resolver.resolve_all()
        assert alice.character.hp == 1

    def test_prevented_death_costs_nothing(self, board, resolver, alice):
        """Preventing a death fizzles it; the player pays no penalty."""
        alice.cents = 3
        alice.character.hp = 0
        death = board.kill_player(alice)
        board.push(alice, TriggeredEffect(
            card=make_item(),
            effect=Effect(EffectKind.PREVENT_DEATH, player=alice, target_node=death),
        ))
        resolver.resolve_all()
        assert alice.cents == 3


class TestAttack:
    """Tests for attacks through the stack."""

    def _declare(self, board, resolver, alice, gaper, roll):
        board.push(alice, IntentionToAttack(monster=gaper))
        resolver.resolve_next()
        assert isinstance(board.stack.peek().event.payload, DiceRoll)
        assert isinstance(board.stack.peek().next.event.payload, DeclareAttack)
        _set_roll(board, roll)
        resolver.resolve_all()

    def test_hit_damages_monster(self, board, resolver, alice, gaper):
        """A roll at or above the monster's roll deals the player's attack."""
        self._declare(board, resolver, alice, gaper, 4)
        assert gaper.hp == 1
        assert alice.in_battle
        assert gaper.in_battle

    def test_miss_damages_player(self, board, resolver, alice, gaper):
        """A roll below the monster's roll deals the monster's attack."""
        self._declare(board, resolver, alice, gaper, 3)
        assert gaper.hp == 2
        assert alice.character.hp == 1

    def test_first_hit_bonus(self, board, resolver, alice, gaper):
        """Champion Belt adds 1 to the first hit of the turn only."""
        board.add_item(alice, make_item(ids.CHAMPION_BELT, "Champion Belt", passive=True))
        alice.active_effects.add(ids.CHAMPION_BELT)
        self._declare(board, resolver, alice, gaper, 6)
        assert board.monster.slots[0].is_empty
        assert not alice.has_effect(ids.CHAMPION_BELT)

    def test_killing_ends_the_battle(self, board, resolver, alice, gaper):
        gaper.hp = 1
        self._declare(board, resolver, alice, gaper, 5)
        assert board.monster.slots[0].is_empty
        assert not alice.in_battle


class TestTriggerScan:
    """Tests for reactions collected after resolution."""

    def test_monster_hook_reacts(self, board, resolver, alice, gaper):
        """A monster hook that answers pushes a triggered effect."""
        gaper.on_event = _always_react
        board.push_roll(alice)
        resolver.resolve_next()

        top = board.stack.peek()
        assert isinstance(top.event.payload, TriggeredEffect)
        assert top.event.payload.card is gaper

    def test_turn_boundary_only_asks_turn_owner(self, board, resolver, alice, bob):
        """Passives of other players do not react to someone else's end of turn."""
        board.add_item(bob, make_item(passive=True, on_event=_always_react))
        node = board.push(alice, EndTurn())
        assert resolver.trigger_scan(node) == []

    def test_passives_react_in_turn_order(self, board, resolver, alice, bob):
        bob_item = make_item(card_id=9002, passive=True, on_event=_always_react)
        alice_item = make_item(card_id=9003, passive=True, on_event=_always_react)
        board.add_item(bob, bob_item)
        board.add_item(alice, alice_item)
        node = board.push_roll(alice)

        reactions = resolver.trigger_scan(node)
        assert [r.card for r in reactions] == [alice_item, bob_item]
