"""
Tests for cards and players.

Tests:
- Combat stats (heal, bonus HP, base changes)
- Monster variants and roll bounds
- Items and counters
- Player resources, flags and souls
"""

from ..engine_core import ids
from ..engine_core.cards import CharacterCard, MonsterCard, TreasureCard
from ..engine_core.player import Player
from .conftest import make_item


class TestCombatStats:
    """Tests for the CombatTarget capability."""

    def test_heal_never_exceeds_base_health(self):
        """Healing stops at base health."""
        character = CharacterCard(card_id=1, name="Test", base_health=3)
        character.decrease_hp(2)
        character.heal(5)
        assert character.hp == 3

    def test_increase_hp_is_unclamped(self):
        """Bonus HP can exceed base health until stats are reset."""
        character = CharacterCard(card_id=1, name="Test", base_health=2)
        character.increase_hp(2)
        assert character.hp == 4
        character.reset_stats()
        assert character.hp == 2

    def test_damage_floors_at_zero(self):
        """HP never goes negative; zero HP is dead."""
        character = CharacterCard(card_id=1, name="Test", base_health=2)
        character.decrease_hp(5)
        assert character.hp == 0
        assert character.is_dead()

    def test_lowering_base_health_clamps_hp(self):
        character = CharacterCard(card_id=1, name="Test", base_health=3)
        character.decrease_base_health(1)
        assert character.base_health == 2
        assert character.hp == 2

    def test_base_attack_changes_current_attack(self):
        character = CharacterCard(card_id=1, name="Test", base_attack=1)
        character.increase_base_attack(2)
        assert (character.base_attack, character.ap) == (3, 3)
        character.decrease_base_attack(5)
        assert (character.base_attack, character.ap) == (0, 0)


class TestMonsterCard:
    """Tests for MonsterCard variants."""

    def test_zero_health_is_bonus(self):
        """A monster card with no health that is not a curse is a bonus card."""
        assert MonsterCard(card_id=ids.CHEST, name="Chest").is_bonus
        assert not MonsterCard(card_id=ids.CURSE_OF_LOSS, name="Curse", is_curse=True).is_bonus
        assert not MonsterCard(card_id=ids.GAPER, name="Gaper", base_health=2).is_bonus

    def test_roll_stays_in_die_range(self):
        monster = MonsterCard(card_id=1, name="Test", base_health=1, base_roll=5)
        monster.increase_roll(4)
        assert monster.roll == 6
        monster.decrease_roll(9)
        assert monster.roll == 1

    def test_reset_stats_leaves_battle(self):
        """Resetting restores printed stats and ends the battle."""
        monster = MonsterCard(card_id=1, name="Test", base_health=3, base_roll=4, base_attack=1)
        monster.decrease_hp(2)
        monster.increase_ap(1)
        monster.in_battle = True
        monster.reset_stats()
        assert (monster.hp, monster.ap, monster.roll, monster.in_battle) == (3, 1, 4, False)


class TestItems:
    """Tests for TreasureCard and counters."""

    def test_item_kinds(self):
        """Items are active unless passive or paid."""
        assert make_item().active
        assert not make_item(passive=True).active
        assert not make_item(paid=True).active

    def test_remove_counters_when_short(self):
        """Removing more counters than held changes nothing."""
        item = make_item(counters=2)
        assert not item.remove_counters(3)
        assert item.counters == 2
        assert item.remove_counters(2)
        assert item.counters == 0


class TestPlayer:
    """Tests for Player resources."""

    def test_items_sorted_by_id(self, alice):
        """Item areas stay sorted by card id."""
        for card_id in (30, 10, 20):
            alice.add_card_to_board(make_item(card_id=card_id))
        assert [c.card_id for c in alice.active_items] == [10, 20, 30]

    def test_passive_items_kept_apart(self, alice):
        alice.add_card_to_board(make_item(passive=True))
        assert alice.passive_items and not alice.active_items

    def test_remove_item_not_owned(self, alice):
        assert not alice.remove_item(make_item())

    def test_counterfeit_penny_adds_a_cent(self, alice):
        """Every gain of cents is one more with Counterfeit Penny."""
        alice.add_card_to_board(make_item(ids.COUNTERFEIT_PENNY, "Counterfeit Penny", passive=True))
        alice.gain_cents(2)
        assert alice.cents == 3

    def test_bumbo_turns_cents_into_counters(self, alice):
        """With Bumbo, cents become counters and the first one sets the attack bonus."""
        bumbo = make_item(ids.BUMBO, "Bumbo", passive=True)
        alice.add_card_to_board(bumbo)
        alice.gain_cents(3)
        assert alice.cents == 0
        assert bumbo.counters == 3
        assert alice.has_effect(ids.BUMBO)

    def test_bumbo_ten_counters_adds_attack(self, alice):
        bumbo = make_item(ids.BUMBO, "Bumbo", passive=True, counters=9)
        alice.add_card_to_board(bumbo)
        alice.gain_cents(1)
        assert alice.character.base_attack == 2

    def test_lose_cents_reports_actual_loss(self, alice):
        alice.cents = 2
        assert alice.lose_cents(5) == 2
        assert alice.cents == 0

    def test_consume_effect(self, alice):
        """One-shot flags clear when consumed."""
        alice.active_effects.add(ids.THE_EMPRESS)
        assert alice.consume_effect(ids.THE_EMPRESS)
        assert not alice.consume_effect(ids.THE_EMPRESS)

    def test_double_souls(self, alice):
        """Mega boss souls count twice."""
        alice.souls.append(MonsterCard(card_id=ids.GAPER, name="Gaper", base_health=2))
        alice.souls.append(MonsterCard(card_id=ids.MOM, name="Mom", base_health=15, is_boss=True))
        assert alice.soul_count() == 3

    def test_reset_counters(self, alice):
        alice.base_num_attacks = 2
        alice.in_battle = True
        alice.reset_counters()
        assert alice.num_attacks == 2
        assert alice.num_purchases == 1
        assert not alice.in_battle

    def test_recharge_all(self):
        player = Player(player_id="p9", character=CharacterCard(card_id=1, name="Test"))
        item = TreasureCard(card_id=2, name="Item", tapped=True)
        player.add_card_to_board(item)
        player.recharge_all()
        assert not item.tapped
        assert not player.character.tapped
