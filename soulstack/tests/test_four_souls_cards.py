"""
Tests for catalog cards played through the stack.

Tests:
- Loot cards that target monsters, players and stack events
- Eternal starting items
- Bonus cards and curses revealed from the monster deck
"""

from ..engine_core import ids
from ..engine_core.activation import activate_item, play_loot_card
from ..engine_core.cards import CharacterCard
from ..engine_core.effects import EffectKind
from ..engine_core.events import DiceRoll, TriggeredEffect
from ..engine_core.zones import ActiveSlot
from ..games.four_souls import starting_item
from ..games.four_souls.hooks import gain_cents, simple
from ..games.four_souls.loot import LOOT_CARDS
from ..games.four_souls.monsters import MONSTER_CARDS
from .conftest import make_item


def build(entries, card_id):
    """A fresh instance of the first catalog entry with card_id."""
    return next(e for e in entries if e.sample.card_id == card_id).build()


def give_starting_item(board, player, character_id):
    item = starting_item(CharacterCard(card_id=character_id, name="Test"))
    board.add_item(player, item)
    return item


class TestLootCards:
    """Tests for loot cards from the catalog."""

    def test_penny(self, board, resolver, alice):
        alice.hand.append(build(LOOT_CARDS, ids.A_PENNY))
        play_loot_card(board, alice, 0)
        resolver.resolve_all()
        assert alice.cents == 1

    def test_bomb_a_monster(self, board, resolver, chooser, alice, gaper):
        """Bomb deals 1 damage to the chosen target."""
        chooser.answers = [2]  # p1, p2, then the Gaper
        alice.hand.append(build(LOOT_CARDS, ids.BOMB))

        assert play_loot_card(board, alice, 0).success
        assert chooser.asked[0].choice_type == "target"
        resolver.resolve_all()
        assert gaper.hp == 1

    def test_bomb_a_player(self, board, resolver, chooser, alice, bob):
        chooser.answers = [1]
        alice.hand.append(build(LOOT_CARDS, ids.BOMB))
        play_loot_card(board, alice, 0)
        resolver.resolve_all()
        assert bob.character.hp == 1

    def test_soul_heart_prevents_damage(self, board, resolver, alice, bob):
        board.damage_player_to_player(bob, alice, 1)
        alice.hand.append(build(LOOT_CARDS, ids.SOUL_HEART))

        assert play_loot_card(board, alice, 0).success
        resolver.resolve_all()
        assert alice.character.hp == 2

    def test_soul_heart_needs_a_target(self, board, alice):
        """With no damage pending, Soul Heart cannot be played and stays in hand."""
        alice.hand.append(build(LOOT_CARDS, ids.SOUL_HEART))
        assert not play_loot_card(board, alice, 0).success
        assert len(alice.hand) == 1

    def test_butter_bean_cancels_an_activation(self, board, resolver, alice, bob):
        item = make_item(activator=simple(gain_cents(2)))
        board.add_item(bob, item)
        activate_item(board, bob, item)
        alice.hand.append(build(LOOT_CARDS, ids.BUTTER_BEAN))

        assert play_loot_card(board, alice, 0).success
        resolver.resolve_all()
        assert bob.cents == 0
        assert item.tapped


class TestStartingItems:
    """Tests for eternal starting items."""

    def test_yum_heart(self, board, resolver, alice, bob):
        """Maggy's Yum Heart prevents 1 damage."""
        yum_heart = give_starting_item(board, alice, ids.MAGGY)
        board.damage_player_to_player(bob, alice, 1)

        assert activate_item(board, alice, yum_heart).success
        resolver.resolve_all()
        assert alice.character.hp == 2
        assert yum_heart.tapped

    def test_holy_mantle(self, board, resolver, alice):
        """The Lost's Holy Mantle prevents a death; the turn still ends."""
        mantle = give_starting_item(board, alice, ids.THE_LOST)
        alice.cents = 2
        alice.character.hp = 0
        board.kill_player(alice)

        assert activate_item(board, alice, mantle).success
        resolver.resolve_all()
        assert alice.cents == 2
        assert alice.force_end

    def test_starting_item_needs_a_target(self, board, alice):
        d6 = give_starting_item(board, alice, ids.ISAAC)
        assert not activate_item(board, alice, d6).success
        assert not d6.tapped


class TestMonsterDeck:
    """Tests for cards revealed from the monster deck."""

    def test_chest_pays_by_roll(self, board, resolver, alice):
        chest = build(MONSTER_CARDS, ids.CHEST)
        assert board.reveal_monster(alice, chest)
        assert board.monster.discard_pile.top is chest

        board.stack.peek().event.payload.n = 6
        resolver.resolve_all()
        assert alice.cents == 6

    def test_curse_goes_to_another_player(self, board, resolver, alice, bob):
        """A revealed curse is given away and raises its holder's soul threshold."""
        curse = build(MONSTER_CARDS, ids.CURSE_OF_LOSS)
        assert board.reveal_monster(alice, curse)
        assert isinstance(board.stack.peek().event.payload, TriggeredEffect)

        resolver.resolve_all()
        assert bob.curses == [curse]
        assert board.souls_needed(bob) == board.souls_to_win + 1

    def test_regular_monster_is_not_revealed(self, board, alice, gaper):
        assert not board.reveal_monster(alice, gaper)
        assert board.stack.is_empty


class TestMonsterHooks:
    """Tests for monsters reacting to their attacker's rolls."""

    def _fight_satan(self, board, alice):
        satan = build(MONSTER_CARDS, ids.SATAN)
        board.monster.slots[0] = ActiveSlot([satan])
        satan.in_battle = True
        alice.in_battle = True
        return satan

    def test_satan_demands_a_death_on_a_six(self, board, resolver, alice):
        self._fight_satan(board, alice)
        board.push(alice, DiceRoll(n=6))
        resolver.resolve_next()

        reaction = board.stack.peek()
        assert isinstance(reaction.event.payload, TriggeredEffect)
        assert reaction.event.payload.effect.kind == EffectKind.KILL_PLAYER
        assert reaction.event.payload.effect.target_player is alice

    def test_satan_with_nobody_alive(self, board, resolver, alice, bob):
        """With no living player to choose, Satan's hook does not apply."""
        self._fight_satan(board, alice)
        alice.character.hp = 0
        bob.character.hp = 0
        board.push(alice, DiceRoll(n=6))

        resolver.resolve_next()
        assert board.stack.is_empty
