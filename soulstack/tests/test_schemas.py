"""
Tests for the pydantic views.

Tests:
- Card views per variant
- Board views of a live game
- JSON output
"""

import json

from ..api.schemas import BoardView, CardView, EventView, GameSummary, PlayerView
from ..engine_core import ids
from ..engine_core.events import Damage
from .conftest import make_item, make_monster, make_penny


class TestCardView:
    """Tests for CardView.from_card."""

    def test_monster_shows_stats(self, gaper):
        view = CardView.from_card(gaper)
        assert view.kind == "monster"
        assert (view.hp, view.roll, view.ap) == (2, 4, 1)

    def test_bonus_card_hides_stats(self):
        view = CardView.from_card(make_monster(card_id=ids.CHEST, name="Chest", health=0))
        assert view.hp is None

    def test_active_item_shows_tapped(self):
        view = CardView.from_card(make_item(tapped=True, counters=2))
        assert view.tapped is True
        assert view.counters == 2

    def test_passive_item_has_no_tapped(self):
        assert CardView.from_card(make_item(passive=True)).tapped is None

    def test_loot_card(self):
        view = CardView.from_card(make_penny())
        assert view.kind == "loot"
        assert view.eternal is False


class TestBoardView:
    """Tests for BoardView and PlayerView."""

    def test_player_view(self, board, alice):
        alice.cents = 4
        alice.hand.append(make_penny())
        view = PlayerView.from_player(board, alice)

        assert view.is_active
        assert view.cents == 4
        assert view.hand_size == 1
        assert view.hp == 2

    def test_board_view(self, board, alice):
        board.push(alice, Damage(target=alice, n=1))
        view = BoardView.from_board(board)

        assert view.active_player_id == "p1"
        assert [p.player_id for p in view.players] == ["p1", "p2"]
        assert view.monsters[0].name == "Gaper"
        assert view.shop == [None]
        assert view.stack[0].event_type == "Damage"
        assert view.loot_deck_size == 6

    def test_event_view(self, board, alice):
        node = board.push(alice, Damage(target=alice, n=1))
        view = EventView.from_node(node)
        assert view.player_id == "p1"
        assert "1 to" in view.description

    def test_seeded_game_view(self, seeded_game):
        view = BoardView.from_board(seeded_game)
        assert len(view.monsters) == 2
        assert all(m is not None for m in view.monsters)
        assert all(len(p.active_items) + len(p.passive_items) == 1 for p in view.players)

    def test_json_round_trip(self, seeded_game):
        summary = GameSummary(
            seed=1, winners=[], turns_played=0, reason="turn_limit",
            final_state=BoardView.from_board(seeded_game),
        )
        data = json.loads(summary.model_dump_json())
        assert data["final_state"]["turn_number"] == 0
        assert GameSummary.model_validate(data) == summary
