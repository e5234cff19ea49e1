"""
Tests for the command-line interface.
"""

import json

import pytest

from ..cli import ConsolePolicy, main
from ..engine_core.action import Action
from ..engine_core.choices import PendingChoice


@pytest.fixture
def short_games(tmp_path):
    """A config file that keeps games short."""
    path = tmp_path / "game.json"
    path.write_text(json.dumps({"max_turns": 12}))
    return str(path)


class TestCommands:
    """Tests for the subcommands."""

    def test_cards(self, capsys):
        main(["cards"])
        out = capsys.readouterr().out
        assert "== Characters (10 cards) ==" in out
        assert "Bomb!" in out

    def test_cards_with_expansions(self, capsys):
        main(["cards", "--kickstarter", "--four-souls-plus"])
        assert "== Characters (18 cards) ==" in capsys.readouterr().out

    def test_simulate(self, capsys, short_games):
        main(["--config", short_games, "simulate", "--games", "2", "--seed", "3"])
        out = capsys.readouterr().out
        assert "Game 1:" in out
        assert "Game 2:" in out
        assert "Wins by seat" in out

    def test_simulate_json(self, capsys, short_games):
        main(["--config", short_games, "simulate", "--seed", "3", "--players", "3", "--bot", "random", "--json"])
        summaries = json.loads(capsys.readouterr().out)
        assert len(summaries) == 1
        assert summaries[0]["seed"] == 3
        assert len(summaries[0]["final_state"]["players"]) == 3

    def test_play_with_bots_only(self, capsys, short_games):
        main(["--config", short_games, "play", "--humans", "0", "--seed", "4"])
        out = capsys.readouterr().out
        assert "Seats:" in out
        assert "Turn" in out

    def test_invalid_config(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"num_players": 7}))
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(path), "cards"])
        assert exc.value.code == 1
        assert "invalid configuration" in capsys.readouterr().out

    def test_missing_config(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["--config", str(tmp_path / "missing.json"), "cards"])

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])


class TestConsolePolicy:
    """Tests for the console player."""

    def _policy(self, answers):
        answers = iter(answers)
        output = []
        return ConsolePolicy(input_fn=lambda prompt: next(answers), output_fn=output.append), output

    def test_retries_bad_input(self, board):
        policy, output = self._policy(["x", "7", "1"])
        choice = PendingChoice("p1", "option", "Pick one", ["a", "b", "c"])

        assert policy.select_choice(board, choice) == 1
        assert output.count("Enter a number from 0 to 2") == 2

    def test_single_option_is_not_asked(self, board, alice):
        policy, output = self._policy([])
        only = [Action.end_turn(alice.player_id)]
        assert policy.select_action(board, alice, only).action is only[0]
        assert output == []

    def test_action_menu(self, board, reducer, alice):
        policy, output = self._policy(["0"])
        legal = reducer.generator.generate(alice)
        decision = policy.select_action(board, alice, legal)

        assert decision.action is legal[0]
        assert any("what would you like to do?" in line for line in output)
