"""
Choices - The engine's only suspension point.

When a card needs a decision (a target, a card to discard, an option)
the engine builds a PendingChoice and asks a ChoiceProvider for an index.
Providers block until they have an answer and always return an index
within range.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import itertools
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .board import Board

_choice_ids = itertools.count(1)


@dataclass
class PendingChoice:
    """
    A choice that must be made by a player.

    options are the objects being chosen between (cards, players, labels);
    labels are their display strings.
    """
    player_id: str
    choice_type: str  # "card", "player", "monster", "option", "slot", "node"
    prompt: str
    options: list[Any]
    labels: list[str] = field(default_factory=list)
    optional: bool = False
    choice_id: str = field(default_factory=lambda: f"choice_{next(_choice_ids)}")

    def __post_init__(self):
        if not self.labels:
            self.labels = [_label(o) for o in self.options]


def _label(option: Any) -> str:
    for attr in ("row", "describe"):
        method = getattr(option, attr, None)
        if callable(method):
            return method()
    return getattr(option, "name", None) or str(option)


class ChoiceProvider(ABC):
    """Answers PendingChoices. Implementations must return 0 <= i < len(options)."""

    @abstractmethod
    def choose(self, board: Board, choice: PendingChoice) -> int:
        pass


class FirstOptionChooser(ChoiceProvider):
    """Always picks the first option."""

    def choose(self, board: Board, choice: PendingChoice) -> int:
        return 0


class RoutingChooser(ChoiceProvider):
    """Sends each choice to the provider seated for choice.player_id."""

    def __init__(self, seats: dict[str, ChoiceProvider], default: ChoiceProvider | None = None):
        self.seats = seats
        self.default = default or FirstOptionChooser()

    def choose(self, board: Board, choice: PendingChoice) -> int:
        provider = self.seats.get(choice.player_id, self.default)
        index = provider.choose(board, choice)
        if not 0 <= index < len(choice.options):
            # A misbehaving seat never leaks an out-of-range index into the engine.
            return 0
        return index


class ScriptedChooser(ChoiceProvider):
    """Replays a fixed list of answers, then falls back to the first option."""

    def __init__(self, answers: list[int] | None = None):
        self.answers = list(answers or [])
        self.asked: list[PendingChoice] = []

    def choose(self, board: Board, choice: PendingChoice) -> int:
        self.asked.append(choice)
        if self.answers:
            return min(self.answers.pop(0), len(choice.options) - 1)
        return 0
