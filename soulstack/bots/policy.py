"""
Bot Policy - Interface for bot decision-making.

A BotPolicy looks at the Board and returns a decision.
Decisions include:
- Which action to take at a priority point
- Answers to choices raised while effects bind or resolve

PolicyChooser adapts a policy to the engine's ChoiceProvider interface,
so the same bot answers both kinds of question.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import random
from typing import TYPE_CHECKING, Any

from ..engine_core.action import ActionType
from ..engine_core.choices import ChoiceProvider

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.board import Board
    from ..engine_core.choices import PendingChoice
    from ..engine_core.player import Player


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation (for the console and logs)
    - Confidence in the decision
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0

    # Evaluation details (for debugging)
    evaluated_actions: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects actions and answers choices.
    """

    @abstractmethod
    def select_action(self, board: Board, player: Player, legal_actions: list[Action]) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            board: Current game state
            player: The player holding priority
            legal_actions: List of legal actions to choose from

        Returns:
            BotDecision with the selected action
        """
        pass

    @abstractmethod
    def select_choice(self, board: Board, choice: PendingChoice) -> int:
        """Return the index of the chosen option."""
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


def require_actions(legal_actions: list[Action]) -> None:
    if not legal_actions:
        raise ValueError("No legal actions available")


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Ending the turn is only picked once nothing else is left, so random
    games still make progress.

    Used for:
    - Simulation
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(self, board: Board, player: Player, legal_actions: list[Action]) -> BotDecision:
        require_actions(legal_actions)
        turn_actions = [
            a for a in legal_actions
            if a.action_type in (ActionType.PLAY_LOOT, ActionType.BUY_ITEM, ActionType.ATTACK)
        ]
        pool = turn_actions or legal_actions
        if not turn_actions:
            passing = [a for a in legal_actions if a.action_type in (ActionType.END_TURN, ActionType.PASS)]
            # Reactions are taken a third of the time
            if passing and self.rng.random() < 2 / 3:
                pool = passing
        action = self.rng.choice(pool)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            confidence=1.0 / len(pool),
            evaluated_actions=len(pool),
        )

    def select_choice(self, board: Board, choice: PendingChoice) -> int:
        if not choice.options:
            raise ValueError("No options available")
        return self.rng.randrange(len(choice.options))


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first legal action.

    Used for:
    - Deterministic testing
    - Baseline comparison
    """

    def select_action(self, board: Board, player: Player, legal_actions: list[Action]) -> BotDecision:
        require_actions(legal_actions)
        return BotDecision(
            action=legal_actions[0],
            explanation="Selected first legal action",
            evaluated_actions=1,
        )

    def select_choice(self, board: Board, choice: PendingChoice) -> int:
        if not choice.options:
            raise ValueError("No options available")
        return 0


class PolicyChooser(ChoiceProvider):
    """Answers engine choices with a bot policy."""

    def __init__(self, policy: BotPolicy):
        self.policy = policy

    def choose(self, board: Board, choice: PendingChoice) -> int:
        return self.policy.select_choice(board, choice)
