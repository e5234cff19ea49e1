"""
Bots module - Automated players.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy / FirstLegalPolicy: Baselines
- HeuristicEvaluator and GreedyPolicy: Weighted one-step scoring
- PolicyChooser: Lets a policy answer engine choices
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy, PolicyChooser
from .evaluator import HeuristicEvaluator, EvaluationWeights, GreedyPolicy

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "PolicyChooser",
    "HeuristicEvaluator",
    "EvaluationWeights",
    "GreedyPolicy",
]
