"""
Engine Core - Board state, the event stack and its resolver.

The engine is the runtime that:
1. Holds all mutable state on one Board
2. Generates legal actions
3. Applies actions via the reducer (bind, then commit)
4. Resolves the event stack one node at a time, collecting reactions
"""

from .errors import ErrorCode, InvariantViolation, Outcome
from .cards import Card, CardKind, CharacterCard, LootCard, MonsterCard, TreasureCard
from .zones import ActiveSlot, Deck
from .events import Event, EventNode, EventStack
from .effects import ActivationContext, BindResult, Effect, EffectKind
from .choices import ChoiceProvider, FirstOptionChooser, PendingChoice, RoutingChooser, ScriptedChooser
from .player import Player
from .board import Board, LootArea, MonsterArea, TreasureArea
from .interpreter import EffectInterpreter
from .resolver import Resolver
from .action import Action, ActionPayload, ActionResult, ActionType
from .action_generator import ActionGenerator
from .reducer import Reducer

__all__ = [
    "ErrorCode",
    "InvariantViolation",
    "Outcome",
    "Card",
    "CardKind",
    "CharacterCard",
    "LootCard",
    "MonsterCard",
    "TreasureCard",
    "ActiveSlot",
    "Deck",
    "Event",
    "EventNode",
    "EventStack",
    "ActivationContext",
    "BindResult",
    "Effect",
    "EffectKind",
    "ChoiceProvider",
    "FirstOptionChooser",
    "PendingChoice",
    "RoutingChooser",
    "ScriptedChooser",
    "Player",
    "Board",
    "LootArea",
    "MonsterArea",
    "TreasureArea",
    "EffectInterpreter",
    "Resolver",
    "Action",
    "ActionPayload",
    "ActionResult",
    "ActionType",
    "ActionGenerator",
    "Reducer",
]
