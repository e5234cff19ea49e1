"""
Event Model - Payload variants and the event stack.

The stack is a singly-linked list with a cached top node. Node ids
strictly increase with push order, so a search walking down from the
top can stop as soon as it sees an id smaller than the target.

Nodes keep their identity for as long as they are on the stack; card
effects hold references to nodes and mutate their payloads in place
(reduce damage, change a roll, fizzle).
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Iterator, TYPE_CHECKING, Union

from .errors import ErrorCode, InvariantViolation, Outcome

if TYPE_CHECKING:
    from .cards import Card, LootCard, MonsterCard
    from .effects import Effect
    from .player import Player

logger = logging.getLogger(__name__)


# ============================================================================
# Payload variants
# ============================================================================

@dataclass
class Activate:
    """A character or active item's activation fires."""
    card: Card
    effect: Effect


@dataclass
class Damage:
    """Damage to a player or monster. monster is the source on a missed attack."""
    target: Union[Player, MonsterCard]
    n: int
    monster: MonsterCard | None = None


@dataclass
class CharacterDeath:
    """The event's player died."""


@dataclass
class DeclareAttack:
    monster: MonsterCard


@dataclass
class DeclarePurchase:
    """slot is a shop slot index, or -1 for the top of the treasure deck."""
    slot: int


@dataclass
class DiceRoll:
    n: int


@dataclass
class EndTurn:
    pass


@dataclass
class Fizzled:
    """Replacement payload for a cancelled event. Resolves as a no-op."""


@dataclass
class IntentionToAttack:
    """monster is None when attacking the top of the monster deck."""
    monster: MonsterCard | None = None


@dataclass
class IntentionToPurchase:
    pass


@dataclass
class LootCardPlayed:
    card: LootCard
    effect: Effect


@dataclass
class MonsterReward:
    monster: MonsterCard
    effect: Effect


@dataclass
class PaidItemActivated:
    card: Card
    effect: Effect


@dataclass
class StartOfTurn:
    pass


@dataclass
class TriggeredEffect:
    """A passive, on-death or reveal effect to run."""
    card: Card
    effect: Effect


EventPayload = Union[
    Activate,
    Damage,
    CharacterDeath,
    DeclareAttack,
    DeclarePurchase,
    DiceRoll,
    EndTurn,
    Fizzled,
    IntentionToAttack,
    IntentionToPurchase,
    LootCardPlayed,
    MonsterReward,
    PaidItemActivated,
    StartOfTurn,
    TriggeredEffect,
]

TURN_BOUNDARY_EVENTS = (StartOfTurn, EndTurn)


@dataclass
class Event:
    """
    Something that changes game state.

    player is the original initiator and is preserved through chains.
    roll is written by the DiceRoll event resolved directly above.
    """
    player: Player
    payload: EventPayload
    roll: int = 0

    @property
    def is_fizzled(self) -> bool:
        return isinstance(self.payload, Fizzled)

    def describe(self) -> str:
        name = type(self.payload).__name__
        detail = ""
        payload = self.payload
        if isinstance(payload, Damage):
            detail = f" {payload.n} to {payload.target.name}"
        elif isinstance(payload, DiceRoll):
            detail = f" {payload.n}"
        elif isinstance(payload, (Activate, LootCardPlayed, PaidItemActivated, TriggeredEffect)):
            detail = f" {payload.card.name}"
        elif isinstance(payload, (DeclareAttack, IntentionToAttack)):
            detail = f" {payload.monster.name if payload.monster else 'monster deck'}"
        return f"{self.player.player_id}: {name}{detail}"


@dataclass(eq=False)
class EventNode:
    node_id: int
    event: Event
    next: EventNode | None = field(default=None, repr=False)


# ============================================================================
# Stack
# ============================================================================

class EventStack:
    """
    LIFO stack of pending events.

    push/pop/peek are O(1). search is O(size) with an early exit.
    """

    def __init__(self):
        self.top: EventNode | None = None
        self.size = 0
        self._next_id = 0

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[EventNode]:
        """Walk from the top down."""
        node = self.top
        while node is not None:
            yield node
            node = node.next

    @property
    def is_empty(self) -> bool:
        return self.top is None

    def push(self, event: Event) -> EventNode:
        self._next_id += 1
        node = EventNode(node_id=self._next_id, event=event, next=self.top)
        self.top = node
        self.size += 1
        logger.debug("push #%d %s", node.node_id, event.describe())
        return node

    def pop(self) -> EventNode | None:
        node = self.top
        if node is None:
            return None
        self.top = node.next
        self.size -= 1
        node.next = None
        logger.debug("pop #%d %s", node.node_id, node.event.describe())
        return node

    def peek(self) -> EventNode | None:
        return self.top

    def search(self, node_id: int) -> Outcome:
        node = self.top
        while node is not None:
            if node.node_id == node_id:
                return Outcome.success(node)
            if node.node_id < node_id:
                break
            node = node.next
        return Outcome.failure(f"Event #{node_id} is not on the stack", ErrorCode.NOT_FOUND)

    def find_all(self, *payload_types: type) -> list[EventNode]:
        """Nodes whose payload is one of payload_types, top first."""
        return [n for n in self if isinstance(n.event.payload, payload_types)]

    def fizzle(self, node: EventNode) -> Outcome:
        found = self.search(node.node_id)
        if not found:
            return found
        if node.event.is_fizzled:
            return Outcome.failure(f"Event #{node.node_id} already fizzled", ErrorCode.NOT_FOUND)
        logger.debug("fizzle #%d %s", node.node_id, node.event.describe())
        node.event.payload = Fizzled()
        return Outcome.success(node)

    def add_to_dice_roll(self, delta: int, node: EventNode) -> Outcome:
        payload = node.event.payload
        if not isinstance(payload, DiceRoll):
            raise InvariantViolation(
                f"Event #{node.node_id} is {type(payload).__name__}, not a dice roll"
            )
        found = self.search(node.node_id)
        if not found:
            return found
        payload.n = min(6, max(1, payload.n + delta))
        return Outcome.success(payload.n)

    def prevent_damage(self, amount: int, node: EventNode) -> Outcome:
        payload = node.event.payload
        if not isinstance(payload, Damage):
            return Outcome.failure(
                f"Event #{node.node_id} is not damage", ErrorCode.VALIDATION
            )
        found = self.search(node.node_id)
        if not found:
            return found
        payload.n = max(0, payload.n - amount)
        if payload.n == 0:
            return self.fizzle(node)
        return Outcome.success(node)

    def drain(self) -> int:
        """Pop every node. Never raises."""
        count = 0
        while self.pop() is not None:
            count += 1
        return count
