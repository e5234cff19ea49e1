"""
Zones - Ordered card containers.

A Deck is a stack: the last element is the top and is drawn first.
An ActiveSlot is a monster battle zone; its top card is the active
monster and the cards beneath it are overlaid (dormant) monsters.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import random

from .cards import Card, MonsterCard
from .errors import ErrorCode, Outcome


@dataclass
class Deck:
    """
    An ordered, mutable sequence of cards of one variant.

    Failure modes are returned as Outcome values, never raised.
    """
    name: str
    cards: list[Card] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def top(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    def append(self, card: Card) -> None:
        """Place a card on top."""
        self.cards.append(card)

    def prepend(self, card: Card) -> None:
        """Place a card on the bottom."""
        self.cards.insert(0, card)

    def pop(self) -> Outcome:
        if not self.cards:
            return Outcome.failure(f"{self.name} is empty", ErrorCode.EMPTY_DECK)
        return Outcome.success(self.cards.pop())

    def pop_by_index(self, index: int) -> Outcome:
        if index < 0 or index >= len(self.cards):
            return Outcome.failure(
                f"Index {index} out of range for {self.name} ({len(self.cards)} cards)",
                ErrorCode.INDEX_OUT_OF_RANGE,
            )
        return Outcome.success(self.cards.pop(index))

    def pop_by_id(self, card_id: int) -> Outcome:
        found = self.search(card_id)
        if not found:
            return found
        _, index = found.value
        return self.pop_by_index(index)

    def search(self, card_id: int) -> Outcome:
        """Find the first card with card_id. Value is (card, index)."""
        for i, card in enumerate(self.cards):
            if card.card_id == card_id:
                return Outcome.success((card, i))
        return Outcome.failure(f"Card {card_id} not in {self.name}", ErrorCode.NOT_FOUND)

    def scan(self, *card_ids: int) -> tuple[list[Card], dict[int, int]]:
        """
        Batch search.

        Returns the matching cards in deck order and a map from each
        found id to the index of its first occurrence.
        """
        wanted = set(card_ids)
        found: list[Card] = []
        indices: dict[int, int] = {}
        for i, card in enumerate(self.cards):
            if card.card_id in wanted:
                found.append(card)
                indices.setdefault(card.card_id, i)
        return found, indices

    def shuffle(self, rng: random.Random | None = None) -> None:
        """Fisher-Yates shuffle in place."""
        rng = rng or random
        cards = self.cards
        for i in range(len(cards) - 1, 0, -1):
            j = rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def merge(
        self,
        other: Deck,
        on_top: bool = True,
        shuffle: bool = False,
        rng: random.Random | None = None,
    ) -> None:
        """Move every card of other into this deck. other is left empty."""
        if on_top:
            self.cards.extend(other.cards)
        else:
            self.cards[:0] = other.cards
        other.cards = []
        if shuffle:
            self.shuffle(rng)


# Returned by ActiveSlot.peek() when the slot holds no monster.
EMPTY_SLOT = MonsterCard(card_id=0, name="Empty slot")


@dataclass
class ActiveSlot:
    """A battle zone. The last card is the active monster."""
    cards: list[MonsterCard] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    def peek(self) -> MonsterCard:
        return self.cards[-1] if self.cards else EMPTY_SLOT

    def push(self, monster: MonsterCard) -> None:
        self.cards.append(monster)

    def pop(self) -> Outcome:
        if not self.cards:
            return Outcome.failure("Active slot is empty", ErrorCode.EMPTY_DECK)
        return Outcome.success(self.cards.pop())
