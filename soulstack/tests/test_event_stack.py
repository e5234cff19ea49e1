"""
Tests for the event stack.

Tests:
- LIFO order and node ids
- Search with early exit
- Fizzling, roll changes and damage prevention
"""

import pytest

from ..engine_core.errors import ErrorCode, InvariantViolation
from ..engine_core.events import (
    Damage,
    DiceRoll,
    EndTurn,
    Event,
    EventStack,
    Fizzled,
    StartOfTurn,
)


@pytest.fixture
def stack() -> EventStack:
    return EventStack()


class TestPushPop:
    """Tests for basic stack operations."""

    def test_empty_stack(self, stack):
        """A new stack is empty and pops nothing."""
        assert stack.is_empty
        assert len(stack) == 0
        assert stack.pop() is None
        assert stack.peek() is None

    def test_lifo_order(self, stack, alice):
        """The last event pushed is the first popped."""
        first = stack.push(Event(alice, StartOfTurn()))
        second = stack.push(Event(alice, EndTurn()))

        assert stack.peek() is second
        assert stack.pop() is second
        assert stack.pop() is first
        assert stack.is_empty

    def test_node_ids_increase(self, stack, alice):
        """Node ids strictly increase with push order, even after pops."""
        a = stack.push(Event(alice, StartOfTurn()))
        stack.pop()
        b = stack.push(Event(alice, StartOfTurn()))
        c = stack.push(Event(alice, StartOfTurn()))
        assert a.node_id < b.node_id < c.node_id

    def test_iterates_top_down(self, stack, alice):
        """Iteration walks from the top of the stack down."""
        nodes = [stack.push(Event(alice, DiceRoll(n))) for n in (1, 2, 3)]
        assert list(stack) == list(reversed(nodes))

    def test_drain(self, stack, alice):
        """Drain pops everything and reports the count."""
        for n in range(4):
            stack.push(Event(alice, DiceRoll(n + 1)))
        assert stack.drain() == 4
        assert stack.is_empty
        assert stack.drain() == 0


class TestSearch:
    """Tests for search and find_all."""

    def test_search_finds_pending_node(self, stack, alice):
        """A pending node is found by id."""
        node = stack.push(Event(alice, DiceRoll(3)))
        stack.push(Event(alice, EndTurn()))

        found = stack.search(node.node_id)
        assert found
        assert found.value is node

    def test_search_misses_popped_node(self, stack, alice):
        """A node that has left the stack is not found."""
        node = stack.push(Event(alice, DiceRoll(3)))
        stack.pop()

        found = stack.search(node.node_id)
        assert not found
        assert found.error_code == ErrorCode.NOT_FOUND

    def test_find_all_by_payload(self, stack, alice):
        """find_all returns matching nodes, top first."""
        low = stack.push(Event(alice, DiceRoll(1)))
        stack.push(Event(alice, EndTurn()))
        high = stack.push(Event(alice, DiceRoll(6)))

        assert stack.find_all(DiceRoll) == [high, low]
        assert stack.find_all(Damage) == []


class TestMutation:
    """Tests for in-place changes to pending events."""

    def test_fizzle_replaces_payload(self, stack, alice):
        """A fizzled node keeps its identity but resolves as nothing."""
        node = stack.push(Event(alice, DiceRoll(4)))
        assert stack.fizzle(node)
        assert isinstance(node.event.payload, Fizzled)
        assert stack.peek() is node

    def test_fizzle_twice_fails(self, stack, alice):
        """An already fizzled node cannot be fizzled again."""
        node = stack.push(Event(alice, DiceRoll(4)))
        stack.fizzle(node)
        assert not stack.fizzle(node)

    def test_add_to_dice_roll_clamps(self, stack, alice):
        """Roll changes stay within 1 to 6."""
        node = stack.push(Event(alice, DiceRoll(5)))
        assert stack.add_to_dice_roll(3, node).value == 6
        assert stack.add_to_dice_roll(-9, node).value == 1

    def test_add_to_dice_roll_on_other_event_is_fatal(self, stack, alice):
        """Changing the roll of a non-roll event is an invariant violation."""
        node = stack.push(Event(alice, EndTurn()))
        with pytest.raises(InvariantViolation):
            stack.add_to_dice_roll(1, node)

    def test_prevent_damage_partially(self, stack, alice):
        """Preventing less than the full amount reduces the damage."""
        node = stack.push(Event(alice, Damage(target=alice, n=3)))
        assert stack.prevent_damage(1, node)
        assert node.event.payload.n == 2
        assert not node.event.is_fizzled

    def test_prevent_damage_to_zero_fizzles(self, stack, alice):
        """Preventing all of the damage fizzles the event."""
        node = stack.push(Event(alice, Damage(target=alice, n=2)))
        stack.prevent_damage(2, node)
        assert node.event.is_fizzled

    def test_prevent_damage_on_other_event_fails(self, stack, alice):
        """Prevention only applies to damage."""
        node = stack.push(Event(alice, DiceRoll(2)))
        result = stack.prevent_damage(1, node)
        assert not result
        assert result.error_code == ErrorCode.VALIDATION
