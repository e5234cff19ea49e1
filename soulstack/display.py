"""
Display - Plain-text listings for the console.

Every listing is a list of numbered rows. Choices are numbered from 0 so
the number typed is the index returned to the engine.
"""

from __future__ import annotations
from typing import Iterable

from .api.schemas import BoardView, CardView, PlayerView
from .engine_core.action import Action
from .engine_core.choices import PendingChoice
from .games.four_souls.entries import CatalogEntry


def numbered(rows: Iterable[str], offset: int = 0) -> list[str]:
    return [f"{i}) {row}" for i, row in enumerate(rows, start=offset)]


def _card(view: CardView | None) -> str:
    if view is None:
        return "(empty)"
    if view.hp is not None:
        return f"{view.name} HP {view.hp} Roll {view.roll}+ AP {view.ap}"
    tags = []
    if view.tapped is not None:
        tags.append("tapped" if view.tapped else "ready")
    if view.counters:
        tags.append(f"{view.counters} counters")
    return f"{view.name} ({', '.join(tags)})" if tags else view.name


def render_player(view: PlayerView) -> list[str]:
    marker = "*" if view.is_active else " "
    lines = [
        f"{marker} {view.player_id} {view.character}: HP {view.hp} AP {view.ap} "
        f"{view.cents}c souls {view.souls} hand {view.hand_size}"
    ]
    items = [*view.active_items, *view.passive_items]
    if items:
        lines.append("    items: " + ", ".join(_card(c) for c in items))
    if view.curses:
        lines.append("    curses: " + ", ".join(c.name for c in view.curses))
    return lines


def render_board(view: BoardView) -> str:
    lines = [f"=== Turn {view.turn_number} ({view.active_player_id} to play) ==="]
    lines.append("Monsters:")
    lines.extend("  " + row for row in numbered(_card(m) for m in view.monsters))
    lines.append("Shop:")
    lines.extend("  " + row for row in numbered(_card(c) for c in view.shop))
    for player in view.players:
        lines.extend(render_player(player))
    if view.stack:
        lines.append("Stack (top first):")
        lines.extend(f"  #{e.node_id} {e.description}" for e in view.stack)
    return "\n".join(lines)


def render_hand(cards) -> list[str]:
    return numbered(card.row() for card in cards)


def render_actions(actions: list[Action]) -> list[str]:
    return numbered(action.describe() for action in actions)


def render_choice(choice: PendingChoice) -> list[str]:
    return [choice.prompt, *numbered(choice.labels)]


def render_catalog(sections: dict[str, list[CatalogEntry]]) -> str:
    lines = []
    for title, entries in sections.items():
        lines.append(f"== {title} ({sum(e.copies for e in entries)} cards) ==")
        for entry in entries:
            copies = f" x{entry.copies}" if entry.copies > 1 else ""
            lines.append(f"  {entry.sample.row()}{copies}")
    return "\n".join(lines)
