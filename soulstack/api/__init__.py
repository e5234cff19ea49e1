"""
API Module - Read-only views of a running game.

The views are pydantic models built from a Board. They feed the console
display and the JSON summaries written by `soulstack simulate --json`.
"""

from .schemas import BoardView, CardView, EventView, GameSummary, PlayerView

__all__ = [
    "BoardView",
    "CardView",
    "EventView",
    "GameSummary",
    "PlayerView",
]
