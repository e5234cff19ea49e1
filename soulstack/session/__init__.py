"""
Session Module - Drives a game from setup to victory.

A session is one play-through:
- Created from a Board and one agent per seat
- Runs turns, response windows and field checks
- Ends when a player reaches the soul threshold or the turn limit

Sessions are EPHEMERAL: nothing is persisted between games.
"""

from .game_loop import GameLoop, GameResult, LoopState

__all__ = [
    "GameLoop",
    "GameResult",
    "LoopState",
]
