"""
Soulstack - Four Souls Rules Engine

A deterministic, event-stack driven engine for the Four Souls card game.
The engine provides:
- Board state management
- An event stack with reactive trigger scanning
- Two-phase card activation (bind, then commit)
- Legal action generation
- Bot policies for simulated players
"""

__version__ = "0.1.0"
