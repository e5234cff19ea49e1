"""
Games module - Game-specific content for the rules engine.

Each game has its own subpackage with:
- Card catalog (characters, starting items, the three decks)
- Card hooks built from engine effects
- Game setup from a GameConfig
"""
