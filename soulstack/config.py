"""
Game Configuration - Validated settings for a new game.

GameConfig is the only input to games.four_souls.setup.new_game.
A configuration file is plain JSON matching the model, e.g.:

    {"num_players": 3, "seed": 7, "rules": {"four_souls_plus": true}}
"""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class RuleSet(BaseModel):
    """Expansion flags. Each adds characters and cards to the decks."""
    kickstarter: bool = False
    four_souls_plus: bool = False


class GameConfig(BaseModel):
    """Settings for one game."""
    num_players: int = Field(2, ge=2, le=4, description="Seats at the table")
    seed: Optional[int] = Field(None, description="Seed for shuffles and dice; None is unseeded")
    rules: RuleSet = Field(default_factory=RuleSet)
    starting_cents: int = Field(3, ge=0)
    starting_hand: int = Field(3, ge=0)
    monster_slots: int = Field(2, ge=1)
    shop_slots: int = Field(2, ge=1)
    souls_to_win: int = Field(4, ge=1)
    max_turns: int = Field(200, ge=1, description="Simulations stop after this many turns")


def load_config(path: str | Path) -> GameConfig:
    """Read and validate a JSON configuration file. Raises pydantic ValidationError."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return GameConfig.model_validate(data)
