"""
Effects - Command objects produced at bind time and run at resolve time.

An Effect is a plain value: a kind tag plus the targets chosen while
binding. It holds no callables, so nothing captured at bind time can
change underneath it. The EffectInterpreter gives each kind its meaning.

BindResult is what every activator and hook returns:
- an Effect plus flags (roll_required, special) and costs (cents, counters), or
- a failure (validation error, or "not applicable" for hooks).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TYPE_CHECKING

from .errors import ErrorCode

if TYPE_CHECKING:
    from .board import Board
    from .cards import Card, MonsterCard
    from .events import EventNode
    from .player import Player


class EffectKind(Enum):
    """What an effect does when it resolves."""
    NOTHING = "nothing"
    SEQUENCE = "sequence"              # params["steps"]: list[Effect]
    ROLL_TABLE = "roll_table"          # params["table"]: {roll: Effect}

    # Economy
    GAIN_CENTS = "gain_cents"          # amount 0 means "the roll"
    LOSE_CENTS = "lose_cents"
    STEAL_CENTS = "steal_cents"        # from target_player to player
    LOOT = "loot"                      # amount 0 means "the roll"
    DISCARD_LOOT = "discard_loot"
    RETURN_LOOT_TO_DECK = "return_loot_to_deck"
    GAIN_TREASURE = "gain_treasure"

    # Combat
    DEAL_DAMAGE = "deal_damage"
    DAMAGE_ALL_PLAYERS = "damage_all_players"
    PREVENT_DAMAGE = "prevent_damage"
    KILL_PLAYER = "kill_player"
    KILL_MONSTER = "kill_monster"
    BUFF = "buff"                      # params: ap, hp, heal, roll
    EXTRA_ATTACK = "extra_attack"

    # Stack manipulation
    ADD_TO_ROLL = "add_to_roll"
    REROLL = "reroll"                  # params["value"]: set instead of rolling
    FIZZLE = "fizzle"                  # params["cascade"]: also fizzle a follow-up
    PREVENT_DEATH = "prevent_death"

    # Cards and items
    EXTRA_LOOT_PLAY = "extra_loot_play"
    PLAY_LOOT = "play_loot"
    RECHARGE_ITEM = "recharge_item"    # target_card None means every item
    ADD_COUNTERS = "add_counters"
    SET_FLAG = "set_flag"              # params["flag"]: card id
    CRYSTAL_BALL_GUESS = "crystal_ball_guess"
    GAIN_SOUL = "gain_soul"
    STEAL_SOUL = "steal_soul"          # target_card from target_player to player
    RETURN_SOUL = "return_soul"        # target_card back on top of the monster deck
    GIVE_CURSE = "give_curse"
    DESTROY_CURSE = "destroy_curse"
    DESTROY_ITEM = "destroy_item"
    REARRANGE_TOP = "rearrange_top"    # params["deck"], amount
    PEEK_TOP = "peek_top"              # params["deck"]: may move the top card to the bottom
    RECYCLE_DISCARD = "recycle_discard"

    # Board and turn
    EXPAND_SLOTS = "expand_slots"      # params["area"]: "monster" | "shop"
    SKIP_TURN = "skip_turn"
    FORCE_END_TURN = "force_end_turn"


# Kinds whose amount doubles under a "double the next loot effect" modifier.
DOUBLABLE = frozenset({
    EffectKind.GAIN_CENTS,
    EffectKind.LOSE_CENTS,
    EffectKind.STEAL_CENTS,
    EffectKind.LOOT,
    EffectKind.GAIN_TREASURE,
    EffectKind.DEAL_DAMAGE,
    EffectKind.DAMAGE_ALL_PLAYERS,
    EffectKind.PREVENT_DAMAGE,
    EffectKind.ADD_TO_ROLL,
    EffectKind.BUFF,
    EffectKind.EXTRA_ATTACK,
})


@dataclass
class Effect:
    """
    A deferred effect with its targets already chosen.

    player is the beneficiary. on_rolls, when set, limits the effect to
    those die values; any other roll makes it a no-op.
    """
    kind: EffectKind
    player: Player | None = None
    amount: int = 0
    target_player: Player | None = None
    target_monster: MonsterCard | None = None
    target_node: EventNode | None = None
    target_card: Card | None = None
    on_rolls: frozenset[int] | None = None
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def sequence(cls, player: Player, *steps: Effect) -> Effect:
        return cls(kind=EffectKind.SEQUENCE, player=player, params={"steps": list(steps)})

    @classmethod
    def roll_table(cls, player: Player, table: dict[int, Effect]) -> Effect:
        return cls(kind=EffectKind.ROLL_TABLE, player=player, params={"table": table})


@dataclass
class BindResult:
    """
    Result of binding an activation or asking a hook whether it applies.

    special marks card-specific commit behaviour (see activation).
    cost_cents and cost_counters are paid by the commit phase, never by
    the binder. Counters come off the activated card.
    """
    effect: Effect | None = None
    roll_required: bool = False
    special: bool = False
    cost_cents: int = 0
    cost_counters: int = 0
    error: str | None = None
    error_code: ErrorCode | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.effect is not None

    @classmethod
    def bound(
        cls,
        effect: Effect,
        roll_required: bool = False,
        special: bool = False,
        cost_cents: int = 0,
        cost_counters: int = 0,
    ) -> BindResult:
        return cls(
            effect=effect,
            roll_required=roll_required,
            special=special,
            cost_cents=cost_cents,
            cost_counters=cost_counters,
        )

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode = ErrorCode.VALIDATION) -> BindResult:
        return cls(error=error, error_code=error_code)

    @classmethod
    def not_applicable(cls) -> BindResult:
        return cls(error="not applicable", error_code=ErrorCode.NOT_APPLICABLE)


@dataclass
class ActivationContext:
    """What an activator sees while binding: the board, who activates, and the card."""
    board: Board
    player: Player
    card: Card
