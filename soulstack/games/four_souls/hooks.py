"""
Card Hooks - Building blocks for catalog activators and event hooks.

Catalog cards are declared as data. These helpers turn the common card
shapes into the callables the engine expects:
- step / seq: effect builders, parameterized by the acting player
- simple / rolled: activators with a fixed effect or a roll table
- target and stack-node choosers: bind-time selection
- on_event plus matchers: event hooks for passives, monsters and curses
- reward: monster rewards, always paid to the active player
"""

from __future__ import annotations
from typing import Callable, Optional

from ...engine_core.board import Board
from ...engine_core.cards import Card, MonsterCard, TreasureCard
from ...engine_core.effects import ActivationContext, BindResult, Effect, EffectKind
from ...engine_core.events import (
    CharacterDeath,
    Damage,
    DiceRoll,
    EndTurn,
    EventNode,
    IntentionToAttack,
    StartOfTurn,
)
from ...engine_core.player import Player

Step = Callable[[Player], Effect]
Matcher = Callable[[Board, Player, Card, EventNode], bool]
Builder = Callable[[Board, Player, Card, EventNode], Optional[Effect]]


# ============================================================================
# Effect builders
# ============================================================================

def step(kind: EffectKind, amount: int = 0, **params) -> Step:
    """An effect for whoever ends up acting. amount 0 means "the roll" where it applies."""
    def build(player: Player) -> Effect:
        return Effect(kind, player=player, amount=amount, params=dict(params))
    return build


def seq(*steps: Step) -> Step:
    def build(player: Player) -> Effect:
        return Effect.sequence(player, *(s(player) for s in steps))
    return build


def pairs(low: Step, mid: Step, high: Step) -> dict[int, Step]:
    """The usual 1-2 / 3-4 / 5-6 roll table."""
    return {1: low, 2: low, 3: mid, 4: mid, 5: high, 6: high}


def gain_cents(n: int) -> Step:
    return step(EffectKind.GAIN_CENTS, n)


def lose_cents(n: int) -> Step:
    return step(EffectKind.LOSE_CENTS, n)


def loot(n: int) -> Step:
    return step(EffectKind.LOOT, n)


def treasure(n: int) -> Step:
    return step(EffectKind.GAIN_TREASURE, n)


def self_damage(n: int) -> Step:
    def build(player: Player) -> Effect:
        return Effect(EffectKind.DEAL_DAMAGE, player=player, amount=n, target_player=player)
    return build


def damage_effect(player: Player, target, n: int) -> Effect:
    """Damage to a player or a monster, whichever target is."""
    if isinstance(target, Player):
        return Effect(EffectKind.DEAL_DAMAGE, player=player, amount=n, target_player=target)
    return Effect(EffectKind.DEAL_DAMAGE, player=player, amount=n, target_monster=target)


# ============================================================================
# Activators
# ============================================================================

def simple(build: Step, roll_required: bool = False):
    def activator(ctx: ActivationContext) -> BindResult:
        return BindResult.bound(build(ctx.player), roll_required=roll_required)
    return activator


def rolled(table: dict[int, Step]):
    def activator(ctx: ActivationContext) -> BindResult:
        outcomes = {n: build(ctx.player) for n, build in table.items()}
        return BindResult.bound(Effect.roll_table(ctx.player, outcomes), roll_required=True)
    return activator


def deal_damage(n: int, prompt: str = "Deal damage to whom?"):
    """Deal n damage to a chosen player or monster."""
    def activator(ctx: ActivationContext) -> BindResult:
        target = ctx.board.choose_combat_target(ctx.player, prompt)
        if target is None:
            return BindResult.failure("Nothing to damage")
        return BindResult.bound(damage_effect(ctx.player, target, n))
    return activator


def choose_node(
    board: Board,
    player: Player,
    payload_types: tuple[type, ...],
    prompt: str,
    where: Callable[[EventNode], bool] | None = None,
) -> EventNode | None:
    nodes = [n for n in board.stack.find_all(*payload_types) if where is None or where(n)]
    if not nodes:
        return None
    i = board.choose(player, prompt, nodes, "node", labels=[n.event.describe() for n in nodes])
    return nodes[i]


def on_node(
    kind: EffectKind,
    payload_types: tuple[type, ...],
    prompt: str,
    amount: int = 0,
    where: Callable[[EventNode], bool] | None = None,
    **params,
):
    """Target a pending stack event. Fails when none qualifies."""
    def activator(ctx: ActivationContext) -> BindResult:
        node = choose_node(ctx.board, ctx.player, payload_types, prompt, where)
        if node is None:
            return BindResult.failure("Nothing on the stack to target")
        effect = Effect(kind, player=ctx.player, amount=amount, target_node=node, params=dict(params))
        return BindResult.bound(effect)
    return activator


def tapped_items(player: Player) -> list[TreasureCard]:
    return [item for item in player.active_items if item.active and item.tapped]


def recharge_item(ctx: ActivationContext) -> BindResult:
    """Recharge one of your tapped items."""
    tapped = tapped_items(ctx.player)
    if not tapped:
        return BindResult.failure("No tapped item to recharge")
    i = ctx.board.choose(ctx.player, "Recharge which item?", tapped, "card")
    return BindResult.bound(Effect(EffectKind.RECHARGE_ITEM, player=ctx.player, target_card=tapped[i]))


def is_player_damage(node: EventNode) -> bool:
    return isinstance(node.event.payload, Damage) and isinstance(node.event.payload.target, Player)


def set_flag(flag: int, scope: str = "player") -> Step:
    return step(EffectKind.SET_FLAG, flag=flag, scope=scope)


# ============================================================================
# Event hooks
# ============================================================================

def on_event(matches: Matcher, build: Builder, roll_required: bool = False):
    """
    Event hook from a matcher and an effect builder.

    A builder returning None means "not applicable after all".
    """
    def hook(board: Board, owner: Player, card: Card, node: EventNode) -> BindResult:
        if not matches(board, owner, card, node):
            return BindResult.not_applicable()
        effect = build(board, owner, card, node)
        if effect is None:
            return BindResult.not_applicable()
        return BindResult.bound(effect, roll_required=roll_required)
    return hook


def for_owner(build: Step) -> Builder:
    """Adapt a Step to a Builder that acts for the hook's owner."""
    def builder(board: Board, owner: Player, card: Card, node: EventNode) -> Effect:
        return build(owner)
    return builder


def rolls(n: int) -> Matcher:
    def matches(board, owner, card, node) -> bool:
        return isinstance(node.event.payload, DiceRoll) and node.event.payload.n == n
    return matches


def own_start_of_turn(board, owner, card, node) -> bool:
    return isinstance(node.event.payload, StartOfTurn) and node.event.player is owner


def own_end_of_turn(board, owner, card, node) -> bool:
    return isinstance(node.event.payload, EndTurn) and node.event.player is owner


def damage_to_owner(board, owner, card, node) -> bool:
    return isinstance(node.event.payload, Damage) and node.event.payload.target is owner


def damage_to_card(board, owner, card, node) -> bool:
    return isinstance(node.event.payload, Damage) and node.event.payload.target is card


def own_death(board, owner, card, node) -> bool:
    return isinstance(node.event.payload, CharacterDeath) and node.event.player is owner


def other_death(board, owner, card, node) -> bool:
    return isinstance(node.event.payload, CharacterDeath) and node.event.player is not owner


def owner_attacks(board, owner, card, node) -> bool:
    payload = node.event.payload
    return isinstance(payload, IntentionToAttack) and node.event.player is owner and payload.monster is not None


def anyone_attacks(board, owner, card, node) -> bool:
    payload = node.event.payload
    return isinstance(payload, IntentionToAttack) and payload.monster is not None


def harder_to_hit(board: Board, owner: Player, card: Card, node: EventNode) -> Effect:
    """+1 to the roll needed against the monster being attacked."""
    monster = node.event.payload.monster
    return Effect(EffectKind.BUFF, player=owner, target_monster=monster, params={"roll": 1})


# ============================================================================
# Monster rewards
# ============================================================================

def reward(build: Step, roll_required: bool = False):
    """A monster reward for the active player."""
    def hook(board: Board, player: Player, monster: MonsterCard) -> BindResult:
        return BindResult.bound(build(board.active_player), roll_required=roll_required)
    return hook


def cents_reward(n: int):
    """n cents, or cents equal to a roll when n is 0."""
    return reward(gain_cents(n), roll_required=n == 0)


def loot_reward(n: int):
    return reward(loot(n), roll_required=n == 0)


def treasure_reward(n: int):
    return reward(treasure(n))


def loot_and_cents_reward(n_loot: int, n_cents: int):
    return reward(seq(gain_cents(n_cents), loot(n_loot)))


def mega_boss_reward():
    return reward(seq(treasure(1), gain_cents(6)))
