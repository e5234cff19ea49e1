"""
Four Souls Treasure - Treasure deck item definitions.

Three kinds of item:
- Active items tap to use and recharge at the start of their owner's turn
- Paid items never tap; each use costs cents or counters
- Passive items react to events (on_event) or change stats while held
  (continuous)

Several passives are read directly by the Board (Dry Baby, Empty Vessel,
Meat, Synthoil, Shadow, Steamy Sale, The Midas Touch, Trinity Shield,
Guppy's Collar, 1-Up) and so carry no hook here.
"""

from __future__ import annotations

from ...engine_core import ids
from ...engine_core.board import Board
from ...engine_core.cards import Card, TreasureCard
from ...engine_core.effects import ActivationContext, BindResult, Effect, EffectKind
from ...engine_core.events import Activate, Damage, EventNode, PaidItemActivated
from ...engine_core.player import Player
from .entries import FOUR_SOULS_PLUS, CatalogEntry, treasure
from .hooks import (
    damage_to_owner,
    for_owner,
    gain_cents,
    harder_to_hit,
    is_player_damage,
    loot,
    on_event,
    own_death,
    own_end_of_turn,
    owner_attacks,
    pairs,
    recharge_item,
    rolled,
    rolls,
    set_flag,
    simple,
    step,
)


# ============================================================================
# Active items
# ============================================================================

def _crystal_ball(ctx: ActivationContext) -> BindResult:
    guesses = [1, 2, 3, 4, 5, 6]
    guess = guesses[ctx.board.choose(ctx.player, "Guess the next roll", guesses)]
    return BindResult.bound(Effect(EffectKind.CRYSTAL_BALL_GUESS, player=ctx.player, amount=guess))


def _guppys_paw(ctx: ActivationContext) -> BindResult:
    """Take 1 damage: prevent 2 damage to a player. Paid only if you survive it."""
    nodes = [n for n in ctx.board.stack.find_all(Damage) if is_player_damage(n)]
    if not nodes:
        return BindResult.failure("No damage to prevent")
    i = ctx.board.choose(
        ctx.player, "Prevent damage on which event?", nodes, "node",
        labels=[n.event.describe() for n in nodes],
    )
    effect = Effect(
        EffectKind.PREVENT_DAMAGE,
        player=ctx.player,
        amount=2,
        target_node=nodes[i],
        params={"requires_flag": ids.GUPPYS_PAW},
    )
    return BindResult.bound(effect, special=True)


def _mr_boom(ctx: ActivationContext) -> BindResult:
    monsters = [m for m in ctx.board.active_monsters() if not m.is_dead()]
    if not monsters:
        return BindResult.failure("No monster to damage")
    i = ctx.board.choose(ctx.player, "Damage which monster?", monsters, "target")
    return BindResult.bound(
        Effect(EffectKind.DEAL_DAMAGE, player=ctx.player, amount=1, target_monster=monsters[i])
    )


def _two_of_clubs(ctx: ActivationContext) -> BindResult:
    """A chosen player loots double for the rest of the turn."""
    target = ctx.board.choose_player(ctx.player, "Who loots double?", ctx.board.players)
    return BindResult.bound(
        Effect(EffectKind.SET_FLAG, player=ctx.player, target_player=target, params={"flag": ids.TWO_OF_CLUBS})
    )


def _tech_x(ctx: ActivationContext) -> BindResult:
    """Put a counter on this, or spend 3 to kill a player or monster."""
    item = ctx.card
    add_counter = Effect(EffectKind.ADD_COUNTERS, player=ctx.player, amount=1, target_card=item)
    targets = ctx.board.combat_targets()
    if item.counters < 3 or not targets:
        return BindResult.bound(add_counter)
    options = ["Put a counter on Tech X", "Remove 3 counters: kill a player or monster"]
    if ctx.board.choose(ctx.player, "Tech X", options) == 0:
        return BindResult.bound(add_counter)
    target = targets[ctx.board.choose(ctx.player, "Kill whom?", targets, "target")]
    if isinstance(target, Player):
        kill = Effect(EffectKind.KILL_PLAYER, player=ctx.player, target_player=target)
    else:
        kill = Effect(EffectKind.KILL_MONSTER, player=ctx.player, target_monster=target)
    return BindResult.bound(kill, special=True, cost_counters=3)


# ============================================================================
# Passive hooks
# ============================================================================

def _owner_activates_item(board: Board, owner: Player, card: Card, node: EventNode) -> bool:
    payload = node.event.payload
    return (
        isinstance(payload, (Activate, PaidItemActivated))
        and node.event.player is owner
        and isinstance(payload.card, TreasureCard)
    )


def _broke_at_end_of_turn(board: Board, owner: Player, card: Card, node: EventNode) -> bool:
    return own_end_of_turn(board, owner, card, node) and owner.cents == 0


def _someone_else_rolls_six(board: Board, owner: Player, card: Card, node: EventNode) -> bool:
    return rolls(6)(board, owner, card, node) and node.event.player is not owner


def _moms_razor(board: Board, owner: Player, card: Card, node: EventNode) -> Effect | None:
    roller = node.event.player
    options = [f"Deal 1 damage to {roller.player_id}", "Do nothing"]
    if board.choose(owner, "Mom's Razor", options) != 0:
        return None
    return Effect(EffectKind.DEAL_DAMAGE, player=owner, amount=1, target_player=roller)


# ============================================================================
# Continuous effects
# ============================================================================

def _bumbo(board: Board, player: Player, card: Card, leaving: bool) -> None:
    """Bum-Bo! keeps its counters' bonuses only while held."""
    if not leaving:
        return
    if card.counters >= 25:
        player.num_attacks = max(0, player.num_attacks - 99)
        player.base_num_attacks = max(1, player.base_num_attacks - 99)
    if card.counters >= 10:
        player.character.decrease_base_attack(1)
    player.consume_effect(ids.BUMBO)


def _champion_belt(board: Board, player: Player, card: Card, leaving: bool) -> None:
    n = -1 if leaving else 1
    player.num_attacks = max(0, player.num_attacks + n)
    player.base_num_attacks = max(1, player.base_num_attacks + n)


def _dead_cat(board: Board, player: Player, card: Card, leaving: bool) -> None:
    if not leaving:
        card.counters = 9


def _polydactyly(board: Board, player: Player, card: Card, leaving: bool) -> None:
    n = -1 if leaving else 1
    player.num_loot_played = max(0, player.num_loot_played + n)
    player.base_num_loot_played = max(1, player.base_num_loot_played + n)


def _theres_options(board: Board, player: Player, card: Card, leaving: bool) -> None:
    n = -1 if leaving else 1
    player.num_purchases = max(0, player.num_purchases + n)
    player.base_num_purchases = max(1, player.base_num_purchases + n)


# ============================================================================
# Treasure deck
# ============================================================================

ACTIVE_ITEMS = [
    treasure(ids.THE_BATTERY, "The Battery", "Recharge an item.", activator=recharge_item),
    treasure(ids.BLANK_CARD, "Blank Card", "Double the effect of the next loot card you play.",
             activator=simple(set_flag(ids.BLANK_CARD))),
    treasure(ids.BOOK_OF_SIN, "Book of Sin", "Roll: 1-2 gain 1c, 3-4 loot 1, 5-6 +1 HP.",
             activator=rolled(pairs(gain_cents(1), loot(1), step(EffectKind.BUFF, hp=1)))),
    treasure(ids.COMPOST, "Compost", "The next loot draw comes from the loot discard pile.",
             activator=simple(set_flag(ids.COMPOST, scope="loot"))),
    treasure(ids.CRYSTAL_BALL, "Crystal Ball", "Guess the next roll. If right, loot 3.",
             activator=_crystal_ball),
    treasure(ids.GUPPYS_PAW, "Guppy's Paw", "Take 1 damage: prevent 2 damage to a player.",
             activator=_guppys_paw),
    treasure(ids.MR_BOOM, "Mr. Boom", "Deal 1 damage to a monster.", activator=_mr_boom),
    treasure(ids.SACK_OF_PENNIES, "Sack of Pennies", "Gain 1c.", activator=simple(gain_cents(1))),
    treasure(ids.TWO_OF_CLUBS, "Two of Clubs", "A player loots double this turn.", activator=_two_of_clubs),
    treasure(ids.TECH_X, "Tech X", "Add a counter, or remove 3 to kill a player or monster.",
             activator=_tech_x),
]

PASSIVE_ITEMS = [
    treasure(ids.BABY_HAUNT, "Baby Haunt", "Monsters you attack are harder to hit. Passed on when you die.",
             passive=True, on_event=on_event(owner_attacks, harder_to_hit)),
    treasure(ids.BUMBO, "Bum-Bo!", "Cents you gain become counters here.", passive=True, continuous=_bumbo),
    treasure(ids.CHAMPION_BELT, "Champion Belt", "+1 attack each turn.", passive=True, continuous=_champion_belt),
    treasure(ids.THE_DEAD_CAT, "The Dead Cat", "Starts with 9 counters; spend them to prevent damage.",
             passive=True, continuous=_dead_cat),
    treasure(ids.DRY_BABY, "Dry Baby", "You never take more than 1 damage at a time.", passive=True),
    treasure(ids.EDENS_BLESSING, "Eden's Blessing", "At the end of your turn, with no cents, gain 6c.",
             passive=True, on_event=on_event(_broke_at_end_of_turn, for_owner(gain_cents(6)))),
    treasure(ids.EMPTY_VESSEL, "Empty Vessel", "Bonuses when your hand or purse is empty.", passive=True),
    treasure(ids.EYE_OF_GREED, "Eye of Greed", "Each time anyone rolls a 5, gain 5c.",
             passive=True, on_event=on_event(rolls(5), for_owner(gain_cents(5)))),
    treasure(ids.FANNY_PACK, "Fanny Pack", "Each time you take damage, loot 1.",
             passive=True, on_event=on_event(damage_to_owner, for_owner(loot(1)))),
    treasure(ids.GUPPYS_COLLAR, "Guppy's Collar", "When you die, roll: 1-3 prevent it.", passive=True),
    treasure(ids.MEAT, "Meat!", "+1 to your attack rolls.", passive=True),
    treasure(ids.THE_MIDAS_TOUCH, "The Midas Touch", "Each time a monster dies, gain 3c.", passive=True),
    treasure(ids.MOMS_RAZOR, "Mom's Razor", "When another player rolls a 6, you may deal them 1 damage.",
             passive=True, on_event=on_event(_someone_else_rolls_six, _moms_razor)),
    treasure(ids.POLYDACTYLY, "Polydactyly", "Play an additional loot card each turn.",
             passive=True, continuous=_polydactyly),
    treasure(ids.SHADOW, "Shadow", "You take what other players lose to death penalties.", passive=True),
    treasure(ids.SHINY_ROCK, "Shiny Rock", "Each time you activate an item, gain 1c.",
             passive=True, on_event=on_event(_owner_activates_item, for_owner(gain_cents(1)))),
    treasure(ids.STEAMY_SALE, "Steamy Sale", "Shop items cost 5c.", passive=True),
    treasure(ids.SUICIDE_KING, "Suicide King", "Each time you die, loot 3.",
             passive=True, on_event=on_event(own_death, for_owner(loot(3)))),
    treasure(ids.SYNTHOIL, "Synthoil", "+1 to your attack rolls.", passive=True),
    treasure(ids.THERES_OPTIONS, "There's Options", "Buy an additional item each turn.",
             passive=True, continuous=_theres_options),
    treasure(ids.TRINITY_SHIELD, "Trinity Shield", "Others cannot respond on your turn.", passive=True),
]

PLUS_ITEMS = [
    treasure(ids.ONE_UP, "1-Up", "Destroy this to prevent your death.", expansion=FOUR_SOULS_PLUS, passive=True),
    treasure(ids.DADDY_HAUNT, "Daddy Haunt", "Passed on when you die.", expansion=FOUR_SOULS_PLUS, passive=True),
    treasure(ids.MAMA_HAUNT, "Mama Haunt", "Passed on when you die.", expansion=FOUR_SOULS_PLUS, passive=True),
]


TREASURE_CARDS: list[CatalogEntry] = [*ACTIVE_ITEMS, *PASSIVE_ITEMS, *PLUS_ITEMS]
