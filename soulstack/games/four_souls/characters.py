"""
Four Souls Characters - Playable characters and their eternal starting items.

Each character starts with one eternal item that can never be destroyed
or taken. STARTING_ITEMS maps a character's card id to the entry for
that item.
"""

from __future__ import annotations
from functools import partial

from ...engine_core import ids
from ...engine_core.board import Board
from ...engine_core.cards import Card, CharacterCard
from ...engine_core.effects import ActivationContext, BindResult, Effect, EffectKind
from ...engine_core.events import CharacterDeath, Damage, DeclareAttack, DiceRoll, EventNode, IntentionToAttack
from ...engine_core.player import Player
from .entries import FOUR_SOULS_PLUS, KICKSTARTER, CatalogEntry, treasure
from .hooks import (
    choose_node,
    damage_effect,
    damage_to_owner,
    for_owner,
    gain_cents,
    loot,
    on_event,
    on_node,
    other_death,
    own_death,
    rolls,
    seq,
    step,
    treasure as gain_treasure,
)


# ============================================================================
# Active starting items
# ============================================================================

def _forever_alone(ctx: ActivationContext) -> BindResult:
    """Steal 1c from a player, or discard a loot card and loot 1."""
    player = ctx.player
    options = ["Steal 1c from a player", "Discard a loot card, then loot 1"]
    victims = [p for p in ctx.board.players if p is not player and p.cents > 0]
    if not victims:
        options = options[1:]
    if not player.hand:
        options = options[:1] if victims else []
    if not options:
        return BindResult.failure("No player has cents and your hand is empty")
    choice = options[ctx.board.choose(player, "Forever Alone", options)]
    if choice.startswith("Steal"):
        victim = ctx.board.choose_player(player, "Steal from whom?", victims)
        return BindResult.bound(Effect(EffectKind.STEAL_CENTS, player=player, amount=1, target_player=victim))
    return BindResult.bound(seq(step(EffectKind.DISCARD_LOOT, 1), loot(1))(player))


def _choose_deck(ctx: ActivationContext, prompt: str, decks: list[str]) -> str:
    return decks[ctx.board.choose(ctx.player, prompt, decks)]


def _sleight_of_hand(ctx: ActivationContext) -> BindResult:
    deck = _choose_deck(ctx, "Look at the top of which deck?", ["loot", "treasure", "monster"])
    return BindResult.bound(Effect(EffectKind.REARRANGE_TOP, player=ctx.player, amount=3, params={"deck": deck}))


def _the_curse(ctx: ActivationContext) -> BindResult:
    """Put the top card of a discard pile on top of its deck."""
    areas = {"loot": ctx.board.loot, "treasure": ctx.board.treasure, "monster": ctx.board.monster}
    decks = [name for name, area in areas.items() if len(area.discard_pile)]
    if not decks:
        return BindResult.failure("Every discard pile is empty")
    deck = _choose_deck(ctx, "Recycle which discard pile?", decks)
    return BindResult.bound(Effect(EffectKind.RECYCLE_DISCARD, player=ctx.player, params={"deck": deck}))


def _book_of_belial(ctx: ActivationContext) -> BindResult:
    node = choose_node(ctx.board, ctx.player, (DiceRoll,), "Change which roll?")
    if node is None:
        return BindResult.failure("No roll on the stack")
    delta = (1, -1)[ctx.board.choose(ctx.player, "Add or subtract 1?", ["+1", "-1"])]
    return BindResult.bound(Effect(EffectKind.ADD_TO_ROLL, player=ctx.player, amount=delta, target_node=node))


def _blood_lust(ctx: ActivationContext) -> BindResult:
    target = ctx.board.choose_combat_target(ctx.player, "Give +1 attack to?")
    if target is None:
        return BindResult.failure("Nothing to buff")
    if isinstance(target, Player):
        return BindResult.bound(Effect(EffectKind.BUFF, player=ctx.player, target_player=target, params={"ap": 1}))
    return BindResult.bound(Effect(EffectKind.BUFF, player=ctx.player, target_monster=target, params={"ap": 1}))


def _the_bone(ctx: ActivationContext) -> BindResult:
    """
    Put a counter on this. Spending counters instead keeps it untapped:
    1 counter adds 1 to a roll, 2 counters deal 1 damage.
    """
    bone = ctx.card
    player = ctx.player
    options = ["Put a counter on The Bone"]
    rolls_on_stack = ctx.board.stack.find_all(DiceRoll)
    if bone.counters >= 1 and rolls_on_stack:
        options.append("Remove 1 counter: +1 to a roll")
    if bone.counters >= 2 and ctx.board.combat_targets():
        options.append("Remove 2 counters: deal 1 damage")
    choice = options[ctx.board.choose(player, "The Bone", options)] if len(options) > 1 else options[0]

    if choice.startswith("Remove 1"):
        node = choose_node(ctx.board, player, (DiceRoll,), "Add 1 to which roll?")
        effect = Effect(EffectKind.ADD_TO_ROLL, player=player, amount=1, target_node=node)
        return BindResult.bound(effect, special=True, cost_counters=1)
    if choice.startswith("Remove 2"):
        target = ctx.board.choose_combat_target(player, "Deal 1 damage to?")
        return BindResult.bound(damage_effect(player, target, 1), special=True, cost_counters=2)
    return BindResult.bound(Effect(EffectKind.ADD_COUNTERS, player=player, amount=1, target_card=bone))


def _void(ctx: ActivationContext) -> BindResult:
    """Discard your hand, then loot that many."""
    n = len(ctx.player.hand)
    if n == 0:
        return BindResult.failure("Your hand is empty")
    return BindResult.bound(seq(step(EffectKind.DISCARD_LOOT, n), loot(n))(ctx.player))


def _attack_node(node: EventNode) -> bool:
    return node.event.player is not None


def _lord_of_the_pit(ctx: ActivationContext) -> BindResult:
    """Cancel an attack; the attacker may attack again."""
    node = choose_node(
        ctx.board, ctx.player, (IntentionToAttack, DeclareAttack), "Cancel which attack?", _attack_node
    )
    if node is None:
        return BindResult.failure("No attack on the stack")
    attacker = node.event.player
    effect = Effect.sequence(
        ctx.player,
        Effect(EffectKind.FIZZLE, player=ctx.player, target_node=node),
        Effect(EffectKind.EXTRA_ATTACK, player=ctx.player, amount=1, target_player=attacker),
    )
    return BindResult.bound(effect)


def _wooden_nickel(ctx: ActivationContext) -> BindResult:
    """Roll: a chosen player gains that many cents."""
    target = ctx.board.choose_player(ctx.player, "Who gains the cents?")
    return BindResult.bound(
        Effect(EffectKind.GAIN_CENTS, player=ctx.player, amount=0, target_player=target), roll_required=True
    )


def _bag_o_trash(ctx: ActivationContext) -> BindResult:
    player = ctx.player
    options = ["Loot 1", "Deal 1 damage to a player or monster", "Play an additional loot card"]
    i = ctx.board.choose(player, "Bag-O-Trash (4c)", options)
    if i == 0:
        effect = loot(1)(player)
    elif i == 1:
        target = ctx.board.choose_combat_target(player, "Deal 1 damage to?")
        if target is None:
            return BindResult.failure("Nothing to damage")
        effect = damage_effect(player, target, 1)
    else:
        effect = Effect(EffectKind.EXTRA_LOOT_PLAY, player=player, amount=1)
    return BindResult.bound(effect, cost_cents=4)


# ============================================================================
# Passive starting items
# ============================================================================

_dark_arts_on_six = on_event(rolls(6), for_owner(gain_cents(3)))
_dark_arts_on_death = on_event(other_death, for_owner(loot(2)))


def _dark_arts(board: Board, owner: Player, card: Card, node: EventNode) -> BindResult:
    """Any roll of 6 pays 3c; another player's death loots 2."""
    bound = _dark_arts_on_six(board, owner, card, node)
    if bound.ok:
        return bound
    return _dark_arts_on_death(board, owner, card, node)


def _gimpy(board: Board, owner: Player, card: Card, node: EventNode) -> Effect:
    options = ["+1 attack this turn", "Gain 1c", "Loot 1, then discard 1"]
    i = board.choose(owner, "Gimpy", options)
    if i == 0:
        return Effect(EffectKind.BUFF, player=owner, params={"ap": 1})
    if i == 1:
        return gain_cents(1)(owner)
    return seq(loot(1), step(EffectKind.DISCARD_LOOT, 1))(owner)


def _incubus(ctx: ActivationContext) -> BindResult:
    return BindResult.bound(seq(loot(1), step(EffectKind.RETURN_LOOT_TO_DECK))(ctx.player))


def _infestation(ctx: ActivationContext) -> BindResult:
    return BindResult.bound(seq(loot(2), step(EffectKind.DISCARD_LOOT, 1))(ctx.player))


def _eternal(card_id: int, name: str, text: str, **fields) -> CatalogEntry:
    return treasure(card_id, name, text, eternal=True, **fields)


# ============================================================================
# Characters
# ============================================================================

STARTING_ITEMS: dict[int, CatalogEntry] = {
    ids.BLUE_BABY: _eternal(ids.FOREVER_ALONE, "Forever Alone",
                            "Steal 1c, or discard a loot card and loot 1.", activator=_forever_alone),
    ids.CAIN: _eternal(ids.SLEIGHT_OF_HAND, "Sleight of Hand",
                       "Look at the top 3 cards of a deck and put them back in any order.",
                       activator=_sleight_of_hand),
    ids.EVE: _eternal(ids.THE_CURSE, "The Curse",
                      "Put the top card of a discard pile on top of its deck.", activator=_the_curse),
    ids.ISAAC: _eternal(ids.THE_D6, "The D6", "Reroll any dice roll.",
                        activator=on_node(EffectKind.REROLL, (DiceRoll,), "Reroll which roll?")),
    ids.JUDAS: _eternal(ids.BOOK_OF_BELIAL, "Book of Belial", "Add or subtract 1 from a roll.",
                        activator=_book_of_belial),
    ids.LAZARUS: _eternal(ids.LAZARUS_RAGS, "Lazarus' Rags", "When you die, gain a treasure.",
                          passive=True, on_event=on_event(own_death, for_owner(gain_treasure(1)))),
    ids.LILITH: _eternal(ids.INCUBUS, "Incubus", "Loot 1, then put a loot card on top of the deck.",
                         activator=_incubus),
    ids.MAGGY: _eternal(ids.YUM_HEART, "Yum Heart", "Prevent 1 damage to a player or monster.",
                        activator=on_node(EffectKind.PREVENT_DAMAGE, (Damage,), "Prevent which damage?", amount=1)),
    ids.SAMSON: _eternal(ids.BLOOD_LUST, "Blood Lust", "+1 attack to a player or monster this turn.",
                         activator=_blood_lust),
    ids.THE_FORGOTTEN: _eternal(ids.THE_BONE, "The Bone", "Add a counter, or spend counters for +1 or damage.",
                                activator=_the_bone),
    ids.APOLLYON: _eternal(ids.VOID, "Void", "Discard your hand, then loot that many.", activator=_void),
    ids.AZAZEL: _eternal(ids.LORD_OF_THE_PIT, "Lord of the Pit",
                         "Cancel an attack. The attacker may attack again.", activator=_lord_of_the_pit),
    ids.THE_KEEPER: _eternal(ids.WOODEN_NICKEL, "Wooden Nickel", "Roll: a player gains that many cents.",
                             activator=_wooden_nickel),
    ids.THE_LOST: _eternal(ids.THE_HOLY_MANTLE, "Holy Mantle", "Prevent a death.",
                           activator=on_node(EffectKind.PREVENT_DEATH, (CharacterDeath,), "Prevent which death?")),
    ids.DARK_JUDAS: _eternal(ids.DARK_ARTS, "Dark Arts", "Any roll of 6 pays 3c. Another player's death loots 2.",
                             passive=True, on_event=_dark_arts),
    ids.GUPPY: _eternal(ids.INFESTATION, "Infestation", "Loot 2, then discard 1.", activator=_infestation),
    ids.WHORE_OF_BABYLON: _eternal(ids.GIMPY, "Gimpy", "When you take damage, gain a bonus.",
                                   passive=True, on_event=on_event(damage_to_owner, _gimpy)),
    ids.BUMBO_CHARACTER: _eternal(ids.BAG_O_TRASH, "Bag-O-Trash", "Pay 4c: loot 1, deal 1 damage or play more loot.",
                                  paid=True, activator=_bag_o_trash),
}


def character(card_id: int, name: str, health: int = 2, expansion: str | None = None) -> CatalogEntry:
    build = partial(CharacterCard, card_id=card_id, name=name, text=STARTING_ITEMS[card_id].sample.name,
                    base_health=health, base_attack=1)
    return CatalogEntry(build, 1, expansion)


CHARACTERS: list[CatalogEntry] = [
    character(ids.BLUE_BABY, "Blue Baby"),
    character(ids.CAIN, "Cain"),
    character(ids.EVE, "Eve"),
    character(ids.ISAAC, "Isaac"),
    character(ids.JUDAS, "Judas"),
    character(ids.LAZARUS, "Lazarus"),
    character(ids.LILITH, "Lilith"),
    character(ids.MAGGY, "Maggy"),
    character(ids.SAMSON, "Samson"),
    character(ids.THE_FORGOTTEN, "The Forgotten"),
    character(ids.APOLLYON, "Apollyon", expansion=KICKSTARTER),
    character(ids.AZAZEL, "Azazel", expansion=KICKSTARTER),
    character(ids.THE_KEEPER, "The Keeper", expansion=KICKSTARTER),
    character(ids.THE_LOST, "The Lost", health=1, expansion=KICKSTARTER),
    character(ids.BUMBO_CHARACTER, "Bum-Bo", expansion=FOUR_SOULS_PLUS),
    character(ids.DARK_JUDAS, "Dark Judas", expansion=FOUR_SOULS_PLUS),
    character(ids.GUPPY, "Guppy", expansion=FOUR_SOULS_PLUS),
    character(ids.WHORE_OF_BABYLON, "Whore of Babylon", expansion=FOUR_SOULS_PLUS),
]
