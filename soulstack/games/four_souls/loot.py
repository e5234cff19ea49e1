"""
Four Souls Loot - Loot deck card definitions.

Loot cards are played from hand and resolve through the stack. Trinkets
are played into the passive item area instead and react to events from
there. Cards that need the engine's damage or death pipeline (Broken
Ankh, Guppy's Hairball) carry no hook here; the Board wires them in.
"""

from __future__ import annotations

from ...engine_core import ids
from ...engine_core.board import Board
from ...engine_core.cards import Card
from ...engine_core.effects import ActivationContext, BindResult, Effect, EffectKind
from ...engine_core.events import (
    Activate,
    CharacterDeath,
    Damage,
    DiceRoll,
    EventNode,
    LootCardPlayed,
    PaidItemActivated,
)
from ...engine_core.player import Player
from .entries import KICKSTARTER, CatalogEntry, loot_card, trinket
from .hooks import (
    damage_effect,
    damage_to_owner,
    deal_damage,
    for_owner,
    gain_cents,
    is_player_damage,
    lose_cents,
    loot,
    on_event,
    on_node,
    own_start_of_turn,
    pairs,
    recharge_item,
    rolled,
    self_damage,
    seq,
    set_flag,
    simple,
    step,
    tapped_items,
    treasure,
)


# ============================================================================
# Bind-time activators
# ============================================================================

def _blank_rune(ctx: ActivationContext) -> BindResult:
    """Every player gets the same outcome, decided by one roll."""
    def each(kind: EffectKind, n: int) -> Effect:
        steps = []
        for target in ctx.board.players:
            if kind is EffectKind.DEAL_DAMAGE:
                steps.append(damage_effect(ctx.player, target, n))
            else:
                steps.append(Effect(kind, player=ctx.player, amount=n, target_player=target))
        return Effect.sequence(ctx.player, *steps)

    table = {
        1: each(EffectKind.GAIN_CENTS, 1),
        2: each(EffectKind.LOOT, 2),
        3: each(EffectKind.DEAL_DAMAGE, 3),
        4: each(EffectKind.GAIN_CENTS, 4),
        5: each(EffectKind.LOOT, 5),
        6: each(EffectKind.GAIN_CENTS, 6),
    }
    return BindResult.bound(Effect.roll_table(ctx.player, table), roll_required=True)


def _dagaz(ctx: ActivationContext) -> BindResult:
    """Destroy one of your curses, or prevent 1 damage to a player."""
    player = ctx.player
    damage_nodes = [n for n in ctx.board.stack.find_all(Damage) if is_player_damage(n)]
    options: list[str] = []
    if player.curses:
        options.append("Destroy a curse")
    if damage_nodes:
        options.append("Prevent 1 damage")
    if not options:
        return BindResult.failure("No curse to destroy and no damage to prevent")

    if options[ctx.board.choose(player, "Dagaz", options)] == "Destroy a curse":
        i = ctx.board.choose(player, "Destroy which curse?", player.curses, "card")
        return BindResult.bound(Effect(EffectKind.DESTROY_CURSE, player=player, target_card=player.curses[i]))
    i = ctx.board.choose(
        player, "Prevent damage on which event?", damage_nodes, "node",
        labels=[n.event.describe() for n in damage_nodes],
    )
    return BindResult.bound(Effect(EffectKind.PREVENT_DAMAGE, player=player, amount=1, target_node=damage_nodes[i]))


def _charged_penny(ctx: ActivationContext) -> BindResult:
    steps = [Effect(EffectKind.GAIN_CENTS, player=ctx.player, amount=1)]
    tapped = tapped_items(ctx.player)
    if tapped:
        i = ctx.board.choose(ctx.player, "Recharge which item?", tapped, "card")
        steps.append(Effect(EffectKind.RECHARGE_ITEM, player=ctx.player, target_card=tapped[i]))
    return BindResult.bound(Effect.sequence(ctx.player, *steps))


def _lost_soul(ctx: ActivationContext) -> BindResult:
    return BindResult.bound(Effect(EffectKind.GAIN_SOUL, player=ctx.player, target_card=ctx.card))


def _the_magician(ctx: ActivationContext) -> BindResult:
    rolls = ctx.board.stack.find_all(DiceRoll)
    if not rolls:
        return BindResult.failure("No dice roll to change")
    i = ctx.board.choose(
        ctx.player, "Change which roll?", rolls, "node", labels=[n.event.describe() for n in rolls]
    )
    values = [1, 2, 3, 4, 5, 6]
    value = values[ctx.board.choose(ctx.player, "Make it a", values)]
    return BindResult.bound(
        Effect(EffectKind.REROLL, player=ctx.player, target_node=rolls[i], params={"value": value})
    )


def _the_high_priestess(ctx: ActivationContext) -> BindResult:
    """Roll; deal that much damage to a chosen target."""
    target = ctx.board.choose_combat_target(ctx.player, "Deal damage to whom?")
    if target is None:
        return BindResult.failure("Nothing to damage")
    return BindResult.bound(damage_effect(ctx.player, target, 0), roll_required=True)


def _death(ctx: ActivationContext) -> BindResult:
    living = ctx.board.living_players()
    if not living:
        return BindResult.failure("No living player to kill")
    target = ctx.board.choose_player(ctx.player, "Kill which player?", living)
    return BindResult.bound(Effect(EffectKind.KILL_PLAYER, player=ctx.player, target_player=target))


def _the_tower(ctx: ActivationContext) -> BindResult:
    player = ctx.player
    all_players_1 = Effect(EffectKind.DAMAGE_ALL_PLAYERS, player=player, amount=1)
    all_players_2 = Effect(EffectKind.DAMAGE_ALL_PLAYERS, player=player, amount=2)
    monsters = Effect.sequence(
        player, *(damage_effect(player, m, 1) for m in ctx.board.active_monsters())
    )
    table = {1: all_players_1, 2: all_players_1, 3: monsters, 4: monsters, 5: all_players_2, 6: all_players_2}
    return BindResult.bound(Effect.roll_table(player, table), roll_required=True)


def _temperance(ctx: ActivationContext) -> BindResult:
    """Take 1 damage for 4 cents or 2 damage for 8; paid only if you survive it."""
    options = ["Take 1 damage: gain 4c", "Take 2 damage: gain 8c"]
    take_two = ctx.board.choose(ctx.player, "Temperance", options) == 1
    effect = Effect(
        EffectKind.GAIN_CENTS,
        player=ctx.player,
        amount=8 if take_two else 4,
        params={"requires_flag": ids.TEMPERANCE},
    )
    return BindResult.bound(effect, special=take_two)


# ============================================================================
# Trinket hooks
# ============================================================================

def _any_death(board: Board, owner: Player, card: Card, node: EventNode) -> bool:
    return isinstance(node.event.payload, CharacterDeath)


def _peek(deck: str):
    def build(board: Board, owner: Player, card: Card, node: EventNode) -> Effect:
        return Effect(EffectKind.PEEK_TOP, player=owner, params={"deck": deck})
    return build


_STACK_ACTIVATIONS = (Activate, LootCardPlayed, PaidItemActivated)


# ============================================================================
# Cents
# ============================================================================

CENTS = [
    loot_card(ids.A_PENNY, "A Penny!", "Gain 1c.", copies=2, activator=simple(gain_cents(1))),
    loot_card(ids.TWO_CENTS, "2 Cents!", "Gain 2c.", copies=6, activator=simple(gain_cents(2))),
    loot_card(ids.THREE_CENTS, "3 Cents!", "Gain 3c.", copies=10, activator=simple(gain_cents(3))),
    loot_card(ids.FOUR_CENTS, "4 Cents!", "Gain 4c.", copies=10, activator=simple(gain_cents(4))),
    loot_card(ids.A_NICKEL, "A Nickel!", "Gain 5c.", copies=5, activator=simple(gain_cents(5))),
    loot_card(ids.A_DIME, "A Dime!!", "Gain 10c.", activator=simple(gain_cents(10))),
]


# ============================================================================
# Runes, bombs and batteries
# ============================================================================

BASICS = [
    loot_card(ids.BLANK_RUNE, "Blank Rune", "Roll: every player gets the rolled reward.", activator=_blank_rune),
    loot_card(ids.BOMB, "Bomb!", "Deal 1 damage to a monster or player.", copies=4, activator=deal_damage(1)),
    loot_card(ids.GOLD_BOMB, "Gold Bomb!!", "Deal 3 damage to a monster or player.", activator=deal_damage(3)),
    loot_card(
        ids.BUTTER_BEAN, "Butter Bean!", "Cancel the effect of an active item or loot card.", copies=3,
        activator=on_node(EffectKind.FIZZLE, _STACK_ACTIVATIONS, "Cancel which effect?", cascade=True),
    ),
    loot_card(ids.DAGAZ, "Dagaz", "Destroy a curse, or prevent 1 damage to a player.", activator=_dagaz),
    loot_card(
        ids.DICE_SHARD, "Dice Shard", "Reroll any dice roll.", copies=3,
        activator=on_node(EffectKind.REROLL, (DiceRoll,), "Reroll which roll?"),
    ),
    loot_card(ids.LIL_BATTERY, "Lil Battery", "Recharge an item.", copies=4, activator=recharge_item),
    loot_card(ids.MEGA_BATTERY, "Mega Battery", "Recharge all your items.",
              activator=simple(step(EffectKind.RECHARGE_ITEM))),
    loot_card(ids.LOST_SOUL, "Lost Soul", "Gain this card as a soul.", activator=_lost_soul),
    loot_card(
        ids.SOUL_HEART, "Soul Heart", "Prevent 1 damage to a player.", copies=2,
        activator=on_node(EffectKind.PREVENT_DAMAGE, (Damage,), "Prevent damage on which event?",
                          amount=1, where=is_player_damage),
    ),
]


# ============================================================================
# Pills
# ============================================================================

PILLS = [
    loot_card(ids.PILLS_BLUE, "Pills! (Blue)", "Roll: 1-2 loot 1, 3-4 loot 3, 5-6 discard a loot card.",
              activator=rolled(pairs(loot(1), loot(3), step(EffectKind.DISCARD_LOOT, 1)))),
    loot_card(ids.PILLS_RED, "Pills! (Red)", "Roll: 1-2 +1 attack, 3-4 +1 HP, 5-6 take 1 damage.",
              activator=rolled(pairs(step(EffectKind.BUFF, ap=1), step(EffectKind.BUFF, hp=1), self_damage(1)))),
    loot_card(ids.PILLS_YELLOW, "Pills! (Yellow)", "Roll: 1-2 gain 4c, 3-4 gain 7c, 5-6 lose 4c.",
              activator=rolled(pairs(gain_cents(4), gain_cents(7), lose_cents(4)))),
]


# ============================================================================
# Tarot
# ============================================================================

TAROT = [
    loot_card(ids.THE_FOOL, "0. The Fool", "End the current turn.",
              activator=simple(step(EffectKind.FORCE_END_TURN))),
    loot_card(ids.THE_MAGICIAN, "I. The Magician", "Change any dice roll to a number of your choice.",
              activator=_the_magician),
    loot_card(ids.THE_HIGH_PRIESTESS, "II. The High Priestess", "Roll: deal that much damage.",
              activator=_the_high_priestess),
    loot_card(ids.THE_EMPRESS, "III. The Empress", "+1 attack and +1 to your rolls this turn.",
              activator=simple(seq(step(EffectKind.BUFF, ap=1), set_flag(ids.THE_EMPRESS)))),
    loot_card(ids.THE_EMPEROR, "IV. The Emperor", "Look at the top 5 monster cards and reorder them.",
              activator=simple(step(EffectKind.REARRANGE_TOP, 5, deck="monster"))),
    loot_card(
        ids.THE_HIEROPHANT, "V. The Hierophant", "Prevent 2 damage.",
        activator=on_node(EffectKind.PREVENT_DAMAGE, (Damage,), "Prevent damage on which event?", amount=2),
    ),
    loot_card(ids.THE_LOVERS, "VI. The Lovers", "+2 HP until the end of the turn.",
              activator=simple(step(EffectKind.BUFF, hp=2))),
    loot_card(ids.THE_CHARIOT, "VII. The Chariot", "+1 attack and +1 HP until the end of the turn.",
              activator=simple(step(EffectKind.BUFF, ap=1, hp=1))),
    loot_card(ids.THE_HERMIT, "IX. The Hermit", "Look at the top 5 treasure cards and reorder them.",
              activator=simple(step(EffectKind.REARRANGE_TOP, 5, deck="treasure"))),
    loot_card(
        ids.WHEEL_OF_FORTUNE, "X. Wheel of Fortune", "Roll for a random reward or penalty.",
        activator=rolled({
            1: gain_cents(1),
            2: self_damage(2),
            3: loot(3),
            4: lose_cents(4),
            5: gain_cents(5),
            6: treasure(1),
        }),
    ),
    loot_card(ids.STRENGTH, "XI. Strength", "+1 attack and an additional attack this turn.",
              activator=simple(seq(step(EffectKind.BUFF, ap=1), step(EffectKind.EXTRA_ATTACK, 1)))),
    loot_card(ids.DEATH_LOOT, "XIII. Death", "Kill a player.", activator=_death),
    loot_card(ids.THE_TOWER, "XIV. The Tower", "Roll: bombs go off everywhere.", activator=_the_tower),
    loot_card(ids.TEMPERANCE, "XVI. Temperance", "Take damage to gain cents.", activator=_temperance),
    loot_card(ids.THE_STARS, "XVII. The Stars", "Gain 1 treasure.", activator=simple(treasure(1))),
]


# ============================================================================
# Trinkets
# ============================================================================

TRINKETS = [
    trinket(ids.BLOODY_PENNY, "Bloody Penny", "Each time a player dies, loot 1.",
            on_event=on_event(_any_death, for_owner(loot(1)))),
    trinket(ids.BROKEN_ANKH, "Broken Ankh", "When you die, roll: on a 6, prevent it."),
    trinket(ids.CAINS_EYE, "Cain's Eye", "At the start of your turn, peek at the loot deck.",
            on_event=on_event(own_start_of_turn, _peek("loot"))),
    trinket(ids.COUNTERFEIT_PENNY, "Counterfeit Penny", "Each time you gain cents, gain 1 more."),
    trinket(ids.CURVED_HORN, "Curved Horn", "+1 attack on your first hit each turn."),
    trinket(ids.GOLDEN_HORSE_SHOE, "Golden Horseshoe", "At the start of your turn, peek at the treasure deck.",
            on_event=on_event(own_start_of_turn, _peek("treasure"))),
    trinket(ids.GUPPYS_HAIRBALL, "Guppy's Hairball", "When you take damage, roll: on a 6, prevent 1."),
    trinket(ids.PURPLE_HEART, "Purple Heart", "At the start of your turn, peek at the monster deck.",
            on_event=on_event(own_start_of_turn, _peek("monster"))),
    trinket(ids.SWALLOWED_PENNY, "Swallowed Penny", "Each time you take damage, gain 1c.",
            on_event=on_event(damage_to_owner, for_owner(gain_cents(1)))),
]


# ============================================================================
# Kickstarter expansion
# ============================================================================

KICKSTARTER_LOOT = [
    loot_card(ids.A_PENNY, "A Penny!", "Gain 1c.", copies=2, expansion=KICKSTARTER,
              activator=simple(gain_cents(1))),
    loot_card(ids.THREE_CENTS, "3 Cents!", "Gain 3c.", copies=3, expansion=KICKSTARTER,
              activator=simple(gain_cents(3))),
    loot_card(ids.A_SACK, "A Sack", "Loot 3.", expansion=KICKSTARTER, activator=simple(loot(3))),
    loot_card(ids.CHARGED_PENNY, "Charged Penny", "Gain 1c and recharge an item.", expansion=KICKSTARTER,
              activator=_charged_penny),
    loot_card(ids.CREDIT_CARD, "Credit Card", "Your next purchase this turn is free.", expansion=KICKSTARTER,
              activator=simple(set_flag(ids.CREDIT_CARD))),
    loot_card(
        ids.HOLY_CARD, "Holy Card", "Prevent a death.", expansion=KICKSTARTER,
        activator=on_node(EffectKind.PREVENT_DEATH, (CharacterDeath,), "Prevent which death?"),
    ),
]


LOOT_CARDS: list[CatalogEntry] = [*CENTS, *BASICS, *PILLS, *TAROT, *TRINKETS, *KICKSTARTER_LOOT]
