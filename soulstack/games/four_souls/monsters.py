"""
Four Souls Monsters - Monster deck card definitions.

The monster deck mixes four kinds of card:
- Monsters and bosses, fought in the active slots (bosses become souls)
- Bonus cards, resolved as soon as they are revealed
- Curses, handed to a player when revealed
- Mega bosses, which count as two souls

Monsters whose rule lives in the battle or damage pipeline (Horf,
Leaper, Mom's miss damage, Carrion Queen, Pin, The Duke of Flies) carry
no hook for it here.
"""

from __future__ import annotations

from ...engine_core import ids
from ...engine_core.board import Board
from ...engine_core.cards import Card
from ...engine_core.effects import ActivationContext, BindResult, Effect, EffectKind
from ...engine_core.events import Damage, EventNode
from ...engine_core.player import Player
from .entries import FOUR_SOULS_PLUS, KICKSTARTER, CatalogEntry, monster
from .hooks import (
    anyone_attacks,
    cents_reward,
    damage_to_card,
    harder_to_hit,
    loot_and_cents_reward,
    loot_reward,
    mega_boss_reward,
    on_event,
    own_end_of_turn,
    own_start_of_turn,
    owner_attacks,
    rolls,
    step,
    treasure_reward,
)


# ============================================================================
# On death
# ============================================================================

def _big_spider_death(ctx: ActivationContext) -> BindResult:
    """The active player may attack an additional time."""
    active = ctx.board.active_player
    return BindResult.bound(Effect(EffectKind.EXTRA_ATTACK, player=active, amount=1))


def _black_bony_death(ctx: ActivationContext) -> BindResult:
    return BindResult.bound(
        Effect(EffectKind.DEAL_DAMAGE, player=ctx.player, amount=1, target_player=ctx.player)
    )


def _boom_fly_death(ctx: ActivationContext) -> BindResult:
    return BindResult.bound(Effect(EffectKind.DAMAGE_ALL_PLAYERS, player=ctx.player, amount=1))


def _greedling_death(ctx: ActivationContext) -> BindResult:
    """A player with 7 cents or more loses 7."""
    rich = [p for p in ctx.board.players if p.cents >= 7]
    if not rich:
        return BindResult.failure("No player has 7 cents")
    target = ctx.board.choose_player(ctx.player, "Who loses 7c?", rich)
    return BindResult.bound(Effect(EffectKind.LOSE_CENTS, player=ctx.player, amount=7, target_player=target))


def _famine_death(ctx: ActivationContext) -> BindResult:
    active = ctx.board.active_player
    return BindResult.bound(Effect(EffectKind.SKIP_TURN, player=active))


def _ragman_death(ctx: ActivationContext) -> BindResult:
    """Roll: on a 1 or 6, the soul goes back on top of the monster deck."""
    effect = Effect(
        EffectKind.RETURN_SOUL,
        player=ctx.board.active_player,
        target_card=ctx.card,
        on_rolls=frozenset({1, 6}),
    )
    return BindResult.bound(effect, roll_required=True)


def _wrath_death(ctx: ActivationContext) -> BindResult:
    one = Effect(EffectKind.DAMAGE_ALL_PLAYERS, player=ctx.player, amount=1)
    two = Effect(EffectKind.DAMAGE_ALL_PLAYERS, player=ctx.player, amount=2)
    table = {1: one, 2: one, 3: one, 4: two, 5: two, 6: two}
    return BindResult.bound(Effect.roll_table(ctx.player, table), roll_required=True)


def _mom_death(ctx: ActivationContext) -> BindResult:
    return BindResult.bound(Effect(EffectKind.EXPAND_SLOTS, player=ctx.player, params={"area": "monster"}))


def _the_lamb_death(ctx: ActivationContext) -> BindResult:
    """The killer takes a soul from another player."""
    victims = [p for p in ctx.board.players if p is not ctx.player and p.souls]
    if not victims:
        return BindResult.failure("No other player has a soul")
    victim = ctx.board.choose_player(ctx.player, "Take a soul from whom?", victims)
    soul = victim.souls[ctx.board.choose(ctx.player, "Take which soul?", victim.souls, "card")]
    return BindResult.bound(
        Effect(EffectKind.STEAL_SOUL, player=ctx.player, target_player=victim, target_card=soul)
    )


# ============================================================================
# Event hooks
# ============================================================================

def _dople(board: Board, owner: Player, card: Card, node: EventNode) -> Effect:
    """Damage dealt to this is also dealt to the next player."""
    order = board.turn_order()
    target = order[1] if len(order) > 1 else order[0]
    n = node.event.payload.n
    return Effect(EffectKind.DEAL_DAMAGE, player=board.active_player, amount=n, target_player=target)


def _keeper_head_hit(board: Board, owner: Player, card: Card, node: EventNode) -> bool:
    payload = node.event.payload
    return isinstance(payload, Damage) and payload.monster is card and isinstance(payload.target, Player)


def _keeper_head(board: Board, owner: Player, card: Card, node: EventNode) -> Effect:
    victim = node.event.payload.target
    return Effect(EffectKind.LOSE_CENTS, player=victim, amount=2, target_player=victim)


def _attacker_rolls(n: int):
    """The player fighting this monster rolled n."""
    matches_roll = rolls(n)

    def matches(board: Board, owner: Player, card: Card, node: EventNode) -> bool:
        return matches_roll(board, owner, card, node) and card.in_battle and node.event.player.in_battle
    return matches


def _chub(board: Board, owner: Player, card: Card, node: EventNode) -> Effect:
    return Effect(EffectKind.BUFF, player=owner, target_monster=card, params={"heal": 2})


def _gemini_at_one(board: Board, owner: Player, card: Card, node: EventNode) -> bool:
    return damage_to_card(board, owner, card, node) and card.hp == 1


def _gains_attack(board: Board, owner: Player, card: Card, node: EventNode) -> Effect:
    return Effect(EffectKind.BUFF, player=owner, target_monster=card, params={"ap": 1})


def _haunt_took_two(board: Board, owner: Player, card: Card, node: EventNode) -> bool:
    return damage_to_card(board, owner, card, node) and node.event.payload.n == 2


def _the_haunt(board: Board, owner: Player, card: Card, node: EventNode) -> Effect:
    """The active player rolls 1 lower until they take The Haunt."""
    active = board.active_player
    return Effect(EffectKind.SET_FLAG, player=active, params={"flag": ids.THE_HAUNT})


def _satan(board: Board, owner: Player, card: Card, node: EventNode) -> Effect | None:
    """The attacker must kill a player of their choosing."""
    attacker = node.event.player
    if not board.living_players():
        return None
    target = board.choose_player(attacker, "Satan demands a death. Kill whom?")
    return Effect(EffectKind.KILL_PLAYER, player=attacker, target_player=target)


# ============================================================================
# Bonus cards and curses
# ============================================================================

def _bonus(build):
    """on_reveal for a bonus card whose effect goes to the revealing player."""
    def activator(ctx: ActivationContext) -> BindResult:
        effect, roll_required = build(ctx.player)
        return BindResult.bound(effect, roll_required=roll_required)
    return activator


def _ambush(player: Player):
    return Effect(EffectKind.EXTRA_ATTACK, player=player, amount=2), False


def _chest(player: Player):
    one, three, six = (Effect(EffectKind.GAIN_CENTS, player=player, amount=n) for n in (1, 3, 6))
    return Effect.roll_table(player, {1: one, 2: one, 3: three, 4: three, 5: six, 6: six}), True


def _gold_chest(player: Player):
    item = Effect(EffectKind.GAIN_TREASURE, player=player, amount=1)
    five = Effect(EffectKind.GAIN_CENTS, player=player, amount=5)
    seven = Effect(EffectKind.GAIN_CENTS, player=player, amount=7)
    return Effect.roll_table(player, {1: item, 2: item, 3: five, 4: five, 5: seven, 6: seven}), True


def _troll_bombs(player: Player):
    return Effect(EffectKind.DEAL_DAMAGE, player=player, amount=2, target_player=player), False


def _secret_room(player: Player):
    hurt = Effect(EffectKind.DEAL_DAMAGE, player=player, amount=3, target_player=player)
    discard = Effect(EffectKind.DISCARD_LOOT, player=player, amount=2)
    cents = Effect(EffectKind.GAIN_CENTS, player=player, amount=7)
    item = Effect(EffectKind.GAIN_TREASURE, player=player, amount=1)
    return Effect.roll_table(player, {1: hurt, 2: discard, 3: discard, 4: cents, 5: cents, 6: item}), True


def _shop_upgrade(player: Player):
    shop_slot = Effect(EffectKind.EXPAND_SLOTS, player=player, params={"area": "shop"})
    extra = Effect(EffectKind.EXTRA_ATTACK, player=player, amount=1)
    return Effect.sequence(player, shop_slot, shop_slot, extra), False


def _xl_floor(player: Player):
    slot = Effect(EffectKind.EXPAND_SLOTS, player=player, params={"area": "monster"})
    extra = Effect(EffectKind.EXTRA_ATTACK, player=player, amount=1)
    return Effect.sequence(player, slot, extra), False


def _give_curse(ctx: ActivationContext) -> BindResult:
    """The revealing player hands the curse to someone else."""
    others = [p for p in ctx.board.players if p is not ctx.player] or [ctx.player]
    target = ctx.board.choose_player(ctx.player, f"Give {ctx.card.name} to", others)
    return BindResult.bound(
        Effect(EffectKind.GIVE_CURSE, player=ctx.player, target_player=target, target_card=ctx.card)
    )


def _for_holder(kind: EffectKind, amount: int = 0):
    def build(board: Board, owner: Player, card: Card, node: EventNode) -> Effect:
        if kind is EffectKind.DEAL_DAMAGE:
            return Effect(kind, player=owner, amount=amount, target_player=owner)
        return Effect(kind, player=owner, amount=amount)
    return build


def curse(card_id: int, name: str, text: str, **fields) -> CatalogEntry:
    return monster(card_id, name, text=text, is_curse=True, on_reveal=_give_curse, **fields)


# ============================================================================
# Basic monsters
# ============================================================================

BASIC_MONSTERS = [
    monster(ids.BIG_SPIDER, "Big Spider", 3, 4, 1, "When this dies, attack an additional time.",
            on_death=_big_spider_death, reward=loot_reward(1)),
    monster(ids.BLACK_BONY, "Black Bony", 3, 4, 1, "When this dies, it deals 1 damage to its killer.",
            on_death=_black_bony_death, reward=loot_reward(0)),
    monster(ids.BOOM_FLY, "Boom Fly", 1, 4, 1, "When this dies, it deals 1 damage to all players.",
            on_death=_boom_fly_death, reward=cents_reward(4)),
    monster(ids.CLOTTY, "Clotty", 2, 3, 1, reward=cents_reward(4)),
    monster(ids.COD_WORM, "Cod Worm", 1, 5, 0, reward=cents_reward(3)),
    monster(ids.CONJOINED_FATTY, "Conjoined Fatty", 4, 3, 2, reward=loot_reward(2)),
    monster(ids.DIP, "Dip", 1, 4, 1, reward=cents_reward(1)),
    monster(ids.DOPLE, "Dople", 2, 4, 2, "Damage dealt to this is also dealt to the next player.",
            on_event=on_event(damage_to_card, _dople), reward=cents_reward(7)),
    monster(ids.FAT_BAT, "Fat Bat", 3, 5, 1, reward=treasure_reward(1)),
    monster(ids.FATTY, "Fatty", 4, 2, 1, reward=loot_reward(1)),
    monster(ids.FLY, "Fly", 1, 2, 1, reward=cents_reward(1)),
    monster(ids.GREEDLING, "Greedling", 2, 5, 1, "When this dies, a player with 7c or more loses 7c.",
            on_death=_greedling_death, reward=cents_reward(7)),
    monster(ids.HORF, "Horf", 1, 4, 1, "Deals 1 more damage on a 2.", reward=cents_reward(3)),
    monster(ids.KEEPER_HEAD, "Keeper Head", 2, 4, 1, "Each time this damages a player, they lose 2c.",
            on_event=on_event(_keeper_head_hit, _keeper_head), reward=cents_reward(0)),
    monster(ids.LEAPER, "Leaper", 2, 4, 1, "Deals double damage on a 1.", reward=cents_reward(5)),
    monster(ids.LEECH, "Leech", 1, 4, 2, reward=loot_reward(1)),
    monster(ids.PALE_FATTY, "Pale Fatty", 4, 3, 1, reward=cents_reward(6)),
    monster(ids.POOTER, "Pooter", 2, 3, 1, reward=loot_reward(1)),
    monster(ids.RED_HOST, "Red Host", 2, 3, 2, reward=cents_reward(5)),
    monster(ids.SPIDER, "Spider", 1, 4, 1, reward=loot_reward(1)),
    monster(ids.SQUIRT, "Squirt", 2, 3, 1, reward=loot_reward(1)),
    monster(ids.STONEY, "Stoney", 3, 0, 0, "Every attacked monster is harder to hit. Dies when any monster dies.",
            on_event=on_event(anyone_attacks, harder_to_hit), reward=loot_reward(1)),
    monster(ids.TRITE, "Trite", 1, 5, 1, reward=loot_reward(2)),
    monster(ids.DELIRIUM, "Delirium", 5, 4, 3, "Every attacked monster is harder to hit.",
            on_event=on_event(anyone_attacks, harder_to_hit), reward=treasure_reward(2)),
]


# ============================================================================
# Bosses
# ============================================================================

BOSSES = [
    monster(ids.CARRION_QUEEN, "Carrion Queen", 3, 4, 1, "Only takes damage on a 6.",
            is_boss=True, reward=treasure_reward(1)),
    monster(ids.CHUB, "Chub", 4, 3, 1, "Each time its attacker rolls a 1, this heals 2.", is_boss=True,
            on_event=on_event(_attacker_rolls(1), _chub), reward=loot_and_cents_reward(2, 3)),
    monster(ids.FAMINE, "Famine", 2, 3, 1, "When this dies, the active player skips their next turn.",
            is_boss=True, on_death=_famine_death, reward=loot_and_cents_reward(2, 3)),
    monster(ids.GEMINI, "Gemini", 3, 4, 1, "At 1 HP, this gains +1 attack.", is_boss=True,
            on_event=on_event(_gemini_at_one, _gains_attack), reward=cents_reward(5)),
    monster(ids.GURDY, "Gurdy", 5, 4, 1, is_boss=True, reward=cents_reward(7)),
    monster(ids.MONSTRO, "Monstro", 4, 4, 1, is_boss=True, reward=cents_reward(6)),
    monster(ids.PIN, "Pin", 2, 2, 1, "Takes no damage on a 6.", is_boss=True, reward=cents_reward(5)),
    monster(ids.RAGMAN, "Ragman", 2, 3, 2, "When this dies, roll: on a 1 or 6 its soul returns.",
            is_boss=True, on_death=_ragman_death, reward=loot_reward(3)),
    monster(ids.THE_DUKE_OF_FLIES, "The Duke of Flies", 4, 3, 1, "Damage to this may fizzle on a 1.",
            is_boss=True, reward=loot_and_cents_reward(2, 3)),
    monster(ids.THE_HAUNT, "The Haunt", 3, 4, 1, "Taking 2 damage curses the active player's rolls.",
            is_boss=True, on_event=on_event(_haunt_took_two, _the_haunt), reward=treasure_reward(1)),
    monster(ids.WAR, "War", 3, 3, 1, "Each time this takes damage, it gains +1 attack.", is_boss=True,
            on_event=on_event(damage_to_card, _gains_attack), reward=loot_and_cents_reward(2, 3)),
    monster(ids.WRATH, "Wrath", 3, 3, 1, "When this dies, roll: every player takes 1 or 2 damage.",
            is_boss=True, on_death=_wrath_death, reward=loot_and_cents_reward(2, 3)),
]

MEGA_BOSSES = [
    monster(ids.MOM, "Mom", 5, 4, 2, "Double damage on a 1. When this dies, add a monster slot.",
            is_boss=True, on_death=_mom_death, reward=mega_boss_reward()),
    monster(ids.SATAN, "Satan", 6, 4, 2, "When its attacker rolls a 6, they must kill a player.",
            is_boss=True, on_event=on_event(_attacker_rolls(6), _satan), reward=mega_boss_reward()),
    monster(ids.THE_LAMB, "The Lamb", 6, 3, 6, "When this dies, take a soul from another player.",
            is_boss=True, on_death=_the_lamb_death, reward=cents_reward(3)),
]


# ============================================================================
# Bonus cards and curses
# ============================================================================

BONUS_CARDS = [
    monster(ids.AMBUSH, "Ambush!", text="Attack 2 additional times.", on_reveal=_bonus(_ambush)),
    monster(ids.CHEST, "Chest", text="Roll: gain 1c, 3c or 6c.", copies=2, on_reveal=_bonus(_chest)),
    monster(ids.GOLD_CHEST, "Gold Chest", text="Roll: gain a treasure, 5c or 7c.", on_reveal=_bonus(_gold_chest)),
    monster(ids.TROLL_BOMBS, "Troll Bombs", text="Take 2 damage.", on_reveal=_bonus(_troll_bombs)),
    monster(ids.SECRET_ROOM, "Secret Room", text="Roll for a prize or a trap.", on_reveal=_bonus(_secret_room)),
    monster(ids.SHOP_UPGRADE, "Shop Upgrade", text="Add 2 shop slots. Attack an additional time.",
            on_reveal=_bonus(_shop_upgrade)),
    monster(ids.XL_FLOOR, "XL Floor", text="Add a monster slot. Attack an additional time.",
            on_reveal=_bonus(_xl_floor)),
]

CURSES = [
    curse(ids.CURSE_OF_AMNESIA, "Curse of Amnesia", "At the end of your turn, discard 2 loot cards.",
          on_event=on_event(own_end_of_turn, _for_holder(EffectKind.DISCARD_LOOT, 2))),
    curse(ids.CURSE_OF_GREED, "Curse of Greed", "At the end of your turn, lose 4c.",
          on_event=on_event(own_end_of_turn, _for_holder(EffectKind.LOSE_CENTS, 4))),
    curse(ids.CURSE_OF_LOSS, "Curse of Loss", "You need one more soul to win."),
    curse(ids.CURSE_OF_PAIN, "Curse of Pain", "At the start of your turn, take 1 damage.",
          on_event=on_event(own_start_of_turn, _for_holder(EffectKind.DEAL_DAMAGE, 1))),
    curse(ids.CURSE_OF_THE_BLIND, "Curse of the Blind", "Monsters you attack are harder to hit.",
          on_event=on_event(owner_attacks, harder_to_hit)),
]


# ============================================================================
# Expansions
# ============================================================================

EXPANSION_MONSTERS = [
    monster(ids.GAPER, "Gaper", 2, 4, 1, expansion=KICKSTARTER),
    monster(ids.IMP, "Imp", 3, 5, 1, expansion=KICKSTARTER),
    monster(ids.KNIGHT, "Knight", 2, 6, 1, expansion=KICKSTARTER),
    monster(ids.DEATHS_HEAD, "Death's Head", 2, 0, 0, "Dies when any monster dies.", expansion=KICKSTARTER),
    monster(ids.HUSH, "Hush", 8, 3, 1, expansion=KICKSTARTER, is_boss=True, reward=mega_boss_reward()),
    monster(ids.BONY, "Bony", 2, 3, 1, expansion=FOUR_SOULS_PLUS),
    monster(ids.BRAIN, "Brain", 2, 3, 1, expansion=FOUR_SOULS_PLUS),
    monster(ids.ISAAC_MONSTER, "Isaac!", 7, 3, 1, expansion=FOUR_SOULS_PLUS, is_boss=True),
    monster(ids.MOMS_HEART, "Mom's Heart!", 8, 4, 2, expansion=FOUR_SOULS_PLUS, is_boss=True),
]


MONSTER_CARDS: list[CatalogEntry] = [
    *BASIC_MONSTERS, *BOSSES, *MEGA_BOSSES, *BONUS_CARDS, *CURSES, *EXPANSION_MONSTERS,
]
