"""
Card ids.

The rules engine refers to a handful of cards directly (damage and death
prevention, chained kills, double souls, cost modifiers). Every id used
anywhere in the engine or the catalog is defined here.
"""

# Loot
A_PENNY = 1
TWO_CENTS = 2
THREE_CENTS = 3
FOUR_CENTS = 4
A_NICKEL = 5
A_DIME = 6
BLANK_RUNE = 7
BOMB = 8
BUTTER_BEAN = 9
DAGAZ = 10
DICE_SHARD = 11
GOLD_BOMB = 13
LIL_BATTERY = 14
MEGA_BATTERY = 15
PILLS_BLUE = 16
PILLS_RED = 17
PILLS_YELLOW = 18
SOUL_HEART = 19
A_SACK = 20
CHARGED_PENNY = 21
CREDIT_CARD = 22
HOLY_CARD = 23
LOST_SOUL = 36

# Trinkets
BLOODY_PENNY = 40
BROKEN_ANKH = 41
CAINS_EYE = 42
COUNTERFEIT_PENNY = 43
CURVED_HORN = 44
GOLDEN_HORSE_SHOE = 45
GUPPYS_HAIRBALL = 46
PURPLE_HEART = 47
SWALLOWED_PENNY = 48

# Tarot
THE_FOOL = 60
THE_MAGICIAN = 61
THE_HIGH_PRIESTESS = 62
THE_EMPRESS = 63
THE_EMPEROR = 64
THE_HIEROPHANT = 65
THE_LOVERS = 66
THE_CHARIOT = 67
THE_HERMIT = 69
WHEEL_OF_FORTUNE = 70
STRENGTH = 71
DEATH_LOOT = 73
THE_TOWER = 74
TEMPERANCE = 76
THE_STARS = 77

# Monsters
BIG_SPIDER = 90
BLACK_BONY = 91
BOOM_FLY = 92
DOPLE = 95
GREEDLING = 97
HORF = 100
KEEPER_HEAD = 101
LEAPER = 102
STONEY = 112
DEATHS_HEAD = 117
GAPER = 118
IMP = 119
KNIGHT = 120
BONY = 124
BRAIN = 125

# Bosses
CARRION_QUEEN = 160
CHUB = 162
DELIRIUM = 167
FAMINE = 169
GEMINI = 170
PIN = 180
RAGMAN = 182
THE_DUKE_OF_FLIES = 186
THE_HAUNT = 187
WAR = 188
WRATH = 189

# Mega bosses
MOM = 200
SATAN = 201
THE_LAMB = 202
ISAAC_MONSTER = 203
MOMS_HEART = 204

# Bonus cards
AMBUSH = 210
CHEST = 211
GOLD_CHEST = 215
TROLL_BOMBS = 218
SECRET_ROOM = 220
SHOP_UPGRADE = 221
XL_FLOOR = 223

# Curses
CURSE_OF_AMNESIA = 240
CURSE_OF_GREED = 241
CURSE_OF_LOSS = 242
CURSE_OF_PAIN = 243
CURSE_OF_THE_BLIND = 244

# Starting items
THE_D6 = 250
YUM_HEART = 251
SLEIGHT_OF_HAND = 252
BOOK_OF_BELIAL = 253
FOREVER_ALONE = 254
THE_CURSE = 255
BLOOD_LUST = 256
LAZARUS_RAGS = 257
INCUBUS = 258
THE_BONE = 259
LORD_OF_THE_PIT = 260
THE_HOLY_MANTLE = 261
VOID = 262
WOODEN_NICKEL = 263
BAG_O_TRASH = 264
DARK_ARTS = 265
GIMPY = 266
INFESTATION = 267

# Treasure
THE_BATTERY = 270
BLANK_CARD = 272
BOOK_OF_SIN = 273
COMPOST = 277
CRYSTAL_BALL = 280
GUPPYS_PAW = 290
MR_BOOM = 299
SACK_OF_PENNIES = 308
TWO_OF_CLUBS = 312
TECH_X = 348
BABY_HAUNT = 360
BUMBO = 366
CHAMPION_BELT = 368
DADDY_HAUNT = 375
THE_DEAD_CAT = 379
DRY_BABY = 381
EDENS_BLESSING = 382
EMPTY_VESSEL = 383
EYE_OF_GREED = 384
FANNY_PACK = 385
GUPPYS_COLLAR = 389
MEAT = 393
THE_MIDAS_TOUCH = 394
MOMS_RAZOR = 398
POLYDACTYLY = 401
SHADOW = 405
SHINY_ROCK = 406
STEAMY_SALE = 409
SUICIDE_KING = 410
SYNTHOIL = 411
THERES_OPTIONS = 413
TRINITY_SHIELD = 414
ONE_UP = 423
MAMA_HAUNT = 434

# Basic monsters
CLOTTY = 500
COD_WORM = 501
CONJOINED_FATTY = 502
DIP = 503
FAT_BAT = 504
FATTY = 505
FLY = 506
LEECH = 507
PALE_FATTY = 508
POOTER = 509
RED_HOST = 510
SPIDER = 511
SQUIRT = 512
TRITE = 513
GURDY = 516
MONSTRO = 518
HUSH = 521

# Characters
BLUE_BABY = 600
CAIN = 601
EVE = 603
ISAAC = 604
JUDAS = 605
LAZARUS = 606
LILITH = 607
MAGGY = 608
SAMSON = 609
THE_FORGOTTEN = 610
APOLLYON = 611
AZAZEL = 612
THE_KEEPER = 613
THE_LOST = 614
BUMBO_CHARACTER = 615
DARK_JUDAS = 616
GUPPY = 617
WHORE_OF_BABYLON = 618


# Skipped by the generic trigger scan; wired into the damage/death pipeline.
REACTIVE_SCAN_DENYLIST = frozenset({
    BROKEN_ANKH, GUPPYS_HAIRBALL, THE_DEAD_CAT, GUPPYS_COLLAR, ONE_UP,
})

# Monsters that die whenever any other monster is killed.
CHAINED_KILLS = (STONEY, DEATHS_HEAD)

# Souls worth two toward victory.
DOUBLE_SOULS = frozenset({MOM, SATAN, THE_LAMB, HUSH, ISAAC_MONSTER, MOMS_HEART})

# Items handed to another player before their owner pays death penalties.
HAUNTS = (BABY_HAUNT, DADDY_HAUNT, MAMA_HAUNT)

# Once-per-turn attack bonuses, flagged at start of turn.
FIRST_ATTACK_BONUSES = (CURVED_HORN, CHAMPION_BELT, POLYDACTYLY)
