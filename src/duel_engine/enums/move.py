from enum import IntEnum


class DamageClass(IntEnum):
    STATUS = 1
    PHYSICAL = 2
    SPECIAL = 3


class MoveTarget(IntEnum):
    """Targeting semantics - ids match the move catalogue."""

    SPECIFIC_MOVE = 1
    SELECTED_POKEMON_ME_FIRST = 2
    ALLY = 3
    USERS_FIELD = 4
    USER_OR_ALLY = 5
    OPPONENTS_FIELD = 6
    USER = 7
    RANDOM_OPPONENT = 8
    ALL_OTHER_POKEMON = 9
    SELECTED_POKEMON = 10
    ALL_OPPONENTS = 11
    ENTIRE_FIELD = 12
    USER_AND_ALLIES = 13
    ALL_POKEMON = 14
    ALL_ALLIES = 15


class MoveEffect(IntEnum):
    """Closed set of effect codes understood by the engine.

    Members are named after a representative move. A catalogue entry whose effect code is
    not listed here is rejected (see move_effects.registry.validate_move).
    """

    REGULAR_DAMAGE = 1
    SLEEP = 2
    POISON_CHANCE = 3
    DRAIN_HALF = 4
    BURN_CHANCE = 5
    FREEZE_CHANCE = 6
    PARALYZE_CHANCE = 7
    SELF_DESTRUCT = 8
    DREAM_EATER = 9
    MIRROR_MOVE = 10
    RAISE_ATTACK = 11
    RAISE_DEFENSE = 12
    RAISE_SP_ATK = 14
    RAISE_EVASION = 17
    NEVER_MISS = 18
    LOWER_ATTACK = 19
    LOWER_DEFENSE = 20
    LOWER_SPEED = 21
    LOWER_ACCURACY = 24
    LOWER_EVASION = 25
    HAZE = 26
    BIDE = 27
    THRASH = 28
    ROAR = 29
    MULTI_HIT = 30
    CONVERSION = 31
    FLINCH_CHANCE = 32
    HEAL_HALF = 33
    TOXIC = 34
    PAY_DAY = 35
    LIGHT_SCREEN = 36
    TRI_ATTACK = 37
    REST = 38
    OHKO = 39
    RAZOR_WIND = 40
    SUPER_FANG = 41
    DRAGON_RAGE = 42
    BIND = 43
    HIGH_CRIT = 44
    DOUBLE_HIT = 45
    JUMP_KICK = 46
    MIST = 47
    FOCUS_ENERGY = 48
    RECOIL_QUARTER = 49
    CONFUSE = 50
    RAISE_ATTACK_2 = 51
    RAISE_DEFENSE_2 = 52
    RAISE_SPEED_2 = 53
    RAISE_SP_ATK_2 = 54
    RAISE_SP_DEF_2 = 55
    TRANSFORM = 58
    LOWER_ATTACK_2 = 59
    LOWER_DEFENSE_2 = 60
    LOWER_SPEED_2 = 61
    LOWER_SP_ATK_2 = 62
    LOWER_SP_DEF_2 = 63
    REFLECT = 66
    POISON = 67
    PARALYZE = 68
    ATTACK_DOWN_CHANCE = 69
    DEFENSE_DOWN_CHANCE = 70
    SPEED_DOWN_CHANCE = 71
    SP_ATK_DOWN_CHANCE = 72
    SP_DEF_DOWN_CHANCE = 73
    ACCURACY_DOWN_CHANCE = 74
    SKY_ATTACK = 76
    CONFUSE_CHANCE = 77
    TWINEEDLE = 78
    SUBSTITUTE = 80
    HYPER_BEAM = 81
    RAGE = 82
    MIMIC = 83
    METRONOME = 84
    LEECH_SEED = 85
    SPLASH = 86
    DISABLE = 87
    LEVEL_DAMAGE = 88
    PSYWAVE = 89
    COUNTER = 90
    ENCORE = 91
    PAIN_SPLIT = 92
    SNORE = 93
    CONVERSION_2 = 94
    LOCK_ON = 95
    SKETCH = 96
    SLEEP_TALK = 98
    DESTINY_BOND = 99
    FLAIL = 100
    SPITE = 101
    FALSE_SWIPE = 102
    HEAL_BELL = 103
    TRIPLE_KICK = 105
    THIEF = 106
    MEAN_LOOK = 107
    NIGHTMARE = 108
    MINIMIZE = 109
    CURSE = 110
    PROTECT = 112
    SPIKES = 113
    FORESIGHT = 114
    PERISH_SONG = 115
    SANDSTORM = 116
    ENDURE = 117
    ROLLOUT = 118
    SWAGGER = 119
    FURY_CUTTER = 120
    ATTRACT = 121
    RETURN = 122
    PRESENT = 123
    FRUSTRATION = 124
    SAFEGUARD = 125
    FLAME_WHEEL = 126
    MAGNITUDE = 127
    BATON_PASS = 128
    PURSUIT = 129
    RAPID_SPIN = 130
    SONIC_BOOM = 131
    MORNING_SUN = 133
    HIDDEN_POWER = 136
    RAIN_DANCE = 137
    SUNNY_DAY = 138
    STEEL_WING = 139
    METAL_CLAW = 140
    ANCIENT_POWER = 141
    BELLY_DRUM = 143
    PSYCH_UP = 144
    MIRROR_COAT = 145
    SKULL_BASH = 146
    TWISTER = 147
    EARTHQUAKE = 148
    FUTURE_SIGHT = 149
    GUST = 150
    STOMP = 151
    SOLAR_BEAM = 152
    THUNDER = 153
    TELEPORT = 154
    BEAT_UP = 155
    FLY = 156
    DEFENSE_CURL = 157
    FAKE_OUT = 159
    UPROAR = 160
    STOCKPILE = 161
    SPIT_UP = 162
    SWALLOW = 163
    HAIL = 165
    TORMENT = 166
    FLATTER = 167
    WILL_O_WISP = 168
    MEMENTO = 169
    FACADE = 170
    FOCUS_PUNCH = 171
    SMELLING_SALTS = 172
    FOLLOW_ME = 173
    NATURE_POWER = 174
    CHARGE = 175
    TAUNT = 176
    HELPING_HAND = 177
    TRICK = 178
    ROLE_PLAY = 179
    WISH = 180
    ASSIST = 181
    INGRAIN = 182
    SUPERPOWER = 183
    MAGIC_COAT = 184
    RECYCLE = 185
    REVENGE = 186
    BRICK_BREAK = 187
    YAWN = 188
    KNOCK_OFF = 189
    ENDEAVOR = 190
    ERUPTION = 191
    SKILL_SWAP = 192
    IMPRISON = 193
    REFRESH = 194
    GRUDGE = 195
    SNATCH = 196
    LOW_KICK = 197
    SECRET_POWER = 198
    RECOIL_THIRD = 199
    TEETER_DANCE = 200
    BLAZE_KICK = 201
    MUD_SPORT = 202
    POISON_FANG = 203
    WEATHER_BALL = 204
    OVERHEAT = 205
    TICKLE = 206
    COSMIC_POWER = 207
    SKY_UPPERCUT = 208
    BULK_UP = 209
    POISON_TAIL = 210
    WATER_SPORT = 211
    CALM_MIND = 212
    DRAGON_DANCE = 213
    CAMOUFLAGE = 214
    ROOST = 215
    GRAVITY = 216
    MIRACLE_EYE = 217
    WAKE_UP_SLAP = 218
    HAMMER_ARM = 219
    GYRO_BALL = 220
    HEALING_WISH = 221
    BRINE = 222
    NATURAL_GIFT = 223
    FEINT = 224
    PLUCK = 225
    TAILWIND = 226
    ACUPRESSURE = 227
    METAL_BURST = 228
    U_TURN = 229
    CLOSE_COMBAT = 230
    PAYBACK = 231
    ASSURANCE = 232
    EMBARGO = 233
    FLING = 234
    PSYCHO_SHIFT = 235
    TRUMP_CARD = 236
    HEAL_BLOCK = 237
    WRING_OUT = 238
    POWER_TRICK = 239
    GASTRO_ACID = 240
    LUCKY_CHANT = 241
    ME_FIRST = 242
    COPYCAT = 243
    POWER_SWAP = 244
    GUARD_SWAP = 245
    PUNISHMENT = 246
    LAST_RESORT = 247
    WORRY_SEED = 248
    SUCKER_PUNCH = 249
    TOXIC_SPIKES = 250
    HEART_SWAP = 251
    AQUA_RING = 252
    MAGNET_RISE = 253
    FLARE_BLITZ = 254
    STRUGGLE = 255
    DIVE = 256
    DIG = 257
    SURF = 258
    DEFOG = 259
    TRICK_ROOM = 260
    BLIZZARD = 261
    WHIRLPOOL = 262
    VOLT_TACKLE = 263
    BOUNCE = 264
    CAPTIVATE = 266
    STEALTH_ROCK = 267
    CHATTER = 268
    JUDGMENT = 269
    HEAD_SMASH = 270
    LUNAR_DANCE = 271
    SEED_FLARE = 272
    SHADOW_FORCE = 273
    FIRE_FANG = 274
    ICE_FANG = 275
    THUNDER_FANG = 276
    CHARGE_BEAM = 277
    HONE_CLAWS = 278
    WIDE_GUARD = 279
    GUARD_SPLIT = 280
    POWER_SPLIT = 281
    WONDER_ROOM = 282
    PSYSHOCK = 283
    VENOSHOCK = 284
    AUTOTOMIZE = 285
    TELEKINESIS = 286
    MAGIC_ROOM = 287
    SMACK_DOWN = 288
    STORM_THROW = 289
    QUIVER_DANCE = 291
    HEAVY_SLAM = 292
    SYNCHRONOISE = 293
    ELECTRO_BALL = 294
    SOAK = 295
    FLAME_CHARGE = 296
    ACID_SPRAY = 297
    FOUL_PLAY = 298
    SIMPLE_BEAM = 299
    ENTRAINMENT = 300
    AFTER_YOU = 301
    ECHOED_VOICE = 303
    CHIP_AWAY = 304
    CLEAR_SMOG = 305
    STORED_POWER = 306
    QUICK_GUARD = 307
    ALLY_SWITCH = 308
    SHELL_SMASH = 309
    HEAL_PULSE = 310
    HEX = 311
    SHIFT_GEAR = 313
    CIRCLE_THROW = 314
    INCINERATE = 315
    QUASH = 316
    GROWTH = 317
    ACROBATICS = 318
    REFLECT_TYPE = 319
    RETALIATE = 320
    FINAL_GAMBIT = 321
    TAIL_GLOW = 322
    COIL = 323
    BESTOW = 324
    WORK_UP = 328
    COTTON_GUARD = 329
    RELIC_SONG = 330
    GLACIATE = 331
    FREEZE_SHOCK = 332
    ICE_BURN = 333
    HURRICANE = 334
    V_CREATE = 335
    FUSION_FLARE = 336
    FUSION_BOLT = 337
    FLYING_PRESS = 338
    ROTOTILLER = 340
    STICKY_WEB = 341
    FELL_STINGER = 342
    TRICK_OR_TREAT = 343
    NOBLE_ROAR = 344
    ION_DELUGE = 345
    PARABOLIC_CHARGE = 346
    PARTING_SHOT = 347
    TOPSY_TURVY = 348
    DRAINING_KISS = 349
    CRAFTY_SHIELD = 350
    FLOWER_SHIELD = 351
    GRASSY_TERRAIN = 352
    MISTY_TERRAIN = 353
    ELECTRIFY = 354
    FAIRY_LOCK = 355
    KINGS_SHIELD = 356
    BLEAKWIND_STORM = 357
    CONFIDE = 358
    DIAMOND_STORM = 359
    HYPERSPACE_HOLE = 360
    WATER_SHURIKEN = 361
    SPIKY_SHIELD = 362
    AROMATIC_MIST = 363
    VENOM_DRENCH = 364
    SANDSEAR_STORM = 365
    GEOMANCY = 366
    MAGNETIC_FLUX = 367
    HAPPY_HOUR = 368
    ELECTRIC_TERRAIN = 369
    CELEBRATE = 370
    HOLD_HANDS = 371
    NUZZLE = 372
    THOUSAND_ARROWS = 373
    THOUSAND_WAVES = 374
    POWER_UP_PUNCH = 375
    FORESTS_CURSE = 376
    MAT_BLOCK = 377
    POWDER = 378
    FREEZE_DRY = 380
    SHORE_UP = 382
    FIRST_IMPRESSION = 383
    BANEFUL_BUNKER = 384
    SPIRIT_SHACKLE = 385
    SPARKLING_ARIA = 386
    FLORAL_HEALING = 387
    STRENGTH_SAP = 388
    SPOTLIGHT = 389
    TOXIC_THREAD = 390
    LASER_FOCUS = 391
    GEAR_UP = 392
    THROAT_CHOP = 393
    PSYCHIC_TERRAIN = 395
    WILDBOLT_STORM = 396
    LIQUIDATION = 397
    BURN_UP = 398
    SPEED_SWAP = 399
    PURIFY = 400
    REVELATION_DANCE = 401
    CORE_ENFORCER = 402
    INSTRUCT = 403
    BEAK_BLAST = 404
    CLANGING_SCALES = 405
    AURORA_VEIL = 407
    SHELL_TRAP = 408
    STOMPING_TANTRUM = 409
    SPECTRAL_THIEF = 410
    SUNSTEEL_STRIKE = 411
    TEARFUL_LOOK = 412
    GUARDIAN_OF_ALOLA = 413
    CLANGOROUS_SOUL = 414
    PHOTON_GEYSER = 416
    ICE_SPINNER = 418
    MIND_BLOWN = 420
    GLITZY_GLOW = 421
    BADDY_BAD = 422
    ZING_ZAP = 425
    BODY_PRESS = 426
    NO_RETREAT = 427
    APPLE_ACID = 428
    BURNING_JEALOUSY = 429
    CORROSIVE_GAS = 430
    COURT_CHANGE = 431
    DECORATE = 432
    AURA_WHEEL = 433
    LIFE_DEW = 434
    GRAV_APPLE = 435
    FISHIOUS_REND = 436
    GRASSY_GLIDE = 437
    HYPERSPACE_FURY = 438
    EERIE_SPELL = 439
    EXPANDING_FORCE = 440
    TERRAIN_PULSE = 441
    SCALE_SHOT = 442
    RISING_VOLTAGE = 443
    MISTY_EXPLOSION = 444
    COACHING = 445
    POLTERGEIST = 446
    SHELL_SIDE_ARM = 447
    STEEL_ROLLER = 448
    JAW_LOCK = 449
    LASH_OUT = 450
    METEOR_BEAM = 451
    OCTOLOCK = 452
    STUFF_CHEEKS = 453
    OBSTRUCT = 454
    PLASMA_FISTS = 455
    MAGIC_POWDER = 456
    JUNGLE_HEALING = 457
    SCALD = 458
    BYPASS_ABSORB = 459
    MOONGEIST_BEAM = 460
    BARB_BARRAGE = 461
    CHLOROBLAST = 463
    DIRE_CLAW = 464
    INFERNAL_PARADE = 465
    POWER_SHIFT = 466
    GUARD_UP = 467
    VICTORY_DANCE = 468
    WAVE_CRASH = 469
    TAKE_HEART = 472
    DOWNLOAD_BOOST = 473
    TRIPLE_ARROWS = 475
    TEATIME = 476
    TAR_SHOT = 477
    AXE_KICK = 478
    SPIN_OUT = 479
    MAKE_IT_RAIN = 480
    DOUBLE_SHOCK = 481
    COLLISION_COURSE = 482
    SPICY_EXTRACT = 483
    POPULATION_BOMB = 484
    FILLET_AWAY = 485
    MORTAL_SPIN = 486
    TIDY_UP = 487
    SILK_TRAP = 488
    UNSEEN_STRIKE = 489
    LAST_RESPECTS = 490
    RAGE_FIST = 491
    SHED_TAIL = 493
    REVIVAL_BLESSING = 494
    HARD_PRESS = 495
    PSYCHIC_NOISE = 496
    ALLURING_VOICE = 497
    FICKLE_BEAM = 498
    BURNING_BULWARK = 499
    MATCHA_GOTCHA = 500
    UPPER_HAND = 501
    ELECTRO_SHOT = 502
    SYRUP_BOMB = 503
