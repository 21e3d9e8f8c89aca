"""
Ability groupings consulted by ability resolution and the ability-swapping moves.
"""

from duel_engine.enums.ability import Ability as A

# Defender abilities that mold breaker style attackers skip over
IGNORABLE_ABILITIES = frozenset({
    A.AROMA_VEIL, A.BATTLE_ARMOR, A.BIG_PECKS, A.BULLETPROOF, A.CLEAR_BODY, A.CONTRARY, A.DAMP,
    A.DAZZLING, A.DISGUISE, A.DRY_SKIN, A.FILTER, A.FLASH_FIRE, A.FLOWER_GIFT, A.FLOWER_VEIL,
    A.FLUFFY, A.FRIEND_GUARD, A.FUR_COAT, A.HEATPROOF, A.HEAVY_METAL, A.HYPER_CUTTER, A.ICE_FACE,
    A.ICE_SCALES, A.IMMUNITY, A.INNER_FOCUS, A.INSOMNIA, A.KEEN_EYE, A.LEAF_GUARD, A.LEVITATE,
    A.LIGHT_METAL, A.LIGHTNING_ROD, A.LIMBER, A.MAGIC_BOUNCE, A.MAGMA_ARMOR, A.MARVEL_SCALE,
    A.MIRROR_ARMOR, A.MOTOR_DRIVE, A.MULTISCALE, A.OBLIVIOUS, A.OVERCOAT, A.OWN_TEMPO,
    A.PASTEL_VEIL, A.PUNK_ROCK, A.QUEENLY_MAJESTY, A.SAND_VEIL, A.SAP_SIPPER, A.SHELL_ARMOR,
    A.SHIELD_DUST, A.SIMPLE, A.SNOW_CLOAK, A.SOLID_ROCK, A.SOUNDPROOF, A.STICKY_HOLD,
    A.STORM_DRAIN, A.STURDY, A.SUCTION_CUPS, A.SWEET_VEIL, A.TANGLED_FEET, A.TELEPATHY,
    A.THICK_FAT, A.UNAWARE, A.VITAL_SPIRIT, A.VOLT_ABSORB, A.WATER_ABSORB, A.WATER_BUBBLE,
    A.WATER_VEIL, A.WHITE_SMOKE, A.WONDER_GUARD, A.WONDER_SKIN, A.ARMOR_TAIL, A.EARTH_EATER,
    A.GOOD_AS_GOLD, A.PURIFYING_SALT, A.WELL_BAKED_BODY,
})

# Attacker abilities that bypass IGNORABLE_ABILITIES on every move
MOLD_BREAKERS = frozenset({A.MOLD_BREAKER, A.TURBOBLAZE, A.TERAVOLT, A.NEUTRALIZING_GAS})

# Abilities that can never be replaced (skill swap, worry seed, entrainment, ...)
UNCHANGEABLE_ABILITIES = frozenset({
    A.MULTITYPE, A.STANCE_CHANGE, A.SCHOOLING, A.COMATOSE, A.SHIELDS_DOWN, A.DISGUISE,
    A.RKS_SYSTEM, A.BATTLE_BOND, A.POWER_CONSTRUCT, A.ICE_FACE, A.GULP_MISSILE, A.ZERO_TO_HERO,
})

# Abilities that can never be copied onto another combatant (trace, role play, ...)
UNGIVEABLE_ABILITIES = frozenset({
    A.TRACE, A.FORECAST, A.FLOWER_GIFT, A.ZEN_MODE, A.ILLUSION, A.IMPOSTER, A.POWER_OF_ALCHEMY,
    A.RECEIVER, A.DISGUISE, A.STANCE_CHANGE, A.POWER_CONSTRUCT, A.ICE_FACE, A.HUNGER_SWITCH,
    A.GULP_MISSILE, A.ZERO_TO_HERO,
})

UNNERVE_ABILITIES = frozenset({A.UNNERVE, A.AS_ONE_SHADOW, A.AS_ONE_ICE})
