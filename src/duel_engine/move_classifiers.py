"""
Pure predicates over moves.

Every function here is a lookup on the move's id, target or class and never mutates anything.
"""

from typing import Optional

from duel_engine.data.move_flags import (
    ASSIST_BANNED,
    AURA_AND_PULSE_MOVES,
    BALL_AND_BOMB_MOVES,
    BITING_MOVES,
    CONTACT_MOVES,
    DANCE_MOVES,
    HEAL_BLOCK_MOVES,
    INSTRUCT_BANNED,
    MAGIC_COAT_MOVES,
    METRONOME_BANNED,
    MIMIC_BANNED,
    POWDER_MOVES,
    PUNCHING_MOVES,
    SLEEP_TALK_BANNED,
    SLICING_MOVES,
    SNATCHABLE,
    SOUND_MOVES,
    SUBSTITUTE_BYPASS_MOVES,
    WIND_MOVES,
)
from duel_engine.enums import Ability, DamageClass, MoveTarget
from duel_engine.schema.combatant import Combatant
from duel_engine.schema.move import MoveData

# Targets that never land on the opposing combatant
_NON_OPPONENT_TARGETS = frozenset({
    MoveTarget.SELECTED_POKEMON_ME_FIRST,
    MoveTarget.ALLY,
    MoveTarget.USERS_FIELD,
    MoveTarget.USER_OR_ALLY,
    MoveTarget.OPPONENTS_FIELD,
    MoveTarget.USER,
    MoveTarget.ENTIRE_FIELD,
    MoveTarget.USER_AND_ALLIES,
    MoveTarget.ALL_ALLIES,
})

_MULTI_TARGETS = frozenset({
    MoveTarget.ALL_OTHER_POKEMON,
    MoveTarget.ALL_OPPONENTS,
    MoveTarget.USER_AND_ALLIES,
    MoveTarget.ALL_POKEMON,
    MoveTarget.ALL_ALLIES,
})


# =============================================================================
# MOVE FAMILIES
# =============================================================================
def is_sound_based(move: MoveData) -> bool:
    return move.id in SOUND_MOVES


def is_punching(move: MoveData) -> bool:
    return move.id in PUNCHING_MOVES


def is_biting(move: MoveData) -> bool:
    return move.id in BITING_MOVES


def is_ball_or_bomb(move: MoveData) -> bool:
    return move.id in BALL_AND_BOMB_MOVES


def is_aura_or_pulse(move: MoveData) -> bool:
    return move.id in AURA_AND_PULSE_MOVES


def is_powder_or_spore(move: MoveData) -> bool:
    return move.id in POWDER_MOVES


def is_dance(move: MoveData) -> bool:
    return move.id in DANCE_MOVES


def is_slicing(move: MoveData) -> bool:
    return move.id in SLICING_MOVES


def is_wind(move: MoveData) -> bool:
    return move.id in WIND_MOVES


def is_affected_by_magic_coat(move: MoveData) -> bool:
    return move.id in MAGIC_COAT_MOVES


def is_affected_by_heal_block(move: MoveData) -> bool:
    return move.id in HEAL_BLOCK_MOVES


def is_affected_by_substitute(move: MoveData) -> bool:
    return move.id not in SUBSTITUTE_BYPASS_MOVES


# =============================================================================
# TARGETING
# =============================================================================
def targets_opponent(move: MoveData) -> bool:
    # Moves that copy or call other moves only count when they deal damage themselves
    if move.target == MoveTarget.SPECIFIC_MOVE and move.damage_class == DamageClass.STATUS:
        return False
    return move.target not in _NON_OPPONENT_TARGETS


def targets_multiple(move: MoveData) -> bool:
    return move.target in _MULTI_TARGETS


def makes_contact(move: MoveData, attacker: Optional[Combatant] = None) -> bool:
    if move.id not in CONTACT_MOVES:
        return False
    return attacker is None or attacker.ability() != Ability.LONG_REACH


def is_damaging(move: MoveData) -> bool:
    return move.damage_class != DamageClass.STATUS


# =============================================================================
# MOVE-CALLING ELIGIBILITY
# =============================================================================
def selectable_by_mirror_move(move: MoveData) -> bool:
    return targets_opponent(move)


def selectable_by_sleep_talk(move: MoveData) -> bool:
    # Sleep talk never picks itself
    return move.id not in SLEEP_TALK_BANNED and move.effect != 98


def selectable_by_assist(move: MoveData) -> bool:
    return move.id not in ASSIST_BANNED


def selectable_by_metronome(move: MoveData) -> bool:
    return move.id not in METRONOME_BANNED and move.effect != 84


def selectable_by_mimic(move: MoveData) -> bool:
    return move.id not in MIMIC_BANNED


def selectable_by_instruct(move: MoveData) -> bool:
    return move.id not in INSTRUCT_BANNED


def selectable_by_snatch(move: MoveData) -> bool:
    return move.id in SNATCHABLE
