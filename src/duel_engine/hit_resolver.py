"""
Hit resolution: whether a move reaches its target at all.

The gates run in a fixed order (effectiveness, semi-invulnerability, protection, accuracy) and each
one narrates its own outcome. The individual checks are exposed so the hit loop can re-roll
accuracy per strike and the executability gate can run before any setup happens.
"""

import logging
from typing import Optional

from duel_engine.combatant_ops import append_stat, apply_status, damage, valid_swaps
from duel_engine.constants import ACCURACY_STAGE_MULTIPLIERS, MAX_STAT_STAGE, MIN_STAT_STAGE
from duel_engine.damage_calculator import DamageCalculator
from duel_engine.data.items import FLING_POWER
from duel_engine.enums import Ability, DamageClass, ElementType, NonVolatileStatus, StatKind, TerrainKind, WeatherKind
from duel_engine.enums.other import EXTREME_WEATHER, RAINY, SUNNY
from duel_engine.move_classifiers import (
    is_affected_by_heal_block,
    is_ball_or_bomb,
    is_powder_or_spore,
    is_sound_based,
    makes_contact,
    selectable_by_assist,
    selectable_by_instruct,
    selectable_by_mimic,
    selectable_by_mirror_move,
    selectable_by_sleep_talk,
    targets_multiple,
    targets_opponent,
)
from duel_engine.schema.battle_context import BattleContext, MoveAction, SwitchAction
from duel_engine.schema.combatant import Combatant
from duel_engine.schema.move import BattleMove
from duel_engine.type_chart import TypeChart, effectiveness

logger = logging.getLogger(__name__)

# Moves that ignore every protection
_UNBLOCKABLE = frozenset({149, 224, 273, 360, 438, 489})
# Moves that ignore every protection except crafty shield
_FEINT_LIKE = frozenset({29, 107, 179, 412})

# Effects whose semi-invulnerable target they can still reach
_HITS_DIVE = frozenset({258, 262})
_HITS_DIG = frozenset({127, 148})
_HITS_FLY = frozenset({147, 150, 153, 208, 288, 334, 373})

# Moves that hold hands, celebrate and the like: they never affect anything
NO_EFFECT_MOVES = frozenset({86, 174, 368, 370, 371, 389})
# Ally and double-battle only moves
DOUBLES_ONLY_EFFECTS = frozenset({173, 301, 308, 316, 363, 445, 494})

_RAIN_SURE_HIT = frozenset({153, 334, 357, 365, 396})
_PROTECTION_MOVES = frozenset({112, 117, 356, 362, 384, 454, 488, 499})
_MUST_MOVE_FIRST = frozenset({112, 117, 184, 195, 196, 279, 307, 345, 350, 354, 356, 362, 378, 384, 454, 488, 499})
_PRIORITY_BLOCKERS = (Ability.QUEENLY_MAJESTY, Ability.DAZZLING, Ability.ARMOR_TAIL)


# =============================================================================
# EFFECTIVENESS
# =============================================================================
def check_effective(move: BattleMove, attacker: Combatant, defender: Combatant, battle: BattleContext) -> bool:
    """False when the move cannot affect the defender: type immunity, absorbing abilities and the like."""
    if move.effect in NO_EFFECT_MOVES:
        return False
    if not targets_opponent(move):
        return True

    defender_ability = defender.ability(attacker, move)
    effect = move.effect
    if effect == 266 and defender_ability == Ability.OBLIVIOUS:
        return False
    if effect == 39 and (defender_ability == Ability.STURDY or (move.id == 329 and ElementType.ICE in defender.types)):
        return False
    if effect == 400 and not defender.has_status():
        return False
    if is_sound_based(move) and defender_ability == Ability.SOUNDPROOF:
        return False
    if is_ball_or_bomb(move) and defender_ability == Ability.BULLETPROOF:
        return False
    if attacker.ability() == Ability.PRANKSTER and ElementType.DARK in defender.types:
        if move.damage_class == DamageClass.STATUS:
            return False
        # A status move that called this one still counts
        action = battle.side_of(attacker).selected_action
        if isinstance(action, MoveAction) and action.move.damage_class == DamageClass.STATUS:
            return False
    if defender_ability == Ability.GOOD_AS_GOLD and move.damage_class == DamageClass.STATUS:
        return False

    # Status moves ignore the type chart, except thunder wave
    if move.damage_class == DamageClass.STATUS and move.id != 86:
        return True

    move_type = DamageCalculator(battle).get_type(move, attacker, defender)
    if move_type == ElementType.TYPELESS:
        return True
    factor = effectiveness(defender, move_type, battle, attacker, move)
    if effect == 338:
        factor *= effectiveness(defender, ElementType.FLYING, battle, attacker, move)
    if factor == 0:
        return False
    if (
        move_type == ElementType.GROUND
        and not defender.grounded(battle, attacker, move)
        and effect != 373
        and not battle.config.inverse_battle
    ):
        return False

    full_hp = defender.hp == defender.starting_hp
    if effect != 459:
        if move_type == ElementType.ELECTRIC and defender_ability == Ability.VOLT_ABSORB and full_hp:
            return False
        if move_type == ElementType.WATER and defender_ability in (Ability.WATER_ABSORB, Ability.DRY_SKIN) and full_hp:
            return False
    if move_type == ElementType.FIRE and defender_ability == Ability.FLASH_FIRE and defender.flash_fire:
        return False
    if factor <= 1 and defender_ability == Ability.WONDER_GUARD:
        return False
    return True


# =============================================================================
# SEMI-INVULNERABILITY / PROTECTION
# =============================================================================
def _locked_on(attacker: Combatant, defender: Combatant) -> bool:
    return defender.mind_reader.active() and defender.mind_reader.item == attacker.uid


def check_semi_invulnerable(move: BattleMove, attacker: Combatant, defender: Combatant, battle: BattleContext) -> bool:
    """True when the move can reach the defender despite fly, dig, dive or shadow force."""
    if not targets_opponent(move):
        return True
    if attacker.ability() == Ability.NO_GUARD or defender.ability(attacker, move) == Ability.NO_GUARD:
        return True
    if _locked_on(attacker, defender):
        return True
    if defender.dive and move.effect not in _HITS_DIVE:
        return False
    if defender.dig and move.effect not in _HITS_DIG:
        return False
    if defender.fly and move.effect not in _HITS_FLY:
        return False
    return not defender.shadow_force


def check_protect(move: BattleMove, attacker: Combatant, defender: Combatant, battle: BattleContext) -> Optional[str]:
    """
    Find the protection that stops this move.

    Args:
        move: Move being used
        attacker: User of the move
        defender: Target of the move
        battle: Battle the move is used in

    Returns:
        The name of the blocking protection (a combatant field, or "psychic_terrain"), or None when
        the move gets through.
    """
    if not targets_opponent(move):
        return None
    if move.effect in _UNBLOCKABLE:
        return None
    if attacker.ability() == Ability.UNSEEN_FIST and makes_contact(move, attacker):
        return None
    status_move = move.damage_class == DamageClass.STATUS
    if defender.crafty_shield and status_move:
        return "crafty_shield"
    if move.effect in _FEINT_LIKE:
        return None
    if defender.protect:
        return "protect"
    if defender.spiky_shield:
        return "spiky_shield"
    if defender.baneful_bunker:
        return "baneful_bunker"
    if defender.wide_guard and targets_multiple(move):
        return "wide_guard"

    priority = DamageCalculator(battle).get_priority(move, attacker, defender)
    if priority > 0 and battle.terrain_now() == TerrainKind.PSYCHIC and defender.grounded(battle, attacker, move):
        return "psychic_terrain"
    if not status_move:
        for field in ("mat_block", "king_shield", "obstruct", "silk_trap", "burning_bulwark"):
            if getattr(defender, field):
                return field
    if defender.quick_guard and priority > 0:
        return "quick_guard"
    return None


def punish_contact(blocker: str, move: BattleMove, attacker: Combatant, defender: Combatant, battle: BattleContext) -> None:
    """Contact penalty of the spiky protections, applied after a blocked move."""
    if not makes_contact(move, attacker) or attacker.item(battle) == "protective-pads":
        return
    source = f"{defender.name}'s {blocker.replace('_', ' ')}"
    if blocker == "spiky_shield":
        damage(attacker, attacker.starting_hp // 8, battle, source=source)
    elif blocker == "baneful_bunker":
        apply_status(attacker, NonVolatileStatus.POISON, battle, attacker=defender, source=source)
    elif blocker == "king_shield":
        append_stat(attacker, -1, defender, move, StatKind.ATTACK, battle, source=source)
    elif blocker == "obstruct":
        append_stat(attacker, -2, defender, move, StatKind.DEFENSE, battle, source=source)
    elif blocker == "silk_trap":
        append_stat(attacker, -1, defender, move, StatKind.SPEED, battle, source=source)
    elif blocker == "burning_bulwark":
        apply_status(attacker, NonVolatileStatus.BURN, battle, attacker=defender, source=source)


# =============================================================================
# ACCURACY
# =============================================================================
def check_hit(move: BattleMove, attacker: Combatant, defender: Combatant, battle: BattleContext) -> bool:
    """
    Roll the move's accuracy.

    Args:
        move: Move being used
        attacker: User of the move
        defender: Target of the move
        battle: Battle the move is used in

    Returns:
        True when the move hits. Moves without an accuracy never miss.
    """
    micle_berry_used = attacker.micle_berry_ate
    attacker.micle_berry_ate = False

    if move.accuracy is None:
        return True

    effect = move.effect
    weather = battle.weather_now()
    if effect == 261 and weather == WeatherKind.HAIL:
        return True
    if effect in _RAIN_SURE_HIT and weather in RAINY:
        return True
    if effect == 34 and ElementType.POISON in attacker.types:
        return True
    if effect == 338 and defender.minimized:
        return True

    hits_opponent = targets_opponent(move)
    defender_ability = defender.ability(attacker, move)
    if hits_opponent:
        if _locked_on(attacker, defender):
            return True
        if attacker.ability() == Ability.NO_GUARD or defender_ability == Ability.NO_GUARD:
            return True

    # One-hit KOs ignore every modifier below
    if effect == 39:
        return battle.rng.uniform() * 100 <= 30 + (attacker.level - defender.level)

    if defender.telekinesis.active():
        return True

    accuracy = float(move.accuracy)
    if effect in (153, 334) and weather in SUNNY:
        accuracy = 50
    if hits_opponent and defender_ability == Ability.WONDER_SKIN and move.damage_class == DamageClass.STATUS:
        accuracy = 50

    stage = 0 if defender_ability == Ability.UNAWARE else attacker.accuracy_stage
    ignores_evasion = (
        effect == 304
        or defender.foresight
        or defender.miracle_eye
        or attacker.ability() in (Ability.UNAWARE, Ability.KEEN_EYE, Ability.MINDS_EYE)
    )
    if not ignores_evasion:
        stage -= defender.evasion_stage
    stage = min(MAX_STAT_STAGE, max(MIN_STAT_STAGE, stage))
    accuracy *= ACCURACY_STAGE_MULTIPLIERS[stage + 6]

    if hits_opponent:
        if defender_ability == Ability.TANGLED_FEET and defender.confusion.active():
            accuracy *= 0.5
        if defender_ability == Ability.SAND_VEIL and weather == WeatherKind.SANDSTORM:
            accuracy *= 0.8
        if defender_ability == Ability.SNOW_CLOAK and weather == WeatherKind.HAIL:
            accuracy *= 0.8

    ability = attacker.ability()
    if ability == Ability.COMPOUND_EYES:
        accuracy *= 1.3
    if ability == Ability.HUSTLE and move.damage_class == DamageClass.PHYSICAL:
        accuracy *= 0.8
    if ability == Ability.VICTORY_STAR:
        accuracy *= 1.1
    if battle.gravity.active():
        accuracy *= 5 / 3
    item = attacker.item(battle)
    if item == "wide-lens":
        accuracy *= 1.1
    if item == "zoom-lens" and defender.has_moved:
        accuracy *= 1.2
    if defender.item(battle) == "bright-powder":
        accuracy *= 0.9
    if micle_berry_used:
        accuracy *= 1.2

    return battle.rng.uniform() * 100 <= accuracy


# =============================================================================
# GATE SEQUENCE
# =============================================================================
def _on_miss(move: BattleMove, attacker: Combatant, battle: BattleContext) -> None:
    """Side effects shared by every way a move can fail to connect."""
    effect = move.effect
    if effect == 120:
        attacker.fury_cutter = 0
    elif effect in (46, 478):
        damage(attacker, attacker.starting_hp // 2, battle, source="recoil")
    elif effect in (28, 81, 118):
        attacker.locked_move = None


def resolve_gates(
    move: BattleMove,
    attacker: Combatant,
    defender: Combatant,
    battle: BattleContext,
    bounced: bool = False,
) -> bool:
    """
    Run effectiveness, semi-invulnerability, protection and accuracy in that order.

    Returns:
        True when the move connects. On False the outcome has already been narrated.
    """
    log = battle.log
    if not bounced and not check_effective(move, attacker, defender, battle):
        log.add("no_effect")
        _on_miss(move, attacker, battle)
        attacker.last_move_failed = True
        logger.debug("%s had no effect on %s", move.name, defender.name)
        return False

    if not check_semi_invulnerable(move, attacker, defender, battle):
        log.add("avoided", name=defender.name)
        _on_miss(move, attacker, battle)
        logger.debug("%s is out of reach of %s", defender.name, move.name)
        return False

    blocker = check_protect(move, attacker, defender, battle)
    if blocker is not None:
        log.add("protected", name=defender.name)
        punish_contact(blocker, move, attacker, defender, battle)
        _on_miss(move, attacker, battle)
        logger.debug("%s blocked by %s", move.name, blocker)
        return False

    if not check_hit(move, attacker, defender, battle):
        log.add("missed")
        _on_miss(move, attacker, battle)
        return False
    return True


# =============================================================================
# EXECUTABILITY
# =============================================================================
def get_conversion2(attacker: Combatant, defender: Combatant, battle: BattleContext) -> Optional[ElementType]:
    """A random type that resists the defender's last move and that the attacker does not already have."""
    if defender.last_move is None:
        return None
    move_type = DamageCalculator(battle).get_type(defender.last_move, attacker, defender)
    candidates = []
    for element in ElementType:
        if element == ElementType.TYPELESS or element in attacker.types:
            continue
        factor = TypeChart.lookup(move_type, element)
        if (factor > 100) if battle.config.inverse_battle else (factor < 100):
            candidates.append(element)
    if not candidates:
        return None
    return candidates[battle.rng.choice_index(len(candidates))]


def get_assist_move(attacker: Combatant, battle: BattleContext) -> Optional[BattleMove]:
    """A random assist-eligible move known by a party member other than the one last sent out."""
    side = battle.side_of(attacker)
    pool = [
        move
        for idx, poke in enumerate(side.party)
        if idx != side.last_idx
        for move in poke.moves
        if selectable_by_assist(move)
    ]
    if not pool:
        return None
    return pool[battle.rng.choice_index(len(pool))]


def _no_last_move(mon: Combatant) -> bool:
    return mon.last_move is None or mon.last_move.pp == 0


def _has_switch_available(side_mon: Combatant, battle: BattleContext) -> bool:
    return bool(valid_swaps(battle.side_of(side_mon), battle, check_trap=False))


def _target_acts_with_status_or_switch(defender: Combatant, battle: BattleContext) -> bool:
    action = battle.side_of(defender).selected_action
    if isinstance(action, SwitchAction):
        return True
    return isinstance(action, MoveAction) and action.move.damage_class == DamageClass.STATUS


def _can_hit_by_grass(mon: Combatant, battle: BattleContext) -> bool:
    return (
        ElementType.GRASS in mon.types
        and mon.grounded(battle)
        and not (mon.dive or mon.dig or mon.fly or mon.shadow_force)
    )


def check_executable(move: BattleMove, attacker: Combatant, defender: Combatant, battle: BattleContext) -> bool:
    """
    Check every requirement that can make a move fail outright.

    Args:
        move: Move being used
        attacker: User of the move
        defender: Target of the move
        battle: Battle the move is used in

    Returns:
        False when the move fails ("But it failed!"), True otherwise.
    """
    effect = move.effect
    calc = DamageCalculator(battle)
    attacker_side = battle.side_of(attacker)
    defender_side = battle.side_of(defender)
    defender_ability = defender.ability(attacker, move)
    weather = battle.weather_now()
    terrain = battle.terrain.kind
    status_move = move.damage_class == DamageClass.STATUS

    # Volatile restrictions on the user
    if attacker.taunt.active() and status_move:
        return False
    if attacker.silenced.active() and is_sound_based(move):
        return False
    if is_affected_by_heal_block(move) and attacker.heal_block.active():
        return False
    if is_powder_or_spore(move) and (
        ElementType.GRASS in defender.types
        or defender_ability == Ability.OVERCOAT
        or defender.item(battle) == "safety-goggles"
    ):
        return False
    if not status_move:
        move_type = calc.get_type(move, attacker, defender)
        if weather == WeatherKind.HARSH_SUN and move_type == ElementType.WATER:
            return False
        if weather == WeatherKind.HEAVY_RAIN and move_type == ElementType.FIRE:
            return False
    if attacker.disable.active() and attacker.disable.item == move.id:
        return False
    if attacker.uid != defender.uid and defender.imprison and any(m.id == move.id for m in defender.moves):
        return False

    if effect in DOUBLES_ONLY_EFFECTS:
        return False
    if effect in (93, 98) and not attacker.is_asleep():
        return False
    if effect in (9, 108) and not defender.is_asleep():
        return False
    if effect == 364 and not defender.is_poisoned():
        return False
    if effect in (162, 163) and attacker.stockpile == 0:
        return False

    if effect == 85 and (ElementType.GRASS in defender.types or defender.leech_seed):
        return False
    if effect == 193 and attacker.imprison:
        return False
    if effect == 166 and defender.torment:
        return False
    if effect == 91 and (defender.encore.active() or _no_last_move(defender)):
        return False
    if effect == 87 and (defender.disable.active() or _no_last_move(defender)):
        return False
    if effect in (96, 101) and _no_last_move(defender):
        return False
    if effect == 176 and defender.taunt.active():
        return False
    if effect == 29 and not _has_switch_available(defender, battle):
        return False
    if effect in (128, 154, 493) and not _has_switch_available(attacker, battle):
        return False
    if effect == 161 and attacker.stockpile >= 3:
        return False

    # Counter family
    taken = attacker.last_move_damage
    if effect in (90, 145, 228, 408) and taken is None:
        return False
    if effect == 145 and taken[1] != DamageClass.SPECIAL:
        return False
    if effect in (90, 408) and taken[1] != DamageClass.PHYSICAL:
        return False

    if effect in (10, 243) and (defender.last_move is None or not selectable_by_mirror_move(defender.last_move)):
        return False
    if effect == 83 and (defender.last_move is None or not selectable_by_mimic(defender.last_move)):
        return False
    if effect == 180 and attacker_side.wish.active():
        return False
    if effect == 388 and defender.attack_stage == MIN_STAT_STAGE:
        return False

    # HP thresholds
    if effect in (143, 485, 493) and attacker.hp <= attacker.starting_hp // 2:
        return False
    if effect == 414 and attacker.hp < attacker.starting_hp / 3:
        return False
    if effect == 80 and attacker.hp <= attacker.starting_hp // 4:
        return False
    if effect == 48 and attacker.focus_energy:
        return False
    if effect == 190 and attacker.hp >= defender.hp:
        return False
    if effect == 194 and not (attacker.status in (NonVolatileStatus.BURN, NonVolatileStatus.PARALYSIS) or attacker.is_poisoned()):
        return False
    if effect == 235 and (not attacker.has_status() or defender.has_status()):
        return False

    # Attract and captivate
    if effect in (121, 266) and (
        "-x" in (attacker.gender, defender.gender)
        or attacker.gender == defender.gender
        or defender_ability == Ability.OBLIVIOUS
    ):
        return False
    if effect in (367, 392) and attacker.ability() not in (Ability.PLUS, Ability.MINUS):
        return False
    if effect == 39 and attacker.level < defender.level:
        return False
    if effect in (46, 86, 156, 264, 286) and battle.gravity.active():
        return False

    if effect == 113 and defender_side.spikes == 3:
        return False
    if effect == 250 and defender_side.toxic_spikes == 2:
        return False
    if effect in (159, 377, 383) and attacker.active_turns != 0:
        return False
    if effect == 98 and not any(selectable_by_sleep_talk(m) for m in attacker.moves):
        return False
    if effect == 407 and (weather != WeatherKind.HAIL or attacker_side.aurora_veil.active()):
        return False
    if effect == 47 and attacker_side.mist.active():
        return False
    if effect in (80, 493) and attacker.substitute > 0:
        return False

    # Type requirements
    if effect == 398 and ElementType.FIRE not in attacker.types:
        return False
    if effect == 481 and ElementType.ELECTRIC not in attacker.types:
        return False
    if effect == 376 and ElementType.GRASS in defender.types:
        return False
    if effect == 343 and ElementType.GHOST in defender.types:
        return False
    if effect == 107 and defender.trapping:
        return False
    if effect == 182 and attacker.ingrain:
        return False
    if effect == 94 and get_conversion2(attacker, defender, battle) is None:
        return False
    if effect == 121 and defender.infatuated == attacker.uid:
        return False
    if effect == 248 and defender_ability == Ability.INSOMNIA:
        return False

    # Sucker punch and me first need a target that is about to attack
    if effect in (242, 249) and (defender.has_moved or _target_acts_with_status_or_switch(defender, battle)):
        return False

    if effect == 252 and attacker.aqua_ring:
        return False
    if effect == 253 and attacker.magnet_rise.active():
        return False
    if effect == 221 and attacker_side.healing_wish:
        return False
    if effect == 271 and attacker_side.lunar_dance:
        return False

    # Ability swaps
    if effect in (240, 248, 299, 300) and not defender.ability_changeable():
        return False
    if effect == 300 and not attacker.ability_giveable():
        return False
    if effect == 241 and attacker.lucky_chant.active():
        return False
    if effect == 125 and attacker_side.safeguard.active():
        return False
    if effect == 293 and not set(attacker.types) & set(defender.types):
        return False
    if effect == 295 and defender_ability == Ability.MULTITYPE:
        return False
    if effect == 319 and not defender.types:
        return False
    if effect == 171 and attacker.last_move_damage is not None:
        return False
    if effect == 179 and not (attacker.ability_changeable() and defender.ability_giveable()):
        return False
    if effect == 181 and get_assist_move(attacker, battle) is None:
        return False
    if effect in _MUST_MOVE_FIRST and defender.has_moved:
        return False
    if effect == 192 and not (
        attacker.ability_changeable()
        and attacker.ability_giveable()
        and defender.ability_changeable()
        and defender.ability_giveable()
    ):
        return False
    if effect == 226 and attacker_side.tailwind.active():
        return False

    # Substitutes
    if effect in (90, 92, 145) and attacker.substitute > 0:
        return False
    if effect in (85, 92, 169, 178, 188, 206, 388) and defender.substitute > 0:
        return False

    # Items
    attacker_item = attacker.item(battle)
    if effect == 234 and (attacker_item is None or attacker_item not in FLING_POWER or attacker.ability() == Ability.STICKY_HOLD):
        return False
    if effect == 178 and (
        attacker.ability() == Ability.STICKY_HOLD
        or defender_ability == Ability.STICKY_HOLD
        or not attacker.held.can_remove()
        or not defender.held.can_remove()
    ):
        return False
    if effect == 202 and attacker_side.mud_sport.active():
        return False
    if effect == 211 and attacker_side.water_sport.active():
        return False
    if effect == 149 and defender_side.future_sight.active():
        return False
    if effect == 188 and (
        defender.has_status()
        or defender_ability in (Ability.INSOMNIA, Ability.VITAL_SPIRIT, Ability.SWEET_VEIL)
        or defender.yawn.active()
        or (terrain == TerrainKind.ELECTRIC and attacker.grounded(battle))
    ):
        return False

    if effect in (340, 351) and not any(_can_hit_by_grass(mon, battle) for mon in (attacker, defender)):
        return False
    if effect == 341 and defender_side.sticky_web:
        return False

    # Consecutive protection
    if effect in _PROTECTION_MOVES and battle.rng.randint(1, attacker.protection_chance) != 1:
        return False

    if effect == 403 and (
        _no_last_move(defender) or not selectable_by_instruct(defender.last_move) or defender.locked_move is not None
    ):
        return False
    if effect == 378 and (
        ElementType.GRASS in defender.types
        or defender_ability == Ability.OVERCOAT
        or defender.item(battle) == "safety-goggles"
    ):
        return False
    if effect == 233 and defender.embargo.active():
        return False
    if effect == 324 and (not attacker.held.has_item() or defender.held.has_item() or not attacker.held.can_remove()):
        return False
    if effect == 185 and (attacker.held.has_item() or attacker.held.last_used is None):
        return False
    if effect == 430 and (not defender.held.has_item() or not defender.held.can_remove() or defender.corrosive_gas):
        return False
    if effect == 114 and defender.foresight:
        return False
    if effect == 217 and defender.miracle_eye:
        return False
    if effect == 38 and (attacker.is_asleep() or attacker.hp == attacker.starting_hp or attacker.species == "Minior"):
        return False
    if effect == 427 and attacker.no_retreat:
        return False
    if effect == 99 and attacker.destiny_bond_cooldown.active():
        return False

    if effect in (116, 137, 138, 165) and battle.weather.kind in EXTREME_WEATHER:
        return False
    if effect in (8, 420, 444) and Ability.DAMP in (attacker.ability(), defender_ability):
        return False
    if effect in (223, 453) and not attacker.is_berry(battle):
        return False

    # Field conditions that are already up
    if effect == 369 and terrain == TerrainKind.ELECTRIC:
        return False
    if effect == 352 and terrain == TerrainKind.GRASSY:
        return False
    if effect == 353 and terrain == TerrainKind.MISTY:
        return False
    if effect == 395 and terrain == TerrainKind.PSYCHIC:
        return False
    if effect == 66 and attacker_side.reflect.active():
        return False
    if effect == 36 and attacker_side.light_screen.active():
        return False
    if effect == 110 and ElementType.GHOST in attacker.types and defender.curse:
        return False
    if effect == 58 and (defender.substitute > 0 or defender.illusion_name is not None):
        return False
    if effect == 446 and defender.item(battle) is None:
        return False
    if effect == 448 and terrain == TerrainKind.NONE:
        return False
    if effect == 452 and defender.octolock:
        return False
    if effect == 280 and any(
        split is not None
        for split in (defender.defense_split, defender.sp_def_split, attacker.defense_split, attacker.sp_def_split)
    ):
        return False
    if effect == 281 and any(
        split is not None
        for split in (defender.attack_split, defender.sp_atk_split, attacker.attack_split, attacker.sp_atk_split)
    ):
        return False
    if effect == 456 and (defender.types == [ElementType.PSYCHIC] or defender_ability == Ability.RKS_SYSTEM):
        return False
    if effect == 83 and attacker.moveset_entry(move.id) is None:
        return False
    if effect == 501:
        action = defender_side.selected_action
        if defender.has_moved or isinstance(action, SwitchAction):
            return False
        if isinstance(action, MoveAction) and calc.get_priority(action.move, defender, attacker) <= 0:
            return False

    if defender_ability in _PRIORITY_BLOCKERS and calc.get_priority(move, attacker, defender) > 0:
        return False
    return True
