"""
Effective battle stats: raw stats with stages, abilities, held items and field effects applied.

Each getter truncates to int once at the end, after every multiplier has been applied in order.
"""

from typing import Optional

from duel_engine.constants import STAGE_MULTIPLIERS
from duel_engine.enums import Ability, ElementType, NonVolatileStatus, StatKind, TerrainKind, WeatherKind
from duel_engine.enums.other import RAINY, SUNNY
from duel_engine.schema.battle_context import BattleContext
from duel_engine.schema.combatant import Combatant
from duel_engine.schema.move import BattleMove


def calculate_stat(stat: float, stage: int, crop: Optional[str] = None) -> float:
    """Apply a stat stage multiplier.

    crop="bottom" ignores negative stages and crop="top" ignores positive ones (critical hits).
    """
    if crop == "bottom":
        stage = max(stage, 0)
    elif crop == "top":
        stage = min(stage, 0)
    return STAGE_MULTIPLIERS[stage + 6] * stat


# =============================================================================
# RAW STATS (no stages)
# =============================================================================
def raw_attack(mon: Combatant, check_power_trick: bool = True, check_power_shift: bool = True) -> int:
    if mon.power_trick and check_power_trick:
        return raw_defense(mon, False, check_power_shift)
    if mon.power_shift and check_power_shift:
        return raw_defense(mon, check_power_trick, False)
    stat = mon.attack
    if mon.attack_split is not None:
        stat = (stat + mon.attack_split) // 2
    return stat


def raw_defense(mon: Combatant, check_power_trick: bool = True, check_power_shift: bool = True) -> int:
    if mon.power_trick and check_power_trick:
        return raw_attack(mon, False, check_power_shift)
    if mon.power_shift and check_power_shift:
        return raw_attack(mon, check_power_trick, False)
    stat = mon.defense
    if mon.defense_split is not None:
        stat = (stat + mon.defense_split) // 2
    return stat


def raw_sp_atk(mon: Combatant, check_power_shift: bool = True) -> int:
    if mon.power_shift and check_power_shift:
        return raw_sp_def(mon, False)
    stat = mon.sp_atk
    if mon.sp_atk_split is not None:
        stat = (stat + mon.sp_atk_split) // 2
    return stat


def raw_sp_def(mon: Combatant, check_power_shift: bool = True) -> int:
    if mon.power_shift and check_power_shift:
        return raw_sp_atk(mon, False)
    stat = mon.sp_def
    if mon.sp_def_split is not None:
        stat = (stat + mon.sp_def_split) // 2
    return stat


def raw_speed(mon: Combatant) -> int:
    return mon.speed


def raw_stat(mon: Combatant, stat: StatKind) -> int:
    return {
        StatKind.ATTACK: raw_attack,
        StatKind.DEFENSE: raw_defense,
        StatKind.SP_ATK: raw_sp_atk,
        StatKind.SP_DEF: raw_sp_def,
        StatKind.SPEED: raw_speed,
    }[stat](mon)


def highest_raw_stat(mon: Combatant) -> StatKind:
    """The stat Protosynthesis / Quark Drive boosts. Ties resolve in attack, defense, sp. atk, sp. def, speed order."""
    order = (StatKind.ATTACK, StatKind.DEFENSE, StatKind.SP_ATK, StatKind.SP_DEF, StatKind.SPEED)
    best = order[0]
    for stat in order[1:]:
        if raw_stat(mon, stat) > raw_stat(mon, best):
            best = stat
    return best


# =============================================================================
# SHARED MODIFIERS
# =============================================================================
def _ruin_multiplier(mon: Combatant, battle: BattleContext, ruin: Ability) -> float:
    multiplier = 1.0
    for other in battle.active_mons():
        if other.uid != mon.uid and other.ability() == ruin:
            multiplier *= 0.75
    return multiplier


def _paradox_boost(mon: Combatant, battle: BattleContext, stat: StatKind, boost: float) -> float:
    """Protosynthesis / Quark Drive boost on the holder's highest stat, consuming booster energy if needed."""
    if highest_raw_stat(mon) != stat:
        return 1
    ability = mon.ability()
    if ability not in (Ability.PROTOSYNTHESIS, Ability.QUARK_DRIVE):
        return 1
    if ability == Ability.PROTOSYNTHESIS and (battle.weather_now() in SUNNY or mon.booster_energy):
        return boost
    if ability == Ability.QUARK_DRIVE and (battle.terrain_now() == TerrainKind.ELECTRIC or mon.booster_energy):
        return boost
    if mon.item(battle) == "booster-energy":
        mon.use_item()
        mon.booster_energy = True
        return boost
    return 1


# =============================================================================
# EFFECTIVE STATS
# =============================================================================
def get_attack(mon: Combatant, battle: BattleContext, critical: bool = False, ignore_stages: bool = False) -> int:
    attack: float = raw_attack(mon)
    if not ignore_stages:
        attack = calculate_stat(attack, mon.attack_stage, "bottom" if critical else None)
    ability = mon.ability()
    item = mon.item(battle)
    weather = battle.weather_now()
    if ability == Ability.GUTS and mon.has_status():
        attack *= 1.5
    if ability == Ability.SLOW_START and mon.active_turns < 5:
        attack *= 0.5
    if ability in (Ability.HUGE_POWER, Ability.PURE_POWER):
        attack *= 2
    if ability == Ability.HUSTLE:
        attack *= 1.5
    if ability == Ability.DEFEATIST and mon.hp <= mon.starting_hp // 2:
        attack *= 0.5
    if ability == Ability.GORILLA_TACTICS:
        attack *= 1.5
    if ability == Ability.FLOWER_GIFT and weather in SUNNY:
        attack *= 1.5
    if ability == Ability.ORICHALCUM_PULSE and weather in SUNNY:
        attack *= 4 / 3
    if item == "choice-band":
        attack *= 1.5
    if item == "light-ball" and mon.species == "Pikachu":
        attack *= 2
    if item == "thick-club" and mon.species in ("Cubone", "Marowak", "Marowak-alola"):
        attack *= 2
    attack *= _ruin_multiplier(mon, battle, Ability.TABLETS_OF_RUIN)
    attack *= _paradox_boost(mon, battle, StatKind.ATTACK, 1.3)
    return max(1, int(attack))


def get_defense(
    mon: Combatant,
    battle: BattleContext,
    critical: bool = False,
    ignore_stages: bool = False,
    attacker: Optional[Combatant] = None,
    move: Optional[BattleMove] = None,
) -> int:
    defense: float = raw_sp_def(mon) if battle.wonder_room.active() else raw_defense(mon)
    if not ignore_stages:
        defense = calculate_stat(defense, mon.defense_stage, "top" if critical else None)
    ability = mon.ability(attacker, move)
    if ability == Ability.MARVEL_SCALE and mon.has_status():
        defense *= 1.5
    if ability == Ability.FUR_COAT:
        defense *= 2
    if ability == Ability.GRASS_PELT and battle.terrain_now() == TerrainKind.GRASSY:
        defense *= 1.5
    if mon.item(battle) == "eviolite" and mon.can_still_evolve:
        defense *= 1.5
    defense *= _ruin_multiplier(mon, battle, Ability.SWORD_OF_RUIN)
    defense *= _paradox_boost(mon, battle, StatKind.DEFENSE, 1.3)
    return max(1, int(defense))


def get_sp_atk(mon: Combatant, battle: BattleContext, critical: bool = False, ignore_stages: bool = False) -> int:
    sp_atk: float = raw_sp_atk(mon)
    if not ignore_stages:
        sp_atk = calculate_stat(sp_atk, mon.sp_atk_stage, "bottom" if critical else None)
    ability = mon.ability()
    item = mon.item(battle)
    if ability == Ability.DEFEATIST and mon.hp <= mon.starting_hp // 2:
        sp_atk *= 0.5
    if ability == Ability.SOLAR_POWER and battle.weather_now() in SUNNY:
        sp_atk *= 1.5
    if ability == Ability.HADRON_ENGINE and battle.terrain_now() == TerrainKind.GRASSY:
        sp_atk *= 4 / 3
    if item == "choice-specs":
        sp_atk *= 1.5
    if item == "deep-sea-tooth" and mon.species == "Clamperl":
        sp_atk *= 2
    if item == "light-ball" and mon.species == "Pikachu":
        sp_atk *= 2
    sp_atk *= _ruin_multiplier(mon, battle, Ability.VESSEL_OF_RUIN)
    sp_atk *= _paradox_boost(mon, battle, StatKind.SP_ATK, 1.3)
    return max(1, int(sp_atk))


def get_sp_def(
    mon: Combatant,
    battle: BattleContext,
    critical: bool = False,
    ignore_stages: bool = False,
    attacker: Optional[Combatant] = None,
    move: Optional[BattleMove] = None,
) -> int:
    sp_def: float = raw_defense(mon) if battle.wonder_room.active() else raw_sp_def(mon)
    if not ignore_stages:
        sp_def = calculate_stat(sp_def, mon.sp_def_stage, "top" if critical else None)
    item = mon.item(battle)
    if battle.weather_now() == WeatherKind.SANDSTORM and ElementType.ROCK in mon.types:
        sp_def *= 1.5
    if mon.ability(attacker, move) == Ability.FLOWER_GIFT and battle.weather_now() in SUNNY:
        sp_def *= 1.5
    if item == "deep-sea-scale" and mon.species == "Clamperl":
        sp_def *= 2
    if item == "assault-vest":
        sp_def *= 1.5
    if item == "eviolite" and mon.can_still_evolve:
        sp_def *= 1.5
    sp_def *= _ruin_multiplier(mon, battle, Ability.BEADS_OF_RUIN)
    sp_def *= _paradox_boost(mon, battle, StatKind.SP_DEF, 1.3)
    return max(1, int(sp_def))


def get_speed(mon: Combatant, battle: BattleContext) -> int:
    speed = calculate_stat(raw_speed(mon), mon.speed_stage)
    ability = mon.ability()
    item = mon.item(battle)
    weather = battle.weather_now()
    if mon.status == NonVolatileStatus.PARALYSIS and ability != Ability.QUICK_FEET:
        speed /= 2
    if item == "iron-ball":
        speed /= 2
    if battle.side_of(mon).tailwind.active():
        speed *= 2
    if ability == Ability.SLUSH_RUSH and weather == WeatherKind.HAIL:
        speed *= 2
    if ability == Ability.SAND_RUSH and weather == WeatherKind.SANDSTORM:
        speed *= 2
    if ability == Ability.SWIFT_SWIM and weather in RAINY:
        speed *= 2
    if ability == Ability.CHLOROPHYLL and weather in SUNNY:
        speed *= 2
    if ability == Ability.SLOW_START and mon.active_turns < 5:
        speed *= 0.5
    if ability == Ability.UNBURDEN and not mon.held.has_item() and mon.held.ever_had_item:
        speed *= 2
    if ability == Ability.QUICK_FEET and mon.has_status():
        speed *= 1.5
    if ability == Ability.SURGE_SURFER and battle.terrain_now() == TerrainKind.ELECTRIC:
        speed *= 2
    if item == "choice-scarf":
        speed *= 1.5
    speed *= _paradox_boost(mon, battle, StatKind.SPEED, 1.5)
    return max(1, int(speed))
