"""Weather and terrain: setting, expiring and the form and type changes that follow them."""

import logging
from typing import Optional

from duel_engine.combatant_ops import append_stat
from duel_engine.enums import Ability, ElementType, StatKind, TerrainKind, WeatherKind
from duel_engine.enums.other import EXTREME_WEATHER
from duel_engine.schema.battle_context import BattleContext
from duel_engine.schema.combatant import Combatant

logger = logging.getLogger(__name__)

# weather -> (rock that extends it, narration tag, castform form, castform type)
_WEATHER_TABLE = {
    WeatherKind.HAIL: ("icy-rock", "weather_hail", "Castform-snowy", ElementType.ICE),
    WeatherKind.SANDSTORM: ("smooth-rock", "weather_sandstorm", "Castform", ElementType.NORMAL),
    WeatherKind.RAIN: ("damp-rock", "weather_rain", "Castform-rainy", ElementType.WATER),
    WeatherKind.SUN: ("heat-rock", "weather_sun", "Castform-sunny", ElementType.FIRE),
    WeatherKind.HEAVY_RAIN: (None, "weather_heavy_rain", "Castform-rainy", ElementType.WATER),
    WeatherKind.HARSH_SUN: (None, "weather_harsh_sun", "Castform-sunny", ElementType.FIRE),
    WeatherKind.STRONG_WINDS: (None, "weather_strong_winds", "Castform", ElementType.NORMAL),
}

_TERRAIN_TYPES = {
    TerrainKind.ELECTRIC: ElementType.ELECTRIC,
    TerrainKind.GRASSY: ElementType.GRASS,
    TerrainKind.MISTY: ElementType.FAIRY,
    TerrainKind.PSYCHIC: ElementType.PSYCHIC,
}

_TERRAIN_SEEDS = {
    "electric-seed": (TerrainKind.ELECTRIC, StatKind.DEFENSE),
    "grassy-seed": (TerrainKind.GRASSY, StatKind.DEFENSE),
    "misty-seed": (TerrainKind.MISTY, StatKind.SP_DEF),
    "psychic-seed": (TerrainKind.PSYCHIC, StatKind.SP_DEF),
}

_EXTREME_SOURCES = {
    WeatherKind.STRONG_WINDS: Ability.DELTA_STREAM,
    WeatherKind.HARSH_SUN: Ability.DESOLATE_LAND,
    WeatherKind.HEAVY_RAIN: Ability.PRIMORDIAL_SEA,
}


# =============================================================================
# WEATHER
# =============================================================================
def set_weather(battle: BattleContext, kind: WeatherKind, mon: Optional[Combatant] = None) -> bool:
    """Start a weather. Normal weather lasts 5 turns (8 with its rock); extreme weather lasts until its source leaves.

    Returns False when nothing changed.
    """
    if kind == WeatherKind.NONE:
        raise ValueError("use expire_weather to clear the weather")
    weather = battle.weather
    if weather.kind == kind:
        return False
    rock, tag, castform, element = _WEATHER_TABLE[kind]
    turns: Optional[int] = None
    if rock is not None:
        if weather.kind in EXTREME_WEATHER:
            return False
        turns = 8 if mon is not None and mon.held.item == rock else 5
    battle.log.add(tag)

    for poke in battle.active_mons():
        if poke.ability() == Ability.FORECAST and poke.name != castform and poke.form(castform):
            poke.types = [element]
            battle.log.add("type_transformed", name=poke.name, type=element.pretty, ability="forecast")

    weather.kind = kind
    weather.timer.set_turns(turns)
    logger.debug("weather set to %r for %s turns", kind.value, turns)
    return True


def expire_weather(battle: BattleContext) -> None:
    battle.weather.kind = WeatherKind.NONE
    battle.weather.timer.set_turns(0)
    for poke in battle.active_mons():
        if poke.ability() != Ability.FORECAST or not poke.species.startswith("Castform") or poke.species == "Castform":
            continue
        if poke.form("Castform"):
            poke.types = [ElementType.NORMAL]


def weather_next_turn(battle: BattleContext) -> bool:
    """Count the weather down one turn. Returns True on the turn it ends."""
    if not battle.weather.timer.next_turn():
        return False
    expire_weather(battle)
    return True


def recheck_ability_weather(battle: BattleContext) -> bool:
    """Clear extreme weather whose ability source is no longer on the field. Returns True if it was cleared."""
    source = _EXTREME_SOURCES.get(battle.weather.kind)
    if source is None:
        return False
    if any(poke.ability() == source for poke in battle.active_mons()):
        return False
    expire_weather(battle)
    return True


# =============================================================================
# TERRAIN
# =============================================================================
def set_terrain(battle: BattleContext, kind: TerrainKind, mon: Combatant) -> bool:
    terrain = battle.terrain
    if terrain.kind == kind:
        battle.log.add("terrain_already", terrain=kind.value)
        return False
    turns = 8 if mon.held.item == "terrain-extender" else 5
    terrain.kind = kind
    terrain.timer.set_turns(turns)
    article = "an" if kind == TerrainKind.ELECTRIC else "a"
    battle.log.add("terrain_created", name=mon.name, article=article, terrain=kind.value)

    element = _TERRAIN_TYPES[kind]
    for poke in battle.active_mons():
        if poke.ability() == Ability.MIMICRY:
            poke.types = [element]
            battle.log.add("mimicry_transformed", name=poke.name, type=element.pretty)
        apply_terrain_seed(poke, battle)
    return True


def end_terrain(battle: BattleContext) -> None:
    battle.terrain.kind = TerrainKind.NONE
    battle.terrain.timer.set_turns(0)
    for poke in battle.active_mons():
        if poke.ability() == Ability.MIMICRY:
            poke.types = list(poke.starting_types)


def terrain_next_turn(battle: BattleContext) -> bool:
    if not battle.terrain.timer.next_turn():
        return False
    end_terrain(battle)
    return True


def apply_terrain_seed(mon: Combatant, battle: BattleContext) -> None:
    """Consume a held seed that matches the current terrain."""
    seed = _TERRAIN_SEEDS.get(mon.held.item or "")
    if seed is None:
        return
    terrain, stat = seed
    if battle.terrain.kind != terrain:
        return
    append_stat(mon, 1, mon, None, stat, battle, source=f"its {mon.held.item.replace('-', ' ')}")
    mon.use_item()
