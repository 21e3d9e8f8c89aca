"""
Effects on the field and on whole sides: weather, terrain, hazards, screens and rooms.
"""

from duel_engine.combatant_ops import append_stat, reset_status
from duel_engine.enums import Ability, StatKind, TerrainKind, WeatherKind
from duel_engine.field_ops import end_terrain, set_terrain, set_weather
from duel_engine.move_effects.registry import MoveUse, Stage, handles
from duel_engine.schema.battle_context import Side

_WEATHER_MOVES = {
    116: WeatherKind.SANDSTORM,
    137: WeatherKind.RAIN,
    138: WeatherKind.SUN,
    165: WeatherKind.HAIL,
}

_TERRAIN_MOVES = {
    352: TerrainKind.GRASSY,
    353: TerrainKind.MISTY,
    369: TerrainKind.ELECTRIC,
    395: TerrainKind.PSYCHIC,
}

# effect -> (Side timer, narration name); light clay stretches all three to 8 turns
_SCREENS = {
    407: ("aurora_veil", "aurora veil"),
    36: ("light_screen", "light screen"),
    421: ("light_screen", "light screen"),
    66: ("reflect", "reflect"),
    422: ("reflect", "reflect"),
}

# effect -> (Battle timer, tag when it starts, tag when it is toggled off)
_ROOMS = {
    260: ("trick_room", "trick_room_started", "trick_room_ended"),
    287: ("magic_room", "magic_room_started", "magic_room_ended"),
    282: ("wonder_room", "wonder_room_started", "wonder_room_ended"),
}

# Side conditions that court change moves across the field
_COURT_FIELDS = (
    "spikes", "toxic_spikes", "stealth_rock", "sticky_web", "aurora_veil", "light_screen",
    "reflect", "mist", "safeguard", "tailwind",
)


def clear_hazards(side: Side) -> None:
    side.spikes = 0
    side.toxic_spikes = 0
    side.stealth_rock = False
    side.sticky_web = False


# =============================================================================
# WEATHER AND TERRAIN
# =============================================================================
@handles(Stage.SPECIAL, *_WEATHER_MOVES)
def start_weather(use: MoveUse) -> None:
    set_weather(use.battle, _WEATHER_MOVES[use.effect], use.attacker)


@handles(Stage.SPECIAL, *_TERRAIN_MOVES)
def start_terrain(use: MoveUse) -> None:
    set_terrain(use.battle, _TERRAIN_MOVES[use.effect], use.attacker)


@handles(Stage.SPECIAL, 418, 448)
def clear_terrain(use: MoveUse) -> None:
    # Ice spinner only clears a terrain that is actually up
    if use.effect == 448 and use.battle.terrain.kind == TerrainKind.NONE:
        return
    end_terrain(use.battle)
    use.log.add("terrain_cleared")


# =============================================================================
# HAZARDS
# =============================================================================
@handles(Stage.SPECIAL, 113)
def spikes(use: MoveUse) -> None:
    side = use.battle.side_of(use.defender)
    side.spikes = min(3, side.spikes + 1)
    use.log.add("spikes_scattered", side=side.name)


@handles(Stage.SPECIAL, 250)
def toxic_spikes(use: MoveUse) -> None:
    side = use.battle.side_of(use.defender)
    side.toxic_spikes = min(2, side.toxic_spikes + 1)
    use.log.add("toxic_spikes_scattered", side=side.name)


@handles(Stage.SPECIAL, 267)
def stealth_rock(use: MoveUse) -> None:
    side = use.battle.side_of(use.defender)
    side.stealth_rock = True
    use.log.add("stealth_rock", side=side.name)


@handles(Stage.SPECIAL, 341)
def sticky_web(use: MoveUse) -> None:
    side = use.battle.side_of(use.defender)
    side.sticky_web = True
    use.log.add("sticky_web", side=side.name)


@handles(Stage.SPECIAL, 259)
def defog(use: MoveUse) -> None:
    battle = use.battle
    target_side = battle.side_of(use.defender)
    clear_hazards(target_side)
    for screen in ("aurora_veil", "light_screen", "reflect", "mist", "safeguard"):
        getattr(target_side, screen).set_turns(0)
    clear_hazards(battle.side_of(use.attacker))
    end_terrain(battle)
    use.log.add("blew_away_fog", name=use.attacker.name)


@handles(Stage.SPECIAL, 130, 486)
def rapid_spin(use: MoveUse) -> None:
    attacker = use.attacker
    attacker.bind.set_turns(0)
    attacker.trapping = False
    attacker.leech_seed = False
    clear_hazards(use.battle.side_of(attacker))
    use.log.add("was_released", name=attacker.name)


@handles(Stage.SPECIAL, 487)
def tidy_up(use: MoveUse) -> None:
    for mon in (use.defender, use.attacker):
        clear_hazards(use.battle.side_of(mon))
        mon.substitute = 0
    use.log.add("tidied_up", name=use.attacker.name)


@handles(Stage.SPECIAL, 431)
def court_change(use: MoveUse) -> None:
    ours = use.battle.side_of(use.attacker)
    theirs = use.battle.side_of(use.defender)
    for field in _COURT_FIELDS:
        mine, other = getattr(ours, field), getattr(theirs, field)
        setattr(ours, field, other)
        setattr(theirs, field, mine)
    use.log.add("court_changed")


# =============================================================================
# SCREENS AND SIDE CONDITIONS
# =============================================================================
@handles(Stage.SPECIAL, *_SCREENS)
def screen(use: MoveUse) -> None:
    field, pretty = _SCREENS[use.effect]
    attacker = use.attacker
    turns = 8 if attacker.item(use.battle) == "light-clay" else 5
    getattr(use.battle.side_of(attacker), field).set_turns(turns)
    use.log.add("screen_up", name=attacker.name, screen=pretty)


@handles(Stage.SPECIAL, 47)
def mist(use: MoveUse) -> None:
    use.battle.side_of(use.attacker).mist.set_turns(5)
    use.log.add("mist", name=use.attacker.name)


@handles(Stage.SPECIAL, 125)
def safeguard(use: MoveUse) -> None:
    use.battle.side_of(use.attacker).safeguard.set_turns(5)
    use.log.add("safeguard", name=use.attacker.name)


@handles(Stage.SPECIAL, 226)
def tailwind(use: MoveUse) -> None:
    attacker = use.attacker
    side = use.battle.side_of(attacker)
    side.tailwind.set_turns(4)
    use.log.add("tailwind", side=side.name)
    if attacker.ability() == Ability.WIND_RIDER:
        append_stat(attacker, 1, attacker, None, StatKind.ATTACK, use.battle, source="its wind rider")


@handles(Stage.SPECIAL, 202)
def mud_sport(use: MoveUse) -> None:
    use.battle.side_of(use.attacker).mud_sport.set_turns(6)
    use.log.add("mud_sport")


@handles(Stage.SPECIAL, 211)
def water_sport(use: MoveUse) -> None:
    use.battle.side_of(use.attacker).water_sport.set_turns(6)
    use.log.add("water_sport")


@handles(Stage.SPECIAL, 221)
def healing_wish(use: MoveUse) -> None:
    use.battle.side_of(use.attacker).healing_wish = True
    use.log.add("replacement_restored", name=use.attacker.name)


@handles(Stage.SPECIAL, 271)
def lunar_dance(use: MoveUse) -> None:
    use.battle.side_of(use.attacker).lunar_dance = True
    use.log.add("replacement_restored", name=use.attacker.name)


@handles(Stage.SPECIAL, 103)
def heal_bell(use: MoveUse) -> None:
    side = use.battle.side_of(use.attacker)
    for mon in side.party:
        reset_status(mon)
    use.log.add("bell_chimed", side=side.name)


# =============================================================================
# WHOLE-FIELD CONDITIONS
# =============================================================================
@handles(Stage.SPECIAL, *_ROOMS)
def room(use: MoveUse) -> None:
    """Rooms toggle: using one while it is up ends it early."""
    field, started, ended = _ROOMS[use.effect]
    timer = getattr(use.battle, field)
    if timer.active():
        timer.set_turns(0)
        use.log.add(ended)
    else:
        timer.set_turns(5)
        use.log.add(started, name=use.attacker.name)


@handles(Stage.SPECIAL, 216)
def gravity(use: MoveUse) -> None:
    defender = use.defender
    use.battle.gravity.set_turns(5)
    use.log.add("gravity")
    defender.telekinesis.set_turns(0)
    if defender.fly:
        defender.fly = False
        defender.locked_move = None
        use.log.add("fell_from_sky", name=defender.name)


@handles(Stage.SPECIAL, 455)
def plasma_fists(use: MoveUse) -> None:
    if not use.battle.plasma_fists:
        use.battle.plasma_fists = True
        use.log.add("plasma_fists", name=use.attacker.name)
