"""
HP recovery after the damage step: recovery moves, stockpile, wish and leech seed.
"""

from duel_engine.combatant_ops import append_stat, heal, reset_status
from duel_engine.enums import Ability, NonVolatileStatus, StatKind, TerrainKind, WeatherKind
from duel_engine.enums.other import SUNNY
from duel_engine.move_effects.registry import MoveUse, Stage, handles
from duel_engine.stats import get_attack

# Stockpile count -> fraction of max HP restored by swallow
_SWALLOW_DIVISORS = {1: 4, 2: 2, 3: 1}


def _heal_user(use: MoveUse, amount: int, source: str = "") -> None:
    heal(use.attacker, amount, use.battle, source=source)


def _release_stockpile(use: MoveUse) -> None:
    attacker = use.attacker
    append_stat(attacker, -attacker.stockpile, attacker, use.move, StatKind.DEFENSE, use.battle)
    append_stat(attacker, -attacker.stockpile, attacker, use.move, StatKind.SP_DEF, use.battle)
    attacker.stockpile = 0


@handles(Stage.POST, 161)
def stockpile(use: MoveUse) -> None:
    use.attacker.stockpile += 1
    use.log.add("stores_energy", name=use.attacker.name)


@handles(Stage.POST, 162)
def spit_up(use: MoveUse) -> None:
    _release_stockpile(use)


@handles(Stage.POST, 163)
def swallow(use: MoveUse) -> None:
    divisor = _SWALLOW_DIVISORS.get(use.attacker.stockpile, 4)
    _heal_user(use, use.attacker.starting_hp // divisor, source="stockpiled energy")
    _release_stockpile(use)


@handles(Stage.POST, 33, 215)
def recover(use: MoveUse) -> None:
    _heal_user(use, use.attacker.starting_hp // 2)


@handles(Stage.POST, 434, 457)
def quarter_heal(use: MoveUse) -> None:
    _heal_user(use, use.attacker.starting_hp // 4)


@handles(Stage.POST, 310)
def heal_pulse(use: MoveUse) -> None:
    defender = use.defender
    if use.attacker.ability() == Ability.MEGA_LAUNCHER:
        heal(defender, defender.starting_hp * 3 // 4, use.battle)
    else:
        heal(defender, defender.starting_hp // 2, use.battle)


@handles(Stage.POST, 133)
def weather_heal(use: MoveUse) -> None:
    """Moonlight, morning sun and synthesis scale with the weather."""
    weather = use.battle.weather.kind
    starting_hp = use.attacker.starting_hp
    if weather in SUNNY:
        _heal_user(use, starting_hp * 2 // 3)
    elif weather == WeatherKind.STRONG_WINDS or weather == WeatherKind.NONE:
        _heal_user(use, starting_hp // 2)
    else:
        _heal_user(use, starting_hp // 4)


@handles(Stage.POST, 382)
def shore_up(use: MoveUse) -> None:
    if use.battle.weather.kind == WeatherKind.SANDSTORM:
        _heal_user(use, use.attacker.starting_hp * 2 // 3)
    else:
        _heal_user(use, use.attacker.starting_hp // 2)


@handles(Stage.POST, 387)
def floral_healing(use: MoveUse) -> None:
    if use.battle.terrain.kind == TerrainKind.GRASSY:
        _heal_user(use, use.attacker.starting_hp * 2 // 3)
    else:
        _heal_user(use, use.attacker.starting_hp // 2)


@handles(Stage.POST, 388)
def strength_sap(use: MoveUse) -> None:
    _heal_user(use, get_attack(use.defender, use.battle))


@handles(Stage.POST, 400)
def purify(use: MoveUse) -> None:
    defender = use.defender
    status = defender.status
    reset_status(defender)
    use.log.add("status_healed", name=defender.name, status=status.value)
    _heal_user(use, use.attacker.starting_hp // 2)


@handles(Stage.POST, 85)
def leech_seed(use: MoveUse) -> None:
    use.defender.leech_seed = True
    use.log.add("seeded", name=use.defender.name)


@handles(Stage.POST, 180)
def wish(use: MoveUse) -> None:
    use.battle.side_of(use.attacker).wish.set(use.attacker.starting_hp // 2)
    use.log.add("makes_wish", name=use.attacker.name)


@handles(Stage.POST, 194, 457, 472)
def refresh(use: MoveUse) -> None:
    reset_status(use.attacker)
    use.log.add("status_cleared", name=use.attacker.name)


@handles(Stage.POST, 386)
def sparkling_aria(use: MoveUse) -> None:
    defender = use.defender
    if defender.status == NonVolatileStatus.BURN:
        reset_status(defender)
        use.log.add("status_healed", name=defender.name, status=NonVolatileStatus.BURN.value)
