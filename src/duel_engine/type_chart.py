from typing import Optional

from duel_engine.data.type_chart import NEUTRAL, TYPE_CHART
from duel_engine.enums import Ability, ElementType, WeatherKind
from duel_engine.schema.battle_context import BattleContext
from duel_engine.schema.combatant import Combatant
from duel_engine.schema.move import BattleMove


class TypeChart:
    """
    Static type-effectiveness lookup.

    The chart is process-wide read-only data; every method is a pure function of its inputs.
    """

    @staticmethod
    def lookup(attacking_type: ElementType, defending_type: ElementType) -> int:
        """Damage factor in percent units: 0, 50, 100 or 200."""
        return TYPE_CHART.get(attacking_type, {}).get(defending_type, NEUTRAL)

    @staticmethod
    def multiplier(attacking_type: ElementType, defending_types: list[ElementType], inverse: bool = False) -> float:
        """Plain product over the defender's types, without any battle context."""
        result = 1.0
        for defending_type in defending_types:
            if attacking_type == ElementType.TYPELESS or defending_type == ElementType.TYPELESS:
                continue
            factor = TypeChart.lookup(attacking_type, defending_type) / 100
            if inverse:
                factor = _invert(factor)
            result *= factor
        return result


def _invert(factor: float) -> float:
    if factor < 1:
        return 2
    if factor > 1:
        return 0.5
    return factor


def effectiveness(
    defender: Combatant,
    attack_type: ElementType,
    battle: BattleContext,
    attacker: Optional[Combatant] = None,
    move: Optional[BattleMove] = None,
) -> float:
    """Effectiveness of attack_type against defender as a float multiplier (0, 0.25 .. 4)."""
    if attack_type == ElementType.TYPELESS:
        return 1
    result = 1.0
    for defending_type in defender.types:
        if defending_type == ElementType.TYPELESS:
            continue
        if move is not None:
            # Freeze-Dry
            if move.effect == 380 and defending_type == ElementType.WATER:
                result *= 2
                continue
            # Thousand Arrows ignores the rest of an airborne flying type's typing
            if move.effect == 373 and defending_type == ElementType.FLYING and not defender.grounded(battle, attacker, move):
                return 1
        if defender.roost and defending_type == ElementType.FLYING:
            continue
        if defender.foresight and attack_type in (ElementType.FIGHTING, ElementType.NORMAL) and defending_type == ElementType.GHOST:
            continue
        if defender.miracle_eye and attack_type == ElementType.PSYCHIC and defending_type == ElementType.DARK:
            continue
        if (
            attack_type in (ElementType.FIGHTING, ElementType.NORMAL)
            and defending_type == ElementType.GHOST
            and attacker is not None
            and attacker.ability() in (Ability.SCRAPPY, Ability.MINDS_EYE)
        ):
            continue
        if attack_type == ElementType.GROUND and defending_type == ElementType.FLYING and defender.grounded(battle, attacker, move):
            continue
        factor = TypeChart.lookup(attack_type, defending_type) / 100
        if factor == 1:
            continue
        if defending_type == ElementType.FLYING and factor > 1 and move is not None and battle.weather_now() == WeatherKind.STRONG_WINDS:
            factor = 1
        if battle.config.inverse_battle:
            factor = _invert(factor)
        result *= factor
    if attack_type == ElementType.FIRE and defender.tar_shot:
        result *= 2
    if result >= 1 and defender.hp == defender.starting_hp and defender.ability(attacker, move) == Ability.TERA_SHELL:
        result = 0.5
    return result
