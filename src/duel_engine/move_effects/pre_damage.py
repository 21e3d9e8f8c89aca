"""
Pre-damage processing: self-sacrifice, protean, magic bounce, the hit gates and absorption.

Absorbing abilities swallow the move whole, so each of them ends the move right after its
own narration. Magic coat and magic bounce send the move back through the pipeline once.
"""

from typing import Optional

from duel_engine.combatant_ops import append_stat, damage, faint, heal
from duel_engine.enums import Ability, ElementType, StatKind
from duel_engine.hit_resolver import resolve_gates
from duel_engine.move_classifiers import is_affected_by_magic_coat, targets_opponent
from duel_engine.move_effects.registry import MoveUse, Stage, handles

# (move type, ability) -> stat raised instead of taking the hit
_STAT_ABSORBS: dict[tuple[ElementType, Ability], tuple[StatKind, int]] = {
    (ElementType.ELECTRIC, Ability.LIGHTNING_ROD): (StatKind.SP_ATK, 1),
    (ElementType.ELECTRIC, Ability.MOTOR_DRIVE): (StatKind.SPEED, 1),
    (ElementType.WATER, Ability.STORM_DRAIN): (StatKind.SP_ATK, 1),
    (ElementType.GRASS, Ability.SAP_SIPPER): (StatKind.ATTACK, 1),
    (ElementType.FIRE, Ability.WELL_BAKED_BODY): (StatKind.DEFENSE, 2),
}

_HEAL_ABSORBS = {
    (ElementType.ELECTRIC, Ability.VOLT_ABSORB),
    (ElementType.WATER, Ability.WATER_ABSORB),
    (ElementType.WATER, Ability.DRY_SKIN),
    (ElementType.GROUND, Ability.EARTH_EATER),
}

# Single-use items that trade the hit of one type for a stat boost: item -> (type, stat)
_TYPE_ITEMS = {
    "absorb-bulb": (ElementType.WATER, StatKind.SP_ATK),
    "cell-battery": (ElementType.ELECTRIC, StatKind.ATTACK),
    "luminous-moss": (ElementType.WATER, StatKind.SP_DEF),
    "snowball": (ElementType.ICE, StatKind.ATTACK),
}


@handles(Stage.PRE_DAMAGE, 8, 444)
def user_faints(use: MoveUse) -> None:
    faint(use.attacker, use.battle)


@handles(Stage.PRE_DAMAGE, 420)
def mind_blown(use: MoveUse) -> None:
    attacker = use.attacker
    damage(attacker, attacker.starting_hp // 2, use.battle, source="its head exploding (tragic)")


@handles(Stage.PRE_DAMAGE)
def change_type_on_use(use: MoveUse) -> None:
    """Protean and libero turn the user into the type of the move it is about to use."""
    if use.move_type == ElementType.TYPELESS:
        return
    attacker = use.attacker
    ability = attacker.ability()
    if ability in (Ability.PROTEAN, Ability.LIBERO):
        attacker.types = [use.move_type]
        use.log.add("type_transformed", name=attacker.name, type=use.move_type.pretty, ability=ability.pretty)


@handles(Stage.PRE_DAMAGE)
def reflect_status_move(use: MoveUse) -> bool:
    from duel_engine.move_pipeline import use_move

    defender = use.defender
    if use.bounced or not is_affected_by_magic_coat(use.move):
        return False
    if defender.ability(use.attacker, use.move) != Ability.MAGIC_BOUNCE and not defender.magic_coat:
        return False
    use.log.add("reflected", name=defender.name)
    has_moved = defender.has_moved
    use_move(defender, use.attacker, use.battle, use.move, use_pp=False, bounced=True)
    defender.has_moved = has_moved
    return True


@handles(Stage.PRE_DAMAGE)
def hit_gates(use: MoveUse) -> bool:
    return not resolve_gates(use.move, use.attacker, use.defender, use.battle, bounced=use.bounced)


def _absorbing_ability(use: MoveUse) -> Optional[Ability]:
    if not targets_opponent(use.move) or use.effect == 459:
        return None
    ability = use.defender.ability(use.attacker, use.move)
    key = (use.move_type, ability)
    if key in _HEAL_ABSORBS or key in _STAT_ABSORBS:
        return ability
    if use.move_type == ElementType.FIRE and ability == Ability.FLASH_FIRE:
        return ability
    return None


@handles(Stage.PRE_DAMAGE)
def absorb_move(use: MoveUse) -> bool:
    ability = _absorbing_ability(use)
    if ability is None:
        return False
    defender = use.defender
    if ability == Ability.FLASH_FIRE:
        defender.flash_fire = True
        use.log.add("flash_fire", name=defender.name)
        return True

    use.log.add("absorbed_move", name=defender.name, ability=ability.pretty)
    key = (use.move_type, ability)
    if key in _HEAL_ABSORBS:
        heal(defender, defender.starting_hp // 4, use.battle, source="absorbing the move")
    else:
        stat, delta = _STAT_ABSORBS[key]
        append_stat(defender, delta, defender, use.move, stat, use.battle)
    return True


@handles(Stage.PRE_DAMAGE)
def type_item_boost(use: MoveUse) -> None:
    defender = use.defender
    if defender.substitute > 0:
        return
    item = defender.item(use.battle)
    if item not in _TYPE_ITEMS:
        return
    element, stat = _TYPE_ITEMS[item]
    if use.move_type != element:
        return
    append_stat(defender, 1, defender, use.move, stat, use.battle, source=f"its {item.replace('-', ' ')}")
    defender.use_item()
