"""
Life orb recoil, the last thing that happens after a move.
"""

from duel_engine.combatant_ops import damage
from duel_engine.enums import Ability, DamageClass
from duel_engine.move_effects.registry import MoveUse, Stage, handles

FUTURE_SIGHT = 149


@handles(Stage.LIFE_ORB)
def life_orb_recoil(use: MoveUse) -> None:
    attacker, move = use.attacker, use.move
    if attacker.item(use.battle) != "life-orb" or move.damage_class == DamageClass.STATUS:
        return
    if use.effect == FUTURE_SIGHT or not use.battle.side_of(use.defender).has_alive_pokemon():
        return
    # Sheer force drops the recoil along with the secondary effects it removes
    if attacker.ability() == Ability.SHEER_FORCE and move.effect_chance is not None:
        return
    damage(attacker, attacker.starting_hp // 10, use.battle, source="its life orb")
