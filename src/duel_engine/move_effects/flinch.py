"""
Flinching after the damage step, once per landed hit.
"""

from typing import Optional

from duel_engine.combatant_ops import flinch
from duel_engine.enums import Ability
from duel_engine.move_classifiers import is_damaging
from duel_engine.move_effects.registry import MoveUse, Stage, handles

FLINCH_EFFECTS = frozenset({32, 76, 93, 147, 151, 159, 274, 275, 276, 425, 475, 501})

_FLINCH_ITEMS = {"kings-rock": "its kings rock", "razor-fang": "its razor fang"}


def _hit_source(use: MoveUse) -> Optional[str]:
    """What gives an ordinary damaging hit its 10% flinch chance, if anything."""
    attacker = use.attacker
    if attacker.ability() == Ability.STENCH:
        return "its stench"
    return _FLINCH_ITEMS.get(attacker.item(use.battle) or "")


@handles(Stage.FLINCH)
def flinch_on_hit(use: MoveUse) -> None:
    defender = use.defender
    # A target that already acted this turn cannot flinch
    if defender.has_moved:
        return
    for _ in range(use.num_hits):
        if defender.flinched:
            break
        if use.effect in FLINCH_EFFECTS:
            if use.roll():
                flinch(defender, use.battle, attacker=use.attacker, move=use.move)
        elif is_damaging(use.move):
            source = _hit_source(use)
            if source is not None and use.rng.randint(1, 100) <= 10:
                flinch(defender, use.battle, attacker=use.attacker, move=use.move, source=source)
