"""
Switching caused by a move: roar-style phazing, red card and the user's own pivot moves.

Only one of the three can happen per move, checked in that order.
"""

from typing import Optional

from duel_engine.combatant_ops import remove, send_out, switch_poke, valid_swaps
from duel_engine.enums import Ability
from duel_engine.move_classifiers import is_damaging
from duel_engine.move_effects.registry import MoveUse, Stage, handles
from duel_engine.schema.battle_context import BatonPass, BattleContext
from duel_engine.schema.combatant import Combatant

PHAZING_EFFECTS = frozenset({29, 314})
PIVOT_EFFECTS = frozenset({128, 154, 229, 347})
BATON_PASS = 128


def _anchored_by(mon: Combatant, other: Combatant, use: MoveUse) -> Optional[str]:
    """Why mon cannot be forced out, or None when it can."""
    ability = mon.ability(other, use.move)
    if ability == Ability.SUCTION_CUPS:
        return "its suction cups"
    if ability == Ability.GUARD_DOG:
        return "its guard dog"
    if mon.ingrain:
        return "its roots"
    return None


def _drag_out(mon: Combatant, swaps: list[int], battle: BattleContext) -> None:
    side = battle.side_of(mon)
    remove(mon, battle)
    switch_poke(side, swaps[battle.rng.choice_index(len(swaps))], mid_turn=True)
    send_out(side.active, battle)
    # The replacement may faint to hazards on the way in
    if side.active is not None:
        side.active.has_moved = True


def _phaze(use: MoveUse) -> None:
    defender = use.defender
    swaps = valid_swaps(use.battle.side_of(defender), use.battle, check_trap=False)
    if not swaps:
        return
    anchor = _anchored_by(defender, use.attacker, use)
    if anchor is not None:
        use.log.add("kept_in_place", name=defender.name, anchor=anchor)
        return
    use.log.add("fled_in_fear", name=defender.name)
    _drag_out(defender, swaps, use.battle)


def _red_card(use: MoveUse) -> None:
    attacker, defender = use.attacker, use.defender
    swaps = valid_swaps(use.battle.side_of(attacker), use.battle, check_trap=False)
    if not swaps:
        return
    defender.use_item()
    anchor = _anchored_by(attacker, defender, use)
    if anchor is not None:
        use.log.add("kept_in_place", name=attacker.name, anchor=anchor, source=f"{defender.name}'s red card")
        return
    use.log.add("red_card", name=defender.name, other=attacker.name)
    _drag_out(attacker, swaps, use.battle)


def _pivot(use: MoveUse) -> None:
    attacker = use.attacker
    side = use.battle.side_of(attacker)
    if not valid_swaps(side, use.battle, check_trap=False):
        return
    use.log.add("went_back", name=attacker.name)
    if use.effect == BATON_PASS:
        side.baton_pass = BatonPass.capture(attacker)
    remove(attacker, use.battle)
    # The side picks a replacement before the turn goes on
    side.mid_turn_remove = True


def _red_card_applies(use: MoveUse) -> bool:
    defender = use.defender
    return defender.item(use.battle) == "red-card" and defender.hp > 0 and is_damaging(use.move)


@handles(Stage.SWAP, *PHAZING_EFFECTS, *PIVOT_EFFECTS)
def switching_move(use: MoveUse) -> None:
    # A held red card takes precedence over the user's own pivot
    if use.effect in PHAZING_EFFECTS:
        _phaze(use)
    elif _red_card_applies(use):
        _red_card(use)
    else:
        _pivot(use)


@handles(Stage.SWAP)
def red_card(use: MoveUse) -> None:
    if use.effect not in PHAZING_EFFECTS and use.effect not in PIVOT_EFFECTS and _red_card_applies(use):
        _red_card(use)
