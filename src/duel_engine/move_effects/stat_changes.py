"""
Stat stage changes applied after the damage step.

Most moves only move fixed stages up or down, so they are described by STAT_TABLE rows and applied
in table order; the handful with conditions or side costs get their own handlers below.
"""

from typing import NamedTuple, Optional

from duel_engine.combatant_ops import append_stat, damage
from duel_engine.enums import StatKind
from duel_engine.enums.other import SUNNY
from duel_engine.enums.status import ALL_STATS, CORE_STATS
from duel_engine.move_effects.registry import MoveUse, Stage, handles
from duel_engine.stats import raw_attack, raw_defense, raw_sp_atk, raw_sp_def

ATK = StatKind.ATTACK
DEF = StatKind.DEFENSE
SPA = StatKind.SP_ATK
SPD = StatKind.SP_DEF
SPE = StatKind.SPEED
ACC = StatKind.ACCURACY
EVA = StatKind.EVASION


class StatRow(NamedTuple):
    effects: frozenset[int]
    on_user: bool  # False - the change lands on the target
    stat: StatKind
    delta: int
    rolled: bool = False  # gated by the resolved effect chance
    fixed_chance: Optional[int] = None  # gated by a hard-coded percent instead


def _row(effects, on_user, stat, delta, rolled=False, fixed_chance=None) -> StatRow:
    return StatRow(frozenset(effects), on_user, stat, delta, rolled, fixed_chance)


USER, TARGET = True, False

# Rows run top to bottom, so a move touching several stats narrates them in this order
STAT_TABLE = (
    # +1
    _row({11, 209, 213, 278, 313, 323, 328, 392, 414, 427, 468, 472, 487}, USER, ATK, 1),
    _row({12, 157, 161, 207, 209, 323, 367, 414, 427, 467, 468, 472}, USER, DEF, 1),
    _row({14, 212, 291, 328, 392, 414, 427, 472}, USER, SPA, 1),
    _row({161, 175, 207, 212, 291, 367, 414, 427, 472}, USER, SPD, 1),
    _row({130, 213, 291, 296, 414, 427, 442, 468, 469, 487}, USER, SPE, 1),
    _row({17, 467}, USER, EVA, 1),
    _row({278, 323}, USER, ACC, 1),
    _row({139}, USER, DEF, 1, rolled=True),
    _row({140, 375}, USER, ATK, 1, rolled=True),
    _row({277}, USER, SPA, 1, rolled=True),
    _row({433}, USER, SPE, 1, rolled=True),
    _row({167}, TARGET, SPA, 1),
    # +2
    _row({51, 309}, USER, ATK, 2),
    _row({52, 453}, USER, DEF, 2),
    _row({53, 285, 309, 313, 366}, USER, SPE, 2),
    _row({54, 309, 366}, USER, SPA, 2),
    _row({55, 366}, USER, SPD, 2),
    _row({109}, USER, EVA, 2),
    _row({119, 432, 483}, TARGET, ATK, 2),
    _row({432}, TARGET, SPA, 2),
    _row({359}, USER, DEF, 2, rolled=True),
    # -1
    _row({19, 206, 344, 347, 357, 365, 388, 412}, TARGET, ATK, -1),
    _row({20, 206}, TARGET, DEF, -1),
    _row({344, 347, 358, 412}, TARGET, SPA, -1),
    _row({428}, TARGET, SPD, -1),
    _row({331, 390}, TARGET, SPE, -1),
    _row({24}, TARGET, ACC, -1),
    _row({25, 259}, TARGET, EVA, -1),
    _row({69, 396}, TARGET, ATK, -1, rolled=True),
    _row({70, 397, 435}, TARGET, DEF, -1, rolled=True),
    # The listed chance belongs to the flinch; the defense drop is fixed at half
    _row({475}, TARGET, DEF, -1, fixed_chance=50),
    _row({21, 71, 357, 477}, TARGET, SPE, -1, rolled=True),
    _row({72}, TARGET, SPA, -1, rolled=True),
    _row({73}, TARGET, SPD, -1, rolled=True),
    _row({74}, TARGET, ACC, -1, rolled=True),
    _row({183}, USER, ATK, -1),
    _row({183, 230, 309, 335, 405, 438, 442}, USER, DEF, -1),
    _row({480}, USER, SPA, -1),
    _row({230, 309, 335}, USER, SPD, -1),
    _row({219, 335}, USER, SPE, -1),
    # -2
    _row({59, 169}, TARGET, ATK, -2),
    _row({60, 483}, TARGET, DEF, -2),
    _row({61}, TARGET, SPE, -2),
    _row({62, 169, 266}, TARGET, SPA, -2),
    _row({63}, TARGET, SPD, -2),
    _row({272, 297}, TARGET, SPD, -2, rolled=True),
    _row({205}, USER, SPA, -2),
    _row({479}, USER, SPE, -2),
)

TABLE_EFFECTS = frozenset().union(*(row.effects for row in STAT_TABLE))


def _boost(use: MoveUse, stat: StatKind, delta: int, on_user: bool = True) -> None:
    mon = use.attacker if on_user else use.defender
    append_stat(mon, delta, use.attacker, use.move, stat, use.battle)


@handles(Stage.STAT, *TABLE_EFFECTS)
def table_changes(use: MoveUse) -> None:
    for row in STAT_TABLE:
        if use.effect not in row.effects:
            continue
        if row.rolled and not use.roll():
            continue
        if row.fixed_chance is not None and use.rng.randint(1, 100) > row.fixed_chance:
            continue
        _boost(use, row.stat, row.delta, row.on_user)


# =============================================================================
# SPECIAL CASES
# =============================================================================
def _clear_stages(mon) -> None:
    for stat in ALL_STATS:
        mon.set_stage(stat, 0)


@handles(Stage.STAT, 26)
def haze(use: MoveUse) -> None:
    _clear_stages(use.attacker)
    _clear_stages(use.defender)
    use.log.add("all_stages_reset")


@handles(Stage.STAT, 305)
def clear_smog(use: MoveUse) -> None:
    _clear_stages(use.defender)
    use.log.add("stages_reset", name=use.defender.name)


@handles(Stage.STAT, 141)
def omniboost(use: MoveUse) -> None:
    """Ancient power and friends: a rolled +1 to all five core stats."""
    if use.roll():
        for stat in CORE_STATS:
            _boost(use, stat, 1)


@handles(Stage.STAT, 143)
def belly_drum(use: MoveUse) -> None:
    damage(use.attacker, use.attacker.starting_hp // 2, use.battle)
    _boost(use, ATK, 12)


@handles(Stage.STAT, 485)
def fillet_away(use: MoveUse) -> None:
    damage(use.attacker, use.attacker.starting_hp // 2, use.battle)
    for stat in (ATK, SPA, SPE):
        _boost(use, stat, 2)


@handles(Stage.STAT, 317)
def growth(use: MoveUse) -> None:
    amount = 2 if use.battle.weather.kind in SUNNY else 1
    _boost(use, ATK, amount)
    _boost(use, SPA, amount)


@handles(Stage.STAT, 364)
def venom_drench(use: MoveUse) -> None:
    if use.defender.is_poisoned():
        for stat in (ATK, SPA, SPE):
            _boost(use, stat, -1, on_user=False)


@handles(Stage.STAT, 329)
def cotton_guard(use: MoveUse) -> None:
    _boost(use, DEF, 3)


@handles(Stage.STAT, 322)
def tail_glow(use: MoveUse) -> None:
    _boost(use, SPA, 3)


@handles(Stage.STAT, 227)
def acupressure(use: MoveUse) -> None:
    attacker = use.attacker
    stats = [stat for stat in (ATK, DEF, SPA, SPD, SPE, EVA, ACC) if attacker.get_stage(stat) < 6]
    if not stats:
        use.log.add("no_stat_can_go_higher", name=attacker.name)
        return
    stat = stats[use.rng.choice_index(len(stats))]
    append_stat(attacker, 2, attacker, use.move, stat, use.battle, check_looping=False)


@handles(Stage.STAT, 473)
def stat_split_boost(use: MoveUse) -> None:
    """Raise whichever pair of raw stats, offensive or defensive, is already stronger."""
    attacker = use.attacker
    offense = raw_attack(attacker) + raw_sp_atk(attacker)
    defense = raw_defense(attacker) + raw_sp_def(attacker)
    if offense > defense:
        _boost(use, ATK, 1)
        _boost(use, SPA, 1)
    else:
        _boost(use, DEF, 1)
        _boost(use, SPD, 1)
