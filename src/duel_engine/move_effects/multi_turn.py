"""
Multi-turn moves: locking the user in, charge turns, recharge turns and the before-turn hooks.

A locked move is re-selected automatically by the turn driver until its LockedMove timer runs
out; the handlers here decide on which turn of the lock the move actually hits.
"""

from duel_engine.combatant_ops import append_stat, reset_status
from duel_engine.enums import Ability, NonVolatileStatus, StatKind
from duel_engine.enums.other import RAINY, SUNNY
from duel_engine.move_effects.registry import MoveUse, Stage, handles
from duel_engine.schema.timers import LockedMove

# Moves that charge on their first turn and hit on the second
TWO_TURN_EFFECTS = frozenset({40, 76, 81, 146, 156, 256, 257, 264, 273, 332, 333, 366, 451})
SECOND_TURN_HITS = frozenset({40, 76, 146, 152, 156, 256, 257, 264, 273, 332, 333, 366, 451, 502})
SEMI_INVULNERABLE_FLAGS = {256: "dive", 257: "dig", 156: "fly", 264: "fly", 273: "shadow_force"}


# =============================================================================
# BEFORE THE TURN
# =============================================================================
@handles(Stage.BEFORE_TURN, 129)
def pursuit(use: MoveUse) -> None:
    """Pursuit strikes before the target can switch or pivot out."""
    from duel_engine.damage_calculator import target_is_leaving
    from duel_engine.move_pipeline import use_move

    if target_is_leaving(use.defender, use.battle):
        use_move(use.attacker, use.defender, use.battle, use.move)


@handles(Stage.BEFORE_TURN, 171)
def focus_punch(use: MoveUse) -> None:
    use.log.add("focusing", name=use.attacker.name)


@handles(Stage.BEFORE_TURN, 404)
def beak_blast(use: MoveUse) -> None:
    use.attacker.beak_blast = True


# =============================================================================
# LOCKING IN
# =============================================================================
def _lock(use: MoveUse, turns: int) -> None:
    use.attacker.locked_move = LockedMove(move=use.move, remaining=turns)


@handles(Stage.SETUP, 152)
def lock_unless_sunny(use: MoveUse) -> None:
    if use.attacker.locked_move is None and use.battle.weather_now() not in SUNNY:
        _lock(use, 2)


@handles(Stage.SETUP, 502)
def lock_unless_rainy(use: MoveUse) -> None:
    if use.attacker.locked_move is not None:
        return
    if use.battle.weather_now() not in RAINY:
        _lock(use, 2)
    else:
        # No charge turn, so the boost that normally comes with it happens now
        append_stat(use.attacker, 1, use.attacker, use.move, StatKind.SP_ATK, use.battle)


@handles(Stage.SETUP, *TWO_TURN_EFFECTS)
def lock_two_turns(use: MoveUse) -> None:
    if use.attacker.locked_move is None:
        _lock(use, 2)
        flag = SEMI_INVULNERABLE_FLAGS.get(use.effect)
        if flag is not None:
            setattr(use.attacker, flag, True)


@handles(Stage.SETUP, 27)
def bide(use: MoveUse) -> None:
    if use.attacker.locked_move is None:
        _lock(use, 3)
        use.attacker.bide = 0


@handles(Stage.SETUP, 160)
def uproar(use: MoveUse) -> None:
    attacker = use.attacker
    if attacker.locked_move is not None:
        return
    attacker.uproar.set_turns(3)
    for mon in (attacker, use.defender):
        if mon.status == NonVolatileStatus.SLEEP:
            reset_status(mon)
            use.log.add("woke_up", name=mon.name)
    _lock(use, use.rng.randint(2, 5))


@handles(Stage.SETUP, 118)
def rollout(use: MoveUse) -> None:
    if use.attacker.locked_move is None:
        _lock(use, 5)


@handles(Stage.SETUP, 28)
def thrash(use: MoveUse) -> None:
    if use.attacker.locked_move is None:
        _lock(use, use.rng.randint(2, 3))


# =============================================================================
# TURNS THAT DO NOT HIT
# =============================================================================
@handles(Stage.SETUP, 81)
def recharge(use: MoveUse) -> bool:
    locked = use.attacker.locked_move
    if locked is not None and locked.turn != 0:
        use.log.add("recharging")
        return True
    return False


@handles(Stage.SETUP, *SECOND_TURN_HITS)
def charge_turn(use: MoveUse) -> bool:
    attacker = use.attacker
    locked = attacker.locked_move
    if locked is None or locked.turn == 1:
        return False
    if use.effect == 146:
        append_stat(attacker, 1, attacker, use.move, StatKind.DEFENSE, use.battle)
    elif use.effect in (451, 502):
        append_stat(attacker, 1, attacker, use.move, StatKind.SP_ATK, use.battle)
    else:
        use.log.add("charging_up")
        if use.effect == 256 and attacker.ability() == Ability.GULP_MISSILE and attacker.species == "Cramorant":
            gulp_missile(use)
    return True


@handles(Stage.SETUP, 27)
def storing_energy(use: MoveUse) -> bool:
    locked = use.attacker.locked_move
    if locked is not None and locked.turn != 2:
        use.log.add("storing_energy", name=use.attacker.name)
        return True
    return False


def gulp_missile(use: MoveUse) -> None:
    """Cramorant picks up its prey: an arrokuda above half HP, a pikachu otherwise."""
    attacker = use.attacker
    if attacker.hp > attacker.starting_hp // 2:
        if attacker.form("Cramorant-gulping"):
            use.log.add("gulped_up", name=attacker.name, prey="an arrokuda")
    elif attacker.form("Cramorant-gorging"):
        use.log.add("gulped_up", name=attacker.name, prey="a pikachu")
