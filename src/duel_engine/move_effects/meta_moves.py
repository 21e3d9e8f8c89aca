"""
Moves that call, copy or replace other moves, and the few effects that must land before damage.

A called move goes back through the full pipeline with use_pp=False, so it narrates itself and
runs its own gates. Moves copied from another combatant are used as fresh copies so the owner's
PP and used flag are left alone.
"""

from duel_engine.combatant_ops import append_stat, heal
from duel_engine.damage_calculator import DamageCalculator
from duel_engine.enums import Ability
from duel_engine.enums.status import ALL_STATS
from duel_engine.hit_resolver import get_assist_move
from duel_engine.move_classifiers import selectable_by_metronome, selectable_by_sleep_talk
from duel_engine.move_effects.registry import MoveUse, Stage, handles
from duel_engine.schema.battle_context import MoveAction
from duel_engine.schema.move import BattleMove, present


def _call(use: MoveUse, move: BattleMove, **kwargs) -> None:
    from duel_engine.move_pipeline import use_move

    use_move(use.attacker, use.defender, use.battle, move, **kwargs)


def _fail(use: MoveUse) -> bool:
    use.log.add("but_it_failed")
    return True


@handles(Stage.PRE_DAMAGE, 84)
def metronome(use: MoveUse) -> bool:
    pool = [data for data in use.battle.config.metronome_moves if selectable_by_metronome(data)]
    if not pool:
        return _fail(use)
    data = pool[use.rng.choice_index(len(pool))]
    _call(use, BattleMove.from_data(data), use_pp=False)
    return True


@handles(Stage.PRE_DAMAGE, 187)
def brick_break(use: MoveUse) -> None:
    side = use.battle.side_of(use.defender)
    for screen in ("aurora_veil", "light_screen", "reflect"):
        timer = getattr(side, screen)
        if timer.active():
            timer.set_turns(0)
            use.log.add("screen_wore_off", name=use.defender.name, screen=screen.replace("_", " "))


@handles(Stage.PRE_DAMAGE, 98)
def sleep_talk(use: MoveUse) -> bool:
    eligible = [move for move in use.attacker.moves if selectable_by_sleep_talk(move)]
    if not eligible:
        return _fail(use)
    _call(use, eligible[use.rng.choice_index(len(eligible))], use_pp=False, override_sleep=True)
    return True


@handles(Stage.PRE_DAMAGE, 10, 243)
def mirror_move(use: MoveUse) -> bool:
    last_move = use.defender.last_move
    if last_move is None:
        return _fail(use)
    _call(use, last_move.fresh_copy(), use_pp=False)
    return True


@handles(Stage.PRE_DAMAGE, 242)
def me_first(use: MoveUse) -> bool:
    action = use.battle.side_of(use.defender).selected_action
    if not isinstance(action, MoveAction):
        return _fail(use)
    _call(use, action.move.fresh_copy(), use_pp=False)
    return True


@handles(Stage.PRE_DAMAGE, 181)
def assist(use: MoveUse) -> bool:
    move = get_assist_move(use.attacker, use.battle)
    if move is None:
        return _fail(use)
    _call(use, move.fresh_copy(), use_pp=False)
    return True


@handles(Stage.PRE_DAMAGE, 410)
def spectral_thief(use: MoveUse) -> None:
    """Steal every positive stat stage of the target before hitting it."""
    defender = use.defender
    for stat in ALL_STATS:
        stage = defender.get_stage(stat)
        if stage > 0:
            defender.set_stage(stat, 0)
            use.log.add("stage_reset", name=defender.name, stat=stat.value)
            append_stat(use.attacker, stage, use.attacker, use.move, stat, use.battle)


@handles(Stage.PRE_DAMAGE, 149)
def future_sight(use: MoveUse) -> bool:
    side = use.battle.side_of(use.defender)
    side.future_sight.set_turns(3)
    side.future_sight_attacker = use.attacker.uid
    side.future_sight_move = use.move
    use.log.add("foresaw_attack", name=use.attacker.name)
    return True


@handles(Stage.PRE_DAMAGE, 123)
def present_gift(use: MoveUse) -> bool:
    defender = use.defender
    roll = use.rng.randint(1, 4)
    if roll == 1:
        if defender.hp == defender.starting_hp:
            use.log.add("no_effect")
        else:
            heal(defender, defender.starting_hp // 4, use.battle, source=f"{use.attacker.name}'s present")
        return True
    power = {2: 40, 3: 80, 4: 120}[roll]
    DamageCalculator(use.battle).attack(present(power), use.attacker, defender)
    return True


@handles(Stage.PRE_DAMAGE, 315)
def incinerate(use: MoveUse) -> None:
    defender = use.defender
    if not defender.held.is_berry_name():
        return
    if defender.ability(use.attacker, use.move) == Ability.STICKY_HOLD:
        use.log.add("sticky_hold", name=defender.name)
    else:
        defender.remove_item()
        use.log.add("berry_incinerated", name=defender.name)


@handles(Stage.PRE_DAMAGE, 446)
def poltergeist(use: MoveUse) -> None:
    use.log.add("poltergeist", name=use.defender.name, item=(use.defender.held.item or "").replace("-", " "))
