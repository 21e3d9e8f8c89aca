"""
Using a move: the ordered pipeline every move goes through.

use_move() runs, in order:
1. Bookkeeping for the use (last move, semi-invulnerable flags)
2. Status gates: freeze, paralysis, infatuation, flinch, sleep, confusion, truant
3. Announcement, PP, choice lock, stance change, powder and snatch
4. Executability check
5. SETUP and PRE_DAMAGE handlers (either may stop the move)
6. The damage step
7. POST, STAT, FLINCH, SPECIAL, SWAP and LIFE_ORB handlers
8. Dancer copying the move

Nested uses (snatch, magic bounce, dancer, the metronome family) re-enter use_move with
use_pp=False and are capped by EngineConfig.max_use_depth.
"""

import logging

from duel_engine.combatant_ops import damage, reset_status
from duel_engine.damage_calculator import DamageCalculator
from duel_engine.enums import Ability, DamageClass, ElementType, NonVolatileStatus, WeatherKind
from duel_engine.errors import RecursionLimitError
from duel_engine.hit_resolver import check_executable
from duel_engine.move_classifiers import is_dance, selectable_by_snatch, targets_opponent
from duel_engine.move_effects.registry import MoveUse, Stage, dispatch, validate_move
from duel_engine.schema.battle_context import BattleContext
from duel_engine.schema.combatant import Combatant
from duel_engine.schema.move import BattleMove, confusion

logger = logging.getLogger(__name__)

# Moves that thaw their frozen user before anything else happens
THAWING_EFFECTS = frozenset({5, 126, 168, 254, 336, 398, 458, 500})

# Effects that lose their lock when the user is stopped before moving
_LOCK_CLEARED_WHEN_STOPPED = frozenset({28})
_LOCK_CLEARED_ON_FAIL = frozenset({28, 118})

# Status moves that pressure still charges extra PP for
_PRESSURE_STATUS_EFFECTS = frozenset({113, 193, 196, 250, 267})

_CHOICE_ITEMS = ("choice-scarf", "choice-band", "choice-specs")

_POST_DAMAGE_STAGES = (Stage.POST, Stage.STAT, Stage.FLINCH, Stage.SPECIAL, Stage.SWAP, Stage.LIFE_ORB)


def use_move(
    attacker: Combatant,
    defender: Combatant,
    battle: BattleContext,
    move: BattleMove,
    use_pp: bool = True,
    override_sleep: bool = False,
    bounced: bool = False,
) -> None:
    """
    Use a move from attacker on defender and narrate everything that happens into battle.log.

    Args:
        attacker: User of the move
        defender: Target of the move
        battle: Battle the move is used in
        move: Move being used; its PP is spent when use_pp is set
        use_pp: False for moves used on someone else's behalf (snatch, bounce, dancer, called moves)
        override_sleep: Let a sleeping user act (sleep talk)
        bounced: The move was reflected back by magic coat or magic bounce

    Raises:
        RecursionLimitError: nested uses went deeper than EngineConfig.max_use_depth
        UnregisteredEffectError: the move carries an effect code the engine cannot execute
    """
    validate_move(move)
    if battle.use_depth >= battle.config.max_use_depth:
        raise RecursionLimitError(f"{move.name} nested more than {battle.config.max_use_depth} move uses deep")

    battle.use_depth += 1
    try:
        logger.debug("%s uses %s on %s (use_pp=%s, bounced=%s)", attacker.name, move.name, defender.name, use_pp, bounced)
        _use(attacker, defender, battle, move, use_pp, override_sleep, bounced)
    finally:
        battle.use_depth -= 1


def run_before_turn(attacker: Combatant, defender: Combatant, battle: BattleContext, move: BattleMove) -> None:
    """Give the move's before-turn handlers (pursuit, focus punch, beak blast) their chance to act."""
    calc = DamageCalculator(battle)
    use = MoveUse(
        move=move,
        attacker=attacker,
        defender=defender,
        battle=battle,
        move_type=calc.get_type(move, attacker, defender),
        effect_chance=calc.get_effect_chance(move, attacker, defender),
    )
    dispatch(Stage.BEFORE_TURN, use)


# =============================================================================
# PIPELINE
# =============================================================================
def _use(
    attacker: Combatant,
    defender: Combatant,
    battle: BattleContext,
    move: BattleMove,
    use_pp: bool,
    override_sleep: bool,
    bounced: bool,
) -> None:
    log = battle.log

    # Already acted this turn, e.g. pursuit went first or the user was dragged in mid-turn
    if attacker.has_moved and use_pp:
        return

    move.used = True
    if use_pp:
        attacker.has_moved = True
        attacker.last_move = move
        attacker.beak_blast = False
        attacker.destiny_bond = False
        attacker.dive = False
        attacker.dig = False
        attacker.fly = False
        attacker.shadow_force = False

    calc = DamageCalculator(battle)
    use = MoveUse(
        move=move,
        attacker=attacker,
        defender=defender,
        battle=battle,
        move_type=calc.get_type(move, attacker, defender),
        effect_chance=calc.get_effect_chance(move, attacker, defender),
        use_pp=use_pp,
        bounced=bounced,
    )

    if not _passes_status_gates(use, override_sleep):
        if move.effect in _LOCK_CLEARED_WHEN_STOPPED:
            attacker.locked_move = None
        return

    if not bounced:
        log.add("used_move", name=attacker.name, move=move.pretty_name)
        attacker.metronome.use(move.name)

    _spend_pp(use)
    _choice_lock(use)
    _stance_change(use)

    if attacker.powdered and use.move_type == ElementType.FIRE and battle.weather.kind != WeatherKind.HEAVY_RAIN:
        damage(attacker, attacker.starting_hp // 4, battle, source="its powder exploding")
        return

    if defender.snatching and selectable_by_snatch(move):
        log.add("snatched_move", name=defender.name)
        use_move(defender, attacker, battle, move, use_pp=False)
        return

    if not check_executable(move, attacker, defender, battle):
        log.add("but_it_failed")
        if move.effect in _LOCK_CLEARED_ON_FAIL:
            attacker.locked_move = None
        attacker.last_move_failed = True
        logger.debug("%s failed its executability check", move.name)
        return

    if dispatch(Stage.SETUP, use) or dispatch(Stage.PRE_DAMAGE, use):
        return

    if not attacker.last_move_failed:
        use.num_hits = calc.calculate_damage(move, attacker, defender)
    # Fusion flare and fusion bolt look at the effect that came right before them
    battle.last_move_effect = move.effect

    for stage in _POST_DAMAGE_STAGES:
        dispatch(stage, use)

    if defender.ability(attacker, move) == Ability.DANCER and is_dance(move) and use_pp:
        has_moved = defender.has_moved
        use_move(defender, attacker, battle, move, use_pp=False)
        defender.has_moved = has_moved


def _passes_status_gates(use: MoveUse, override_sleep: bool) -> bool:
    """
    Check whether the user can act at all this turn.

    Returns:
        False when a status stopped the user. The reason has already been narrated.
    """
    attacker, defender, battle = use.attacker, use.defender, use.battle
    log, rng = use.log, use.rng

    if use.effect in THAWING_EFFECTS and attacker.status == NonVolatileStatus.FREEZE:
        reset_status(attacker)
        log.add("thawed", name=attacker.name)

    if attacker.status == NonVolatileStatus.FREEZE:
        if use.use_pp and rng.randint(0, 4) == 0:
            reset_status(attacker)
            log.add("no_longer_frozen", name=attacker.name)
        else:
            log.add("frozen_solid", name=attacker.name)
            return False

    if attacker.status == NonVolatileStatus.PARALYSIS and rng.randint(0, 3) == 0:
        log.add("fully_paralyzed", name=attacker.name)
        return False

    if attacker.infatuated == defender.uid and rng.randint(0, 1) == 0:
        log.add("immobilized_by_love", name=attacker.name, other=defender.name)
        return False

    if attacker.flinched:
        log.add("flinched_cant_move", name=attacker.name)
        return False

    if attacker.status == NonVolatileStatus.SLEEP:
        if use.use_pp and attacker.sleep_timer.next_turn():
            reset_status(attacker)
            log.add("woke_up", name=attacker.name)
        elif use.effect not in (93, 98) and attacker.ability() != Ability.COMATOSE and not override_sleep:
            log.add("fast_asleep", name=attacker.name)
            return False

    if attacker.confusion.next_turn():
        log.add("no_longer_confused", name=attacker.name)
    if attacker.confusion.active() and rng.randint(0, 2) == 0:
        log.add("hurt_in_confusion", name=attacker.name)
        DamageCalculator(battle).attack(confusion(), attacker, attacker)
        return False

    if attacker.ability() == Ability.TRUANT and attacker.truant_turn % 2 == 1:
        log.add("loafing_around", name=attacker.name)
        return False
    return True


def _spend_pp(use: MoveUse) -> None:
    attacker, move = use.attacker, use.move
    if attacker.locked_move is not None or not use.use_pp:
        return
    move.pp = max(0, move.pp - 1)
    if use.defender.ability(attacker, move) == Ability.PRESSURE and move.pp != 0:
        if targets_opponent(move) or use.effect in _PRESSURE_STATUS_EFFECTS:
            move.pp -= 1
    if move.pp == 0:
        use.log.add("ran_out_of_pp")


def _choice_lock(use: MoveUse) -> None:
    attacker = use.attacker
    if attacker.choice_move is not None or not use.use_pp:
        return
    if attacker.held.item in _CHOICE_ITEMS or attacker.ability() == Ability.GORILLA_TACTICS:
        attacker.choice_move = use.move.id


def _stance_change(use: MoveUse) -> None:
    attacker = use.attacker
    if attacker.ability() != Ability.STANCE_CHANGE:
        return
    if attacker.species == "Aegislash" and use.move.damage_class != DamageClass.STATUS:
        if attacker.form("Aegislash-blade"):
            use.log.add("draws_blade", name=attacker.name)
    if attacker.species == "Aegislash-blade" and use.effect == 356:
        if attacker.form("Aegislash"):
            use.log.add("readies_shield", name=attacker.name)
