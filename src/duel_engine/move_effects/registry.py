"""
Effect dispatch tables.

Every effect code a move can carry maps to the handlers that run for it at each stage of the
move pipeline. Handler modules register themselves with @handles; the pipeline calls dispatch()
once per stage. Codes whose whole behaviour lives in the damage calculator (power formulas,
fixed damage, hit counts, recoil and drain) are listed in DAMAGE_ONLY_EFFECTS so the tables
stay exhaustive over MoveEffect. Moves that can never work in a single battle stop at the hit
gates and need no handler.
"""

import logging
from enum import IntEnum
from typing import Callable, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from duel_engine.enums import ElementType, MoveEffect
from duel_engine.errors import UnregisteredEffectError
from duel_engine.hit_resolver import DOUBLES_ONLY_EFFECTS, NO_EFFECT_MOVES
from duel_engine.schema.battle_context import BattleContext
from duel_engine.schema.combatant import Combatant
from duel_engine.schema.move import BattleMove, MoveData

logger = logging.getLogger(__name__)


class Stage(IntEnum):
    """Dispatch points of the move pipeline, in the order they run."""

    BEFORE_TURN = 0  # before either side acts (pursuit, focus punch, beak blast)
    SETUP = 1  # multi-turn locks and charge turns
    PRE_DAMAGE = 2  # absorption, reflection, move substitution
    POST = 3  # healing and status
    STAT = 4  # stat stage changes
    FLINCH = 5
    SPECIAL = 6  # field, volatile and protection effects
    SWAP = 7  # forced and voluntary switching
    LIFE_ORB = 8


class MoveUse(BaseModel):
    """Everything a handler needs to know about the move being used right now."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    move: BattleMove
    attacker: Combatant
    defender: Combatant
    battle: BattleContext
    move_type: ElementType
    effect_chance: int = 100
    num_hits: int = 0
    use_pp: bool = True
    bounced: bool = False

    @property
    def effect(self) -> int:
        return self.move.effect

    @property
    def log(self):
        return self.battle.log

    @property
    def rng(self):
        return self.battle.rng

    def roll(self) -> bool:
        """Secondary-effect roll against the resolved effect chance."""
        return self.battle.rng.randint(1, 100) <= self.effect_chance


# A handler returns True to stop the pipeline (only honoured for SETUP and PRE_DAMAGE)
Handler = Callable[[MoveUse], Optional[bool]]

# Per stage, handlers in registration order. effects=None marks a hook that runs for every move.
_ENTRIES: dict[Stage, list[tuple[Optional[frozenset[int]], Handler]]] = {stage: [] for stage in Stage}

# Effects the damage calculator resolves on its own
DAMAGE_ONLY_EFFECTS = frozenset({
    # plain damage, priority and crit variants
    1, 18, 35, 44, 150, 151, 177, 201, 208, 209, 210, 289, 292, 304, 306, 320,
    # power formulas
    100, 120, 122, 124, 127, 136, 148, 170, 172, 191, 197, 204, 218, 220, 222, 238, 246, 258, 294, 311, 318,
    231, 284, 336, 337, 338, 360, 361, 383, 401, 404, 408, 409, 411, 416, 426, 436, 437, 440, 441, 443, 450, 459,
    460, 463, 482, 484, 489, 490, 491, 495, 498,
    # stat pair swaps
    283, 298,
    # fixed damage
    39, 41, 42, 88, 89, 90, 131, 145, 190, 228, 413,
    # multi-hit
    30, 45, 78, 105, 155,
    # recoil and drain
    4, 9, 46, 49, 199, 263, 270, 346, 349,
    # handled by the pipeline around damage
    102, 129, 171, 186, 224, 232, 236, 247, 249, 269, 293, 357, 365, 425, 478, 501,
})


def handles(stage: Stage, *effects: int) -> Callable[[Handler], Handler]:
    """Register the decorated function for the given effect codes at one stage.

    With no effect codes the handler becomes a hook that runs for every move at that stage.
    Handlers of a stage run in registration order, so the import order in _load_handlers is
    the order of the battle rules.
    """

    def decorator(func: Handler) -> Handler:
        keys = frozenset(int(effect) for effect in effects) if effects else None
        _ENTRIES[stage].append((keys, func))
        return func

    return decorator


def _load_handlers() -> None:
    # Family modules register on import; order matters within a stage
    from duel_engine.move_effects import (  # noqa: F401
        multi_turn,
        pre_damage,
        meta_moves,
        healing,
        status_effects,
        stat_changes,
        flinch,
        volatile_effects,
        field_effects,
        special_moves,
        phazing,
        life_orb,
    )


def handlers_for(stage: Stage, effect: int) -> list[Handler]:
    _load_handlers()
    return [func for keys, func in _ENTRIES[stage] if keys is None or effect in keys]


def dispatch(stage: Stage, use: MoveUse) -> bool:
    """Run every handler registered for the move's effect at one stage.

    Returns:
        True when a handler asked the pipeline to stop.
    """
    for handler in handlers_for(stage, use.effect):
        if handler(use):
            logger.debug("%s: %s stopped by %s", stage.name, use.move.name, handler.__name__)
            return True
    return False


def covered_effects() -> set[int]:
    """Every effect code with a keyed handler, a damage-only entry or a hit gate that always stops it."""
    _load_handlers()
    covered = set(DAMAGE_ONLY_EFFECTS) | NO_EFFECT_MOVES | DOUBLES_ONLY_EFFECTS
    for entries in _ENTRIES.values():
        for keys, _ in entries:
            if keys is not None:
                covered.update(keys)
    return covered


def validate_move(move: MoveData) -> None:
    """Fail fast on a catalogue move whose effect code the engine does not know."""
    try:
        MoveEffect(move.effect)
    except ValueError:
        logger.debug("rejecting %s: effect %s is not a known effect code", move.name, move.effect)
        raise UnregisteredEffectError(move.effect, move.id) from None
    if move.effect not in covered_effects():
        logger.debug("rejecting %s: effect %s has no handler", move.name, move.effect)
        raise UnregisteredEffectError(move.effect, move.id)


def validate_catalogue(moves: Iterable[MoveData]) -> None:
    for move in moves:
        validate_move(move)
