"""
Non-volatile status and confusion inflicted after the damage step.

Rolled effects use the resolved effect chance, so shield dust, covert cloak and sheer force
zero them out and serene grace doubles them.
"""

from duel_engine.combatant_ops import apply_status, confuse
from duel_engine.enums import NonVolatileStatus
from duel_engine.move_effects.registry import MoveUse, Stage, handles

BURN = NonVolatileStatus.BURN
FREEZE = NonVolatileStatus.FREEZE
PARALYSIS = NonVolatileStatus.PARALYSIS
POISON = NonVolatileStatus.POISON
BADLY_POISONED = NonVolatileStatus.BADLY_POISONED
SLEEP = NonVolatileStatus.SLEEP

# effect -> status given to the target on a successful secondary roll
_ROLLED_STATUS: dict[int, NonVolatileStatus] = {
    **dict.fromkeys((5, 126, 201, 254, 274, 333, 365, 458, 465, 500), BURN),
    **dict.fromkeys((6, 261, 275, 380), FREEZE),
    **dict.fromkeys((7, 153, 263, 264, 276, 332, 372, 396), PARALYSIS),
    **dict.fromkeys((3, 78, 210, 447, 461), POISON),
    203: BADLY_POISONED,
    330: SLEEP,
}

# effect -> status given to the target every time
_SURE_STATUS: dict[int, NonVolatileStatus] = {
    168: BURN,
    68: PARALYSIS,
    **dict.fromkeys((67, 390, 486), POISON),
    34: BADLY_POISONED,
}

# Tri attack and dire claw pick one of three statuses before rolling
_RANDOM_STATUS = {
    37: (BURN, FREEZE, PARALYSIS),
    464: (POISON, PARALYSIS, SLEEP),
}

DARK_VOID_ID = 464


def _inflict(use: MoveUse, status: NonVolatileStatus) -> None:
    apply_status(use.defender, status, use.battle, attacker=use.attacker, move=use.move)


@handles(Stage.POST, *_ROLLED_STATUS)
def rolled_status(use: MoveUse) -> None:
    if use.roll():
        _inflict(use, _ROLLED_STATUS[use.effect])


@handles(Stage.POST, *_SURE_STATUS)
def sure_status(use: MoveUse) -> None:
    _inflict(use, _SURE_STATUS[use.effect])


@handles(Stage.POST, 429)
def burning_jealousy(use: MoveUse) -> None:
    if use.defender.stat_increased:
        _inflict(use, BURN)


@handles(Stage.POST, *_RANDOM_STATUS)
def random_status(use: MoveUse) -> None:
    choices = _RANDOM_STATUS[use.effect]
    status = choices[use.rng.choice_index(len(choices))]
    if use.roll():
        _inflict(use, status)


@handles(Stage.POST, 2)
def put_to_sleep(use: MoveUse) -> None:
    # Dark void only works for Darkrai
    if use.move.id == DARK_VOID_ID and use.attacker.species != "Darkrai":
        use.log.add("cant_use_move", name=use.attacker.name)
        return
    _inflict(use, SLEEP)


@handles(Stage.POST, 38)
def rest(use: MoveUse) -> None:
    attacker = use.attacker
    apply_status(attacker, SLEEP, use.battle, attacker=attacker, move=use.move, turns=3, force=True)
    if attacker.status == SLEEP:
        use.log.add("rest_restored", name=attacker.name)
        attacker.hp = attacker.starting_hp


@handles(Stage.POST, 50, 119, 167, 200)
def sure_confusion(use: MoveUse) -> None:
    confuse(use.defender, use.battle, attacker=use.attacker, move=use.move)


@handles(Stage.POST, 77, 268, 334, 478)
def rolled_confusion(use: MoveUse) -> None:
    if use.roll():
        confuse(use.defender, use.battle, attacker=use.attacker, move=use.move)


@handles(Stage.POST, 497)
def alluring_voice(use: MoveUse) -> None:
    if use.defender.stat_increased:
        confuse(use.defender, use.battle, attacker=use.attacker, move=use.move)


@handles(Stage.POST, 28)
def thrash_fatigue(use: MoveUse) -> None:
    """The user of a rampage move becomes confused on its last locked turn."""
    locked = use.attacker.locked_move
    # The lock is already gone if the user fainted to recoil or a contact reaction
    if locked is not None and locked.is_last_turn():
        confuse(use.attacker, use.battle)
