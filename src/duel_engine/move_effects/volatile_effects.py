"""
Volatile conditions set by status moves: move locks, protection and the many single-flag effects.

Everything here is cleared when the affected combatant leaves the field.
"""

from typing import Union

from duel_engine.combatant_ops import infatuate
from duel_engine.constants import MAX_PROTECTION_CHANCE
from duel_engine.enums import Ability, ElementType, TerrainKind
from duel_engine.move_effects.registry import MoveUse, Stage, handles
from duel_engine.schema.battle_context import MoveAction
from duel_engine.schema.combatant import Combatant
from duel_engine.schema.timers import ExpiringEffect

# effect -> (lands on the user, field, value or turns, narration tag)
_SIMPLE_VOLATILES: dict[int, tuple[bool, str, Union[bool, int], str]] = {
    48: (True, "focus_energy", True, "getting_pumped"),
    82: (True, "rage", True, "rage_building"),
    175: (True, "charge", 2, "charging_electric"),
    182: (True, "ingrain", True, "planted_roots"),
    184: (True, "magic_coat", True, "magic_coat"),
    193: (True, "imprison", True, "imprisons"),
    195: (True, "grudge", True, "bears_grudge"),
    196: (True, "snatching", True, "snatch_waiting"),
    241: (True, "lucky_chant", 5, "lucky_chant"),
    252: (True, "aqua_ring", True, "aqua_ring"),
    253: (True, "magnet_rise", 5, "magnet_rise"),
    345: (True, "ion_deluge", True, "ion_deluge"),
    355: (True, "fairy_lock", 2, "fairy_lock"),
    391: (True, "laser_focus", 2, "laser_focus"),
    427: (True, "no_retreat", True, "last_stand"),
    108: (False, "nightmare", True, "nightmare"),
    233: (False, "embargo", 6, "embargo"),
    286: (False, "telekinesis", 5, "hurled_into_air"),
    354: (False, "electrify", True, "electrified"),
    378: (False, "powdered", True, "powdered"),
    452: (False, "octolock", True, "octolocked"),
    503: (False, "syrup_bomb", 4, "syrup_bomb"),
}

# Protection effect -> Combatant flag raised for the rest of the turn
PROTECTION_FLAGS = {
    112: "protect",
    117: "endure",
    279: "wide_guard",
    307: "quick_guard",
    350: "crafty_shield",
    356: "king_shield",
    362: "spiky_shield",
    377: "mat_block",
    384: "baneful_bunker",
    454: "obstruct",
    488: "silk_trap",
    499: "burning_bulwark",
}

_PROTECTION_TAGS = {
    112: "protected_itself",
    117: "braced_itself",
    279: "wide_guard",
    307: "guards_itself",
    350: "crafty_shield",
    356: "shields_itself",
    362: "shields_itself",
    377: "shields_itself",
    384: "bunkers_down",
    454: "protected_itself",
    488: "protected_itself",
    499: "protected_itself",
}

# Consecutive uses of these grow less likely to succeed
_STACKING_PROTECTION = frozenset({112, 117, 279, 356, 362, 384, 454, 488, 499})


def _aroma_veiled(use: MoveUse, verb: str) -> bool:
    if use.defender.ability(use.attacker, use.move) != Ability.AROMA_VEIL:
        return False
    use.log.add("aroma_veil_protects", name=use.defender.name, verb=verb)
    return True


# =============================================================================
# MOVE LOCKING
# =============================================================================
@handles(Stage.SPECIAL, 87)
def disable(use: MoveUse) -> None:
    defender = use.defender
    if defender.ability(use.attacker, use.move) == Ability.AROMA_VEIL:
        use.log.add("aroma_veil_disable", name=defender.name)
        return
    last_move = defender.last_move
    defender.disable.set(last_move.id, use.rng.randint(4, 7))
    use.log.add("move_disabled", name=defender.name, move=last_move.pretty_name)


@handles(Stage.SPECIAL, 176)
def taunt(use: MoveUse) -> None:
    defender = use.defender
    if defender.ability(use.attacker, use.move) == Ability.OBLIVIOUS:
        use.log.add("too_oblivious_to_taunt", name=defender.name)
        return
    if _aroma_veiled(use, "taunted"):
        return
    defender.taunt.set_turns(4 if defender.has_moved else 3)
    use.log.add("taunted", name=defender.name)


@handles(Stage.SPECIAL, 91)
def encore(use: MoveUse) -> None:
    defender = use.defender
    if _aroma_veiled(use, "encored"):
        return
    last_move = defender.last_move
    defender.encore.set(last_move.id, 4)
    if not defender.has_moved:
        use.battle.side_of(defender).selected_action = MoveAction(move=last_move)
    use.log.add("encored", name=defender.name)


@handles(Stage.SPECIAL, 166)
def torment(use: MoveUse) -> None:
    if _aroma_veiled(use, "tormented"):
        return
    use.defender.torment = True
    use.log.add("tormented", name=use.defender.name)


@handles(Stage.SPECIAL, 237, 496)
def heal_block(use: MoveUse) -> None:
    if _aroma_veiled(use, "heal blocked"):
        return
    use.defender.heal_block.set_turns(5 if use.effect == 237 else 2)
    use.log.add("heal_blocked", name=use.defender.name)


# =============================================================================
# PROTECTION
# =============================================================================
@handles(Stage.SPECIAL, *PROTECTION_FLAGS)
def protection(use: MoveUse) -> None:
    attacker = use.attacker
    if use.effect in _STACKING_PROTECTION:
        attacker.protection_used = True
        attacker.protection_chance = min(attacker.protection_chance * 3, MAX_PROTECTION_CHANCE)
    setattr(attacker, PROTECTION_FLAGS[use.effect], True)
    use.log.add(_PROTECTION_TAGS[use.effect], name=attacker.name)


# =============================================================================
# SINGLE-FLAG CONDITIONS
# =============================================================================
@handles(Stage.SPECIAL, *_SIMPLE_VOLATILES)
def simple_volatile(use: MoveUse) -> None:
    on_user, field, value, tag = _SIMPLE_VOLATILES[use.effect]
    mon = use.attacker if on_user else use.defender
    current = getattr(mon, field)
    if isinstance(current, ExpiringEffect):
        current.set_turns(value)
    else:
        setattr(mon, field, value)
    use.log.add(tag, name=mon.name)


@handles(Stage.SPECIAL, 95)
def mind_reader(use: MoveUse) -> None:
    use.defender.mind_reader.set(use.attacker.uid, 2)
    use.log.add("took_aim", name=use.attacker.name, other=use.defender.name)


@handles(Stage.SPECIAL, 99)
def destiny_bond(use: MoveUse) -> None:
    use.attacker.destiny_bond = True
    use.attacker.destiny_bond_cooldown.set_turns(2)
    use.log.add("destiny_bond", name=use.attacker.name)


@handles(Stage.SPECIAL, 121)
def attract(use: MoveUse) -> None:
    infatuate(use.defender, use.attacker, use.battle, move=use.move)


@handles(Stage.SPECIAL, 114, 217)
def identify(use: MoveUse) -> None:
    """Foresight and miracle eye strip the target's type immunities."""
    if use.effect == 114:
        use.defender.foresight = True
    else:
        use.defender.miracle_eye = True
    use.log.add("identified", name=use.attacker.name, other=use.defender.name)


@handles(Stage.SPECIAL, 240)
def gastro_acid(use: MoveUse) -> None:
    use.defender.ability_id = Ability.NONE
    use.log.add("ability_disabled", name=use.defender.name)


@handles(Stage.SPECIAL, 303)
def echoed_voice(use: MoveUse) -> None:
    attacker = use.attacker
    attacker.echoed_voice_power = min(attacker.echoed_voice_power + 40, 200)
    attacker.echoed_voice_used = True
    use.log.add("voice_echoes", name=attacker.name)


@handles(Stage.SPECIAL, 239)
def power_trick(use: MoveUse) -> None:
    use.attacker.power_trick = not use.attacker.power_trick
    use.log.add("power_trick", name=use.attacker.name)


@handles(Stage.SPECIAL, 466)
def power_shift(use: MoveUse) -> None:
    use.attacker.power_shift = not use.attacker.power_shift
    use.log.add("power_shift", name=use.attacker.name)


@handles(Stage.SPECIAL, 188)
def yawn(use: MoveUse) -> None:
    defender = use.defender
    if use.battle.terrain.kind == TerrainKind.ELECTRIC and defender.grounded(use.battle, use.attacker, use.move):
        use.log.add("electric_terrain_alert", name=defender.name)
        return
    defender.yawn.set_turns(2)
    use.log.add("drowsy", name=defender.name)


@handles(Stage.SPECIAL, 285)
def autotomize(use: MoveUse) -> None:
    use.attacker.autotomize += 1
    use.log.add("became_nimble", name=use.attacker.name)


@handles(Stage.SPECIAL, 157)
def defense_curl(use: MoveUse) -> None:
    use.attacker.defense_curl = True


@handles(Stage.SPECIAL, 215)
def roost(use: MoveUse) -> None:
    attacker = use.attacker
    attacker.roost = True
    if ElementType.FLYING in attacker.types:
        use.log.add("flying_suppressed", name=attacker.name)


@handles(Stage.SPECIAL, 393)
def throat_chop(use: MoveUse) -> None:
    defender = use.defender
    if not defender.silenced.active() and use.roll():
        defender.silenced.set_turns(3)
        use.log.add("silenced", name=defender.name)


@handles(Stage.SPECIAL, 477)
def tar_shot(use: MoveUse) -> None:
    defender = use.defender
    if not defender.tar_shot:
        defender.tar_shot = True
        use.log.add("covered_in_tar", name=defender.name)


@handles(Stage.SPECIAL, 115)
def perish_song(use: MoveUse) -> None:
    """Both combatants faint in three turns unless they leave the field first."""
    attacker, defender = use.attacker, use.defender
    use.log.add("perish_song")
    _start_perish_count(use, attacker)
    if not defender.perish_song.active() and defender.ability(attacker, use.move) == Ability.SOUNDPROOF:
        use.log.add("soundproof_song", name=defender.name)
    else:
        _start_perish_count(use, defender)


def _start_perish_count(use: MoveUse, mon: Combatant) -> None:
    if mon.perish_song.active():
        use.log.add("already_perishing", name=mon.name)
    else:
        mon.perish_song.set_turns(4)
