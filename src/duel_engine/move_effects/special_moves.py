"""
One-off move effects: type and ability changes, item manipulation, HP sharing, copying moves,
substitutes and the other status moves with bespoke rules.
"""

from duel_engine.combatant_ops import (
    append_stat,
    apply_status,
    damage,
    eat_berry,
    faint,
    flinch,
    remove,
    reset_status,
    send_out_ability,
    should_eat_berry,
    transform,
)
from duel_engine.enums import Ability, ElementType, NonVolatileStatus, StatKind, TerrainKind
from duel_engine.enums.status import ALL_STATS
from duel_engine.hit_resolver import get_conversion2
from duel_engine.move_classifiers import is_sound_based
from duel_engine.move_effects.multi_turn import gulp_missile
from duel_engine.move_effects.registry import MoveUse, Stage, handles
from duel_engine.schema.combatant import Combatant
from duel_engine.schema.timers import ExpiringEffect, ExpiringItem
from duel_engine.stats import raw_attack, raw_defense, raw_sp_atk, raw_sp_def

TRAPPING_EFFECTS = frozenset({107, 374, 385, 449, 452})
USER_FAINTS_AFTER = frozenset({169, 221, 271, 321})

_CAMOUFLAGE_TYPES = {
    TerrainKind.GRASSY: ElementType.GRASS,
    TerrainKind.MISTY: ElementType.FAIRY,
    TerrainKind.ELECTRIC: ElementType.ELECTRIC,
    TerrainKind.PSYCHIC: ElementType.PSYCHIC,
}

# Flung items whose effect is a status on the target
_FLING_STATUS = {
    "flame-orb": NonVolatileStatus.BURN,
    "light-ball": NonVolatileStatus.PARALYSIS,
    "poison-barb": NonVolatileStatus.POISON,
    "toxic-orb": NonVolatileStatus.BADLY_POISONED,
}

_SEMI_INVULNERABLE = ("dive", "dig", "fly", "shadow_force")


def _pretty(item: str) -> str:
    return item.replace("-", " ")


def _article(element: ElementType) -> str:
    return "an" if element.pretty[0] in "aeiou" else "a"


def _set_type(use: MoveUse, mon: Combatant, element: ElementType) -> None:
    mon.types = [element]
    use.log.add("became_type", name=mon.name, article=_article(element), type=element.pretty)


# =============================================================================
# TRAPPING AND SELF-KO
# =============================================================================
@handles(Stage.SPECIAL, *TRAPPING_EFFECTS)
def trap(use: MoveUse) -> None:
    targets = [use.defender, use.attacker] if use.effect == 449 else [use.defender]
    for mon in targets:
        if not mon.trapping:
            mon.trapping = True
            use.log.add("cant_escape", name=mon.name)


@handles(Stage.SPECIAL, *USER_FAINTS_AFTER)
def user_faints_after(use: MoveUse) -> None:
    faint(use.attacker, use.battle)


# =============================================================================
# HP AND PP
# =============================================================================
@handles(Stage.SPECIAL, 255)
def struggle_recoil(use: MoveUse) -> None:
    attacker = use.attacker
    damage(attacker, attacker.starting_hp // 4, use.battle, attacker=attacker)


@handles(Stage.SPECIAL, 92)
def pain_split(use: MoveUse) -> None:
    attacker, defender = use.attacker, use.defender
    shared = (attacker.hp + defender.hp) // 2
    attacker.hp = min(attacker.starting_hp, shared)
    defender.hp = min(defender.starting_hp, shared)
    use.log.add("shared_pain")


@handles(Stage.SPECIAL, 101, 439)
def drain_pp(use: MoveUse) -> None:
    """Spite and eerie spell cut the PP of the target's last move."""
    defender = use.defender
    last_move = defender.last_move
    if last_move is None:
        return
    amount = 4 if use.effect == 101 else 3
    target = defender.moveset_entry(last_move.id) or last_move
    target.pp = max(0, target.pp - amount)
    last_move.pp = target.pp
    use.log.add("pp_reduced", name=defender.name, move=last_move.pretty_name)


@handles(Stage.SPECIAL, 235)
def psycho_shift(use: MoveUse) -> None:
    attacker, defender = use.attacker, use.defender
    status = attacker.status
    if status != NonVolatileStatus.NONE:
        apply_status(defender, status, use.battle, attacker=attacker, move=use.move)
    if status == NonVolatileStatus.NONE or defender.status != status:
        use.log.add("but_it_failed")
        return
    reset_status(attacker)
    use.log.add("status_transferred", name=attacker.name, status=status.value, other=defender.name)


@handles(Stage.SPECIAL, 80)
def substitute(use: MoveUse) -> None:
    attacker = use.attacker
    hp = attacker.starting_hp // 4
    damage(attacker, hp, use.battle, attacker=attacker, source="building a substitute")
    attacker.substitute = hp
    attacker.bind.set_turns(0)
    use.log.add("made_substitute", name=attacker.name)


@handles(Stage.SPECIAL, 493)
def shed_tail(use: MoveUse) -> None:
    """Pay half HP for a substitute that the next combatant on the side inherits."""
    attacker = use.attacker
    side = use.battle.side_of(attacker)
    damage(attacker, attacker.starting_hp // 2, use.battle, attacker=attacker, source="building a substitute")
    side.next_substitute = attacker.starting_hp // 4
    attacker.bind.set_turns(0)
    use.log.add("left_substitute", name=attacker.name)
    remove(attacker, use.battle)
    side.mid_turn_remove = True


@handles(Stage.SPECIAL, 110)
def curse(use: MoveUse) -> None:
    attacker = use.attacker
    if ElementType.GHOST in attacker.types:
        damage(attacker, attacker.starting_hp // 2, use.battle, source="inflicting the curse")
        use.defender.curse = True
        use.log.add("cursed", name=use.defender.name)
    else:
        append_stat(attacker, -1, attacker, use.move, StatKind.SPEED, use.battle)
        append_stat(attacker, 1, attacker, use.move, StatKind.ATTACK, use.battle)
        append_stat(attacker, 1, attacker, use.move, StatKind.DEFENSE, use.battle)


@handles(Stage.SPECIAL, 414)
def clangorous_soul(use: MoveUse) -> None:
    damage(use.attacker, use.attacker.starting_hp // 3, use.battle)


@handles(Stage.SPECIAL, 342)
def fell_stinger(use: MoveUse) -> None:
    if use.defender.hp == 0:
        append_stat(use.attacker, 3, use.attacker, use.move, StatKind.ATTACK, use.battle)


# =============================================================================
# STAT STAGES AND RAW STATS
# =============================================================================
def _swap_stages(use: MoveUse, stats) -> None:
    attacker, defender = use.attacker, use.defender
    for stat in stats:
        mine, theirs = attacker.get_stage(stat), defender.get_stage(stat)
        attacker.set_stage(stat, theirs)
        defender.set_stage(stat, mine)


@handles(Stage.SPECIAL, 251)
def heart_swap(use: MoveUse) -> None:
    _swap_stages(use, ALL_STATS)
    use.log.add("swapped_stat_changes", name=use.attacker.name, stats="stat", other=use.defender.name)


@handles(Stage.SPECIAL, 244)
def power_swap(use: MoveUse) -> None:
    _swap_stages(use, (StatKind.ATTACK, StatKind.SP_ATK))
    use.log.add("swapped_stat_changes", name=use.attacker.name, stats="attack and special attack stat", other=use.defender.name)


@handles(Stage.SPECIAL, 245)
def guard_swap(use: MoveUse) -> None:
    _swap_stages(use, (StatKind.DEFENSE, StatKind.SP_DEF))
    use.log.add("swapped_stat_changes", name=use.attacker.name, stats="defense and special defense stat", other=use.defender.name)


@handles(Stage.SPECIAL, 144)
def psych_up(use: MoveUse) -> None:
    attacker, defender = use.attacker, use.defender
    for stat in ALL_STATS:
        attacker.set_stage(stat, defender.get_stage(stat))
    attacker.focus_energy = defender.focus_energy
    use.log.add("psyched_up")


@handles(Stage.SPECIAL, 348)
def topsy_turvy(use: MoveUse) -> None:
    defender = use.defender
    for stat in ALL_STATS:
        defender.set_stage(stat, -defender.get_stage(stat))
    use.log.add("stages_inverted", name=defender.name)


@handles(Stage.SPECIAL, 399)
def speed_swap(use: MoveUse) -> None:
    use.attacker.speed, use.defender.speed = use.defender.speed, use.attacker.speed
    use.log.add("speed_swapped")


@handles(Stage.SPECIAL, 280)
def guard_split(use: MoveUse) -> None:
    attacker, defender = use.attacker, use.defender
    mine = (raw_defense(attacker), raw_sp_def(attacker))
    theirs = (raw_defense(defender), raw_sp_def(defender))
    attacker.defense_split, attacker.sp_def_split = theirs
    defender.defense_split, defender.sp_def_split = mine
    use.log.add("shared_stats", name=attacker.name, other=defender.name, stats="guard")


@handles(Stage.SPECIAL, 281)
def power_split(use: MoveUse) -> None:
    attacker, defender = use.attacker, use.defender
    mine = (raw_attack(attacker), raw_sp_atk(attacker))
    theirs = (raw_attack(defender), raw_sp_atk(defender))
    attacker.attack_split, attacker.sp_atk_split = theirs
    defender.attack_split, defender.sp_atk_split = mine
    use.log.add("shared_stats", name=attacker.name, other=defender.name, stats="power")


def _grounded_grass_types(use: MoveUse) -> list[Combatant]:
    result = []
    for mon in (use.attacker, use.defender):
        if ElementType.GRASS not in mon.types or not mon.grounded(use.battle):
            continue
        if any(getattr(mon, flag) for flag in _SEMI_INVULNERABLE):
            continue
        result.append(mon)
    return result


@handles(Stage.SPECIAL, 340)
def rototiller(use: MoveUse) -> None:
    for mon in _grounded_grass_types(use):
        append_stat(mon, 1, use.attacker, use.move, StatKind.ATTACK, use.battle)
        append_stat(mon, 1, use.attacker, use.move, StatKind.SP_ATK, use.battle)


@handles(Stage.SPECIAL, 351)
def flower_shield(use: MoveUse) -> None:
    for mon in _grounded_grass_types(use):
        append_stat(mon, 1, use.attacker, use.move, StatKind.DEFENSE, use.battle)


@handles(Stage.SPECIAL, 288, 373)
def smack_down(use: MoveUse) -> None:
    defender = use.defender
    defender.telekinesis.set_turns(0)
    if defender.fly:
        defender.fly = False
        defender.locked_move = None
        defender.has_moved = True
        use.log.add("shot_out_of_air", name=defender.name)
    if not defender.grounded(use.battle, use.attacker, use.move):
        defender.grounded_by_move = True
        use.log.add("grounded", name=defender.name)


# =============================================================================
# TYPES
# =============================================================================
@handles(Stage.SPECIAL, 31)
def conversion(use: MoveUse) -> None:
    element = use.attacker.moves[0].type
    if element == ElementType.TYPELESS:
        element = ElementType.NORMAL
    _set_type(use, use.attacker, element)


@handles(Stage.SPECIAL, 94)
def conversion_2(use: MoveUse) -> None:
    element = get_conversion2(use.attacker, use.defender, use.battle)
    if element is not None:
        _set_type(use, use.attacker, element)


@handles(Stage.SPECIAL, 398, 481)
def lose_type(use: MoveUse) -> None:
    """Burn up and double shock spend the user's own type."""
    element = ElementType.FIRE if use.effect == 398 else ElementType.ELECTRIC
    attacker = use.attacker
    if element in attacker.types:
        attacker.types.remove(element)
    use.log.add("lost_type", name=attacker.name, type=element.pretty)


@handles(Stage.SPECIAL, 376, 343)
def add_type(use: MoveUse) -> None:
    element = ElementType.GRASS if use.effect == 376 else ElementType.GHOST
    use.defender.types.append(element)
    use.log.add("added_type", name=use.defender.name, type=element.pretty)


@handles(Stage.SPECIAL, 295, 456)
def replace_type(use: MoveUse) -> None:
    _set_type(use, use.defender, ElementType.WATER if use.effect == 295 else ElementType.PSYCHIC)


@handles(Stage.SPECIAL, 214)
def camouflage(use: MoveUse) -> None:
    _set_type(use, use.attacker, _CAMOUFLAGE_TYPES.get(use.battle.terrain.kind, ElementType.NORMAL))


@handles(Stage.SPECIAL, 319)
def reflect_type(use: MoveUse) -> None:
    use.attacker.types = list(use.defender.types)
    use.log.add("type_matched", name=use.attacker.name, other=use.defender.name)


# =============================================================================
# ABILITIES
# =============================================================================
def _give_ability(use: MoveUse, mon: Combatant, ability: Ability, other: Combatant) -> None:
    mon.ability_id = ability
    use.log.add("acquired_ability", name=mon.name, ability=ability.pretty)
    send_out_ability(mon, other, use.battle)


@handles(Stage.SPECIAL, 179)
def role_play(use: MoveUse) -> None:
    _give_ability(use, use.attacker, use.defender.ability_id, use.defender)


@handles(Stage.SPECIAL, 299)
def simple_beam(use: MoveUse) -> None:
    _give_ability(use, use.defender, Ability.SIMPLE, use.attacker)


@handles(Stage.SPECIAL, 300)
def entrainment(use: MoveUse) -> None:
    _give_ability(use, use.defender, use.attacker.ability_id, use.attacker)


@handles(Stage.SPECIAL, 248)
def worry_seed(use: MoveUse) -> None:
    defender = use.defender
    defender.ability_id = Ability.INSOMNIA
    if defender.status == NonVolatileStatus.SLEEP:
        reset_status(defender)
    use.log.add("acquired_ability", name=defender.name, ability=Ability.INSOMNIA.pretty)
    send_out_ability(defender, use.attacker, use.battle)


@handles(Stage.SPECIAL, 192)
def skill_swap(use: MoveUse) -> None:
    attacker, defender = use.attacker, use.defender
    theirs = defender.ability_id
    _give_ability(use, defender, attacker.ability_id, attacker)
    _give_ability(use, attacker, theirs, defender)


@handles(Stage.SPECIAL, 402)
def core_enforcer(use: MoveUse) -> None:
    defender = use.defender
    if defender.has_moved and defender.ability_changeable():
        defender.ability_id = Ability.NONE
        use.log.add("ability_nullified", name=defender.name)


# =============================================================================
# COPYING AND BINDING
# =============================================================================
def _replace_move(attacker: Combatant, old_id: int, new_move) -> None:
    for idx, move in enumerate(attacker.moves):
        if move.id == old_id:
            attacker.moves[idx] = new_move
            return


@handles(Stage.SPECIAL, 96)
def sketch(use: MoveUse) -> None:
    copy = use.defender.last_move.fresh_copy()
    _replace_move(use.attacker, use.move.id, copy)
    use.log.add("sketched", move=copy.pretty_name)


@handles(Stage.SPECIAL, 83)
def mimic(use: MoveUse) -> None:
    copy = use.defender.last_move.fresh_copy()
    copy.pp = copy.starting_pp
    _replace_move(use.attacker, use.move.id, copy)
    use.log.add("mimicked", name=use.attacker.name, move=copy.pretty_name)


@handles(Stage.SPECIAL, 58)
def transform_into(use: MoveUse) -> None:
    use.log.add("transformed_into", name=use.attacker.name, species=use.defender.name)
    transform(use.attacker, use.defender)


@handles(Stage.SPECIAL, 43, 262)
def bind(use: MoveUse) -> None:
    defender = use.defender
    # Whirlpool style moves only bind a target that is not already bound
    if use.effect == 262 and (defender.substitute > 0 or defender.bind.active()):
        return
    turns = 7 if use.attacker.item(use.battle) == "grip-claw" else use.rng.randint(4, 5)
    defender.bind.set_turns(turns)
    use.log.add("squeezed", name=defender.name)


@handles(Stage.SPECIAL, 403)
def instruct(use: MoveUse) -> None:
    from duel_engine.move_pipeline import use_move

    defender = use.defender
    has_moved = defender.has_moved
    defender.has_moved = False
    use_move(defender, use.attacker, use.battle, defender.last_move)
    defender.has_moved = has_moved


# =============================================================================
# HELD ITEMS
# =============================================================================
def _fling_effect(use: MoveUse, item: str) -> None:
    defender = use.defender
    if item in _FLING_STATUS:
        apply_status(defender, _FLING_STATUS[item], use.battle, attacker=use.attacker, move=use.move)
    elif item in ("kings-rock", "razor-fang"):
        flinch(defender, use.battle, attacker=use.attacker, move=use.move)
    elif item == "mental-herb":
        defender.infatuated = None
        defender.taunt = ExpiringEffect()
        defender.encore = ExpiringItem()
        defender.torment = False
        defender.disable = ExpiringItem()
        defender.heal_block = ExpiringEffect()
        use.log.add("feels_refreshed", name=defender.name)
    elif item == "white-herb":
        for stat in ALL_STATS:
            defender.set_stage(stat, max(0, defender.get_stage(stat)))
        use.log.add("feels_refreshed", name=defender.name)


@handles(Stage.SPECIAL, 234)
def fling(use: MoveUse) -> None:
    attacker = use.attacker
    item = attacker.held.item
    if item is None or not attacker.held.can_remove():
        return
    use.log.add("flung", name=attacker.name, item=_pretty(item))
    if attacker.held.is_berry_name():
        eat_berry(attacker, use.battle, consumer=use.defender, attacker=attacker, move=use.move)
        return
    attacker.use_item()
    _fling_effect(use, item)


def _item_takeable(use: MoveUse) -> bool:
    defender = use.defender
    return defender.held.has_item() and defender.held.can_remove() and defender.substitute == 0


def _sticky_hold(use: MoveUse) -> bool:
    if use.defender.ability(use.attacker, use.move) != Ability.STICKY_HOLD:
        return False
    use.log.add("sticky_hold", name=use.defender.name)
    return True


@handles(Stage.SPECIAL, 106)
def thief(use: MoveUse) -> None:
    attacker, defender = use.attacker, use.defender
    if not _item_takeable(use) or attacker.held.has_item() or _sticky_hold(use):
        return
    defender.transfer_item(attacker)
    use.log.add("item_stolen", name=defender.name, item=_pretty(attacker.held.item))


@handles(Stage.SPECIAL, 189)
def knock_off(use: MoveUse) -> None:
    defender = use.defender
    if not _item_takeable(use) or use.attacker.hp == 0 or _sticky_hold(use):
        return
    use.log.add("lost_item", name=defender.name, item=_pretty(defender.held.item))
    defender.remove_item()


@handles(Stage.SPECIAL, 178)
def trick(use: MoveUse) -> None:
    attacker, defender = use.attacker, use.defender
    attacker.swap_items(defender)
    use.log.add("swapped_items", name=attacker.name, other=defender.name)
    for mon in (attacker, defender):
        if mon.held.item is not None:
            use.log.add("gained_item", name=mon.name, item=_pretty(mon.held.item))


@handles(Stage.SPECIAL, 324)
def bestow(use: MoveUse) -> None:
    attacker, defender = use.attacker, use.defender
    attacker.transfer_item(defender)
    use.log.add("gave_item", name=attacker.name, item=_pretty(defender.held.item or ""), other=defender.name)


@handles(Stage.SPECIAL, 430)
def corrosive_gas(use: MoveUse) -> None:
    defender = use.defender
    if _sticky_hold(use):
        return
    use.log.add("item_corroded", name=defender.name, item=_pretty(defender.held.item or "item"))
    defender.corrosive_gas = True


@handles(Stage.SPECIAL, 476)
def teatime(use: MoveUse) -> None:
    mark = use.log.mark()
    for mon in (use.attacker, use.defender):
        eat_berry(mon, use.battle, attacker=use.attacker, move=use.move)
    if not use.log.since(mark):
        use.log.add("nothing_happened")


@handles(Stage.SPECIAL, 185)
def recycle(use: MoveUse) -> None:
    attacker = use.attacker
    attacker.recover_item(attacker)
    use.log.add("recovered_item", name=attacker.name, item=_pretty(attacker.held.item or ""))
    if should_eat_berry(attacker, use.battle, use.defender):
        eat_berry(attacker, use.battle, attacker=use.defender, move=use.move)


@handles(Stage.SPECIAL, 225)
def pluck(use: MoveUse) -> None:
    if use.defender.ability(use.attacker, use.move) != Ability.STICKY_HOLD:
        eat_berry(use.defender, use.battle, consumer=use.attacker, attacker=use.attacker, move=use.move)


@handles(Stage.SPECIAL, 223)
def natural_gift(use: MoveUse) -> None:
    attacker = use.attacker
    use.log.add("item_consumed", name=attacker.name, item=_pretty(attacker.held.item or ""))
    attacker.use_item()


@handles(Stage.SPECIAL, 453)
def stuff_cheeks(use: MoveUse) -> None:
    eat_berry(use.attacker, use.battle)


# =============================================================================
# MISCELLANEOUS
# =============================================================================
@handles(Stage.SPECIAL, 258)
def dive_catch(use: MoveUse) -> None:
    attacker = use.attacker
    if attacker.ability() == Ability.GULP_MISSILE and attacker.species == "Cramorant":
        gulp_missile(use)


@handles(Stage.SPECIAL, 198)
def secret_power(use: MoveUse) -> None:
    if not use.roll():
        return
    defender, battle = use.defender, use.battle
    terrain = battle.terrain.kind
    if terrain == TerrainKind.GRASSY:
        apply_status(defender, NonVolatileStatus.SLEEP, battle, attacker=use.attacker, move=use.move)
    elif terrain == TerrainKind.MISTY:
        append_stat(defender, -1, use.attacker, use.move, StatKind.SP_ATK, battle)
    elif terrain == TerrainKind.PSYCHIC:
        append_stat(defender, -1, use.attacker, use.move, StatKind.SPEED, battle)
    else:
        apply_status(defender, NonVolatileStatus.PARALYSIS, battle, attacker=use.attacker, move=use.move)


@handles(Stage.SPECIAL)
def throat_spray(use: MoveUse) -> None:
    attacker = use.attacker
    if is_sound_based(use.move) and attacker.item(use.battle) == "throat-spray":
        append_stat(attacker, 1, attacker, None, StatKind.SP_ATK, use.battle, source="its throat spray")
        attacker.use_item()
