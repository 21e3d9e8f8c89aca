"""
Combatant mutations.

Every change to HP, stat stages, non-volatile status and the common volatile conditions goes
through this module, which also owns the ability and item reactions those changes trigger.
HP and stages are clamped here, so callers never have to re-check bounds.
"""

import logging
from typing import Optional

from duel_engine.data.abilities import UNNERVE_ABILITIES
from duel_engine.data.items import HP_BERRY_FLAVORS, JUDGMENT_ITEM_TYPES, PINCH_BERRIES, STATUS_BERRY_CURES
from duel_engine.enums import Ability, DamageClass, ElementType, NonVolatileStatus, StatKind, TerrainKind, WeatherKind
from duel_engine.enums.other import RAINY, SUNNY
from duel_engine.enums.status import CORE_STATS
from duel_engine.errors import InvalidActionError
from duel_engine.move_classifiers import is_affected_by_substitute, is_sound_based, is_wind, makes_contact
from duel_engine.schema.battle_context import BattleContext, Side
from duel_engine.schema.combatant import VOLATILE_FIELDS, Combatant
from duel_engine.schema.move import BattleMove
from duel_engine.stats import get_defense, get_sp_def, highest_raw_stat
from duel_engine.type_chart import effectiveness

logger = logging.getLogger(__name__)

# Combatants that revert to their own species when they leave the field
_SHAPESHIFTERS = ("Ditto", "Smeargle", "Mew", "Aegislash")

_STAT_MESSAGES = {
    -3: "stat_fell_severely",
    -2: "stat_fell_harshly",
    -1: "stat_fell",
    1: "stat_rose",
    2: "stat_rose_sharply",
    3: "stat_rose_drastically",
}

_SLEEP_IMMUNITIES = (Ability.INSOMNIA, Ability.VITAL_SPIRIT, Ability.SWEET_VEIL)


def _is(a: Optional[Combatant], b: Optional[Combatant]) -> bool:
    return a is not None and b is not None and a.uid == b.uid


# =============================================================================
# HP
# =============================================================================
def heal(mon: Combatant, amount: int, battle: BattleContext, source: str = "") -> int:
    """Restore HP, never above starting HP. Fainted and heal-blocked combatants are not healed."""
    amount = max(1, amount)
    if mon.hp >= mon.starting_hp or mon.hp == 0:
        return 0
    if mon.heal_block.active():
        return 0
    amount = min(mon.starting_hp - mon.hp, amount)
    mon.hp += amount
    battle.log.add("healed", name=mon.name, amount=amount, source=source)
    return amount


def faint(
    mon: Combatant,
    battle: BattleContext,
    *,
    move: Optional[BattleMove] = None,
    attacker: Optional[Combatant] = None,
    source: str = "",
) -> None:
    mon.hp = 0
    side = battle.side_of(mon)
    battle.log.add("fainted", name=mon.name, source=source)
    logger.debug("combatant %s fainted", mon.uid)
    if move is not None and attacker is not None and mon.destiny_bond and side.has_alive_pokemon():
        faint(attacker, battle, source=f"{mon.name}'s destiny bond")
    if move is not None and attacker is not None and attacker.species == "Greninja" and attacker.ability() == Ability.BATTLE_BOND:
        if attacker.form("Greninja-ash"):
            battle.log.add("battle_bond", name=attacker.name)
    if move is not None and mon.grudge:
        entry = attacker.moveset_entry(move.id) if attacker is not None else None
        (entry or move).pp = 0
        battle.log.add("grudge", move=move.pretty_name)
    if attacker is not None and attacker.ability() in (Ability.CHILLING_NEIGH, Ability.AS_ONE_ICE):
        append_stat(attacker, 1, attacker, None, StatKind.ATTACK, battle, source="its chilling neigh")
    if attacker is not None and attacker.ability() in (Ability.GRIM_NEIGH, Ability.AS_ONE_SHADOW):
        append_stat(attacker, 1, attacker, None, StatKind.SP_ATK, battle, source="its grim neigh")
    for other in battle.active_mons():
        if other.uid != mon.uid and other.ability() == Ability.SOUL_HEART:
            append_stat(other, 1, other, None, StatKind.SP_ATK, battle, source="its soul heart")
    side.retaliate.set_turns(2)
    side.num_fainted += 1
    remove(mon, battle, fainted=True)


def damage(
    mon: Combatant,
    amount: int,
    battle: BattleContext,
    *,
    move: Optional[BattleMove] = None,
    move_type: Optional[ElementType] = None,
    attacker: Optional[Combatant] = None,
    critical: bool = False,
    drain_ratio: Optional[float] = None,
    source: str = "",
) -> int:
    """Deal damage to mon and run every reaction to it. Returns the HP actually removed."""
    if mon.hp <= 0:
        return 0
    log = battle.log
    rng = battle.rng
    previous_hp = mon.hp
    amount = max(1, amount)

    if mon.ability(attacker, move) == Ability.MAGIC_GUARD and move is None and not _is(attacker, mon):
        log.add("magic_guard", name=mon.name)
        return 0

    if (
        mon.substitute > 0
        and move is not None
        and is_affected_by_substitute(move)
        and not is_sound_based(move)
        and (attacker is None or attacker.ability() != Ability.INFILTRATOR)
    ):
        log.add("substitute_damage", name=mon.name, amount=amount, source=source)
        remaining = max(0, mon.substitute - amount)
        absorbed = mon.substitute - remaining
        mon.substitute = remaining
        if remaining == 0:
            log.add("substitute_broke", name=mon.name)
        return absorbed

    # Forms that take the hit instead
    if move is not None:
        if mon.ability(attacker, move) == Ability.DISGUISE and mon.species == "Mimikyu" and mon.form("Mimikyu-busted"):
            log.add("disguise_busted", name=mon.name)
            damage(mon, mon.starting_hp // 8, battle, source="losing its disguise")
            return 0
        if (
            mon.ability(attacker, move) == Ability.ICE_FACE
            and mon.species == "Eiscue"
            and move.damage_class == DamageClass.PHYSICAL
            and mon.form("Eiscue-noice")
        ):
            log.add("ice_face_busted", name=mon.name)
            return 0

    mon.dmg_this_turn = True
    if amount >= mon.hp and move is not None:
        if mon.endure:
            log.add("endured", name=mon.name)
            amount = mon.hp - 1
        elif mon.hp == mon.starting_hp and mon.ability(attacker, move) == Ability.STURDY:
            log.add("endured_sturdy", name=mon.name)
            amount = mon.hp - 1
        elif mon.hp == mon.starting_hp and mon.item(battle) == "focus-sash":
            log.add("held_on", name=mon.name, item="focus sash")
            amount = mon.hp - 1
            mon.use_item()
        elif mon.item(battle) == "focus-band" and rng.chance(1, 10):
            log.add("held_on", name=mon.name, item="focus band")
            amount = mon.hp - 1

    above_half = mon.hp > mon.starting_hp // 2
    new_hp = max(0, mon.hp - amount)
    true_damage = mon.hp - new_hp
    mon.hp = new_hp
    dropped_below_half = above_half and mon.hp <= mon.starting_hp // 2
    log.add("took_damage", name=mon.name, amount=amount, source=source)
    mon.num_hits += 1

    if drain_ratio is not None and attacker is not None:
        drained = int(true_damage * drain_ratio)
        if attacker.item(battle) == "big-root":
            drained = int(drained * 1.3)
        if mon.ability() == Ability.LIQUID_OOZE:
            damage(attacker, drained, battle, source=f"{mon.name}'s liquid ooze")
        elif not attacker.heal_block.active():
            heal(attacker, drained, battle, source=source)

    if mon.hp == 0:
        faint(mon, battle, move=move, attacker=attacker)
        if (
            mon.ability() == Ability.AFTERMATH
            and attacker is not None
            and not _is(attacker, mon)
            and attacker.ability() != Ability.DAMP
            and move is not None
            and makes_contact(move, attacker)
        ):
            damage(attacker, attacker.starting_hp // 4, battle, source=f"{mon.name}'s aftermath")
        if attacker is not None and attacker.ability() == Ability.MOXIE:
            append_stat(attacker, 1, attacker, None, StatKind.ATTACK, battle, source="its moxie")
        if attacker is not None and attacker.ability() == Ability.BEAST_BOOST:
            append_stat(attacker, 1, attacker, None, highest_raw_stat(attacker), battle, source="its beast boost", check_looping=False)
        if attacker is not None and mon.ability() == Ability.INNARDS_OUT:
            damage(attacker, previous_hp, battle, attacker=mon, source=f"{mon.name}'s innards out")
    elif move is not None and move_type is not None:
        _on_hit_reactions(mon, battle, move, move_type, attacker, critical, dropped_below_half)

    if move is not None:
        mon.last_move_damage = (max(1, amount), int(move.damage_class))
        if mon.bide is not None:
            mon.bide += amount
        if mon.rage:
            append_stat(mon, 1, mon, None, StatKind.ATTACK, battle, source="its rage")
        if attacker is not None:
            _on_attacker_after_hit(mon, battle, move, attacker, amount)

    if dropped_below_half and sum(1 for p in battle.side_of(mon).party if p.hp > 0) > 1:
        if mon.ability() == Ability.WIMP_OUT:
            log.add("wimped_out", name=mon.name)
            remove(mon, battle)
        elif mon.ability() == Ability.EMERGENCY_EXIT:
            log.add("emergency_exit", name=mon.name)
            remove(mon, battle)

    if attacker is not None and mon.species in ("Cramorant-gulping", "Cramorant-gorging") and battle.side_of(mon).has_alive_pokemon():
        prey = "pikachu" if mon.species == "Cramorant-gorging" else "arrokuda"
        if mon.form("Cramorant"):
            spit = f"{mon.name} spitting out its {prey}"
            damage(attacker, attacker.starting_hp // 4, battle, source=spit)
            if prey == "arrokuda":
                append_stat(attacker, -1, mon, None, StatKind.DEFENSE, battle, source=spit)
            else:
                apply_status(attacker, NonVolatileStatus.PARALYSIS, battle, attacker=mon, source=spit)

    if should_eat_berry_damage(mon, battle, attacker):
        eat_berry(mon, battle, attacker=attacker, move=move)

    if move is not None and attacker is not None and makes_contact(move, attacker):
        _contact_reactions(mon, battle, move, attacker)

    return true_damage


def _on_hit_reactions(
    mon: Combatant,
    battle: BattleContext,
    move: BattleMove,
    move_type: ElementType,
    attacker: Optional[Combatant],
    critical: bool,
    dropped_below_half: bool,
) -> None:
    """Reactions of a combatant that survived a damaging move."""
    from duel_engine.field_ops import set_terrain, set_weather

    log = battle.log
    ability = mon.ability()
    if mon.status == NonVolatileStatus.FREEZE and (move_type == ElementType.FIRE or move.effect in (458, 500)):
        reset_status(mon)
        log.add("thawed", name=mon.name)
    if ability == Ability.COLOR_CHANGE and move_type not in mon.types:
        mon.types = [move_type]
        log.add("color_change", name=mon.name, type=move_type.pretty)
    if ability == Ability.ANGER_POINT and critical:
        append_stat(mon, 6, mon, None, StatKind.ATTACK, battle, source="its anger point")
    if ability == Ability.WEAK_ARMOR and move.damage_class == DamageClass.PHYSICAL and not _is(attacker, mon):
        append_stat(mon, -1, mon, None, StatKind.DEFENSE, battle, source="its weak armor")
        append_stat(mon, 2, mon, None, StatKind.SPEED, battle, source="its weak armor")
    if ability == Ability.JUSTIFIED and move_type == ElementType.DARK:
        append_stat(mon, 1, mon, None, StatKind.ATTACK, battle, source="justified")
    if ability == Ability.RATTLED and move_type in (ElementType.BUG, ElementType.DARK, ElementType.GHOST):
        append_stat(mon, 1, mon, None, StatKind.SPEED, battle, source="its rattled")
    if ability == Ability.STAMINA:
        append_stat(mon, 1, mon, None, StatKind.DEFENSE, battle, source="its stamina")
    if ability == Ability.WATER_COMPACTION and move_type == ElementType.WATER:
        append_stat(mon, 2, mon, None, StatKind.DEFENSE, battle, source="its water compaction")
    if ability == Ability.BERSERK and dropped_below_half:
        append_stat(mon, 1, mon, None, StatKind.SP_ATK, battle, source="its berserk")
    if ability == Ability.ANGER_SHELL and dropped_below_half:
        for stat, delta in (
            (StatKind.ATTACK, 1),
            (StatKind.SP_ATK, 1),
            (StatKind.SPEED, 1),
            (StatKind.DEFENSE, -1),
            (StatKind.SP_DEF, -1),
        ):
            append_stat(mon, delta, mon, None, stat, battle, source="its anger shell")
    if ability == Ability.STEAM_ENGINE and move_type in (ElementType.FIRE, ElementType.WATER):
        append_stat(mon, 6, mon, None, StatKind.SPEED, battle, source="its steam engine")
    if ability == Ability.THERMAL_EXCHANGE and move_type == ElementType.FIRE:
        append_stat(mon, 1, mon, None, StatKind.ATTACK, battle, source="its thermal exchange")
    if ability == Ability.WIND_RIDER and is_wind(move):
        append_stat(mon, 1, mon, None, StatKind.ATTACK, battle, source="its wind rider")
    if ability == Ability.COTTON_DOWN and attacker is not None:
        append_stat(attacker, -1, mon, None, StatKind.SPEED, battle, source=f"{mon.name}'s cotton down")
    if ability == Ability.SAND_SPIT:
        set_weather(battle, WeatherKind.SANDSTORM, mon)
    if ability == Ability.SEED_SOWER and battle.terrain.kind == TerrainKind.NONE:
        set_terrain(battle, TerrainKind.GRASSY, mon)
    if ability == Ability.ELECTROMORPHOSIS:
        mon.charge.set_turns(2)
        log.add("charged_by", name=mon.name, ability="electromorphosis")
    if ability == Ability.WIND_POWER and is_wind(move):
        mon.charge.set_turns(2)
        log.add("charged_by", name=mon.name, ability="wind power")
    if ability == Ability.TOXIC_DEBRIS and move.damage_class == DamageClass.PHYSICAL:
        if attacker is not None and not _is(attacker, mon):
            attacker_side = battle.side_of(attacker)
            if attacker_side.toxic_spikes < 2:
                attacker_side.toxic_spikes += 1
                log.add("toxic_debris", side=attacker_side.name, name=mon.name)
    if mon.illusion_name is not None:
        mon.species = mon.illusion_species or mon.species
        mon.name = mon.illusion_name
        mon.illusion_species = None
        mon.illusion_name = None
        log.add("illusion_broke", name=mon.name)
    if mon.item(battle) == "air-balloon":
        mon.remove_item()
        log.add("air_balloon_popped", name=mon.name)


def _on_attacker_after_hit(mon: Combatant, battle: BattleContext, move: BattleMove, attacker: Combatant, amount: int) -> None:
    log = battle.log
    rng = battle.rng
    if (
        mon.ability() == Ability.CURSED_BODY
        and not attacker.disable.active()
        and attacker.moveset_entry(move.id) is not None
        and rng.percent(30)
    ):
        if attacker.ability() == Ability.AROMA_VEIL:
            log.add("aroma_veil_disable", name=attacker.name)
        else:
            attacker.disable.set(move.id, 4)
            log.add("cursed_body", name=attacker.name, move=move.pretty_name, other=mon.name)
    if attacker.ability() == Ability.MAGICIAN and not attacker.held.has_item() and mon.held.has_item() and mon.held.can_remove():
        mon.transfer_item(attacker)
        log.add("magician", name=attacker.name, item=attacker.held.name)
    if attacker.ability() == Ability.TOXIC_CHAIN and rng.percent(30):
        apply_status(mon, NonVolatileStatus.BADLY_POISONED, battle, attacker=attacker, source=f"{attacker.name}'s toxic chain")
    if attacker.item(battle) == "shell-bell":
        # Sheer force boosted moves do not trigger shell bell
        if attacker.ability() != Ability.SHEER_FORCE or move.effect_chance is None:
            heal(attacker, amount // 8, battle, source="its shell bell")


def _contact_reactions(mon: Combatant, battle: BattleContext, move: BattleMove, attacker: Combatant) -> None:
    log = battle.log
    rng = battle.rng
    ability = mon.ability()
    side_alive = battle.side_of(mon).has_alive_pokemon()
    padded = attacker.item(battle) == "protective-pads"
    if not padded:
        if mon.beak_blast:
            apply_status(attacker, NonVolatileStatus.BURN, battle, attacker=attacker, source=f"{mon.name}'s charging beak blast")
        if ability == Ability.STATIC and rng.percent(30):
            apply_status(attacker, NonVolatileStatus.PARALYSIS, battle, attacker=attacker, source=f"{mon.name}'s static")
        if ability == Ability.POISON_POINT and rng.percent(30):
            apply_status(attacker, NonVolatileStatus.POISON, battle, attacker=attacker, source=f"{mon.name}'s poison point")
        if ability == Ability.FLAME_BODY and rng.percent(30):
            apply_status(attacker, NonVolatileStatus.BURN, battle, attacker=attacker, source=f"{mon.name}'s flame body")
        if ability == Ability.ROUGH_SKIN and side_alive:
            damage(attacker, attacker.starting_hp // 8, battle, source=f"{mon.name}'s rough skin")
        if ability == Ability.IRON_BARBS and side_alive:
            damage(attacker, attacker.starting_hp // 8, battle, source=f"{mon.name}'s iron barbs")
        if (
            ability == Ability.EFFECT_SPORE
            and attacker.ability() != Ability.OVERCOAT
            and ElementType.GRASS not in attacker.types
            and attacker.item(battle) != "safety-glasses"
            and rng.percent(30)
        ):
            statuses = (NonVolatileStatus.PARALYSIS, NonVolatileStatus.POISON, NonVolatileStatus.SLEEP)
            apply_status(attacker, statuses[rng.choice_index(len(statuses))], battle, attacker=attacker)
        if ability == Ability.CUTE_CHARM and rng.percent(30):
            infatuate(attacker, mon, battle, source=f"{mon.name}'s cute charm")
        for spreading in (Ability.MUMMY, Ability.LINGERING_AROMA):
            if ability == spreading and attacker.ability() != spreading and attacker.ability_changeable():
                attacker.ability_id = spreading
                log.add("gained_ability", name=attacker.name, ability=spreading.pretty, other=mon.name)
                send_out_ability(attacker, mon, battle)
        if ability == Ability.GOOEY:
            append_stat(attacker, -1, mon, None, StatKind.SPEED, battle, source=f"touching {mon.name}'s gooey body")
        if ability == Ability.TANGLING_HAIR:
            append_stat(attacker, -1, mon, None, StatKind.SPEED, battle, source=f"touching {mon.name}'s tangled hair")
        if mon.item(battle) == "rocky-helmet" and side_alive:
            damage(attacker, attacker.starting_hp // 6, battle, source=f"{mon.name}'s rocky helmet")

    # Pickpocket ignores protective pads
    if ability == Ability.PICKPOCKET and not mon.held.has_item() and attacker.held.has_item() and attacker.held.can_remove():
        if attacker.ability() == Ability.STICKY_HOLD:
            log.add("sticky_hold", name=attacker.name)
        else:
            attacker.transfer_item(mon)
            log.add("item_stolen", name=attacker.name, item=mon.held.name)

    if attacker.ability() == Ability.POISON_TOUCH and rng.percent(30):
        apply_status(mon, NonVolatileStatus.POISON, battle, attacker=attacker, move=move, source=f"{attacker.name}'s poison touch")

    if not padded and ability == Ability.PERISH_BODY and not attacker.perish_song.active():
        attacker.perish_song.set_turns(4)
        mon.perish_song.set_turns(4)
        log.add("perish_body", name=mon.name)

    if ability == Ability.WANDERING_SPIRIT and attacker.ability_changeable() and attacker.ability_giveable():
        log.add("wandering_spirit", name=attacker.name, other=mon.name)
        mon.ability_id, attacker.ability_id = attacker.ability_id, mon.ability_id
        log.add("acquired_ability", name=mon.name, ability=mon.ability_id.pretty)
        send_out_ability(mon, attacker, battle)
        log.add("acquired_ability", name=attacker.name, ability=attacker.ability_id.pretty)
        send_out_ability(attacker, mon, battle)


# =============================================================================
# STAT STAGES
# =============================================================================
def append_stat(
    mon: Combatant,
    delta: int,
    attacker: Optional[Combatant],
    move: Optional[BattleMove],
    stat: StatKind,
    battle: BattleContext,
    source: str = "",
    check_looping: bool = True,
) -> int:
    """Change one stat stage, applying every ability and field interaction.

    Returns the change actually applied (0 when blocked or already at the limit).
    """
    log = battle.log
    if mon.substitute > 0 and attacker is not None and not _is(attacker, mon) and (move is None or is_affected_by_substitute(move)):
        return 0
    ability = mon.ability(attacker, move)
    if ability == Ability.SIMPLE:
        delta *= 2
    if ability == Ability.CONTRARY:
        delta *= -1

    current = mon.get_stage(stat)
    if delta < 0:
        delta = max(delta, -6 - current)
        if delta == 0:
            log.add("stat_wont_go_lower", name=mon.name, stat=stat.value)
            return 0
    else:
        delta = min(delta, 6 - current)
        if delta == 0:
            log.add("stat_wont_go_higher", name=mon.name, stat=stat.value)
            return 0

    if delta < 0 and not _is(attacker, mon):
        if ability in (Ability.CLEAR_BODY, Ability.WHITE_SMOKE, Ability.FULL_METAL_BODY):
            log.add("stat_drop_prevented", name=mon.name, ability=mon.ability_id.pretty, stat=stat.value)
            return 0
        if ability == Ability.HYPER_CUTTER and stat == StatKind.ATTACK:
            log.add("hyper_cutter", name=mon.name)
            return 0
        if ability in (Ability.KEEN_EYE, Ability.MINDS_EYE) and stat == StatKind.ACCURACY:
            log.add("aim_stayed_true", name=mon.name, ability=ability.pretty)
            return 0
        if ability == Ability.BIG_PECKS and stat == StatKind.DEFENSE:
            log.add("big_pecks", name=mon.name)
            return 0
        if battle.side_of(mon).mist.active() and (attacker is None or attacker.ability() != Ability.INFILTRATOR):
            log.add("mist_prevented", name=mon.name, stat=stat.value)
            return 0
        if ability == Ability.FLOWER_VEIL and ElementType.GRASS in mon.types:
            return 0
        if ability == Ability.MIRROR_ARMOR and attacker is not None and check_looping:
            log.add("mirror_armor", name=mon.name)
            return append_stat(attacker, delta, mon, None, stat, battle, check_looping=False)

    if delta > 0:
        mon.stat_increased = True
    else:
        mon.stat_decreased = True
    mon.set_stage(stat, current + delta)
    log.add(_STAT_MESSAGES[max(-3, min(3, delta))], name=mon.name, stat=stat.value, source=source)

    if delta < 0:
        if not _is(attacker, mon):
            if ability == Ability.DEFIANT:
                append_stat(mon, 2, mon, None, StatKind.ATTACK, battle, source="its defiance")
            if ability == Ability.COMPETITIVE:
                append_stat(mon, 2, mon, None, StatKind.SP_ATK, battle, source="its competitiveness")
        if mon.item(battle) == "eject-pack" and valid_swaps(battle.side_of(mon), battle, check_trap=False):
            log.add("eject_pack", name=mon.name)
            mon.use_item()
            remove(mon, battle)
            battle.side_of(mon).mid_turn_remove = True
    else:
        for other in battle.active_mons():
            if other.uid != mon.uid and other.ability() == Ability.OPPORTUNIST and check_looping:
                log.add("opportunist", name=other.name)
                append_stat(other, delta, other, None, stat, battle, check_looping=False)
    return delta


# =============================================================================
# NON-VOLATILE STATUS
# =============================================================================
def reset_status(mon: Combatant) -> None:
    mon.status = NonVolatileStatus.NONE
    mon.badly_poisoned_turn = 0
    mon.sleep_timer.set_turns(0)
    mon.nightmare = False


def apply_status(
    mon: Combatant,
    status: NonVolatileStatus,
    battle: BattleContext,
    *,
    attacker: Optional[Combatant] = None,
    move: Optional[BattleMove] = None,
    turns: Optional[int] = None,
    force: bool = False,
    source: str = "",
) -> bool:
    """Try to give mon a non-volatile status. Returns True when it took hold."""
    log = battle.log
    name = mon.name
    ability = mon.ability(attacker, move)
    weather = battle.weather_now()
    grounded = mon.grounded(battle, attacker, move)

    if mon.has_status() and not force:
        log.add("already_has_status", name=name, status=status.value)
        return False
    if ability == Ability.COMATOSE:
        log.add("already_has_status", name=name, status=status.value)
        return False
    if ability == Ability.PURIFYING_SALT:
        log.add("status_protected_by", name=name, protector="purifying salt", status=status.value)
        return False
    if ability == Ability.LEAF_GUARD and weather in SUNNY:
        log.add("status_protected_by", name=name, protector="leaf guard", status=status.value)
        return False
    if mon.substitute > 0 and not _is(attacker, mon) and (move is None or is_affected_by_substitute(move)):
        log.add("status_protected_by", name=name, protector="substitute", status=status.value)
        return False
    if battle.side_of(mon).safeguard.active() and not _is(attacker, mon) and (attacker is None or attacker.ability() != Ability.INFILTRATOR):
        log.add("status_protected_by", name=name, protector="safeguard", status=status.value)
        return False
    if grounded and battle.terrain_now() == TerrainKind.MISTY:
        log.add("misty_terrain_status", name=name, status=status.value)
        return False
    if ability == Ability.FLOWER_VEIL and ElementType.GRASS in mon.types:
        log.add("status_protected_by", name=name, protector="flower veil", status=status.value)
        return False
    if mon.species == "Minior":
        log.add("minior_shell")
        return False

    if status == NonVolatileStatus.BURN:
        if ElementType.FIRE in mon.types:
            log.add("type_immune_status", name=name, article="a", type="fire", verb="burned")
            return False
        if ability in (Ability.WATER_VEIL, Ability.WATER_BUBBLE):
            log.add("ability_prevents_burn", name=name, ability=mon.ability_id.pretty)
            return False
        mon.status = status
        log.add("burned", name=name, source=source)
    elif status == NonVolatileStatus.SLEEP:
        if ability in _SLEEP_IMMUNITIES:
            log.add("keeps_awake", name=name, ability=mon.ability_id.pretty)
            return False
        if grounded and battle.terrain_now() == TerrainKind.ELECTRIC:
            log.add("electric_terrain_sleep", name=name)
            return False
        if any(other.uproar.active() for other in battle.active_mons()):
            log.add("uproar_sleep", name=name)
            return False
        if turns is None:
            turns = battle.rng.randint(2, 4)
        if ability == Ability.EARLY_BIRD:
            turns //= 2
        mon.status = status
        mon.sleep_timer.set_turns(turns)
        log.add("fell_asleep", name=name, source=source)
    elif status in (NonVolatileStatus.POISON, NonVolatileStatus.BADLY_POISONED):
        if attacker is None or attacker.ability() != Ability.CORROSION:
            if ElementType.STEEL in mon.types:
                log.add("type_immune_status", name=name, article="a", type="steel", verb="poisoned")
                return False
            if ElementType.POISON in mon.types:
                log.add("type_immune_status", name=name, article="a", type="poison", verb="poisoned")
                return False
        if ability in (Ability.IMMUNITY, Ability.PASTEL_VEIL):
            log.add("keeps_from_poison", name=name, ability=mon.ability_id.pretty)
            return False
        mon.status = status
        if status == NonVolatileStatus.BADLY_POISONED:
            log.add("badly_poisoned", name=name, source=source)
        else:
            log.add("poisoned", name=name, source=source)
        if move is not None and attacker is not None and attacker.ability() == Ability.POISON_PUPPETEER:
            confuse(mon, battle, attacker=attacker, source=f"{attacker.name}'s poison puppeteer")
    elif status == NonVolatileStatus.PARALYSIS:
        if ElementType.ELECTRIC in mon.types:
            log.add("type_immune_status", name=name, article="an", type="electric", verb="paralyzed")
            return False
        if ability == Ability.LIMBER:
            log.add("limber", name=name)
            return False
        mon.status = status
        log.add("paralyzed", name=name, source=source)
    elif status == NonVolatileStatus.FREEZE:
        if ElementType.ICE in mon.types:
            log.add("type_immune_status", name=name, article="an", type="ice", verb="frozen")
            return False
        if ability == Ability.MAGMA_ARMOR:
            log.add("magma_armor", name=name)
            return False
        if weather in SUNNY:
            log.add("too_sunny_to_freeze", name=name)
            return False
        mon.status = status
        log.add("frozen", name=name, source=source)
    else:
        return False

    if ability == Ability.SYNCHRONIZE and attacker is not None and not _is(attacker, mon):
        apply_status(attacker, status, battle, attacker=mon, source=f"{name}'s synchronize")
    if should_eat_berry_status(mon, battle, attacker):
        eat_berry(mon, battle, attacker=attacker, move=move)
    return True


# =============================================================================
# VOLATILE CONDITIONS
# =============================================================================
def confuse(
    mon: Combatant,
    battle: BattleContext,
    *,
    attacker: Optional[Combatant] = None,
    move: Optional[BattleMove] = None,
    source: str = "",
) -> bool:
    if mon.substitute > 0 and (move is None or is_affected_by_substitute(move)):
        return False
    if mon.confusion.active():
        return False
    if mon.ability(attacker, move) == Ability.OWN_TEMPO:
        return False
    mon.confusion.set_turns(battle.rng.randint(2, 5))
    battle.log.add("confused", name=mon.name, source=source)
    if should_eat_berry_status(mon, battle, attacker):
        eat_berry(mon, battle, attacker=attacker, move=move)
    return True


def flinch(
    mon: Combatant,
    battle: BattleContext,
    *,
    attacker: Optional[Combatant] = None,
    move: Optional[BattleMove] = None,
    source: str = "",
) -> bool:
    if mon.substitute > 0 and (move is None or is_affected_by_substitute(move)):
        return False
    if mon.ability(attacker, move) == Ability.INNER_FOCUS:
        battle.log.add("inner_focus", name=mon.name)
        return False
    mon.flinched = True
    battle.log.add("flinched", name=mon.name, source=source)
    if mon.ability() == Ability.STEADFAST:
        append_stat(mon, 1, mon, None, StatKind.SPEED, battle, source="its steadfast")
    return True


def infatuate(
    mon: Combatant,
    attacker: Combatant,
    battle: BattleContext,
    *,
    move: Optional[BattleMove] = None,
    source: str = "",
) -> bool:
    """Make mon fall in love with attacker. Needs two known, opposite genders."""
    if mon.gender is None or attacker.gender is None or mon.gender == attacker.gender:
        return False
    ability = mon.ability(attacker, move)
    if ability == Ability.OBLIVIOUS:
        battle.log.add("too_oblivious_for_love", name=mon.name)
        return False
    if ability == Ability.AROMA_VEIL:
        battle.log.add("aroma_veil_love", name=mon.name)
        return False
    mon.infatuated = attacker.uid
    battle.log.add("fell_in_love", name=mon.name, source=source)
    if mon.item(battle) == "destiny-knot":
        infatuate(attacker, mon, battle, source=f"{mon.name}'s destiny knot")
    return True


# =============================================================================
# BERRIES
# =============================================================================
def _berry_usable(mon: Combatant, battle: BattleContext, other: Optional[Combatant]) -> bool:
    if mon.hp == 0:
        return False
    if other is not None and other.ability() in UNNERVE_ABILITIES:
        return False
    return mon.is_berry(battle)


def should_eat_berry_damage(mon: Combatant, battle: BattleContext, other: Optional[Combatant] = None) -> bool:
    if not _berry_usable(mon, battle, other):
        return False
    item = mon.item(battle)
    if mon.hp <= mon.starting_hp // 4 and item in PINCH_BERRIES:
        return True
    if mon.hp <= mon.starting_hp // 2:
        return mon.ability() == Ability.GLUTTONY or item == "sitrus-berry"
    return False


def should_eat_berry_status(mon: Combatant, battle: BattleContext, other: Optional[Combatant] = None) -> bool:
    if not _berry_usable(mon, battle, other):
        return False
    item = mon.item(battle)
    cures = {
        NonVolatileStatus.FREEZE: "aspear-berry",
        NonVolatileStatus.PARALYSIS: "cheri-berry",
        NonVolatileStatus.SLEEP: "chesto-berry",
        NonVolatileStatus.POISON: "pecha-berry",
        NonVolatileStatus.BADLY_POISONED: "pecha-berry",
        NonVolatileStatus.BURN: "rawst-berry",
    }
    if mon.has_status() and item in (cures[mon.status], "lum-berry"):
        return True
    return mon.confusion.active() and item in ("persim-berry", "lum-berry")


def should_eat_berry(mon: Combatant, battle: BattleContext, other: Optional[Combatant] = None) -> bool:
    return should_eat_berry_damage(mon, battle, other) or should_eat_berry_status(mon, battle, other)


def _berry_cures(consumer: Combatant, berry: str) -> bool:
    if berry == "aspear-berry":
        return consumer.status == NonVolatileStatus.FREEZE
    if berry == "cheri-berry":
        return consumer.status == NonVolatileStatus.PARALYSIS
    if berry == "chesto-berry":
        return consumer.status == NonVolatileStatus.SLEEP
    if berry == "pecha-berry":
        return consumer.is_poisoned()
    if berry == "rawst-berry":
        return consumer.status == NonVolatileStatus.BURN
    return consumer.confusion.active()


def eat_berry(
    mon: Combatant,
    battle: BattleContext,
    *,
    consumer: Optional[Combatant] = None,
    attacker: Optional[Combatant] = None,
    move: Optional[BattleMove] = None,
) -> None:
    """Eat mon's held berry. A consumer other than the holder (bug bite, pluck) steals the effect."""
    log = battle.log
    if not mon.is_berry(battle):
        return
    if consumer is None:
        consumer = mon
    else:
        log.add("eats_berry", name=consumer.name, other=mon.name)
    berry = mon.item(battle)
    ripe = 2 if consumer.ability(attacker, move) == Ability.RIPEN else 1
    source = "eating its berry"
    stat_berries = {
        "apicot-berry": StatKind.SP_DEF,
        "ganlon-berry": StatKind.DEFENSE,
        "liechi-berry": StatKind.ATTACK,
        "petaya-berry": StatKind.SP_ATK,
        "salac-berry": StatKind.SPEED,
    }

    if berry == "sitrus-berry":
        heal(consumer, ripe * consumer.starting_hp // 4, battle, source=source)
    elif berry in HP_BERRY_FLAVORS:
        heal(consumer, ripe * consumer.starting_hp // 3, battle, source=source)
    elif berry in stat_berries:
        append_stat(consumer, ripe, attacker, move, stat_berries[berry], battle, source=source)
    elif berry == "lansat-berry":
        consumer.lansat_berry_ate = True
        log.add("powered_up_by_berry", name=consumer.name)
    elif berry == "micle-berry":
        consumer.micle_berry_ate = True
        log.add("powered_up_by_berry", name=consumer.name)
    elif berry == "starf-berry":
        stat = CORE_STATS[battle.rng.choice_index(len(CORE_STATS))]
        append_stat(consumer, ripe * 2, attacker, move, stat, battle, source=source, check_looping=False)
    elif berry in STATUS_BERRY_CURES:
        if _berry_cures(consumer, berry):
            if berry == "persim-berry":
                consumer.confusion.set_turns(0)
            else:
                reset_status(consumer)
            log.add("berry_cured", name=consumer.name, cure=STATUS_BERRY_CURES[berry])
        else:
            log.add("berry_no_effect", name=consumer.name)
    elif berry == "lum-berry":
        reset_status(consumer)
        consumer.confusion.set_turns(0)
        log.add("lum_berry", name=consumer.name)

    flavor = HP_BERRY_FLAVORS.get(berry)
    if flavor is not None and consumer.disliked_flavor == flavor:
        confuse(consumer, battle, attacker=attacker, move=move, source="disliking its berry's flavor")
    if consumer.ability(attacker, move) == Ability.CHEEK_POUCH:
        heal(consumer, consumer.starting_hp // 3, battle, source="its cheek pouch")

    consumer.last_berry = berry
    consumer.ate_berry = True
    if consumer.ability(attacker, move) == Ability.CUD_CHEW:
        consumer.cud_chew.set_turns(2)
    if consumer is mon:
        mon.use_item()
    else:
        mon.remove_item()


# =============================================================================
# TRANSFORMATION
# =============================================================================
def transform(mon: Combatant, other: Combatant) -> None:
    """Copy other's species, stats, moves (5 PP each), ability, types and stat stages."""
    mon.choice_move = None
    mon.species = other.species
    mon.name = mon.display_name(other.species)
    mon.attack = other.attack
    mon.defense = other.defense
    mon.sp_atk = other.sp_atk
    mon.sp_def = other.sp_def
    mon.speed = other.speed
    mon.form_stats.setdefault(other.species, [other.attack, other.defense, other.sp_atk, other.sp_def, other.speed])
    mon.moves = []
    for move in other.moves:
        copy = move.fresh_copy()
        copy.pp = 5
        mon.moves.append(copy)
    mon.ability_id = other.ability_id
    mon.types = list(other.types)
    for stat in (*CORE_STATS, StatKind.ACCURACY, StatKind.EVASION):
        mon.set_stage(stat, other.get_stage(stat))


# =============================================================================
# ENTERING AND LEAVING THE FIELD
# =============================================================================
def send_out(mon: Combatant, battle: BattleContext) -> None:
    """Announce mon entering the field and run hazards, hand-overs and entry abilities."""
    from duel_engine.field_ops import apply_terrain_seed

    log = battle.log
    side = battle.side_of(mon)
    other = battle.opponent_of(mon)
    mon.ever_sent_out = True
    mon.flinched = False

    disguises = [p for p in side.party if p.uid != mon.uid and p.hp > 0]
    if mon.ability() == Ability.ILLUSION and disguises:
        mon.illusion_species = mon.species
        mon.illusion_name = mon.name
        mon.species = disguises[-1].species
        mon.name = disguises[-1].name

    if mon.species == "Pikachu":
        log.add("i_choose_you", name=mon.name)
    else:
        log.add("sent_out", side=side.name, name=mon.name)

    # Effects the previous combatant placed on its opponent end
    if other is not None:
        other.trapping = False
        other.octolock = False
        other.bind.set_turns(0)

    if side.baton_pass is not None:
        log.add("baton_pass_received", name=mon.name)
        side.baton_pass.apply(mon)
        side.baton_pass = None

    if side.next_substitute > 0:
        mon.substitute = side.next_substitute
        side.next_substitute = 0

    # Poison types soak up toxic spikes even through heavy-duty boots
    if side.toxic_spikes > 0 and mon.grounded(battle) and ElementType.POISON in mon.types:
        side.toxic_spikes = 0
        log.add("absorbed_toxic_spikes", name=mon.name)

    if mon.item(battle) != "heavy-duty-boots":
        if mon.grounded(battle):
            if side.spikes > 0:
                damage(mon, mon.starting_hp // (10 - 2 * side.spikes), battle, source="spikes")
            if side.toxic_spikes == 1:
                apply_status(mon, NonVolatileStatus.POISON, battle, source="toxic spikes")
            elif side.toxic_spikes == 2:
                apply_status(mon, NonVolatileStatus.BADLY_POISONED, battle, source="toxic spikes")
            if side.sticky_web:
                append_stat(mon, -1, None, None, StatKind.SPEED, battle, source="the sticky web")
        if side.stealth_rock:
            effective = effectiveness(mon, ElementType.ROCK, battle)
            if effective > 0:
                damage(mon, mon.starting_hp // (32 // int(4 * effective)), battle, source="stealth rock")

    if mon.hp > 0:
        send_out_ability(mon, other, battle)

    if side.healing_wish:
        used = mon.hp != mon.starting_hp or mon.has_status()
        mon.hp = mon.starting_hp
        reset_status(mon)
        if used:
            side.healing_wish = False
            log.add("healing_wish_restored", name=mon.name)

    if side.lunar_dance:
        used = mon.hp != mon.starting_hp or mon.has_status()
        mon.hp = mon.starting_hp
        reset_status(mon)
        for move in mon.moves:
            if move.pp != move.starting_pp:
                used = True
                move.pp = move.starting_pp
        if used:
            side.lunar_dance = False
            log.add("lunar_dance_restored", name=mon.name)

    if mon.item(battle) == "air-balloon" and not mon.grounded(battle):
        log.add("air_balloon", name=mon.name)
    apply_terrain_seed(mon, battle)


def send_out_ability(mon: Combatant, other: Optional[Combatant], battle: BattleContext) -> None:
    """Abilities that announce themselves or act when their holder enters (or gains the ability)."""
    from duel_engine.field_ops import set_terrain, set_weather

    log = battle.log
    ability = mon.ability()

    if ability == Ability.IMPOSTER and other is not None and other.substitute == 0 and other.illusion_name is None:
        log.add("transformed_into", name=mon.name, species=other.species)
        transform(mon, other)
        ability = mon.ability()

    weather_abilities = {
        Ability.DRIZZLE: WeatherKind.RAIN,
        Ability.PRIMORDIAL_SEA: WeatherKind.HEAVY_RAIN,
        Ability.SAND_STREAM: WeatherKind.SANDSTORM,
        Ability.SNOW_WARNING: WeatherKind.HAIL,
        Ability.DROUGHT: WeatherKind.SUN,
        Ability.ORICHALCUM_PULSE: WeatherKind.SUN,
        Ability.DESOLATE_LAND: WeatherKind.HARSH_SUN,
        Ability.DELTA_STREAM: WeatherKind.STRONG_WINDS,
    }
    if ability in weather_abilities:
        set_weather(battle, weather_abilities[ability], mon)
    terrain_abilities = {
        Ability.GRASSY_SURGE: TerrainKind.GRASSY,
        Ability.MISTY_SURGE: TerrainKind.MISTY,
        Ability.ELECTRIC_SURGE: TerrainKind.ELECTRIC,
        Ability.HADRON_ENGINE: TerrainKind.ELECTRIC,
        Ability.PSYCHIC_SURGE: TerrainKind.PSYCHIC,
    }
    if ability in terrain_abilities:
        set_terrain(battle, terrain_abilities[ability], mon)

    if ability == Ability.MOLD_BREAKER:
        log.add("breaks_the_mold", name=mon.name)
    if ability == Ability.TURBOBLAZE:
        log.add("radiating_aura", name=mon.name, aura="blazing")
    if ability == Ability.TERAVOLT:
        log.add("radiating_aura", name=mon.name, aura="bursting")

    if ability == Ability.INTIMIDATE and other is not None:
        _intimidate(mon, other, battle)

    if ability == Ability.SCREEN_CLEANER:
        for side in battle.sides:
            side.aurora_veil.set_turns(0)
            side.light_screen.set_turns(0)
            side.reflect.set_turns(0)
        log.add("screen_cleaner", name=mon.name)

    if ability == Ability.INTREPID_SWORD:
        append_stat(mon, 1, mon, None, StatKind.ATTACK, battle, source="its intrepid sword")
    if ability == Ability.DAUNTLESS_SHIELD:
        append_stat(mon, 1, mon, None, StatKind.DEFENSE, battle, source="its dauntless shield")
    if ability == Ability.TRACE and other is not None and other.ability_giveable():
        mon.ability_id = other.ability_id
        log.add("traced", name=mon.name, other=other.name)
        send_out_ability(mon, other, battle)
        return

    if ability == Ability.DOWNLOAD and other is not None:
        if get_sp_def(other, battle) > get_defense(other, battle):
            append_stat(mon, 1, mon, None, StatKind.ATTACK, battle, source="its download")
        else:
            append_stat(mon, 1, mon, None, StatKind.SP_ATK, battle, source="its download")

    if ability == Ability.ANTICIPATION and other is not None:
        for move in other.moves:
            if move.effect == 39 or effectiveness(mon, move.type, battle) > 1:
                log.add("anticipation", name=mon.name)
                break

    if ability == Ability.FOREWARN and other is not None:
        _forewarn(mon, other, battle)

    if ability == Ability.FRISK and other is not None and other.held.has_item():
        log.add("frisk", name=mon.name, other=other.name, item=other.held.name)

    if ability == Ability.MULTITYPE and mon.species.startswith("Arceus"):
        _judgment_form(mon, battle, "Arceus", "multitype")
    if ability == Ability.RKS_SYSTEM and mon.species.startswith("Silvally"):
        _judgment_form(mon, battle, "Silvally", "rks system")

    if ability == Ability.TRUANT:
        mon.truant_turn = 0

    if ability == Ability.FORECAST and mon.species in ("Castform", "Castform-snowy", "Castform-rainy", "Castform-sunny"):
        _forecast(mon, battle)

    if ability == Ability.MIMICRY and battle.terrain.kind != TerrainKind.NONE:
        element = _terrain_type(battle.terrain.kind)
        mon.types = [element]
        log.add("mimicry_transformed", name=mon.name, type=element.pretty)

    if ability == Ability.WIND_RIDER and battle.side_of(mon).tailwind.active():
        append_stat(mon, 1, mon, None, StatKind.ATTACK, battle, source="its wind rider")
    if ability == Ability.SUPERSWEET_SYRUP and not mon.supersweet_syrup and other is not None:
        mon.supersweet_syrup = True
        append_stat(other, -1, mon, None, StatKind.EVASION, battle, source=f"{mon.name}'s supersweet syrup")


def _intimidate(mon: Combatant, other: Combatant, battle: BattleContext) -> None:
    log = battle.log
    resisted = {
        Ability.OBLIVIOUS: "intimidate_oblivious",
        Ability.OWN_TEMPO: "intimidate_own_tempo",
        Ability.INNER_FOCUS: "intimidate_inner_focus",
        Ability.SCRAPPY: "intimidate_scrappy",
    }
    other_ability = other.ability()
    if other_ability in resisted:
        log.add(resisted[other_ability], name=other.name)
    elif other_ability == Ability.GUARD_DOG:
        log.add("intimidate_guard_dog", name=other.name)
        append_stat(other, 1, other, None, StatKind.ATTACK, battle, source="its guard dog")
    else:
        append_stat(other, -1, mon, None, StatKind.ATTACK, battle, source=f"{mon.name}'s Intimidate")
        if other.item(battle) == "adrenaline-orb":
            append_stat(other, 1, other, None, StatKind.SPEED, battle, source="its adrenaline orb")
        if other.ability() == Ability.RATTLED:
            append_stat(other, 1, other, None, StatKind.SPEED, battle, source="its rattled")


def _forewarn(mon: Combatant, other: Combatant, battle: BattleContext) -> None:
    best_moves: list[BattleMove] = []
    best_power = 0
    for move in other.moves:
        if move.damage_class == DamageClass.STATUS:
            power = 0
        elif move.effect == 39:
            power = 150
        elif move.power is None:
            power = 80
        else:
            power = move.power
        if power > best_power:
            best_power = power
            best_moves = [move]
        elif power == best_power:
            best_moves.append(move)
    if best_moves:
        move = best_moves[battle.rng.choice_index(len(best_moves))]
        battle.log.add("forewarn", name=mon.name, other=other.name, move=move.pretty_name)


def _judgment_form(mon: Combatant, battle: BattleContext, base: str, ability_name: str) -> None:
    item = mon.item(battle)
    element = JUDGMENT_ITEM_TYPES.get(item) if item is not None else None
    if element is None:
        return
    # Plates only work for Arceus, memories only for Silvally
    if base == "Arceus" and not item.endswith("-plate"):
        return
    if base == "Silvally" and not item.endswith("-memory"):
        return
    if mon.form(f"{base}-{element.pretty}"):
        mon.types = [element]
        battle.log.add("type_transformed", name=mon.name, type=element.pretty, ability=ability_name)


def _forecast(mon: Combatant, battle: BattleContext) -> None:
    weather = battle.weather_now()
    if weather == WeatherKind.HAIL:
        target, element = "Castform-snowy", ElementType.ICE
    elif weather in RAINY:
        target, element = "Castform-rainy", ElementType.WATER
    elif weather in SUNNY:
        target, element = "Castform-sunny", ElementType.FIRE
    else:
        target, element = "Castform", ElementType.NORMAL
    if mon.species != target and mon.form(target):
        mon.types = [element]
        battle.log.add("type_transformed", name=mon.name, type=element.pretty, ability="forecast")


def _terrain_type(kind: TerrainKind) -> ElementType:
    return {
        TerrainKind.ELECTRIC: ElementType.ELECTRIC,
        TerrainKind.GRASSY: ElementType.GRASS,
        TerrainKind.MISTY: ElementType.FAIRY,
        TerrainKind.PSYCHIC: ElementType.PSYCHIC,
    }[kind]


def remove(mon: Combatant, battle: BattleContext, fainted: bool = False) -> None:
    """Take mon off the field and wipe everything that does not survive a switch."""
    from duel_engine.field_ops import recheck_ability_weather

    log = battle.log
    side = battle.side_of(mon)
    if not fainted:
        if mon.ability() == Ability.NATURAL_CURE and mon.has_status():
            log.add("natural_cure", name=mon.name, status=mon.status.value)
            reset_status(mon)
        if mon.ability() == Ability.REGENERATOR:
            heal(mon, mon.starting_hp // 3, battle, source="its regenerator")
        if mon.ability() == Ability.ZERO_TO_HERO and mon.form("Palafin-hero"):
            log.add("ready_to_be_a_hero", name=mon.name)

    if mon.illusion_name is not None:
        mon.species = mon.illusion_species or mon.species
        mon.name = mon.illusion_name
    mon.illusion_species = None
    mon.illusion_name = None
    if mon.starting_species in _SHAPESHIFTERS:
        mon.species = mon.starting_species
        mon.name = mon.display_name(mon.species)

    if side.active is not None and side.active.uid == mon.uid:
        side.active_index = None
    if recheck_ability_weather(battle):
        log.add("weather_cleared")

    mon.attack, mon.defense, mon.sp_atk, mon.sp_def, mon.speed = mon.form_stats[mon.species]
    # Keep the live copy of a move (and its PP) when it is still known
    restored = []
    for known in mon.starting_moves:
        current = mon.moveset_entry(known.id)
        restored.append(current if current is not None else known.model_copy(deep=True))
    mon.moves = restored
    mon.ability_id = mon.starting_ability
    mon.types = list(mon.starting_types)
    for field in VOLATILE_FIELDS:
        setattr(mon, field, Combatant.model_fields[field].get_default(call_default_factory=True))
    mon.held.ever_had_item = mon.held.has_item()
    logger.debug("combatant %s removed (fainted=%s)", mon.uid, fainted)


# =============================================================================
# PARTY
# =============================================================================
def valid_swaps(side: Side, battle: BattleContext, check_trap: bool = True) -> list[int]:
    """Party slots the side may switch to right now."""
    current = side.active
    defender = next(other.active for other in battle.sides if other is not side)
    if current is not None:
        if ElementType.GHOST in current.types or current.item(battle) == "shed-shell":
            check_trap = False
        if check_trap:
            if current.trapping or current.ingrain or current.no_retreat:
                return []
            if current.fairy_lock.active() or (defender is not None and defender.fairy_lock.active()):
                return []
            if current.bind.active() and current.substitute == 0:
                return []
            if defender is not None:
                if defender.ability() == Ability.SHADOW_TAG and current.ability() != Ability.SHADOW_TAG:
                    return []
                if defender.ability() == Ability.MAGNET_PULL and ElementType.STEEL in current.types:
                    return []
                if defender.ability() == Ability.ARENA_TRAP and current.grounded(battle):
                    return []
    result = [idx for idx, mon in enumerate(side.party) if mon.hp > 0]
    if side.last_idx in result:
        result.remove(side.last_idx)
    return result


def switch_poke(side: Side, slot: int, mid_turn: bool = False) -> Combatant:
    if slot < 0 or slot >= len(side.party):
        raise InvalidActionError(f"party slot {slot} is out of range")
    if side.party[slot].hp <= 0:
        raise InvalidActionError(f"party slot {slot} has fainted")
    side.active_index = slot
    side.mid_turn_remove = False
    side.last_idx = slot
    mon = side.party[slot]
    if mid_turn:
        mon.swapped_in = True
    return mon
