"""
End-of-turn effects.

Runs after both sides have acted, in the order the battle rules use:
- field counters that tick first (weather, terrain, plasma fists, fusion tracking)
- per side, faster side first: side conditions, then that side's active combatant
- field rooms and gravity last

The turn driver checks for a winner between the per-side steps, so each step is its own method.
"""

import logging
from typing import Optional

from duel_engine.combatant_ops import append_stat, apply_status, damage, eat_berry, faint, heal, reset_status
from duel_engine.damage_calculator import DamageCalculator
from duel_engine.enums import Ability, ElementType, NonVolatileStatus, StatKind, TerrainKind, WeatherKind
from duel_engine.enums.other import RAINY, SUNNY
from duel_engine.enums.status import ALL_STATS, CORE_STATS
from duel_engine.field_ops import terrain_next_turn, weather_next_turn
from duel_engine.schema.battle_context import BattleContext, Side
from duel_engine.schema.combatant import Combatant

logger = logging.getLogger(__name__)

# Per-turn protection flags, all dropped at the end of the turn
_PROTECTION_FLAGS = (
    "protect", "endure", "wide_guard", "crafty_shield", "king_shield", "spiky_shield", "mat_block",
    "baneful_bunker", "quick_guard", "obstruct", "silk_trap", "burning_bulwark",
)

# Side timer -> narration tag when it runs out
_SIDE_TIMERS = (
    ("aurora_veil", "side_condition_ended"),
    ("light_screen", "side_condition_ended"),
    ("reflect", "side_condition_ended"),
    ("mist", "side_condition_ended"),
    ("safeguard", "side_condition_ended"),
    ("tailwind", "tailwind_ended"),
    ("mud_sport", "side_condition_ended"),
    ("water_sport", "water_sport_ended"),
)

# Volatile timer -> narration tag when it runs out
_VOLATILE_TIMERS = (
    ("taunt", "taunt_ended"),
    ("heal_block", "heal_block_ended"),
    ("silenced", "voice_returned"),
    ("magnet_rise", "magnet_rise_ended"),
    ("lucky_chant", "lucky_chant_ended"),
    ("uproar", "calmed_down"),
    ("telekinesis", "telekinesis_ended"),
    ("embargo", "embargo_lifted"),
)

# Abilities that cure their holder's status at the end of every turn
_CURING_ABILITIES = {
    Ability.LIMBER: (NonVolatileStatus.PARALYSIS,),
    Ability.IMMUNITY: (NonVolatileStatus.POISON, NonVolatileStatus.BADLY_POISONED),
    Ability.MAGMA_ARMOR: (NonVolatileStatus.FREEZE,),
    Ability.WATER_VEIL: (NonVolatileStatus.BURN,),
    Ability.WATER_BUBBLE: (NonVolatileStatus.BURN,),
}
_WAKING_ABILITIES = (Ability.INSOMNIA, Ability.VITAL_SPIRIT)

# species -> (form it switches to, condition on hp ratio below half, type gained or lost, tag)
_ZEN_FORMS = {
    "Darmanitan": ("Darmanitan-zen", True, ElementType.PSYCHIC, "zen_mode_started"),
    "Darmanitan-galar": ("Darmanitan-zen-galar", True, ElementType.FIRE, "zen_mode_started"),
    "Darmanitan-zen": ("Darmanitan", False, ElementType.PSYCHIC, "zen_mode_ended"),
    "Darmanitan-zen-galar": ("Darmanitan-galar", False, ElementType.FIRE, "zen_mode_ended"),
}

_SAND_IMMUNE_TYPES = (ElementType.ROCK, ElementType.GROUND, ElementType.STEEL)
_SAND_IMMUNE_ABILITIES = (Ability.SAND_RUSH, Ability.SAND_VEIL, Ability.SAND_FORCE)
_HAIL_IMMUNE_ABILITIES = (Ability.SNOW_CLOAK, Ability.ICE_BODY)


class EndTurnEffectsProcessor:
    """
    Processes end-turn effects for one battle.

    The driver calls, in order: field_start(), then side(...) and combatant(...) for each side in
    speed order, then field_end().
    """

    def __init__(self, battle: BattleContext):
        self.battle = battle

    @property
    def log(self):
        return self.battle.log

    # =========================================================================
    # FIELD
    # =========================================================================
    def field_start(self) -> None:
        battle = self.battle
        battle.turn += 1
        battle.plasma_fists = False
        if weather_next_turn(battle):
            self.log.add("weather_cleared")
        if terrain_next_turn(battle):
            self.log.add("terrain_cleared")
        battle.last_move_effect = None

    def field_end(self) -> None:
        battle = self.battle
        if battle.trick_room.next_turn():
            self.log.add("trick_room_ended")
        if battle.gravity.next_turn():
            self.log.add("gravity_ended")
        if battle.magic_room.next_turn():
            self.log.add("magic_room_ended")
        if battle.wonder_room.next_turn():
            self.log.add("wonder_room_ended")

    # =========================================================================
    # SIDE
    # =========================================================================
    def side(self, side: Side) -> None:
        """Count down side conditions and land a pending wish or future sight."""
        battle = self.battle
        side.selected_action = None
        side.mid_turn_remove = False
        hp = side.wish.next_turn()
        if hp > 0 and side.active is not None:
            heal(side.active, hp, battle, source="its wish")
        for field, tag in _SIDE_TIMERS:
            if getattr(side, field).next_turn():
                self.log.add(tag, side=side.name, condition=field.replace("_", " "))
        side.retaliate.next_turn()

        attacker_uid, move = side.future_sight_attacker, side.future_sight_move
        if side.future_sight.next_turn():
            side.future_sight_attacker = None
            side.future_sight_move = None
            target = side.active
            if target is not None and attacker_uid is not None and move is not None:
                self.log.add("future_sight_hit", name=target.name)
                DamageCalculator(battle).attack(move, battle.find(attacker_uid), target)

    # =========================================================================
    # COMBATANT
    # =========================================================================
    def combatant(self, mon: Combatant, other: Optional[Combatant]) -> None:
        """
        Progress one active combatant by a turn.

        Args:
            mon: The active combatant of the side being processed
            other: The opposing active combatant, None when its slot is empty
        """
        self._reset_turn_flags(mon)
        self._status_damage(mon)
        self._volatile_timers(mon)
        self._held_items(mon, other)
        self._abilities(mon, other)
        self._residual_damage(mon, other)
        # Last so everything above still sees a combatant that came in this turn
        mon.swapped_in = False

    def _reset_turn_flags(self, mon: Combatant) -> None:
        mon.has_moved = False
        if not mon.swapped_in:
            mon.active_turns += 1
        mon.last_move_damage = None
        mon.last_move_failed = False
        mon.rage = False
        mon.mind_reader.next_turn()
        mon.charge.next_turn()
        mon.destiny_bond_cooldown.next_turn()
        mon.magic_coat = False
        mon.ion_deluge = False
        mon.electrify = False
        if not mon.protection_used:
            mon.protection_chance = 1
        mon.protection_used = False
        for flag in _PROTECTION_FLAGS:
            setattr(mon, flag, False)
        mon.laser_focus.next_turn()
        mon.powdered = False
        mon.snatching = False
        if not mon.echoed_voice_used:
            mon.echoed_voice_power = 40
        mon.echoed_voice_used = False
        mon.grudge = False
        mon.beak_blast = False
        mon.dmg_this_turn = False
        if mon.locked_move is not None and mon.locked_move.next_turn():
            mon.locked_move = None
            # The move may never have been used to clear these
            mon.dive = False
            mon.dig = False
            mon.fly = False
            mon.shadow_force = False
        mon.fairy_lock.next_turn()
        mon.flinched = False
        mon.truant_turn += 1
        mon.stat_increased = False
        mon.stat_decreased = False
        mon.roost = False
        mon.syrup_bomb.next_turn()

    def _status_damage(self, mon: Combatant) -> None:
        battle = self.battle
        status = mon.status
        if status == NonVolatileStatus.NONE:
            return
        if status == NonVolatileStatus.BADLY_POISONED:
            mon.badly_poisoned_turn += 1

        ability = mon.ability()
        if ability == Ability.HYDRATION and battle.weather_now() in RAINY:
            reset_status(mon)
            self.log.add("ability_cured_status", name=mon.name, ability="hydration", status=status.value)
            return
        if ability == Ability.SHED_SKIN and battle.rng.randint(0, 2) == 0:
            reset_status(mon)
            self.log.add("ability_cured_status", name=mon.name, ability="shed skin", status=status.value)
            return

        if status == NonVolatileStatus.BURN:
            amount = max(1, mon.starting_hp // 16)
            if ability == Ability.HEATPROOF:
                amount //= 2
            damage(mon, amount, battle, source="its burn")
        elif status in (NonVolatileStatus.POISON, NonVolatileStatus.BADLY_POISONED):
            if ability == Ability.POISON_HEAL:
                heal(mon, mon.starting_hp // 8, battle, source="its poison heal")
            elif status == NonVolatileStatus.POISON:
                damage(mon, max(1, mon.starting_hp // 8), battle, source="its poison")
            else:
                amount = max(1, mon.starting_hp // 16 * min(15, mon.badly_poisoned_turn))
                damage(mon, amount, battle, source="its bad poison")
        elif status == NonVolatileStatus.SLEEP and mon.nightmare:
            damage(mon, mon.starting_hp // 4, battle, source="its nightmare")

    def _volatile_timers(self, mon: Combatant) -> None:
        battle = self.battle
        disabled_id = mon.disable.item
        if mon.disable.next_turn():
            entry = mon.moveset_entry(disabled_id) if isinstance(disabled_id, int) else None
            if entry is not None:
                self.log.add("no_longer_disabled", name=mon.name, move=entry.pretty_name)
        for field, tag in _VOLATILE_TIMERS:
            if getattr(mon, field).next_turn():
                self.log.add(tag, name=mon.name)
        if mon.yawn.next_turn():
            apply_status(mon, NonVolatileStatus.SLEEP, battle, source="drowsiness")
        if mon.encore.next_turn():
            self.log.add("encore_ended", name=mon.name)
        if mon.perish_song.next_turn():
            faint(mon, battle, source="perish song")
        if mon.encore.active():
            entry = mon.moveset_entry(mon.encore.item) if isinstance(mon.encore.item, int) else None
            if entry is None or entry.pp == 0:
                mon.encore.end()
                self.log.add("encore_ended", name=mon.name)

        last_used = mon.held.last_used
        if mon.cud_chew.next_turn() and last_used is not None and last_used.endswith("-berry"):
            mon.recover_item(mon)
            eat_berry(mon, battle)
            mon.held.last_used = None

    def _held_items(self, mon: Combatant, other: Optional[Combatant]) -> None:
        battle = self.battle
        item = mon.item(battle)
        if item == "white-herb":
            lowered = [stat for stat in ALL_STATS if mon.get_stage(stat) < 0]
            if lowered:
                for stat in lowered:
                    mon.set_stage(stat, 0)
                self.log.add("white_herb", name=mon.name)
                mon.use_item()
        elif item == "toxic-orb":
            apply_status(mon, NonVolatileStatus.BADLY_POISONED, battle, source="its toxic orb")
        elif item == "flame-orb":
            apply_status(mon, NonVolatileStatus.BURN, battle, source="its flame orb")
        elif item == "leftovers":
            heal(mon, mon.starting_hp // 16, battle, source="its leftovers")
        elif item == "black-sludge":
            if ElementType.POISON in mon.types:
                heal(mon, mon.starting_hp // 16, battle, source="its black sludge")
            else:
                damage(mon, mon.starting_hp // 8, battle, source="its black sludge")

    def _abilities(self, mon: Combatant, other: Optional[Combatant]) -> None:
        battle = self.battle
        rng = battle.rng
        weather = battle.weather_now()
        ability = mon.ability()

        if ability == Ability.SPEED_BOOST and not mon.swapped_in:
            append_stat(mon, 1, mon, None, StatKind.SPEED, battle, source="its speed boost")
        cured = _CURING_ABILITIES.get(ability)
        if cured is not None and mon.status in cured:
            status = mon.status
            reset_status(mon)
            self.log.add("ability_cured_status", name=mon.name, ability=ability.pretty, status=status.value)
        if ability in _WAKING_ABILITIES and mon.status == NonVolatileStatus.SLEEP:
            reset_status(mon)
            self.log.add("ability_woke_up", name=mon.name, ability=ability.pretty)
        if ability == Ability.OWN_TEMPO and mon.confusion.active():
            mon.confusion.set_turns(0)
            self.log.add("tempo_cured_confusion", name=mon.name)
        if ability == Ability.OBLIVIOUS:
            if mon.infatuated is not None:
                mon.infatuated = None
                self.log.add("fell_out_of_love", name=mon.name)
            if mon.taunt.active():
                mon.taunt.set_turns(0)
                self.log.add("stopped_caring_taunt", name=mon.name)

        if ability == Ability.RAIN_DISH and weather in RAINY:
            heal(mon, mon.starting_hp // 16, battle, source="its rain dish")
        if ability == Ability.ICE_BODY and weather == WeatherKind.HAIL:
            heal(mon, mon.starting_hp // 16, battle, source="its ice body")
        if ability == Ability.DRY_SKIN:
            if weather in RAINY:
                heal(mon, mon.starting_hp // 8, battle, source="its dry skin")
            elif weather in SUNNY:
                damage(mon, mon.starting_hp // 8, battle, source="its dry skin")
        if ability == Ability.SOLAR_POWER and weather in SUNNY:
            damage(mon, mon.starting_hp // 8, battle, source="its solar power")

        if ability == Ability.MOODY:
            raisable = [stat for stat in CORE_STATS if mon.get_stage(stat) < 6]
            raised = None
            if raisable:
                raised = raisable[rng.choice_index(len(raisable))]
                append_stat(mon, 2, mon, None, raised, battle, source="its moodiness")
            lowerable = [stat for stat in CORE_STATS if stat != raised and mon.get_stage(stat) > -6]
            if lowerable:
                append_stat(mon, -1, mon, None, lowerable[rng.choice_index(len(lowerable))], battle, source="its moodiness")

        if ability == Ability.PICKUP and not mon.held.has_item() and other is not None and other.held.last_used is not None:
            mon.recover_item(other)
            self.log.add("picked_up", name=mon.name, item=mon.held.item)
        if ability == Ability.ICE_FACE and not mon.ice_repaired and mon.species == "Eiscue-noice" and weather == WeatherKind.HAIL:
            if mon.form("Eiscue"):
                mon.ice_repaired = True
                self.log.add("ice_face_restored", name=mon.name)
        if ability == Ability.HARVEST and mon.last_berry is not None and not mon.held.has_item():
            if rng.randint(0, 1) == 0:
                mon.held.item = mon.last_berry
                mon.last_berry = None
                self.log.add("harvested", name=mon.name, item=mon.held.item)

        if ability == Ability.ZEN_MODE and mon.species in _ZEN_FORMS:
            self._zen_mode(mon)
        if ability == Ability.HUNGER_SWITCH:
            if mon.species == "Morpeko":
                mon.form("Morpeko-hangry")
            elif mon.species == "Morpeko-hangry":
                mon.form("Morpeko")
        if ability == Ability.FLOWER_GIFT:
            if mon.species == "Cherrim" and weather in SUNNY:
                mon.form("Cherrim-sunshine")
            elif mon.species == "Cherrim-sunshine" and weather not in SUNNY:
                mon.form("Cherrim")

    def _zen_mode(self, mon: Combatant) -> None:
        form, below_half, element, tag = _ZEN_FORMS[mon.species]
        if (mon.hp < mon.starting_hp // 2) != below_half:
            return
        if not mon.form(form):
            return
        if below_half and element not in mon.types:
            mon.types.append(element)
        elif not below_half and element in mon.types:
            mon.types.remove(element)
        self.log.add(tag, name=mon.name)

    def _residual_damage(self, mon: Combatant, other: Optional[Combatant]) -> None:
        battle = self.battle
        if other is not None and other.ability() == Ability.BAD_DREAMS and mon.is_asleep():
            damage(mon, mon.starting_hp // 8, battle, source=f"{other.name}'s bad dreams")
        if mon.leech_seed and other is not None:
            damage(mon, mon.starting_hp // 8, battle, attacker=other, drain_ratio=1, source="leech seed")
        if mon.curse:
            damage(mon, mon.starting_hp // 4, battle, source="its curse")
        if mon.syrup_bomb.active() and other is not None:
            append_stat(mon, -1, other, None, StatKind.SPEED, battle, source="its syrup coating")

        self._weather_damage(mon)

        if mon.bind.next_turn():
            self.log.add("no_longer_bound", name=mon.name)
        elif mon.bind.active() and other is not None:
            divisor = 6 if other.item(battle) == "binding-band" else 8
            damage(mon, mon.starting_hp // divisor, battle, source=f"{other.name}'s bind")

        for flag, source in (("ingrain", "ingrain"), ("aqua_ring", "aqua ring")):
            if getattr(mon, flag):
                amount = mon.starting_hp // 16
                if mon.item(battle) == "big-root":
                    amount = int(amount * 1.3)
                heal(mon, amount, battle, source=source)

        if mon.octolock and other is not None:
            append_stat(mon, -1, mon, None, StatKind.DEFENSE, battle, source=f"{other.name}'s octolock")
            append_stat(mon, -1, mon, None, StatKind.SP_DEF, battle, source=f"{other.name}'s octolock")

        if battle.terrain_now() == TerrainKind.GRASSY and mon.grounded(battle) and not mon.heal_block.active():
            heal(mon, mon.starting_hp // 16, battle, source="grassy terrain")

    def _weather_damage(self, mon: Combatant) -> None:
        battle = self.battle
        if mon.ability() == Ability.OVERCOAT or mon.item(battle) == "safety-goggles":
            return
        weather = battle.weather_now()
        if weather == WeatherKind.SANDSTORM:
            if not any(t in mon.types for t in _SAND_IMMUNE_TYPES) and mon.ability() not in _SAND_IMMUNE_ABILITIES:
                damage(mon, mon.starting_hp // 16, battle, source="the sandstorm")
        elif weather == WeatherKind.HAIL:
            if ElementType.ICE not in mon.types and mon.ability() not in _HAIL_IMMUNE_ABILITIES:
                damage(mon, mon.starting_hp // 16, battle, source="the hail")
