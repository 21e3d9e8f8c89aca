"""
Damage calculation: effective type, priority, secondary-effect chance, base power and the hit loop.

The calculator follows the battle rules step by step:
- GetType: ability overrides first, then forced-electric effects, then per-effect formulas
- GetPower: a base-power table keyed by effect code, then an ordered multiplier chain
- Attack: hit count, crits, the stat pair, the damage formula and the multiplier chain

Every power multiplier truncates to int immediately, so the chain order matters and is kept
exactly. Damage itself is carried as a float and truncated once at the end.
"""

import logging
from typing import Optional

from duel_engine.combatant_ops import append_stat, damage, reset_status
from duel_engine.constants import CRIT_MULTIPLIER, CRIT_ODDS, MAX_CRIT_STAGE, MULTI_HIT_TABLE
from duel_engine.data.items import (
    FLING_POWER,
    JUDGMENT_ITEM_TYPES,
    NATURAL_GIFT_90,
    NATURAL_GIFT_100,
    NATURAL_GIFT_TYPES,
    SPECIES_ORBS,
    TYPE_BOOST_ITEMS,
)
from duel_engine.enums import Ability, DamageClass, ElementType, NonVolatileStatus, StatKind, TerrainKind, WeatherKind
from duel_engine.enums.other import RAINY, SUNNY
from duel_engine.enums.status import ALL_STATS, CORE_STATS
from duel_engine.enums.type import HIDDEN_POWER_TYPES
from duel_engine.errors import MissingPowerError
from duel_engine.move_classifiers import (
    is_affected_by_heal_block,
    is_aura_or_pulse,
    is_biting,
    is_punching,
    is_slicing,
    is_sound_based,
    makes_contact,
)
from duel_engine.schema.battle_context import BattleContext, MoveAction, SwitchAction
from duel_engine.schema.combatant import Combatant
from duel_engine.schema.move import CONFUSION_ID, BattleMove, beat_up_strike
from duel_engine.stats import get_attack, get_defense, get_sp_atk, get_sp_def, get_speed, raw_attack, raw_defense, raw_sp_def
from duel_engine.type_chart import effectiveness

logger = logging.getLogger(__name__)

# Moves whose user is leaving the field this turn (pursuit hits them at double power)
SWITCHING_EFFECTS = frozenset({128, 154, 229, 347, 493})

# Attack may continue after the user faints (explosion, future sight, mind blown, misty explosion)
_HITS_AFTER_USER_FAINTS = frozenset({8, 149, 420, 444})

# Charge moves that hit on the second turn of their lock
_SECOND_TURN_HITS = frozenset({40, 76, 146, 152, 156, 256, 257, 264, 273, 332, 333, 366, 451, 502})

_DRAIN_HALF = frozenset({4, 9, 346, 500})
_RECOIL_THIRD = frozenset({199, 254, 263, 469})
_RECKLESS_EFFECTS = frozenset({46, 49, 199, 254, 263, 270})

_TERRAIN_TYPES = {
    TerrainKind.ELECTRIC: ElementType.ELECTRIC,
    TerrainKind.GRASSY: ElementType.GRASS,
    TerrainKind.MISTY: ElementType.FAIRY,
    TerrainKind.PSYCHIC: ElementType.PSYCHIC,
}

_SKIN_ABILITIES = {
    Ability.REFRIGERATE: ElementType.ICE,
    Ability.PIXILATE: ElementType.FAIRY,
    Ability.AERILATE: ElementType.FLYING,
    Ability.GALVANIZE: ElementType.ELECTRIC,
}

_PINCH_TYPE_ABILITIES = {
    Ability.OVERGROW: ElementType.GRASS,
    Ability.BLAZE: ElementType.FIRE,
    Ability.TORRENT: ElementType.WATER,
    Ability.SWARM: ElementType.BUG,
}

_TAUROS_TYPES = {
    "Tauros-paldea": ElementType.FIGHTING,
    "Tauros-aqua-paldea": ElementType.WATER,
    "Tauros-blaze-paldea": ElementType.FIRE,
}

RAGING_BULL_ID = 873
_GRASSY_HALVED_IDS = (89, 222, 523)  # earthquake, magnitude, bulldoze


def base_damage(level: int, power: int, attack: float, defense: float) -> float:
    """The damage formula before any multiplier: ((2L/5 + 2) * P * A/D) / 50 + 2."""
    result = 2 * level / 5 + 2
    result = result * power * (attack / defense)
    return result / 50 + 2


def target_is_leaving(defender: Combatant, battle: BattleContext) -> bool:
    """True when the defender's chosen action this turn takes it off the field."""
    action = battle.side_of(defender).selected_action
    if isinstance(action, SwitchAction):
        return True
    return isinstance(action, MoveAction) and action.move.effect in SWITCHING_EFFECTS


def _scale(power: int, factor: float) -> int:
    return int(power * factor)


class DamageCalculator:
    """
    Per-use damage calculator.

    A calculator is bound to one battle; all methods read the battle's weather, terrain, sides
    and RNG, and only attack() / calculate_damage() mutate state.
    """

    def __init__(self, battle: BattleContext):
        self.battle: BattleContext = battle

    # =========================================================================
    # TYPE / PRIORITY / EFFECT CHANCE
    # =========================================================================
    def get_type(self, move: BattleMove, attacker: Combatant, defender: Combatant) -> ElementType:
        """
        Resolve the type the move has for this use.

        Args:
            move: Move being used
            attacker: User of the move
            defender: Target of the move

        Returns:
            The effective type. Ability overrides win over everything else.
        """
        battle = self.battle
        ability = attacker.ability()
        if ability in _SKIN_ABILITIES and move.type == ElementType.NORMAL:
            return _SKIN_ABILITIES[ability]
        if ability == Ability.NORMALIZE:
            return ElementType.NORMAL
        if ability == Ability.LIQUID_VOICE and is_sound_based(move):
            return ElementType.WATER
        if move.type == ElementType.NORMAL and (attacker.ion_deluge or defender.ion_deluge or battle.plasma_fists):
            return ElementType.ELECTRIC
        if attacker.electrify:
            return ElementType.ELECTRIC

        effect = move.effect
        if effect == 204:
            weather = battle.weather_now()
            if weather == WeatherKind.HAIL:
                return ElementType.ICE
            if weather == WeatherKind.SANDSTORM:
                return ElementType.ROCK
            if weather in SUNNY:
                return ElementType.FIRE
            if weather in RAINY:
                return ElementType.WATER
        elif effect == 136:
            # Own IVs, even when transformed
            hp, atk, def_, spa, spd, spe = attacker.ivs
            idx = hp % 2 + 2 * (atk % 2) + 4 * (def_ % 2) + 8 * (spe % 2) + 16 * (spa % 2) + 32 * (spd % 2)
            return HIDDEN_POWER_TYPES[idx * 15 // 63]
        elif effect == 401:
            return attacker.types[0] if attacker.types else ElementType.TYPELESS
        elif effect == 269:
            item = attacker.item(battle)
            if item in JUDGMENT_ITEM_TYPES:
                return JUDGMENT_ITEM_TYPES[item]
        elif effect == 223:
            item = attacker.item(battle)
            if item in NATURAL_GIFT_TYPES:
                return NATURAL_GIFT_TYPES[item]
        elif effect == 433 and attacker.name == "Morpeko-hangry":
            return ElementType.DARK
        elif effect == 441 and attacker.grounded(battle):
            terrain = battle.terrain_now()
            if terrain in _TERRAIN_TYPES:
                return _TERRAIN_TYPES[terrain]

        if move.id == RAGING_BULL_ID and attacker.species in _TAUROS_TYPES:
            return _TAUROS_TYPES[attacker.species]
        return move.type

    def get_priority(self, move: BattleMove, attacker: Combatant, defender: Combatant) -> int:
        battle = self.battle
        priority = move.priority
        move_type = self.get_type(move, attacker, defender)
        if move.effect == 437 and attacker.grounded(battle) and battle.terrain_now() == TerrainKind.GRASSY:
            priority += 1
        ability = attacker.ability()
        if ability == Ability.GALE_WINGS and move_type == ElementType.FLYING and attacker.hp == attacker.starting_hp:
            priority += 1
        if ability == Ability.PRANKSTER and move.damage_class == DamageClass.STATUS:
            priority += 1
        if ability == Ability.TRIAGE and is_affected_by_heal_block(move):
            priority += 3
        return priority

    def get_effect_chance(self, move: BattleMove, attacker: Combatant, defender: Combatant) -> int:
        """Percent chance for the move's secondary effect. Moves without a listed chance always apply."""
        if move.effect_chance is None:
            return 100
        if defender.ability(attacker, move) == Ability.SHIELD_DUST:
            return 0
        if defender.item(self.battle) == "covert-cloak":
            return 0
        if attacker.ability() == Ability.SHEER_FORCE:
            return 0
        if attacker.ability() == Ability.SERENE_GRACE:
            return min(100, move.effect_chance * 2)
        return move.effect_chance

    # =========================================================================
    # POWER
    # =========================================================================
    def _base_power(self, move: BattleMove, attacker: Combatant, defender: Combatant) -> Optional[int]:
        battle = self.battle
        rng = battle.rng
        effect = move.effect

        if effect == 88:
            return attacker.level
        if effect == 89:
            return rng.randint(int(attacker.level * 0.5), int(attacker.level * 1.5))
        if effect == 197:
            weight = defender.weight(attacker, move)
            for limit, power in ((100, 20), (250, 40), (500, 60), (1000, 80), (2000, 100)):
                if weight <= limit:
                    return power
            return 120
        if effect == 292:
            ratio = attacker.weight() / defender.weight(attacker, move)
            for limit, power in ((2, 40), (3, 60), (4, 80), (5, 100)):
                if ratio <= limit:
                    return power
            return 120
        if effect == 122:
            return max(1, min(102, int(attacker.happiness / 2.5)))
        if effect == 124:
            return max(1, min(102, int((255 - attacker.happiness) / 2.5)))
        if effect == 220:
            return min(150, 1 + 25 * get_speed(defender, battle) // get_speed(attacker, battle))
        if effect == 191:
            return int(150 * (attacker.hp / attacker.starting_hp))
        if effect == 162:
            return 100 * attacker.stockpile
        if effect == 100:
            hp_percent = int(64 * (attacker.hp / attacker.starting_hp))
            for limit, power in ((1, 200), (5, 150), (12, 100), (21, 80), (42, 40)):
                if hp_percent <= limit:
                    return power
            return 20
        if effect == 236:
            return {0: 200, 1: 80, 2: 60, 3: 50}.get(move.pp, 40)
        if effect == 238:
            return max(1, int(120 * (defender.hp / defender.starting_hp)))
        if effect == 495:
            return max(1, int(100 * (defender.hp / defender.starting_hp)))
        if effect == 246:
            boosts = sum(max(0, defender.get_stage(stat)) for stat in CORE_STATS)
            return min(200, 60 + boosts * 20)
        if effect == 294:
            ratio = get_speed(attacker, battle) // get_speed(defender, battle)
            for limit, power in ((0, 40), (1, 60), (2, 80), (3, 120)):
                if ratio <= limit:
                    return power
            return 150
        if effect == 306:
            return 20 * (1 + sum(max(0, attacker.get_stage(stat)) for stat in ALL_STATS))
        if effect == 120:
            power = int(2**attacker.fury_cutter * 10)
            attacker.fury_cutter = min(4, attacker.fury_cutter + 1)
            return power
        if effect == 118 and move.power is not None:
            turn = attacker.locked_move.turn if attacker.locked_move is not None else 0
            return int(2**turn * move.power)
        if effect == 127:
            percentile = rng.randint(0, 100)
            for limit, power in ((5, 10), (15, 30), (35, 50), (65, 70), (85, 90), (95, 110)):
                if percentile <= limit:
                    return power
            return 150
        if effect == 234:
            return FLING_POWER.get(attacker.item(battle) or "")
        if effect == 303:
            return attacker.echoed_voice_power
        if effect == 223:
            item = attacker.item(battle)
            if item in NATURAL_GIFT_100:
                return 100
            if item in NATURAL_GIFT_90:
                return 90
            return 80
        if effect == 361 and attacker.species == "Greninja-ash":
            return 20
        if effect == 155 and move.power is None:
            return raw_attack(attacker) // 10 + 5
        return move.power

    def get_power(self, move: BattleMove, attacker: Combatant, defender: Combatant) -> Optional[int]:
        """
        Resolve the move's power for one hit.

        Args:
            move: Move being used
            attacker: User of the move
            defender: Target of the move

        Returns:
            The power after every modifier, or None when the move has no power at all.
        """
        battle = self.battle
        power = self._base_power(move, attacker, defender)
        if power is None:
            return None

        move_type = self.get_type(move, attacker, defender)
        ability = attacker.ability()
        defender_ability = defender.ability(attacker, move)
        item = attacker.item(battle)
        effect = move.effect
        low_hp = attacker.hp <= attacker.starting_hp // 3

        # Raw-power abilities
        if ability == Ability.TECHNICIAN and power <= 60:
            power = _scale(power, 1.5)
        if ability == Ability.TOUGH_CLAWS and makes_contact(move, attacker):
            power = _scale(power, 1.3)
        if ability == Ability.RIVALRY and attacker.gender != "-x" and defender.gender != "-x":
            power = _scale(power, 1.25 if attacker.gender == defender.gender else 0.75)
        if ability == Ability.IRON_FIST and is_punching(move):
            power = _scale(power, 1.2)
        if ability == Ability.STRONG_JAW and is_biting(move):
            power = _scale(power, 1.5)
        if ability == Ability.MEGA_LAUNCHER and is_aura_or_pulse(move):
            power = _scale(power, 1.5)
        if ability == Ability.SHARPNESS and is_slicing(move):
            power = _scale(power, 1.5)
        if ability == Ability.RECKLESS and effect in _RECKLESS_EFFECTS:
            power = _scale(power, 1.2)
        if ability == Ability.TOXIC_BOOST and move.damage_class == DamageClass.PHYSICAL and attacker.is_poisoned():
            power = _scale(power, 1.5)
        if ability == Ability.FLARE_BOOST and move.damage_class == DamageClass.SPECIAL and attacker.status == NonVolatileStatus.BURN:
            power = _scale(power, 1.5)
        if ability == Ability.ANALYTIC and defender.has_moved:
            power = _scale(power, 1.3)
        if ability == Ability.BATTERY and move.damage_class == DamageClass.SPECIAL:
            power = _scale(power, 1.3)
        if ability == Ability.SHEER_FORCE and move.effect_chance is not None:
            power = _scale(power, 1.3)
        if ability == Ability.STAKEOUT and defender.swapped_in:
            power = _scale(power, 2)
        if ability == Ability.SUPREME_OVERLORD:
            fainted = sum(1 for poke in battle.side_of(attacker).party if poke.hp == 0)
            if fainted > 0:
                power = _scale(power, (10 + fainted) / 10)

        # Type abilities; the -ate family checks the move's printed type
        if ability in _SKIN_ABILITIES and move.type == ElementType.NORMAL:
            power = _scale(power, 1.2)
        if ability == Ability.DRAGONS_MAW and move_type == ElementType.DRAGON:
            power = _scale(power, 1.5)
        if ability == Ability.TRANSISTOR and move_type == ElementType.ELECTRIC:
            power = _scale(power, 1.5)
        if ability == Ability.WATER_BUBBLE and move_type == ElementType.WATER:
            power = _scale(power, 2)
        if defender_ability == Ability.WATER_BUBBLE and move_type == ElementType.FIRE:
            power = _scale(power, 0.5)
        if _PINCH_TYPE_ABILITIES.get(ability) == move_type and low_hp:
            power = _scale(power, 1.5)
        if ability == Ability.NORMALIZE and move_type == ElementType.NORMAL:
            power = _scale(power, 1.2)
        if (
            ability == Ability.SAND_FORCE
            and move_type in (ElementType.ROCK, ElementType.GROUND, ElementType.STEEL)
            and battle.weather_now() == WeatherKind.SANDSTORM
        ):
            power = _scale(power, 1.3)
        if ability in (Ability.STEELWORKER, Ability.STEELY_SPIRIT) and move_type == ElementType.STEEL:
            power = _scale(power, 1.5)
        if ability == Ability.ROCKY_PAYLOAD and move_type == ElementType.ROCK:
            power = _scale(power, 1.5)

        # Held items
        if item is not None:
            if TYPE_BOOST_ITEMS.get(item) == move_type:
                power = _scale(power, 1.2)
            orb = SPECIES_ORBS.get(item)
            if orb is not None and move_type in orb[1] and attacker.name in orb[0]:
                power = _scale(power, 1.2)
            if item == "wise-glasses" and move.damage_class == DamageClass.SPECIAL:
                power = _scale(power, 1.1)
            if item == "muscle-band" and move.damage_class == DamageClass.PHYSICAL:
                power = _scale(power, 1.1)

        power = self._situational_power(power, move, attacker, defender, move_type)

        # Terrain
        terrain = battle.terrain_now()
        if attacker.grounded(battle):
            if terrain == TerrainKind.PSYCHIC and move_type == ElementType.PSYCHIC:
                power = _scale(power, 1.3)
            elif terrain == TerrainKind.GRASSY and move_type == ElementType.GRASS:
                power = _scale(power, 1.3)
        if terrain == TerrainKind.GRASSY:
            if defender.grounded(battle, attacker, move) and move.id in _GRASSY_HALVED_IDS:
                power = _scale(power, 0.5)
        elif terrain == TerrainKind.ELECTRIC:
            if attacker.grounded(battle) and move_type == ElementType.ELECTRIC:
                power = _scale(power, 1.3)
        elif terrain == TerrainKind.MISTY:
            if defender.grounded(battle, attacker, move) and move_type == ElementType.DRAGON:
                power = _scale(power, 0.5)

        # Charge and the sports
        if attacker.charge.active() and move_type == ElementType.ELECTRIC:
            power = _scale(power, 2)
        sides = (battle.side_of(attacker), battle.side_of(defender))
        if move_type == ElementType.ELECTRIC and any(side.mud_sport.active() for side in sides):
            power = power // 3
        if move_type == ElementType.FIRE and any(side.water_sport.active() for side in sides):
            power = power // 3
        return power

    def _situational_power(
        self,
        power: int,
        move: BattleMove,
        attacker: Combatant,
        defender: Combatant,
        move_type: ElementType,
    ) -> int:
        """Effect-code doublers that depend on the state of the field and the two combatants."""
        battle = self.battle
        effect = move.effect
        weather = battle.weather_now()

        if effect == 204 and weather not in (WeatherKind.NONE, WeatherKind.STRONG_WINDS):
            power = _scale(power, 2)
        elif effect == 152 and weather in (WeatherKind.RAIN, WeatherKind.HAIL):
            power = _scale(power, 0.5)
        elif effect == 170 and (attacker.status in (NonVolatileStatus.BURN, NonVolatileStatus.PARALYSIS) or attacker.is_poisoned()):
            power = _scale(power, 2)
        elif effect == 172 and defender.status == NonVolatileStatus.PARALYSIS:
            power = _scale(power, 2)
            reset_status(defender)

        if effect in (284, 461) and defender.is_poisoned():
            power = _scale(power, 2)

        if effect == 218 and defender.status == NonVolatileStatus.SLEEP:
            power = _scale(power, 2)
            reset_status(defender)
        elif (
            (effect == 222 and defender.hp < defender.starting_hp / 2)
            or (effect == 231 and defender.has_moved)
            or (effect == 311 and defender.has_status())
            or (effect == 118 and attacker.defense_curl)
            or (effect == 409 and attacker.last_move_failed)
        ):
            power = _scale(power, 2)

        if effect in (258, 262) and defender.dive:
            power = _scale(power, 2)
        if effect in (127, 148) and defender.dig:
            power = _scale(power, 2)
        if effect in (147, 150) and defender.fly:
            power = _scale(power, 2)

        if (
            (effect == 186 and attacker.last_move_damage is not None)
            or (effect == 318 and not attacker.held.has_item())
            or (effect == 320 and battle.side_of(attacker).retaliate.active())
            or (effect == 129 and target_is_leaving(defender, battle))
            or (effect == 232 and defender.dmg_this_turn)
            or (effect == 151 and defender.minimized)
            or (effect == 336 and battle.last_move_effect == 337)
            or (effect == 337 and battle.last_move_effect == 336)
        ):
            power = _scale(power, 2)

        own_action = battle.side_of(attacker).selected_action
        if isinstance(own_action, MoveAction) and own_action.move.effect == 242:
            power = _scale(power, 1.5)

        terrain = battle.terrain_now()
        if effect == 435 and battle.gravity.active():
            power = _scale(power, 1.5)
        elif effect == 436 and (not defender.has_moved or defender.swapped_in):
            power = _scale(power, 2)
        elif effect == 440 and terrain == TerrainKind.PSYCHIC and attacker.grounded(battle):
            power = _scale(power, 1.5)
        elif effect == 441 and terrain != TerrainKind.NONE and attacker.grounded(battle):
            power = _scale(power, 2)
        elif effect == 189 and defender.held.has_item() and defender.held.can_remove():
            power = _scale(power, 1.5)
        elif effect == 443 and terrain == TerrainKind.ELECTRIC and defender.grounded(battle, attacker, move):
            power = _scale(power, 2)
        elif effect == 444 and terrain == TerrainKind.MISTY and attacker.grounded(battle):
            power = _scale(power, 1.5)
        elif (effect == 450 and attacker.stat_decreased) or (effect == 465 and defender.has_status()):
            power = _scale(power, 2)
        elif effect == 482 and effectiveness(defender, move_type, battle, attacker, move) > 1:
            power = _scale(power, 4 / 3)
        elif effect == 490:
            power = _scale(power, 1 + min(battle.side_of(attacker).num_fainted, 100))
        elif effect == 491:
            power = _scale(power, 1 + min(attacker.num_hits, 6))
        elif effect == 498 and battle.rng.uniform() <= 0.3:
            power = _scale(power, 2)
        return power

    # =========================================================================
    # HIT LOOP
    # =========================================================================
    def _hit_count(self, move: BattleMove, attacker: Combatant) -> tuple[int, bool]:
        """Number of strikes, and whether the extra strikes come from parental bond."""
        rng = self.battle.rng
        if move.effect == 361 and attacker.species == "Greninja-ash":
            return 3, False
        if move.min_hits is not None and move.max_hits is not None:
            min_hits, max_hits = move.min_hits, move.max_hits
            if attacker.ability() == Ability.SKILL_LINK:
                min_hits = max_hits
            elif attacker.item(self.battle) == "loaded-dice" and max_hits >= 4 and (min_hits < 4 or move.effect == 484):
                min_hits = 4
            if min_hits == 2 and max_hits == 5:
                return MULTI_HIT_TABLE[rng.choice_index(len(MULTI_HIT_TABLE))], False
            return rng.randint(min_hits, max_hits), False
        if attacker.ability() == Ability.PARENTAL_BOND:
            return 2, True
        return 1, False

    def _is_critical(self, move: BattleMove, attacker: Combatant, defender: Combatant) -> bool:
        battle = self.battle
        stage = move.crit_rate
        if attacker.item(battle) in ("scope-lens", "razor-claw"):
            stage += 1
        if attacker.ability() == Ability.SUPER_LUCK:
            stage += 1
        if attacker.focus_energy:
            stage += 2
        if attacker.lansat_berry_ate:
            stage += 2
        stage = min(stage, MAX_CRIT_STAGE)
        critical = battle.rng.choice_index(CRIT_ODDS[stage]) == 0

        if attacker.ability() == Ability.MERCILESS and defender.is_poisoned():
            critical = True
        if move.effect == 289 or attacker.laser_focus.active():
            critical = True
        if defender.ability(attacker, move) in (Ability.SHELL_ARMOR, Ability.BATTLE_ARMOR):
            critical = False
        if defender.lucky_chant.active() or move.id == CONFUSION_ID:
            critical = False
        return critical

    def _stat_pair(
        self,
        move: BattleMove,
        attacker: Combatant,
        defender: Combatant,
        critical: bool,
        move_type: ElementType,
    ) -> tuple[int, int]:
        """Attacking and defending stat for one strike."""
        battle = self.battle
        attacker_unaware = attacker.ability() == Ability.UNAWARE
        defender_unaware = defender.ability(attacker, move) == Ability.UNAWARE
        effect = move.effect

        if move.damage_class == DamageClass.PHYSICAL:
            a = get_attack(attacker, battle, critical, defender_unaware)
            if effect == 304:
                d = raw_defense(defender)
            else:
                d = get_defense(defender, battle, critical, attacker_unaware, attacker, move)
        else:
            a = get_sp_atk(attacker, battle, critical, defender_unaware)
            if effect == 304:
                d = raw_sp_def(defender)
            else:
                d = get_sp_def(defender, battle, critical, attacker_unaware, attacker, move)

        if effect == 283:
            d = get_defense(defender, battle, critical, attacker_unaware, attacker, move)
        elif effect == 426:
            # Not passing critical, it would crop the wrong direction
            a = get_defense(attacker, battle, ignore_stages=defender_unaware)
        elif effect == 298:
            if move.damage_class == DamageClass.PHYSICAL:
                a = get_attack(defender, battle, critical, defender_unaware)
            else:
                a = get_sp_atk(defender, battle, critical, defender_unaware)
        elif effect == 416:
            a = max(get_attack(attacker, battle, critical, defender_unaware), get_sp_atk(attacker, battle, critical, defender_unaware))

        if attacker.flash_fire and move_type == ElementType.FIRE:
            a = int(a * 1.5)
        if defender.ability(attacker, move) == Ability.THICK_FAT and move_type in (ElementType.FIRE, ElementType.ICE):
            a = int(a * 0.5)
        return a, d

    def attack(self, move: BattleMove, attacker: Combatant, defender: Combatant) -> int:
        """
        Run the hit loop of a damaging move against the defender.

        Args:
            move: Move being used
            attacker: User of the move
            defender: Target of the move

        Returns:
            Number of strikes that actually landed (0 when the move had no effect)

        Raises:
            MissingPowerError: the move resolved to no power at all
        """
        from duel_engine.hit_resolver import check_hit

        battle = self.battle
        log = battle.log
        rng = battle.rng
        move_type = self.get_type(move, attacker, defender)
        effect = move.effect

        type_factor = effectiveness(defender, move_type, battle, attacker, move)
        if effect == 338:
            type_factor *= effectiveness(defender, ElementType.FLYING, battle, attacker, move)
        if type_factor <= 0:
            log.add("attack_no_effect")
            return 0
        if type_factor <= 0.5:
            log.add("not_very_effective")
        elif type_factor >= 2:
            log.add("super_effective")

        hits, parental_bond = self._hit_count(move, attacker)
        logger.debug("%s: %d strike(s) planned", move.name, hits)
        attacker_ability = attacker.ability()
        defender_ability = defender.ability(attacker, move)
        hit = 0
        while hit < hits:
            if defender.hp == 0:
                break
            if attacker.hp == 0 and effect not in _HITS_AFTER_USER_FAINTS:
                break

            critical = self._is_critical(move, attacker, defender)
            a, d = self._stat_pair(move, attacker, defender, critical, move_type)
            power = self.get_power(move, attacker, defender)
            if power is None:
                raise MissingPowerError(effect, move.id)

            # Per-strike accuracy; must run before anything is narrated for this strike
            if hit > 0 and attacker_ability != Ability.SKILL_LINK:
                if effect == 105:
                    if not check_hit(move, attacker, defender, battle):
                        hits = hit
                        break
                    power = _scale(power, 1 + hit)
                if effect == 484 and attacker.item(battle) != "loaded-dice":
                    if not check_hit(move, attacker, defender, battle):
                        hits = hit
                        break

            amount = base_damage(attacker.level, power, a, d)
            if critical:
                log.add("critical_hit")
                amount *= CRIT_MULTIPLIER

            weather = battle.weather_now()
            if move_type == ElementType.WATER and weather in RAINY:
                amount *= 1.5
            elif move_type == ElementType.FIRE and weather in RAINY:
                amount *= 0.5
            elif move_type == ElementType.FIRE and weather == WeatherKind.SUN:
                amount *= 1.5
            elif move_type == ElementType.WATER and weather in SUNNY:
                amount *= 0.5

            if move_type in attacker.types:
                amount *= 2 if attacker_ability == Ability.ADAPTABILITY else 1.5
            amount *= type_factor

            physical = move.damage_class == DamageClass.PHYSICAL
            if attacker.status == NonVolatileStatus.BURN and physical and attacker_ability != Ability.GUTS and effect != 170:
                amount *= 0.5

            defending_side = battle.side_of(defender)
            if not critical and attacker_ability != Ability.INFILTRATOR:
                if defending_side.aurora_veil.active():
                    amount *= 0.5
                elif defending_side.light_screen.active() and not physical:
                    amount *= 0.5
                elif defending_side.reflect.active() and physical:
                    amount *= 0.5

            if defender.minimized and effect == 338:
                amount *= 2
            if defender_ability == Ability.FLUFFY:
                if makes_contact(move, attacker):
                    amount *= 0.5
                if move_type == ElementType.FIRE:
                    amount *= 2
            if defender_ability in (Ability.FILTER, Ability.PRISM_ARMOR, Ability.SOLID_ROCK) and type_factor > 1:
                amount *= 0.75
            if attacker_ability == Ability.NEUROFORCE and type_factor > 1:
                amount *= 1.25
            if defender_ability == Ability.ICE_SCALES and not physical:
                amount *= 0.5
            if attacker_ability == Ability.SNIPER and critical:
                amount *= 1.5
            if attacker_ability == Ability.TINTED_LENS and type_factor < 1:
                amount *= 2
            if is_sound_based(move):
                if attacker_ability == Ability.PUNK_ROCK:
                    amount *= 1.3
                if defender_ability == Ability.PUNK_ROCK:
                    amount *= 0.5
            if defender_ability == Ability.HEATPROOF and move_type == ElementType.FIRE:
                amount *= 0.5
            if defender_ability == Ability.PURIFYING_SALT and move_type == ElementType.GHOST:
                amount *= 0.5
            auras = {attacker_ability, defender_ability}
            for aura, aura_type in ((Ability.DARK_AURA, ElementType.DARK), (Ability.FAIRY_AURA, ElementType.FAIRY)):
                if aura in auras and move_type == aura_type:
                    amount *= 0.75 if Ability.AURA_BREAK in auras else 4 / 3
            if defender_ability == Ability.DRY_SKIN and move_type == ElementType.FIRE:
                amount *= 1.25

            attacker_item = attacker.item(battle)
            if defender.item(battle) == "chilan-berry" and move_type == ElementType.NORMAL:
                amount *= 0.5
            if attacker_item == "expert-belt" and type_factor > 1:
                amount *= 1.2
            if attacker_item == "life-orb" and move.damage_class != DamageClass.STATUS and effect != 149:
                amount *= 1.3
            if attacker_item == "metronome":
                amount *= attacker.metronome.buff(move.name)

            if parental_bond and hit > 0:
                amount *= 0.25
            if defender_ability in (Ability.MULTISCALE, Ability.SHADOW_SHIELD) and defender.hp == defender.starting_hp:
                amount *= 0.5

            amount *= rng.damage_roll()
            dealt = max(1, int(amount))
            if effect == 102:
                dealt = min(dealt, defender.hp - 1)

            drain_ratio = None
            if effect in _DRAIN_HALF:
                drain_ratio = 1 / 2
            elif effect == 349:
                drain_ratio = 3 / 4

            actual = damage(
                defender,
                dealt,
                battle,
                move=move,
                move_type=move_type,
                attacker=attacker,
                critical=critical,
                drain_ratio=drain_ratio,
            )

            if attacker.ability() != Ability.ROCK_HEAD and battle.side_of(defender).has_alive_pokemon():
                if effect == 49:
                    damage(attacker, actual // 4, battle, source="recoil")
                if effect in _RECOIL_THIRD:
                    damage(attacker, actual // 3, battle, source="recoil")
                if effect == 270:
                    damage(attacker, actual // 2, battle, source="recoil")
                elif effect == 463:
                    damage(attacker, attacker.starting_hp // 2, battle, source="recoil")
            hit += 1

        if type_factor > 1 and defender.item(battle) == "weakness-policy" and defender.substitute == 0:
            append_stat(defender, 2, defender, move, StatKind.ATTACK, battle, source="its weakness policy")
            append_stat(defender, 2, defender, move, StatKind.SP_ATK, battle, source="its weakness policy")
            defender.use_item()
        return min(hit, hits)

    # =========================================================================
    # DAMAGE STEP
    # =========================================================================
    def calculate_damage(self, move: BattleMove, attacker: Combatant, defender: Combatant) -> int:
        """
        Deal the move's damage: charge-move turns, fixed-damage formulas, Beat Up, or the hit loop.

        Returns:
            Number of strikes that landed
        """
        battle = self.battle
        effect = move.effect
        damaging = move.damage_class != DamageClass.STATUS
        locked = attacker.locked_move

        if effect == 81 and locked is not None:
            return self.attack(move, attacker, defender) if locked.turn == 0 else 0
        if effect in _SECOND_TURN_HITS and locked is not None:
            if locked.turn == 1 and damaging:
                return self.attack(move, attacker, defender)
            return 0

        move_type = self.get_type(move, attacker, defender)
        fixed = self._fixed_damage(move, attacker, defender)
        if fixed is not None:
            damage(defender, fixed, battle, move=move, move_type=move_type, attacker=attacker)
            return 1
        if effect == 27:
            if locked is not None and locked.turn == 2:
                damage(defender, (attacker.bide or 0) * 2, battle, move=move, move_type=move_type, attacker=attacker)
                attacker.bide = None
                return 1
            return 0
        if effect == 155:
            return self._beat_up(move, attacker, defender)
        if damaging:
            return self.attack(move, attacker, defender)
        return 0

    def _fixed_damage(self, move: BattleMove, attacker: Combatant, defender: Combatant) -> Optional[int]:
        """Damage of moves that ignore the formula, or None for every other move."""
        effect = move.effect
        taken = attacker.last_move_damage[0] if attacker.last_move_damage is not None else 0
        if effect == 228:
            return int(1.5 * taken)
        if effect in (145, 90):
            return 2 * taken
        if effect == 41:
            return defender.hp // 2
        if effect == 42:
            return 40
        if effect == 88:
            return attacker.level
        if effect == 89:
            scale = self.battle.rng.randint(0, 10) / 10 + 0.5
            return int(attacker.level * scale)
        if effect == 131:
            return 20
        if effect == 190:
            return max(0, defender.hp - attacker.hp)
        if effect == 39:
            return defender.hp
        if effect == 321:
            return attacker.hp
        if effect == 413:
            return 3 * (defender.hp // 4)
        return None

    def _beat_up(self, move: BattleMove, attacker: Combatant, defender: Combatant) -> int:
        """One strike per healthy party member: the user with the move itself, the rest with their own attack."""
        hits = 0
        for poke in self.battle.side_of(attacker).party:
            if defender.hp == 0:
                break
            if poke.hp == 0:
                continue
            if poke.uid == attacker.uid:
                hits += self.attack(move, attacker, defender)
            elif not poke.has_status():
                hits += self.attack(beat_up_strike(raw_attack(poke)), attacker, defender)
        return hits
