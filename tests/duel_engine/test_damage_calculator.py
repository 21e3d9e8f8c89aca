import pytest

from duel_engine.constants import MULTI_HIT_TABLE
from duel_engine.damage_calculator import DamageCalculator, base_damage
from duel_engine.data.moves import get_move
from duel_engine.enums import Ability, DamageClass, ElementType, NonVolatileStatus, StatKind
from duel_engine.errors import MissingPowerError
from duel_engine.move_pipeline import use_move
from duel_engine.schema.battle_context import BattleContext
from duel_engine.schema.move import BattleMove
from duel_engine.stats import get_defense, get_speed
from duel_engine.utils.mon_factory import create_combatant
from duel_engine.utils.rng import BattleRng


class NoCritRng(BattleRng):
    """Never rolls the zero a crit needs, and always rolls the top damage factor."""

    def choice_index(self, count: int) -> int:
        return count - 1 if count > 0 else -1

    def damage_roll(self) -> float:
        return 1.0


def strike(power=50, move_type=ElementType.NORMAL, damage_class=DamageClass.PHYSICAL, effect=1) -> BattleMove:
    return BattleMove(
        id=9001,
        name="test-strike",
        power=power,
        pp=10,
        starting_pp=10,
        accuracy=100,
        type=move_type,
        damage_class=damage_class,
        effect=effect,
    )


def make_battle(attacker_types=(ElementType.WATER,), defender_types=(ElementType.NORMAL,), seed=1, **attacker_kwargs):
    # Base 80 everywhere at level 50 gives 100 in every stat and 155 HP
    attacker = create_combatant("Attacker", types=attacker_types, **attacker_kwargs)
    defender = create_combatant("Defender", types=defender_types)
    battle = BattleContext.create([attacker], [defender], seed=seed)
    return attacker, defender, battle


def test_base_damage_formula():
    assert base_damage(50, 50, 100, 100) == 24
    assert base_damage(100, 100, 200, 100) == pytest.approx((42 * 100 * 2) / 50 + 2)


@pytest.mark.parametrize("field", ["level", "power", "attack"])
def test_base_damage_never_decreases_when_an_input_grows(field):
    inputs = {"level": 50, "power": 60, "attack": 100, "defense": 100}
    previous = base_damage(**inputs)
    for _ in range(20):
        inputs[field] += 7
        current = base_damage(**inputs)
        assert current >= previous, f"{field}={inputs[field]} lowered damage"
        previous = current


def test_base_damage_never_increases_when_defense_grows():
    previous = base_damage(50, 60, 100, 50)
    for defense in range(51, 300, 13):
        current = base_damage(50, 60, 100, defense)
        assert current <= previous
        previous = current


def test_neutral_hit_deals_formula_damage():
    attacker, defender, battle = make_battle()
    battle.rng = NoCritRng(seed=1)
    assert attacker.attack == 100 and defender.defense == 100 and defender.starting_hp == 155

    hits = DamageCalculator(battle).attack(strike(), attacker, defender)

    assert hits == 1
    assert defender.hp == 155 - 24
    assert "took_damage" in battle.log.tags()


def test_same_type_attack_bonus_multiplies_by_one_and_a_half():
    attacker, defender, battle = make_battle(attacker_types=(ElementType.NORMAL,))
    battle.rng = NoCritRng(seed=1)

    DamageCalculator(battle).attack(strike(), attacker, defender)

    assert defender.hp == 155 - 36


def test_immune_defender_takes_nothing():
    attacker, defender, battle = make_battle(defender_types=(ElementType.GHOST,))

    hits = DamageCalculator(battle).attack(get_move("double-slap"), attacker, defender)

    assert hits == 0
    assert defender.hp == defender.starting_hp
    assert battle.log.tags() == ["attack_no_effect"]


def test_super_effective_hit_is_narrated_and_doubled():
    attacker, defender, battle = make_battle(defender_types=(ElementType.GRASS,))
    battle.rng = NoCritRng(seed=1)

    DamageCalculator(battle).attack(strike(move_type=ElementType.FIRE), attacker, defender)

    assert "super_effective" in battle.log.tags()
    assert defender.hp == 155 - 48


def test_burn_halves_physical_damage():
    attacker, defender, battle = make_battle()
    battle.rng = NoCritRng(seed=1)
    attacker.status = NonVolatileStatus.BURN

    DamageCalculator(battle).attack(strike(), attacker, defender)

    assert defender.hp == 155 - 12


def test_reflect_halves_physical_damage():
    attacker, defender, battle = make_battle()
    battle.rng = NoCritRng(seed=1)
    battle.sides[1].reflect.set_turns(5)

    DamageCalculator(battle).attack(strike(), attacker, defender)

    assert defender.hp == 155 - 12


def test_attack_stage_raises_damage():
    attacker, defender, battle = make_battle()
    battle.rng = NoCritRng(seed=1)
    attacker.set_stage(StatKind.ATTACK, 2)

    DamageCalculator(battle).attack(strike(), attacker, defender)

    # Attack 200 against defense 100
    assert defender.hp == 155 - int(base_damage(50, 50, 200, 100))


def test_multi_hit_counts_follow_the_two_to_five_table():
    attacker, defender, battle = make_battle(seed=20240601)
    calc = DamageCalculator(battle)
    move = get_move("bullet-seed")
    trials = 10000
    counts = {n: 0 for n in range(2, 6)}
    for _ in range(trials):
        hits, parental_bond = calc._hit_count(move, attacker)
        assert not parental_bond
        counts[hits] += 1

    for n, count in counts.items():
        expected = MULTI_HIT_TABLE.count(n) / len(MULTI_HIT_TABLE)
        assert abs(count / trials - expected) < 0.02, f"{n} hits: {count / trials:.3f} vs {expected:.3f}"


def test_skill_link_always_hits_five_times():
    attacker, defender, battle = make_battle(ability=Ability.SKILL_LINK)
    calc = DamageCalculator(battle)
    assert all(calc._hit_count(get_move("bullet-seed"), attacker) == (5, False) for _ in range(50))


def test_critical_hit_rate_at_stage_zero():
    attacker, defender, battle = make_battle(seed=77)
    calc = DamageCalculator(battle)
    move = strike()
    trials = 24000
    crits = sum(calc._is_critical(move, attacker, defender) for _ in range(trials))
    assert abs(crits / trials - 1 / 24) < 0.008


def test_critical_stage_three_and_above_always_crits():
    attacker, defender, battle = make_battle(seed=3, item="scope-lens")
    attacker.focus_energy = True
    calc = DamageCalculator(battle)
    # karate chop (+1) + scope lens (+1) + focus energy (+2) is clamped to stage 3
    move = get_move("karate-chop")
    assert all(calc._is_critical(move, attacker, defender) for _ in range(200))


def test_shell_armor_blocks_crits():
    attacker, defender, battle = make_battle(seed=3)
    attacker.focus_energy = True
    defender.ability_id = Ability.SHELL_ARMOR
    calc = DamageCalculator(battle)
    assert not any(calc._is_critical(get_move("karate-chop"), attacker, defender) for _ in range(50))


def test_multi_hit_stops_when_defender_faints():
    attacker, defender, battle = make_battle()
    battle.rng = NoCritRng(seed=1)
    defender.hp = 1

    hits = DamageCalculator(battle).attack(get_move("double-slap"), attacker, defender)

    assert hits == 1
    assert defender.hp == 0
    assert "fainted" in battle.log.tags()


def test_fixed_damage_ignores_the_formula():
    attacker, defender, battle = make_battle(level=37)
    calc = DamageCalculator(battle)

    calc.calculate_damage(get_move("seismic-toss"), attacker, defender)
    assert defender.hp == defender.starting_hp - 37

    defender.hp = defender.starting_hp
    calc.calculate_damage(get_move("dragon-rage"), attacker, defender)
    assert defender.hp == defender.starting_hp - 40

    defender.hp = 100
    calc.calculate_damage(get_move("super-fang"), attacker, defender)
    assert defender.hp == 50


def test_damaging_move_without_power_is_rejected():
    attacker, defender, battle = make_battle()
    with pytest.raises(MissingPowerError):
        DamageCalculator(battle).attack(strike(power=None), attacker, defender)


def test_secondary_chance_defaults_to_certain():
    attacker, defender, battle = make_battle()
    calc = DamageCalculator(battle)
    assert calc.get_effect_chance(get_move("thunder-wave"), attacker, defender) == 100
    assert calc.get_effect_chance(get_move("ember"), attacker, defender) == 10


def test_serene_grace_doubles_secondary_chance():
    attacker, defender, battle = make_battle(ability=Ability.SERENE_GRACE)
    assert DamageCalculator(battle).get_effect_chance(get_move("ember"), attacker, defender) == 20


# =============================================================================
# SPORTS
# =============================================================================
def test_mud_sport_weakens_electric_moves():
    attacker, defender, battle = make_battle()
    calc = DamageCalculator(battle)
    thunderbolt = get_move("thunderbolt")
    plain = calc.get_power(thunderbolt, attacker, defender)

    # Either side's sport counts
    battle.sides[1].mud_sport.set_turns(5)
    assert calc.get_power(thunderbolt, attacker, defender) == plain // 3
    assert calc.get_power(get_move("ember"), attacker, defender) == 40


def test_water_sport_weakens_fire_moves():
    attacker, defender, battle = make_battle()
    calc = DamageCalculator(battle)
    battle.sides[0].water_sport.set_turns(5)
    assert calc.get_power(get_move("flamethrower"), attacker, defender) == 90 // 3
    assert calc.get_power(get_move("thunderbolt"), attacker, defender) == 90


# =============================================================================
# STAT FLOOR
# =============================================================================
def test_effective_stats_never_drop_below_one():
    attacker, defender, battle = make_battle()
    attacker.speed = 3
    attacker.speed_stage = -6
    defender.defense = 3
    defender.defense_stage = -6
    assert get_speed(attacker, battle) == 1
    assert get_defense(defender, battle) == 1


def test_speed_ratio_power_survives_a_crippled_user():
    attacker, defender, battle = make_battle()
    attacker.speed = 3
    attacker.speed_stage = -6
    use_move(attacker, defender, battle, get_move("gyro-ball"))
    assert defender.hp < defender.starting_hp


def test_damage_survives_a_crippled_defender():
    attacker, defender, battle = make_battle()
    defender.defense = 3
    defender.defense_stage = -6
    use_move(attacker, defender, battle, get_move("tackle"))
    assert defender.hp < defender.starting_hp
