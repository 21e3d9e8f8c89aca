import pytest

from duel_engine.data.moves import MOVES, get_move
from duel_engine.enums import Ability, DamageClass, ElementType, NonVolatileStatus, StatKind, WeatherKind
from duel_engine.errors import RecursionLimitError, UnregisteredEffectError
from duel_engine.hit_resolver import check_hit
from duel_engine.move_pipeline import use_move
from duel_engine.schema.battle_context import BattleContext, EngineConfig
from duel_engine.schema.move import BattleMove
from duel_engine.utils.mon_factory import create_combatant


def make_battle(seed=11, attacker_types=(ElementType.WATER,), defender_types=(ElementType.NORMAL,), **attacker_kwargs):
    attacker = create_combatant("Attacker", types=attacker_types, **attacker_kwargs)
    defender = create_combatant("Defender", types=defender_types)
    battle = BattleContext.create([attacker], [defender], seed=seed)
    return attacker, defender, battle


def use_again(attacker, defender, battle, move, **kwargs):
    """Use a move as if it were a new turn for the attacker."""
    attacker.has_moved = False
    mark = battle.log.mark()
    use_move(attacker, defender, battle, move, **kwargs)
    return battle.log.tags(mark)


# =============================================================================
# STATUS GATES
# =============================================================================
def test_frozen_user_thaws_about_one_time_in_five():
    attacker, defender, battle = make_battle(seed=424242)
    splash = get_move("splash", pp=100000)
    trials = 5000
    thawed = 0
    for _ in range(trials):
        attacker.status = NonVolatileStatus.FREEZE
        tags = use_again(attacker, defender, battle, splash)
        if "no_longer_frozen" in tags:
            thawed += 1
        else:
            assert "frozen_solid" in tags
    assert abs(thawed / trials - 0.2) < 0.03


def test_called_moves_never_thaw_the_user():
    attacker, defender, battle = make_battle(seed=1)
    attacker.status = NonVolatileStatus.FREEZE
    splash = get_move("splash")
    for _ in range(50):
        tags = use_again(attacker, defender, battle, splash, use_pp=False)
        assert tags == ["frozen_solid"]


def test_paralysis_stops_the_user_about_one_time_in_four():
    attacker, defender, battle = make_battle(seed=9001)
    attacker.status = NonVolatileStatus.PARALYSIS
    splash = get_move("splash", pp=100000)
    trials = 4000
    stopped = sum("fully_paralyzed" in use_again(attacker, defender, battle, splash) for _ in range(trials))
    assert abs(stopped / trials - 0.25) < 0.03
    assert attacker.status == NonVolatileStatus.PARALYSIS


def test_confused_user_hits_itself_about_one_time_in_three():
    attacker, defender, battle = make_battle(seed=31337)
    attacker.confusion.set_turns(None)
    splash = get_move("splash", pp=100000)
    trials = 3000
    hurt = 0
    for _ in range(trials):
        attacker.hp = attacker.starting_hp
        if "hurt_in_confusion" in use_again(attacker, defender, battle, splash):
            hurt += 1
            assert attacker.hp < attacker.starting_hp
    assert abs(hurt / trials - 1 / 3) < 0.03


def test_thawing_move_thaws_before_the_roll():
    attacker, defender, battle = make_battle(seed=2)
    attacker.status = NonVolatileStatus.FREEZE
    tags = use_again(attacker, defender, battle, get_move("flare-blitz"))
    assert tags[0] == "thawed"
    assert attacker.status == NonVolatileStatus.NONE
    assert defender.hp < defender.starting_hp


# =============================================================================
# ACCURACY
# =============================================================================
def test_move_without_accuracy_always_hits():
    attacker, defender, battle = make_battle(seed=5)
    attacker.accuracy_stage = -6
    defender.evasion_stage = 6
    sure_hit = BattleMove(
        id=9002, name="sure-hit", power=60, pp=10, accuracy=None, type=ElementType.NORMAL,
        damage_class=DamageClass.PHYSICAL, effect=1,
    )
    assert all(check_hit(sure_hit, attacker, defender, battle) for _ in range(300))

    # The same stages make an ordinary move miss most of the time
    tackle = get_move("tackle")
    hits = sum(check_hit(tackle, attacker, defender, battle) for _ in range(300))
    assert 0 < hits < 300


def test_no_guard_never_misses():
    attacker, defender, battle = make_battle(seed=5, ability=Ability.NO_GUARD)
    defender.evasion_stage = 6
    assert all(check_hit(get_move("thunder-wave"), attacker, defender, battle) for _ in range(100))


# =============================================================================
# PP AND FAILURES
# =============================================================================
def test_pp_is_spent_once_per_use():
    attacker, defender, battle = make_battle()
    tackle = attacker.moves[0]
    use_again(attacker, defender, battle, tackle)
    assert tackle.pp == tackle.starting_pp - 1

    use_again(attacker, defender, battle, tackle, use_pp=False)
    assert tackle.pp == tackle.starting_pp - 1


def test_pressure_costs_an_extra_pp():
    attacker, defender, battle = make_battle()
    defender.ability_id = Ability.PRESSURE
    tackle = attacker.moves[0]
    use_again(attacker, defender, battle, tackle)
    assert tackle.pp == tackle.starting_pp - 2


def test_unknown_effect_code_is_rejected():
    attacker, defender, battle = make_battle()
    broken = BattleMove(
        id=9003, name="broken", power=40, pp=5, accuracy=100, type=ElementType.NORMAL,
        damage_class=DamageClass.PHYSICAL, effect=9999,
    )
    with pytest.raises(UnregisteredEffectError) as excinfo:
        use_move(attacker, defender, battle, broken)
    assert excinfo.value.effect_code == 9999
    assert defender.hp == defender.starting_hp


def test_nested_uses_past_the_limit_are_rejected():
    attacker, defender, battle = make_battle()
    battle.use_depth = battle.config.max_use_depth
    with pytest.raises(RecursionLimitError):
        use_move(attacker, defender, battle, attacker.moves[0])
    assert battle.use_depth == battle.config.max_use_depth


def test_ground_move_cannot_touch_a_flying_type():
    attacker, defender, battle = make_battle(defender_types=(ElementType.FLYING,))
    tags = use_again(attacker, defender, battle, get_move("earthquake"))
    assert "no_effect" in tags
    assert defender.hp == defender.starting_hp

    # Fixed damage only cares about the type chart, and fighting only resists flying
    tags = use_again(attacker, defender, battle, get_move("seismic-toss"))
    assert defender.hp == defender.starting_hp - attacker.level


# =============================================================================
# MOVE FAMILIES THROUGH THE PIPELINE
# =============================================================================
def test_status_move_takes_no_life_orb_recoil():
    attacker, defender, battle = make_battle(item="life-orb")
    use_again(attacker, defender, battle, get_move("swords-dance"))
    assert attacker.hp == attacker.starting_hp
    assert attacker.attack_stage == 2

    use_again(attacker, defender, battle, get_move("tackle"))
    assert attacker.hp == attacker.starting_hp - attacker.starting_hp // 10


def test_stat_stage_stops_at_six():
    attacker, defender, battle = make_battle()
    swords_dance = get_move("swords-dance")
    for _ in range(3):
        use_again(attacker, defender, battle, swords_dance)
    assert attacker.attack_stage == 6

    tags = use_again(attacker, defender, battle, swords_dance)
    assert "stat_wont_go_higher" in tags
    assert attacker.get_stage(StatKind.ATTACK) == 6


def test_charge_move_waits_a_turn_before_hitting():
    attacker, defender, battle = make_battle()
    solar_beam = get_move("solar-beam")

    tags = use_again(attacker, defender, battle, solar_beam)
    assert "charging_up" in tags
    assert defender.hp == defender.starting_hp
    assert attacker.locked_move is not None and attacker.locked_move.move.name == "solar-beam"

    # What the end of the turn does to the lock
    attacker.locked_move.next_turn()
    tags = use_again(attacker, defender, battle, solar_beam)
    assert "charging_up" not in tags
    assert defender.hp < defender.starting_hp


def test_charge_move_fires_at_once_in_sun():
    attacker, defender, battle = make_battle()
    battle.weather.kind = WeatherKind.SUN
    tags = use_again(attacker, defender, battle, get_move("solar-beam"))
    assert "charging_up" not in tags
    assert attacker.locked_move is None
    assert defender.hp < defender.starting_hp


def test_protect_blocks_the_following_attack():
    attacker, defender, battle = make_battle()
    tags = use_again(defender, attacker, battle, get_move("protect"))
    assert "protected_itself" in tags
    assert defender.protect

    tags = use_again(attacker, defender, battle, get_move("tackle"))
    assert "protected" in tags
    assert defender.hp == defender.starting_hp


def test_thunder_wave_respects_type_immunities():
    attacker, defender, battle = make_battle(ability=Ability.NO_GUARD)
    use_again(attacker, defender, battle, get_move("thunder-wave"))
    assert defender.status == NonVolatileStatus.PARALYSIS

    attacker, defender, battle = make_battle(ability=Ability.NO_GUARD, defender_types=(ElementType.ELECTRIC,))
    tags = use_again(attacker, defender, battle, get_move("thunder-wave"))
    assert defender.status == NonVolatileStatus.NONE
    assert "type_immune_status" in tags

    attacker, defender, battle = make_battle(ability=Ability.NO_GUARD, defender_types=(ElementType.GROUND,))
    tags = use_again(attacker, defender, battle, get_move("thunder-wave"))
    assert defender.status == NonVolatileStatus.NONE
    assert "no_effect" in tags


def test_drain_move_heals_the_user():
    attacker, defender, battle = make_battle()
    attacker.hp = 50
    use_again(attacker, defender, battle, get_move("giga-drain"))
    dealt = defender.starting_hp - defender.hp
    assert attacker.hp == 50 + dealt // 2


def test_recoil_move_hurts_the_user():
    attacker, defender, battle = make_battle()
    use_again(attacker, defender, battle, get_move("double-edge"))
    dealt = defender.starting_hp - defender.hp
    assert dealt > 0
    assert attacker.hp == attacker.starting_hp - dealt // 3


# =============================================================================
# NESTED USES
# =============================================================================
def test_snatch_steals_a_self_boost():
    attacker, defender, battle = make_battle()
    defender.snatching = True
    tags = use_again(attacker, defender, battle, get_move("swords-dance"))

    assert tags[:2] == ["used_move", "snatched_move"]
    assert tags.count("used_move") == 2
    assert defender.attack_stage == 2
    assert attacker.attack_stage == 0
    assert attacker.has_moved
    assert not defender.has_moved


def test_magic_bounce_sends_the_move_back():
    attacker, defender, battle = make_battle()
    defender.ability_id = Ability.MAGIC_BOUNCE
    growl = get_move("growl")
    tags = use_again(attacker, defender, battle, growl)

    assert "reflected" in tags
    # The reflected use is not announced again
    assert tags.count("used_move") == 1
    assert attacker.attack_stage == -1
    assert defender.attack_stage == 0
    assert growl.pp == growl.starting_pp - 1
    assert not defender.has_moved


def test_dancer_copies_a_dance_and_keeps_its_turn():
    attacker, defender, battle = make_battle()
    defender.ability_id = Ability.DANCER
    use_again(attacker, defender, battle, get_move("swords-dance"))
    assert attacker.attack_stage == 2
    assert defender.attack_stage == 2
    assert not defender.has_moved

    # A dancer that already acted this turn is still marked as having acted
    defender.has_moved = True
    use_again(attacker, defender, battle, get_move("swords-dance"))
    assert defender.attack_stage == 4
    assert defender.has_moved


def test_metronome_calls_without_spending_pp():
    attacker, defender, battle = make_battle(moves=("metronome",))
    battle.config.metronome_moves = [MOVES["tackle"]]
    metronome = attacker.moves[0]
    tags = use_again(attacker, defender, battle, metronome)

    assert tags.count("used_move") == 2
    assert "ran_out_of_pp" not in tags
    assert defender.hp < defender.starting_hp
    assert metronome.pp == metronome.starting_pp - 1
    assert attacker.last_move.name == "metronome"
    assert attacker.has_moved


def test_metronome_skips_moves_it_cannot_call():
    attacker, defender, battle = make_battle()
    battle.config.metronome_moves = [MOVES["protect"], MOVES["metronome"]]
    tags = use_again(attacker, defender, battle, get_move("metronome"))
    assert tags == ["used_move", "but_it_failed"]


def test_default_metronome_pool_is_the_callable_catalogue():
    names = {move.name for move in EngineConfig().metronome_moves}
    assert "tackle" in names
    assert names.isdisjoint({"metronome", "protect", "counter", "sleep-talk", "copycat", "snatch"})


def test_sleep_talk_uses_another_move_while_asleep():
    attacker, defender, battle = make_battle(moves=("sleep-talk", "tackle"))
    attacker.status = NonVolatileStatus.SLEEP
    attacker.sleep_timer.set_turns(3)
    sleep_talk, tackle = attacker.moves
    tags = use_again(attacker, defender, battle, sleep_talk)

    assert tags.count("used_move") == 2
    assert "fast_asleep" not in tags
    assert defender.hp < defender.starting_hp
    assert tackle.pp == tackle.starting_pp
    assert attacker.last_move.name == "sleep-talk"
    assert attacker.status == NonVolatileStatus.SLEEP


def test_sleep_talk_never_calls_itself():
    attacker, defender, battle = make_battle(moves=("sleep-talk",))
    attacker.status = NonVolatileStatus.SLEEP
    attacker.sleep_timer.set_turns(3)
    tags = use_again(attacker, defender, battle, attacker.moves[0])
    assert tags == ["used_move", "but_it_failed"]


def test_copycat_repeats_the_last_move_as_a_fresh_copy():
    attacker, defender, battle = make_battle()
    copied = get_move("swords-dance")
    defender.last_move = copied
    use_again(attacker, defender, battle, get_move("copycat"))

    assert attacker.attack_stage == 2
    assert copied.pp == copied.starting_pp
    assert not copied.used


# =============================================================================
# ABSORPTION AND POWDER
# =============================================================================
def test_volt_absorb_heals_instead_of_taking_damage():
    attacker, defender, battle = make_battle()
    defender.ability_id = Ability.VOLT_ABSORB
    defender.hp = 100
    tags = use_again(attacker, defender, battle, get_move("thunderbolt"))

    assert "absorbed_move" in tags
    assert defender.hp == 100 + defender.starting_hp // 4
    assert defender.status == NonVolatileStatus.NONE


def test_lightning_rod_turns_the_move_into_a_boost():
    attacker, defender, battle = make_battle()
    defender.ability_id = Ability.LIGHTNING_ROD
    use_again(attacker, defender, battle, get_move("thunderbolt"))
    assert defender.sp_atk_stage == 1
    assert defender.hp == defender.starting_hp


def test_flash_fire_soaks_up_fire():
    attacker, defender, battle = make_battle()
    defender.ability_id = Ability.FLASH_FIRE
    tags = use_again(attacker, defender, battle, get_move("ember"))
    assert tags[-1] == "flash_fire"
    assert defender.flash_fire
    assert defender.hp == defender.starting_hp


def test_powder_explodes_on_fire_moves():
    attacker, defender, battle = make_battle()
    attacker.powdered = True
    tags = use_again(attacker, defender, battle, get_move("ember"))
    assert tags == ["used_move", "took_damage"]
    assert attacker.hp == attacker.starting_hp - attacker.starting_hp // 4
    assert defender.hp == defender.starting_hp


# =============================================================================
# MISSING
# =============================================================================
def test_crash_damage_when_the_move_has_no_effect():
    attacker, defender, battle = make_battle(defender_types=(ElementType.GHOST,))
    tags = use_again(attacker, defender, battle, get_move("jump-kick"))
    assert "no_effect" in tags
    assert attacker.hp == attacker.starting_hp - attacker.starting_hp // 2
    assert attacker.last_move_failed


def test_crash_damage_when_the_target_is_out_of_reach():
    attacker, defender, battle = make_battle()
    defender.fly = True
    tags = use_again(attacker, defender, battle, get_move("jump-kick"))
    assert "avoided" in tags
    assert attacker.hp == attacker.starting_hp - attacker.starting_hp // 2
    assert defender.hp == defender.starting_hp


def test_protection_resets_fury_cutter():
    attacker, defender, battle = make_battle()
    attacker.fury_cutter = 3
    defender.protect = True
    tags = use_again(attacker, defender, battle, get_move("fury-cutter"))
    assert "protected" in tags
    assert attacker.fury_cutter == 0


def test_a_miss_resets_fury_cutter():
    attacker, defender, battle = make_battle(seed=77)
    defender.evasion_stage = 6
    fury_cutter = get_move("fury-cutter", pp=1000)
    misses = 0
    for _ in range(200):
        attacker.fury_cutter = 3
        if "missed" in use_again(attacker, defender, battle, fury_cutter):
            misses += 1
            assert attacker.fury_cutter == 0
        defender.hp = defender.starting_hp
    assert misses > 0


def test_thrash_lock_is_dropped_when_the_move_has_no_effect():
    attacker, defender, battle = make_battle()
    use_again(attacker, defender, battle, get_move("outrage"))
    assert attacker.locked_move is not None

    attacker, defender, battle = make_battle(defender_types=(ElementType.FAIRY,))
    tags = use_again(attacker, defender, battle, get_move("outrage"))
    assert "no_effect" in tags
    assert attacker.locked_move is None
