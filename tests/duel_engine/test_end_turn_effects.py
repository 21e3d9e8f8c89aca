from duel_engine.end_turn_effects import EndTurnEffectsProcessor
from duel_engine.enums import Ability, ElementType, NonVolatileStatus, WeatherKind
from duel_engine.field_ops import set_weather
from duel_engine.schema.battle_context import BattleContext
from duel_engine.utils.mon_factory import create_combatant


def make_battle(seed=3, foe_kwargs=None, **kwargs):
    # 155 HP at level 50 with the default base stats, so 1/16 is 9 and 1/8 is 19
    mon = create_combatant("Rattata", **kwargs)
    foe = create_combatant("Zubat", **(foe_kwargs or {}))
    battle = BattleContext.create([mon], [foe], names=("Red", "Blue"), seed=seed)
    return mon, foe, battle, EndTurnEffectsProcessor(battle)


# =============================================================================
# HELD ITEMS AND STATUS
# =============================================================================
def test_leftovers_heal_a_sixteenth():
    mon, foe, battle, processor = make_battle(item="leftovers")
    mon.hp = 100
    processor.combatant(mon, foe)
    assert mon.hp == 109
    assert "Rattata healed 9 hp from its leftovers!" in battle.log.render()


def test_leftovers_do_nothing_at_full_hp():
    mon, foe, battle, processor = make_battle(item="leftovers")
    processor.combatant(mon, foe)
    assert mon.hp == mon.starting_hp
    assert "healed" not in battle.log.tags()


def test_burn_deals_a_sixteenth():
    mon, foe, battle, processor = make_battle()
    mon.status = NonVolatileStatus.BURN
    processor.combatant(mon, foe)
    assert mon.hp == 155 - 9


def test_bad_poison_grows_every_turn():
    mon, foe, battle, processor = make_battle()
    mon.status = NonVolatileStatus.BADLY_POISONED
    processor.combatant(mon, foe)
    assert mon.hp == 155 - 9
    processor.combatant(mon, foe)
    assert mon.hp == 155 - 9 - 18


def test_poison_heal_turns_poison_into_healing():
    mon, foe, battle, processor = make_battle(ability=Ability.POISON_HEAL)
    mon.status = NonVolatileStatus.POISON
    mon.hp = 100
    processor.combatant(mon, foe)
    assert mon.hp == 119


def test_flame_orb_burns_its_holder():
    mon, foe, battle, processor = make_battle(item="flame-orb")
    processor.combatant(mon, foe)
    assert mon.status == NonVolatileStatus.BURN


def test_black_sludge_hurts_non_poison_types():
    mon, foe, battle, processor = make_battle(item="black-sludge")
    processor.combatant(mon, foe)
    assert mon.hp == 155 - 19

    mon, foe, battle, processor = make_battle(item="black-sludge", types=(ElementType.POISON,))
    mon.hp = 100
    processor.combatant(mon, foe)
    assert mon.hp == 109


# =============================================================================
# RESIDUAL DAMAGE
# =============================================================================
def test_sandstorm_chips_everything_but_rock_ground_and_steel():
    mon, foe, battle, processor = make_battle(foe_kwargs={"types": (ElementType.ROCK,)})
    battle.weather.kind = WeatherKind.SANDSTORM
    processor.combatant(mon, foe)
    processor.combatant(foe, mon)
    assert mon.hp == 155 - 9
    assert foe.hp == foe.starting_hp


def test_overcoat_ignores_hail():
    mon, foe, battle, processor = make_battle(ability=Ability.OVERCOAT)
    battle.weather.kind = WeatherKind.HAIL
    processor.combatant(mon, foe)
    processor.combatant(foe, mon)
    assert mon.hp == mon.starting_hp
    assert foe.hp == foe.starting_hp - 9


def test_leech_seed_drains_to_the_opponent():
    mon, foe, battle, processor = make_battle()
    mon.leech_seed = True
    foe.hp = 100
    processor.combatant(mon, foe)
    assert mon.hp == 155 - 19
    assert foe.hp == 119


def test_leech_seed_needs_an_opponent_on_the_field():
    mon, foe, battle, processor = make_battle()
    mon.leech_seed = True
    processor.combatant(mon, None)
    assert mon.hp == mon.starting_hp


# =============================================================================
# TIMERS
# =============================================================================
def test_side_condition_wears_off():
    mon, foe, battle, processor = make_battle()
    side = battle.sides[0]
    side.reflect.set_turns(2)
    processor.side(side)
    assert side.reflect.active()
    processor.side(side)
    assert not side.reflect.active()
    assert battle.log.render().strip() == "Red's reflect wore off!"


def test_wish_lands_on_the_second_end_of_turn():
    mon, foe, battle, processor = make_battle()
    side = battle.sides[0]
    side.wish.set(70)
    mon.hp = 50
    processor.side(side)
    assert mon.hp == 50
    processor.side(side)
    assert mon.hp == 120


def test_weather_lasts_five_turns():
    mon, foe, battle, processor = make_battle()
    assert set_weather(battle, WeatherKind.RAIN, mon)
    for _ in range(4):
        processor.field_start()
        assert battle.weather.kind == WeatherKind.RAIN
    processor.field_start()
    assert battle.weather.kind == WeatherKind.NONE
    assert battle.log.tags()[-1] == "weather_cleared"
    assert battle.turn == 5


def test_weather_rock_extends_weather():
    mon, foe, battle, processor = make_battle(item="damp-rock")
    set_weather(battle, WeatherKind.RAIN, mon)
    assert battle.weather.timer.remaining == 8
    assert not set_weather(battle, WeatherKind.RAIN, mon)


def test_trick_room_ends():
    mon, foe, battle, processor = make_battle()
    battle.trick_room.set_turns(1)
    processor.field_end()
    assert not battle.trick_room.active()
    assert battle.log.tags() == ["trick_room_ended"]


def test_volatile_timers_run_out():
    mon, foe, battle, processor = make_battle(moves=("tackle", "growl"))
    mon.taunt.set_turns(1)
    mon.disable.set(mon.moves[0].id, 1)
    processor.combatant(mon, foe)
    assert not mon.taunt.active()
    assert mon.disable.item is None
    rendered = battle.log.render()
    assert "Rattata's Tackle is no longer disabled!" in rendered
    assert "Rattata's taunt has ended!" in rendered


def test_perish_song_knocks_out_at_zero():
    mon, foe, battle, processor = make_battle()
    mon.perish_song.set_turns(2)
    processor.combatant(mon, foe)
    assert mon.hp == mon.starting_hp
    processor.combatant(mon, foe)
    assert mon.hp == 0
    assert battle.sides[0].active is None


def test_protection_resets_at_end_of_turn():
    mon, foe, battle, processor = make_battle()
    mon.protect = True
    mon.protection_used = True
    mon.protection_chance = 3
    processor.combatant(mon, foe)
    assert not mon.protect
    # Chance only resets after a turn without protecting
    assert mon.protection_chance == 3
    processor.combatant(mon, foe)
    assert mon.protection_chance == 1


def test_speed_boost_raises_speed_every_turn():
    mon, foe, battle, processor = make_battle(ability=Ability.SPEED_BOOST)
    processor.combatant(mon, foe)
    assert mon.speed_stage == 1
