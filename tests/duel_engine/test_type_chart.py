from duel_engine.data.moves import get_move
from duel_engine.enums import Ability, ElementType, WeatherKind
from duel_engine.schema.battle_context import BattleContext, EngineConfig
from duel_engine.type_chart import TypeChart, effectiveness
from duel_engine.utils.mon_factory import create_combatant

T = ElementType


def make_battle(defender_types, config=None, defender_ability=Ability.NONE):
    attacker = create_combatant("Attacker")
    defender = create_combatant("Defender", types=defender_types, ability=defender_ability)
    battle = BattleContext.create([attacker], [defender], seed=5, config=config)
    return attacker, defender, battle


def test_chart_lookups():
    assert TypeChart.lookup(T.FIRE, T.GRASS) == 200
    assert TypeChart.lookup(T.WATER, T.FIRE) == 200
    assert TypeChart.lookup(T.WATER, T.GRASS) == 50
    assert TypeChart.lookup(T.NORMAL, T.GHOST) == 0
    assert TypeChart.lookup(T.NORMAL, T.NORMAL) == 100


def test_dual_type_multiplier_is_the_product():
    assert TypeChart.multiplier(T.FIRE, [T.GRASS, T.BUG]) == 4
    assert TypeChart.multiplier(T.FIRE, [T.WATER, T.ROCK]) == 0.25
    assert TypeChart.multiplier(T.GROUND, [T.FLYING, T.STEEL]) == 0


def test_inverse_multiplier_swaps_resistances_and_weaknesses():
    assert TypeChart.multiplier(T.NORMAL, [T.GHOST], inverse=True) == 2
    assert TypeChart.multiplier(T.FIRE, [T.GRASS], inverse=True) == 0.5
    assert TypeChart.multiplier(T.NORMAL, [T.NORMAL], inverse=True) == 1


def test_typeless_attacks_are_always_neutral():
    _, defender, battle = make_battle([T.GHOST])
    assert effectiveness(defender, T.TYPELESS, battle) == 1


def test_inverse_battle_config():
    attacker, defender, battle = make_battle([T.GHOST], config=EngineConfig(inverse_battle=True))
    assert effectiveness(defender, T.NORMAL, battle, attacker) == 2


def test_scrappy_and_foresight_let_normal_hit_ghosts():
    attacker, defender, battle = make_battle([T.GHOST])
    assert effectiveness(defender, T.NORMAL, battle, attacker) == 0

    attacker.ability_id = Ability.SCRAPPY
    assert effectiveness(defender, T.NORMAL, battle, attacker) == 1

    attacker.ability_id = Ability.NONE
    defender.foresight = True
    assert effectiveness(defender, T.FIGHTING, battle, attacker) == 1


def test_grounded_flying_type_takes_ground_moves():
    attacker, defender, battle = make_battle([T.FLYING])
    assert effectiveness(defender, T.GROUND, battle, attacker) == 0
    battle.gravity.set_turns(5)
    assert effectiveness(defender, T.GROUND, battle, attacker) == 1


def test_tar_shot_doubles_fire():
    attacker, defender, battle = make_battle([T.NORMAL])
    defender.tar_shot = True
    assert effectiveness(defender, T.FIRE, battle, attacker) == 2


def test_strong_winds_removes_flying_weaknesses_only_for_moves():
    attacker, defender, battle = make_battle([T.FLYING])
    battle.weather.kind = WeatherKind.STRONG_WINDS
    assert effectiveness(defender, T.ROCK, battle, attacker) == 2
    assert effectiveness(defender, T.ICE, battle, attacker, get_move("tackle")) == 1
