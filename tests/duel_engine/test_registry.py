import pytest

from duel_engine.data.moves import MOVES
from duel_engine.enums import DamageClass, ElementType, MoveEffect
from duel_engine.errors import EngineConfigError, UnregisteredEffectError
from duel_engine.move_effects.registry import (
    DAMAGE_ONLY_EFFECTS,
    Stage,
    covered_effects,
    handlers_for,
    validate_catalogue,
    validate_move,
)
from duel_engine.schema.move import MoveData


def test_every_effect_code_has_a_home():
    missing = sorted(int(effect) for effect in MoveEffect if int(effect) not in covered_effects())
    assert missing == [], f"effect codes without a handler: {missing}"


def test_damage_only_codes_are_real_effect_codes():
    known = {int(effect) for effect in MoveEffect}
    assert DAMAGE_ONLY_EFFECTS <= known


def test_built_in_catalogue_validates():
    validate_catalogue(MOVES.values())


def test_unknown_effect_code_fails_validation():
    move = MoveData(id=1234, name="mystery", pp=5, type=ElementType.NORMAL, damage_class=DamageClass.STATUS, effect=7777)
    with pytest.raises(UnregisteredEffectError) as excinfo:
        validate_move(move)
    assert excinfo.value.move_id == 1234
    # Configuration errors are also ValueErrors so callers can treat them as bad input
    assert isinstance(excinfo.value, EngineConfigError)
    assert isinstance(excinfo.value, ValueError)


def test_stages_run_in_pipeline_order():
    assert [stage.name for stage in sorted(Stage)] == [
        "BEFORE_TURN", "SETUP", "PRE_DAMAGE", "POST", "STAT", "FLINCH", "SPECIAL", "SWAP", "LIFE_ORB",
    ]


def test_hit_gates_run_for_every_move():
    tackle = MOVES["tackle"]
    names = [handler.__name__ for handler in handlers_for(Stage.PRE_DAMAGE, tackle.effect)]
    assert "hit_gates" in names


def test_charge_move_locks_before_it_charges():
    names = [handler.__name__ for handler in handlers_for(Stage.SETUP, MOVES["solar-beam"].effect)]
    assert names.index("lock_unless_sunny") < names.index("charge_turn")


def test_life_orb_recoil_is_the_last_stage_for_every_move():
    assert [h.__name__ for h in handlers_for(Stage.LIFE_ORB, 1)] == ["life_orb_recoil"]
