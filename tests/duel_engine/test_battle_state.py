import pytest
from pydantic import ValidationError

from duel_engine.battle_engine import DuelEngine
from duel_engine.enums import ElementType, NonVolatileStatus
from duel_engine.schema.battle_context import BattleContext, EngineConfig, Side
from duel_engine.schema.log import BattleLog, LogEvent
from duel_engine.utils.mon_factory import create_combatant


def make_mon(species="Rattata", moves=("tackle", "ember", "swords-dance", "protect"), **kwargs):
    return create_combatant(species, moves=moves, **kwargs)


# =============================================================================
# NARRATION
# =============================================================================
def test_source_is_appended_only_when_present():
    with_source = LogEvent(tag="took_damage", params={"name": "Rattata", "amount": 9, "source": "its burn"})
    assert with_source.render() == "Rattata took 9 damage from its burn!"

    without_source = LogEvent(tag="took_damage", params={"name": "Rattata", "amount": 9})
    assert without_source.render() == "Rattata took 9 damage!"


def test_unknown_tag_is_rejected():
    log = BattleLog()
    with pytest.raises(KeyError):
        log.add("not_a_real_tag", name="Rattata")
    assert log.events == []


def test_mark_and_since():
    log = BattleLog()
    log.add("used_move", name="Rattata", move="Tackle")
    mark = log.mark()
    log.add("missed")
    log.add("wins", side="Player 1")
    assert [event.tag for event in log.since(mark)] == ["missed", "wins"]
    assert log.tags(mark) == ["missed", "wins"]
    assert log.render(mark).splitlines()[-1] == "Player 1 wins!"


# =============================================================================
# STATE
# =============================================================================
def test_create_stamps_sides_and_unique_ids():
    party1 = [make_mon(), make_mon("Pidgey")]
    party2 = [make_mon("Zubat")]
    battle = BattleContext.create(party1, party2, names=("Red", "Blue"), seed=1)

    assert [mon.uid for mon in party1] == [0, 1]
    assert [mon.uid for mon in party2] == [6]
    assert all(mon.side == 1 for mon in party2)
    assert battle.find(6) is party2[0]
    assert battle.opponent_of(party1[0]) is party2[0]
    with pytest.raises(KeyError):
        battle.find(3)


def test_party_size_is_bounded():
    with pytest.raises(ValidationError):
        Side(name="Red", party=[])
    with pytest.raises(ValidationError):
        Side(name="Red", party=[make_mon() for _ in range(7)])


def test_engine_config_rejects_a_zero_depth():
    with pytest.raises(ValidationError):
        EngineConfig(max_use_depth=0)


def test_restored_battle_continues_identically():
    engine = DuelEngine.create(
        [make_mon(), make_mon("Pidgey", types=(ElementType.NORMAL, ElementType.FLYING))],
        [make_mon("Zubat", item="leftovers"), make_mon("Geodude", types=(ElementType.ROCK, ElementType.GROUND))],
        seed=2024,
    )
    engine.run_turn(engine.move_action(0, 0), engine.move_action(1, 1))
    engine.battle.sides[1].active.status = NonVolatileStatus.BURN

    dumped = engine.battle.model_dump_json()
    twin = DuelEngine(BattleContext.model_validate_json(dumped))
    assert twin.started
    assert twin.battle.model_dump() == engine.battle.model_dump()

    mark = engine.log.mark()
    for _ in range(3):
        if engine.is_battle_over():
            break
        engine.run_turn(engine.move_action(0, 0), engine.move_action(1, 0))
        twin.run_turn(twin.move_action(0, 0), twin.move_action(1, 0))

    assert twin.log.render(mark) == engine.log.render(mark)
    assert twin.battle.rng.seed == engine.battle.rng.seed
    assert twin.winner == engine.winner
