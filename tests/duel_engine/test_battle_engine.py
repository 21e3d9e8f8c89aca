import pytest

from duel_engine.battle_engine import DuelEngine
from duel_engine.enums import NonVolatileStatus
from duel_engine.errors import InvalidActionError
from duel_engine.schema.battle_context import MoveAction, SwitchAction
from duel_engine.utils.mon_factory import create_combatant

FAST = (80, 80, 80, 80, 80, 120)  # 140 speed at level 50, against 100 for the default spread


def make_mon(species="Rattata", moves=("tackle", "growl", "swords-dance", "ember"), **kwargs):
    return create_combatant(species, moves=moves, **kwargs)


def make_engine(party1=None, party2=None, seed=7, **kwargs):
    party1 = party1 or [make_mon()]
    party2 = party2 or [make_mon("Zubat")]
    return DuelEngine.create(party1, party2, names=("Red", "Blue"), seed=seed, **kwargs)


def splash(engine, side_index):
    return MoveAction(move=engine.battle.sides[side_index].active.moves[0])


# =============================================================================
# BATTLE START
# =============================================================================
def test_faster_lead_is_sent_out_first():
    engine = make_engine([make_mon()], [make_mon("Zubat", base_stats=FAST)])
    assert not engine.started
    engine.start()
    assert engine.started
    assert [event.params["side"] for event in engine.log.events[:2]] == ["Blue", "Red"]

    # Starting twice does nothing
    count = len(engine.log.events)
    engine.start()
    assert len(engine.log.events) == count


# =============================================================================
# WINNING AND REPLACEMENTS
# =============================================================================
def test_knocking_out_the_last_combatant_wins():
    engine = make_engine([make_mon(base_stats=FAST)], [make_mon("Zubat", level=1)])
    winner = engine.run_turn(engine.move_action(0, 0), engine.move_action(1, 0))

    assert winner == 0
    assert engine.is_battle_over()
    assert engine.log.tags()[-1] == "wins"
    assert engine.log.render().splitlines()[-1] == "Red wins!"
    with pytest.raises(InvalidActionError):
        engine.run_turn(engine.move_action(0, 0), SwitchAction(index=0))


def test_fainted_combatant_is_replaced_at_end_of_turn():
    backup = make_mon("Pidgey")
    engine = make_engine([make_mon(base_stats=FAST)], [make_mon("Zubat", level=1), backup])
    winner = engine.run_turn(engine.move_action(0, 0), engine.move_action(1, 0))

    assert winner is None
    assert engine.battle.sides[1].active is backup
    assert backup.hp == backup.starting_hp
    assert engine.log.events[-1].tag == "sent_out"
    assert engine.log.events[-1].params["name"] == "Pidgey"


def test_declining_a_replacement_loses_the_battle():
    engine = make_engine(
        [make_mon(level=1), make_mon("Pidgey")],
        [make_mon("Zubat", base_stats=FAST)],
        swap_selector=lambda side, battle, mid_turn: None,
    )
    winner = engine.run_turn(engine.move_action(0, 0), engine.move_action(1, 0))

    assert winner == 1
    assert engine.log.tags()[-2:] == ["no_replacement", "wins"]


def test_turn_counter_and_residual_damage():
    engine = make_engine(
        [make_mon(moves=("splash",))],
        [make_mon("Zubat", moves=("splash",))],
    )
    engine.start()
    mon = engine.battle.sides[0].active
    mon.status = NonVolatileStatus.BURN
    engine.run_turn(splash(engine, 0), splash(engine, 1))

    assert engine.battle.turn == 1
    assert mon.hp == mon.starting_hp - mon.starting_hp // 16


# =============================================================================
# TURN ORDER
# =============================================================================
def select(engine, action1, action2):
    engine.start()
    engine.battle.sides[0].selected_action = action1
    engine.battle.sides[1].selected_action = action2
    return engine.who_first()


def test_switching_goes_before_any_move():
    engine = make_engine(
        [make_mon(), make_mon("Pidgey")],
        [make_mon("Zubat", base_stats=FAST, moves=("fake-out",))],
    )
    first, _ = select(engine, SwitchAction(index=1), engine.move_action(1, 0))
    assert first is engine.battle.sides[0]


def test_priority_beats_speed():
    engine = make_engine(
        [make_mon(moves=("fake-out",))],
        [make_mon("Zubat", base_stats=FAST)],
    )
    first, _ = select(engine, engine.move_action(0, 0), engine.move_action(1, 0))
    assert first is engine.battle.sides[0]


def test_faster_side_moves_first_unless_trick_room():
    engine = make_engine([make_mon()], [make_mon("Zubat", base_stats=FAST)])
    first, _ = select(engine, engine.move_action(0, 0), engine.move_action(1, 0))
    assert first is engine.battle.sides[1]

    engine.battle.trick_room.set_turns(5)
    first, _ = engine.who_first()
    assert first is engine.battle.sides[0]


def test_speed_ties_are_a_coin_flip():
    engine = make_engine(seed=99)
    select(engine, engine.move_action(0, 0), engine.move_action(1, 0))
    trials = 2000
    side1_first = sum(engine.who_first()[0] is engine.battle.sides[0] for _ in range(trials))
    assert abs(side1_first / trials - 0.5) < 0.05


# =============================================================================
# ACTION SELECTION
# =============================================================================
def test_moves_without_pp_cannot_be_picked():
    engine = make_engine()
    mon = engine.battle.sides[0].active
    mon.moves[0].pp = 0
    assert engine.valid_moves(0).indexes == [1, 2, 3]

    for move in mon.moves:
        move.pp = 0
    choices = engine.valid_moves(0)
    assert choices.struggle
    assert engine.move_action(0, 2).move.name == "struggle"


def test_taunt_hides_status_moves():
    engine = make_engine()
    engine.battle.sides[0].active.taunt.set_turns(3)
    assert engine.valid_moves(0).indexes == [0, 3]
    with pytest.raises(InvalidActionError):
        engine.move_action(0, 1)


def test_choice_item_and_encore_lock_a_single_move():
    engine = make_engine([make_mon(item="choice-band")])
    mon = engine.battle.sides[0].active
    mon.choice_move = mon.moves[3].id
    assert engine.valid_moves(0).indexes == [3]

    engine = make_engine()
    mon = engine.battle.sides[0].active
    mon.encore.set(mon.moves[1].id, 3)
    assert engine.valid_moves(0).indexes == [1]


def test_choice_lock_is_set_by_the_first_move():
    engine = make_engine([make_mon(item="choice-scarf")], [make_mon("Zubat", moves=("splash",))])
    engine.run_turn(engine.move_action(0, 2), splash(engine, 1))
    assert engine.valid_moves(0).indexes == [2]


def test_charge_move_is_forced_on_the_next_turn():
    engine = make_engine(
        [make_mon(moves=("solar-beam", "tackle"))],
        [make_mon("Zubat", moves=("splash",))],
    )
    foe = engine.battle.sides[1].active
    engine.run_turn(engine.move_action(0, 0), splash(engine, 1))
    assert foe.hp == foe.starting_hp

    choices = engine.valid_moves(0)
    assert choices.forced is not None and choices.forced.name == "solar-beam"
    # The slot is ignored while a move is locked in
    action = engine.move_action(0, 1)
    assert action.move.name == "solar-beam"

    engine.run_turn(action, splash(engine, 1))
    assert foe.hp < foe.starting_hp
    assert engine.battle.sides[0].active.locked_move is None


def test_side_without_an_active_combatant_has_no_moves():
    engine = make_engine()
    engine.battle.sides[0].active_index = None
    with pytest.raises(InvalidActionError):
        engine.valid_moves(0)


def test_invalid_switches_are_rejected():
    fainted = make_mon("Pidgey")
    fainted.hp = 0
    engine = make_engine([make_mon(), make_mon("Spearow"), fainted])
    for index in (0, 2, 5):
        with pytest.raises(InvalidActionError):
            engine.run_turn(SwitchAction(index=index), engine.move_action(1, 0))
    assert engine.battle.turn == 0


def test_switching_swaps_the_active_combatant():
    backup = make_mon("Spearow")
    engine = make_engine([make_mon(), backup], [make_mon("Zubat", moves=("splash",))])
    engine.start()
    engine.run_turn(SwitchAction(index=1), splash(engine, 1))
    side = engine.battle.sides[0]
    assert side.active is backup
    assert side.last_idx == 1


# =============================================================================
# MID-TURN SWAPS
# =============================================================================
def test_u_turn_brings_the_replacement_in_before_the_foe_moves():
    lead = make_mon(moves=("u-turn",), base_stats=FAST)
    backup = make_mon("Pidgey")
    engine = make_engine([lead, backup], [make_mon("Zubat")])
    engine.run_turn(engine.move_action(0, 0), engine.move_action(1, 0))

    assert engine.battle.sides[0].active is backup
    assert lead.hp == lead.starting_hp
    assert backup.hp < backup.starting_hp

    # Both leads were sent out before the turn began
    events = engine.log.events[2:]
    tags = [event.tag for event in events]
    replacement = tags.index("sent_out")
    assert events[replacement].params["name"] == "Pidgey"
    assert tags.index("went_back") < replacement < tags.index("used_move", replacement)
    used = [event.params["name"] for event in events if event.tag == "used_move"]
    assert used == ["Rattata", "Zubat"]


def test_baton_pass_hands_over_stages_and_substitute():
    lead = make_mon(moves=("baton-pass",), base_stats=FAST)
    backup = make_mon("Pidgey")
    engine = make_engine([lead, backup], [make_mon("Zubat", moves=("splash",))])
    engine.start()
    lead.attack_stage = 2
    lead.substitute = 30

    engine.run_turn(engine.move_action(0, 0), splash(engine, 1))

    assert engine.battle.sides[0].active is backup
    assert backup.attack_stage == 2
    assert backup.substitute == 30
    assert lead.attack_stage == 0
    assert lead.substitute == 0
    assert "baton_pass_received" in engine.log.tags()
    assert engine.battle.sides[0].baton_pass is None
