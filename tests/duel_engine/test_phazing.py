from duel_engine.battle_engine import DuelEngine
from duel_engine.enums import Ability
from duel_engine.utils.mon_factory import create_combatant


def make_phaze_user():
    return create_combatant("Rattata", moves=("roar", "tackle"))


def make_target(ability=Ability.NONE, **kwargs):
    return create_combatant("Bulbasaur", moves=("splash",), ability=ability, **kwargs)


def make_engine(target, seed=1):
    replacement = create_combatant("Oddish", moves=("splash",))
    engine = DuelEngine.create([make_phaze_user()], [target, replacement], seed=seed)
    return engine, replacement


def roar_turn(engine):
    foe_move = engine.battle.sides[1].active.moves[0]
    engine.run_turn(engine.move_action(0, 0), engine.move_action(1, 0))
    return foe_move


def test_roar_drags_out_the_reserve():
    target = make_target()
    engine, replacement = make_engine(target)
    roar_turn(engine)

    assert engine.battle.sides[1].active is replacement
    assert "fled_in_fear" in engine.log.tags()


def test_suction_cups_prevents_roar():
    target = make_target(Ability.SUCTION_CUPS)
    engine, _ = make_engine(target)
    roar_turn(engine)

    assert engine.battle.sides[1].active is target
    assert "Bulbasaur stays in place with its suction cups!" in engine.log.render()


def test_ingrain_prevents_roar():
    target = make_target()
    engine, _ = make_engine(target)
    engine.start()
    target.ingrain = True
    roar_turn(engine)

    assert engine.battle.sides[1].active is target
    assert "Bulbasaur stays in place with its roots!" in engine.log.render()


def test_roar_fails_without_a_reserve():
    target = make_target()
    engine = DuelEngine.create([make_phaze_user()], [target], seed=1)
    roar_turn(engine)

    assert engine.battle.sides[1].active is target
    assert "but_it_failed" in engine.log.tags()


def test_red_card_sends_the_attacker_away():
    attacker = create_combatant("Rattata", moves=("tackle",))
    reserve = create_combatant("Pidgey", moves=("tackle",))
    holder = make_target(item="red-card")
    engine = DuelEngine.create([attacker, reserve], [holder], seed=4)
    engine.run_turn(engine.move_action(0, 0), engine.move_action(1, 0))

    assert engine.battle.sides[0].active is reserve
    assert holder.held.item is None
    assert "red_card" in engine.log.tags()
