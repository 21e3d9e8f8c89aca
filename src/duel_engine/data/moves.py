"""
Built-in move catalogue.

A small slice of the full move table, with the same ids and effect codes the real catalogue uses.
Tests and the mon factory build movesets from it; a production caller passes its own MoveData.
"""

from typing import Optional

from duel_engine.enums import DamageClass, ElementType, MoveTarget
from duel_engine.schema.move import BattleMove, MoveData

T = ElementType
P = DamageClass.PHYSICAL
S = DamageClass.SPECIAL
ST = DamageClass.STATUS


def _move(
    id: int,
    name: str,
    type: ElementType,
    damage_class: DamageClass,
    effect: int,
    power: Optional[int] = None,
    pp: int = 10,
    accuracy: Optional[int] = 100,
    priority: int = 0,
    effect_chance: Optional[int] = None,
    target: MoveTarget = MoveTarget.SELECTED_POKEMON,
    crit_rate: int = 0,
    hits: Optional[tuple[int, int]] = None,
) -> MoveData:
    min_hits, max_hits = hits if hits else (None, None)
    return MoveData(
        id=id,
        name=name,
        power=power,
        pp=pp,
        accuracy=accuracy,
        priority=priority,
        type=type,
        damage_class=damage_class,
        effect=effect,
        effect_chance=effect_chance,
        target=target,
        crit_rate=crit_rate,
        min_hits=min_hits,
        max_hits=max_hits,
    )


# fmt: off
_CATALOGUE = [
    # Plain damage
    _move(1, "pound", T.NORMAL, P, 1, power=40, pp=35),
    _move(33, "tackle", T.NORMAL, P, 1, power=40, pp=35),
    _move(22, "vine-whip", T.GRASS, P, 1, power=45, pp=25),
    _move(55, "water-gun", T.WATER, S, 1, power=40, pp=25),
    _move(89, "earthquake", T.GROUND, P, 148, power=100, target=MoveTarget.ALL_OTHER_POKEMON),
    _move(57, "surf", T.WATER, S, 258, power=90, pp=15, target=MoveTarget.ALL_OTHER_POKEMON),
    _move(2, "karate-chop", T.FIGHTING, P, 44, power=50, pp=25, crit_rate=1),
    # Secondary effects
    _move(52, "ember", T.FIRE, S, 5, power=40, pp=25, effect_chance=10),
    _move(53, "flamethrower", T.FIRE, S, 5, power=90, pp=15, effect_chance=10),
    _move(85, "thunderbolt", T.ELECTRIC, S, 7, power=90, pp=15, effect_chance=10),
    _move(87, "thunder", T.ELECTRIC, S, 153, power=110, accuracy=70, effect_chance=30),
    _move(58, "ice-beam", T.ICE, S, 6, power=90, effect_chance=10),
    _move(94, "psychic", T.PSYCHIC, S, 73, power=90, effect_chance=10),
    _move(247, "shadow-ball", T.GHOST, S, 73, power=80, pp=15, effect_chance=20),
    _move(242, "crunch", T.DARK, P, 70, power=80, pp=15, effect_chance=20),
    _move(44, "bite", T.DARK, P, 32, power=60, pp=25, effect_chance=30),
    _move(442, "iron-head", T.STEEL, P, 32, power=80, pp=15, effect_chance=30),
    _move(252, "fake-out", T.NORMAL, P, 159, power=40, priority=3, effect_chance=100),
    _move(370, "close-combat", T.FIGHTING, P, 230, power=120, pp=5),
    # Recoil and drain
    _move(38, "double-edge", T.NORMAL, P, 199, power=120, pp=15),
    _move(394, "flare-blitz", T.FIRE, P, 254, power=120, pp=15, effect_chance=10),
    _move(71, "absorb", T.GRASS, S, 4, power=20, pp=25),
    _move(202, "giga-drain", T.GRASS, S, 4, power=75),
    _move(409, "drain-punch", T.FIGHTING, P, 4, power=75),
    _move(577, "draining-kiss", T.FAIRY, S, 349, power=50),
    _move(26, "jump-kick", T.FIGHTING, P, 46, power=100, accuracy=95),
    # Fixed and computed damage
    _move(69, "seismic-toss", T.FIGHTING, P, 88, pp=20),
    _move(82, "dragon-rage", T.DRAGON, S, 42),
    _move(162, "super-fang", T.NORMAL, P, 41, accuracy=90),
    _move(68, "counter", T.FIGHTING, P, 90, pp=20, priority=-5, target=MoveTarget.SPECIFIC_MOVE),
    _move(90, "fissure", T.GROUND, P, 39, pp=5, accuracy=30),
    _move(360, "gyro-ball", T.STEEL, P, 220, pp=5),
    _move(67, "low-kick", T.FIGHTING, P, 197, pp=20),
    _move(175, "flail", T.NORMAL, P, 100, pp=15),
    _move(216, "return", T.NORMAL, P, 122, pp=20),
    _move(284, "eruption", T.FIRE, S, 191, power=150, pp=5, target=MoveTarget.ALL_OPPONENTS),
    _move(237, "hidden-power", T.NORMAL, S, 136, power=60, pp=15),
    _move(311, "weather-ball", T.NORMAL, S, 204, power=50),
    _move(263, "facade", T.NORMAL, P, 170, power=70, pp=20),
    _move(210, "fury-cutter", T.BUG, P, 120, power=40, pp=20, accuracy=95),
    _move(473, "psyshock", T.PSYCHIC, S, 283, power=80),
    _move(776, "body-press", T.FIGHTING, P, 426, power=80),
    _move(492, "foul-play", T.DARK, P, 298, power=95, pp=15),
    _move(282, "knock-off", T.DARK, P, 189, power=65, pp=20),
    _move(280, "brick-break", T.FIGHTING, P, 187, power=75, pp=15),
    _move(389, "sucker-punch", T.DARK, P, 249, power=70, pp=5, priority=1),
    _move(217, "present", T.NORMAL, P, 123, pp=15, accuracy=90),
    _move(248, "future-sight", T.PSYCHIC, S, 149, power=120),
    _move(153, "explosion", T.NORMAL, P, 8, power=250, pp=5, target=MoveTarget.ALL_OTHER_POKEMON),
    # Multi-hit
    _move(3, "double-slap", T.NORMAL, P, 30, power=15, accuracy=85, hits=(2, 5)),
    _move(331, "bullet-seed", T.GRASS, P, 30, power=25, pp=30, hits=(2, 5)),
    _move(24, "double-kick", T.FIGHTING, P, 45, power=30, pp=30, hits=(2, 2)),
    _move(167, "triple-kick", T.FIGHTING, P, 105, power=10, accuracy=90, hits=(3, 3)),
    # Multi-turn
    _move(76, "solar-beam", T.GRASS, S, 152, power=120),
    _move(19, "fly", T.FLYING, P, 156, power=90, pp=15, accuracy=95),
    _move(91, "dig", T.GROUND, P, 257, power=80),
    _move(130, "skull-bash", T.NORMAL, P, 146, power=130),
    _move(63, "hyper-beam", T.NORMAL, S, 81, power=150, pp=5, accuracy=90),
    _move(200, "outrage", T.DRAGON, P, 28, power=120, target=MoveTarget.RANDOM_OPPONENT),
    _move(205, "rollout", T.ROCK, P, 118, power=30, pp=20, accuracy=90),
    _move(117, "bide", T.NORMAL, P, 27, accuracy=None, priority=1, target=MoveTarget.USER),
    # Status conditions
    _move(86, "thunder-wave", T.ELECTRIC, ST, 68, pp=20, accuracy=90),
    _move(92, "toxic", T.POISON, ST, 34, accuracy=90),
    _move(261, "will-o-wisp", T.FIRE, ST, 168, pp=15, accuracy=85),
    _move(109, "confuse-ray", T.GHOST, ST, 50),
    _move(95, "hypnosis", T.PSYCHIC, ST, 2, pp=20, accuracy=60),
    _move(147, "spore", T.GRASS, ST, 2, pp=15),
    _move(73, "leech-seed", T.GRASS, ST, 85, accuracy=90),
    _move(156, "rest", T.PSYCHIC, ST, 38, pp=5, accuracy=None, target=MoveTarget.USER),
    # Stat stages
    _move(45, "growl", T.NORMAL, ST, 19, pp=40, target=MoveTarget.ALL_OPPONENTS),
    _move(14, "swords-dance", T.NORMAL, ST, 51, pp=20, accuracy=None, target=MoveTarget.USER),
    _move(349, "dragon-dance", T.DRAGON, ST, 213, pp=20, accuracy=None, target=MoveTarget.USER),
    _move(347, "calm-mind", T.PSYCHIC, ST, 212, pp=20, accuracy=None, target=MoveTarget.USER),
    _move(114, "haze", T.ICE, ST, 26, pp=30, accuracy=None, target=MoveTarget.ENTIRE_FIELD),
    # Field, protection and volatile conditions
    _move(182, "protect", T.NORMAL, ST, 112, accuracy=None, priority=4, target=MoveTarget.USER),
    _move(164, "substitute", T.NORMAL, ST, 80, accuracy=None, target=MoveTarget.USER),
    _move(115, "reflect", T.PSYCHIC, ST, 66, pp=20, accuracy=None, target=MoveTarget.USERS_FIELD),
    _move(113, "light-screen", T.PSYCHIC, ST, 36, pp=30, accuracy=None, target=MoveTarget.USERS_FIELD),
    _move(240, "rain-dance", T.WATER, ST, 137, pp=5, accuracy=None, target=MoveTarget.ENTIRE_FIELD),
    _move(241, "sunny-day", T.FIRE, ST, 138, pp=5, accuracy=None, target=MoveTarget.ENTIRE_FIELD),
    _move(433, "trick-room", T.PSYCHIC, ST, 260, pp=5, accuracy=None, priority=-7, target=MoveTarget.ENTIRE_FIELD),
    _move(446, "stealth-rock", T.ROCK, ST, 267, pp=20, accuracy=None, target=MoveTarget.OPPONENTS_FIELD),
    _move(191, "spikes", T.GROUND, ST, 113, pp=20, accuracy=None, target=MoveTarget.OPPONENTS_FIELD),
    _move(390, "toxic-spikes", T.POISON, ST, 250, pp=20, accuracy=None, target=MoveTarget.OPPONENTS_FIELD),
    _move(269, "taunt", T.DARK, ST, 176, pp=20),
    _move(227, "encore", T.NORMAL, ST, 91, pp=5),
    _move(50, "disable", T.NORMAL, ST, 87, pp=20),
    _move(195, "perish-song", T.NORMAL, ST, 115, pp=5, accuracy=None, target=MoveTarget.ALL_POKEMON),
    _move(150, "splash", T.NORMAL, ST, 86, pp=40, accuracy=None, target=MoveTarget.USER),
    # Switching
    _move(369, "u-turn", T.BUG, P, 229, power=70, pp=20),
    _move(226, "baton-pass", T.NORMAL, ST, 128, pp=40, accuracy=None, target=MoveTarget.USER),
    _move(46, "roar", T.NORMAL, ST, 29, pp=20, accuracy=None, priority=-6),
    # Move-calling
    _move(118, "metronome", T.NORMAL, ST, 84, accuracy=None, target=MoveTarget.USER),
    _move(214, "sleep-talk", T.NORMAL, ST, 98, accuracy=None, target=MoveTarget.USER),
    _move(383, "copycat", T.NORMAL, ST, 243, pp=20, accuracy=None, target=MoveTarget.USER),
    _move(289, "snatch", T.DARK, ST, 196, accuracy=None, priority=4, target=MoveTarget.USER),
]
# fmt: on

MOVES: dict[str, MoveData] = {move.name: move for move in _CATALOGUE}
MOVES_BY_ID: dict[int, MoveData] = {move.id: move for move in _CATALOGUE}


def get_move_data(name: str) -> MoveData:
    try:
        return MOVES[name]
    except KeyError:
        raise KeyError(f"unknown move {name!r}") from None


def get_move(name: str, pp: Optional[int] = None) -> BattleMove:
    """A fresh combatant copy of a catalogue move."""
    return BattleMove.from_data(get_move_data(name), pp=pp)


def metronome_pool() -> list[MoveData]:
    """Catalogue moves Metronome may draw. Metronome and the moves it can never call are left out."""
    from duel_engine.move_classifiers import selectable_by_metronome

    return [move for move in _CATALOGUE if selectable_by_metronome(move)]
