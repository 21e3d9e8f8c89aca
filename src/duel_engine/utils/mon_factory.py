from typing import Iterable, Optional, Union

from duel_engine.data.moves import get_move
from duel_engine.enums import Ability, ElementType
from duel_engine.schema.combatant import Combatant, HeldItem
from duel_engine.schema.move import BattleMove

# hp, attack, defense, special attack, special defense, speed
BaseStats = tuple[int, int, int, int, int, int]

DEFAULT_BASE_STATS: BaseStats = (80, 80, 80, 80, 80, 80)


def _compute_stat(base: int, iv: int, ev: int, level: int, is_hp: bool, nature_multiplier: float = 1.0) -> int:
    if is_hp:
        return ((2 * base + iv + ev // 4) * level) // 100 + level + 10
    raw = ((2 * base + iv + ev // 4) * level) // 100 + 5
    return int(raw * nature_multiplier)


def _battle_stats(base_stats: BaseStats, iv: int, level: int) -> list[int]:
    return [_compute_stat(base, iv, 0, level, is_hp=False) for base in base_stats[1:]]


def create_combatant(
    species: str,
    level: int = 50,
    base_stats: BaseStats = DEFAULT_BASE_STATS,
    types: Iterable[ElementType] = (ElementType.NORMAL,),
    moves: Iterable[Union[str, BattleMove]] = ("tackle",),
    ability: Ability = Ability.NONE,
    item: Optional[str] = None,
    iv: int = 31,
    nickname: Optional[str] = None,
    forms: Optional[dict[str, BaseStats]] = None,
    **overrides,
) -> Combatant:
    """
    Build a full-HP combatant from base stats

    Args:
        species: Form identifier, e.g. "Aegislash"
        level: 1-100
        base_stats: Species base stats (hp, atk, def, spa, spd, spe)
        types: One or two element types
        moves: Catalogue move names or ready-made BattleMove objects, at most four
        ability: Active ability
        item: Held item identifier, e.g. "leftovers"
        iv: Applied to every stat. EVs are 0 and the nature is neutral.
        nickname: Shown in narration as "nickname (species)"
        forms: Other forms the combatant can change into, by species identifier
        **overrides: Any further Combatant field (status, gender, happiness, ...)

    Returns:
        Combatant ready to be placed in a party
    """
    max_hp = _compute_stat(base_stats[0], iv, 0, level, is_hp=True)
    attack, defense, sp_atk, sp_def, speed = _battle_stats(base_stats, iv, level)
    battle_moves = [get_move(move) if isinstance(move, str) else move for move in moves][:4]
    form_stats = {name: _battle_stats(stats, iv, level) for name, stats in (forms or {}).items()}

    return Combatant(
        uid=0,
        side=0,
        species=species,
        nickname=nickname,
        level=level,
        hp=max_hp,
        starting_hp=max_hp,
        attack=attack,
        defense=defense,
        sp_atk=sp_atk,
        sp_def=sp_def,
        speed=speed,
        ivs=[iv] * 6,
        form_stats=form_stats,
        moves=battle_moves,
        ability_id=ability,
        types=list(types),
        held=HeldItem(item=item),
        **overrides,
    )
