from enum import IntEnum


class ElementType(IntEnum):
    """Elemental types - ids match the type catalogue (TYPELESS is engine-only)."""

    NORMAL = 1
    FIGHTING = 2
    FLYING = 3
    POISON = 4
    GROUND = 5
    ROCK = 6
    BUG = 7
    GHOST = 8
    STEEL = 9
    FIRE = 10
    WATER = 11
    GRASS = 12
    ELECTRIC = 13
    PSYCHIC = 14
    ICE = 15
    DRAGON = 16
    DARK = 17
    FAIRY = 18
    TYPELESS = 19

    @property
    def pretty(self) -> str:
        return self.name.lower()


# Hidden Power type order, indexed by the IV parity formula
HIDDEN_POWER_TYPES = [
    ElementType.FIGHTING,
    ElementType.FLYING,
    ElementType.POISON,
    ElementType.GROUND,
    ElementType.ROCK,
    ElementType.BUG,
    ElementType.GHOST,
    ElementType.STEEL,
    ElementType.FIRE,
    ElementType.WATER,
    ElementType.GRASS,
    ElementType.ELECTRIC,
    ElementType.PSYCHIC,
    ElementType.ICE,
    ElementType.DRAGON,
    ElementType.DARK,
]
