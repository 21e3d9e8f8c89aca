from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from duel_engine.enums import DamageClass, ElementType, MoveTarget

# Sentinel PP for engine-generated moves that can never run out
INFINITE_PP = 999999999999

STRUGGLE_ID = 165
CONFUSION_ID = 0xCFCF
PRESENT_ID = 217
BEAT_UP_ID = 251


class MoveData(BaseModel):
    """Immutable move definition as supplied by the move catalogue."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str  # catalogue identifier, e.g. "fire-punch"
    power: Optional[int] = Field(default=None, ge=0)  # None - power is computed or the move deals no damage
    pp: int = Field(ge=0)
    accuracy: Optional[int] = Field(default=None, ge=0)  # None - never misses
    priority: int = Field(default=0, ge=-7, le=5)
    type: ElementType
    damage_class: DamageClass
    effect: int = Field(ge=0)  # dispatch key, see MoveEffect
    effect_chance: Optional[int] = Field(default=None, ge=0, le=100)
    target: MoveTarget = MoveTarget.SELECTED_POKEMON
    crit_rate: int = Field(default=0, ge=0, le=3)
    min_hits: Optional[int] = Field(default=None, ge=1)
    max_hits: Optional[int] = Field(default=None, ge=1)

    @property
    def pretty_name(self) -> str:
        return self.name[:1].upper() + self.name[1:].replace("-", " ")


class BattleMove(MoveData):
    """A combatant's copy of a move: tracks current PP and whether it has been used."""

    model_config = ConfigDict(frozen=False)

    starting_pp: int = Field(default=0, ge=0)
    used: bool = False

    @classmethod
    def from_data(cls, data: MoveData, pp: Optional[int] = None) -> "BattleMove":
        fields = data.model_dump()
        if pp is not None:
            fields["pp"] = pp
        fields["starting_pp"] = fields["pp"]
        return cls(**fields)

    def fresh_copy(self) -> "BattleMove":
        """New copy with starting PP and the used flag cleared (Transform, Mimic, Sketch)."""
        copy = self.model_copy(deep=True)
        copy.used = False
        return copy

    def __str__(self) -> str:
        return f"Move(name={self.name}, power={self.power}, effect_id={self.effect})"


# =============================================================================
# ENGINE-GENERATED MOVES
# =============================================================================
def struggle() -> BattleMove:
    return BattleMove(
        id=STRUGGLE_ID,
        name="struggle",
        power=50,
        pp=INFINITE_PP,
        starting_pp=INFINITE_PP,
        accuracy=None,
        type=ElementType.TYPELESS,
        damage_class=DamageClass.PHYSICAL,
        effect=255,
        target=MoveTarget.SELECTED_POKEMON,
    )


def confusion() -> BattleMove:
    """The self-inflicted hit of a confused combatant."""
    return BattleMove(
        id=CONFUSION_ID,
        name="confusion",
        power=40,
        pp=INFINITE_PP,
        starting_pp=INFINITE_PP,
        accuracy=None,
        type=ElementType.TYPELESS,
        damage_class=DamageClass.PHYSICAL,
        effect=1,
        target=MoveTarget.USER,
    )


def present(power: int) -> BattleMove:
    return BattleMove(
        id=PRESENT_ID,
        name="present",
        power=power,
        pp=INFINITE_PP,
        starting_pp=INFINITE_PP,
        accuracy=90,
        type=ElementType.NORMAL,
        damage_class=DamageClass.PHYSICAL,
        effect=123,
        target=MoveTarget.SELECTED_POKEMON,
    )


def beat_up_strike(raw_attack: int) -> BattleMove:
    """One party member's strike during Beat Up, powered by that member's base attack."""
    return BattleMove(
        id=BEAT_UP_ID,
        name="beat-up",
        power=raw_attack // 10 + 5,
        pp=100,
        starting_pp=100,
        accuracy=100,
        type=ElementType.DARK,
        damage_class=DamageClass.PHYSICAL,
        effect=1,
        target=MoveTarget.SELECTED_POKEMON,
    )
