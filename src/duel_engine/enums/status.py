from enum import Enum


class NonVolatileStatus(str, Enum):
    """Mutually exclusive persistent conditions.

    Values are the narration spellings used in battle text ("was cured of its burn").
    """

    NONE = ""
    BURN = "burn"
    SLEEP = "sleep"
    POISON = "poison"
    BADLY_POISONED = "b-poison"
    PARALYSIS = "paralysis"
    FREEZE = "freeze"


class StatKind(str, Enum):
    """Stage-bearing battle stats. Values double as narration names."""

    ATTACK = "attack"
    DEFENSE = "defense"
    SP_ATK = "special attack"
    SP_DEF = "special defense"
    SPEED = "speed"
    ACCURACY = "accuracy"
    EVASION = "evasion"

    @property
    def field(self) -> str:
        """Name of the stage field on Combatant."""
        return _STAGE_FIELDS[self]


_STAGE_FIELDS = {
    StatKind.ATTACK: "attack_stage",
    StatKind.DEFENSE: "defense_stage",
    StatKind.SP_ATK: "sp_atk_stage",
    StatKind.SP_DEF: "sp_def_stage",
    StatKind.SPEED: "speed_stage",
    StatKind.ACCURACY: "accuracy_stage",
    StatKind.EVASION: "evasion_stage",
}

# The five stats that moves like Acupressure, Ancient Power or Spectral Thief iterate over
CORE_STATS = (StatKind.ATTACK, StatKind.DEFENSE, StatKind.SP_ATK, StatKind.SP_DEF, StatKind.SPEED)
ALL_STATS = CORE_STATS + (StatKind.ACCURACY, StatKind.EVASION)
