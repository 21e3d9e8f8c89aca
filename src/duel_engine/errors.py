"""
Error types raised by the engine.

Gameplay outcomes (misses, immunities, failed moves) are narrated, never raised. Everything
here signals bad catalogue data or caller misuse and is meant to fail fast.
"""


class DuelEngineError(Exception):
    """Base class for engine errors."""


class EngineConfigError(DuelEngineError, ValueError):
    """Catalogue data the engine cannot execute."""


class UnregisteredEffectError(EngineConfigError):
    def __init__(self, effect_code: int, move_id: int):
        self.effect_code = effect_code
        self.move_id = move_id
        super().__init__(f"move {move_id} has effect code {effect_code}, which has no registered handler")


class MissingPowerError(EngineConfigError):
    def __init__(self, effect_code: int, move_id: int):
        self.effect_code = effect_code
        self.move_id = move_id
        super().__init__(f"move {move_id} (effect {effect_code}) deals damage but has no power and no power formula")


class RecursionLimitError(DuelEngineError):
    """Nested move uses (snatch, bounce, dancer, metronome family) went deeper than allowed."""


class InvalidActionError(DuelEngineError, ValueError):
    """A turn action the battle state cannot honour (e.g. switching to a fainted slot)."""
