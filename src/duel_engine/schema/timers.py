"""
Turn-counted state shared by combatants, sides and the field.

Every timer is a plain pydantic model so the whole battle dumps and restores losslessly.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field

from duel_engine.schema.move import BattleMove


class ExpiringEffect(BaseModel):
    """An effect that lasts a number of turns.

    remaining=None means the effect lasts until something removes it; 0 means inactive.
    """

    remaining: Optional[int] = 0

    def active(self) -> bool:
        if self.remaining is None:
            return True
        return self.remaining > 0

    def next_turn(self) -> bool:
        """Count one turn down. Returns True only on the turn the effect runs out."""
        if self.remaining is None:
            return False
        if not self.active():
            return False
        self.remaining -= 1
        return not self.active()

    def set_turns(self, turns: Optional[int]) -> None:
        self.remaining = turns


class ExpiringItem(ExpiringEffect):
    """Timer that also remembers what it applies to: a move id, a combatant uid or a name."""

    item: Optional[Union[int, str]] = None

    def next_turn(self) -> bool:
        expired = super().next_turn()
        if expired:
            self.item = None
        return expired

    def set(self, item: Union[int, str], turns: Optional[int]) -> None:
        self.item = item
        self.set_turns(turns)

    def end(self) -> None:
        self.item = None
        self.set_turns(0)


class LockedMove(ExpiringEffect):
    """A multi-turn move the combatant is committed to (charge moves, rollout, thrash, bide)."""

    move: BattleMove
    turn: int = Field(default=0, ge=0)

    def next_turn(self) -> bool:
        expired = super().next_turn()
        self.turn += 1
        return expired

    def is_last_turn(self) -> bool:
        return self.remaining == 1


class ExpiringWish(ExpiringEffect):
    hp: Optional[int] = None

    def next_turn(self) -> int:  # type: ignore[override]
        """Returns the HP to restore on the turn the wish comes true, otherwise 0."""
        expired = super().next_turn()
        hp = 0
        if expired:
            hp = self.hp or 0
            self.hp = None
        return hp

    def set(self, hp: int) -> None:
        self.hp = hp
        self.set_turns(2)


class MetronomeCounter(BaseModel):
    """Consecutive-use counter behind the Metronome held item."""

    move: str = ""
    count: int = 0

    def reset(self) -> None:
        self.move = ""
        self.count = 0

    def use(self, move_name: str) -> None:
        if self.move == move_name:
            self.count += 1
        else:
            self.move = move_name
            self.count = 1

    def buff(self, move_name: str) -> float:
        if self.move != move_name:
            return 1
        return min(2, 1 + 0.2 * self.count)
