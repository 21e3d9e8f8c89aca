import time

from pydantic import BaseModel, Field


class BattleRng(BaseModel):
    """Seeded LCG shared by every random decision in a battle.

    Same generator as the handheld games: seed = (seed * 1664525 + 1013904223) mod 2^32,
    with draws taken from the upper 16 bits. The seed is plain model state, so a dumped
    battle resumes with the identical random stream.
    """

    seed: int = Field(ge=0, le=0xFFFFFFFF, default=0)

    @classmethod
    def from_seed(cls, seed: int | None = None) -> "BattleRng":
        if seed is None:
            seed = int(time.time() * 1000)
        return cls(seed=seed & 0xFFFFFFFF)

    def advance(self) -> int:
        """Advance the LCG and return the new 32-bit seed."""
        self.seed = (self.seed * 1664525 + 1013904223) & 0xFFFFFFFF
        return self.seed

    def rand16(self) -> int:
        """Advance and return the upper 16 bits (0..65535)."""
        self.advance()
        return (self.seed >> 16) & 0xFFFF

    def rand32(self) -> int:
        """Two draws glued together, for ranges wider than 16 bits."""
        return (self.rand16() << 16) | self.rand16()

    def choice_index(self, count: int) -> int:
        """Random index in [0, count), or -1 when there is nothing to choose from."""
        if count <= 0:
            return -1
        return self.rand32() % count

    def randint(self, lo: int, hi: int) -> int:
        """Inclusive integer in [lo, hi]."""
        if hi < lo:
            raise ValueError(f"empty range [{lo}, {hi}]")
        return lo + self.rand32() % (hi - lo + 1)

    def chance(self, numerator: int, denominator: int) -> bool:
        """True with probability numerator/denominator."""
        return self.randint(1, denominator) <= numerator

    def percent(self, pct: int | float) -> bool:
        return self.randint(1, 100) <= pct

    def uniform(self) -> float:
        """Float in [0, 1)."""
        return self.rand32() / 4294967296.0

    def damage_roll(self) -> float:
        """Random damage factor in [0.85, 1.0]."""
        return 0.85 + self.uniform() * 0.15
