from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .outcome_model import Outcome


@dataclass
class Field:
    """Baserunners and runs for a single half-inning."""

    first: bool = False
    second: bool = False
    third: bool = False
    runs: int = 0

    @classmethod
    def fresh(cls, extra_inning: bool = False) -> "Field":
        # Extra innings start with a runner on second
        return cls(second=extra_inning)

    @property
    def bases(self) -> tuple[bool, bool, bool]:
        return (self.first, self.second, self.third)

    @property
    def empty(self) -> bool:
        return not (self.first or self.second or self.third)

    def advance(self, n: int) -> int:
        """Push runners forward ``n`` bases; the batter reaches first on step one."""
        scored = 0
        for i in range(n):
            if self.third:
                scored += 1
            self.third = self.second
            self.second = self.first
            self.first = i == 0
        self.runs += scored
        return scored

    def random_out(self, rng: np.random.Generator) -> None:
        """Remove one baserunner, chosen uniformly among occupied bases."""
        if self.empty:
            return
        while True:
            base = int(rng.integers(3))
            if self.bases[base]:
                break
        if base == 0:
            self.first = False
        elif base == 1:
            self.second = False
        else:
            self.third = False

    def apply(self, outcome: Outcome, rng: np.random.Generator) -> int:
        scored = self.advance(outcome.advance)
        if outcome is Outcome.TAG_OUT:
            self.random_out(rng)
        return scored
