from __future__ import annotations

import math
from dataclasses import astuple, dataclass
from enum import Enum
from typing import Dict, Iterator, Tuple

from ..schemas import BatterStats, PitcherStats


class Outcome(Enum):
    WALK = "BB"
    SINGLE = "1B"
    DOUBLE = "2B"
    TRIPLE = "3B"
    HOME_RUN = "HR"
    STRIKE_OUT = "K"
    TAG_OUT = "TAG_OUT"
    FLY_OUT = "FLY_OUT"

    @property
    def advance(self) -> int:
        """Forced-advance steps applied to the field for this outcome."""
        return _ADVANCE[self]

    @property
    def is_out(self) -> bool:
        return self in (Outcome.STRIKE_OUT, Outcome.TAG_OUT, Outcome.FLY_OUT)


_ADVANCE = {
    Outcome.WALK: 1,
    Outcome.SINGLE: 1,
    Outcome.DOUBLE: 2,
    Outcome.TRIPLE: 3,
    Outcome.HOME_RUN: 4,
    Outcome.STRIKE_OUT: 0,
    Outcome.TAG_OUT: 1,
    Outcome.FLY_OUT: 0,
}


@dataclass(frozen=True)
class OutcomeProbs:
    # Field order is the sampling order; see sampler.rng.sample_outcome
    walk: float
    single: float
    double: float
    triple: float
    home_run: float
    strikeout: float
    tag_out: float
    fly_out: float

    def items(self) -> Iterator[Tuple[Outcome, float]]:
        return zip(Outcome, astuple(self))

    def as_dict(self) -> Dict[str, float]:
        return {o.value: p for o, p in self.items()}

    @property
    def hit(self) -> float:
        return self.single + self.double + self.triple + self.home_run

    @property
    def total(self) -> float:
        return sum(astuple(self))


def rate(count: int, denom: int) -> float:
    """count / denom, with an empty denominator read as a zero rate."""
    if denom == 0:
        return 0.0
    return count / denom


def blend(x: float, y: float) -> float:
    """Combine a pitcher-side and batter-side rate.

    Geometric mean when both rates are non-zero; arithmetic mean otherwise, so
    one side with no occurrences does not zero out the combined rate.
    """
    if x == 0.0 or y == 0.0:
        return (x + y) / 2.0
    return math.sqrt(x * y)


def hit_type_shares(pitcher: PitcherStats, batter: BatterStats) -> Dict[str, float]:
    """Share of hits going for 1B/2B/3B/HR; the four shares sum to one."""
    double = blend(rate(pitcher.doubles, pitcher.hits), rate(batter.doubles, batter.hits))
    triple = blend(rate(pitcher.triples, pitcher.hits), rate(batter.triples, batter.hits))
    home_run = blend(rate(pitcher.home_runs, pitcher.hits), rate(batter.home_runs, batter.hits))
    return {
        "1B": 1.0 - double - triple - home_run,
        "2B": double,
        "3B": triple,
        "HR": home_run,
    }


def compute_outcome_probs(pitcher: PitcherStats, batter: BatterStats) -> OutcomeProbs:
    walk = blend(
        rate(pitcher.walks, pitcher.batters_faced),
        rate(batter.walks, batter.plate_appearances),
    )
    strikeout = blend(
        rate(pitcher.strikeouts, pitcher.batters_faced),
        rate(batter.strikeouts, batter.plate_appearances),
    )
    hit = blend(
        rate(pitcher.hits, pitcher.batters_faced),
        rate(batter.hits, batter.plate_appearances),
    )
    # Not clamped: can go negative when the blended rates sum above one
    bip_out = 1.0 - hit - walk - strikeout

    shares = hit_type_shares(pitcher, batter)
    return OutcomeProbs(
        walk=walk,
        single=hit * shares["1B"],
        double=hit * shares["2B"],
        triple=hit * shares["3B"],
        home_run=hit * shares["HR"],
        strikeout=strikeout,
        tag_out=0.5 * bip_out,
        fly_out=0.5 * bip_out,
    )
