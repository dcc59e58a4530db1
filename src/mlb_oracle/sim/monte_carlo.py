"""
Monte Carlo driver: play many independent games and reduce the final scores
to a home-win probability.

Every game gets its own generator spawned from a single SeedSequence, so a
seeded run gives the same tally no matter how the games are split across
worker threads. Per-worker tallies are merged once all workers finish.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..config import Settings
from ..schemas import Rules, Score, SimResult, Team
from .game import GameScore, simulate_game

logger = logging.getLogger(__name__)

N_ITER = 1000


class InvalidProbabilityError(ValueError):
    """Raised when a computed win probability falls outside [0, 1]."""


class ScoreTally(Counter):
    """Occurrence count per final (away, home) score."""

    def record(self, score: GameScore) -> None:
        self[score.as_tuple()] += 1

    def merge(self, other: "ScoreTally") -> "ScoreTally":
        self.update(other)
        return self

    def home_win_probability(self) -> float:
        return home_win_probability(self)

    def most_probable_score(self) -> Optional[Tuple[int, int]]:
        """Modal run total of each team, taken separately."""
        if not self:
            return None
        away_runs: Counter = Counter()
        home_runs: Counter = Counter()
        for (away, home), n in self.items():
            away_runs[away] += n
            home_runs[home] += n
        return (_mode(away_runs), _mode(home_runs))


def _mode(hist: Counter) -> int:
    # Ties go to the lower run total
    return min(hist, key=lambda runs: (-hist[runs], runs))


def merge_tallies(tallies: Iterable[ScoreTally]) -> ScoreTally:
    merged = ScoreTally()
    for t in tallies:
        merged.merge(t)
    return merged


def home_win_probability(tally: ScoreTally) -> float:
    total = tally.total()
    if total == 0:
        raise InvalidProbabilityError("cannot compute a probability from an empty tally")
    return sum(n / total for (away, home), n in tally.items() if home > away)


def check_probability(p: float) -> float:
    if not (math.isfinite(p) and 0.0 <= p <= 1.0):
        raise InvalidProbabilityError(f"invalid probability: {p!r}")
    return p


def _run_chunk(
    away: Team, home: Team, seeds: Sequence[np.random.SeedSequence], rules: Optional[Rules]
) -> ScoreTally:
    tally = ScoreTally()
    for ss in seeds:
        tally.record(simulate_game(away, home, np.random.default_rng(ss), rules=rules))
    return tally


def run_simulations(
    away: Team,
    home: Team,
    n_iter: int = N_ITER,
    seed: Optional[int] = None,
    workers: int = 1,
    rules: Optional[Rules] = None,
) -> ScoreTally:
    if n_iter < 1:
        raise ValueError("n_iter must be at least 1")
    seeds = np.random.SeedSequence(seed).spawn(n_iter)
    if workers <= 1:
        return _run_chunk(away, home, seeds, rules)

    chunks: List[List[np.random.SeedSequence]] = [seeds[i::workers] for i in range(workers)]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        tallies = list(pool.map(lambda chunk: _run_chunk(away, home, chunk, rules), chunks))
    return merge_tallies(tallies)


def predict(
    away: Team,
    home: Team,
    n_iter: int = N_ITER,
    seed: Optional[int] = None,
    workers: int = 1,
    rules: Optional[Rules] = None,
) -> float:
    """Estimated probability that ``home`` beats ``away``."""
    tally = run_simulations(away, home, n_iter=n_iter, seed=seed, workers=workers, rules=rules)
    hwp = check_probability(tally.home_win_probability())
    logger.debug("predict away=%s home=%s n_iter=%d hwp=%.3f", away.name, home.name, n_iter, hwp)
    return hwp


class Simulator:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    def run(self, away: Team, home: Team, n_iter: Optional[int] = None, seed: Optional[int] = None) -> SimResult:
        s = self.settings
        n = n_iter or s.n_iter
        tally = run_simulations(
            away,
            home,
            n_iter=n,
            seed=seed if seed is not None else s.seed,
            workers=s.workers,
            rules=s.rules,
        )
        hwp = check_probability(tally.home_win_probability())
        mp = tally.most_probable_score()
        logger.debug("simulated %s @ %s: %d distinct scores, hwp=%.3f", away.name, home.name, len(tally), hwp)
        return SimResult(
            home_win_probability=hwp,
            n_iter=n,
            most_probable_score=Score(away=mp[0], home=mp[1]) if mp else None,
        )
