from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Literal, Optional, Tuple

import numpy as np

from ..models.field import Field
from ..models.outcome_model import Outcome, compute_outcome_probs
from ..sampler.rng import sample_outcome
from ..schemas import LINEUP_SIZE, BatterStats, PitcherStats, Rules, Team

Half = Literal["T", "B"]
Resolver = Callable[[PitcherStats, BatterStats, np.random.Generator], Outcome]

OUTS_PER_HALF = 3


def resolve_plate_appearance(
    pitcher: PitcherStats, batter: BatterStats, rng: np.random.Generator
) -> Outcome:
    # Probabilities are recomputed for every plate appearance
    return sample_outcome(compute_outcome_probs(pitcher, batter), rng)


@dataclass
class LiveTeam:
    team: Team
    current_batter: int = 0

    @classmethod
    def from_team(cls, team: Team) -> "LiveTeam":
        return cls(team=team)

    @property
    def pitcher(self) -> PitcherStats:
        return self.team.starting_pitcher

    @property
    def batter(self) -> BatterStats:
        return self.team.batters[self.current_batter]

    def advance(self) -> None:
        self.current_batter = (self.current_batter + 1) % LINEUP_SIZE


@dataclass
class GameScore:
    away: int = 0
    home: int = 0

    @property
    def tied(self) -> bool:
        return self.away == self.home

    def add(self, half: Half, runs: int) -> None:
        if half == "T":
            self.away += runs
        else:
            self.home += runs

    def as_tuple(self) -> Tuple[int, int]:
        return (self.away, self.home)


class GameState:
    """Single-game state machine: away bats in the top, home in the bottom.

    The game is over when, from the last regulation inning on:
    - home leads after the top half (bottom half not played),
    - home takes the lead during the bottom half (walk-off), or
    - the inning finishes with the score not tied.
    """

    def __init__(self, away: Team, home: Team, rules: Optional[Rules] = None):
        self.rules = rules or Rules()
        self.teams = (LiveTeam.from_team(away), LiveTeam.from_team(home))
        self.score = GameScore()
        self.inning = 1
        self.half: Half = "T"
        self.outs = 0
        self.field = Field.fresh()
        self.live = True
        # (inning, half, runs) for each half-inning played
        self.linescore: List[Tuple[int, Half, int]] = []

    @property
    def late(self) -> bool:
        return self.inning >= self.rules.regulation_innings

    @property
    def extra_inning(self) -> bool:
        return self.inning > self.rules.regulation_innings

    @property
    def offense(self) -> LiveTeam:
        return self.teams[0] if self.half == "T" else self.teams[1]

    @property
    def defense(self) -> LiveTeam:
        return self.teams[1] if self.half == "T" else self.teams[0]

    def walk_off(self) -> bool:
        return self.half == "B" and self.late and self.score.home + self.field.runs > self.score.away

    def play(self, rng: np.random.Generator, resolver: Resolver = resolve_plate_appearance) -> GameScore:
        while self.live:
            self.play_half_inning(rng, resolver)
        return self.score

    def play_half_inning(self, rng: np.random.Generator, resolver: Resolver = resolve_plate_appearance) -> int:
        if not self.live:
            raise RuntimeError("game is already over")
        self.field = Field.fresh(extra_inning=self.extra_inning and self.rules.extras_runner_on_2nd)
        self.outs = 0
        offense, defense = self.offense, self.defense
        while self.outs < OUTS_PER_HALF:
            outcome = resolver(defense.pitcher, offense.batter, rng)
            offense.advance()
            self.field.apply(outcome, rng)
            if outcome.is_out:
                self.outs += 1
            if self.walk_off():
                break

        runs = self.field.runs
        self.score.add(self.half, runs)
        self.linescore.append((self.inning, self.half, runs))
        self._end_half()
        return runs

    def _end_half(self) -> None:
        if self.half == "T":
            if self.late and self.score.home > self.score.away:
                self.live = False
            else:
                self.half = "B"
        else:
            if self.late and not self.score.tied:
                self.live = False
            else:
                self.inning += 1
                self.half = "T"


def simulate_game(
    away: Team,
    home: Team,
    rng: np.random.Generator,
    resolver: Optional[Resolver] = None,
    rules: Optional[Rules] = None,
) -> GameScore:
    """Play one full game from fresh state and return the final score."""
    return GameState(away, home, rules=rules).play(rng, resolver or resolve_plate_appearance)
