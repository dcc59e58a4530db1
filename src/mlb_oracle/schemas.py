from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, List, Optional

LINEUP_SIZE = 9


class PitcherStats(BaseModel):
    # Field aliases match the MLB Stats API career stat block
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    hand: str = ""
    batters_faced: int = Field(0, ge=0, alias="battersFaced")
    walks: int = Field(0, ge=0, alias="baseOnBalls")
    hits: int = Field(0, ge=0)
    doubles: int = Field(0, ge=0)
    triples: int = Field(0, ge=0)
    home_runs: int = Field(0, ge=0, alias="homeRuns")
    strikeouts: int = Field(0, ge=0, alias="strikeOuts")


class BatterStats(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    hand: str = ""
    plate_appearances: int = Field(0, ge=0, alias="plateAppearances")
    walks: int = Field(0, ge=0, alias="baseOnBalls")
    hits: int = Field(0, ge=0)
    doubles: int = Field(0, ge=0)
    triples: int = Field(0, ge=0)
    home_runs: int = Field(0, ge=0, alias="homeRuns")
    strikeouts: int = Field(0, ge=0, alias="strikeOuts")


class Team(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    starting_pitcher: PitcherStats
    # Fixed batting order, cycled through for the whole game
    batters: List[BatterStats] = Field(min_length=LINEUP_SIZE, max_length=LINEUP_SIZE)


class Game(BaseModel):
    game_id: str
    away_name: str
    home_name: str
    status: str = ""

    @property
    def is_postponed(self) -> bool:
        return self.status == "Postponed"


class Score(BaseModel):
    away: int = 0
    home: int = 0


class Rules(BaseModel):
    regulation_innings: int = Field(9, ge=1)
    extras_runner_on_2nd: bool = True


class SimResult(BaseModel):
    home_win_probability: Optional[float] = None
    n_iter: int = 0
    most_probable_score: Optional[Score] = None


class PredictRequest(BaseModel):
    away: Team
    home: Team
    n_iter: Optional[int] = Field(None, ge=1)
    seed: Optional[int] = None


class PredictResponse(BaseModel):
    home_win_probability: float
    away_win_probability: float
    n_iter: int
    most_probable_score: Optional[Score] = None


class MatchupRequest(BaseModel):
    pitcher: PitcherStats
    batter: BatterStats
    seed: Optional[int] = None


class MatchupResponse(BaseModel):
    probs: Dict[str, float]
    sampled_event: str
