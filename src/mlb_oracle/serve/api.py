from fastapi import FastAPI, HTTPException
import logging

from ..schemas import (
    MatchupRequest,
    MatchupResponse,
    PredictRequest,
    PredictResponse,
)
from ..config import Settings, load_settings
from ..models.outcome_model import compute_outcome_probs
from ..sampler.rng import make_rng, sample_outcome
from ..sim.monte_carlo import InvalidProbabilityError, Simulator

logger = logging.getLogger(__name__)

app = FastAPI()

# Settings from config/settings.example.yaml when present; defaults otherwise
try:
    _settings = load_settings()
except Exception:
    logger.exception("could not read settings; using defaults")
    _settings = Settings()
_simulator = Simulator(_settings)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/v1/predict", response_model=PredictResponse)
def predict(req: PredictRequest):
    try:
        result = _simulator.run(req.away, req.home, n_iter=req.n_iter, seed=req.seed)
    except InvalidProbabilityError as e:
        raise HTTPException(status_code=500, detail=str(e))
    hwp = float(result.home_win_probability)
    return PredictResponse(
        home_win_probability=hwp,
        away_win_probability=1.0 - hwp,
        n_iter=result.n_iter,
        most_probable_score=result.most_probable_score,
    )


@app.post("/v1/sim/matchup", response_model=MatchupResponse)
def matchup(req: MatchupRequest):
    probs = compute_outcome_probs(req.pitcher, req.batter)
    try:
        event = sample_outcome(probs, make_rng(req.seed))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return MatchupResponse(probs=probs.as_dict(), sampled_event=event.value)
