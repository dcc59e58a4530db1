from pathlib import Path
from typing import Optional

from pydantic import BaseModel
import yaml

from .schemas import Rules

DEFAULT_SETTINGS_PATH = "config/settings.example.yaml"


class Settings(BaseModel):
    n_iter: int = 1000
    workers: int = 1
    seed: Optional[int] = None
    rules: Rules = Rules()
    statsapi_base_url: str = "https://statsapi.mlb.com/api"
    statsapi_timeout: float = 10.0
    log_level: str = "ERROR"


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Read settings from YAML; a missing file yields the defaults."""
    p = Path(path)
    if not p.exists():
        return Settings()
    with p.open("r", encoding="utf-8") as f:
        y = yaml.safe_load(f) or {}
    sim = y.get("simulation", {}) or {}
    rules = sim.get("rules", {}) or {}
    api = y.get("statsapi", {}) or {}
    log = y.get("logging", {}) or {}
    defaults = Settings()
    return Settings(
        n_iter=sim.get("n_iter", defaults.n_iter),
        workers=sim.get("workers", defaults.workers),
        seed=sim.get("seed", defaults.seed),
        rules=Rules(
            regulation_innings=rules.get("regulation_innings", defaults.rules.regulation_innings),
            extras_runner_on_2nd=rules.get("extras_runner_on_2nd", defaults.rules.extras_runner_on_2nd),
        ),
        statsapi_base_url=api.get("base_url", defaults.statsapi_base_url),
        statsapi_timeout=api.get("timeout", defaults.statsapi_timeout),
        log_level=log.get("level", defaults.log_level),
    )
