"""
Command-line entry points.

  mlb-oracle [YYYY-MM-DD] [-v]        predictions for every game on a date
  mlb-oracle-schedule [YYYY-MM-DD]    dump the schedule for a date
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, datetime
from typing import List, Optional, TextIO

from pydantic import ValidationError

from .config import DEFAULT_SETTINGS_PATH, Settings, load_settings
from .display import GameLine
from .schemas import Game
from .sim.monte_carlo import Simulator
from .statsapi import StatsApi, StatsApiError
from .utils.logs import init_log

logger = logging.getLogger(__name__)


def parse_date(datestr: str) -> str:
    """Normalize a YYYY-MM-DD string; anything else is rejected."""
    try:
        return datetime.strptime(datestr, "%Y-%m-%d").date().isoformat()
    except ValueError:
        raise ValueError(f"Invalid date: {datestr}") from None


def _resolve_date(datestr: Optional[str]) -> str:
    return parse_date(datestr) if datestr else date.today().isoformat()


def oracle(api: StatsApi, sim: Simulator, game: Game, stream: Optional[TextIO] = None) -> None:
    """Predict one game and keep its status line current.

    Missing lineups and postponements are reported on the line; fetch and
    simulation failures are reported and then re-raised.
    """
    line = GameLine(game, stream=stream)

    if game.is_postponed:
        line.postponed()
        line.finalize()
        return

    line.fetching()
    line.update()
    try:
        away, home = api.teams(game.game_id)
    except (StatsApiError, ValidationError):
        line.frontend_error()
        line.finalize()
        raise

    if away is None and home is None:
        line.missing_lineups()
        line.finalize()
        return
    if away is None:
        line.missing_lineup_away()
        line.finalize()
        return
    if home is None:
        line.missing_lineup_home()
        line.finalize()
        return

    line.predicting()
    line.update()
    try:
        result = sim.run(away, home)
    except ValueError:
        # InvalidProbabilityError and bad settings both land here
        line.backend_error()
        line.finalize()
        raise

    line.prediction(result.home_win_probability)
    line.finalize()


def run(datestr: str, settings: Settings, api: Optional[StatsApi] = None, stream: Optional[TextIO] = None) -> None:
    owned = api is None
    api = api or StatsApi(base_url=settings.statsapi_base_url, timeout=settings.statsapi_timeout)
    sim = Simulator(settings)
    logger.debug("date=%s n_iter=%d workers=%d", datestr, settings.n_iter, settings.workers)
    try:
        for game in api.schedule(datestr):
            oracle(api, sim, game, stream=stream)
    finally:
        if owned:
            api.close()


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config)
    updates = {}
    if getattr(args, "n_iter", None) is not None:
        updates["n_iter"] = args.n_iter
    if getattr(args, "seed", None) is not None:
        updates["seed"] = args.seed
    if getattr(args, "workers", None) is not None:
        updates["workers"] = args.workers
    return settings.model_copy(update=updates)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="mlb-oracle", description="MLB daily predictions!")
    ap.add_argument("date", nargs="?", metavar="YYYY-MM-DD", help="Make predictions for this date (default: today)")
    ap.add_argument("-v", "--verbose", action="store_true")
    ap.add_argument("--config", default=DEFAULT_SETTINGS_PATH, help="Settings YAML")
    ap.add_argument("--n-iter", type=int, default=None, help="Games simulated per prediction")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--workers", type=int, default=None)
    args = ap.parse_args(argv)

    try:
        settings = _settings_from_args(args)
        init_log(args.verbose, settings.log_level)
        run(_resolve_date(args.date), settings)
    except (ValueError, StatsApiError) as e:
        print(f"[FATAL] {e}", file=sys.stderr)
        return 1
    return 0


def schedule_main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="mlb-oracle-schedule", description="Dump the MLB schedule for a date")
    ap.add_argument("date", nargs="?", metavar="YYYY-MM-DD")
    ap.add_argument("--config", default=DEFAULT_SETTINGS_PATH)
    args = ap.parse_args(argv)

    try:
        settings = load_settings(args.config)
        init_log(verbose=True)
        with StatsApi(base_url=settings.statsapi_base_url, timeout=settings.statsapi_timeout) as api:
            games = api.schedule(_resolve_date(args.date))
    except (ValueError, StatsApiError) as e:
        print(f"[FATAL] {e}", file=sys.stderr)
        return 1
    print(json.dumps([g.model_dump() for g in games], indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
