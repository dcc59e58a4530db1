"""Client for the MLB Stats API (statsapi.mlb.com).

Fetches the day's schedule and, per game, the starting pitcher and batting
order of each side together with their career stat lines.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .schemas import LINEUP_SIZE, BatterStats, Game, PitcherStats, Team

logger = logging.getLogger(__name__)

BASE_URL = "https://statsapi.mlb.com/api"
LIVE_FEED_FIELDS = "gameData,liveData,boxscore,teams,players,id,abbreviation"
STAT_KEYS = ("baseOnBalls", "hits", "doubles", "triples", "homeRuns", "strikeOuts")


class StatsApiError(RuntimeError):
    pass


def value_to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise StatsApiError(f"Error while parsing {value!r} to int")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as e:
        raise StatsApiError(f"Error while parsing {value!r} to int") from e


def _dig(obj: Any, *path: Any) -> Any:
    for key in path:
        if isinstance(obj, dict):
            obj = obj.get(key)
        elif isinstance(obj, list) and isinstance(key, int):
            obj = obj[key] if -len(obj) <= key < len(obj) else None
        else:
            return None
    return obj


class StatsApi:
    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "StatsApi":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def json(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}/{path}"
        logger.debug("GET url=%s params=%s", url, params)
        try:
            r = self.client.get(url, params=params)
            r.raise_for_status()
            return r.json()
        except httpx.HTTPError as e:
            raise StatsApiError(f"request to {url} failed: {e}") from e
        except ValueError as e:
            raise StatsApiError(f"invalid JSON from {url}: {e}") from e

    def schedule(self, date: str) -> List[Game]:
        data = self.json("v1/schedule", {"sportId": "1", "date": date})
        dates = data.get("dates") or []
        if not dates:
            logger.warning("No games found on %s", date)
            return []
        if len(dates) > 1:
            raise StatsApiError("Ambiguous data for this date!")
        games: List[Game] = []
        for obj in dates[0].get("games") or []:
            games.append(
                Game(
                    game_id=str(obj.get("gamePk")),
                    away_name=str(_dig(obj, "teams", "away", "team", "name") or ""),
                    home_name=str(_dig(obj, "teams", "home", "team", "name") or ""),
                    status=str(_dig(obj, "status", "detailedState") or ""),
                )
            )
        return games

    def teams(self, game_id: str) -> Tuple[Optional[Team], Optional[Team]]:
        """Away and home lineups; a side without a posted starter is None."""
        data = self.json(f"v1.1/game/{game_id}/feed/live", {"fields": LIVE_FEED_FIELDS})
        return self._team(data, "away"), self._team(data, "home")

    def _team(self, data: Dict[str, Any], side: str) -> Optional[Team]:
        box = _dig(data, "liveData", "boxscore", "teams", side) or {}
        pitcher_id = _dig(box, "pitchers", 0)
        order = box.get("battingOrder") or []
        if pitcher_id is None or len(order) != LINEUP_SIZE:
            return None
        return Team(
            name=str(_dig(data, "gameData", "teams", side, "abbreviation") or ""),
            starting_pitcher=self.pitcher_stats(str(pitcher_id)),
            batters=[self.batter_stats(str(pid)) for pid in order],
        )

    def _career(self, player_id: str, group: str) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        raw = self.json(
            f"v1/people/{player_id}",
            {"hydrate": f"stats(group={group},type=career,sportId=1),currentTeam"},
        )
        person = _dig(raw, "people", 0)
        if not isinstance(person, dict):
            raise StatsApiError(f"no person record for player {player_id}")
        stat = _dig(person, "stats", 0, "splits", 0, "stat")
        if not isinstance(stat, dict):
            raise StatsApiError(f"no career {group} stats for player {player_id}")
        return person, stat

    def _stat_line(self, stat: Dict[str, Any], player_id: str) -> Dict[str, int]:
        try:
            return {k: value_to_int(stat[k]) for k in STAT_KEYS}
        except KeyError as e:
            raise StatsApiError(f"missing stat {e} for player {player_id}") from e

    def batter_stats(self, player_id: str) -> BatterStats:
        person, stat = self._career(player_id, "hitting")
        if "plateAppearances" not in stat:
            raise StatsApiError(f"missing stat 'plateAppearances' for player {player_id}")
        return BatterStats(
            name=str(person.get("initLastName") or ""),
            hand=f"{_dig(person, 'batSide', 'code') or ''}HB",
            plateAppearances=value_to_int(stat["plateAppearances"]),
            **self._stat_line(stat, player_id),
        )

    def pitcher_stats(self, player_id: str) -> PitcherStats:
        person, stat = self._career(player_id, "pitching")
        if "battersFaced" not in stat:
            raise StatsApiError(f"missing stat 'battersFaced' for player {player_id}")
        return PitcherStats(
            name=str(person.get("initLastName") or ""),
            hand=f"{_dig(person, 'pitchHand', 'code') or _dig(person, 'batSide', 'code') or ''}HP",
            battersFaced=value_to_int(stat["battersFaced"]),
            **self._stat_line(stat, player_id),
        )
