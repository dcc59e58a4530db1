from __future__ import annotations

import math
import sys
from enum import IntEnum
from typing import Optional, TextIO

from .schemas import Game

BOXES_PER_TEAM = 10
FULL_BOX = "■"
EMPTY_BOX = "□"


class TTYColor(IntEnum):
    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    CYAN = 36
    WHITE = 37


def colormap(win_prob: float) -> TTYColor:
    if win_prob >= 0.75:
        return TTYColor.CYAN
    if win_prob >= 0.55:
        return TTYColor.GREEN
    if win_prob >= 0.45:
        return TTYColor.YELLOW
    if win_prob >= 0.25:
        return TTYColor.RED
    return TTYColor.WHITE


def bold(msg: str) -> str:
    return f"\x1b[1m{msg}\x1b[0m"


def colored(color: TTYColor, msg: str) -> str:
    return f"\x1b[{int(color)}m{msg}\x1b[0m"


def prediction_bar(home_win_prob: float, boxes: int = BOXES_PER_TEAM) -> str:
    """Two bars filling toward the middle: away on the left, home on the right."""
    away_win_prob = 1.0 - home_win_prob
    # halves round up
    n_home = math.floor(home_win_prob * boxes + 0.5)
    n_away = math.floor(away_win_prob * boxes + 0.5)
    away = EMPTY_BOX * (boxes - n_away) + colored(colormap(away_win_prob), FULL_BOX * n_away)
    home = colored(colormap(home_win_prob), FULL_BOX * n_home) + EMPTY_BOX * (boxes - n_home)
    return f"{away} {home}"


class GameLine:
    """One terminal line per game, rewritten in place as the game progresses."""

    def __init__(self, game: Game, stream: Optional[TextIO] = None):
        self.game = game
        self.stream = stream or sys.stdout
        self.status: Optional[str] = None
        self.color: Optional[TTYColor] = None

    def _set(self, status: str, color: Optional[TTYColor]) -> None:
        self.status = status
        self.color = color

    def fetching(self) -> None:
        self._set("FETCHING DATA...", TTYColor.BLACK)

    def postponed(self) -> None:
        self._set("POSTPONED", TTYColor.BLUE)

    def frontend_error(self) -> None:
        self._set("FRONTEND ERROR", TTYColor.RED)

    def missing_lineups(self) -> None:
        self._set("MISSING LINEUPS", TTYColor.YELLOW)

    def missing_lineup_away(self) -> None:
        self._set("MISSING LINEUP A", TTYColor.YELLOW)

    def missing_lineup_home(self) -> None:
        self._set("MISSING LINEUP H", TTYColor.YELLOW)

    def predicting(self) -> None:
        self._set("PREDICTING...", TTYColor.BLACK)

    def backend_error(self) -> None:
        self._set("BACKEND ERROR", TTYColor.RED)

    def prediction(self, home_win_prob: Optional[float]) -> None:
        if home_win_prob is None:
            self._set("NO PREDICTION", TTYColor.RED)
        else:
            self._set(prediction_bar(home_win_prob), None)

    def render(self) -> str:
        status = self.status or "UNKNOWN"
        if self.color is not None:
            status = colored(self.color, bold(f"{status:^21}"))
        return f"{self.game.away_name:>25} {status} {self.game.home_name}"

    def update(self) -> None:
        self.stream.write("\x1b[2K\r" + self.render())
        self.stream.flush()

    def finalize(self) -> None:
        self.update()
        self.stream.write("\n")
        self.stream.flush()
