import io

import pytest

from mlb_oracle.display import (
    EMPTY_BOX,
    FULL_BOX,
    GameLine,
    TTYColor,
    colormap,
    prediction_bar,
)
from mlb_oracle.schemas import Game


def _game():
    return Game(game_id="1", away_name="Toronto Blue Jays", home_name="New York Yankees")


def test_colormap_thresholds():
    assert colormap(0.80) is TTYColor.CYAN
    assert colormap(0.75) is TTYColor.CYAN
    assert colormap(0.60) is TTYColor.GREEN
    assert colormap(0.50) is TTYColor.YELLOW
    assert colormap(0.30) is TTYColor.RED
    assert colormap(0.10) is TTYColor.WHITE


def test_prediction_bar_box_counts():
    bar = prediction_bar(0.7)
    assert bar.count(FULL_BOX) == 10
    assert bar.count(EMPTY_BOX) == 10
    away, home = bar.split(" ")
    assert away.count(FULL_BOX) == 3
    assert home.count(FULL_BOX) == 7
    assert f"\x1b[{int(TTYColor.GREEN)}m" in home


def test_status_line_layout():
    out = io.StringIO()
    line = GameLine(_game(), stream=out)
    line.postponed()
    line.finalize()
    text = out.getvalue()
    assert text.startswith("\x1b[2K\r")
    assert text.endswith("\n")
    assert "POSTPONED" in text
    assert f"{'Toronto Blue Jays':>25} " in text
    assert text.rstrip("\n").endswith("New York Yankees")


def test_prediction_and_missing_prediction():
    line = GameLine(_game(), stream=io.StringIO())
    line.prediction(None)
    assert line.status == "NO PREDICTION" and line.color is TTYColor.RED
    line.prediction(0.5)
    assert line.color is None
    assert FULL_BOX in line.render()


def test_unknown_status():
    line = GameLine(_game(), stream=io.StringIO())
    assert "UNKNOWN" in line.render()


@pytest.mark.parametrize("p,home_boxes,away_boxes", [(0.25, 3, 8), (0.45, 5, 6), (0.65, 7, 4)])
def test_prediction_bar_rounds_half_boxes_up(p, home_boxes, away_boxes):
    away, home = prediction_bar(p).split(" ")
    assert home.count(FULL_BOX) == home_boxes
    assert away.count(FULL_BOX) == away_boxes
