import pytest

from mlb_oracle.schemas import BatterStats, PitcherStats, Team


def pitcher(name="P", bf=1000, bb=80, h=230, d=45, t=5, hr=25, so=220):
    return PitcherStats(
        name=name,
        batters_faced=bf,
        walks=bb,
        hits=h,
        doubles=d,
        triples=t,
        home_runs=hr,
        strikeouts=so,
    )


def batter(name="B", pa=500, bb=45, h=120, d=24, t=2, hr=15, so=110):
    return BatterStats(
        name=name,
        plate_appearances=pa,
        walks=bb,
        hits=h,
        doubles=d,
        triples=t,
        home_runs=hr,
        strikeouts=so,
    )


def team(name="T", p=None, b=None):
    return Team(name=name, starting_pitcher=p or pitcher(name=f"{name}-P"), batters=[b or batter() for _ in range(9)])


@pytest.fixture
def away_team():
    return team("AWY")


@pytest.fixture
def home_team():
    return team("HOM")
