import pytest

from mlb_oracle.models.outcome_model import Outcome
from mlb_oracle.sampler.rng import make_rng
from mlb_oracle.schemas import Rules
from mlb_oracle.sim.game import GameState, LiveTeam, simulate_game

from conftest import team

K = Outcome.STRIKE_OUT


def scripted(outcomes, default=K):
    it = iter(outcomes)

    def resolver(pitcher, batter, rng):
        return next(it, default)

    return resolver


def by_state(state, plays, default=K):
    """Resolver keyed on (inning, half); each key maps to a list consumed in order."""
    queues = {k: list(v) for k, v in plays.items()}
    seen = []

    def resolver(pitcher, batter, rng):
        seen.append((state.inning, state.half, state.field.bases))
        q = queues.get((state.inning, state.half))
        return q.pop(0) if q else default

    resolver.seen = seen
    return resolver


def test_three_strikeouts_end_half_scoreless():
    state = GameState(team("A"), team("H"))
    runs = state.play_half_inning(make_rng(0), scripted([K, K, K]))
    assert runs == 0
    assert state.outs == 3
    assert state.half == "B" and state.inning == 1
    assert state.linescore == [(1, "T", 0)]
    assert state.teams[0].current_batter == 3


def test_bases_loaded_home_run_scores_four():
    state = GameState(team("A"), team("H"))
    plays = [Outcome.WALK, Outcome.WALK, Outcome.WALK, Outcome.HOME_RUN, K, K, K]
    assert state.play_half_inning(make_rng(0), scripted(plays)) == 4
    assert state.score.away == 4
    assert state.teams[0].current_batter == 7


def test_away_run_in_first_holds_up():
    state = GameState(team("A"), team("H"))
    resolver = by_state(state, {(1, "T"): [Outcome.HOME_RUN]})
    score = state.play(make_rng(0), resolver)
    assert score.as_tuple() == (1, 0)
    # Home trails, so it bats in the ninth
    assert len(state.linescore) == 18
    assert state.linescore[-1] == (9, "B", 0)


def test_home_ahead_after_top_of_ninth_skips_bottom():
    state = GameState(team("A"), team("H"))
    resolver = by_state(state, {(1, "B"): [Outcome.HOME_RUN]})
    score = state.play(make_rng(0), resolver)
    assert score.as_tuple() == (0, 1)
    assert len(state.linescore) == 17
    assert state.linescore[-1] == (9, "T", 0)
    assert not state.live


def test_ninth_inning_skip_with_two_run_lead():
    state = GameState(team("A"), team("H"))
    state.inning = 9
    state.score.away, state.score.home = 3, 5
    state.play_half_inning(make_rng(0), scripted([K, K, K]))
    assert not state.live
    assert state.score.as_tuple() == (3, 5)
    assert state.linescore == [(9, "T", 0)]


def test_walk_off_ends_game_immediately():
    state = GameState(team("A"), team("H"))
    resolver = by_state(state, {(9, "B"): [Outcome.WALK, Outcome.HOME_RUN]})
    score = state.play(make_rng(0), resolver)
    assert score.as_tuple() == (0, 2)
    assert state.outs == 0
    assert state.linescore[-1] == (9, "B", 2)
    assert resolver.seen[-1][:2] == (9, "B")
    assert sum(1 for s in resolver.seen if s[:2] == (9, "B")) == 2


def test_tie_after_regulation_goes_to_extras_with_runner_on_second():
    state = GameState(team("A"), team("H"))
    resolver = by_state(state, {(10, "T"): [Outcome.DOUBLE]})
    score = state.play(make_rng(0), resolver)
    assert score.as_tuple() == (1, 0)
    assert state.inning == 10
    first_pa = {}
    for inning, half, bases in resolver.seen:
        first_pa.setdefault((inning, half), bases)
    assert first_pa[(10, "T")] == (False, True, False)
    assert first_pa[(10, "B")] == (False, True, False)
    assert first_pa[(9, "T")] == (False, False, False)


def test_extras_runner_rule_can_be_disabled():
    state = GameState(team("A"), team("H"), rules=Rules(extras_runner_on_2nd=False))
    resolver = by_state(state, {(10, "T"): [Outcome.HOME_RUN]})
    state.play(make_rng(0), resolver)
    assert [b for i, h, b in resolver.seen if (i, h) == (10, "T")][0] == (False, False, False)


def test_shorter_regulation():
    state = GameState(team("A"), team("H"), rules=Rules(regulation_innings=7))
    resolver = by_state(state, {(2, "T"): [Outcome.HOME_RUN]})
    state.play(make_rng(0), resolver)
    assert state.inning == 7
    assert state.score.as_tuple() == (1, 0)


def test_cannot_play_after_final_out():
    state = GameState(team("A"), team("H"))
    state.play(make_rng(0), by_state(state, {(1, "T"): [Outcome.HOME_RUN]}))
    with pytest.raises(RuntimeError):
        state.play_half_inning(make_rng(0), scripted([]))


def test_batting_order_wraps():
    live = LiveTeam.from_team(team("A"))
    for _ in range(9):
        live.advance()
    assert live.current_batter == 0
    assert live.pitcher.name == "A-P"


def test_simulated_games_never_end_tied():
    away, home = team("A"), team("H")
    rng = make_rng(42)
    for _ in range(50):
        score = simulate_game(away, home, rng)
        assert score.away != score.home
        assert score.away >= 0 and score.home >= 0


def test_resolver_sees_opposing_pitcher():
    away, home = team("A"), team("H")
    calls = []

    def resolver(pitcher, batter, rng):
        calls.append(pitcher.name)
        # Only the very first plate appearance is a home run
        return Outcome.HOME_RUN if len(calls) == 1 else K

    score = simulate_game(away, home, make_rng(0), resolver=resolver)
    # Away leads off against the home starter
    assert calls[0] == "H-P"
    assert calls[4] == "A-P"
    assert score.as_tuple() == (1, 0)
