"""
End-to-end local example (no HTTP, no stats service).
"""
import os, sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from mlb_oracle.models.outcome_model import compute_outcome_probs
from mlb_oracle.sampler.rng import make_rng, sample_outcome
from mlb_oracle.schemas import BatterStats, PitcherStats, Team
from mlb_oracle.sim.monte_carlo import run_simulations

def main():
    ace = PitcherStats(name="Ace", batters_faced=100, walks=8, hits=22, doubles=4, triples=1, home_runs=3, strikeouts=20)
    slugger = BatterStats(name="Slugger", plate_appearances=500, walks=50, hits=140, doubles=25, triples=3, home_runs=15, strikeouts=90)
    journeyman = PitcherStats(name="Journeyman", batters_faced=900, walks=85, hits=230, doubles=48, triples=5, home_runs=30, strikeouts=170)
    regular = BatterStats(name="Regular", plate_appearances=450, walks=35, hits=105, doubles=20, triples=2, home_runs=10, strikeouts=100)

    away = Team(name="AWY", starting_pitcher=journeyman, batters=[regular] * 9)
    home = Team(name="HOM", starting_pitcher=ace, batters=[slugger] * 9)

    probs = compute_outcome_probs(ace, regular)
    print(probs.as_dict())
    print("EVENT:", sample_outcome(probs, make_rng(123)).value)

    tally = run_simulations(away, home, n_iter=1000, seed=123)
    print("HOME WIN PROBABILITY:", round(tally.home_win_probability(), 3))
    print("MOST PROBABLE SCORE (away, home):", tally.most_probable_score())

if __name__ == "__main__":
    main()
