import numpy as np

from ..models.outcome_model import Outcome, OutcomeProbs


def make_rng(seed: int | np.random.SeedSequence | None = None) -> np.random.Generator:
    return np.random.default_rng(seed) if seed is not None else np.random.default_rng()


def sample_outcome(probs: OutcomeProbs, rng: np.random.Generator) -> Outcome:
    """Cascading-threshold draw over the outcome categories.

    Each category, in fixed order, gets its own uniform draw and wins if the
    draw falls under its probability. A pass with no winner is retried with
    fresh draws. The probabilities are not normalized, so long-run frequencies
    only approximate them and a plate appearance takes 1 / sum(probs) draws on
    average.
    """
    cascade = list(probs.items())
    if not any(p > 0.0 for _, p in cascade):
        raise ValueError("no outcome has a positive probability")
    while True:
        for outcome, p in cascade:
            if rng.random() < p:
                return outcome
