#!/usr/bin/env python3
"""Test the random tiers: warm-up moves and the final fallback."""
import sys
from collections import Counter

import pytest

from rps_classifier import MoveClassifier
from rps_predictor import MovePredictor, find_pattern_match


class CrashingClassifier(MoveClassifier):
    """Blows up like a model with a bad input shape."""

    def _predict_label(self, moves):
        raise RuntimeError("input shape mismatch")


# No 5-move window followed by the same move repeats in here
NO_PATTERN_HISTORY = [0, 0, 1, 2, 1, 1, 0, 2, 2, 1, 0, 1]


def test_warmup_is_uniform(num_samples=3000):
    """Warm-up moves should land on each move about a third of the time."""
    predictor = MovePredictor(seed=42)
    counts = Counter()
    for i in range(num_samples):
        round_index = i % 6 + 1
        counts[predictor.predict([0] * round_index, round_index)] += 1
        assert predictor.last_source == "warmup"

    print(f"Warm-up distribution: {dict(counts)}")
    assert set(counts) == {0, 1, 2}
    for move in range(3):
        share = counts[move] / num_samples
        assert 0.28 < share < 0.39, f"move {move} share {share:.2f}"


def test_warmup_ignores_patterns():
    predictor = MovePredictor(seed=1)
    predictor.predict([0] * 6, 6)
    assert predictor.last_source == "warmup"
    assert predictor.last_prediction is None


def test_short_history_is_random_even_after_warmup():
    predictor = MovePredictor(seed=1)
    move = predictor.predict([0, 1, 2], 10)
    assert move in (0, 1, 2)
    assert predictor.last_source == "warmup"


def test_failing_classifiers_fall_back_to_random():
    assert find_pattern_match(NO_PATTERN_HISTORY) is None

    predictor = MovePredictor(trained=CrashingClassifier(), untrained=CrashingClassifier(), seed=7)
    moves = set()
    for _ in range(60):
        move = predictor.predict(NO_PATTERN_HISTORY, len(NO_PATTERN_HISTORY))
        assert move in (0, 1, 2)
        assert predictor.last_source == "random"
        assert predictor.last_prediction is None
        moves.add(move)
    assert moves == {0, 1, 2}


def test_no_classifiers_configured():
    predictor = MovePredictor(seed=3)
    move = predictor.predict(NO_PATTERN_HISTORY, len(NO_PATTERN_HISTORY))
    assert move in (0, 1, 2)
    assert predictor.last_source == "random"


def test_seed_makes_moves_reproducible():
    a = MovePredictor(seed=42)
    b = MovePredictor(seed=42)
    moves_a = [a.predict([0], 1) for _ in range(20)]
    moves_b = [b.predict([0], 1) for _ in range(20)]
    assert moves_a == moves_b


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
