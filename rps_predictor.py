#!/usr/bin/env python3
"""
RPS Move Predictor - Pattern & Classifier Fallback Chain

Picks the computer's move by guessing what the player will throw next:
- Warm-up: random moves until there is enough history
- Exact pattern repeat: if the last 5 moves plus the move after them
  happened before, assume the player repeats that move
- Trained classifier, then an untrained one, on the last 5 moves
- Random as the last resort
"""

import random
from typing import List, Optional

from rps_classifier import MoveClassifier
from rps_moves import InvalidMoveInput, counter_move, move_name, validate_move


def find_pattern_match(history: List[int], sequence_length: int = 5) -> Optional[int]:
    """
    Find the oldest earlier occurrence of the current pattern.

    The last sequence_length + 1 moves split into a pattern (first
    sequence_length) and an anchor (the final move). Returns the first
    position i where history[i:i + sequence_length] equals the pattern and
    history[i + sequence_length] equals the anchor, or None.
    """
    if len(history) <= sequence_length + 1:
        return None

    recent = history[-(sequence_length + 1):]
    pattern = recent[:sequence_length]
    anchor = recent[-1]

    for i in range(len(history) - sequence_length - 1):
        if history[i:i + sequence_length] == pattern and history[i + sequence_length] == anchor:
            return i
    return None


class MovePredictor:
    """Chooses the AI's move from the player's move history."""

    def __init__(self,
                 trained: Optional[MoveClassifier] = None,
                 untrained: Optional[MoveClassifier] = None,
                 sequence_length: int = 5,
                 warmup_rounds: int = 6,
                 seed: Optional[int] = None,
                 verbose: bool = False):
        self.trained = trained
        self.untrained = untrained
        self.sequence_length = sequence_length
        self.warmup_rounds = warmup_rounds
        self.rng = random.Random(seed)
        self.verbose = verbose

        # What produced the last move: warmup, pattern, trained, untrained, random
        self.last_source: Optional[str] = None
        # The player move we expected (None when the move was random)
        self.last_prediction: Optional[int] = None
        # Classifier failure messages already printed
        self._reported = set()

    def _random_move(self, source):
        self.last_source = source
        self.last_prediction = None
        return self.rng.randint(0, 2)

    def _report(self, source, error):
        message = f"{source.capitalize()} model prediction error: {error}"
        if self.verbose or message not in self._reported:
            print(f"⚠️ {message}")
        self._reported.add(message)

    def _countered(self, predicted, source):
        self.last_source = source
        self.last_prediction = predicted
        if self.verbose:
            print(f"🎯 {source}: expecting {move_name(predicted).upper()}, "
                  f"playing {move_name(counter_move(predicted)).upper()}")
        return counter_move(predicted)

    def predict(self, history: List[int], round_index: int) -> int:
        """Return the AI's move for round `round_index` (1-based)."""
        history = list(history)

        if round_index <= self.warmup_rounds or len(history) < self.sequence_length + 1:
            return self._random_move("warmup")

        pattern = history[-(self.sequence_length + 1):-1]

        if find_pattern_match(history, self.sequence_length) is not None:
            return self._countered(history[-1], "pattern")

        for source, classifier in (("trained", self.trained), ("untrained", self.untrained)):
            if classifier is None:
                continue
            try:
                predicted = validate_move(classifier.predict(pattern))
            except InvalidMoveInput as e:
                self._report(source, f"malformed output ({e})")
                continue
            except Exception as e:
                self._report(source, e)
                continue
            return self._countered(predicted, source)

        if self.verbose:
            print("🎲 No prediction available, playing random")
        return self._random_move("random")
