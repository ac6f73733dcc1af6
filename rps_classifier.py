"""
Next-move classifiers used as the predictor's fallback.

A classifier looks at the player's last few moves and guesses the next one.
The Keras implementation either loads a pretrained model from disk or
builds a small network with default weights.
"""

import os
from typing import List, Optional, Sequence

import numpy as np

from rps_moves import InvalidMoveInput, validate_move

try:
    from tensorflow import keras
    from tensorflow.keras import layers
    TF_AVAILABLE = True
except ImportError:
    TF_AVAILABLE = False

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_TRAINED_MODEL = os.path.join(BASE_DIR, "models", "rps_predictor_trained.keras")


class PredictionUnavailable(Exception):
    """The classifier could not produce a usable prediction."""


class MoveClassifier:
    """Base class for next-move classifiers."""

    name = "classifier"

    def __init__(self, sequence_length: int = 5):
        self.sequence_length = sequence_length

    def predict(self, sequence: Sequence[int]) -> int:
        """Predict the player's next move from their last `sequence_length` moves."""
        if len(sequence) != self.sequence_length:
            raise PredictionUnavailable(
                f"{self.name}: expected {self.sequence_length} moves, got {len(sequence)}"
            )
        try:
            moves = [validate_move(m) for m in sequence]
        except InvalidMoveInput as e:
            raise PredictionUnavailable(f"{self.name}: bad input sequence ({e})") from e

        try:
            label = self._predict_label(moves)
        except PredictionUnavailable:
            raise
        except Exception as e:
            raise PredictionUnavailable(f"{self.name}: {e}") from e

        try:
            return validate_move(label)
        except InvalidMoveInput as e:
            raise PredictionUnavailable(f"{self.name}: malformed output {label!r}") from e

    def _predict_label(self, moves: List[int]):
        raise NotImplementedError


class KerasMoveClassifier(MoveClassifier):
    """
    Keras-backed classifier.

    With a model_path this wraps a pretrained model; without one it builds
    a fresh network whose weights are whatever Keras initializes them to.
    """

    def __init__(self, model_path: Optional[str] = None, sequence_length: int = 5,
                 name: Optional[str] = None):
        super().__init__(sequence_length)
        self.model_path = model_path
        self.name = name or ("trained" if model_path else "untrained")
        self.model = None
        self.load_error: Optional[str] = None

    def _build_model(self):
        """Small dense network over the move window."""
        model = keras.Sequential([
            layers.Input(shape=(self.sequence_length, 1)),
            layers.Flatten(),
            layers.Dense(32, activation='relu'),
            layers.Dense(16, activation='relu'),
            layers.Dense(3, activation='softmax')
        ])
        return model

    def _load(self):
        if self.model is not None:
            return self.model
        if self.load_error is not None:
            raise PredictionUnavailable(self.load_error)

        if not TF_AVAILABLE:
            self.load_error = f"{self.name}: TensorFlow is not installed"
            raise PredictionUnavailable(self.load_error)

        try:
            if self.model_path is None:
                self.model = self._build_model()
            elif os.path.exists(self.model_path):
                self.model = keras.models.load_model(self.model_path, compile=False)
            else:
                self.load_error = f"{self.name}: no model at {self.model_path}"
        except Exception as e:
            self.load_error = f"{self.name}: failed to load model ({e})"

        if self.model is None:
            raise PredictionUnavailable(self.load_error)
        return self.model

    def _predict_label(self, moves):
        model = self._load()
        x = np.array(moves, dtype=np.float32).reshape(1, self.sequence_length, 1)
        probs = np.asarray(model.predict(x, verbose=0))
        if probs.size != 3:
            raise PredictionUnavailable(f"{self.name}: expected 3 class scores, got shape {probs.shape}")
        return int(np.argmax(probs.reshape(-1)))
