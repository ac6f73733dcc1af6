"""
Round engine for human vs. AI rock-paper-scissors.

The engine owns the session (move history, scores, round counter) and
exposes one entry point per round. Front-ends call play_round() with the
player's move and read back ai_move, result and the scores, or take a
snapshot() for their render loop.
"""

import copy
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from rps_classifier import DEFAULT_TRAINED_MODEL, KerasMoveClassifier
from rps_moves import AI_WINS, PLAYER_WINS, judge, move_name, validate_move
from rps_predictor import MovePredictor

READY = "Ready to play!"


@dataclass
class ScoreState:
    player_wins: int = 0
    ai_wins: int = 0


@dataclass
class SessionState:
    """Everything a front-end needs to draw the game."""
    move_history: List[int] = field(default_factory=list)
    score: ScoreState = field(default_factory=ScoreState)
    game_count: int = 0
    ai_move: Optional[int] = None
    result: str = READY


class RoundEngine:
    """Plays rounds against a MovePredictor and keeps score."""

    def __init__(self,
                 predictor: Optional[MovePredictor] = None,
                 trained_model_path: Optional[str] = DEFAULT_TRAINED_MODEL,
                 seed: Optional[int] = None,
                 verbose: bool = False):
        """
        Without a predictor, builds one from a Keras model at
        trained_model_path plus a default-weights network, seeded with seed.
        seed and trained_model_path only apply to that default predictor; a
        predictor passed in is used as is.
        """
        if predictor is None:
            predictor = MovePredictor(
                trained=KerasMoveClassifier(trained_model_path) if trained_model_path else None,
                untrained=KerasMoveClassifier(),
                seed=seed,
                verbose=verbose,
            )
        self.predictor = predictor
        self.verbose = verbose
        self.state = SessionState()

    # ========== ROUNDS ==========

    def play_round(self, player_move) -> str:
        """
        Play one round.

        Raises InvalidMoveInput (and leaves the session untouched) if
        player_move is not a move.
        """
        player_move = validate_move(player_move)

        state = self.state
        state.game_count += 1
        state.move_history.append(player_move)

        ai_move = self.predictor.predict(state.move_history, state.game_count)
        outcome = judge(player_move, ai_move)

        if outcome == PLAYER_WINS:
            state.score.player_wins += 1
        elif outcome == AI_WINS:
            state.score.ai_wins += 1

        state.ai_move = ai_move
        state.result = outcome

        if self.verbose:
            print(f"Round {state.game_count}: {move_name(player_move)} vs "
                  f"{move_name(ai_move)} -> {outcome}")
        return outcome

    def reset(self):
        """Start a new game."""
        self.state = SessionState()
        self.predictor.last_source = None
        self.predictor.last_prediction = None

    def snapshot(self) -> SessionState:
        return copy.deepcopy(self.state)

    # ========== READ-ONLY VIEW ==========

    @property
    def move_history(self) -> List[int]:
        return list(self.state.move_history)

    @property
    def player_wins(self) -> int:
        return self.state.score.player_wins

    @property
    def ai_wins(self) -> int:
        return self.state.score.ai_wins

    @property
    def game_count(self) -> int:
        return self.state.game_count

    @property
    def ai_move(self) -> Optional[int]:
        return self.state.ai_move

    @property
    def ai_move_name(self) -> str:
        return move_name(self.state.ai_move)

    @property
    def result(self) -> str:
        return self.state.result

    def get_stats(self) -> Dict:
        """Summary numbers for the current session."""
        total = self.state.game_count
        score = self.state.score
        return {
            'total_rounds': total,
            'player_wins': score.player_wins,
            'ai_wins': score.ai_wins,
            'ties': total - score.player_wins - score.ai_wins,
            'ai_win_rate': (score.ai_wins / total * 100) if total > 0 else 0.0,
            'last_source': self.predictor.last_source,
        }
