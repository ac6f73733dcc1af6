"""
Move encoding and round judging for the RPS round engine.

Moves are plain integers: 0=rock, 1=paper, 2=scissors.
Move (i + 1) % 3 always beats move i.
"""

import numpy as np

MOVES = ['rock', 'paper', 'scissors']
MOVE_TO_NUM = {m: i for i, m in enumerate(MOVES)}
NUM_TO_MOVE = {i: m for i, m in enumerate(MOVES)}

ROCK, PAPER, SCISSORS = 0, 1, 2

# Round outcomes
PLAYER_WINS = "Player Wins"
AI_WINS = "AI Wins"
TIE = "Tie"
OUTCOMES = (PLAYER_WINS, AI_WINS, TIE)


class InvalidMoveInput(ValueError):
    """Raised when a caller hands the engine something that is not a move."""


def validate_move(move):
    """
    Normalize a move to its index.

    Accepts an int in [0, 2] or a move name ('rock', ' Paper ', ...).
    Raises InvalidMoveInput for anything else; nothing is coerced.
    """
    if isinstance(move, (bool, np.bool_)):
        raise InvalidMoveInput(f"Invalid move: {move!r}")

    if isinstance(move, (int, np.integer)):
        if 0 <= int(move) <= 2:
            return int(move)
        raise InvalidMoveInput(f"Invalid move index {move}. Valid indices are 0, 1, 2")

    if isinstance(move, str):
        normalized = move.strip().lower()
        if normalized in MOVE_TO_NUM:
            return MOVE_TO_NUM[normalized]
        raise InvalidMoveInput(f"Invalid move {move!r}. Valid moves are: {', '.join(MOVES)}")

    raise InvalidMoveInput(f"Invalid move type: {type(move).__name__}")


def counter_move(move):
    """Return the move that beats `move` (rock -> paper)."""
    return (move + 1) % 3


def judge(player_move, ai_move):
    """Decide a round from the player's point of view."""
    if player_move == ai_move:
        return TIE
    if (player_move + 1) % 3 == ai_move:
        return AI_WINS
    return PLAYER_WINS


def move_name(move):
    """Display name for a move index, '?' before any move was made."""
    if move is None:
        return "?"
    return NUM_TO_MOVE[move]
