from __future__ import annotations

from typing import Optional

from draughts.board import Board, Outcome
from draughts.config import Difficulty
from draughts.move import Move
from draughts.pieces import Color

WIN_SCORE = 100


def evaluate_board(board: Board, perspective: Color, outcome: Optional[Outcome] = None) -> int:
	"""Score a leaf from ``perspective``: +/-WIN_SCORE for a finished game, else piece difference."""
	if outcome is not None:
		return WIN_SCORE if outcome.winner == perspective else -WIN_SCORE
	return board.count(perspective) - board.count(perspective.opponent)


# Pieces the mover has lost since the opening, measured on the child position.
def material_loss(board: Board, color: Color) -> int:
	return board.initial_pieces - board.count(color)


# Difficulty-dependent adjustment added to a child's recursive score.
def move_bonus(child: Board, move: Move, mover: Color, maximizing: bool, difficulty: Difficulty) -> int:
	if difficulty == Difficulty.EASY:
		return 0
	weight = move.weight
	malus = material_loss(child, mover) if difficulty == Difficulty.HARD else 0
	bonus = weight - malus
	return bonus if maximizing else -bonus
