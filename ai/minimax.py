from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from threading import Event
from typing import List, Optional, Tuple

from draughts.board import Board, EndReason, Outcome
from draughts.config import Difficulty, depth_for
from draughts.game import Game
from draughts.move import Move
from draughts.pieces import Color, Piece

from .cancel import deadline_after, raise_if_cancelled
from .evaluation import evaluate_board, move_bonus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MinimaxOptions:
	difficulty: Difficulty = Difficulty.MEDIUM
	use_alpha_beta: bool = True


@dataclass
class SearchStats:
	nodes: int = 0


@dataclass
class SearchResult:
	move: Optional[Move]
	score: float = -math.inf
	candidates: List[Move] = field(default_factory=list)
	nodes: int = 0


def search(
	board: Board,
	color: Color,
	depth: Optional[int] = None,
	difficulty: Difficulty = Difficulty.MEDIUM,
	*,
	use_alpha_beta: bool = True,
	rng: Optional[random.Random] = None,
	cancel_event: Optional[Event] = None,
	time_limit_ms: Optional[int] = None,
) -> SearchResult:
	"""Score every root move for ``color`` and pick one of the best at random."""
	difficulty = Difficulty(difficulty)
	depth = depth_for(difficulty, depth)
	options = MinimaxOptions(difficulty=difficulty, use_alpha_beta=use_alpha_beta)
	deadline = deadline_after(time_limit_ms)
	stats = SearchStats()

	root_moves = _flatten(board.getAllValidMoves(color))
	if not root_moves:
		return SearchResult(move=None)

	best_score = -math.inf
	candidates: List[Move] = []
	for move in root_moves:
		raise_if_cancelled(cancel_event, deadline)
		child = board.simulateMove(move)
		bonus = move_bonus(child, move, color, True, difficulty)
		score = bonus + _alphabeta(
			child,
			depth,
			color,
			-math.inf,
			math.inf,
			False,
			options,
			stats,
			cancel_event,
			deadline,
		)
		if score > best_score:
			best_score = score
			candidates = [move]
		elif score == best_score:
			candidates.append(move)

	chooser = rng if rng is not None else random
	chosen = chooser.choice(candidates)
	logger.debug(
		"%s %s d=%d: %d root moves, %d tied at %s, %d nodes, playing %s",
		color.value,
		difficulty.value,
		depth,
		len(root_moves),
		len(candidates),
		best_score,
		stats.nodes,
		chosen,
	)
	return SearchResult(move=chosen, score=best_score, candidates=candidates, nodes=stats.nodes)


def best_move(
	board: Board,
	color: Color,
	depth: Optional[int] = None,
	difficulty: Difficulty = Difficulty.MEDIUM,
	**kwargs,
) -> Optional[Move]:
	return search(board, color, depth, difficulty, **kwargs).move


def select_move(
	game: Game,
	difficulty: Difficulty = Difficulty.MEDIUM,
	depth: Optional[int] = None,
	*,
	rng: Optional[random.Random] = None,
	cancel_event: Optional[Event] = None,
	time_limit_ms: Optional[int] = None,
) -> Optional[Tuple[Piece, Move]]:
	board = game.board
	move = best_move(
		board,
		game.current_player,
		depth,
		difficulty,
		rng=rng,
		cancel_event=cancel_event,
		time_limit_ms=time_limit_ms,
	)
	if move is None:
		return None
	return board.getPiece(*move.start), move


def _alphabeta(
	board: Board,
	depth: int,
	perspective: Color,
	alpha: float,
	beta: float,
	maximizing: bool,
	options: MinimaxOptions,
	stats: SearchStats,
	cancel_event: Optional[Event],
	deadline: Optional[float],
) -> float:
	raise_if_cancelled(cancel_event, deadline)
	stats.nodes += 1

	mover = perspective if maximizing else perspective.opponent
	winner = board.winner()
	if winner is not None:
		return evaluate_board(board, perspective, Outcome(winner, EndReason.ELIMINATION))

	# Both sides still have pieces here, so a side without moves is blocked.
	if depth == 0:
		outcome = None if board.has_legal_move(mover) else Outcome(mover.opponent, EndReason.BLOCKED)
		return evaluate_board(board, perspective, outcome)

	moves = _flatten(board.getAllValidMoves(mover))
	if not moves:
		return evaluate_board(board, perspective, Outcome(mover.opponent, EndReason.BLOCKED))

	if maximizing:
		value = -math.inf
		for move in moves:
			child = board.simulateMove(move)
			bonus = move_bonus(child, move, mover, True, options.difficulty)
			# Shift the window by the bonus so cutoffs match the unpruned search.
			score = bonus + _alphabeta(
				child, depth - 1, perspective, alpha - bonus, beta - bonus, False,
				options, stats, cancel_event, deadline,
			)
			value = max(value, score)
			alpha = max(alpha, value)
			if options.use_alpha_beta and beta <= alpha:
				break
		return value

	value = math.inf
	for move in moves:
		child = board.simulateMove(move)
		bonus = move_bonus(child, move, mover, False, options.difficulty)
		score = bonus + _alphabeta(
			child, depth - 1, perspective, alpha - bonus, beta - bonus, True,
			options, stats, cancel_event, deadline,
		)
		value = min(value, score)
		beta = min(beta, value)
		if options.use_alpha_beta and beta <= alpha:
			break
	return value


def _flatten(moves_map: dict[Piece, Tuple[Move, ...]]) -> List[Move]:
	return [move for moves in moves_map.values() for move in moves]
