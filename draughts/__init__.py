"""Draughts rules engine: position, pieces, move generation and game flow."""

from .board import Board, EndReason, Outcome, TurnRecord
from .config import DEFAULT_BOARD_SIZE, Difficulty, GameConfig
from .errors import ForcedCaptureViolation, IllegalMoveError, OutOfBoundsError
from .game import Game
from .move import Capture, Coordinate, Move
from .pieces import Color, King, Man, Piece
from .player import PlayerController, PlayerKind

__all__ = [
    "Board",
    "Game",
    "Move",
    "Capture",
    "Coordinate",
    "Color",
    "Piece",
    "Man",
    "King",
    "Outcome",
    "EndReason",
    "TurnRecord",
    "Difficulty",
    "GameConfig",
    "DEFAULT_BOARD_SIZE",
    "IllegalMoveError",
    "ForcedCaptureViolation",
    "OutOfBoundsError",
    "PlayerController",
    "PlayerKind",
]
