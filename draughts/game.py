from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from .board import Board, MoveMap, Outcome, TurnRecord
from .config import DEFAULT_BOARD_SIZE
from .errors import ForcedCaptureViolation, IllegalMoveError
from .move import Coordinate, Move
from .pieces import Color, Piece
from .player import PlayerController

logger = logging.getLogger(__name__)

TurnListener = Callable[[TurnRecord], None]


class Game:
    """Live game: owns the position, the side to move and the turn history."""

    def __init__(self, board_size: int = DEFAULT_BOARD_SIZE):
        self.board_size = board_size
        self.board = Board(board_size)
        self.current_player = self.board.turn
        self.outcome: Optional[Outcome] = None
        self.history: list[TurnRecord] = []
        self.players: dict[Color, PlayerController] = {
            Color.WHITE: PlayerController.human("White Human"),
            Color.BLACK: PlayerController.human("Black Human"),
        }
        self._listeners: list[TurnListener] = []

    @property
    def winner(self) -> Optional[Color]:
        return self.outcome.winner if self.outcome else None

    def reset(self, board_size: Optional[int] = None):
        if board_size is not None:
            self.board_size = board_size
        self.board = Board(self.board_size)
        self.current_player = self.board.turn
        self.outcome = None
        self.history.clear()
        logger.info("New %dx%d game, %s to move.", self.board_size, self.board_size, self.current_player.value)

    def load(self, board: Board) -> None:
        """Continue from an arbitrary position, e.g. a composed puzzle."""
        self.board = board
        self.board_size = board.boardSize
        self.current_player = board.turn
        self.history.clear()
        self.outcome = board.outcome()

    def subscribe(self, listener: TurnListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: TurnListener) -> None:
        self._listeners.remove(listener)

    # queries -----------------------------------------------------------

    def getValidMoves(self) -> MoveMap:
        return self.board.getAllValidMoves(self.current_player)

    def forcedCaptures(self) -> list[Move]:
        return self.board.forced_captures(self.current_player)

    def moves_for(self, row: int, col: int) -> tuple[Move, ...]:
        """Moves the piece on (row, col) may play this turn, honouring forced captures."""
        piece = self.board.getPiece(row, col)
        if piece is None or piece.color != self.current_player or self.outcome:
            return ()
        return self.getValidMoves().get(piece, ())

    def find_move(self, piece: Piece, end: Coordinate) -> Optional[Move]:
        for move in piece.possibleMoves(self.board):
            if move.end == end:
                return move
        return None

    # players -----------------------------------------------------------

    def setPlayer(self, color: Color, controller: PlayerController) -> None:
        self.players[color] = controller

    def getPlayer(self, color: Color) -> PlayerController:
        return self.players[color]

    def currentController(self) -> PlayerController:
        return self.getPlayer(self.current_player)

    def isAITurn(self) -> bool:
        return self.outcome is None and not self.currentController().is_human

    def requestAIMove(self) -> Optional[TurnRecord]:
        controller = self.currentController()
        if controller.is_human or self.outcome is not None:
            return None
        decision = controller.select_move(self)
        if decision is None:
            logger.info("%s found no move for %s.", controller.name, self.current_player.value)
            return None
        piece, move = decision
        return self.makeMove(piece, move)

    # turns -------------------------------------------------------------

    def move_to(self, start: Coordinate, end: Coordinate) -> TurnRecord:
        piece = self.board.getPiece(*start)
        if piece is None:
            raise IllegalMoveError(f"No piece at row {start[0]}, col {start[1]}.")
        move = self.find_move(piece, end)
        if move is None:
            forced = self.forcedCaptures()
            if forced and piece.color == self.current_player:
                raise ForcedCaptureViolation(forced)
            raise IllegalMoveError(f"{piece} cannot move to row {end[0]}, col {end[1]}.")
        return self.makeMove(piece, move)

    def makeMove(self, piece: Piece, move: Move) -> TurnRecord:
        self._validate(piece, move)

        record = self.board.apply(move)
        self.current_player = self.board.turn
        self.outcome = self.board.outcome()
        record = replace(record, outcome=self.outcome)
        self.history.append(record)

        logger.info(
            "%s played %s (captured %d%s).",
            record.color.value,
            move,
            len(record.captured),
            ", promoted" if record.promoted else "",
        )
        if self.outcome is not None:
            logger.info("Game over: %s wins by %s.", self.outcome.winner.value, self.outcome.reason.value)

        for listener in list(self._listeners):
            listener(record)
        return record

    def _validate(self, piece: Piece, move: Move) -> None:
        if self.outcome is not None:
            raise IllegalMoveError("The game is already over.")
        if piece is None or move is None:
            raise IllegalMoveError("A piece and a move are required.")
        if self.board.getPiece(*piece.position) is not piece or move.start != piece.position:
            raise IllegalMoveError("Selected piece is not on the live board.")
        if piece.color != self.current_player:
            raise IllegalMoveError(f"It is {self.current_player.value}'s turn.")
        if not move.is_capture:
            forced = self.forcedCaptures()
            if forced:
                raise ForcedCaptureViolation(forced)
        if move not in piece.possibleMoves(self.board):
            raise IllegalMoveError(f"{move} is not a legal move for {piece}.")
