from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from .config import DEFAULT_BOARD_SIZE, validate_board_size
from .errors import OutOfBoundsError
from .move import Move
from .pieces import Color, King, Man, Piece


MoveMap = dict[Piece, tuple[Move, ...]]
BoardStatePiece = tuple[int, int, str, bool, int]
BoardState = tuple[int, str, tuple[BoardStatePiece, ...]]


class EndReason(str, Enum):
    ELIMINATION = "elimination"
    BLOCKED = "blocked"


@dataclass(frozen=True, slots=True)
class Outcome:
    winner: Color
    reason: EndReason

    @property
    def loser(self) -> Color:
        return self.winner.opponent


@dataclass(frozen=True, slots=True)
class TurnRecord:
    color: Color
    move: Move
    piece: Piece
    captured: tuple[Piece, ...]
    promoted: bool
    outcome: Optional[Outcome] = None


def starting_rows(board_size: int) -> int:
    return board_size // 2 - board_size // 15 - 1


def initial_piece_count(board_size: int) -> int:
    """Men per side in the opening layout of a board of this size."""
    return starting_rows(board_size) * board_size // 2


class Board:
    def __init__(self, boardSize: int = DEFAULT_BOARD_SIZE) -> None:
        validate_board_size(boardSize)
        self.board: list[list[Optional[Piece]]] = [
            [None for _ in range(boardSize)] for _ in range(boardSize)
        ]
        self.boardSize = boardSize
        self.turn = Color.WHITE
        self._set_start_pieces()

    @classmethod
    def empty(cls, boardSize: int = DEFAULT_BOARD_SIZE, *, turn: Color = Color.WHITE) -> "Board":
        validate_board_size(boardSize)
        board = cls.__new__(cls)
        board.boardSize = boardSize
        board.board = [[None for _ in range(boardSize)] for _ in range(boardSize)]
        board.turn = turn
        return board

    @classmethod
    def from_pieces(
        cls,
        boardSize: int,
        pieces: Iterable[Piece],
        *,
        turn: Color = Color.WHITE,
    ) -> "Board":
        board = cls.empty(boardSize, turn=turn)
        for piece in pieces:
            board.place(piece)
        return board

    def place(self, piece: Piece) -> Piece:
        if not self.is_dark_square(piece.row, piece.col):
            raise ValueError(f"Pieces only stand on dark squares, ({piece.row}, {piece.col}) is light.")
        if self.getPiece(piece.row, piece.col) is not None:
            raise ValueError(f"Square ({piece.row}, {piece.col}) is already occupied.")
        self.board[piece.row][piece.col] = piece
        return piece

    def to_state(self) -> BoardState:
        """Hashable snapshot: size, side to move and every piece in row-major order."""
        pieces = tuple((p.row, p.col, p.color.value, p.is_king, p.id) for p in self.getAllPieces())
        return (self.boardSize, self.turn.value, pieces)

    @classmethod
    def from_state(cls, state: BoardState) -> "Board":
        board_size, turn_value, pieces = state
        board = cls.empty(board_size, turn=Color(turn_value))
        for row, col, color_value, is_king, identifier in pieces:
            color = Color(color_value)
            piece: Piece
            if is_king:
                piece = King(color, row, col, identifier=identifier)
            else:
                piece = Man(color, row, col, identifier=identifier)
            board.place(piece)
        return board

    def getPiece(self, row: int, col: int) -> Optional[Piece]:
        if not self._is_within_bounds(row, col):
            raise OutOfBoundsError(row, col, self.boardSize)
        return self.board[row][col]

    def getAllPieces(self, color: Optional[Color] = None) -> list[Piece]:
        pieces: list[Piece] = []
        for row in range(self.boardSize):
            for col in range(self.boardSize):
                piece = self.board[row][col]
                if piece is None:
                    continue
                if color is not None and piece.color != color:
                    continue
                pieces.append(piece)
        return pieces

    def count(self, color: Color) -> int:
        return len(self.getAllPieces(color))

    @property
    def initial_pieces(self) -> int:
        return initial_piece_count(self.boardSize)

    def promotion_row(self, color: Color) -> int:
        return 0 if color == Color.WHITE else self.boardSize - 1

    def is_dark_square(self, row: int, col: int) -> bool:
        return self._is_within_bounds(row, col) and row % 2 == col % 2

    # move generation ----------------------------------------------------

    def legal_moves(self, color: Color) -> list[Move]:
        """Every move each piece of ``color`` can make, before the forced-capture filter."""
        return [move for piece in self.getAllPieces(color) for move in piece.possibleMoves(self)]

    def forced_captures(self, color: Color) -> list[Move]:
        return [move for piece in self.getAllPieces(color) for move in piece.captureMoves(self)]

    def getAllValidMoves(self, color: Color) -> MoveMap:
        capture_map: MoveMap = {}
        quiet_map: MoveMap = {}

        for piece in self.getAllPieces(color):
            moves = piece.possibleMoves(self)
            if not moves:
                continue
            if moves[0].is_capture:
                capture_map[piece] = tuple(moves)
            else:
                quiet_map[piece] = tuple(moves)

        return capture_map if capture_map else quiet_map

    def has_legal_move(self, color: Color) -> bool:
        return any(piece.possibleMoves(self) for piece in self.getAllPieces(color))

    # rules --------------------------------------------------------------

    def apply(self, move: Move) -> TurnRecord:
        piece = self.getPiece(*move.start)
        if piece is None:
            raise ValueError(f"No piece at move start {move.start}.")
        if self.getPiece(*move.end) is not None:
            raise ValueError("Destination square must be empty.")

        captured: list[Piece] = []
        for capture in move.captures:
            target = self.getPiece(*capture.position)
            if target is None or target.color == piece.color:
                raise RuntimeError("Capture move references a missing or friendly piece.")
            captured.append(target)

        # The grid is only written once every capture has checked out.
        for target in captured:
            self.board[target.row][target.col] = None
        self.board[piece.row][piece.col] = None
        end_row, end_col = move.end
        piece.move(end_row, end_col)
        self.board[end_row][end_col] = piece

        moved = self._handle_promotion(piece)
        mover = piece.color
        self.turn = mover.opponent

        return TurnRecord(
            color=mover,
            move=move,
            piece=moved,
            captured=tuple(captured),
            promoted=moved is not piece,
        )

    def copy(self) -> "Board":
        clone = Board.empty(self.boardSize, turn=self.turn)
        for piece in self.getAllPieces():
            clone.board[piece.row][piece.col] = piece.getCopy()
        return clone

    def simulateMove(self, move: Move) -> "Board":
        board_copy = self.copy()
        board_copy.apply(move)
        return board_copy

    def winner(self) -> Optional[Color]:
        white_count = self.count(Color.WHITE)
        black_count = self.count(Color.BLACK)
        if white_count == 0 and black_count > 0:
            return Color.BLACK
        if black_count == 0 and white_count > 0:
            return Color.WHITE
        return None

    def outcome(self, to_move: Optional[Color] = None) -> Optional[Outcome]:
        winner = self.winner()
        if winner is not None:
            return Outcome(winner=winner, reason=EndReason.ELIMINATION)
        current = self.turn if to_move is None else to_move
        if self.count(current) and not self.has_legal_move(current):
            return Outcome(winner=current.opponent, reason=EndReason.BLOCKED)
        return None

    def is_game_over(self) -> Optional[Color]:
        result = self.outcome()
        return result.winner if result else None

    def _handle_promotion(self, piece: Piece) -> Piece:
        if isinstance(piece, Man) and piece.row == self.promotion_row(piece.color):
            promoted = piece.promote()
            self.board[piece.row][piece.col] = promoted
            return promoted
        return piece

    def _set_start_pieces(self) -> None:
        rows_to_fill = starting_rows(self.boardSize)
        white_from = self.boardSize // 2 + self.boardSize // 15

        for row in range(self.boardSize):
            for col in range(self.boardSize):
                if not self.is_dark_square(row, col):
                    continue
                if row < rows_to_fill:
                    self.board[row][col] = Man(Color.BLACK, row, col)
                elif row > white_from:
                    self.board[row][col] = Man(Color.WHITE, row, col)

    def _is_within_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.boardSize and 0 <= col < self.boardSize

    def __str__(self) -> str:
        symbols = {
            (Color.BLACK, False): "b",
            (Color.BLACK, True): "B",
            (Color.WHITE, False): "w",
            (Color.WHITE, True): "W",
        }
        lines = []
        for row in range(self.boardSize):
            cells = []
            for col in range(self.boardSize):
                piece = self.board[row][col]
                if piece is not None:
                    cells.append(symbols[(piece.color, piece.is_king)])
                else:
                    cells.append("." if self.is_dark_square(row, col) else " ")
            lines.append(" ".join(cells))
        return "\n".join(lines)
