from __future__ import annotations

from enum import Enum
from itertools import count
from typing import TYPE_CHECKING, Optional

from .move import Capture, Coordinate, Move

if TYPE_CHECKING:
    from .board import Board


MoveList = list[Move]
_PIECE_ID_COUNTER = count()

CAPTURE_WEIGHT = 1
KING_CAPTURE_BONUS = 2
PROMOTION_BONUS = 1

DIRECTIONS: tuple[Coordinate, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


class Color(Enum):
    BLACK = "black"
    WHITE = "white"

    @property
    def opponent(self) -> "Color":
        return Color.WHITE if self is Color.BLACK else Color.BLACK


# Black starts on the low rows and walks down the board, white walks up.
FORWARD: dict[Color, int] = {Color.BLACK: 1, Color.WHITE: -1}


class Piece:
    def __init__(self, color: Color, row: int, col: int, *, identifier: Optional[int] = None) -> None:
        self.color = color
        self.row = row
        self.col = col
        self.is_king = False
        self.id = identifier if identifier is not None else next(_PIECE_ID_COUNTER)

    def move(self, new_row: int, new_col: int) -> None:
        self.row = new_row
        self.col = new_col

    @property
    def position(self) -> Coordinate:
        return (self.row, self.col)

    def snapshot(self) -> Capture:
        return Capture(position=self.position, color=self.color, is_king=self.is_king)

    def basicMoves(self, board: "Board") -> MoveList:
        return []

    def captureMoves(self, board: "Board") -> MoveList:
        return []

    def possibleMoves(self, board: "Board") -> MoveList:
        captures = self.captureMoves(board)
        return captures if captures else self.basicMoves(board)

    def getCopy(self) -> "Piece":
        clone = self.__class__(self.color, self.row, self.col, identifier=self.id)
        clone.is_king = self.is_king
        return clone

    def __repr__(self) -> str:
        piece_type = "K" if self.is_king else "M"
        return f"{piece_type}({self.color.name},{self.row},{self.col})"


class King(Piece):
    def __init__(self, color: Color, row: int, col: int, *, identifier: Optional[int] = None):
        super().__init__(color, row, col, identifier=identifier)
        self.is_king = True

    def getCopy(self) -> "Piece":
        return King(self.color, self.row, self.col, identifier=self.id)

    def basicMoves(self, board: "Board") -> MoveList:
        origin = self.position
        moves: MoveList = []
        for dr, dc in DIRECTIONS:
            r, c = self.row + dr, self.col + dc
            while board._is_within_bounds(r, c) and board.getPiece(r, c) is None:
                moves.append(Move(start=origin, end=(r, c)))
                r += dr
                c += dc
        return moves

    def captureMoves(self, board: "Board") -> MoveList:
        origin = self.position
        capture_moves: MoveList = []
        landed: set[Coordinate] = set()
        # Squares crossed before a jump in this search never become landings.
        slid: set[Coordinate] = set()

        def dfs(
            r: int,
            c: int,
            weight: int,
            previous: Optional[Move],
            jumped: frozenset[Coordinate],
        ) -> None:
            for dr, dc in DIRECTIONS:
                step_r, step_c = r + dr, c + dc
                while board._is_within_bounds(step_r, step_c) and board.getPiece(step_r, step_c) is None:
                    slid.add((step_r, step_c))
                    step_r += dr
                    step_c += dc
                if not board._is_within_bounds(step_r, step_c):
                    continue
                target = board.getPiece(step_r, step_c)
                if target.color == self.color or (step_r, step_c) in jumped:
                    continue
                land_r, land_c = step_r + dr, step_c + dc
                if not board._is_within_bounds(land_r, land_c):
                    continue
                landing = (land_r, land_c)
                if board.getPiece(land_r, land_c) is not None or landing in landed or landing in slid:
                    continue
                step_weight = weight + CAPTURE_WEIGHT + (KING_CAPTURE_BONUS if target.is_king else 0)
                move = Move(
                    start=origin,
                    end=landing,
                    weight=step_weight,
                    captured=target.snapshot(),
                    previous=previous,
                )
                landed.add(landing)
                capture_moves.append(move)
                dfs(land_r, land_c, step_weight, move, jumped | {(step_r, step_c)})

        dfs(self.row, self.col, 0, None, frozenset())
        return capture_moves


class Man(Piece):
    def __init__(self, color: Color, row: int, col: int, *, identifier: Optional[int] = None):
        super().__init__(color, row, col, identifier=identifier)

    def promote(self) -> King:
        return King(self.color, self.row, self.col, identifier=self.id)

    def getCopy(self) -> "Piece":
        return Man(self.color, self.row, self.col, identifier=self.id)

    def basicMoves(self, board: "Board") -> MoveList:
        origin = self.position
        moves: MoveList = []
        forward = FORWARD[self.color]
        last_row = board.promotion_row(self.color)
        for dc in (-1, 1):
            new_r, new_c = self.row + forward, self.col + dc
            if board._is_within_bounds(new_r, new_c) and board.getPiece(new_r, new_c) is None:
                weight = PROMOTION_BONUS if new_r == last_row else 0
                moves.append(Move(start=origin, end=(new_r, new_c), weight=weight))
        return moves

    def captureMoves(self, board: "Board") -> MoveList:
        origin = self.position
        capture_moves: MoveList = []
        landed: set[Coordinate] = set()
        last_row = board.promotion_row(self.color)

        def dfs(
            r: int,
            c: int,
            weight: int,
            previous: Optional[Move],
            jumped: frozenset[Coordinate],
        ) -> None:
            for dr, dc in DIRECTIONS:
                mid_r, mid_c = r + dr, c + dc
                end_r, end_c = r + 2 * dr, c + 2 * dc
                if not board._is_within_bounds(end_r, end_c):
                    continue
                target = board.getPiece(mid_r, mid_c)
                if target is None or target.color == self.color or (mid_r, mid_c) in jumped:
                    continue
                landing = (end_r, end_c)
                if board.getPiece(end_r, end_c) is not None or landing in landed:
                    continue
                step_weight = weight + CAPTURE_WEIGHT + (KING_CAPTURE_BONUS if target.is_king else 0)
                bonus = PROMOTION_BONUS if end_r == last_row else 0
                move = Move(
                    start=origin,
                    end=landing,
                    weight=step_weight + bonus,
                    captured=target.snapshot(),
                    previous=previous,
                )
                landed.add(landing)
                capture_moves.append(move)
                dfs(end_r, end_c, step_weight, move, jumped | {(mid_r, mid_c)})

        dfs(self.row, self.col, 0, None, frozenset())
        return capture_moves
