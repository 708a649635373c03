from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .move import Move


class IllegalMoveError(ValueError):
    """The requested move is not playable for the acting side right now."""


class ForcedCaptureViolation(IllegalMoveError):
    def __init__(self, forced: Iterable["Move"], message: str = "A capture is available and must be played.") -> None:
        super().__init__(message)
        self.forced: tuple["Move", ...] = tuple(forced)


class OutOfBoundsError(IndexError):
    def __init__(self, row: int, col: int, size: int) -> None:
        super().__init__(f"Square ({row}, {col}) is outside a {size}x{size} board.")
        self.row = row
        self.col = col
        self.size = size
