from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

if TYPE_CHECKING:
    from .pieces import Color

Coordinate = tuple[int, int]


@dataclass(frozen=True, slots=True)
class Capture:
    """Snapshot of a jumped piece, taken when the move was generated."""

    position: Coordinate
    color: "Color"
    is_king: bool


@dataclass(frozen=True, slots=True)
class Move:
    start: Coordinate
    end: Coordinate
    weight: int = 0
    captured: Optional[Capture] = None
    previous: Optional["Move"] = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def chain(self) -> tuple["Move", ...]:
        """Every step of the turn, oldest first."""
        steps: list[Move] = []
        node: Optional[Move] = self
        while node is not None:
            steps.append(node)
            node = node.previous
        steps.reverse()
        return tuple(steps)

    def iter_captures(self) -> Iterator[Capture]:
        node: Optional[Move] = self
        while node is not None and node.captured is not None:
            yield node.captured
            node = node.previous

    @property
    def captures(self) -> tuple[Capture, ...]:
        return tuple(reversed(tuple(self.iter_captures())))

    @property
    def steps(self) -> tuple[Coordinate, ...]:
        return tuple(step.end for step in self.chain())

    def as_path(self) -> tuple[Coordinate, ...]:
        return (self.start, *self.steps)

    def __str__(self) -> str:
        connector = " x " if self.is_capture else " - "
        return connector.join(f"{row},{col}" for row, col in self.as_path())
