from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, TYPE_CHECKING, Tuple

from .config import Difficulty

if TYPE_CHECKING:
    from .game import Game
    from .move import Move
    from .pieces import Piece

MoveDecision = Tuple["Piece", "Move"]
MovePolicy = Callable[["Game"], Optional[MoveDecision]]


class PlayerKind(str, Enum):
    HUMAN = "human"
    MINIMAX = "minimax"


@dataclass
class PlayerController:
    """Who plays one colour: a human driven by input events, or a search policy."""

    kind: PlayerKind
    name: str
    policy: Optional[MovePolicy] = None
    difficulty: Optional[Difficulty] = None
    depth: Optional[int] = None

    @property
    def is_human(self) -> bool:
        return self.policy is None or self.kind == PlayerKind.HUMAN

    def select_move(self, game: "Game") -> Optional[MoveDecision]:
        if self.policy is None:
            return None
        return self.policy(game)

    def describe(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "depth": self.depth,
        }

    @classmethod
    def human(cls, name: str) -> "PlayerController":
        return cls(kind=PlayerKind.HUMAN, name=name)
