from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

DEFAULT_BOARD_SIZE = 10
MIN_BOARD_SIZE = 8


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


DIFFICULTY_DEPTHS: dict[Difficulty, int] = {
    Difficulty.EASY: 1,
    Difficulty.MEDIUM: 2,
    Difficulty.HARD: 3,
}


def validate_board_size(size: int) -> int:
    if size < MIN_BOARD_SIZE or size % 2:
        raise ValueError(f"Board size must be an even integer >= {MIN_BOARD_SIZE}, got {size}.")
    return size


def depth_for(difficulty: Difficulty, depth: Optional[int] = None) -> int:
    if depth is None:
        return DIFFICULTY_DEPTHS[Difficulty(difficulty)]
    if depth < 0:
        raise ValueError("Depth must not be negative.")
    return depth


def default_player_settings() -> dict[str, Any]:
    return {
        "type": "human",
        "difficulty": Difficulty.MEDIUM.value,
        "depth": None,
    }


@dataclass(frozen=True)
class GameConfig:
    board_size: int = DEFAULT_BOARD_SIZE
    white: dict[str, Any] = field(default_factory=default_player_settings)
    black: dict[str, Any] = field(default_factory=default_player_settings)

    def __post_init__(self) -> None:
        validate_board_size(self.board_size)
        for settings in (self.white, self.black):
            Difficulty(settings.get("difficulty", Difficulty.MEDIUM.value))
            depth = settings.get("depth")
            if depth is not None and depth < 0:
                raise ValueError("Depth must not be negative.")
