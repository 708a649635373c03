from __future__ import annotations

import random
from typing import Optional

from draughts.config import Difficulty, depth_for
from draughts.game import Game
from draughts.player import PlayerController, PlayerKind

from .minimax import select_move as minimax_select

__all__ = ["create_minimax_controller"]


def create_minimax_controller(
    name: str,
    difficulty: Difficulty = Difficulty.MEDIUM,
    depth: Optional[int] = None,
    *,
    rng: Optional[random.Random] = None,
    time_limit_ms: Optional[int] = None,
) -> PlayerController:
    difficulty = Difficulty(difficulty)
    depth = depth_for(difficulty, depth)

    def _policy(game: Game):
        return minimax_select(
            game,
            difficulty,
            depth,
            rng=rng,
            time_limit_ms=time_limit_ms,
        )

    return PlayerController(
        kind=PlayerKind.MINIMAX,
        name=f"{name} ({difficulty.value}, d={depth})",
        policy=_policy,
        difficulty=difficulty,
        depth=depth,
    )
