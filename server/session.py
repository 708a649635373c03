from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Mapping, Optional

from ai.agents import create_minimax_controller
from ai.minimax import select_move
from draughts.config import Difficulty, GameConfig
from draughts.game import Game
from draughts.pieces import Color
from draughts.player import PlayerController

from .schemas import AIMoveRequest, ConfigRequest, MoveRequest, ResetRequest
from .serializers import serialize_game, serialize_moves, serialize_turn

logger = logging.getLogger(__name__)

PlayerSettings = dict[str, Any]


def _parse_color(label: str) -> Color:
    try:
        return Color(label.lower())
    except ValueError as exc:
        raise ValueError(f"Unknown side '{label}', expected 'white' or 'black'.") from exc


def _merged(settings: PlayerSettings, overrides: Mapping[str, Any]) -> PlayerSettings:
    """Copy of ``settings`` with every non-null override applied."""
    merged = dict(settings)
    merged.update({key: value for key, value in overrides.items() if value is not None})
    return merged


class GameSession:
    """One live game shared by all HTTP requests; every call holds the lock."""

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.lock = Lock()
        self.config = config or GameConfig()
        self.game = Game(board_size=self.config.board_size)
        self.player_settings: dict[Color, PlayerSettings] = {
            Color.WHITE: dict(self.config.white),
            Color.BLACK: dict(self.config.black),
        }
        self._install_controllers()

    def serialize(self) -> dict[str, Any]:
        with self.lock:
            return self._state()

    def reset(self, payload: Optional[ResetRequest] = None) -> dict[str, Any]:
        with self.lock:
            self.game.reset(board_size=payload.boardSize if payload else None)
            self._install_controllers()
            logger.info("Session reset to a %dx%d board.", self.game.board_size, self.game.board_size)
            return self._state()

    def configure_players(self, payload: ConfigRequest) -> dict[str, Any]:
        with self.lock:
            changes = payload.model_dump(exclude_none=True)
            for label, overrides in changes.items():
                color = _parse_color(label)
                settings = _merged(self.player_settings[color], overrides)
                controller = self._build_controller(color, settings)
                self.player_settings[color] = settings
                self.game.setPlayer(color, controller)
                logger.info("%s is now played by %s.", color.value, controller.name)
            return self._state()

    def get_valid_moves(self, row: int, col: int) -> dict[str, Any]:
        with self.lock:
            piece = self.game.board.getPiece(row, col)
            if piece is None:
                raise ValueError(f"No piece at row {row}, col {col}.")
            if piece.color != self.game.current_player:
                raise ValueError(f"It is {self.game.current_player.value}'s turn.")
            return {
                "piece": {"row": row, "col": col},
                "moves": serialize_moves(self.game.moves_for(row, col)),
                "forced": serialize_moves(self.game.forcedCaptures()),
            }

    def make_move(self, payload: MoveRequest) -> dict[str, Any]:
        with self.lock:
            self._require_running()
            start = (payload.start.row, payload.start.col)
            end = (payload.end.row, payload.end.col)
            size = self.game.board.boardSize
            for row, col in (start, end):
                if row >= size or col >= size:
                    raise ValueError(f"Square ({row}, {col}) is outside the {size}x{size} board.")
            self.game.move_to(start, end)
            return self._state()

    def run_ai_move(self, payload: AIMoveRequest) -> dict[str, Any]:
        with self.lock:
            self._require_running()
            side = self.game.current_player
            if payload.color is not None and _parse_color(payload.color) != side:
                raise ValueError(f"Cannot search for {payload.color}, it is {side.value}'s turn.")

            settings = _merged(
                self.player_settings[side],
                {"difficulty": payload.difficulty, "depth": payload.depth},
            )
            decision = select_move(
                self.game,
                Difficulty(settings.get("difficulty") or Difficulty.MEDIUM),
                settings.get("depth"),
                time_limit_ms=payload.timeLimitMs,
            )
            if decision is None:
                raise RuntimeError(f"{side.value} has no legal move.")

            if payload.persist:
                settings["type"] = "minimax"
                self.game.setPlayer(side, self._build_controller(side, settings))
                self.player_settings[side] = settings
            self.game.makeMove(*decision)
            return self._state()

    def events(self, since: int = 0) -> dict[str, Any]:
        with self.lock:
            history = self.game.history
            first = max(0, since)
            return {
                "events": [serialize_turn(index, history[index]) for index in range(first, len(history))],
                "next": len(history),
            }

    def _state(self) -> dict[str, Any]:
        return serialize_game(self.game, self.player_settings)

    def _require_running(self) -> None:
        if self.game.outcome is not None:
            raise RuntimeError("The game is already over.")

    def _install_controllers(self) -> None:
        for color, settings in self.player_settings.items():
            self.game.setPlayer(color, self._build_controller(color, settings))

    def _build_controller(self, color: Color, settings: PlayerSettings) -> PlayerController:
        name = color.value.capitalize()
        kind = settings.get("type", "human")
        if kind == "human":
            return PlayerController.human(f"{name} Human")
        if kind == "minimax":
            difficulty = Difficulty(settings.get("difficulty") or Difficulty.MEDIUM)
            return create_minimax_controller(f"{name} Minimax", difficulty, settings.get("depth"))
        raise ValueError(f"Unsupported player type '{kind}'.")
