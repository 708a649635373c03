from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, Optional

from draughts.board import Outcome, TurnRecord
from draughts.game import Game
from draughts.move import Capture, Move
from draughts.pieces import Color, Piece


def _square(coord: tuple[int, int]) -> dict[str, int]:
    row, col = coord
    return {"row": row, "col": col}


def serialize_piece(piece: Piece) -> dict[str, Any]:
    return {
        "id": piece.id,
        "row": piece.row,
        "col": piece.col,
        "color": piece.color.value,
        "isKing": piece.is_king,
    }


def serialize_capture(capture: Capture) -> dict[str, Any]:
    return {
        **_square(capture.position),
        "color": capture.color.value,
        "isKing": capture.is_king,
    }


def serialize_move(move: Move) -> dict[str, Any]:
    return {
        "start": _square(move.start),
        "end": _square(move.end),
        "path": [_square(step) for step in move.as_path()],
        "captures": [serialize_capture(capture) for capture in move.captures],
        "isCapture": move.is_capture,
        "weight": move.weight,
    }


def serialize_moves(moves: Iterable[Move]) -> list[dict[str, Any]]:
    return [serialize_move(move) for move in moves]


def serialize_outcome(outcome: Optional[Outcome]) -> Optional[dict[str, str]]:
    if outcome is None:
        return None
    return {
        "winner": outcome.winner.value,
        "loser": outcome.loser.value,
        "reason": outcome.reason.value,
    }


def serialize_turn(index: int, record: TurnRecord) -> dict[str, Any]:
    return {
        "index": index,
        "color": record.color.value,
        "move": serialize_move(record.move),
        "removed": [serialize_piece(piece) for piece in record.captured],
        "promoted": record.promoted,
        "outcome": serialize_outcome(record.outcome),
    }


def serialize_game(game: Game, player_settings: dict[Color, dict[str, Any]]) -> dict[str, Any]:
    pieces = [serialize_piece(piece) for piece in game.board.getAllPieces()]
    total_counts = Counter(piece["color"] for piece in pieces)
    king_counts = Counter(piece["color"] for piece in pieces if piece["isKing"])

    forced = game.forcedCaptures() if game.outcome is None else []
    last_record = game.history[-1] if game.history else None

    return {
        "boardSize": game.board.boardSize,
        "turn": game.current_player.value,
        "winner": game.winner.value if game.winner else None,
        "outcome": serialize_outcome(game.outcome),
        "pieces": pieces,
        "pieceCounts": {
            color.value: {
                "total": total_counts.get(color.value, 0),
                "kings": king_counts.get(color.value, 0),
            }
            for color in (Color.WHITE, Color.BLACK)
        },
        "mandatoryCapture": bool(forced),
        "forcedMoves": serialize_moves(forced),
        "moveCount": len(game.history),
        "lastMove": serialize_move(last_record.move) if last_record else None,
        "players": {
            "white": game.getPlayer(Color.WHITE).describe(),
            "black": game.getPlayer(Color.BLACK).describe(),
        },
        "playerConfig": {
            "white": dict(player_settings[Color.WHITE]),
            "black": dict(player_settings[Color.BLACK]),
        },
    }
