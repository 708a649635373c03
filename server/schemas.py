from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from draughts.config import MIN_BOARD_SIZE, validate_board_size

DifficultyLabel = Literal["easy", "medium", "hard"]


class CoordinateModel(BaseModel):
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)


class MoveRequest(BaseModel):
    start: CoordinateModel
    end: CoordinateModel = Field(..., description="Destination square; a capture chain is picked by where it ends.")


class PlayerConfigPayload(BaseModel):
    type: Optional[Literal["human", "minimax"]] = None
    difficulty: Optional[DifficultyLabel] = None
    depth: Optional[int] = Field(default=None, ge=1, le=8)


class ConfigRequest(BaseModel):
    white: Optional[PlayerConfigPayload] = None
    black: Optional[PlayerConfigPayload] = None


class ResetRequest(BaseModel):
    boardSize: Optional[int] = Field(default=None, ge=MIN_BOARD_SIZE, le=26)

    @field_validator("boardSize")
    @classmethod
    def _even_size(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return value
        return validate_board_size(value)


class AIMoveRequest(BaseModel):
    color: Optional[Literal["white", "black"]] = None
    difficulty: Optional[DifficultyLabel] = None
    depth: Optional[int] = Field(default=None, ge=1, le=8)
    timeLimitMs: Optional[int] = Field(default=None, ge=1)
    persist: bool = True
