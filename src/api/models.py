"""Requests and Response models exchanged with the presentation layer"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from src.checkers.square import BOARD_DIMENSIONS
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Phase


# --- REQUEST MODELS ---
class SelectPieceRequest(BaseModel):
    piece_id: int

    @field_validator("piece_id")
    @classmethod
    def validate_piece_id(cls, value: int) -> int:
        # ids are handed out starting at 1
        if value < 1:
            raise InvalidRequestError(f"Piece id must be positive, got {value}.")
        return value


class MoveRequest(BaseModel):
    """Destination square of the selected piece"""

    row: int
    col: int

    @field_validator("row")
    @classmethod
    def validate_row(cls, value: int) -> int:
        if not 0 <= value < BOARD_DIMENSIONS[0]:
            raise InvalidRequestError(
                f"Row {value} is off the board (0 - {BOARD_DIMENSIONS[0] - 1})."
            )
        return value

    @field_validator("col")
    @classmethod
    def validate_col(cls, value: int) -> int:
        if not 0 <= value < BOARD_DIMENSIONS[1]:
            raise InvalidRequestError(
                f"Column {value} is off the board (0 - {BOARD_DIMENSIONS[1] - 1})."
            )
        return value


# --- RESPONSE MODELS ---
class SquareResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    col: int


class LegalDestinationsResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    turn_color: Color
    phase: Phase
    selected_piece_id: Optional[int]
    destinations: list[SquareResponse]
