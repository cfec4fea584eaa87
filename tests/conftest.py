"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.checkers.board import Board
from src.checkers.pieces import Piece
from src.checkers.square import Square
from src.core.shared_types import Color

Placement = tuple[Color, int, int]


@pytest.fixture
def board_with_pieces() -> Callable[..., Board]:
    """Call the inner function with (color, row, col) placements. Ids are handed out in the order given, starting at 1."""

    def _create_board(*placements: Placement) -> Board:
        board = Board()
        for piece_id, (color, row, col) in enumerate(placements, start=1):
            square = Square(row, col)
            board.place_piece(Piece(piece_id, color, square), square)
        return board

    return _create_board
