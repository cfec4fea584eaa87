"""Checks for ending the game"""

from typing import Optional

from src.checkers.board import Board
from src.checkers.pieces import Color, opponent


def evaluate(board: Board) -> Optional[Color]:
    """
    The winner, if any.
    ---

    A color loses the instant it has no pieces left, and the other color wins.

    NOTE: a player with pieces but without a legal move (stalemate) is not checked for. The game simply continues.
    """
    for color in Color:
        if board.count_by_color(color) == 0:
            return opponent(color)
    return None
