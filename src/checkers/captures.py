"""Forced capture rule: a player holding a capturing piece may not make a non-capturing move this turn."""

from src.checkers.board import Board
from src.checkers.moves import capture_moves
from src.checkers.pieces import Color


def any_capture_available(board: Board, color: Color) -> bool:
    """True if at least one active piece of `color` can capture something"""
    return any(capture_moves(board, piece) for piece in board.active_pieces(color))
