"""
Movement and capturing rules of a single piece

Two kinds of move exist:
* a Step: one square diagonally forward onto an empty square.
* a Capture: jump over an adjacent opposing piece (in any of the four diagonal directions) onto the empty square behind it.

Which of these a player may actually choose (forced captures, chains) is decided later by the Game.
"""

from dataclasses import dataclass
from typing import Iterable, Protocol

from src.checkers.pieces import Piece
from src.checkers.square import Square

Vector = tuple[int, int]

DIAGONALS: list[Vector] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece_at(self, square: Square) -> Piece | None: ...


@dataclass(frozen=True)
class Step:
    """Simple diagonal advance, nothing gets captured"""

    frm: Square
    to: Square

    def to_notation(self) -> str:
        return f"{self.frm.to_notation()}-{self.to.to_notation()}"


@dataclass(frozen=True)
class Capture:
    """Jump over the piece standing on `captured`, landing on `to`"""

    frm: Square
    to: Square
    captured: Square

    def to_notation(self) -> str:
        return f"{self.frm.to_notation()}x{self.to.to_notation()}"


Move = Step | Capture


def step_moves(board: Board, piece: Piece) -> set[Move]:
    """The two forward diagonals, if they are on the board and empty"""
    moves: set[Move] = set()
    for d_col in (-1, 1):
        target = piece.position.shifted(piece.forward, d_col)
        if target.is_within_bounds() and board.piece_at(target) is None:
            moves.add(Step(frm=piece.position, to=target))
    return moves


def capture_moves(board: Board, piece: Piece) -> set[Move]:
    """
    Captures go in all four directions (not just forward).
    Only the adjacent square can be jumped, and the square right behind it must be empty: no flying captures.
    """
    moves: set[Move] = set()
    for d_row, d_col in DIAGONALS:
        middle = piece.position.shifted(d_row, d_col)
        if not middle.is_within_bounds():
            continue

        jumped_piece = board.piece_at(middle)
        if jumped_piece is None or jumped_piece.color == piece.color:
            continue

        landing = middle.shifted(d_row, d_col)
        if landing.is_within_bounds() and board.piece_at(landing) is None:
            moves.add(Capture(frm=piece.position, to=landing, captured=middle))
    return moves


def generate_moves(board: Board, piece: Piece) -> set[Move]:
    """All moves the piece could make if it were the only piece allowed to move. Empty set if it is stuck."""
    return step_moves(board, piece) | capture_moves(board, piece)


def sort_moves(moves: Iterable[Move]) -> list[Move]:
    """Moves ordered by destination (row, col), for callers that need a deterministic order"""
    return sorted(moves, key=lambda move: (move.to.row, move.to.col))
