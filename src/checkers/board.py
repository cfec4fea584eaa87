"""The Game board holds which piece stands where. Pure data: the rules live in moves.py / captures.py / victory.py"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.checkers.pieces import (
    DIAGRAM_TO_COLOR,
    STARTING_ROWS,
    Color,
    Piece,
)
from src.checkers.square import BOARD_DIMENSIONS, Square, playable_squares
from src.core.exceptions import InvalidDiagramError, InvalidMove, UnknownPiece

logger = logging.getLogger(__name__)


@dataclass
class Board:
    position: dict[Square, Piece] = field(default_factory=dict)
    roster: dict[int, Piece] = field(default_factory=dict)
    captured: set[int] = field(default_factory=set)

    @classmethod
    def starting_position(cls) -> Self:
        """Three rows of pieces per side, on playable squares only. Ids are handed out in reading order."""
        board = cls()
        next_id = 1
        for square in playable_squares():
            for color, rows in STARTING_ROWS.items():
                if square.row in rows:
                    board.place_piece(Piece(next_id, color, square), square)
                    next_id += 1
        return board

    @classmethod
    def from_diagram(cls, diagram: str) -> Self:
        """Construct a board from a diagram (the checkers equivalent of the position part of a FEN string).

        Rows are separated by slashes and read from row 0 (top, dark's home side) down to row 7.
        ex. the standard starting position:
        1d1d1d1d/d1d1d1d1/1d1d1d1d/8/8/l1l1l1l1/1l1l1l1l/l1l1l1l1
        means:
        * 'd' is a dark piece, 'l' is a light piece
        * a number denotes that many consecutive empty squares
        * pieces may only be placed on playable squares (row + col odd)

        Piece ids are assigned in reading order, starting at 1.
        """
        rows = diagram.strip().split("/")
        if len(rows) != BOARD_DIMENSIONS[0]:
            raise InvalidDiagramError(
                f"Diagram must have {BOARD_DIMENSIONS[0]} rows, got {len(rows)}: {diagram!r}"
            )

        board = cls()
        next_id = 1
        for row, diagram_row in enumerate(rows):
            col = 0
            for character in diagram_row:
                if character.isdigit():
                    col += int(character)
                    continue
                if character not in DIAGRAM_TO_COLOR:
                    raise InvalidDiagramError(
                        f"Unknown character {character!r} in diagram row {row}."
                    )
                square = Square(row, col)
                if not (square.is_within_bounds() and square.is_playable()):
                    raise InvalidDiagramError(
                        f"Piece on square {square.to_notation()} is not on a playable square."
                    )
                board.place_piece(
                    Piece(next_id, DIAGRAM_TO_COLOR[character], square), square
                )
                next_id += 1
                col += 1
            if col != BOARD_DIMENSIONS[1]:
                raise InvalidDiagramError(
                    f"Diagram row {row} describes {col} squares instead of {BOARD_DIMENSIONS[1]}."
                )
        return board

    def to_diagram(self) -> str:
        """Rows are separated by slashes in the diagram."""
        return "/".join(self._row_to_diagram(row) for row in range(BOARD_DIMENSIONS[0]))

    def _row_to_diagram(self, row: int) -> str:
        characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.piece_at(Square(row, col))
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                characters.append(str(empty_count))
                empty_count = 0
            characters.append(piece.to_diagram())

        if empty_count > 0:
            characters.append(str(empty_count))
        return "".join(characters)

    # --- QUERIES ---
    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def piece(self, piece_id: int) -> Piece:
        """Look up an active piece by id"""
        if piece_id not in self.roster or piece_id in self.captured:
            raise UnknownPiece(f"No active piece with id {piece_id}.")
        return self.roster[piece_id]

    def is_occupied(self, square: Square) -> bool:
        return square in self.position

    def active_pieces(self, color: Optional[Color] = None) -> list[Piece]:
        """Pieces still on the board (optionally of one color), sorted by id"""
        return [
            piece
            for piece_id, piece in sorted(self.roster.items())
            if piece_id not in self.captured
            and (color is None or piece.color == color)
        ]

    def count_by_color(self, color: Color) -> int:
        return len(self.active_pieces(color))

    # --- MUTATIONS ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        """Only used while setting up a board"""
        self._assert_can_land(square)
        if piece.id in self.roster:
            raise InvalidMove(f"A piece with id {piece.id} was already placed.")
        piece.position = square
        self.position[square] = piece
        self.roster[piece.id] = piece

    def move_piece(self, piece_id: int, to: Square) -> None:
        """Update the position on the board"""
        piece = self.piece(piece_id)
        self._assert_can_land(to)
        del self.position[piece.position]
        piece.position = to
        self.position[to] = piece

    def remove_piece(self, piece_id: int) -> None:
        """A captured piece leaves the board. Removing it a second time is a consistency error."""
        piece = self.piece(piece_id)
        del self.position[piece.position]
        self.captured.add(piece_id)
        logger.debug(
            "Removed %s piece %d from %s",
            piece.color,
            piece_id,
            piece.position.to_notation(),
        )

    def _assert_can_land(self, square: Square) -> None:
        if not square.is_within_bounds():
            raise InvalidMove(f"Square {square.to_notation()} is off the board.")
        if not square.is_playable():
            raise InvalidMove(f"Square {square.to_notation()} is not playable.")
        if self.is_occupied(square):
            raise InvalidMove(f"Square {square.to_notation()} is already occupied.")
