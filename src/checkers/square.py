"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# (rows, columns). Only 8x8 is supported, but keep the number in one place
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True, order=True)
class Square:
    row: int
    col: int

    def to_notation(self) -> str:
        return f"{self.row},{self.col}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def is_playable(self) -> bool:
        """Only one of the two checkerboard colors ever holds pieces: those where row + col is odd"""
        return (self.row + self.col) % 2 == 1

    def shifted(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)


def playable_squares() -> list[Square]:
    """All squares a piece may stand on, in reading order."""
    return [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
        if Square(row, col).is_playable()
    ]
