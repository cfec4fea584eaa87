"""Defines the checkers pieces and the per-color constants of the starting setup"""

from dataclasses import dataclass

from src.checkers.square import Square
from src.core.shared_types import Color

# Dark starts at the top of the board and moves down, light starts at the bottom and moves up.
STARTING_ROWS: dict[Color, range] = {
    Color.DARK: range(0, 3),
    Color.LIGHT: range(5, 8),
}

FORWARD_DIRECTION: dict[Color, int] = {
    Color.DARK: 1,
    Color.LIGHT: -1,
}

FIRST_TO_MOVE = Color.LIGHT

DIAGRAM_TO_COLOR: dict[str, Color] = {
    "d": Color.DARK,
    "l": Color.LIGHT,
}

COLOR_TO_DIAGRAM: dict[Color, str] = {
    value: key for key, value in DIAGRAM_TO_COLOR.items()
}


def opponent(color: Color) -> Color:
    return Color.LIGHT if color == Color.DARK else Color.DARK


@dataclass
class Piece:
    id: int
    color: Color
    position: Square

    @property
    def forward(self) -> int:
        return FORWARD_DIRECTION[self.color]

    def to_diagram(self) -> str:
        return COLOR_TO_DIAGRAM[self.color]
