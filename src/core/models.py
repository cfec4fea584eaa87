"""
Boundary layer data model(s).

These objects are what the Service hands to the presentation layer and receives back on the next action.
A snapshot is never mutated: every controller operation returns a fresh one.
(Decouples the domain objects (Board, Piece, ...) from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import Phase

# Type aliases to make GameSession easier to read
PieceColor = str
PhaseName = str
MoveNotation = str


@dataclass(frozen=True)
class PieceRecord:
    """A single active piece: its stable id, its color and where it stands."""

    id: int
    color: PieceColor
    row: int
    col: int


@dataclass(frozen=True)
class GameSession:
    """Transport-safe, immutable representation of a checkers game used between Service and Game layers."""

    turn_color: PieceColor
    phase: PhaseName
    pieces: tuple[PieceRecord, ...]
    captured_piece_ids: tuple[int, ...] = ()
    selected_piece_id: Optional[int] = None
    chain_piece_id: Optional[int] = None
    winner: Optional[PieceColor] = None
    move_history: tuple[MoveNotation, ...] = ()

    @property
    def ended(self) -> bool:
        return self.phase == Phase.GAME_OVER
