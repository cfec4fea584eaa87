"""
Orchestration of communication from the presentation layer to the business logic (and the reverse direction).

Every call takes the current GameSession and, on success, hands back a new one.
On failure the exception propagates and the caller simply keeps using the session it already had.
"""

import logging
from typing import Optional

from src.api.models import (
    LegalDestinationsResponse,
    MoveRequest,
    SelectPieceRequest,
    SquareResponse,
)
from src.checkers.game import GameController
from src.checkers.square import Square
from src.core.models import GameSession
from src.core.shared_types import Color

logger = logging.getLogger(__name__)


class CheckersService:
    """Orchestration of layers for a checkers game."""

    def new_game(self) -> GameSession:
        """Standard initial setup."""
        session = GameController.new_game().to_session()
        logger.info("New game started, %s to move", session.turn_color)
        return session

    def legal_destinations(self, session: GameSession) -> LegalDestinationsResponse:
        """Squares to highlight for the selected piece (forced capture filtering already applied)."""
        game = GameController.from_session(session)
        return LegalDestinationsResponse(
            turn_color=game.turn_color,
            phase=game.phase,
            selected_piece_id=game.selected_piece_id,
            destinations=[
                SquareResponse(row=square.row, col=square.col)
                for square in game.legal_destinations()
            ],
        )

    def select_piece(
        self, session: GameSession, request: SelectPieceRequest
    ) -> GameSession:
        """Player clicked on one of their pieces."""
        game = GameController.from_session(session)
        game.select_piece(request.piece_id)
        return game.to_session()

    def clear_selection(self, session: GameSession) -> GameSession:
        """Player deselected their piece."""
        game = GameController.from_session(session)
        game.clear_selection()
        return game.to_session()

    def apply_move(self, session: GameSession, request: MoveRequest) -> GameSession:
        """Player clicked on a destination square. All state changes are applied before returning."""
        game = GameController.from_session(session)
        game.apply_move(Square(request.row, request.col))
        return game.to_session()

    def is_game_over(self, session: GameSession) -> bool:
        return session.ended

    def get_winner(self, session: GameSession) -> Optional[Color]:
        return Color(session.winner) if session.winner is not None else None

    def board_diagram(self, session: GameSession) -> str:
        """Read-only rendering of the position, for whoever draws the board."""
        return GameController.from_session(session).board.to_diagram()
