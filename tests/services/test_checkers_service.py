"""Unit tests for src/services/checkers_service.py"""

from typing import Callable

import pytest

from src.checkers.board import Board
from src.checkers.game import GameController
from src.core.exceptions import (
    GameAlreadyOver,
    GameError,
    IllegalDestination,
    SelectionRejected,
)
from src.core.models import GameSession
from src.core.shared_types import Color, Phase
from src.services.checkers_service import (
    CheckersService,
    LegalDestinationsResponse,
    MoveRequest,
    SelectPieceRequest,
    SquareResponse,
)

STARTING_DIAGRAM = "1d1d1d1d/d1d1d1d1/1d1d1d1d/8/8/l1l1l1l1/1l1l1l1l/l1l1l1l1"

# In the starting position ids are handed out in reading order: dark 1-12, light 13-24.
LIGHT_CORNER_PIECE = 13  # on (5,0)
DARK_PIECE = 9  # on (2,1)


@pytest.fixture
def service() -> CheckersService:
    return CheckersService()


@pytest.fixture
def session_from_board() -> Callable[[Board, Color], GameSession]:
    def _create_session(board: Board, turn_color: Color) -> GameSession:
        return GameController(board=board, turn_color=turn_color).to_session()

    return _create_session


# --- SERVICE - NEW GAME ----
def test_new_game(service: CheckersService) -> None:
    session = service.new_game()
    assert isinstance(session, GameSession)
    assert session.turn_color == Color.LIGHT
    assert session.phase == Phase.AWAITING_SELECTION
    assert len(session.pieces) == 24
    assert session.captured_piece_ids == ()
    assert session.move_history == ()
    assert not service.is_game_over(session)
    assert service.get_winner(session) is None
    assert service.board_diagram(session) == STARTING_DIAGRAM


def test_ids_in_new_game(service: CheckersService) -> None:
    session = service.new_game()
    by_id = {piece.id: piece for piece in session.pieces}
    assert (by_id[LIGHT_CORNER_PIECE].row, by_id[LIGHT_CORNER_PIECE].col) == (5, 0)
    assert by_id[LIGHT_CORNER_PIECE].color == Color.LIGHT
    assert (by_id[DARK_PIECE].row, by_id[DARK_PIECE].col) == (2, 1)
    assert by_id[DARK_PIECE].color == Color.DARK


# --- SERVICE - SELECTION ----
def test_select_piece_returns_new_session(service: CheckersService) -> None:
    session = service.new_game()
    selected = service.select_piece(session, SelectPieceRequest(piece_id=LIGHT_CORNER_PIECE))

    assert selected is not session
    assert selected.phase == Phase.PIECE_SELECTED
    assert selected.selected_piece_id == LIGHT_CORNER_PIECE
    # the original snapshot is untouched
    assert session.phase == Phase.AWAITING_SELECTION
    assert session.selected_piece_id is None


def test_legal_destinations(service: CheckersService) -> None:
    session = service.new_game()
    assert service.legal_destinations(session).destinations == []

    selected = service.select_piece(session, SelectPieceRequest(piece_id=LIGHT_CORNER_PIECE))
    response = service.legal_destinations(selected)
    assert isinstance(response, LegalDestinationsResponse)
    assert response.turn_color == Color.LIGHT
    assert response.phase == Phase.PIECE_SELECTED
    assert response.selected_piece_id == LIGHT_CORNER_PIECE
    assert response.destinations == [SquareResponse(row=4, col=1)]


def test_select_wrong_color(service: CheckersService) -> None:
    session = service.new_game()
    with pytest.raises(SelectionRejected):
        service.select_piece(session, SelectPieceRequest(piece_id=DARK_PIECE))


def test_clear_selection(service: CheckersService) -> None:
    session = service.new_game()
    selected = service.select_piece(session, SelectPieceRequest(piece_id=LIGHT_CORNER_PIECE))
    cleared = service.clear_selection(selected)
    assert cleared.phase == Phase.AWAITING_SELECTION
    assert cleared.selected_piece_id is None


# --- SERVICE - MOVES ----
def test_apply_move(service: CheckersService) -> None:
    session = service.new_game()
    selected = service.select_piece(session, SelectPieceRequest(piece_id=LIGHT_CORNER_PIECE))
    moved = service.apply_move(selected, MoveRequest(row=4, col=1))

    assert moved.turn_color == Color.DARK
    assert moved.phase == Phase.AWAITING_SELECTION
    assert moved.move_history == ("5,0-4,1",)
    assert service.board_diagram(moved) == (
        "1d1d1d1d/d1d1d1d1/1d1d1d1d/8/1l6/2l1l1l1/1l1l1l1l/l1l1l1l1"
    )
    # the earlier snapshot still describes the position before the move
    assert service.board_diagram(selected) == STARTING_DIAGRAM


def test_apply_move_illegal_destination(service: CheckersService) -> None:
    session = service.new_game()
    selected = service.select_piece(session, SelectPieceRequest(piece_id=LIGHT_CORNER_PIECE))
    with pytest.raises(IllegalDestination):
        service.apply_move(selected, MoveRequest(row=3, col=2))


def test_exceptions_propagate(service: CheckersService) -> None:
    """Any top level custom exception is raised (specific exception types are responsibility of the domain layer)"""
    session = service.new_game()
    with pytest.raises(GameError):
        service.apply_move(session, MoveRequest(row=4, col=1))


def test_play_until_victory(
    service: CheckersService,
    session_from_board: Callable[[Board, Color], GameSession],
) -> None:
    """Dark loses its last two pieces in one chain capture, driven through the service"""
    board = Board.from_diagram("8/8/5d2/8/3d4/2l5/8/l7")
    session = session_from_board(board, Color.LIGHT)
    # ids in reading order: dark (2,5) = 1, dark (4,3) = 2, light (5,2) = 3, light (7,0) = 4

    session = service.select_piece(session, SelectPieceRequest(piece_id=3))
    session = service.apply_move(session, MoveRequest(row=3, col=4))
    assert session.phase == Phase.CHAIN_CAPTURE_IN_PROGRESS
    assert session.chain_piece_id == 3
    assert session.turn_color == Color.LIGHT
    assert service.legal_destinations(session).destinations == [
        SquareResponse(row=1, col=6)
    ]

    with pytest.raises(SelectionRejected):
        service.select_piece(session, SelectPieceRequest(piece_id=4))

    session = service.apply_move(session, MoveRequest(row=1, col=6))
    assert service.is_game_over(session)
    assert service.get_winner(session) == Color.LIGHT
    assert session.captured_piece_ids == (1, 2)
    assert session.move_history == ("5,2x3,4", "3,4x1,6")

    with pytest.raises(GameAlreadyOver):
        service.apply_move(session, MoveRequest(row=0, col=7))
    with pytest.raises(GameAlreadyOver):
        service.select_piece(session, SelectPieceRequest(piece_id=3))
    # still over, still the same winner
    assert service.get_winner(session) == Color.LIGHT
