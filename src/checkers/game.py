"""
The GameController will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of checkers -->
it is rebuilt from a GameSession snapshot, performs one action and is converted back into a new snapshot for the service layer.

Phases (the state machine):

    AWAITING_SELECTION --select_piece--> PIECE_SELECTED --apply_move--> AWAITING_SELECTION (turn switches)
                                              |                  \\
                                              |                   `--> CHAIN_CAPTURE_IN_PROGRESS (same piece must capture again)
                                              `--apply_move--> GAME_OVER (one color has no pieces left)
"""

import logging
from dataclasses import dataclass, field
from typing import NoReturn, Optional, Self

from src.checkers.board import Board
from src.checkers.captures import any_capture_available
from src.checkers.moves import (
    Capture,
    Move,
    capture_moves,
    generate_moves,
    sort_moves,
)
from src.checkers.pieces import FIRST_TO_MOVE, Color, Piece, opponent
from src.checkers.square import Square
from src.checkers.victory import evaluate
from src.core.exceptions import (
    GameAlreadyOver,
    GameStateError,
    IllegalDestination,
    InvalidMove,
    SelectionRejected,
    UnknownPiece,
)
from src.core.models import GameSession, PieceRecord
from src.core.shared_types import Phase

logger = logging.getLogger(__name__)


@dataclass
class GameController:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    turn_color: Color
    phase: Phase = Phase.AWAITING_SELECTION
    selected_piece_id: Optional[int] = None
    chain_piece_id: Optional[int] = None
    candidates: list[Move] = field(default_factory=list)
    winner: Optional[Color] = None
    history: list[str] = field(default_factory=list)

    @classmethod
    def new_game(cls) -> Self:
        """Standard setup: three rows per side, light moves first."""
        return cls(board=Board.starting_position(), turn_color=FIRST_TO_MOVE)

    @classmethod
    def from_session(cls, session: GameSession) -> Self:
        """Define how to construct a GameController from the snapshot the Service layer actually has"""

        # Validation
        try:
            turn_color = Color(session.turn_color)
            phase = Phase(session.phase)
            winner = Color(session.winner) if session.winner is not None else None
        except ValueError as exc:
            raise GameStateError(f"Invalid game session: {exc}") from exc

        if (phase == Phase.GAME_OVER) != (winner is not None):
            raise GameStateError(
                f"Phase {phase!r} does not match winner {session.winner!r}."
            )

        active_ids = {record.id for record in session.pieces}
        if overlap := active_ids & set(session.captured_piece_ids):
            raise GameStateError(
                f"Pieces {sorted(overlap)} are both captured and on the board."
            )

        # create the Board. Ids are kept as they are: they must stay stable for the lifetime of a piece
        board = Board(captured=set(session.captured_piece_ids))
        try:
            for record in session.pieces:
                square = Square(record.row, record.col)
                board.place_piece(Piece(record.id, Color(record.color), square), square)
        except (ValueError, InvalidMove) as exc:
            raise GameStateError(f"Invalid piece in game session: {exc}") from exc

        game = cls(
            board=board,
            turn_color=turn_color,
            phase=phase,
            selected_piece_id=session.selected_piece_id,
            chain_piece_id=session.chain_piece_id,
            winner=winner,
            history=list(session.move_history),
        )
        game._restore_candidates()
        return game

    def to_session(self) -> GameSession:
        """Encode back into the (immutable) format the Service layer uses"""
        return GameSession(
            turn_color=self.turn_color.value,
            phase=self.phase.value,
            pieces=tuple(
                PieceRecord(
                    id=piece.id,
                    color=piece.color.value,
                    row=piece.position.row,
                    col=piece.position.col,
                )
                for piece in self.board.active_pieces()
            ),
            captured_piece_ids=tuple(sorted(self.board.captured)),
            selected_piece_id=self.selected_piece_id,
            chain_piece_id=self.chain_piece_id,
            winner=self.winner.value if self.winner is not None else None,
            move_history=tuple(self.history),
        )

    @property
    def is_game_over(self) -> bool:
        return self.phase == Phase.GAME_OVER

    def legal_destinations(self) -> list[Square]:
        """Squares the selected piece may move to. Used by the presentation layer for highlighting."""
        return [move.to for move in self.candidates]

    def select_piece(self, piece_id: int) -> None:
        """
        Select one of your pieces
        ----

        1. The piece must be yours (and still on the board)
        2. During a chain capture only the capturing piece may be (re)selected
        3. If any of your pieces can capture, you must pick one that can
        4. Compute the candidate moves: captures only, if a capture is available anywhere.

        Re-selecting while another piece is selected is fine. A rejected selection leaves everything untouched.
        Re-selecting the chain piece during a chain capture keeps the phase at CHAIN_CAPTURE_IN_PROGRESS.
        """
        self._assert_game_in_progress()

        piece = self._own_piece(piece_id)

        if self.chain_piece_id is not None and piece_id != self.chain_piece_id:
            self._reject(
                f"Piece {self.chain_piece_id} is in the middle of a chain capture and must continue."
            )

        candidates = self._candidate_moves(piece)
        if not candidates and self._must_capture():
            self._reject(
                f"A capture is available for {self.turn_color}, but piece {piece_id} cannot capture."
            )

        self.selected_piece_id = piece_id
        self.candidates = candidates
        if self.chain_piece_id is None:
            self._change_phase(Phase.PIECE_SELECTED)
        logger.debug(
            "Selected %s piece %d with %d candidate move(s)",
            piece.color,
            piece_id,
            len(candidates),
        )

    def clear_selection(self) -> None:
        """Deselect. Not allowed while a chain capture still has to be finished."""
        self._assert_game_in_progress()

        if self.chain_piece_id is not None:
            self._reject(
                f"Cannot deselect piece {self.chain_piece_id} during a chain capture."
            )

        self._clear_selection()
        self._change_phase(Phase.AWAITING_SELECTION)

    def apply_move(self, destination: Square) -> None:
        """
        Attempt to move the selected piece to the destination square
        -----

        All checks are done before anything gets changed. Then, in this order:

        1. remove the captured piece (if it is a capture)
        2. update the board
        3. update the history of moves
        4. check for the end of the game
        5. after a capture: can the same piece capture again? Then the turn does not switch (chain capture)
        6. otherwise: the turn goes to the opponent
        """
        self._assert_game_in_progress()

        if self.phase not in (Phase.PIECE_SELECTED, Phase.CHAIN_CAPTURE_IN_PROGRESS):
            raise IllegalDestination("No piece selected.")
        # for the type checker: both phases above always have a selected piece
        assert self.selected_piece_id is not None

        move = self._find_candidate(destination)
        piece = self.board.piece(self.selected_piece_id)

        if isinstance(move, Capture):
            self._remove_captured_piece(move)

        self.board.move_piece(piece.id, destination)
        self.history.append(move.to_notation())
        logger.debug("%s played %s", piece.color, move.to_notation())

        winner = evaluate(self.board)
        if winner is not None:
            self._end_game(winner)
            return

        if isinstance(move, Capture) and capture_moves(self.board, piece):
            self._continue_chain(piece)
            return

        self._end_turn()

    # -- PRIVATE HELPERS ---
    def _assert_game_in_progress(self) -> None:
        if self.is_game_over:
            raise GameAlreadyOver(f"Game is over. {self.winner} won.")

    def _reject(self, reason: str) -> NoReturn:
        logger.debug("Selection rejected: %s", reason)
        raise SelectionRejected(reason)

    def _own_piece(self, piece_id: int) -> Piece:
        """The active piece with this id, provided it belongs to the player whose turn it is"""
        if piece_id not in {piece.id for piece in self.board.active_pieces()}:
            self._reject(f"There is no piece with id {piece_id} on the board.")
        piece = self.board.piece(piece_id)
        if piece.color != self.turn_color:
            self._reject(f"It is {self.turn_color}'s turn, piece {piece_id} is {piece.color}.")
        return piece

    def _must_capture(self) -> bool:
        return any_capture_available(self.board, self.turn_color)

    def _candidate_moves(self, piece: Piece) -> list[Move]:
        """The moves of this piece, restricted to captures when the forced capture rule applies"""
        if self.chain_piece_id is not None or self._must_capture():
            return sort_moves(capture_moves(self.board, piece))
        return sort_moves(generate_moves(self.board, piece))

    def _restore_candidates(self) -> None:
        """The candidate set is not part of the snapshot: recompute it from the selected piece"""
        if self.chain_piece_id is not None and self.chain_piece_id != self.selected_piece_id:
            raise GameStateError(
                f"Chain piece {self.chain_piece_id} must also be the selected piece."
            )
        if self.selected_piece_id is None:
            if self.phase in (Phase.PIECE_SELECTED, Phase.CHAIN_CAPTURE_IN_PROGRESS):
                raise GameStateError(f"Phase {self.phase!r} requires a selected piece.")
            return
        try:
            piece = self.board.piece(self.selected_piece_id)
        except UnknownPiece as exc:
            raise GameStateError(str(exc)) from exc
        if piece.color != self.turn_color:
            raise GameStateError(
                f"Selected piece {piece.id} is {piece.color}, but it is {self.turn_color}'s turn."
            )
        self.candidates = self._candidate_moves(piece)

    def _find_candidate(self, destination: Square) -> Move:
        for move in self.candidates:
            if move.to == destination:
                return move
        raise IllegalDestination(
            f"Square {destination.to_notation()} is not a legal destination for piece {self.selected_piece_id}."
        )

    def _remove_captured_piece(self, move: Capture) -> None:
        captured_piece = self.board.piece_at(move.captured)
        if captured_piece is None:
            raise UnknownPiece(f"No piece to capture on {move.captured.to_notation()}.")
        self.board.remove_piece(captured_piece.id)

    def _continue_chain(self, piece: Piece) -> None:
        """Same player, same piece: only further captures are allowed"""
        self.chain_piece_id = piece.id
        self.selected_piece_id = piece.id
        self.candidates = sort_moves(capture_moves(self.board, piece))
        self._change_phase(Phase.CHAIN_CAPTURE_IN_PROGRESS)
        logger.info(
            "Chain capture: %s piece %d must capture again", piece.color, piece.id
        )

    def _end_turn(self) -> None:
        self._clear_selection()
        self.turn_color = opponent(self.turn_color)
        self._change_phase(Phase.AWAITING_SELECTION)

    def _end_game(self, winner: Color) -> None:
        self._clear_selection()
        self.winner = winner
        self._change_phase(Phase.GAME_OVER)
        logger.info("Game over after %d moves: %s wins", len(self.history), winner)

    def _clear_selection(self) -> None:
        self.selected_piece_id = None
        self.chain_piece_id = None
        self.candidates = []

    def _change_phase(self, new_phase: Phase) -> None:
        self.phase = new_phase
