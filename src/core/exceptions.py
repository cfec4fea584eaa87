"""
Custom exceptions used across layers.

All of them signal that no state change occurred: the caller still holds the snapshot it passed in.
"""


class GameError(Exception):
    """Top level exception for anything that goes wrong while playing a game."""


# --- CONTROLLER ---
class SelectionRejected(GameError):
    """Selecting (or deselecting) a piece is not allowed right now."""


class IllegalDestination(GameError):
    """The requested destination is not in the set of candidate moves."""


class GameAlreadyOver(GameError):
    """Any action attempted after the game has ended."""


class GameStateError(GameError):
    """A session snapshot that cannot be turned back into a game."""


# --- BOARD ---
class UnknownPiece(GameError):
    """Board consistency violation: the piece id is not (or no longer) on the board."""


class InvalidMove(GameError):
    """A board precondition was violated (occupied, off-board or unplayable target square)."""


class InvalidDiagramError(GameError):
    """Board diagram could not be parsed."""


# --- BOUNDARY ---
# NOTE: not a ValueError on purpose, so pydantic does not wrap it in a ValidationError
class InvalidRequestError(GameError):
    """Request could not be validated."""
