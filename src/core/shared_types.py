"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    LIGHT = "light"
    DARK = "dark"


class Phase(StrEnum):
    AWAITING_SELECTION = "awaiting selection"
    PIECE_SELECTED = "piece selected"
    CHAIN_CAPTURE_IN_PROGRESS = "chain capture in progress"
    GAME_OVER = "game over"
