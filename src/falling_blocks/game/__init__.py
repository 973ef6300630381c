"""Game module for Falling Blocks.

Exports the board engine and supporting classes:
- Board: Grid with placement, row clearing and one-step undo/commit
- PlaceResult: Outcome codes returned by Board.place
- Piece, PieceCatalog, RotationCycle: Immutable tetromino shapes and rotations
- TetrominoType: Enum of available piece types
- RandomBag: Without-replacement piece selector
- FallingBlockGame: Driver that moves, rotates and lands pieces
"""

from .board import Board, PlaceResult, format_board, DEFAULT_WIDTH, DEFAULT_HEIGHT
from .pieces import Piece, PieceCatalog, RotationCycle, TetrominoType, parse_points
from .selector import RandomBag
from .core import FallingBlockGame, GameConfig, Action

__all__ = [
    "Board",
    "PlaceResult",
    "format_board",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "Piece",
    "PieceCatalog",
    "RotationCycle",
    "TetrominoType",
    "parse_points",
    "RandomBag",
    "FallingBlockGame",
    "GameConfig",
    "Action",
]
