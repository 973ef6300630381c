from __future__ import annotations

from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from .pieces import Piece, TetrominoType


DEFAULT_WIDTH = 10
DEFAULT_HEIGHT = 20


class PlaceResult(IntEnum):
    OK = 1
    ROW_FILLED = 2
    OUT_OF_BOUNDS = 3
    BAD = 4

    @property
    def succeeded(self) -> bool:
        return self in (PlaceResult.OK, PlaceResult.ROW_FILLED)


class Board:
    """Fixed-size well with placement, row clearing and one level of undo.

    Cells are stored in ``grid[y, x]`` with row 0 at the bottom. 0 marks an
    empty cell; any other value is the ``TetrominoType`` of the piece that
    filled it.

    ``widths[y]`` counts the filled cells of row y and ``heights[x]`` is one
    above the topmost filled cell of column x (0 for an empty column).

    Every ``place`` call snapshots the board first. Until ``commit`` is called,
    ``undo`` returns to that snapshot. A failed placement may leave the cells
    written before the failing one on the board, so callers always pair a
    failed ``place`` with ``undo``.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"board dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
        self.widths = np.zeros(self.height, dtype=np.int32)
        self.heights = np.zeros(self.width, dtype=np.int32)
        self.committed = True
        self._backup: Tuple[np.ndarray, np.ndarray, np.ndarray] = self._snapshot()

    def _snapshot(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        return self.grid.copy(), self.widths.copy(), self.heights.copy()

    # ---------- Queries ----------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Optional[TetrominoType]:
        value = int(self.grid[y, x])
        return TetrominoType(value) if value else None

    def is_filled(self, x: int, y: int) -> bool:
        return self.grid[y, x] != 0

    def column_height(self, x: int) -> int:
        return int(self.heights[x])

    def row_width(self, y: int) -> int:
        return int(self.widths[y])

    def max_height(self) -> int:
        return int(self.heights.max())

    def get_width(self) -> int:
        return self.width

    def get_height(self) -> int:
        return self.height

    def is_committed(self) -> bool:
        return self.committed

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            top = int(self.heights[x])
            holes += int(np.count_nonzero(self.grid[:top, x] == 0))
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    # ---------- Mutation ----------
    def place(self, piece: Piece, x: int, y: int) -> PlaceResult:
        """Write ``piece`` with its origin at (x, y).

        Stops at the first cell that is out of bounds or already filled.
        """
        self._backup = self._snapshot()
        self.committed = False

        row_filled = False
        for px, py in piece.cells_at(x, y):
            if not self.in_bounds(px, py):
                return PlaceResult.OUT_OF_BOUNDS
            if self.grid[py, px] != 0:
                return PlaceResult.BAD
            self.grid[py, px] = int(piece.kind)
            self.widths[py] += 1
            if self.heights[px] < py + 1:
                self.heights[px] = py + 1
            if self.widths[py] == self.width:
                row_filled = True

        return PlaceResult.ROW_FILLED if row_filled else PlaceResult.OK

    def drop_height(self, piece: Piece, x: int) -> int:
        """Origin y at which ``piece`` comes to rest when dropped at column x."""
        origin_y = -1
        for i, low in enumerate(piece.skirt):
            candidate = int(self.heights[x + i]) - low
            if candidate > origin_y:
                origin_y = candidate
        return origin_y

    def clear_rows(self) -> bool:
        """Remove full rows and compact the rows above them downwards.

        Relies on the snapshot taken by the preceding ``place``; it does not
        take one of its own. Scanning stops at the first empty row.
        """
        self.committed = False

        cur_top_row = 0
        cleared = 0
        for row in range(self.height):
            if self.widths[row] == self.width:
                cleared += 1
                self.grid[row, :] = 0
                self.widths[row] = 0
            elif self.widths[row] == 0:
                break
            else:
                if row != cur_top_row:
                    self.grid[cur_top_row, :] = self.grid[row, :]
                    self.grid[row, :] = 0
                    self.widths[cur_top_row] = self.widths[row]
                    self.widths[row] = 0
                cur_top_row += 1

        if cleared:
            self._recompute_heights()
        return cleared > 0

    def _recompute_heights(self) -> None:
        filled = self.grid != 0
        any_filled = filled.any(axis=0)
        # Index of the topmost filled row per column, counted from the bottom.
        top = self.height - np.argmax(filled[::-1, :], axis=0)
        self.heights[:] = np.where(any_filled, top, 0)

    def undo(self) -> None:
        if self.committed:
            return
        grid, widths, heights = self._backup
        self.grid[...] = grid
        self.widths[...] = widths
        self.heights[...] = heights

    def commit(self) -> None:
        self.committed = True

    def __str__(self) -> str:
        return format_board(self)


def format_board(board: Board, filled: str = "X", empty: str = "-") -> str:
    """Text dump of ``board``, top row first."""
    lines = []
    for y in range(board.height - 1, -1, -1):
        lines.append("".join(filled if board.grid[y, x] else empty for x in range(board.width)))
    return "\n".join(lines)
