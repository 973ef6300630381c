from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from .board import Board, PlaceResult
from .pieces import Piece, PieceCatalog
from .selector import RandomBag


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    DOWN = 3
    DROP = 4
    NONE = 5


# Tried in order when a rotation about the piece centre is blocked.
DEFAULT_WALL_KICKS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, -1), (1, -1), (-1, -1))


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    top_space: int = 4  # spawn rows above the playable area
    random_seed: Optional[int] = None
    wall_kicks: Tuple[Tuple[int, int], ...] = DEFAULT_WALL_KICKS


class FallingBlockGame:
    """Drives one game on a ``Board``: spawning, moving, rotating and landing.

    The falling piece always sits on the board as an uncommitted placement.
    Every move is undo -> place at the new position -> keep it, or put the
    piece back where it was. A piece lands when a DOWN or DROP cannot be
    placed; the board is then cleared of full rows and committed.
    """

    def __init__(self, config: Optional[GameConfig] = None, catalog: Optional[PieceCatalog] = None) -> None:
        self.config = config or GameConfig()
        self.catalog = catalog or PieceCatalog()
        self.rng = random.Random(self.config.random_seed)
        self.board = Board(self.config.width, self.config.height + self.config.top_space)
        self.selector: RandomBag[Piece] = RandomBag(self.catalog.pieces, rng=self.rng)
        self.rows_cleared_total = 0
        self.pieces_placed = 0
        self.game_over = False
        self.current_piece: Optional[Piece] = None
        self.current_x = 0
        self.current_y = 0
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.board = Board(self.config.width, self.config.height + self.config.top_space)
        self.selector = RandomBag(self.catalog.pieces, rng=self.rng)
        self.rows_cleared_total = 0
        self.pieces_placed = 0
        self.game_over = False
        self.current_piece = None
        self._spawn_piece()

    def _spawn_piece(self) -> PlaceResult:
        piece = self.selector.next()
        x = (self.board.width - piece.width) // 2
        y = self.config.height
        result = self.board.place(piece, x, y)
        if result.succeeded:
            self.current_piece = piece
            self.current_x = x
            self.current_y = y
        else:
            self.board.undo()
            self.current_piece = None
            self.game_over = True
        return result

    def _fits(self, piece: Piece, x: int, y: int) -> bool:
        ok = self.board.place(piece, x, y).succeeded
        self.board.undo()
        return ok

    def _drop_target(self, piece: Piece, x: int, y: int) -> int:
        target = self.board.drop_height(piece, x)
        if target <= y:
            return target
        # Under an overhang the skirt estimate is above the piece; fall cell by cell.
        while self._fits(piece, x, y - 1):
            y -= 1
        return y

    def _restore_current(self) -> None:
        assert self.current_piece is not None
        self.board.undo()
        self.board.place(self.current_piece, self.current_x, self.current_y)

    def _shift(self, action: Action) -> Tuple[bool, int]:
        piece = self.current_piece
        assert piece is not None
        x, y = self.current_x, self.current_y
        self.board.undo()
        if action == Action.LEFT:
            new_x, new_y = x - 1, y
        elif action == Action.RIGHT:
            new_x, new_y = x + 1, y
        elif action == Action.DOWN:
            new_x, new_y = x, y - 1
        else:
            new_x, new_y = x, self._drop_target(piece, x, y)

        if self.board.place(piece, new_x, new_y).succeeded:
            self.current_x, self.current_y = new_x, new_y
            return (new_x, new_y) != (x, y), 0
        if action in (Action.DOWN, Action.DROP):
            return False, self._land()
        self._restore_current()
        return False, 0

    def _rotate(self) -> bool:
        piece = self.current_piece
        assert piece is not None
        self.board.undo()
        rotated = piece.next_rotation()
        center_x = self.current_x + piece.width // 2
        center_y = self.current_y + piece.height // 2
        base_x = center_x - rotated.width // 2
        base_y = center_y - rotated.height // 2
        for dx, dy in ((0, 0),) + tuple(self.config.wall_kicks):
            if self.board.place(rotated, base_x + dx, base_y + dy).succeeded:
                self.current_piece = rotated
                self.current_x = base_x + dx
                self.current_y = base_y + dy
                return True
            self.board.undo()
        self.board.place(piece, self.current_x, self.current_y)
        return False

    def _land(self) -> int:
        self._restore_current()
        if self.board.max_height() > self.config.height:
            # Stack reached the spawn area; leave the piece where it stopped.
            self.board.commit()
            self.current_piece = None
            self.game_over = True
            return 0
        full_before = int(np.count_nonzero(self.board.widths == self.board.width))
        self.board.clear_rows()
        full_after = int(np.count_nonzero(self.board.widths == self.board.width))
        self.board.commit()
        lines = full_before - full_after
        self.rows_cleared_total += lines
        self.pieces_placed += 1
        self._spawn_piece()
        return lines

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        if self.game_over or self.current_piece is None:
            return self.get_state(), 0, True, self._info(False)

        moved = False
        lines = 0
        if action in (Action.LEFT, Action.RIGHT, Action.DOWN, Action.DROP):
            moved, lines = self._shift(action)
        elif action == Action.ROTATE:
            moved = self._rotate()

        return self.get_state(), lines, self.game_over, self._info(moved)

    def tick(self) -> Tuple[np.ndarray, int, bool, dict]:
        """Gravity step, called by a front-end timer."""
        return self.step(Action.DOWN)

    def _info(self, moved: bool) -> dict:
        return {
            "rows_cleared_total": self.rows_cleared_total,
            "pieces_placed": self.pieces_placed,
            "moved": moved,
        }

    def get_state(self) -> np.ndarray:
        # Falling piece cells are negated so observers can tell them from the stack.
        state = self.board.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells_at(self.current_x, self.current_y):
                state[y, x] = -int(self.current_piece.kind)
        return state
