from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterator, List, Optional, Tuple


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Point = Tuple[int, int]
Color = Tuple[int, int, int]


def parse_points(coords: str) -> Tuple[Point, ...]:
    """Convert "0 0 0 1 1 0" (or "0,0 0,1 1,0") into ((0, 0), (0, 1), (1, 0))."""
    values = [int(v) for v in coords.replace(",", " ").split()]
    if len(values) % 2 != 0:
        raise ValueError(f"odd number of coordinates in {coords!r}")
    return tuple((values[i], values[i + 1]) for i in range(0, len(values), 2))


@dataclass(frozen=True, eq=False)
class Piece:
    """Immutable tetromino shape in one rotation state.

    ``body`` holds cell offsets relative to the piece origin. ``skirt[i]`` is the
    lowest y among cells in the i-th column of the bounding box and is what the
    board uses to compute drop heights.
    """

    kind: TetrominoType
    body: Tuple[Point, ...]
    color: Color = (200, 200, 200)
    rotation: int = 0  # index inside its rotation cycle
    cycle: Optional["RotationCycle"] = field(default=None, repr=False)
    width: int = field(init=False)
    height: int = field(init=False)
    skirt: Tuple[int, ...] = field(init=False)

    def __post_init__(self) -> None:
        if not self.body:
            raise ValueError("piece body must contain at least one cell")
        body = tuple((int(x), int(y)) for x, y in self.body)
        xs = [x for x, _ in body]
        ys = [y for _, y in body]
        min_x = min(xs)
        width = max(xs) - min_x + 1
        height = max(ys) - min(ys) + 1
        skirt: List[Optional[int]] = [None] * width
        for x, y in body:
            low = skirt[x - min_x]
            if low is None or y < low:
                skirt[x - min_x] = y
        object.__setattr__(self, "body", body)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        # A gap column cannot occur in a connected piece; treat it as never touching.
        object.__setattr__(self, "skirt", tuple(s if s is not None else height for s in skirt))

    def same_shape(self, other: "Piece") -> bool:
        if self.width != other.width or self.height != other.height:
            return False
        if len(self.body) != len(other.body):
            return False
        return set(self.body) == set(other.body)

    def rotated_body(self) -> Tuple[Point, ...]:
        # Counterclockwise quarter turn: transpose, then reverse each row.
        return tuple((y, self.width - 1 - x) for x, y in self.body)

    def next_rotation(self) -> "Piece":
        if self.cycle is None:
            return Piece(self.kind, self.rotated_body(), self.color)
        return self.cycle[self.rotation + 1]

    def cells_at(self, origin_x: int, origin_y: int) -> List[Point]:
        return [(origin_x + x, origin_y + y) for x, y in self.body]

    def get_body(self) -> Tuple[Point, ...]:
        return self.body

    def get_skirt(self) -> Tuple[int, ...]:
        return self.skirt

    def get_width(self) -> int:
        return self.width

    def get_height(self) -> int:
        return self.height

    def get_color(self) -> Color:
        return self.color

    def __str__(self) -> str:
        cells = ", ".join(f"({x}, {y})" for x, y in self.body)
        return f"{self.kind.name}[{self.rotation}]{{{cells}}}"


class RotationCycle:
    """Closed ring of the distinct rotation states of one tetromino family."""

    def __init__(self, kind: TetrominoType, body: Tuple[Point, ...], color: Color) -> None:
        self.kind = kind
        start = Piece(kind, body, color, rotation=0, cycle=self)
        states: List[Piece] = [start]
        candidate = Piece(kind, start.rotated_body(), color)
        while not candidate.same_shape(start):
            states.append(Piece(kind, candidate.body, color, rotation=len(states), cycle=self))
            candidate = Piece(kind, candidate.rotated_body(), color)
        self.states: Tuple[Piece, ...] = tuple(states)

    def __len__(self) -> int:
        return len(self.states)

    def __getitem__(self, index: int) -> Piece:
        return self.states[index % len(self.states)]

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.states)

    @property
    def head(self) -> Piece:
        return self.states[0]


STANDARD_SHAPES: Tuple[Tuple[TetrominoType, str, Color], ...] = (
    (TetrominoType.I, "0 0 0 1 0 2 0 3", (0, 255, 255)),
    (TetrominoType.L, "0 0 0 1 0 2 1 0", (255, 200, 0)),
    (TetrominoType.J, "0 0 1 0 1 1 1 2", (0, 0, 255)),
    (TetrominoType.S, "0 0 1 0 1 1 2 1", (0, 255, 0)),
    (TetrominoType.Z, "0 1 1 1 1 0 2 0", (255, 0, 0)),
    (TetrominoType.O, "0 0 0 1 1 0 1 1", (255, 255, 0)),
    (TetrominoType.T, "0 0 1 0 1 1 2 0", (153, 0, 204)),
)


class PieceCatalog:
    """The seven standard tetromino families, built once per instance.

    Pieces are never mutated after construction, so one catalog can be shared
    by any number of boards and games.
    """

    def __init__(self) -> None:
        self._cycles: Dict[TetrominoType, RotationCycle] = {}
        for kind, coords, color in STANDARD_SHAPES:
            self._cycles[kind] = RotationCycle(kind, parse_points(coords), color)
        self._pieces: Tuple[Piece, ...] = tuple(cycle.head for cycle in self._cycles.values())

    @property
    def pieces(self) -> Tuple[Piece, ...]:
        return self._pieces

    def get_pieces(self) -> Tuple[Piece, ...]:
        return self._pieces

    def cycle(self, kind: TetrominoType) -> RotationCycle:
        return self._cycles[kind]

    def piece(self, kind: TetrominoType) -> Piece:
        return self._cycles[kind].head

    def __len__(self) -> int:
        return len(self._pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(self._pieces)
