from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .tiles import DIRECTIONS, Cell, CellState, is_walkable_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass(frozen=True)
class Grid:
    """Immutable maze topology: cell states plus start and exit cells.

    Coordinates are (x, z) with (0, 0) at the top-left corner; ``cells[z][x]``.
    A Grid is produced once per level and never edited afterwards; systems
    that need a different layout build a new Grid.
    """

    width: int
    height: int
    cells: Tuple[Tuple[CellState, ...], ...]
    start: Cell
    exit: Cell

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Grid dimensions must be positive")
        if len(self.cells) != self.height or any(len(row) != self.width for row in self.cells):
            raise ValueError(f"cells must be {self.height} rows of {self.width} states")
        for label, cell in (("start", self.start), ("exit", self.exit)):
            if not self.in_bounds(*cell):
                raise ValueError(f"{label} cell {cell} lies outside the {self.width}x{self.height} grid")

    @property
    def dimensions(self) -> Size:
        return Size(self.width, self.height)

    def in_bounds(self, x: int, z: int) -> bool:
        """Check if coordinates are within the grid bounds. Never raises."""
        return 0 <= x < self.width and 0 <= z < self.height

    def cell_at(self, x: int, z: int) -> CellState:
        """Return the state at (x, z).

        Raises IndexError if out of bounds to make misuse obvious; callers that
        probe arbitrary coordinates should use safe_cell_at/is_open instead.
        """
        if not self.in_bounds(x, z):
            raise IndexError(f"Coordinates out of bounds: ({x}, {z}) for grid {self.width}x{self.height}")
        return self.cells[z][x]

    def safe_cell_at(self, x: int, z: int) -> Optional[CellState]:
        if not self.in_bounds(x, z):
            return None
        return self.cells[z][x]

    def is_open(self, x: int, z: int) -> bool:
        state = self.safe_cell_at(x, z)
        return state is not None and is_walkable_state(state)

    def is_wall(self, x: int, z: int) -> bool:
        return self.safe_cell_at(x, z) is CellState.WALL

    def neighbors4(self, x: int, z: int) -> Iterator[Cell]:
        """Yield in-bounds axis neighbours in N, S, W, E order."""
        for dx, dz in DIRECTIONS:
            nx, nz = x + dx, z + dz
            if self.in_bounds(nx, nz):
                yield nx, nz

    def open_neighbors(self, x: int, z: int) -> Iterator[Cell]:
        for nx, nz in self.neighbors4(x, z):
            if is_walkable_state(self.cells[nz][nx]):
                yield nx, nz

    def iter_cells(self, state: Optional[CellState] = None) -> Iterator[Cell]:
        """Yield every (x, z), row by row, optionally filtered by state."""
        for z, row in enumerate(self.cells):
            for x, s in enumerate(row):
                if state is None or s is state:
                    yield x, z

    def open_cells(self) -> List[Cell]:
        return list(self.iter_cells(CellState.OPEN))

    def wall_cells(self) -> List[Cell]:
        return list(self.iter_cells(CellState.WALL))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[CellState]], start: Cell, exit: Cell) -> "Grid":
        """Freeze a mutable row-major state table into a Grid."""
        frozen = tuple(tuple(CellState(s) for s in row) for row in rows)
        width = len(frozen[0]) if frozen else 0
        return cls(width=width, height=len(frozen), cells=frozen, start=start, exit=exit)

    @classmethod
    def from_lines(
        cls,
        lines: Sequence[str],
        start: Optional[Cell] = None,
        exit: Optional[Cell] = None,
    ) -> "Grid":
        """Create a Grid from an ASCII representation (tests and tooling).

        '#' is a wall and every other character is open. 'S' and 'E' mark the
        start and exit; explicit ``start``/``exit`` arguments take precedence.
        Without either, start defaults to (1, 1) and exit to
        (width - 2, height - 2).
        """
        if not lines:
            raise ValueError("lines must not be empty")
        width = len(lines[0])
        if width == 0:
            raise ValueError("line width must be positive")
        markers: Dict[str, Cell] = {}
        rows: List[List[CellState]] = []
        for z, line in enumerate(lines):
            if len(line) != width:
                raise ValueError(f"All rows must have equal width; row 0 has {width}, row {z} has {len(line)}")
            row = []
            for x, ch in enumerate(line):
                row.append(CellState.WALL if ch == "#" else CellState.OPEN)
                if ch in ("S", "E"):
                    markers[ch] = (x, z)
            rows.append(row)
        start = start or markers.get("S", (1, 1))
        exit = exit or markers.get("E", (width - 2, len(lines) - 2))
        return cls.from_rows(rows, start, exit)

    def to_lines(self, path: Sequence[Cell] = ()) -> List[str]:
        """ASCII dump: '#' wall, '.' open, '*' path, 'S'/'E' start and exit."""
        on_path = set(path)
        out: List[str] = []
        for z, row in enumerate(self.cells):
            chars = []
            for x, state in enumerate(row):
                if (x, z) == self.start:
                    chars.append("S")
                elif (x, z) == self.exit:
                    chars.append("E")
                elif (x, z) in on_path:
                    chars.append("*")
                else:
                    chars.append("#" if state is CellState.WALL else ".")
            out.append("".join(chars))
        return out

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, start={self.start}, exit={self.exit})"


__all__ = [
    "Grid",
    "Size",
]
