from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import List, Optional, Set

from ..exceptions import MazeDimensionError
from .grid import Grid
from .tiles import Cell, CellState

logger = logging.getLogger(__name__)

MIN_DIMENSION = 11
MAX_DIMENSION = 51

# Room-to-room steps (two cells) in N, S, W, E order.
_ROOM_STEPS = ((0, -2), (0, 2), (-2, 0), (2, 0))


def validate_dimensions(width: int, height: int) -> None:
    """Raise MazeDimensionError unless both sides are odd and in [11, 51]."""
    for name, value in (("width", width), ("height", height)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise MazeDimensionError(f"{name} must be an int, got {value!r}")
        if value % 2 == 0:
            raise MazeDimensionError(f"{name} must be odd, got {value}")
        if not MIN_DIMENSION <= value <= MAX_DIMENSION:
            raise MazeDimensionError(f"{name} must be in [{MIN_DIMENSION}, {MAX_DIMENSION}], got {value}")


class MazeGenerator(ABC):
    """Abstract base for maze generators."""

    @abstractmethod
    def generate(self, width: int, height: int, seed: Optional[int] = None) -> Grid:
        """Generate a maze grid."""
        raise NotImplementedError


class BacktrackingGenerator(MazeGenerator):
    """Randomized depth-first backtracking ("recursive backtracker") maze.

    Algorithm:
    - Start with every cell a wall; cells with both coordinates odd are rooms.
    - Push room (1, 1) and carve it.
    - Look at unvisited rooms two cells away that lie strictly inside the
      border. Pick one uniformly, carve the wall cell between and the room
      itself, then push it. With no candidates, pop.
    - Stop when the stack is empty.

    The explicit stack keeps the depth bounded on 51x51 mazes. The carved cells
    form a spanning tree over every room, so the exit room at
    (width - 2, height - 2) is always reachable from the start and the path
    between any two open cells is unique.
    """

    def generate(self, width: int, height: int, seed: Optional[int] = None) -> Grid:
        validate_dimensions(width, height)
        rng = random.Random(seed)

        tiles: List[List[CellState]] = [[CellState.WALL for _ in range(width)] for _ in range(height)]
        start: Cell = (1, 1)
        exit_cell: Cell = (width - 2, height - 2)

        visited: Set[Cell] = {start}
        stack: List[Cell] = [start]
        tiles[start[1]][start[0]] = CellState.OPEN

        while stack:
            cx, cz = stack[-1]
            candidates = self._unvisited_rooms(cx, cz, width, height, visited)
            if not candidates:
                stack.pop()
                continue
            nx, nz = rng.choice(candidates)
            tiles[(cz + nz) // 2][(cx + nx) // 2] = CellState.OPEN
            tiles[nz][nx] = CellState.OPEN
            visited.add((nx, nz))
            stack.append((nx, nz))

        grid = Grid.from_rows(tiles, start, exit_cell)
        logger.debug(
            "BacktrackingGenerator: %dx%d maze, %d rooms, %d open cells (seed=%s)",
            width,
            height,
            len(visited),
            len(grid.open_cells()),
            seed,
        )
        return grid

    @staticmethod
    def _unvisited_rooms(x: int, z: int, width: int, height: int, visited: Set[Cell]) -> List[Cell]:
        rooms: List[Cell] = []
        for dx, dz in _ROOM_STEPS:
            nx, nz = x + dx, z + dz
            if 0 < nx < width - 1 and 0 < nz < height - 1 and (nx, nz) not in visited:
                rooms.append((nx, nz))
        return rooms


def generate_maze(width: int, height: int, seed: Optional[int] = None) -> Grid:
    """Convenience wrapper around BacktrackingGenerator."""
    return BacktrackingGenerator().generate(width, height, seed)


__all__ = [
    "MazeGenerator",
    "BacktrackingGenerator",
    "generate_maze",
    "validate_dimensions",
    "MIN_DIMENSION",
    "MAX_DIMENSION",
]
