from __future__ import annotations

import logging
from collections import deque
from typing import Dict, List, Optional, Set

from ..geometry import CoordinateMapper, Vec3
from .grid import Grid
from .tiles import Cell

logger = logging.getLogger(__name__)


def bfs_path(grid: Grid, start: Cell, goal: Cell) -> Optional[List[Cell]]:
    """Breadth-first shortest path over open cells, start and goal included.

    Uses 4-directional movement and stops at the first dequeue of ``goal``.
    The start cell itself is not required to be open; every other cell on the
    path is. Returns None when either end is out of bounds or no path exists.
    """
    if not grid.in_bounds(*start) or not grid.in_bounds(*goal):
        return None

    parents: Dict[Cell, Optional[Cell]] = {start: None}
    q = deque([start])
    while q:
        current = q.popleft()
        if current == goal:
            path: List[Cell] = []
            node: Optional[Cell] = current
            while node is not None:
                path.append(node)
                node = parents[node]
            path.reverse()
            return path
        for nxt in grid.open_neighbors(*current):
            if nxt not in parents:
                parents[nxt] = current
                q.append(nxt)
    return None


def bfs_distances(grid: Grid, origin: Cell, max_dist: Optional[int] = None) -> Dict[Cell, int]:
    """Hop counts from ``origin`` to every reachable open cell.

    Nodes at ``max_dist`` are recorded but not expanded, so the search stops
    growing once the frontier reaches that ring.
    """
    if not grid.in_bounds(*origin):
        return {}
    dist: Dict[Cell, int] = {origin: 0}
    q = deque([origin])
    while q:
        current = q.popleft()
        d = dist[current]
        if max_dist is not None and d >= max_dist:
            continue
        for nxt in grid.open_neighbors(*current):
            if nxt not in dist:
                dist[nxt] = d + 1
                q.append(nxt)
    return dist


def ring_candidates(grid: Grid, origin: Cell, min_dist: int, max_dist: int) -> Set[Cell]:
    """Open cells whose BFS distance from ``origin`` lies in [min_dist, max_dist].

    Used to pick a safe respawn point a few steps from the exit. An empty set
    means there is no such cell (e.g. the maze is too small); callers treat
    that as "unavailable".
    """
    if min_dist < 0 or max_dist < min_dist:
        raise ValueError(f"invalid ring bounds [{min_dist}, {max_dist}]")
    distances = bfs_distances(grid, origin, max_dist)
    found = {cell for cell, d in distances.items() if min_dist <= d <= max_dist and grid.is_open(*cell)}
    logger.debug("Ring search from %s in [%d, %d]: %d candidates", origin, min_dist, max_dist, len(found))
    return found


class PathFinder:
    """Shortest-route queries from continuous world positions to the exit.

    Holds only the coordinate mapper; every query reads the Grid it is given
    and keeps nothing between calls.
    """

    def __init__(self, mapper: Optional[CoordinateMapper] = None) -> None:
        self.mapper = mapper or CoordinateMapper()

    def shortest_path(self, grid: Grid, world_pos: Vec3) -> Optional[List[Cell]]:
        """Cells from the one nearest ``world_pos`` to ``grid.exit``.

        Returns None when the origin is outside the grid or the route has fewer
        than two cells (already at the exit); both mean "nothing to show".
        """
        origin = self.mapper.cell_of(world_pos)
        path = bfs_path(grid, origin, grid.exit)
        if path is None or len(path) < 2:
            logger.debug("No path to show from %s (path=%s)", origin, path)
            return None
        logger.debug("Shortest path from %s to exit: %d cells", origin, len(path))
        return path

    def ring_candidates(self, grid: Grid, origin: Cell, min_dist: int, max_dist: int) -> Set[Cell]:
        return ring_candidates(grid, origin, min_dist, max_dist)


__all__ = [
    "PathFinder",
    "bfs_path",
    "bfs_distances",
    "ring_candidates",
]
