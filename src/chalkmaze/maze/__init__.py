from .tiles import Cell, CellState
from .grid import Grid, Size
from .generator import BacktrackingGenerator, MazeGenerator, generate_maze
from .pathfinding import PathFinder, bfs_path, ring_candidates
from .progression import LevelPolicy, size_for_level

__all__ = [
    "Cell",
    "CellState",
    "Grid",
    "Size",
    "MazeGenerator",
    "BacktrackingGenerator",
    "generate_maze",
    "PathFinder",
    "bfs_path",
    "ring_candidates",
    "LevelPolicy",
    "size_for_level",
]
