"""
Chalk Maze package root.

Maze generation, pathfinding, collision and marker bookkeeping live in plain
Python modules. Rendering backends (e.g., Arcade) stay in ``chalkmaze.app``
and only read the data the core produces.
"""
from importlib.metadata import version, PackageNotFoundError

__all__ = ["__version__"]

try:
    __version__ = version("chalk-maze")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
