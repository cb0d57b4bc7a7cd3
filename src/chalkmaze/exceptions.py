from __future__ import annotations

from typing import List, Optional


class ChalkMazeError(Exception):
    """Base exception for the Chalk Maze project."""


class MazeDimensionError(ChalkMazeError, ValueError):
    """Raised when a maze is requested with unsupported dimensions."""


class ThemeDataError(ChalkMazeError):
    """Raised when bundled theme data fails schema validation."""

    def __init__(self, message: str, errors: Optional[List[object]] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_human(self) -> str:
        parts = [str(self)]
        for e in self.errors:
            path = "/".join(str(p) for p in getattr(e, "path", ())) or "<root>"
            parts.append(f" - at {path}: {getattr(e, 'message', e)}")
        return "\n".join(parts)
