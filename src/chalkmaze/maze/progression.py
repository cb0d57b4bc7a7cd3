from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import MazeSettings

logger = logging.getLogger(__name__)

BASE_SIZE = 11
SIZE_INCREMENT = 4
MAX_SIZE = 51


def size_for_level(
    level: int,
    base: int = BASE_SIZE,
    increment: int = SIZE_INCREMENT,
    maximum: int = MAX_SIZE,
) -> int:
    """Maze side length for a level: ``min(base + (level - 1) * increment, maximum)``.

    With the defaults this yields 11, 15, 19, ... 51 and stays at 51 from
    level 11 on. Increments are even so every size stays odd.
    """
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return min(base + (level - 1) * increment, maximum)


@dataclass(frozen=True)
class LevelCapacities:
    floor_markers: int
    wall_markers: int
    hints: int


class LevelPolicy:
    """Maps a level number to maze dimensions and per-level resource budgets.

    Capacities are the same on every level today; they still come from here so
    the session never hardcodes them.
    """

    def __init__(self, settings: Optional[MazeSettings] = None) -> None:
        self.settings = settings or MazeSettings()

    def size(self, level: int) -> int:
        s = self.settings
        return size_for_level(level, s.min_size, s.size_increment, s.max_size)

    def dimensions(self, level: int) -> tuple[int, int]:
        side = self.size(level)
        return side, side

    def capacities(self, level: int) -> LevelCapacities:
        if level < 1:
            raise ValueError(f"level must be >= 1, got {level}")
        s = self.settings
        return LevelCapacities(
            floor_markers=s.floor_marker_capacity,
            wall_markers=s.wall_marker_capacity,
            hints=s.hints_per_level,
        )


__all__ = [
    "size_for_level",
    "LevelCapacities",
    "LevelPolicy",
]
