from __future__ import annotations

from enum import IntEnum
from typing import FrozenSet, Tuple

# (x, z) grid coordinate; x grows to the right, z grows "down" the rows.
Cell = Tuple[int, int]


class CellState(IntEnum):
    """State of a single maze cell.

    Values mirror the conventional 1 = wall / 0 = open encoding so ASCII dumps
    and debugging output read naturally.
    """

    OPEN = 0
    WALL = 1


WALKABLE_STATES: FrozenSet[CellState] = frozenset({CellState.OPEN})

# Four axis neighbours in N, S, W, E order. Search and carving both iterate in
# this order so seeded runs stay reproducible.
DIRECTIONS: Tuple[Cell, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


def is_walkable_state(state: CellState) -> bool:
    return state in WALKABLE_STATES


def is_room(x: int, z: int) -> bool:
    """Room cells have both coordinates odd; only they are carved as rooms."""
    return x % 2 == 1 and z % 2 == 1
