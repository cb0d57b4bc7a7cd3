from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..geometry import Box3, CoordinateMapper, Vec3
from ..maze.grid import Grid

logger = logging.getLogger(__name__)


class CollisionWorld:
    """Wall bounding volumes for one maze and axis-separated agent movement.

    One box per wall cell: a full cell wide and deep, ``[0, wall_height]``
    tall. The agent is a square box of half-width ``agent_radius`` and height
    ``agent_height`` standing on the floor under its position.

    Movement resolves X first, then Z from the possibly updated position. A
    blocked axis is dropped and the other still applies, which lets the agent
    slide along walls. Deltas longer than a wall is thick can tunnel, and a
    contact that only exists for the combined diagonal step is not seen; agent
    speeds keep per-tick deltas well below the cell size.
    """

    def __init__(
        self,
        mapper: Optional[CoordinateMapper] = None,
        wall_height: float = 3.0,
        agent_radius: float = 0.3,
        agent_height: float = 1.6,
    ) -> None:
        self.mapper = mapper or CoordinateMapper()
        self.wall_height = float(wall_height)
        self.agent_radius = float(agent_radius)
        self.agent_height = float(agent_height)
        self._boxes: Tuple[Box3, ...] = ()

    @property
    def boxes(self) -> Tuple[Box3, ...]:
        return self._boxes

    def rebuild(self, grid: Grid) -> None:
        """Replace every wall box with ones derived from ``grid``.

        The new set is built completely before it replaces the old one.
        """
        boxes = tuple(self.mapper.cell_box(cell, self.wall_height) for cell in grid.wall_cells())
        self._boxes = boxes
        logger.debug("CollisionWorld rebuilt: %d wall boxes for %r", len(boxes), grid)

    def agent_box(self, pos: Vec3) -> Box3:
        r = self.agent_radius
        return Box3(
            Vec3(pos.x - r, 0.0, pos.z - r),
            Vec3(pos.x + r, self.agent_height, pos.z + r),
        )

    def collides(self, pos: Vec3) -> bool:
        """True when the agent box at ``pos`` intersects any wall box."""
        box = self.agent_box(pos)
        return any(box.intersects(wall) for wall in self._boxes)

    def resolve(self, current: Vec3, delta: Vec3) -> Vec3:
        """Apply ``delta`` to ``current`` one horizontal axis at a time.

        Never fails: in the worst case the position comes back unchanged.
        The vertical component of ``delta`` is ignored.
        """
        pos = current
        if delta.x:
            trial = pos.with_x(pos.x + delta.x)
            if self.collides(trial):
                logger.debug("X movement blocked at %s (dx=%.3f)", pos, delta.x)
            else:
                pos = trial
        if delta.z:
            trial = pos.with_z(pos.z + delta.z)
            if self.collides(trial):
                logger.debug("Z movement blocked at %s (dz=%.3f)", pos, delta.z)
            else:
                pos = trial
        return pos


__all__ = [
    "CollisionWorld",
]
