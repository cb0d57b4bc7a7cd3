from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..geometry import Vec3
from ..results import Failure, MarkerKind, Outcome

logger = logging.getLogger(__name__)

DEFAULT_FLOOR_CAPACITY = 8
DEFAULT_WALL_CAPACITY = 12
DEFAULT_WALL_RANGE = 2.0
SURFACE_OFFSET = 0.01
FLOOR_MARKER_HEIGHT = 0.08

# |component| above this counts as facing along that axis
_AXIS_THRESHOLD = 0.9


@dataclass(frozen=True)
class RayHit:
    """Nearest wall intersection reported by the caller's raycaster."""

    point: Vec3
    normal: Vec3
    distance: float


@dataclass(frozen=True)
class MarkerPose:
    """Where a marker sits and how it is turned (Euler angles, radians)."""

    kind: MarkerKind
    position: Vec3
    rotation: Tuple[float, float, float] = (0.0, 0.0, 0.0)


def wall_marker_rotation(normal: Vec3) -> Tuple[float, float, float]:
    """Rotation that lays a flat mark flush against the face with ``normal``.

    Floor/ceiling-like normals tip the mark onto the horizontal plane; X-facing
    walls turn it a quarter around Y; Z-facing walls need no rotation.
    """
    if abs(normal.y) > _AXIS_THRESHOLD:
        return (-math.pi / 2, 0.0, 0.0)
    if abs(normal.x) > _AXIS_THRESHOLD:
        return (0.0, math.pi / 2, 0.0)
    return (0.0, 0.0, 0.0)


class MarkerInventory:
    """Two independently capped marker pools for one level.

    - Floor markers (breadcrumbs) drop at the agent's feet; the only limit is
      the remaining count.
    - Wall markers (chalk) need a wall hit within ``wall_range``.

    Failed placements never change the counters. Counts only go down during a
    level; ``reset`` refills both pools when the next level starts.
    """

    def __init__(
        self,
        floor_capacity: int = DEFAULT_FLOOR_CAPACITY,
        wall_capacity: int = DEFAULT_WALL_CAPACITY,
        wall_range: float = DEFAULT_WALL_RANGE,
        surface_offset: float = SURFACE_OFFSET,
        floor_marker_height: float = FLOOR_MARKER_HEIGHT,
    ) -> None:
        if floor_capacity < 0 or wall_capacity < 0:
            raise ValueError("marker capacities must be >= 0")
        self.floor_capacity = int(floor_capacity)
        self.wall_capacity = int(wall_capacity)
        self.wall_range = float(wall_range)
        self.surface_offset = float(surface_offset)
        self.floor_marker_height = float(floor_marker_height)
        self._floor_remaining = self.floor_capacity
        self._wall_remaining = self.wall_capacity
        self._placed: List[MarkerPose] = []

    @property
    def floor_remaining(self) -> int:
        return self._floor_remaining

    @property
    def wall_remaining(self) -> int:
        return self._wall_remaining

    @property
    def placed(self) -> Tuple[MarkerPose, ...]:
        return tuple(self._placed)

    def remaining(self, kind: MarkerKind) -> int:
        return self._floor_remaining if kind is MarkerKind.FLOOR else self._wall_remaining

    def place_floor_marker(self, pos: Vec3) -> Outcome[MarkerPose]:
        if self._floor_remaining <= 0:
            logger.debug("Floor marker rejected: pool empty")
            return Outcome.fail(Failure.CAPACITY_EXHAUSTED, MarkerKind.FLOOR)

        pose = MarkerPose(MarkerKind.FLOOR, Vec3(pos.x, self.floor_marker_height, pos.z))
        self._placed.append(pose)
        self._floor_remaining -= 1
        logger.debug("Floor marker at %s; remaining=%d", pose.position, self._floor_remaining)
        return Outcome.success(pose, MarkerKind.FLOOR)

    def place_wall_marker(self, hit: Optional[RayHit]) -> Outcome[MarkerPose]:
        """Record a wall mark at ``hit``.

        Checks, in order: remaining chalk, presence of a hit, and hit distance
        against ``wall_range`` (a hit exactly at the range is accepted).
        """
        if self._wall_remaining <= 0:
            logger.debug("Wall marker rejected: pool empty")
            return Outcome.fail(Failure.CAPACITY_EXHAUSTED, MarkerKind.WALL)
        if hit is None:
            logger.debug("Wall marker rejected: no wall in view")
            return Outcome.fail(Failure.NO_SURFACE_HIT, MarkerKind.WALL)
        if hit.distance > self.wall_range:
            logger.debug("Wall marker rejected: hit at %.2f beyond range %.2f", hit.distance, self.wall_range)
            return Outcome.fail(Failure.OUT_OF_RANGE, MarkerKind.WALL)

        # Lift the mark off the surface so it does not z-fight with the wall.
        position = hit.point + hit.normal * self.surface_offset
        pose = MarkerPose(MarkerKind.WALL, position, wall_marker_rotation(hit.normal))
        self._placed.append(pose)
        self._wall_remaining -= 1
        logger.debug("Wall marker at %s rot=%s; remaining=%d", pose.position, pose.rotation, self._wall_remaining)
        return Outcome.success(pose, MarkerKind.WALL)

    def reset(self, floor_capacity: Optional[int] = None, wall_capacity: Optional[int] = None) -> None:
        """Refill both pools and forget placed markers.

        New capacities, when given, replace the current ones first.
        """
        if floor_capacity is not None:
            self.floor_capacity = max(0, int(floor_capacity))
        if wall_capacity is not None:
            self.wall_capacity = max(0, int(wall_capacity))
        self._floor_remaining = self.floor_capacity
        self._wall_remaining = self.wall_capacity
        self._placed.clear()
        logger.debug("Markers reset: floor=%d wall=%d", self._floor_remaining, self._wall_remaining)


__all__ = [
    "RayHit",
    "MarkerPose",
    "MarkerInventory",
    "wall_marker_rotation",
]
