from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Tuple

# (x, z) grid coordinate, same alias as chalkmaze.maze.tiles.Cell
Cell = Tuple[int, int]


@dataclass(frozen=True)
class Vec3:
    """Immutable 3D vector in world units; y is up, the maze lies in x/z."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> "Vec3":
        return Vec3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vec3":
        n = self.length()
        if n == 0.0:
            return Vec3()
        return Vec3(self.x / n, self.y / n, self.z / n)

    def horizontal_distance(self, other: "Vec3") -> float:
        return math.hypot(self.x - other.x, self.z - other.z)

    def with_x(self, x: float) -> "Vec3":
        return replace(self, x=x)

    def with_y(self, y: float) -> "Vec3":
        return replace(self, y=y)

    def with_z(self, z: float) -> "Vec3":
        return replace(self, z=z)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


UP = Vec3(0.0, 1.0, 0.0)


@dataclass(frozen=True)
class Box3:
    """Axis-aligned bounding box ``[min, max]``.

    Intersection is inclusive: boxes that merely touch on a face count as
    intersecting, so an agent can never end up flush inside a wall face.
    """

    min: Vec3
    max: Vec3

    def intersects(self, other: "Box3") -> bool:
        return not (
            other.max.x < self.min.x
            or other.min.x > self.max.x
            or other.max.y < self.min.y
            or other.min.y > self.max.y
            or other.max.z < self.min.z
            or other.min.z > self.max.z
        )

    def contains_point(self, p: Vec3) -> bool:
        return (
            self.min.x <= p.x <= self.max.x
            and self.min.y <= p.y <= self.max.y
            and self.min.z <= p.z <= self.max.z
        )

    @property
    def center(self) -> Vec3:
        return (self.min + self.max) * 0.5


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class CoordinateMapper:
    """World <-> grid mapping for a fixed cell size.

    Cell (x, z) is centered on world (x * cell_size, z * cell_size), so a
    world position maps to the nearest cell center.
    """

    cell_size: float = 1.0

    def __post_init__(self) -> None:
        if self.cell_size <= 0:
            raise ValueError("cell_size must be positive")

    def world_to_grid(self, world_x: float, world_z: float) -> Cell:
        return (_round_half_up(world_x / self.cell_size), _round_half_up(world_z / self.cell_size))

    def grid_to_world(self, x: int, z: int) -> Tuple[float, float]:
        return (x * self.cell_size, z * self.cell_size)

    def cell_of(self, pos: Vec3) -> Cell:
        return self.world_to_grid(pos.x, pos.z)

    def cell_center(self, cell: Cell, y: float = 0.0) -> Vec3:
        wx, wz = self.grid_to_world(*cell)
        return Vec3(wx, y, wz)

    def cell_box(self, cell: Cell, height: float) -> Box3:
        half = self.cell_size / 2.0
        cx, cz = self.grid_to_world(*cell)
        return Box3(Vec3(cx - half, 0.0, cz - half), Vec3(cx + half, height, cz + half))


__all__ = [
    "Vec3",
    "Box3",
    "CoordinateMapper",
    "UP",
]
