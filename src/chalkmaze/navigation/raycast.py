from __future__ import annotations

import logging
import math
from typing import Optional

from ..geometry import CoordinateMapper, Vec3
from ..maze.grid import Grid
from .markers import RayHit

logger = logging.getLogger(__name__)


def cast_wall_ray(
    grid: Grid,
    origin: Vec3,
    direction: Vec3,
    mapper: Optional[CoordinateMapper] = None,
    wall_height: float = 3.0,
    max_distance: float = 64.0,
) -> Optional[RayHit]:
    """Nearest wall face hit by a ray, walking the grid cell by cell.

    This is a grid-traversal stand-in for a renderer's mesh raycast, used by
    the bundled viewer and by headless tools. The hit normal is the outward
    normal of the crossed face, so it is always axis-aligned in x/z. Rays that
    would leave the wall band ``[0, wall_height]`` before reaching a wall (they
    hit the floor or ceiling first) return None, as do rays starting inside a
    wall.
    """
    mapper = mapper or CoordinateMapper()
    d = direction.normalized()
    if d.x == 0.0 and d.z == 0.0:
        return None

    cs = mapper.cell_size
    cx, cz = mapper.cell_of(origin)
    if grid.is_wall(cx, cz):
        return None

    step_x = 1 if d.x > 0 else -1
    step_z = 1 if d.z > 0 else -1
    if d.x != 0.0:
        t_max_x = ((cx + 0.5 * step_x) * cs - origin.x) / d.x
        t_delta_x = cs / abs(d.x)
    else:
        t_max_x = t_delta_x = math.inf
    if d.z != 0.0:
        t_max_z = ((cz + 0.5 * step_z) * cs - origin.z) / d.z
        t_delta_z = cs / abs(d.z)
    else:
        t_max_z = t_delta_z = math.inf

    while True:
        if t_max_x < t_max_z:
            cx += step_x
            t = t_max_x
            t_max_x += t_delta_x
            normal = Vec3(-step_x, 0.0, 0.0)
        else:
            cz += step_z
            t = t_max_z
            t_max_z += t_delta_z
            normal = Vec3(0.0, 0.0, -step_z)

        if t > max_distance or not grid.in_bounds(cx, cz):
            return None
        if grid.is_wall(cx, cz):
            point = origin + d * t
            if not 0.0 <= point.y <= wall_height:
                return None
            logger.debug("Ray from %s hit wall cell (%d, %d) at %.3f", origin, cx, cz, t)
            return RayHit(point=point, normal=normal, distance=t)


__all__ = [
    "cast_wall_ray",
]
