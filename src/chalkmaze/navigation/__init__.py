from .markers import MarkerInventory, MarkerPose, RayHit, wall_marker_rotation
from .raycast import cast_wall_ray

__all__ = [
    "MarkerInventory",
    "MarkerPose",
    "RayHit",
    "cast_wall_ray",
    "wall_marker_rotation",
]
