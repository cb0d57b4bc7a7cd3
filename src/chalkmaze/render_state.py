from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .data import TorchLighting
from .geometry import CoordinateMapper, Vec3
from .maze.grid import Grid

logger = logging.getLogger(__name__)

FLICKER_SPEED = 3.0
# Distance a torch sits out from the wall it hangs on, in cell units
TORCH_INSET = 0.3
# Torch height as a fraction of the wall height
TORCH_HEIGHT_FRACTION = 0.7

# +X, -X, +Z, -Z
_WALL_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass(frozen=True)
class Torch:
    position: Vec3
    base_intensity: float
    flicker_min: float
    flicker_max: float
    phase: float


def place_torches(
    grid: Grid,
    lighting: TorchLighting,
    mapper: Optional[CoordinateMapper] = None,
    wall_height: float = 3.0,
    rng: Optional[random.Random] = None,
) -> List[Torch]:
    """Hang torches on walls at a regular lattice of open cells.

    Lattice points sit one cell past each multiple of ``lighting.spacing``
    so that even spacings land on room cells; cells with both coordinates
    even are always walls.
    An open lattice cell gets one torch on the first adjacent wall found in
    +X, -X, +Z, -Z order; open cells with no adjacent wall get none.
    """
    mapper = mapper or CoordinateMapper()
    rng = rng or random.Random()
    spacing = lighting.spacing
    torches: List[Torch] = []
    for z in range(spacing + 1, grid.height - 1, spacing):
        for x in range(spacing + 1, grid.width - 1, spacing):
            if not grid.is_open(x, z):
                continue
            for dx, dz in _WALL_OFFSETS:
                if not grid.is_wall(x + dx, z + dz):
                    continue
                wx, wz = mapper.grid_to_world(x, z)
                position = Vec3(
                    wx - dx * TORCH_INSET * mapper.cell_size,
                    wall_height * TORCH_HEIGHT_FRACTION,
                    wz - dz * TORCH_INSET * mapper.cell_size,
                )
                torches.append(
                    Torch(
                        position=position,
                        base_intensity=lighting.intensity,
                        flicker_min=lighting.flicker_min,
                        flicker_max=lighting.flicker_max,
                        phase=rng.uniform(0.0, 2 * math.pi),
                    )
                )
                break
    logger.debug("Placed %d torches (spacing=%d) in %r", len(torches), spacing, grid)
    return torches


def flicker_intensity(torch: Torch, t: float) -> float:
    """Light intensity of ``torch`` at elapsed time ``t`` seconds.

    Three sines at different rates are summed and normalized to [0, 1], then
    mapped into ``base * [flicker_min, flicker_max]``.
    """
    s = FLICKER_SPEED
    wave = (
        math.sin(t * s + torch.phase) * 0.3
        + math.sin(t * s * 2.3 + torch.phase) * 0.2
        + math.sin(t * s * 0.7 + torch.phase) * 0.1
    )
    normalized = (wave + 0.6) / 1.2
    return torch.base_intensity * (torch.flicker_min + normalized * (torch.flicker_max - torch.flicker_min))


class TorchRenderState:
    """Per-level torch set plus the clock that drives its flicker.

    Lives beside the session, never inside Grid or CollisionWorld; the
    renderer reads ``intensities()`` once per frame.
    """

    def __init__(self, torches: Sequence[Torch] = ()) -> None:
        self.torches: List[Torch] = list(torches)
        self.elapsed = 0.0

    def reset(self, torches: Sequence[Torch]) -> None:
        self.torches = list(torches)

    def advance(self, dt: float) -> None:
        self.elapsed += dt

    def intensities(self) -> List[float]:
        return [flicker_intensity(t, self.elapsed) for t in self.torches]


__all__ = [
    "Torch",
    "TorchRenderState",
    "place_torches",
    "flicker_intensity",
]
