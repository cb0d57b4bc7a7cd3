import random

import pytest

from chalkmaze.data import TorchLighting
from chalkmaze.geometry import CoordinateMapper, Vec3
from chalkmaze.maze import generate_maze
from chalkmaze.render_state import Torch, TorchRenderState, flicker_intensity, place_torches

LIGHTING = TorchLighting(
    color=0xFFCC99,
    intensity=0.7,
    distance=8.0,
    spacing=8,
    flicker_min=0.8,
    flicker_max=1.2,
)


def test_small_maze_gets_one_torch_by_the_exit(maze11):
    torches = place_torches(maze11, LIGHTING, rng=random.Random(0))
    assert len(torches) == 1
    torch = torches[0]
    # (9, 9) has the border wall to the east, the first direction tried.
    assert torch.position.x == pytest.approx(8.7)
    assert torch.position.y == pytest.approx(2.1)
    assert torch.position.z == pytest.approx(9.0)
    assert 0.0 <= torch.phase < 6.3


def test_torches_hang_next_to_walls():
    grid = generate_maze(51, 51, seed=8)
    mapper = CoordinateMapper(1.0)
    torches = place_torches(grid, LIGHTING, mapper, rng=random.Random(1))
    lattice = {9, 17, 25, 33, 41, 49}
    assert 0 < len(torches) <= len(lattice) ** 2
    for torch in torches:
        x, z = mapper.cell_of(torch.position)
        assert x in lattice and z in lattice
        assert grid.is_open(x, z)
        dx = round((x - torch.position.x) / 0.3)
        dz = round((z - torch.position.z) / 0.3)
        assert abs(dx) + abs(dz) == 1
        assert grid.is_wall(x + dx, z + dz)


def test_flicker_stays_within_bounds():
    torch = Torch(position=Vec3(), base_intensity=0.7, flicker_min=0.8, flicker_max=1.2, phase=1.3)
    for i in range(500):
        value = flicker_intensity(torch, i * 0.037)
        assert 0.7 * 0.8 - 1e-9 <= value <= 0.7 * 1.2 + 1e-9


def test_render_state_advances_clock():
    torch = Torch(position=Vec3(), base_intensity=1.0, flicker_min=0.5, flicker_max=1.5, phase=0.0)
    state = TorchRenderState([torch])
    before = state.intensities()
    state.advance(0.25)
    assert state.elapsed == pytest.approx(0.25)
    assert state.intensities() != before
    state.reset([])
    assert state.intensities() == []
