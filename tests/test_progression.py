import pytest

from chalkmaze.config import MazeSettings
from chalkmaze.maze import LevelPolicy, size_for_level


def test_size_grows_by_four_and_caps_at_51():
    sizes = [size_for_level(level) for level in range(1, 13)]
    assert sizes == [11, 15, 19, 23, 27, 31, 35, 39, 43, 47, 51, 51]
    assert size_for_level(500) == 51


def test_sizes_are_always_odd():
    assert all(size_for_level(level) % 2 == 1 for level in range(1, 40))


def test_level_zero_rejected():
    with pytest.raises(ValueError):
        size_for_level(0)
    with pytest.raises(ValueError):
        LevelPolicy().capacities(0)


def test_policy_uses_settings():
    policy = LevelPolicy(MazeSettings(floor_marker_capacity=5, wall_marker_capacity=6, hints_per_level=1))
    assert policy.dimensions(2) == (15, 15)
    caps = policy.capacities(3)
    assert (caps.floor_markers, caps.wall_markers, caps.hints) == (5, 6, 1)
