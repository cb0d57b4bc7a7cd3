import math

import pytest

from chalkmaze.geometry import Vec3
from chalkmaze.navigation import MarkerInventory, RayHit, wall_marker_rotation
from chalkmaze.results import Failure, MarkerKind


def _hit(distance=1.0, normal=Vec3(-1.0, 0.0, 0.0)):
    return RayHit(point=Vec3(3.5, 1.5, 1.0), normal=normal, distance=distance)


def test_ninth_breadcrumb_is_refused():
    inv = MarkerInventory()
    for i in range(8):
        assert inv.place_floor_marker(Vec3(float(i), 1.5, 1.0)).ok
    assert inv.floor_remaining == 0

    result = inv.place_floor_marker(Vec3(9.0, 1.5, 1.0))
    assert not result.ok
    assert result.failure is Failure.CAPACITY_EXHAUSTED
    assert result.kind is MarkerKind.FLOOR
    assert result.message == "No breadcrumbs left"
    assert inv.floor_remaining == 0
    assert len(inv.placed) == 8


def test_floor_marker_sits_just_above_the_floor():
    inv = MarkerInventory()
    pose = inv.place_floor_marker(Vec3(2.0, 1.5, 3.0)).value
    assert pose.kind is MarkerKind.FLOOR
    assert pose.position == Vec3(2.0, 0.08, 3.0)


def test_wall_marker_offset_along_normal():
    inv = MarkerInventory()
    result = inv.place_wall_marker(_hit())
    assert result.ok
    assert result.value.position.x == pytest.approx(3.49)
    assert result.value.position.y == pytest.approx(1.5)
    assert result.value.rotation == (0.0, math.pi / 2, 0.0)
    assert inv.wall_remaining == 11


def test_wall_marker_out_of_range_keeps_count():
    inv = MarkerInventory()
    result = inv.place_wall_marker(_hit(distance=2.5))
    assert result.failure is Failure.OUT_OF_RANGE
    assert result.message == "Too far from wall"
    assert inv.wall_remaining == 12


def test_wall_marker_at_exact_range_is_accepted():
    inv = MarkerInventory()
    assert inv.place_wall_marker(_hit(distance=2.0)).ok


def test_wall_marker_without_hit():
    inv = MarkerInventory()
    result = inv.place_wall_marker(None)
    assert result.failure is Failure.NO_SURFACE_HIT
    assert inv.wall_remaining == 12


def test_capacity_checked_before_hit():
    inv = MarkerInventory(wall_capacity=0)
    result = inv.place_wall_marker(None)
    assert result.failure is Failure.CAPACITY_EXHAUSTED
    assert result.kind is MarkerKind.WALL
    assert result.message == "No chalk left"


def test_pools_are_independent():
    inv = MarkerInventory(floor_capacity=1, wall_capacity=1)
    assert inv.place_floor_marker(Vec3()).ok
    assert not inv.place_floor_marker(Vec3()).ok
    assert inv.place_wall_marker(_hit()).ok
    assert inv.remaining(MarkerKind.FLOOR) == 0
    assert inv.remaining(MarkerKind.WALL) == 0


def test_reset_refills_and_clears():
    inv = MarkerInventory()
    inv.place_floor_marker(Vec3())
    inv.place_wall_marker(_hit())
    inv.reset()
    assert (inv.floor_remaining, inv.wall_remaining) == (8, 12)
    assert inv.placed == ()

    inv.reset(floor_capacity=2, wall_capacity=3)
    assert (inv.floor_remaining, inv.wall_remaining) == (2, 3)


def test_counts_never_increase_between_resets():
    inv = MarkerInventory(floor_capacity=3, wall_capacity=3)
    previous = (inv.floor_remaining, inv.wall_remaining)
    actions = [
        lambda: inv.place_floor_marker(Vec3()),
        lambda: inv.place_wall_marker(None),
        lambda: inv.place_wall_marker(_hit(distance=5.0)),
        lambda: inv.place_wall_marker(_hit()),
    ]
    for _ in range(4):
        for act in actions:
            act()
            now = (inv.floor_remaining, inv.wall_remaining)
            assert now[0] <= previous[0] and now[1] <= previous[1]
            assert min(now) >= 0
            previous = now


@pytest.mark.parametrize(
    "normal,expected",
    [
        (Vec3(0.0, 1.0, 0.0), (-math.pi / 2, 0.0, 0.0)),
        (Vec3(0.0, -1.0, 0.0), (-math.pi / 2, 0.0, 0.0)),
        (Vec3(1.0, 0.0, 0.0), (0.0, math.pi / 2, 0.0)),
        (Vec3(-1.0, 0.0, 0.0), (0.0, math.pi / 2, 0.0)),
        (Vec3(0.0, 0.0, 1.0), (0.0, 0.0, 0.0)),
        (Vec3(0.7, 0.0, 0.7), (0.0, 0.0, 0.0)),
    ],
)
def test_wall_marker_rotation(normal, expected):
    assert wall_marker_rotation(normal) == expected


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        MarkerInventory(floor_capacity=-1)
