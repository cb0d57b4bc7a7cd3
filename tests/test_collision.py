import random

import pytest

from chalkmaze.geometry import Box3, CoordinateMapper, Vec3
from chalkmaze.physics import CollisionWorld


def test_rebuild_creates_one_box_per_wall(maze11):
    world = CollisionWorld(CoordinateMapper(1.0), wall_height=3.0)
    world.rebuild(maze11)
    assert len(world.boxes) == len(maze11.wall_cells())
    first = world.boxes[0]
    assert first.min == Vec3(-0.5, 0.0, -0.5)
    assert first.max == Vec3(0.5, 3.0, 0.5)


def test_rebuild_replaces_previous_boxes(maze11, corridor):
    world = CollisionWorld()
    world.rebuild(maze11)
    world.rebuild(corridor)
    assert len(world.boxes) == len(corridor.wall_cells())


def test_touching_boxes_intersect():
    a = Box3(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 1.0, 1.0))
    b = Box3(Vec3(1.0, 0.0, 0.0), Vec3(2.0, 1.0, 1.0))
    c = Box3(Vec3(1.5, 0.0, 0.0), Vec3(2.0, 1.0, 1.0))
    assert a.intersects(b)
    assert b.intersects(a)
    assert not a.intersects(c)


def test_slides_along_wall_when_one_axis_blocked(corridor):
    world = CollisionWorld(agent_radius=0.3)
    world.rebuild(corridor)
    start = Vec3(1.0, 1.5, 1.0)
    # Moving north runs into the border wall, moving east is free.
    pos = world.resolve(start, Vec3(0.1, 0.0, -0.5))
    assert pos.x == pytest.approx(1.1)
    assert pos.z == pytest.approx(1.0)
    assert pos.y == pytest.approx(1.5)


def test_blocked_move_returns_position_unchanged(corridor):
    world = CollisionWorld(agent_radius=0.3)
    world.rebuild(corridor)
    start = Vec3(1.0, 1.5, 1.0)
    assert world.resolve(start, Vec3(-0.5, 0.0, 0.5)) == start


def test_vertical_component_is_ignored(corridor):
    world = CollisionWorld()
    world.rebuild(corridor)
    start = Vec3(2.0, 1.5, 1.0)
    assert world.resolve(start, Vec3(0.0, 10.0, 0.0)) == start


def test_random_walk_never_ends_inside_a_wall(maze11):
    world = CollisionWorld(agent_radius=0.3)
    world.rebuild(maze11)
    rng = random.Random(5)
    pos = Vec3(1.0, 1.5, 1.0)
    assert not world.collides(pos)
    for _ in range(2000):
        delta = Vec3(rng.uniform(-0.2, 0.2), 0.0, rng.uniform(-0.2, 0.2))
        pos = world.resolve(pos, delta)
        assert not world.collides(pos)
