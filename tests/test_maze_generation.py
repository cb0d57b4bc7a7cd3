from collections import deque

import pytest

from chalkmaze.exceptions import MazeDimensionError
from chalkmaze.maze import BacktrackingGenerator, CellState, Grid, Size, generate_maze
from chalkmaze.maze.generator import validate_dimensions
from chalkmaze.maze.tiles import is_room


def _reachable(grid: Grid, start):
    seen = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in grid.open_neighbors(*cur):
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return seen


@pytest.mark.parametrize("size", list(range(11, 52, 2)))
def test_every_open_cell_reachable_from_start(size):
    grid = generate_maze(size, size, seed=size)
    open_cells = set(grid.open_cells())
    assert grid.start == (1, 1)
    assert grid.exit == (size - 2, size - 2)
    assert grid.is_open(*grid.start)
    assert grid.is_open(*grid.exit)
    assert _reachable(grid, grid.start) == open_cells


def test_border_is_solid_wall():
    grid = generate_maze(15, 19, seed=7)
    for x in range(grid.width):
        assert grid.cell_at(x, 0) is CellState.WALL
        assert grid.cell_at(x, grid.height - 1) is CellState.WALL
    for z in range(grid.height):
        assert grid.cell_at(0, z) is CellState.WALL
        assert grid.cell_at(grid.width - 1, z) is CellState.WALL


def test_rooms_all_carved_and_even_cells_stay_walls():
    grid = generate_maze(21, 21, seed=99)
    for x, z in grid.iter_cells():
        if is_room(x, z):
            assert grid.is_open(x, z), (x, z)
        if x % 2 == 0 and z % 2 == 0:
            assert grid.is_wall(x, z), (x, z)


def test_open_cells_form_a_tree():
    grid = generate_maze(25, 25, seed=3)
    open_cells = set(grid.open_cells())
    edges = 0
    for x, z in open_cells:
        # Count each undirected edge once via its east/south end.
        for nxt in ((x + 1, z), (x, z + 1)):
            if nxt in open_cells:
                edges += 1
    assert edges == len(open_cells) - 1
    rooms = ((25 - 1) // 2) ** 2
    assert len(open_cells) == 2 * rooms - 1


def test_same_seed_same_maze_different_seed_differs():
    a = generate_maze(31, 31, seed=42)
    b = generate_maze(31, 31, seed=42)
    c = generate_maze(31, 31, seed=43)
    assert a.cells == b.cells
    assert a.cells != c.cells


def test_generator_is_reusable_across_sizes():
    gen = BacktrackingGenerator()
    small = gen.generate(11, 11, seed=1)
    large = gen.generate(51, 51, seed=1)
    assert small.dimensions == Size(11, 11)
    assert large.dimensions == Size(51, 51)


@pytest.mark.parametrize("width,height", [(10, 11), (11, 12), (9, 9), (53, 53), (11, 101)])
def test_invalid_dimensions_rejected(width, height):
    with pytest.raises(MazeDimensionError):
        generate_maze(width, height, seed=0)


def test_dimension_error_is_a_value_error():
    with pytest.raises(ValueError):
        validate_dimensions(12, 11)
    with pytest.raises(MazeDimensionError):
        validate_dimensions(11.0, 11)
