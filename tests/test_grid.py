import pytest

from chalkmaze.maze import CellState, Grid


def test_from_lines_reads_walls_and_markers(corridor):
    assert (corridor.width, corridor.height) == (5, 3)
    assert corridor.start == (1, 1)
    assert corridor.exit == (3, 1)
    assert corridor.cell_at(0, 0) is CellState.WALL
    assert corridor.cell_at(2, 1) is CellState.OPEN


def test_from_lines_defaults_start_and_exit():
    grid = Grid.from_lines(["#####", "#...#", "#...#", "#...#", "#####"])
    assert grid.start == (1, 1)
    assert grid.exit == (3, 3)


def test_from_lines_rejects_ragged_rows():
    with pytest.raises(ValueError):
        Grid.from_lines(["###", "#.", "###"])


def test_start_outside_grid_rejected():
    with pytest.raises(ValueError):
        Grid.from_lines(["###", "#.#", "###"], start=(5, 5))


def test_cell_at_out_of_bounds_raises_but_safe_variants_do_not(corridor):
    with pytest.raises(IndexError):
        corridor.cell_at(-1, 0)
    assert corridor.safe_cell_at(99, 99) is None
    assert corridor.is_open(-1, -1) is False
    assert corridor.is_wall(-1, -1) is False


def test_neighbors_stay_in_bounds_and_skip_walls(corridor):
    assert set(corridor.neighbors4(0, 0)) == {(1, 0), (0, 1)}
    assert list(corridor.open_neighbors(2, 1)) == [(1, 1), (3, 1)]


def test_to_lines_round_trips_with_path(corridor):
    assert corridor.to_lines() == ["#####", "#S.E#", "#####"]
    assert corridor.to_lines([(1, 1), (2, 1), (3, 1)]) == ["#####", "#S*E#", "#####"]


def test_grid_is_immutable(corridor):
    with pytest.raises(AttributeError):
        corridor.width = 7  # type: ignore[misc]
