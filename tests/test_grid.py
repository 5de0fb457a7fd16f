import numpy as np
import pytest

from falling_block_rl.game import CellOutOfBounds, GameGrid


def _fill_row(grid, y, skip=()):
    for x in range(grid.width):
        if x not in skip:
            grid.set_occupied(x, y)


def test_new_grid_is_empty():
    grid = GameGrid(10, 20)
    assert grid.grid.shape == (20, 10)
    assert grid.filled_cells() == 0
    assert not grid.is_occupied(0, 0)
    assert not grid.is_occupied(9, 19)


@pytest.mark.parametrize("x, y", [(-1, 0), (10, 0), (0, -1), (0, 20)])
def test_out_of_range_access_is_fatal(x, y):
    grid = GameGrid(10, 20)
    with pytest.raises(CellOutOfBounds):
        grid.is_occupied(x, y)
    with pytest.raises(CellOutOfBounds):
        grid.set_occupied(x, y)


def test_flat_index_is_row_major():
    grid = GameGrid(10, 20)
    assert grid.index_of(3, 2) == 23
    grid.set_occupied(3, 2)
    assert grid.grid.reshape(-1)[grid.index_of(3, 2)]


def test_no_full_rows_leaves_grid_alone():
    grid = GameGrid(10, 20)
    _fill_row(grid, 0, skip=(9,))
    before = grid.clone_state()
    result = grid.clear_full_rows()
    assert (result.cleared_count, result.sum_of_heights) == (0, 0)
    assert np.array_equal(grid.grid, before)


def test_single_full_row_shifts_rows_above():
    grid = GameGrid(10, 20)
    grid.set_occupied(0, 0)
    _fill_row(grid, 2)
    grid.set_occupied(5, 3)
    grid.set_occupied(9, 19)

    result = grid.clear_full_rows()

    assert result.cleared_count == 1
    assert result.sum_of_heights == 3
    assert grid.is_occupied(0, 0)
    assert grid.is_occupied(5, 2)
    assert not grid.is_occupied(5, 3)
    assert grid.is_occupied(9, 18)
    assert not np.any(grid.grid[19])
    assert grid.filled_cells() == 3


def test_separated_full_rows_use_pre_shift_heights():
    grid = GameGrid(10, 20)
    _fill_row(grid, 1)
    grid.set_occupied(1, 2)
    _fill_row(grid, 4)
    grid.set_occupied(2, 5)

    result = grid.clear_full_rows()

    assert result.cleared_count == 2
    assert result.sum_of_heights == 2 + 5
    assert grid.is_occupied(1, 1)
    assert grid.is_occupied(2, 3)
    assert grid.filled_cells() == 2
    assert not np.any(grid.grid[18:])


def test_four_bottom_rows():
    grid = GameGrid(10, 20)
    for y in range(4):
        _fill_row(grid, y)
    grid.set_occupied(7, 4)

    result = grid.clear_full_rows()

    assert (result.cleared_count, result.sum_of_heights) == (4, 10)
    assert grid.is_occupied(7, 0)
    assert grid.filled_cells() == 1


def test_clone_state_is_independent():
    grid = GameGrid(10, 20)
    grid.set_occupied(2, 3)
    state = grid.clone_state()
    state[3, 2] = False
    assert grid.is_occupied(2, 3)
    assert state.shape == (20, 10)
