from falling_block_rl.game import GameGrid, Piece, TetrominoType
from falling_block_rl.game.movement import try_fall, try_shift


def _t(x, y):
    # cells: (x, y), (x-1, y), (x, y+1), (x+1, y)
    return Piece.spawn(TetrominoType.T, x, y)


def test_shift_moves_anchor():
    grid = GameGrid(10, 20)
    assert try_shift(grid, _t(4, 5), -1).x == 3
    assert try_shift(grid, _t(4, 5), 1).x == 5


def test_shift_stops_at_walls():
    grid = GameGrid(10, 20)
    assert try_shift(grid, _t(1, 5), -1) is None
    assert try_shift(grid, _t(8, 5), 1) is None
    assert try_shift(grid, _t(2, 5), -1) is not None


def test_shift_rejected_by_single_occupied_cell():
    grid = GameGrid(10, 20)
    grid.set_occupied(2, 5)
    piece = _t(4, 5)
    assert try_shift(grid, piece, -1) is None
    assert try_shift(grid, piece, 1) is not None


def test_shift_ignores_cells_above_board():
    grid = GameGrid(10, 20)
    piece = Piece.spawn(TetrominoType.I, 4, 19)
    moved = try_shift(grid, piece, 1)
    assert moved is not None
    assert moved.x == 5


def test_fall_moves_one_row():
    grid = GameGrid(10, 20)
    fallen = try_fall(grid, _t(4, 5))
    assert (fallen.x, fallen.y) == (4, 4)


def test_fall_blocked_at_floor():
    grid = GameGrid(10, 20)
    assert try_fall(grid, _t(4, 0)) is None
    # The I's lowest cell is below the anchor
    assert try_fall(grid, Piece.spawn(TetrominoType.I, 4, 1)) is None
    assert try_fall(grid, Piece.spawn(TetrominoType.I, 4, 2)) is not None


def test_fall_blocked_by_stack():
    grid = GameGrid(10, 20)
    grid.set_occupied(3, 4)
    assert try_fall(grid, _t(4, 5)) is None
    assert try_fall(grid, _t(4, 6)) is not None


def test_fall_from_spawn():
    grid = GameGrid(10, 20)
    fallen = try_fall(grid, Piece.spawn(TetrominoType.O, 4, 19))
    assert fallen.y == 18
