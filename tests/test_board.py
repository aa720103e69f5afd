import pytest

from filler.board import EMPTY, MINE, OPPONENT, Grid, Shape, grid_from_rows


def test_dimensions_and_owner():
    grid = grid_from_rows(["o..", "..x"])
    assert grid.dimensions() == (2, 3)
    assert grid.owner_at(0, 0) == MINE
    assert grid.owner_at(1, 2) == OPPONENT
    assert grid.owner_at(1, 0) == EMPTY


def test_owner_at_out_of_bounds():
    grid = Grid.empty(2, 2)
    with pytest.raises(IndexError):
        grid.owner_at(2, 0)
    with pytest.raises(IndexError):
        grid.owner_at(0, 2)


def test_ragged_rows_rejected():
    with pytest.raises(ValueError):
        Grid([[EMPTY, EMPTY], [EMPTY]])
    with pytest.raises(ValueError):
        Grid([])


def test_cells_of_is_row_major():
    grid = grid_from_rows([".o.", "o.o"])
    assert grid.cells_of(MINE) == [(0, 1), (1, 0), (1, 2)]
    assert grid.cells_of(OPPONENT) == []


def test_swapped_exchanges_sides():
    grid = grid_from_rows(["o.x"])
    assert grid.swapped() == grid_from_rows(["x.o"])


def test_with_cells_leaves_original_alone():
    grid = grid_from_rows(["..."])
    changed = grid.with_cells([(0, 1, MINE)])
    assert changed == grid_from_rows([".o."])
    assert grid == grid_from_rows(["..."])


def test_shape_from_pattern():
    shape = Shape.from_pattern([".*", "**"])
    assert (shape.width, shape.height) == (2, 2)
    assert shape.cells == ((0, 1), (1, 0), (1, 1))


def test_shape_requires_cells():
    with pytest.raises(ValueError):
        Shape(width=2, height=1, cells=())
    with pytest.raises(ValueError):
        Shape(width=1, height=1, cells=((0, 1),))


def test_flat_cells_are_row_major():
    grid = grid_from_rows(["o.", ".x"])
    assert grid.flat == (MINE, EMPTY, EMPTY, OPPONENT)
