from tetris_ultra.game import BASE_SHAPES, GameGrid, TetrominoType, collides

O = BASE_SHAPES[TetrominoType.O]
I = BASE_SHAPES[TetrominoType.I]


def test_open_placement_is_legal():
    assert not collides(GameGrid(10, 20), O, 4, 0)


def test_side_walls_collide():
    grid = GameGrid(10, 20)
    assert collides(grid, O, -1, 5)
    assert collides(grid, O, 9, 5)
    assert not collides(grid, I, 6, 5)
    assert collides(grid, I, 7, 5)


def test_floor_collides():
    grid = GameGrid(10, 20)
    assert not collides(grid, O, 0, 18)
    assert collides(grid, O, 0, 19)


def test_occupied_cell_collides():
    grid = GameGrid(10, 20)
    grid.set_cell(5, 10, int(TetrominoType.Z))
    assert collides(grid, O, 4, 9)
    assert not collides(grid, O, 6, 9)


def test_cells_above_board_skip_overlap_but_not_walls():
    grid = GameGrid(10, 20)
    grid.grid[0, :] = 1
    # Bottom row of O lands on row 0, top row is above the board.
    assert collides(grid, O, 4, -1)
    assert not collides(grid, O, 4, -2)
    assert collides(grid, O, -1, -2)


def test_empty_cells_of_shape_do_not_collide():
    grid = GameGrid(10, 20)
    grid.set_cell(0, 19, 1)
    t_shape = BASE_SHAPES[TetrominoType.T]  # [[0,1,0],[1,1,1]]
    assert not collides(grid, t_shape, 0, 17)
    grid.set_cell(1, 18, 1)
    assert collides(grid, t_shape, 0, 17)
