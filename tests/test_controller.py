import numpy as np

from tetris_ultra.game import Action, BASE_SHAPES, GameStatus, TetrominoType, rotate_cw
from tetris_ultra.game import controller

from tests.helpers import fill_row, put_piece, started_game


def test_start_spawns_active_and_next_piece():
    game = started_game()
    snap = game.snapshot()
    assert snap.status is GameStatus.PLAYING
    assert snap.piece is not None and snap.piece.y == 0
    assert snap.next_kind in set(TetrominoType)


def test_move_left_and_right():
    game = started_game()
    put_piece(game, TetrominoType.O, 4, 0)
    game.move_left()
    assert game.state.piece.x == 3
    game.move_right()
    game.move_right()
    assert game.state.piece.x == 5


def test_move_into_wall_is_ignored():
    game = started_game()
    put_piece(game, TetrominoType.O, 0, 3)
    game.move_left()
    assert game.state.piece.x == 0
    put_piece(game, TetrominoType.O, 8, 3)
    game.move_right()
    assert game.state.piece.x == 8


def test_rotate_accepts_free_rotation():
    game = started_game()
    put_piece(game, TetrominoType.T, 4, 5)
    game.rotate()
    assert game.state.piece.shape.tolist() == [[1, 0], [1, 1], [1, 0]]


def test_rotate_that_collides_is_rejected_without_kick():
    game = started_game()
    vertical = rotate_cw(BASE_SHAPES[TetrominoType.I])
    put_piece(game, TetrominoType.I, 9, 5, shape=vertical)
    game.rotate()
    piece = game.state.piece
    assert piece.x == 9
    assert np.array_equal(piece.shape, vertical)


def test_soft_drop_moves_down_one_row():
    game = started_game()
    put_piece(game, TetrominoType.O, 4, 3)
    game.soft_drop()
    assert game.state.piece.y == 4


def test_soft_drop_on_floor_locks_and_spawns_next():
    game = started_game()
    queued = game.state.next_kind
    put_piece(game, TetrominoType.O, 0, 18)
    game.soft_drop()
    grid = game.state.grid.grid
    assert grid[18, 0] == TetrominoType.O and grid[19, 1] == TetrominoType.O
    assert game.state.piece.kind is queued
    assert game.state.piece.y == 0


def test_o_piece_completes_bottom_row():
    game = started_game()
    fill_row(game, 19, skip=(0, 1))
    put_piece(game, TetrominoType.O, 0, 18)

    game.soft_drop()

    snap = game.snapshot()
    assert snap.lines == 1
    assert snap.combo == 1
    assert snap.score == 100 + 1 * 50 + 1 * 10
    # The O's upper half drops into the bottom row.
    assert list(snap.board[19]) == [TetrominoType.O, TetrominoType.O] + [0] * 8
    assert snap.board.shape == (20, 10)


def test_four_row_clear_scores_top_tier():
    game = started_game()
    for y in range(16, 20):
        fill_row(game, y, skip=(0,))
    put_piece(game, TetrominoType.I, 0, 16, shape=rotate_cw(BASE_SHAPES[TetrominoType.I]))

    game.soft_drop()

    snap = game.snapshot()
    assert snap.lines == 4
    assert snap.score == 800 + 50 + 10
    assert not snap.board.any()


def test_consecutive_clears_build_combo_and_miss_resets_it():
    game = started_game()
    game.state.scores.combo = 2
    fill_row(game, 19, skip=(0, 1))
    put_piece(game, TetrominoType.O, 0, 18)
    game.soft_drop()
    assert game.state.scores.combo == 3
    assert game.state.scores.score == 100 + 3 * 50 + 10

    put_piece(game, TetrominoType.O, 6, 18)
    game.soft_drop()
    assert game.state.scores.combo == 0


def test_level_follows_lines_and_awards_level_up_bonus():
    game = started_game()
    game.state.scores.lines = 9
    fill_row(game, 19, skip=(0, 1))
    put_piece(game, TetrominoType.O, 0, 18)

    game.soft_drop()

    scores = game.state.scores
    assert scores.lines == 10
    assert scores.level == 2
    # Line score uses the pre-lock level, the level-up bonus comes on top.
    assert scores.score == (100 + 50 + 1 * 10) + 2 * 100


def test_hard_drop_scores_two_per_row_then_locks():
    game = started_game()
    game.state.grid.set_cell(0, 7, int(TetrominoType.T))
    put_piece(game, TetrominoType.O, 0, 0)

    game.hard_drop()

    grid = game.state.grid.grid
    assert grid[5, 0] == TetrominoType.O and grid[6, 1] == TetrominoType.O
    assert game.state.scores.score == 10
    assert game.state.piece.y == 0


def test_drop_distance_and_ghost_row():
    game = started_game()
    put_piece(game, TetrominoType.O, 4, 2)
    assert controller.drop_distance(game.state) == 16
    assert controller.ghost_row(game.state) == 18


def test_hard_drop_bonus_adds_to_line_clear_score():
    game = started_game()
    fill_row(game, 19, skip=(0, 1))
    put_piece(game, TetrominoType.O, 0, 8)
    game.hard_drop()
    assert game.state.scores.score == 2 * 10 + (100 + 50 + 10)


def test_spawn_collision_ends_game_and_records_high_score():
    game = started_game()
    for y in (0, 1):
        fill_row(game, y, skip=(0,))
    game.state.scores.score = 500
    game.state.scores.high_score = 300
    put_piece(game, TetrominoType.O, 0, 18)

    game.soft_drop()

    snap = game.snapshot()
    assert snap.status is GameStatus.GAME_OVER
    assert snap.piece is None
    assert snap.high_score == 500


def test_game_over_keeps_higher_previous_high_score():
    game = started_game()
    for y in (0, 1):
        fill_row(game, y, skip=(0,))
    game.state.scores.high_score = 900
    put_piece(game, TetrominoType.O, 0, 18)
    game.soft_drop()
    assert game.state.scores.high_score == 900


def test_commands_after_game_over_are_ignored():
    game = started_game()
    for y in (0, 1):
        fill_row(game, y, skip=(0,))
    put_piece(game, TetrominoType.O, 0, 18)
    game.soft_drop()
    before = game.state.grid.clone_state()

    for action in (Action.LEFT, Action.RIGHT, Action.ROTATE, Action.SOFT_DROP, Action.HARD_DROP,
                   Action.TOGGLE_PAUSE):
        game.dispatch(action)
    game.activate_power_up(0)
    game.advance(5000)

    assert game.state.status is GameStatus.GAME_OVER
    assert np.array_equal(game.state.grid.grid, before)


def test_piece_locked_above_board_loses_hidden_cells():
    game = started_game()
    game.state.grid.set_cell(4, 0, int(TetrominoType.T))
    game.state.grid.set_cell(5, 0, int(TetrominoType.T))
    put_piece(game, TetrominoType.O, 4, -2)
    game.soft_drop()
    # Nothing visible was added; the board still holds only the two preset cells.
    assert game.state.grid.filled_cells() == 2
