from tetris_ultra.game import BASE_SHAPES, GameConfig, Piece, ScoringRules, TetrisUltraGame, TetrominoType


def started_game(seed=7, **rule_overrides):
    """A game already in PLAYING status with a fixed random stream."""
    game = TetrisUltraGame(GameConfig(random_seed=seed), ScoringRules(**rule_overrides))
    game.start()
    return game


def put_piece(game, kind, x, y, shape=None):
    game.state.piece = Piece(kind=kind, shape=BASE_SHAPES[kind] if shape is None else shape, x=x, y=y)


def fill_row(game, y, skip=(), kind=TetrominoType.T):
    for x in range(game.config.width):
        if x not in skip:
            game.state.grid.set_cell(x, y, int(kind))
