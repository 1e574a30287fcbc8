from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from tetris_ultra.game import Action, GameConfig, TetrisUltraGame
from .renderer import Renderer

logger = logging.getLogger(__name__)


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE,
    pygame.K_SPACE: Action.ROTATE,
    pygame.K_LSHIFT: Action.HARD_DROP,
    pygame.K_RSHIFT: Action.HARD_DROP,
    pygame.K_p: Action.TOGGLE_PAUSE,
    pygame.K_RETURN: Action.START,
}

KEY_TO_SLOT: Dict[int, int] = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_4: 3,
    pygame.K_KP1: 0,
    pygame.K_KP2: 1,
    pygame.K_KP3: 2,
    pygame.K_KP4: 3,
}


def handle_key(game: TetrisUltraGame, key: int) -> bool:
    """Forward a key press to the game. Returns False for unmapped keys."""
    action = KEY_TO_ACTION.get(key)
    if action is not None:
        game.dispatch(action)
        return True
    slot = KEY_TO_SLOT.get(key)
    if slot is not None:
        game.activate_power_up(slot)
        return True
    return False


def run(seed: Optional[int] = None, cell_size: int = 28) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisUltraGame(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.config.width, game.config.height))
        pygame.display.set_caption("Tetris Ultra")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        handle_key(game, event.key)

            # Gravity and power-up timers run off the engine clock.
            snap = game.advance(clock.tick(60))
            renderer.draw(screen, snap)
    finally:
        pygame.quit()
    logger.info("Session ended, high score %d", game.state.scores.high_score)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Tetris Ultra")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run(seed=args.seed, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
