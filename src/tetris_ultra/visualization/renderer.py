from __future__ import annotations

from typing import Tuple

import pygame

from tetris_ultra.game import BASE_SHAPES, GHOST_CELL, GameStatus, PowerUpType, Snapshot, TetrominoType, color_rgb

BACKGROUND = (10, 10, 14)
EMPTY_CELL = (20, 20, 26)
GHOST_OUTLINE = (120, 120, 140)
TEXT = (230, 230, 230)

POWER_UP_COLORS = {
    PowerUpType.BOMB: (220, 38, 38),
    PowerUpType.SLOW: (37, 99, 235),
    PowerUpType.CLEAR: (22, 163, 74),
    PowerUpType.GHOST: (147, 51, 234),
}


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v <= 0:
        return EMPTY_CELL
    return color_rgb(TetrominoType(v))


class Renderer:
    def __init__(self, cell_size: int = 28, margin: int = 20, panel_cells: int = 7) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font = None

    def window_size(self, board_w: int, board_h: int) -> Tuple[int, int]:
        width = self.margin * 3 + (board_w + self.panel_cells) * self.cell_size
        height = self.margin * 2 + board_h * self.cell_size
        return width, height

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def _cell_rect(self, x0: int, y0: int, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(x0 + x * self.cell_size, y0 + y * self.cell_size, self.cell_size - 1, self.cell_size - 1)

    def _draw_board(self, screen: pygame.Surface, snap: Snapshot) -> None:
        grid = snap.render_grid()
        h, w = grid.shape
        for y in range(h):
            for x in range(w):
                v = int(grid[y, x])
                rect = self._cell_rect(self.margin, self.margin, x, y)
                pygame.draw.rect(screen, _color_for_value(v), rect)
                if v == GHOST_CELL:
                    pygame.draw.rect(screen, GHOST_OUTLINE, rect, 2)

    def _draw_panel(self, screen: pygame.Surface, snap: Snapshot) -> None:
        font = self._font_obj()
        x0 = self.margin * 2 + snap.board.shape[1] * self.cell_size
        y = self.margin

        screen.blit(font.render("NEXT", True, TEXT), (x0, y))
        y += 24
        if snap.next_kind is not None:
            shape = BASE_SHAPES[snap.next_kind]
            for py in range(shape.shape[0]):
                for px in range(shape.shape[1]):
                    if shape[py, px]:
                        pygame.draw.rect(screen, _color_for_value(int(snap.next_kind)), self._cell_rect(x0, y, px, py))
        y += self.cell_size * 3

        lines = [
            f"Score: {snap.score}",
            f"High: {snap.high_score}",
            f"Level: {snap.level}",
            f"Lines: {snap.lines}",
            f"Combo: x{snap.combo}",
        ]
        if snap.active_power_up is not None:
            lines.append(f"Active: {snap.active_power_up.value.upper()}")
        for txt in lines:
            screen.blit(font.render(txt, True, TEXT), (x0, y))
            y += 22

        y += 10
        screen.blit(font.render("POWER-UPS", True, TEXT), (x0, y))
        y += 24
        for i, token in enumerate(snap.available_power_ups()[:4]):
            label = font.render(f"[{i + 1}] {token.type.value.upper()}", True, TEXT)
            box = pygame.Rect(x0, y, self.panel_cells * self.cell_size, 22)
            pygame.draw.rect(screen, POWER_UP_COLORS[token.type], box)
            screen.blit(label, (x0 + 4, y + 3))
            y += 26

    def _draw_banner(self, screen: pygame.Surface, text: str) -> None:
        font = pygame.font.SysFont(None, 36)
        img = font.render(text, True, (255, 255, 255))
        rect = img.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
        screen.blit(img, rect)

    def draw(self, screen: pygame.Surface, snap: Snapshot) -> None:
        screen.fill(BACKGROUND)
        self._draw_board(screen, snap)
        self._draw_panel(screen, snap)
        if snap.ghost_mode:
            tint = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
            tint.fill((168, 85, 247, 60))
            screen.blit(tint, (0, 0))
        if snap.status is GameStatus.NOT_STARTED:
            self._draw_banner(screen, "Press Enter to start")
        elif snap.paused:
            self._draw_banner(screen, "Paused - P to resume")
        elif snap.game_over:
            self._draw_banner(screen, f"Game Over - {snap.score} (high {snap.high_score})")
        pygame.display.flip()
