"""
Pygame host for Queensweeper.

This module owns:
- Renderer: draws the primitives built by presentation.draw_list and the
  end-of-game overlay
- InputController: turns a frame's pygame events into a FrameInput
- Game: window, clock and the update/draw loop

The rules live in components.Field; this module should not implement them.
"""

import logging
import sys
from typing import Iterable, Optional, Tuple

import pygame
from pygame.locals import Rect

import config
import presentation
from components import Field, FrameInput, GameStatus
from config import FieldConfig
from presentation import FilledRect, Sprite, SpritePlacement, TextLabel

logger = logging.getLogger(__name__)


# ============================ Renderer ============================
class Renderer:
    """Draws Field primitives onto a pygame surface."""

    def __init__(self, screen: pygame.Surface, field: Field):
        self.screen = screen
        self.field = field
        self.font = pygame.font.Font(config.font_name, config.font_size)
        self.result_font = pygame.font.Font(config.font_name, config.result_font_size)
        self._labels = {}

    def draw_field(self) -> None:
        for primitive in presentation.draw_list(self.field):
            if isinstance(primitive, FilledRect):
                pygame.draw.rect(self.screen, primitive.color, Rect(*primitive.rect))
            elif isinstance(primitive, TextLabel):
                self.draw_label(primitive)
            elif isinstance(primitive, SpritePlacement):
                self.draw_sprite(primitive.sprite, primitive.center)

    def draw_label(self, label: TextLabel) -> None:
        key = (label.text, label.color)
        surface = self._labels.get(key)
        if surface is None:
            surface = self.font.render(label.text, True, label.color)
            self._labels[key] = surface
        self.screen.blit(surface, surface.get_rect(center=label.center))

    def draw_sprite(self, sprite: Sprite, center: Tuple[float, float]) -> None:
        size = self.field.grid.square_size - self.field.grid.square_gap
        if sprite is Sprite.BLACK_QUEEN:
            self._draw_queen(center, size)
        elif sprite is Sprite.WHITE_PAWN:
            self._draw_pawn(center, size)
        elif sprite is Sprite.FLAG:
            self._draw_flag(center, size)

    def _draw_queen(self, center, size) -> None:
        cx, cy = center
        half = size * 0.32
        base_top = cy + half * 0.45
        crown = [
            (cx - half, base_top),
            (cx - half, cy - half * 0.6),
            (cx - half * 0.5, cy - half * 0.05),
            (cx, cy - half),
            (cx + half * 0.5, cy - half * 0.05),
            (cx + half, cy - half * 0.6),
            (cx + half, base_top),
        ]
        pygame.draw.polygon(self.screen, config.color_queen, crown)
        pygame.draw.rect(
            self.screen, config.color_queen,
            Rect(cx - half * 1.15, base_top, half * 2.3, half * 0.45),
        )
        for px, py in crown[1:6:2]:
            pygame.draw.circle(self.screen, config.color_queen, (px, py), max(2, size // 16))

    def _draw_pawn(self, center, size) -> None:
        cx, cy = center
        head_r = max(3, size // 9)
        head = (cx, cy - size * 0.15)
        body = [
            (cx - size * 0.12, cy + size * 0.18),
            (cx - size * 0.05, cy - size * 0.05),
            (cx + size * 0.05, cy - size * 0.05),
            (cx + size * 0.12, cy + size * 0.18),
        ]
        base = Rect(cx - size * 0.2, cy + size * 0.18, size * 0.4, size * 0.1)
        for color, width in ((config.color_pawn, 0), (config.color_pawn_outline, 1)):
            pygame.draw.polygon(self.screen, color, body, width)
            pygame.draw.rect(self.screen, color, base, width)
            pygame.draw.circle(self.screen, color, head, head_r, width)

    def _draw_flag(self, center, size) -> None:
        cx, cy = center
        flag_w = max(6, size // 3)
        flag_h = max(8, size // 2)
        pole_x = cx - size // 6
        pole_y = cy - flag_h // 2
        pygame.draw.line(self.screen, config.color_flag_pole, (pole_x, pole_y), (pole_x, pole_y + flag_h), 2)
        pygame.draw.polygon(self.screen, config.color_flag, [
            (pole_x + 2, pole_y),
            (pole_x + 2 + flag_w, pole_y + flag_h // 3),
            (pole_x + 2, pole_y + flag_h * 2 // 3),
        ])

    def draw_result_overlay(self, text: Optional[str]) -> None:
        if not text:
            return
        width, height = self.screen.get_size()
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, config.result_overlay_alpha))
        self.screen.blit(overlay, (0, 0))
        label = self.result_font.render(text, True, config.color_result)
        self.screen.blit(label, label.get_rect(center=(width // 2, height // 2)))


# ============================ Input ============================
class InputController:
    """Builds one FrameInput per frame from pygame events."""

    def __init__(self):
        self.mouse_position = (-1, -1)

    def frame_input(
        self,
        events: Iterable[pygame.event.Event],
        frame_time: float,
        mouse_position: Optional[Tuple[int, int]] = None,
    ) -> FrameInput:
        left = right = False
        for event in events:
            if event.type == pygame.MOUSEMOTION:
                self.mouse_position = event.pos
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self.mouse_position = event.pos
                if event.button == config.mouse_left:
                    left = True
                elif event.button == config.mouse_right:
                    right = True
        if mouse_position is not None:
            self.mouse_position = mouse_position
        return FrameInput(self.mouse_position, left, right, frame_time)


# ============================ Game ============================
class Game:
    RESULT_TEXT = {GameStatus.WON: "GAME CLEAR", GameStatus.LOST: "GAME OVER"}

    def __init__(self, field_config: FieldConfig = config.default_field):
        pygame.init()
        pygame.display.set_caption(config.title)
        self.field_config = field_config
        self.clock = pygame.time.Clock()
        self.screen = pygame.display.set_mode(config.display_dimension_for(field_config))
        self.field = Field(field_config)
        self.renderer = Renderer(self.screen, self.field)
        self.input = InputController()
        self.frame_time = 0.0

    def reset(self) -> None:
        logger.info("starting a new %dx%d game with %d mines",
                    self.field_config.width, self.field_config.height, self.field_config.mine_count)
        self.field = Field(self.field_config)
        self.renderer.field = self.field

    def draw(self) -> None:
        self.screen.fill(config.color_bg)
        self.renderer.draw_field()
        self.renderer.draw_result_overlay(self.RESULT_TEXT.get(self.field.status))
        pygame.display.flip()

    def run_step(self) -> bool:
        events = pygame.event.get()
        for event in events:
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                self.reset()

        frame = self.input.frame_input(events, self.frame_time, pygame.mouse.get_pos())
        self.field.update(frame)
        self.draw()
        self.frame_time = self.clock.tick(config.fps) / 1000.0
        return True


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    game = Game()
    while game.run_step():
        pass
    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
