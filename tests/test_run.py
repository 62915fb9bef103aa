import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

import config
from components import Field, GameStatus
from config import FieldConfig
from run import Game, InputController, Renderer


@pytest.fixture
def screen():
    pygame.init()
    surface = pygame.Surface(config.display_dimension_for(FieldConfig(4, 4, 1)))
    yield surface
    pygame.quit()


def test_input_controller_edges():
    controller = InputController()
    events = [
        pygame.event.Event(pygame.MOUSEMOTION, pos=(10, 20), rel=(0, 0), buttons=(0, 0, 0)),
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(30, 40), button=config.mouse_left),
    ]

    frame = controller.frame_input(events, 0.016)

    assert frame.mouse_position == (30, 40)
    assert frame.left_clicked is True
    assert frame.right_clicked is False
    assert frame.frame_time == 0.016

    frame = controller.frame_input([], 0.016)
    assert frame.mouse_position == (30, 40)
    assert frame.left_clicked is False


def test_input_controller_right_click_and_polled_position():
    controller = InputController()
    events = [pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(5, 5), button=config.mouse_right)]

    frame = controller.frame_input(events, 0.0, mouse_position=(90, 90))

    assert frame.right_clicked is True
    assert frame.mouse_position == (90, 90)


def test_renderer_draws_every_state(screen, field_with_mines):
    field = field_with_mines(4, 4, [(0, 3)])
    field.toggle_flag(field.grid.to_index(0, 1))
    field.reveal(field.grid.to_index(3, 0))
    renderer = Renderer(screen, field)

    renderer.draw_field()
    cx, cy = field.grid.square_center(field.grid.to_index(3, 0))
    assert tuple(screen.get_at((int(cx), int(cy))))[:3] == config.color_revealed

    field.reveal(field.grid.to_index(0, 3))
    renderer.draw_field()
    renderer.draw_result_overlay("GAME OVER")


def test_game_step_and_reset():
    game = Game(FieldConfig(4, 4, 1))
    try:
        assert game.run_step() is True
        game.field.reveal(0)
        assert game.field.status is not GameStatus.READY
        game.reset()
        assert game.field.status is GameStatus.READY
        assert game.renderer.field is game.field
        assert isinstance(game.field, Field)
    finally:
        pygame.quit()
