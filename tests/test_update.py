import random

import pytest

from components import Field, FrameInput, GameStatus
from config import FieldConfig


@pytest.fixture
def field() -> Field:
    return Field(FieldConfig(3, 3, 0), rng=random.Random(0))


def at(field: Field, i: int, **kwargs) -> FrameInput:
    return FrameInput(field.grid.square_center(i), **kwargs)


def test_left_click_reveals_hovered_square(field):
    field.update(at(field, 4, left_clicked=True))

    assert all(s.is_revealed for s in field.squares)
    assert field.status is GameStatus.WON


def test_left_click_outside_the_field_does_nothing(field):
    field.update(FrameInput((5, 5), left_clicked=True))

    assert field.mines_placed is False
    assert not any(s.is_revealed for s in field.squares)


def test_right_click_toggles_flag(field):
    field.update(at(field, 0, right_clicked=True))
    assert field.squares[0].has_flag

    field.update(at(field, 0, right_clicked=True))
    assert not field.squares[0].has_flag
    assert field.squares[0].is_hovering
    assert field.squares[0].fade.is_running()


def test_left_click_on_flagged_square_is_ignored(field):
    field.update(at(field, 0, right_clicked=True))
    field.update(at(field, 0, left_clicked=True))

    assert not field.squares[0].is_revealed
    assert field.squares[0].has_flag
    assert field.mines_placed is False


def test_hover_fades_in_and_out(field):
    square = field.squares[4]

    field.update(at(field, 4, frame_time=0.1))
    assert square.is_hovering
    assert square.hover_progress == pytest.approx(0.5)

    field.update(FrameInput((0, 0), frame_time=0.05))
    assert not square.is_hovering
    assert square.hover_progress == pytest.approx(0.25)

    field.update(FrameInput((0, 0), frame_time=1.0))
    assert square.hover_progress == 0.0
    assert not square.fade.is_running()


def test_only_one_square_hovers_on_a_shared_edge(field):
    left, top, w, _ = field.grid.hitbox(0)
    field.update(FrameInput((left + w, top + 1)))

    hovering = [i for i, s in field.iter_squares() if s.is_hovering]
    assert hovering == [1]


def test_flagged_square_does_not_change_hover(field):
    field.update(at(field, 0, right_clicked=True))
    field.update(FrameInput((0, 0), frame_time=0.1))

    assert field.squares[0].has_flag
    assert not field.squares[0].is_hovering
    assert field.squares[0].hover_progress == 0.0


def test_clicks_ignored_after_loss(field_with_mines):
    field = field_with_mines(4, 4, [(3, 3)])
    mine = field.grid.to_index(3, 3)
    field.update(at(field, mine, left_clicked=True))
    assert field.status is GameStatus.LOST

    field.update(at(field, 0, right_clicked=True))
    assert field.flags_placed() == 0


def test_left_click_on_flagged_square_still_handles_right_click(field):
    field.update(at(field, 0, right_clicked=True))

    field.update(at(field, 0, left_clicked=True, right_clicked=True, frame_time=0.1))

    square = field.squares[0]
    assert not square.has_flag
    assert not square.is_revealed
    assert square.is_hovering
    assert square.hover_progress == pytest.approx(0.5)
