"""
Pytest configuration and shared fixtures.
"""
import random

import pytest

from components import Field, GameStatus
from config import FieldConfig


def brute_force_count(field: Field, row: int, col: int) -> int:
    count = 0
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            r, c = row + dr, col + dc
            if 0 <= r < field.grid.height and 0 <= c < field.grid.width:
                if field.square_at(r, c).has_mine:
                    count += 1
    return count


@pytest.fixture
def assert_counts_match():
    """Check every non-mine square's count against a naive recount."""

    def check(field: Field) -> None:
        for row in range(field.grid.height):
            for col in range(field.grid.width):
                square = field.square_at(row, col)
                if not square.has_mine:
                    assert square.neighbor_mine_count == brute_force_count(field, row, col)

    return check


@pytest.fixture
def field_with_mines():
    """Factory for a field whose mines sit at the given (row, col) positions."""

    def build(width: int, height: int, mines):
        field = Field(FieldConfig(width, height, len(mines)), rng=random.Random(0))
        for row, col in mines:
            field.square_at(row, col).has_mine = True
        field.mines_placed = True
        field.status = GameStatus.PLAYING
        field._compute_neighbor_counts()
        return field

    return build


@pytest.fixture
def empty_field() -> Field:
    """A mine-free 3x3 field."""
    return Field(FieldConfig(3, 3, 0), rng=random.Random(0))
