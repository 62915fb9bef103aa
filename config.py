"""
Configuration for Queensweeper.

Display constants are plain module attributes read by the presentation
layer and the host (``config.square_size``, ``config.color_hidden``...).
The playing field itself is described by an immutable FieldConfig that is
handed to components.Field at construction time.
"""

from dataclasses import dataclass


class FieldConfigError(ValueError):
    """Raised when a field cannot be built from the given dimensions/mines."""


@dataclass(frozen=True)
class FieldConfig:
    """Size and mine count of one game session.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Number of mines placed on the first reveal.
    """

    width: int = 24
    height: int = 14
    mine_count: int = 80

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise FieldConfigError(
                f"Field dimensions must be positive, got {self.width}x{self.height}."
            )
        if self.mine_count < 0:
            raise FieldConfigError(f"Mine count must not be negative, got {self.mine_count}.")
        if self.mine_count > self.max_mines:
            raise FieldConfigError(
                f"Too many mines: {self.mine_count} exceeds {self.max_mines} for a "
                f"{self.width}x{self.height} field with a 3x3 safe zone."
            )

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def max_mines(self) -> int:
        """Largest mine count that still fits outside any first-click safe zone."""
        safe_zone = min(3, self.width) * min(3, self.height)
        return self.cell_count - safe_zone


# Field
default_field = FieldConfig()

# Layout (pixels)
square_size = 60
square_gap = 4
margin = square_size

# Window
title = "Queensweeper"
fps = 60

# Fonts
font_name = None
font_size = 38
result_font_size = 64

# Animation
fade_duration = 0.2
fade_curve_power = 2.0

# Mouse buttons
mouse_left = 1
mouse_right = 3

# Colors
color_bg = (128, 128, 128)
color_revealed = (192, 192, 192)
color_hidden = (220, 220, 220)
color_hover = (255, 255, 255)
color_mine = (255, 0, 0)
color_flag = (200, 30, 30)
color_flag_pole = (40, 40, 40)
color_queen = (20, 20, 20)
color_pawn = (250, 250, 250)
color_pawn_outline = (90, 90, 90)
color_result = (255, 255, 255)
result_overlay_alpha = 150

number_colors = {
    1: (2, 20, 253),
    2: (1, 126, 20),
    3: (254, 0, 0),
    4: (1, 1, 128),
    5: (126, 3, 3),
    6: (0, 128, 128),
    7: (0, 0, 0),
    8: (128, 128, 128),
}


def display_dimension_for(field: FieldConfig):
    """Window size that fits ``field`` with a one-square margin all around."""
    return (
        2 * margin + field.width * square_size,
        2 * margin + field.height * square_size,
    )
