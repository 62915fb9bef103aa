"""
Presentation adapter: turns Field state into draw primitives.

Each square gets a SquareVisual derived only from its own state, so the
picture can be rebuilt from scratch every frame. ``draw_list`` flattens the
visuals into rectangles, text labels and sprite placements that any host
can draw; run.py draws them with pygame.
"""

import enum
from typing import List, NamedTuple, Optional, Tuple, Union

import config
from components import Field, Square

Color = Tuple[int, int, int]


class Glyph(enum.Enum):
    NONE = "none"
    PAWN = "pawn"
    FLAG = "flag"
    MINE = "mine"
    NUMBER = "number"


class Sprite(enum.Enum):
    BLACK_QUEEN = "black_queen"
    WHITE_PAWN = "white_pawn"
    FLAG = "flag"


GLYPH_SPRITES = {
    Glyph.PAWN: Sprite.WHITE_PAWN,
    Glyph.FLAG: Sprite.FLAG,
    Glyph.MINE: Sprite.BLACK_QUEEN,
}


class SquareVisual(NamedTuple):
    fill: Color
    glyph: Glyph = Glyph.NONE
    number: int = 0


class FilledRect(NamedTuple):
    rect: Tuple[float, float, float, float]
    color: Color


class TextLabel(NamedTuple):
    text: str
    color: Color
    center: Tuple[float, float]


class SpritePlacement(NamedTuple):
    sprite: Sprite
    center: Tuple[float, float]


Primitive = Union[FilledRect, TextLabel, SpritePlacement]


def interpolate(a: Color, b: Color, t: float) -> Color:
    return tuple(round(x + (y - x) * t) for x, y in zip(a, b))


def number_color(count: int) -> Optional[Color]:
    return config.number_colors.get(count)


def square_visual(square: Square) -> SquareVisual:
    """Visual state of one square."""
    if square.is_revealed:
        if square.has_mine:
            return SquareVisual(config.color_mine, Glyph.MINE)
        if square.neighbor_mine_count:
            return SquareVisual(config.color_revealed, Glyph.NUMBER, square.neighbor_mine_count)
        return SquareVisual(config.color_revealed)
    if square.has_flag:
        return SquareVisual(config.color_revealed, Glyph.FLAG)
    fill = interpolate(config.color_hidden, config.color_hover, square.fade.curve_progress())
    return SquareVisual(fill, Glyph.PAWN)


def draw_list(field: Field) -> List[Primitive]:
    """All primitives for ``field``: rectangles, then labels, then sprites."""
    rects, texts, sprites = [], [], []
    for i, square in field.iter_squares():
        visual = square_visual(square)
        rects.append(FilledRect(field.grid.square_rect(i), visual.fill))
        center = field.grid.square_center(i)
        if visual.glyph is Glyph.NUMBER:
            texts.append(TextLabel(str(visual.number), number_color(visual.number), center))
        elif visual.glyph in GLYPH_SPRITES:
            sprites.append(SpritePlacement(GLYPH_SPRITES[visual.glyph], center))
    return rects + texts + sprites
