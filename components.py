"""
Core game logic for Queensweeper.

This module contains the field model without any pygame concerns. It defines:
- Grid: index <-> (row, col) mapping, bounds, neighbours and pixel layout
- Square: mutable state of a single square
- FrameInput: the per-frame input snapshot delivered by the host
- Field: mine placement, neighbour counts, flood-fill reveal, flags and
  per-frame input handling

The Field exposes imperative methods that the host (run.py) calls once per
frame, and does not know anything about rendering, timing, or input devices.
"""

import enum
import logging
import random
from typing import Iterator, List, NamedTuple, Optional, Tuple

import config
from animation import FadeAnimation
from config import FieldConfig, FieldConfigError

logger = logging.getLogger(__name__)

__all__ = [
    "FieldConfigError",
    "FieldStateError",
    "FrameInput",
    "GameStatus",
    "Grid",
    "Square",
    "Field",
]

ORTHOGONAL = ((-1, 0), (0, -1), (0, 1), (1, 0))


class FieldStateError(RuntimeError):
    """Raised when an operation is not allowed in the current field state."""


class GameStatus(enum.Enum):
    READY = "ready"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class FrameInput(NamedTuple):
    """Input for one frame, in the same pixel space as the field layout.

    Clicks are edge-triggered: true for exactly one frame per physical click.
    """

    mouse_position: Tuple[float, float] = (-1.0, -1.0)
    left_clicked: bool = False
    right_clicked: bool = False
    frame_time: float = 0.0


class Grid:
    """Geometry of the field: indices, coordinates and pixel rectangles.

    Indices are row-major: ``row = i // width`` and ``col = i % width``.
    ``to_index`` and ``to_coord`` expect valid input; check with
    ``in_bounds`` / ``contains_index`` first.
    """

    def __init__(
        self,
        width: int,
        height: int,
        square_size: float = config.square_size,
        square_gap: float = config.square_gap,
        origin: Tuple[float, float] = (config.margin, config.margin),
    ):
        self.width = width
        self.height = height
        self.square_size = square_size
        self.square_gap = square_gap
        self.origin = origin

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def to_coord(self, i: int) -> Tuple[int, int]:
        return divmod(i, self.width)

    def to_index(self, row: int, col: int) -> int:
        return row * self.width + col

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def contains_index(self, i: int) -> bool:
        return 0 <= i < self.cell_count

    def neighbors8(self, row: int, col: int) -> List[Tuple[int, int]]:
        result = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = row + dr, col + dc
                if self.in_bounds(nr, nc):
                    result.append((nr, nc))
        return result

    def orthogonal(self, row: int, col: int) -> List[Tuple[int, int]]:
        return [
            (row + dr, col + dc)
            for dr, dc in ORTHOGONAL
            if self.in_bounds(row + dr, col + dc)
        ]

    def safe_zone(self, i: int) -> List[int]:
        """Index ``i`` and its in-bounds 8-neighbourhood."""
        row, col = self.to_coord(i)
        return [i] + [self.to_index(r, c) for r, c in self.neighbors8(row, col)]

    # ------------------------------------------------------------------
    # Pixel layout
    # ------------------------------------------------------------------
    def square_center(self, i: int) -> Tuple[float, float]:
        row, col = self.to_coord(i)
        x = self.origin[0] + (col + 0.5) * self.square_size
        y = self.origin[1] + (row + 0.5) * self.square_size
        return x, y

    def square_rect(self, i: int) -> Tuple[float, float, float, float]:
        """Drawn rectangle (left, top, width, height), shrunk by the gap."""
        cx, cy = self.square_center(i)
        side = self.square_size - self.square_gap
        return cx - side / 2, cy - side / 2, side, side

    def hitbox(self, i: int) -> Tuple[float, float, float, float]:
        """Drawn rectangle grown by half the gap on every side."""
        left, top, side, _ = self.square_rect(i)
        grow = self.square_gap / 2
        return left - grow, top - grow, side + 2 * grow, side + 2 * grow

    def hitbox_contains(self, i: int, point: Tuple[float, float]) -> bool:
        left, top, w, h = self.hitbox(i)
        x, y = point
        return left <= x < left + w and top <= y < top + h


class Square:
    """Mutable state of a single square.

    Attributes:
        has_mine: Whether this square holds a mine; set once on first reveal.
        is_revealed: Whether the square has been revealed; never reverts.
        has_flag: Whether the player flagged this square.
        neighbor_mine_count: Mines among the up to 8 neighbours.
        is_hovering: Whether the mouse is over the square.
        fade: Hover fade animation.
        visited: Scratch flag for a single flood fill.
    """

    def __init__(self):
        self.has_mine = False
        self.is_revealed = False
        self.has_flag = False
        self.neighbor_mine_count = 0
        self.is_hovering = False
        self.fade = FadeAnimation()
        self.visited = False

    @property
    def hover_progress(self) -> float:
        return self.fade.progress


class Field:
    """Queensweeper field state and rules.

    Responsibilities:
    - Place mines on the first reveal, keeping the clicked square and its
      neighbours free
    - Compute neighbour mine counts
    - Reveal squares with a worklist flood fill
    - Toggle flags, track win/loss
    - Translate one frame of mouse input into reveals, flags and hover state
    """

    def __init__(
        self,
        field_config: FieldConfig = config.default_field,
        rng: Optional[random.Random] = None,
        grid: Optional[Grid] = None,
    ):
        self.config = field_config
        self.grid = grid or Grid(field_config.width, field_config.height)
        if (self.grid.width, self.grid.height) != (field_config.width, field_config.height):
            raise FieldConfigError("Grid dimensions do not match the field config.")
        self.mine_count = field_config.mine_count
        self.rng = rng or random.Random()
        self.squares: List[Square] = [Square() for _ in range(self.grid.cell_count)]
        self.mines_placed = False
        self.status = GameStatus.READY

    @property
    def is_finished(self) -> bool:
        return self.status in (GameStatus.WON, GameStatus.LOST)

    def iter_squares(self) -> Iterator[Tuple[int, Square]]:
        return enumerate(self.squares)

    def square_at(self, row: int, col: int) -> Square:
        if not self.grid.in_bounds(row, col):
            raise IndexError(f"Square ({row}, {col}) is out of bounds.")
        return self.squares[self.grid.to_index(row, col)]

    def _check_index(self, i: int) -> Square:
        if not self.grid.contains_index(i):
            raise IndexError(f"Square index {i} is out of range 0..{self.grid.cell_count - 1}.")
        return self.squares[i]

    # ------------------------------------------------------------------
    # Mine placement
    # ------------------------------------------------------------------
    def place_mines(self, safe_index: int) -> None:
        """Place mines anywhere except ``safe_index`` and its neighbours."""
        self._check_index(safe_index)
        if self.mines_placed:
            raise FieldStateError("Mines have already been placed.")

        forbidden = set(self.grid.safe_zone(safe_index))
        pool = [i for i in range(self.grid.cell_count) if i not in forbidden]
        if self.mine_count > len(pool):
            raise FieldConfigError(
                f"Cannot place {self.mine_count} mines outside the safe zone; "
                f"only {len(pool)} squares available."
            )

        for i in self.rng.sample(pool, self.mine_count):
            self.squares[i].has_mine = True
        self.mines_placed = True
        self._compute_neighbor_counts()
        logger.debug(
            "placed %d mines on %dx%d field, safe square %d",
            self.mine_count, self.grid.width, self.grid.height, safe_index,
        )

    def _compute_neighbor_counts(self) -> None:
        for i, square in self.iter_squares():
            if square.has_mine:
                continue
            row, col = self.grid.to_coord(i)
            square.neighbor_mine_count = sum(
                1
                for r, c in self.grid.neighbors8(row, col)
                if self.squares[self.grid.to_index(r, c)].has_mine
            )

    # ------------------------------------------------------------------
    # Reveal
    # ------------------------------------------------------------------
    def reveal(self, i: int) -> List[int]:
        """Reveal square ``i`` and propagate; return the indices revealed.

        Already revealed and flagged squares are left alone. Revealing a mine
        loses the game and reveals the whole field.
        """
        square = self._check_index(i)
        if self.is_finished or square.is_revealed or square.has_flag:
            return []

        if not self.mines_placed:
            self.place_mines(i)
            self.status = GameStatus.PLAYING

        if square.has_mine:
            revealed = self.reveal_all()
            self.status = GameStatus.LOST
            logger.info("mine revealed at square %d, game lost", i)
            return revealed

        revealed = self._flood_fill(i)
        logger.debug("revealed %d squares from square %d", len(revealed), i)
        if self._all_safe_squares_revealed():
            self.status = GameStatus.WON
            logger.info("all safe squares revealed, game won")
        return revealed

    def _flood_fill(self, start: int) -> List[int]:
        """Reveal ``start`` and everything reachable from blank squares.

        From an unmined square with no neighbouring mines, orthogonal
        neighbours open when they are unmined; diagonal neighbours open only
        when they carry a number. Flagged squares never open.
        """
        for square in self.squares:
            square.visited = False

        revealed = []
        stack = [start]
        self.squares[start].visited = True
        while stack:
            i = stack.pop()
            square = self.squares[i]
            self._reveal_square(square)
            revealed.append(i)

            if square.has_mine or square.neighbor_mine_count:
                continue

            row, col = self.grid.to_coord(i)
            orthogonal = set(self.grid.orthogonal(row, col))
            for r, c in self.grid.neighbors8(row, col):
                n = self.grid.to_index(r, c)
                neighbor = self.squares[n]
                if neighbor.visited or neighbor.has_flag:
                    continue
                if (r, c) in orthogonal:
                    if neighbor.has_mine:
                        continue
                elif not neighbor.neighbor_mine_count or neighbor.has_mine:
                    continue
                neighbor.visited = True
                stack.append(n)
        return revealed

    def reveal_all(self) -> List[int]:
        """Reveal every square without propagation, clearing flags."""
        for square in self.squares:
            self._reveal_square(square)
        return list(range(self.grid.cell_count))

    @staticmethod
    def _reveal_square(square: Square) -> None:
        square.is_revealed = True
        square.visited = True
        square.has_flag = False
        square.is_hovering = False
        square.fade.reset()

    def _all_safe_squares_revealed(self) -> bool:
        return all(s.is_revealed for s in self.squares if not s.has_mine)

    # ------------------------------------------------------------------
    # Flags
    # ------------------------------------------------------------------
    def toggle_flag(self, i: int) -> bool:
        """Flip the flag on an unrevealed square; return the new flag state."""
        square = self._check_index(i)
        if self.is_finished:
            return square.has_flag
        if square.is_revealed:
            raise FieldStateError(f"Square {i} is revealed and cannot be flagged.")
        square.has_flag = not square.has_flag
        return square.has_flag

    def flags_placed(self) -> int:
        return sum(1 for s in self.squares if s.has_flag)

    def mines_remaining(self) -> int:
        """Mines left assuming every flag is correct."""
        return self.mine_count - self.flags_placed()

    # ------------------------------------------------------------------
    # Per-frame input
    # ------------------------------------------------------------------
    def update(self, frame: FrameInput) -> None:
        """Apply one frame of input: hover, reveal on left click, flag on right."""
        accept_clicks = not self.is_finished
        for i, square in self.iter_squares():
            if square.is_revealed:
                continue
            hovering = self.grid.hitbox_contains(i, frame.mouse_position)

            if hovering and accept_clicks and frame.left_clicked and not square.has_flag:
                self.reveal(i)
                accept_clicks = not self.is_finished
                continue

            if hovering and accept_clicks and frame.right_clicked:
                if not self.toggle_flag(i):
                    square.fade.go_forwards()
                    square.is_hovering = True

            if not square.has_flag:
                if hovering:
                    if not square.is_hovering:
                        square.fade.go_forwards()
                    square.is_hovering = True
                elif square.is_hovering:
                    square.is_hovering = False
                    square.fade.go_backwards()
                square.fade.update(frame.frame_time)
