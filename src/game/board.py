"""
Board geometry for the tangram grid.

The board is a square of ``size`` units subdivided into ``grid_size`` x
``grid_size`` cells. Piece positions are offsets of the piece's bounding box
in board units:
  - (0, 0) is the top-left corner and y increases downward.
  - A position is valid when each axis lies in [0, size - cell_size] and is a
    multiple of the cell size.
"""

from __future__ import annotations

import math
import random

import numpy as np


class Board:
    """Square board with clamping, grid snapping and hit testing.

    Attributes:
        size: Side length of the board in board units (default 400).
        grid_size: Number of cells along each side (default 8).
        cell_size: Side length of one cell (size / grid_size).
    """

    def __init__(self, size: int = 400, grid_size: int = 8) -> None:
        """Initialize the board geometry.

        Args:
            size: Side length of the board.
            grid_size: Number of grid cells along each side.

        Raises:
            ValueError: If either value is not positive, or the grid does not
                divide the board evenly.
        """
        if size <= 0 or grid_size <= 0:
            raise ValueError(f"Board size and grid size must be positive, got {size} and {grid_size}")
        if size % grid_size != 0:
            raise ValueError(f"Grid size {grid_size} does not divide board size {size}")
        self.size = size
        self.grid_size = grid_size
        self.cell_size = size // grid_size

    @property
    def max_offset(self) -> int:
        """Largest allowed position on either axis."""
        return self.size - self.cell_size

    def clamp(self, value: float) -> float:
        """Clamp a coordinate to [0, size - cell_size]."""
        return max(0, min(value, self.max_offset))

    def snap(self, value: float) -> int:
        """Clamp a coordinate and round it to the nearest grid line.

        Halves round up, so 25 snaps to 50 on a 50-unit grid.

        Args:
            value: Board-space coordinate on one axis.

        Returns:
            A multiple of ``cell_size`` in [0, size - cell_size].
        """
        clamped = self.clamp(value)
        return int(math.floor(clamped / self.cell_size + 0.5)) * self.cell_size

    def resolve(self, x: float, y: float) -> tuple[int, int]:
        """Clamp and snap a board-space point on both axes."""
        return self.snap(x), self.snap(y)

    def random_position(self, rng: random.Random) -> tuple[int, int]:
        """Pick a uniformly random grid-aligned position.

        Args:
            rng: Random source (seed it for reproducible shuffles).

        Returns:
            (x, y) with each axis a multiple of ``cell_size`` in
            [0, size - cell_size].
        """
        cells = self.grid_size
        x = rng.randrange(cells) * self.cell_size
        y = rng.randrange(cells) * self.cell_size
        return x, y

    def grid_lines(self) -> list[tuple[tuple[int, int], tuple[int, int]]]:
        """Return the (start, end) segments of the reference grid.

        There are ``grid_size + 1`` vertical and ``grid_size + 1`` horizontal
        lines, including the board edges.
        """
        lines = []
        for i in range(self.grid_size + 1):
            offset = i * self.cell_size
            lines.append(((offset, 0), (offset, self.size)))
            lines.append(((0, offset), (self.size, offset)))
        return lines

    @property
    def play_extent(self) -> int:
        """Furthest board-space coordinate any piece can cover.

        Pieces are board-sized boxes offset by up to ``max_offset``, and
        quarter turns about the box centre keep them inside that box.
        """
        return self.max_offset + self.size

    def in_play_area(self, x: float, y: float) -> bool:
        """Check whether a board-space point lies where pieces can reach."""
        return 0 <= x < self.play_extent and 0 <= y < self.play_extent

    @staticmethod
    def polygon_contains(polygon: np.ndarray, x: float, y: float) -> bool:
        """Even-odd ray casting test for a point inside a polygon.

        Args:
            polygon: Array of shape (n, 2) with vertices in order.
            x: Point x coordinate.
            y: Point y coordinate.

        Returns:
            True if the point is strictly inside the polygon.
        """
        xs = polygon[:, 0]
        ys = polygon[:, 1]
        next_xs = np.roll(xs, -1)
        next_ys = np.roll(ys, -1)
        # Edges that straddle the horizontal line through y
        straddles = (ys > y) != (next_ys > y)
        with np.errstate(divide="ignore", invalid="ignore"):
            crossing_x = xs + (y - ys) * (next_xs - xs) / (next_ys - ys)
        crossings = straddles & (x < crossing_x)
        return bool(np.count_nonzero(crossings) % 2 == 1)
