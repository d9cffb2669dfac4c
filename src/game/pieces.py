"""
Tangram piece definitions and outline transforms.

The seven pieces tile the unit square when every piece sits at its solved
pose. Outlines are stored as (x, y) vertices in [0, 1] x [0, 1] and are scaled
to the full board size when drawn.

Coordinate convention:
  - x increases rightward, y increases downward.
  - Rotation is clockwise on screen in 90 degree steps.
  - A flipped piece is mirrored about its vertical centre line before it is
    rotated.
"""

from __future__ import annotations

import numpy as np

# =============================================================================
# Piece Colors (RGB)
# =============================================================================

COLOR_RED    = (255, 0, 0)      # A
COLOR_BLUE   = (0, 0, 255)      # B
COLOR_GREEN  = (0, 128, 0)      # C
COLOR_YELLOW = (255, 255, 0)    # D
COLOR_PURPLE = (128, 0, 128)    # E
COLOR_ORANGE = (255, 165, 0)    # F
COLOR_PINK   = (255, 192, 203)  # G

ROTATIONS: tuple[int, ...] = (0, 90, 180, 270)


def _outline(*points: tuple[float, float]) -> np.ndarray:
    """Build a read-only (n, 2) outline array."""
    outline = np.array(points, dtype=np.float64)
    outline.flags.writeable = False
    return outline


# =============================================================================
# Tangram Definitions
# =============================================================================

A_PIECE: dict = {
    "id": "A",
    "color": COLOR_RED,
    "outline": _outline((0, 0), (0.5, 0.5), (0, 1)),
}

B_PIECE: dict = {
    "id": "B",
    "color": COLOR_BLUE,
    "outline": _outline((1, 0), (1, 1), (0.5, 0.5)),
}

C_PIECE: dict = {
    "id": "C",
    "color": COLOR_GREEN,
    "outline": _outline((0.5, 0.5), (1, 0), (0.5, 0)),
}

D_PIECE: dict = {
    "id": "D",
    "color": COLOR_YELLOW,
    "outline": _outline((0, 0), (0.25, 0.25), (0.5, 0)),
}

E_PIECE: dict = {
    "id": "E",
    "color": COLOR_PURPLE,
    "outline": _outline((0.5, 0), (0.75, 0.25), (1, 0)),
}

F_PIECE: dict = {
    "id": "F",
    "color": COLOR_ORANGE,
    "outline": _outline((0.25, 0.25), (0.5, 0.5), (0.75, 0.25), (0.5, 0)),
}

G_PIECE: dict = {
    "id": "G",
    "color": COLOR_PINK,
    "outline": _outline((0.75, 0.25), (1, 0.5), (1, 1), (0.5, 0.5)),
}

# Ordered list; the index doubles as the default stacking order.
PIECE_TYPES: list[dict] = [
    A_PIECE,
    B_PIECE,
    C_PIECE,
    D_PIECE,
    E_PIECE,
    F_PIECE,
    G_PIECE,
]

# Exact (cos, sin) pairs so quarter turns stay free of float noise.
_QUARTER_TURNS: dict[int, tuple[int, int]] = {
    0: (1, 0),
    90: (0, 1),
    180: (-1, 0),
    270: (0, -1),
}


def transform_outline(
    outline: np.ndarray,
    position: tuple[float, float],
    rotation: int,
    flipped: bool,
    board_size: int,
) -> np.ndarray:
    """Map a unit-square outline to board-space vertices.

    The outline is scaled to the board, mirrored about the vertical centre
    line if flipped, rotated clockwise about the board centre, then offset by
    the piece position.

    Args:
        outline: (n, 2) unit-square vertices.
        position: (x, y) piece offset in board units.
        rotation: Rotation in degrees (0, 90, 180 or 270).
        flipped: Whether the piece is mirrored.
        board_size: Side length of the board.

    Returns:
        A new (n, 2) float array of board-space vertices.
    """
    cos, sin = _QUARTER_TURNS[rotation % 360]
    centre = board_size / 2.0
    points = outline * board_size - centre
    if flipped:
        points = points * np.array([-1.0, 1.0])
    matrix = np.array([[cos, -sin], [sin, cos]], dtype=np.float64)
    rotated = points @ matrix.T
    return rotated + centre + np.asarray(position, dtype=np.float64)
