"""
Render the solved tangram layout to a PNG for the hint overlay.

Uses PIL only (no pygame needed), so the asset can be generated headless.
"""

from __future__ import annotations

import pathlib

from PIL import Image, ImageDraw

from src.game.board import Board
from src.game.pieces import PIECE_TYPES, transform_outline

BG_COLOR = (255, 255, 255)
GRID_LINE_COLOR = (200, 200, 200)
OUTLINE_COLOR = (0, 0, 0)


def render_hint(board: Board) -> Image.Image:
    """Draw the reference grid and every piece at its solved pose.

    Args:
        board: Board geometry; the image is board.size pixels square.

    Returns:
        An RGB PIL image.
    """
    img = Image.new("RGB", (board.size, board.size), BG_COLOR)
    draw = ImageDraw.Draw(img)

    for start, end in board.grid_lines():
        draw.line([start, end], fill=GRID_LINE_COLOR, width=1)

    for piece in PIECE_TYPES:
        vertices = transform_outline(piece["outline"], (0, 0), 0, False, board.size)
        points = [tuple(point) for point in vertices.tolist()]
        draw.polygon(points, fill=piece["color"], outline=OUTLINE_COLOR)

    return img


def save_hint(board: Board, output_path: str | pathlib.Path) -> pathlib.Path:
    """Render the hint image and write it as PNG, creating parent dirs.

    Returns:
        The path written.
    """
    output_path = pathlib.Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    render_hint(board).save(str(output_path), format="PNG")
    return output_path
