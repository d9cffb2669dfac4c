from PIL import Image

from src.game.board import Board
from src.hint_image import BG_COLOR, render_hint, save_hint
from src.game.pieces import COLOR_BLUE, COLOR_RED


def test_render_hint_draws_solved_layout():
    img = render_hint(Board())
    assert img.size == (400, 400)
    assert img.mode == "RGB"
    assert img.getpixel((10, 190)) == COLOR_RED
    assert img.getpixel((390, 120)) == COLOR_BLUE
    # The bottom triangle is not covered by any piece
    assert img.getpixel((210, 390)) == BG_COLOR


def test_render_hint_follows_board_size():
    img = render_hint(Board(size=240, grid_size=6))
    assert img.size == (240, 240)


def test_save_hint_creates_parent_dirs(tmp_path):
    output = tmp_path / "assets" / "hint.png"
    path = save_hint(Board(), output)
    assert path == output
    with Image.open(path) as img:
        assert img.format == "PNG"
        assert img.size == (400, 400)
