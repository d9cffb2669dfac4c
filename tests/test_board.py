import random

import numpy as np
import pytest

from src.game.board import Board


@pytest.fixture
def board():
    return Board()


def test_default_geometry(board):
    assert board.size == 400
    assert board.grid_size == 8
    assert board.cell_size == 50
    assert board.max_offset == 350


@pytest.mark.parametrize("size, grid_size", [(0, 8), (400, 0), (-400, 8), (400, 7)])
def test_invalid_geometry_rejected(size, grid_size):
    with pytest.raises(ValueError):
        Board(size, grid_size)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, 0),
        (24.9, 0),
        (25, 50),  # halves round up
        (74, 50),
        (76, 100),
        (349, 350),
        (437, 350),
        (-12, 0),
        (-1000, 0),
    ],
)
def test_snap(board, value, expected):
    assert board.snap(value) == expected


def test_snap_is_idempotent_and_grid_aligned(board):
    for value in np.linspace(-100, 500, 241):
        snapped = board.snap(value)
        assert board.snap(snapped) == snapped
        assert snapped % board.cell_size == 0
        assert 0 <= snapped <= board.max_offset


def test_resolve_clamps_then_snaps(board):
    assert board.resolve(437, -12) == (350, 0)
    assert board.resolve(126, 174) == (150, 150)


def test_random_position_is_on_grid(board):
    rng = random.Random(0)
    seen = set()
    for _ in range(500):
        x, y = board.random_position(rng)
        assert x % 50 == 0 and y % 50 == 0
        assert 0 <= x <= 350 and 0 <= y <= 350
        seen.add(x)
    assert seen == {0, 50, 100, 150, 200, 250, 300, 350}


def test_grid_lines_cover_board(board):
    lines = board.grid_lines()
    assert len(lines) == 2 * (board.grid_size + 1)
    assert ((400, 0), (400, 400)) in lines
    assert ((0, 200), (400, 200)) in lines


def test_play_area_covers_every_piece_offset(board):
    assert board.play_extent == 750
    assert board.in_play_area(0, 0)
    assert board.in_play_area(420, 10)
    assert board.in_play_area(749.5, 749.5)
    assert not board.in_play_area(750, 10)
    assert not board.in_play_area(-1, 10)


def test_polygon_contains():
    triangle = np.array([[0, 0], [200, 200], [0, 400]], dtype=float)
    assert Board.polygon_contains(triangle, 10, 200)
    assert Board.polygon_contains(triangle, 100, 150)
    assert not Board.polygon_contains(triangle, 150, 50)
    assert not Board.polygon_contains(triangle, 300, 200)
