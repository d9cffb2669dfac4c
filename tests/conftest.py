"""Shared fixtures: deterministic clock, timer and notifier fakes."""

from __future__ import annotations

import random

import pytest

from src.game.tangram import TangramGame


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTimer:
    """Records start/stop calls instead of scheduling ticks."""

    def __init__(self) -> None:
        self.starts = 0
        self.stops = 0
        self.running = False

    def start(self) -> None:
        self.starts += 1
        self.running = True

    def stop(self) -> None:
        self.stops += 1
        self.running = False


class Notifications:
    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []

    def __call__(self, score: int, elapsed_seconds: int) -> None:
        self.calls.append((score, elapsed_seconds))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture
def notifications() -> Notifications:
    return Notifications()


@pytest.fixture
def game(clock, timer, notifications) -> TangramGame:
    return TangramGame(
        rng=random.Random(1234),
        clock=clock,
        notifier=notifications,
        timer=timer,
    )


@pytest.fixture
def playing_game(game) -> TangramGame:
    """A started game with every piece parked at (100, 100), unrotated."""
    game.start_game()
    for piece in game.pieces:
        piece.position = (100, 100)
        piece.rotation = 0
        piece.flipped = False
    return game


@pytest.fixture
def solve_all_but():
    """Returns a helper that puts every piece except one at its solved pose."""

    def _solve(game: TangramGame, piece_id: str) -> None:
        for piece in game.pieces:
            if piece.id != piece_id:
                piece.position = (0, 0)
                piece.rotation = 0
                piece.flipped = False

    return _solve
