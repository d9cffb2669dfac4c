"""
Puzzle state manager: pieces, phase, timer and scoring.

This module owns the authoritative tangram session. Every mutation goes
through a TangramGame method; renderers read the result back through
get_state() and never write to it.

Completion is evaluated after the triggering move, rotation or flip has been
fully applied, so the move that solves the puzzle is the one that scores.
"""

from __future__ import annotations

import enum
import logging
import math
import random
import time
from typing import Any, Callable, Iterable

import numpy as np

from src.game.board import Board
from src.game.pieces import PIECE_TYPES, ROTATIONS, transform_outline

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    """Top-level mode of the puzzle session."""
    IDLE = "idle"
    PLAYING = "playing"
    SOLVED = "solved"


COMPLETION_SCORE: int = 1000
TIME_BONUS_WINDOW: int = 300  # seconds; bonus is the time left in this window


class Piece:
    """One tangram piece: fixed shape plus mutable transform state.

    Attributes:
        id: Stable identifier ("A" to "G").
        outline: Read-only (n, 2) unit-square vertices.
        color: RGB display color.
        index: Position in the fixed piece list.
        position: (x, y) board offset; (0, 0) is the solved position.
        rotation: Clockwise rotation in degrees, one of 0/90/180/270.
        flipped: Whether the piece is mirrored.
        selected: Whether this is the selected piece.
        stack_order: Draw order; the largest value is drawn on top.
    """

    def __init__(self, definition: dict, index: int) -> None:
        self.id: str = definition["id"]
        self.outline: np.ndarray = definition["outline"]
        self.color: tuple[int, int, int] = definition["color"]
        self.index = index
        self.position: tuple[int, int] = (0, 0)
        self.rotation: int = 0
        self.flipped: bool = False
        self.selected: bool = False
        self.stack_order: int = index

    def is_at_solved_pose(self) -> bool:
        """True when position, rotation and flip all match the reference layout."""
        return self.position == (0, 0) and self.rotation == 0 and self.flipped is False

    def reset(self) -> None:
        """Return to the solved pose, deselected, at the default stack order."""
        self.position = (0, 0)
        self.rotation = 0
        self.flipped = False
        self.selected = False
        self.stack_order = self.index

    def vertices(self, board_size: int) -> np.ndarray:
        """Board-space polygon for the current transform."""
        return transform_outline(
            self.outline, self.position, self.rotation, self.flipped, board_size
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "outline": self.outline,
            "color": self.color,
            "position": self.position,
            "rotation": self.rotation,
            "flipped": self.flipped,
            "selected": self.selected,
            "stack_order": self.stack_order,
        }


class DragSession:
    """An in-progress pointer drag of a single piece.

    Attributes:
        piece_id: Id of the dragged piece.
        offset: Pointer position minus piece position at drag start, so the
            piece keeps its grip point instead of jumping to the pointer.
    """

    def __init__(self, piece_id: str, offset: tuple[float, float]) -> None:
        self.piece_id = piece_id
        self.offset = offset


def is_solved(pieces: Iterable[Piece]) -> bool:
    """Check whether every piece sits at its solved pose.

    Args:
        pieces: Pieces to check. Materialized into a list first so the check
            always runs over one complete snapshot.

    Returns:
        True if all pieces are at position (0, 0), rotation 0, not flipped.
    """
    snapshot = list(pieces)
    return all(piece.is_at_solved_pose() for piece in snapshot)


class TangramGame:
    """Tangram session with shuffling, dragging, rotation, flipping and scoring.

    Attributes:
        board: Board geometry used for snapping and shuffling.
        pieces: The seven pieces, in fixed definition order.
        phase: Current Phase.
        started_at: Clock reading when the current game started, or None.
        elapsed_seconds: Whole seconds since start, frozen outside PLAYING.
        score: Cumulative score; only ever increased by completions.
        hint_visible: Whether the hint overlay should be shown.
        drag: The active DragSession, or None.
    """

    def __init__(
        self,
        board: Board | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
        notifier: Callable[[int, int], None] | None = None,
        timer: Any = None,
    ) -> None:
        """Initialize an idle session with every piece at its solved pose.

        Args:
            board: Board geometry (default 400 units, 8x8 grid).
            rng: Random source for shuffles. Seed it for reproducible games.
            clock: Returns the current time in seconds.
            notifier: Called with (score, elapsed_seconds) once per completion.
            timer: Periodic tick source with start() and stop() methods. It is
                started on entering PLAYING and stopped on leaving it.
        """
        self.board = board if board is not None else Board()
        self.pieces: list[Piece] = [
            Piece(definition, index) for index, definition in enumerate(PIECE_TYPES)
        ]
        self.phase: Phase = Phase.IDLE
        self.started_at: float | None = None
        self.elapsed_seconds: int = 0
        self.score: int = 0
        self.hint_visible: bool = False
        self.drag: DragSession | None = None

        # Internal state
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock
        self._notifier = notifier
        self._timer = timer
        self._timer_running: bool = False
        self._next_stack_order: int = len(self.pieces)

    @property
    def is_playing(self) -> bool:
        return self.phase is Phase.PLAYING

    @property
    def selected_piece(self) -> Piece | None:
        for piece in self.pieces:
            if piece.selected:
                return piece
        return None

    def get_piece(self, piece_id: str) -> Piece | None:
        """Return the piece with the given id, or None if there is none."""
        for piece in self.pieces:
            if piece.id == piece_id:
                return piece
        return None

    # ── Session lifecycle ────────────────────────────────────────────────

    def start_game(self) -> None:
        """Shuffle the pieces and start a new timed game.

        Allowed from any phase. Each piece gets a random grid-aligned
        position, a random quarter-turn rotation and a coin-flip mirror.
        Stacking order goes back to the definition order.
        """
        self.phase = Phase.PLAYING
        self.started_at = self._clock()
        self.elapsed_seconds = 0
        self.hint_visible = False
        self.drag = None

        for piece in self.pieces:
            piece.position = self.board.random_position(self._rng)
            piece.rotation = self._rng.choice(ROTATIONS)
            piece.flipped = self._rng.random() < 0.5
            piece.selected = False
            piece.stack_order = piece.index
        self._next_stack_order = len(self.pieces)

        self._start_timer()
        logger.info("Game started (score %d)", self.score)

    def show_answer(self) -> None:
        """Reveal the reference layout and end interaction.

        Allowed from any phase. Score and elapsed time are left as they are.
        """
        self.phase = Phase.SOLVED
        self.hint_visible = False
        self.drag = None
        for piece in self.pieces:
            piece.reset()
        self._next_stack_order = len(self.pieces)
        self._stop_timer()
        logger.info("Answer shown after %ds", self.elapsed_seconds)

    def tick(self) -> int:
        """Timer callback: refresh elapsed_seconds while PLAYING.

        Returns:
            The (possibly frozen) elapsed time in whole seconds.
        """
        if self.is_playing:
            self._refresh_elapsed()
        return self.elapsed_seconds

    def close(self) -> None:
        """Tear down the session: drop any drag and release the timer."""
        self.drag = None
        self._stop_timer()

    # ── Piece operations ─────────────────────────────────────────────────

    def begin_drag(self, piece_id: str, pointer: tuple[float, float]) -> None:
        """Start dragging a piece from a board-space pointer position.

        No-op unless PLAYING, or if the piece id is unknown.
        """
        if not self.is_playing:
            logger.debug("Ignoring drag of %s outside a game", piece_id)
            return
        piece = self.get_piece(piece_id)
        if piece is None:
            logger.debug("Ignoring drag of unknown piece %r", piece_id)
            return

        offset = (pointer[0] - piece.position[0], pointer[1] - piece.position[1])
        self.drag = DragSession(piece.id, offset)
        self._select(piece)
        self._bring_to_front(piece)

    def update_drag(self, pointer: tuple[float, float]) -> None:
        """Move the dragged piece to follow a board-space pointer position.

        The new position is clamped to the board and snapped to the grid.
        No-op without an active drag session.
        """
        if self.drag is None:
            return
        piece = self.get_piece(self.drag.piece_id)
        if piece is None:
            return
        offset_x, offset_y = self.drag.offset
        piece.position = self.board.resolve(pointer[0] - offset_x, pointer[1] - offset_y)

    def end_drag(self) -> None:
        """Finish the active drag and check for completion.

        No-op without an active drag session.
        """
        if self.drag is None:
            return
        self.drag = None
        self.evaluate_completion()

    def rotate_piece(self, piece_id: str) -> None:
        """Rotate a piece 90 degrees clockwise. No-op unless PLAYING."""
        piece = self._piece_for_action(piece_id)
        if piece is None:
            return
        piece.rotation = (piece.rotation + 90) % 360
        self._select(piece)
        self._bring_to_front(piece)
        self.evaluate_completion()

    def flip_piece(self, piece_id: str) -> None:
        """Mirror a piece about its vertical axis. No-op unless PLAYING."""
        piece = self._piece_for_action(piece_id)
        if piece is None:
            return
        piece.flipped = not piece.flipped
        self._select(piece)
        self._bring_to_front(piece)
        self.evaluate_completion()

    def rotate_selected(self) -> None:
        """Rotate whichever piece is selected; no-op if none is."""
        piece = self.selected_piece
        if piece is None:
            return
        self.rotate_piece(piece.id)

    def set_hint_visible(self, visible: bool) -> None:
        """Show or hide the hint overlay. Allowed in every phase."""
        self.hint_visible = bool(visible)

    # ── Completion ───────────────────────────────────────────────────────

    def evaluate_completion(self) -> bool:
        """Check for a solved board and award the score if so.

        Only a PLAYING session can complete, so a finished game never scores
        twice. On completion the game stops, the score increases by
        1000 + max(0, 300 - elapsed_seconds), and the notifier is called with
        the new score and elapsed time.

        Returns:
            True if this call completed the puzzle.
        """
        if not self.is_playing:
            return False
        if not is_solved(self.pieces):
            return False

        self._refresh_elapsed()
        self.phase = Phase.SOLVED
        self.drag = None
        self._stop_timer()

        time_bonus = max(0, TIME_BONUS_WINDOW - self.elapsed_seconds)
        self.score = self.score + COMPLETION_SCORE + time_bonus
        logger.info(
            "Puzzle solved in %ds, score %d (time bonus %d)",
            self.elapsed_seconds, self.score, time_bonus,
        )
        if self._notifier is not None:
            self._notifier(self.score, self.elapsed_seconds)
        return True

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, x: float, y: float) -> str | None:
        """Return the id of the topmost piece covering a board-space point."""
        for piece in sorted(self.pieces, key=lambda p: p.stack_order, reverse=True):
            if Board.polygon_contains(piece.vertices(self.board.size), x, y):
                return piece.id
        return None

    def get_state(self) -> dict[str, Any]:
        """Return a dict describing the full observable session state.

        Returns:
            Dict with keys:
              - phase: Phase
              - elapsed_seconds: int
              - score: int
              - hint_visible: bool
              - dragging: id of the dragged piece or None
              - pieces: list of per-piece dicts (see Piece.to_dict), in
                definition order
        """
        return {
            "phase": self.phase,
            "elapsed_seconds": self.elapsed_seconds,
            "score": self.score,
            "hint_visible": self.hint_visible,
            "dragging": self.drag.piece_id if self.drag is not None else None,
            "pieces": [piece.to_dict() for piece in self.pieces],
        }

    # ── Internals ────────────────────────────────────────────────────────

    def _piece_for_action(self, piece_id: str) -> Piece | None:
        if not self.is_playing:
            logger.debug("Ignoring action on %s outside a game", piece_id)
            return None
        piece = self.get_piece(piece_id)
        if piece is None:
            logger.debug("Ignoring action on unknown piece %r", piece_id)
        return piece

    def _select(self, target: Piece) -> None:
        for piece in self.pieces:
            piece.selected = piece is target

    def _bring_to_front(self, piece: Piece) -> None:
        # Counter only grows, so the raised piece always outranks the rest.
        piece.stack_order = self._next_stack_order
        self._next_stack_order += 1

    def _refresh_elapsed(self) -> None:
        if self.started_at is None:
            return
        self.elapsed_seconds = max(0, math.floor(self._clock() - self.started_at))

    def _start_timer(self) -> None:
        if self._timer is None:
            return
        if self._timer_running:
            self._timer.stop()
        self._timer.start()
        self._timer_running = True

    def _stop_timer(self) -> None:
        if self._timer is None or not self._timer_running:
            return
        self._timer.stop()
        self._timer_running = False
