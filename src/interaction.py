"""
Interaction translator: raw input events to puzzle operations.

The rendering surface forwards pointer, keyboard and control events here
without interpreting them. Pointer coordinates arrive in screen space and are
converted to board space by subtracting the board's on-screen origin.

Everything except the start and answer controls is ignored unless a game is
in progress.
"""

from __future__ import annotations

from src.game.tangram import TangramGame

# Key bindings for a focused piece
ROTATE_KEY = "r"
FLIP_KEY = "f"


class InteractionTranslator:
    """Maps device input onto TangramGame operations.

    Attributes:
        game: The session being controlled.
        origin: (x, y) screen position of the board's top-left corner.
    """

    def __init__(self, game: TangramGame, origin: tuple[float, float] = (0, 0)) -> None:
        self.game = game
        self.origin = origin

    def board_space(self, raw: tuple[float, float]) -> tuple[float, float]:
        """Convert a screen-space pointer position to board space."""
        return raw[0] - self.origin[0], raw[1] - self.origin[1]

    # ── Pointer ──────────────────────────────────────────────────────────

    def pointer_down(self, piece_id: str, raw: tuple[float, float]) -> None:
        """Primary button pressed over a piece: start dragging it."""
        if not self.game.is_playing:
            return
        self.game.begin_drag(piece_id, self.board_space(raw))

    def pointer_move(self, raw: tuple[float, float]) -> None:
        """Pointer moved: drag the held piece along, if any."""
        if self.game.drag is None:
            return
        self.game.update_drag(self.board_space(raw))

    def pointer_up(self) -> None:
        """Primary button released: drop the held piece, if any."""
        if self.game.drag is None:
            return
        self.game.end_drag()

    def pointer_leave(self) -> None:
        """Pointer left the board: treated exactly like a release."""
        self.pointer_up()

    def secondary_action(self, piece_id: str) -> bool:
        """Secondary button (right click) over a piece: flip it.

        Returns:
            True, meaning the platform's default action (such as a context
            menu) must be suppressed, whether or not a game is running.
        """
        if self.game.is_playing:
            self.game.flip_piece(piece_id)
        return True

    # ── Keyboard ─────────────────────────────────────────────────────────

    def key_press(self, piece_id: str | None, key: str) -> None:
        """Key pressed while a piece has focus: "r" rotates, "f" flips."""
        if not self.game.is_playing or piece_id is None:
            return
        if key == ROTATE_KEY:
            self.game.rotate_piece(piece_id)
        elif key == FLIP_KEY:
            self.game.flip_piece(piece_id)

    # ── Controls ─────────────────────────────────────────────────────────

    def start_control(self) -> None:
        """Start (or restart) a shuffled game. Always enabled."""
        self.game.start_game()

    def answer_control(self) -> None:
        """Reveal the solved layout. Always enabled."""
        self.game.show_answer()

    def rotate_control(self) -> None:
        """Rotate button: rotates the selected piece, if there is one."""
        if not self.game.is_playing:
            return
        self.game.rotate_selected()

    def hint_pressed(self) -> None:
        self.game.set_hint_visible(True)

    def hint_released(self) -> None:
        self.game.set_hint_visible(False)

    def hint_leave(self) -> None:
        """Pointer left the hint control while holding it."""
        self.game.set_hint_visible(False)
