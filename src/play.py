"""
Interactive play mode.

Runs the pygame event loop: raw mouse and keyboard events are forwarded to
the InteractionTranslator, the 1-second tick arrives as a pygame timer event,
and completions are announced with an on-screen banner.

Controls:
  - Left drag: move a piece (snaps to the grid on every move)
  - Right click: flip the piece under the cursor
  - R / F: rotate / flip the selected piece (or the one under the cursor)
  - Try: shuffle and start, Answer: show the solution, Hint (hold): overlay
  - Rotate button: rotate the selected piece
  - Escape / close window: quit
"""

from __future__ import annotations

import random
from typing import Any

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from src.game.board import Board
from src.game.tangram import TangramGame
from src.interaction import InteractionTranslator
from src.renderer import TangramRenderer

TICK_INTERVAL_MS = 1000
BANNER_DURATION_MS = 4000
LEFT_BUTTON = 1
RIGHT_BUTTON = 3

TICK_EVENT: int = 0
if pygame is not None:
    TICK_EVENT = pygame.USEREVENT + 1


class PygameTickTimer:
    """Posts TICK_EVENT once per second while started."""

    def __init__(self, event_type: int = TICK_EVENT, interval_ms: int = TICK_INTERVAL_MS) -> None:
        self.event_type = event_type
        self.interval_ms = interval_ms

    def start(self) -> None:
        pygame.time.set_timer(self.event_type, self.interval_ms)

    def stop(self) -> None:
        # An interval of 0 cancels the timer
        pygame.time.set_timer(self.event_type, 0)


def play_manual(config: dict[str, Any], seed: int | None = None) -> None:
    """Run the puzzle in interactive mode until the window is closed.

    Args:
        config: Config dict loaded from tangram.yaml.
        seed: Optional shuffle seed; overrides the config's ``seed``.
    """
    if pygame is None:
        raise ImportError("pygame is required for play mode. Install it: pip install pygame")

    board = Board(config.get("board_size", 400), config.get("grid_size", 8))
    fps = config.get("fps", 60)
    origin = tuple(config.get("board_origin", (16, 100)))
    if seed is None:
        seed = config.get("seed")

    banner: dict[str, Any] = {"text": None, "until": 0}

    def notify(score: int, elapsed_seconds: int) -> None:
        text = f"Congratulations! Your score is {score}. Time: {elapsed_seconds}s"
        print(text)
        banner["text"] = text
        banner["until"] = pygame.time.get_ticks() + BANNER_DURATION_MS

    game = TangramGame(
        board=board,
        rng=random.Random(seed),
        notifier=notify,
        timer=PygameTickTimer(),
    )
    translator = InteractionTranslator(game, origin)
    renderer = TangramRenderer(game, origin=origin, hint_image=config.get("hint_image"))
    # Force renderer init before event loop (pygame must be initialized for event.get())
    renderer.render(fps)

    hint_held = False
    running = True
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break
                elif event.type == TICK_EVENT:
                    game.tick()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                        break
                    handle_key(game, translator, pygame.key.name(event.key), pygame.mouse.get_pos())
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    control = renderer.button_at(event.pos)
                    hint_held = handle_mouse_down(game, translator, event.button, event.pos, control) or hint_held
                elif event.type == pygame.MOUSEMOTION:
                    control = renderer.button_at(event.pos)
                    hint_held = handle_mouse_motion(game, translator, event.pos, control, hint_held)
                elif event.type == pygame.MOUSEBUTTONUP:
                    hint_held = handle_mouse_up(translator, event.button, hint_held)
                elif event.type == pygame.WINDOWLEAVE:
                    translator.pointer_leave()
                    if hint_held:
                        translator.hint_leave()
                        hint_held = False

            if not running:
                break

            message = banner["text"] if pygame.time.get_ticks() < banner["until"] else None
            renderer.render(fps, message=message)
    finally:
        game.close()
        renderer.close()


# ── Event dispatch ───────────────────────────────────────────────────────
# Pieces overhang the board, so presses, moves and leaves are judged against
# the whole area pieces can reach, not just the 8x8 board square.

def handle_mouse_down(
    game: TangramGame,
    translator: InteractionTranslator,
    button: int,
    pos: tuple[float, float],
    control: str | None = None,
) -> bool:
    """Dispatch a mouse press at a window position.

    Args:
        game: Session being played.
        translator: Translator wired to ``game``.
        button: Mouse button number (1 = left, 3 = right).
        pos: Window position of the press.
        control: Name of the on-screen button under ``pos``, if any.

    Returns:
        True if the hint button was pressed (and is now held).
    """
    if button == LEFT_BUTTON:
        if control == "try":
            translator.start_control()
        elif control == "answer":
            translator.answer_control()
        elif control == "rotate":
            translator.rotate_control()
        elif control == "hint":
            translator.hint_pressed()
            return True
        else:
            piece_id = _piece_under(game, translator, pos)
            if piece_id is not None:
                translator.pointer_down(piece_id, pos)
    elif button == RIGHT_BUTTON:
        piece_id = _piece_under(game, translator, pos)
        if piece_id is not None:
            translator.secondary_action(piece_id)
    return False


def handle_mouse_motion(
    game: TangramGame,
    translator: InteractionTranslator,
    pos: tuple[float, float],
    control: str | None,
    hint_held: bool,
) -> bool:
    """Dispatch pointer motion. Returns whether the hint is still held."""
    if hint_held and control != "hint":
        translator.hint_leave()
        hint_held = False
    if game.drag is not None:
        if game.board.in_play_area(*translator.board_space(pos)):
            translator.pointer_move(pos)
        else:
            translator.pointer_leave()
    return hint_held


def handle_mouse_up(translator: InteractionTranslator, button: int, hint_held: bool) -> bool:
    """Dispatch a mouse release. Returns whether the hint is still held."""
    if button != LEFT_BUTTON:
        return hint_held
    if hint_held:
        translator.hint_released()
    translator.pointer_up()
    return False


def handle_key(
    game: TangramGame,
    translator: InteractionTranslator,
    key: str,
    mouse_pos: tuple[float, float],
) -> None:
    """Send a key press to the selected piece, else the piece under the cursor."""
    selected = game.selected_piece
    piece_id = selected.id if selected is not None else _piece_under(game, translator, mouse_pos)
    translator.key_press(piece_id, key)


def _piece_under(
    game: TangramGame,
    translator: InteractionTranslator,
    pos: tuple[float, float],
) -> str | None:
    x, y = translator.board_space(pos)
    if not game.board.in_play_area(x, y):
        return None
    return game.piece_at(x, y)
