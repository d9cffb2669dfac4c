"""
Pygame renderer for the tangram puzzle.

Draws the control buttons, the score / time line, the board with its
reference grid, the pieces in stacking order, and the translucent hint
overlay. The renderer only reads TangramGame.get_state(); it never mutates
the session.
"""

from __future__ import annotations

import pathlib
from typing import Any

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from src.game.tangram import TangramGame
from src.game.pieces import PIECE_TYPES, transform_outline


# ── Color constants ───────────────────────────────────────────────────────
BACKGROUND_COLOR = (240, 240, 240)
BOARD_COLOR = (255, 255, 255)
GRID_LINE_COLOR = (128, 128, 128)
BORDER_COLOR = (0, 0, 0)
SELECTED_BORDER_COLOR = (255, 255, 255)
TEXT_COLOR = (20, 20, 20)
BUTTON_TEXT_COLOR = (255, 255, 255)
BANNER_BG_COLOR = (0, 0, 0, 170)
HINT_ALPHA = 128  # 50% opacity

# ── Buttons: name -> (label, color) ───────────────────────────────────────
BUTTONS: dict[str, tuple[str, tuple[int, int, int]]] = {
    "try": ("Try", (59, 130, 246)),
    "answer": ("Answer", (34, 197, 94)),
    "hint": ("Hint", (234, 179, 8)),
    "rotate": ("Rotate", (150, 150, 150)),
}


class TangramRenderer:
    """Pygame-based renderer for a TangramGame.

    Layout:
      - Top: Try / Answer / Hint buttons, then the score and time line.
      - Middle: the board at ``origin``, with room below and to the right
        for pieces that overhang it, and the rotate button beyond that.

    Attributes:
        game: Reference to the TangramGame being rendered.
        origin: (x, y) window position of the board's top-left corner.
        hint_image: Optional path to the hint overlay image.
        window_width: Total window width.
        window_height: Total window height.
        screen: Pygame display surface (created on first render).
        buttons: Button name -> pygame.Rect, filled on first render.
    """

    BUTTON_WIDTH: int = 90
    BUTTON_HEIGHT: int = 36
    MARGIN: int = 16

    def __init__(
        self,
        game: TangramGame,
        origin: tuple[int, int] = (16, 100),
        hint_image: str | pathlib.Path | None = None,
    ) -> None:
        """Initialize the renderer.

        Does NOT create the Pygame window yet; that happens on the first call
        to render(), so constructing a renderer never opens a window.

        Args:
            game: The TangramGame instance to render.
            origin: Window position of the board's top-left corner.
            hint_image: Image shown over the board while the hint is held.
                If missing, the solved outlines are drawn instead.
        """
        if pygame is None:
            raise ImportError("pygame is required for rendering. Install it: pip install pygame")

        self.game = game
        self.origin = origin
        self.hint_image = pathlib.Path(hint_image) if hint_image else None

        # Pieces overhang the board, so the window spans everywhere they can reach
        extent = game.board.play_extent
        self.window_width = origin[0] + extent + self.BUTTON_WIDTH + 2 * self.MARGIN
        self.window_height = origin[1] + extent + self.MARGIN

        self.screen: pygame.Surface | None = None
        self.buttons: dict[str, pygame.Rect] = {}
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._hint_surface: pygame.Surface | None = None
        self._initialized: bool = False

    @property
    def board_rect(self) -> "pygame.Rect":
        size = self.game.board.size
        return pygame.Rect(self.origin[0], self.origin[1], size, size)

    def render(self, fps: int = 60, message: str | None = None) -> None:
        """Draw the current game state to the screen.

        Initializes Pygame on the first call.

        Args:
            fps: Target frames per second for the display clock.
            message: Optional banner text drawn over the board.
        """
        if not self._initialized:
            self._init_pygame()

        state = self.game.get_state()
        self.screen.fill(BACKGROUND_COLOR)
        self._draw_controls(state)
        self._draw_board()
        self._draw_pieces(state)
        if state["hint_visible"]:
            self.screen.blit(self._hint_surface, self.origin)
        if message:
            self._draw_banner(message)

        pygame.display.flip()
        self._clock.tick(fps)

    def button_at(self, pos: tuple[int, int]) -> str | None:
        """Return the name of the button under a window position, if any."""
        for name, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return name
        return None

    def _init_pygame(self) -> None:
        """Initialize Pygame display, clock, font, buttons and hint overlay.

        Called once on the first render() invocation.
        """
        pygame.init()
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Tangram Puzzle")
        self._clock = pygame.time.Clock()
        self._font = pygame.font.SysFont("sans", 20)

        x = self.MARGIN
        for name in ("try", "answer", "hint"):
            self.buttons[name] = pygame.Rect(x, self.MARGIN, self.BUTTON_WIDTH, self.BUTTON_HEIGHT)
            x += self.BUTTON_WIDTH + self.MARGIN // 2
        rotate_x = self.origin[0] + self.game.board.play_extent + self.MARGIN
        self.buttons["rotate"] = pygame.Rect(
            rotate_x, self.origin[1], self.BUTTON_WIDTH, self.BUTTON_HEIGHT
        )

        self._hint_surface = self._load_hint_surface()
        self._initialized = True

    def _load_hint_surface(self) -> "pygame.Surface":
        """Build the translucent hint overlay, scaled to the board."""
        size = self.game.board.size
        if self.hint_image is not None and self.hint_image.exists():
            image = pygame.image.load(str(self.hint_image)).convert()
            surface = pygame.transform.smoothscale(image, (size, size))
        else:
            # No asset: outline the solved layout instead
            surface = pygame.Surface((size, size))
            surface.fill(BOARD_COLOR)
            for piece in PIECE_TYPES:
                points = transform_outline(piece["outline"], (0, 0), 0, False, size)
                pygame.draw.polygon(surface, piece["color"], points.tolist())
                pygame.draw.polygon(surface, BORDER_COLOR, points.tolist(), 2)
        surface.set_alpha(HINT_ALPHA)
        return surface

    def _draw_controls(self, state: dict[str, Any]) -> None:
        """Draw the buttons and the score / time line."""
        for name, rect in self.buttons.items():
            label, color = BUTTONS[name]
            pygame.draw.rect(self.screen, color, rect, border_radius=4)
            text = self._font.render(label, True, BUTTON_TEXT_COLOR)
            self.screen.blit(text, text.get_rect(center=rect.center))

        status = f"Score: {state['score']} | Time: {state['elapsed_seconds']}s"
        text_y = self.MARGIN + self.BUTTON_HEIGHT + self.MARGIN // 2
        self._draw_text(status, self.MARGIN, text_y)

    def _draw_board(self) -> None:
        """Draw the board background, grid lines and border."""
        rect = self.board_rect
        pygame.draw.rect(self.screen, BOARD_COLOR, rect)
        ox, oy = self.origin
        for (x1, y1), (x2, y2) in self.game.board.grid_lines():
            pygame.draw.line(self.screen, GRID_LINE_COLOR, (ox + x1, oy + y1), (ox + x2, oy + y2), 1)
        pygame.draw.rect(self.screen, BORDER_COLOR, rect, 1)

    def _draw_pieces(self, state: dict[str, Any]) -> None:
        """Draw every piece in stacking order, selected piece highlighted."""
        board_size = self.game.board.size
        ox, oy = self.origin
        for piece in sorted(state["pieces"], key=lambda p: p["stack_order"]):
            vertices = transform_outline(
                piece["outline"], piece["position"], piece["rotation"], piece["flipped"], board_size
            )
            points = [(ox + x, oy + y) for x, y in vertices.tolist()]
            pygame.draw.polygon(self.screen, piece["color"], points)
            if piece["selected"]:
                pygame.draw.polygon(self.screen, SELECTED_BORDER_COLOR, points, 3)
            else:
                pygame.draw.polygon(self.screen, BORDER_COLOR, points, 1)

    def _draw_banner(self, message: str) -> None:
        """Draw a semi-transparent message banner across the board centre."""
        rect = self.board_rect
        banner = pygame.Surface((rect.width, 60), pygame.SRCALPHA)
        banner.fill(BANNER_BG_COLOR)
        self.screen.blit(banner, (rect.x, rect.centery - 30))
        text = self._font.render(message, True, BUTTON_TEXT_COLOR)
        self.screen.blit(text, text.get_rect(center=rect.center))

    def _draw_text(self, text: str, x: int, y: int, color: tuple[int, int, int] = TEXT_COLOR) -> None:
        """Render text onto the screen.

        Args:
            text: String to display.
            x: Pixel X position.
            y: Pixel Y position.
            color: RGB color tuple for the text.
        """
        surface = self._font.render(text, True, color)
        self.screen.blit(surface, (x, y))

    def close(self) -> None:
        """Shut down Pygame and close the window."""
        if self._initialized:
            pygame.quit()
            self._initialized = False
