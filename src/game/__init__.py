"""Game logic: board geometry, tangram pieces, and the puzzle session."""

from src.game.pieces import PIECE_TYPES, ROTATIONS, transform_outline
from src.game.board import Board
from src.game.tangram import DragSession, Phase, Piece, TangramGame, is_solved

__all__ = [
    "PIECE_TYPES",
    "ROTATIONS",
    "transform_outline",
    "Board",
    "DragSession",
    "Phase",
    "Piece",
    "TangramGame",
    "is_solved",
]
