from __future__ import annotations

from enum import Enum


class Piece(Enum):
    """Piece type. Carries no color or identity."""

    KING = "K"
    QUEEN = "Q"
    ROOK = "R"
    BISHOP = "B"
    KNIGHT = "N"
    PAWN = "P"

    @property
    def symbol(self) -> str:
        return self.value


class Color(Enum):
    """Side color."""

    BLACK = "b"
    WHITE = "w"

    @property
    def opposite(self) -> "Color":
        return Color.WHITE if self is Color.BLACK else Color.BLACK

    def __str__(self) -> str:
        return self.name.lower()


class GameState(Enum):
    """Game lifecycle state.

    ``GAME_OVER`` is never produced by the rules themselves; it is set by an
    outside actor (e.g. on resignation) to stop further play.
    """

    IN_PROGRESS = "in_progress"
    CHECK = "check"
    CHECKMATE = "checkmate"
    GAME_OVER = "game_over"

    @property
    def accepts_moves(self) -> bool:
        return self in (GameState.IN_PROGRESS, GameState.CHECK)


SYMBOL_TO_PIECE = {p.symbol: p for p in Piece}
