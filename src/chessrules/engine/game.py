from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from . import rules
from .board import Position, Snapshot, require_on_board
from .move import Move, Square
from .pieces import Color, GameState, Piece


logger = logging.getLogger(__name__)


@dataclass
class Game:
    """Game wrapper around a position with turn and check tracking.

    Responsibility: own the position, the state, the side to move and the
    promotion piece; ``attempt_move`` is the only operation that changes the
    position.

    ``state`` may be set to ``GameState.GAME_OVER`` from outside (e.g. on
    resignation); the rules never enter that state themselves.
    """

    position: Position = field(default_factory=Position.startpos)
    state: GameState = GameState.IN_PROGRESS
    side_to_move: Color = Color.WHITE
    promotion: Piece = Piece.QUEEN
    move_history: List[Move] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_promotion(self.promotion)

    @classmethod
    def new(cls) -> "Game":
        return cls(position=Position.startpos())

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        """Create a game from a FEN string.

        Only the placement and side-to-move fields are read; the side defaults
        to White when the second field is absent. The initial state reflects
        whether the side to move is already in check or mated.

        Raises:
            ValueError: If the placement or side field is malformed, a side
                does not have exactly one king, or the side that just moved
                is left in check.
        """
        position = Position.from_fen(fen)
        parts = fen.strip().split()
        stm = parts[1] if len(parts) > 1 else "w"
        if stm not in ("w", "b"):
            raise ValueError("side to move must be 'w' or 'b'")
        for color in Color:
            kings = [sq for sq in position.squares_of(color) if position.piece_at(sq) is Piece.KING]
            if len(kings) != 1:
                raise ValueError(f"{color} must have exactly one king, found {len(kings)}")
        side_to_move = Color(stm)
        if rules.is_in_check(side_to_move.opposite, position):
            raise ValueError(f"{side_to_move.opposite} is in check but not to move")
        game = cls(position=position, side_to_move=side_to_move)
        game.state = game._classify(game.side_to_move)
        return game

    # --- Configuration ---
    def set_promotion(self, piece: Piece) -> None:
        """Choose the piece pawns promote to.

        Raises:
            ValueError: If ``piece`` is ``Piece.KING``.
        """
        _check_promotion(piece)
        logger.debug("promotion piece set to %s", piece.name)
        self.promotion = piece

    # --- Queries ---
    def piece_at(self, sq: Square) -> Optional[Piece]:
        return self.position.piece_at(sq)

    def color_at(self, sq: Square) -> Optional[Color]:
        return self.position.color_at(sq)

    def board(self) -> Snapshot:
        """Read-only 8x8 snapshot for renderers."""
        return self.position.snapshot()

    def legal_moves(self, sq: Square) -> Set[Square]:
        return rules.legal_moves(sq, self.position, self.promotion)

    def all_legal_moves(self) -> Dict[Square, Set[Square]]:
        """Legal moves of the side to move, keyed by origin."""
        return rules.all_legal_moves(self.side_to_move, self.position, self.promotion)

    def in_check(self, color: Optional[Color] = None) -> bool:
        """Return True if ``color`` (default: side to move) is in check."""
        return rules.is_in_check(color or self.side_to_move, self.position)

    def has_no_legal_moves(self, color: Optional[Color] = None) -> bool:
        return rules.has_no_legal_moves(color or self.side_to_move, self.position, self.promotion)

    def to_fen(self) -> str:
        return f"{self.position.to_fen()} {self.side_to_move.value}"

    # --- Moves ---
    def attempt_move(self, from_sq: Square, to_sq: Square) -> Optional[GameState]:
        """Play ``from_sq`` to ``to_sq`` for the side to move.

        Returns:
            Optional[GameState]: The new state after the move, or ``None`` when
                the move is refused. A refused move leaves the game unchanged.

        Raises:
            IndexError: If either square is off the board.
        """
        require_on_board(from_sq)
        require_on_board(to_sq)
        if not self.state.accepts_moves:
            logger.debug("move %s-%s refused: game is %s", from_sq, to_sq, self.state.value)
            return None
        if self.position.color_at(from_sq) is not self.side_to_move:
            logger.debug("move %s-%s refused: not %s's piece", from_sq, to_sq, self.side_to_move)
            return None
        if to_sq not in self.legal_moves(from_sq):
            logger.debug("move %s-%s refused: illegal destination", from_sq, to_sq)
            return None

        self.position.apply_move(from_sq, to_sq, self.promotion)
        self.move_history.append(Move(from_sq, to_sq))

        opponent = self.side_to_move.opposite
        self.state = self._classify(opponent)
        self.side_to_move = opponent

        if self.state is GameState.IN_PROGRESS:
            logger.debug("move %s-%s played", from_sq, to_sq)
        else:
            logger.info("move %s-%s played: %s is in %s", from_sq, to_sq, opponent, self.state.value)
        return self.state

    def play(self, move: Move) -> Optional[GameState]:
        return self.attempt_move(move.from_sq, move.to_sq)

    def _classify(self, color: Color) -> GameState:
        if not rules.is_in_check(color, self.position):
            return GameState.IN_PROGRESS
        if rules.has_no_legal_moves(color, self.position, self.promotion):
            return GameState.CHECKMATE
        return GameState.CHECK


def _check_promotion(piece: Piece) -> None:
    if piece is Piece.KING:
        raise ValueError("pawns cannot promote to a king")
