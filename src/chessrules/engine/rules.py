from __future__ import annotations

from typing import Dict, Set

from .board import Position
from .move import ALL_SQUARES, Square
from .movegen import basic_moves
from .pieces import Color, Piece


def find_king(color: Color, position: Position) -> Square:
    """Locate ``color``'s king by scanning the whole board.

    Raises:
        ValueError: If ``color`` has no king. A well-formed position always
            has one per side, so this signals a corrupted position.
    """
    for sq in ALL_SQUARES:
        if position.piece_at(sq) is Piece.KING and position.color_at(sq) is color:
            return sq
    raise ValueError(f"no {color} king on the board")


def attacked_squares(color: Color, position: Position) -> Set[Square]:
    """Union of the pseudo-legal destinations of every piece of ``color``."""
    attacked: Set[Square] = set()
    for sq in position.squares_of(color):
        piece = position.piece_at(sq)
        if piece is not None:
            attacked |= basic_moves(piece, sq, position)
    return attacked


def is_in_check(color: Color, position: Position) -> bool:
    """Return True if ``color``'s king is attacked by the other side."""
    king_sq = find_king(color, position)
    return king_sq in attacked_squares(color.opposite, position)


def legal_moves(sq: Square, position: Position, promotion: Piece = Piece.QUEEN) -> Set[Square]:
    """Return destinations for the piece on ``sq`` that keep its king safe.

    Each pseudo-legal destination is tried on a scratch copy of ``position``;
    it is kept only if the mover is not in check afterwards.

    Returns:
        Set[Square]: Legal destinations, empty when ``sq`` is unoccupied.
    """
    piece = position.piece_at(sq)
    color = position.color_at(sq)
    if piece is None or color is None:
        return set()
    legal: Set[Square] = set()
    for to in basic_moves(piece, sq, position):
        if not is_in_check(color, position.with_move(sq, to, promotion)):
            legal.add(to)
    return legal


def all_legal_moves(
    color: Color, position: Position, promotion: Piece = Piece.QUEEN
) -> Dict[Square, Set[Square]]:
    """Map each origin square of ``color`` to its non-empty legal destinations."""
    moves: Dict[Square, Set[Square]] = {}
    for sq in position.squares_of(color):
        dests = legal_moves(sq, position, promotion)
        if dests:
            moves[sq] = dests
    return moves


def has_no_legal_moves(color: Color, position: Position, promotion: Piece = Piece.QUEEN) -> bool:
    """Return True if no piece of ``color`` has a legal move."""
    return not any(legal_moves(sq, position, promotion) for sq in position.squares_of(color))
