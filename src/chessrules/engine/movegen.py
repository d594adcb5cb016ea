from __future__ import annotations

from typing import Dict, Set, Tuple

from .board import Position
from .move import Square
from .pieces import Color, Piece


Offsets = Tuple[Tuple[int, int], ...]

KING_OFFSETS: Offsets = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))
KNIGHT_OFFSETS: Offsets = ((-1, 2), (1, 2), (-2, 1), (2, 1), (-2, -1), (2, -1), (-1, -2), (1, -2))

DIAGONALS: Offsets = ((-1, -1), (1, -1), (-1, 1), (1, 1))
ORTHOGONALS: Offsets = ((-1, 0), (1, 0), (0, -1), (0, 1))

SLIDER_DIRECTIONS: Dict[Piece, Offsets] = {
    Piece.BISHOP: DIAGONALS,
    Piece.ROOK: ORTHOGONALS,
    Piece.QUEEN: DIAGONALS + ORTHOGONALS,
}

# Pawn advance direction (rank delta) and the rank its double step starts from
PAWN_FORWARD = {Color.BLACK: 1, Color.WHITE: -1}
PAWN_START_RANK = {Color.BLACK: 1, Color.WHITE: 6}


def basic_moves(piece: Piece, sq: Square, position: Position) -> Set[Square]:
    """Return pseudo-legal destinations for ``piece`` standing on ``sq``.

    The mover's color is whichever color occupies ``sq``. Whether the move
    leaves the mover's own king attacked is not considered.

    Returns:
        Set[Square]: On-board destinations not occupied by the mover's color.
            Empty when ``sq`` is unoccupied.
    """
    color = position.color_at(sq)
    if color is None:
        return set()
    if piece is Piece.KING:
        return _step_moves(sq, color, position, KING_OFFSETS)
    if piece is Piece.KNIGHT:
        return _step_moves(sq, color, position, KNIGHT_OFFSETS)
    if piece is Piece.PAWN:
        return _pawn_moves(sq, color, position)
    return _slide_moves(sq, color, position, SLIDER_DIRECTIONS[piece])


def _step_moves(sq: Square, color: Color, position: Position, offsets: Offsets) -> Set[Square]:
    moves: Set[Square] = set()
    for df, dr in offsets:
        to = sq.offset(df, dr)
        if to.on_board and position.color_at(to) is not color:
            moves.add(to)
    return moves


def _slide_moves(sq: Square, color: Color, position: Position, directions: Offsets) -> Set[Square]:
    moves: Set[Square] = set()
    for df, dr in directions:
        to = sq
        for _ in range(7):
            to = to.offset(df, dr)
            if not to.on_board:
                break
            occupant = position.color_at(to)
            if occupant is color:
                break
            moves.add(to)
            if occupant is not None:
                # capture ends the ray
                break
    return moves


def _pawn_moves(sq: Square, color: Color, position: Position) -> Set[Square]:
    moves: Set[Square] = set()
    dr = PAWN_FORWARD[color]

    one = sq.offset(0, dr)
    if one.on_board and position.color_at(one) is None:
        moves.add(one)
        if sq.rank == PAWN_START_RANK[color]:
            two = sq.offset(0, 2 * dr)
            if position.color_at(two) is None:
                moves.add(two)

    enemy = color.opposite
    for df in (-1, 1):
        cap = sq.offset(df, dr)
        if cap.on_board and position.color_at(cap) is enemy:
            moves.add(cap)
    return moves
