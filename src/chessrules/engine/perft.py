from __future__ import annotations

from .board import Position
from .pieces import Color, Piece
from .rules import all_legal_moves


def perft(position: Position, color: Color, depth: int, promotion: Piece = Piece.QUEEN) -> int:
    """Count leaf nodes of the legal move tree below ``position``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1),
      with ``color`` to move at the root and sides alternating.

    Pawns reaching the back rank always become ``promotion``, so promotions
    count as a single child each.

    Raises:
        ValueError: If ``depth`` is negative.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for from_sq, dests in all_legal_moves(color, position, promotion).items():
        if depth == 1:
            nodes += len(dests)
            continue
        for to_sq in dests:
            child = position.with_move(from_sq, to_sq, promotion)
            nodes += perft(child, color.opposite, depth - 1, promotion)
    return nodes
