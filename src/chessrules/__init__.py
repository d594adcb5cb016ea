"""Chess rules engine: legal move generation, move application and check tracking.

Quick start::

    from chessrules import Game, string_to_square

    game = Game.new()
    state = game.attempt_move(string_to_square("E2"), string_to_square("E4"))
"""

from chessrules.engine.board import STARTPOS_FEN, Position
from chessrules.engine.game import Game
from chessrules.engine.move import Move, Square, parse_move, square_to_string, string_to_square
from chessrules.engine.movegen import basic_moves
from chessrules.engine.perft import perft
from chessrules.engine.pieces import Color, GameState, Piece
from chessrules.engine.rules import find_king, has_no_legal_moves, is_in_check, legal_moves

__all__ = [
    "Color",
    "Game",
    "GameState",
    "Move",
    "Piece",
    "Position",
    "STARTPOS_FEN",
    "Square",
    "basic_moves",
    "find_king",
    "has_no_legal_moves",
    "is_in_check",
    "legal_moves",
    "parse_move",
    "perft",
    "square_to_string",
    "string_to_square",
]
