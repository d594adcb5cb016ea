#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import logging
import os
import sys

SRC_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from chessrules.engine.game import Game
from chessrules.engine.move import parse_move
from chessrules.engine.pieces import Piece


def main() -> int:
    parser = argparse.ArgumentParser(description="Replay a move list and report each resulting state")
    parser.add_argument("moves", nargs="+", help="Moves like E2-E4 or e2e4")
    parser.add_argument("--fen", type=str, default=None, help="Start from this FEN instead of startpos")
    parser.add_argument(
        "--promotion",
        choices=("Q", "R", "B", "N"),
        default="Q",
        help="Piece pawns promote to (default: Q)",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper())

    game = Game.from_fen(args.fen) if args.fen else Game.new()
    game.set_promotion(Piece(args.promotion))
    for text in args.moves:
        move = parse_move(text)
        state = game.play(move)
        if state is None:
            print(f"{move.to_string()}: rejected ({game.side_to_move} to move, {game.state.value})")
            return 1
        print(f"{move.to_string()}: {state.value}")
    print(game.to_fen())
    return 0


if __name__ == "__main__":
    sys.exit(main())
