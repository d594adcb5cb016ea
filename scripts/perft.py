#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import logging
import os
import sys
import time

# Allow running this script directly via `python scripts/perft.py`
# by adding `src/` to sys.path.
SRC_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from chessrules.engine.board import STARTPOS_FEN, Position
from chessrules.engine.perft import perft
from chessrules.engine.pieces import Color, Piece


def main() -> None:
    parser = argparse.ArgumentParser(description="Run perft on a given FEN placement and depth")
    parser.add_argument(
        "--fen", type=str, default=STARTPOS_FEN, help="FEN placement (default: startpos)"
    )
    parser.add_argument("--side", choices=("w", "b"), default="w", help="Side to move (default: w)")
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument(
        "--promotion",
        choices=("Q", "R", "B", "N"),
        default="Q",
        help="Piece pawns promote to (default: Q)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper())

    position = Position.from_fen(args.fen)
    start = time.perf_counter()
    nodes = perft(position, Color(args.side), args.depth, Piece(args.promotion))
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
