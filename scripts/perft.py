#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import os
import sys
import time

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo root (which contains `bitchess/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from bitchess.engine.board import Board, STARTPOS_FEN
from bitchess.engine.perft import perft


def main() -> None:
    parser = argparse.ArgumentParser(description="Count safe-move tree nodes for a FEN")
    parser.add_argument(
        "--fen", type=str, default=STARTPOS_FEN, help="FEN string (default: startpos)"
    )
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument(
        "--divide", action="store_true", help="Print the node count below each root move"
    )
    args = parser.parse_args()

    board = Board.from_fen(args.fen)
    start = time.perf_counter()
    if args.divide and args.depth > 0:
        nodes = _divide(board, args.depth)
    else:
        nodes = perft(board, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


def _divide(board: Board, depth: int) -> int:
    from bitchess.engine.bitboard import iter_squares
    from bitchess.engine.move import Move
    from bitchess.engine.status import safe_destinations

    total = 0
    for from_sq in iter_squares(board.pieces(board.side_to_move)):
        for to_sq in iter_squares(safe_destinations(board, from_sq)):
            child = board.copy()
            child.apply_move(from_sq, to_sq)
            n = perft(child, depth - 1)
            print(f"{Move(from_sq, to_sq).to_uci()}: {n}")
            total += n
    return total


if __name__ == "__main__":
    main()
