from __future__ import annotations

from .bitboard import count_bits, iter_squares
from .board import Board
from .status import safe_destinations


def perft(board: Board, depth: int) -> int:
    """Compute perft node count for `board` at `depth`.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all safe child positions' perft(depth-1).

    Children are built on copies, so ``board`` is left untouched.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for from_sq in iter_squares(board.pieces(board.side_to_move)):
        safe = safe_destinations(board, from_sq)
        if depth == 1:
            nodes += count_bits(safe)
            continue
        for to_sq in iter_squares(safe):
            child = board.copy()
            child.apply_move(from_sq, to_sq)
            nodes += perft(child, depth - 1)
    return nodes
