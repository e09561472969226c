from __future__ import annotations

import pytest

from bitchess.engine.board import Board
from bitchess.engine.check import find_king_square, is_in_check
from bitchess.engine.pieces import Color


def test_find_king_square() -> None:
    b = Board.startpos()
    assert find_king_square(b, Color.WHITE) == 4
    assert find_king_square(b, Color.BLACK) == 60
    assert find_king_square(Board.empty(), Color.WHITE) is None


@pytest.mark.parametrize(
    "fen, color, expected",
    [
        # Queen adjacent on the file
        ("4k3/8/8/8/8/8/4q3/4K3 w - - 0 1", Color.WHITE, True),
        # Rook on the file, own pawn in between
        ("4k3/8/8/4r3/8/8/4P3/4K3 w - - 0 1", Color.WHITE, False),
        ("4k3/8/8/4r3/8/8/8/4K3 w - - 0 1", Color.WHITE, True),
        # Knight
        ("4k3/8/8/8/8/3n4/8/4K3 w - - 0 1", Color.WHITE, True),
        # Bishop on a long diagonal
        ("4k3/8/8/b7/8/8/8/4K3 w - - 0 1", Color.WHITE, True),
        ("4k3/8/8/b7/8/2P5/8/4K3 w - - 0 1", Color.WHITE, False),
        # Pawns attack diagonally, not straight ahead
        ("4k3/8/8/8/8/8/3p4/4K3 w - - 0 1", Color.WHITE, True),
        ("4k3/8/8/8/8/8/4p3/4K3 w - - 0 1", Color.WHITE, False),
        ("4k3/3P4/8/8/8/8/8/4K3 b - - 0 1", Color.BLACK, True),
        # A pawn on the far file does not wrap around the board
        ("4k3/8/8/8/8/8/p7/7K w - - 0 1", Color.WHITE, False),
        # Adjacent kings are not an attack
        ("8/8/8/8/8/8/4k3/4K3 w - - 0 1", Color.WHITE, False),
        # Side without a king
        ("8/8/8/8/8/8/8/4K3 w - - 0 1", Color.BLACK, False),
    ],
)
def test_is_in_check(fen: str, color: Color, expected: bool) -> None:
    assert is_in_check(Board.from_fen(fen), color) is expected


def test_find_king_square_picks_lowest_of_several() -> None:
    b = Board.from_fen("4k3/8/8/8/8/8/8/K6K w - - 0 1")
    assert find_king_square(b, Color.WHITE) == 0
