from __future__ import annotations

import pytest

from bitchess import engine
from bitchess.engine import (
    Color,
    GameStatus,
    IllegalMoveError,
    MoveError,
    PieceType,
    str_to_square,
)


def test_function_style_entry_points() -> None:
    board = engine.new_position()
    e2, e4 = str_to_square("e2"), str_to_square("e4")

    assert engine.piece_at(board, e2) == (PieceType.PAWN, Color.WHITE)
    assert engine.legal_destinations(board, e2) & (1 << e4)

    engine.apply_move(board, e2, e4)
    assert engine.piece_at(board, e2) is None
    assert engine.piece_at(board, e4) == (PieceType.PAWN, Color.WHITE)
    assert engine.status(board) is GameStatus.ONGOING

    with pytest.raises(IllegalMoveError) as info:
        engine.apply_move(board, e4, str_to_square("e5"))
    assert info.value.reason is MoveError.WRONG_COLOR_PIECE
