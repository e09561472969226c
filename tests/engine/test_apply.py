from __future__ import annotations

import pytest

from bitchess.engine.board import STARTPOS_FEN, Board
from bitchess.engine.check import is_in_check
from bitchess.engine.move import str_to_square
from bitchess.engine.pieces import BN, WR, Color
from bitchess.engine.validator import IllegalMoveError, MoveError


def sq(name: str) -> int:
    return str_to_square(name)


def assert_disjoint(b: Board) -> None:
    seen = 0
    for mask in b.bb:
        assert seen & mask == 0
        seen |= mask


def test_apply_pawn_push_updates_board() -> None:
    b = Board.startpos()
    b.apply_move(sq("e2"), sq("e4"))
    assert b.to_fen() == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b - - 0 1"
    assert b.side_to_move is Color.BLACK
    assert_disjoint(b)


def test_sides_alternate_and_fullmove_increments() -> None:
    b = Board.startpos()
    b.apply_move(sq("e2"), sq("e4"))
    b.apply_move(sq("e7"), sq("e5"))
    assert b.side_to_move is Color.WHITE
    assert b.fullmove_number == 2
    b.apply_move(sq("g1"), sq("f3"))
    assert b.halfmove_clock == 1


@pytest.mark.parametrize(
    "from_name, to_name, reason",
    [
        ("e2", "e5", MoveError.INVALID_DESTINATION),
        ("e7", "e5", MoveError.WRONG_COLOR_PIECE),
        ("e4", "e5", MoveError.NO_PIECE_AT_SOURCE),
        ("a1", "a2", MoveError.DESTINATION_OCCUPIED_BY_SAME_COLOR),
        ("b1", "d2", MoveError.DESTINATION_OCCUPIED_BY_SAME_COLOR),
        ("f1", "c4", MoveError.INVALID_DESTINATION),
    ],
)
def test_rejected_moves_leave_board_unchanged(from_name: str, to_name: str, reason: MoveError) -> None:
    b = Board.startpos()
    with pytest.raises(IllegalMoveError) as info:
        b.apply_move(sq(from_name), sq(to_name))
    assert info.value.reason is reason
    assert b.to_fen() == STARTPOS_FEN


def test_capture_removes_enemy_piece() -> None:
    b = Board.from_fen("n3k3/8/8/8/8/8/8/R3K3 w - - 5 1")
    b.apply_move(sq("a1"), sq("a8"))
    assert b.bb[BN] == 0
    assert b.bb[WR] == 1 << sq("a8")
    assert b.halfmove_clock == 0
    assert_disjoint(b)


def test_board_accepts_move_into_self_check() -> None:
    # Rook e2 is pinned by the rook on e8; the board itself does not check king safety
    b = Board.from_fen("4r2k/8/8/8/8/8/4R3/4K3 w - - 0 1")
    b.apply_move(sq("e2"), sq("d2"))
    assert is_in_check(b, Color.WHITE)
    assert b.side_to_move is Color.BLACK


def test_legal_destinations_only_for_side_to_move() -> None:
    b = Board.startpos()
    assert b.legal_destinations(sq("e2")) == (1 << sq("e3")) | (1 << sq("e4"))
    assert b.legal_destinations(sq("e7")) == 0
    assert b.legal_destinations(sq("e4")) == 0


def test_apply_pseudo_does_not_mutate() -> None:
    b = Board.startpos()
    new_bb = b.apply_pseudo_to_bb(sq("e2"), sq("e5"))
    assert new_bb is not None
    assert b.to_fen() == STARTPOS_FEN
    assert b.apply_pseudo_to_bb(sq("e4"), sq("e5")) is None
