from __future__ import annotations

import pytest

from bitchess.engine.board import STARTPOS_FEN
from bitchess.engine.game import Game
from bitchess.engine.move import parse_move
from bitchess.engine.status import GameStatus
from bitchess.engine.validator import IllegalMoveError, MoveError


def test_new_game_has_twenty_moves() -> None:
    g = Game.new()
    moves = {m.to_uci() for m in g.legal_moves()}
    assert len(moves) == 20
    assert {"e2e4", "g1f3", "b1a3"}.issubset(moves)


def test_apply_and_undo_restore_position() -> None:
    g = Game.new()
    g.apply_move(parse_move("e2e4"))
    g.apply_move(parse_move("e7e5"))
    assert g.move_history_uci() == ["e2e4", "e7e5"]

    g.undo_move()
    assert g.move_history_uci() == ["e2e4"]
    g.undo_move()
    assert g.to_fen() == STARTPOS_FEN
    with pytest.raises(ValueError, match="no moves"):
        g.undo_move()


def test_rejected_move_is_not_recorded() -> None:
    g = Game.new()
    with pytest.raises(IllegalMoveError) as info:
        g.apply_move(parse_move("e2e5"))
    assert info.value.reason is MoveError.INVALID_DESTINATION
    assert g.move_history_uci() == []
    assert g.to_fen() == STARTPOS_FEN


def test_status_flags() -> None:
    g = Game.from_fen("7k/8/8/8/8/8/rr6/K7 w - - 0 1")
    assert g.status() is GameStatus.CHECKMATE
    assert g.in_check()
    assert g.checkmate()
    assert not g.stalemate()
    assert g.legal_moves() == []

    g = Game.from_fen("7k/8/8/8/8/8/2q5/K7 w - - 0 1")
    assert g.stalemate()
    assert not g.in_check()
