"""Bitboard chess rules engine.

Function-style entry points for drivers (text UI, HTTP service, scripts)::

    board = new_position()
    apply_move(board, str_to_square("e2"), str_to_square("e4"))
    status(board)  # GameStatus.ONGOING
"""

from __future__ import annotations

from typing import Optional, Tuple

from .board import STARTPOS_FEN, Board
from .check import find_king_square, is_in_check
from .move import Move, parse_move, square_to_str, str_to_square
from .pieces import Color, PieceType
from .status import GameStatus, game_status
from .validator import IllegalMoveError, MoveError


def new_position() -> Board:
    return Board.startpos()


def legal_destinations(board: Board, square: int) -> int:
    return board.legal_destinations(square)


def apply_move(board: Board, from_sq: int, to_sq: int) -> None:
    board.apply_move(from_sq, to_sq)


def piece_at(board: Board, square: int) -> Optional[Tuple[PieceType, Color]]:
    return board.piece_at(square)


def status(board: Board) -> GameStatus:
    return game_status(board)


__all__ = [
    "STARTPOS_FEN",
    "Board",
    "Color",
    "GameStatus",
    "IllegalMoveError",
    "Move",
    "MoveError",
    "PieceType",
    "apply_move",
    "find_king_square",
    "game_status",
    "is_in_check",
    "legal_destinations",
    "new_position",
    "parse_move",
    "piece_at",
    "square_to_str",
    "status",
    "str_to_square",
]
