"""Game status by brute-force simulation.

Every pseudo-legal destination of every piece of the side to move is played
on a copy of the board, and the copy is asked whether the mover's king is in
check. The shared board is never mutated.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .bitboard import iter_squares, set_bit
from .board import Board
from .check import is_in_check
from .pieces import Color


class GameStatus(Enum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


def game_status(board: Board) -> GameStatus:
    """Classify the position for the side to move."""
    side = board.side_to_move
    if is_in_check(board, side):
        if has_no_legal_moves(board, side):
            return GameStatus.CHECKMATE
        return GameStatus.CHECK
    if has_no_legal_moves(board, side):
        return GameStatus.STALEMATE
    return GameStatus.ONGOING


def is_checkmate(board: Board, color: Color) -> bool:
    if not is_in_check(board, color):
        return False
    return has_no_legal_moves(board, color)


def is_stalemate(board: Board, color: Color) -> bool:
    if is_in_check(board, color):
        return False
    return has_no_legal_moves(board, color)


def has_no_legal_moves(board: Board, color: Color) -> bool:
    """Return True if ``color`` has no move that keeps its king safe.

    Only meaningful for the side to move: for the other colour the board's
    generators yield nothing, so the answer is always True.
    """
    for sq in iter_squares(board.pieces(color)):
        if _first_safe_destination(board, sq) is not None:
            return False
    return True


def safe_destinations(board: Board, from_sq: int) -> int:
    """Pseudo-legal destinations of ``from_sq`` that do not leave the mover in check."""
    mover = board.side_to_move
    pseudo = board.legal_destinations(from_sq)
    safe = 0
    for to_sq in iter_squares(pseudo):
        if not is_in_check(simulate_move(board, from_sq, to_sq), mover):
            safe = set_bit(safe, to_sq)
    return safe


def _first_safe_destination(board: Board, from_sq: int) -> Optional[int]:
    mover = board.side_to_move
    pseudo = board.legal_destinations(from_sq)
    for to_sq in iter_squares(pseudo):
        if not is_in_check(simulate_move(board, from_sq, to_sq), mover):
            return to_sq
    return None


def simulate_move(board: Board, from_sq: int, to_sq: int) -> Board:
    """Return a copy of ``board`` with the move played and no validation.

    The side to move is left unchanged on the copy. If the side to move has
    no piece on ``from_sq`` the copy is returned as is.
    """
    child = board.copy()
    new_bb = board.apply_pseudo_to_bb(from_sq, to_sq)
    if new_bb is not None:
        child.bb = new_bb
    return child
