"""Pseudo-legal move generators.

Every generator shares one signature::

    gen(from_sq, white_mask, black_mask, white_pieces, black_pieces, side_to_move) -> int

``white_mask``/``black_mask`` are the bitboards of the piece type the generator
handles, ``white_pieces``/``black_pieces`` the aggregate occupancy of each
side. The result is a bitboard of destinations, or 0 when no piece of that
type and of ``side_to_move``'s colour stands on ``from_sq``. King safety is
ignored here.
"""

from __future__ import annotations

from typing import Callable, Dict, Tuple

from .bitboard import (
    file_mask,
    file_of,
    make_square,
    occupied,
    rank_mask,
    rank_of,
    square_to_bitboard,
)
from .pieces import Color, PieceType


Generator = Callable[[int, int, int, int, int, Color], int]

KNIGHT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)
KING_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
)
BISHOP_DIRS: Tuple[Tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS: Tuple[Tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


def _sides(
    white_pieces: int, black_pieces: int, side_to_move: Color
) -> Tuple[int, int]:
    if side_to_move is Color.WHITE:
        return white_pieces, black_pieces
    return black_pieces, white_pieces


def _owns(from_sq: int, white_mask: int, black_mask: int, side_to_move: Color) -> bool:
    mask = white_mask if side_to_move is Color.WHITE else black_mask
    return occupied(mask, from_sq)


def _step_targets(from_sq: int, offsets: Tuple[Tuple[int, int], ...], own: int) -> int:
    f0, r0 = file_of(from_sq), rank_of(from_sq)
    moves = 0
    for df, dr in offsets:
        f, r = f0 + df, r0 + dr
        if not (0 <= f < 8 and 0 <= r < 8):
            continue
        to_bb = square_to_bitboard(make_square(f, r))
        if to_bb & own == 0:
            moves |= to_bb
    return moves


def _ray_targets(
    from_sq: int, dirs: Tuple[Tuple[int, int], ...], own: int, enemy: int
) -> int:
    f0, r0 = file_of(from_sq), rank_of(from_sq)
    moves = 0
    for df, dr in dirs:
        f, r = f0 + df, r0 + dr
        while 0 <= f < 8 and 0 <= r < 8:
            to_bb = square_to_bitboard(make_square(f, r))
            if to_bb & own:
                break
            moves |= to_bb
            if to_bb & enemy:
                break
            f += df
            r += dr
    return moves


def pawn_moves(
    from_sq: int,
    white_pawns: int,
    black_pawns: int,
    white_pieces: int,
    black_pieces: int,
    side_to_move: Color,
) -> int:
    """Pushes onto empty squares and diagonal captures of enemy pawns only."""
    if not _owns(from_sq, white_pawns, black_pawns, side_to_move):
        return 0
    occ = white_pieces | black_pieces
    from_bb = square_to_bitboard(from_sq)
    if side_to_move is Color.WHITE:
        step, last_rank, start_rank, enemy_pawns = 8, rank_mask(8), rank_mask(2), black_pawns
    else:
        step, last_rank, start_rank, enemy_pawns = -8, rank_mask(1), rank_mask(7), white_pawns
    if from_bb & last_rank:
        return 0

    moves = 0
    one = from_sq + step
    if not occupied(occ, one):
        moves |= square_to_bitboard(one)
        if from_bb & start_rank and not occupied(occ, one + step):
            moves |= square_to_bitboard(one + step)
    # Diagonal targets, guarded against wrapping to the opposite file
    if not from_bb & file_mask(1) and occupied(enemy_pawns, one - 1):
        moves |= square_to_bitboard(one - 1)
    if not from_bb & file_mask(8) and occupied(enemy_pawns, one + 1):
        moves |= square_to_bitboard(one + 1)
    return moves


def knight_moves(
    from_sq: int,
    white_knights: int,
    black_knights: int,
    white_pieces: int,
    black_pieces: int,
    side_to_move: Color,
) -> int:
    if not _owns(from_sq, white_knights, black_knights, side_to_move):
        return 0
    own, _ = _sides(white_pieces, black_pieces, side_to_move)
    return _step_targets(from_sq, KNIGHT_OFFSETS, own)


def bishop_moves(
    from_sq: int,
    white_bishops: int,
    black_bishops: int,
    white_pieces: int,
    black_pieces: int,
    side_to_move: Color,
) -> int:
    if not _owns(from_sq, white_bishops, black_bishops, side_to_move):
        return 0
    own, enemy = _sides(white_pieces, black_pieces, side_to_move)
    return _ray_targets(from_sq, BISHOP_DIRS, own, enemy)


def rook_moves(
    from_sq: int,
    white_rooks: int,
    black_rooks: int,
    white_pieces: int,
    black_pieces: int,
    side_to_move: Color,
) -> int:
    if not _owns(from_sq, white_rooks, black_rooks, side_to_move):
        return 0
    own, enemy = _sides(white_pieces, black_pieces, side_to_move)
    return _ray_targets(from_sq, ROOK_DIRS, own, enemy)


def queen_moves(
    from_sq: int,
    white_queens: int,
    black_queens: int,
    white_pieces: int,
    black_pieces: int,
    side_to_move: Color,
) -> int:
    if not _owns(from_sq, white_queens, black_queens, side_to_move):
        return 0
    # The queen's own square stands in for the bishop and rook masks.
    from_bb = square_to_bitboard(from_sq)
    return bishop_moves(
        from_sq, from_bb, from_bb, white_pieces, black_pieces, side_to_move
    ) | rook_moves(from_sq, from_bb, from_bb, white_pieces, black_pieces, side_to_move)


def king_moves(
    from_sq: int,
    white_kings: int,
    black_kings: int,
    white_pieces: int,
    black_pieces: int,
    side_to_move: Color,
) -> int:
    """Adjacent squares not held by the own side. No castling."""
    if not _owns(from_sq, white_kings, black_kings, side_to_move):
        return 0
    own, _ = _sides(white_pieces, black_pieces, side_to_move)
    return _step_targets(from_sq, KING_OFFSETS, own)


GENERATORS: Dict[PieceType, Generator] = {
    PieceType.PAWN: pawn_moves,
    PieceType.KNIGHT: knight_moves,
    PieceType.BISHOP: bishop_moves,
    PieceType.ROOK: rook_moves,
    PieceType.QUEEN: queen_moves,
    PieceType.KING: king_moves,
}


def destinations(
    piece_type: PieceType,
    from_sq: int,
    white_mask: int,
    black_mask: int,
    white_pieces: int,
    black_pieces: int,
    side_to_move: Color,
) -> int:
    """Pseudo-legal destinations for ``piece_type`` on ``from_sq``."""
    return GENERATORS[piece_type](
        from_sq, white_mask, black_mask, white_pieces, black_pieces, side_to_move
    )
