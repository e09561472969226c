"""King-safety detection.

Attacks are traced outward from the king square (pawn, knight, diagonal and
orthogonal rays) rather than generated from every enemy piece.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

from .bitboard import bitboard_to_square, file_of, lsb_index, make_square, occupied, rank_of
from .movegen import BISHOP_DIRS, KNIGHT_OFFSETS, ROOK_DIRS
from .pieces import BB, BN, BP, BQ, BR, WB, WN, WP, WQ, WR, Color

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


def find_king_square(board: "Board", color: Color) -> Optional[int]:
    """Return the square of ``color``'s king, or None if it has none.

    With several kings on a hand-built board the lowest square wins.
    """
    king_bb = board.king_bitboard(color)
    sq = bitboard_to_square(king_bb)
    if sq is None:
        sq = lsb_index(king_bb)
    return sq


def is_in_check(board: "Board", color: Color) -> bool:
    """Return True if ``color``'s king is attacked by the other side.

    A side without a king is never in check. Adjacent enemy kings are not
    counted as attackers.
    """
    king_sq = find_king_square(board, color)
    if king_sq is None:
        return False
    bb = board.bb
    return (
        _pawn_attack(bb, king_sq, color)
        or _knight_attack(bb, king_sq, color)
        or _slider_attack(bb, king_sq, color, BISHOP_DIRS, diagonal=True)
        or _slider_attack(bb, king_sq, color, ROOK_DIRS, diagonal=False)
    )


def _pawn_attack(bb: List[int], king_sq: int, color: Color) -> bool:
    # Squares an enemy pawn must stand on to capture onto the king square.
    f, r = file_of(king_sq), rank_of(king_sq)
    if color is Color.WHITE:
        enemy, r = bb[BP], r + 1
    else:
        enemy, r = bb[WP], r - 1
    if not 0 <= r < 8:
        return False
    if f > 0 and occupied(enemy, make_square(f - 1, r)):
        return True
    return f < 7 and occupied(enemy, make_square(f + 1, r))


def _knight_attack(bb: List[int], king_sq: int, color: Color) -> bool:
    enemy = bb[BN] if color is Color.WHITE else bb[WN]
    if not enemy:
        return False
    f, r = file_of(king_sq), rank_of(king_sq)
    for df, dr in KNIGHT_OFFSETS:
        tf, tr = f + df, r + dr
        if 0 <= tf < 8 and 0 <= tr < 8 and occupied(enemy, make_square(tf, tr)):
            return True
    return False


def _slider_attack(
    bb: List[int],
    king_sq: int,
    color: Color,
    dirs: Tuple[Tuple[int, int], ...],
    *,
    diagonal: bool,
) -> bool:
    if color is Color.WHITE:
        attackers = (bb[BB] if diagonal else bb[BR]) | bb[BQ]
    else:
        attackers = (bb[WB] if diagonal else bb[WR]) | bb[WQ]
    if not attackers:
        return False

    occ = 0
    for b in bb:
        occ |= b

    f, r = file_of(king_sq), rank_of(king_sq)
    for df, dr in dirs:
        tf, tr = f + df, r + dr
        while 0 <= tf < 8 and 0 <= tr < 8:
            o = make_square(tf, tr)
            if occupied(occ, o):
                if occupied(attackers, o):
                    return True
                break
            tf += df
            tr += dr
    return False
