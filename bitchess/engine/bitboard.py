"""Bitboard primitives.

A bitboard is a plain ``int`` holding a 64-bit mask: bit ``i`` is set when
square ``i`` (a1=0 .. h8=63, rank-major) belongs to the set. Helpers here are
pure and return new ints; square arguments outside 0..63 are a caller error.
"""

from __future__ import annotations

from typing import Iterator, Optional

from .pieces import Color


EMPTY = 0
UNIVERSE = 0xFFFFFFFFFFFFFFFF

FILE_A = 0x0101010101010101
FILE_B = FILE_A << 1
FILE_C = FILE_A << 2
FILE_D = FILE_A << 3
FILE_E = FILE_A << 4
FILE_F = FILE_A << 5
FILE_G = FILE_A << 6
FILE_H = FILE_A << 7

RANK_1 = 0x00000000000000FF
RANK_2 = RANK_1 << 8
RANK_3 = RANK_1 << 16
RANK_4 = RANK_1 << 24
RANK_5 = RANK_1 << 32
RANK_6 = RANK_1 << 40
RANK_7 = RANK_1 << 48
RANK_8 = RANK_1 << 56

# a1 is a dark square
DARK_SQUARES = 0xAA55AA55AA55AA55
LIGHT_SQUARES = UNIVERSE ^ DARK_SQUARES

FILES = (FILE_A, FILE_B, FILE_C, FILE_D, FILE_E, FILE_F, FILE_G, FILE_H)
RANKS = (RANK_1, RANK_2, RANK_3, RANK_4, RANK_5, RANK_6, RANK_7, RANK_8)


def square_to_bitboard(sq: int) -> int:
    return 1 << sq


def bitboard_to_square(bb: int) -> Optional[int]:
    """Square of a singleton bitboard, or None if ``bb`` is empty or has several bits."""
    if bb == 0 or bb & (bb - 1):
        return None
    return bb.bit_length() - 1


def occupied(bb: int, sq: int) -> bool:
    return (bb >> sq) & 1 == 1


def set_bit(bb: int, sq: int) -> int:
    return bb | (1 << sq)


def clear_bit(bb: int, sq: int) -> int:
    return bb & ~(1 << sq) & UNIVERSE


def count_bits(bb: int) -> int:
    count = 0
    while bb:
        bb &= bb - 1
        count += 1
    return count


def lsb_index(bb: int) -> Optional[int]:
    if bb == 0:
        return None
    return (bb & -bb).bit_length() - 1


def iter_squares(bb: int) -> Iterator[int]:
    """Yield the squares of ``bb`` in ascending order."""
    while bb:
        lsb = bb & -bb
        yield lsb.bit_length() - 1
        bb ^= lsb


def rank_mask(rank: int) -> int:
    """Mask of a rank given 1..8; anything else yields an empty mask."""
    if 1 <= rank <= 8:
        return RANKS[rank - 1]
    return EMPTY


def file_mask(file: int) -> int:
    """Mask of a file given 1..8 (a..h); anything else yields an empty mask."""
    if 1 <= file <= 8:
        return FILES[file - 1]
    return EMPTY


def color_mask(color: Color) -> int:
    """Light squares for White, dark squares for Black."""
    return LIGHT_SQUARES if color is Color.WHITE else DARK_SQUARES


def file_of(sq: int) -> int:
    return sq & 7


def rank_of(sq: int) -> int:
    return sq >> 3


def make_square(file: int, rank: int) -> int:
    return rank * 8 + file
