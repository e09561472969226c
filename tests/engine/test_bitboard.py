from __future__ import annotations

import pytest

from bitchess.engine.bitboard import (
    DARK_SQUARES,
    FILE_A,
    FILE_H,
    LIGHT_SQUARES,
    RANK_1,
    RANK_8,
    UNIVERSE,
    bitboard_to_square,
    clear_bit,
    color_mask,
    count_bits,
    file_mask,
    iter_squares,
    lsb_index,
    make_square,
    occupied,
    rank_mask,
    set_bit,
    square_to_bitboard,
)
from bitchess.engine.pieces import Color


def test_square_bitboard_conversions() -> None:
    assert square_to_bitboard(0) == 1
    assert square_to_bitboard(63) == 1 << 63
    assert bitboard_to_square(1 << 28) == 28
    assert bitboard_to_square(0) is None
    # More than one bit is not a square
    assert bitboard_to_square((1 << 3) | (1 << 9)) is None


def test_set_clear_and_occupied() -> None:
    bb = set_bit(0, 12)
    assert occupied(bb, 12)
    assert not occupied(bb, 13)
    assert clear_bit(bb, 12) == 0
    # Clearing an empty square is a no-op
    assert clear_bit(bb, 40) == bb


def test_count_and_iterate() -> None:
    assert count_bits(0) == 0
    assert count_bits(UNIVERSE) == 64
    assert count_bits(FILE_A) == 8
    assert list(iter_squares((1 << 5) | (1 << 1) | (1 << 63))) == [1, 5, 63]
    assert lsb_index(0) is None
    assert lsb_index((1 << 7) | (1 << 20)) == 7


@pytest.mark.parametrize("rank, expected", [(1, RANK_1), (8, RANK_8), (0, 0), (9, 0)])
def test_rank_mask(rank: int, expected: int) -> None:
    assert rank_mask(rank) == expected


@pytest.mark.parametrize("file, expected", [(1, FILE_A), (8, FILE_H), (0, 0), (9, 0)])
def test_file_mask(file: int, expected: int) -> None:
    assert file_mask(file) == expected


def test_square_colours() -> None:
    a1, h1, a8 = 0, 7, 56
    assert occupied(DARK_SQUARES, a1)
    assert occupied(LIGHT_SQUARES, h1)
    assert occupied(LIGHT_SQUARES, a8)
    assert DARK_SQUARES & LIGHT_SQUARES == 0
    assert count_bits(DARK_SQUARES) == 32
    assert color_mask(Color.WHITE) == LIGHT_SQUARES
    assert color_mask(Color.BLACK) == DARK_SQUARES
    assert make_square(4, 3) == 28
