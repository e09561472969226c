from __future__ import annotations

from enum import Enum, IntEnum
from typing import Tuple


class Color(str, Enum):
    """Side colour. Values match the FEN side-to-move field."""

    WHITE = "w"
    BLACK = "b"

    @property
    def opposite(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class PieceType(IntEnum):
    PAWN = 0
    KNIGHT = 1
    BISHOP = 2
    ROOK = 3
    QUEEN = 4
    KING = 5


# Piece indices for bitboards
WP, WN, WB, WR, WQ, WK, BP, BN, BB, BR, BQ, BK = range(12)
PIECE_ORDER = [WP, WN, WB, WR, WQ, WK, BP, BN, BB, BR, BQ, BK]
PIECE_TO_CHAR = {
    WP: "P",
    WN: "N",
    WB: "B",
    WR: "R",
    WQ: "Q",
    WK: "K",
    BP: "p",
    BN: "n",
    BB: "b",
    BR: "r",
    BQ: "q",
    BK: "k",
}
CHAR_TO_PIECE = {v: k for k, v in PIECE_TO_CHAR.items()}

PIECE_TO_GLYPH = {
    WP: "♙",
    WN: "♘",
    WB: "♗",
    WR: "♖",
    WQ: "♕",
    WK: "♔",
    BP: "♟",
    BN: "♞",
    BB: "♝",
    BR: "♜",
    BQ: "♛",
    BK: "♚",
}


def piece_index(piece_type: PieceType, color: Color) -> int:
    """Bitboard index for ``color``'s ``piece_type`` (``WP`` .. ``BK``)."""
    return int(piece_type) + (0 if color is Color.WHITE else 6)


def index_to_piece(idx: int) -> Tuple[PieceType, Color]:
    color = Color.WHITE if idx < 6 else Color.BLACK
    return PieceType(idx % 6), color


def color_indices(color: Color) -> range:
    """The six bitboard indices owned by ``color``."""
    return range(0, 6) if color is Color.WHITE else range(6, 12)
