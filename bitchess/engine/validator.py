from __future__ import annotations

from enum import Enum
from typing import Optional

from .bitboard import square_to_bitboard
from .pieces import Color


class MoveError(Enum):
    NO_PIECE_AT_SOURCE = "no_piece_at_source"
    WRONG_COLOR_PIECE = "wrong_color_piece"
    DESTINATION_OCCUPIED_BY_SAME_COLOR = "destination_occupied_by_same_color"
    INVALID_DESTINATION = "invalid_destination"
    # Reserved: sliding generators already stop at the first blocker, so no
    # validation path produces this value.
    PATH_BLOCKED = "path_blocked"


class IllegalMoveError(ValueError):
    """Raised by move application when validation rejects a move.

    Attributes:
        reason (MoveError): Which validation rule rejected the move.
        from_sq (int): Origin square of the rejected move.
        to_sq (int): Destination square of the rejected move.
    """

    def __init__(self, reason: MoveError, from_sq: int, to_sq: int) -> None:
        super().__init__(f"illegal move {from_sq}->{to_sq}: {reason.value}")
        self.reason = reason
        self.from_sq = from_sq
        self.to_sq = to_sq


def validate_move(
    from_sq: int,
    to_sq: int,
    side_to_move: Color,
    white_pieces: int,
    black_pieces: int,
    legal_moves: int,
) -> Optional[MoveError]:
    """Check a move against ownership, occupancy and the pseudo-legal mask.

    Rules are tried in order and the first failing one is returned:
    no piece on ``from_sq``, piece of the wrong colour, destination held by
    the mover's own piece, destination missing from ``legal_moves``.

    Returns:
        Optional[MoveError]: None if the move is accepted.
    """
    from_bb = square_to_bitboard(from_sq)
    to_bb = square_to_bitboard(to_sq)

    is_white = white_pieces & from_bb != 0
    is_black = black_pieces & from_bb != 0
    if not is_white and not is_black:
        return MoveError.NO_PIECE_AT_SOURCE

    own = white_pieces if side_to_move is Color.WHITE else black_pieces
    if own & from_bb == 0:
        return MoveError.WRONG_COLOR_PIECE
    if own & to_bb:
        return MoveError.DESTINATION_OCCUPIED_BY_SAME_COLOR
    if legal_moves & to_bb == 0:
        return MoveError.INVALID_DESTINATION
    return None
