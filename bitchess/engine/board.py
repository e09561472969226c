from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from . import movegen
from .bitboard import clear_bit, make_square, occupied, set_bit
from .move import str_to_square
from .pieces import (
    BK,
    BP,
    CHAR_TO_PIECE,
    PIECE_ORDER,
    PIECE_TO_CHAR,
    WK,
    WP,
    Color,
    PieceType,
    color_indices,
    index_to_piece,
    piece_index,
)
from .validator import IllegalMoveError, MoveError, validate_move


# Castling and en passant are not part of the rules, so both fields stay empty.
STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1"


@dataclass
class Board:
    """Position state: twelve piece bitboards plus the side to move.

    Notes:
    - Squares are 0..63 (a1=0 .. h8=63), rank-major from white's perspective.
    - The twelve bitboards are pairwise disjoint.
    - ``apply_move`` is the only mutation; it flips ``side_to_move`` exactly
      once per accepted move.
    """

    # 12 piece bitboards, indexed WP..BK
    bb: List[int]
    side_to_move: Color = Color.WHITE
    # FEN bookkeeping only; no rule reads these counters
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board initialized to the standard chess starting position.

        Returns:
            Board: Board instance representing the standard starting position.
        """
        return cls.from_fen(STARTPOS_FEN)

    @classmethod
    def empty(cls, side_to_move: Color = Color.WHITE) -> "Board":
        return cls(bb=[0] * 12, side_to_move=side_to_move)

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        """Create a board from a Forsyth–Edwards Notation (FEN) string.

        Args:
            fen (str): FEN string describing the position to load.

        Returns:
            Board: Board instance initialized with state encoded in ``fen``.

        Raises:
            ValueError: If ``fen`` is empty, has the wrong number of fields, or
                contains invalid piece placement, castling rights, en passant
                square, or move counters.

        Notes:
            Castling rights and the en passant square are syntax-checked but
            not stored, since neither rule is implemented.
        """
        if not fen or not isinstance(fen, str):
            raise ValueError("FEN must be a non-empty string")
        parts = fen.strip().split()
        if len(parts) != 6:
            raise ValueError("FEN must have 6 fields")
        placement, stm, castling, ep, halfmove, fullmove = parts

        # Parse piece placement
        ranks = placement.split("/")
        if len(ranks) != 8:
            raise ValueError("FEN board must have 8 ranks")
        bb = [0] * 12
        for rank_idx, rank in enumerate(ranks[::-1]):  # start from rank 1 (bottom)
            file_idx = 0
            for ch in rank:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in FEN rank")
                    file_idx += n
                else:
                    if ch not in CHAR_TO_PIECE:
                        raise ValueError(f"invalid piece in FEN: {ch!r}")
                    if file_idx >= 8:
                        raise ValueError("too many squares in FEN rank")
                    sq = make_square(file_idx, rank_idx)
                    p = CHAR_TO_PIECE[ch]
                    bb[p] = set_bit(bb[p], sq)
                    file_idx += 1
            if file_idx != 8:
                raise ValueError("rank does not sum to 8 squares in FEN")

        if stm not in ("w", "b"):
            raise ValueError("side to move must be 'w' or 'b'")

        if castling != "-" and any(ch not in "KQkq" for ch in castling):
            raise ValueError("invalid castling rights")

        if ep != "-":
            try:
                ep_square = str_to_square(ep)
            except ValueError as e:
                raise ValueError("invalid en passant square") from e
            if ep_square // 8 not in (2, 5):
                raise ValueError("invalid en passant square rank")

        try:
            halfmove_clock = int(halfmove)
            fullmove_number = int(fullmove)
        except ValueError as e:
            raise ValueError("invalid move counters in FEN") from e
        if halfmove_clock < 0 or fullmove_number <= 0:
            raise ValueError("invalid move counters in FEN")

        return cls(
            bb=bb,
            side_to_move=Color(stm),
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )

    def to_fen(self) -> str:
        """Serialize the current position into a normalized FEN string.

        Returns:
            str: FEN string describing the board state, with ``-`` for both
                castling rights and the en passant square.
        """
        ranks_str: List[str] = []
        for rank_idx in range(7, -1, -1):  # 7..0 maps to ranks 8..1
            run = 0
            row = []
            for file_idx in range(8):
                sq = make_square(file_idx, rank_idx)
                ch = self._piece_char_at(sq)
                if ch is None:
                    run += 1
                else:
                    if run > 0:
                        row.append(str(run))
                        run = 0
                    row.append(ch)
            if run > 0:
                row.append(str(run))
            ranks_str.append("".join(row))
        placement = "/".join(ranks_str)
        return (
            f"{placement} {self.side_to_move.value} - - "
            f"{self.halfmove_clock} {self.fullmove_number}"
        )

    def _piece_char_at(self, sq: int) -> Optional[str]:
        idx = self.piece_index_at(sq)
        return None if idx is None else PIECE_TO_CHAR[idx]

    # --- Queries ---
    def piece_index_at(self, sq: int) -> Optional[int]:
        """Return the bitboard index (``WP`` .. ``BK``) holding ``sq``, if any."""
        for idx in PIECE_ORDER:
            if occupied(self.bb[idx], sq):
                return idx
        return None

    def piece_at(self, sq: int) -> Optional[Tuple[PieceType, Color]]:
        """Return the ``(PieceType, Color)`` standing on ``sq``, or None."""
        idx = self.piece_index_at(sq)
        return None if idx is None else index_to_piece(idx)

    def pieces(self, color: Color) -> int:
        """Aggregate occupancy bitboard of ``color``."""
        occ = 0
        for idx in color_indices(color):
            occ |= self.bb[idx]
        return occ

    @property
    def white_pieces(self) -> int:
        return self.pieces(Color.WHITE)

    @property
    def black_pieces(self) -> int:
        return self.pieces(Color.BLACK)

    @property
    def all_pieces(self) -> int:
        return self.white_pieces | self.black_pieces

    def legal_destinations(self, sq: int) -> int:
        """Pseudo-legal destinations of the piece on ``sq``.

        Returns 0 for an empty square or a piece of the side not to move. The
        result may include moves that leave the mover's own king in check.
        """
        piece = self.piece_at(sq)
        if piece is None:
            return 0
        piece_type, color = piece
        if color is not self.side_to_move:
            return 0
        return movegen.destinations(
            piece_type,
            sq,
            self.bb[piece_index(piece_type, Color.WHITE)],
            self.bb[piece_index(piece_type, Color.BLACK)],
            self.white_pieces,
            self.black_pieces,
            self.side_to_move,
        )

    # --- Mutation ---
    def apply_move(self, from_sq: int, to_sq: int) -> None:
        """Validate and apply a move in place.

        Captures remove whatever enemy piece stands on ``to_sq``. A move that
        exposes the mover's own king is accepted; only the status evaluator
        treats self-check as illegal.

        Raises:
            IllegalMoveError: If validation rejects the move. The board is
                left unchanged.
        """
        error = validate_move(
            from_sq,
            to_sq,
            self.side_to_move,
            self.white_pieces,
            self.black_pieces,
            self.legal_destinations(from_sq),
        )
        if error is not None:
            raise IllegalMoveError(error, from_sq, to_sq)

        new_bb = self.apply_pseudo_to_bb(from_sq, to_sq)
        if new_bb is None:
            raise IllegalMoveError(MoveError.NO_PIECE_AT_SOURCE, from_sq, to_sq)

        moved_pawn = occupied(self.bb[WP] | self.bb[BP], from_sq)
        captured = occupied(self.pieces(self.side_to_move.opposite), to_sq)
        self.bb[:] = new_bb
        if moved_pawn or captured:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        if self.side_to_move is Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opposite

    def apply_pseudo_to_bb(self, from_sq: int, to_sq: int) -> Optional[List[int]]:
        """Apply a move of the side to move to a copy of the bitboards.

        No validation is performed. The destination square is cleared in all
        six enemy bitboards, then the mover's bit is relocated.

        Returns:
            Optional[List[int]]: The new bitboards, or None if the side to
                move has no piece on ``from_sq``.
        """
        bb = list(self.bb)
        for idx in color_indices(self.side_to_move.opposite):
            bb[idx] = clear_bit(bb[idx], to_sq)
        for idx in color_indices(self.side_to_move):
            if occupied(bb[idx], from_sq):
                bb[idx] = set_bit(clear_bit(bb[idx], from_sq), to_sq)
                return bb
        return None

    def copy(self) -> "Board":
        return Board(
            bb=list(self.bb),
            side_to_move=self.side_to_move,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    def king_bitboard(self, color: Color) -> int:
        return self.bb[WK] if color is Color.WHITE else self.bb[BK]
