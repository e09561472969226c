from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .bitboard import iter_squares
from .board import Board
from .check import is_in_check
from .move import Move
from .status import GameStatus, game_status, safe_destinations


@dataclass
class Game:
    """Game wrapper around a board with helper operations.

    Responsibility: track board state and move history, apply and undo moves.
    Undo restores a snapshot taken before each move, since the board keeps no
    reversible state of its own.
    """

    board: Board
    move_stack: List[Move] = field(default_factory=list)
    _snapshots: List[Board] = field(default_factory=list, repr=False)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.startpos())

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        return cls(board=Board.from_fen(fen))

    def to_fen(self) -> str:
        return self.board.to_fen()

    def legal_moves(self) -> List[Move]:
        """Moves of the side to move that do not leave its own king in check."""
        moves: List[Move] = []
        for from_sq in iter_squares(self.board.pieces(self.board.side_to_move)):
            for to_sq in iter_squares(safe_destinations(self.board, from_sq)):
                moves.append(Move(from_sq, to_sq))
        return moves

    def apply_move(self, move: Move) -> None:
        """Apply ``move`` with the board's validation rules.

        Raises:
            IllegalMoveError: If the board rejects the move; history is
                unchanged in that case.
        """
        snapshot = self.board.copy()
        self.board.apply_move(move.from_sq, move.to_sq)
        self._snapshots.append(snapshot)
        self.move_stack.append(move)

    def undo_move(self) -> None:
        if not self.move_stack:
            raise ValueError("no moves to undo")
        self.move_stack.pop()
        self.board = self._snapshots.pop()

    # --- State flags for protocol ---
    def status(self) -> GameStatus:
        return game_status(self.board)

    def in_check(self) -> bool:
        return is_in_check(self.board, self.board.side_to_move)

    def checkmate(self) -> bool:
        return self.status() is GameStatus.CHECKMATE

    def stalemate(self) -> bool:
        return self.status() is GameStatus.STALEMATE

    def move_history_uci(self) -> List[str]:
        return [m.to_uci() for m in self.move_stack]
