"""Interactive text interface over a single :class:`Game`.

Input and output are injected callables so the loop can be driven from
tests without a terminal.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..engine.bitboard import color_mask, iter_squares, make_square, occupied
from ..engine.game import Game
from ..engine.move import Move, square_to_str, str_to_square
from ..engine.pieces import PIECE_TO_GLYPH, Color
from ..engine.status import GameStatus
from ..engine.validator import IllegalMoveError, MoveError


logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

MOVE_ERROR_MESSAGES = {
    MoveError.NO_PIECE_AT_SOURCE: "Error: No piece at the source square",
    MoveError.WRONG_COLOR_PIECE: "Error: That's not your piece to move",
    MoveError.DESTINATION_OCCUPIED_BY_SAME_COLOR: "Error: Destination is occupied by your own piece",
    MoveError.INVALID_DESTINATION: "Error: Invalid destination for this piece",
    MoveError.PATH_BLOCKED: "Error: The path is blocked by another piece",
}

STATUS_MESSAGES = {
    GameStatus.ONGOING: "Game in progress",
    GameStatus.CHECK: "Check!",
    GameStatus.CHECKMATE: "Checkmate!",
    GameStatus.STALEMATE: "Stalemate!",
}

HELP_TEXT = """
Available commands:
  e2e4       - Move a piece from e2 to e4
  e2         - Show legal moves from square e2 and select by number
  legal e2   - Show legal moves from square e2
  print      - Display the current board
  status     - Show the game status
  undo       - Take back the last move
  help       - Show this help message
  quit/exit  - Exit the program
"""

_DARK_BG = "\x1b[48;5;137m"
_LIGHT_BG = "\x1b[48;5;180m"
_RESET = "\x1b[0m"


def render_board(game: Game, color: bool = True) -> str:
    """Render the board from White's side, rank 8 at the top.

    With ``color`` the squares are shaded with ANSI backgrounds; without it
    empty dark squares show as ``·``.
    """
    board = game.board
    dark_squares = color_mask(Color.BLACK)
    lines: List[str] = []
    for rank in range(7, -1, -1):
        cells = []
        for file in range(8):
            sq = make_square(file, rank)
            idx = board.piece_index_at(sq)
            dark = occupied(dark_squares, sq)
            if idx is not None:
                glyph = PIECE_TO_GLYPH[idx]
            else:
                glyph = "·" if dark and not color else " "
            if color:
                bg = _DARK_BG if dark else _LIGHT_BG
                cells.append(f"{bg} {glyph} {_RESET}")
            else:
                cells.append(f" {glyph} ")
        lines.append(f"{rank + 1} " + "".join(cells))
    lines.append("   " + "  ".join("abcdefgh"))
    return "\n".join(lines)


def describe_piece(game: Game, sq: int) -> str:
    piece = game.board.piece_at(sq)
    if piece is None:
        return "No piece"
    piece_type, color = piece
    side = "White" if color is Color.WHITE else "Black"
    return f"{side} {piece_type.name.capitalize()}"


def side_label(color: Color) -> str:
    return "White (W)" if color is Color.WHITE else "Black (B)"


class InteractiveSession:
    """Read-eval-print loop for two players sharing one terminal."""

    def __init__(
        self,
        game: Optional[Game] = None,
        input_fn: InputFn = input,
        output_fn: OutputFn = print,
        color: bool = True,
    ) -> None:
        self.game = game if game is not None else Game.new()
        self._input = input_fn
        self._out = output_fn
        self._color = color

    def run(self) -> None:
        self._out("\n=== bitchess ===\n")
        self._out("Type 'help' for a list of commands")
        self.print_board()
        while True:
            prompt = f"\n{side_label(self.game.board.side_to_move)} to move > "
            try:
                line = self._input(prompt)
            except EOFError:
                self._out("")
                break
            if not self.handle(line):
                break
        self._out("Thanks for playing!")

    def handle(self, line: str) -> bool:
        """Execute one command line. Returns False when the loop should end."""
        cmd = line.strip().lower()
        if cmd in ("quit", "exit"):
            return False
        if cmd == "help":
            self._out(HELP_TEXT)
        elif cmd == "print":
            self.print_board()
        elif cmd == "status":
            self._out(STATUS_MESSAGES[self.game.status()])
        elif cmd == "undo":
            self._undo()
        elif cmd.startswith("legal "):
            self._show_legal(cmd[len("legal "):].strip())
        elif len(cmd) == 4:
            self._move_text(cmd)
        elif len(cmd) == 2:
            self._select(cmd)
        elif cmd:
            self._out("Unrecognized command. Type 'help' for available commands")
        return True

    def print_board(self) -> None:
        self._out(render_board(self.game, color=self._color))

    def _undo(self) -> None:
        try:
            self.game.undo_move()
        except ValueError:
            self._out("Nothing to undo")
            return
        self.print_board()

    def _show_legal(self, text: str) -> None:
        try:
            sq = str_to_square(text)
        except ValueError:
            self._out(f"Invalid square notation: {text}. Use format like 'e2'")
            return
        targets = list(iter_squares(self.game.board.legal_destinations(sq)))
        if not targets:
            self._out(f"No legal moves for piece at {text}")
            return
        self._out(f"Legal moves for {describe_piece(self.game, sq)} at {text}:")
        self._out(" ".join(f"{i}) {square_to_str(t)}" for i, t in enumerate(targets, 1)))

    def _move_text(self, text: str) -> None:
        try:
            move = Move(str_to_square(text[0:2]), str_to_square(text[2:4]))
        except ValueError:
            self._out("Invalid move notation. Use format like 'e2e4'")
            return
        self._play(move)

    def _select(self, text: str) -> None:
        try:
            from_sq = str_to_square(text)
        except ValueError:
            self._out("Invalid square notation. Use format like 'e2'")
            return
        if self.game.board.piece_at(from_sq) is None:
            self._out(f"No piece at {text}")
            return
        targets = list(iter_squares(self.game.board.legal_destinations(from_sq)))
        if not targets:
            self._out(f"No legal moves for piece at {text}")
            return
        self._out(f"Legal moves for {describe_piece(self.game, from_sq)} at {text}:")
        for i, to_sq in enumerate(targets, 1):
            self._out(f"  {i}. {square_to_str(to_sq)}")

        try:
            choice = self._input("Select move number (or 0 to cancel): ").strip()
        except EOFError:
            return
        if not choice.isdigit():
            self._out("Invalid input, expected a number")
            return
        num = int(choice)
        if num == 0:
            self._out("Move cancelled")
        elif num <= len(targets):
            self._play(Move(from_sq, targets[num - 1]))
        else:
            self._out("Invalid move number")

    def _play(self, move: Move) -> None:
        try:
            self.game.apply_move(move)
        except IllegalMoveError as e:
            logger.debug("move rejected: %s", e)
            self._out(MOVE_ERROR_MESSAGES[e.reason])
            return
        self._out(f"Moved from {square_to_str(move.from_sq)} to {square_to_str(move.to_sq)}")
        self.print_board()
        status = self.game.status()
        if status is not GameStatus.ONGOING:
            self._out(STATUS_MESSAGES[status])


__all__ = [
    "HELP_TEXT",
    "InteractiveSession",
    "MOVE_ERROR_MESSAGES",
    "render_board",
]
