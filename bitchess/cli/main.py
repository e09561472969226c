from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from ..engine.board import STARTPOS_FEN
from ..engine.game import Game
from .interactive import InteractiveSession


LOG_LEVELS = ("debug", "info", "warning", "error")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bitchess", description="Bitboard chess rules engine")
    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play a game in the terminal")
    play.add_argument("--fen", type=str, default=STARTPOS_FEN, help="FEN string (default: startpos)")
    play.add_argument("--no-color", action="store_true", help="Render the board without ANSI colours")
    play.add_argument("--log-level", choices=LOG_LEVELS, default="warning")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--log-level", choices=LOG_LEVELS, default="info")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        uvicorn.run(
            "bitchess.protocol.http.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            log_level=args.log_level,
        )
        return 0

    logging.basicConfig(level=args.log_level.upper())
    try:
        game = Game.from_fen(args.fen)
    except ValueError as e:
        print(f"invalid FEN: {e}")
        return 2
    InteractiveSession(game, color=not args.no_color).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
