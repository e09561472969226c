from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    illegal_move_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...engine.bitboard import iter_squares
from ...engine.game import Game
from ...engine.move import parse_move, square_to_str, str_to_square
from ...engine.perft import perft as perft_nodes
from ...engine.status import safe_destinations
from ...engine.validator import IllegalMoveError


logger = logging.getLogger(__name__)


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Move as two squares, e.g., e2e4")


class PerftRequest(BaseModel):
    fen: str = Field(..., description="FEN string")
    depth: int = Field(default=1, ge=0, le=4)


class PieceInfo(BaseModel):
    type: str
    color: str


class LegalDestinations(BaseModel):
    square: str
    piece: Optional[PieceInfo]
    destinations: List[str]
    safe_destinations: List[str]


class GameState(BaseModel):
    game_id: str
    fen: str
    side_to_move: str
    status: str
    in_check: bool
    legal_moves: List[str]
    last_move: Optional[str]
    move_history: List[str]


def create_app(store: Optional[InMemorySessionStore] = None) -> FastAPI:
    """Build the HTTP front end.

    Args:
        store: Session store to serve from; a fresh in-memory store is
            created when omitted.
    """
    app = FastAPI(title="bitchess", version="0.1.0")

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(IllegalMoveError, illegal_move_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    sessions = store if store is not None else InMemorySessionStore()
    app.state.sessions = sessions

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game() -> CreateGameResponse:
        game_id = sessions.create(Game.new())
        game = _require_game(sessions, game_id)
        logger.info("game created", extra={"game_id": game_id})
        return CreateGameResponse(game_id=game_id, fen=game.to_fen())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _game_state(game_id, _require_game(sessions, game_id))

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        _require_game(sessions, game_id)
        try:
            game = Game.from_fen(req.fen)
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid FEN")
        sessions.set(game_id, game)
        return _game_state(game_id, game)

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(sessions, game_id)
        try:
            move = parse_move(req.move.strip().lower())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        # IllegalMoveError is rendered by illegal_move_handler
        game.apply_move(move)
        logger.debug("move applied", extra={"game_id": game_id, "move": move.to_uci()})
        return _game_state(game_id, game)

    @app.get("/api/games/{game_id}/legal/{square}", response_model=LegalDestinations)
    async def legal(game_id: str, square: str) -> LegalDestinations:
        game = _require_game(sessions, game_id)
        try:
            sq = str_to_square(square.lower())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        piece = game.board.piece_at(sq)
        return LegalDestinations(
            square=square_to_str(sq),
            piece=(
                PieceInfo(type=piece[0].name.lower(), color=piece[1].name.lower())
                if piece is not None
                else None
            ),
            destinations=[
                square_to_str(t) for t in iter_squares(game.board.legal_destinations(sq))
            ],
            safe_destinations=[
                square_to_str(t) for t in iter_squares(safe_destinations(game.board, sq))
            ],
        )

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(sessions, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _game_state(game_id, game)

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        if not sessions.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"status": "deleted"}

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, int]:
        try:
            game = Game.from_fen(req.fen)
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid FEN")
        return {"nodes": perft_nodes(game.board, req.depth), "depth": req.depth}

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _game_state(game_id: str, game: Game) -> GameState:
    history = game.move_history_uci()
    return GameState(
        game_id=game_id,
        fen=game.to_fen(),
        side_to_move=game.board.side_to_move.value,
        status=game.status().value,
        in_check=game.in_check(),
        legal_moves=[m.to_uci() for m in game.legal_moves()],
        last_move=history[-1] if history else None,
        move_history=history,
    )
