from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict, Optional

from ...engine.game import Game


logger = logging.getLogger(__name__)


class InMemorySessionStore:
    """Thread-safe in-memory game session store.

    Responsibilities:
    - Create new sessions with unique `game_id`s
    - Retrieve existing sessions by `game_id`
    - Replace a session's game (e.g. after loading a FEN)
    - Delete sessions

    Each session owns its own `Game`; boards are never shared between ids.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._games: Dict[str, Game] = {}

    def create(self, game: Optional[Game] = None) -> str:
        """Create a new game session and return its `game_id`."""
        gid = str(uuid.uuid4())
        if game is None:
            game = Game.new()
        with self._lock:
            self._games[gid] = game
            count = len(self._games)
        logger.debug("session created", extra={"game_id": gid, "sessions": count})
        return gid

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            return self._games.get(game_id)

    def set(self, game_id: str, game: Game) -> None:
        with self._lock:
            if game_id not in self._games:
                raise KeyError(game_id)
            self._games[game_id] = game

    def delete(self, game_id: str) -> bool:
        """Remove a session; return False if it did not exist."""
        with self._lock:
            existed = self._games.pop(game_id, None) is not None
            count = len(self._games)
        if existed:
            logger.debug("session deleted", extra={"game_id": game_id, "sessions": count})
        return existed
