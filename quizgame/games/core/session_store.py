# quizgame/games/core/session_store.py
from __future__ import annotations
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional, Tuple
import logging
import threading
import time
import uuid

from flask import session

from .game_state import NO_GAME, GameState, Playing

logger = logging.getLogger(__name__)


# ============================================================
# Session identity
# ============================================================

def get_or_create_session_id() -> str:
    """
    Stable per-browser key for game state: a uuid4 kept in Flask's signed
    session cookie, created on first use.
    """
    sid = session.get("sid")
    if not sid:
        sid = str(uuid.uuid4())
        session["sid"] = sid
        session.permanent = True
    return sid


# ============================================================
# In-memory store (per server process)
# ============================================================

class GameSessionStore:
    """
    session_id -> Playing game. NoGame is never stored: saving it drops the entry.

    Entries idle for longer than ``ttl`` seconds are treated as gone, which is
    how a game ends when the browser session expires.

    Use ``locked(session_id)`` around load -> transition -> save so that
    concurrent requests of one player never overwrite each other.
    """

    def __init__(self, ttl: Optional[float] = None, clock: Callable[[], float] = time.monotonic,
                 purge_every: float = 300.0):
        self.ttl = ttl
        self.purge_every = purge_every
        self._clock = clock
        self._last_purge = clock()
        self._states: Dict[str, Tuple[Playing, float]] = {}
        self._locks: Dict[str, List] = {}   # session_id -> [Lock, users]
        self._guard = threading.Lock()

    # ---- critical section ----
    @contextmanager
    def locked(self, session_id: str) -> Iterator[None]:
        with self._guard:
            entry = self._locks.setdefault(session_id, [threading.Lock(), 0])
            entry[1] += 1
        lock = entry[0]
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    self._locks.pop(session_id, None)

    # ---- load / save ----
    def load(self, session_id: str) -> GameState:
        with self._guard:
            entry = self._states.get(session_id)
            if entry is None:
                return NO_GAME
            state, touched_at = entry
            if self._expired(touched_at):
                del self._states[session_id]
                logger.debug("game state for session %s expired", session_id)
                return NO_GAME
            return state

    def save(self, session_id: str, state: GameState) -> None:
        with self._guard:
            if isinstance(state, Playing):
                self._states[session_id] = (state, self._clock())
            else:
                self._states.pop(session_id, None)
            if self.ttl is not None and self._clock() - self._last_purge > self.purge_every:
                self._purge_locked()

    def clear(self, session_id: str) -> None:
        self.save(session_id, NO_GAME)

    # ---- housekeeping ----
    def purge_expired(self) -> int:
        with self._guard:
            return self._purge_locked()

    def _purge_locked(self) -> int:
        stale = [sid for sid, (_, ts) in self._states.items() if self._expired(ts)]
        for sid in stale:
            del self._states[sid]
        self._last_purge = self._clock()
        if stale:
            logger.info("purged %d expired game states", len(stale))
        return len(stale)

    def __len__(self) -> int:
        with self._guard:
            return sum(1 for _, ts in self._states.values() if not self._expired(ts))

    def _expired(self, touched_at: float) -> bool:
        return self.ttl is not None and (self._clock() - touched_at) > self.ttl
