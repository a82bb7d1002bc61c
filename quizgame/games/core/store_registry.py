# quizgame/games/core/store_registry.py
from __future__ import annotations
from typing import Callable, TypeVar
import random

from flask import current_app

from .quiz_repository import QuizRepository
from .selector import RandomSelector
from .session_store import GameSessionStore
from .state_machine import GameStateMachine

T = TypeVar("T")

SESSION_STORE_KEY = "randomplay_sessions"
ENGINE_KEY = "randomplay_engine"


def get_store(key: str, factory: Callable[[], T]) -> T:
    """One shared object per app, kept in current_app.extensions[key]."""
    ext = current_app.extensions
    store = ext.get(key)
    if store is None:
        store = ext.setdefault(key, factory())
    return store


def get_session_store() -> GameSessionStore:
    return get_store(
        SESSION_STORE_KEY,
        lambda: GameSessionStore(ttl=current_app.config.get("RANDOMPLAY_SESSION_TTL")),
    )


def _build_engine() -> GameStateMachine:
    cfg = current_app.config
    rng = random.Random(cfg.get("RANDOMPLAY_SEED"))
    return GameStateMachine(
        RandomSelector(QuizRepository(), rng=rng),
        max_credits=cfg.get("RANDOMPLAY_MAX_CREDITS", 3),
        allowed_time=cfg.get("RANDOMPLAY_ALLOWED_TIME", 10),
        rng=rng,
    )


def get_engine() -> GameStateMachine:
    return get_store(ENGINE_KEY, _build_engine)
