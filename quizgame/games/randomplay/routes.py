# quizgame/games/randomplay/routes.py
from __future__ import annotations
from typing import Callable, Tuple, TypeVar
import logging

from flask import Blueprint, abort, current_app, jsonify, render_template, request

from quizgame import limiter
from quizgame.games.core.game_state import GameState
from quizgame.games.core.quiz_repository import QuizRepository
from quizgame.games.core.session_store import get_or_create_session_id
from quizgame.games.core.state_machine import FinalScore
from quizgame.games.core.store_registry import get_engine, get_session_store

logger = logging.getLogger(__name__)

bp = Blueprint(
    "randomplay",
    __name__,
    url_prefix="/quizzes",
    template_folder="templates",
)

R = TypeVar("R")


# -----------------------------------------------------------------------------
# Small per-request helpers
# -----------------------------------------------------------------------------
def _sid() -> str:
    return get_or_create_session_id()


def _transition(step: Callable[[GameState], Tuple[GameState, R]]) -> R:
    """load -> step -> save for this player's game, one request at a time."""
    sid = _sid()
    store = get_session_store()
    with store.locked(sid):
        state = store.load(sid)
        new_state, result = step(state)
        store.save(sid, new_state)
    return result


def _check_limit() -> str:
    return current_app.config.get("RANDOMPLAY_CHECK_LIMIT", "60 per minute")


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------
@bp.get("/randomplay")
def randomplay():
    engine = get_engine()
    view = _transition(engine.start_or_continue)

    if isinstance(view, FinalScore):
        return render_template("randomplay/random_nomore.html", score=view.score)

    return render_template(
        "randomplay/random_play.html",
        quiz=view.quiz,
        score=view.score,
        credits=view.credits_left,
        allowed_time=engine.allowed_time,
        randomplay=True,
    )


@bp.get("/randomcheck/<int:quiz_id>")
@limiter.limit(_check_limit)
def randomcheck(quiz_id: int):
    quiz = QuizRepository().get(quiz_id)
    if quiz is None:
        abort(404, description=f"There is no quiz with id={quiz_id}")

    submitted = request.args.get("answer", "")
    engine = get_engine()
    result = _transition(lambda state: engine.check_answer(state, quiz.id, quiz.answer, submitted))

    return render_template(
        "randomplay/random_result.html",
        quiz=quiz,
        result=result.result,
        answer=result.answer,
        score=result.score,
    )


@bp.get("/randomplay/countdown")
@limiter.exempt  # polled every second by the play page
def countdown():
    snap = _transition(get_engine().poll)
    return jsonify(snap)


@bp.get("/randomplay/timeup")
def timeup():
    final = _transition(get_engine().time_up)
    return render_template("randomplay/timeup.html", score=final.score)


@bp.get("/randomplay/randomtip")
def randomtip():
    reveal = _transition(get_engine().reveal_tip)
    return render_template(
        "randomplay/_random_tip.html",
        tip=reveal.tip,
        credits=reveal.credits_left,
        rejected=reveal.rejected,
    )
