# quizgame/quizzes/routes.py
# Read-only quiz pages: list/search, show, single-quiz play and check.
from __future__ import annotations
import re

from flask import Blueprint, abort, current_app, render_template, request
from sqlalchemy.orm import selectinload

from quizgame.db import db
from quizgame.games.core.state_machine import answers_match, normalize_answer
from quizgame.models import Quiz, User

bp = Blueprint("quizzes", __name__, template_folder="templates")

_SPACES = re.compile(r" +")


def _load_quiz(quiz_id: int) -> Quiz:
    quiz = (Quiz.query
            .options(selectinload(Quiz.tips))
            .filter(Quiz.id == quiz_id)
            .first())
    if quiz is None:
        abort(404, description=f"There is no quiz with id={quiz_id}")
    return quiz


def _search_pattern(search: str) -> str:
    """'capital  of' -> '%capital%of%'"""
    return "%" + _SPACES.sub("%", search) + "%"


def _render_index(query, title: str, author: User | None = None):
    search = (request.args.get("search") or "").strip()
    if search:
        query = query.filter(Quiz.question.like(_search_pattern(search)))

    try:
        pageno = max(1, int(request.args.get("pageno") or 1))
    except ValueError:
        pageno = 1

    page = query.order_by(Quiz.id.asc()).paginate(
        page=pageno,
        per_page=current_app.config.get("QUIZZES_PER_PAGE", 10),
        error_out=False,
    )
    return render_template("quizzes/index.html", page=page, quizzes=page.items,
                           search=search, title=title, author=author)


@bp.get("/quizzes")
def index():
    return _render_index(Quiz.query, "Questions")


@bp.get("/users/<int:user_id>/quizzes")
def user_index(user_id: int):
    user = db.session.get(User, user_id)
    if user is None:
        abort(404, description=f"There is no user with id={user_id}")
    return _render_index(Quiz.query.filter(Quiz.author_id == user.id),
                         f"Questions of {user.username}", author=user)


@bp.get("/quizzes/<int:quiz_id>")
def show(quiz_id: int):
    quiz = _load_quiz(quiz_id)
    tips = [t for t in quiz.tips if t.accepted]
    return render_template("quizzes/show.html", quiz=quiz, tips=tips)


@bp.get("/quizzes/<int:quiz_id>/play")
def play(quiz_id: int):
    quiz = _load_quiz(quiz_id)
    return render_template("quizzes/play.html", quiz=quiz, answer=request.args.get("answer", ""))


@bp.get("/quizzes/<int:quiz_id>/check")
def check(quiz_id: int):
    quiz = _load_quiz(quiz_id)
    answer = request.args.get("answer", "")
    return render_template("quizzes/result.html", quiz=quiz,
                           result=answers_match(answer, quiz.answer),
                           answer=normalize_answer(answer))
