# quizgame/home/routes.py
from flask import Blueprint, render_template

from quizgame.models import Quiz

bp = Blueprint("home", __name__)


@bp.get("/")
def index():
    return render_template("index.html", quiz_count=Quiz.query.count())
