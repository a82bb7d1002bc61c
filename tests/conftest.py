"""
Pytest configuration and shared fixtures for quizgame tests.
"""
import copy
import random
import re

import pytest

from quizgame import create_app
from quizgame.config import TestingConfig
from quizgame.db import db
from quizgame.games.core.quiz_repository import QuizView, TipView
from quizgame.games.core.selector import RandomSelector
from quizgame.games.core.state_machine import GameStateMachine
from quizgame.models import Quiz
from quizgame.seed import seed_quizzes


SAMPLE_QUIZZES = [
    {"question": "Capital of Italy", "answer": "Rome", "author": "admin",
     "tips": ["Empire", "Colosseum"]},
    {"question": "Capital of France", "answer": "Paris", "author": "admin",
     "tips": ["Eiffel Tower"]},
    {"question": "Capital of Spain", "answer": "Madrid", "author": "admin"},
    {"question": "Capital of Portugal", "answer": "Lisbon", "author": "pepe"},
    {"question": "Capital of Germany", "answer": "Berlin", "author": "pepe",
     "tips": [{"text": "A wall", "accepted": False}]},
]


class FakeQuizRepository:
    """In-memory stand-in for QuizRepository (same eligibility contract)."""

    def __init__(self, quizzes):
        self.quizzes = {q.id: q for q in quizzes}
        self.fetched_offsets = []

    def _eligible(self, excluded):
        return [q for qid, q in sorted(self.quizzes.items()) if qid not in excluded]

    def count_eligible(self, excluded):
        return len(self._eligible(excluded))

    def fetch_one_at(self, excluded, offset):
        self.fetched_offsets.append(offset)
        eligible = self._eligible(excluded)
        return eligible[offset] if offset < len(eligible) else None


def make_quiz(qid, answer=None, tips=0):
    return QuizView(
        id=qid,
        question=f"Question {qid}",
        answer=answer or f"answer {qid}",
        tips=tuple(TipView(id=qid * 100 + i, text=f"tip {i} for {qid}") for i in range(tips)),
    )


@pytest.fixture
def quiz_views():
    return [make_quiz(i, tips=2) for i in range(1, 6)]


@pytest.fixture
def fake_repo(quiz_views):
    return FakeQuizRepository(quiz_views)


@pytest.fixture
def engine(fake_repo):
    rng = random.Random(7)
    return GameStateMachine(RandomSelector(fake_repo, rng=rng), max_credits=3, allowed_time=10, rng=rng)


# ---------------------------------------------------------------------------
# Flask app fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_app():
    def _make(quizzes=SAMPLE_QUIZZES, config_class=TestingConfig, **config):
        app = create_app(config_class)
        app.config.update(config)
        with app.app_context():
            db.create_all()
            seed_quizzes(copy.deepcopy(quizzes))
        return app
    return _make


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def answers(app):
    """quiz id -> canonical answer for the seeded quizzes."""
    with app.app_context():
        return {q.id: q.answer for q in Quiz.query.all()}


# ---------------------------------------------------------------------------
# HTML scraping helpers for route tests
# ---------------------------------------------------------------------------

def served_quiz_id(resp):
    m = re.search(r'data-quiz-id="(\d+)"', resp.get_data(as_text=True))
    return int(m.group(1)) if m else None


def rendered_score(resp):
    m = re.search(r'id="score">(\d+)<', resp.get_data(as_text=True))
    return int(m.group(1)) if m else None


def rendered_result(resp):
    m = re.search(r'data-result="(true|false)"', resp.get_data(as_text=True))
    return None if m is None else m.group(1) == "true"
