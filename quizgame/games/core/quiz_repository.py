# quizgame/games/core/quiz_repository.py
from __future__ import annotations
from dataclasses import dataclass
from typing import AbstractSet, Optional, Tuple
import logging

from sqlalchemy.orm import selectinload

from quizgame.db import db
from quizgame.models import Quiz

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TipView:
    id: int
    text: str


@dataclass(frozen=True)
class QuizView:
    """A quiz as random play sees it: tips carry text only, never their author."""
    id: int
    question: str
    answer: str
    tips: Tuple[TipView, ...] = ()


class QuizRepository:
    """
    Read access to the quizzes table for random play.

    Eligibility is decided by the query (``id NOT IN excluded``), so a quiz the
    player already answered can never come back from fetch_one_at. Database
    errors (sqlalchemy.exc.SQLAlchemyError) are not caught here.
    """

    def count_eligible(self, excluded: AbstractSet[int]) -> int:
        return self._eligible(excluded).count()

    def fetch_one_at(self, excluded: AbstractSet[int], offset: int) -> Optional[QuizView]:
        row = (self._eligible(excluded)
               .options(selectinload(Quiz.tips))
               .order_by(Quiz.id.asc())
               .offset(int(offset))
               .limit(1)
               .first())
        return self._to_view(row) if row else None

    def get(self, quiz_id: int) -> Optional[QuizView]:
        row = db.session.get(Quiz, int(quiz_id))
        return self._to_view(row) if row else None

    # -------- internals --------
    def _eligible(self, excluded: AbstractSet[int]):
        query = Quiz.query
        if excluded:
            query = query.filter(Quiz.id.not_in(sorted(excluded)))
        return query

    @staticmethod
    def _to_view(quiz: Quiz) -> QuizView:
        return QuizView(
            id=quiz.id,
            question=quiz.question,
            answer=quiz.answer,
            tips=tuple(TipView(id=t.id, text=t.text) for t in quiz.tips),
        )
