# quizgame/seed.py
from __future__ import annotations
from typing import Any, Dict, Iterable, Optional
import logging

from .db import db
from .models import Quiz, Tip, User

logger = logging.getLogger(__name__)


def upsert_user(username: str) -> User:
    user = User.query.filter_by(username=username).first()
    if not user:
        user = User(username=username)
        db.session.add(user)
        db.session.flush()
    return user


def ensure_quiz(question: str, answer: str, author: Optional[User] = None,
                tips: Iterable[Dict[str, Any]] = ()) -> bool:
    """Add a quiz unless one with the same question already exists."""
    if Quiz.query.filter_by(question=question).first():
        return False
    quiz = Quiz(question=question, answer=answer, author=author)
    for t in tips:
        if isinstance(t, str):
            t = {"text": t}
        quiz.tips.append(Tip(text=t["text"], accepted=bool(t.get("accepted", True)), author=author))
    db.session.add(quiz)
    return True


def seed_quizzes(data: Any) -> int:
    """
    data: list of {"question", "answer", "author"?, "tips"?: [str | {"text", "accepted"}]}
    or {"quizzes": [...]}.
    """
    if isinstance(data, dict):
        data = data.get("quizzes") or []
    if not isinstance(data, list):
        raise ValueError("quizzes file must hold a list (or {'quizzes': [...]})")

    added = 0
    for i, item in enumerate(data, start=1):
        question = (item.get("question") or "").strip()
        answer = (item.get("answer") or "").strip()
        if not question or not answer:
            logger.warning("skip quiz #%d: question and answer are required", i)
            continue
        author = upsert_user(item["author"]) if item.get("author") else None
        if ensure_quiz(question, answer, author, item.get("tips") or ()):
            added += 1
    db.session.commit()
    logger.info("seeded %d quizzes (%d in file)", added, len(data))
    return added
