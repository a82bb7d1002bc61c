# quizgame/models.py
from datetime import datetime

from sqlalchemy import func

from .db import db


class User(db.Model):
    __tablename__ = "users"

    id            = db.Column(db.Integer, primary_key=True)
    username      = db.Column(db.String(80), unique=True, nullable=False)
    email         = db.Column(db.String(255), unique=True)
    password_hash = db.Column(db.Text)
    is_admin      = db.Column(db.Boolean, nullable=False, default=False)
    created_at    = db.Column(db.DateTime(timezone=True), default=datetime.utcnow)

    quizzes = db.relationship("Quiz", back_populates="author", lazy="dynamic")

    def __repr__(self):
        return f"<User id={self.id} username={self.username!r}>"


class Quiz(db.Model):
    __tablename__ = "quizzes"

    id         = db.Column(db.Integer, primary_key=True)
    question   = db.Column(db.Text, nullable=False)
    answer     = db.Column(db.Text, nullable=False)
    author_id  = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"))
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())

    author = db.relationship("User", back_populates="quizzes")
    tips   = db.relationship("Tip", back_populates="quiz", order_by="Tip.id",
                             cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Quiz id={self.id} question={self.question!r}>"


class Tip(db.Model):
    __tablename__ = "tips"

    id         = db.Column(db.Integer, primary_key=True)
    quiz_id    = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False)
    text       = db.Column(db.Text, nullable=False)
    author_id  = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"))
    accepted   = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())

    quiz   = db.relationship("Quiz", back_populates="tips")
    author = db.relationship("User")

    def __repr__(self):
        return f"<Tip id={self.id} quiz_id={self.quiz_id} accepted={self.accepted}>"
