# quizgame/games/core/state_machine.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union
import logging
import random

from .game_state import NO_GAME, GameState, Playing, SessionGameState, score_of
from .quiz_repository import QuizView, TipView
from .selector import Exhausted, RandomSelector

logger = logging.getLogger(__name__)


# ============================================================
# Results handed back to the views
# ============================================================

@dataclass(frozen=True)
class PlayView:
    quiz: QuizView
    score: int
    credits_left: int


@dataclass(frozen=True)
class FinalScore:
    score: int


@dataclass(frozen=True)
class CheckResult:
    result: bool
    answer: str
    score: int


@dataclass(frozen=True)
class TipReveal:
    tip: Optional[TipView]
    credits_left: int
    rejected: Optional[str] = None   # 'no_game' | 'no_credits' | 'no_tips'


def normalize_answer(text: Optional[str]) -> str:
    """'  Rome ' -> 'rome'"""
    return (text or "").strip().casefold()


def answers_match(submitted: Optional[str], canonical: Optional[str]) -> bool:
    return normalize_answer(submitted) == normalize_answer(canonical)


# ============================================================
# Transitions
# ============================================================

class GameStateMachine:
    """
    Random-play transitions. Every operation takes the current GameState and
    returns ``(new_state, result)``; nothing is stored here, and the state
    passed in is never mutated (Playing games are copied before changes).

    NoGame --play--> Playing --correct--> Playing
                             --wrong----> NoGame   (whole game discarded)
                             --timeup---> NoGame
                     Playing --pool empty on play--> NoGame (final score)
    """

    def __init__(self, selector: RandomSelector, *, max_credits: int, allowed_time: int,
                 rng: Optional[random.Random] = None):
        self.selector = selector
        self.max_credits = int(max_credits)
        self.allowed_time = int(allowed_time)
        self.rng = rng or random.Random()

    @staticmethod
    def _game(state: GameState) -> SessionGameState:
        return state.game.copy() if isinstance(state, Playing) else SessionGameState()

    # ---- play ----
    def start_or_continue(self, state: GameState) -> Tuple[GameState, Union[PlayView, FinalScore]]:
        game = self._game(state)
        outcome = self.selector.select_next(game.answered_quiz_ids)

        if isinstance(outcome, Exhausted):
            logger.info("quiz pool exhausted; final score=%d", outcome.final_score)
            return NO_GAME, FinalScore(score=outcome.final_score)

        quiz = outcome.quiz
        if game.current_quiz is None or game.current_quiz.id != quiz.id:
            game.tips.next_quiz()
        game.tips.ensure_initialized(self.max_credits)
        game.countdown.start(self.allowed_time)
        game.current_quiz = quiz

        logger.debug("serving quiz %s at score=%d credits=%d", quiz.id, game.score, game.tips.credits_left)
        return Playing(game), PlayView(quiz=quiz, score=game.score, credits_left=game.tips.credits_left)

    # ---- answer ----
    def check_answer(self, state: GameState, quiz_id: int, canonical_answer: str,
                     submitted: Optional[str]) -> Tuple[GameState, CheckResult]:
        answer = normalize_answer(submitted)
        if answer != normalize_answer(canonical_answer):
            if isinstance(state, Playing):
                logger.info("wrong answer for quiz %s; game with score=%d discarded", quiz_id, state.game.score)
            return NO_GAME, CheckResult(result=False, answer=answer, score=0)

        if isinstance(state, Playing) and quiz_id in state.game.answered_quiz_ids:
            logger.debug("quiz %s already answered; score stays %d", quiz_id, state.game.score)
            return state, CheckResult(result=True, answer=answer, score=state.game.score)

        game = self._game(state)
        game.answered_quiz_ids.add(quiz_id)
        game.tips.next_quiz()
        game.countdown.start(self.allowed_time)
        game.countdown.block_refresh = True
        game.current_quiz = None

        logger.debug("quiz %s answered; score=%d", quiz_id, game.score)
        return Playing(game), CheckResult(result=True, answer=answer, score=game.score)

    # ---- timer ----
    def poll(self, state: GameState) -> Tuple[GameState, Dict[str, Any]]:
        if not isinstance(state, Playing):
            return state, {"count": self.allowed_time, "blockrefresh": True, "isNewQuiz": False}
        game = state.game.copy()
        snap = game.countdown.poll()
        return Playing(game), snap

    def time_up(self, state: GameState) -> Tuple[GameState, FinalScore]:
        score = score_of(state)
        if isinstance(state, Playing):
            logger.info("time up; final score=%d", score)
        return NO_GAME, FinalScore(score=score)

    # ---- tips ----
    def reveal_tip(self, state: GameState) -> Tuple[GameState, TipReveal]:
        if not isinstance(state, Playing) or state.game.current_quiz is None:
            return state, TipReveal(tip=None, credits_left=0, rejected="no_game")

        ledger = state.game.tips
        if ledger.credits_left <= 0:
            return state, TipReveal(tip=None, credits_left=0, rejected="no_credits")

        unused = [t for t in state.game.current_quiz.tips if t.id not in ledger.used_tips]
        if not unused:
            return state, TipReveal(tip=None, credits_left=ledger.credits_left, rejected="no_tips")

        game = state.game.copy()
        tip = self.rng.choice(unused)
        game.tips.consume(tip.id)
        logger.debug("tip %s revealed for quiz %s; credits left=%d",
                     tip.id, game.current_quiz.id, game.tips.credits_left)
        return Playing(game), TipReveal(tip=tip, credits_left=game.tips.credits_left)
