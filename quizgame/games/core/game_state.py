# quizgame/games/core/game_state.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Set, Union
import copy

from .countdown import CountdownTimer
from .quiz_repository import QuizView
from .tip_ledger import TipCreditLedger


@dataclass
class SessionGameState:
    """Everything one player's random-play game needs between requests."""
    answered_quiz_ids: Set[int] = field(default_factory=set)
    tips: TipCreditLedger = field(default_factory=TipCreditLedger)
    countdown: CountdownTimer = field(default_factory=CountdownTimer)
    current_quiz: Optional[QuizView] = None

    @property
    def score(self) -> int:
        return len(self.answered_quiz_ids)

    def copy(self) -> "SessionGameState":
        return copy.deepcopy(self)


@dataclass(frozen=True)
class NoGame:
    pass


@dataclass(frozen=True)
class Playing:
    game: SessionGameState


GameState = Union[NoGame, Playing]

NO_GAME = NoGame()


def score_of(state: GameState) -> int:
    return state.game.score if isinstance(state, Playing) else 0
