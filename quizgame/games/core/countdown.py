# quizgame/games/core/countdown.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class CountdownTimer:
    """
    Advisory countdown shown next to a random-play quiz.

    It advances one tick per poll (the client polls roughly once a second) and
    never ends a game by itself: the client asks for /timeup when it sees 0.
    """
    allowed_time: int = 0
    count: int = 0
    block_refresh: bool = False
    is_new_quiz: bool = False

    def start(self, allowed_time: int) -> None:
        self.allowed_time = max(0, int(allowed_time))
        self.count = self.allowed_time
        self.block_refresh = False
        self.is_new_quiz = True

    def poll(self) -> Dict[str, Any]:
        if self.count > 0:
            self.count -= 1
        else:
            self.count = self.allowed_time
        snap = self.snapshot()
        self.is_new_quiz = False
        return snap

    def snapshot(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "blockrefresh": self.block_refresh,
            "isNewQuiz": self.is_new_quiz,
        }
