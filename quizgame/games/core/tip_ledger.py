# quizgame/games/core/tip_ledger.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


@dataclass
class TipCreditLedger:
    """
    Tip credits for one random-play game.
      credits_left: tips the player may still reveal this game
      used_tips:    tip ids already revealed for the quiz on screen
      initialized:  False until the first quiz of a fresh game is served

    A wrong answer or an exhausted pool drops the whole game to NoGame, so the
    next game starts from a new ledger; reset() gives the same empty ledger
    for callers holding on to one.
    """
    credits_left: int = 0
    used_tips: List[int] = field(default_factory=list)
    initialized: bool = False

    def ensure_initialized(self, max_credits: int) -> None:
        if self.initialized:
            return
        self.credits_left = max(0, int(max_credits))
        self.initialized = True

    def consume(self, tip_id: int) -> bool:
        """Spend one credit on tip_id. Returns False (and changes nothing) when rejected."""
        if self.credits_left <= 0 or tip_id in self.used_tips:
            return False
        self.credits_left -= 1
        self.used_tips.append(tip_id)
        return True

    def next_quiz(self) -> None:
        # used tips are per quiz; credits carry over
        self.used_tips = []

    def reset(self) -> None:
        self.credits_left = 0
        self.used_tips = []
        self.initialized = False
