# quizgame/games/core/selector.py
from __future__ import annotations
from dataclasses import dataclass
from typing import AbstractSet, Optional, Union
import logging
import random

from .quiz_repository import QuizView

logger = logging.getLogger(__name__)

MAX_DRAWS = 5


@dataclass(frozen=True)
class Selected:
    quiz: QuizView


@dataclass(frozen=True)
class Exhausted:
    final_score: int


SelectionResult = Union[Selected, Exhausted]


class RandomSelector:
    """
    Picks the next quiz uniformly among the ones not yet answered.

    ``repository`` needs count_eligible(excluded) and fetch_one_at(excluded, offset)
    (see QuizRepository). ``rng`` is any random.Random; tests pass a seeded one.
    """

    def __init__(self, repository, rng: Optional[random.Random] = None):
        self.repository = repository
        self.rng = rng or random.Random()

    def select_next(self, excluded: AbstractSet[int]) -> SelectionResult:
        excluded = frozenset(excluded)
        for _ in range(MAX_DRAWS):
            count = self.repository.count_eligible(excluded)
            if count <= 0:
                return Exhausted(final_score=len(excluded))

            offset = self.rng.randrange(count)
            quiz = self.repository.fetch_one_at(excluded, offset)
            if quiz is not None:
                logger.debug("selected quiz %s (offset %d of %d eligible)", quiz.id, offset, count)
                return Selected(quiz=quiz)

            # pool shrank between count and fetch (quiz deleted meanwhile)
            logger.debug("no quiz at offset %d of %d; recounting", offset, count)

        raise RuntimeError(f"no eligible quiz found after {MAX_DRAWS} draws")
