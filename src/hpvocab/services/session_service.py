"""Drill session: questions, answers, XP and session goal."""
import logging
import random
from typing import List, Optional, Sequence

from hpvocab.config import settings
from hpvocab.models.session_models import (
    OPTION_LETTERS,
    AnswerResult,
    Question,
    SessionSummary,
)
from hpvocab.models.word_models import WordEntry
from hpvocab.monitoring import answers
from hpvocab.services.mastery_store import MasteryStore
from hpvocab.services.progress_service import ProgressSnapshot
from hpvocab.services.word_selector import RecencyBuffer, WordSelector

logger = logging.getLogger(__name__)

# Minimum XP for each level, highest first
LEVELS = [
    (25000, "Professor"),
    (10000, "Doktor"),
    (5000, "Magister"),
    (2500, "Kandidat"),
    (1000, "Student"),
    (500, "Elev"),
    (100, "Lärling"),
    (0, "Nybörjare"),
]


def get_level(xp: int) -> str:
    """Get the level name for an amount of XP."""
    for minimum, name in LEVELS:
        if xp >= minimum:
            return name
    return LEVELS[-1][1]


def evaluate_answer(word: WordEntry, selected: str) -> bool:
    """Check a selected option against the word's correct answer."""
    return selected == word.correct_answer


class DrillSession:
    """A run of questions towards a goal count for one learner."""

    def __init__(
        self,
        catalog: Sequence[WordEntry],
        progress: Optional[ProgressSnapshot] = None,
        rng: Optional[random.Random] = None,
        goal: Optional[int] = None,
        selector: Optional[WordSelector] = None,
        recent: Optional[RecencyBuffer] = None,
    ):
        """Initialize the session over a catalog and the learner's progress."""
        self.catalog = list(catalog)
        self.progress = progress if progress is not None else ProgressSnapshot()
        self.rng = rng if rng is not None else random.Random()
        self.goal = goal if goal is not None else settings.learning.session_goal
        self.selector = selector if selector is not None else WordSelector(rng=self.rng)
        self.recent = recent if recent is not None else RecencyBuffer()
        self.xp_per_correct = settings.learning.xp_per_correct
        self.milestone_every = settings.learning.milestone_every

        self.total = 0
        self.correct = 0
        self.current: Optional[Question] = None

    @property
    def mastery(self) -> MasteryStore:
        return self.progress.mastery

    @property
    def xp(self) -> int:
        return self.progress.xp

    @property
    def level(self) -> str:
        return get_level(self.progress.xp)

    @property
    def is_complete(self) -> bool:
        """Check if the session goal has been reached."""
        return self.total >= self.goal and self.total > 0

    @property
    def progress_percent(self) -> float:
        return min(self.total / self.goal * 100, 100.0)

    def next_question(self) -> Optional[Question]:
        """Select the next word and build its question.

        Returns None if the session is complete or no word is available.
        """
        if self.is_complete:
            logger.info(f"Session goal reached: {self.correct}/{self.total} correct")
            self.current = None
            return None

        word = self.selector.select_next(self.catalog, self.mastery, self.recent)
        if word is None:
            logger.warning("No word available for the next question")
            self.current = None
            return None

        self.current = Question(word=word, options=self._shuffle_options(word))
        return self.current

    def _shuffle_options(self, word: WordEntry) -> List[tuple]:
        options = list(word.options)
        self.rng.shuffle(options)
        return list(zip(OPTION_LETTERS, options))

    def answer(self, selected: str) -> AnswerResult:
        """Evaluate the answer to the current question and record it."""
        if self.current is None:
            raise ValueError("No question to answer")

        word = self.current.word
        is_correct = evaluate_answer(word, selected)
        self.mastery.record_attempt(word.word, is_correct)

        self.total += 1
        xp_awarded = 0
        milestone = False
        if is_correct:
            self.correct += 1
            xp_awarded = self.xp_per_correct
            self.progress.xp += xp_awarded
            milestone = self.correct % self.milestone_every == 0

        answers.labels(result="correct" if is_correct else "incorrect").inc()
        logger.info(
            f"Answered {word.word!r} {'correctly' if is_correct else 'incorrectly'} "
            f"({self.total}/{self.goal})"
        )

        self.current = None
        return AnswerResult(
            word=word,
            selected=selected,
            is_correct=is_correct,
            xp_awarded=xp_awarded,
            milestone=milestone,
        )

    def summary(self) -> SessionSummary:
        """Get the session counters."""
        return SessionSummary(
            correct=self.correct,
            total=self.total,
            xp_earned=self.correct * self.xp_per_correct,
        )

    def continue_training(self) -> None:
        """Start a new round of questions after the goal was reached."""
        self.total = 0
        self.correct = 0
        self.current = None
