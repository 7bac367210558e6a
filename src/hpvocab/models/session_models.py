"""Models for drill session data structures."""
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from hpvocab.models.word_models import WordEntry


class SelectionPool(Enum):
    """Pool a selected word was drawn from."""
    REVIEW = "review"  # Words with unresolved mistakes
    NEW = "new"  # Words never attempted
    ANY = "any"  # Any word outside the recency buffer


OPTION_LETTERS = ["A", "B", "C", "D", "E"]


@dataclass
class Question:
    """A word presented with its shuffled, lettered options."""
    word: WordEntry
    options: List[Tuple[str, str]]  # (letter, option text)


@dataclass
class AnswerResult:
    """Outcome of one answered question."""
    word: WordEntry
    selected: str
    is_correct: bool
    xp_awarded: int
    milestone: bool = False  # every Nth correct answer of a session


@dataclass
class SessionSummary:
    """Counters of a finished or running session."""
    correct: int
    total: int
    xp_earned: int
