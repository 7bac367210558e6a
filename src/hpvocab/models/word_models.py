"""Models for catalog words and per-word mastery."""
from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class WordEntry:
    """A catalog word with its multiple-choice content."""
    word: str  # identifier, unique within the catalog
    part_of_speech: str
    correct_answer: str
    options: Tuple[str, ...]
    definition: str = ""
    etymology: str = ""
    example_sentence: str = ""
    difficulty: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WordEntry":
        """Build an entry from its JSON representation.

        Raises KeyError for missing required fields and TypeError/ValueError
        for fields of the wrong shape. A difficulty that is not an integer
        becomes 0, since selection never reads it.
        """
        options = data["options"]
        if isinstance(options, str) or not isinstance(options, (list, tuple)):
            raise TypeError(f"options of {data['word']!r} must be a list")
        word = data["word"]
        if not isinstance(word, str) or not word:
            raise ValueError("word must be a non-empty string")
        correct_answer = data["correctAnswer"]
        if not isinstance(correct_answer, str):
            raise TypeError(f"correctAnswer of {word!r} must be a string")
        part_of_speech = data.get("partOfSpeech", "")
        if not isinstance(part_of_speech, str):
            raise TypeError(f"partOfSpeech of {word!r} must be a string")
        difficulty = data.get("difficulty", 0)
        if isinstance(difficulty, bool) or not isinstance(difficulty, int):
            difficulty = 0
        return cls(
            word=word,
            part_of_speech=part_of_speech,
            correct_answer=correct_answer,
            options=tuple(str(option) for option in options),
            definition=data.get("definition", ""),
            etymology=data.get("etymology", ""),
            example_sentence=data.get("exampleSentence", ""),
            difficulty=difficulty,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON representation."""
        return {
            "word": self.word,
            "partOfSpeech": self.part_of_speech,
            "correctAnswer": self.correct_answer,
            "options": list(self.options),
            "definition": self.definition,
            "etymology": self.etymology,
            "difficulty": self.difficulty,
            "exampleSentence": self.example_sentence,
        }


@dataclass
class MasteryRecord:
    """Attempt and correct-answer counters for one word."""
    attempts: int = 0
    correct: int = 0

    @property
    def mistakes(self) -> int:
        return self.attempts - self.correct
