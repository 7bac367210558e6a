"""Per-word mastery tracking."""
import logging
from typing import Any, Dict, Iterator, Optional

from hpvocab.models.word_models import MasteryRecord

logger = logging.getLogger(__name__)

# Correct answers needed beyond the mistake count to leave review
REVIEW_CLEAR_MARGIN = 2


class MasteryStore:
    """Maps word identifiers to attempt/correct counters.

    A record is created on the first attempt of a word and is never removed
    during a session. Words without a record are new.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._records: Dict[str, MasteryRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def get(self, identifier: str) -> Optional[MasteryRecord]:
        """Get the record of a word, if it was ever attempted."""
        return self._records.get(identifier)

    def record_attempt(self, identifier: str, was_correct: bool) -> None:
        """Count one answered question for a word."""
        record = self._records.get(identifier)
        if record is None:
            record = MasteryRecord()
            self._records[identifier] = record
        record.attempts += 1
        if was_correct:
            record.correct += 1
        logger.debug(
            f"Recorded attempt for {identifier!r}: "
            f"{record.correct}/{record.attempts} correct"
        )

    def needs_review(self, identifier: str) -> bool:
        """Check if a word has mistakes not yet outweighed by correct answers.

        A word leaves review once its correct answers reach its mistakes
        plus two: one mistake takes three correct answers, and every further
        mistake raises the bar by one.
        """
        record = self._records.get(identifier)
        if record is None or record.attempts == 0:
            return False
        mistakes = record.mistakes
        return mistakes > 0 and record.correct < mistakes + REVIEW_CLEAR_MARGIN

    def is_new(self, identifier: str) -> bool:
        """Check if a word has never been attempted."""
        return identifier not in self._records

    def serialize(self) -> Dict[str, Dict[str, int]]:
        """Convert to a JSON-compatible mapping."""
        return {
            identifier: {"attempts": record.attempts, "correct": record.correct}
            for identifier, record in self._records.items()
        }

    def restore(self, blob: Any) -> None:
        """Replace the state with the one stored in a serialized mapping.

        A missing or malformed blob leaves the store empty; malformed entries
        are skipped.
        """
        self._records = {}
        if blob is None:
            return
        if not isinstance(blob, dict):
            logger.warning(f"Ignoring mastery data of type {type(blob).__name__}")
            return

        for identifier, data in blob.items():
            record = self._parse_record(data)
            if record is None:
                logger.warning(f"Skipping malformed mastery record for {identifier!r}: {data!r}")
                continue
            self._records[str(identifier)] = record

    @classmethod
    def from_blob(cls, blob: Any) -> "MasteryStore":
        """Create a store from a serialized mapping."""
        store = cls()
        store.restore(blob)
        return store

    @staticmethod
    def _parse_record(data: Any) -> Optional[MasteryRecord]:
        if not isinstance(data, dict):
            return None
        attempts = data.get("attempts", 0)
        correct = data.get("correct", 0)
        for value in (attempts, correct):
            # bool is an int subclass, but never a valid count
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                return None
        if correct > attempts:
            return None
        return MasteryRecord(attempts=attempts, correct=correct)
