"""Service for saving and restoring learner progress."""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from hpvocab.models.models import LearnerProgress
from hpvocab.monitoring import progress_restore_failures
from hpvocab.services.mastery_store import MasteryStore

logger = logging.getLogger(__name__)


def _int_or_default(value: Any, default: int = 0) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


@dataclass
class ProgressSnapshot:
    """Everything persisted for a learner between sessions.

    Streak values are carried through unchanged; they are maintained by the
    front end.
    """
    mastery: MasteryStore = field(default_factory=MasteryStore)
    xp: int = 0
    streak: int = 0
    last_practice_date: Optional[str] = None

    def to_blob(self) -> Dict[str, Any]:
        """Convert to the stored JSON object."""
        return {
            "xp": self.xp,
            "streak": self.streak,
            "lastPracticeDate": self.last_practice_date,
            "wordProgress": self.mastery.serialize(),
        }

    @classmethod
    def from_blob(cls, blob: Any) -> "ProgressSnapshot":
        """Create a snapshot from a stored JSON object; bad data yields defaults."""
        if not isinstance(blob, dict):
            if blob is not None:
                logger.warning(f"Ignoring progress data of type {type(blob).__name__}")
            return cls()

        last_practice_date = blob.get("lastPracticeDate")
        if not isinstance(last_practice_date, str):
            last_practice_date = None

        return cls(
            mastery=MasteryStore.from_blob(blob.get("wordProgress")),
            xp=_int_or_default(blob.get("xp")),
            streak=_int_or_default(blob.get("streak")),
            last_practice_date=last_practice_date,
        )


class ProgressService:
    """Service for storing progress snapshots per learner."""

    def __init__(self, db: Session):
        """Initialize the service with a database session."""
        self.db = db

    def _get_row(self, learner_id: str) -> Optional[LearnerProgress]:
        return (
            self.db.query(LearnerProgress)
            .filter(LearnerProgress.learner_id == learner_id)
            .first()
        )

    def load(self, learner_id: str) -> ProgressSnapshot:
        """Load a learner's progress; missing or corrupt data starts empty."""
        row = self._get_row(learner_id)
        if row is None:
            logger.info(f"No stored progress for learner {learner_id}, starting empty")
            return ProgressSnapshot()

        try:
            blob = json.loads(row.payload)
        except (TypeError, ValueError) as e:
            logger.warning(f"Stored progress for learner {learner_id} is corrupt: {e}")
            progress_restore_failures.inc()
            return ProgressSnapshot()

        if not isinstance(blob, dict):
            progress_restore_failures.inc()
        snapshot = ProgressSnapshot.from_blob(blob)
        logger.info(
            f"Restored progress for learner {learner_id}: "
            f"{len(snapshot.mastery)} words, {snapshot.xp} XP"
        )
        return snapshot

    def save(self, learner_id: str, snapshot: ProgressSnapshot) -> None:
        """Store a learner's progress, replacing any previous snapshot."""
        payload = json.dumps(snapshot.to_blob(), ensure_ascii=False)
        row = self._get_row(learner_id)
        if row is None:
            row = LearnerProgress(learner_id=learner_id, payload=payload)
            self.db.add(row)
        else:
            row.payload = payload
        self.db.commit()
        logger.debug(f"Saved progress for learner {learner_id}")

    def reset(self, learner_id: str) -> bool:
        """Delete a learner's stored progress."""
        row = self._get_row(learner_id)
        if not row:
            return False

        self.db.delete(row)
        self.db.commit()
        logger.info(f"Reset progress for learner {learner_id}")
        return True
