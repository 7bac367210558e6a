"""Main application object wiring the drill engine together."""
import logging
import random
from pathlib import Path
from typing import List, Optional

from sqlalchemy.orm import Session

from hpvocab.config import ensure_directories, settings
from hpvocab.logging_config import setup_logging
from hpvocab.models.base import init_db, SessionLocal
from hpvocab.models.session_models import AnswerResult, Question, SessionSummary
from hpvocab.models.word_models import WordEntry
from hpvocab.monitoring import start_monitoring
from hpvocab.services.catalog_service import load_catalog
from hpvocab.services.progress_service import ProgressService, ProgressSnapshot
from hpvocab.services.session_service import DrillSession


class DrillApp:
    """Main application class."""

    def __init__(
        self,
        learner_id: Optional[str] = None,
        catalog_file: Optional[Path] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the application."""
        self.learner_id = learner_id or settings.learner.learner_id
        self.catalog_file = catalog_file
        self.rng = rng
        self.db: Optional[Session] = None
        self.catalog: List[WordEntry] = []
        self.progress_service: Optional[ProgressService] = None
        self.session: Optional[DrillSession] = None
        self.running = False
        self.logger = logging.getLogger(__name__)

    def start(self) -> None:
        """Start the application."""
        if self.running:
            return

        try:
            # Initialize database
            init_db()
            self.db = SessionLocal()
            self.progress_service = ProgressService(self.db)
            self.logger.info("Database initialized")

            if settings.monitoring.enabled:
                start_monitoring(settings.monitoring.port)
                self.logger.info(f"Metrics exported on port {settings.monitoring.port}")

            self.catalog = load_catalog(self.catalog_file)
            progress = self.progress_service.load(self.learner_id)
            self.session = DrillSession(self.catalog, progress, rng=self.rng)
            self.logger.info(f"Session started for learner {self.learner_id}")

            self.running = True

        except Exception as e:
            self.logger.error("Failed to start application: %s", str(e))
            self.stop()
            raise

    def stop(self) -> None:
        """Stop the application, saving progress first."""
        try:
            if self.running and self.session:
                self.save_progress()

            # Close database session
            if self.db:
                self.db.close()
                self.logger.info("Database session closed")

        finally:
            self.db = None
            self.progress_service = None
            self.session = None
            self.running = False

    def _require_session(self) -> DrillSession:
        if not self.running or self.session is None:
            raise RuntimeError("Application is not started")
        return self.session

    @property
    def progress(self) -> ProgressSnapshot:
        return self._require_session().progress

    def save_progress(self) -> None:
        """Persist the learner's current progress."""
        session = self._require_session()
        self.progress_service.save(self.learner_id, session.progress)

    def next_question(self) -> Optional[Question]:
        """Get the next question, or None if the session is over or empty."""
        return self._require_session().next_question()

    def answer(self, selected: str) -> AnswerResult:
        """Answer the current question and save progress."""
        result = self._require_session().answer(selected)
        self.save_progress()
        return result

    def summary(self) -> SessionSummary:
        """Get the current session counters."""
        return self._require_session().summary()

    def continue_training(self) -> None:
        """Start another round after the session goal was reached."""
        self._require_session().continue_training()


def create_app(learner_id: Optional[str] = None) -> DrillApp:
    """Configure directories and logging, then create the application."""
    ensure_directories()
    setup_logging()
    return DrillApp(learner_id=learner_id)
