"""Configuration settings for the drill engine."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Define base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


# Define data directories from environment variables
DATA_DIR = Path(os.getenv("DATA_DIR", "./data"))
CATALOG_FILE = Path(os.getenv("CATALOG_FILE", str(DATA_DIR / "words.json")))

# Selection settings
RECENT_WORD_BUFFER = 15  # don't show the same word within the last 15 questions
BUFFER_RESET_THRESHOLD = 50  # clear the buffer when fewer words than this remain
REVIEW_THRESHOLD = 0.2  # draws below this pick from the review pool
NEW_WORDS_THRESHOLD = 0.8  # draws below this pick from the new-word pool


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    directories = [DATA_DIR]
    if settings.logging.dir:
        directories.append(Path(settings.logging.dir))

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


@dataclass
class PathSettings:
    """Path configuration settings."""
    base_dir: Path = BASE_DIR
    data_dir: Path = DATA_DIR
    catalog_file: Path = CATALOG_FILE


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///hpvocab.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    max_bytes: int = int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024)))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "5"))


@dataclass
class LearningSettings:
    """Word selection and session settings."""
    session_goal: int = int(os.getenv("SESSION_GOAL", "20"))
    xp_per_correct: int = int(os.getenv("XP_PER_CORRECT", "10"))
    milestone_every: int = int(os.getenv("MILESTONE_EVERY", "5"))
    recent_word_buffer: int = int(os.getenv("RECENT_WORD_BUFFER", str(RECENT_WORD_BUFFER)))
    buffer_reset_threshold: int = int(
        os.getenv("BUFFER_RESET_THRESHOLD", str(BUFFER_RESET_THRESHOLD))
    )
    review_threshold: float = float(os.getenv("REVIEW_THRESHOLD", str(REVIEW_THRESHOLD)))
    new_words_threshold: float = float(os.getenv("NEW_WORDS_THRESHOLD", str(NEW_WORDS_THRESHOLD)))


@dataclass
class LearnerSettings:
    """Learner identity settings."""
    learner_id: str = os.getenv("LEARNER_ID", "default")


@dataclass
class MonitoringSettings:
    """Prometheus exporter settings."""
    enabled: bool = os.getenv("METRICS_ENABLED", "false").lower() == "true"
    port: int = int(os.getenv("METRICS_PORT", "9090"))


def get_path_settings() -> PathSettings:
    """Get path settings."""
    return PathSettings()


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_learner_settings() -> LearnerSettings:
    """Get learner settings."""
    return LearnerSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    paths: PathSettings = field(default_factory=get_path_settings)
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    learner: LearnerSettings = field(default_factory=get_learner_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        learning = self.learning

        if learning.session_goal < 1:
            raise ValueError("SESSION_GOAL must be positive")

        if learning.xp_per_correct < 1:
            raise ValueError("XP_PER_CORRECT must be positive")

        if learning.milestone_every < 1:
            raise ValueError("MILESTONE_EVERY must be positive")

        if learning.recent_word_buffer < 1:
            raise ValueError("RECENT_WORD_BUFFER must be positive")

        if learning.buffer_reset_threshold < 1:
            raise ValueError("BUFFER_RESET_THRESHOLD must be positive")

        for name, value in (
            ("REVIEW_THRESHOLD", learning.review_threshold),
            ("NEW_WORDS_THRESHOLD", learning.new_words_threshold),
        ):
            if value < 0 or value > 1:
                raise ValueError(f"{name} must be between 0 and 1")

        if learning.review_threshold > learning.new_words_threshold:
            raise ValueError("REVIEW_THRESHOLD cannot be greater than NEW_WORDS_THRESHOLD")

        if not self.learner.learner_id:
            raise ValueError("LEARNER_ID cannot be empty")


# Create global settings instance
settings = Settings()
settings.validate()
