"""Test configuration."""
import os
from pathlib import Path
from typing import Callable, Generator, List

import pytest
from dotenv import load_dotenv
from faker import Faker

# Set test environment before any imports
os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

# Load test environment variables
test_env_path = Path(__file__).parents[3] / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from sqlalchemy.orm import Session

from hpvocab.models.base import Base, SessionLocal, engine, init_db
from hpvocab.models.word_models import WordEntry

fake = Faker()


@pytest.fixture(autouse=True)
def setup_database() -> Generator[None, None, None]:
    """Create the tables before each test and drop them afterwards."""
    init_db()

    yield

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def make_word(identifier: str) -> WordEntry:
    """Create a catalog entry with generated content."""
    correct = fake.word()
    options = [correct] + fake.words(nb=4)
    return WordEntry(
        word=identifier,
        part_of_speech=fake.random_element(["substantiv", "verb", "adjektiv"]),
        correct_answer=correct,
        options=tuple(options),
        definition=fake.sentence(),
        etymology=fake.sentence(),
        example_sentence=fake.sentence(),
        difficulty=fake.random_int(min=1, max=5),
    )


@pytest.fixture
def catalog_factory() -> Callable[[int], List[WordEntry]]:
    """Create catalogs of a given size with unique identifiers."""
    def factory(size: int) -> List[WordEntry]:
        return [make_word(f"ord{i}") for i in range(size)]
    return factory
