"""Database models for stored learner progress."""
from sqlalchemy import Column, Integer, String, Text

from hpvocab.models.base import Base, TimestampMixin


class LearnerProgress(Base, TimestampMixin):
    """Serialized progress blob of one learner."""

    __tablename__ = "learner_progress"

    id = Column(Integer, primary_key=True)
    learner_id = Column(String, unique=True, nullable=False, index=True)
    payload = Column(Text, nullable=False)  # JSON object, see ProgressSnapshot.to_blob
