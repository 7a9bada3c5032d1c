"""SurveyQuestion ORM — one ranked question of a survey.

Invariants:
    - rank is 1-based and unique within a survey
    - choices is an ordered list of strings

Design Decisions:
    - JSON for choices: portable between PostgreSQL and the SQLite test database
"""

import uuid

from sqlalchemy import Integer, Text, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from courier.db.base import Base


class SurveyQuestion(Base):
    """Ranked survey question."""
    __tablename__ = "survey_questions"
    __table_args__ = (
        UniqueConstraint("survey_id", "rank", name="uq_survey_questions_rank"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    survey_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("surveys.id", ondelete="CASCADE"),
        nullable=False,
    )
    rank: Mapped[int] = mapped_column(Integer, nullable=False)
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    choices: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    survey: Mapped["Survey"] = relationship(
        "Survey", back_populates="questions",
    )
