"""Survey ORM — survey introduced by a message.

Invariants:
    - Never more than 3 questions
    - Questions loaded in rank order

Design Decisions:
    - cascade delete for questions: a question has no meaning outside its survey
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from courier.db.base import Base


class Survey(Base):
    """Survey aggregate — owns its questions."""
    __tablename__ = "surveys"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    questions: Mapped[list["SurveyQuestion"]] = relationship(
        "SurveyQuestion", back_populates="survey",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="SurveyQuestion.rank",
    )
