"""Message ORM — the authored content shared by every delivery.

Invariants:
    - Immutable once created (no update paths exist)
    - parent_message_id points to an earlier message of the same thread
    - survey_id set when the message introduced or references a survey
    - survey_response holds the answer list when the message answers a survey

Design Decisions:
    - composed_at is caller-supplied; created_at is server time and drives ordering
    - JSON for survey_response: answer lists are opaque to the delivery core
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Boolean, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from courier.db.base import Base


class Message(Base):
    """Authored message — one row per authoring request."""
    __tablename__ = "messages"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    parent_message_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("messages.id"), nullable=True,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("authors.id"), nullable=False, index=True,
    )
    subject: Mapped[str] = mapped_column(String(500), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    composed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    video_link: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    survey_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("surveys.id"), nullable=True,
    )
    survey_response: Mapped[list | None] = mapped_column(JSON, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    author: Mapped["Author"] = relationship("Author", lazy="joined")
    survey: Mapped["Survey | None"] = relationship("Survey", lazy="selectin")
    request: Mapped["MessageRequest | None"] = relationship(
        "MessageRequest", uselist=False, lazy="selectin",
    )
