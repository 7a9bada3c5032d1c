"""MessageDelivery ORM — one row per resolved recipient of a message.

Invariants:
    - recipient_id references an Author that existed at creation time
    - parent_message_id holds the parent DELIVERY id (not the parent message id),
      so each recipient keeps its own thread
    - Created in bulk by the orchestrator, never mutated

Design Decisions:
    - Column name kept as parent_message_id for compatibility with existing consumers
    - (message_id, recipient_id) indexed: thread linking looks deliveries up by both
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from courier.db.base import Base


class MessageDelivery(Base):
    """Per-recipient delivery record."""
    __tablename__ = "message_deliveries"
    __table_args__ = (
        Index("ix_message_deliveries_message_recipient", "message_id", "recipient_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    message_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
    )
    recipient_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("authors.id"), nullable=False,
    )
    parent_message_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("message_deliveries.id"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
