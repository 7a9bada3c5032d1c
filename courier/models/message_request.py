"""MessageRequest ORM — audit row of the targeting intent behind a message.

Invariants:
    - Exactly one row per authoring request, never mutated
    - At most one of recipient_handle / recipient_organization_id / recipient_region_id
    - parent_message_id is the parent *message* id as the author supplied it

Design Decisions:
    - Kept separate from MessageDelivery: the intent (an organization) and the outcome
      (N member deliveries) have different cardinalities
"""

import uuid

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from courier.db.base import Base


class MessageRequest(Base):
    """Targeting intent recorded for a message."""
    __tablename__ = "message_requests"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    message_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    author_handle: Mapped[str] = mapped_column(String(255), nullable=False)
    recipient_handle: Mapped[str | None] = mapped_column(
        String(255), nullable=True,
    )
    recipient_organization_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    recipient_region_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    parent_message_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
