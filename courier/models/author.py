"""Author ORM — identity record behind an opaque handle.

Invariants:
    - handle is unique and non-nullable
    - Courier only reads authors; rows are provisioned by the identity owner

Design Decisions:
    - Authors double as recipients: a delivery's recipient_id is an author id
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from courier.db.base import Base


class Author(Base):
    """Addressable identity (author or recipient)."""
    __tablename__ = "authors"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    handle: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
