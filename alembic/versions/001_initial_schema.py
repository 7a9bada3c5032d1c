"""Initial schema — authors, surveys, messages, requests, deliveries.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "authors",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("handle", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_authors_handle", "authors", ["handle"], unique=True)

    op.create_table(
        "surveys",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "survey_questions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("survey_id", UUID(as_uuid=True), sa.ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rank", sa.Integer, nullable=False),
        sa.Column("prompt", sa.Text, nullable=False),
        sa.Column("choices", sa.JSON, nullable=False),
        sa.UniqueConstraint("survey_id", "rank", name="uq_survey_questions_rank"),
    )

    op.create_table(
        "messages",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("parent_message_id", UUID(as_uuid=True), sa.ForeignKey("messages.id"), nullable=True),
        sa.Column("author_id", UUID(as_uuid=True), sa.ForeignKey("authors.id"), nullable=False),
        sa.Column("subject", sa.String(500), nullable=False),
        sa.Column("body", sa.Text, nullable=False),
        sa.Column("composed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("video_link", sa.String(2048), nullable=True),
        sa.Column("survey_id", UUID(as_uuid=True), sa.ForeignKey("surveys.id"), nullable=True),
        sa.Column("survey_response", sa.JSON, nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_messages_author_id", "messages", ["author_id"])

    op.create_table(
        "message_requests",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("message_id", UUID(as_uuid=True), sa.ForeignKey("messages.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("author_handle", sa.String(255), nullable=False),
        sa.Column("recipient_handle", sa.String(255), nullable=True),
        sa.Column("recipient_organization_id", UUID(as_uuid=True), nullable=True),
        sa.Column("recipient_region_id", UUID(as_uuid=True), nullable=True),
        sa.Column("parent_message_id", UUID(as_uuid=True), nullable=True),
    )

    op.create_table(
        "message_deliveries",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("message_id", UUID(as_uuid=True), sa.ForeignKey("messages.id", ondelete="CASCADE"), nullable=False),
        sa.Column("recipient_id", UUID(as_uuid=True), sa.ForeignKey("authors.id"), nullable=False),
        sa.Column("parent_message_id", UUID(as_uuid=True), sa.ForeignKey("message_deliveries.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_message_deliveries_message_recipient",
        "message_deliveries", ["message_id", "recipient_id"],
    )


def downgrade() -> None:
    op.drop_table("message_deliveries")
    op.drop_table("message_requests")
    op.drop_table("messages")
    op.drop_table("survey_questions")
    op.drop_table("surveys")
    op.drop_table("authors")
