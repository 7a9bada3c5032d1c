"""SQL Repositories — SQLAlchemy implementations of the core repository Protocols.

Invariants:
    - Repositories flush but never commit (the unit of work owns the transaction)
    - Records from core/build_records.py are mapped to ORM rows field by field
    - Read methods return plain dicts or domain values, never ORM objects

Design Decisions:
    - add_all + single flush for deliveries: one round trip per fan-out
    - Message rows for the read path rely on the eager relationships declared on
      Message (author joined, request/survey selectin) to avoid N+1 lazy loads
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courier.core.build_records import (
    DeliveryRecord, MessageRecord, MessageRequestRecord,
    SurveyQuestionRecord, SurveyRecord,
)
from courier.core.domain_types import (
    AuthorId, DeliveryId, MessageId, Recipient, SurveyId,
)
from courier.models.author import Author
from courier.models.message import Message
from courier.models.message_delivery import MessageDelivery
from courier.models.message_request import MessageRequest
from courier.models.survey import Survey
from courier.models.survey_question import SurveyQuestion

logger = logging.getLogger(__name__)


class SqlIdentityRepository:
    """Author lookups by handle."""

    def __init__(self, session: AsyncSession):
        self.db = session

    async def get_by_handle(self, handle: str) -> Recipient | None:
        result = await self.db.execute(
            select(Author.id, Author.handle).where(Author.handle == handle),
        )
        row = result.first()
        return Recipient(id=AuthorId(row.id), handle=row.handle) if row else None

    async def get_by_handles(self, handles: Sequence[str]) -> list[Recipient]:
        """Resolve many handles; unknown handles are omitted, input order kept."""
        if not handles:
            return []
        result = await self.db.execute(
            select(Author.id, Author.handle).where(Author.handle.in_(list(handles))),
        )
        by_handle = {row.handle: AuthorId(row.id) for row in result}
        return [
            Recipient(id=by_handle[h], handle=h) for h in handles if h in by_handle
        ]


class SqlMessageRepository:
    """Messages, message requests and deliveries."""

    def __init__(self, session: AsyncSession):
        self.db = session

    async def add_message(self, record: MessageRecord) -> None:
        self.db.add(Message(
            id=record.id,
            parent_message_id=record.parent_message_id,
            author_id=record.author_id,
            subject=record.subject,
            body=record.body,
            composed_at=record.composed_at,
            video_link=record.video_link,
            survey_id=record.survey_id,
            survey_response=record.survey_response,
            active=record.active,
            created_at=record.created_at,
        ))
        await self.db.flush()

    async def add_message_request(self, record: MessageRequestRecord) -> None:
        self.db.add(MessageRequest(
            id=record.id,
            message_id=record.message_id,
            author_handle=record.author_handle,
            recipient_handle=record.recipient_handle,
            recipient_organization_id=record.recipient_organization_id,
            recipient_region_id=record.recipient_region_id,
            parent_message_id=record.parent_message_id,
        ))
        await self.db.flush()

    async def add_deliveries(self, records: Sequence[DeliveryRecord]) -> None:
        self.db.add_all([
            MessageDelivery(
                id=r.id,
                message_id=r.message_id,
                recipient_id=r.recipient_id,
                parent_message_id=r.parent_message_id,
                created_at=r.created_at,
            )
            for r in records
        ])
        await self.db.flush()
        logger.debug(f"Flushed {len(records)} deliveries")

    async def message_exists(self, message_id: MessageId) -> bool:
        result = await self.db.execute(
            select(Message.id).where(Message.id == message_id),
        )
        return result.scalar_one_or_none() is not None

    async def find_delivery_id(
        self, message_id: MessageId, recipient_id: AuthorId,
    ) -> DeliveryId | None:
        """Earliest delivery of message_id to recipient_id, if any."""
        result = await self.db.execute(
            select(MessageDelivery.id)
            .where(MessageDelivery.message_id == message_id)
            .where(MessageDelivery.recipient_id == recipient_id)
            .order_by(MessageDelivery.created_at, MessageDelivery.id)
            .limit(1)
        )
        delivery_id = result.scalar_one_or_none()
        return DeliveryId(delivery_id) if delivery_id else None

    async def get_message_row(self, message_id: MessageId) -> dict | None:
        result = await self.db.execute(
            select(Message).where(Message.id == message_id),
        )
        message = result.scalar_one_or_none()
        return _message_row(message) if message else None

    async def list_message_rows(
        self,
        author_id: AuthorId,
        since: datetime | None,
        limit: int,
        offset: int,
    ) -> list[dict]:
        """Author's active messages in creation order, windowed by limit/offset."""
        query = (
            select(Message)
            .where(Message.author_id == author_id)
            .where(Message.active.is_(True))
        )
        if since is not None:
            query = query.where(Message.composed_at >= since)
        query = (
            query.order_by(Message.created_at, Message.id)
            .limit(limit).offset(offset)
        )
        result = await self.db.execute(query)
        return [_message_row(m) for m in result.scalars().all()]


class SqlSurveyRepository:
    """Surveys and their ranked questions."""

    def __init__(self, session: AsyncSession):
        self.db = session

    async def add_survey(
        self, survey: SurveyRecord, questions: Sequence[SurveyQuestionRecord],
    ) -> None:
        self.db.add(Survey(
            id=survey.id,
            title=survey.title,
            active=survey.active,
            created_at=survey.created_at,
        ))
        await self.db.flush()
        self.db.add_all([
            SurveyQuestion(
                id=q.id,
                survey_id=q.survey_id,
                rank=q.rank,
                prompt=q.prompt,
                choices=list(q.choices),
            )
            for q in questions
        ])
        await self.db.flush()

    async def survey_exists(self, survey_id: SurveyId) -> bool:
        result = await self.db.execute(
            select(Survey.id).where(Survey.id == survey_id),
        )
        return result.scalar_one_or_none() is not None


def _message_row(message: Message) -> dict:
    request = message.request
    survey = message.survey
    return {
        "id": message.id,
        "parent_message_id": message.parent_message_id,
        "author_handle": message.author.handle,
        "recipient_handle": request.recipient_handle if request else None,
        "recipient_organization_id": (
            request.recipient_organization_id if request else None
        ),
        "recipient_region_id": request.recipient_region_id if request else None,
        "subject": message.subject,
        "body": message.body,
        "composed_at": message.composed_at,
        "video_link": message.video_link,
        "survey_response": message.survey_response,
        "survey": (
            {
                "id": survey.id,
                "title": survey.title,
                "questions": [
                    {"rank": q.rank, "prompt": q.prompt, "choices": q.choices}
                    for q in survey.questions
                ],
            }
            if survey else None
        ),
    }
