"""Record Constructors — immutable values for every row an authoring request creates.

Invariants:
    - Every constructor returns a frozen dataclass with a fresh UUID id
    - MessageRequest and MessageDelivery share nothing with each other but message_id
    - MessageRequest records at most one of recipient_handle / organization / region
    - Survey question ranks are 1..N in payload order
    - composed_at defaults to `now` when absent

Design Decisions:
    - Constructor functions over inline dict building: invariants checked in one place
    - `now` injected by the caller: tests pin time without patching datetime
"""

import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime

from courier.core.domain_types import (
    AuthorId, DeliveryId, DeliveryTarget, MessageId, MessageRequestId,
    Recipient, SurveyId, TargetKind,
)
from courier.core.errors import MessageValidationError


@dataclass(frozen=True)
class MessageRecord:
    id: MessageId
    parent_message_id: MessageId | None
    author_id: AuthorId
    subject: str
    body: str
    composed_at: datetime
    video_link: str | None
    survey_id: SurveyId | None
    survey_response: list[str] | None
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class MessageRequestRecord:
    id: MessageRequestId
    message_id: MessageId
    author_handle: str
    recipient_handle: str | None
    recipient_organization_id: uuid.UUID | None
    recipient_region_id: uuid.UUID | None
    parent_message_id: MessageId | None


@dataclass(frozen=True)
class DeliveryRecord:
    id: DeliveryId
    message_id: MessageId
    recipient_id: AuthorId
    parent_message_id: DeliveryId | None
    created_at: datetime


@dataclass(frozen=True)
class SurveyRecord:
    id: SurveyId
    title: str
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class SurveyQuestionRecord:
    id: uuid.UUID
    survey_id: SurveyId
    rank: int
    prompt: str
    choices: tuple[str, ...]


def parse_composed_at(value: object, now: datetime) -> datetime:
    """Accept a datetime or an ISO-8601 string; absent means now."""
    if value is None or value == "":
        return now
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise MessageValidationError(
            "composed_at must be an ISO-8601 date", "composed_at",
        )


def build_message(
    request: Mapping,
    author_id: AuthorId,
    now: datetime,
    survey_id: SurveyId | None = None,
) -> MessageRecord:
    """Message row for an authoring request."""
    subject = request.get("subject")
    body = request.get("body")
    if not subject or not body:
        raise MessageValidationError(
            "subject and body are required", "subject" if not subject else "body",
        )

    video_link = request.get("video_link")
    survey_response = request.get("survey_response")
    return MessageRecord(
        id=MessageId(uuid.uuid4()),
        parent_message_id=request.get("parent_message_id"),
        author_id=author_id,
        subject=subject,
        body=body,
        composed_at=parse_composed_at(request.get("composed_at"), now),
        video_link=str(video_link) if video_link else None,
        survey_id=survey_id,
        survey_response=list(survey_response) if survey_response else None,
        active=True,
        created_at=now,
    )


def build_message_request(
    request: Mapping, target: DeliveryTarget, message_id: MessageId,
) -> MessageRequestRecord:
    """Audit row of the targeting intent. Only the resolved target is recorded."""
    return MessageRequestRecord(
        id=MessageRequestId(uuid.uuid4()),
        message_id=message_id,
        author_handle=request["author_handle"],
        recipient_handle=(
            str(target.value) if target.kind is TargetKind.DIRECT else None
        ),
        recipient_organization_id=(
            target.value if target.kind is TargetKind.ORGANIZATION else None
        ),
        recipient_region_id=(
            target.value if target.kind is TargetKind.REGION else None
        ),
        parent_message_id=request.get("parent_message_id"),
    )


def build_deliveries(
    message_id: MessageId,
    recipients: Sequence[Recipient],
    parent_delivery_id: DeliveryId | None,
    now: datetime,
) -> list[DeliveryRecord]:
    """One delivery per recipient; the same parent delivery for all of them."""
    if not recipients:
        raise MessageValidationError("At least one recipient is required", "target")
    return [
        DeliveryRecord(
            id=DeliveryId(uuid.uuid4()),
            message_id=message_id,
            recipient_id=recipient.id,
            parent_message_id=parent_delivery_id,
            created_at=now,
        )
        for recipient in recipients
    ]


def build_survey(title: str, now: datetime) -> SurveyRecord:
    return SurveyRecord(
        id=SurveyId(uuid.uuid4()), title=title, active=True, created_at=now,
    )


def build_survey_questions(
    survey_id: SurveyId, questions: Sequence[Mapping],
) -> list[SurveyQuestionRecord]:
    """Rank follows payload order, starting at 1."""
    return [
        SurveyQuestionRecord(
            id=uuid.uuid4(),
            survey_id=survey_id,
            rank=rank,
            prompt=question["prompt"],
            choices=tuple(question["choices"]),
        )
        for rank, question in enumerate(questions, start=1)
    ]
