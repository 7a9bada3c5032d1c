"""Message Schemas — verifies boundary validation of compose and send bodies.

Tests:
    - MessageSend requires exactly one target
    - Handles, subject and body are stripped and must be non-empty
    - Survey payload limited to 3 questions and rejects unknown keys
    - MessageOut serializes `from` by alias
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from courier.schemas.message import (
    MessageAuthor, MessageCompose, MessageOut, MessageSend, SurveyPayload,
)


def _send(**overrides):
    body = {"author_handle": "ana", "subject": "Hi", "body": "There"}
    body.update(overrides)
    return body


# ─── MessageSend ────────────────────────────────────────────────

def test_send_with_organization():
    org_id = uuid4()
    send = MessageSend(**_send(organization_id=str(org_id)))
    assert send.organization_id == org_id
    assert send.recipient_handle is None


def test_send_without_target_rejected():
    with pytest.raises(ValidationError, match="is required"):
        MessageSend(**_send())


def test_send_with_two_targets_rejected():
    with pytest.raises(ValidationError, match="only one"):
        MessageSend(**_send(recipient_handle="rosa", region_id=str(uuid4())))


def test_send_strips_subject():
    send = MessageSend(**_send(subject="  Hi  ", recipient_handle="rosa"))
    assert send.subject == "Hi"


def test_blank_body_rejected():
    with pytest.raises(ValidationError, match="empty"):
        MessageSend(**_send(body="   ", recipient_handle="rosa"))


def test_send_survey_with_four_questions_rejected():
    question = {"prompt": "P", "choices": ["a"]}
    with pytest.raises(ValidationError):
        MessageSend(**_send(
            region_id=str(uuid4()),
            survey={"title": "T", "questions": [question] * 4},
        ))


# ─── SurveyPayload ──────────────────────────────────────────────

def test_survey_question_unknown_key_rejected():
    with pytest.raises(ValidationError):
        SurveyPayload(title="T", questions=[{"question": "P", "choices": ["a"]}])


def test_survey_question_needs_choices():
    with pytest.raises(ValidationError):
        SurveyPayload(title="T", questions=[{"prompt": "P", "choices": []}])


# ─── MessageCompose ─────────────────────────────────────────────

def test_compose_requires_composed_at():
    with pytest.raises(ValidationError):
        MessageCompose(author_handle="ana", recipient_handle="rosa", subject="s", body="b")


def test_compose_accepts_optional_fields():
    compose = MessageCompose(
        author_handle="ana",
        recipient_handle="rosa",
        subject="s",
        body="b",
        composed_at="2026-03-01T09:00:00Z",
        survey_id=str(uuid4()),
        video_link="https://video.example/clip",
        survey_response=["yes"],
    )
    assert compose.composed_at == datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
    assert compose.survey_response == ["yes"]


# ─── MessageOut ─────────────────────────────────────────────────

def test_message_out_dumps_from_alias():
    out = MessageOut(
        id="1",
        parent_message_id=None,
        from_=MessageAuthor(author="ana", type="user"),
        to=[],
        subject="s",
        body="b",
        composed_at=None,
        video_link=None,
        survey=None,
    )
    dumped = out.model_dump(by_alias=True)
    assert dumped["from"] == {"author": "ana", "type": "user"}
