"""Message Formatting — verifies the public Message representation.

Tests:
    - from/to blocks built from author handle and request columns
    - Survey rendered in rank order with response flag and answers
    - Messages without survey render survey as None
"""

from datetime import datetime, timezone
from uuid import uuid4

from courier.core.format_messages import (
    format_message, format_recipient, format_survey,
)


def _row(**overrides):
    row = {
        "id": uuid4(),
        "parent_message_id": None,
        "author_handle": "ana",
        "recipient_handle": "rosa",
        "recipient_organization_id": None,
        "recipient_region_id": None,
        "subject": "Hello",
        "body": "World",
        "composed_at": datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc),
        "video_link": None,
        "survey_response": None,
        "survey": None,
    }
    row.update(overrides)
    return row


def test_direct_message_shape():
    row = _row()
    message = format_message(row)
    assert message["id"] == str(row["id"])
    assert message["from"] == {"author": "ana", "type": "user"}
    assert message["to"] == [{"recipient": "rosa", "type": "user"}]
    assert message["composed_at"] == "2026-03-01T09:00:00+00:00"
    assert message["parent_message_id"] is None
    assert message["survey"] is None


def test_parent_message_id_rendered_as_string():
    parent = uuid4()
    assert format_message(_row(parent_message_id=parent))["parent_message_id"] == str(parent)


def test_organization_recipient():
    org_id = uuid4()
    to = format_recipient(_row(recipient_handle=None, recipient_organization_id=org_id))
    assert to == {"recipient": str(org_id), "type": "organization"}


def test_region_recipient():
    region_id = uuid4()
    to = format_recipient(_row(recipient_handle=None, recipient_region_id=region_id))
    assert to == {"recipient": str(region_id), "type": "region"}


def test_missing_request_renders_empty_recipient():
    to = format_recipient(_row(recipient_handle=None))
    assert to == {"recipient": None, "type": None}


def test_survey_questions_sorted_by_rank():
    survey_id = uuid4()
    survey = format_survey({
        "id": survey_id,
        "title": "Harvest",
        "questions": [
            {"rank": 2, "prompt": "Second", "choices": ["c"]},
            {"rank": 1, "prompt": "First", "choices": ["a", "b"]},
        ],
    }, None)
    assert survey["id"] == str(survey_id)
    assert [q["prompt"] for q in survey["questions"]] == ["First", "Second"]
    assert survey["questions"][0] == {"prompt": "First", "choices": ["a", "b"]}
    assert survey["response"] is False
    assert survey["answers"] == []


def test_survey_response_sets_flag_and_answers():
    survey = format_survey(
        {"id": uuid4(), "title": "T", "questions": []}, ["yes"],
    )
    assert survey["response"] is True
    assert survey["answers"] == ["yes"]


def test_no_survey_is_none():
    assert format_survey(None, ["ignored"]) is None
