"""Message Formatting — pure functions shaping stored rows into the public Message.

Invariants:
    - All functions are pure (no IO, no async, no DB)
    - `survey` is None unless the row carries a survey
    - Survey questions are emitted in rank order as {prompt, choices}
    - survey.response is True iff the message answers the survey
    - `to` always holds exactly one entry: the targeting intent of the request

Design Decisions:
    - Rows are plain dicts produced by the repository: the formatter stays independent
      of the ORM and is testable without a database
    - Timestamps rendered with isoformat() so JSON responses need no custom encoder
"""

from collections.abc import Mapping
from datetime import datetime

from courier.core.domain_types import RecipientType


def _iso(value: datetime | str | None) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _str_or_none(value: object) -> str | None:
    return str(value) if value is not None else None


def format_recipient(row: Mapping) -> dict:
    """`to` entry from the MessageRequest columns joined onto the row."""
    if row.get("recipient_handle"):
        return {"recipient": row["recipient_handle"], "type": RecipientType.USER.value}
    if row.get("recipient_organization_id"):
        return {
            "recipient": str(row["recipient_organization_id"]),
            "type": RecipientType.ORGANIZATION.value,
        }
    if row.get("recipient_region_id"):
        return {
            "recipient": str(row["recipient_region_id"]),
            "type": RecipientType.REGION.value,
        }
    return {"recipient": None, "type": None}


def format_survey(survey: Mapping | None, survey_response: list | None) -> dict | None:
    """Nested survey block, or None when the message has no survey."""
    if not survey:
        return None
    questions = sorted(survey.get("questions", []), key=lambda q: q["rank"])
    return {
        "id": str(survey["id"]),
        "title": survey["title"],
        "questions": [
            {"prompt": q["prompt"], "choices": list(q["choices"])}
            for q in questions
        ],
        "response": bool(survey_response),
        "answers": list(survey_response or []),
    }


def format_message(row: Mapping) -> dict:
    """Public Message representation."""
    return {
        "id": str(row["id"]),
        "parent_message_id": _str_or_none(row.get("parent_message_id")),
        "from": {"author": row["author_handle"], "type": RecipientType.USER.value},
        "to": [format_recipient(row)],
        "subject": row["subject"],
        "body": row["body"],
        "composed_at": _iso(row.get("composed_at")),
        "video_link": row.get("video_link"),
        "survey": format_survey(row.get("survey"), row.get("survey_response")),
    }
