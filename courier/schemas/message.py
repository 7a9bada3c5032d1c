"""Message Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - MessageCompose requires author_handle, recipient_handle, subject, body, composed_at
    - MessageSend requires exactly one of recipient_handle / organization_id / region_id
    - SurveyPayload.questions is a list of at most 3 {prompt, choices} objects
    - Handles, subject and body are stripped and must be non-empty

Design Decisions:
    - Boundary validation only: the core re-checks targets and survey shape, so these
      models exist for precise 422 responses, not for correctness
    - extra="forbid" on survey payloads: a question with `question` instead of `prompt`
      is rejected instead of silently dropped
"""

from datetime import datetime
from uuid import UUID

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, field_validator, model_validator


class _Stripped(BaseModel):
    @field_validator("author_handle", "subject", "body", check_fields=False)
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class SurveyQuestionPayload(BaseModel):
    """One survey question; choices keep their order."""
    model_config = ConfigDict(extra="forbid")

    prompt: str = Field(min_length=1, max_length=2000)
    choices: list[str] = Field(min_length=1)


class SurveyPayload(BaseModel):
    """Survey attached to a fan-out message."""
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=500)
    questions: list[SurveyQuestionPayload] = Field(max_length=3)


class MessageCompose(_Stripped):
    """Direct compose — one author, one recipient."""
    author_handle: str = Field(max_length=255)
    recipient_handle: str = Field(min_length=1, max_length=255)
    subject: str = Field(max_length=500)
    body: str
    composed_at: datetime
    parent_message_id: UUID | None = None
    survey_id: UUID | None = None
    video_link: AnyUrl | None = None
    survey_response: list[str] | None = None


class MessageSend(_Stripped):
    """Fan-out send — exactly one target."""
    author_handle: str = Field(max_length=255)
    subject: str = Field(max_length=500)
    body: str
    recipient_handle: str | None = Field(None, min_length=1, max_length=255)
    organization_id: UUID | None = None
    region_id: UUID | None = None
    parent_message_id: UUID | None = None
    composed_at: datetime | None = None
    video_link: AnyUrl | None = None
    survey: SurveyPayload | None = None

    @model_validator(mode="after")
    def validate_single_target(self):
        targets = [
            t for t in (self.recipient_handle, self.organization_id, self.region_id)
            if t is not None
        ]
        if not targets:
            raise ValueError(
                "one of recipient_handle, organization_id or region_id is required",
            )
        if len(targets) > 1:
            raise ValueError(
                "only one of recipient_handle, organization_id or region_id is allowed",
            )
        return self


# --- Responses ----------------------------------------------------------------

class MessageAuthor(BaseModel):
    author: str
    type: str


class MessageRecipient(BaseModel):
    recipient: str | None
    type: str | None


class SurveyQuestionOut(BaseModel):
    prompt: str
    choices: list[str]


class SurveyOut(BaseModel):
    id: str
    title: str
    questions: list[SurveyQuestionOut]
    response: bool
    answers: list[str]


class MessageOut(BaseModel):
    """Public Message representation."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    parent_message_id: str | None
    from_: MessageAuthor = Field(alias="from")
    to: list[MessageRecipient]
    subject: str
    body: str
    composed_at: str | None
    video_link: str | None
    survey: SurveyOut | None


class PageLinks(BaseModel):
    prev: str | None
    next: str | None


class MessageListResponse(BaseModel):
    messages: list[MessageOut]
    links: PageLinks
