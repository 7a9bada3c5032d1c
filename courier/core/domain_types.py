"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - MessageId, DeliveryId, AuthorId, SurveyId wrap UUIDs — never use bare UUID in domain logic
    - DeliveryTarget is a discriminated value: kind decides how value is interpreted
    - GroundUser.author_handle is None when the member cannot be attributed
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - frozen dataclasses for values that cross the core boundary
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

MessageId = NewType("MessageId", UUID)
MessageRequestId = NewType("MessageRequestId", UUID)
DeliveryId = NewType("DeliveryId", UUID)
AuthorId = NewType("AuthorId", UUID)
SurveyId = NewType("SurveyId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class TargetKind(str, Enum):
    """How the recipients of an authoring request are addressed."""
    DIRECT = "direct"
    ORGANIZATION = "organization"
    REGION = "region"


class RecipientType(str, Enum):
    """`type` field of the public from/to representation."""
    USER = "user"
    ORGANIZATION = "organization"
    REGION = "region"


# ─── Values ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class DeliveryTarget:
    """Resolved recipient target. value is a handle for DIRECT, a UUID otherwise."""
    kind: TargetKind
    value: str | UUID

    @property
    def is_fan_out(self) -> bool:
        return self.kind is not TargetKind.DIRECT

    @property
    def scope(self) -> str:
        """Word used in membership error messages."""
        return self.kind.value


@dataclass(frozen=True)
class GroundUser:
    """Member returned by the membership collaborator."""
    ground_user_id: str
    author_handle: str | None = None


@dataclass(frozen=True)
class Recipient:
    """Author resolved from a handle, eligible to receive a delivery."""
    id: AuthorId
    handle: str
