"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via constructor injection
    - A UnitOfWork commits only when commit() is called; leaving the context
      without committing rolls back every write made through it

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO
    - Repositories accept the frozen records from build_records, never ORM objects
"""

from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import Callable, Protocol
from uuid import UUID

from courier.core.build_records import (
    DeliveryRecord, MessageRecord, MessageRequestRecord,
    SurveyQuestionRecord, SurveyRecord,
)
from courier.core.domain_types import (
    AuthorId, DeliveryId, GroundUser, MessageId, Recipient, SurveyId,
)


class IdentityRepository(Protocol):
    """Handle -> author resolution. Read-only."""
    async def get_by_handle(self, handle: str) -> Recipient | None: ...
    async def get_by_handles(self, handles: Sequence[str]) -> list[Recipient]: ...


class MessageRepository(Protocol):
    """Contract for message, request and delivery persistence."""
    async def add_message(self, record: MessageRecord) -> None: ...
    async def add_message_request(self, record: MessageRequestRecord) -> None: ...
    async def add_deliveries(self, records: Sequence[DeliveryRecord]) -> None: ...
    async def message_exists(self, message_id: MessageId) -> bool: ...
    async def find_delivery_id(
        self, message_id: MessageId, recipient_id: AuthorId,
    ) -> DeliveryId | None: ...
    async def get_message_row(self, message_id: MessageId) -> dict | None: ...
    async def list_message_rows(
        self,
        author_id: AuthorId,
        since: datetime | None,
        limit: int,
        offset: int,
    ) -> list[dict]: ...


class SurveyRepository(Protocol):
    """Contract for survey persistence."""
    async def add_survey(
        self, survey: SurveyRecord, questions: Sequence[SurveyQuestionRecord],
    ) -> None: ...
    async def survey_exists(self, survey_id: SurveyId) -> bool: ...


class UnitOfWork(Protocol):
    """One transaction spanning every repository."""
    identities: IdentityRepository
    messages: MessageRepository
    surveys: SurveyRepository

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...


UnitOfWorkFactory = Callable[[], AbstractAsyncContextManager[UnitOfWork]]


class MembershipDirectory(Protocol):
    """External membership service — implemented by infrastructure."""
    async def organization_exists(self, organization_id: UUID) -> bool: ...
    async def get_organization_ground_users(
        self, organization_id: UUID,
    ) -> list[GroundUser]: ...
    async def get_region_ground_users(self, region_id: UUID) -> list[GroundUser]: ...
