"""Delivery Orchestrator — the write path of an authoring request.

Invariants:
    - One unit of work per call: Message, MessageRequest, Survey, SurveyQuestions and
      every MessageDelivery commit together or not at all
    - Target resolved once (core/resolve_target.py); branches use TargetKind only
    - Author and direct recipient must resolve to existing authors (ResourceNotFoundError)
    - Organization fan-out requires the organization to exist (InvalidOrganizationError)
    - Region fan-out follows exactly the organization contract, keyed by region
    - Every fan-out delivery carries the same parent delivery id
    - Nothing is returned: deliver or raise

Design Decisions:
    - uow_factory and membership injected by the caller (ADR: lifecycle owned by the entry point)
    - Parent thread resolved before the Message row is written, so an unknown parent is a
      404 rather than a foreign-key failure at flush time
    - Membership is resolved inside the transaction: a membership failure after the
      message was flushed still rolls everything back
    - clock injectable: tests pin created_at ordering
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone

from courier.core.build_records import (
    build_deliveries, build_message, build_message_request,
)
from courier.core.domain_types import (
    DeliveryTarget, MessageId, Recipient, SurveyId, TargetKind,
)
from courier.core.enforce_membership import (
    require_resolved_recipients, select_recipient_handles,
)
from courier.core.errors import (
    ErrorContext, InvalidOrganizationError, MessageValidationError,
    ResourceNotFoundError,
)
from courier.core.repository_protocols import (
    MembershipDirectory, UnitOfWork, UnitOfWorkFactory,
)
from courier.core.resolve_target import (
    as_uuid, resolve_direct_target, resolve_target,
)
from courier.services.create_survey import create_survey
from courier.services.thread_linker import resolve_parent_delivery_id

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _normalize_request(body: Mapping) -> dict:
    """Copy of the body with id fields coerced to UUID."""
    if not body.get("author_handle"):
        raise MessageValidationError("author_handle is required", "author_handle")
    request = dict(body)
    for field in ("parent_message_id", "survey_id"):
        if request.get(field) in (None, ""):
            request[field] = None
        else:
            request[field] = as_uuid(field, request[field])
    return request


class DeliveryOrchestrator:
    """Coordinates target resolution, survey creation, threading and fan-out."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        membership: MembershipDirectory,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._uow_factory = uow_factory
        self._membership = membership
        self._clock = clock

    async def send(self, request_body: Mapping) -> None:
        """Fan-out entry point: recipient_handle, organization_id or region_id."""
        await self._deliver(request_body, resolve_target(request_body))

    async def compose(self, request_body: Mapping) -> None:
        """Direct entry point: recipient_handle only."""
        await self._deliver(request_body, resolve_direct_target(request_body))

    async def _deliver(self, body: Mapping, target: DeliveryTarget) -> None:
        request = _normalize_request(body)
        context = ErrorContext(
            author_handle=request["author_handle"], target_kind=target.kind.value,
        )
        now = self._clock()

        async with self._uow_factory() as uow:
            author = await uow.identities.get_by_handle(request["author_handle"])
            if author is None:
                raise ResourceNotFoundError(
                    "Author", request["author_handle"], context,
                )

            direct_recipient = None
            if target.kind is TargetKind.DIRECT:
                direct_recipient = await uow.identities.get_by_handle(str(target.value))
                if direct_recipient is None:
                    raise ResourceNotFoundError(
                        "Recipient", str(target.value), context,
                    )
            elif target.kind is TargetKind.ORGANIZATION:
                if not await self._membership.organization_exists(target.value):
                    raise InvalidOrganizationError(str(target.value), context)

            thread_context = [author.id]
            if direct_recipient is not None:
                thread_context.append(direct_recipient.id)
            parent_delivery_id = await resolve_parent_delivery_id(
                uow, request["parent_message_id"], thread_context,
            )

            survey_id = await self._attach_survey(uow, request, now, context)

            message = build_message(request, author.id, now, survey_id)
            await uow.messages.add_message(message)
            await uow.messages.add_message_request(
                build_message_request(request, target, message.id),
            )

            if direct_recipient is not None:
                recipients = [direct_recipient]
            else:
                recipients = await self._resolve_ground_recipients(uow, target)

            deliveries = build_deliveries(
                message.id, recipients, parent_delivery_id, now,
            )
            await uow.messages.add_deliveries(deliveries)
            await uow.commit()

        self._log_delivered(message.id, target, len(deliveries), request)

    async def _attach_survey(
        self,
        uow: UnitOfWork,
        request: Mapping,
        now: datetime,
        context: ErrorContext,
    ) -> SurveyId | None:
        """New survey from the payload, or an existing survey referenced by id."""
        if request.get("survey") is not None:
            return await create_survey(uow, request["survey"], now)
        survey_id = request.get("survey_id")
        if survey_id is None:
            return None
        if not await uow.surveys.survey_exists(survey_id):
            raise ResourceNotFoundError("Survey", str(survey_id), context)
        return survey_id

    async def _resolve_ground_recipients(
        self, uow: UnitOfWork, target: DeliveryTarget,
    ) -> list[Recipient]:
        if target.kind is TargetKind.ORGANIZATION:
            ground_users = await self._membership.get_organization_ground_users(
                target.value,
            )
        else:
            ground_users = await self._membership.get_region_ground_users(
                target.value,
            )
        handles = select_recipient_handles(ground_users, target.scope)
        recipients = await uow.identities.get_by_handles(handles)
        if len(recipients) < len(handles):
            logger.warning(
                f"{len(handles) - len(recipients)} ground user handle(s) "
                f"did not resolve to an author",
                extra={"target_kind": target.kind.value},
            )
        return require_resolved_recipients(recipients, target.scope)

    def _log_delivered(
        self,
        message_id: MessageId,
        target: DeliveryTarget,
        count: int,
        request: Mapping,
    ) -> None:
        logger.info(
            "Message delivered",
            extra={
                "message_id": message_id,
                "author_handle": request["author_handle"],
                "target_kind": target.kind.value,
                "recipient_count": count,
            },
        )
