"""Thread Linker — finds the delivery a reply continues.

Invariants:
    - No parent_message_id -> None, without touching the database
    - Unknown parent message -> ResourceNotFoundError
    - Parent exists but has no delivery for any recipient in the context -> None (best effort)
    - recipient_context is tried in order; the first match wins

Design Decisions:
    - The replying author is the primary context: a reply continues the delivery
      the author received. A direct follow-up to one's own message continues the
      delivery to the direct recipient, which the orchestrator passes second.
"""

import logging
from collections.abc import Sequence

from courier.core.domain_types import AuthorId, DeliveryId, MessageId
from courier.core.errors import ResourceNotFoundError
from courier.core.repository_protocols import UnitOfWork

logger = logging.getLogger(__name__)


async def resolve_parent_delivery_id(
    uow: UnitOfWork,
    parent_message_id: MessageId | None,
    recipient_context: Sequence[AuthorId],
) -> DeliveryId | None:
    if parent_message_id is None:
        return None

    if not await uow.messages.message_exists(parent_message_id):
        raise ResourceNotFoundError("Message", str(parent_message_id))

    for recipient_id in recipient_context:
        delivery_id = await uow.messages.find_delivery_id(
            parent_message_id, recipient_id,
        )
        if delivery_id is not None:
            return delivery_id

    logger.info(
        f"No delivery of parent {parent_message_id} in this thread; reply not chained",
        extra={"message_id": parent_message_id},
    )
    return None
