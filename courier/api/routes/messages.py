"""Message Routes — compose, fan-out send, listing and single fetch.

Invariants:
    - Field-level validation done by Pydantic before the handler runs (422 on failure)
    - Write endpoints return 204 with no body: deliver or fail
    - Domain errors propagate to the global CourierError handler
    - Routes contain no business logic (delegate to DeliveryOrchestrator / MessageReader)
"""

import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from courier.api.dependencies import get_orchestrator, get_reader
from courier.core.paginate import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from courier.schemas.message import (
    MessageCompose, MessageListResponse, MessageOut, MessageSend,
)
from courier.services.delivery_orchestrator import DeliveryOrchestrator
from courier.services.message_reader import MessageReader

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.get("", response_model=MessageListResponse)
async def list_messages(
    request: Request,
    author_handle: str = Query(..., min_length=1),
    since: datetime | None = Query(None),
    limit: int = Query(DEFAULT_PAGE_SIZE, gt=0, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    reader: MessageReader = Depends(get_reader),
):
    """List an author's messages with prev/next links."""
    return await reader.list_messages(
        author_handle, str(request.url),
        since=since, limit=limit, offset=offset,
    )


@router.get("/{message_id}", response_model=MessageOut)
async def get_message(
    message_id: UUID, reader: MessageReader = Depends(get_reader),
):
    """Fetch one message by id."""
    return await reader.get_message(message_id)


@router.post("", status_code=status.HTTP_204_NO_CONTENT)
async def compose_message(
    body: MessageCompose,
    orchestrator: DeliveryOrchestrator = Depends(get_orchestrator),
):
    """Direct compose to a single recipient handle."""
    await orchestrator.compose(body.model_dump())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/send", status_code=status.HTTP_204_NO_CONTENT)
async def send_message(
    body: MessageSend,
    orchestrator: DeliveryOrchestrator = Depends(get_orchestrator),
):
    """Fan-out send to a handle, an organization or a region."""
    await orchestrator.send(body.model_dump())
    return Response(status_code=status.HTTP_204_NO_CONTENT)
