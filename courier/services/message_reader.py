"""Message Reader — paginated listing and single-message fetch.

Invariants:
    - Unknown author handle or message id -> ResourceNotFoundError
    - Listing window validated by core/paginate.py before any query
    - Links computed from the caller's URL (prev None on the first page)
    - Reads are not transactional with respect to concurrent sends
"""

from datetime import datetime
from uuid import UUID

from courier.core.domain_types import MessageId
from courier.core.errors import ResourceNotFoundError
from courier.core.format_messages import format_message
from courier.core.paginate import build_page_window, compute_page_links
from courier.core.repository_protocols import UnitOfWorkFactory


class MessageReader:
    """Read path over the message repository."""

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def list_messages(
        self,
        author_handle: str,
        url: str,
        since: datetime | str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict:
        """{"messages": [...], "links": {"prev": ..., "next": ...}}"""
        window = build_page_window(since, limit, offset)
        async with self._uow_factory() as uow:
            author = await uow.identities.get_by_handle(author_handle)
            if author is None:
                raise ResourceNotFoundError("Author", author_handle)
            rows = await uow.messages.list_message_rows(
                author.id, window.since, window.limit, window.offset,
            )
        return {
            "messages": [format_message(row) for row in rows],
            "links": compute_page_links(url, window),
        }

    async def get_message(self, message_id: UUID) -> dict:
        async with self._uow_factory() as uow:
            row = await uow.messages.get_message_row(MessageId(message_id))
        if row is None:
            raise ResourceNotFoundError("Message", str(message_id))
        return format_message(row)
