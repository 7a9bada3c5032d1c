"""Pagination — offset/limit window checks and prev/next link computation.

Invariants:
    - limit in (0, MAX_PAGE_SIZE], offset >= 0
    - next is always the same URL with offset + limit
    - prev is the same URL with offset - limit, or None when that would be negative
    - Every other query parameter of the URL is preserved unchanged

Design Decisions:
    - Links are built from the caller's URL rather than a hard-coded route, so the
      HTTP layer can mount the endpoint anywhere
"""

from dataclasses import dataclass
from datetime import datetime
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from courier.core.errors import MessageValidationError

DEFAULT_PAGE_SIZE: int = 100
MAX_PAGE_SIZE: int = 100


@dataclass(frozen=True)
class PageWindow:
    since: datetime | None
    limit: int
    offset: int


def build_page_window(
    since: datetime | str | None = None,
    limit: int | None = None,
    offset: int | None = None,
) -> PageWindow:
    """Apply defaults and bounds to the listing parameters."""
    limit = DEFAULT_PAGE_SIZE if limit is None else limit
    offset = 0 if offset is None else offset
    if not 0 < limit <= MAX_PAGE_SIZE:
        raise MessageValidationError(
            f"limit must be between 1 and {MAX_PAGE_SIZE}", "limit",
        )
    if offset < 0:
        raise MessageValidationError("offset must be at least 0", "offset")

    if isinstance(since, str):
        try:
            since = datetime.fromisoformat(since.replace("Z", "+00:00"))
        except ValueError:
            raise MessageValidationError("since must be an ISO-8601 date", "since")
    return PageWindow(since=since, limit=limit, offset=offset)


def _with_window(url: str, limit: int, offset: int) -> str:
    parts = urlsplit(url)
    query = [
        (key, value) for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in ("limit", "offset")
    ]
    query += [("limit", str(limit)), ("offset", str(offset))]
    return urlunsplit(parts._replace(query=urlencode(query)))


def compute_page_links(url: str, window: PageWindow) -> dict[str, str | None]:
    """Return {"prev": ..., "next": ...} for the given request URL."""
    prev_offset = window.offset - window.limit
    return {
        "prev": (
            _with_window(url, window.limit, prev_offset)
            if prev_offset >= 0 else None
        ),
        "next": _with_window(url, window.limit, window.offset + window.limit),
    }
