"""Pagination — verifies window bounds and prev/next link computation.

Tests:
    - Defaults applied when limit/offset absent
    - Out-of-range limit/offset rejected
    - prev is None on the first page, next always present
    - Other query parameters preserved
"""

from datetime import datetime, timezone
from urllib.parse import parse_qs, urlsplit

import pytest

from courier.core.errors import MessageValidationError
from courier.core.paginate import (
    DEFAULT_PAGE_SIZE, PageWindow, build_page_window, compute_page_links,
)

URL = "http://test/api/v1/messages?author_handle=ana&limit=10&offset=20"


def _query(url):
    return parse_qs(urlsplit(url).query)


def test_defaults():
    window = build_page_window()
    assert window == PageWindow(since=None, limit=DEFAULT_PAGE_SIZE, offset=0)


@pytest.mark.parametrize("limit", [0, -1, 101])
def test_limit_out_of_range(limit):
    with pytest.raises(MessageValidationError) as exc:
        build_page_window(limit=limit)
    assert exc.value.field == "limit"


def test_negative_offset_rejected():
    with pytest.raises(MessageValidationError):
        build_page_window(offset=-1)


def test_since_string_parsed():
    window = build_page_window(since="2026-01-01T00:00:00Z")
    assert window.since == datetime(2026, 1, 1, tzinfo=timezone.utc)


def test_invalid_since_rejected():
    with pytest.raises(MessageValidationError, match="since"):
        build_page_window(since="last week")


def test_links_move_by_one_window():
    links = compute_page_links(URL, build_page_window(limit=10, offset=20))
    assert _query(links["next"])["offset"] == ["30"]
    assert _query(links["prev"])["offset"] == ["10"]
    assert _query(links["next"])["limit"] == ["10"]


def test_prev_is_none_on_first_page():
    links = compute_page_links(URL, build_page_window(limit=10, offset=0))
    assert links["prev"] is None
    assert _query(links["next"])["offset"] == ["10"]


def test_prev_is_none_when_offset_smaller_than_limit():
    links = compute_page_links(URL, build_page_window(limit=10, offset=5))
    assert links["prev"] is None


def test_prev_reaches_zero():
    links = compute_page_links(URL, build_page_window(limit=10, offset=10))
    assert _query(links["prev"])["offset"] == ["0"]


def test_other_query_params_preserved():
    url = "http://test/api/v1/messages?author_handle=ana&since=2026-01-01"
    links = compute_page_links(url, build_page_window(limit=5))
    query = _query(links["next"])
    assert query["author_handle"] == ["ana"]
    assert query["since"] == ["2026-01-01"]
    assert urlsplit(links["next"]).path == "/api/v1/messages"
