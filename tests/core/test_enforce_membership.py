"""Membership Enforcement — verifies which ground users become recipients.

Tests:
    - Empty membership raises EmptyMembershipError with the contract message
    - All handles missing raises NoAttributableRecipientsError
    - Users without handles are skipped, duplicates collapsed, order kept
    - Unresolved recipients raise NoAttributableRecipientsError
"""

from uuid import uuid4

import pytest

from courier.core.domain_types import AuthorId, GroundUser, Recipient
from courier.core.enforce_membership import (
    require_resolved_recipients, select_recipient_handles,
)
from courier.core.errors import (
    EmptyMembershipError, NoAttributableRecipientsError,
)


def test_empty_organization_message():
    with pytest.raises(EmptyMembershipError) as exc:
        select_recipient_handles([], "organization")
    assert exc.value.message == "No ground users found in the specified organization"
    assert exc.value.http_status == 422


def test_empty_region_message():
    with pytest.raises(EmptyMembershipError) as exc:
        select_recipient_handles([], "region")
    assert exc.value.message == "No ground users found in the specified region"


def test_no_handles_message():
    users = [GroundUser("g1"), GroundUser("g2", author_handle="  ")]
    with pytest.raises(NoAttributableRecipientsError) as exc:
        select_recipient_handles(users, "organization")
    assert exc.value.message == (
        "No author handles found for any of the ground users "
        "found in the specified organization"
    )


def test_users_without_handles_skipped():
    users = [
        GroundUser("g1", "alpha"),
        GroundUser("g2"),
        GroundUser("g3", "beta"),
    ]
    assert select_recipient_handles(users, "region") == ["alpha", "beta"]


def test_duplicate_handles_collapsed_in_first_seen_order():
    users = [
        GroundUser("g1", "beta"),
        GroundUser("g2", "alpha"),
        GroundUser("g3", " beta "),
    ]
    assert select_recipient_handles(users, "organization") == ["beta", "alpha"]


def test_resolved_recipients_returned_as_list():
    recipient = Recipient(AuthorId(uuid4()), "alpha")
    assert require_resolved_recipients(iter([recipient]), "region") == [recipient]


def test_no_resolved_recipients_raises():
    with pytest.raises(NoAttributableRecipientsError, match="specified region"):
        require_resolved_recipients([], "region")
