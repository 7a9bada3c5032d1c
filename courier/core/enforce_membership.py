"""Membership Enforcement — decides which ground users become delivery targets.

Invariants:
    - Empty membership -> EmptyMembershipError (message is part of the API contract)
    - Every ground user without an author handle -> NoAttributableRecipientsError
    - Ground users without a handle are skipped, never delivered to
    - Handles are deduplicated, first-seen order preserved

Design Decisions:
    - Pure over the GroundUser sequence: the orchestrator does the IO, this module
      only enforces the rules (ADR: functional core, imperative shell)
"""

from collections.abc import Iterable, Sequence

from courier.core.domain_types import GroundUser, Recipient
from courier.core.errors import (
    EmptyMembershipError,
    NoAttributableRecipientsError,
)


def select_recipient_handles(
    ground_users: Sequence[GroundUser], scope: str,
) -> list[str]:
    """Return the attributable author handles, or raise for unusable membership."""
    if not ground_users:
        raise EmptyMembershipError(scope)

    handles: list[str] = []
    for user in ground_users:
        handle = (user.author_handle or "").strip()
        if handle and handle not in handles:
            handles.append(handle)

    if not handles:
        raise NoAttributableRecipientsError(scope)
    return handles


def require_resolved_recipients(
    recipients: Iterable[Recipient], scope: str,
) -> list[Recipient]:
    """Handles that did not resolve to an author leave nothing to deliver to."""
    resolved = list(recipients)
    if not resolved:
        raise NoAttributableRecipientsError(scope)
    return resolved
