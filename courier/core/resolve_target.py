"""Target Resolution — turns the three optional target fields into one DeliveryTarget.

Invariants:
    - resolve_target is PURE: no lookups, no IO
    - Fan-out requests carry exactly one of recipient_handle / organization_id / region_id
    - Direct compose carries recipient_handle and nothing else
    - Empty strings count as absent

Design Decisions:
    - Resolved once at the boundary: downstream code branches on TargetKind,
      never on three nullable fields (ADR: tagged union over nullable triple)
    - Existence lookups belong to the orchestrator, which owns the unit of work
"""

from collections.abc import Mapping
from uuid import UUID

from courier.core.domain_types import DeliveryTarget, TargetKind
from courier.core.errors import InvalidTargetError, MessageValidationError

TARGET_FIELDS: tuple[tuple[str, TargetKind], ...] = (
    ("recipient_handle", TargetKind.DIRECT),
    ("organization_id", TargetKind.ORGANIZATION),
    ("region_id", TargetKind.REGION),
)


def _present(value: object) -> bool:
    return value is not None and value != ""


def as_uuid(field: str, value: object) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise MessageValidationError(f"{field} must be a uuid", field)


def resolve_target(request: Mapping) -> DeliveryTarget:
    """Fan-out entry point: exactly one target field must be present."""
    given = [
        (field, kind) for field, kind in TARGET_FIELDS
        if _present(request.get(field))
    ]
    if not given:
        raise InvalidTargetError(
            "One of recipient_handle, organization_id or region_id is required",
        )
    if len(given) > 1:
        names = ", ".join(field for field, _ in given)
        raise InvalidTargetError(
            f"Only one of recipient_handle, organization_id or region_id "
            f"is allowed (got {names})",
        )

    field, kind = given[0]
    value = request[field]
    if kind is TargetKind.DIRECT:
        return DeliveryTarget(kind, str(value))
    return DeliveryTarget(kind, as_uuid(field, value))


def resolve_direct_target(request: Mapping) -> DeliveryTarget:
    """Direct-compose entry point: recipient_handle only."""
    for field, kind in TARGET_FIELDS:
        if kind is not TargetKind.DIRECT and _present(request.get(field)):
            raise InvalidTargetError(
                f"{field} is not accepted when composing a direct message",
            )
    if not _present(request.get("recipient_handle")):
        raise InvalidTargetError("recipient_handle is required")
    return DeliveryTarget(TargetKind.DIRECT, str(request["recipient_handle"]))
