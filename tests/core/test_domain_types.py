"""Domain Types — verifies identity wrappers, enums and value objects.

Tests:
    - NewType wrappers exist and are callable
    - Enums have expected members and serialize to string values
    - DeliveryTarget derives fan-out and scope from its kind
    - Value objects are immutable
"""

from dataclasses import FrozenInstanceError
from uuid import uuid4

import pytest

from courier.core.domain_types import (
    AuthorId, DeliveryId, DeliveryTarget, GroundUser, MessageId,
    RecipientType, SurveyId, TargetKind,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert MessageId(uid) == uid
    assert DeliveryId(uid) == uid
    assert AuthorId(uid) == uid
    assert SurveyId(uid) == uid


def test_target_kind_has_three_kinds():
    assert {k.value for k in TargetKind} == {"direct", "organization", "region"}


def test_recipient_type_values():
    assert RecipientType.USER.value == "user"
    assert RecipientType.ORGANIZATION.value == "organization"
    assert RecipientType.REGION.value == "region"


def test_str_enum_compares_to_string():
    assert TargetKind.REGION == "region"


def test_direct_target_is_not_fan_out():
    target = DeliveryTarget(TargetKind.DIRECT, "rosa")
    assert target.is_fan_out is False
    assert target.scope == "direct"


def test_region_target_scope():
    target = DeliveryTarget(TargetKind.REGION, uuid4())
    assert target.is_fan_out is True
    assert target.scope == "region"


def test_ground_user_handle_defaults_to_none():
    assert GroundUser("g1").author_handle is None


def test_delivery_target_is_frozen():
    target = DeliveryTarget(TargetKind.DIRECT, "rosa")
    with pytest.raises(FrozenInstanceError):
        target.value = "other"
