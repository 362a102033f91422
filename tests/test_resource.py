"""Tests for finalize_resource and generate_item_key."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone

import pytest

from event_envelope.primitives.exceptions import (
    StructuralValidationError,
    UndefinedValueError,
)
from event_envelope.primitives.id_generator import SequentialIDGenerator
from event_envelope.resources.base import (
    finalize_resource,
    generate_item_key,
    to_iso_time,
)

SHAPE = {"name": str, "message": Mapping}


def test_finalize_assigns_identity_and_creation_time() -> None:
    resource = finalize_resource(
        "EventEnvelope",
        SHAPE,
        {"name": "user.created", "message": {}},
        "alice",
        id_generator=SequentialIDGenerator("r"),
        clock=lambda: datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc),
    )

    assert resource.id == "r-1"
    assert resource.type == "EventEnvelope"
    assert resource.origin_user_id == "alice"
    assert resource.created_iso_time == "2024-05-06T07:08:09.000Z"
    assert resource.attributes["name"] == "user.created"


def test_finalize_generates_uuid_by_default() -> None:
    resource = finalize_resource("EventEnvelope", SHAPE, {"name": "x", "message": {}})

    assert len(resource.id) == 36
    assert resource.origin_user_id == "Unknown"


def test_finalize_reports_every_shape_violation() -> None:
    with pytest.raises(StructuralValidationError) as exc_info:
        finalize_resource("EventEnvelope", SHAPE, {"name": 1})

    assert exc_info.value.errors == {
        "name": ["must be str, got int"],
        "message": ["is required"],
    }


@pytest.mark.parametrize("kind", ["", "  ", None])
def test_finalize_requires_a_kind(kind: object) -> None:
    with pytest.raises(UndefinedValueError):
        finalize_resource(kind, SHAPE, {"name": "x", "message": {}})  # type: ignore[arg-type]


def test_iso_time_is_normalised_to_utc() -> None:
    plus_two = timezone(timedelta(hours=2))

    assert to_iso_time(datetime(2024, 1, 1, 2, 0, tzinfo=plus_two)) == (
        "2024-01-01T00:00:00.000Z"
    )
    assert to_iso_time(datetime(2024, 1, 1, 0, 0)) == "2024-01-01T00:00:00.000Z"


def test_item_key_is_deterministic() -> None:
    first = generate_item_key("EventEnvelope", "user.created", "42")
    second = generate_item_key("EventEnvelope", "user.created", "42")

    assert first == second == "ItemKey:EventEnvelope:user.created:42"


def test_item_key_preserves_component_order() -> None:
    assert generate_item_key("a", "b", "c") != generate_item_key("b", "a", "c")


def test_item_key_separators_are_unambiguous() -> None:
    """A ':' inside a component cannot collide with a different split."""
    left = generate_item_key("EventEnvelope", "a:b", "c")
    right = generate_item_key("EventEnvelope", "a", "b:c")

    assert left != right
    assert left.count(":") == 3
    assert left == "ItemKey:EventEnvelope:a%3Ab:c"
