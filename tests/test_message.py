"""Tests for the message container guard and the ABSENT marker."""

from __future__ import annotations

import copy
import pickle

import pytest

from event_envelope.domain.message import (
    ABSENT,
    MessageContainer,
    freeze_value,
    lookup,
    thaw_value,
    wrap_message,
)
from event_envelope.primitives.exceptions import StructuralValidationError


def test_absent_marker_is_a_falsy_singleton() -> None:
    assert not ABSENT
    assert ABSENT is not None
    assert repr(ABSENT) == "ABSENT"
    assert type(ABSENT)() is ABSENT
    assert copy.copy(ABSENT) is ABSENT
    assert copy.deepcopy(ABSENT) is ABSENT
    assert pickle.loads(pickle.dumps(ABSENT)) is ABSENT


def test_present_keys_return_their_values() -> None:
    message = wrap_message({"userID": "u1", "count": 3, "flag": None})

    assert message["userID"] == "u1"
    assert message["count"] == 3
    assert message["flag"] is None


def test_missing_keys_return_absent_instead_of_raising() -> None:
    message = wrap_message({"userID": "u1"})

    assert message["email"] is ABSENT
    assert message.get("email") is ABSENT
    assert message.get("email", "fallback") == "fallback"


def test_stored_none_is_distinct_from_absent() -> None:
    message = wrap_message({"deletedAt": None})

    assert message["deletedAt"] is None
    assert "deletedAt" in message
    assert "createdAt" not in message


def test_container_only_exposes_stored_keys() -> None:
    message = wrap_message({"a": 1, "b": 2})
    _ = message["c"]

    assert len(message) == 2
    assert sorted(message) == ["a", "b"]
    assert dict(message.items()) == {"a": 1, "b": 2}
    assert message == {"a": 1, "b": 2}


def test_item_assignment_is_rejected() -> None:
    message = wrap_message({"a": 1})

    with pytest.raises(TypeError):
        message["a"] = 2  # type: ignore[index]
    with pytest.raises(TypeError):
        del message["a"]  # type: ignore[attr-defined]
    assert message["a"] == 1


def test_attribute_assignment_is_rejected() -> None:
    message = wrap_message({"a": 1})

    with pytest.raises(AttributeError):
        message.extra = True  # type: ignore[attr-defined]
    with pytest.raises(AttributeError):
        message._data = {}  # type: ignore[misc]
    assert message == {"a": 1}


def test_nested_values_are_deep_frozen() -> None:
    message = wrap_message(
        {"customer": {"id": "c1", "tags": ["vip"]}, "items": [{"sku": "s1"}], "ids": {1, 2}}
    )

    assert isinstance(message["customer"], MessageContainer)
    assert message["customer"]["tags"] == ("vip",)
    assert message["customer"]["missing"] is ABSENT
    assert isinstance(message["items"], tuple)
    assert message["items"][0]["sku"] == "s1"
    assert message["ids"] == frozenset({1, 2})


def test_to_dict_returns_mutable_copy() -> None:
    message = wrap_message({"customer": {"tags": ["vip"]}, "ids": {1}})

    data = message.to_dict()
    data["customer"]["tags"].append("new")

    assert data == {"customer": {"tags": ["vip", "new"]}, "ids": {1}}
    assert message["customer"]["tags"] == ("vip",)


def test_wrap_message_returns_existing_container() -> None:
    message = MessageContainer({"a": 1})

    assert wrap_message(message) is message


def test_wrap_message_rejects_non_mappings() -> None:
    with pytest.raises(ValueError, match="must be a mapping"):
        wrap_message(["a"])  # type: ignore[arg-type]


def test_lookup_works_on_plain_and_guarded_mappings() -> None:
    assert lookup({"a": 1}, "a") == 1
    assert lookup({"a": 1}, "b") is ABSENT
    assert lookup(wrap_message({"a": 1}), "b") is ABSENT


def test_container_is_hashable_and_copy_safe() -> None:
    message = wrap_message({"a": 1, "b": [1, 2]})

    assert hash(message) == hash(wrap_message({"b": (1, 2), "a": 1}))
    assert copy.copy(message) is message
    assert copy.deepcopy(message) is message
    assert pickle.loads(pickle.dumps(message)) == message


def test_freeze_and_thaw_scalars_pass_through() -> None:
    assert freeze_value("text") == "text"
    assert freeze_value(3) == 3
    assert thaw_value(None) is None


def test_bytearray_is_frozen_to_bytes() -> None:
    payload = {"data": bytearray(b"x")}
    message = wrap_message(payload)

    payload["data"].extend(b"y")

    assert message["data"] == b"x"
    assert isinstance(message["data"], bytes)
    with pytest.raises(AttributeError):
        message["data"].extend(b"z")  # type: ignore[attr-defined]
    assert hash(message) == hash(wrap_message({"data": b"x"}))


class _Unhashable:
    __hash__ = None  # type: ignore[assignment]


def test_unhashable_leaf_is_rejected_with_its_path() -> None:
    with pytest.raises(StructuralValidationError) as exc_info:
        wrap_message({"customer": {"notes": [1, _Unhashable()]}})

    assert exc_info.value.errors == {
        "message.customer.notes[1]": ["must be immutable, got _Unhashable"]
    }
