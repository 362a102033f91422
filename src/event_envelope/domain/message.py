"""Message container: an immutable mapping where missing keys resolve to ``ABSENT``."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ..primitives.exceptions import StructuralValidationError


class _AbsentType:
    """Type of the :data:`ABSENT` marker.

    ``ABSENT`` is returned for message keys that were never set. It is falsy
    and distinct from ``None``, so a stored ``None`` stays distinguishable.
    """

    __slots__ = ()
    _instance: _AbsentType | None = None

    def __new__(cls) -> _AbsentType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self) -> str:
        return "ABSENT"

    def __copy__(self) -> _AbsentType:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _AbsentType:
        return self


ABSENT = _AbsentType()


def freeze_value(value: Any, path: str = "message") -> Any:
    """Return an immutable equivalent of *value*, recursing into containers.

    ``bytearray`` becomes ``bytes``. Any other leaf that is not hashable is
    rejected, *path* names where it sits in the message.
    """
    if isinstance(value, MessageContainer):
        return value
    if isinstance(value, Mapping):
        return MessageContainer(value, path=path)
    if isinstance(value, (list, tuple)):
        return tuple(
            freeze_value(item, f"{path}[{index}]") for index, item in enumerate(value)
        )
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze_value(item, path) for item in value)
    if isinstance(value, bytearray):
        return bytes(value)
    try:
        hash(value)
    except TypeError:
        raise StructuralValidationError(
            {path: [f"must be immutable, got {type(value).__name__}"]}
        ) from None
    return value


def thaw_value(value: Any) -> Any:
    """Inverse of :func:`freeze_value`: plain, mutable Python containers."""
    if isinstance(value, MessageContainer):
        return value.to_dict()
    if isinstance(value, tuple):
        return [thaw_value(item) for item in value]
    if isinstance(value, frozenset):
        return {thaw_value(item) for item in value}
    return value


class MessageContainer(Mapping[str, Any]):
    """Read-only, deep-frozen view of an event message.

    Reading a key that was never set yields :data:`ABSENT` instead of raising,
    both through ``container[key]`` and ``container.get(key)``. Membership,
    ``len()`` and iteration only see the keys that were actually stored.

    Usage::

        message = MessageContainer({"userID": "u1"})
        message["userID"]   # "u1"
        message["email"]    # ABSENT
    """

    __slots__ = ("_data",)

    def __init__(
        self, payload: Mapping[str, Any] | None = None, *, path: str = "message"
    ) -> None:
        data = {
            key: freeze_value(value, f"{path}.{key}")
            for key, value in (payload or {}).items()
        }
        object.__setattr__(self, "_data", MappingProxyType(data))

    def __getitem__(self, key: str) -> Any:
        return self._data.get(key, ABSENT)

    def get(self, key: str, default: Any = ABSENT) -> Any:
        return self._data.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._data)!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.to_dict(),))

    def __copy__(self) -> MessageContainer:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> MessageContainer:
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return a plain, mutable deep copy of the stored keys."""
        return {key: thaw_value(value) for key, value in self._data.items()}

    # ── Pydantic integration ─────────────────────────────────────

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            wrap_message,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_dict()
            ),
        )


def wrap_message(payload: Mapping[str, Any]) -> MessageContainer:
    """Guard *payload*: copy its keys into a frozen :class:`MessageContainer`.

    Nested containers are frozen (see :func:`freeze_value`); a leaf that
    cannot be frozen raises :class:`StructuralValidationError`. An existing
    container is returned as-is.
    """
    if isinstance(payload, MessageContainer):
        return payload
    if not isinstance(payload, Mapping):
        raise ValueError(f"message must be a mapping, got {type(payload).__name__}")
    return MessageContainer(payload)


def lookup(container: Mapping[str, Any], key: str) -> Any:
    """Return ``container[key]`` or :data:`ABSENT`, for guarded and plain mappings."""
    return container.get(key, ABSENT)
