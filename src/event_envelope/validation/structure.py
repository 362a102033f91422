"""Structural validation helpers shared by every resource kind."""

from __future__ import annotations

from collections.abc import Mapping, Sized
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .result import ValidationResult

#: ``{field: expected type (or tuple of types)}``
StructureShape = Mapping[str, "type[Any] | tuple[type[Any], ...]"]


def is_string(value: object) -> bool:
    """Return ``True`` if *value* is a ``str``."""
    return isinstance(value, str)


def is_empty(value: object) -> bool:
    """Return ``True`` for ``None``, blank strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def _type_label(expected: type[Any] | tuple[type[Any], ...]) -> str:
    if isinstance(expected, tuple):
        return " | ".join(t.__name__ for t in expected)
    return expected.__name__


def validate_structure(
    shape: StructureShape, attributes: Mapping[str, Any]
) -> ValidationResult:
    """Check that *attributes* carries every field of *shape* with the right type.

    Fields not named by *shape* are ignored.
    """
    result = ValidationResult.success()
    for field_name, expected in shape.items():
        if field_name not in attributes:
            result.add_error(field_name, "is required")
            continue
        value = attributes[field_name]
        if not isinstance(value, expected):
            result.add_error(
                field_name,
                f"must be {_type_label(expected)}, got {type(value).__name__}",
            )
    return result


def ensure_structure(shape: StructureShape, attributes: Mapping[str, Any]) -> None:
    """Raise ``StructuralValidationError`` if *attributes* misses *shape*."""
    validate_structure(shape, attributes).raise_if_invalid()


def errors_from_pydantic(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Flatten a pydantic ``ValidationError`` into ``{field.path: [messages]}``."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ())) or "__root__"
        msg = error.get("msg", "validation error")
        errors.setdefault(loc, []).append(msg)
    return errors
