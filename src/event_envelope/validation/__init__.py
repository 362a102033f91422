"""Validation system: ValidationResult and structural checks."""

from __future__ import annotations

from .result import ValidationResult
from .structure import (
    StructureShape,
    ensure_structure,
    errors_from_pydantic,
    is_empty,
    is_string,
    validate_structure,
)

__all__ = [
    "StructureShape",
    "ValidationResult",
    "ensure_structure",
    "errors_from_pydantic",
    "is_empty",
    "is_string",
    "validate_structure",
]
