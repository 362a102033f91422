"""Primitives: exceptions, ID generation."""

from __future__ import annotations

from .exceptions import EnvelopeError, StructuralValidationError, UndefinedValueError
from .id_generator import IIDGenerator, SequentialIDGenerator, UUID4Generator

__all__ = [
    "EnvelopeError",
    "IIDGenerator",
    "SequentialIDGenerator",
    "StructuralValidationError",
    "UUID4Generator",
    "UndefinedValueError",
]
