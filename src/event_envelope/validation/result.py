"""ValidationResult — field-level errors collected while checking a draft."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..primitives.exceptions import StructuralValidationError


def default_errors_factory() -> dict[str, list[str]]:
    """Factory for the mutable ``errors`` default of ValidationResult."""
    return {}


@dataclass
class ValidationResult:
    """Collects every structural problem of a draft before failing.

    Usage::

        result = validate_structure({"name": str}, draft)
        result.raise_if_invalid()
    """

    errors: dict[str, list[str]] = field(default_factory=default_errors_factory)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @classmethod
    def success(cls) -> ValidationResult:
        return cls()

    def add_error(self, field_name: str, message: str) -> None:
        """Record *message* against *field_name*."""
        self.errors.setdefault(field_name, []).append(message)

    def raise_if_invalid(self) -> None:
        """Raise :class:`StructuralValidationError` carrying the collected errors."""
        if self.errors:
            raise StructuralValidationError(dict(self.errors))

    def __bool__(self) -> bool:
        return self.is_valid
