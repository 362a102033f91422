"""Exceptions raised while building event envelopes."""

from __future__ import annotations


class EnvelopeError(Exception):
    """Root exception for the entire event-envelope package."""


class UndefinedValueError(EnvelopeError):
    """Raised when a mandatory value is missing, of the wrong type, or empty.

    Usage: the envelope builder raises this when the event name is absent,
    not a string, or blank.
    """


class StructuralValidationError(EnvelopeError):
    """Raised when a draft does not match its required structure.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))
