"""Correlation ID management for envelopes built while handling another message."""

from __future__ import annotations

import contextlib
import uuid
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

# ContextVar for correlation/causation tracking across async boundaries.
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_causation_id: ContextVar[str | None] = ContextVar("causation_id", default=None)


def get_correlation_id() -> str | None:
    """Get current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    """Set correlation ID in context."""
    _correlation_id.set(correlation_id)


def get_causation_id() -> str | None:
    """Get current causation ID from context."""
    return _causation_id.get()


def set_causation_id(causation_id: str | None) -> None:
    """Set causation ID in context."""
    _causation_id.set(causation_id)


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


def get_context_vars() -> dict[str, str | None]:
    """Get all correlation context variables."""
    return {
        "correlation_id": get_correlation_id(),
        "causation_id": get_causation_id(),
    }


@contextlib.contextmanager
def correlation_scope(
    correlation_id: str | None = None,
    causation_id: str | None = None,
) -> Iterator[str]:
    """Bind correlation/causation IDs for the duration of a ``with`` block.

    A fresh correlation ID is generated when none is given. The previous
    values are restored on exit.

    Usage::

        with correlation_scope(causation_id=command_id) as cid:
            envelope = factory.build_from_context("order.shipped", {...})
    """
    cid = correlation_id or generate_correlation_id()
    correlation_token = _correlation_id.set(cid)
    causation_token = _causation_id.set(causation_id)
    try:
        yield cid
    finally:
        _causation_id.reset(causation_token)
        _correlation_id.reset(correlation_token)
