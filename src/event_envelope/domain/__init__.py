"""Domain primitives: envelope and message container."""

from __future__ import annotations

from .envelope import (
    ENVELOPE_STRUCTURE,
    ENVELOPE_TYPE,
    EnvelopeMeta,
    EnvelopeOptions,
    EventEnvelope,
)
from .message import ABSENT, MessageContainer, lookup, wrap_message

__all__: list[str] = [
    "ABSENT",
    "ENVELOPE_STRUCTURE",
    "ENVELOPE_TYPE",
    "EnvelopeMeta",
    "EnvelopeOptions",
    "EventEnvelope",
    "MessageContainer",
    "lookup",
    "wrap_message",
]
