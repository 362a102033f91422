"""event-envelope — immutable, validated event envelopes for pub/sub transports.

Zero infrastructure dependencies. Pydantic for immutability & validation.
"""

from __future__ import annotations

# ── Builder ─────────────────────────────────────────────────────
from .builder import EnvelopeFactory, build_envelope, parse_options, wrap_existing
from .config import EnvelopeDefaults
from .correlation import (
    correlation_scope,
    generate_correlation_id,
    get_causation_id,
    get_context_vars,
    get_correlation_id,
    set_causation_id,
    set_correlation_id,
)

# ── Domain ───────────────────────────────────────────────────────
from .domain import (
    ABSENT,
    ENVELOPE_TYPE,
    EnvelopeMeta,
    EnvelopeOptions,
    EventEnvelope,
    MessageContainer,
    lookup,
    wrap_message,
)

# ── Primitives ──────────────────────────────────────────────────
from .primitives import (
    EnvelopeError,
    IIDGenerator,
    SequentialIDGenerator,
    StructuralValidationError,
    UndefinedValueError,
    UUID4Generator,
)

# ── Resources ───────────────────────────────────────────────────
from .resources import (
    FinalizedResource,
    IResource,
    finalize_resource,
    generate_item_key,
)

# ── Validation ──────────────────────────────────────────────────
from .validation import ValidationResult, is_empty, is_string, validate_structure

__all__: list[str] = [
    # Builder
    "EnvelopeDefaults",
    "EnvelopeFactory",
    "build_envelope",
    "parse_options",
    "wrap_existing",
    # Correlation
    "correlation_scope",
    "generate_correlation_id",
    "get_causation_id",
    "get_context_vars",
    "get_correlation_id",
    "set_causation_id",
    "set_correlation_id",
    # Domain
    "ABSENT",
    "ENVELOPE_TYPE",
    "EnvelopeMeta",
    "EnvelopeOptions",
    "EventEnvelope",
    "MessageContainer",
    "lookup",
    "wrap_message",
    # Primitives
    "EnvelopeError",
    "IIDGenerator",
    "SequentialIDGenerator",
    "StructuralValidationError",
    "UUID4Generator",
    "UndefinedValueError",
    # Resources
    "FinalizedResource",
    "IResource",
    "finalize_resource",
    "generate_item_key",
    # Validation
    "ValidationResult",
    "is_empty",
    "is_string",
    "validate_structure",
]
