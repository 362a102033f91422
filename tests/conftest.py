from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timezone

import pytest

from event_envelope.config import EnvelopeDefaults
from event_envelope.correlation import set_causation_id, set_correlation_id
from event_envelope.primitives.id_generator import SequentialIDGenerator

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _clean_correlation_context() -> Iterator[None]:
    set_correlation_id(None)
    set_causation_id(None)
    yield
    set_correlation_id(None)
    set_causation_id(None)


@pytest.fixture
def deterministic_defaults() -> EnvelopeDefaults:
    """Defaults with pinned identity, clock and process ID."""
    return EnvelopeDefaults(
        origin_process_id=4242,
        id_generator=SequentialIDGenerator("evt"),
        clock=lambda: FIXED_NOW,
    )
