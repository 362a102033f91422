"""Injected defaults for envelope construction."""

from __future__ import annotations

import os
from collections.abc import Callable
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .primitives.id_generator import IIDGenerator, UUID4Generator
from .resources.base import utc_now

UNKNOWN = "Unknown"


class EnvelopeDefaults(BaseModel):
    """Values used for every option the caller leaves out.

    ``origin_process_id`` is read from the host once, when the defaults are
    created, so tests can pin it (together with ``id_generator`` and
    ``clock``) for fully deterministic envelopes.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    origin_engine_id: str = UNKNOWN
    origin_engine_name: str = UNKNOWN
    origin_user_id: str = UNKNOWN
    origin_process_id: int | str = Field(default_factory=os.getpid)
    id_generator: IIDGenerator = Field(default_factory=UUID4Generator)
    clock: Callable[[], datetime] = utc_now
