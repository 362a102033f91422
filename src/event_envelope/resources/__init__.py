"""Resource base shared by every resource kind: identity, time, item keys."""

from __future__ import annotations

from .base import (
    ITEM_KEY_PREFIX,
    FinalizedResource,
    IResource,
    finalize_resource,
    generate_item_key,
    to_iso_time,
    utc_now,
)

__all__ = [
    "FinalizedResource",
    "IResource",
    "ITEM_KEY_PREFIX",
    "finalize_resource",
    "generate_item_key",
    "to_iso_time",
    "utc_now",
]
