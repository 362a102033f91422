"""Resource base: identity, creation time, shape check and item keys.

Every resource kind (events today, others later) is finalized through
:func:`finalize_resource` and keyed through :func:`generate_item_key`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from ..primitives.exceptions import UndefinedValueError
from ..primitives.id_generator import IIDGenerator, UUID4Generator
from ..validation.structure import ensure_structure, is_empty, is_string

if TYPE_CHECKING:
    from ..validation.structure import StructureShape

logger = logging.getLogger("event_envelope.resources")

ITEM_KEY_PREFIX = "ItemKey"


def utc_now() -> datetime:
    """Default clock: timezone-aware *now* in UTC."""
    return datetime.now(timezone.utc)


def to_iso_time(moment: datetime) -> str:
    """Render *moment* as an ISO-8601 UTC string with millisecond precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@runtime_checkable
class IResource(Protocol):
    """Read-only surface shared by every finalized resource kind."""

    id: str
    type: str
    origin_user_id: str

    def generate_own_item_key(self) -> str:
        """Return the storage/lookup key of this instance."""
        ...


class FinalizedResource(BaseModel):
    """Identity and lifecycle data handed back by :func:`finalize_resource`.

    Resource kinds embed this instead of inheriting from a base class.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    type: str
    created_iso_time: str
    origin_user_id: str = "Unknown"
    attributes: dict[str, Any] = Field(default_factory=dict)


def finalize_resource(
    kind: str,
    required_shape: StructureShape,
    draft: Mapping[str, Any],
    origin_user_id: str = "Unknown",
    *,
    id_generator: IIDGenerator | None = None,
    clock: Callable[[], datetime] | None = None,
) -> FinalizedResource:
    """Validate *draft* against *required_shape*, then assign identity and time.

    Raises:
        UndefinedValueError: If *kind* is missing or blank.
        StructuralValidationError: If *draft* does not match *required_shape*.
    """
    if not is_string(kind) or is_empty(kind):
        raise UndefinedValueError("The resource type is mandatory.")

    ensure_structure(required_shape, draft)

    generator = id_generator or UUID4Generator()
    now = (clock or utc_now)()
    resource = FinalizedResource(
        id=str(generator.next_id()),
        type=kind,
        created_iso_time=to_iso_time(now),
        origin_user_id=origin_user_id,
        attributes=dict(draft),
    )
    logger.debug("Finalized %s resource %s", kind, resource.id)
    return resource


def generate_item_key(kind: str, name: str, identity: str) -> str:
    """Derive the storage/lookup key of a resource instance.

    Components are percent-encoded so a ``:`` inside a name or ID can never
    be read as a separator. The result is deterministic for equal inputs.

    Example::

        >>> generate_item_key("EventEnvelope", "user.created", "42")
        'ItemKey:EventEnvelope:user.created:42'
    """
    parts = (kind, name, identity)
    return ":".join([ITEM_KEY_PREFIX, *(quote(str(part), safe="") for part in parts)])
