"""EventEnvelope — the immutable record of one domain occurrence."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
)

from ..resources.base import FinalizedResource, generate_item_key
from .message import MessageContainer, lookup

if TYPE_CHECKING:
    from ..config import EnvelopeDefaults

ENVELOPE_TYPE = "EventEnvelope"

#: Shape every draft must satisfy before it is finalized.
ENVELOPE_STRUCTURE: dict[str, type[Any]] = {
    "name": str,
    "message": Mapping,
}


class EnvelopeOptions(BaseModel):
    """Optional inputs of :func:`~event_envelope.builder.build_envelope`.

    Accepts both the snake_case field names and the camelCase names used on
    the wire (``correlationID``, ``originEngineID``, ...). Unknown keys are
    rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    action_id: str | None = Field(
        default=None,
        alias="actionID",
        description="ID of the action that triggered the event",
    )
    correlation_id: str | None = Field(default=None, alias="correlationID")
    origin_engine_id: str | None = Field(default=None, alias="originEngineID")
    origin_engine_name: str | None = Field(default=None, alias="originEngineName")
    origin_process_id: int | str | None = Field(default=None, alias="originProcessID")
    origin_user_id: str | None = Field(default=None, alias="originUserID")


class EnvelopeMeta(BaseModel):
    """Origin and tracing metadata of an envelope.

    ``correlation_id`` is left out of the serialized form when none was
    supplied, so a dump/validate round-trip keeps :attr:`has_correlation`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    created_iso_time: str
    origin_engine_id: str
    origin_engine_name: str
    origin_process_id: int | str
    correlation_id: str | None = None

    @property
    def has_correlation(self) -> bool:
        return self.correlation_id is not None

    @model_serializer(mode="wrap")
    def _omit_missing_correlation(
        self, handler: SerializerFunctionWrapHandler
    ) -> dict[str, Any]:
        data = handler(self)
        if self.correlation_id is None:
            data.pop("correlation_id", None)
        return data


class EventEnvelope(BaseModel):
    """Immutable, validated event ready to be handed to a transport.

    Envelopes are frozen: reassigning a field or adding a new attribute
    raises ``pydantic.ValidationError`` and leaves the instance untouched.
    ``message`` is a :class:`MessageContainer`, so missing keys read as
    :data:`~event_envelope.domain.message.ABSENT`.

    Build envelopes with :meth:`create` (or
    :func:`~event_envelope.builder.build_envelope`), not the constructor.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    type: str = ENVELOPE_TYPE
    name: str
    message: MessageContainer = Field(default_factory=MessageContainer)
    meta: EnvelopeMeta
    origin_user_id: str = "Unknown"
    action_id: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("The event name is mandatory.")
        return value

    @field_validator("type")
    @classmethod
    def _type_is_envelope(cls, value: str) -> str:
        if value != ENVELOPE_TYPE:
            raise ValueError(f"type must be {ENVELOPE_TYPE!r}")
        return value

    @classmethod
    def create(
        cls,
        name: Any = None,
        message: Mapping[str, Any] | None = None,
        options: EnvelopeOptions | Mapping[str, Any] | None = None,
        *,
        defaults: EnvelopeDefaults | None = None,
    ) -> EventEnvelope:
        """Build an envelope; see :func:`~event_envelope.builder.build_envelope`."""
        from ..builder import build_envelope

        return build_envelope(name, message, options, defaults=defaults)

    @classmethod
    def from_resource(
        cls,
        resource: FinalizedResource,
        meta: EnvelopeMeta,
        *,
        action_id: str | None = None,
    ) -> EventEnvelope:
        """Assemble the envelope around an already finalized resource."""
        return cls(
            id=resource.id,
            type=resource.type,
            name=resource.attributes["name"],
            message=resource.attributes["message"],
            meta=meta,
            origin_user_id=resource.origin_user_id,
            action_id=action_id,
        )

    def get(self, key: str) -> Any:
        """Read a message key, :data:`ABSENT` if it was never set."""
        return lookup(self.message, key)

    def generate_own_item_key(self) -> str:
        return generate_item_key(self.type, self.name, self.id)

    @property
    def item_key(self) -> str:
        return self.generate_own_item_key()
