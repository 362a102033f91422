"""Envelope builder — validates inputs, applies defaults, freezes the result."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .config import EnvelopeDefaults
from .correlation import get_causation_id, get_correlation_id
from .domain.envelope import (
    ENVELOPE_STRUCTURE,
    ENVELOPE_TYPE,
    EnvelopeMeta,
    EnvelopeOptions,
    EventEnvelope,
)
from .primitives.exceptions import StructuralValidationError, UndefinedValueError
from .resources.base import finalize_resource
from .validation.structure import errors_from_pydantic, is_empty, is_string

logger = logging.getLogger("event_envelope.builder")


def wrap_existing(candidate: object) -> EventEnvelope | None:
    """Return *candidate* if it already is an envelope, else ``None``."""
    if isinstance(candidate, EventEnvelope):
        return candidate
    return None


def parse_options(
    options: EnvelopeOptions | Mapping[str, Any] | None,
) -> EnvelopeOptions:
    """Coerce *options* into :class:`EnvelopeOptions`.

    Raises:
        StructuralValidationError: On unknown keys, wrong value types, or a
            non-mapping argument.
    """
    if options is None:
        return EnvelopeOptions()
    if isinstance(options, EnvelopeOptions):
        return options
    if not isinstance(options, Mapping):
        raise StructuralValidationError(
            {"options": [f"must be a mapping, got {type(options).__name__}"]}
        )
    try:
        return EnvelopeOptions.model_validate(dict(options))
    except PydanticValidationError as exc:
        raise StructuralValidationError(errors_from_pydantic(exc)) from exc


def _require_name(name: object) -> str:
    if not is_string(name) or is_empty(name):
        logger.warning("Rejected envelope with missing or empty name: %r", name)
        raise UndefinedValueError("The event name is mandatory.")
    return name  # type: ignore[return-value]


class EnvelopeFactory:
    """Builds :class:`EventEnvelope` instances from injected defaults.

    Usage::

        factory = EnvelopeFactory(EnvelopeDefaults(origin_engine_name="billing"))
        envelope = factory.build("invoice.paid", {"invoiceID": "i-1"})
    """

    def __init__(self, defaults: EnvelopeDefaults | None = None) -> None:
        self._defaults = defaults or EnvelopeDefaults()

    @property
    def defaults(self) -> EnvelopeDefaults:
        return self._defaults

    def build(
        self,
        name: Any,
        message: Mapping[str, Any] | None = None,
        options: EnvelopeOptions | Mapping[str, Any] | None = None,
    ) -> EventEnvelope:
        """Validate, finalize and freeze a new envelope.

        Raises:
            UndefinedValueError: If *name* is missing, not a ``str`` or blank.
            StructuralValidationError: If *options* or the assembled draft
                do not match the required structure.
        """
        event_name = _require_name(name)
        opts = parse_options(options)
        defaults = self._defaults

        meta: dict[str, Any] = {
            "origin_engine_id": _or_default(
                opts.origin_engine_id, defaults.origin_engine_id
            ),
            "origin_engine_name": _or_default(
                opts.origin_engine_name, defaults.origin_engine_name
            ),
            "origin_process_id": _or_default(
                opts.origin_process_id, defaults.origin_process_id
            ),
        }
        if opts.correlation_id:
            meta["correlation_id"] = opts.correlation_id
        origin_user_id = _or_default(opts.origin_user_id, defaults.origin_user_id)

        draft = {
            "meta": meta,
            "name": event_name,
            "message": {} if message is None else message,
        }

        try:
            resource = finalize_resource(
                ENVELOPE_TYPE,
                ENVELOPE_STRUCTURE,
                draft,
                origin_user_id,
                id_generator=defaults.id_generator,
                clock=defaults.clock,
            )
            envelope = EventEnvelope.from_resource(
                resource,
                EnvelopeMeta(created_iso_time=resource.created_iso_time, **meta),
                action_id=opts.action_id,
            )
        except StructuralValidationError as exc:
            logger.warning("Rejected envelope %r: %s", event_name, exc.errors)
            raise
        except PydanticValidationError as exc:
            errors = errors_from_pydantic(exc)
            logger.warning("Rejected envelope %r: %s", event_name, errors)
            raise StructuralValidationError(errors) from exc

        logger.debug(
            "Built envelope %s %s (correlation_id=%s)",
            envelope.name,
            envelope.id,
            envelope.meta.correlation_id,
        )
        return envelope

    def build_from_context(
        self,
        name: Any,
        message: Mapping[str, Any] | None = None,
        options: EnvelopeOptions | Mapping[str, Any] | None = None,
    ) -> EventEnvelope:
        """Like :meth:`build`, filling tracing IDs from the correlation context.

        The current correlation ID becomes ``correlation_id`` and the current
        causation ID becomes ``action_id``, unless *options* sets them.
        """
        _require_name(name)
        opts = parse_options(options)

        updates: dict[str, str] = {}
        correlation_id = get_correlation_id()
        if correlation_id and not opts.correlation_id:
            updates["correlation_id"] = correlation_id
        causation_id = get_causation_id()
        if causation_id and not opts.action_id:
            updates["action_id"] = causation_id
        if updates:
            opts = opts.model_copy(update=updates)

        return self.build(name, message, opts)


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


def build_envelope(
    name: Any = None,
    message: Mapping[str, Any] | None = None,
    options: EnvelopeOptions | Mapping[str, Any] | None = None,
    *,
    defaults: EnvelopeDefaults | None = None,
) -> EventEnvelope:
    """Build an envelope, or pass an existing one through unchanged.

    Called with a single :class:`EventEnvelope`, the very same instance is
    returned. Otherwise a new envelope is built by an
    :class:`EnvelopeFactory` over *defaults*.

    Example::

        envelope = build_envelope("order.shipped", {}, {"correlationID": "c-42"})
        assert envelope.meta.correlation_id == "c-42"
    """
    existing = wrap_existing(name)
    if existing is not None and message is None and options is None:
        return existing
    return EnvelopeFactory(defaults).build(name, message, options)
