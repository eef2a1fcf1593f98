"""Envelope factory (layer 2): builds well-formed envelopes for each message kind.

Intent-bearing constructors run two independent checks: the payload against
the intent shape (ShapeError) and then the assembled envelope
(EnvelopeError). Every constructor reads the clock once and keeps no state.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from aln_runtime.clock import Clock, epoch_millis, utc_now
from aln_runtime.protocol.envelope_validator import (
    MessageEnvelope,
    validate_message_envelope,
)
from aln_runtime.protocol.errors import EnvelopeError, ShapeError
from aln_runtime.protocol.primitives import MessageKind
from aln_runtime.protocol.shapes import validate_intent_input, validate_intent_output


def _assemble(
    envelope_id: str,
    kind: MessageKind,
    payload: Any,
    meta: Mapping[str, Any] | None,
    clock: Clock,
    intent: str | None = None,
) -> dict[str, Any]:
    envelope: dict[str, Any] = {"id": envelope_id, "kind": kind.value}
    if intent is not None:
        envelope["intent"] = intent
    envelope["timestamp"] = epoch_millis(clock())
    envelope["payload"] = payload
    if meta:
        envelope["meta"] = meta
    return envelope


def _checked(envelope: dict[str, Any], prefix: str) -> MessageEnvelope:
    validate_message_envelope(envelope).raise_for_errors(EnvelopeError, prefix)
    return envelope  # type: ignore[return-value]


def create_intent_request(
    envelope_id: str,
    intent_name: str,
    input_payload: Mapping[str, Any],
    meta: Mapping[str, Any] | None = None,
    *,
    clock: Clock = utc_now,
) -> MessageEnvelope:
    """Build an intent request after validating input against the intent's input shape.

    Args:
        envelope_id: Caller-supplied unique message id.
        intent_name: Registered intent id.
        input_payload: Payload matching the intent's input shape exactly.
        meta: Optional routing/trace metadata.
        clock: Time source for the timestamp.

    Returns:
        Validated envelope of kind intent_request.

    Raises:
        ShapeError: If the payload does not match (UnknownIntentError for an
            unregistered intent).
        EnvelopeError: If the assembled envelope is invalid.
    """
    validate_intent_input(intent_name, input_payload).raise_for_errors(
        ShapeError, f'Invalid input for intent "{intent_name}"'
    )
    envelope = _assemble(
        envelope_id,
        MessageKind.INTENT_REQUEST,
        input_payload,
        meta,
        clock,
        intent=intent_name,
    )
    return _checked(envelope, "Invalid envelope")


def create_execution_result(
    envelope_id: str,
    intent_name: str,
    output_payload: Mapping[str, Any],
    meta: Mapping[str, Any] | None = None,
    *,
    clock: Clock = utc_now,
) -> MessageEnvelope:
    """Build an execution result after validating output against the intent's output shape.

    Raises:
        ShapeError: If the payload does not match the output shape.
        EnvelopeError: If the assembled envelope is invalid.
    """
    validate_intent_output(intent_name, output_payload).raise_for_errors(
        ShapeError, f'Invalid output for intent "{intent_name}"'
    )
    envelope = _assemble(
        envelope_id,
        MessageKind.EXECUTION_RESULT,
        output_payload,
        meta,
        clock,
        intent=intent_name,
    )
    return _checked(envelope, "Invalid envelope")


def create_heartbeat(
    envelope_id: str,
    payload: Mapping[str, Any] | None = None,
    meta: Mapping[str, Any] | None = None,
    *,
    clock: Clock = utc_now,
) -> MessageEnvelope:
    """Build a liveness heartbeat. No intent; envelope-level validation only."""
    envelope = _assemble(
        envelope_id,
        MessageKind.HEARTBEAT,
        {} if payload is None else payload,
        meta,
        clock,
    )
    return _checked(envelope, "Invalid heartbeat envelope")


def create_error_message(
    envelope_id: str,
    code: str,
    message_text: str,
    details: Mapping[str, Any] | None = None,
    meta: Mapping[str, Any] | None = None,
    *,
    clock: Clock = utc_now,
) -> MessageEnvelope:
    """Build an error envelope with payload ``{code, message, details}``."""
    payload = {
        "code": code,
        "message": message_text,
        "details": {} if details is None else details,
    }
    envelope = _assemble(envelope_id, MessageKind.ERROR, payload, meta, clock)
    return _checked(envelope, "Invalid error envelope")
