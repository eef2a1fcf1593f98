"""Envelope validator (layer 1): transport-level rules for ALN message envelopes.

Wire form (JSON-serializable)::

    {id: str, kind: MessageKind, intent?: str, timestamp: ms, payload: object, meta?: object}

Payloads are not checked against intent shapes here; the envelope factory
does that as a separate step before assembly.
"""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

from aln_runtime.protocol.primitives import INTENT_BEARING_KINDS, MessageKind
from aln_runtime.protocol.registry import is_registered_intent
from aln_runtime.protocol.shapes import (
    ValidationResult,
    is_finite_number,
    is_object,
    is_structured,
)

_KIND_LIST = ", ".join(MessageKind)


class MessageEnvelope(TypedDict):
    """Typed view of a wire envelope."""

    id: str
    kind: str
    timestamp: int | float
    payload: Any
    intent: NotRequired[str]
    meta: NotRequired[dict[str, Any]]


def validate_message_envelope(message: object) -> ValidationResult:
    """Validate an envelope; every rule is checked independently.

    Args:
        message: Candidate envelope.

    Returns:
        ValidationResult listing every violated rule.
    """
    if not is_object(message):
        return ValidationResult.from_errors(["Message must be an object"])

    errors: list[str] = []

    message_id = message.get("id")
    if not isinstance(message_id, str) or not message_id:
        errors.append('Field "id" must be a non-empty string')

    kind = message.get("kind")
    if not isinstance(kind, str) or kind not in MessageKind:
        errors.append(f'Field "kind" must be one of {_KIND_LIST}')

    if not is_finite_number(message.get("timestamp")):
        errors.append('Field "timestamp" must be a finite number in epoch milliseconds')

    if not is_structured(message.get("payload")):
        errors.append('Field "payload" must be a non-null object')

    if "meta" in message and not is_object(message["meta"]):
        errors.append('Field "meta", if present, must be a non-null object')

    if isinstance(kind, str) and kind in INTENT_BEARING_KINDS:
        intent = message.get("intent")
        if not isinstance(intent, str) or not intent:
            errors.append(f'Field "intent" must be a non-empty string for kind {kind}')
        elif not is_registered_intent(intent):
            errors.append(f'Unknown intent "{intent}" for message kind {kind}')

    return ValidationResult.from_errors(errors)
