"""ALN protocol: primitive tags, intent registry, validators and envelope factory."""

from aln_runtime.protocol.envelope_factory import (
    create_error_message,
    create_execution_result,
    create_heartbeat,
    create_intent_request,
)
from aln_runtime.protocol.envelope_validator import (
    MessageEnvelope,
    validate_message_envelope,
)
from aln_runtime.protocol.errors import (
    EnvelopeError,
    InputError,
    ProtocolError,
    ShapeError,
    UnknownIntentError,
)
from aln_runtime.protocol.primitives import (
    ALN_VERSION,
    INTENT_BEARING_KINDS,
    MessageKind,
    PrimitiveTag,
    primitive_label,
)
from aln_runtime.protocol.registry import (
    IDENTITY,
    INTENTS,
    IntentSpecification,
    ProtocolIdentity,
    describe_protocol,
    get_intent,
    is_registered_intent,
)
from aln_runtime.protocol.shapes import (
    PrimitiveResult,
    ValidationResult,
    validate_intent_input,
    validate_intent_output,
    validate_primitive,
    validate_shape,
)

__all__ = [
    "ALN_VERSION",
    "IDENTITY",
    "INTENTS",
    "INTENT_BEARING_KINDS",
    "EnvelopeError",
    "InputError",
    "IntentSpecification",
    "MessageEnvelope",
    "MessageKind",
    "PrimitiveResult",
    "PrimitiveTag",
    "ProtocolError",
    "ProtocolIdentity",
    "ShapeError",
    "UnknownIntentError",
    "ValidationResult",
    "create_error_message",
    "create_execution_result",
    "create_heartbeat",
    "create_intent_request",
    "describe_protocol",
    "get_intent",
    "is_registered_intent",
    "primitive_label",
    "validate_intent_input",
    "validate_intent_output",
    "validate_message_envelope",
    "validate_primitive",
    "validate_shape",
]
