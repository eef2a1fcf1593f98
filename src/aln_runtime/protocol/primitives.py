"""Layer 0: ALN primitive type tags and message kinds (pure data)."""

from __future__ import annotations

from enum import StrEnum

ALN_VERSION = "1.0.0"

# Wire tags carry this prefix so ALN messages are distinguishable from plain JSON.
ALN_PREFIX = "aln::"


class PrimitiveTag(StrEnum):
    """Closed set of payload type tags."""

    STRING = "aln::string"
    NUMBER = "aln::number"
    BOOLEAN = "aln::boolean"
    OBJECT = "aln::object"
    ARRAY = "aln::array"
    VIRTUAL_OBJECT = "aln::virtual_object"
    INTENT = "aln::intent"
    PLAN = "aln::plan"
    SIGNAL = "aln::signal"


# Validated structurally as "non-null structured value"; semantics belong to higher layers.
STRUCTURED_TAGS = frozenset(
    {
        PrimitiveTag.VIRTUAL_OBJECT,
        PrimitiveTag.INTENT,
        PrimitiveTag.PLAN,
        PrimitiveTag.SIGNAL,
    }
)


class MessageKind(StrEnum):
    """Envelope-level message kinds."""

    INTENT_REQUEST = "aln::intent_request"
    INTENT_PLAN = "aln::intent_plan"
    EXECUTION_RESULT = "aln::execution_result"
    ERROR = "aln::error"
    HEARTBEAT = "aln::heartbeat"
    SPEC_QUERY = "aln::spec_query"
    SPEC_RESPONSE = "aln::spec_response"


INTENT_BEARING_KINDS = frozenset(
    {
        MessageKind.INTENT_REQUEST,
        MessageKind.INTENT_PLAN,
        MessageKind.EXECUTION_RESULT,
    }
)


def primitive_label(tag: str) -> str:
    """Return the short human-readable name of a tag (``aln::string`` -> ``string``).

    Unknown tags are returned unchanged.
    """
    if tag in PrimitiveTag:
        return tag.removeprefix(ALN_PREFIX)
    return tag
