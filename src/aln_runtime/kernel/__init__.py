"""Planning kernel: constraint normalization, intent matching, step synthesis."""

from aln_runtime.kernel.constraints import (
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_REPLICATION_HOURS,
    normalize_constraints,
)
from aln_runtime.kernel.heuristics import (
    DISALLOWED_PATTERNS,
    infer_environment_hints,
    infer_intent_type,
    match_protocol_intents,
)
from aln_runtime.kernel.models import (
    ConstraintSet,
    IntentType,
    PlanResult,
    PlanStep,
    Priority,
    TransparencyTrail,
)
from aln_runtime.kernel.planner import (
    DEFAULT_MODEL_ID,
    EventSink,
    PlanningKernel,
    derive_plan_id,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    "DEFAULT_MAX_REPLICATION_HOURS",
    "DEFAULT_MODEL_ID",
    "DISALLOWED_PATTERNS",
    "ConstraintSet",
    "EventSink",
    "IntentType",
    "PlanResult",
    "PlanStep",
    "PlanningKernel",
    "Priority",
    "TransparencyTrail",
    "derive_plan_id",
    "infer_environment_hints",
    "infer_intent_type",
    "match_protocol_intents",
    "normalize_constraints",
]
