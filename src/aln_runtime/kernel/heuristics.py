"""Fixed keyword rules used by the planning kernel.

All matching is case-insensitive substring search. Rule order is part of the
contract: the first satisfied rule wins, and several texts match more than
one rule.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

from aln_runtime.kernel.models import ConstraintSet, IntentType
from aln_runtime.protocol.registry import INTENTS, IntentSpecification

INTENT_TYPE_RULES: tuple[tuple[tuple[str, ...], IntentType], ...] = (
    (("workflow", "github"), IntentType.CI_WORKFLOW),
    (("repo", "repository"), IntentType.REPOSITORY_PLAN),
    (("python", "notebook"), IntentType.PYTHON_INTEROP),
    (("policy", "compliance"), IntentType.POLICY_PLAN),
)

DISALLOWED_PATTERNS = (
    "TODO",
    "FIXME",
    "placeholder",
    "lorem ipsum",
    "<insert",
    "stub only",
)
MIN_LINES_OF_CODE = 1

TRADEOFFS = (
    "Favor explicit compliance boundaries over opaque behavior.",
    "Prefer auditability and reproducibility over micro-optimizations.",
    "Prioritize cross-environment determinism over environment-specific hacks.",
)

type _IntentRule = Callable[[str, IntentSpecification, str], bool]

# (intent id, intent, lowercased text) -> matched
_INTENT_MATCH_RULES: tuple[_IntentRule, ...] = (
    lambda _id, intent, text: "repository" in intent.description.lower() and "repo" in text,
    lambda intent_id, _intent, text: "interop_python" in intent_id and "python" in text,
    lambda intent_id, _intent, text: "define_virtual_object" in intent_id and "virtual" in text,
    lambda _id, intent, text: "policy" in intent.description.lower() and "policy" in text,
)


def _mentions(text: str, *needles: str) -> bool:
    return any(needle in text for needle in needles)


def infer_intent_type(text: str) -> IntentType:
    """Classify text into a coarse intent type; general_plan when nothing matches."""
    lower = text.lower()
    for keywords, intent_type in INTENT_TYPE_RULES:
        if _mentions(lower, *keywords):
            return intent_type
    return IntentType.GENERAL_PLAN


def match_protocol_intents(
    text: str, intents: Mapping[str, IntentSpecification] = INTENTS
) -> list[str]:
    """Return registry intent ids the text refers to, in registry order, each at most once."""
    lower = text.lower()
    return [
        intent_id
        for intent_id, intent in intents.items()
        if any(rule(intent_id, intent, lower) for rule in _INTENT_MATCH_RULES)
    ]


def serialize_context(context: Mapping[str, Any]) -> str:
    """Lowercased JSON text of the context, tolerant of non-JSON values."""
    return json.dumps(context, default=str, ensure_ascii=False).lower()


def infer_environment_hints(context: Mapping[str, Any]) -> dict[str, Any]:
    """Guess CI, orchestration, hardware and runtime from host context.

    Returns:
        Mapping with hasCI, hasKubernetes, hasNeuromorphicHardware,
        ciProvider and runtime.
    """
    text = serialize_context(context)

    ci_provider: str | None = None
    if _mentions(text, "github", "gitlab", "ci"):
        if "github" in text:
            ci_provider = "github_actions"
        elif "gitlab" in text:
            ci_provider = "gitlab_ci"
        else:
            ci_provider = "generic_ci"

    runtime: str | None = None
    if _mentions(text, "node.js", "nodejs", "node"):
        runtime = "node"
    elif "browser" in text:
        runtime = "browser"

    return {
        "hasCI": ci_provider is not None,
        "hasKubernetes": _mentions(text, "kubernetes", "k8s"),
        "hasNeuromorphicHardware": _mentions(text, "neuromorphic", "bci", "eeg"),
        "ciProvider": ci_provider,
        "runtime": runtime,
    }


def build_integrity_rules(constraints: ConstraintSet) -> dict[str, Any]:
    """Validation rules handed to downstream execution engines."""
    return {
        "requireCompleteness": constraints.require_completeness,
        "forbidPlaceholders": constraints.forbid_placeholders,
        "disallowedPatterns": list(DISALLOWED_PATTERNS),
        "minLinesOfCode": MIN_LINES_OF_CODE,
    }


def derive_assumptions(intent_text: str, constraints: ConstraintSet) -> list[str]:
    """Assumptions recorded in the transparency trail."""
    assumptions = [
        "Outputs are intended for open-source or auditable environments.",
        f"Target implementation language is {constraints.language}.",
    ]
    if constraints.max_replication_time_hours <= 24:
        assumptions.append("A motivated developer can reproduce outputs within 24 hours.")
    if constraints.jurisdictions:
        assumptions.append(
            "Plans must satisfy the strictest overlapping jurisdictional constraints."
        )
    if "github" in intent_text.lower():
        assumptions.append("GitHub Actions or compatible CI is available.")
    return assumptions


def derive_risks(intent_text: str) -> list[str]:
    """Domain risks signalled by the intent text."""
    lower = intent_text.lower()
    risks = ["Risk of over-engineering structure for simple tasks."]
    if _mentions(lower, "neuro", "bci", "eeg"):
        risks.append("Neurotech contexts require medical, ethical, and privacy reviews.")
    if _mentions(lower, "pii", "personal data"):
        risks.append(
            "Personal data processing must follow privacy and data protection rules."
        )
    if _mentions(lower, "safety", "critical"):
        risks.append(
            "Safety-critical systems require independent validation and redundancy."
        )
    return risks


def derive_tradeoffs() -> list[str]:
    """Fixed tradeoffs of the planning approach."""
    return list(TRADEOFFS)
