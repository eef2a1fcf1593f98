"""Planning kernel: free-text intent + constraints -> ordered plan steps and transparency trail.

The kernel keeps no state between calls. Besides its configuration it only
holds an event sink and a clock; the clock is the sole source of
non-determinism (timestamp, plan id).
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Mapping
from typing import Any

from aln_runtime.clock import Clock, iso_timestamp, utc_now
from aln_runtime.kernel.constraints import (
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_REPLICATION_HOURS,
    normalize_constraints,
)
from aln_runtime.kernel.heuristics import (
    build_integrity_rules,
    derive_assumptions,
    derive_risks,
    derive_tradeoffs,
    infer_environment_hints,
    infer_intent_type,
    match_protocol_intents,
)
from aln_runtime.kernel.models import (
    ConstraintSet,
    PlanResult,
    PlanStep,
    Priority,
    TransparencyTrail,
)
from aln_runtime.protocol.errors import InputError
from aln_runtime.protocol.shapes import is_finite_number

_LOGGER = logging.getLogger(__name__)

DEFAULT_MODEL_ID = "aln-runtime-v1"
PLAN_ID_LENGTH = 16

type EventSink = Callable[[str, Mapping[str, Any]], None]

REPLICATION_ASSUMPTIONS = (
    "Python 3.12+ and Git available.",
    "GitHub or equivalent git host accessible.",
)


def derive_plan_id(intent_text: str, created_at: str, model_id: str) -> str:
    """First 16 hex chars of SHA-256 over ``{text}::{created_at}::{model_id}``."""
    digest = hashlib.sha256(f"{intent_text}::{created_at}::{model_id}".encode()).hexdigest()
    return digest[:PLAN_ID_LENGTH]


def _log_event(event: str, payload: Mapping[str, Any]) -> None:
    _LOGGER.debug("%s %s", event, dict(payload))


class PlanningKernel:
    """Deterministic, keyword-driven planner for ALN intents."""

    def __init__(
        self,
        model_id: str = DEFAULT_MODEL_ID,
        max_replication_hours: float = DEFAULT_MAX_REPLICATION_HOURS,
        *,
        default_language: str = DEFAULT_LANGUAGE,
        logger: EventSink | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Create a kernel.

        Args:
            model_id: Identifier mixed into every plan id.
            max_replication_hours: Replication bound used when constraints
                do not supply a valid one. Ignored unless a finite number.
            default_language: Language used when constraints omit one.
            logger: Structured event sink ``(event, payload)``. Defaults to
                the module logger at DEBUG level.
            clock: Time source. Defaults to UTC now.
        """
        self.model_id = model_id or DEFAULT_MODEL_ID
        self.max_replication_hours = (
            max_replication_hours
            if is_finite_number(max_replication_hours)
            else DEFAULT_MAX_REPLICATION_HOURS
        )
        self.default_language = default_language
        self._sink: EventSink = logger if callable(logger) else _log_event
        self._clock: Clock = clock or utc_now

    def reason(
        self,
        intent_text: str,
        intent_type: str | None = None,
        constraints: Mapping[str, Any] | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> PlanResult:
        """Generate a plan for intent_text.

        Args:
            intent_text: Free-text description of what the caller wants.
            intent_type: Explicit intent type; inferred from the text when falsy.
            constraints: Partial constraint set (snake_case or camelCase keys).
            context: Host context (chat, CI, runtime hints).

        Returns:
            PlanResult with plan id, ordered steps and transparency trail.

        Raises:
            InputError: If intent_text is not a non-empty string.
        """
        if not isinstance(intent_text, str) or not intent_text:
            raise InputError("PlanningKernel.reason: intent_text must be a non-empty string.")

        created_at = iso_timestamp(self._clock())
        plan_id = derive_plan_id(intent_text, created_at, self.model_id)

        normalized = normalize_constraints(
            constraints,
            default_language=self.default_language,
            default_max_replication_hours=self.max_replication_hours,
        )
        self._emit("aln.constraints.normalized", normalized.model_dump(by_alias=True))

        resolved_type = intent_type or infer_intent_type(intent_text)
        steps = self._synthesize_steps(
            intent_text,
            resolved_type,
            normalized,
            context if isinstance(context, Mapping) else {},
        )

        trail = TransparencyTrail(
            plan_id=plan_id,
            model_id=self.model_id,
            intent_text=intent_text,
            intent_type=resolved_type,
            constraints=normalized,
            created_at=created_at,
            assumptions=derive_assumptions(intent_text, normalized),
            risks=derive_risks(intent_text),
            tradeoffs=derive_tradeoffs(),
        )

        self._emit(
            "aln.plan.generated",
            {
                "planId": plan_id,
                "modelId": self.model_id,
                "stepCount": len(steps),
                "intentType": resolved_type,
                "createdAt": created_at,
            },
        )
        return PlanResult(plan_id=plan_id, steps=steps, transparency_trail=trail)

    def _synthesize_steps(
        self,
        intent_text: str,
        intent_type: str,
        constraints: ConstraintSet,
        context: Mapping[str, Any],
    ) -> list[PlanStep]:
        matched = match_protocol_intents(intent_text)
        self._emit("aln.intents.matched", {"matchedCount": len(matched)})

        steps = [
            PlanStep(
                id="analyze-intent",
                description="Classify intent and map to ALN intents.",
                output={"intentType": intent_type, "matchedALNIntents": matched},
                priority=Priority.HIGH,
            ),
            PlanStep(
                id="design-structure",
                description="Design structures (files, workflows, compliance hooks).",
                output={
                    "requiresRepoPlan": True,
                    "language": constraints.language,
                    "replicationHours": constraints.max_replication_time_hours,
                },
                priority=Priority.HIGH,
            ),
        ]

        if constraints.jurisdictions or constraints.provider_policies:
            steps.append(
                PlanStep(
                    id="compliance-alignment",
                    description="Align plan with declared jurisdictions and policies.",
                    output={
                        "jurisdictions": list(constraints.jurisdictions),
                        "providerPolicies": list(constraints.provider_policies),
                        "dataResidency": constraints.data_residency,
                    },
                    priority=Priority.HIGH,
                )
            )

        steps.append(
            PlanStep(
                id="enforce-integrity",
                description="Require complete, placeholder-free code outputs.",
                output={
                    "requireCompleteness": constraints.require_completeness,
                    "forbidPlaceholders": constraints.forbid_placeholders,
                    "validationRules": build_integrity_rules(constraints),
                },
                priority=Priority.MEDIUM,
            )
        )

        if context:
            steps.append(
                PlanStep(
                    id="context-alignment",
                    description="Align plan with host system context (chat, CI, runtime).",
                    output={
                        "contextKeys": list(context),
                        "environmentHints": infer_environment_hints(context),
                    },
                    priority=Priority.MEDIUM,
                )
            )

        steps.append(
            PlanStep(
                id="replication-strategy",
                description="Guarantee bounded replication for a motivated developer.",
                output={
                    "replicationGuaranteeHours": constraints.max_replication_time_hours,
                    "assumptions": list(REPLICATION_ASSUMPTIONS),
                    "developerProfile": "motivated_single_developer",
                },
                priority=Priority.MEDIUM,
            )
        )

        self._emit("aln.steps.synthesized", {"count": len(steps)})
        return steps

    def _emit(self, event: str, payload: Mapping[str, Any]) -> None:
        """Forward an event to the sink; sink failures never reach the caller."""
        try:
            self._sink(event, payload)
        except Exception:  # noqa: BLE001
            _LOGGER.debug("Plan event sink failed for %s", event, exc_info=True)
