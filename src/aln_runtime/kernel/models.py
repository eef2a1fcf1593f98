"""Planning kernel data: constraint set, plan steps, transparency trail."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Snake_case in Python, camelCase on the wire (model_dump(by_alias=True)).
_WIRE_CONFIG = ConfigDict(
    extra="forbid",
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    protected_namespaces=(),
)


class IntentType(StrEnum):
    """Coarse plan category inferred from intent text."""

    CI_WORKFLOW = "ci_workflow"
    REPOSITORY_PLAN = "repository_plan"
    PYTHON_INTEROP = "python_interop"
    POLICY_PLAN = "policy_plan"
    GENERAL_PLAN = "general_plan"


class Priority(StrEnum):
    """Plan step priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ConstraintSet(BaseModel):
    """Fully normalized planning constraints. Build via normalize_constraints."""

    model_config = _WIRE_CONFIG

    language: str
    require_completeness: bool = True
    forbid_placeholders: bool = True
    max_replication_time_hours: int | float
    jurisdictions: tuple[str, ...] = ()
    provider_policies: tuple[str, ...] = ()
    data_residency: str | None = None


class PlanStep(BaseModel):
    """One ordered unit of work in a plan."""

    model_config = _WIRE_CONFIG

    id: str
    description: str
    output: dict[str, Any] = Field(default_factory=dict)
    priority: Priority


class TransparencyTrail(BaseModel):
    """Audit record explaining how a plan was derived."""

    model_config = _WIRE_CONFIG

    plan_id: str
    model_id: str
    intent_text: str
    intent_type: str
    constraints: ConstraintSet
    created_at: str
    assumptions: tuple[str, ...]
    risks: tuple[str, ...]
    tradeoffs: tuple[str, ...]


class PlanResult(BaseModel):
    """Return value of PlanningKernel.reason."""

    model_config = _WIRE_CONFIG

    plan_id: str
    steps: tuple[PlanStep, ...]
    transparency_trail: TransparencyTrail

    def step_ids(self) -> list[str]:
        """Step ids in plan order."""
        return [step.id for step in self.steps]

    def get_step(self, step_id: str) -> PlanStep | None:
        """Return the step with step_id, or None when the step was gated out."""
        for step in self.steps:
            if step.id == step_id:
                return step
        return None
