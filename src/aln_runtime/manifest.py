"""Engine manifest: protocol description plus the static capability registry."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from aln_runtime.protocol.registry import describe_protocol

ENGINE_ID = "javaspectre-core"
ENGINE_VERSION = "1.0.0"


class SustainabilityImpact(BaseModel):
    """Which resource a capability saves, and how."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    dimension: str
    notes: str


class Capability(BaseModel):
    """A described engine capability. Descriptive only; no behavior attached."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    index: int
    name: str
    category: str
    summary: str
    entry_module: str
    primary_cli: str
    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()
    guarantees: tuple[str, ...] = ()
    spectral_tags: tuple[str, ...] = ()
    sustainability_impact: SustainabilityImpact
    heuristic_score: float


CAPABILITIES: tuple[Capability, ...] = (
    Capability(
        id="zero-config-repo-blueprinting",
        index=1,
        name="Zero-Config Repo Blueprinting",
        category="scaffolding",
        summary=(
            "Analyzes a single prompt or code fragment and generates complete "
            "repository structures ready for git push in under 60 seconds."
        ),
        entry_module="javaspectre.blueprints",
        primary_cli="javaspectre make",
        inputs=("prompt", "code-fragment"),
        outputs=("repo-structure", "package-metadata", "tests", "ci-config"),
        guarantees=(
            "No manual configuration required.",
            "Valid project metadata with scripts, license, and README.",
            "Initial tests and CI prepared for immediate use.",
        ),
        spectral_tags=("automation", "bootstrap", "repo", "blueprint"),
        sustainability_impact=SustainabilityImpact(
            dimension="developer-time",
            notes=(
                "Reduces repetitive boilerplate work and misconfigured projects, "
                "lowering wasted compute from failed pipelines."
            ),
        ),
        heuristic_score=0.7,
    ),
    Capability(
        id="live-virtual-object-harvesting",
        index=2,
        name="Live Virtual-Object Harvesting",
        category="introspection",
        summary=(
            "Scans webpages, API responses, or DOM trees in real time, extracting "
            "hidden data shapes and emitting reusable type definitions and API wrappers."
        ),
        entry_module="javaspectre.excavation",
        primary_cli="javaspectre inspect",
        inputs=("url", "html-fragment", "json-response"),
        outputs=("virtual-object-catalog", "type-definitions", "api-wrappers"),
        guarantees=(
            "No manual schema writing.",
            "Stable structural signatures for reuse.",
            "Supports DOM, JSON, and mixed payloads when integrated with a browser runner.",
        ),
        spectral_tags=("dom", "api", "virtual-object", "schema"),
        sustainability_impact=SustainabilityImpact(
            dimension="data-efficiency",
            notes=(
                "Encourages selective, schema-aware data access, reducing "
                "over-fetching and redundant API calls."
            ),
        ),
        heuristic_score=0.6,
    ),
    Capability(
        id="one-command-spectral-refinement",
        index=3,
        name="One-Command Spectral Refinement",
        category="refinement",
        summary=(
            "Transforms partial or rough code into production-grade modules with "
            "tests, docs, and performance optimizations via a single command."
        ),
        entry_module="javaspectre.refinement",
        primary_cli="javaspectre refine",
        inputs=("source-file", "repo-path"),
        outputs=("refined-modules", "tests", "docs"),
        guarantees=(
            "Refined code remains compatible with original intent.",
            "Adds tests and basic documentation automatically.",
            "Targets idiomatic, modern patterns for the target language.",
        ),
        spectral_tags=("refactor", "optimization", "upgrade"),
        sustainability_impact=SustainabilityImpact(
            dimension="runtime-efficiency",
            notes="Removes dead code and improves complexity to reduce CPU and memory waste.",
        ),
        heuristic_score=0.8,
    ),
    Capability(
        id="sustainability-impact-calculator",
        index=9,
        name="Sustainability Impact Calculator",
        category="sustainability",
        summary=(
            "Embeds carbon footprint metrics, energy scores, and green-hosting "
            "suggestions into generated systems."
        ),
        entry_module="javaspectre.sustainability",
        primary_cli="javaspectre impact",
        inputs=("project-metadata", "estimated-usage"),
        outputs=("impact-report", "optimization-recommendations"),
        guarantees=(
            "Uses transparent, documented estimation models.",
            "Highlights levers like hosting choice, caching, and data minimization.",
            "Exports impact snapshots for audits and reporting.",
        ),
        spectral_tags=("sustainability", "carbon", "optimization"),
        sustainability_impact=SustainabilityImpact(
            dimension="planetary-impact",
            notes=(
                "Encourages greener design choices and highlights optimization "
                "opportunities from inception."
            ),
        ),
        heuristic_score=0.9,
    ),
)


def list_capabilities() -> list[Capability]:
    """Return all capabilities in registry order (fresh list)."""
    return list(CAPABILITIES)


def get_capability(capability_id: str) -> Capability | None:
    """Return the capability with capability_id, or None."""
    for capability in CAPABILITIES:
        if capability.id == capability_id:
            return capability
    return None


def build_engine_manifest(
    context: Mapping[str, Any] | None = None,
    *,
    replication_guarantee_hours: float = 24,
) -> dict[str, Any]:
    """Build the engine manifest consumed by host tooling.

    Args:
        context: Host context echoed back verbatim.
        replication_guarantee_hours: Policy value advertised to hosts.

    Returns:
        JSON-serializable manifest mapping.
    """
    return {
        "engineId": ENGINE_ID,
        "version": ENGINE_VERSION,
        "aln": describe_protocol(),
        "capabilities": [
            {
                "id": capability.id,
                "name": capability.name,
                "category": capability.category,
                "summary": capability.summary,
                "primaryCli": capability.primary_cli,
                "entryModule": capability.entry_module,
            }
            for capability in CAPABILITIES
        ],
        "policies": {
            "codePurity": "Complete outputs only, no placeholders.",
            "replicationGuaranteeHours": replication_guarantee_hours,
        },
        "hostContext": dict(context or {}),
    }
