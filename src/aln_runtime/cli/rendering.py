"""Rich renderers for CLI output."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from aln_runtime.catalog import SourceEntry, VirtualObjectEntry
from aln_runtime.kernel import PlanResult
from aln_runtime.protocol import ValidationResult


def render_plan(console: Console, result: PlanResult) -> None:
    """Render plan steps and the transparency trail."""
    trail = result.transparency_trail
    table = Table(
        title=f"Plan {escape(result.plan_id)}", show_header=True, header_style="bold cyan"
    )
    table.add_column("#", justify="right")
    table.add_column("Step", style="bold")
    table.add_column("Priority")
    table.add_column("Description")
    for index, step in enumerate(result.steps, start=1):
        table.add_row(
            str(index), escape(step.id), step.priority.value, escape(step.description)
        )
    console.print(table)

    lines = [
        f"Model: {trail.model_id}",
        f"Intent type: {trail.intent_type}",
        f"Created: {trail.created_at}",
        "",
        "Assumptions:",
        *(f"  - {item}" for item in trail.assumptions),
        "Risks:",
        *(f"  - {item}" for item in trail.risks),
        "Tradeoffs:",
        *(f"  - {item}" for item in trail.tradeoffs),
    ]
    console.print(
        Panel(
            escape("\n".join(lines)),
            title="Transparency Trail",
            border_style="green",
            expand=True,
        )
    )


def render_validation(console: Console, result: ValidationResult, source: str) -> None:
    """Render envelope validation outcome."""
    if result.valid:
        console.print(Panel(f"{escape(source)}: valid envelope", border_style="green"))
        return
    body = "\n".join(f"- {escape(error)}" for error in result.errors)
    console.print(Panel(body, title=f"{escape(source)}: invalid envelope", border_style="red"))


def render_sources(console: Console, entries: Sequence[SourceEntry]) -> None:
    """Render catalogued sources."""
    table = Table(title="Sources", show_header=True, header_style="bold cyan")
    for column in ("ID", "Kind", "URI", "Tags", "Created"):
        table.add_column(column)
    for entry in entries:
        cells = (entry.id, entry.kind, entry.uri, ", ".join(entry.tags), entry.created_at)
        table.add_row(*map(escape, cells))
    console.print(table)


def render_virtual_objects(console: Console, entries: Sequence[VirtualObjectEntry]) -> None:
    """Render catalogued virtual objects."""
    table = Table(title="Virtual Objects", show_header=True, header_style="bold cyan")
    for column in ("ID", "Name", "Category", "Tags", "Created"):
        table.add_column(column)
    for entry in entries:
        cells = (entry.id, entry.name, entry.category, ", ".join(entry.tags), entry.created_at)
        table.add_row(*map(escape, cells))
    console.print(table)
