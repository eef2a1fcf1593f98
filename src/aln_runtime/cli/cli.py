"""Typer CLI entrypoint for the ALN runtime."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from aln_runtime.cli.bootstrap import (
    build_catalog,
    build_kernel,
    load_cli_config,
    parse_json_option,
)
from aln_runtime.catalog import CatalogError
from aln_runtime.cli.rendering import (
    render_plan,
    render_sources,
    render_validation,
    render_virtual_objects,
)
from aln_runtime.manifest import build_engine_manifest
from aln_runtime.protocol import create_heartbeat, describe_protocol, validate_message_envelope

app = typer.Typer(help="ALN runtime CLI")
catalog_app = typer.Typer(help="Knowledge catalog of sources and virtual objects.")
app.add_typer(catalog_app, name="catalog")
_CONSOLE = Console()

ConfigFileOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        file_okay=True,
        dir_okay=False,
        help="Path to runtime config YAML/JSON file.",
    ),
]
CatalogDirOption = Annotated[
    Path | None,
    typer.Option(file_okay=False, dir_okay=True, help="Catalog directory override."),
]


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _catalog_failure(exc: CatalogError) -> typer.Exit:
    typer.echo(f"Catalog error: {exc}", err=True)
    return typer.Exit(code=2)


@app.command("describe")
def describe_command(config_file: ConfigFileOption = None) -> None:
    """Print the protocol description (version, identity, supported intents)."""
    load_cli_config(config_file)
    _echo_json(describe_protocol())


@app.command("manifest")
def manifest_command(
    context: Annotated[
        str | None, typer.Option(help="Host context as a JSON object.")
    ] = None,
    config_file: ConfigFileOption = None,
) -> None:
    """Print the engine manifest with protocol and capability summaries."""
    config = load_cli_config(config_file)
    host_context = parse_json_option(context, "--context")
    _echo_json(
        build_engine_manifest(
            host_context,
            replication_guarantee_hours=config.kernel.max_replication_hours,
        )
    )


@app.command("plan")
def plan_command(  # noqa: PLR0913
    text: Annotated[str, typer.Argument(help="Free-text intent to plan.")],
    intent_type: Annotated[
        str | None, typer.Option(help="Explicit intent type; inferred when omitted.")
    ] = None,
    constraints: Annotated[
        str | None, typer.Option(help="Constraint set as a JSON object.")
    ] = None,
    context: Annotated[
        str | None, typer.Option(help="Host context as a JSON object.")
    ] = None,
    model_id: Annotated[str | None, typer.Option(help="Model id override.")] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Emit the plan as JSON.")
    ] = False,
    config_file: ConfigFileOption = None,
) -> None:
    """Generate a plan and transparency trail for TEXT.

    Raises:
        BadParameter: If TEXT is empty or a JSON option is malformed.
    """
    config = load_cli_config(config_file)
    if not text.strip():
        raise typer.BadParameter("intent text must not be empty", param_hint="TEXT")
    kernel = build_kernel(config, model_id)
    result = kernel.reason(
        text,
        intent_type=intent_type,
        constraints=parse_json_option(constraints, "--constraints"),
        context=parse_json_option(context, "--context"),
    )
    if as_json:
        _echo_json(result.model_dump(mode="json", by_alias=True))
        return
    render_plan(_CONSOLE, result)


@app.command("validate")
def validate_command(
    envelope_file: Annotated[
        Path,
        typer.Argument(exists=True, file_okay=True, dir_okay=False, help="Envelope JSON file."),
    ],
    config_file: ConfigFileOption = None,
) -> None:
    """Validate an envelope JSON file and list every violation.

    Raises:
        Exit: Code 1 when the envelope is invalid, 2 when the file is not JSON.
    """
    load_cli_config(config_file)
    try:
        message = json.loads(envelope_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        typer.echo(f"Invalid JSON in {envelope_file}: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    result = validate_message_envelope(message)
    render_validation(_CONSOLE, result, envelope_file.name)
    if not result.valid:
        raise typer.Exit(code=1)


@app.command("heartbeat")
def heartbeat_command(
    envelope_id: Annotated[str, typer.Argument(help="Heartbeat message id.")],
    payload: Annotated[
        str | None, typer.Option(help="Heartbeat payload as a JSON object.")
    ] = None,
    config_file: ConfigFileOption = None,
) -> None:
    """Print a heartbeat envelope."""
    load_cli_config(config_file)
    _echo_json(create_heartbeat(envelope_id, parse_json_option(payload, "--payload")))


@catalog_app.command("sources")
def catalog_sources_command(
    kind: Annotated[str | None, typer.Option(help="Filter by kind.")] = None,
    tag: Annotated[str | None, typer.Option(help="Filter by tag.")] = None,
    catalog_dir: CatalogDirOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON.")] = False,
    config_file: ConfigFileOption = None,
) -> None:
    """List catalogued sources."""
    config = load_cli_config(config_file)
    try:
        entries = build_catalog(config, catalog_dir).list_sources(kind=kind, tag=tag)
    except CatalogError as exc:
        raise _catalog_failure(exc) from exc
    if as_json:
        _echo_json([entry.model_dump(mode="json", by_alias=True) for entry in entries])
        return
    render_sources(_CONSOLE, entries)


@catalog_app.command("virtual-objects")
def catalog_virtual_objects_command(
    category: Annotated[str | None, typer.Option(help="Filter by category.")] = None,
    tag: Annotated[str | None, typer.Option(help="Filter by tag.")] = None,
    catalog_dir: CatalogDirOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON.")] = False,
    config_file: ConfigFileOption = None,
) -> None:
    """List catalogued virtual objects."""
    config = load_cli_config(config_file)
    try:
        entries = build_catalog(config, catalog_dir).list_virtual_objects(
            category=category, tag=tag
        )
    except CatalogError as exc:
        raise _catalog_failure(exc) from exc
    if as_json:
        _echo_json([entry.model_dump(mode="json", by_alias=True) for entry in entries])
        return
    render_virtual_objects(_CONSOLE, entries)


@catalog_app.command("add-source")
def catalog_add_source_command(  # noqa: PLR0913
    uri: Annotated[str, typer.Argument(help="Source URI.")],
    kind: Annotated[str, typer.Option(help="Source kind.")] = "unknown",
    description: Annotated[str, typer.Option(help="Source description.")] = "",
    tag: Annotated[
        list[str] | None, typer.Option(help="Tag (repeatable).")
    ] = None,
    catalog_dir: CatalogDirOption = None,
    config_file: ConfigFileOption = None,
) -> None:
    """Append a source to the catalog and print the stored entry."""
    config = load_cli_config(config_file)
    try:
        entry = build_catalog(config, catalog_dir).add_source(
            {"uri": uri, "kind": kind, "description": description, "tags": tag or []}
        )
    except CatalogError as exc:
        raise _catalog_failure(exc) from exc
    _echo_json(entry.model_dump(mode="json", by_alias=True))


def main() -> None:
    """Console script entrypoint."""
    app()
