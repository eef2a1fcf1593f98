"""CLI bootstrap helpers: logging, config resolution, component construction."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from aln_runtime.catalog import KnowledgeCatalog
from aln_runtime.config import AlnRuntimeConfig, ConfigError, load_config
from aln_runtime.kernel import PlanningKernel

_LOGGING_CONFIGURED = False
DEFAULT_CONFIG_FILES = ("aln.yaml", "aln.yml", "aln.json")


def configure_logging(level: str = "INFO") -> None:
    """Configure Rich-backed logging once for CLI commands; logs go to stderr."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[
            RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
        ],
    )
    _LOGGING_CONFIGURED = True


def resolve_config_file(config_file: Path | None) -> Path | None:
    """Return explicit config path, else the first default file in the cwd."""
    if config_file is not None:
        return config_file
    for name in DEFAULT_CONFIG_FILES:
        candidate = Path.cwd() / name
        if candidate.exists():
            return candidate
    return None


def load_cli_config(config_file: Path | None) -> AlnRuntimeConfig:
    """Load config and configure logging; exit with code 2 on invalid config."""
    try:
        config = load_config(resolve_config_file(config_file))
    except ConfigError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc
    configure_logging(config.logging.level.value)
    return config


def build_kernel(config: AlnRuntimeConfig, model_id: str | None = None) -> PlanningKernel:
    """Construct a planning kernel from config, with optional model id override."""
    return PlanningKernel(
        model_id=model_id or config.kernel.model_id,
        max_replication_hours=config.kernel.max_replication_hours,
        default_language=config.kernel.default_language,
    )


def build_catalog(config: AlnRuntimeConfig, base_dir: Path | None = None) -> KnowledgeCatalog:
    """Construct the knowledge catalog rooted at base_dir or the configured directory."""
    return KnowledgeCatalog(base_dir or Path(config.catalog.base_dir))


def parse_json_option(raw: str | None, option_name: str) -> dict[str, Any]:
    """Decode a JSON object passed on the command line.

    Raises:
        BadParameter: If raw is not a JSON object.
    """
    if raw is None:
        return {}
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"invalid JSON: {exc}", param_hint=option_name) from exc
    if not isinstance(decoded, dict):
        raise typer.BadParameter("expected a JSON object", param_hint=option_name)
    return decoded
