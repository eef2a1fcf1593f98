"""Runtime config models and loading helpers."""

from __future__ import annotations

import json
from enum import StrEnum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from aln_runtime.catalog.store import DEFAULT_CATALOG_DIR
from aln_runtime.kernel.constraints import DEFAULT_LANGUAGE, DEFAULT_MAX_REPLICATION_HOURS
from aln_runtime.kernel.planner import DEFAULT_MODEL_ID


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class KernelSettings(BaseModel):
    """Planning kernel configuration."""

    model_config = ConfigDict(extra="forbid", protected_namespaces=())

    model_id: str = Field(default=DEFAULT_MODEL_ID, min_length=1)
    max_replication_hours: int | float = Field(default=DEFAULT_MAX_REPLICATION_HOURS, gt=0)
    default_language: str = Field(default=DEFAULT_LANGUAGE, min_length=1)


class CatalogSettings(BaseModel):
    """Knowledge catalog configuration."""

    model_config = ConfigDict(extra="forbid")

    base_dir: str = DEFAULT_CATALOG_DIR


class LoggingSettings(BaseModel):
    """Logging configuration applied by the CLI."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = LogLevel.INFO


class AlnRuntimeConfig(BaseModel):
    """Root runtime configuration model."""

    model_config = ConfigDict(extra="forbid")

    kernel: KernelSettings = KernelSettings()
    catalog: CatalogSettings = CatalogSettings()
    logging: LoggingSettings = LoggingSettings()


class ConfigError(RuntimeError):
    """Raised when config cannot be decoded or validated."""


def _decode_config_payload(path: Path) -> dict[str, object]:
    """Decode config payload from JSON or YAML.

    Args:
        path: Config file path.

    Returns:
        Parsed mapping payload.

    Raises:
        ConfigError: If decode fails or payload is not an object.
    """
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid config JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid config YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError("Invalid config payload: root must be an object")
    return payload


def load_config(path: Path | None) -> AlnRuntimeConfig:
    """Load runtime config from disk, defaulting when missing.

    Args:
        path: Config file path, or None for defaults.

    Returns:
        Parsed config, or defaults when the file does not exist.

    Raises:
        ConfigError: If payload decode or validation fails.
    """
    if path is None or not path.exists():
        return AlnRuntimeConfig()
    payload = _decode_config_payload(path)
    try:
        return AlnRuntimeConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config payload: {exc}") from exc
