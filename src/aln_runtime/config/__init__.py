"""Runtime configuration loading."""

from aln_runtime.config.settings import (
    AlnRuntimeConfig,
    CatalogSettings,
    ConfigError,
    KernelSettings,
    LoggingSettings,
    LogLevel,
    load_config,
)

__all__ = [
    "AlnRuntimeConfig",
    "CatalogSettings",
    "ConfigError",
    "KernelSettings",
    "LogLevel",
    "LoggingSettings",
    "load_config",
]
