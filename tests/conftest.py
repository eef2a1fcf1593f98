"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from aln_runtime.clock import Clock

FROZEN_AT = datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)


@pytest.fixture
def frozen_clock() -> Clock:
    """Clock pinned to FROZEN_AT for reproducible timestamps and plan ids."""
    return lambda: FROZEN_AT


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    """Temporary catalog directory (not created yet)."""
    return tmp_path / "catalog"
