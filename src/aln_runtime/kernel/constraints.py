"""Constraint normalization. Total: every field is defaulted independently, nothing raises."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic.alias_generators import to_camel

from aln_runtime.kernel.models import ConstraintSet
from aln_runtime.protocol.shapes import is_array, is_finite_number

DEFAULT_LANGUAGE = "Python"
DEFAULT_MAX_REPLICATION_HOURS = 24


def _lookup(raw: Mapping[str, Any], name: str) -> Any:
    """Read name in snake_case or its camelCase wire form; None when absent."""
    if name in raw:
        return raw[name]
    return raw.get(to_camel(name))


def _flag(value: Any) -> bool:
    return True if value is None else bool(value)


def _strings(value: Any) -> tuple[str, ...]:
    if not is_array(value):
        return ()
    return tuple(str(item) for item in value)


def normalize_constraints(
    raw: Mapping[str, Any] | None,
    *,
    default_language: str = DEFAULT_LANGUAGE,
    default_max_replication_hours: float = DEFAULT_MAX_REPLICATION_HOURS,
) -> ConstraintSet:
    """Apply defaults to caller constraints.

    An invalid replication bound (absent, zero, negative, non-finite or
    non-numeric) is replaced with the default, not clamped. Non-sequence
    jurisdiction/policy values become empty.

    Args:
        raw: Caller constraints; keys in snake_case or camelCase. Non-mappings
            are treated as empty.
        default_language: Language used when none (or blank) is given.
        default_max_replication_hours: Kernel-level replication bound.

    Returns:
        Fully populated ConstraintSet.
    """
    if not isinstance(raw, Mapping):
        raw = {}

    language = _lookup(raw, "language")
    if isinstance(language, str) and language.strip():
        language = language.strip()
    else:
        language = default_language

    hours = _lookup(raw, "max_replication_time_hours")
    if not is_finite_number(hours) or hours <= 0:
        hours = default_max_replication_hours

    residency = _lookup(raw, "data_residency")

    return ConstraintSet(
        language=language,
        require_completeness=_flag(_lookup(raw, "require_completeness")),
        forbid_placeholders=_flag(_lookup(raw, "forbid_placeholders")),
        max_replication_time_hours=hours,
        jurisdictions=_strings(_lookup(raw, "jurisdictions")),
        provider_policies=_strings(_lookup(raw, "provider_policies")),
        data_residency=residency if isinstance(residency, str) else None,
    )
